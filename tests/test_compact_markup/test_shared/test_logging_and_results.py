"""Tests for shared logging helpers, error types and result objects."""

import logging

import pytest

from compact_markup.shared import (
    CodecMetrics,
    CompactMarkupError,
    DecodeError,
    DiagnosticEntry,
    DiagnosticSeverity,
    EncodeResult,
    ParseError,
    configure_logging,
    get_logger,
)


class TestCorrelationLogger:
    """Test correlation-aware logging."""

    def test_records_carry_component_and_correlation(self, caplog):
        """Test that component and correlation ID reach the log record."""
        logger = get_logger("compact_markup.tests", "req-42", "unit")

        with caplog.at_level(logging.INFO, logger="compact_markup.tests"):
            logger.info("hello", extra={"size": 3})

        record = caplog.records[-1]
        assert record.component == "unit"
        assert record.correlation_id == "req-42"
        assert record.size == 3

    def test_component_defaults_to_last_name_segment(self):
        """Test default component naming."""
        logger = get_logger("compact_markup.codec.encoder")
        assert logger.component == "encoder"
        assert logger.correlation_id is None

    def test_configure_logging_replaces_previous_handler(self):
        """Test repeated configuration does not stack handlers."""
        package_logger = logging.getLogger("compact_markup")
        before = list(package_logger.handlers)
        try:
            first = configure_logging(logging.DEBUG)
            second = configure_logging(logging.ERROR)
            assert first not in package_logger.handlers
            assert second in package_logger.handlers
            assert package_logger.level == logging.ERROR
        finally:
            for handler in list(package_logger.handlers):
                if handler not in before:
                    package_logger.removeHandler(handler)
            package_logger.setLevel(logging.NOTSET)


class TestErrors:
    """Test error types."""

    def test_parse_error_location_in_message(self):
        """Test ParseError formats its position."""
        error = ParseError("identifier expected", position=5, line=2, column=3,
                           state="PARSE_ELEMENT_OPEN")
        assert str(error) == "identifier expected (line 2, column 3)"
        assert error.description == "identifier expected"
        assert error.state == "PARSE_ELEMENT_OPEN"
        assert isinstance(error, CompactMarkupError)

    def test_decode_error_offset_in_message(self):
        """Test DecodeError formats its offset."""
        error = DecodeError("truncated stream", offset=7)
        assert str(error) == "truncated stream at offset 7"
        assert error.offset == 7
        assert str(DecodeError("truncated stream")) == "truncated stream"


class TestResults:
    """Test diagnostics and result objects."""

    def test_diagnostic_validation(self):
        """Test that empty messages and components are rejected."""
        with pytest.raises(ValueError, match="message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "encoder")
        with pytest.raises(ValueError, match="component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "note", "")

    def test_metrics_ratio(self):
        """Test compression ratio calculation."""
        assert CodecMetrics().compression_ratio == 0.0
        metrics = CodecMetrics(input_size=200, output_size=50)
        assert metrics.compression_ratio == 0.25
        assert metrics.to_dict()["compression_ratio"] == 0.25

    def test_encode_result_filters_diagnostics(self):
        """Test severity filtering and custom vocabulary flag."""
        warning = DiagnosticEntry(DiagnosticSeverity.WARNING, "custom", "encoder")
        info = DiagnosticEntry(DiagnosticSeverity.INFO, "done", "encoder")
        result = EncodeResult(data=b"", custom_elements=["x-y"], diagnostics=[warning, info])

        assert result.has_custom_vocabulary
        assert result.get_diagnostics_by_severity(DiagnosticSeverity.WARNING) == [warning]
        assert not EncodeResult(data=b"").has_custom_vocabulary
