"""Shared utilities for the compact markup pipeline.

This module provides configuration objects, the error hierarchy, result types
and logging helpers used across all processing layers.
"""

from .config import (
    CodecConfig,
    CompressionConfig,
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    ParserConfig,
    PipelineConfig,
)
from .errors import (
    CompactMarkupError,
    CompressionError,
    DecodeError,
    EncodeError,
    ParseError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    CodecMetrics,
    DiagnosticEntry,
    DiagnosticSeverity,
    EncodeResult,
)

__all__ = [
    "CodecConfig",
    "CompressionConfig",
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "ParserConfig",
    "PipelineConfig",
    "CompactMarkupError",
    "CompressionError",
    "DecodeError",
    "EncodeError",
    "ParseError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "CodecMetrics",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "EncodeResult",
]
