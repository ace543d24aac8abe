"""Structured logging utilities for the compact markup pipeline.

Every record carries the emitting component and an optional correlation ID so
that a parse, encode and decode of the same document can be followed in logs.
"""

import logging
from typing import Any, MutableMapping, Optional, Tuple, Union

LOG_FORMAT = "%(asctime)s %(levelname)s [%(component)s] %(message)s"


class CorrelationLogger(logging.LoggerAdapter):
    """Logger that automatically includes correlation ID and component information."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name for structured logging
        """
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]
        super().__init__(
            logging.getLogger(name),
            {"component": self.component, "correlation_id": correlation_id},
        )

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        """Merge call-site extra data with the correlation info."""
        combined_extra = dict(self.extra or {})
        if kwargs.get("extra"):
            combined_extra.update(kwargs["extra"])
        kwargs["extra"] = combined_extra
        return msg, kwargs


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)


class _ComponentDefaultFilter(logging.Filter):
    """Supply ``component`` for records emitted outside a CorrelationLogger."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = record.name.split(".")[-1]
        return True


def configure_logging(level: Union[int, str] = logging.WARNING) -> logging.Handler:
    """Attach a stderr handler to the package logger.

    Repeated calls replace the handler installed by a previous call.
    """
    package_logger = logging.getLogger("compact_markup")
    for handler in list(package_logger.handlers):
        if getattr(handler, "_compact_markup_handler", False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(_ComponentDefaultFilter())
    handler._compact_markup_handler = True  # type: ignore[attr-defined]
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler
