"""Exception hierarchy for compact markup processing.

Every error raised by the core pipeline is fatal: the operation aborts and no
partial document or byte stream is returned.
"""

from typing import Optional


class CompactMarkupError(Exception):
    """Base exception for all pipeline errors."""


class ParseError(CompactMarkupError):
    """Raised when markup text is not well-formed."""

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        state: Optional[str] = None,
    ) -> None:
        self.description = message
        self.position = position
        self.line = line
        self.column = column
        self.state = state
        if line is not None and column is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class EncodeError(CompactMarkupError):
    """Raised when a document cannot be represented in the binary format."""


class DecodeError(CompactMarkupError):
    """Raised when a binary stream is malformed or truncated."""

    def __init__(self, message: str, offset: Optional[int] = None) -> None:
        self.description = message
        self.offset = offset
        if offset is not None:
            message = f"{message} at offset {offset}"
        super().__init__(message)


class CompressionError(CompactMarkupError):
    """Raised when the compression collaborator rejects its input."""
