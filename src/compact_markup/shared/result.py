"""Result objects and diagnostic types for the compact markup pipeline.

Errors in the core pipeline are raised, never collected; diagnostics here hold
the non-fatal, advisory information an operation produced.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()    # Advisory, e.g. a custom identifier was encoded


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class CodecMetrics:
    """Size and timing figures for a single codec operation."""

    processing_time_ms: float = 0.0
    input_size: int = 0
    output_size: int = 0
    node_count: int = 0

    @property
    def compression_ratio(self) -> float:
        """Output size relative to input size (lower is smaller)."""
        if self.input_size == 0:
            return 0.0
        return self.output_size / self.input_size

    def to_dict(self) -> Dict[str, Any]:
        return {
            "processing_time_ms": self.processing_time_ms,
            "input_size": self.input_size,
            "output_size": self.output_size,
            "node_count": self.node_count,
            "compression_ratio": self.compression_ratio,
        }


@dataclass
class EncodeResult:
    """Encoded byte stream plus the custom vocabulary it introduced."""

    data: bytes
    custom_elements: List[str] = field(default_factory=list)
    custom_attributes: List[str] = field(default_factory=list)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    metrics: CodecMetrics = field(default_factory=CodecMetrics)

    @property
    def has_custom_vocabulary(self) -> bool:
        """Check if the document used any identifiers outside the static tables."""
        return bool(self.custom_elements or self.custom_attributes)

    def get_diagnostics_by_severity(
        self, severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics filtered by severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]
