"""Configuration classes for the compact markup pipeline.

This module provides configuration objects for the parser, the binary codec and
the compression stage, composed into one immutable ``PipelineConfig``.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

VALID_STRING_ERRORS = ("truncate", "strict")
VALID_LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_COMPONENTS = ("parser", "codec", "compression", "global_")


@dataclass
class ParserConfig:
    """Configuration for the markup parser."""

    max_depth: int = 200

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")


@dataclass
class CodecConfig:
    """Configuration for the binary encoder and decoder."""

    # "truncate" keeps the low 8 bits of every code point, "strict" rejects
    # code points that do not fit in a single byte
    string_errors: str = "truncate"
    max_depth: int = 200
    report_custom_identifiers: bool = True

    def __post_init__(self) -> None:
        """Validate codec configuration."""
        if self.string_errors not in VALID_STRING_ERRORS:
            raise ValueError(
                f"string_errors must be one of {list(VALID_STRING_ERRORS)}"
            )
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")


@dataclass
class CompressionConfig:
    """Configuration for the compression stage wrapped around the codec."""

    enabled: bool = True
    level: int = 9

    def __post_init__(self) -> None:
        """Validate compression configuration."""
        if not (0 <= self.level <= 9):
            raise ValueError("level must be between 0 and 9")


@dataclass
class GlobalConfig:
    """Settings that apply across all components."""

    logging_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {list(VALID_LOGGING_LEVELS)}")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class PipelineConfig:
    """Complete configuration for parse, encode, decode and compression.

    Component configurations are validated on construction; invalid values are
    reported as ``ConfigValidationError``.
    """

    parser: ParserConfig = field(default_factory=ParserConfig)
    codec: CodecConfig = field(default_factory=CodecConfig)
    compression: CompressionConfig = field(default_factory=CompressionConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete pipeline configuration."""
        try:
            for component in _COMPONENTS:
                getattr(self, component).__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "PipelineConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = PipelineConfig()
            >>> config.override(codec__string_errors="strict").codec.string_errors
            'strict'
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=list(_COMPONENTS),
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for key, value in nested_overrides.items():
            if key in _COMPONENTS:
                try:
                    new_fields[key] = replace(getattr(self, key), **value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            else:
                new_fields[key] = value

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in configuration files surface.
        """
        component_types = {
            "parser": ParserConfig,
            "codec": CodecConfig,
            "compression": CompressionConfig,
            "global_": GlobalConfig,
        }
        field_values: Dict[str, Any] = {}
        try:
            for key, value in data.items():
                if key in component_types:
                    field_values[key] = component_types[key](**value)
                elif key == "name":
                    field_values[key] = value
                else:
                    raise ConfigValidationError(
                        f"Unknown configuration key: {key}", field_name=key
                    )
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e
        return cls(**field_values)

    @classmethod
    def from_json(cls, json_str: str) -> "PipelineConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "PipelineConfig":
        """Wire-compatible defaults: truncating strings, gzip level 9."""
        return cls(name="default")

    @classmethod
    def strict(cls) -> "PipelineConfig":
        """Reject text that cannot be stored losslessly in single-byte strings."""
        return cls(codec=CodecConfig(string_errors="strict"), name="strict")

    @classmethod
    def uncompressed(cls) -> "PipelineConfig":
        """Emit the raw codec stream without the compression wrapper."""
        return cls(compression=CompressionConfig(enabled=False), name="uncompressed")
