"""DebugPlane error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Registry
- 4xxx: Probe
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Registry (3xxx)
    UNREGISTERED_LANGUAGE = 3001

    # Probe (4xxx)
    PROBE_INVALID_PATTERN = 4001
    PROBE_FAILED = 4002


@dataclass(frozen=True, slots=True)
class DebugPlaneError(Exception):
    """Base error with structured context for callers."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'UNREGISTERED_LANGUAGE')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(DebugPlaneError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class RegistryError(DebugPlaneError):
    """Language module lookup errors. Fatal to the call that raised them."""

    @classmethod
    def unregistered_language(cls, language: str) -> "RegistryError":
        return cls(
            code=ErrorCode.UNREGISTERED_LANGUAGE,
            message=f"No module registered for language: {language}",
            details={"language": language},
        )


class ProbeError(DebugPlaneError):
    """Workspace probe errors.

    Raised by probes, recovered by the registry as "pattern did not match".
    """

    @classmethod
    def invalid_pattern(cls, pattern: str, reason: str) -> "ProbeError":
        return cls(
            code=ErrorCode.PROBE_INVALID_PATTERN,
            message=f"Invalid probe pattern {pattern!r}: {reason}",
            details={"pattern": pattern, "reason": reason},
        )

    @classmethod
    def failed(cls, pattern: str, reason: str) -> "ProbeError":
        return cls(
            code=ErrorCode.PROBE_FAILED,
            message=f"Probe failed for {pattern!r}: {reason}",
            retryable=True,
            details={"pattern": pattern, "reason": reason},
        )

