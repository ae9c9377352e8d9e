"""runtimeprobe error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Workspace (fatal, always propagated)
- 4xxx: Probe (recovered into the "unknown" mapping)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Workspace (3xxx)
    WORKSPACE_CREATE_FAILED = 3001
    WORKSPACE_CLEANUP_FAILED = 3002
    WORKSPACE_WRITE_FAILED = 3003

    # Probe (4xxx)
    PROBE_OUTPUT_TRUNCATED = 4001


@dataclass(frozen=True, slots=True)
class RuntimeProbeError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'WORKSPACE_CLEANUP_FAILED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(RuntimeProbeError):
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

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class WorkspaceError(RuntimeProbeError):
    """Probe workspace could not be created, written, or removed.

    A leaked or unwritable workspace means the execution environment is broken,
    so these are never absorbed into an "unknown" result.
    """

    @classmethod
    def create_failed(cls, root: str, reason: str) -> "WorkspaceError":
        return cls(
            code=ErrorCode.WORKSPACE_CREATE_FAILED,
            message=f"Unable to create probe workspace under {root}: {reason}",
            details={"root": root, "reason": reason},
        )

    @classmethod
    def cleanup_failed(cls, path: str, reason: str) -> "WorkspaceError":
        return cls(
            code=ErrorCode.WORKSPACE_CLEANUP_FAILED,
            message=f"Unable to delete probe workspace {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "WorkspaceError":
        return cls(
            code=ErrorCode.WORKSPACE_WRITE_FAILED,
            message=f"Unable to write probe program {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class ProbeParseError(RuntimeProbeError):
    """Probe output did not carry one line per schema property."""

    @classmethod
    def truncated_output(cls, expected: int, actual: int) -> "ProbeParseError":
        return cls(
            code=ErrorCode.PROBE_OUTPUT_TRUNCATED,
            message=f"Probe printed {actual} value(s), expected {expected}",
            details={"expected": expected, "actual": actual},
        )
