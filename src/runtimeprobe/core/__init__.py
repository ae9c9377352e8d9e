"""Core module exports."""

from runtimeprobe.core.errors import (
    ConfigError,
    ErrorCode,
    ProbeParseError,
    RuntimeProbeError,
    WorkspaceError,
)
from runtimeprobe.core.logging import (
    clear_probe_run_id,
    configure_logging,
    get_probe_run_id,
    set_probe_run_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "ProbeParseError",
    "RuntimeProbeError",
    "WorkspaceError",
    # Logging
    "clear_probe_run_id",
    "configure_logging",
    "get_probe_run_id",
    "set_probe_run_id",
]
