"""Config module exports."""

from runtimeprobe.config.loader import load_config
from runtimeprobe.config.models import (
    LoggingConfig,
    LogOutputConfig,
    ProbeConfig,
    RuntimeProbeConfig,
)

__all__ = [
    "load_config",
    "LoggingConfig",
    "LogOutputConfig",
    "ProbeConfig",
    "RuntimeProbeConfig",
]
