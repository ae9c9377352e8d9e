"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (RUNTIMEPROBE__SECTION__KEY)
3. Explicit YAML file passed to load_config()
4. Global YAML (~/.config/runtimeprobe/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    RUNTIMEPROBE__<SECTION>__<KEY>=<VALUE>

Examples:
    RUNTIMEPROBE__LOGGING__LEVEL=DEBUG
    RUNTIMEPROBE__PROBE__TARGET=python
    RUNTIMEPROBE__PROBE__TIMEOUT_SEC=30
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from runtimeprobe.config.constants import WORKSPACE_PREFIX_DEFAULT

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
ProbeTarget = Literal["jvm", "python"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        RUNTIMEPROBE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every probe command line.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ProbeConfig(BaseModel):
    """Installation probe configuration.

    Env vars:
        RUNTIMEPROBE__PROBE__TARGET: Runtime family to probe (jvm, python)
        RUNTIMEPROBE__PROBE__ENTRYPOINT: Executable name under <installation>/bin
        RUNTIMEPROBE__PROBE__TIMEOUT_SEC: Max seconds to wait for the probe process
        RUNTIMEPROBE__PROBE__WORKSPACE_ROOT: Parent directory for probe workspaces
    """

    target: ProbeTarget = Field(
        default="jvm",
        description="Runtime family of the installations being probed.",
    )
    entrypoint: str | None = Field(
        default=None,
        description="Executable name under <installation>/bin. "
        "Defaults to the target's conventional launcher (java, python3).",
    )
    timeout_sec: float | None = Field(
        default=60.0,
        description="Max wait for one probe process. None waits forever. "
        "RISK: Without a bound, a hung installation blocks every caller for that path.",
    )
    workspace_prefix: str = Field(
        default=WORKSPACE_PREFIX_DEFAULT,
        description="Prefix for per-run temporary directories.",
    )
    workspace_root: str | None = Field(
        default=None,
        description="Parent directory for probe workspaces. Defaults to the system temp dir.",
    )

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v

    @field_validator("entrypoint")
    @classmethod
    def validate_entrypoint(cls, v: str | None) -> str | None:
        if v is not None and (not v or "/" in v or "\\" in v):
            raise ValueError(f"Entrypoint must be a bare executable name: {v!r}")
        return v


class RuntimeProbeConfig(BaseModel):
    """Root configuration for runtimeprobe."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    probe: ProbeConfig = Field(default_factory=ProbeConfig)
