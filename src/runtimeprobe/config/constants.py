"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
These are wire-contract values and implementation details of the probe programs.

For configurable values, see models.py (ProbeConfig, LoggingConfig).
"""

# =============================================================================
# Probe Wire Contract
# =============================================================================

UNKNOWN = "unknown"
"""Sentinel value for any property that could not be determined."""

INSTALLATION_BIN_DIR = "bin"
"""Subdirectory of an installation root that holds its entry point."""

# =============================================================================
# JVM Target
# =============================================================================

JVM_PROBE_CLASS = "JavaProbe"
"""Name of the generated probe class (default package)."""

JVM_CLASS_VERSION = (45, 3)
"""Class-file (major, minor) version. 45.3 loads on every JVM since 1.1."""

JVM_ENTRYPOINT = "java"

# =============================================================================
# Python Target
# =============================================================================

PYTHON_PROBE_SCRIPT = "runtime_probe.py"
"""File name of the generated probe script."""

PYTHON_ENTRYPOINT = "python3"

# =============================================================================
# Workspace
# =============================================================================

WORKSPACE_PREFIX_DEFAULT = "runtimeprobe-"
"""Prefix of per-run temporary directories."""
