"""Probe module exports."""

from runtimeprobe.probe.cache import InstallationCache
from runtimeprobe.probe.emitters import (
    JvmProbeEmitter,
    ProbeEmitter,
    ProbeProgram,
    PythonProbeEmitter,
    available_targets,
    get_emitter,
)
from runtimeprobe.probe.installation import InstallationProbe
from runtimeprobe.probe.introspection import current, read_attribute
from runtimeprobe.probe.parser import decode_probe_output, parse_probe_output
from runtimeprobe.probe.runner import ProbeExecution, run_probe
from runtimeprobe.probe.schema import (
    JVM_SCHEMA,
    PYTHON_SCHEMA,
    Metadata,
    PropertyKind,
    PropertySchema,
    metadata_to_dict,
    unknown_metadata,
)
from runtimeprobe.probe.workspace import scoped_workspace

__all__ = [
    "InstallationCache",
    "InstallationProbe",
    "JVM_SCHEMA",
    "JvmProbeEmitter",
    "Metadata",
    "PYTHON_SCHEMA",
    "ProbeEmitter",
    "ProbeExecution",
    "ProbeProgram",
    "PropertyKind",
    "PropertySchema",
    "PythonProbeEmitter",
    "available_targets",
    "current",
    "decode_probe_output",
    "get_emitter",
    "metadata_to_dict",
    "parse_probe_output",
    "read_attribute",
    "run_probe",
    "scoped_workspace",
    "unknown_metadata",
]
