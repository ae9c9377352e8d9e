"""runtimeprobe - identify runtime installations by running a generated probe inside them."""

from runtimeprobe.config.constants import UNKNOWN
from runtimeprobe.probe import InstallationProbe, Metadata, PropertyKind, current

__version__ = "0.1.0"

__all__ = [
    "InstallationProbe",
    "Metadata",
    "PropertyKind",
    "UNKNOWN",
    "current",
]
