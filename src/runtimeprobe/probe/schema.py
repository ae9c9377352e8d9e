"""Property schema: the fixed, ordered set of identifying properties to probe.

The order of PropertyKind members is part of the probe wire contract: emitted
programs print values in this order and the parser decodes them positionally.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from runtimeprobe.config.constants import UNKNOWN


class PropertyKind(Enum):
    """Identifying property of a runtime installation."""

    VERSION = "version"
    VENDOR = "vendor"
    ARCH = "arch"
    VM_NAME = "vm_name"
    VM_VERSION = "vm_version"
    RUNTIME_NAME = "runtime_name"


Metadata = dict[PropertyKind, str]


@dataclass(frozen=True)
class PropertySchema:
    """Binds every PropertyKind, in order, to the attribute a target reads for it."""

    target: str
    attributes: tuple[tuple[PropertyKind, str], ...]

    def __post_init__(self) -> None:
        kinds = tuple(kind for kind, _ in self.attributes)
        if kinds != tuple(PropertyKind):
            raise ValueError(
                f"Schema '{self.target}' must bind every PropertyKind once, in order; "
                f"got {[kind.name for kind in kinds]}"
            )

    def __iter__(self) -> Iterator[tuple[PropertyKind, str]]:
        return iter(self.attributes)

    def __len__(self) -> int:
        return len(self.attributes)

    @property
    def kinds(self) -> tuple[PropertyKind, ...]:
        return tuple(kind for kind, _ in self.attributes)

    def attribute(self, kind: PropertyKind) -> str:
        for bound_kind, name in self.attributes:
            if bound_kind is kind:
                return name
        raise KeyError(kind)


JVM_SCHEMA = PropertySchema(
    target="jvm",
    attributes=(
        (PropertyKind.VERSION, "java.version"),
        (PropertyKind.VENDOR, "java.vendor"),
        (PropertyKind.ARCH, "os.arch"),
        (PropertyKind.VM_NAME, "java.vm.name"),
        (PropertyKind.VM_VERSION, "java.vm.version"),
        (PropertyKind.RUNTIME_NAME, "java.runtime.name"),
    ),
)

# Dotted paths: first component is a module, the rest are attributes.
# Callables are called with no arguments.
PYTHON_SCHEMA = PropertySchema(
    target="python",
    attributes=(
        (PropertyKind.VERSION, "platform.python_version"),
        (PropertyKind.VENDOR, "platform.python_compiler"),
        (PropertyKind.ARCH, "platform.machine"),
        (PropertyKind.VM_NAME, "sys.implementation.name"),
        (PropertyKind.VM_VERSION, "sys.implementation.cache_tag"),
        (PropertyKind.RUNTIME_NAME, "platform.python_implementation"),
    ),
)


def unknown_metadata() -> Metadata:
    """Total mapping with every property set to the "unknown" sentinel."""
    return {kind: UNKNOWN for kind in PropertyKind}


def metadata_to_dict(metadata: Metadata) -> dict[str, str]:
    """Serialize for JSON output, keyed by property value name."""
    return {kind.value: metadata[kind] for kind in PropertyKind}
