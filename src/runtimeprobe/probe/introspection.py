"""Self-introspection: metadata of the interpreter running this code.

No subprocess, workspace, or cache is involved. Attributes are resolved with the
same rules as the script emitted by PythonProbeEmitter, so probing this
interpreter's own installation yields an equal mapping.
"""

from __future__ import annotations

import importlib
from typing import Any

from runtimeprobe.config.constants import UNKNOWN
from runtimeprobe.probe.schema import PYTHON_SCHEMA, Metadata, PropertySchema


def read_attribute(name: str, default: str = UNKNOWN) -> str:
    """Resolve a dotted ``module.attr[.attr...]`` path, calling it if callable.

    Any failure, ``None``, or an empty string resolves to ``default``.
    """
    module_name, _, attribute_path = name.partition(".")
    try:
        value: Any = importlib.import_module(module_name)
        for part in attribute_path.split("."):
            value = getattr(value, part)
        if callable(value):
            value = value()
    except Exception:
        return default
    if value is None or value == "":
        return default
    return str(value)


def current(schema: PropertySchema = PYTHON_SCHEMA) -> Metadata:
    """Read the calling process's own runtime properties."""
    return {kind: read_attribute(attribute) for kind, attribute in schema}
