"""Probe program emitters, one per target runtime family.

An emitter turns a PropertySchema into a tiny standalone program that prints one
value per line, in schema order, substituting "unknown" for anything it cannot
read. Only that stdout contract is shared; the artifact format is per target.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from runtimeprobe.config.constants import (
    JVM_CLASS_VERSION,
    JVM_ENTRYPOINT,
    JVM_PROBE_CLASS,
    PYTHON_ENTRYPOINT,
    PYTHON_PROBE_SCRIPT,
    UNKNOWN,
)
from runtimeprobe.core.errors import ConfigError
from runtimeprobe.probe.classfile import (
    ACC_PUBLIC,
    ACC_STATIC,
    ALOAD_0,
    GETSTATIC,
    INVOKESPECIAL,
    INVOKESTATIC,
    INVOKEVIRTUAL,
    RETURN,
    ClassFileWriter,
)
from runtimeprobe.probe.schema import JVM_SCHEMA, PYTHON_SCHEMA, PropertySchema


@dataclass(frozen=True)
class ProbeProgram:
    """An emitted probe, ready to be written into a workspace and launched.

    The launch command is ``[executable, *arguments]`` run from the workspace.
    """

    file_name: str
    content: bytes
    arguments: tuple[str, ...]
    environment: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


class ProbeEmitter(ABC):
    """Builds the probe program for one target runtime family."""

    target: str
    default_entrypoint: str

    def __init__(self, schema: PropertySchema) -> None:
        self.schema = schema

    @abstractmethod
    def emit(self) -> ProbeProgram:
        """Return the probe program. Must be deterministic for a given schema."""


class JvmProbeEmitter(ProbeEmitter):
    """Emits a Java 1.1 class whose main() prints each system property.

    Equivalent source::

        public class JavaProbe {
            public static void main(String[] args) {
                System.out.println(System.getProperty("java.version", "unknown"));
                ...
            }
        }

    The class is written directly so it loads on the oldest JVM we may be asked
    to probe, without needing a compiler.
    """

    target = "jvm"
    default_entrypoint = JVM_ENTRYPOINT

    def __init__(self, schema: PropertySchema = JVM_SCHEMA) -> None:
        super().__init__(schema)

    def emit(self) -> ProbeProgram:
        writer = ClassFileWriter(JVM_PROBE_CLASS, version=JVM_CLASS_VERSION)

        constructor = writer.code()
        constructor.insn(ALOAD_0)
        constructor.method_insn(INVOKESPECIAL, "java/lang/Object", "<init>", "()V")
        constructor.insn(RETURN)
        writer.add_method(ACC_PUBLIC, "<init>", "()V", constructor, max_stack=1, max_locals=1)

        main = writer.code()
        for _, property_name in self.schema:
            main.field_insn(GETSTATIC, "java/lang/System", "out", "Ljava/io/PrintStream;")
            main.ldc_string(property_name)
            main.ldc_string(UNKNOWN)
            main.method_insn(
                INVOKESTATIC,
                "java/lang/System",
                "getProperty",
                "(Ljava/lang/String;Ljava/lang/String;)Ljava/lang/String;",
            )
            main.method_insn(
                INVOKEVIRTUAL, "java/io/PrintStream", "println", "(Ljava/lang/String;)V"
            )
        main.insn(RETURN)
        writer.add_method(
            ACC_PUBLIC | ACC_STATIC,
            "main",
            "([Ljava/lang/String;)V",
            main,
            max_stack=3,
            max_locals=1,
        )

        return ProbeProgram(
            file_name=f"{JVM_PROBE_CLASS}.class",
            content=writer.to_bytes(),
            arguments=("-classpath", ".", JVM_PROBE_CLASS),
        )


# Must stay valid on Python 2.7 and every 3.x. Mirrors
# runtimeprobe.probe.introspection.read_attribute.
_PYTHON_PROBE_PRELUDE = '''\
import sys


def _read(name, default):
    module_name, _, attribute_path = name.partition(".")
    try:
        value = __import__(module_name)
        for part in attribute_path.split("."):
            value = getattr(value, part)
        if callable(value):
            value = value()
    except Exception:
        return default
    if value is None or value == "":
        return default
    return str(value)


'''


class PythonProbeEmitter(ProbeEmitter):
    """Emits a dependency-free script printing each dotted attribute."""

    target = "python"
    default_entrypoint = PYTHON_ENTRYPOINT

    def __init__(self, schema: PropertySchema = PYTHON_SCHEMA) -> None:
        super().__init__(schema)

    def emit(self) -> ProbeProgram:
        lines = [_PYTHON_PROBE_PRELUDE]
        for _, attribute in self.schema:
            # json.dumps yields a valid Python string literal for these names
            lines.append(
                f"sys.stdout.write(_read({json.dumps(attribute)}, {json.dumps(UNKNOWN)}) + \"\\n\")\n"
            )
        lines.append("sys.stdout.flush()\n")
        return ProbeProgram(
            file_name=PYTHON_PROBE_SCRIPT,
            content="".join(lines).encode("utf-8"),
            arguments=("-s", PYTHON_PROBE_SCRIPT),
            environment=MappingProxyType({"PYTHONIOENCODING": "utf-8"}),
        )


_EMITTERS: dict[str, type[ProbeEmitter]] = {
    JvmProbeEmitter.target: JvmProbeEmitter,
    PythonProbeEmitter.target: PythonProbeEmitter,
}


def available_targets() -> tuple[str, ...]:
    return tuple(_EMITTERS)


def get_emitter(target: str) -> ProbeEmitter:
    """Return the emitter registered for a target runtime family."""
    emitter_cls = _EMITTERS.get(target)
    if emitter_cls is None:
        raise ConfigError.invalid_value(
            "probe.target", target, f"expected one of {', '.join(available_targets())}"
        )
    return emitter_cls()
