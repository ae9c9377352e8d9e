"""Fixtures for probe tests: fake runtime installations backed by shell scripts."""

from __future__ import annotations

import shlex
import stat
import struct
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytest

EXAMPLE_VALUES = (
    "11.0.2",
    "ExampleVendor",
    "amd64",
    "ExampleVM",
    "11.0.2+9",
    "ExampleRuntime",
)


@dataclass
class FakeInstallation:
    """An installation root whose bin/java prints canned lines."""

    home: Path
    invocations_file: Path

    @property
    def invocations(self) -> int:
        if not self.invocations_file.exists():
            return 0
        return len(self.invocations_file.read_text().splitlines())

    @property
    def recorded_args(self) -> list[str]:
        return self.invocations_file.read_text().splitlines()


MakeInstallation = Callable[..., FakeInstallation]


@pytest.fixture
def example_values() -> tuple[str, ...]:
    """Canned probe output, one value per property in schema order."""
    return EXAMPLE_VALUES


@pytest.fixture
def make_installation(tmp_path: Path) -> MakeInstallation:
    """Factory for fake installations.

    The script records each invocation, requires the probe class to be present in
    its working directory, prints ``lines`` and exits with ``exit_code``.
    """
    counter = 0

    def _make(
        lines: tuple[str, ...] = EXAMPLE_VALUES,
        *,
        exit_code: int = 0,
        entrypoint: str = "java",
        program_file: str = "JavaProbe.class",
        delay_sec: float = 0.0,
    ) -> FakeInstallation:
        nonlocal counter
        counter += 1
        home = tmp_path / f"install-{counter}"
        bin_dir = home / "bin"
        bin_dir.mkdir(parents=True)
        invocations = tmp_path / f"install-{counter}.invocations"
        printed = " ".join(shlex.quote(line) for line in lines)
        script = "\n".join(
            [
                "#!/bin/sh",
                f'echo "$*" >> {shlex.quote(str(invocations))}',
                f"[ -f {shlex.quote(program_file)} ] || exit 97",
                f"sleep {delay_sec}" if delay_sec else ":",
                f"printf '%s\\n' {printed}" if lines else ":",
                f"exit {exit_code}",
                "",
            ]
        )
        executable = bin_dir / entrypoint
        executable.write_text(script)
        executable.chmod(executable.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return FakeInstallation(home=home, invocations_file=invocations)

    return _make


@dataclass
class ParsedMethod:
    access: int
    name: str
    descriptor: str
    max_stack: int
    max_locals: int
    code: bytes


@dataclass
class ParsedClass:
    """Just enough of a class file to assert on what the writer produced."""

    major: int
    minor: int
    access: int
    this_class: str
    super_class: str
    pool: dict[int, tuple]
    methods: list[ParsedMethod]

    def utf8(self, index: int) -> str:
        tag, raw = self.pool[index]
        assert tag == "utf8"
        return raw.decode("utf-8")

    def class_name(self, index: int) -> str:
        tag, name_index = self.pool[index]
        assert tag == "class"
        return self.utf8(name_index)

    @property
    def strings(self) -> list[str]:
        return [self.utf8(entry[1]) for entry in self.pool.values() if entry[0] == "string"]

    def method(self, name: str) -> ParsedMethod:
        return next(m for m in self.methods if m.name == name)


def _read_class_file(data: bytes) -> ParsedClass:
    offset = 0

    def take(fmt: str) -> tuple:
        nonlocal offset
        values = struct.unpack_from(fmt, data, offset)
        offset += struct.calcsize(fmt)
        return values

    magic, minor, major, pool_count = take(">IHHH")
    assert magic == 0xCAFEBABE
    tags = {7: "class", 8: "string", 9: "field", 10: "method", 12: "nat"}
    pool: dict[int, tuple] = {}
    for index in range(1, pool_count):
        (tag,) = take(">B")
        if tag == 1:
            (length,) = take(">H")
            pool[index] = ("utf8", data[offset : offset + length])
            offset += length
        elif tag in (7, 8):
            pool[index] = (tags[tag], *take(">H"))
        elif tag in (9, 10, 12):
            pool[index] = (tags[tag], *take(">HH"))
        else:
            raise AssertionError(f"unexpected constant tag {tag}")

    access, this_index, super_index, interfaces, fields = take(">HHHHH")
    assert interfaces == 0 and fields == 0

    parsed = ParsedClass(major, minor, access, "", "", pool, [])
    parsed.this_class = parsed.class_name(this_index)
    parsed.super_class = parsed.class_name(super_index)

    (method_count,) = take(">H")
    for _ in range(method_count):
        m_access, name_index, descriptor_index, attribute_count = take(">HHHH")
        assert attribute_count == 1
        attribute_name, attribute_length = take(">HI")
        assert parsed.utf8(attribute_name) == "Code"
        end = offset + attribute_length
        max_stack, max_locals, code_length = take(">HHI")
        code = data[offset : offset + code_length]
        offset += code_length
        assert take(">HH") == (0, 0)
        assert offset == end
        parsed.methods.append(
            ParsedMethod(
                m_access,
                parsed.utf8(name_index),
                parsed.utf8(descriptor_index),
                max_stack,
                max_locals,
                code,
            )
        )

    assert take(">H") == (0,)
    assert offset == len(data)
    return parsed


@pytest.fixture
def read_class_file() -> Callable[[bytes], ParsedClass]:
    """Structural reader for class files produced by ClassFileWriter."""
    return _read_class_file
