"""Minimal JVM class-file writer.

Covers exactly what a probe class needs: a deduplicating constant pool, methods
carrying a single Code attribute, and the handful of opcodes used to print
system properties. No StackMapTable frames are written, so classes produced here
must use a class-file version below 50.
"""

from __future__ import annotations

import struct
from collections.abc import Hashable

ACC_PUBLIC = 0x0001
ACC_STATIC = 0x0008
ACC_SUPER = 0x0020

ALOAD_0 = 0x2A
LDC = 0x12
LDC_W = 0x13
RETURN = 0xB1
GETSTATIC = 0xB2
INVOKEVIRTUAL = 0xB6
INVOKESPECIAL = 0xB7
INVOKESTATIC = 0xB8

CLASS_MAGIC = 0xCAFEBABE

_CONSTANT_UTF8 = 1
_CONSTANT_CLASS = 7
_CONSTANT_STRING = 8
_CONSTANT_FIELDREF = 9
_CONSTANT_METHODREF = 10
_CONSTANT_NAME_AND_TYPE = 12

_U2_MAX = 0xFFFF


def encode_modified_utf8(value: str) -> bytes:
    """Encode a string the way CONSTANT_Utf8_info expects.

    Differs from UTF-8 in two ways: NUL is written as two bytes, and characters
    outside the BMP are written as a surrogate pair of three-byte sequences.
    """
    out = bytearray()
    for char in value:
        cp = ord(char)
        if cp > 0xFFFF:
            cp -= 0x10000
            units: tuple[int, ...] = (0xD800 | (cp >> 10), 0xDC00 | (cp & 0x3FF))
        else:
            units = (cp,)
        for unit in units:
            if 0 < unit < 0x80:
                out.append(unit)
            elif unit < 0x800:
                out += bytes((0xC0 | (unit >> 6), 0x80 | (unit & 0x3F)))
            else:
                out += bytes(
                    (0xE0 | (unit >> 12), 0x80 | ((unit >> 6) & 0x3F), 0x80 | (unit & 0x3F))
                )
    return bytes(out)


class ConstantPool:
    """Append-only constant pool. Identical constants share one index."""

    def __init__(self) -> None:
        self._entries: list[bytes] = []
        self._indexes: dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _add(self, key: Hashable, payload: bytes) -> int:
        index = self._indexes.get(key)
        if index is not None:
            return index
        if len(self._entries) + 1 >= _U2_MAX:
            raise ValueError("Constant pool exceeds 65534 entries")
        self._entries.append(payload)
        index = len(self._entries)
        self._indexes[key] = index
        return index

    def utf8(self, value: str) -> int:
        data = encode_modified_utf8(value)
        if len(data) > _U2_MAX:
            raise ValueError(f"Constant too long for a class file ({len(data)} bytes)")
        return self._add(("utf8", value), struct.pack(">BH", _CONSTANT_UTF8, len(data)) + data)

    def class_ref(self, internal_name: str) -> int:
        name_index = self.utf8(internal_name)
        return self._add(("class", internal_name), struct.pack(">BH", _CONSTANT_CLASS, name_index))

    def string(self, value: str) -> int:
        value_index = self.utf8(value)
        return self._add(("string", value), struct.pack(">BH", _CONSTANT_STRING, value_index))

    def name_and_type(self, name: str, descriptor: str) -> int:
        payload = struct.pack(
            ">BHH", _CONSTANT_NAME_AND_TYPE, self.utf8(name), self.utf8(descriptor)
        )
        return self._add(("nat", name, descriptor), payload)

    def field_ref(self, owner: str, name: str, descriptor: str) -> int:
        payload = struct.pack(
            ">BHH",
            _CONSTANT_FIELDREF,
            self.class_ref(owner),
            self.name_and_type(name, descriptor),
        )
        return self._add(("field", owner, name, descriptor), payload)

    def method_ref(self, owner: str, name: str, descriptor: str) -> int:
        payload = struct.pack(
            ">BHH",
            _CONSTANT_METHODREF,
            self.class_ref(owner),
            self.name_and_type(name, descriptor),
        )
        return self._add(("method", owner, name, descriptor), payload)

    def to_bytes(self) -> bytes:
        return struct.pack(">H", len(self._entries) + 1) + b"".join(self._entries)


class CodeBuilder:
    """Bytecode for one method body, with operands resolved against a pool."""

    def __init__(self, pool: ConstantPool) -> None:
        self._pool = pool
        self._code = bytearray()

    def __len__(self) -> int:
        return len(self._code)

    def insn(self, opcode: int) -> CodeBuilder:
        self._code.append(opcode)
        return self

    def ldc_string(self, value: str) -> CodeBuilder:
        index = self._pool.string(value)
        if index <= 0xFF:
            self._code += bytes((LDC, index))
        else:
            self._code += struct.pack(">BH", LDC_W, index)
        return self

    def field_insn(self, opcode: int, owner: str, name: str, descriptor: str) -> CodeBuilder:
        self._code += struct.pack(">BH", opcode, self._pool.field_ref(owner, name, descriptor))
        return self

    def method_insn(self, opcode: int, owner: str, name: str, descriptor: str) -> CodeBuilder:
        self._code += struct.pack(">BH", opcode, self._pool.method_ref(owner, name, descriptor))
        return self

    def to_bytes(self) -> bytes:
        return bytes(self._code)


class ClassFileWriter:
    """Assembles a class with no fields, interfaces, or class attributes."""

    def __init__(
        self,
        name: str,
        *,
        super_name: str = "java/lang/Object",
        access: int = ACC_PUBLIC | ACC_SUPER,
        version: tuple[int, int] = (45, 3),
    ) -> None:
        major, _ = version
        if major >= 50:
            raise ValueError(f"Class-file version {major} requires stack map frames")
        self.pool = ConstantPool()
        self._access = access
        self._version = version
        self._this_index = self.pool.class_ref(name)
        self._super_index = self.pool.class_ref(super_name)
        self._methods: list[bytes] = []

    def code(self) -> CodeBuilder:
        return CodeBuilder(self.pool)

    def add_method(
        self,
        access: int,
        name: str,
        descriptor: str,
        code: CodeBuilder,
        *,
        max_stack: int,
        max_locals: int,
    ) -> None:
        code_bytes = code.to_bytes()
        if not code_bytes or len(code_bytes) > _U2_MAX:
            raise ValueError(f"Method {name} has invalid code length {len(code_bytes)}")
        body = (
            struct.pack(">HHI", max_stack, max_locals, len(code_bytes))
            + code_bytes
            + struct.pack(">HH", 0, 0)  # exception table, code attributes
        )
        code_attribute = struct.pack(">HI", self.pool.utf8("Code"), len(body)) + body
        header = struct.pack(
            ">HHHH", access, self.pool.utf8(name), self.pool.utf8(descriptor), 1
        )
        self._methods.append(header + code_attribute)

    def to_bytes(self) -> bytes:
        major, minor = self._version
        return b"".join(
            (
                struct.pack(">IHH", CLASS_MAGIC, minor, major),
                self.pool.to_bytes(),
                struct.pack(">HHHHH", self._access, self._this_index, self._super_index, 0, 0),
                struct.pack(">H", len(self._methods)),
                *self._methods,
                struct.pack(">H", 0),
            )
        )
