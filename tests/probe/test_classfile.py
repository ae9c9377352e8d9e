"""Tests for the minimal class-file writer."""

from __future__ import annotations

import pytest

from runtimeprobe.probe.classfile import (
    ACC_PUBLIC,
    ACC_STATIC,
    ACC_SUPER,
    ALOAD_0,
    INVOKESPECIAL,
    LDC,
    LDC_W,
    RETURN,
    ClassFileWriter,
    CodeBuilder,
    ConstantPool,
    encode_modified_utf8,
)


class TestEncodeModifiedUtf8:
    """Modified UTF-8 as used by CONSTANT_Utf8_info."""

    def test_ascii_unchanged(self) -> None:
        assert encode_modified_utf8("java.version") == b"java.version"

    def test_nul_is_two_bytes(self) -> None:
        assert encode_modified_utf8("a\x00b") == b"a\xc0\x80b"

    def test_bmp_matches_utf8(self) -> None:
        assert encode_modified_utf8("é€") == "é€".encode()

    def test_supplementary_is_surrogate_pair(self) -> None:
        # U+1F600 -> D83D DE00, each as a 3-byte sequence
        assert encode_modified_utf8("\U0001f600") == b"\xed\xa0\xbd\xed\xb8\x80"


class TestConstantPool:
    """Constant pool indexing and deduplication."""

    def test_indexes_start_at_one(self) -> None:
        pool = ConstantPool()

        assert pool.utf8("Code") == 1

    def test_identical_constants_share_index(self) -> None:
        pool = ConstantPool()

        first = pool.string("unknown")
        second = pool.string("unknown")

        assert first == second
        assert len(pool) == 2  # utf8 + string

    def test_method_ref_adds_dependencies_once(self) -> None:
        pool = ConstantPool()

        pool.method_ref("java/lang/Object", "<init>", "()V")
        size = len(pool)
        pool.method_ref("java/lang/Object", "<init>", "()V")

        # utf8 x3, class, name-and-type, methodref
        assert size == 6
        assert len(pool) == size

    def test_to_bytes_count_is_entries_plus_one(self) -> None:
        pool = ConstantPool()
        pool.utf8("x")

        assert pool.to_bytes()[:2] == b"\x00\x02"


class TestCodeBuilder:
    """Bytecode emission."""

    def test_ldc_uses_short_form_for_low_indexes(self) -> None:
        pool = ConstantPool()
        code = CodeBuilder(pool).ldc_string("unknown")

        assert code.to_bytes() == bytes((LDC, pool.string("unknown")))

    def test_ldc_switches_to_wide_form_past_255(self) -> None:
        pool = ConstantPool()
        for i in range(300):
            pool.utf8(f"filler{i}")
        code = CodeBuilder(pool).ldc_string("unknown")

        index = pool.string("unknown")
        assert index > 255
        assert code.to_bytes() == bytes((LDC_W, index >> 8, index & 0xFF))

    def test_method_insn_encodes_pool_index(self) -> None:
        pool = ConstantPool()
        code = CodeBuilder(pool).insn(ALOAD_0)
        code.method_insn(INVOKESPECIAL, "java/lang/Object", "<init>", "()V").insn(RETURN)

        index = pool.method_ref("java/lang/Object", "<init>", "()V")
        assert code.to_bytes() == bytes((ALOAD_0, INVOKESPECIAL, index >> 8, index & 0xFF, RETURN))


class TestClassFileWriter:
    """Whole-class assembly."""

    def test_writes_header_and_class_refs(self, read_class_file) -> None:
        writer = ClassFileWriter("Probe")
        writer.add_method(
            ACC_PUBLIC, "run", "()V", writer.code().insn(RETURN), max_stack=0, max_locals=1
        )

        parsed = read_class_file(writer.to_bytes())

        assert (parsed.major, parsed.minor) == (45, 3)
        assert parsed.access == ACC_PUBLIC | ACC_SUPER
        assert parsed.this_class == "Probe"
        assert parsed.super_class == "java/lang/Object"

    def test_methods_keep_insertion_order_and_limits(self, read_class_file) -> None:
        writer = ClassFileWriter("Probe")
        writer.add_method(
            ACC_PUBLIC, "<init>", "()V", writer.code().insn(RETURN), max_stack=1, max_locals=1
        )
        writer.add_method(
            ACC_PUBLIC | ACC_STATIC,
            "main",
            "([Ljava/lang/String;)V",
            writer.code().insn(RETURN),
            max_stack=3,
            max_locals=1,
        )

        parsed = read_class_file(writer.to_bytes())

        assert [m.name for m in parsed.methods] == ["<init>", "main"]
        main = parsed.method("main")
        assert main.access == ACC_PUBLIC | ACC_STATIC
        assert (main.max_stack, main.max_locals, main.code) == (3, 1, bytes((RETURN,)))

    def test_rejects_versions_needing_stack_maps(self) -> None:
        with pytest.raises(ValueError, match="stack map"):
            ClassFileWriter("Probe", version=(52, 0))

    def test_rejects_empty_method_body(self) -> None:
        writer = ClassFileWriter("Probe")

        with pytest.raises(ValueError):
            writer.add_method(ACC_PUBLIC, "run", "()V", writer.code(), max_stack=0, max_locals=1)
