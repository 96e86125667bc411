"""Tests for size prefixes"""

from pytest import raises

from bytevec.proto.errors import ArithmeticOverflow, SizeMismatch
from bytevec.proto.width import DEFAULT_SIZE_WIDTH, SizeWidth, read_size, write_size


def describe_size_width():
    def test_byte_counts(expect):
        expect([w.value for w in SizeWidth]) == [1, 2, 4, 8]
        expect(SizeWidth.U16.bits) == 16
        expect(SizeWidth.U8.max_value) == 255
        expect(SizeWidth.U64.max_value) == 2**64 - 1

    def test_default_is_32_bits(expect):
        expect(DEFAULT_SIZE_WIDTH) == SizeWidth.U32

    def parses_names_and_bit_counts(expect):
        expect(SizeWidth.parse("u8")) == SizeWidth.U8
        expect(SizeWidth.parse("U16")) == SizeWidth.U16
        expect(SizeWidth.parse("32")) == SizeWidth.U32
        expect(SizeWidth.parse(64)) == SizeWidth.U64
        expect(SizeWidth.parse(SizeWidth.U8)) == SizeWidth.U8

    def rejects_unknown_widths(expect):
        with raises(ValueError):
            SizeWidth.parse("24")
        with raises(ValueError):
            SizeWidth.parse("u4")


def describe_write_size():
    def writes_least_significant_byte_first(expect):
        expect(write_size(0x0102, SizeWidth.U16)) == b"\x02\x01"
        expect(write_size(5, SizeWidth.U32)) == b"\x05\x00\x00\x00"
        expect(write_size(255, SizeWidth.U8)) == b"\xff"

    def writes_the_maximum_value(expect):
        expect(write_size(2**64 - 1, SizeWidth.U64)) == b"\xff" * 8

    def rejects_values_above_the_width(expect):
        with raises(ArithmeticOverflow):
            write_size(256, SizeWidth.U8)
        with raises(ArithmeticOverflow):
            write_size(65536, SizeWidth.U16)

    def rejects_negative_values(expect):
        with raises(ArithmeticOverflow):
            write_size(-1, SizeWidth.U32)


def describe_read_size():
    def reads_little_endian(expect):
        expect(read_size(b"\x02\x01", SizeWidth.U16)) == 0x0102
        expect(read_size(memoryview(b"\x08\x00\x00\x00"), SizeWidth.U32)) == 8

    def requires_exact_width(expect):
        with raises(SizeMismatch) as exinfo:
            read_size(b"\x01\x00\x00", SizeWidth.U32)
        expect(exinfo.value.actual) == 3
        expect(exinfo.value.expected.size) == 4

        with raises(SizeMismatch):
            read_size(b"\x01\x00", SizeWidth.U8)
