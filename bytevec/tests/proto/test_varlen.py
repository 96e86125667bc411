"""Tests for text and raw bytes"""

from pytest import raises

from bytevec.proto import (
    BYTES,
    TEXT,
    ArithmeticOverflow,
    InvalidEncoding,
    SizeWidth,
    decode,
    encode,
)


def describe_text():
    def writes_utf8_without_a_prefix(expect):
        expect(encode("héllo", TEXT)) == "héllo".encode("utf-8")
        expect(encode("", TEXT)) == b""

    def decodes_the_whole_slice(expect):
        expect(decode(b"foo\x00bar", TEXT)) == "foo\x00bar"
        expect(decode(b"", TEXT)) == ""
        expect(decode("ハトホル😎".encode(), TEXT)) == "ハトホル😎"

    def rejects_malformed_utf8(expect):
        with raises(InvalidEncoding) as exinfo:
            decode(b"ab\xff", TEXT)
        expect(isinstance(exinfo.value.__cause__, UnicodeDecodeError)) == True

    def rejects_truncated_multibyte_sequences(expect):
        with raises(InvalidEncoding):
            decode("π".encode()[:1], TEXT)

    def rejects_lone_surrogates(expect):
        with raises(InvalidEncoding):
            encode("\ud800", TEXT)

    def rejects_text_longer_than_the_size_width(expect):
        expect(len(encode("x" * 255, TEXT, size=SizeWidth.U8))) == 255
        with raises(ArithmeticOverflow):
            encode("x" * 256, TEXT, size=SizeWidth.U8)

    def rejects_non_strings(expect):
        with raises(TypeError):
            encode(b"abc", TEXT)


def describe_bytes():
    def writes_raw_content(expect):
        expect(encode(b"hello\x00World", BYTES)) == b"hello\x00World"
        expect(encode(bytearray(b"\x01\x02"), BYTES)) == b"\x01\x02"

    def decodes_to_an_owned_copy(expect):
        buf = bytearray(b"\x01\x02\x03")
        value = decode(buf, BYTES)
        buf[0] = 0xFF

        expect(type(value)) == bytes
        expect(value) == b"\x01\x02\x03"

    def rejects_content_longer_than_the_size_width(expect):
        with raises(ArithmeticOverflow):
            encode(b"x" * 65536, BYTES, size=SizeWidth.U16)

    def rejects_text(expect):
        with raises(TypeError):
            encode("abc", BYTES)
