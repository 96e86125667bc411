"""Tests for sequences, sets and maps"""

from pytest import raises

from bytevec.proto import (
    CHAR,
    TEXT,
    U8,
    U16,
    U32,
    U64,
    ArithmeticOverflow,
    InvalidEncoding,
    MapOf,
    NotEnoughBytes,
    Sequence,
    SetOf,
    SizeMismatch,
    SizeWidth,
    Tuple,
    decode,
    encode,
)

WORDS = ["Rust", "Is", "Awesome!"]
WORDS_HEX = (
    "03000000"  # 3 elements
    "04000000" "52757374"  # 'Rust'
    "02000000" "4973"  # 'Is'
    "08000000" "417765736f6d6521"  # 'Awesome!'
)


def describe_sequences():
    def test_text_sequence(expect):
        packed = encode(WORDS, Sequence(TEXT))
        expect(packed) == bytes.fromhex(WORDS_HEX)
        expect(decode(packed, Sequence(TEXT))) == WORDS

    def test_char_sequence(expect):
        chars = ["1", "2", "3"]
        expect(decode(encode(chars, Sequence(CHAR)), Sequence(CHAR))) == chars

    def test_empty_sequence(expect):
        expect(encode([], Sequence(U32))) == b"\x00\x00\x00\x00"
        expect(decode(b"\x00\x00\x00\x00", Sequence(U32))) == []

    def prefixes_fixed_width_elements_too(expect):
        expect(encode([1, 2], Sequence(U16), size=SizeWidth.U8)) == bytes.fromhex("02020100020200")

    def accepts_tuples_and_builds_with_the_given_builder(expect):
        shape = Sequence(U8, builder=tuple)
        expect(decode(encode((1, 2, 3), shape), shape)) == (1, 2, 3)

    def test_nested_sequences(expect):
        value = [[1, 2], [], [3]]
        shape = Sequence(Sequence(U64))
        for size in SizeWidth:
            expect(decode(encode(value, shape, size=size), shape, size=size)) == value

    def preserves_order(expect):
        value = list(range(50, 0, -1))
        expect(decode(encode(value, Sequence(U8)), Sequence(U8))) == value


def describe_sets():
    def test_set_of_tuples(expect):
        value = {("One!", 1), ("Two!", 2), ("Three!", 3)}
        shape = SetOf(Tuple((TEXT, U32)))
        expect(decode(encode(value, shape), shape)) == value

    def builds_frozensets(expect):
        shape = SetOf(U16, builder=frozenset)
        result = decode(encode({1, 2}, shape), shape)
        expect(result) == frozenset({1, 2})
        expect(type(result)) == frozenset

    def collapses_duplicate_elements(expect):
        # two copies of 7 written as if by a foreign encoder
        data = bytes.fromhex("02" "0107" "0107")
        expect(decode(data, SetOf(U8), size=SizeWidth.U8)) == {7}


def describe_maps():
    def test_map(expect):
        classes = {101: "Programming 1", 102: "Basic CS"}
        shape = MapOf(U64, TEXT)
        expect(decode(encode(classes, shape), shape)) == classes

    def writes_alternating_keys_and_values(expect):
        packed = encode({1: "a", 2: "bc"}, MapOf(U8, TEXT), size=SizeWidth.U8)
        expect(packed) == bytes.fromhex("02" "0101" "0161" "0102" "026263")

    def test_map_of_sequences(expect):
        value = {"even": [0, 2], "odd": [1]}
        shape = MapOf(TEXT, Sequence(U8))
        expect(decode(encode(value, shape), shape)) == value

    def rejects_a_missing_value(expect):
        data = bytes.fromhex("01" "0101")
        with raises(NotEnoughBytes):
            decode(data, MapOf(U8, U8), size=SizeWidth.U8)


def describe_corruption():
    def rejects_every_truncation(expect):
        packed = bytes.fromhex(WORDS_HEX)
        for cut in range(len(packed)):
            with raises(NotEnoughBytes):
                decode(packed[:cut], Sequence(TEXT))

    def reports_the_missing_span(expect):
        packed = bytes.fromhex(WORDS_HEX)
        with raises(NotEnoughBytes) as exinfo:
            decode(packed[:-1], Sequence(TEXT))
        expect(exinfo.value.actual) == len(packed) - 1
        expect(exinfo.value.expected.size) == len(packed)

    def rejects_a_count_larger_than_the_content(expect):
        packed = bytearray(bytes.fromhex(WORDS_HEX))
        packed[0] = 4
        with raises(NotEnoughBytes):
            decode(packed, Sequence(TEXT))

    def rejects_trailing_bytes(expect):
        packed = bytes.fromhex(WORDS_HEX) + b"\x00"
        with raises(SizeMismatch):
            decode(packed, Sequence(TEXT))

    def propagates_element_failures(expect):
        # one u16 element whose length prefix claims 3 bytes
        data = bytes.fromhex("01" "03" "010203")
        with raises(SizeMismatch):
            decode(data, Sequence(U16), size=SizeWidth.U8)

        data = bytes.fromhex("01" "01" "ff")
        with raises(InvalidEncoding):
            decode(data, Sequence(TEXT), size=SizeWidth.U8)

    def rejects_counts_above_the_size_width(expect):
        expect(len(encode([0] * 255, Sequence(U8), size=SizeWidth.U8))) == 1 + 255 * 2
        with raises(ArithmeticOverflow):
            encode([0] * 256, Sequence(U8), size=SizeWidth.U8)
        with raises(ArithmeticOverflow):
            encode(set(range(256)), SetOf(U16), size=SizeWidth.U8)

    def rejects_element_lengths_above_the_size_width(expect):
        with raises(ArithmeticOverflow):
            encode([[0] * 200], Sequence(Sequence(U8)), size=SizeWidth.U8)

    def mismatched_widths_are_not_detected(expect):
        # The width is not in the stream; a u8 reader sees one empty u8 element
        packed = encode([1], Sequence(U8), size=SizeWidth.U16)
        expect(packed) == bytes.fromhex("0100" "0100" "01")
        with raises(SizeMismatch):
            decode(packed, Sequence(U8), size=SizeWidth.U8)
