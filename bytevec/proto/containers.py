r"""Codecs for sequences, sets and maps.

Layout: [count: size][len_1: size][elem_1]...[len_n: size][elem_n]

>>> from bytevec.proto.types import TEXT, Sequence
>>> encode_shape(Sequence(TEXT), ["Rust", "Is"], SizeWidth.U8).hex()
'020452757374024973'

Breakdown of the result:

    02: 2 elements
    0452757374: 'Rust' with its length prefix
    024973: 'Is' with its length prefix

A map of n entries writes count n followed by 2n elements, alternating key and
value, each with its own length prefix.

Sets and maps are written in iteration order. Decoding preserves stream order
while inserting, but the iteration order of the rebuilt container is not part
of the format.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from .dispatch import decode_shape, encode_shape
from .reader import ByteReader
from .types import MapOf, Sequence, SetOf, ShapeLike
from .width import SizeWidth, write_size


def _encode_elements(
    count: int, elements: Iterable[tuple[ShapeLike, Any]], size: SizeWidth
) -> bytes:
    buf = bytearray(write_size(count, size))
    for shape, value in elements:
        data = encode_shape(shape, value, size)
        buf.extend(write_size(len(data), size))
        buf.extend(data)
    return bytes(buf)


def _decode_element(reader: ByteReader, shape: ShapeLike, size: SizeWidth) -> Any:
    return decode_shape(shape, reader.read_sized(size), size)


@encode_shape.register
def encode_sequence(shape: Sequence, value: Any, size: SizeWidth) -> bytes:
    return _encode_elements(len(value), ((shape.element, v) for v in value), size)


@decode_shape.register
def decode_sequence(shape: Sequence, data: memoryview, size: SizeWidth) -> Any:
    reader = ByteReader(data)
    count = reader.read_size(size)
    items = [_decode_element(reader, shape.element, size) for _ in range(count)]
    reader.finalize()
    return shape.builder(items)


@encode_shape.register
def encode_set(shape: SetOf, value: Any, size: SizeWidth) -> bytes:
    return _encode_elements(len(value), ((shape.element, v) for v in value), size)


@decode_shape.register
def decode_set(shape: SetOf, data: memoryview, size: SizeWidth) -> Any:
    reader = ByteReader(data)
    count = reader.read_size(size)
    items = [_decode_element(reader, shape.element, size) for _ in range(count)]
    reader.finalize()
    return shape.builder(items)


def _map_elements(shape: MapOf, value: Mapping[Any, Any]) -> Iterable[tuple[ShapeLike, Any]]:
    for key, item in value.items():
        yield shape.key, key
        yield shape.value, item


@encode_shape.register
def encode_map(shape: MapOf, value: Any, size: SizeWidth) -> bytes:
    return _encode_elements(len(value), _map_elements(shape, value), size)


@decode_shape.register
def decode_map(shape: MapOf, data: memoryview, size: SizeWidth) -> Any:
    reader = ByteReader(data)
    count = reader.read_size(size)
    entries = []
    for _ in range(count):
        key = _decode_element(reader, shape.key, size)
        entries.append((key, _decode_element(reader, shape.value, size)))
    reader.finalize()
    return shape.builder(entries)
