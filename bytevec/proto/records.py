r"""Codecs for records and fixed tuples.

Layout: [len_1: size]...[len_k: size][field_1]...[field_k]

The header holds one length per declared field; how many there are is known
from the shape, never read from the stream.

>>> from bytevec.proto.types import U16, TEXT, Tuple
>>> encode_shape(Tuple((U16, TEXT)), (7, "ok"), SizeWidth.U8).hex()
'020207006f6b'

Breakdown of the result:

    02: u16 field is 2 bytes
    02: text field is 2 bytes
    0700: 7
    6f6b: 'ok'
"""

import dataclasses
from dataclasses import dataclass
from functools import cache
from typing import Any

from .dispatch import decode_shape, encode_shape
from .reader import ByteReader
from .types import Record, RecordField, ShapeLike, SkippedField, Tuple
from .width import SizeWidth, write_size

METADATA_KEY = "bytevec"


@dataclass(frozen=True)
class BytevecFieldInfo:
    """Metadata for a dataclass field that is written to the stream."""

    shape: ShapeLike


def _encode_fields(parts: list[bytes], size: SizeWidth) -> bytes:
    buf = bytearray()
    for part in parts:
        buf.extend(write_size(len(part), size))
    for part in parts:
        buf.extend(part)
    return bytes(buf)


def _decode_fields(shapes: list[ShapeLike], data: memoryview, size: SizeWidth) -> list[Any]:
    reader = ByteReader(data)
    lengths = [reader.read_size(size) for _ in shapes]
    values = [decode_shape(shape, reader.read(n), size) for shape, n in zip(shapes, lengths)]
    reader.finalize()
    return values


@encode_shape.register
def encode_record(shape: Record, value: Any, size: SizeWidth) -> bytes:
    return _encode_fields([encode_shape(f.shape, f.get(value), size) for f in shape.fields], size)


@decode_shape.register
def decode_record(shape: Record, data: memoryview, size: SizeWidth) -> Any:
    values = _decode_fields([f.shape for f in shape.fields], data, size)

    kwargs = {f.name: v for f, v in zip(shape.fields, values)}
    for skipped in shape.skipped:
        kwargs[skipped.name] = skipped.default_factory()

    if shape.factory is None:
        return kwargs
    return shape.factory(**kwargs)


@encode_shape.register
def encode_tuple(shape: Tuple, value: Any, size: SizeWidth) -> bytes:
    if len(value) != len(shape.items):
        raise TypeError(f"expected a tuple of {len(shape.items)} items, got {len(value)}")
    return _encode_fields([encode_shape(s, v, size) for s, v in zip(shape.items, value)], size)


@decode_shape.register
def decode_tuple(shape: Tuple, data: memoryview, size: SizeWidth) -> tuple[Any, ...]:
    return tuple(_decode_fields(list(shape.items), data, size))


def _constant(value: Any) -> Any:
    return lambda: value


@cache
def record_for(cls: type) -> Record:
    """Derive the record shape of a dataclass.

    Fields declared with ``bytevec_field`` become the record's fields, in
    declaration order. Every other field is skipped: it is never written and
    is filled from its default when decoding.
    """
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls.__name__} is not a dataclass and cannot be used as a shape")

    fields: list[RecordField] = []
    skipped: list[SkippedField] = []
    for f in dataclasses.fields(cls):
        if not f.init:
            continue

        info = f.metadata.get(METADATA_KEY)
        if info is not None:
            fields.append(RecordField(f.name, info.shape))
        elif f.default is not dataclasses.MISSING:
            skipped.append(SkippedField(f.name, _constant(f.default)))
        elif f.default_factory is not dataclasses.MISSING:
            skipped.append(SkippedField(f.name, f.default_factory))
        else:
            raise TypeError(f"{cls.__name__}.{f.name} is not serialized and has no default")

    return Record(cls.__name__, tuple(fields), cls, tuple(skipped))


@encode_shape.register
def encode_class(shape: type, value: Any, size: SizeWidth) -> bytes:
    return encode_shape(record_for(shape), value, size)


@decode_shape.register
def decode_class(shape: type, data: memoryview, size: SizeWidth) -> Any:
    return decode_shape(record_for(shape), data, size)
