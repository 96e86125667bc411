"""Fixed-width scalar codec.

Scalars are written as exactly ``shape.size`` bytes, least-significant byte
first, with no prefix:

>>> from bytevec.proto.types import I16, CHAR
>>> encode_shape(I16, -1234, SizeWidth.U32).hex()
'2efb'
>>> encode_shape(CHAR, "π", SizeWidth.U32).hex()
'c0030000'
"""

import struct
from typing import Any

from .dispatch import decode_shape, encode_shape
from .errors import ArithmeticOverflow, ExpectedSize, InvalidEncoding, SizeMismatch
from .types import Primitive, ScalarKind
from .width import SizeWidth

FLOAT_FORMATS = {4: "<f", 8: "<d"}

MAX_CODE_POINT = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)


def _encode_int(shape: Primitive, value: Any) -> bytes:
    if not isinstance(value, int):
        raise TypeError(f"{shape.name} expects an int, got {type(value).__name__}")
    try:
        return int.to_bytes(
            value, shape.size, byteorder="little", signed=shape.kind == ScalarKind.SIGNED
        )
    except OverflowError as e:
        raise ArithmeticOverflow(f"{value} does not fit in {shape.name}") from e


def _encode_float(shape: Primitive, value: Any) -> bytes:
    if not isinstance(value, (int, float)):
        raise TypeError(f"{shape.name} expects a float, got {type(value).__name__}")
    try:
        return struct.pack(FLOAT_FORMATS[shape.size], value)
    except (OverflowError, struct.error) as e:
        raise ArithmeticOverflow(f"{value} does not fit in {shape.name}") from e


def _encode_char(shape: Primitive, value: Any) -> bytes:
    if not isinstance(value, str) or len(value) != 1:
        raise TypeError(f"{shape.name} expects a single character, got {value!r}")
    if ord(value) in SURROGATES:
        raise InvalidEncoding(f"{ord(value):#x} is not a Unicode scalar value")
    return ord(value).to_bytes(shape.size, byteorder="little")


def _decode_char(data: memoryview) -> str:
    code_point = int.from_bytes(data, byteorder="little")
    if code_point > MAX_CODE_POINT or code_point in SURROGATES:
        raise InvalidEncoding(f"{code_point:#x} is not a Unicode scalar value")
    return chr(code_point)


@encode_shape.register
def encode_primitive(shape: Primitive, value: Any, size: SizeWidth) -> bytes:
    if shape.kind == ScalarKind.FLOAT:
        return _encode_float(shape, value)
    if shape.kind == ScalarKind.CHAR:
        return _encode_char(shape, value)
    return _encode_int(shape, value)


@decode_shape.register
def decode_primitive(shape: Primitive, data: memoryview, size: SizeWidth) -> Any:
    if len(data) != shape.size:
        raise SizeMismatch(ExpectedSize.equal_to(shape.size), len(data))

    if shape.kind == ScalarKind.FLOAT:
        return struct.unpack(FLOAT_FORMATS[shape.size], data)[0]
    if shape.kind == ScalarKind.CHAR:
        return _decode_char(data)
    return int.from_bytes(data, byteorder="little", signed=shape.kind == ScalarKind.SIGNED)
