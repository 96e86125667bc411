"""Text and raw byte codecs.

Neither carries a length marker: decoding takes the entire slice it is handed
as the value. They must always be driven by a container that knows the exact
span of the value.
"""

from typing import Any

from .dispatch import decode_shape, encode_shape
from .errors import ArithmeticOverflow, InvalidEncoding
from .types import Bytes, Text
from .width import SizeWidth


def _check_length(data: bytes, size: SizeWidth) -> bytes:
    if len(data) > size.max_value:
        raise ArithmeticOverflow(
            f"{len(data)} bytes cannot be described by a {size.bits}-bit size prefix"
        )
    return data


@encode_shape.register
def encode_text(shape: Text, value: Any, size: SizeWidth) -> bytes:
    if not isinstance(value, str):
        raise TypeError(f"text expects a str, got {type(value).__name__}")
    try:
        data = value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidEncoding(str(e)) from e
    return _check_length(data, size)


@decode_shape.register
def decode_text(shape: Text, data: memoryview, size: SizeWidth) -> str:
    try:
        return str(data, "utf-8")
    except UnicodeDecodeError as e:
        raise InvalidEncoding(str(e)) from e


@encode_shape.register
def encode_bytes(shape: Bytes, value: Any, size: SizeWidth) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"bytes expects a bytes-like value, got {type(value).__name__}")
    return _check_length(bytes(value), size)


@decode_shape.register
def decode_bytes(shape: Bytes, data: memoryview, size: SizeWidth) -> bytes:
    return bytes(data)
