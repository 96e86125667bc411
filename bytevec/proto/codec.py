"""Top-level encode/decode entry points."""

from typing import Any

# Importing the codec modules registers their shape implementations.
from . import containers, primitives, records, varlen  # noqa: F401
from .dispatch import decode_shape, encode_shape
from .types import ShapeLike
from .width import DEFAULT_SIZE_WIDTH, SizeWidth


def encode(value: Any, shape: ShapeLike, *, size: SizeWidth = DEFAULT_SIZE_WIDTH) -> bytes:
    """Encode a value into a fresh buffer.

    Args:
        value: The value to encode.
        shape: Shape descriptor, or a dataclass declaring bytevec fields.
        size: Width of every count and length prefix.

    Returns:
        The encoded bytes.
    """
    return encode_shape(shape, value, SizeWidth.parse(size))


def decode(
    data: bytes | bytearray | memoryview,
    shape: ShapeLike,
    *,
    size: SizeWidth = DEFAULT_SIZE_WIDTH,
) -> Any:
    """Decode a value that occupies the whole buffer.

    Args:
        data: The buffer to decode. It is only read, never retained.
        shape: Shape descriptor, or a dataclass declaring bytevec fields.
        size: Width of every count and length prefix; must match the encoder's.

    Returns:
        The decoded value.
    """
    return decode_shape(shape, memoryview(data).cast("B"), SizeWidth.parse(size))
