"""Dataclass integration and codec configuration."""

from dataclasses import field
from typing import Any, Self

from .codec import decode, encode
from .guard import decode_max
from .records import METADATA_KEY, BytevecFieldInfo, record_for
from .types import Record, ShapeLike
from .width import DEFAULT_SIZE_WIDTH, SizeWidth

# Sentinel for missing default
_MISSING: Any = object()


def bytevec_field(
    shape: ShapeLike,
    *,
    default: Any = _MISSING,
    default_factory: Any = _MISSING,
) -> Any:
    """Define a dataclass field that is written to the stream.

    Args:
        shape: The wire shape of the field (e.g. ``U8``, ``Sequence(TEXT)``).
        default: Default value for the field.
        default_factory: Factory function for default value.

    Returns:
        A dataclass field with bytevec metadata attached.
    """
    metadata = {METADATA_KEY: BytevecFieldInfo(shape)}

    if default is not _MISSING:
        return field(default=default, metadata=metadata)
    if default_factory is not _MISSING:
        return field(default_factory=default_factory, metadata=metadata)
    return field(metadata=metadata)


class Struct:
    """Base class for dataclasses that encode themselves.

    Fields declared with bytevec_field() are written in declaration order.
    Plain fields are left out of the stream and take their default when
    decoding, which makes the struct a partial record.

    Example:
        @dataclass
        class Point(Struct):
            x: int = bytevec_field(I32)
            y: int = bytevec_field(I32)
            label: str = ""  # never serialized
    """

    @classmethod
    def bytevec_record(cls) -> Record:
        """Return the record shape derived from this class's fields."""
        return record_for(cls)

    def encode(self, *, size: SizeWidth = DEFAULT_SIZE_WIDTH) -> bytes:
        """Encode this struct to bytes."""
        return encode(self, type(self), size=size)

    @classmethod
    def decode(
        cls,
        data: bytes | bytearray | memoryview,
        *,
        size: SizeWidth = DEFAULT_SIZE_WIDTH,
        limit: int | None = None,
    ) -> Self:
        """Decode a struct that occupies the whole buffer.

        Args:
            data: The bytes to decode.
            size: Width of every count and length prefix.
            limit: If given, reject buffers longer than this before decoding.

        Returns:
            The decoded instance.
        """
        if limit is not None:
            return decode_max(data, cls, limit, size=size)
        return decode(data, cls, size=size)


class Codec:
    """Bundles the settings both ends of a conversation must agree on.

    Example:
        codec = Codec(size=SizeWidth.U16, limit=4096)
        data = codec.encode(["a", "b"], Sequence(TEXT))
        codec.decode(data, Sequence(TEXT))
    """

    def __init__(
        self, *, size: SizeWidth | str | int = DEFAULT_SIZE_WIDTH, limit: int | None = None
    ) -> None:
        self.size = SizeWidth.parse(size)
        self.limit = limit

    def __repr__(self) -> str:
        return f"Codec(size={self.size.name}, limit={self.limit})"

    def encode(self, value: Any, shape: ShapeLike) -> bytes:
        return encode(value, shape, size=self.size)

    def decode(self, data: bytes | bytearray | memoryview, shape: ShapeLike) -> Any:
        """Decode, applying the configured limit if there is one."""
        if self.limit is not None:
            return decode_max(data, shape, self.limit, size=self.size)
        return decode(data, shape, size=self.size)

    def decode_max(self, data: bytes | bytearray | memoryview, shape: ShapeLike, limit: int) -> Any:
        return decode_max(data, shape, limit, size=self.size)
