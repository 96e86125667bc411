"""Width of the unsigned integers used for every count and length prefix.

The width is configuration shared by both ends of a conversation. It is never
written to the stream, so an encoder and a decoder using different widths will
silently misread each other.
"""

from enum import IntEnum

from .errors import ArithmeticOverflow, ExpectedSize, SizeMismatch


class SizeWidth(IntEnum):
    """Byte count of a size prefix."""

    U8 = 1
    U16 = 2
    U32 = 4
    U64 = 8

    @property
    def bits(self) -> int:
        return self.value * 8

    @property
    def max_value(self) -> int:
        return (1 << self.bits) - 1

    @classmethod
    def parse(cls, value: "str | int | SizeWidth") -> "SizeWidth":
        """Parse a width given as a name ("u16"), a bit count ("16", 16) or a member."""
        if isinstance(value, SizeWidth):
            return value

        text = str(value).strip().lower().removeprefix("u")
        for member in cls:
            if text == str(member.bits):
                return member
        raise ValueError(f"Unknown size width {value!r}, expected one of 8, 16, 32, 64")


DEFAULT_SIZE_WIDTH = SizeWidth.U32


def write_size(n: int, size: SizeWidth = DEFAULT_SIZE_WIDTH) -> bytes:
    """Encode a count or length as a little-endian size prefix."""
    if n < 0 or n > size.max_value:
        raise ArithmeticOverflow(f"{n} does not fit in a {size.bits}-bit size prefix")
    return n.to_bytes(size.value, byteorder="little")


def read_size(data: bytes | memoryview, size: SizeWidth = DEFAULT_SIZE_WIDTH) -> int:
    """Decode a size prefix occupying exactly ``size`` bytes."""
    if len(data) != size.value:
        raise SizeMismatch(ExpectedSize.equal_to(size.value), len(data))
    return int.from_bytes(data, byteorder="little")
