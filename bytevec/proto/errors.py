"""Failure taxonomy shared by every bytevec codec."""

from dataclasses import dataclass
from enum import StrEnum, auto


class Relation(StrEnum):
    """How an expected size relates to the actual buffer size."""

    EQUAL_TO = auto()
    AT_LEAST = auto()
    AT_MOST = auto()


@dataclass(frozen=True, slots=True)
class ExpectedSize:
    """The size a decoder wanted to see."""

    relation: Relation
    size: int

    @classmethod
    def equal_to(cls, size: int) -> "ExpectedSize":
        return cls(Relation.EQUAL_TO, size)

    @classmethod
    def at_least(cls, size: int) -> "ExpectedSize":
        return cls(Relation.AT_LEAST, size)

    @classmethod
    def at_most(cls, size: int) -> "ExpectedSize":
        return cls(Relation.AT_MOST, size)

    def __str__(self) -> str:
        if self.relation == Relation.AT_LEAST:
            return f"at least {self.size}"
        if self.relation == Relation.AT_MOST:
            return f"less or equal than {self.size}"
        return str(self.size)


class SerializationError(RuntimeError):
    """Raised when serialization or deserialization fails."""


class BadSizeDecodeError(SerializationError):
    """Raised when a buffer does not have the size a decoder expects."""

    def __init__(self, expected: ExpectedSize, actual: int) -> None:
        super().__init__(
            f"The size expected for the structure is {expected}, "
            f"but the size of the given buffer is {actual}"
        )
        self.expected = expected
        self.actual = actual


class SizeMismatch(BadSizeDecodeError):
    """A fixed-width value was handed a slice of the wrong length, or bytes were left over."""


class NotEnoughBytes(BadSizeDecodeError):
    """A declared length or count needs more bytes than remain."""


class BufferTooLarge(BadSizeDecodeError):
    """The bounded decode guard rejected the buffer."""


class ArithmeticOverflow(SerializationError):
    """A count, length or scalar value does not fit its fixed width."""


class InvalidEncoding(SerializationError):
    """Content bytes are not a valid encoding for the target shape."""
