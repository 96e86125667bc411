"""Read-only cursor used by the container codecs."""

from .errors import ExpectedSize, NotEnoughBytes, SizeMismatch
from .width import SizeWidth, read_size

_EMPTY_VIEW = memoryview(b"")


class ByteReader:
    """Consumes a byte slice from left to right.

    The reader keeps a memoryview that is shortened as bytes are read, so the
    slices it hands out are views into the original buffer. Codecs copy before
    building values.
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._view = memoryview(data).cast("B")
        self._total = len(self._view)

    def remaining(self) -> int:
        return len(self._view)

    def consumed(self) -> int:
        return self._total - len(self._view)

    def read(self, n: int) -> memoryview:
        """Take exactly ``n`` bytes."""
        if n > len(self._view):
            raise NotEnoughBytes(ExpectedSize.at_least(self.consumed() + n), self._total)
        chunk = self._view[:n]
        self._view = self._view[n:]
        return chunk

    def read_size(self, size: SizeWidth) -> int:
        return read_size(self.read(size.value), size)

    def read_sized(self, size: SizeWidth) -> memoryview:
        """Take a size prefix followed by the number of bytes it announces."""
        return self.read(self.read_size(size))

    def finalize(self) -> None:
        """Fail if anything is left unread."""
        if self._view:
            raise SizeMismatch(ExpectedSize.equal_to(self.consumed()), self._total)
        self._view = _EMPTY_VIEW
