"""Length check applied before decoding untrusted buffers."""

from typing import Any

from structlog import get_logger

from . import codec
from .errors import BufferTooLarge, ExpectedSize
from .types import ShapeLike
from .width import DEFAULT_SIZE_WIDTH, SizeWidth

logger = get_logger()


def decode_max(
    data: bytes | bytearray | memoryview,
    shape: ShapeLike,
    limit: int,
    *,
    size: SizeWidth = DEFAULT_SIZE_WIDTH,
) -> Any:
    """Decode ``data`` only if it is at most ``limit`` bytes long.

    Oversized buffers are rejected with :class:`BufferTooLarge` before any
    shape-level decoding starts.
    """
    length = memoryview(data).nbytes
    if length > limit:
        logger.debug("buffer rejected", length=length, limit=limit)
        raise BufferTooLarge(ExpectedSize.at_most(limit), length)
    return codec.decode(data, shape, size=size)
