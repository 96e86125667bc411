"""Generic encode/decode entry points, specialised per shape class.

Every codec module registers its implementations here::

    @encode_shape.register
    def _(shape: Text, value: str, size: SizeWidth) -> bytes: ...

Nested codecs call back into these functions for their elements, which is how
shapes compose to any depth.
"""

from functools import singledispatch
from typing import Any

from .width import SizeWidth


@singledispatch
def encode_shape(shape: Any, value: Any, size: SizeWidth) -> bytes:
    raise TypeError(f"{shape!r} is not a bytevec shape")


@singledispatch
def decode_shape(shape: Any, data: memoryview, size: SizeWidth) -> Any:
    """Decode a value that occupies all of ``data``."""
    raise TypeError(f"{shape!r} is not a bytevec shape")
