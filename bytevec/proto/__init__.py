"""bytevec runtime: shapes, codecs and errors."""

from .codec import decode as decode
from .codec import encode as encode
from .dispatch import decode_shape as decode_shape
from .dispatch import encode_shape as encode_shape
from .errors import ArithmeticOverflow as ArithmeticOverflow
from .errors import BadSizeDecodeError as BadSizeDecodeError
from .errors import BufferTooLarge as BufferTooLarge
from .errors import ExpectedSize as ExpectedSize
from .errors import InvalidEncoding as InvalidEncoding
from .errors import NotEnoughBytes as NotEnoughBytes
from .errors import SerializationError as SerializationError
from .errors import SizeMismatch as SizeMismatch
from .guard import decode_max as decode_max
from .records import record_for as record_for
from .serialization import Codec as Codec
from .serialization import Struct as Struct
from .serialization import bytevec_field as bytevec_field
from .types import *
from .width import DEFAULT_SIZE_WIDTH as DEFAULT_SIZE_WIDTH
from .width import SizeWidth as SizeWidth
