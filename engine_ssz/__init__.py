"""
Offset-table binary codec.

Fixed-size values are written inline, variable-size values are addressed
from the fixed-size head through 4-byte little-endian offsets.
"""

from .decoder import SszDecoder, SszDecoderBuilder, read_offset
from .encoder import BYTES_PER_LENGTH_OFFSET, SszEncoder, encode_offset, head_size
from .exceptions import (
    BytesInvalidError,
    DecodeError,
    InvalidByteLengthError,
    InvalidListLengthError,
    OffsetIntoFixedPortionError,
    OffsetOutOfBoundsError,
    OffsetsAreDecreasingError,
    OffsetSkipsVariableBytesError,
)
from .sedes import ByteList, ByteVector, Container, Sedes, SszList, Uint

__all__ = (
    "BYTES_PER_LENGTH_OFFSET",
    "ByteList",
    "ByteVector",
    "BytesInvalidError",
    "Container",
    "DecodeError",
    "InvalidByteLengthError",
    "InvalidListLengthError",
    "OffsetIntoFixedPortionError",
    "OffsetOutOfBoundsError",
    "OffsetSkipsVariableBytesError",
    "OffsetsAreDecreasingError",
    "Sedes",
    "SszDecoder",
    "SszDecoderBuilder",
    "SszEncoder",
    "SszList",
    "Uint",
    "encode_offset",
    "head_size",
    "read_offset",
)
