"""
Offset-table decoder.

Decoding happens in two passes. `SszDecoderBuilder.register_type` is called
once per container field, in declaration order: fixed-size fields have their
byte range recorded directly, variable-size fields have their offset read
from the head. `build` then checks the offsets against the head size and the
buffer length and hands an `SszDecoder` back, whose `decode_next` materializes
one field after the other by slicing the buffer at the recorded boundaries.
A variable-size field ends where the next one starts, the last one at the end
of the buffer.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List

from .encoder import BYTES_PER_LENGTH_OFFSET
from .exceptions import (
    BytesInvalidError,
    DecodeError,
    InvalidByteLengthError,
    OffsetIntoFixedPortionError,
    OffsetOutOfBoundsError,
    OffsetsAreDecreasingError,
    OffsetSkipsVariableBytesError,
)

if TYPE_CHECKING:
    from .sedes import Sedes


def read_offset(data: bytes, position: int) -> int:
    """Read the 4-byte little-endian offset stored at `position`."""
    end = position + BYTES_PER_LENGTH_OFFSET
    if end > len(data):
        raise InvalidByteLengthError(len(data), end)
    return int.from_bytes(data[position:end], "little")


@dataclass
class RegisteredField:
    """A container field recorded during the first decoding pass."""

    sedes: "Sedes"
    field_index: int
    start: int
    end: int | None = None


class SszDecoderBuilder:
    """First pass of the container decoding."""

    def __init__(self, data: bytes):
        """Start decoding `data` as a container."""
        self.data = bytes(data)
        self.items_index = 0
        self.fields: List[RegisteredField] = []
        self.variable_fields: List[RegisteredField] = []

    def register_type(self, sedes: "Sedes") -> None:
        """Record the type of the next field of the container."""
        field_index = len(self.fields)
        if sedes.is_fixed_size():
            start = self.items_index
            end = start + sedes.fixed_size()
            if end > len(self.data):
                raise InvalidByteLengthError(len(self.data), end, field_index)
            self.fields.append(RegisteredField(sedes, field_index, start, end))
            self.items_index = end
            return

        if self.items_index + BYTES_PER_LENGTH_OFFSET > len(self.data):
            raise InvalidByteLengthError(
                len(self.data), self.items_index + BYTES_PER_LENGTH_OFFSET, field_index
            )
        offset = read_offset(self.data, self.items_index)
        if offset > len(self.data):
            raise OffsetOutOfBoundsError(offset, len(self.data), field_index)
        if self.variable_fields and offset < self.variable_fields[-1].start:
            raise OffsetsAreDecreasingError(offset, field_index)
        registered = RegisteredField(sedes, field_index, offset)
        self.fields.append(registered)
        self.variable_fields.append(registered)
        self.items_index += BYTES_PER_LENGTH_OFFSET

    def build(self) -> "SszDecoder":
        """Validate the recorded offsets and return the second-pass decoder."""
        if not self.variable_fields:
            if self.items_index != len(self.data):
                raise InvalidByteLengthError(len(self.data), self.items_index)
            return SszDecoder(self.data, self.fields)

        first = self.variable_fields[0]
        if first.start < self.items_index:
            raise OffsetIntoFixedPortionError(first.start, first.field_index)
        if first.start > self.items_index:
            raise OffsetSkipsVariableBytesError(first.start, first.field_index)

        for current, following in zip(self.variable_fields, self.variable_fields[1:]):
            current.end = following.start
        self.variable_fields[-1].end = len(self.data)
        return SszDecoder(self.data, self.fields)


class SszDecoder:
    """Second pass of the container decoding."""

    def __init__(self, data: bytes, fields: List[RegisteredField]):
        """Initialize the decoder with the fields recorded by the builder."""
        self.data = data
        self.fields = fields
        self.position = 0

    def decode_next(self) -> Any:
        """Decode the next field of the container."""
        if self.position >= len(self.fields):
            raise IndexError("all registered fields have already been decoded")
        registered = self.fields[self.position]
        self.position += 1
        field_bytes = self.data[registered.start : registered.end]
        try:
            return registered.sedes.decode(field_bytes)
        except DecodeError as e:
            if e.field_index is None:
                e.field_index = registered.field_index
                e.args = (f"{e.args[0]} (field {e.field_index})",)
            raise
        except ValueError as e:
            raise BytesInvalidError(str(e), registered.field_index) from e

    def decode_all(self) -> List[Any]:
        """Decode every remaining field."""
        return [self.decode_next() for _ in range(len(self.fields) - self.position)]
