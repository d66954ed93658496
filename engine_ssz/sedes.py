"""
Serializer/deserializer objects describing each wire type.

A sedes knows whether its encoding has a fixed size, how long the encoding
of a value is, and how to encode and decode it. Values are plain python
objects; `cls` arguments let the caller choose the python type a decoded
value is wrapped in (for example `Hash` for a 32-byte vector).
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Sequence, Tuple

from .decoder import SszDecoderBuilder, read_offset
from .encoder import BYTES_PER_LENGTH_OFFSET, SszEncoder, encode_offset, head_size
from .exceptions import (
    InvalidByteLengthError,
    InvalidListLengthError,
    OffsetIntoFixedPortionError,
    OffsetOutOfBoundsError,
    OffsetsAreDecreasingError,
)


class Sedes(ABC):
    """Base class of every wire type."""

    @abstractmethod
    def is_fixed_size(self) -> bool:
        """Return whether every value of this type encodes to the same length."""
        pass

    def fixed_size(self) -> int:
        """Return the encoded length of a fixed-size type."""
        raise TypeError(f"{self!r} is not a fixed-size type")

    @abstractmethod
    def encoded_length(self, value: Any) -> int:
        """Return the length of the encoding of `value`."""
        pass

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        """Encode `value`."""
        pass

    @abstractmethod
    def decode(self, data: bytes) -> Any:
        """Decode `data`, which must hold exactly one value."""
        pass


class Uint(Sedes):
    """Little-endian unsigned integer of `byte_length` bytes."""

    def __init__(self, byte_length: int, cls: Callable[[int], Any] = int):
        """Initialize the integer type."""
        self.byte_length = byte_length
        self.cls = cls

    def __repr__(self) -> str:
        """Return the representation of the type."""
        return f"Uint({8 * self.byte_length})"

    def is_fixed_size(self) -> bool:
        """Integers are fixed size."""
        return True

    def fixed_size(self) -> int:
        """Return the integer width."""
        return self.byte_length

    def encoded_length(self, value: Any) -> int:
        """Return the integer width."""
        return self.byte_length

    def encode(self, value: Any) -> bytes:
        """Encode the integer."""
        try:
            return int(value).to_bytes(self.byte_length, "little")
        except OverflowError as e:
            raise ValueError(f"{value} does not fit in {self!r}") from e

    def decode(self, data: bytes) -> Any:
        """Decode the integer."""
        if len(data) != self.byte_length:
            raise InvalidByteLengthError(len(data), self.byte_length)
        return self.cls(int.from_bytes(data, "little"))


class ByteVector(Sedes):
    """Byte string of exactly `byte_length` bytes."""

    def __init__(self, byte_length: int, cls: Callable[[bytes], Any] = bytes):
        """Initialize the vector type."""
        self.byte_length = byte_length
        self.cls = cls

    def __repr__(self) -> str:
        """Return the representation of the type."""
        return f"ByteVector({self.byte_length})"

    def is_fixed_size(self) -> bool:
        """Byte vectors are fixed size."""
        return True

    def fixed_size(self) -> int:
        """Return the vector length."""
        return self.byte_length

    def encoded_length(self, value: Any) -> int:
        """Return the vector length."""
        return self.byte_length

    def encode(self, value: Any) -> bytes:
        """Encode the vector."""
        data = bytes(value)
        if len(data) != self.byte_length:
            raise ValueError(f"expected {self.byte_length} bytes, got {len(data)}")
        return data

    def decode(self, data: bytes) -> Any:
        """Decode the vector."""
        if len(data) != self.byte_length:
            raise InvalidByteLengthError(len(data), self.byte_length)
        return self.cls(data)


class ByteList(Sedes):
    """Byte string of any length."""

    def __init__(self, cls: Callable[[bytes], Any] = bytes):
        """Initialize the byte list type."""
        self.cls = cls

    def __repr__(self) -> str:
        """Return the representation of the type."""
        return "ByteList()"

    def is_fixed_size(self) -> bool:
        """Byte lists are variable size."""
        return False

    def encoded_length(self, value: Any) -> int:
        """Return the number of bytes."""
        return len(value)

    def encode(self, value: Any) -> bytes:
        """Byte lists are written as is."""
        return bytes(value)

    def decode(self, data: bytes) -> Any:
        """Byte lists are read as is."""
        return self.cls(data)


class SszList(Sedes):
    """
    Homogeneous list of any length.

    Fixed-size items are concatenated. Variable-size items are preceded by
    one offset per item, the first of which also tells the number of items.
    """

    def __init__(self, element: Sedes):
        """Initialize the list type."""
        self.element = element

    def __repr__(self) -> str:
        """Return the representation of the type."""
        return f"SszList({self.element!r})"

    def is_fixed_size(self) -> bool:
        """Lists are variable size."""
        return False

    def encoded_length(self, value: Sequence[Any]) -> int:
        """Return the length of the items plus their offsets."""
        if self.element.is_fixed_size():
            return len(value) * self.element.fixed_size()
        return sum(
            BYTES_PER_LENGTH_OFFSET + self.element.encoded_length(item) for item in value
        )

    def encode(self, value: Sequence[Any]) -> bytes:
        """Encode the list."""
        if self.element.is_fixed_size():
            return b"".join(self.element.encode(item) for item in value)
        encoder = SszEncoder(BYTES_PER_LENGTH_OFFSET * len(value))
        for item in value:
            encoder.append(self.element, item)
        return encoder.finalize()

    def decode(self, data: bytes) -> List[Any]:
        """Decode the list."""
        if self.element.is_fixed_size():
            item_size = self.element.fixed_size()
            if len(data) % item_size != 0:
                raise InvalidListLengthError(len(data), item_size)
            return [
                self.element.decode(data[i : i + item_size])
                for i in range(0, len(data), item_size)
            ]
        if not data:
            return []

        first_offset = read_offset(data, 0)
        if first_offset > len(data):
            raise OffsetOutOfBoundsError(first_offset, len(data))
        if first_offset == 0 or first_offset % BYTES_PER_LENGTH_OFFSET != 0:
            raise OffsetIntoFixedPortionError(first_offset)

        offsets = [first_offset]
        for position in range(BYTES_PER_LENGTH_OFFSET, first_offset, BYTES_PER_LENGTH_OFFSET):
            offset = read_offset(data, position)
            if offset > len(data):
                raise OffsetOutOfBoundsError(offset, len(data))
            if offset < offsets[-1]:
                raise OffsetsAreDecreasingError(offset)
            offsets.append(offset)
        offsets.append(len(data))
        return [self.element.decode(data[start:end]) for start, end in zip(offsets, offsets[1:])]


class Container(Sedes):
    """
    Ordered collection of named fields.

    Values are sequences holding one item per field, in declaration order.
    """

    def __init__(self, fields: Sequence[Tuple[str, Sedes]]):
        """Initialize the container type."""
        self.fields = list(fields)

    def __repr__(self) -> str:
        """Return the representation of the type."""
        return f"Container({', '.join(name for name, _ in self.fields)})"

    @property
    def field_sedes(self) -> List[Sedes]:
        """Return the type of each field."""
        return [sedes for _, sedes in self.fields]

    def is_fixed_size(self) -> bool:
        """A container is fixed size when all of its fields are."""
        return all(sedes.is_fixed_size() for sedes in self.field_sedes)

    def fixed_size(self) -> int:
        """Return the sum of the field widths."""
        if not self.is_fixed_size():
            return super().fixed_size()
        return head_size(self.field_sedes)

    def head_size(self) -> int:
        """Return the size of the fixed-size part of the encoding."""
        return head_size(self.field_sedes)

    def encoded_length(self, value: Sequence[Any]) -> int:
        """Return the head size plus the length of every variable-size field."""
        return self.head_size() + sum(
            sedes.encoded_length(item)
            for sedes, item in zip(self.field_sedes, value)
            if not sedes.is_fixed_size()
        )

    def encode(self, value: Sequence[Any]) -> bytes:
        """Encode the container."""
        if len(value) != len(self.fields):
            raise ValueError(f"expected {len(self.fields)} values, got {len(value)}")
        encoder = SszEncoder.container(self.head_size())
        for sedes, item in zip(self.field_sedes, value):
            encoder.append(sedes, item)
        return encoder.finalize()

    def decode(self, data: bytes) -> List[Any]:
        """Decode the container into one value per field."""
        builder = SszDecoderBuilder(data)
        for sedes in self.field_sedes:
            builder.register_type(sedes)
        return builder.build().decode_all()
