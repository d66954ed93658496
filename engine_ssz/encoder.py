"""
Offset-table encoder.

A container is written in two parts: the head, holding fixed-size fields
inline and a 4-byte little-endian offset for each variable-size field, and
the tail, holding the variable-size contents in declaration order. The offset
of a variable-size field is the size of the whole head plus the length of the
tail written before it.
"""

from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from .sedes import Sedes

BYTES_PER_LENGTH_OFFSET = 4
MAX_LENGTH_OFFSET = 2 ** (8 * BYTES_PER_LENGTH_OFFSET) - 1


def encode_offset(offset: int) -> bytes:
    """Encode an offset as a 4-byte little-endian unsigned integer."""
    if offset > MAX_LENGTH_OFFSET:
        raise ValueError(f"offset {offset} does not fit in {BYTES_PER_LENGTH_OFFSET} bytes")
    return offset.to_bytes(BYTES_PER_LENGTH_OFFSET, "little")


def head_size(field_sedes: Iterable["Sedes"]) -> int:
    """Return the size of the head of a container with the given field types."""
    return sum(
        sedes.fixed_size() if sedes.is_fixed_size() else BYTES_PER_LENGTH_OFFSET
        for sedes in field_sedes
    )


class SszEncoder:
    """Accumulate the fields of a container and produce its encoding."""

    def __init__(self, offset: int):
        """
        Start a container whose head is `offset` bytes long.

        The head size must be computed beforehand with `head_size`, the first
        variable-size field's contents start right after it.
        """
        self.offset = offset
        self.head = bytearray()
        self.tail = bytearray()

    @classmethod
    def container(cls, offset: int) -> "SszEncoder":
        """Create an encoder for a container with a head of `offset` bytes."""
        return cls(offset)

    def append(self, sedes: "Sedes", value: Any) -> None:
        """Append the next field of the container."""
        if sedes.is_fixed_size():
            self.head.extend(sedes.encode(value))
        else:
            self.head.extend(encode_offset(self.offset + len(self.tail)))
            self.tail.extend(sedes.encode(value))

    def finalize(self) -> bytes:
        """Return the head followed by the tail."""
        if len(self.head) != self.offset:
            raise ValueError(
                f"container head is {len(self.head)} bytes, expected {self.offset} bytes"
            )
        return bytes(self.head + self.tail)
