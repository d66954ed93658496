"""
Binary codec bindings of the engine API models.

A model taking part in the offset-table codec lists its wire fields with
`ssz_fields`, returns their values with `ssz_values` and rebuilds itself from
an `SszDecoder` with `from_ssz_decoder`. A model embedding another one lists
the embedded model's fields first and forwards to it for the values and for
the decoding, so the embedded fields are laid out as if they belonged to the
embedding model.
"""

from typing import Any, List, Self, Tuple, Type

from pydantic import ValidationError

from engine_base_types import Address, Bloom, Bytes, Bytes8, Bytes48, Hash, Uint64, Uint256
from engine_logging import get_logger
from engine_ssz import (
    ByteList,
    ByteVector,
    BytesInvalidError,
    DecodeError,
    Sedes,
    SszDecoder,
    SszDecoderBuilder,
    SszEncoder,
    SszList,
    Uint,
    head_size,
)

logger = get_logger(__name__)

U64 = Uint(8, Uint64)
U256 = Uint(32, Uint256)
HASH = ByteVector(32, Hash)
ADDRESS = ByteVector(20, Address)
BLOOM = ByteVector(256, Bloom)
BYTES8 = ByteVector(8, Bytes8)
BYTES48 = ByteVector(48, Bytes48)
BYTES = ByteList(Bytes)
BYTES_LIST = SszList(BYTES)


class SszContainerMixin:
    """Offset-table codec of a model encoded as a container."""

    @classmethod
    def ssz_fields(cls) -> List[Tuple[str, Sedes]]:
        """Return the name and the wire type of each field, in wire order."""
        raise NotImplementedError(f"{cls.__name__} does not define its wire fields")

    def ssz_values(self) -> List[Any]:
        """Return the value of each wire field, in wire order."""
        raise NotImplementedError(f"{self.__class__.__name__} does not define its wire values")

    @classmethod
    def from_ssz_decoder(cls, decoder: SszDecoder) -> Self:
        """Build the model from the next fields of `decoder`."""
        raise NotImplementedError(f"{cls.__name__} can not be decoded")

    @classmethod
    def ssz_head_size(cls) -> int:
        """Return the size of the fixed-size part of the encoding."""
        return head_size(sedes for _, sedes in cls.ssz_fields())

    @classmethod
    def ssz_is_fixed_size(cls) -> bool:
        """Return whether every instance encodes to the same length."""
        return all(sedes.is_fixed_size() for _, sedes in cls.ssz_fields())

    def ssz_bytes_len(self) -> int:
        """Return the length of the encoding."""
        return self.ssz_head_size() + sum(
            sedes.encoded_length(value)
            for (_, sedes), value in zip(self.ssz_fields(), self.ssz_values())
            if not sedes.is_fixed_size()
        )

    def to_ssz(self) -> bytes:
        """Encode the model."""
        encoder = SszEncoder.container(self.ssz_head_size())
        for (_, sedes), value in zip(self.ssz_fields(), self.ssz_values()):
            encoder.append(sedes, value)
        return encoder.finalize()

    @classmethod
    def from_ssz(cls, data: bytes) -> Self:
        """Decode the model, raising a `DecodeError` on malformed input."""
        builder = SszDecoderBuilder(data)
        try:
            for _, sedes in cls.ssz_fields():
                builder.register_type(sedes)
            return cls.from_ssz_decoder(builder.build())
        except ValidationError as e:
            logger.debug("Decoded %s fields are invalid: %s", cls.__name__, e)
            raise BytesInvalidError(f"invalid {cls.__name__}: {e}") from e
        except DecodeError as e:
            logger.debug("Unable to decode %s from %d bytes: %s", cls.__name__, len(data), e)
            raise


class ModelSedes(Sedes):
    """Wire type of a model implementing `SszContainerMixin`, used as a list item."""

    def __init__(self, model: Type[SszContainerMixin]):
        """Initialize the wire type of `model`."""
        self.model = model

    def __repr__(self) -> str:
        """Return the representation of the type."""
        return f"ModelSedes({self.model.__name__})"

    def is_fixed_size(self) -> bool:
        """Return whether the model is fixed size."""
        return self.model.ssz_is_fixed_size()

    def fixed_size(self) -> int:
        """Return the encoded length of a fixed-size model."""
        if not self.is_fixed_size():
            return super().fixed_size()
        return self.model.ssz_head_size()

    def encoded_length(self, value: Any) -> int:
        """Return the length of the encoding of the model."""
        return value.ssz_bytes_len()

    def encode(self, value: Any) -> bytes:
        """Encode the model."""
        return value.to_ssz()

    def decode(self, data: bytes) -> Any:
        """Decode the model."""
        return self.model.from_ssz(data)
