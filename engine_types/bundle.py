"""Blobs bundle returned alongside a payload by `engine_getPayloadV3` and later."""

from typing import Any, Iterable, List, Self, Tuple

from pydantic import ValidationError, model_validator

from engine_base_types import Bytes48, CamelModel, FixedSizeBytes, Hash
from engine_config import get_config
from engine_logging import get_logger
from engine_ssz import (
    BYTES_PER_LENGTH_OFFSET,
    ByteVector,
    BytesInvalidError,
    InvalidListLengthError,
    OffsetIntoFixedPortionError,
    OffsetOutOfBoundsError,
    OffsetsAreDecreasingError,
    OffsetSkipsVariableBytesError,
    Sedes,
    SszDecoder,
    SszList,
    encode_offset,
    read_offset,
)

from .ssz import BYTES48, SszContainerMixin

logger = get_logger(__name__)


class Blob(FixedSizeBytes[get_config().codec.bytes_per_blob]):  # type: ignore
    """Blob data, `bytes_per_blob` bytes long."""

    pass


BLOB = ByteVector(Blob.byte_length, Blob)
COMMITMENTS = SszList(BYTES48)
PROOFS = SszList(BYTES48)
BLOBS = SszList(BLOB)


class BlobTransactionSidecar(CamelModel):
    """The blobs, commitments and proofs of a single blob transaction."""

    blobs: List[Blob]
    commitments: List[Bytes48]
    proofs: List[Bytes48]


class BlobsBundleV1(CamelModel, SszContainerMixin):
    """
    Commitments, proofs and blobs of a payload.

    The three lists are index aligned: the commitment and the proof at
    position i belong to the blob at position i, so they always have the
    same length.
    """

    commitments: List[Bytes48]
    proofs: List[Bytes48]
    blobs: List[Blob]

    @model_validator(mode="after")
    def check_lengths(self) -> Self:
        """Reject bundles whose lists have different lengths."""
        if not len(self.commitments) == len(self.proofs) == len(self.blobs):
            raise ValueError(
                f"bundle lists differ in length: {len(self.commitments)} commitments, "
                f"{len(self.proofs)} proofs, {len(self.blobs)} blobs"
            )
        return self

    @classmethod
    def from_sidecars(cls, sidecars: Iterable[BlobTransactionSidecar]) -> Self:
        """Concatenate the sidecars, keeping their order."""
        commitments: List[Bytes48] = []
        proofs: List[Bytes48] = []
        blobs: List[Blob] = []
        for sidecar in sidecars:
            commitments.extend(sidecar.commitments)
            proofs.extend(sidecar.proofs)
            blobs.extend(sidecar.blobs)
        return cls(commitments=commitments, proofs=proofs, blobs=blobs)

    def take(self, n: int) -> Tuple[List[Bytes48], List[Bytes48], List[Blob]]:
        """
        Remove the first `n` commitments, proofs and blobs and return them.

        Callers must check the length of the bundle first: asking for more
        items than the bundle holds raises `IndexError` and leaves the bundle
        untouched.
        """
        available = min(len(self.commitments), len(self.proofs), len(self.blobs))
        if n < 0 or n > available:
            raise IndexError(f"cannot take {n} items from a bundle of {available}")

        commitments = self.commitments[:n]
        proofs = self.proofs[:n]
        blobs = self.blobs[:n]
        del self.commitments[:n]
        del self.proofs[:n]
        del self.blobs[:n]
        logger.verbose("Took %d blobs from bundle, %d left", n, len(self.blobs))
        return commitments, proofs, blobs

    def pop_sidecar(self, n: int) -> BlobTransactionSidecar:
        """Remove the first `n` blobs and return them as a sidecar."""
        commitments, proofs, blobs = self.take(n)
        return BlobTransactionSidecar(blobs=blobs, commitments=commitments, proofs=proofs)

    def blob_versioned_hashes(self, versioned_hash_version: int | None = None) -> List[Hash]:
        """Return the versioned hash of each commitment."""
        if versioned_hash_version is None:
            versioned_hash_version = get_config().codec.versioned_hash_version
        versioned_hashes: List[Hash] = []
        for commitment in self.commitments:
            commitment_hash = commitment.sha256()
            versioned_hash = Hash(bytes([versioned_hash_version]) + commitment_hash[1:])
            versioned_hashes.append(versioned_hash)
        return versioned_hashes

    @classmethod
    def ssz_fields(cls) -> List[Tuple[str, Sedes]]:
        """Return the wire fields of the bundle."""
        return [("commitments", COMMITMENTS), ("proofs", PROOFS), ("blobs", BLOBS)]

    def ssz_values(self) -> List[Any]:
        """Return the wire values of the bundle."""
        return [self.commitments, self.proofs, self.blobs]

    @classmethod
    def from_ssz_decoder(cls, decoder: SszDecoder) -> Self:
        """Build the bundle from the decoder."""
        return cls(
            commitments=decoder.decode_next(),
            proofs=decoder.decode_next(),
            blobs=decoder.decode_next(),
        )

    def to_ssz_specialized(self) -> bytes:
        """
        Encode the bundle without going through the generic container encoder.

        The three lists hold fixed-size items only, so the encoding is three
        offsets followed by the concatenated items of each list. The result is
        identical to `to_ssz`.
        """
        commitments = b"".join(self.commitments)
        proofs = b"".join(self.proofs)
        blobs = b"".join(self.blobs)
        head = 3 * BYTES_PER_LENGTH_OFFSET
        return b"".join(
            [
                encode_offset(head),
                encode_offset(head + len(commitments)),
                encode_offset(head + len(commitments) + len(proofs)),
                commitments,
                proofs,
                blobs,
            ]
        )

    @classmethod
    def from_ssz_specialized(cls, data: bytes) -> Self:
        """Decode a bundle encoded by `to_ssz_specialized` or `to_ssz`."""
        head = 3 * BYTES_PER_LENGTH_OFFSET
        offsets = [read_offset(data, i * BYTES_PER_LENGTH_OFFSET) for i in range(3)]
        for field_index, offset in enumerate(offsets):
            if offset > len(data):
                raise OffsetOutOfBoundsError(offset, len(data), field_index)
            if field_index > 0 and offset < offsets[field_index - 1]:
                raise OffsetsAreDecreasingError(offset, field_index)
        if offsets[0] < head:
            raise OffsetIntoFixedPortionError(offsets[0], 0)
        if offsets[0] > head:
            raise OffsetSkipsVariableBytesError(offsets[0], 0)

        bounds = offsets + [len(data)]
        item_sizes = [BYTES48.fixed_size(), BYTES48.fixed_size(), BLOB.fixed_size()]
        item_types = [Bytes48, Bytes48, Blob]
        lists: List[List[Any]] = []
        for field_index, (start, end, size, item_type) in enumerate(
            zip(bounds, bounds[1:], item_sizes, item_types)
        ):
            if (end - start) % size != 0:
                raise InvalidListLengthError(end - start, size, field_index)
            lists.append([item_type(data[i : i + size]) for i in range(start, end, size)])

        try:
            return cls(commitments=lists[0], proofs=lists[1], blobs=lists[2])
        except ValidationError as e:
            raise BytesInvalidError(f"invalid {cls.__name__}: {e}") from e
