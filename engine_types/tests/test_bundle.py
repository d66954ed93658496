"""
Test the blobs bundle.
"""

from hashlib import sha256
from typing import List

import pytest
from pydantic import ValidationError

from engine_base_types import Bytes48, Hash, to_json
from engine_logging import VERBOSE_LEVEL
from engine_ssz import (
    BytesInvalidError,
    InvalidByteLengthError,
    InvalidListLengthError,
    OffsetsAreDecreasingError,
)

from ..bundle import Blob, BlobsBundleV1, BlobTransactionSidecar


def bundle(size: int, start: int = 0) -> BlobsBundleV1:
    """Return a bundle of `size` blobs whose items are numbered from `start`."""
    items = range(start, start + size)
    return BlobsBundleV1(
        commitments=[Bytes48(i + 1000) for i in items],
        proofs=[Bytes48(i + 2000) for i in items],
        blobs=[Blob(i) for i in items],
    )


def test_blob_size():
    """
    Test that blobs have the configured size.
    """
    assert Blob.byte_length == 131_072
    assert len(Blob(1)) == 131_072


@pytest.mark.parametrize("n", [0, 1, 2, 3])
def test_take(n: int):
    """
    Test that `take` drains the first items of the three lists in lock step.
    """
    value = bundle(3)
    commitments, proofs, blobs = value.take(n)
    assert len(commitments) == len(proofs) == len(blobs) == n
    assert len(value.commitments) == len(value.proofs) == len(value.blobs) == 3 - n
    assert commitments == [Bytes48(i + 1000) for i in range(n)]
    assert proofs == [Bytes48(i + 2000) for i in range(n)]
    assert blobs == [Blob(i) for i in range(n)]
    assert value == bundle(3 - n, start=n)


@pytest.mark.parametrize("n", [4, 100, -1])
def test_take_too_many(n: int):
    """
    Test that taking more items than available raises without touching the bundle.
    """
    value = bundle(3)
    with pytest.raises(IndexError):
        value.take(n)
    assert value == bundle(3)


def test_consecutive_takes():
    """
    Test that consecutive takes return consecutive slices.
    """
    value = bundle(5)
    assert value.take(2)[0] == [Bytes48(1000), Bytes48(1001)]
    assert value.take(2)[0] == [Bytes48(1002), Bytes48(1003)]
    with pytest.raises(IndexError):
        value.take(2)
    assert value.take(1)[2] == [Blob(4)]
    assert value.take(0) == ([], [], [])


def test_pop_sidecar():
    """
    Test that `pop_sidecar` wraps the taken items into a sidecar.
    """
    value = bundle(2)
    sidecar = value.pop_sidecar(1)
    assert sidecar == BlobTransactionSidecar(
        blobs=[Blob(0)], commitments=[Bytes48(1000)], proofs=[Bytes48(2000)]
    )
    assert value == bundle(1, start=1)


def test_from_sidecars():
    """
    Test that sidecars are concatenated in order.
    """
    sidecars: List[BlobTransactionSidecar] = [
        BlobTransactionSidecar(
            blobs=[Blob(0), Blob(1)],
            commitments=[Bytes48(1000), Bytes48(1001)],
            proofs=[Bytes48(2000), Bytes48(2001)],
        ),
        BlobTransactionSidecar(blobs=[], commitments=[], proofs=[]),
        BlobTransactionSidecar(
            blobs=[Blob(2)], commitments=[Bytes48(1002)], proofs=[Bytes48(2002)]
        ),
    ]
    assert BlobsBundleV1.from_sidecars(sidecars) == bundle(3)
    assert BlobsBundleV1.from_sidecars([]) == bundle(0)


def test_unequal_lengths_are_rejected():
    """
    Test that the three lists must have the same length.
    """
    with pytest.raises(ValidationError):
        BlobsBundleV1(commitments=[Bytes48(0)], proofs=[], blobs=[Blob(0)])


def test_json():
    """
    Test the JSON keys of the bundle.
    """
    document = to_json(bundle(1))
    assert list(document) == ["commitments", "proofs", "blobs"]
    assert document["commitments"] == [Bytes48(1000).hex()]
    assert len(document["blobs"][0]) == 2 + 2 * 131_072
    assert BlobsBundleV1(**document) == bundle(1)


def test_json_rejects_short_blob():
    """
    Test that blobs of the wrong size are rejected.
    """
    document = to_json(bundle(1))
    document["blobs"] = ["0x00"]
    with pytest.raises(ValidationError):
        BlobsBundleV1.model_validate(document)


@pytest.mark.parametrize("size", [0, 1, 3])
def test_specialized_encoding_matches_generic(size: int):
    """
    Test that the hand-written encoder produces the same bytes as the generic one.
    """
    value = bundle(size)
    encoded = value.to_ssz()
    assert value.to_ssz_specialized() == encoded
    assert len(encoded) == value.ssz_bytes_len()
    assert len(encoded) == 12 + size * (48 + 48 + 131_072)
    assert BlobsBundleV1.from_ssz(encoded) == value
    assert BlobsBundleV1.from_ssz_specialized(encoded) == value


def test_empty_bundle_encoding():
    """
    Test that an empty bundle is three offsets pointing at the end of the head.
    """
    assert bundle(0).to_ssz() == (12).to_bytes(4, "little") * 3


@pytest.mark.parametrize("decode", ["from_ssz", "from_ssz_specialized"])
class TestBundleDecodingErrors:
    """
    Test that both decoders reject the same malformed buffers.
    """

    def test_truncated_head(self, decode: str):
        """
        Test a buffer shorter than the offsets.
        """
        with pytest.raises(InvalidByteLengthError):
            getattr(BlobsBundleV1, decode)(b"\x0c\x00")

    def test_partial_commitment(self, decode: str):
        """
        Test a commitments list that is not a whole number of commitments.
        """
        data = (12).to_bytes(4, "little") + (13).to_bytes(4, "little") * 2 + b"\x00"
        with pytest.raises(InvalidListLengthError) as exc_info:
            getattr(BlobsBundleV1, decode)(data)
        assert exc_info.value.field_index == 0

    def test_decreasing_offsets(self, decode: str):
        """
        Test offsets that go backwards.
        """
        data = (12).to_bytes(4, "little") + (60).to_bytes(4, "little")
        data += (12).to_bytes(4, "little") + b"\x00" * 48
        with pytest.raises(OffsetsAreDecreasingError) as exc_info:
            getattr(BlobsBundleV1, decode)(data)
        assert exc_info.value.field_index == 2

    def test_unequal_lengths(self, decode: str):
        """
        Test a well formed buffer whose lists have different lengths.
        """
        value = bundle(1)
        data = (12).to_bytes(4, "little") + (60).to_bytes(4, "little") * 2
        data += bytes(value.commitments[0])
        with pytest.raises(BytesInvalidError):
            getattr(BlobsBundleV1, decode)(data)


def test_blob_versioned_hashes():
    """
    Test that the versioned hash is the commitment hash with its first byte replaced.
    """
    value = bundle(2)
    hashes = value.blob_versioned_hashes()
    assert len(hashes) == 2
    for commitment, versioned_hash in zip(value.commitments, hashes):
        assert versioned_hash == Hash(b"\x01" + sha256(commitment).digest()[1:])
    assert value.blob_versioned_hashes(2)[0][0] == 2


def test_take_is_logged(caplog: pytest.LogCaptureFixture):
    """
    Test that draining the bundle is logged at the verbose level.
    """
    with caplog.at_level(VERBOSE_LEVEL, logger="engine_types.bundle"):
        bundle(3).take(2)
    assert [r.getMessage() for r in caplog.records if r.name == "engine_types.bundle"] == [
        "Took 2 blobs from bundle, 1 left"
    ]
