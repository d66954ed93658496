"""
Test the binary encoding of the payload types.
"""

from typing import Any

import pytest

from engine_base_types import Address, Bytes
from engine_ssz import (
    InvalidByteLengthError,
    InvalidListLengthError,
    OffsetOutOfBoundsError,
    OffsetSkipsVariableBytesError,
)

from ..payload import (
    ExecutionPayload,
    ExecutionPayloadV1,
    ExecutionPayloadV2,
    ExecutionPayloadV3,
    Withdrawal,
)
from .helpers import payload_v1, payload_v2, payload_v3, withdrawal


@pytest.mark.parametrize(
    "model_type, head_size",
    [
        (ExecutionPayloadV1, 548),
        (ExecutionPayloadV2, 552),
        (ExecutionPayloadV3, 568),
        (Withdrawal, 44),
    ],
)
def test_head_size(model_type: Any, head_size: int):
    """
    Test the size of the fixed-size part of each encoding.
    """
    assert model_type.ssz_head_size() == head_size


@pytest.mark.parametrize(
    "payload",
    [
        pytest.param(payload_v1(), id="v1"),
        pytest.param(payload_v1(transactions=[], extra_data=Bytes(b"")), id="v1_empty"),
        pytest.param(
            payload_v1(transactions=[Bytes(b""), Bytes(b"\x01" * 300), Bytes(b"\x02")]),
            id="v1_many_transactions",
        ),
        pytest.param(payload_v2(), id="v2"),
        pytest.param(
            ExecutionPayloadV2(payload_inner=payload_v1(), withdrawals=[]),
            id="v2_no_withdrawals",
        ),
        pytest.param(payload_v3(), id="v3"),
        pytest.param(withdrawal(7), id="withdrawal"),
    ],
)
def test_round_trip(payload: Any):
    """
    Test that decoding the encoding gives the value back and that its length is predicted.
    """
    encoded = payload.to_ssz()
    assert len(encoded) == payload.ssz_bytes_len()
    assert type(payload).from_ssz(encoded) == payload


def test_v1_layout():
    """
    Test the position of the variable-size fields of a V1 payload.
    """
    encoded = payload_v1().to_ssz()
    extra_data_offset = int.from_bytes(encoded[436:440], "little")
    transactions_offset = int.from_bytes(encoded[504:508], "little")
    assert extra_data_offset == 548
    assert encoded[548:549] == b"\x42"
    assert transactions_offset == 549
    assert encoded[549:553] == (4).to_bytes(4, "little")
    assert encoded[553:] == b"\x02\xf8\x6f"
    assert encoded[440:472] == (7).to_bytes(32, "little")


def test_embedded_fields_come_first():
    """
    Test that the V2 and V3 encodings start with the fixed-size V1 fields.
    """
    v1 = payload_v1().to_ssz()
    v2 = payload_v2().to_ssz()
    v3 = payload_v3().to_ssz()
    assert v2[:436] == v1[:436]
    assert v3[:436] == v1[:436]
    assert v3[552:568] == (0x20000).to_bytes(8, "little") + (0).to_bytes(8, "little")


def test_withdrawal_encoding():
    """
    Test the fixed-size encoding of a withdrawal.
    """
    value = Withdrawal(index=1, validator_index=2, address=Address(3), amount=4)
    assert value.to_ssz() == (
        (1).to_bytes(8, "little")
        + (2).to_bytes(8, "little")
        + bytes(Address(3))
        + (4).to_bytes(8, "little")
    )


def test_polymorphic_encoding():
    """
    Test that the polymorphic payload encodes like its active version.
    """
    assert ExecutionPayload(payload_v3()).to_ssz() == payload_v3().to_ssz()
    assert ExecutionPayload(payload_v1()).ssz_bytes_len() == payload_v1().ssz_bytes_len()


def test_offsets_are_within_bounds():
    """
    Test that the variable-size fields of a V3 payload are laid out in order.
    """
    encoded = payload_v3().to_ssz()
    offsets = [
        int.from_bytes(encoded[position : position + 4], "little") for position in (436, 504, 548)
    ]
    assert offsets[0] == ExecutionPayloadV3.ssz_head_size()
    assert offsets == sorted(offsets)
    assert offsets[-1] <= len(encoded)


@pytest.mark.parametrize(
    "model_type, data, error, field_index",
    [
        pytest.param(
            ExecutionPayloadV1,
            payload_v1().to_ssz()[:430],
            InvalidByteLengthError,
            9,
            id="truncated_v1",
        ),
        pytest.param(
            ExecutionPayloadV1,
            payload_v2().to_ssz(),
            OffsetSkipsVariableBytesError,
            10,
            id="v2_bytes_as_v1",
        ),
        pytest.param(
            ExecutionPayloadV2,
            payload_v1().to_ssz(),
            OffsetOutOfBoundsError,
            16,
            id="v1_bytes_as_v2",
        ),
        pytest.param(
            ExecutionPayloadV2,
            payload_v2().to_ssz() + b"\x00",
            InvalidListLengthError,
            16,
            id="partial_withdrawal",
        ),
        pytest.param(
            Withdrawal, withdrawal(1).to_ssz()[:43], InvalidByteLengthError, 3, id="short"
        ),
    ],
)
def test_decoding_errors(model_type: Any, data: bytes, error: Any, field_index: int):
    """
    Test that malformed buffers are rejected with the position of the offending field.
    """
    with pytest.raises(error) as exc_info:
        model_type.from_ssz(data)
    assert exc_info.value.field_index == field_index
