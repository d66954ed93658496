"""
Payload values shared by the tests.
"""

from typing import Any

from engine_base_types import Address, Bloom, Bytes, Bytes8, Hash

from ..payload import (
    ExecutionPayloadV1,
    ExecutionPayloadV2,
    ExecutionPayloadV3,
    ExecutionPayloadV4,
    Withdrawal,
)

V1_KEYS = [
    "parentHash",
    "feeRecipient",
    "stateRoot",
    "receiptsRoot",
    "logsBloom",
    "prevRandao",
    "blockNumber",
    "gasLimit",
    "gasUsed",
    "timestamp",
    "extraData",
    "baseFeePerGas",
    "blockHash",
    "transactions",
    "difficulty",
    "nonce",
]


def payload_v1(**kwargs: Any) -> ExecutionPayloadV1:
    """Return a V1 payload, with `kwargs` overriding the default field values."""
    fields: dict[str, Any] = {
        "parent_hash": Hash(1),
        "fee_recipient": Address(2),
        "state_root": Hash(3),
        "receipts_root": Hash(4),
        "logs_bloom": Bloom(5),
        "prev_randao": Hash(6),
        "block_number": 1,
        "gas_limit": 0x2FEFD8,
        "gas_used": 0x5208,
        "timestamp": 0x65,
        "extra_data": Bytes(b"\x42"),
        "base_fee_per_gas": 7,
        "block_hash": Hash(8),
        "transactions": [Bytes(b"\x02\xf8\x6f")],
        "difficulty": 0,
        "nonce": Bytes8(0),
    }
    return ExecutionPayloadV1(**(fields | kwargs))


def withdrawal(index: int) -> Withdrawal:
    """Return a withdrawal whose fields are derived from `index`."""
    return Withdrawal(
        index=index,
        validator_index=index + 10,
        address=Address(index + 100),
        amount=index + 1000,
    )


def payload_v2(**kwargs: Any) -> ExecutionPayloadV2:
    """Return a V2 payload with two withdrawals."""
    return ExecutionPayloadV2(
        payload_inner=payload_v1(**kwargs), withdrawals=[withdrawal(0), withdrawal(1)]
    )


def payload_v3(**kwargs: Any) -> ExecutionPayloadV3:
    """Return a V3 payload."""
    return ExecutionPayloadV3(
        payload_inner=payload_v2(**kwargs), blob_gas_used=0x20000, excess_blob_gas=0
    )


def payload_v4(**kwargs: Any) -> ExecutionPayloadV4:
    """Return a V4 payload with one execution request."""
    return ExecutionPayloadV4(
        payload_inner=payload_v3(**kwargs), execution_requests=[Bytes(b"\x00\x01")]
    )
