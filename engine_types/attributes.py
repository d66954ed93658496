"""Payload build attributes, payload identifiers and payload bodies."""

from typing import ClassVar, List

from engine_base_types import (
    Address,
    Bytes,
    Bytes8,
    CamelModel,
    EngineRootModel,
    FlatCamelModel,
    Hash,
    Uint64,
)

from .payload import Withdrawal


class PayloadId(Bytes8):
    """Identifier of a payload build process, compared and hashed as opaque bytes."""

    pass


class PayloadAttributes(FlatCamelModel):
    """Represents the attributes of a payload."""

    omit_if_none: ClassVar[frozenset[str]] = frozenset(
        {"withdrawals", "parent_beacon_block_root"}
    )

    timestamp: Uint64
    prev_randao: Hash
    suggested_fee_recipient: Address
    withdrawals: List[Withdrawal] | None = None
    parent_beacon_block_root: Hash | None = None


class ExecutionPayloadBodyV1(CamelModel):
    """
    Transactions and withdrawals of a block, as returned by
    `engine_getPayloadBodiesByHashV1`.

    `withdrawals` is null for blocks that predate withdrawals.
    """

    transactions: List[Bytes]
    withdrawals: List[Withdrawal] | None = None


class ExecutionPayloadBodiesV1(EngineRootModel):
    """Bodies of the requested blocks, null for the blocks that are unknown."""

    root: List[ExecutionPayloadBodyV1 | None]

    def __len__(self) -> int:
        """Return the number of requested blocks."""
        return len(self.root)

    def __getitem__(self, index: int) -> ExecutionPayloadBodyV1 | None:
        """Return the body at the given index."""
        return self.root[index]
