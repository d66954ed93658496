"""
Execution payload records exchanged over the engine API.

Every version holds the previous one in `payload_inner` and adds its own
fields after it, both in the JSON documents (where the inner record's keys
are written inline, see `FlatCamelModel`) and in the binary encoding (where
the inner record's fields come first, see `SszContainerMixin`).
"""

from typing import Any, ClassVar, List, NamedTuple, Self, Tuple, Type

from pydantic import ConfigDict, Field, ValidationError, ValidationInfo, model_validator
from pydantic_core import to_json

from engine_base_types import (
    Address,
    Bloom,
    Bytes,
    Bytes8,
    CamelModel,
    EngineRootModel,
    FlatCamelModel,
    Hash,
    Uint64,
    Uint256,
)
from engine_logging import get_logger
from engine_ssz import BYTES_PER_LENGTH_OFFSET, Sedes, SszDecoder, SszList

from .ssz import (
    ADDRESS,
    BLOOM,
    BYTES,
    BYTES8,
    BYTES_LIST,
    HASH,
    U64,
    U256,
    ModelSedes,
    SszContainerMixin,
)

logger = get_logger(__name__)


class BlockNumHash(NamedTuple):
    """Block number and block hash pair."""

    number: int
    hash: Hash


class Withdrawal(CamelModel, SszContainerMixin):
    """Validator withdrawal included in a payload."""

    index: Uint64
    validator_index: Uint64
    address: Address
    amount: Uint64

    @classmethod
    def ssz_fields(cls) -> List[Tuple[str, Sedes]]:
        """Return the wire fields of the withdrawal."""
        return [
            ("index", U64),
            ("validator_index", U64),
            ("address", ADDRESS),
            ("amount", U64),
        ]

    def ssz_values(self) -> List[Any]:
        """Return the wire values of the withdrawal."""
        return [self.index, self.validator_index, self.address, self.amount]

    @classmethod
    def from_ssz_decoder(cls, decoder: SszDecoder) -> Self:
        """Build the withdrawal from the decoder."""
        return cls(
            index=decoder.decode_next(),
            validator_index=decoder.decode_next(),
            address=decoder.decode_next(),
            amount=decoder.decode_next(),
        )


WITHDRAWALS = SszList(ModelSedes(Withdrawal))


class PayloadProjectionsMixin:
    """Projections shared by every record embedding an `ExecutionPayloadV1`."""

    def as_v1(self) -> "ExecutionPayloadV1":
        """Return the embedded `ExecutionPayloadV1`."""
        raise NotImplementedError

    @property
    def timestamp(self) -> Uint64:
        """Return the payload timestamp."""
        return self.as_v1().timestamp

    @property
    def parent_hash(self) -> Hash:
        """Return the parent block hash."""
        return self.as_v1().parent_hash

    @property
    def block_hash(self) -> Hash:
        """Return the block hash."""
        return self.as_v1().block_hash

    @property
    def block_number(self) -> Uint64:
        """Return the block number."""
        return self.as_v1().block_number

    @property
    def prev_randao(self) -> Hash:
        """Return the previous randao value."""
        return self.as_v1().prev_randao

    def block_num_hash(self) -> BlockNumHash:
        """Return the block number and hash."""
        return self.as_v1().block_num_hash()


class ExecutionPayloadV1(FlatCamelModel, SszContainerMixin):
    """
    The first version of the execution payload.

    `difficulty` and `nonce` are chain-specific additions that documents of
    the upstream engine API do not carry: they default to zero when missing
    and are always written out. A document without them is therefore read
    as if both keys held zero, and re-encoding it adds the two keys.
    `block_hash` is carried as is, it is never recomputed from the other
    fields.

    Unknown keys are ignored, which lets documents of later versions be read
    as a V1 payload.
    """

    parent_hash: Hash
    fee_recipient: Address
    state_root: Hash
    receipts_root: Hash
    logs_bloom: Bloom
    prev_randao: Hash
    block_number: Uint64
    gas_limit: Uint64
    gas_used: Uint64
    timestamp: Uint64
    extra_data: Bytes
    base_fee_per_gas: Uint256
    block_hash: Hash
    transactions: List[Bytes]
    difficulty: Uint256 = Field(Uint256(0))
    nonce: Bytes8 = Field(Bytes8(0))

    def block_num_hash(self) -> BlockNumHash:
        """Return the block number and hash."""
        return BlockNumHash(self.block_number, self.block_hash)

    @classmethod
    def ssz_fields(cls) -> List[Tuple[str, Sedes]]:
        """Return the wire fields of the payload."""
        return [
            ("parent_hash", HASH),
            ("fee_recipient", ADDRESS),
            ("state_root", HASH),
            ("receipts_root", HASH),
            ("logs_bloom", BLOOM),
            ("prev_randao", HASH),
            ("block_number", U64),
            ("gas_limit", U64),
            ("gas_used", U64),
            ("timestamp", U64),
            ("extra_data", BYTES),
            ("base_fee_per_gas", U256),
            ("block_hash", HASH),
            ("transactions", BYTES_LIST),
            ("difficulty", U256),
            ("nonce", BYTES8),
        ]

    def ssz_values(self) -> List[Any]:
        """Return the wire values of the payload."""
        return [getattr(self, name) for name, _ in self.ssz_fields()]

    @classmethod
    def from_ssz_decoder(cls, decoder: SszDecoder) -> Self:
        """Build the payload from the decoder."""
        return cls(
            parent_hash=decoder.decode_next(),
            fee_recipient=decoder.decode_next(),
            state_root=decoder.decode_next(),
            receipts_root=decoder.decode_next(),
            logs_bloom=decoder.decode_next(),
            prev_randao=decoder.decode_next(),
            block_number=decoder.decode_next(),
            gas_limit=decoder.decode_next(),
            gas_used=decoder.decode_next(),
            timestamp=decoder.decode_next(),
            extra_data=decoder.decode_next(),
            base_fee_per_gas=decoder.decode_next(),
            block_hash=decoder.decode_next(),
            transactions=decoder.decode_next(),
            difficulty=decoder.decode_next(),
            nonce=decoder.decode_next(),
        )

    def ssz_bytes_len(self) -> int:
        """Return the length of the encoding."""
        return (
            self.ssz_head_size()
            + BYTES.encoded_length(self.extra_data)
            + BYTES_LIST.encoded_length(self.transactions)
        )


class ExecutionPayloadV2(PayloadProjectionsMixin, FlatCamelModel, SszContainerMixin):
    """The V1 payload followed by the withdrawals of the block."""

    model_config = ConfigDict(extra="forbid")

    embedded_field: ClassVar[str | None] = "payload_inner"

    payload_inner: ExecutionPayloadV1
    withdrawals: List[Withdrawal]

    def as_v1(self) -> ExecutionPayloadV1:
        """Return the embedded `ExecutionPayloadV1`."""
        return self.payload_inner

    @classmethod
    def ssz_fields(cls) -> List[Tuple[str, Sedes]]:
        """Return the V1 wire fields followed by the withdrawals."""
        return ExecutionPayloadV1.ssz_fields() + [("withdrawals", WITHDRAWALS)]

    def ssz_values(self) -> List[Any]:
        """Return the V1 wire values followed by the withdrawals."""
        return self.payload_inner.ssz_values() + [self.withdrawals]

    @classmethod
    def from_ssz_decoder(cls, decoder: SszDecoder) -> Self:
        """Build the payload from the decoder."""
        return cls(
            payload_inner=ExecutionPayloadV1.from_ssz_decoder(decoder),
            withdrawals=decoder.decode_next(),
        )

    def ssz_bytes_len(self) -> int:
        """Return the V1 length plus the withdrawals offset and contents."""
        return (
            self.payload_inner.ssz_bytes_len()
            + BYTES_PER_LENGTH_OFFSET
            + WITHDRAWALS.encoded_length(self.withdrawals)
        )


class ExecutionPayloadV3(PayloadProjectionsMixin, FlatCamelModel, SszContainerMixin):
    """
    The V2 payload followed by the blob gas fields.

    Unknown keys are rejected anywhere in the document, so neither an older
    nor a newer payload shape is accepted by mistake.
    """

    model_config = ConfigDict(extra="forbid")

    embedded_field: ClassVar[str | None] = "payload_inner"

    payload_inner: ExecutionPayloadV2
    blob_gas_used: Uint64
    excess_blob_gas: Uint64

    def as_v1(self) -> ExecutionPayloadV1:
        """Return the embedded `ExecutionPayloadV1`."""
        return self.payload_inner.payload_inner

    def as_v2(self) -> ExecutionPayloadV2:
        """Return the embedded `ExecutionPayloadV2`."""
        return self.payload_inner

    @property
    def withdrawals(self) -> List[Withdrawal]:
        """Return the withdrawals of the payload."""
        return self.payload_inner.withdrawals

    @classmethod
    def ssz_fields(cls) -> List[Tuple[str, Sedes]]:
        """Return the V2 wire fields followed by the blob gas fields."""
        return ExecutionPayloadV2.ssz_fields() + [
            ("blob_gas_used", U64),
            ("excess_blob_gas", U64),
        ]

    def ssz_values(self) -> List[Any]:
        """Return the V2 wire values followed by the blob gas fields."""
        return self.payload_inner.ssz_values() + [self.blob_gas_used, self.excess_blob_gas]

    @classmethod
    def from_ssz_decoder(cls, decoder: SszDecoder) -> Self:
        """Build the payload from the decoder."""
        return cls(
            payload_inner=ExecutionPayloadV2.from_ssz_decoder(decoder),
            blob_gas_used=decoder.decode_next(),
            excess_blob_gas=decoder.decode_next(),
        )

    def ssz_bytes_len(self) -> int:
        """Return the V2 length plus the two blob gas fields."""
        return self.payload_inner.ssz_bytes_len() + 2 * U64.fixed_size()


class ExecutionPayloadV4(PayloadProjectionsMixin, FlatCamelModel):
    """
    The V3 payload followed by the execution layer requests.

    Only the JSON encoding is defined for this version.
    """

    model_config = ConfigDict(extra="forbid")

    embedded_field: ClassVar[str | None] = "payload_inner"

    payload_inner: ExecutionPayloadV3
    execution_requests: List[Bytes]

    def as_v1(self) -> ExecutionPayloadV1:
        """Return the embedded `ExecutionPayloadV1`."""
        return self.payload_inner.as_v1()

    def as_v2(self) -> ExecutionPayloadV2:
        """Return the embedded `ExecutionPayloadV2`."""
        return self.payload_inner.payload_inner

    def as_v3(self) -> ExecutionPayloadV3:
        """Return the embedded `ExecutionPayloadV3`."""
        return self.payload_inner

    @property
    def withdrawals(self) -> List[Withdrawal]:
        """Return the withdrawals of the payload."""
        return self.payload_inner.withdrawals


class ExecutionPayloadInputV2(PayloadProjectionsMixin, FlatCamelModel):
    """
    Input of `engine_newPayloadV2`: a V1 payload that may carry withdrawals.

    A missing `withdrawals` key and an empty `withdrawals` list are two
    different values (None and []), and None is not written out.
    """

    model_config = ConfigDict(extra="forbid")

    embedded_field: ClassVar[str | None] = "execution_payload"
    omit_if_none: ClassVar[frozenset[str]] = frozenset({"withdrawals"})

    execution_payload: ExecutionPayloadV1
    withdrawals: List[Withdrawal] | None = None

    def as_v1(self) -> ExecutionPayloadV1:
        """Return the embedded `ExecutionPayloadV1`."""
        return self.execution_payload

    def into_payload(self) -> "ExecutionPayloadV1 | ExecutionPayloadV2":
        """Return a V2 payload when withdrawals are present, the V1 payload otherwise."""
        if self.withdrawals is None:
            return self.execution_payload
        return ExecutionPayloadV2(
            payload_inner=self.execution_payload, withdrawals=self.withdrawals
        )


class UntaggedPayloadModel(PayloadProjectionsMixin, EngineRootModel):
    """
    A payload of one of several versions, told apart by its shape alone.

    `candidates` lists the accepted versions, most featured first. Decoding
    tries them in that order and keeps the first one that validates.
    """

    candidates: ClassVar[Tuple[Type[FlatCamelModel], ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def resolve_untagged(cls, data: Any, info: ValidationInfo) -> Any:
        """
        Return the first candidate version that `data` validates as.

        The order matters: a document is read as the most featured version
        it satisfies. Versions after V1 reject unknown keys, so a V1 document
        is never read as V2 or V3, and a V3 document never falls back to V2.
        The reverse is not guaranteed, since V1 ignores unknown keys: a
        document that carries every V1 key plus a malformed V2 or V3 field is
        read as V1 with the extra keys dropped.
        """
        if isinstance(data, UntaggedPayloadModel):
            data = data.root
        if isinstance(data, cls.candidates):
            return data
        for candidate in cls.candidates:
            try:
                if info.mode == "json":
                    return candidate.model_validate_json(to_json(data))
                return candidate.model_validate(data)
            except ValidationError as e:
                logger.debug(
                    "Rejected %s for %s: %d error(s)",
                    candidate.__name__,
                    cls.__name__,
                    e.error_count(),
                )
        raise ValueError(
            f"data did not match any of {', '.join(c.__name__ for c in cls.candidates)}"
        )

    def as_v1(self) -> ExecutionPayloadV1:
        """Return the `ExecutionPayloadV1` common to every version."""
        if isinstance(self.root, ExecutionPayloadV1):
            return self.root
        return self.root.as_v1()

    def into_v1(self) -> ExecutionPayloadV1:
        """Return the `ExecutionPayloadV1`, dropping the fields of later versions."""
        return self.as_v1()

    @property
    def withdrawals(self) -> List[Withdrawal] | None:
        """Return the withdrawals, or None for a V1 payload."""
        if isinstance(self.root, ExecutionPayloadV1):
            return None
        return self.root.withdrawals

    def to_ssz(self) -> bytes:
        """Encode the payload with the binary codec of its version."""
        return self.root.to_ssz()

    def ssz_bytes_len(self) -> int:
        """Return the length of the binary encoding of the payload."""
        return self.root.ssz_bytes_len()


class ExecutionPayload(UntaggedPayloadModel):
    """An `ExecutionPayloadV1`, `ExecutionPayloadV2` or `ExecutionPayloadV3`."""

    root: ExecutionPayloadV3 | ExecutionPayloadV2 | ExecutionPayloadV1

    candidates: ClassVar[Tuple[Type[FlatCamelModel], ...]] = (
        ExecutionPayloadV3,
        ExecutionPayloadV2,
        ExecutionPayloadV1,
    )

    @classmethod
    def from_v1(cls, payload: ExecutionPayloadV1) -> Self:
        """Wrap a V1 payload."""
        return cls(payload)

    @classmethod
    def from_v2(cls, payload: ExecutionPayloadV2) -> Self:
        """Wrap a V2 payload."""
        return cls(payload)

    @classmethod
    def from_v3(cls, payload: ExecutionPayloadV3) -> Self:
        """Wrap a V3 payload."""
        return cls(payload)

    def as_v2(self) -> ExecutionPayloadV2 | None:
        """Return the `ExecutionPayloadV2`, or None for a V1 payload."""
        if isinstance(self.root, ExecutionPayloadV3):
            return self.root.payload_inner
        if isinstance(self.root, ExecutionPayloadV2):
            return self.root
        return None

    def as_v3(self) -> ExecutionPayloadV3 | None:
        """Return the `ExecutionPayloadV3`, or None for earlier versions."""
        if isinstance(self.root, ExecutionPayloadV3):
            return self.root
        return None


class ExecutionPayloadFieldV2(UntaggedPayloadModel):
    """The payload of `engine_getPayloadV2`, an `ExecutionPayloadV2` or an `ExecutionPayloadV1`."""

    root: ExecutionPayloadV2 | ExecutionPayloadV1

    candidates: ClassVar[Tuple[Type[FlatCamelModel], ...]] = (
        ExecutionPayloadV2,
        ExecutionPayloadV1,
    )

    def into_v1_payload(self) -> ExecutionPayloadV1:
        """Return the `ExecutionPayloadV1`."""
        return self.as_v1()
