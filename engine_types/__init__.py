"""
Execution payload types of the engine API, with their JSON and binary codecs.
"""

from .attributes import (
    ExecutionPayloadBodiesV1,
    ExecutionPayloadBodyV1,
    PayloadAttributes,
    PayloadId,
)
from .bundle import Blob, BlobsBundleV1, BlobTransactionSidecar
from .envelope import (
    ExecutionPayloadEnvelopeV2,
    ExecutionPayloadEnvelopeV3,
    ExecutionPayloadEnvelopeV4,
)
from .payload import (
    BlockNumHash,
    ExecutionPayload,
    ExecutionPayloadFieldV2,
    ExecutionPayloadInputV2,
    ExecutionPayloadV1,
    ExecutionPayloadV2,
    ExecutionPayloadV3,
    ExecutionPayloadV4,
    Withdrawal,
)
from .status import PayloadStatus, PayloadStatusEnum, PayloadStatusKind

__all__ = (
    "Blob",
    "BlobTransactionSidecar",
    "BlobsBundleV1",
    "BlockNumHash",
    "ExecutionPayload",
    "ExecutionPayloadBodiesV1",
    "ExecutionPayloadBodyV1",
    "ExecutionPayloadEnvelopeV2",
    "ExecutionPayloadEnvelopeV3",
    "ExecutionPayloadEnvelopeV4",
    "ExecutionPayloadFieldV2",
    "ExecutionPayloadInputV2",
    "ExecutionPayloadV1",
    "ExecutionPayloadV2",
    "ExecutionPayloadV3",
    "ExecutionPayloadV4",
    "PayloadAttributes",
    "PayloadId",
    "PayloadStatus",
    "PayloadStatusEnum",
    "PayloadStatusKind",
    "Withdrawal",
)
