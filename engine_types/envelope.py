"""Responses of `engine_getPayloadV2` and later: a payload and its build results."""

from typing import List

from engine_base_types import Bytes, CamelModel, Uint256

from .bundle import BlobsBundleV1
from .payload import ExecutionPayloadFieldV2, ExecutionPayloadV1, ExecutionPayloadV3


class ExecutionPayloadEnvelopeV2(CamelModel):
    """Response of `engine_getPayloadV2`."""

    execution_payload: ExecutionPayloadFieldV2
    block_value: Uint256

    def into_v1_payload(self) -> ExecutionPayloadV1:
        """Return the `ExecutionPayloadV1` of the envelope."""
        return self.execution_payload.into_v1_payload()


class ExecutionPayloadEnvelopeV3(CamelModel):
    """Response of `engine_getPayloadV3`."""

    execution_payload: ExecutionPayloadV3
    block_value: Uint256
    blobs_bundle: BlobsBundleV1
    should_override_builder: bool


class ExecutionPayloadEnvelopeV4(ExecutionPayloadEnvelopeV3):
    """Response of `engine_getPayloadV4`: the V3 response plus the execution requests."""

    execution_requests: List[Bytes]
