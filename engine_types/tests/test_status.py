"""
Test the payload status types.
"""

from typing import Any, Dict

import pytest
from pydantic import ValidationError

from engine_base_types import Hash, to_json

from ..status import PayloadStatus, PayloadStatusEnum, PayloadStatusKind


def test_invalid_status_text():
    """
    Test the rendering of an invalid status without a latest valid hash.
    """
    status = PayloadStatus(status=PayloadStatusEnum.invalid("Failed to decode block"))
    assert status.model_dump_json() == (
        '{"status":"INVALID","latestValidHash":null,"validationError":"Failed to decode block"}'
    )


@pytest.mark.parametrize(
    "status, json_repr",
    [
        pytest.param(
            PayloadStatus(status=PayloadStatusEnum.valid(), latest_valid_hash=Hash(1)),
            {"status": "VALID", "latestValidHash": Hash(1).hex(), "validationError": None},
            id="valid",
        ),
        pytest.param(
            PayloadStatus(status=PayloadStatusEnum.syncing()),
            {"status": "SYNCING", "latestValidHash": None, "validationError": None},
            id="syncing",
        ),
        pytest.param(
            PayloadStatus(status=PayloadStatusEnum.accepted()),
            {"status": "ACCEPTED", "latestValidHash": None, "validationError": None},
            id="accepted",
        ),
        pytest.param(
            PayloadStatus(
                status=PayloadStatusEnum.invalid("bad block"), latest_valid_hash=Hash(2)
            ),
            {
                "status": "INVALID",
                "latestValidHash": Hash(2).hex(),
                "validationError": "bad block",
            },
            id="invalid",
        ),
    ],
)
class TestPayloadStatusConversion:
    """
    Test that payload statuses are converted to and from JSON correctly.
    """

    def test_json_serialization(self, status: PayloadStatus, json_repr: Dict[str, Any]):
        """
        Test that the three keys are always written.
        """
        assert to_json(status) == json_repr

    def test_json_deserialization(self, status: PayloadStatus, json_repr: Dict[str, Any]):
        """
        Test that the flat document is read back.
        """
        assert PayloadStatus(**json_repr) == status
        assert PayloadStatus.model_validate_json(status.model_dump_json()) == status


def test_python_dump_keeps_hash():
    """
    Test that the python dump keeps the hash as a `Hash`.
    """
    status = PayloadStatus(status=PayloadStatusEnum.valid(), latest_valid_hash=Hash(1))
    assert status.model_dump()["latestValidHash"] == Hash(1)


def test_invalid_requires_reason():
    """
    Test that an INVALID status without a reason is rejected.
    """
    with pytest.raises(ValidationError):
        PayloadStatus.model_validate({"status": "INVALID", "latestValidHash": None})
    with pytest.raises(ValidationError):
        PayloadStatusEnum(status=PayloadStatusKind.INVALID)


def test_reason_ignored_for_other_states():
    """
    Test that a reason given with any other state is dropped.
    """
    status = PayloadStatus.model_validate_json(
        '{"status":"SYNCING","latestValidHash":null,"validationError":"ignored"}'
    )
    assert status.status == PayloadStatusEnum.syncing()
    assert status.status.validation_error is None


def test_unknown_status():
    """
    Test that unknown status tags are rejected.
    """
    with pytest.raises(ValidationError):
        PayloadStatus.model_validate_json('{"status":"INVALID_BLOCK_HASH","latestValidHash":null}')


def test_missing_latest_valid_hash():
    """
    Test that a missing latest valid hash reads as None.
    """
    assert PayloadStatus.model_validate_json('{"status":"VALID"}').latest_valid_hash is None


def test_helpers():
    """
    Test the payload status helpers.
    """
    error = ValueError("Failed to decode block")
    status = PayloadStatus.from_status(PayloadStatusEnum.from_error(error))
    assert status.is_invalid()
    assert not status.is_valid()
    assert not status.is_syncing()
    assert status.status.as_str() == "INVALID"
    assert str(status) == "INVALID: Failed to decode block"

    with_hash = status.with_latest_valid_hash(Hash(3))
    assert with_hash.latest_valid_hash == Hash(3)
    assert status.latest_valid_hash is None
    assert str(with_hash) == f"INVALID: Failed to decode block, latest valid hash: {Hash(3)}"

    assert status.maybe_latest_valid_hash(None).latest_valid_hash is None
    assert status.maybe_latest_valid_hash(Hash(4)).latest_valid_hash == Hash(4)

    assert PayloadStatusEnum.valid().is_valid()
    assert PayloadStatusEnum.syncing().is_syncing()
    assert PayloadStatusEnum.accepted().is_accepted()
    assert str(PayloadStatusEnum.accepted()) == "ACCEPTED"
