"""Status of a payload after it was handed to the execution process."""

from enum import Enum
from typing import Any, Dict, Self

from pydantic import SerializationInfo, model_serializer, model_validator

from engine_base_types import CamelModel, Hash


class PayloadStatusKind(str, Enum):
    """Status tags of a payload."""

    VALID = "VALID"
    INVALID = "INVALID"
    SYNCING = "SYNCING"
    ACCEPTED = "ACCEPTED"


class PayloadStatusEnum(CamelModel):
    """
    A payload status tag, with the reason of the failure for `INVALID`.

    The reason is required for `INVALID` and dropped for every other tag.
    """

    status: PayloadStatusKind
    validation_error: str | None = None

    @model_validator(mode="after")
    def check_validation_error(self) -> Self:
        """Require a reason for invalid payloads only."""
        if self.status == PayloadStatusKind.INVALID:
            if self.validation_error is None:
                raise ValueError("an INVALID status requires a validation error")
        else:
            self.validation_error = None
        return self

    @classmethod
    def valid(cls) -> Self:
        """Return the `VALID` status."""
        return cls(status=PayloadStatusKind.VALID)

    @classmethod
    def invalid(cls, validation_error: str) -> Self:
        """Return an `INVALID` status with the given reason."""
        return cls(status=PayloadStatusKind.INVALID, validation_error=validation_error)

    @classmethod
    def syncing(cls) -> Self:
        """Return the `SYNCING` status."""
        return cls(status=PayloadStatusKind.SYNCING)

    @classmethod
    def accepted(cls) -> Self:
        """Return the `ACCEPTED` status."""
        return cls(status=PayloadStatusKind.ACCEPTED)

    @classmethod
    def from_error(cls, error: Exception) -> Self:
        """Return an `INVALID` status whose reason is the message of `error`."""
        return cls.invalid(str(error))

    def as_str(self) -> str:
        """Return the status tag."""
        return self.status.value

    def is_valid(self) -> bool:
        """Return whether the payload is valid."""
        return self.status == PayloadStatusKind.VALID

    def is_invalid(self) -> bool:
        """Return whether the payload is invalid."""
        return self.status == PayloadStatusKind.INVALID

    def is_syncing(self) -> bool:
        """Return whether the execution process is syncing."""
        return self.status == PayloadStatusKind.SYNCING

    def is_accepted(self) -> bool:
        """Return whether the payload was accepted without being validated."""
        return self.status == PayloadStatusKind.ACCEPTED

    def __str__(self) -> str:
        """Return the tag, followed by the reason for `INVALID`."""
        if self.validation_error is not None:
            return f"{self.status.value}: {self.validation_error}"
        return self.status.value


class PayloadStatus(CamelModel):
    """
    Represents the status of a payload after execution.

    Documents carry the status tag and its reason as two sibling keys:
    `{"status": ..., "latestValidHash": ..., "validationError": ...}`. All
    three keys are always written, `latestValidHash` and `validationError`
    as null when they do not apply.
    """

    status: PayloadStatusEnum
    latest_valid_hash: Hash | None = None

    @model_validator(mode="before")
    @classmethod
    def nest_validation_error(cls, data: Any) -> Any:
        """Move the sibling `validationError` key into the status."""
        if isinstance(data, dict) and isinstance(data.get("status"), str):
            data = dict(data)
            validation_error = data.pop("validationError", data.pop("validation_error", None))
            data["status"] = {"status": data["status"], "validation_error": validation_error}
        return data

    @model_serializer(mode="plain")
    def serialize_flat(self, info: SerializationInfo) -> Dict[str, Any]:
        """Write the tag, the latest valid hash and the reason side by side."""
        latest_valid_hash: Any = self.latest_valid_hash
        if latest_valid_hash is not None and info.mode_is_json():
            latest_valid_hash = latest_valid_hash.hex()
        return {
            "status": self.status.as_str(),
            "latestValidHash": latest_valid_hash,
            "validationError": self.status.validation_error,
        }

    @classmethod
    def from_status(cls, status: PayloadStatusEnum) -> Self:
        """Return a status without a latest valid hash."""
        return cls(status=status)

    def with_latest_valid_hash(self, latest_valid_hash: Hash) -> Self:
        """Return a copy of the status with the given latest valid hash."""
        return self.model_copy(update={"latest_valid_hash": Hash(latest_valid_hash)})

    def maybe_latest_valid_hash(self, latest_valid_hash: Hash | None) -> Self:
        """Return a copy of the status with the given latest valid hash, if any."""
        return self.model_copy(update={"latest_valid_hash": Hash.or_none(latest_valid_hash)})

    def is_valid(self) -> bool:
        """Return whether the payload is valid."""
        return self.status.is_valid()

    def is_invalid(self) -> bool:
        """Return whether the payload is invalid."""
        return self.status.is_invalid()

    def is_syncing(self) -> bool:
        """Return whether the execution process is syncing."""
        return self.status.is_syncing()

    def __str__(self) -> str:
        """Return the status and the latest valid hash, if any."""
        if self.latest_valid_hash is None:
            return str(self.status)
        return f"{self.status}, latest valid hash: {self.latest_valid_hash}"
