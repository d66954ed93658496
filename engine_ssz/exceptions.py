"""Exceptions raised while decoding offset-table encoded data."""


class DecodeError(Exception):
    """
    Base class of every binary decoding failure.

    `field_index` is the position, in declaration order, of the container
    field being decoded when the failure was found, or None when the failure
    is not tied to a single field.
    """

    field_index: int | None

    def __init__(self, message: str, field_index: int | None = None):
        """Initialize the error with an optional field position."""
        self.field_index = field_index
        if field_index is not None:
            message = f"{message} (field {field_index})"
        super().__init__(message)


class InvalidByteLengthError(DecodeError):
    """The buffer length does not match the length required by the type."""

    def __init__(self, length: int, expected: int, field_index: int | None = None):
        """Initialize the error with the actual and the expected lengths."""
        self.length = length
        self.expected = expected
        super().__init__(f"invalid byte length: got {length}, expected {expected}", field_index)


class InvalidListLengthError(DecodeError):
    """A list's bytes can not be split into a whole number of items."""

    def __init__(self, length: int, item_size: int, field_index: int | None = None):
        """Initialize the error with the byte length and the item size."""
        self.length = length
        self.item_size = item_size
        super().__init__(
            f"invalid list length: {length} bytes is not a multiple of {item_size}", field_index
        )


class OffsetIntoFixedPortionError(DecodeError):
    """The first offset points inside the fixed-size head."""

    def __init__(self, offset: int, field_index: int | None = None):
        """Initialize the error with the offending offset."""
        self.offset = offset
        super().__init__(f"offset {offset} points into the fixed portion", field_index)


class OffsetSkipsVariableBytesError(DecodeError):
    """The first offset leaves unreferenced bytes after the fixed-size head."""

    def __init__(self, offset: int, field_index: int | None = None):
        """Initialize the error with the offending offset."""
        self.offset = offset
        super().__init__(f"offset {offset} skips variable bytes", field_index)


class OffsetsAreDecreasingError(DecodeError):
    """An offset is smaller than the offset of the previous variable-size field."""

    def __init__(self, offset: int, field_index: int | None = None):
        """Initialize the error with the offending offset."""
        self.offset = offset
        super().__init__(f"offset {offset} is lower than the previous offset", field_index)


class OffsetOutOfBoundsError(DecodeError):
    """An offset points past the end of the buffer."""

    def __init__(self, offset: int, length: int, field_index: int | None = None):
        """Initialize the error with the offending offset and the buffer length."""
        self.offset = offset
        self.length = length
        super().__init__(f"offset {offset} is out of bounds ({length} bytes)", field_index)


class BytesInvalidError(DecodeError):
    """The bytes have the right shape but do not describe a valid value."""

    pass
