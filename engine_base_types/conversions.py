"""Common conversion methods."""

from re import fullmatch, sub
from typing import List, SupportsBytes, TypeAlias

BytesConvertible: TypeAlias = str | bytes | SupportsBytes | List[int]
FixedSizeBytesConvertible: TypeAlias = str | bytes | SupportsBytes | List[int] | int
NumberConvertible: TypeAlias = str | bytes | SupportsBytes | int


def to_bytes(input_bytes: BytesConvertible) -> bytes:
    """Convert multiple types into bytes."""
    if input_bytes is None:
        raise ValueError("Cannot convert `None` input to bytes")

    if (
        isinstance(input_bytes, SupportsBytes)
        or isinstance(input_bytes, bytes)
        or isinstance(input_bytes, list)
    ):
        return bytes(input_bytes)

    if isinstance(input_bytes, str):
        # We can have a hex representation of bytes with spaces for readability
        input_bytes = sub(r"\s+", "", input_bytes)
        if input_bytes[:2] in ("0x", "0X"):
            input_bytes = input_bytes[2:]
        if len(input_bytes) % 2 == 1:
            input_bytes = "0" + input_bytes
        return bytes.fromhex(input_bytes)

    raise ValueError(f"invalid type for `bytes`: {type(input_bytes).__name__}")


def wire_hex_to_bytes(input_hex: str) -> bytes:
    """
    Convert a hex string received over the wire into bytes.

    Unlike `to_bytes`, the string must carry the `0x` prefix and an even
    number of hex digits, no padding or whitespace is tolerated.
    """
    if input_hex[:2] not in ("0x", "0X"):
        raise ValueError(f"hex string without 0x prefix: {input_hex!r}")
    digits = input_hex[2:]
    if len(digits) % 2 == 1:
        raise ValueError(f"odd number of hex digits: {input_hex!r}")
    if not fullmatch(r"[0-9a-fA-F]*", digits):
        raise ValueError(f"invalid hex string: {input_hex!r}")
    return bytes.fromhex(digits)


def to_fixed_size_bytes(
    input_bytes: FixedSizeBytesConvertible,
    size: int,
    *,
    left_padding: bool = False,
    right_padding: bool = False,
) -> bytes:
    """
    Convert multiple types into fixed-size bytes.

    :param input_bytes: The input data to convert.
    :param size: The size of the output bytes.
    :param left_padding: Whether to allow left-padding of the input data bytes using zeros. If the
        input data is an integer, padding is always performed.
    :param right_padding: Whether to allow right-padding of the input data bytes using zeros. If
        the input data is an integer, padding is always performed.
    """
    if isinstance(input_bytes, int):
        if input_bytes < 0:
            raise ValueError(f"negative value for fixed size bytes: {input_bytes}")
        try:
            return int.to_bytes(input_bytes, length=size, byteorder="big")
        except OverflowError as e:
            raise ValueError(f"value too large for {size} bytes: {input_bytes}") from e
    input_bytes = to_bytes(input_bytes)
    if len(input_bytes) > size:
        raise ValueError(f"input is too large for fixed size bytes: {len(input_bytes)} > {size}")
    if len(input_bytes) < size:
        if left_padding:
            return bytes(input_bytes).rjust(size, b"\x00")
        if right_padding:
            return bytes(input_bytes).ljust(size, b"\x00")
        raise ValueError(
            f"input is too small for fixed size bytes: {len(input_bytes)} < {size}\n"
            "Use `left_padding=True` or `right_padding=True` to allow padding."
        )
    return input_bytes


def to_number(input_number: NumberConvertible) -> int:
    """Convert multiple types into a number."""
    if isinstance(input_number, int):
        return input_number
    if isinstance(input_number, str):
        return int(input_number, 0)
    if isinstance(input_number, bytes) or isinstance(input_number, SupportsBytes):
        return int.from_bytes(input_number, byteorder="big")
    raise ValueError(f"invalid type for `number`: {type(input_number).__name__}")


def hex_quantity_to_number(input_hex: str) -> int:
    """
    Parse a hex quantity string as sent over the engine API.

    The `0x` prefix is mandatory, digits are case-insensitive and any number
    of leading zeros is accepted.
    """
    if not fullmatch(r"0[xX][0-9a-fA-F]+", input_hex):
        raise ValueError(f"invalid hex quantity: {input_hex!r}")
    return int(input_hex[2:], 16)
