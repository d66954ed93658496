"""Basic type primitives used to define other types."""

from hashlib import sha256
from typing import Any, ClassVar, SupportsBytes, Type, TypeVar

from pydantic import GetCoreSchemaHandler
from pydantic_core.core_schema import (
    PlainValidatorFunctionSchema,
    ValidationInfo,
    to_string_ser_schema,
    with_info_plain_validator_function,
)

from .conversions import (
    BytesConvertible,
    FixedSizeBytesConvertible,
    NumberConvertible,
    hex_quantity_to_number,
    to_bytes,
    to_fixed_size_bytes,
    to_number,
    wire_hex_to_bytes,
)

class ToStringSchema:
    """
    Type converter to add a simple pydantic schema that correctly
    parses and serializes the type.

    Strings, and any value coming from a JSON document, go through
    `from_wire`, which is stricter than the class constructor used for other
    python values. Instances of the type itself are kept as they are.
    """

    @staticmethod
    def __get_pydantic_core_schema__(
        source_type: Any, handler: GetCoreSchemaHandler
    ) -> PlainValidatorFunctionSchema:
        """Call the class constructor and append the serialization schema."""

        def validate(value: Any, info: ValidationInfo) -> Any:
            if isinstance(value, source_type):
                return value
            if isinstance(value, str) or info.mode == "json":
                return source_type.from_wire(value)
            return source_type(value)

        return with_info_plain_validator_function(
            validate,
            serialization=to_string_ser_schema(),
        )

    @classmethod
    def from_wire(cls, value: Any) -> Any:
        """Parse a value decoded from a JSON document."""
        return cls(value)


Q = TypeVar("Q", bound="HexQuantity")


class HexQuantity(int, ToStringSchema):
    """
    An unsigned integer of bounded width rendered as a minimal hex quantity.

    `0` is rendered as `0x0`, any other value as `0x` followed by the
    lowercase hex digits without leading zeros. Subclasses of a specific
    byte width are created with `HexQuantity[width]`.
    """

    byte_length: ClassVar[int]
    max_value: ClassVar[int]

    def __class_getitem__(cls, length: int) -> Type["HexQuantity"]:
        """Create a new HexQuantity class with the given byte width."""

        class Sized(cls):  # type: ignore
            byte_length = length
            max_value = 2 ** (8 * length) - 1

        return Sized

    def __new__(cls, input_number: NumberConvertible | Q):
        """Create a new quantity, rejecting values outside of the type's range."""
        if isinstance(input_number, bool):
            raise ValueError(f"expected a number, got {input_number}")
        if isinstance(input_number, str):
            i = hex_quantity_to_number(input_number)
        else:
            i = to_number(input_number)
        if i < 0:
            raise ValueError(f"Value {i} is negative")
        if i > cls.max_value:
            raise ValueError(f"Value {i} is too large for {cls.byte_length} bytes")
        return super(HexQuantity, cls).__new__(cls, i)

    @classmethod
    def from_wire(cls, value: Any) -> "HexQuantity":
        """Only hex strings are accepted on the wire."""
        if not isinstance(value, str):
            raise ValueError(f"expected a hex quantity string, got {type(value).__name__}")
        return cls(value)

    def __str__(self) -> str:
        """Return the string representation of the number."""
        return self.hex()

    def hex(self) -> str:
        """Return the hexadecimal representation of the number."""
        return hex(self)

    def __repr__(self) -> str:
        """Return the representation of the quantity."""
        return f"{self.__class__.__name__}({self.hex()})"


class Uint64(HexQuantity[8]):  # type: ignore
    """64-bit unsigned quantity."""

    pass


class Uint256(HexQuantity[32]):  # type: ignore
    """256-bit unsigned quantity."""

    pass


class Bytes(bytes, ToStringSchema):
    """Class that helps represent bytes of variable length."""

    def __new__(cls, input_bytes: BytesConvertible = b""):
        """Create a new Bytes object."""
        if type(input_bytes) is cls:
            return input_bytes
        return super(Bytes, cls).__new__(cls, to_bytes(input_bytes))

    @classmethod
    def from_wire(cls, value: Any) -> "Bytes":
        """Only `0x` prefixed, even length hex strings are accepted on the wire."""
        if not isinstance(value, str):
            raise ValueError(f"expected a hex string, got {type(value).__name__}")
        return cls(wire_hex_to_bytes(value))

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return super(Bytes, self).__hash__()

    def __str__(self) -> str:
        """Return the hexadecimal representation of the bytes."""
        return self.hex()

    def hex(self, *args, **kwargs) -> str:
        """Return the hexadecimal representation of the bytes."""
        return "0x" + super().hex(*args, **kwargs)

    def sha256(self) -> "Hash":
        """Return the sha256 hash of the byte representation."""
        return Hash(sha256(self).digest())


T = TypeVar("T", bound="FixedSizeBytes")


class FixedSizeBytes(Bytes):
    """Class that helps represent bytes of fixed length."""

    byte_length: ClassVar[int]
    _sized_: ClassVar[Type["FixedSizeBytes"]]

    def __class_getitem__(cls, length: int) -> Type["FixedSizeBytes"]:
        """Create a new FixedSizeBytes class with the given length."""

        class Sized(cls):  # type: ignore
            byte_length = length

        Sized._sized_ = Sized
        return Sized

    def __new__(
        cls,
        input_bytes: FixedSizeBytesConvertible | T,
        *,
        left_padding: bool = False,
        right_padding: bool = False,
    ):
        """Create a new FixedSizeBytes object."""
        if type(input_bytes) is cls:
            return input_bytes
        return super(FixedSizeBytes, cls).__new__(
            cls,
            to_fixed_size_bytes(
                input_bytes,
                cls.byte_length,
                left_padding=left_padding,
                right_padding=right_padding,
            ),
        )

    @classmethod
    def from_wire(cls, value: Any) -> "FixedSizeBytes":
        """The hex string must describe exactly `byte_length` bytes."""
        if not isinstance(value, str):
            raise ValueError(f"expected a hex string, got {type(value).__name__}")
        data = wire_hex_to_bytes(value)
        if len(data) != cls.byte_length:
            raise ValueError(f"expected {cls.byte_length} bytes, got {len(data)}")
        return cls(data)

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return super(FixedSizeBytes, self).__hash__()

    @classmethod
    def or_none(cls: Type[T], input_bytes: T | FixedSizeBytesConvertible | None) -> T | None:
        """Convert the input to a Fixed Size Bytes while accepting None."""
        if input_bytes is None:
            return input_bytes
        return cls(input_bytes)

    def __eq__(self, other: object) -> bool:
        """Compare two FixedSizeBytes objects to be equal."""
        if other is None:
            return False
        if not isinstance(other, FixedSizeBytes):
            if not isinstance(other, (str, int, bytes, SupportsBytes)):
                return NotImplemented
            try:
                other = self._sized_(other)
            except ValueError:
                return False
        return super().__eq__(other)

    def __ne__(self, other: object) -> bool:
        """Compare two FixedSizeBytes objects to be not equal."""
        equal = self.__eq__(other)
        if equal is NotImplemented:
            return equal
        return not equal


class Address(FixedSizeBytes[20]):  # type: ignore
    """Class that helps represent Ethereum addresses."""

    pass


class Hash(FixedSizeBytes[32]):  # type: ignore
    """Class that helps represent hashes."""

    pass


class Bloom(FixedSizeBytes[256]):  # type: ignore
    """Class that helps represent blooms."""

    pass


class Bytes8(FixedSizeBytes[8]):  # type: ignore
    """Class that helps represent 8-byte values such as the header nonce."""

    pass


class Bytes48(FixedSizeBytes[48]):  # type: ignore
    """Class that helps represent KZG commitments and proofs."""

    pass
