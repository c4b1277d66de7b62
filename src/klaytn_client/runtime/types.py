"""
Validated value types for addresses and 32-byte digests.

Instances can only be built from well-formed input, so code holding one never
re-checks it. Both types plug into pydantic models as custom types.
"""

from typing import Any, Union
from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from .errors import InvalidInputError, ErrorCode
from .hexutil import is_address, is_valid_hash_strict, add_hex_prefix, hex_to_bytes


class Address:
    """20-byte account address, stored '0x'-prefixed and lower-cased."""

    def __init__(self, address: str):
        if not is_address(address):
            raise InvalidInputError(f"Invalid address : {address}", ErrorCode.INVALID_ADDRESS)
        self.value = add_hex_prefix(address).lower()

    def to_bytes(self) -> bytes:
        return hex_to_bytes(self.value)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Address('{self.value}')"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Address):
            return self.value == other.value
        elif isinstance(other, str):
            return is_address(other) and self.value == add_hex_prefix(other).lower()
        return False

    def __hash__(self) -> int:
        return hash(self.value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Return a Pydantic CoreSchema that validates the Address."""
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _validate(cls, value: Any, _info=None) -> "Address":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value)
        raise ValueError(f"Invalid address: {value}")


class Digest32:
    """
    32-byte digest in strict '0x' + 64 hex form.

    A looser "is hex" check is not enough: transaction hashes handed to a
    signer must be exactly this shape.
    """

    def __init__(self, digest: Union[str, bytes]):
        if isinstance(digest, (bytes, bytearray)):
            if len(digest) != 32:
                raise InvalidInputError(f"Invalid transaction hash: {bytes(digest).hex()}",
                                        ErrorCode.INVALID_HASH)
            digest = "0x" + bytes(digest).hex()
        if not is_valid_hash_strict(digest):
            raise InvalidInputError(f"Invalid transaction hash: {digest}", ErrorCode.INVALID_HASH)
        self.value = digest.lower()

    def to_bytes(self) -> bytes:
        return bytes.fromhex(self.value[2:])

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Digest32('{self.value}')"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Digest32):
            return self.value == other.value
        elif isinstance(other, str):
            return self.value == other.lower()
        return False

    def __hash__(self) -> int:
        return hash(self.value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _validate(cls, value: Any, _info=None) -> "Digest32":
        if isinstance(value, cls):
            return value
        if isinstance(value, (str, bytes)):
            return cls(value)
        raise ValueError(f"Invalid digest: {value}")


__all__ = ["Address", "Digest32"]
