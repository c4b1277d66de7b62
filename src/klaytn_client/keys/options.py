"""
Keystore encryption options.

Defaults follow the v3/v4 keystore conventions: scrypt (n=4096, r=8, p=1),
pbkdf2 with hmac-sha256 (c=262144), 32-byte derived keys and aes-128-ctr.
Randomness supplied here (salt, iv, uuid) is used verbatim.
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..runtime.errors import InvalidInputError, ErrorCode
from ..runtime.hexutil import hex_to_bytes, is_hex
from ..runtime.types import Address

DEFAULT_KDF = "scrypt"
DEFAULT_CIPHER = "aes-128-ctr"
DEFAULT_DKLEN = 32
DEFAULT_SCRYPT_N = 4096
DEFAULT_SCRYPT_R = 8
DEFAULT_SCRYPT_P = 1
DEFAULT_PBKDF2_C = 262144
PBKDF2_PRF = "hmac-sha256"


class KeystoreOptions(BaseModel):
    """
    Options for keystore encryption.

    Hex strings are accepted for salt, iv and uuid.
    """
    address: Optional[Address] = Field(default=None, description="Address for bare key material")
    salt: Optional[bytes] = Field(default=None, description="KDF salt (32 random bytes by default)")
    iv: Optional[bytes] = Field(default=None, description="Cipher IV (16 random bytes by default)")
    kdf: str = Field(default=DEFAULT_KDF, description="Key derivation function: scrypt or pbkdf2")
    dklen: int = Field(default=DEFAULT_DKLEN, ge=32, description="Derived key length")
    n: int = Field(default=DEFAULT_SCRYPT_N, ge=2, description="scrypt cost parameter")
    r: int = Field(default=DEFAULT_SCRYPT_R, ge=1, description="scrypt block size")
    p: int = Field(default=DEFAULT_SCRYPT_P, ge=1, description="scrypt parallelization")
    c: int = Field(default=DEFAULT_PBKDF2_C, ge=1, description="pbkdf2 iteration count")
    cipher: str = Field(default=DEFAULT_CIPHER, description="Cipher name")
    uuid: Optional[Union[bytes, str]] = Field(default=None, description="16 random bytes or a keystore id")

    model_config = {"populate_by_name": True}

    @field_validator("salt", "iv", mode="before")
    @classmethod
    def parse_hex_bytes(cls, v: Any) -> Optional[bytes]:
        if v is None or isinstance(v, (bytes, bytearray)):
            return v
        if isinstance(v, str) and is_hex(v):
            return hex_to_bytes(v)
        raise ValueError(f"Expected bytes or hex string, got {v!r}")

    @field_validator("uuid", mode="before")
    @classmethod
    def parse_uuid(cls, v: Any) -> Optional[Union[bytes, str]]:
        if isinstance(v, bytearray):
            return bytes(v)
        return v

    @classmethod
    def coerce(cls, options: Union[None, Dict[str, Any], KeystoreOptions]) -> KeystoreOptions:
        """Accept None, a plain dict or an options instance."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, dict):
            try:
                return cls.model_validate(options)
            except ValidationError as e:
                raise InvalidInputError(f"Invalid keystore options: {e}", ErrorCode.INVALID_OPTIONS, cause=e)
        raise InvalidInputError(f"Invalid keystore options type: {type(options).__name__}",
                                ErrorCode.INVALID_OPTIONS)


__all__ = [
    "KeystoreOptions",
    "DEFAULT_KDF",
    "DEFAULT_CIPHER",
    "DEFAULT_DKLEN",
    "DEFAULT_SCRYPT_N",
    "DEFAULT_SCRYPT_R",
    "DEFAULT_SCRYPT_P",
    "DEFAULT_PBKDF2_C",
    "PBKDF2_PRF",
]
