"""
Hex, address and digest helpers.

Predicates return booleans; conversions raise InvalidInputError on bad input.
"""

from __future__ import annotations
import re
from typing import Tuple, Union

from .errors import InvalidInputError, ErrorCode

# Order of the secp256k1 group
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

_HEX_RE = re.compile(r"(0x)?[0-9a-fA-F]*")
_HEX_STRICT_RE = re.compile(r"0x[0-9a-fA-F]*")
_ADDRESS_RE = re.compile(r"(0x)?[0-9a-fA-F]{40}")
_HASH_STRICT_RE = re.compile(r"0x[0-9a-fA-F]{64}")
_PRIVATE_KEY_RE = re.compile(r"(0x)?[0-9a-fA-F]{64}")
_DECIMAL_RE = re.compile(r"[0-9]+")


def add_hex_prefix(value: str) -> str:
    """Prefix a hex string with '0x' unless it already is."""
    if value.startswith("0x") or value.startswith("0X"):
        return "0x" + value[2:]
    return "0x" + value


def strip_hex_prefix(value: str) -> str:
    """Remove a leading '0x' if present."""
    if value.startswith("0x") or value.startswith("0X"):
        return value[2:]
    return value


def is_hex(value) -> bool:
    """True for a string of hex digits, with or without '0x'."""
    return isinstance(value, str) and _HEX_RE.fullmatch(value) is not None


def is_hex_strict(value) -> bool:
    """True for a '0x'-prefixed string of hex digits."""
    return isinstance(value, str) and _HEX_STRICT_RE.fullmatch(value) is not None


def is_address(value) -> bool:
    """True for 20 bytes of hex, '0x' optional, any letter case."""
    return isinstance(value, str) and _ADDRESS_RE.fullmatch(value) is not None


def is_valid_hash_strict(value) -> bool:
    """True only for '0x' followed by exactly 64 hex digits."""
    return isinstance(value, str) and _HASH_STRICT_RE.fullmatch(value) is not None


def is_valid_private_key(value) -> bool:
    """True for 32 bytes of hex that form a valid secp256k1 scalar."""
    if not isinstance(value, str) or _PRIVATE_KEY_RE.fullmatch(value) is None:
        return False
    scalar = int(strip_hex_prefix(value), 16)
    return 0 < scalar < SECP256K1_N


def is_klaytn_wallet_key(value) -> bool:
    """
    True for the legacy compact wallet-key format.

    The format is '0x{private key}0x{type}0x{address}' where type is '00'.
    """
    if not isinstance(value, str):
        return False
    parts = strip_hex_prefix(value).split("0x")
    if len(parts) != 3:
        return False
    key, key_type, address = parts
    return is_valid_private_key(key) and key_type == "00" and is_address(address)


def parse_klaytn_wallet_key(value: str) -> Tuple[str, str, str]:
    """
    Split a legacy compact wallet key.

    Returns:
        Tuple of (private key, type, address), each '0x'-prefixed
    """
    if not is_klaytn_wallet_key(value):
        raise InvalidInputError(f"Invalid KlaytnWalletKey: {value}", ErrorCode.INVALID_KEY)
    key, key_type, address = strip_hex_prefix(value).split("0x")
    return add_hex_prefix(key).lower(), add_hex_prefix(key_type), add_hex_prefix(address).lower()


def hex_to_bytes(value: str) -> bytes:
    """Decode a hex string ('0x' optional) into bytes."""
    if not is_hex(value):
        raise InvalidInputError(f"Invalid hex string: {value}", ErrorCode.INVALID_HEX)
    digits = strip_hex_prefix(value)
    if len(digits) % 2:
        digits = "0" + digits
    return bytes.fromhex(digits)


def bytes_to_hex(value: bytes) -> str:
    """Encode bytes as a '0x'-prefixed lower-case hex string."""
    return "0x" + bytes(value).hex()


def to_int(value: Union[int, str]) -> int:
    """
    Convert a non-negative quantity to int.

    Accepts ints, '0x' hex strings and decimal strings.
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"Invalid numeric value: {value!r}", ErrorCode.INVALID_HEX)
    if isinstance(value, int):
        result = value
    elif isinstance(value, str) and value.lower().startswith("0x"):
        digits = value[2:]
        if not digits:
            result = 0
        elif is_hex(digits):
            result = int(digits, 16)
        else:
            raise InvalidInputError(f"Invalid hex number: {value}", ErrorCode.INVALID_HEX)
    elif isinstance(value, str) and _DECIMAL_RE.fullmatch(value):
        result = int(value)
    else:
        raise InvalidInputError(f"Invalid numeric value: {value!r}", ErrorCode.INVALID_HEX)
    if result < 0:
        raise InvalidInputError(f"Numeric value cannot be negative: {value}", ErrorCode.INVALID_HEX)
    return result


def to_hex(value: Union[int, str]) -> str:
    """Minimal '0x' hex of a non-negative quantity, e.g. 1001 -> '0x3e9'."""
    return hex(to_int(value))


def int_to_big_endian(value: int) -> bytes:
    """Minimal big-endian bytes; zero encodes as empty bytes."""
    if value < 0:
        raise InvalidInputError(f"Numeric value cannot be negative: {value}", ErrorCode.INVALID_HEX)
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def big_endian_to_int(value: bytes) -> int:
    """Decode big-endian bytes, tolerating leading zero bytes."""
    return int.from_bytes(trim_leading_zero(value), "big")


def trim_leading_zero(value: bytes) -> bytes:
    """Strip leading zero bytes so numeric fields are minimal."""
    return bytes(value).lstrip(b"\x00")


__all__ = [
    "SECP256K1_N",
    "add_hex_prefix",
    "strip_hex_prefix",
    "is_hex",
    "is_hex_strict",
    "is_address",
    "is_valid_hash_strict",
    "is_valid_private_key",
    "is_klaytn_wallet_key",
    "parse_klaytn_wallet_key",
    "hex_to_bytes",
    "bytes_to_hex",
    "to_int",
    "to_hex",
    "int_to_big_endian",
    "big_endian_to_int",
    "trim_leading_zero",
]
