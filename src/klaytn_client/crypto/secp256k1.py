"""
SECP256K1 operations for Klaytn keys.

Thin wrapper over `coincurve` (libsecp256k1) exposing recoverable signatures
over pre-hashed 32-byte digests and public-key recovery.
"""

from __future__ import annotations
from typing import Tuple

import coincurve

from ..runtime.errors import InvalidInputError, ErrorCode


class Secp256k1KeyPair:
    """
    SECP256K1 key pair.

    Signs digests directly (no internal hashing) and returns the
    recovery id together with r and s.
    """

    def __init__(self, private_key_bytes: bytes):
        """
        Initialize key pair.

        Args:
            private_key_bytes: 32-byte private key
        """
        if len(private_key_bytes) != 32:
            raise InvalidInputError(f"Private key must be 32 bytes, got {len(private_key_bytes)}",
                                    ErrorCode.INVALID_KEY)
        try:
            self._private_key = coincurve.PrivateKey(private_key_bytes)
        except ValueError as e:
            raise InvalidInputError("Invalid secp256k1 private key", ErrorCode.INVALID_KEY, cause=e)
        self._private_key_bytes = bytes(private_key_bytes)

    def public_key_bytes(self, compressed: bool = False) -> bytes:
        """Public key, 65 bytes uncompressed (0x04 prefix) or 33 compressed."""
        return self._private_key.public_key.format(compressed=compressed)

    def sign_recoverable(self, digest: bytes) -> Tuple[int, bytes, bytes]:
        """
        Sign a 32-byte digest.

        Returns:
            Tuple of (recovery id, r, s) with r and s as 32-byte values
        """
        if len(digest) != 32:
            raise InvalidInputError(f"Digest must be 32 bytes, got {len(digest)}", ErrorCode.INVALID_HASH)
        signature = self._private_key.sign_recoverable(digest, hasher=None)
        return signature[64], signature[:32], signature[32:64]

    def to_bytes(self) -> bytes:
        """Get private key as bytes."""
        return self._private_key_bytes

    def __str__(self) -> str:
        return f"Secp256k1KeyPair(public={self.public_key_bytes(True).hex()[:16]}...)"


def recover_public_key(digest: bytes, recovery_id: int, r: bytes, s: bytes) -> bytes:
    """
    Recover the uncompressed public key that produced a signature.

    Args:
        digest: 32-byte digest that was signed
        recovery_id: 0 or 1
        r: 32-byte r value
        s: 32-byte s value

    Returns:
        65-byte uncompressed public key
    """
    if recovery_id not in (0, 1, 2, 3):
        raise InvalidInputError(f"Invalid recovery id: {recovery_id}", ErrorCode.INVALID_HEX)
    signature = r.rjust(32, b"\x00") + s.rjust(32, b"\x00") + bytes([recovery_id])
    try:
        public_key = coincurve.PublicKey.from_signature_and_message(signature, digest, hasher=None)
    except ValueError as e:
        raise InvalidInputError("Failed to recover public key from signature", ErrorCode.INVALID_HEX, cause=e)
    return public_key.format(compressed=False)


def decompress_public_key(public_key: bytes) -> bytes:
    """Return the 65-byte uncompressed form of a public key."""
    try:
        return coincurve.PublicKey(public_key).format(compressed=False)
    except ValueError as e:
        raise InvalidInputError("Invalid secp256k1 public key", ErrorCode.INVALID_KEY, cause=e)


__all__ = [
    "Secp256k1KeyPair",
    "recover_public_key",
    "decompress_public_key",
]
