"""
Private key wrapper for Klaytn accounts.

A PrivateKey is an immutable secp256k1 scalar that derives its public key and
address and signs 32-byte digests. Transaction signatures bind the chain id
into v; message signatures use the plain 27/28 recovery form.
"""

from __future__ import annotations
import logging
from typing import Any, Optional, Union

from ..crypto.primitives import keccak256, get_default_backend
from ..crypto.secp256k1 import Secp256k1KeyPair
from ..runtime.errors import InvalidInputError, ErrorCode
from ..runtime.hexutil import (
    is_klaytn_wallet_key, is_valid_private_key, is_hex_strict, add_hex_prefix,
    hex_to_bytes, bytes_to_hex, int_to_big_endian, to_int,
)
from ..runtime.types import Digest32
from .signature_data import SignatureData

logger = logging.getLogger(__name__)

MESSAGE_PREFIX = b"\x19Klaytn Signed Message:\n"


def hash_message(message: Union[str, bytes]) -> str:
    """
    Hash a message with the Klaytn signed-message preamble.

    The preimage is '\\x19Klaytn Signed Message:\\n' + len(message) + message,
    which can never collide with an RLP transaction signing payload.
    '0x'-prefixed hex strings are hashed as the bytes they encode.

    Args:
        message: Message as bytes, hex string or text

    Returns:
        '0x'-prefixed hex digest
    """
    if isinstance(message, str):
        data = hex_to_bytes(message) if is_hex_strict(message) else message.encode("utf-8")
    else:
        data = bytes(message)
    preimage = MESSAGE_PREFIX + str(len(data)).encode("ascii") + data
    return bytes_to_hex(keccak256(preimage))


def public_key_to_address(public_key: Union[str, bytes]) -> str:
    """Address of a 64-byte (x || y) or 65-byte (0x04 || x || y) public key."""
    data = hex_to_bytes(public_key) if isinstance(public_key, str) else bytes(public_key)
    if len(data) == 65 and data[0] == 0x04:
        data = data[1:]
    if len(data) != 64:
        raise InvalidInputError(f"Invalid uncompressed public key length: {len(data)}", ErrorCode.INVALID_KEY)
    return bytes_to_hex(keccak256(data)[-20:])


class PrivateKey:
    """
    A single secp256k1 private key.

    Construction rejects malformed scalars and the legacy compact wallet-key
    format; the latter must be unwrapped with
    Keyring.create_from_klaytn_wallet_key.
    """

    def __init__(self, key: str):
        """
        Args:
            key: 32-byte private key as hex ('0x' optional)
        """
        if isinstance(key, PrivateKey):
            key = key.private_key
        if not isinstance(key, str):
            raise InvalidInputError(f"Invalid type of private key: {type(key).__name__}", ErrorCode.INVALID_KEY)
        if is_klaytn_wallet_key(key):
            raise InvalidInputError(
                "Invalid format of parameter. Use 'Keyring.create_from_klaytn_wallet_key' "
                "to create a Keyring from a KlaytnWalletKey.",
                ErrorCode.INVALID_KEY_FORMAT
            )
        if not is_valid_private_key(key):
            raise InvalidInputError("Invalid private key", ErrorCode.INVALID_KEY)
        self._private_key = add_hex_prefix(key).lower()
        self._key_pair = Secp256k1KeyPair(hex_to_bytes(self._private_key))

    @classmethod
    def generate(cls, entropy: Optional[Union[str, bytes]] = None) -> PrivateKey:
        """
        Generate a random private key.

        Optional entropy is mixed into the secure random input; it never
        replaces it.
        """
        backend = get_default_backend()
        if entropy is None:
            entropy = backend.random_bytes(32)
        elif isinstance(entropy, str):
            entropy = hex_to_bytes(entropy) if is_hex_strict(entropy) else entropy.encode("utf-8")
        while True:
            inner = keccak256(backend.random_bytes(32) + bytes(entropy))
            candidate = keccak256(backend.random_bytes(32) + inner + backend.random_bytes(32))
            if is_valid_private_key(candidate.hex()):
                return cls(bytes_to_hex(candidate))

    @property
    def private_key(self) -> str:
        return self._private_key

    def to_bytes(self) -> bytes:
        return self._key_pair.to_bytes()

    def sign(self, transaction_hash: Union[str, Digest32], chain_id: Union[int, str]) -> SignatureData:
        """
        Sign a transaction hash.

        Args:
            transaction_hash: '0x' + 64 hex digest
            chain_id: Chain id, folded into v as recid + chain_id * 2 + 35

        Returns:
            SignatureData (v, r, s)
        """
        digest = Digest32(transaction_hash) if not isinstance(transaction_hash, Digest32) else transaction_hash
        if chain_id is None:
            raise InvalidInputError("chainId should be defined to sign.", ErrorCode.MISSING_PARAMETER)
        chain_id = to_int(chain_id)

        recovery_id, r, s = self._key_pair.sign_recoverable(digest.to_bytes())
        v = recovery_id + chain_id * 2 + 35
        return SignatureData(bytes_to_hex(int_to_big_endian(v)), bytes_to_hex(r), bytes_to_hex(s))

    def sign_message(self, message_hash: Union[str, Digest32]) -> SignatureData:
        """Sign an already-prefixed message hash; v is 27 or 28."""
        digest = Digest32(message_hash) if not isinstance(message_hash, Digest32) else message_hash
        recovery_id, r, s = self._key_pair.sign_recoverable(digest.to_bytes())
        return SignatureData(bytes_to_hex(int_to_big_endian(27 + recovery_id)), bytes_to_hex(r), bytes_to_hex(s))

    def get_public_key(self, compressed: bool = False) -> str:
        """
        Public key as hex.

        Uncompressed keys are the 64-byte x || y form without the 0x04 tag;
        compressed keys are the 33-byte form.
        """
        if compressed:
            return bytes_to_hex(self._key_pair.public_key_bytes(compressed=True))
        return bytes_to_hex(self._key_pair.public_key_bytes()[1:])

    def get_derived_address(self) -> str:
        """Lower-case address derived from the public key."""
        return public_key_to_address(self._key_pair.public_key_bytes())

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, PrivateKey):
            return self._private_key == other._private_key
        return False

    def __hash__(self) -> int:
        return hash(self._private_key)

    def __repr__(self) -> str:
        return f"PrivateKey(address='{self.get_derived_address()}')"


__all__ = ["PrivateKey", "hash_message", "public_key_to_address", "MESSAGE_PREFIX"]
