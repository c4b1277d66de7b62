"""
Cryptographic primitives for the Klaytn signing core.

Provides Keccak-256, the injectable KDF/cipher backend and secp256k1 signing.
"""

from .primitives import (
    SUPPORTED_CIPHERS, keccak256, CryptoBackend, DefaultCryptoBackend, get_default_backend,
)
from .secp256k1 import Secp256k1KeyPair, recover_public_key, decompress_public_key

__all__ = [
    "SUPPORTED_CIPHERS",
    "keccak256",
    "CryptoBackend",
    "DefaultCryptoBackend",
    "get_default_backend",
    "Secp256k1KeyPair",
    "recover_public_key",
    "decompress_public_key",
]
