"""
Cryptographic primitives used by the keystore codec and signers.

The keystore and keyring logic never pick a crypto library themselves; they
receive a CryptoBackend. DefaultCryptoBackend is built on `cryptography`
(KDFs and AES) and `pycryptodome` (Keccak-256).
"""

from __future__ import annotations
import os
import logging
from abc import ABC, abstractmethod

from Crypto.Hash import keccak
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from ..runtime.errors import InvalidInputError, UnsupportedAlgorithmError, ErrorCode

logger = logging.getLogger(__name__)

# Cipher name -> (key length, mode name)
SUPPORTED_CIPHERS = {
    "aes-128-ctr": (16, "ctr"),
    "aes-128-cbc": (16, "cbc"),
}


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash (the pre-standard SHA-3 variant).

    Args:
        data: Input data to hash

    Returns:
        32-byte digest
    """
    return keccak.new(digest_bits=256).update(bytes(data)).digest()


class CryptoBackend(ABC):
    """Hash, KDF, block cipher and randomness needed by the core."""

    @abstractmethod
    def keccak256(self, data: bytes) -> bytes:
        pass

    @abstractmethod
    def scrypt(self, password: bytes, salt: bytes, n: int, r: int, p: int, dklen: int) -> bytes:
        pass

    @abstractmethod
    def pbkdf2_hmac_sha256(self, password: bytes, salt: bytes, iterations: int, dklen: int) -> bytes:
        pass

    @abstractmethod
    def encrypt(self, cipher_name: str, key: bytes, iv: bytes, plaintext: bytes) -> bytes:
        pass

    @abstractmethod
    def decrypt(self, cipher_name: str, key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
        pass

    def random_bytes(self, n: int) -> bytes:
        """Cryptographically secure random bytes."""
        return os.urandom(n)

    def supports_cipher(self, cipher_name: str) -> bool:
        return cipher_name in SUPPORTED_CIPHERS


class DefaultCryptoBackend(CryptoBackend):
    """Backend built on the `cryptography` and `pycryptodome` packages."""

    def keccak256(self, data: bytes) -> bytes:
        return keccak256(data)

    def scrypt(self, password: bytes, salt: bytes, n: int, r: int, p: int, dklen: int) -> bytes:
        try:
            kdf = Scrypt(salt=salt, length=dklen, n=n, r=r, p=p, backend=default_backend())
            return kdf.derive(password)
        except (ValueError, TypeError) as e:
            raise InvalidInputError(f"Invalid scrypt parameters: n={n}, r={r}, p={p}, dklen={dklen}",
                                    ErrorCode.INVALID_OPTIONS, cause=e)

    def pbkdf2_hmac_sha256(self, password: bytes, salt: bytes, iterations: int, dklen: int) -> bytes:
        try:
            kdf = PBKDF2HMAC(
                algorithm=hashes.SHA256(),
                length=dklen,
                salt=salt,
                iterations=iterations,
                backend=default_backend()
            )
            return kdf.derive(password)
        except (ValueError, TypeError) as e:
            raise InvalidInputError(f"Invalid pbkdf2 parameters: c={iterations}, dklen={dklen}",
                                    ErrorCode.INVALID_OPTIONS, cause=e)

    def _cipher(self, cipher_name: str, key: bytes, iv: bytes) -> Cipher:
        if cipher_name not in SUPPORTED_CIPHERS:
            raise UnsupportedAlgorithmError(f"Unsupported cipher: {cipher_name}",
                                            ErrorCode.UNSUPPORTED_CIPHER)
        key_length, mode_name = SUPPORTED_CIPHERS[cipher_name]
        if len(key) < key_length:
            raise InvalidInputError(f"Derived key too short for {cipher_name}: {len(key)} bytes",
                                    ErrorCode.INVALID_OPTIONS)
        if len(iv) != 16:
            raise InvalidInputError(f"Invalid iv length for {cipher_name}: {len(iv)} bytes",
                                    ErrorCode.INVALID_OPTIONS)
        mode = modes.CTR(iv) if mode_name == "ctr" else modes.CBC(iv)
        return Cipher(algorithms.AES(key[:key_length]), mode, backend=default_backend())

    def encrypt(self, cipher_name: str, key: bytes, iv: bytes, plaintext: bytes) -> bytes:
        encryptor = self._cipher(cipher_name, key, iv).encryptor()
        if SUPPORTED_CIPHERS[cipher_name][1] == "cbc":
            padder = padding.PKCS7(128).padder()
            plaintext = padder.update(plaintext) + padder.finalize()
        return encryptor.update(plaintext) + encryptor.finalize()

    def decrypt(self, cipher_name: str, key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
        decryptor = self._cipher(cipher_name, key, iv).decryptor()
        try:
            plaintext = decryptor.update(ciphertext) + decryptor.finalize()
            if SUPPORTED_CIPHERS[cipher_name][1] == "cbc":
                unpadder = padding.PKCS7(128).unpadder()
                plaintext = unpadder.update(plaintext) + unpadder.finalize()
        except ValueError as e:
            raise InvalidInputError(f"Failed to decipher with {cipher_name}", ErrorCode.INVALID_KEYSTORE,
                                    cause=e)
        return plaintext


_default_backend = DefaultCryptoBackend()


def get_default_backend() -> CryptoBackend:
    """Shared stateless backend instance."""
    return _default_backend


__all__ = [
    "SUPPORTED_CIPHERS",
    "keccak256",
    "CryptoBackend",
    "DefaultCryptoBackend",
    "get_default_backend",
]
