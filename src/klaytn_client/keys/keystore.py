r"""
Password-protected keystore codec.

Encrypts keyrings into versioned keystore records and back:

- v3: one key, ``{version, id, address, crypto}``
- v4: ``{version, id, address, keyring}`` where ``keyring`` is a flat list of
  crypto objects (all TRANSACTION_KEY) or a 3-element list of crypto-object
  lists (explicit role partition)

Each crypto object carries its own KDF parameters, cipher parameters and
MAC = keccak256(derived_key[16:32] || ciphertext). The MAC is checked before
anything is deciphered.
"""

from __future__ import annotations
import hmac
import json
import logging
import uuid as uuid_lib
from typing import Any, Dict, List, Optional, Union

from ..crypto.primitives import CryptoBackend, get_default_backend
from ..runtime.errors import (
    InvalidInputError, AuthenticationError, UnsupportedAlgorithmError, PolicyViolationError, ErrorCode,
)
from ..runtime.hexutil import is_klaytn_wallet_key, hex_to_bytes, bytes_to_hex, is_hex
from .key_material import SingleKey, MultipleKeys, RoleBasedKeys, empty_role_keys
from .keyring import Keyring
from .options import KeystoreOptions, PBKDF2_PRF
from .private_key import PrivateKey
from .roles import KeyRole, ROLE_LAST

logger = logging.getLogger(__name__)

SUPPORTED_KDFS = ("scrypt", "pbkdf2")


class KeystoreCodec:
    """
    Per-key encryption and decryption.

    Uses an injected CryptoBackend for every primitive so the same logic
    runs on any platform backend.
    """

    def __init__(self, backend: Optional[CryptoBackend] = None):
        """
        Args:
            backend: Crypto backend (default: DefaultCryptoBackend)
        """
        self.backend = backend or get_default_backend()

    def _derive_key(self, kdf: str, kdfparams: Dict[str, Any], password: str) -> bytes:
        password_bytes = password.encode("utf-8")
        if kdf not in SUPPORTED_KDFS:
            raise UnsupportedAlgorithmError("Unsupported key derivation scheme", ErrorCode.UNSUPPORTED_KDF,
                                            details={"kdf": kdf})
        if not isinstance(kdfparams, dict):
            raise InvalidInputError(f"Invalid kdfparams for {kdf}", ErrorCode.INVALID_KEYSTORE)
        if kdf == "pbkdf2" and kdfparams.get("prf") != PBKDF2_PRF:
            raise UnsupportedAlgorithmError("Unsupported parameters to PBKDF2", ErrorCode.UNSUPPORTED_PRF,
                                            details={"prf": kdfparams.get("prf")})
        try:
            salt = hex_to_bytes(kdfparams["salt"])
            dklen = int(kdfparams["dklen"])
            if kdf == "scrypt":
                params = int(kdfparams["n"]), int(kdfparams["r"]), int(kdfparams["p"])
            else:
                params = (int(kdfparams["c"]),)
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidInputError(f"Invalid kdfparams for {kdf}: missing or malformed {e}",
                                    ErrorCode.INVALID_KEYSTORE, cause=e)

        if kdf == "scrypt":
            return self.backend.scrypt(password_bytes, salt, *params, dklen)
        return self.backend.pbkdf2_hmac_sha256(password_bytes, salt, *params, dklen)

    def _mac(self, derived_key: bytes, ciphertext: bytes) -> str:
        return self.backend.keccak256(derived_key[16:32] + ciphertext).hex()

    def encrypt_key(self, private_key: PrivateKey, password: str, options: KeystoreOptions) -> Dict[str, Any]:
        """
        Encrypt one private key into a crypto object.

        Args:
            private_key: Key to encrypt
            password: Keystore password
            options: Encryption options

        Returns:
            Crypto object dict
        """
        if options.kdf not in SUPPORTED_KDFS:
            raise UnsupportedAlgorithmError(f"Unsupported kdf: {options.kdf}", ErrorCode.UNSUPPORTED_KDF)
        if not self.backend.supports_cipher(options.cipher):
            raise UnsupportedAlgorithmError(f"Unsupported cipher: {options.cipher}",
                                            ErrorCode.UNSUPPORTED_CIPHER)

        salt = options.salt if options.salt is not None else self.backend.random_bytes(32)
        iv = options.iv if options.iv is not None else self.backend.random_bytes(16)

        kdfparams: Dict[str, Any] = {"dklen": options.dklen, "salt": salt.hex()}
        if options.kdf == "pbkdf2":
            kdfparams["c"] = options.c
            kdfparams["prf"] = PBKDF2_PRF
        else:
            kdfparams["n"] = options.n
            kdfparams["r"] = options.r
            kdfparams["p"] = options.p
        derived_key = self._derive_key(options.kdf, kdfparams, password)

        ciphertext = self.backend.encrypt(options.cipher, derived_key[:16], iv, private_key.to_bytes())
        return {
            "ciphertext": ciphertext.hex(),
            "cipherparams": {
                "iv": iv.hex(),
            },
            "cipher": options.cipher,
            "kdf": options.kdf,
            "kdfparams": kdfparams,
            "mac": self._mac(derived_key, ciphertext),
        }

    def encrypt_keys(self, private_keys: List[PrivateKey], password: str,
                     options: KeystoreOptions) -> List[Dict[str, Any]]:
        """Encrypt each key independently, preserving order."""
        return [self.encrypt_key(key, password, options) for key in private_keys]

    def decrypt_key(self, encrypted: Dict[str, Any], password: str) -> PrivateKey:
        """
        Decrypt one crypto object.

        Raises:
            AuthenticationError: If the MAC does not match (wrong password)
            UnsupportedAlgorithmError: For an unknown kdf, prf or cipher
        """
        if not isinstance(encrypted, dict):
            raise InvalidInputError("Invalid crypto object in keystore", ErrorCode.INVALID_KEYSTORE)
        try:
            kdf = encrypted["kdf"]
            kdfparams = encrypted["kdfparams"]
            ciphertext_hex = encrypted["ciphertext"]
            mac = encrypted["mac"]
        except KeyError as e:
            raise InvalidInputError(f"Invalid crypto object in keystore: missing {e}",
                                    ErrorCode.INVALID_KEYSTORE, cause=e)
        if not is_hex(ciphertext_hex) or not is_hex(mac):
            raise InvalidInputError("Invalid crypto object in keystore: malformed hex",
                                    ErrorCode.INVALID_KEYSTORE)

        derived_key = self._derive_key(kdf, kdfparams, password)
        ciphertext = hex_to_bytes(ciphertext_hex)
        expected = self._mac(derived_key, ciphertext)
        if not hmac.compare_digest(expected, mac.lower().replace("0x", "")):
            raise AuthenticationError()

        try:
            cipher = encrypted["cipher"]
            iv = hex_to_bytes(encrypted["cipherparams"]["iv"])
        except (KeyError, TypeError) as e:
            raise InvalidInputError("Invalid crypto object in keystore: missing cipher parameters",
                                    ErrorCode.INVALID_KEYSTORE, cause=e)
        plaintext = self.backend.decrypt(cipher, derived_key[:16], iv, ciphertext)
        return PrivateKey(bytes_to_hex(plaintext))

    def decrypt_keys(self, encrypted_list: Optional[List[Dict[str, Any]]], password: str) -> List[PrivateKey]:
        """Decrypt a crypto-object list; a missing or empty list yields no keys."""
        if not encrypted_list:
            return []
        if not isinstance(encrypted_list, list):
            raise InvalidInputError("Invalid keyring field in keystore", ErrorCode.INVALID_KEYSTORE)
        return [self.decrypt_key(encrypted, password) for encrypted in encrypted_list]


def _keystore_id(options: KeystoreOptions, backend: CryptoBackend) -> str:
    if isinstance(options.uuid, str):
        return options.uuid
    random = options.uuid if options.uuid is not None else backend.random_bytes(16)
    if len(random) != 16:
        raise InvalidInputError(f"uuid must be 16 bytes, got {len(random)}", ErrorCode.INVALID_OPTIONS)
    return str(uuid_lib.UUID(bytes=random, version=4))


def _format_encrypted(version: int, address: str, keyring_or_crypto: Any,
                      options: KeystoreOptions, backend: CryptoBackend) -> Dict[str, Any]:
    keystore: Dict[str, Any] = {
        "version": version,
        "id": _keystore_id(options, backend),
        "address": address.lower(),
    }
    if version == 3:
        keystore["crypto"] = keyring_or_crypto
    elif version == 4:
        keystore["keyring"] = keyring_or_crypto
    else:
        raise UnsupportedAlgorithmError("Unsupported version of keystore", ErrorCode.UNSUPPORTED_VERSION)
    return keystore


def to_keyring(key: Any, options: KeystoreOptions) -> Keyring:
    """
    Resolve encryption input into a Keyring.

    Accepts a Keyring, tagged key material, a private key string or
    PrivateKey, or a legacy compact wallet key. Multiple or role-based key
    material requires options.address.
    """
    if isinstance(key, Keyring):
        return key

    if isinstance(key, (MultipleKeys, RoleBasedKeys)):
        if options.address is None:
            raise InvalidInputError(
                "The address must be defined inside the options object to encrypt multiple keys.",
                ErrorCode.MISSING_PARAMETER
            )
        return Keyring.create(options.address, key)

    if isinstance(key, SingleKey):
        key = key.key

    if isinstance(key, (str, PrivateKey)):
        if options.address is None:
            return Keyring.create_from_private_key(key)
        if isinstance(key, str) and is_klaytn_wallet_key(key):
            from_wallet_key = Keyring.create_from_klaytn_wallet_key(key)
            if from_wallet_key.address != str(options.address):
                raise InvalidInputError(
                    f"The address defined in options({options.address}) does not match the address "
                    f"of KlaytnWalletKey({from_wallet_key.address}) entered as a parameter.",
                    ErrorCode.INVALID_ADDRESS
                )
            return from_wallet_key
        return Keyring.create_with_single_key(options.address, key)

    raise InvalidInputError("Invalid key format.", ErrorCode.INVALID_KEY_FORMAT)


def encrypt(key: Any, password: str, options: Union[None, Dict[str, Any], KeystoreOptions] = None,
            backend: Optional[CryptoBackend] = None) -> Dict[str, Any]:
    """
    Encrypt key material into a v4 keystore.

    Every key of every role is encrypted independently. The keyring field is
    the 3-list form when a role other than TRANSACTION_KEY holds keys, the
    flat list otherwise.

    Args:
        key: Keyring or key material (see to_keyring)
        password: Keystore password
        options: KeystoreOptions or dict
        backend: Crypto backend

    Returns:
        v4 keystore dict
    """
    options = KeystoreOptions.coerce(options)
    codec = KeystoreCodec(backend)
    keyring = to_keyring(key, options)

    encrypted: List[List[Dict[str, Any]]] = []
    is_role_based = False
    for role in range(ROLE_LAST):
        role_keys = keyring.keys[role]
        if role > KeyRole.TRANSACTION_KEY and len(role_keys) > 0:
            is_role_based = True
        encrypted.append(codec.encrypt_keys(role_keys, password, options))
        if role_keys:
            logger.debug(f"Encrypted {len(role_keys)} keys of role {role} with {options.kdf}")

    keyring_field: Any = encrypted if is_role_based else encrypted[KeyRole.TRANSACTION_KEY]
    return _format_encrypted(4, keyring.address, keyring_field, options, codec.backend)


def encrypt_v3(key: Any, password: str, options: Union[None, Dict[str, Any], KeystoreOptions] = None,
               backend: Optional[CryptoBackend] = None) -> Dict[str, Any]:
    """
    Encrypt a single key into a v3 keystore.

    Raises:
        PolicyViolationError: If the keyring holds anything but one
            TRANSACTION_KEY
    """
    options = KeystoreOptions.coerce(options)
    if not isinstance(key, (str, PrivateKey, SingleKey, Keyring)):
        raise InvalidInputError(
            "Invalid parameter. key should be a private key string, KlaytnWalletKey or instance of Keyring",
            ErrorCode.INVALID_KEY_FORMAT
        )
    codec = KeystoreCodec(backend)
    keyring = to_keyring(key, options)

    not_available = "This keyring cannot be encrypted keystore v3. use 'encrypt' for keystore v4."
    if len(keyring.keys[KeyRole.TRANSACTION_KEY]) != 1:
        raise PolicyViolationError(not_available, ErrorCode.EXPORT_NOT_AVAILABLE)
    for role in range(KeyRole.ACCOUNT_UPDATE_KEY, ROLE_LAST):
        if len(keyring.keys[role]) > 0:
            raise PolicyViolationError(not_available, ErrorCode.EXPORT_NOT_AVAILABLE)

    crypto = codec.encrypt_key(keyring.keys[KeyRole.TRANSACTION_KEY][0], password, options)
    return _format_encrypted(3, keyring.address, crypto, options, codec.backend)


def decrypt(keystore: Union[str, Dict[str, Any]], password: str,
            backend: Optional[CryptoBackend] = None) -> Keyring:
    """
    Decrypt a v3 or v4 keystore.

    The input record is never modified.

    Raises:
        AuthenticationError: On MAC mismatch
        UnsupportedAlgorithmError: On unknown kdf, prf, cipher or version
        InvalidInputError: On a malformed record
    """
    if isinstance(keystore, str):
        try:
            keystore = json.loads(keystore)
        except json.JSONDecodeError as e:
            raise InvalidInputError("Invalid keystore JSON", ErrorCode.INVALID_KEYSTORE, cause=e)
    if not isinstance(keystore, dict):
        raise InvalidInputError("Invalid keystore format", ErrorCode.INVALID_KEYSTORE)

    version = keystore.get("version")
    if version not in (3, 4):
        logger.warning(f"This is not a V3 or V4 wallet (version={version!r})")
        raise UnsupportedAlgorithmError(f"Unsupported version of keystore: {version!r}",
                                        ErrorCode.UNSUPPORTED_VERSION)
    crypto = keystore.get("crypto")
    keyring_field = keystore.get("keyring")
    if version == 3 and not crypto:
        raise InvalidInputError("Invalid keystore V3 format: 'crypto' is not defined.", ErrorCode.INVALID_KEYSTORE)
    if version == 4 and not keyring_field:
        raise InvalidInputError("Invalid keystore V4 format: 'keyring' is not defined.",
                                ErrorCode.INVALID_KEYSTORE)
    if crypto:
        if keyring_field:
            raise InvalidInputError("Invalid key store format: 'crypto' and 'keyring' cannot be defined together.",
                                    ErrorCode.INVALID_KEYSTORE)
        keyring_field = [crypto]
    if not isinstance(keyring_field, list):
        raise InvalidInputError("Invalid keyring field in keystore", ErrorCode.INVALID_KEYSTORE)

    codec = KeystoreCodec(backend)
    keys = empty_role_keys()
    if isinstance(keyring_field[0], list):
        if len(keyring_field) > ROLE_LAST:
            raise InvalidInputError(f"Invalid keyring field in keystore: more than {ROLE_LAST} roles",
                                    ErrorCode.INVALID_KEYSTORE)
        for role in range(ROLE_LAST):
            role_field = keyring_field[role] if role < len(keyring_field) else None
            keys[role] = codec.decrypt_keys(role_field, password)
    else:
        keys[KeyRole.TRANSACTION_KEY] = codec.decrypt_keys(keyring_field, password)
    logger.debug(f"Decrypted keystore v{version} with {[len(role_keys) for role_keys in keys]} keys per role")

    return Keyring.create_with_role_based_key(keystore.get("address"), keys)


__all__ = [
    "KeystoreCodec",
    "SUPPORTED_KDFS",
    "to_keyring",
    "encrypt",
    "encrypt_v3",
    "decrypt",
]
