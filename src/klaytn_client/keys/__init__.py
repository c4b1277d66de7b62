"""
Key management for Klaytn accounts.

Provides private keys, role-based keyrings and the keystore codec.
"""

from .roles import KeyRole, ROLE_LAST, MAXIMUM_KEY_NUM
from .signature_data import SignatureData, refine_signatures
from .private_key import PrivateKey, hash_message, public_key_to_address
from .key_material import SingleKey, MultipleKeys, RoleBasedKeys, KeyMaterial
from .keyring import Keyring, SignedMessage, resolve_role
from .options import KeystoreOptions
from .keystore import KeystoreCodec, encrypt, encrypt_v3, decrypt

__all__ = [
    "KeyRole",
    "ROLE_LAST",
    "MAXIMUM_KEY_NUM",
    "SignatureData",
    "refine_signatures",
    "PrivateKey",
    "hash_message",
    "public_key_to_address",
    "SingleKey",
    "MultipleKeys",
    "RoleBasedKeys",
    "KeyMaterial",
    "Keyring",
    "SignedMessage",
    "resolve_role",
    "KeystoreOptions",
    "KeystoreCodec",
    "encrypt",
    "encrypt_v3",
    "decrypt",
]
