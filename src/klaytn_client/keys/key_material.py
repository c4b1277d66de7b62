"""
Key material accepted by Keyring factories.

Callers say which shape they are passing by choosing one of SingleKey,
MultipleKeys or RoleBasedKeys; normalization turns any of them into the
canonical 3-list (one list of PrivateKey per role).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Union

from ..runtime.errors import InvalidInputError, PolicyViolationError, ErrorCode
from ..runtime.hexutil import is_klaytn_wallet_key
from .private_key import PrivateKey
from .roles import ROLE_LAST, MAXIMUM_KEY_NUM

KeyLike = Union[str, PrivateKey]
RoleKeys = List[List[PrivateKey]]


@dataclass(frozen=True)
class SingleKey:
    """One private key, assigned to the transaction role."""
    key: KeyLike


@dataclass(frozen=True)
class MultipleKeys:
    """Several private keys, all assigned to the transaction role."""
    keys: Sequence[KeyLike]


@dataclass(frozen=True)
class RoleBasedKeys:
    """
    Up to ROLE_LAST key lists, one per role in KeyRole order.

    Missing trailing roles are treated as empty.
    """
    roles: Sequence[Sequence[KeyLike]]


KeyMaterial = Union[SingleKey, MultipleKeys, RoleBasedKeys]


def empty_role_keys() -> RoleKeys:
    return [[] for _ in range(ROLE_LAST)]


def _is_key_like(value) -> bool:
    return isinstance(value, (str, PrivateKey))


def _to_private_key(value: KeyLike) -> PrivateKey:
    return value if isinstance(value, PrivateKey) else PrivateKey(value)


def _fill_role(keys: RoleKeys, role: int, to_add: Sequence[KeyLike]) -> None:
    if len(to_add) > MAXIMUM_KEY_NUM:
        raise PolicyViolationError(
            f"The maximum number of private keys that can be used in keyring is {MAXIMUM_KEY_NUM}.",
            ErrorCode.TOO_MANY_KEYS
        )
    for key in to_add:
        keys[role].append(_to_private_key(key))


def normalize_key_material(material: KeyMaterial) -> RoleKeys:
    """
    Convert key material into the canonical role-partitioned form.

    Raises:
        InvalidInputError: For a shape that does not match its tag
        PolicyViolationError: When a role exceeds MAXIMUM_KEY_NUM keys
    """
    keys = empty_role_keys()

    if isinstance(material, SingleKey):
        if not _is_key_like(material.key):
            raise InvalidInputError(
                "Invalid format of parameter. Use MultipleKeys or RoleBasedKeys for two or more keys.",
                ErrorCode.INVALID_KEY_FORMAT
            )
        if isinstance(material.key, str) and is_klaytn_wallet_key(material.key):
            raise InvalidInputError(
                "Invalid format of parameter. Use 'Keyring.create_from_klaytn_wallet_key' "
                "to create a Keyring from a KlaytnWalletKey.",
                ErrorCode.INVALID_KEY_FORMAT
            )
        _fill_role(keys, 0, [material.key])

    elif isinstance(material, MultipleKeys):
        if not isinstance(material.keys, (list, tuple)) or not all(_is_key_like(k) for k in material.keys):
            raise InvalidInputError(
                "Invalid format of parameter. 'keys' should be an array of private key strings.",
                ErrorCode.INVALID_KEY_FORMAT
            )
        _fill_role(keys, 0, material.keys)

    elif isinstance(material, RoleBasedKeys):
        roles = material.roles
        if not isinstance(roles, (list, tuple)) or len(roles) > ROLE_LAST or \
                not all(isinstance(r, (list, tuple)) and all(_is_key_like(k) for k in r) for r in roles):
            raise InvalidInputError(
                "Invalid format of parameter. 'roles' should be in the form of an array defined "
                "as an array for the keys to be used for each role.",
                ErrorCode.INVALID_KEY_FORMAT
            )
        for role, role_keys in enumerate(roles):
            _fill_role(keys, role, role_keys)

    else:
        raise InvalidInputError(f"Unsupported key material: {type(material).__name__}",
                                ErrorCode.INVALID_KEY_FORMAT)

    return keys


def is_empty_key(keys: RoleKeys) -> bool:
    return all(len(role_keys) == 0 for role_keys in keys)


__all__ = [
    "SingleKey",
    "MultipleKeys",
    "RoleBasedKeys",
    "KeyMaterial",
    "KeyLike",
    "RoleKeys",
    "normalize_key_material",
    "empty_role_keys",
    "is_empty_key",
]
