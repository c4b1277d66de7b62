"""
Account-key descriptors built from a keyring.

A descriptor is the input the account model needs to construct an on-chain
account key: the key shape, the public keys per role and the resolved
weighted multi-sig options.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

from ..keys.key_material import is_empty_key
from ..keys.roles import KeyRole, ROLE_LAST
from ..runtime.errors import InvalidInputError, PolicyViolationError, ErrorCode
from .options import DefaultWeightedOptionsFiller, WeightedMultiSigOptions, OptionsLike

logger = logging.getLogger(__name__)


class AccountKeyType(Enum):
    """Account key shapes a keyring maps onto."""

    PUBLIC = "public"
    WEIGHTED_MULTISIG = "weightedMultiSig"
    ROLE_BASED = "roleBased"


@dataclass(frozen=True)
class RoleKeyEntry:
    """Public keys of one role with their multi-sig options (None for a plain key)."""
    role: KeyRole
    public_keys: List[str]
    options: Optional[WeightedMultiSigOptions] = None


@dataclass
class AccountDescriptor:
    """
    Shape, public keys and options of an account key.

    PUBLIC and WEIGHTED_MULTISIG descriptors hold a single TRANSACTION_KEY
    entry; ROLE_BASED descriptors hold one entry per role.
    """
    address: str
    key_type: AccountKeyType
    entries: List[RoleKeyEntry] = field(default_factory=list)

    @property
    def public_keys(self) -> List[List[str]]:
        return [entry.public_keys for entry in self.entries]

    @property
    def options(self) -> List[Optional[WeightedMultiSigOptions]]:
        return [entry.options for entry in self.entries]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "keyType": self.key_type.value,
            "entries": [
                {
                    "role": int(entry.role),
                    "publicKeys": list(entry.public_keys),
                    "options": entry.options.to_dict() if entry.options is not None else None,
                }
                for entry in self.entries
            ],
        }


def _check_weights(public_keys: Sequence[str], options: Optional[WeightedMultiSigOptions], role: int) -> None:
    if options is None:
        return
    if len(options.weights) != len(public_keys):
        raise InvalidInputError(
            f"The length of weights({len(options.weights)}) must equal the number of keys"
            f"({len(public_keys)}) of role {role}.",
            ErrorCode.INVALID_OPTIONS
        )


def build_account_descriptor(keyring, options: Union[OptionsLike, Sequence[OptionsLike]] = None,
                             options_filler: Optional[DefaultWeightedOptionsFiller] = None) -> AccountDescriptor:
    """
    Classify a keyring's keys into an account-key descriptor.

    Role-based when a role other than TRANSACTION_KEY holds keys; weighted
    multi-sig when TRANSACTION_KEY holds several keys, or one key with
    explicit threshold and weights; plain public key otherwise.

    Args:
        keyring: Keyring to describe
        options: Weighted multi-sig options, or a per-role list of them for
            role-based keyrings
        options_filler: Supplies default options (default:
            DefaultWeightedOptionsFiller)

    Returns:
        AccountDescriptor

    Raises:
        PolicyViolationError: If the keyring holds no keys, or options are
            given for a plain public key
        InvalidInputError: If options have the wrong shape
    """
    filler = options_filler or DefaultWeightedOptionsFiller()
    keys = keyring.keys
    if is_empty_key(keys):
        raise PolicyViolationError("Failed to create Account instance: Empty key in keyring.", ErrorCode.EMPTY_KEY)

    is_role_based = any(len(keys[role]) > 0 for role in range(KeyRole.ACCOUNT_UPDATE_KEY, ROLE_LAST))
    public_keys = keyring.get_public_key()

    if is_role_based:
        if options is not None and not isinstance(options, (list, tuple)):
            raise InvalidInputError(
                "options for an account should define threshold and weight for each roles in an array format",
                ErrorCode.INVALID_OPTIONS
            )
        if options is not None and len(options) > ROLE_LAST:
            raise InvalidInputError(f"options cannot define more than {ROLE_LAST} roles", ErrorCode.INVALID_OPTIONS)
        filled = filler.fill_for_role_based([len(role_keys) for role_keys in keys], options)
        entries = []
        for role in range(ROLE_LAST):
            _check_weights(public_keys[role], filled[role], role)
            entries.append(RoleKeyEntry(KeyRole(role), public_keys[role], filled[role]))
        logger.debug(f"Keyring {keyring.address} maps to a role-based account key")
        return AccountDescriptor(keyring.address, AccountKeyType.ROLE_BASED, entries)

    options_defined = options is not None
    if isinstance(options, (list, tuple)):
        options = options[0] if len(options) > 0 else None

    transaction_keys = public_keys[KeyRole.TRANSACTION_KEY]
    is_weighted = len(transaction_keys) > 1
    if len(transaction_keys) == 1 and options is not None:
        defined = options.to_dict() if isinstance(options, WeightedMultiSigOptions) else options
        if isinstance(defined, dict) and defined.get("threshold") is not None and \
                defined.get("weights") is not None:
            is_weighted = True

    if is_weighted:
        filled_options = filler.fill_for_multisig(len(transaction_keys), options)
        _check_weights(transaction_keys, filled_options, KeyRole.TRANSACTION_KEY)
        logger.debug(f"Keyring {keyring.address} maps to a weighted multi-sig account key "
                     f"({len(transaction_keys)} keys)")
        return AccountDescriptor(
            keyring.address,
            AccountKeyType.WEIGHTED_MULTISIG,
            [RoleKeyEntry(KeyRole.TRANSACTION_KEY, transaction_keys, filled_options)],
        )

    if options_defined:
        raise PolicyViolationError("options cannot be defined with single key.", ErrorCode.OPTIONS_NOT_ALLOWED)
    return AccountDescriptor(
        keyring.address,
        AccountKeyType.PUBLIC,
        [RoleKeyEntry(KeyRole.TRANSACTION_KEY, transaction_keys)],
    )


__all__ = ["AccountKeyType", "RoleKeyEntry", "AccountDescriptor", "build_account_descriptor"]
