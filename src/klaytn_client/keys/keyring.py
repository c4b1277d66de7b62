r"""
Role-based multi-key keyring.

A Keyring binds an address to three ordered lists of private keys, one per
KeyRole. It is the signing entry point for transactions and messages and the
source of keystore files and account-key descriptors.

Reads by role fall back to the transaction role when the requested role is
empty; writes and encryption never do.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

from ..crypto.secp256k1 import recover_public_key
from ..runtime.errors import InvalidInputError, PolicyViolationError, ErrorCode
from ..runtime.hexutil import (
    is_klaytn_wallet_key, parse_klaytn_wallet_key, add_hex_prefix, hex_to_bytes, to_int,
)
from ..runtime.types import Address, Digest32
from .key_material import (
    KeyLike, KeyMaterial, RoleKeys, SingleKey, MultipleKeys, RoleBasedKeys,
    normalize_key_material, empty_role_keys,
)
from .private_key import PrivateKey, hash_message, public_key_to_address
from .roles import KeyRole, ROLE_LAST, role_name
from .signature_data import SignatureData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignedMessage:
    """Result of Keyring.sign_message."""
    message_hash: str
    signature: SignatureData
    message: Union[str, bytes]


def _check_role(role: Optional[int]) -> int:
    if role is None:
        raise InvalidInputError("role should be defined.", ErrorCode.MISSING_PARAMETER)
    if isinstance(role, bool) or not isinstance(role, int) or role < 0 or role >= ROLE_LAST:
        raise InvalidInputError(
            f"Unsupported role number. The role number should be less than {ROLE_LAST}. Please use 'KeyRole'.",
            ErrorCode.INVALID_ROLE
        )
    return int(role)


def resolve_role(keys: RoleKeys, role: Optional[int]) -> List[PrivateKey]:
    """
    Key list used for a role.

    An empty role other than TRANSACTION_KEY falls back to the
    TRANSACTION_KEY list; if that is empty too the read fails.
    """
    role = _check_role(role)
    role_keys = keys[role]
    if len(role_keys) == 0 and role > KeyRole.TRANSACTION_KEY:
        if len(keys[KeyRole.TRANSACTION_KEY]) == 0:
            raise PolicyViolationError(
                f"The key with {role_name(role)} role does not exist. "
                f"The {role_name(KeyRole.TRANSACTION_KEY)} for the default role is also empty.",
                ErrorCode.EMPTY_KEY
            )
        role_keys = keys[KeyRole.TRANSACTION_KEY]
    return role_keys


def _check_index(index: Any, length: int) -> int:
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidInputError(f"Invalid type of index({index}): index should be number type.",
                                ErrorCode.INVALID_INDEX)
    if index < 0:
        raise InvalidInputError(f"Invalid index({index}): index cannot be negative.", ErrorCode.INVALID_INDEX)
    if index >= length:
        raise InvalidInputError(
            f"Invalid index({index}): index must be less than the length of keys({length}).",
            ErrorCode.INVALID_INDEX
        )
    return index


def _check_chain_id(chain_id: Any) -> int:
    if chain_id is None:
        raise InvalidInputError("chainId should be defined to sign.", ErrorCode.MISSING_PARAMETER)
    return to_int(chain_id)


class Keyring:
    """
    Address plus role-partitioned private keys.

    Example:
        keyring = Keyring.create_with_multiple_key(address, [key1, key2])
        signatures = keyring.sign_with_keys(tx_hash, chain_id, KeyRole.TRANSACTION_KEY)
    """

    def __init__(self, address: Union[str, Address], keys: KeyMaterial):
        """
        Args:
            address: Account address
            keys: Key material in one of the tagged shapes
        """
        self.address = address
        self.keys = keys

    # -- factories ---------------------------------------------------------

    @classmethod
    def generate(cls, entropy: Optional[Union[str, bytes]] = None) -> Keyring:
        """Create a single-key keyring from a fresh random key."""
        key = PrivateKey.generate(entropy)
        return cls.create_with_single_key(key.get_derived_address(), key)

    @classmethod
    def create(cls, address: Union[str, Address], key_material: KeyMaterial) -> Keyring:
        """Create a keyring from explicitly tagged key material."""
        if not isinstance(key_material, (SingleKey, MultipleKeys, RoleBasedKeys)):
            raise InvalidInputError(f"Unsupported key type: {type(key_material).__name__}",
                                    ErrorCode.INVALID_KEY_FORMAT)
        return cls(address, key_material)

    @classmethod
    def create_from_private_key(cls, private_key: Union[str, PrivateKey]) -> Keyring:
        """Create a single-key keyring whose address is derived from the key."""
        if isinstance(private_key, str) and is_klaytn_wallet_key(private_key):
            return cls.create_from_klaytn_wallet_key(private_key)
        if not isinstance(private_key, (str, PrivateKey)):
            raise InvalidInputError(
                "Invalid format of parameter. 'private_key' should be in format of string",
                ErrorCode.INVALID_KEY_FORMAT
            )
        key = PrivateKey(private_key)
        return cls.create_with_single_key(key.get_derived_address(), key)

    @classmethod
    def create_from_klaytn_wallet_key(cls, klaytn_wallet_key: str) -> Keyring:
        """Unwrap a legacy compact wallet key ('0x{key}0x00{address}')."""
        if not isinstance(klaytn_wallet_key, str):
            raise InvalidInputError(
                "Invalid format of parameter. 'klaytn_wallet_key' should be in format of string",
                ErrorCode.INVALID_KEY_FORMAT
            )
        private_key, _, address = parse_klaytn_wallet_key(klaytn_wallet_key)
        return cls.create_with_single_key(address, private_key)

    @classmethod
    def create_with_single_key(cls, address: Union[str, Address], key: KeyLike) -> Keyring:
        if isinstance(key, (list, tuple)):
            raise InvalidInputError(
                "Invalid format of parameter. Use 'create_with_multiple_key' or "
                "'create_with_role_based_key' for two or more keys.",
                ErrorCode.INVALID_KEY_FORMAT
            )
        return cls(address, SingleKey(key))

    @classmethod
    def create_with_multiple_key(cls, address: Union[str, Address], keys: Sequence[KeyLike]) -> Keyring:
        return cls(address, MultipleKeys(keys))

    @classmethod
    def create_with_role_based_key(cls, address: Union[str, Address],
                                   role_keys: Sequence[Sequence[KeyLike]]) -> Keyring:
        return cls(address, RoleBasedKeys(role_keys))

    @classmethod
    def decrypt(cls, keystore: Union[str, Dict[str, Any]], password: str, backend=None) -> Keyring:
        """Decrypt a v3 or v4 keystore into a keyring."""
        # Import here to avoid circular imports
        from .keystore import decrypt
        return decrypt(keystore, password, backend=backend)

    @staticmethod
    def recover(message: Union[str, bytes, SignedMessage],
                signature: Optional[Union[SignatureData, Sequence[str]]] = None,
                prefixed: bool = False) -> str:
        """
        Recover the signer address of a message signature.

        Args:
            message: Original message, a message hash when prefixed is True,
                or a SignedMessage
            signature: Signature of the message
            prefixed: Whether message is already a message hash

        Returns:
            Lower-case address
        """
        if isinstance(message, SignedMessage):
            return Keyring.recover(message.message_hash, message.signature, True)
        if signature is None:
            raise InvalidInputError("signature should be defined to recover.", ErrorCode.MISSING_PARAMETER)
        signature = SignatureData.from_value(signature)
        message_hash = Digest32(message) if prefixed else Digest32(hash_message(message))

        v = to_int(signature.v)
        if v in (27, 28):
            recovery_id = v - 27
        elif v >= 35:
            recovery_id = (v - 35) % 2
        else:
            recovery_id = v
        public_key = recover_public_key(
            message_hash.to_bytes(), recovery_id, hex_to_bytes(signature.r), hex_to_bytes(signature.s)
        )
        return public_key_to_address(public_key)

    # -- properties --------------------------------------------------------

    @property
    def address(self) -> str:
        return str(self._address)

    @address.setter
    def address(self, address: Union[str, Address]) -> None:
        self._address = address if isinstance(address, Address) else Address(address)

    @property
    def keys(self) -> RoleKeys:
        """The 3-list of private keys, indexed by KeyRole."""
        return self._keys

    @keys.setter
    def keys(self, key_material: KeyMaterial) -> None:
        self._keys = normalize_key_material(key_material)
        logger.debug(
            f"Keyring {self._address} holds {[len(role_keys) for role_keys in self._keys]} keys per role"
        )

    @property
    def role_transaction_key(self) -> List[PrivateKey]:
        return self.get_key_by_role(KeyRole.TRANSACTION_KEY)

    @property
    def role_account_update_key(self) -> List[PrivateKey]:
        return self.get_key_by_role(KeyRole.ACCOUNT_UPDATE_KEY)

    @property
    def role_fee_payer_key(self) -> List[PrivateKey]:
        return self.get_key_by_role(KeyRole.FEE_PAYER_KEY)

    # -- queries -----------------------------------------------------------

    def get_public_key(self, compressed: bool = False) -> List[List[str]]:
        """Public keys in the same role layout as keys."""
        public_keys: List[List[str]] = empty_role_keys()
        for role in range(ROLE_LAST):
            for key in self._keys[role]:
                public_keys[role].append(key.get_public_key(compressed))
        return public_keys

    def get_key_by_role(self, role: int) -> List[PrivateKey]:
        """Keys for a role, falling back to TRANSACTION_KEY when empty."""
        return resolve_role(self._keys, role)

    def is_decoupled(self) -> bool:
        """
        True when the address is not simply the one derived from a single key.

        That is the case when any role holds several keys, when a role other
        than TRANSACTION_KEY is used, or when the only key derives a
        different address.
        """
        if any(len(role_keys) > 1 for role_keys in self._keys):
            return True
        if any(len(self._keys[role]) > 0 for role in range(KeyRole.ACCOUNT_UPDATE_KEY, ROLE_LAST)):
            return True
        if len(self._keys[KeyRole.TRANSACTION_KEY]) == 0:
            return True
        derived = self._keys[KeyRole.TRANSACTION_KEY][0].get_derived_address()
        return self.address.lower() != derived.lower()

    def get_klaytn_wallet_key(self) -> str:
        """
        Export as a legacy compact wallet key.

        Only a keyring with exactly one TRANSACTION_KEY and no other keys can
        be exported.
        """
        not_available = ("The keyring cannot be exported in KlaytnWalletKey format. "
                         "Use Keyring.encrypt to export it as a keystore.")
        if len(self._keys[KeyRole.TRANSACTION_KEY]) != 1:
            raise PolicyViolationError(not_available, ErrorCode.EXPORT_NOT_AVAILABLE)
        for role in range(KeyRole.ACCOUNT_UPDATE_KEY, ROLE_LAST):
            if len(self._keys[role]) > 0:
                raise PolicyViolationError(not_available, ErrorCode.EXPORT_NOT_AVAILABLE)
        private_key = add_hex_prefix(self._keys[KeyRole.TRANSACTION_KEY][0].private_key)
        return f"{private_key}0x00{add_hex_prefix(self.address)}"

    def copy(self) -> Keyring:
        """New keyring with the same address and new key lists of the same keys."""
        return Keyring(self.address, RoleBasedKeys([list(role_keys) for role_keys in self._keys]))

    # -- signing -----------------------------------------------------------

    def sign_with_key(self, transaction_hash: str, chain_id: Union[int, str], role: int,
                      index: int = 0) -> SignatureData:
        """
        Sign a transaction hash with one key of a role.

        Args:
            transaction_hash: '0x' + 64 hex digest
            chain_id: Chain id bound into the signature
            role: KeyRole to sign with
            index: Position of the key within the role's list

        Returns:
            SignatureData
        """
        digest = Digest32(transaction_hash)
        chain_id = _check_chain_id(chain_id)
        keys = self.get_key_by_role(role)
        index = _check_index(index, len(keys))
        logger.debug(f"Signing with {role_name(role)}[{index}] of {self.address}")
        return keys[index].sign(digest, chain_id)

    def sign_with_keys(self, transaction_hash: str, chain_id: Union[int, str],
                       role: int) -> List[SignatureData]:
        """Sign a transaction hash with every key of a role, in list order."""
        digest = Digest32(transaction_hash)
        chain_id = _check_chain_id(chain_id)
        keys = self.get_key_by_role(role)
        logger.debug(f"Signing with {len(keys)} keys of {role_name(role)} of {self.address}")
        return [key.sign(digest, chain_id) for key in keys]

    def sign_message(self, message: Union[str, bytes], role: Optional[int] = None,
                     index: Optional[int] = None) -> SignedMessage:
        """
        Sign a message with the Klaytn signed-message prefix.

        role and index must be given together or not at all; when both are
        omitted the first TRANSACTION_KEY is used.
        """
        message_hash = hash_message(message)
        if role is None and index is None:
            role = KeyRole.TRANSACTION_KEY
            if len(self._keys[role]) == 0:
                raise PolicyViolationError(
                    f"Default key({role_name(KeyRole.TRANSACTION_KEY)}) does not have enough keys to sign.",
                    ErrorCode.EMPTY_KEY
                )
            index = 0
        elif role is None or index is None:
            raise InvalidInputError(
                "To sign the given message, both role and index must be defined. "
                "If both role and index are not defined, this function signs the message "
                f"using the default key({role_name(KeyRole.TRANSACTION_KEY)}[0]).",
                ErrorCode.MISSING_PARAMETER
            )

        keys = self.get_key_by_role(role)
        index = _check_index(index, len(keys))
        signature = keys[index].sign_message(message_hash)
        return SignedMessage(message_hash=message_hash, signature=signature, message=message)

    # -- conversions -------------------------------------------------------

    def to_account(self, options=None, options_filler=None):
        """
        Build the account-key descriptor for this keyring.

        See klaytn_client.account.descriptor.build_account_descriptor.
        """
        from ..account.descriptor import build_account_descriptor
        return build_account_descriptor(self, options, options_filler)

    def encrypt(self, password: str, options=None, backend=None) -> Dict[str, Any]:
        """Encrypt into a v4 keystore."""
        from .keystore import encrypt
        return encrypt(self, password, options, backend=backend)

    def encrypt_v3(self, password: str, options=None, backend=None) -> Dict[str, Any]:
        """Encrypt into a v3 keystore; only single-key keyrings qualify."""
        from .keystore import encrypt_v3
        return encrypt_v3(self, password, options, backend=backend)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Keyring):
            return self.address == other.address and self._keys == other._keys
        return False

    def __repr__(self) -> str:
        return f"Keyring(address='{self.address}', keys={[len(role_keys) for role_keys in self._keys]})"


__all__ = ["Keyring", "SignedMessage", "resolve_role"]
