"""
Klaytn Python client core.

Role-based multi-key keyrings, password-protected keystores (v3/v4),
account-key descriptors and the typed transaction RLP codec.
"""

# Errors and value types
from .runtime.errors import (
    ErrorCode, KlaytnError, InvalidInputError, AuthenticationError,
    UnsupportedAlgorithmError, PolicyViolationError,
)
from .runtime.types import Address, Digest32

# Cryptographic backend
from .crypto import keccak256, CryptoBackend, DefaultCryptoBackend

# Keys and keystores
from .keys import (
    KeyRole, ROLE_LAST, MAXIMUM_KEY_NUM, SignatureData, PrivateKey,
    SingleKey, MultipleKeys, RoleBasedKeys, Keyring, SignedMessage, KeystoreOptions,
)

# Account keys
from .account import (
    WeightedMultiSigOptions, DefaultWeightedOptionsFiller, AccountKeyType, AccountDescriptor,
)

# Transactions
from .transaction import TxType, TX_TYPE_TAG, FeeDelegatedChainDataAnchoring

__version__ = "0.1.0"
__all__ = [
    # Errors
    "ErrorCode",
    "KlaytnError",
    "InvalidInputError",
    "AuthenticationError",
    "UnsupportedAlgorithmError",
    "PolicyViolationError",

    # Value types
    "Address",
    "Digest32",

    # Crypto
    "keccak256",
    "CryptoBackend",
    "DefaultCryptoBackend",

    # Keys
    "KeyRole",
    "ROLE_LAST",
    "MAXIMUM_KEY_NUM",
    "SignatureData",
    "PrivateKey",
    "SingleKey",
    "MultipleKeys",
    "RoleBasedKeys",
    "Keyring",
    "SignedMessage",
    "KeystoreOptions",

    # Accounts
    "WeightedMultiSigOptions",
    "DefaultWeightedOptionsFiller",
    "AccountKeyType",
    "AccountDescriptor",

    # Transactions
    "TxType",
    "TX_TYPE_TAG",
    "FeeDelegatedChainDataAnchoring",

    "__version__",
]
