"""Runtime helpers for the Klaytn signing and serialization core"""

from .errors import (
    ErrorCode, KlaytnError, InvalidInputError, AuthenticationError,
    UnsupportedAlgorithmError, PolicyViolationError,
)
from .types import Address, Digest32

__all__ = [
    "ErrorCode",
    "KlaytnError",
    "InvalidInputError",
    "AuthenticationError",
    "UnsupportedAlgorithmError",
    "PolicyViolationError",
    "Address",
    "Digest32",
]
