"""
Key roles.

A keyring holds one ordered key list per role. The order is part of the
keystore and account-key wire formats and never changes.
"""

from enum import IntEnum


class KeyRole(IntEnum):
    """Functional slots a private key can be assigned to."""

    TRANSACTION_KEY = 0
    ACCOUNT_UPDATE_KEY = 1
    FEE_PAYER_KEY = 2


# Number of roles
ROLE_LAST = 3

# Maximum number of private keys a single role may hold
MAXIMUM_KEY_NUM = 10


def role_name(role: int) -> str:
    """Display name used in error messages, e.g. 'roleFeePayerKey'."""
    names = {
        KeyRole.TRANSACTION_KEY: "roleTransactionKey",
        KeyRole.ACCOUNT_UPDATE_KEY: "roleAccountUpdateKey",
        KeyRole.FEE_PAYER_KEY: "roleFeePayerKey",
    }
    return names.get(role, str(role))


__all__ = ["KeyRole", "ROLE_LAST", "MAXIMUM_KEY_NUM", "role_name"]
