"""
Test factories for keys, keyrings and transactions.

Everything here is deterministic so expected values can be compared across
runs.
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from klaytn_client.keys import Keyring, PrivateKey
from klaytn_client.transaction import FeeDelegatedChainDataAnchoring

# Well-known secp256k1 test key and its address
KNOWN_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
KNOWN_ADDRESS = "0x2c7536e3605d9c16a7a3d7b1898e529396a65c23"

# Private key 1 maps to the generator point
ONE_PRIVATE_KEY = "0x" + "00" * 31 + "01"
ONE_ADDRESS = "0x7e5f4552091a69125d5dfcb7b8c2659029395bdf"
GENERATOR_PUBLIC_KEY = (
    "0x79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
    "483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8"
)

DECOUPLED_ADDRESS = "0x" + "ab" * 20
FEE_PAYER_ADDRESS = "0x" + "cd" * 20
TX_HASH = "0x" + "5a" * 32
CHAIN_ID = 1001
ANCHORED_DATA = "0xf8a6f8a4a0" + "11" * 32


def mk_private_key_hex(seed: int) -> str:
    """
    Deterministic private key string.

    Args:
        seed: Non-negative integer; the key scalar is seed + 1

    Returns:
        '0x' + 64 hex private key
    """
    return f"0x{seed + 1:064x}"


def mk_private_key(seed: int) -> PrivateKey:
    return PrivateKey(mk_private_key_hex(seed))


def mk_keyring(seed: int = 0) -> Keyring:
    """Single-key keyring whose address is derived from its key."""
    return Keyring.create_from_private_key(mk_private_key_hex(seed))


def mk_tx_fields(sender: str = KNOWN_ADDRESS, **overrides: Any) -> Dict[str, Any]:
    """
    Field mapping for a fee-delegated chain data anchoring transaction.

    Args:
        sender: Sender address
        **overrides: Fields to replace or add, by wire name

    Returns:
        Field mapping ready for the transaction constructor
    """
    fields: Dict[str, Any] = {
        "from": sender,
        "nonce": 1234,
        "gasPrice": "0x19",
        "gas": "0xf4240",
        "chainId": CHAIN_ID,
        "input": ANCHORED_DATA,
    }
    fields.update(overrides)
    return fields


def mk_anchoring_tx(sender: str = KNOWN_ADDRESS, fee_payer: Optional[str] = None,
                    **overrides: Any) -> FeeDelegatedChainDataAnchoring:
    fields = mk_tx_fields(sender, **overrides)
    if fee_payer is not None:
        fields["feePayer"] = fee_payer
    return FeeDelegatedChainDataAnchoring(fields)
