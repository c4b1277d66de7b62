from .factories import (
    KNOWN_PRIVATE_KEY, KNOWN_ADDRESS, ONE_PRIVATE_KEY, ONE_ADDRESS, GENERATOR_PUBLIC_KEY,
    DECOUPLED_ADDRESS, FEE_PAYER_ADDRESS, TX_HASH, CHAIN_ID, ANCHORED_DATA,
    mk_private_key_hex, mk_private_key, mk_keyring, mk_tx_fields, mk_anchoring_tx,
)
from .parity import assert_hex_equal

__all__ = [
    "KNOWN_PRIVATE_KEY",
    "KNOWN_ADDRESS",
    "ONE_PRIVATE_KEY",
    "ONE_ADDRESS",
    "GENERATOR_PUBLIC_KEY",
    "DECOUPLED_ADDRESS",
    "FEE_PAYER_ADDRESS",
    "TX_HASH",
    "CHAIN_ID",
    "ANCHORED_DATA",
    "mk_private_key_hex",
    "mk_private_key",
    "mk_keyring",
    "mk_tx_fields",
    "mk_anchoring_tx",
    "assert_hex_equal",
]
