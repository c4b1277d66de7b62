"""
Typed transaction codecs.

Provides the transaction type registry, the shared transaction base classes
and the fee-delegated chain data anchoring codec.
"""

from .type_tags import TxType, TX_TYPE_TAG, get_type_tag, tx_type_from_tag, is_fee_delegated
from .base import AbstractTransaction, AbstractFeeDelegatedTransaction
from .fee_delegated_chain_data_anchoring import FeeDelegatedChainDataAnchoring

__all__ = [
    "TxType",
    "TX_TYPE_TAG",
    "get_type_tag",
    "tx_type_from_tag",
    "is_fee_delegated",
    "AbstractTransaction",
    "AbstractFeeDelegatedTransaction",
    "FeeDelegatedChainDataAnchoring",
]
