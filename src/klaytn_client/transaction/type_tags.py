"""
Transaction type registry.

Every transaction variant is identified on the wire by a one-byte tag that
prefixes its RLP encoding. Each family has a basic, a fee-delegated and a
fee-delegated-with-ratio variant on consecutive tags.
"""

from enum import Enum
from typing import Dict

from ..runtime.errors import InvalidInputError, ErrorCode


class TxType(str, Enum):
    """Transaction type names."""

    VALUE_TRANSFER = "TxTypeValueTransfer"
    FEE_DELEGATED_VALUE_TRANSFER = "TxTypeFeeDelegatedValueTransfer"
    FEE_DELEGATED_VALUE_TRANSFER_WITH_RATIO = "TxTypeFeeDelegatedValueTransferWithRatio"

    VALUE_TRANSFER_MEMO = "TxTypeValueTransferMemo"
    FEE_DELEGATED_VALUE_TRANSFER_MEMO = "TxTypeFeeDelegatedValueTransferMemo"
    FEE_DELEGATED_VALUE_TRANSFER_MEMO_WITH_RATIO = "TxTypeFeeDelegatedValueTransferMemoWithRatio"

    ACCOUNT_UPDATE = "TxTypeAccountUpdate"
    FEE_DELEGATED_ACCOUNT_UPDATE = "TxTypeFeeDelegatedAccountUpdate"
    FEE_DELEGATED_ACCOUNT_UPDATE_WITH_RATIO = "TxTypeFeeDelegatedAccountUpdateWithRatio"

    SMART_CONTRACT_DEPLOY = "TxTypeSmartContractDeploy"
    FEE_DELEGATED_SMART_CONTRACT_DEPLOY = "TxTypeFeeDelegatedSmartContractDeploy"
    FEE_DELEGATED_SMART_CONTRACT_DEPLOY_WITH_RATIO = "TxTypeFeeDelegatedSmartContractDeployWithRatio"

    SMART_CONTRACT_EXECUTION = "TxTypeSmartContractExecution"
    FEE_DELEGATED_SMART_CONTRACT_EXECUTION = "TxTypeFeeDelegatedSmartContractExecution"
    FEE_DELEGATED_SMART_CONTRACT_EXECUTION_WITH_RATIO = "TxTypeFeeDelegatedSmartContractExecutionWithRatio"

    CANCEL = "TxTypeCancel"
    FEE_DELEGATED_CANCEL = "TxTypeFeeDelegatedCancel"
    FEE_DELEGATED_CANCEL_WITH_RATIO = "TxTypeFeeDelegatedCancelWithRatio"

    CHAIN_DATA_ANCHORING = "TxTypeChainDataAnchoring"
    FEE_DELEGATED_CHAIN_DATA_ANCHORING = "TxTypeFeeDelegatedChainDataAnchoring"
    FEE_DELEGATED_CHAIN_DATA_ANCHORING_WITH_RATIO = "TxTypeFeeDelegatedChainDataAnchoringWithRatio"


TX_TYPE_TAG: Dict[TxType, str] = {
    TxType.VALUE_TRANSFER: "0x08",
    TxType.FEE_DELEGATED_VALUE_TRANSFER: "0x09",
    TxType.FEE_DELEGATED_VALUE_TRANSFER_WITH_RATIO: "0x0a",

    TxType.VALUE_TRANSFER_MEMO: "0x10",
    TxType.FEE_DELEGATED_VALUE_TRANSFER_MEMO: "0x11",
    TxType.FEE_DELEGATED_VALUE_TRANSFER_MEMO_WITH_RATIO: "0x12",

    TxType.ACCOUNT_UPDATE: "0x20",
    TxType.FEE_DELEGATED_ACCOUNT_UPDATE: "0x21",
    TxType.FEE_DELEGATED_ACCOUNT_UPDATE_WITH_RATIO: "0x22",

    TxType.SMART_CONTRACT_DEPLOY: "0x28",
    TxType.FEE_DELEGATED_SMART_CONTRACT_DEPLOY: "0x29",
    TxType.FEE_DELEGATED_SMART_CONTRACT_DEPLOY_WITH_RATIO: "0x2a",

    TxType.SMART_CONTRACT_EXECUTION: "0x30",
    TxType.FEE_DELEGATED_SMART_CONTRACT_EXECUTION: "0x31",
    TxType.FEE_DELEGATED_SMART_CONTRACT_EXECUTION_WITH_RATIO: "0x32",

    TxType.CANCEL: "0x38",
    TxType.FEE_DELEGATED_CANCEL: "0x39",
    TxType.FEE_DELEGATED_CANCEL_WITH_RATIO: "0x3a",

    TxType.CHAIN_DATA_ANCHORING: "0x48",
    TxType.FEE_DELEGATED_CHAIN_DATA_ANCHORING: "0x49",
    TxType.FEE_DELEGATED_CHAIN_DATA_ANCHORING_WITH_RATIO: "0x4a",
}


def get_type_tag(tx_type: TxType) -> bytes:
    """One-byte wire tag of a transaction type."""
    return bytes.fromhex(TX_TYPE_TAG[TxType(tx_type)][2:])


def tx_type_from_tag(tag: int) -> TxType:
    """
    Transaction type identified by a tag byte.

    Raises:
        InvalidInputError: If no type uses the tag
    """
    for tx_type, tag_hex in TX_TYPE_TAG.items():
        if int(tag_hex, 16) == tag:
            return tx_type
    raise InvalidInputError(f"Unknown transaction type tag: 0x{tag:02x}", ErrorCode.INVALID_TYPE_TAG)


def is_fee_delegated(tx_type: TxType) -> bool:
    return TxType(tx_type).value.startswith("TxTypeFeeDelegated")


__all__ = ["TxType", "TX_TYPE_TAG", "get_type_tag", "tx_type_from_tag", "is_fee_delegated"]
