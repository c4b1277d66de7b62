"""
Fee-delegated chain data anchoring transaction (type tag 0x49).

Wire form:
    0x49 || RLP([nonce, gasPrice, gas, from, input, signatures, feePayer, feePayerSignatures])

Sender signing payload:
    RLP([0x49, nonce, gasPrice, gas, from, input])
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Union

import rlp
from rlp.exceptions import DecodingError

from ..keys.signature_data import SignatureData
from ..runtime.errors import InvalidInputError, PolicyViolationError, ErrorCode
from ..runtime.hexutil import (
    is_hex, add_hex_prefix, hex_to_bytes, bytes_to_hex,
    int_to_big_endian, big_endian_to_int, trim_leading_zero,
)
from .base import AbstractFeeDelegatedTransaction, EMPTY_FEE_PAYER
from .type_tags import TxType, TX_TYPE_TAG, get_type_tag

logger = logging.getLogger(__name__)

TX_TYPE = TxType.FEE_DELEGATED_CHAIN_DATA_ANCHORING
TYPE_TAG = get_type_tag(TX_TYPE)


def _raw_to_bytes(raw: Union[str, bytes]) -> bytes:
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw)
    if isinstance(raw, str) and is_hex(raw):
        return hex_to_bytes(raw)
    raise InvalidInputError(f"Invalid RLP-encoded transaction: {raw!r}", ErrorCode.DECODE_ERROR)


def _decode_fields(raw: Union[str, bytes]) -> Dict[str, Any]:
    data = _raw_to_bytes(raw)
    if not data.startswith(TYPE_TAG):
        raise InvalidInputError(
            f"Cannot decode to FeeDelegatedChainDataAnchoring. The prefix must be "
            f"{TX_TYPE_TAG[TX_TYPE]}: {bytes_to_hex(data[:1])}",
            ErrorCode.INVALID_TYPE_TAG
        )

    try:
        items = rlp.decode(data[len(TYPE_TAG):])
    except DecodingError as e:
        raise InvalidInputError(f"Invalid RLP encoding: {e}", ErrorCode.DECODE_ERROR, cause=e)
    if not isinstance(items, list) or len(items) != 8:
        raise InvalidInputError("Invalid RLP encoding: expected 8 fields", ErrorCode.DECODE_ERROR)

    nonce, gas_price, gas, sender, input_data, signatures, fee_payer, fee_payer_signatures = items
    for name, value in (("nonce", nonce), ("gasPrice", gas_price), ("gas", gas), ("from", sender),
                        ("input", input_data), ("feePayer", fee_payer)):
        if not isinstance(value, bytes):
            raise InvalidInputError(f"Invalid RLP encoding: {name} must be a byte string", ErrorCode.DECODE_ERROR)
    if not isinstance(signatures, list) or not isinstance(fee_payer_signatures, list):
        raise InvalidInputError("Invalid RLP encoding: signatures must be lists", ErrorCode.DECODE_ERROR)

    return {
        "nonce": big_endian_to_int(trim_leading_zero(nonce)),
        "gasPrice": big_endian_to_int(trim_leading_zero(gas_price)),
        "gas": big_endian_to_int(trim_leading_zero(gas)),
        "from": bytes_to_hex(sender),
        "input": bytes_to_hex(input_data),
        "signatures": [SignatureData.from_rlp(sig) for sig in signatures],
        "feePayer": bytes_to_hex(fee_payer) if fee_payer else EMPTY_FEE_PAYER,
        "feePayerSignatures": [SignatureData.from_rlp(sig) for sig in fee_payer_signatures],
    }


class FeeDelegatedChainDataAnchoring(AbstractFeeDelegatedTransaction):
    """
    Anchors arbitrary service-chain data on the main chain, with the fee paid
    by a fee payer.

    Example:
        tx = FeeDelegatedChainDataAnchoring({
            "from": sender, "gas": 90000, "nonce": 0, "gasPrice": 25000000000,
            "chainId": 1001, "input": anchored_data,
        })
        tx.sign(keyring)
        raw = tx.get_raw_transaction()
    """

    def __init__(self, create_tx_obj: Union[Dict[str, Any], str, bytes]):
        """
        Args:
            create_tx_obj: Field mapping by wire name, or an RLP-encoded
                transaction as bytes or hex
        """
        if isinstance(create_tx_obj, (str, bytes, bytearray)):
            create_tx_obj = _decode_fields(create_tx_obj)
        if not isinstance(create_tx_obj, dict):
            raise InvalidInputError(f"Invalid transaction object: {create_tx_obj!r}", ErrorCode.MISSING_PARAMETER)
        super().__init__(TX_TYPE, create_tx_obj)

        if create_tx_obj.get("input") is not None and create_tx_obj.get("data") is not None:
            raise PolicyViolationError(
                "'input' and 'data' properties cannot be defined at the same time, please use either "
                "'input' or 'data'.",
                ErrorCode.CONFLICTING_FIELDS
            )
        input_data = create_tx_obj.get("input")
        self.input = input_data if input_data is not None else create_tx_obj.get("data")

    @classmethod
    def decode(cls, raw: Union[str, bytes], chain_id: Optional[Union[int, str]] = None) -> FeeDelegatedChainDataAnchoring:
        """
        Decode an RLP-encoded transaction.

        Numeric fields are canonicalized by stripping leading zero bytes.

        Args:
            raw: Encoded transaction, bytes or hex
            chain_id: Chain id to attach; the encoding does not carry one

        Returns:
            FeeDelegatedChainDataAnchoring
        """
        fields = _decode_fields(raw)
        if chain_id is not None:
            fields["chainId"] = chain_id
        tx = cls(fields)
        logger.debug(f"Decoded {TX_TYPE.value} with {len(tx.signatures)} signatures and "
                     f"{len(tx.fee_payer_signatures)} fee payer signatures")
        return tx

    @property
    def input(self) -> str:
        """Anchored data as '0x' hex."""
        return self._input

    @input.setter
    def input(self, input_data: str) -> None:
        if isinstance(input_data, (bytes, bytearray)):
            input_data = bytes_to_hex(input_data)
        if input_data is None:
            raise InvalidInputError("input is missing", ErrorCode.MISSING_PARAMETER)
        if not is_hex(input_data) or add_hex_prefix(input_data) == "0x":
            raise InvalidInputError(f"Invalid input data {input_data!r}", ErrorCode.INVALID_HEX)
        self._input = bytes_to_hex(hex_to_bytes(input_data))

    @property
    def data(self) -> str:
        """Alias of input."""
        return self._input

    def get_rlp_encoding(self) -> bytes:
        """
        Full wire encoding.

        Raises:
            InvalidInputError: If nonce, gasPrice or chainId is undefined
        """
        self.validate_optional_values()
        fee_payer = b"" if self._fee_payer == EMPTY_FEE_PAYER else hex_to_bytes(self._fee_payer)
        encoded = TYPE_TAG + rlp.encode([
            int_to_big_endian(self._nonce),
            int_to_big_endian(self._gas_price),
            int_to_big_endian(self._gas),
            hex_to_bytes(self._from),
            hex_to_bytes(self._input),
            [sig.to_rlp() for sig in self._signatures],
            fee_payer,
            [sig.to_rlp() for sig in self._fee_payer_signatures],
        ])
        logger.debug(f"Encoded {TX_TYPE.value} ({len(encoded)} bytes)")
        return encoded

    def get_common_rlp_encoding_for_signature(self) -> bytes:
        """Sender signing payload; signatures and fee payer fields are excluded."""
        self.validate_optional_values()
        return rlp.encode([
            TYPE_TAG,
            int_to_big_endian(self._nonce),
            int_to_big_endian(self._gas_price),
            int_to_big_endian(self._gas),
            hex_to_bytes(self._from),
            hex_to_bytes(self._input),
        ])

    def _field_tuple(self):
        return super()._field_tuple() + (self._input,)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["input"] = self._input
        return result


__all__ = ["FeeDelegatedChainDataAnchoring"]
