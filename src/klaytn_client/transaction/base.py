"""
Base classes for typed transactions.

A transaction holds the fields common to every variant (sender, nonce, gas,
gas price, chain id, sender signatures) and defines the envelope contract:
the full RLP encoding prefixed by the type tag, and the signing payload whose
hash a keyring signs. Fee-delegated variants add a fee payer and its own
signature list.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from ..crypto.primitives import keccak256
from ..keys.keyring import Keyring
from ..keys.roles import KeyRole
from ..keys.signature_data import SignatureData, refine_signatures
from ..runtime.errors import InvalidInputError, ErrorCode
from ..runtime.hexutil import bytes_to_hex, to_int, to_hex, is_address
from ..runtime.types import Address
from .type_tags import TxType, get_type_tag

logger = logging.getLogger(__name__)

EMPTY_FEE_PAYER = "0x"


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else to_int(value)


class AbstractTransaction(ABC):
    """
    Fields and behavior shared by all transaction types.

    Setters validate before assigning, so a rejected value leaves the
    transaction unchanged.
    """

    def __init__(self, tx_type: TxType, create_tx_obj: Dict[str, Any]):
        """
        Args:
            tx_type: Transaction type
            create_tx_obj: Field mapping using wire names ('from', 'nonce',
                'gasPrice', 'gas', 'chainId', 'signatures')
        """
        if not isinstance(create_tx_obj, dict):
            raise InvalidInputError(f"Invalid transaction object: {create_tx_obj!r}", ErrorCode.MISSING_PARAMETER)
        self._type = TxType(tx_type)
        self.from_address = create_tx_obj.get("from")
        if create_tx_obj.get("gas") is None:
            raise InvalidInputError("gas is missing", ErrorCode.MISSING_PARAMETER)
        self.gas = create_tx_obj["gas"]
        self.nonce = create_tx_obj.get("nonce")
        self.gas_price = create_tx_obj.get("gasPrice")
        self.chain_id = create_tx_obj.get("chainId")
        self.signatures = create_tx_obj.get("signatures") or []

    # -- fields ------------------------------------------------------------

    @property
    def type(self) -> TxType:
        return self._type

    @property
    def type_tag(self) -> bytes:
        return get_type_tag(self._type)

    @property
    def from_address(self) -> str:
        """Sender address ('from' on the wire)."""
        return self._from

    @from_address.setter
    def from_address(self, address: Union[str, Address]) -> None:
        if address is None:
            raise InvalidInputError("from is missing", ErrorCode.MISSING_PARAMETER)
        if not isinstance(address, Address) and not is_address(address):
            raise InvalidInputError(f"Invalid address of from: {address}", ErrorCode.INVALID_ADDRESS)
        self._from = str(Address(str(address)))

    @property
    def nonce(self) -> Optional[int]:
        return self._nonce

    @nonce.setter
    def nonce(self, nonce: Optional[Union[int, str]]) -> None:
        self._nonce = _optional_int(nonce)

    @property
    def gas(self) -> int:
        return self._gas

    @gas.setter
    def gas(self, gas: Union[int, str]) -> None:
        self._gas = to_int(gas)

    @property
    def gas_price(self) -> Optional[int]:
        return self._gas_price

    @gas_price.setter
    def gas_price(self, gas_price: Optional[Union[int, str]]) -> None:
        self._gas_price = _optional_int(gas_price)

    @property
    def chain_id(self) -> Optional[int]:
        return self._chain_id

    @chain_id.setter
    def chain_id(self, chain_id: Optional[Union[int, str]]) -> None:
        self._chain_id = _optional_int(chain_id)

    @property
    def signatures(self) -> List[SignatureData]:
        return self._signatures

    @signatures.setter
    def signatures(self, signatures: Iterable[Any]) -> None:
        self._signatures = refine_signatures(signatures)

    # -- encoding ----------------------------------------------------------

    @abstractmethod
    def get_rlp_encoding(self) -> bytes:
        """Type tag followed by the RLP list of every field."""
        pass

    @abstractmethod
    def get_common_rlp_encoding_for_signature(self) -> bytes:
        """RLP list of the type tag and the fields the sender signs."""
        pass

    def get_rlp_encoding_for_signature(self) -> bytes:
        """Bytes hashed to produce the sender's signing digest."""
        return self.get_common_rlp_encoding_for_signature()

    def get_raw_transaction(self) -> str:
        """RLP encoding as '0x' hex."""
        return bytes_to_hex(self.get_rlp_encoding())

    def get_transaction_hash(self) -> str:
        """Keccak-256 of the RLP encoding."""
        return bytes_to_hex(keccak256(self.get_rlp_encoding()))

    def validate_optional_values(self) -> None:
        """
        Check the fields an encoder needs but construction does not require.

        Raises:
            InvalidInputError: If nonce, gasPrice or chainId is undefined
        """
        for name, value in (("nonce", self._nonce), ("gasPrice", self._gas_price), ("chainId", self._chain_id)):
            if value is None:
                raise InvalidInputError(f"{name} is undefined. Define {name} in the transaction before encoding.",
                                        ErrorCode.MISSING_PARAMETER)

    # -- signing -----------------------------------------------------------

    def sign(self, keyring: Union[Keyring, str], index: Optional[int] = None,
             hasher: Callable[[bytes], bytes] = keccak256) -> AbstractTransaction:
        """
        Sign as the sender and append the signatures.

        Args:
            keyring: Keyring, or a private key / wallet key string
            index: Sign with only this TRANSACTION_KEY; all keys when None
            hasher: Hash applied to the signing payload

        Returns:
            Self, with the new signatures appended
        """
        if isinstance(keyring, str):
            keyring = Keyring.create_from_private_key(keyring)
        if not isinstance(keyring, Keyring):
            raise InvalidInputError("Unsupported keyring type. Use a Keyring or a private key string.",
                                    ErrorCode.INVALID_KEY_FORMAT)
        if keyring.address.lower() != self._from:
            raise InvalidInputError(
                "The from address of the transaction is different with the address of the keyring to use.",
                ErrorCode.INVALID_ADDRESS
            )
        self.validate_optional_values()

        tx_hash = bytes_to_hex(hasher(self.get_rlp_encoding_for_signature()))
        if index is None:
            signatures = keyring.sign_with_keys(tx_hash, self._chain_id, KeyRole.TRANSACTION_KEY)
        else:
            signatures = [keyring.sign_with_key(tx_hash, self._chain_id, KeyRole.TRANSACTION_KEY, index)]
        logger.debug(f"Signed {self._type.value} with {len(signatures)} keys of {keyring.address}")

        self.append_signatures(signatures)
        return self

    def append_signatures(self, signatures: Iterable[Any]) -> None:
        """Merge signatures into the sender signature list."""
        self.signatures = self._signatures + refine_signatures(signatures)

    # -- conversions -------------------------------------------------------

    def _field_tuple(self) -> Tuple[Any, ...]:
        # wire fields only; the encoding does not carry chainId
        return (
            self._type, self._from, self._nonce, self._gas_price, self._gas, tuple(self._signatures),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Fields by wire name with quantities as '0x' hex."""
        return {
            "type": self._type.value,
            "from": self._from,
            "nonce": to_hex(self._nonce) if self._nonce is not None else None,
            "gas": to_hex(self._gas),
            "gasPrice": to_hex(self._gas_price) if self._gas_price is not None else None,
            "chainId": to_hex(self._chain_id) if self._chain_id is not None else None,
            "signatures": [sig.to_list() for sig in self._signatures],
        }

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return False
        return self._field_tuple() == other._field_tuple()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(from='{self._from}', nonce={self._nonce}, gas={self._gas})"


class AbstractFeeDelegatedTransaction(AbstractTransaction):
    """
    Transaction whose fee is paid by a separate fee payer.

    feePayer is '0x' until a fee payer is assigned.
    """

    def __init__(self, tx_type: TxType, create_tx_obj: Dict[str, Any]):
        super().__init__(tx_type, create_tx_obj)
        self.fee_payer = create_tx_obj.get("feePayer")
        self.fee_payer_signatures = create_tx_obj.get("feePayerSignatures") or []

    @property
    def fee_payer(self) -> str:
        return self._fee_payer

    @fee_payer.setter
    def fee_payer(self, fee_payer: Optional[Union[str, Address]]) -> None:
        if fee_payer is None or fee_payer == EMPTY_FEE_PAYER:
            self._fee_payer = EMPTY_FEE_PAYER
            return
        if not isinstance(fee_payer, Address) and not is_address(fee_payer):
            raise InvalidInputError(f"Invalid address of fee payer: {fee_payer}", ErrorCode.INVALID_ADDRESS)
        self._fee_payer = str(Address(str(fee_payer)))

    @property
    def fee_payer_signatures(self) -> List[SignatureData]:
        return self._fee_payer_signatures

    @fee_payer_signatures.setter
    def fee_payer_signatures(self, signatures: Iterable[Any]) -> None:
        self._fee_payer_signatures = refine_signatures(signatures)

    def append_fee_payer_signatures(self, signatures: Iterable[Any]) -> None:
        """Merge signatures into the fee payer signature list."""
        self.fee_payer_signatures = self._fee_payer_signatures + refine_signatures(signatures)

    def _field_tuple(self) -> Tuple[Any, ...]:
        return super()._field_tuple() + (self._fee_payer, tuple(self._fee_payer_signatures))

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["feePayer"] = self._fee_payer
        result["feePayerSignatures"] = [sig.to_list() for sig in self._fee_payer_signatures]
        return result


__all__ = ["AbstractTransaction", "AbstractFeeDelegatedTransaction", "EMPTY_FEE_PAYER"]
