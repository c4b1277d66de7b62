"""
Transaction type registry tests.
"""

import pytest

from klaytn_client.runtime.errors import InvalidInputError, ErrorCode
from klaytn_client.transaction import TxType, TX_TYPE_TAG, get_type_tag, tx_type_from_tag, is_fee_delegated


pytestmark = pytest.mark.unit


class TestTypeRegistry:
    """Test the tag table and lookups."""

    def test_every_type_has_a_tag(self):
        assert set(TX_TYPE_TAG) == set(TxType)

    def test_tags_are_unique(self):
        assert len(set(TX_TYPE_TAG.values())) == len(TX_TYPE_TAG)

    def test_chain_data_anchoring_family(self):
        assert TX_TYPE_TAG[TxType.CHAIN_DATA_ANCHORING] == "0x48"
        assert get_type_tag(TxType.FEE_DELEGATED_CHAIN_DATA_ANCHORING) == b"\x49"
        assert TX_TYPE_TAG[TxType.FEE_DELEGATED_CHAIN_DATA_ANCHORING_WITH_RATIO] == "0x4a"

    def test_lookup_by_tag(self):
        assert tx_type_from_tag(0x49) == TxType.FEE_DELEGATED_CHAIN_DATA_ANCHORING
        assert tx_type_from_tag(0x08) == TxType.VALUE_TRANSFER

    def test_unknown_tag(self):
        with pytest.raises(InvalidInputError, match="0x01") as exc_info:
            tx_type_from_tag(0x01)
        assert exc_info.value.code == ErrorCode.INVALID_TYPE_TAG

    def test_type_names_resolve(self):
        assert get_type_tag("TxTypeCancel") == b"\x38"

    def test_is_fee_delegated(self):
        assert is_fee_delegated(TxType.FEE_DELEGATED_CANCEL_WITH_RATIO)
        assert not is_fee_delegated(TxType.CANCEL)
