"""
Hex, address and quantity helper tests.
"""

import pytest

from klaytn_client.runtime.errors import InvalidInputError, ErrorCode
from klaytn_client.runtime.hexutil import (
    is_hex, is_hex_strict, is_address, is_valid_hash_strict, is_valid_private_key,
    is_klaytn_wallet_key, parse_klaytn_wallet_key, hex_to_bytes, bytes_to_hex,
    to_int, to_hex, int_to_big_endian, big_endian_to_int, trim_leading_zero,
)
from klaytn_client.keys import PrivateKey
from klaytn_client.runtime.types import Address, Digest32
from klaytn_client.transaction import FeeDelegatedChainDataAnchoring


pytestmark = pytest.mark.unit

ADDRESS = "0x2c7536e3605d9c16a7a3d7b1898e529396a65c23"
PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"


class TestPredicates:
    """Test the boolean format checks."""

    def test_is_hex(self):
        assert is_hex("0x1234")
        assert is_hex("abcdef")
        assert not is_hex("0xzz")
        assert not is_hex(1234)

    def test_is_hex_strict(self):
        assert is_hex_strict("0x1234")
        assert not is_hex_strict("1234")

    def test_is_address(self):
        assert is_address(ADDRESS)
        assert is_address(ADDRESS[2:])
        assert is_address(ADDRESS.upper().replace("0X", "0x"))
        assert not is_address(ADDRESS[:-2])

    def test_is_valid_hash_strict(self):
        assert is_valid_hash_strict("0x" + "ab" * 32)
        assert not is_valid_hash_strict("ab" * 32)
        assert not is_valid_hash_strict("0x" + "ab" * 31)

    def test_is_valid_private_key_range(self):
        assert is_valid_private_key(PRIVATE_KEY)
        assert not is_valid_private_key("0x" + "00" * 32)
        assert not is_valid_private_key(
            "0xfffffffffffffffffffffffffffffffebaaedce6af48a03bbfd25e8cd0364141"
        )


class TestWalletKey:
    """Test the legacy compact wallet-key format."""

    def test_parse(self):
        key, key_type, address = parse_klaytn_wallet_key(f"{PRIVATE_KEY}0x00{ADDRESS}")

        assert key == PRIVATE_KEY
        assert key_type == "0x00"
        assert address == ADDRESS

    def test_without_leading_prefix(self):
        assert is_klaytn_wallet_key(f"{PRIVATE_KEY[2:]}0x00{ADDRESS}")

    def test_rejects_other_types(self):
        assert not is_klaytn_wallet_key(f"{PRIVATE_KEY}0x01{ADDRESS}")
        with pytest.raises(InvalidInputError):
            parse_klaytn_wallet_key(f"{PRIVATE_KEY}0x01{ADDRESS}")


class TestConversions:
    """Test hex and quantity conversions."""

    def test_hex_to_bytes_pads_odd_length(self):
        assert hex_to_bytes("0x123") == b"\x01\x23"
        assert hex_to_bytes("0x") == b""

    def test_hex_to_bytes_rejects_non_hex(self):
        with pytest.raises(InvalidInputError) as exc_info:
            hex_to_bytes("0xzz")
        assert exc_info.value.code == ErrorCode.INVALID_HEX

    def test_bytes_to_hex(self):
        assert bytes_to_hex(b"\x00\xff") == "0x00ff"

    @pytest.mark.parametrize("value,expected", [
        (1001, 1001),
        ("0x3e9", 1001),
        ("1001", 1001),
        ("0x", 0),
        (0, 0),
    ])
    def test_to_int(self, value, expected):
        assert to_int(value) == expected

    @pytest.mark.parametrize("value", [-1, True, "abc", "0xzz", None])
    def test_to_int_rejects(self, value):
        with pytest.raises(InvalidInputError):
            to_int(value)

    def test_to_hex(self):
        assert to_hex(1001) == "0x3e9"
        assert to_hex(0) == "0x0"

    def test_minimal_big_endian(self):
        assert int_to_big_endian(0) == b""
        assert int_to_big_endian(1) == b"\x01"
        assert int_to_big_endian(256) == b"\x01\x00"

    def test_leading_zeros(self):
        assert trim_leading_zero(b"\x00\x00\x01\x00") == b"\x01\x00"
        assert big_endian_to_int(b"\x00\x01\x00") == 256
        assert big_endian_to_int(b"") == 0


class TestValueTypes:
    """Test Address and Digest32."""

    def test_address_normalizes(self):
        address = Address(ADDRESS.upper().replace("0X", "0x"))

        assert str(address) == ADDRESS
        assert address == ADDRESS
        assert address == Address(ADDRESS[2:])
        assert len(address.to_bytes()) == 20

    def test_address_rejects_malformed(self):
        with pytest.raises(InvalidInputError) as exc_info:
            Address("0x1234")
        assert exc_info.value.code == ErrorCode.INVALID_ADDRESS

    def test_digest_from_bytes(self):
        digest = Digest32(b"\xab" * 32)
        assert digest == "0x" + "ab" * 32

    @pytest.mark.parametrize("value", ["ab" * 32, "0x" + "ab" * 31, b"\x00" * 31])
    def test_digest_rejects_malformed(self, value):
        with pytest.raises(InvalidInputError) as exc_info:
            Digest32(value)
        assert exc_info.value.code == ErrorCode.INVALID_HASH


class TestTrailingNewline:
    """A trailing newline never passes a format check."""

    @pytest.mark.parametrize("check,value", [
        (is_hex, "0x1234\n"),
        (is_hex_strict, "0x1234\n"),
        (is_address, ADDRESS + "\n"),
        (is_valid_hash_strict, "0x" + "11" * 32 + "\n"),
        (is_valid_private_key, PRIVATE_KEY + "\n"),
    ])
    def test_predicates_reject(self, check, value):
        assert not check(value)

    def test_address_rejects(self):
        with pytest.raises(InvalidInputError) as exc_info:
            Address(ADDRESS + "\n")
        assert exc_info.value.code == ErrorCode.INVALID_ADDRESS

    def test_digest_rejects(self):
        with pytest.raises(InvalidInputError) as exc_info:
            Digest32("0x" + "11" * 32 + "\n")
        assert exc_info.value.code == ErrorCode.INVALID_HASH

    def test_private_key_rejects(self):
        with pytest.raises(InvalidInputError) as exc_info:
            PrivateKey(PRIVATE_KEY + "\n")
        assert exc_info.value.code == ErrorCode.INVALID_KEY

    def test_transaction_sender_rejects(self):
        with pytest.raises(InvalidInputError) as exc_info:
            FeeDelegatedChainDataAnchoring({"from": ADDRESS + "\n", "gas": "0xf4240", "input": "0x01"})
        assert exc_info.value.code == ErrorCode.INVALID_ADDRESS

    @pytest.mark.parametrize("value", ["1001\n", "0x3e9\n", "٣"])
    def test_to_int_rejects(self, value):
        with pytest.raises(InvalidInputError):
            to_int(value)

    def test_hex_to_bytes_rejects(self):
        with pytest.raises(InvalidInputError):
            hex_to_bytes("0x1234\n")
