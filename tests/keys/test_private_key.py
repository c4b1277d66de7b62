"""
PrivateKey tests.

Covers construction rules, public key and address derivation, transaction
and message signing, and the message hashing preamble.
"""

import pytest

from helpers import (
    KNOWN_PRIVATE_KEY, KNOWN_ADDRESS, ONE_PRIVATE_KEY, ONE_ADDRESS, GENERATOR_PUBLIC_KEY,
    TX_HASH, CHAIN_ID,
)

from klaytn_client.crypto import keccak256
from klaytn_client.keys import Keyring, PrivateKey, hash_message, public_key_to_address
from klaytn_client.runtime.errors import InvalidInputError, ErrorCode


pytestmark = pytest.mark.unit


class TestPrivateKeyConstruction:
    """Test which inputs make a valid private key."""

    def test_accepts_prefixed_and_bare_hex(self):
        with_prefix = PrivateKey(KNOWN_PRIVATE_KEY)
        without_prefix = PrivateKey(KNOWN_PRIVATE_KEY[2:])

        assert with_prefix.private_key == KNOWN_PRIVATE_KEY
        assert without_prefix.private_key == KNOWN_PRIVATE_KEY
        assert with_prefix == without_prefix

    def test_upper_case_input_is_lower_cased(self):
        key = PrivateKey("0x" + KNOWN_PRIVATE_KEY[2:].upper())
        assert key.private_key == KNOWN_PRIVATE_KEY

    @pytest.mark.parametrize("bad_key", [
        "0x1234",
        "0x" + "zz" * 32,
        "0x" + "00" * 32,
        "0x" + "ff" * 32,
    ])
    def test_rejects_malformed_keys(self, bad_key):
        with pytest.raises(InvalidInputError) as exc_info:
            PrivateKey(bad_key)
        assert exc_info.value.code == ErrorCode.INVALID_KEY

    def test_rejects_wallet_key_format(self):
        wallet_key = f"{KNOWN_PRIVATE_KEY}0x00{KNOWN_ADDRESS}"
        with pytest.raises(InvalidInputError, match="create_from_klaytn_wallet_key") as exc_info:
            PrivateKey(wallet_key)
        assert exc_info.value.code == ErrorCode.INVALID_KEY_FORMAT

    def test_rejects_non_string(self):
        with pytest.raises(InvalidInputError):
            PrivateKey(12345)

    def test_generate_produces_distinct_valid_keys(self):
        first = PrivateKey.generate()
        second = PrivateKey.generate("some entropy")

        assert first != second
        assert len(first.to_bytes()) == 32
        assert PrivateKey(second.private_key) == second

    def test_repr_hides_secret(self):
        key = PrivateKey(KNOWN_PRIVATE_KEY)
        assert KNOWN_PRIVATE_KEY[2:] not in repr(key)
        assert KNOWN_ADDRESS in repr(key)


class TestDerivation:
    """Test public key and address derivation."""

    def test_known_address(self):
        assert PrivateKey(KNOWN_PRIVATE_KEY).get_derived_address() == KNOWN_ADDRESS

    def test_generator_point(self):
        key = PrivateKey(ONE_PRIVATE_KEY)

        assert key.get_public_key() == GENERATOR_PUBLIC_KEY
        assert key.get_derived_address() == ONE_ADDRESS

    def test_compressed_public_key(self):
        compressed = PrivateKey(ONE_PRIVATE_KEY).get_public_key(compressed=True)
        # y of the generator is even
        assert compressed == "0x02" + GENERATOR_PUBLIC_KEY[2:66]

    def test_address_from_tagged_and_untagged_public_key(self):
        untagged = bytes.fromhex(GENERATOR_PUBLIC_KEY[2:])
        assert public_key_to_address(untagged) == ONE_ADDRESS
        assert public_key_to_address(b"\x04" + untagged) == ONE_ADDRESS

    def test_address_rejects_wrong_length(self):
        with pytest.raises(InvalidInputError):
            public_key_to_address(b"\x04" * 10)


class TestTransactionSigning:
    """Test chain-bound digest signing."""

    def test_v_binds_chain_id(self):
        signature = PrivateKey(KNOWN_PRIVATE_KEY).sign(TX_HASH, CHAIN_ID)

        # recid + 1001 * 2 + 35
        assert signature.v in ("0x07f5", "0x07f6")
        assert len(signature.r) == 66
        assert len(signature.s) == 66

    def test_hex_chain_id_is_equivalent(self):
        key = PrivateKey(KNOWN_PRIVATE_KEY)
        assert key.sign(TX_HASH, CHAIN_ID) == key.sign(TX_HASH, hex(CHAIN_ID))

    def test_signing_is_deterministic(self):
        key = PrivateKey(KNOWN_PRIVATE_KEY)
        assert key.sign(TX_HASH, 1) == key.sign(TX_HASH, 1)

    def test_signature_recovers_signer(self):
        signature = PrivateKey(KNOWN_PRIVATE_KEY).sign(TX_HASH, CHAIN_ID)
        assert Keyring.recover(TX_HASH, signature, prefixed=True) == KNOWN_ADDRESS

    @pytest.mark.parametrize("bad_hash", [
        "0x1234",
        "5a" * 32,
        "0x" + "5a" * 33,
        "0x" + "zz" * 32,
    ])
    def test_rejects_malformed_digest(self, bad_hash):
        with pytest.raises(InvalidInputError) as exc_info:
            PrivateKey(KNOWN_PRIVATE_KEY).sign(bad_hash, CHAIN_ID)
        assert exc_info.value.code == ErrorCode.INVALID_HASH

    def test_requires_chain_id(self):
        with pytest.raises(InvalidInputError, match="chainId") as exc_info:
            PrivateKey(KNOWN_PRIVATE_KEY).sign(TX_HASH, None)
        assert exc_info.value.code == ErrorCode.MISSING_PARAMETER


class TestMessageSigning:
    """Test the signed-message scheme."""

    def test_hash_message_preamble(self):
        expected = keccak256(b"\x19Klaytn Signed Message:\n5hello")
        assert hash_message("hello") == "0x" + expected.hex()

    def test_hex_message_is_hashed_as_bytes(self):
        assert hash_message("0x68656c6c6f") == hash_message("hello")
        assert hash_message(b"hello") == hash_message("hello")

    def test_message_hash_differs_from_plain_keccak(self):
        assert hash_message("hello") != "0x" + keccak256(b"hello").hex()

    def test_sign_message_v(self):
        message_hash = hash_message("hello")
        signature = PrivateKey(KNOWN_PRIVATE_KEY).sign_message(message_hash)

        assert signature.v in ("0x1b", "0x1c")
        assert Keyring.recover(message_hash, signature, prefixed=True) == KNOWN_ADDRESS
