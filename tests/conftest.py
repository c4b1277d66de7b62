"""
Test bootstrap:
- Make tests/helpers importable at collection time
- Provide deterministic keys, keyrings and fast keystore options
"""

import sys
import pathlib
import pytest

TESTS_DIR = pathlib.Path(__file__).parent

# Ensure tests/helpers importability at collect-time
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from helpers import DECOUPLED_ADDRESS, KNOWN_PRIVATE_KEY, mk_private_key_hex  # noqa: E402

from klaytn_client.keys import Keyring  # noqa: E402


@pytest.fixture
def private_keys():
    """Ten distinct deterministic private key strings."""
    return [mk_private_key_hex(i) for i in range(10)]


@pytest.fixture
def single_keyring():
    return Keyring.create_from_private_key(KNOWN_PRIVATE_KEY)


@pytest.fixture
def multiple_keyring(private_keys):
    return Keyring.create_with_multiple_key(DECOUPLED_ADDRESS, private_keys[:3])


@pytest.fixture
def role_based_keyring(private_keys):
    return Keyring.create_with_role_based_key(
        DECOUPLED_ADDRESS,
        [private_keys[:2], [private_keys[2]], private_keys[3:6]],
    )


@pytest.fixture
def fast_scrypt_options():
    """scrypt options with fixed randomness and a tiny work factor."""
    return {
        "salt": "0x" + "11" * 32,
        "iv": "0x" + "22" * 16,
        "uuid": b"\x33" * 16,
        "kdf": "scrypt",
        "n": 16,
        "r": 8,
        "p": 1,
    }


@pytest.fixture
def fast_pbkdf2_options():
    """pbkdf2 options with fixed randomness and few iterations."""
    return {
        "salt": "0x" + "11" * 32,
        "iv": "0x" + "22" * 16,
        "uuid": b"\x33" * 16,
        "kdf": "pbkdf2",
        "c": 2,
    }
