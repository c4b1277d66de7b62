"""
Wire-format comparison helper.

Compares encoded bytes against an expected hex string and reports the first
differing byte, which is far easier to read than two long hex strings.
"""


def assert_hex_equal(actual: bytes, expected_hex: str, ctx: str) -> None:
    """
    Assert that encoded bytes match an expected hex string.

    Args:
        actual: Encoded bytes
        expected_hex: Expected hex ('0x' and spaces allowed)
        ctx: What was encoded, for the failure message

    Raises:
        AssertionError: On mismatch, naming the first differing offset
    """
    expected_hex = expected_hex.replace(" ", "").lower()
    if expected_hex.startswith("0x"):
        expected_hex = expected_hex[2:]
    expected = bytes.fromhex(expected_hex)
    if actual == expected:
        return

    first_diff = next(
        (i for i in range(min(len(actual), len(expected))) if actual[i] != expected[i]),
        min(len(actual), len(expected)),
    )
    start = max(0, first_diff - 4)
    raise AssertionError(
        f"Encoding mismatch in {ctx}: lengths {len(actual)} vs {len(expected)}, "
        f"first difference at byte {first_diff}\n"
        f"   expected: {expected[start:first_diff + 5].hex()}\n"
        f"   actual:   {actual[start:first_diff + 5].hex()}"
    )
