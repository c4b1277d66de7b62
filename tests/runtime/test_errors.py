"""
Error model tests.
"""

import pytest

from klaytn_client.runtime.errors import (
    ErrorCode, KlaytnError, InvalidInputError, AuthenticationError,
    UnsupportedAlgorithmError, PolicyViolationError,
)


pytestmark = pytest.mark.unit


class TestErrorModel:
    """Test the exception families and their serialization."""

    def test_str_includes_code(self):
        error = InvalidInputError("bad address", ErrorCode.INVALID_ADDRESS)
        assert str(error) == "[INVALID_ADDRESS] bad address"

    def test_invalid_input_is_value_error(self):
        assert isinstance(InvalidInputError("x"), ValueError)

    def test_families_share_base(self):
        for error in (InvalidInputError("x"), AuthenticationError(), UnsupportedAlgorithmError("x"),
                      PolicyViolationError("x")):
            assert isinstance(error, KlaytnError)

    def test_authentication_default_message(self):
        error = AuthenticationError()

        assert error.code == ErrorCode.WRONG_PASSWORD
        assert "possibly wrong password" in error.message

    def test_cause_and_details(self):
        cause = ValueError("boom")
        error = UnsupportedAlgorithmError("no kdf", ErrorCode.UNSUPPORTED_KDF, details={"kdf": "argon2"},
                                          cause=cause)

        assert error.cause is cause
        assert "Caused by: boom" in str(error)
        assert error.to_dict() == {
            "code": ErrorCode.UNSUPPORTED_KDF.value,
            "message": "no kdf",
            "details": {"kdf": "argon2"},
            "cause": "boom",
        }

    def test_from_dict(self):
        error = KlaytnError.from_dict({"code": ErrorCode.EMPTY_KEY.value, "message": "empty"})

        assert error.code == ErrorCode.EMPTY_KEY
        assert error.message == "empty"
