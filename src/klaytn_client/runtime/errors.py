"""
Klaytn Error Model

This module provides the error handling framework for the keyring, keystore
and transaction codec. Every failure is local and synchronous; the four
exception families map to malformed input, authentication failure,
unsupported algorithm and policy violation.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes for the signing and serialization core."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Malformed input (100-199)
    INVALID_ADDRESS = 100
    INVALID_HEX = 101
    INVALID_HASH = 102
    INVALID_KEY = 103
    INVALID_KEY_FORMAT = 104
    INVALID_ROLE = 105
    INVALID_INDEX = 106
    MISSING_PARAMETER = 107
    INVALID_TYPE_TAG = 108
    DECODE_ERROR = 109
    INVALID_KEYSTORE = 110
    INVALID_OPTIONS = 111

    # Authentication errors (300-399)
    WRONG_PASSWORD = 300

    # Capability errors (400-499)
    UNSUPPORTED_KDF = 400
    UNSUPPORTED_PRF = 401
    UNSUPPORTED_CIPHER = 402
    UNSUPPORTED_VERSION = 403

    # Policy violations (500-599)
    TOO_MANY_KEYS = 500
    EXPORT_NOT_AVAILABLE = 501
    OPTIONS_NOT_ALLOWED = 502
    CONFLICTING_FIELDS = 503
    EMPTY_KEY = 504


class KlaytnError(Exception):
    """
    Base class for all errors raised by this package.

    Carries a machine-readable code, optional details and the underlying
    exception when one was translated.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize an error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KlaytnError':
        """Create error from dictionary representation."""
        code = ErrorCode(data.get("code", ErrorCode.UNKNOWN))
        message = data.get("message", "Unknown error")
        details = data.get("details")
        return cls(message, code, details)


class InvalidInputError(KlaytnError, ValueError):
    """Malformed input: bad address, hex, digest, key shape or wire bytes."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_KEY_FORMAT,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class AuthenticationError(KlaytnError):
    """Keystore MAC mismatch, most likely a wrong password."""

    def __init__(self, message: str = "Key derivation failed - possibly wrong password",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.WRONG_PASSWORD, details, cause)


class UnsupportedAlgorithmError(KlaytnError):
    """Unknown KDF, PRF, cipher or keystore version."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNSUPPORTED_KDF,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class PolicyViolationError(KlaytnError):
    """Well-formed input that the keyring or transaction rules forbid."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.EMPTY_KEY,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


__all__ = [
    "ErrorCode",
    "KlaytnError",
    "InvalidInputError",
    "AuthenticationError",
    "UnsupportedAlgorithmError",
    "PolicyViolationError",
]
