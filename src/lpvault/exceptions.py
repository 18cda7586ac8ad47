"""Custom exception hierarchy for lpvault.

All exceptions inherit from LastPassError. Every class also carries an
ErrorKind so callers can dispatch on a closed set of kinds instead of
on class identity.

Exception Hierarchy:
    LastPassError (base)
    ├── NetworkError
    ├── ResponseError
    │   ├── InvalidResponse
    │   └── UnknownResponseSchema
    ├── LoginError
    │   ├── UnknownUsernameError
    │   ├── InvalidPasswordError
    │   └── UnknownServerError
    ├── FormatError
    └── KdfError

Security Note:
    Messages never include passwords, login hashes, keys or session ids.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Closed set of failure kinds raised by lpvault."""

    NETWORK = "network"
    INVALID_RESPONSE = "invalid_response"
    UNKNOWN_RESPONSE_SCHEMA = "unknown_response_schema"
    UNKNOWN_USERNAME = "unknown_username"
    INVALID_PASSWORD = "invalid_password"
    UNKNOWN_SERVER_ERROR = "unknown_server_error"
    FORMAT = "format"
    KDF = "kdf"


class LastPassError(Exception):
    """Base exception for all lpvault errors."""

    kind: ErrorKind


# --- Transport Errors ---


class NetworkError(LastPassError):
    """A request did not complete with a success status.

    Never retried internally; retry policy belongs to the transport.
    """

    kind = ErrorKind.NETWORK

    def __init__(self, message: str = "Network request failed") -> None:
        super().__init__(message)


# --- Response Errors ---


class ResponseError(LastPassError):
    """The server answered, but with something we can't use."""


class InvalidResponse(ResponseError):
    """Malformed or unexpected response body."""

    kind = ErrorKind.INVALID_RESPONSE

    def __init__(self, message: str | None = None) -> None:
        super().__init__("Invalid response" if message is None else message)


class UnknownResponseSchema(ResponseError):
    """Login response is well formed but matches no known shape."""

    kind = ErrorKind.UNKNOWN_RESPONSE_SCHEMA

    def __init__(self, message: str = "Unknown response schema") -> None:
        super().__init__(message)


# --- Login Errors ---


class LoginError(LastPassError):
    """Login was rejected by the server with an explicit cause.

    The server supplied message (or the bare cause when no message
    was sent) is the exception message.
    """


class UnknownUsernameError(LoginError):
    """Server does not know this username (cause 'unknownemail')."""

    kind = ErrorKind.UNKNOWN_USERNAME


class InvalidPasswordError(LoginError):
    """Server rejected the password (cause 'unknownpassword')."""

    kind = ErrorKind.INVALID_PASSWORD


class UnknownServerError(LoginError):
    """Server reported a cause we don't recognize."""

    kind = ErrorKind.UNKNOWN_SERVER_ERROR

    def __init__(self, message: str, cause: str | None = None) -> None:
        self.cause = cause
        super().__init__(message)


# --- Format Errors ---


class FormatError(LastPassError):
    """Error in the vault blob, chunk stream or a field payload.

    Raised on a magic marker mismatch, truncated chunk or item streams,
    invalid hex/base64, or an AES-256 payload of unrecognized length.
    A format error aborts the whole decode.
    """

    kind = ErrorKind.FORMAT


# --- Crypto Errors ---


class KdfError(LastPassError):
    """Key derivation was asked for something it can't do."""

    kind = ErrorKind.KDF
