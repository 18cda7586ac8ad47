"""Key derivation for LastPass credentials.

Two values are derived from the username, password and the server
negotiated key iteration count:

- the encryption key (32 bytes) used to decrypt AES-256 fields
- the login hash (64 hex chars) sent to the server as proof of password

A key iteration count of 1 selects the legacy single-round SHA-256
scheme. Anything larger selects PBKDF2-HMAC-SHA256.

Both functions are pure and deterministic.
"""

from __future__ import annotations

import hashlib

from Cryptodome.Hash import SHA256
from Cryptodome.Protocol.KDF import PBKDF2

from lpvault.exceptions import KdfError

KEY_SIZE = 32

# Iteration count at which the legacy SHA-256 scheme is used
LEGACY_ITERATION_COUNT = 1


def _pbkdf2_sha256(password: bytes, salt: bytes, iterations: int) -> bytes:
    """PBKDF2-HMAC-SHA256 with a 32-byte output."""
    return PBKDF2(
        password,
        salt,
        dkLen=KEY_SIZE,
        count=iterations,
        hmac_hash_module=SHA256,
    )


def _check_iterations(iterations: int) -> None:
    if iterations < LEGACY_ITERATION_COUNT:
        raise KdfError(f"Key iteration count must be positive, got {iterations}")


def derive_encryption_key(username: str, password: str, iterations: int) -> bytes:
    """Derive the 32-byte vault encryption key.

    Args:
        username: Account username (email)
        password: Master password
        iterations: Key iteration count reported by the server

    Returns:
        32 raw key bytes

    Raises:
        KdfError: If iterations is not positive
    """
    _check_iterations(iterations)

    user_bytes = username.encode("utf-8")
    password_bytes = password.encode("utf-8")

    if iterations == LEGACY_ITERATION_COUNT:
        return hashlib.sha256(user_bytes + password_bytes).digest()

    return _pbkdf2_sha256(password_bytes, user_bytes, iterations)


def derive_login_hash(username: str, password: str, iterations: int) -> str:
    """Derive the hash sent to the login endpoint.

    Legacy mode hashes the hex-encoded key concatenated with the
    plaintext password. PBKDF2 mode runs one more PBKDF2 round keyed
    with the encryption key and salted with the password.

    Args:
        username: Account username (email)
        password: Master password
        iterations: Key iteration count reported by the server

    Returns:
        64-character lowercase hex string

    Raises:
        KdfError: If iterations is not positive
    """
    key = derive_encryption_key(username, password, iterations)
    password_bytes = password.encode("utf-8")

    if iterations == LEGACY_ITERATION_COUNT:
        return hashlib.sha256(key.hex().encode("ascii") + password_bytes).hexdigest()

    return _pbkdf2_sha256(key, password_bytes, 1).hex()
