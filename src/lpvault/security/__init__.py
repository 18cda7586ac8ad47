"""Security-critical components for lpvault.

This module contains the code that touches key material:
- Key derivation (legacy SHA-256 and PBKDF2-SHA256)
- AES-256 field decryption primitives

All code in this module should be audited carefully.
"""

from .crypto import (
    AES256_KEY_SIZE,
    AES_BLOCK_SIZE,
    AES_IV_SIZE,
    decrypt_aes256_cbc,
    decrypt_aes256_ecb,
)
from .kdf import (
    KEY_SIZE,
    LEGACY_ITERATION_COUNT,
    derive_encryption_key,
    derive_login_hash,
)

__all__ = [
    # Crypto
    "AES256_KEY_SIZE",
    "AES_BLOCK_SIZE",
    "AES_IV_SIZE",
    "decrypt_aes256_cbc",
    "decrypt_aes256_ecb",
    # KDF
    "KEY_SIZE",
    "LEGACY_ITERATION_COUNT",
    "derive_encryption_key",
    "derive_login_hash",
]
