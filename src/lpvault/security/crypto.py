"""AES-256 primitives for vault field decryption.

Fields are decrypted either in ECB mode (no IV) or in CBC mode with
an explicit 16-byte IV. Padding is left in place: callers get the
raw decrypted blocks.
"""

from __future__ import annotations

from Cryptodome.Cipher import AES

from lpvault.exceptions import FormatError

AES256_KEY_SIZE = 32
AES_BLOCK_SIZE = AES.block_size
AES_IV_SIZE = 16


def _check_key(key: bytes | None) -> bytes:
    if key is None:
        raise ValueError("AES-256 decryption requires an encryption key")
    if len(key) != AES256_KEY_SIZE:
        raise ValueError(f"AES-256 key must be {AES256_KEY_SIZE} bytes, got {len(key)}")
    return key


def _check_ciphertext(ciphertext: bytes) -> None:
    if len(ciphertext) % AES_BLOCK_SIZE != 0:
        raise FormatError(
            f"AES ciphertext length {len(ciphertext)} is not a multiple of "
            f"{AES_BLOCK_SIZE}"
        )


def decrypt_aes256_ecb(key: bytes | None, ciphertext: bytes) -> bytes:
    """Decrypt AES-256-ECB ciphertext without removing padding.

    Raises:
        ValueError: If the key is missing or not 32 bytes
        FormatError: If the ciphertext is not block aligned
    """
    key = _check_key(key)
    if not ciphertext:
        return b""
    _check_ciphertext(ciphertext)
    return AES.new(key, AES.MODE_ECB).decrypt(ciphertext)


def decrypt_aes256_cbc(key: bytes | None, iv: bytes, ciphertext: bytes) -> bytes:
    """Decrypt AES-256-CBC ciphertext without removing padding.

    Raises:
        ValueError: If the key is missing or not 32 bytes
        FormatError: If the IV is not 16 bytes or the ciphertext is not
            block aligned
    """
    key = _check_key(key)
    if len(iv) != AES_IV_SIZE:
        raise FormatError(f"AES-CBC IV must be {AES_IV_SIZE} bytes, got {len(iv)}")
    if not ciphertext:
        return b""
    _check_ciphertext(ciphertext)
    return AES.new(key, AES.MODE_CBC, iv=iv).decrypt(ciphertext)
