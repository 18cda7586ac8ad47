"""Decoding of individual item payloads.

Each field in an itemized chunk has a declared encoding. Plain fields
pass through, hex and base64 fields are decoded strictly, and AES-256
fields are decrypted with the vault encryption key.

The AES-256 sub-mode is not tagged in the data. It is inferred from
the payload length alone:

    length            mode
    ----------------  -----------------------------------------------
    0                 empty
    16k               ECB, raw ciphertext
    64k+24, 64k+44    ECB, base64 ciphertext
    16k+1             CBC, '!' + 16-byte IV + raw ciphertext
    64k+6/26/50       CBC, '!' + base64 IV (24) + '|' + base64 ciphertext

Rows are tried top to bottom. Any other length is a FormatError.
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Callable
from enum import Enum

from lpvault.exceptions import FormatError
from lpvault.security import decrypt_aes256_cbc, decrypt_aes256_ecb


class Encoding(Enum):
    """Declared encoding of an item payload."""

    PLAIN = "plain"
    HEX = "hex"
    BASE64 = "base64"
    AES256 = "aes256"


class AesMode(Enum):
    """AES-256 sub-mode picked from the payload length."""

    EMPTY = "empty"
    ECB_PLAIN = "ecb_plain"
    ECB_BASE64 = "ecb_base64"
    CBC_PLAIN = "cbc_plain"
    CBC_BASE64 = "cbc_base64"


# Offsets inside a CBC payload
CBC_IV_START = 1
CBC_PLAIN_IV_END = 17
CBC_BASE64_IV_END = 25
CBC_BASE64_DATA_START = 26

ECB_BASE64_RESIDUES = frozenset({0, 24, 44})
CBC_BASE64_RESIDUES = frozenset({6, 26, 50})


def decode_plain(data: bytes) -> bytes:
    return data


def decode_hex(data: bytes) -> bytes:
    """Decode an even-length string of hex digits.

    Raises:
        FormatError: On odd length or a non-hex character
    """
    try:
        return binascii.unhexlify(data)
    except (binascii.Error, ValueError) as e:
        raise FormatError(f"Invalid hex payload: {e}") from None


def decode_base64(data: bytes) -> bytes:
    """Decode standard base64.

    Raises:
        FormatError: On characters outside the base64 alphabet or bad padding
    """
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise FormatError(f"Invalid base64 payload: {e}") from None


def detect_aes256_mode(data: bytes) -> AesMode:
    """Pick the AES-256 sub-mode from the payload length.

    Raises:
        FormatError: If the length matches no known layout
    """
    length = len(data)
    length16 = length % 16
    length64 = length % 64

    if length == 0:
        return AesMode.EMPTY
    if length16 == 0:
        return AesMode.ECB_PLAIN
    if length64 in ECB_BASE64_RESIDUES:
        return AesMode.ECB_BASE64
    if length16 == 1:
        return AesMode.CBC_PLAIN
    if length64 in CBC_BASE64_RESIDUES:
        return AesMode.CBC_BASE64
    raise FormatError("unrecognized AES-256 encoding")


def decode_aes256(data: bytes, key: bytes | None) -> bytes:
    """Decrypt an AES-256 field with the vault key.

    Padding is not removed.

    Raises:
        FormatError: On an unrecognized length or a malformed payload
        ValueError: If key is missing or not 32 bytes
    """
    mode = detect_aes256_mode(data)

    if mode is AesMode.EMPTY:
        return b""
    if mode is AesMode.ECB_PLAIN:
        return decrypt_aes256_ecb(key, data)
    if mode is AesMode.ECB_BASE64:
        return decrypt_aes256_ecb(key, decode_base64(data))
    if mode is AesMode.CBC_PLAIN:
        # data[0] is the '!' marker
        return decrypt_aes256_cbc(
            key,
            data[CBC_IV_START:CBC_PLAIN_IV_END],
            data[CBC_PLAIN_IV_END:],
        )
    # data[0] is '!', data[25] is '|'
    return decrypt_aes256_cbc(
        key,
        decode_base64(data[CBC_IV_START:CBC_BASE64_IV_END]),
        decode_base64(data[CBC_BASE64_DATA_START:]),
    )


_DECODERS: dict[Encoding, Callable[[bytes, bytes | None], bytes]] = {
    Encoding.PLAIN: lambda data, key: decode_plain(data),
    Encoding.HEX: lambda data, key: decode_hex(data),
    Encoding.BASE64: lambda data, key: decode_base64(data),
    Encoding.AES256: decode_aes256,
}


def decode_field(data: bytes, encoding: Encoding, key: bytes | None = None) -> bytes:
    """Decode an item payload according to its declared encoding.

    Args:
        data: Raw item payload
        encoding: Declared encoding
        key: 32-byte encryption key, required for Encoding.AES256

    Returns:
        Decoded bytes
    """
    return _DECODERS[encoding](data, key)
