"""Vault blob envelope.

The server sends the account database as base64 text. The decoded
container always starts with 'LPAV', so the text always starts with
'TFBB'. The marker is checked before anything is decoded.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from lpvault.exceptions import FormatError

BLOB_MAGIC = "TFBB"


@dataclass(frozen=True, slots=True)
class Blob:
    """Decoded container bytes plus the iteration count of its key.

    Attributes:
        data: Decoded binary container
        key_iteration_count: Iteration count used to derive the key
    """

    data: bytes
    key_iteration_count: int

    @classmethod
    def from_text(cls, text: str | bytes, key_iteration_count: int) -> Blob:
        """Decode blob text as returned by the fetcher.

        Raises:
            FormatError: On a missing marker or invalid base64
        """
        return cls(decode_blob(text), key_iteration_count)


def decode_blob(text: str | bytes) -> bytes:
    """Check the magic marker and base64-decode the blob.

    The marker is part of the base64 stream, so the whole text is
    decoded, marker included. Whitespace is ignored.

    Raises:
        FormatError: If the marker is missing or the base64 is invalid
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("ascii")
        except UnicodeDecodeError:
            raise FormatError("Vault blob is not ASCII text") from None

    if text[: len(BLOB_MAGIC)] != BLOB_MAGIC:
        raise FormatError("Vault blob does not start with the expected marker")

    try:
        return base64.b64decode("".join(text.split()), validate=True)
    except binascii.Error as e:
        raise FormatError(f"Vault blob is not valid base64: {e}") from None
