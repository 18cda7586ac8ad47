"""Vault blob parsing.

This module handles the low-level format operations:
- Blob envelope (magic marker and base64)
- Chunk and item grammar
- Per-field decoding, including AES-256 mode detection
- Record assembly from itemized chunks

All parsing uses Python's struct module for binary operations.
"""

from .accounts import (
    ACCOUNT_SCHEMA,
    CHUNK_PARSERS,
    EQUIVALENT_DOMAIN_SCHEMA,
    parse_account,
    parse_accounts,
    parse_chunks,
    parse_equivalent_domain,
    parse_itemized,
)
from .blob import BLOB_MAGIC, Blob, decode_blob
from .chunks import (
    ByteCursor,
    Chunk,
    extract_chunks,
    iter_chunks,
    pack_chunk,
    pack_item,
    read_chunk,
    read_item,
    skip_item,
)
from .fields import (
    AesMode,
    Encoding,
    decode_aes256,
    decode_base64,
    decode_field,
    decode_hex,
    detect_aes256_mode,
)

__all__ = [
    # Blob
    "BLOB_MAGIC",
    "Blob",
    "decode_blob",
    # Chunks
    "ByteCursor",
    "Chunk",
    "extract_chunks",
    "iter_chunks",
    "pack_chunk",
    "pack_item",
    "read_chunk",
    "read_item",
    "skip_item",
    # Fields
    "AesMode",
    "Encoding",
    "decode_aes256",
    "decode_base64",
    "decode_field",
    "decode_hex",
    "detect_aes256_mode",
    # Records
    "ACCOUNT_SCHEMA",
    "CHUNK_PARSERS",
    "EQUIVALENT_DOMAIN_SCHEMA",
    "parse_account",
    "parse_accounts",
    "parse_chunks",
    "parse_equivalent_domain",
    "parse_itemized",
]
