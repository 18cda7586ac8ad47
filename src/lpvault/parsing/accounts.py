"""Assembly of records from itemized chunks.

Itemized chunks have a fixed positional layout. Every item has to be
read in order, including the ones that are thrown away, or the fields
after them end up misaligned. Layouts are spelled out as ordered
tables of (field name, encoding) pairs; an encoding of None means the
item is read and discarded.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from lpvault.models import Account, EquivalentDomain

from .chunks import ByteCursor, Chunk, read_item, skip_item
from .fields import Encoding, decode_aes256, decode_field

logger = logging.getLogger(__name__)

FieldSpec = tuple[str, Encoding | None]

# 'ACCT' chunk layout
ACCOUNT_SCHEMA: tuple[FieldSpec, ...] = (
    ("id", Encoding.PLAIN),
    ("name", Encoding.AES256),
    ("group", Encoding.AES256),
    ("url", Encoding.HEX),
    ("extra", None),
    ("favorite", None),
    ("shared_from_id", None),
    ("username", Encoding.AES256),
    ("password", Encoding.AES256),
    ("password_protected", None),
    ("generated_password", None),
    ("sn", None),
    ("last_touched", None),
    ("auto_login", None),
    ("never_autofill", None),
    ("realm_data", None),
    ("fiid", None),
    ("custom_js", None),
    ("submit_id", None),
    ("captcha_id", None),
    ("urid", None),
    ("basic_authorization", None),
    ("method", None),
    ("action", Encoding.HEX),
    ("group_id", None),
    ("deleted", None),
    ("attach_key", None),
    ("attach_present", None),
    ("individual_share", None),
    ("unknown1", None),
)

# Items after 'password' are never needed and may be absent
ACCOUNT_FIELD_COUNT = [name for name, _ in ACCOUNT_SCHEMA].index("password") + 1

# 'EQDN' chunk layout
EQUIVALENT_DOMAIN_SCHEMA: tuple[FieldSpec, ...] = (
    ("id", Encoding.PLAIN),
    ("domain", Encoding.HEX),
)


def parse_itemized(
    payload: bytes,
    schema: tuple[FieldSpec, ...],
    key: bytes | None = None,
) -> dict[str, bytes]:
    """Read items from a chunk payload following a layout table.

    Trailing bytes after the last schema entry are left unread.

    Args:
        payload: Itemized chunk payload
        schema: Ordered (name, encoding) pairs; None encodings are skipped
        key: Encryption key for AES-256 fields

    Returns:
        Decoded values of the non-skipped fields, by name

    Raises:
        FormatError: If an item is missing or fails to decode
    """
    cursor = ByteCursor(payload)
    fields: dict[str, bytes] = {}
    for name, encoding in schema:
        if encoding is None:
            skip_item(cursor)
        else:
            fields[name] = decode_field(read_item(cursor), encoding, key)
    return fields


def parse_account(payload: bytes, key: bytes | None) -> Account:
    """Build an Account from an 'ACCT' chunk payload."""
    fields = parse_itemized(payload, ACCOUNT_SCHEMA[:ACCOUNT_FIELD_COUNT], key)
    return Account(
        id=fields["id"],
        name=fields["name"],
        username=fields["username"],
        password=fields["password"],
        url=fields["url"],
        group=fields["group"],
    )


def parse_equivalent_domain(payload: bytes, key: bytes | None = None) -> EquivalentDomain:
    """Build an EquivalentDomain from an 'EQDN' chunk payload."""
    fields = parse_itemized(payload, EQUIVALENT_DOMAIN_SCHEMA, key)
    return EquivalentDomain(id=fields["id"], domain=fields["domain"])


def parse_accounts(chunks: dict[bytes, list[Chunk]], key: bytes | None) -> list[Account]:
    """Build one Account per 'ACCT' chunk, in order."""
    accounts = [parse_account(chunk.payload, key) for chunk in chunks.get(b"ACCT", [])]
    logger.debug("Parsed %d accounts", len(accounts))
    return accounts


# Chunk id -> payload parser. 'LPAV' holds the blob version, 'NMAC' the
# account count, 'ENCU' the encrypted username.
CHUNK_PARSERS: dict[bytes, Callable[[bytes, bytes | None], Any]] = {
    b"LPAV": lambda payload, key: payload,
    b"NMAC": lambda payload, key: payload,
    b"ENCU": decode_aes256,
    b"ACCT": parse_account,
    b"EQDN": parse_equivalent_domain,
}


def parse_chunks(chunks: dict[bytes, list[Chunk]], key: bytes | None) -> dict[bytes, list[Any]]:
    """Parse every chunk group with its registered parser.

    Chunks with an id that has no parser are kept as raw Chunk objects.

    Raises:
        FormatError: If any known chunk fails to parse
    """
    parsed: dict[bytes, list[Any]] = {}
    for chunk_id, group in chunks.items():
        parser = CHUNK_PARSERS.get(chunk_id)
        if parser is None:
            logger.debug("Keeping %d raw %r chunks", len(group), chunk_id)
            parsed[chunk_id] = list(group)
        else:
            parsed[chunk_id] = [parser(chunk.payload, key) for chunk in group]
    return parsed
