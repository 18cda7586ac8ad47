"""High-level Vault API.

This module provides the main interface for reading a vault:
- Logging in and downloading the encoded blob
- Decoding an already downloaded blob
- Searching the decoded accounts
"""

from __future__ import annotations

import logging
from typing import Any

from .fetcher import Fetcher
from .models import Account, EquivalentDomain
from .parsing import Blob, Chunk, extract_chunks, parse_chunks
from .settings import VaultSettings
from .transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)


class Vault:
    """Decoded contents of a vault blob.

    Example:
        from lpvault import Vault

        vault = Vault.open("user@example.com", password="secret")
        for account in vault.find_accounts(group=b"Email"):
            print(account.name, account.username)
    """

    def __init__(self, accounts: list[Account], chunks: dict[bytes, list[Any]]) -> None:
        """Initialize from parsed data.

        Use open() or open_blob() instead of calling this directly.
        """
        self._accounts = accounts
        self._chunks = chunks

    @classmethod
    def open(
        cls,
        username: str,
        password: str,
        *,
        transport: Transport | None = None,
        settings: VaultSettings | None = None,
    ) -> Vault:
        """Log in, download the blob and decode it.

        Args:
            username: Account username (email)
            password: Master password
            transport: HTTP collaborator; an HttpxTransport is created
                (and closed afterwards) when omitted
            settings: Service settings (defaults if omitted)

        Raises:
            LastPassError: Any login, network or format failure
        """
        settings = settings or VaultSettings()
        if transport is None:
            with HttpxTransport(settings) as owned:
                return cls._open_with(username, password, owned, settings)
        return cls._open_with(username, password, transport, settings)

    @classmethod
    def _open_with(
        cls,
        username: str,
        password: str,
        transport: Transport,
        settings: VaultSettings,
    ) -> Vault:
        fetcher = Fetcher(transport, settings)
        session, key = fetcher.login(username, password)
        text = fetcher.fetch(session)
        vault = cls.open_blob(text, key, session.key_iteration_count)
        logger.info("Opened vault with %d accounts", len(vault.accounts))
        return vault

    @classmethod
    def open_blob(
        cls,
        text: str | bytes,
        encryption_key: bytes,
        key_iteration_count: int = 1,
    ) -> Vault:
        """Decode a blob that has already been downloaded.

        Args:
            text: Blob text as returned by the server
            encryption_key: 32-byte key from derive_encryption_key()
            key_iteration_count: Iteration count the key was derived with

        Raises:
            FormatError: If the blob or any record is malformed
        """
        blob = Blob.from_text(text, key_iteration_count)
        chunks = parse_chunks(extract_chunks(blob.data), encryption_key)
        return cls(chunks.get(b"ACCT", []), chunks)

    @property
    def accounts(self) -> list[Account]:
        return list(self._accounts)

    @property
    def equivalent_domains(self) -> list[EquivalentDomain]:
        return list(self._chunks.get(b"EQDN", []))

    @property
    def version(self) -> bytes | None:
        """Blob version from the 'LPAV' chunk, if present."""
        versions = self._chunks.get(b"LPAV")
        return versions[0] if versions else None

    @property
    def chunks(self) -> dict[bytes, list[Any]]:
        """All parsed chunk groups; unknown ids hold raw Chunk objects."""
        return {chunk_id: list(group) for chunk_id, group in self._chunks.items()}

    def raw_chunks(self, chunk_id: bytes) -> list[Chunk]:
        """Chunks of an id that has no registered parser."""
        return [c for c in self._chunks.get(chunk_id, []) if isinstance(c, Chunk)]

    def find_accounts(
        self,
        name: bytes | None = None,
        group: bytes | None = None,
        url: bytes | None = None,
        *,
        first: bool = False,
    ) -> list[Account] | Account | None:
        """Find accounts matching every given field exactly.

        Args:
            name: Match by name
            group: Match by group
            url: Match by URL
            first: Return only the first match (or None)

        Returns:
            Matching accounts, or a single account / None with first=True
        """
        results = [
            account
            for account in self._accounts
            if (name is None or account.name == name)
            and (group is None or account.group == group)
            and (url is None or account.url == url)
        ]
        if first:
            return results[0] if results else None
        return results

    def __len__(self) -> int:
        return len(self._accounts)

    def __str__(self) -> str:
        return f"Vault({len(self._accounts)} accounts)"
