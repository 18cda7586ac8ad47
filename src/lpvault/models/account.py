"""Account model for decoded vault entries."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Account:
    """A site login stored in the vault.

    Values are the decoded bytes of each field. Encrypted fields are
    returned as decrypted without padding removal.

    Attributes:
        id: Account id (plain)
        name: Site name (decrypted)
        username: Login username (decrypted)
        password: Login password (decrypted)
        url: Site URL (hex decoded)
        group: Folder the account lives in (decrypted)
    """

    id: bytes
    name: bytes
    username: bytes
    password: bytes
    url: bytes
    group: bytes

    def __repr__(self) -> str:
        """Return string representation (hides username and password)."""
        return f"Account(id={self.id!r}, name={self.name!r}, url={self.url!r})"


@dataclass(frozen=True, slots=True)
class EquivalentDomain:
    """One domain of an equivalence class (EQDN chunk).

    Domains sharing an id are treated as the same site.
    """

    id: bytes
    domain: bytes
