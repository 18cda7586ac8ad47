"""Retrieval of the encoded vault blob.

The blob is returned exactly as the server sent it; decoding happens
in lpvault.parsing.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

from lpvault.exceptions import NetworkError
from lpvault.session import Session, login, request_iteration_count, request_login
from lpvault.settings import VaultSettings
from lpvault.transport import Transport

logger = logging.getLogger(__name__)

SESSION_COOKIE = "PHPSESSID"


def fetch(
    session: Session,
    transport: Transport,
    settings: VaultSettings | None = None,
) -> str:
    """Download the raw vault blob for an authenticated session.

    Raises:
        NetworkError: On a non-success response
    """
    settings = settings or VaultSettings()
    headers = {"Cookie": f"{SESSION_COOKIE}={quote(session.id, safe=',')}"}
    response = transport.get(settings.blob_url, headers)
    if not response.ok:
        raise NetworkError("Vault blob request failed")

    logger.debug("Fetched vault blob (%d characters)", len(response.body))
    return response.body


class Fetcher:
    """Binds a transport and settings to the login and fetch calls.

    Example:
        >>> fetcher = Fetcher(transport)
        >>> session, key = fetcher.login("user@example.com", "secret")
        >>> blob = fetcher.fetch(session)
    """

    def __init__(self, transport: Transport, settings: VaultSettings | None = None) -> None:
        self._transport = transport
        self._settings = settings or VaultSettings()

    @property
    def settings(self) -> VaultSettings:
        return self._settings

    def request_iteration_count(self, username: str) -> int:
        return request_iteration_count(username, self._transport, self._settings)

    def request_login(self, username: str, password: str, key_iteration_count: int) -> Session:
        return request_login(
            username, password, key_iteration_count, self._transport, self._settings
        )

    def login(self, username: str, password: str) -> tuple[Session, bytes]:
        return login(username, password, self._transport, self._settings)

    def fetch(self, session: Session) -> str:
        return fetch(session, self._transport, self._settings)
