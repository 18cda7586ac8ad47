"""HTTP transport contract and the default httpx implementation.

The session and fetcher layers only see success/failure and the raw
body text of a response. Anything about connections, TLS, retries or
timeouts lives behind the Transport protocol.

Third parties can implement Transport without importing lpvault.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Protocol, runtime_checkable

import httpx

from lpvault.exceptions import NetworkError
from lpvault.settings import VaultSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Response:
    """What the core needs from an HTTP response.

    Attributes:
        ok: True only for a success status
        body: Response body as text
    """

    ok: bool
    body: str


@runtime_checkable
class Transport(Protocol):
    """Protocol for the HTTP collaborator.

    Implementations:
        - HttpxTransport: httpx based, used when nothing is injected
        - MockTransport: canned responses for testing (in lpvault.testing)
    """

    def get(self, url: str, headers: dict[str, str]) -> Response:
        """Issue a GET request.

        Raises:
            NetworkError: If the request could not be completed at all
        """
        ...

    def post(self, url: str, fields: dict[str, str]) -> Response:
        """Issue a form-encoded POST request.

        Raises:
            NetworkError: If the request could not be completed at all
        """
        ...


class HttpxTransport:
    """Transport backed by an httpx.Client.

    Only HTTP 200 counts as success. Connection level failures are
    raised as NetworkError.

    Example:
        >>> with HttpxTransport() as transport:
        ...     vault = Vault.open("user@example.com", "secret", transport=transport)
    """

    def __init__(
        self,
        settings: VaultSettings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            settings: Timeout and User-Agent source (defaults if omitted)
            client: Pre-configured client; the transport won't close it
        """
        settings = settings or VaultSettings()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=settings.timeout,
            headers={"User-Agent": settings.user_agent},
        )

    def get(self, url: str, headers: dict[str, str]) -> Response:
        logger.debug("GET %s", url.split("?", 1)[0])
        try:
            response = self._client.get(url, headers=headers)
        except httpx.HTTPError as e:
            raise NetworkError(f"GET request failed: {type(e).__name__}") from e
        return self._wrap(response)

    def post(self, url: str, fields: dict[str, str]) -> Response:
        logger.debug("POST %s", url)
        try:
            response = self._client.post(url, data=fields)
        except httpx.HTTPError as e:
            raise NetworkError(f"POST request failed: {type(e).__name__}") from e
        return self._wrap(response)

    @staticmethod
    def _wrap(response: httpx.Response) -> Response:
        ok = response.status_code == httpx.codes.OK
        if not ok:
            logger.debug("Request returned HTTP %d", response.status_code)
        return Response(ok=ok, body=response.text)

    def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
