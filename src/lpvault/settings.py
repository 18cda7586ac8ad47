"""Client configuration for lpvault."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://lastpass.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "lpvault"

ENV_BASE_URL = "LPVAULT_BASE_URL"
ENV_TIMEOUT = "LPVAULT_TIMEOUT"


@dataclass(frozen=True, slots=True)
class VaultSettings:
    """Settings for talking to the vault service.

    Attributes:
        base_url: Service root, without a trailing slash
        timeout: Per-request timeout in seconds (used by the default transport)
        user_agent: User-Agent header sent by the default transport
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        """Validate settings."""
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @property
    def iterations_url(self) -> str:
        return f"{self._root}/iterations.php"

    @property
    def login_url(self) -> str:
        return f"{self._root}/login.php"

    @property
    def blob_url(self) -> str:
        return f"{self._root}/getaccts.php?mobile=1&b64=1&hash=0.0"

    @property
    def _root(self) -> str:
        return self.base_url.rstrip("/")

    @classmethod
    def from_env(cls) -> VaultSettings:
        """Build settings from LPVAULT_* environment variables.

        Unset variables fall back to the defaults.

        Raises:
            ValueError: If LPVAULT_TIMEOUT is not a number
        """
        timeout = os.environ.get(ENV_TIMEOUT)
        return cls(
            base_url=os.environ.get(ENV_BASE_URL, DEFAULT_BASE_URL),
            timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
        )
