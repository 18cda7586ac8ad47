"""Tests for blob retrieval and the Fetcher wrapper."""

import pytest

from lpvault.exceptions import NetworkError
from lpvault.fetcher import Fetcher, fetch
from lpvault.session import Session
from lpvault.settings import VaultSettings
from lpvault.testing import MockTransport, error, ok

SESSION_ID = "53ru,Hb713QnEVM5zWZ16jMvxS0"
SESSION = Session(SESSION_ID, 5000)
BLOB = "TFBBVgAAAAMxMjJQUkVNAAAACjE0MTQ5"
BLOB_URL = "https://lastpass.com/getaccts.php?mobile=1&b64=1&hash=0.0"


class TestFetch:
    """Tests for fetch()."""

    def test_makes_get_request(self) -> None:
        """Test URL and session cookie."""
        transport = MockTransport({BLOB_URL: ok(BLOB)})
        fetch(SESSION, transport)

        request = transport.requests[0]
        assert request.method == "GET"
        assert request.url == BLOB_URL
        assert request.data == {"Cookie": f"PHPSESSID={SESSION_ID}"}

    def test_session_id_is_quoted(self) -> None:
        """Test that unsafe characters in the session id are escaped."""
        transport = MockTransport({BLOB_URL: ok(BLOB)})
        fetch(Session("a b;c", 1), transport)
        assert transport.requests[0].data == {"Cookie": "PHPSESSID=a%20b%3Bc"}

    def test_returns_blob_unchanged(self) -> None:
        """Test that the body is returned without decoding."""
        transport = MockTransport({BLOB_URL: ok(BLOB)})
        assert fetch(SESSION, transport) == BLOB

    def test_http_error(self) -> None:
        """Test that a failed response raises NetworkError."""
        transport = MockTransport({BLOB_URL: error()})
        with pytest.raises(NetworkError):
            fetch(SESSION, transport)


class TestFetcher:
    """Tests for the Fetcher class."""

    def test_full_flow(self) -> None:
        """Test login followed by fetch through one Fetcher."""
        transport = MockTransport({
            "https://lastpass.com/iterations.php": ok("1"),
            "https://lastpass.com/login.php": ok(f'<ok sessionid="{SESSION_ID}" />'),
            BLOB_URL: ok(BLOB),
        })
        fetcher = Fetcher(transport)

        session, key = fetcher.login("user", "pass")

        assert session == Session(SESSION_ID, 1)
        assert len(key) == 32
        assert fetcher.fetch(session) == BLOB
        assert [r.method for r in transport.requests] == ["POST", "POST", "GET"]

    def test_custom_settings(self) -> None:
        """Test that settings are applied to every call."""
        settings = VaultSettings(base_url="https://vault.example.com")
        transport = MockTransport({"https://vault.example.com/iterations.php": ok("7")})
        fetcher = Fetcher(transport, settings)

        assert fetcher.settings is settings
        assert fetcher.request_iteration_count("user") == 7
