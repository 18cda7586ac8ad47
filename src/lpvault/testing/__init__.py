"""Test utilities for lpvault.

WARNING: Everything in this module is for TESTING ONLY.

- MockTransport answers requests from canned responses and records
  what was sent, so the login handshake can run without a network.
- The encode_* and build_* helpers produce field payloads and blobs
  in the exact layouts the parsers expect.
"""

from __future__ import annotations

import base64
from collections.abc import Callable
from dataclasses import dataclass, field

from Cryptodome.Cipher import AES

from lpvault.parsing.chunks import pack_chunk, pack_item
from lpvault.transport import Response

Responder = Callable[[str, dict[str, str]], Response]


@dataclass
class RecordedRequest:
    """A request seen by MockTransport.

    Attributes:
        method: "GET" or "POST"
        url: Request URL
        data: Headers for GET, form fields for POST
    """

    method: str
    url: str
    data: dict[str, str]


@dataclass
class MockTransport:
    """Transport that serves canned responses by URL prefix.

    Routes map a URL prefix to either a Response or a callable taking
    (url, data) and returning one. Unrouted URLs get a failed response.

    Example:
        >>> transport = MockTransport({
        ...     "https://lastpass.com/iterations.php": ok("5000"),
        ... })
    """

    routes: dict[str, Response | Responder] = field(default_factory=dict)
    requests: list[RecordedRequest] = field(default_factory=list)

    def get(self, url: str, headers: dict[str, str]) -> Response:
        return self._dispatch("GET", url, headers)

    def post(self, url: str, fields: dict[str, str]) -> Response:
        return self._dispatch("POST", url, fields)

    def _dispatch(self, method: str, url: str, data: dict[str, str]) -> Response:
        self.requests.append(RecordedRequest(method, url, dict(data)))
        for prefix, route in self.routes.items():
            if url.startswith(prefix):
                return route(url, data) if callable(route) else route
        return error()


def ok(body: str) -> Response:
    """A successful response with the given body."""
    return Response(ok=True, body=body)


def error(body: str = "") -> Response:
    """A failed response."""
    return Response(ok=False, body=body)


def encode_aes256_ecb(key: bytes, plaintext: bytes, *, base64_encoded: bool = False) -> bytes:
    """Encrypt block-aligned plaintext in the ECB field layout."""
    ciphertext = AES.new(key, AES.MODE_ECB).encrypt(plaintext)
    return base64.b64encode(ciphertext) if base64_encoded else ciphertext


def encode_aes256_cbc(
    key: bytes,
    iv: bytes,
    plaintext: bytes,
    *,
    base64_encoded: bool = False,
) -> bytes:
    """Encrypt block-aligned plaintext in the CBC field layout."""
    ciphertext = AES.new(key, AES.MODE_CBC, iv=iv).encrypt(plaintext)
    if base64_encoded:
        return b"!" + base64.b64encode(iv) + b"|" + base64.b64encode(ciphertext)
    return b"!" + iv + ciphertext


def build_itemized(*items: bytes) -> bytes:
    """Encode items into an itemized chunk payload."""
    return b"".join(pack_item(item) for item in items)


def build_container(chunks: list[tuple[bytes, bytes]]) -> bytes:
    """Encode (id, payload) pairs into a container.

    An 'LPAV' chunk is prepended when the first chunk isn't one, so
    the result always carries the blob marker once base64 encoded.
    """
    if not chunks or chunks[0][0] != b"LPAV":
        chunks = [(b"LPAV", b"118"), *chunks]
    return b"".join(pack_chunk(chunk_id, payload) for chunk_id, payload in chunks)


def build_blob(chunks: list[tuple[bytes, bytes]]) -> str:
    """Encode (id, payload) pairs into blob text as the server sends it."""
    return base64.b64encode(build_container(chunks)).decode("ascii")
