"""Login handshake with the vault service.

The handshake has two steps:

1. Ask the server for the key iteration count of the account.
2. Send the login hash derived with that count and receive a session id.

The iteration count is fetched fresh for every login and never cached.
The login endpoint answers with a small XML document, either

    <ok sessionid="..." />

or

    <response><error cause="unknownpassword" message="..." /></response>
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as DefusedET

from lpvault.exceptions import (
    InvalidPasswordError,
    InvalidResponse,
    LastPassError,
    NetworkError,
    UnknownResponseSchema,
    UnknownServerError,
    UnknownUsernameError,
)
from lpvault.security import derive_encryption_key, derive_login_hash
from lpvault.settings import VaultSettings
from lpvault.transport import Transport

logger = logging.getLogger(__name__)

# ASCII digits only, optionally signed
_ITERATION_COUNT_RE = re.compile(r"[+-]?[0-9]+")

# Server error causes with a dedicated exception
LOGIN_ERROR_CAUSES: dict[str, type[LastPassError]] = {
    "unknownemail": UnknownUsernameError,
    "unknownpassword": InvalidPasswordError,
}


@dataclass(frozen=True, slots=True)
class Session:
    """An authenticated session.

    Attributes:
        id: Session id issued by the server
        key_iteration_count: Iteration count the login hash was derived with
    """

    id: str
    key_iteration_count: int

    def __repr__(self) -> str:
        """Return string representation (hides the session id)."""
        return f"Session(id=<hidden>, key_iteration_count={self.key_iteration_count})"


def request_iteration_count(
    username: str,
    transport: Transport,
    settings: VaultSettings | None = None,
) -> int:
    """Ask the server how many key iterations the account uses.

    Raises:
        NetworkError: On a non-success response
        InvalidResponse: If the body is not a positive integer
    """
    settings = settings or VaultSettings()
    response = transport.post(settings.iterations_url, {"email": username})
    if not response.ok:
        raise NetworkError("Key iteration count request failed")

    text = response.body.strip()
    if not _ITERATION_COUNT_RE.fullmatch(text):
        raise InvalidResponse("Key iteration count is invalid")
    count = int(text)

    if count <= 0:
        raise InvalidResponse("Key iteration count is not positive")

    logger.debug("Server reported %d key iterations", count)
    return count


def request_login(
    username: str,
    password: str,
    key_iteration_count: int,
    transport: Transport,
    settings: VaultSettings | None = None,
) -> Session:
    """Log in with a known key iteration count.

    Raises:
        NetworkError: On a non-success response
        InvalidResponse: If the body is not XML, or an error has no cause
        UnknownResponseSchema: If the body is neither a session nor an error
        UnknownUsernameError: Server cause 'unknownemail'
        InvalidPasswordError: Server cause 'unknownpassword'
        UnknownServerError: Any other server cause
    """
    settings = settings or VaultSettings()
    fields = {
        "method": "mobile",
        "web": "1",
        "xml": "1",
        "username": username,
        "hash": derive_login_hash(username, password, key_iteration_count),
        "iterations": str(key_iteration_count),
    }
    response = transport.post(settings.login_url, fields)
    if not response.ok:
        raise NetworkError("Login request failed")

    parsed = parse_xml_response(response.body)

    session = _create_session(parsed, key_iteration_count)
    if session is None:
        raise _login_error(parsed)

    logger.debug("Login accepted")
    return session


def login(
    username: str,
    password: str,
    transport: Transport,
    settings: VaultSettings | None = None,
) -> tuple[Session, bytes]:
    """Run the full handshake.

    Returns:
        The session and the 32-byte encryption key for the vault blob
    """
    count = request_iteration_count(username, transport, settings)
    session = request_login(username, password, count, transport, settings)
    return session, derive_encryption_key(username, password, count)


def parse_xml_response(body: str) -> dict[str, Any]:
    """Parse an XML body into nested dicts.

    The root tag maps to its element value. An element's value is a
    dict of its attributes and children (repeated children become a
    list), its stripped text when it has neither, or None when it is
    completely empty.

    Raises:
        InvalidResponse: If the body is not well-formed XML
    """
    try:
        root = DefusedET.fromstring(body)
    except (DefusedET.ParseError, DefusedXmlException):
        raise InvalidResponse("Response is not a valid XML document") from None
    return {root.tag: _element_value(root)}


def _element_value(elem: Any) -> Any:
    value: dict[str, Any] = dict(elem.attrib)
    for child in elem:
        child_value = _element_value(child)
        if child.tag not in value:
            value[child.tag] = child_value
        elif isinstance(value[child.tag], list):
            value[child.tag].append(child_value)
        else:
            value[child.tag] = [value[child.tag], child_value]

    text = (elem.text or "").strip()
    if not value:
        return text or None
    if text:
        value["__content__"] = text
    return value


def _create_session(parsed: dict[str, Any], key_iteration_count: int) -> Session | None:
    ok = parsed.get("ok")
    if isinstance(ok, dict):
        session_id = ok.get("sessionid")
        if isinstance(session_id, str):
            return Session(session_id, key_iteration_count)
    return None


def _login_error(parsed: dict[str, Any]) -> LastPassError:
    response = parsed.get("response")
    error = response.get("error") if isinstance(response, dict) else None
    if not isinstance(error, dict):
        return UnknownResponseSchema()

    cause = error.get("cause")
    message = error.get("message")
    if not isinstance(cause, str | None) or not isinstance(message, str | None):
        return UnknownResponseSchema()

    if cause is not None:
        logger.debug("Login rejected with cause %r", cause)
        text = message if message is not None else cause
        exception = LOGIN_ERROR_CAUSES.get(cause)
        if exception is None:
            return UnknownServerError(text, cause=cause)
        return exception(text)

    return InvalidResponse(message)
