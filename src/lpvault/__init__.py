"""lpvault - A Python client for reading LastPass vaults.

This library logs in to the vault service, downloads the encoded
account blob and decodes it into account records:
- Legacy SHA-256 and PBKDF2-SHA256 key derivation
- Typed errors for every login failure the server reports
- Strict parsing of the chunk container and AES-256 fields

Example:
    from lpvault import Vault

    vault = Vault.open("user@example.com", password="secret")
    account = vault.find_accounts(name=b"Gmail", first=True)
    print(account.username)
"""

__version__ = "0.1.0"

from .exceptions import (
    ErrorKind,
    FormatError,
    InvalidPasswordError,
    InvalidResponse,
    KdfError,
    LastPassError,
    LoginError,
    NetworkError,
    ResponseError,
    UnknownResponseSchema,
    UnknownServerError,
    UnknownUsernameError,
)
from .fetcher import Fetcher, fetch
from .models import Account, EquivalentDomain
from .parsing import Blob, Chunk, Encoding
from .security import derive_encryption_key, derive_login_hash
from .session import Session, login, request_iteration_count, request_login
from .settings import VaultSettings
from .transport import HttpxTransport, Response, Transport
from .vault import Vault

__all__ = [
    # Core classes
    "Account",
    "Blob",
    "Chunk",
    "Encoding",
    "EquivalentDomain",
    "Fetcher",
    "Session",
    "Vault",
    "VaultSettings",
    # Transport
    "HttpxTransport",
    "Response",
    "Transport",
    # Functions
    "derive_encryption_key",
    "derive_login_hash",
    "fetch",
    "login",
    "request_iteration_count",
    "request_login",
    # Exceptions
    "ErrorKind",
    "LastPassError",
    "NetworkError",
    "ResponseError",
    "InvalidResponse",
    "UnknownResponseSchema",
    "LoginError",
    "UnknownUsernameError",
    "InvalidPasswordError",
    "UnknownServerError",
    "FormatError",
    "KdfError",
]
