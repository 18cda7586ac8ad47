"""Tests for encryption key and login hash derivation."""

import base64

import pytest

from lpvault.exceptions import ErrorKind, KdfError
from lpvault.security import derive_encryption_key, derive_login_hash

USERNAME = "postlass@gmail.com"
PASSWORD = "pl1234567890"

REFERENCE_KEYS = {
    1: "C/Bh2SGWxI8JDu54DbbpV8J9wa6pKbesIb9MAXkeF3Y=",
    5: "pE9goazSCRqnWwcixWM4NHJjWMvB5T15dMhe6ug1pZg=",
    10: "n9S0SyJdrMegeBHtkxUx8Lzc7wI6aGl+y3/udGmVey8=",
    50: "GwI8/kNy1NjIfe3Z0VAZfF78938UVuCi6xAL3MJBux0=",
    100: "piGdSULeHMWiBS3QJNM46M5PIYwQXA6cNS10pLB3Xf8=",
    500: "OfOUvVnQzB4v49sNh4+PdwIFb9Fr5+jVfWRTf+E2Ghg=",
    1000: "z7CdwlIkbu0XvcB7oQIpnlqwNGemdrGTBmDKnL9taPg=",
}

REFERENCE_HASHES = {
    1: "a1943cfbb75e37b129bbf78b9baeab4ae6dd08225776397f66b8e0c7a913a055",
    5: "a95849e029a7791cfc4503eed9ec96ab8675c4a7c4e82b00553ddd179b3d8445",
    10: "0da0b44f5e6b7306f14e92de6d629446370d05afeb1dc07cfcbe25f169170c16",
    50: "1d5bc0d636da4ad469cefe56c42c2ff71589facb9c83f08fcf7711a7891cc159",
    100: "82fc12024acb618878ba231a9948c49c6f46e30b5a09c11d87f6d3338babacb5",
    500: "3139861ae962801b59fc41ff7eeb11f84ca56d810ab490f0d8c89d9d9ab07aa6",
    1000: "03161354566c396fcd624a424164160e890e96b4b5fa6d942fc6377ab613513b",
}


class TestDeriveEncryptionKey:
    """Tests for derive_encryption_key."""

    @pytest.mark.parametrize("iterations", sorted(REFERENCE_KEYS))
    def test_reference_vectors(self, iterations: int) -> None:
        """Test that keys match the known values for each iteration count."""
        expected = base64.b64decode(REFERENCE_KEYS[iterations])
        assert derive_encryption_key(USERNAME, PASSWORD, iterations) == expected

    def test_key_is_32_bytes(self) -> None:
        """Test key length in both modes."""
        assert len(derive_encryption_key(USERNAME, PASSWORD, 1)) == 32
        assert len(derive_encryption_key(USERNAME, PASSWORD, 2)) == 32

    def test_deterministic(self) -> None:
        """Test that the same inputs always give the same key."""
        assert derive_encryption_key("a", "b", 7) == derive_encryption_key("a", "b", 7)

    def test_username_is_salt(self) -> None:
        """Test that a different username changes the key."""
        assert derive_encryption_key("a", "pw", 5) != derive_encryption_key("b", "pw", 5)

    @pytest.mark.parametrize("iterations", [0, -1])
    def test_non_positive_iterations_rejected(self, iterations: int) -> None:
        """Test that a non-positive iteration count raises KdfError."""
        with pytest.raises(KdfError) as exc_info:
            derive_encryption_key(USERNAME, PASSWORD, iterations)
        assert exc_info.value.kind is ErrorKind.KDF


class TestDeriveLoginHash:
    """Tests for derive_login_hash."""

    @pytest.mark.parametrize("iterations", sorted(REFERENCE_HASHES))
    def test_reference_vectors(self, iterations: int) -> None:
        """Test that hashes match the known values for each iteration count."""
        assert derive_login_hash(USERNAME, PASSWORD, iterations) == REFERENCE_HASHES[iterations]

    def test_hash_format(self) -> None:
        """Test that the hash is 64 lowercase hex characters."""
        result = derive_login_hash(USERNAME, PASSWORD, 5)
        assert len(result) == 64
        assert result == result.lower()
        int(result, 16)

    def test_hash_differs_from_key(self) -> None:
        """Test that the login hash never leaks the encryption key."""
        key = derive_encryption_key(USERNAME, PASSWORD, 5)
        assert derive_login_hash(USERNAME, PASSWORD, 5) != key.hex()
