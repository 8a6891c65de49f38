"""Password hashing service using bcrypt."""

import secrets
from functools import lru_cache

import bcrypt

from warden_identity.exceptions import WeakPasswordError


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> str:
    # Random throwaway password; nothing can ever verify against it
    password = secrets.token_urlsafe(32).encode("utf-8")
    return bcrypt.hashpw(password, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt with a configurable work factor. Strength policy (minimum
    length, character classes) belongs to the request layer; this service
    only rejects input bcrypt cannot hash faithfully.

    Examples
    --------
    >>> service = PasswordHashingService()
    >>> hash = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", hash)
    True
    >>> service.verify("wrong_password", hash)
    False
    """

    # bcrypt only looks at the first 72 bytes of its input
    MAX_BYTES = 72

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12.
        """
        self._rounds = rounds

    @property
    def dummy_hash(self) -> str:
        """A hash at this work factor that no password matches.

        Verifying against it costs the same as a real check, so callers can
        reject a missing account in the same time as a wrong password.
        """
        return _dummy_hash(self._rounds)

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The bcrypt hash as a string

        Raises
        ------
        WeakPasswordError
            If the password is empty or longer than bcrypt supports
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        encoded = password.encode("utf-8")
        if len(encoded) > self.MAX_BYTES:
            msg = f"Password cannot exceed {self.MAX_BYTES} bytes"
            raise WeakPasswordError(msg)

        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Returns
        -------
        True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format or over-long input
            return False
