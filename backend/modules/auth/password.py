"""
Password hashing and verification.

Uses bcrypt with automatic salting and a configurable work factor
(BCRYPT_ROUNDS). bcrypt only looks at the first 72 bytes of a password;
longer input is refused by ``hash`` and never matches in ``verify``.
"""

import re

import bcrypt

from shared.validators import MAX_PASSWORD_BYTES

from .exceptions import HashingError, MalformedDigestError, PasswordTooLongError

DEFAULT_ROUNDS = 12

# $2b$12$ + 22 chars of salt + 31 chars of hash
_BCRYPT_DIGEST = re.compile(r"^\$2[abxy]?\$(\d{2})\$[./A-Za-z0-9]{53}$")


class PasswordHasher:
    """bcrypt hasher bound to one cost factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds must be between 4 and 31, got {rounds}")
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """
        Hash a password with a fresh salt.

        Raises:
            PasswordTooLongError: If the password exceeds 72 bytes
            HashingError: If bcrypt fails (e.g. resource exhaustion)
        """
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise PasswordTooLongError()
        try:
            hashed = bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds))
        except (ValueError, MemoryError) as e:
            raise HashingError(str(e)) from e
        return hashed.decode("utf-8")

    def verify(self, password: str, digest: str) -> bool:
        """
        Constant-time check of a password against a bcrypt digest.

        A mismatch is ``False``, not an error. So is a password over 72
        bytes, since ``hash`` never accepts one.

        Raises:
            MalformedDigestError: If ``digest`` is not a bcrypt string
        """
        if not _BCRYPT_DIGEST.match(digest):
            raise MalformedDigestError()
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, digest.encode("utf-8"))
        except ValueError as e:
            raise MalformedDigestError(str(e)) from e

    def needs_rehash(self, digest: str) -> bool:
        """True when ``digest`` was produced with a different cost factor."""
        match = _BCRYPT_DIGEST.match(digest)
        if match is None:
            raise MalformedDigestError()
        return int(match.group(1)) != self.rounds
