"""
Credential service implementation.

Registration and login on top of the user store, the password hasher and
the token codec. All configuration (secret, token TTL) is injected.
"""

import logging
from datetime import timedelta
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from modules.users.exceptions import DuplicateEmailError
from modules.users.interfaces import IUserRepository
from modules.users.models import NewUser, UserRecord, UserSummary
from shared.exceptions import GatehouseError

from .exceptions import (
    InvalidCredentialsError,
    MalformedDigestError,
    SigningError,
    TokenIssuanceError,
)
from .interfaces import ICredentialService
from .models import AuthResult, LoginRequest, RegisterRequest
from .password import PasswordHasher
from .tokens import TokenCodec

logger = logging.getLogger(__name__)

UNKNOWN_USER_PASSWORD = "gatehouse-unknown-user"


class CredentialService(ICredentialService):
    """
    Implementation of the credential service.

    Store and hashing errors propagate unchanged; token signing errors are
    reported as ``TokenIssuanceError``.
    """

    def __init__(
        self,
        users: IUserRepository,
        hasher: PasswordHasher,
        codec: TokenCodec,
        secret: str,
        token_ttl: timedelta,
    ):
        self._users = users
        self._hasher = hasher
        self._codec = codec
        self._secret = secret
        self._token_ttl = token_ttl
        self._dummy_digest: Optional[str] = None

    async def register(self, request: RegisterRequest) -> AuthResult:
        """
        Create a credential record and issue a token for it.

        The existence check gives a clean error in the common case; the
        store's own uniqueness constraint covers concurrent registrations.
        """
        if self._users.find_by_email(request.email) is not None:
            logger.info("Registration refused: email already registered")
            raise DuplicateEmailError()

        password_hash = await run_in_threadpool(self._hasher.hash, request.password)

        record = self._users.create(
            NewUser(email=request.email, password_hash=password_hash, name=request.name)
        )
        logger.info("Registered user %s", record.id)

        return self._result_for(record)

    async def login(self, request: LoginRequest) -> AuthResult:
        """Verify email and password, then issue a token."""
        record = self._users.find_by_email(request.email)
        if record is None:
            digest = await run_in_threadpool(self._timing_digest)
            await run_in_threadpool(self._hasher.verify, request.password, digest)
            raise self._invalid("unknown_email")

        try:
            matches = await run_in_threadpool(
                self._hasher.verify, request.password, record.password_hash
            )
        except MalformedDigestError:
            logger.error("Stored password digest for user %s is malformed", record.id)
            raise self._invalid("malformed_digest")

        if not matches:
            raise self._invalid("wrong_password")

        if self._hasher.needs_rehash(record.password_hash):
            record = await self._upgrade_hash(record, request.password)

        logger.info("Login: user %s", record.id)
        return self._result_for(record)

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _result_for(self, record: UserRecord) -> AuthResult:
        try:
            token = self._codec.issue(record.id, record.email, self._secret, self._token_ttl)
        except SigningError as e:
            logger.error("Token issuance failed for user %s: %s", record.id, e.message)
            raise TokenIssuanceError() from e

        return AuthResult(
            user=UserSummary.from_record(record),
            token=token,
            expires_in=int(self._token_ttl.total_seconds()),
        )

    async def _upgrade_hash(self, record: UserRecord, password: str) -> UserRecord:
        """Re-hash with the current cost factor. Failure leaves the old hash in place."""
        try:
            new_hash = await run_in_threadpool(self._hasher.hash, password)
            return self._users.update(record.model_copy(update={"password_hash": new_hash}))
        except GatehouseError:
            logger.warning("Password re-hash failed for user %s", record.id, exc_info=True)
            return record

    def _timing_digest(self) -> str:
        """
        Digest that unknown-email logins are checked against, so they cost one
        bcrypt comparison like a wrong password does.
        """
        if self._dummy_digest is None:
            self._dummy_digest = self._hasher.hash(UNKNOWN_USER_PASSWORD)
        return self._dummy_digest

    @staticmethod
    def _invalid(reason: str) -> InvalidCredentialsError:
        logger.info("Login failed: %s", reason)
        return InvalidCredentialsError(reason)
