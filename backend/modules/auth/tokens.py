"""
Session token issuing and verification.

Tokens are compact JWTs signed with HMAC-SHA256 (PyJWT). The codec keeps
no state between calls; the secret and TTL are passed in by the caller.
Verification order matters: the signature is checked first, over the raw
segments and before anything is decoded, so a token that differs from an
issued one in any byte is reported as a bad signature, never as malformed
or expired.
"""

import hmac
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt
from jwt.algorithms import HMACAlgorithm
from jwt.utils import base64url_encode
from pydantic import ValidationError as PydanticValidationError

from .exceptions import (
    BadSignatureError,
    MalformedTokenError,
    SigningError,
    TokenExpiredError,
)
from .models import TokenClaims

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["sub", "email", "iat", "exp"]

_HS256 = HMACAlgorithm(HMACAlgorithm.SHA256)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """
    Issues and verifies signed, time-bounded bearer tokens.

    ``iat`` is informational; there is no not-before check.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._clock = clock

    def issue(self, user_id: str, email: str, secret: str, ttl: timedelta) -> str:
        """
        Sign a token for ``user_id`` valid for ``ttl`` from now.

        Raises:
            SigningError: If the secret is empty or encoding fails
        """
        if not secret:
            raise SigningError("signing secret is not configured")

        now = self._clock()
        payload = {
            "sub": user_id,
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
        }
        try:
            return jwt.encode(payload, secret, algorithm=ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise SigningError(str(e)) from e

    def verify(self, token: str, secret: str) -> TokenClaims:
        """
        Check a token's signature and expiry and return its claims.

        Raises:
            MalformedTokenError: Not three segments, or a correctly signed token
                with missing or invalid claims
            BadSignatureError: Signature does not match ``secret``
            TokenExpiredError: Signature valid but ``now >= exp``
        """
        if not secret:
            raise BadSignatureError("verification secret is not configured")

        _check_signature(token, secret)

        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options={
                    "require": REQUIRED_CLAIMS,
                    # Expiry is checked below against the injected clock
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidSignatureError as e:
            raise BadSignatureError() from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(str(e)) from e

        try:
            claims = TokenClaims(**payload)
        except PydanticValidationError as e:
            raise MalformedTokenError("invalid claim types") from e

        if self._clock().timestamp() >= claims.exp:
            raise TokenExpiredError()

        return claims


def _check_signature(token: str, secret: str) -> None:
    """
    Compare the signature segment with the HS256 signature of the first two.

    The comparison is on the encoded text, so any change to any segment,
    including non-canonical base64 in the signature, is a mismatch.
    """
    signing_input, dot, signature = token.rpartition(".")
    if not dot or signing_input.count(".") != 1:
        raise MalformedTokenError("token must have three segments")

    key = _HS256.prepare_key(secret)
    expected = base64url_encode(_HS256.sign(signing_input.encode("utf-8"), key))
    if not hmac.compare_digest(expected, signature.encode("utf-8")):
        raise BadSignatureError()

