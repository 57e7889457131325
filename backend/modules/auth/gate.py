"""
Request gate for protected routes.

Turns the raw Authorization header of a request into either a resolved
identity (``Continue``) or a rejection (``Reject``). It does not raise for
client errors; the HTTP adapter in api/middleware/auth.py decides how a
rejection is rendered.
"""

import logging
from typing import Optional, Union

from pydantic import BaseModel

from shared.models import AuthenticatedUser

from .exceptions import TokenError
from .tokens import TokenCodec

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"

MSG_MISSING = "authorization required"
MSG_MALFORMED = "malformed authorization header"
MSG_INVALID = "invalid or expired token"


class Continue(BaseModel):
    """The request may proceed as ``identity``."""

    identity: AuthenticatedUser

    model_config = {"frozen": True}


class Reject(BaseModel):
    """
    The request must stop here.

    ``message`` is what the client sees; ``reason`` is the internal
    classification (e.g. the token error code) and is only logged.
    """

    message: str
    reason: str

    model_config = {"frozen": True}


GateDecision = Union[Continue, Reject]


class RequestGate:
    """Bearer-token check bound to one signing secret."""

    def __init__(self, codec: TokenCodec, secret: str):
        self._codec = codec
        self._secret = secret

    def evaluate(self, authorization: Optional[str]) -> GateDecision:
        if authorization is None or not authorization.strip():
            return self._reject(MSG_MISSING, "missing_header")

        scheme, _, token = authorization.partition(" ")
        if scheme != BEARER_SCHEME or not token or token != token.strip():
            return self._reject(MSG_MALFORMED, "malformed_header")

        try:
            claims = self._codec.verify(token, self._secret)
        except TokenError as e:
            return self._reject(MSG_INVALID, e.code)

        return Continue(identity=AuthenticatedUser(id=claims.sub, email=claims.email))

    @staticmethod
    def _reject(message: str, reason: str) -> Reject:
        logger.info("Rejected request: %s", reason)
        return Reject(message=message, reason=reason)
