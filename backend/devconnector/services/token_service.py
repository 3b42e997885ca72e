"""
DevConnector Backend — Token Service
======================================

What:  Issues and verifies the signed, time-bounded tokens sent in `x-auth-token`.
How:   Wraps PyJWT with the secret, algorithm and lifetime from Settings.
       `issue` returns a token; `verify` returns the embedded user id or raises
       a typed AuthError. Both are plain synchronous calls: HMAC signing is
       fast enough to run inline on the event loop.
Who:   Login and registration call `issue`; the Auth Gate calls `verify`.

Payload layout:
    {"user": {"id": "<uuid>"}, "iat": <unix seconds>, "exp": <unix seconds>}
"""

import logging
import time
import uuid
from typing import Callable, Union

import jwt

from devconnector.config import Settings
from devconnector.exceptions import ExpiredTokenError, InvalidTokenError

logger = logging.getLogger(__name__)


class TokenService:
    """
    Stateless issue/verify pair around a shared secret.

    Args:
        secret:     HMAC key
        algorithm:  JWT algorithm name (HS256 by default)
        expires_in: Token lifetime in seconds
        clock:      Returns the current unix time; injectable for tests
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: int = 360000,
        clock: Callable[[], float] = time.time,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in
        self.clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_in=settings.jwt_expires_in,
        )

    def issue(self, user_id: Union[str, uuid.UUID]) -> str:
        issued_at = int(self.clock())
        payload = {
            "user": {"id": str(user_id)},
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Validate signature, format and expiry; return the user id.

        Expiry is checked against `self.clock`, the same clock `issue` uses.

        Raises:
            ExpiredTokenError: Signature is valid but `exp` has passed
            InvalidTokenError: Anything else (bad signature, garbage, missing id)
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"], "verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidTokenError as e:
            logger.debug("Token rejected: %s", str(e))
            raise InvalidTokenError(context={"reason": type(e).__name__})

        expires_at = payload["exp"]
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            raise InvalidTokenError(context={"reason": "exp is not a number"})
        if expires_at <= self.clock():
            raise ExpiredTokenError()

        user = payload.get("user")
        user_id = user.get("id") if isinstance(user, dict) else None
        if not user_id:
            raise InvalidTokenError(context={"reason": "missing user id"})
        return user_id
