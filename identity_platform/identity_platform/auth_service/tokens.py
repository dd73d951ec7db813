"""
Signed, time-bounded identity tokens (JWT via PyJWT).
"""
from datetime import datetime, timezone
from typing import Callable, Optional, Union

import jwt
from pydantic import ValidationError

from .config import Settings
from .errors import TokenRejected, TokenRejectReason
from .schemas import IdentityClaims

# Registered claims never handed back to callers
REGISTERED_CLAIMS = ("iat", "exp", "nbf", "sub", "iss", "aud", "jti")

# HMAC only; the signing secret is a shared key
SUPPORTED_ALGORITHMS = ("HS256", "HS384", "HS512")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """
    Issues and verifies HMAC-signed tokens carrying identity claims.

    The secret, algorithm and default lifetime are fixed at construction.
    ``clock`` returns an aware UTC datetime and is used for both issuing and
    expiry checks.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl_seconds: int = 7200,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unsupported token algorithm: {algorithm}")
        self._secret = secret
        self._algorithm = algorithm
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "TokenCodec":
        return cls(
            secret=settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
            ttl_seconds=settings.TOKEN_TTL_SECONDS,
            **kwargs,
        )

    def issue(self, claims: IdentityClaims, ttl_seconds: Optional[int] = None) -> str:
        if ttl_seconds is None:
            ttl_seconds = self.ttl_seconds
        issued_at = int(self._clock().timestamp())
        payload = claims.model_dump()
        payload["iat"] = issued_at
        payload["exp"] = issued_at + ttl_seconds
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify_and_decode(self, token: str) -> Union[IdentityClaims, TokenRejected]:
        """
        Check signature and expiry and return the embedded identity claims.

        Returns a ``TokenRejected`` instead of raising when the token is
        tampered with, expired or unparseable.
        """
        if not token:
            return TokenRejected(TokenRejectReason.MALFORMED, "Token is empty")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                # expiry is checked against our own clock below
                options={"require": ["exp", "iat"], "verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidSignatureError:
            return TokenRejected(TokenRejectReason.BAD_SIGNATURE, "Token signature is invalid")
        except jwt.InvalidTokenError:
            return TokenRejected(TokenRejectReason.MALFORMED, "Token could not be decoded")

        expires_at = payload.get("exp")
        if not isinstance(expires_at, (int, float)):
            return TokenRejected(TokenRejectReason.MALFORMED, "Token expiry is not a timestamp")
        if expires_at <= self._clock().timestamp():
            return TokenRejected(TokenRejectReason.EXPIRED, "Token has expired")

        claims = {key: value for key, value in payload.items() if key not in REGISTERED_CLAIMS}
        try:
            return IdentityClaims(**claims)
        except (ValidationError, TypeError):
            return TokenRejected(TokenRejectReason.MALFORMED, "Token claims are incomplete")
