"""
Registration, login and token re-verification.

Each operation returns either an ``AuthSession`` or an ``AuthFailure``;
expected failures are never raised.
"""
import logging
from typing import Optional, Union

from .directory import UserDirectory
from .errors import (
    AuthErrorKind,
    AuthFailure,
    DirectoryUnavailableError,
    DuplicateEmailError,
    TokenRejected,
)
from .hashing import PasswordHasher
from .schemas import MAX_PASSWORD_LENGTH, AuthSession, IdentityClaims
from .tokens import TokenCodec
from .utils.event_logger import log_auth_event

logger = logging.getLogger(__name__)

AuthOutcome = Union[AuthSession, AuthFailure]

DIRECTORY_UNAVAILABLE = AuthFailure(
    AuthErrorKind.DIRECTORY_UNAVAILABLE, "User directory is unavailable"
)
INTERNAL_FAILURE = AuthFailure(AuthErrorKind.INTERNAL_FAILURE, "Internal authentication error")


class AuthService:
    """Service for authentication operations."""

    def __init__(self, directory: UserDirectory, hasher: PasswordHasher, codec: TokenCodec):
        self.directory = directory
        self.hasher = hasher
        self.codec = codec

    def register(self, name: str, email: str, password: str) -> AuthOutcome:
        if not name or not email or not password:
            return self._fail(
                "register_failure",
                AuthFailure(AuthErrorKind.INVALID_INPUT, "Name, email and password are required"),
                email=email,
            )
        if len(password) > MAX_PASSWORD_LENGTH:
            return self._fail(
                "register_failure",
                AuthFailure(
                    AuthErrorKind.INVALID_INPUT,
                    f"Password must be at most {MAX_PASSWORD_LENGTH} characters",
                ),
                email=email,
            )

        try:
            if self.directory.find_by_email(email) is not None:
                return self._already_exists(email)

            try:
                password_hash = self.hasher.hash(password)
            except ValueError:
                return self._fail(
                    "register_failure",
                    AuthFailure(AuthErrorKind.HASHING_FAILURE, "Password could not be hashed"),
                    email=email,
                )

            try:
                user = self.directory.create(name, email, password_hash)
            except DuplicateEmailError:
                # lost a race with a concurrent registration
                return self._already_exists(email)
        except DirectoryUnavailableError:
            return self._fail("register_failure", DIRECTORY_UNAVAILABLE, email=email)
        except Exception:
            logger.exception("Unexpected error during registration")
            return self._fail("register_failure", INTERNAL_FAILURE, email=email)

        return self._session_for(user.to_claims(), "register_success", "register_failure")

    def login(self, email: str, password: str) -> AuthOutcome:
        try:
            user = self.directory.find_by_email(email)
        except DirectoryUnavailableError:
            return self._fail("login_failure", DIRECTORY_UNAVAILABLE, email=email)
        except Exception:
            logger.exception("Unexpected error during login")
            return self._fail("login_failure", INTERNAL_FAILURE, email=email)

        if user is None:
            return self._fail(
                "login_failure",
                AuthFailure(AuthErrorKind.NOT_FOUND, "User doesn't exist"),
                email=email,
            )

        try:
            password_ok = self.hasher.verify(password, user.password_hash)
        except Exception:
            logger.exception("Unexpected error while checking password")
            return self._fail("login_failure", INTERNAL_FAILURE, email=email, user_id=user.id)

        if not password_ok:
            failure = AuthFailure(AuthErrorKind.INVALID_CREDENTIALS, "Invalid password")
            return self._fail("login_failure", failure, email=email, user_id=user.id)

        return self._session_for(user.to_claims(), "login_success", "login_failure")

    def verify_token(self, token: str) -> AuthOutcome:
        """
        Validate ``token`` and hand back a freshly signed one (sliding expiration).

        The user directory is not consulted; the claims are trusted as of
        issuance.
        """
        try:
            decoded = self.codec.verify_and_decode(token)
        except Exception:
            logger.exception("Unexpected error while decoding token")
            return self._fail("token_rejected", INTERNAL_FAILURE)

        if isinstance(decoded, TokenRejected):
            failure = AuthFailure(AuthErrorKind.INVALID_TOKEN, decoded.message, decoded.reason.value)
            return self._fail("token_rejected", failure)

        return self._session_for(decoded, "token_verified", "token_rejected")

    def _session_for(self, claims: IdentityClaims, success_event: str, failure_event: str) -> AuthOutcome:
        try:
            token = self.codec.issue(claims)
        except Exception:
            # a registered user stays stored; logging in again issues a token
            logger.exception("Unexpected error while issuing token")
            return self._fail(failure_event, INTERNAL_FAILURE, email=claims.email, user_id=claims.id)
        log_auth_event(success_event, user_id=claims.id, email=claims.email)
        return AuthSession(user=claims, token=token)

    def _already_exists(self, email: str) -> AuthFailure:
        return self._fail(
            "register_failure",
            AuthFailure(AuthErrorKind.ALREADY_EXISTS, "User already exists"),
            email=email,
        )

    @staticmethod
    def _fail(
        event_type: str,
        failure: AuthFailure,
        email: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> AuthFailure:
        log_auth_event(event_type, user_id=user_id, email=email, kind=failure.kind.value)
        return failure
