"""
Failure taxonomy for authentication operations.

Expected failures (email taken, bad password, bad token) are returned as
``AuthFailure`` values so callers can branch on ``kind``. Faults raised by
the user directory are exceptions and get translated by the service.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AuthErrorKind(str, Enum):
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_TOKEN = "invalid_token"
    INVALID_INPUT = "invalid_input"
    DIRECTORY_UNAVAILABLE = "directory_unavailable"
    HASHING_FAILURE = "hashing_failure"
    INTERNAL_FAILURE = "internal_failure"


class TokenRejectReason(str, Enum):
    EXPIRED = "expired"
    BAD_SIGNATURE = "bad_signature"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class AuthFailure:
    """A structured, caller-safe failure."""

    kind: AuthErrorKind
    message: str
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"kind": self.kind.value, "message": self.message}
        if self.reason:
            data["reason"] = self.reason
        return data


@dataclass(frozen=True)
class TokenRejected:
    """Returned by the token codec when a token cannot be accepted."""

    reason: TokenRejectReason
    message: str


class DirectoryError(Exception):
    """Base class for user directory faults."""


class DuplicateEmailError(DirectoryError):
    """The directory refused a create because the email is already taken."""

    def __init__(self, email: str):
        super().__init__("A user with this email already exists")
        self.email = email


class DirectoryUnavailableError(DirectoryError):
    """The backing store could not be reached."""
