from pydantic import BaseModel, ConfigDict, Field

from typing import Optional

MAX_PASSWORD_LENGTH = 4096


class IdentityClaims(BaseModel):
    """The user fields that are safe to embed in a token."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str


class UserRecord(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    name: str
    email: str
    password_hash: str = Field(repr=False)

    def to_claims(self) -> IdentityClaims:
        return IdentityClaims(id=self.id, name=self.name, email=self.email)


class AuthSession(BaseModel):
    """Successful result of register, login and verify."""

    user: IdentityClaims
    token: str


# Requests
class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=MAX_PASSWORD_LENGTH)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=MAX_PASSWORD_LENGTH)


class VerifyTokenRequest(BaseModel):
    token: Optional[str] = None

