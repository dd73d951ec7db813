"""
Auth RPC endpoints: register, login and token verification.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from ..errors import AuthErrorKind, AuthFailure
from ..schemas import AuthSession, LoginRequest, RegisterRequest, VerifyTokenRequest
from ..service import AuthOutcome, AuthService

router = APIRouter(prefix="/auth", tags=["auth"])

STATUS_BY_KIND = {
    AuthErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    AuthErrorKind.ALREADY_EXISTS: status.HTTP_400_BAD_REQUEST,
    AuthErrorKind.NOT_FOUND: status.HTTP_401_UNAUTHORIZED,
    AuthErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    AuthErrorKind.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    AuthErrorKind.DIRECTORY_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    AuthErrorKind.HASHING_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    AuthErrorKind.INTERNAL_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Unknown email and wrong password look the same from outside
GENERIC_LOGIN_FAILURE = AuthFailure(AuthErrorKind.INVALID_CREDENTIALS, "Invalid credentials")


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def _unwrap(outcome: AuthOutcome) -> AuthSession:
    if isinstance(outcome, AuthFailure):
        raise HTTPException(status_code=STATUS_BY_KIND[outcome.kind], detail=outcome.to_dict())
    return outcome


@router.post("/register", response_model=AuthSession)
def register(payload: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    return _unwrap(service.register(payload.name, payload.email, payload.password))


@router.post("/login", response_model=AuthSession)
def login(payload: LoginRequest, service: AuthService = Depends(get_auth_service)):
    outcome = service.login(payload.email, payload.password)
    if isinstance(outcome, AuthFailure) and outcome.kind in (
        AuthErrorKind.NOT_FOUND,
        AuthErrorKind.INVALID_CREDENTIALS,
    ):
        outcome = GENERIC_LOGIN_FAILURE
    return _unwrap(outcome)


@router.post("/verify", response_model=AuthSession)
def verify(
    payload: Optional[VerifyTokenRequest] = None,
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    service: AuthService = Depends(get_auth_service),
):
    """
    Verify a token and return a freshly issued one.

    The token is read from the body, or from an ``Authorization: Bearer``
    header when the body carries none.
    """
    token = payload.token if payload else None
    if not token and authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=AuthFailure(AuthErrorKind.INVALID_TOKEN, "Not authenticated").to_dict(),
        )
    return _unwrap(service.verify_token(token))
