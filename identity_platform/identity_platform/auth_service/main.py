"""
Auth Service - registration, login and token verification over HTTP
"""
from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .db import create_db_engine, create_session_factory, init_db
from .directory import SqlUserDirectory, UserDirectory
from .errors import AuthErrorKind, AuthFailure
from .hashing import PasswordHasher
from .routes import auth, health
from .service import AuthService
from .tokens import TokenCodec
from .utils.event_logger import configure_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    directory: Optional[UserDirectory] = None,
    codec: Optional[TokenCodec] = None,
) -> FastAPI:
    """
    Build the application.

    Without an explicit ``directory`` the users table at
    ``settings.DATABASE_URL`` is used and created on startup.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    if settings.uses_dev_secret:
        logger.warning("JWT_SECRET is not set; using the built-in development secret")

    engine = None
    session_factory = None
    if directory is None:
        engine = create_db_engine(settings.DATABASE_URL)
        session_factory = create_session_factory(engine)
        directory = SqlUserDirectory(session_factory)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        """Initialize database on startup"""
        if engine is not None:
            init_db(engine)
        yield
        if engine is not None:
            engine.dispose()

    app = FastAPI(title="Auth Service", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.auth_service = AuthService(
        directory=directory,
        hasher=PasswordHasher.from_settings(settings),
        codec=codec or TokenCodec.from_settings(settings),
    )

    app.include_router(auth.router)
    app.include_router(health.router)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        failure = AuthFailure(AuthErrorKind.INTERNAL_FAILURE, "Internal authentication error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": failure.to_dict()},
        )

    return app
