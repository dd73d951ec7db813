"""
User directory: the persistent store of user records.

The auth service only needs lookup-by-email and create. Implementations
raise ``DuplicateEmailError`` when a create collides with an existing email
and ``DirectoryUnavailableError`` when the backing store cannot be reached.
"""
import logging
import threading
import uuid
from typing import Dict, Optional, Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .errors import DirectoryUnavailableError, DuplicateEmailError
from .models import User
from .schemas import UserRecord

logger = logging.getLogger(__name__)


class UserDirectory(Protocol):
    def find_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    def create(self, name: str, email: str, password_hash: str) -> UserRecord:
        ...


class SqlUserDirectory:
    """User directory backed by the ``users`` table."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        try:
            with self._session_factory() as db:
                user = db.query(User).filter(User.email == email).first()
                # copy out scalar values so nothing outlives the session
                return UserRecord.model_validate(user) if user else None
        except SQLAlchemyError as e:
            logger.error("User lookup failed: %s", type(e).__name__)
            raise DirectoryUnavailableError("User directory is unavailable") from e

    def create(self, name: str, email: str, password_hash: str) -> UserRecord:
        try:
            with self._session_factory() as db:
                user = User(name=name, email=email, password_hash=password_hash)
                db.add(user)
                try:
                    db.commit()
                except IntegrityError as e:
                    db.rollback()
                    raise DuplicateEmailError(email) from e
                db.refresh(user)
                return UserRecord.model_validate(user)
        except SQLAlchemyError as e:
            logger.error("User create failed: %s", type(e).__name__)
            raise DirectoryUnavailableError("User directory is unavailable") from e


class InMemoryUserDirectory:
    """Thread-safe dict-backed directory for tests and local runs."""

    def __init__(self):
        self._users: Dict[str, UserRecord] = {}
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        with self._lock:
            return self._users.get(email)

    def create(self, name: str, email: str, password_hash: str) -> UserRecord:
        with self._lock:
            if email in self._users:
                raise DuplicateEmailError(email)
            record = UserRecord(
                id=uuid.uuid4().hex,
                name=name,
                email=email,
                password_hash=password_hash,
            )
            self._users[email] = record
            return record

    def __len__(self) -> int:
        return len(self._users)
