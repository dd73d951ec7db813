from passlib.context import CryptContext

from .config import Settings


class PasswordHasher:
    """
    One-way password hashing backed by a passlib CryptContext.

    Every call to ``hash`` draws a fresh salt; the work factor is fixed by
    configuration for the lifetime of the hasher.
    """

    def __init__(self, scheme: str = "pbkdf2_sha256", rounds: int = 29000):
        # pbkdf2_sha256 avoids the external bcrypt backend
        self._context = CryptContext(
            schemes=[scheme],
            deprecated="auto",
            **{f"{scheme}__rounds": rounds},
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(scheme=settings.PASSWORD_HASH_SCHEME, rounds=settings.PASSWORD_HASH_ROUNDS)

    def hash(self, password: str) -> str:
        if not password:
            raise ValueError("Password must not be empty")
        return self._context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        """Return True only when ``password`` matches ``hashed_password``."""
        if not password or not hashed_password:
            return False
        try:
            return self._context.verify(password, hashed_password)
        except (ValueError, TypeError):
            # unrecognised or corrupt hash
            return False
