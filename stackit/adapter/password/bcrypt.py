"""bcrypt password hasher."""

import bcrypt
import logfire

from stackit.adapter.error import PasswordHashError
from stackit.domain.service.user_service import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """Password hasher backed by bcrypt."""

    def __init__(self, rounds: int = 12) -> None:
        """Initialize the hasher.

        Args:
            rounds: bcrypt work factor (log2 of the iteration count)
        """
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored bcrypt hash.

        Raises:
            PasswordHashError: If the stored hash is not a bcrypt hash
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError as e:
            logfire.error("Stored password hash is malformed", error=str(e))
            raise PasswordHashError("Stored password hash is malformed") from e
