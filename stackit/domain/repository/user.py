"""User repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Optional

from stackit.domain.model.user import User
from stackit.domain.value import UserId, UserRole, Username


class UserOrder(str, Enum):
    """Orderings offered by the user directory."""

    REPUTATION = "reputation"  # reputation DESC
    USERNAME = "username"
    NEWEST = "newest"
    OLDEST = "oldest"


class UserRepository(ABC):
    """Persistence contract for accounts.

    Reputation is a counter shared by concurrent requests (votes, accepts),
    so it is never written from a loaded model: ``save`` keeps whatever is
    stored and ``adjust_reputation`` applies deltas in place.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        pass

    @abstractmethod
    async def find_by_username(self, username: Username) -> Optional[User]:
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Look up an account by its (already lower-cased) email."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Insert a new account or overwrite an existing one's profile.

        Returns:
            The user as stored, carrying the stored reputation
        """
        pass

    @abstractmethod
    async def adjust_reputation(self, user_id: UserId, points: int) -> Optional[User]:
        """Add ``points`` (negative to take away) to a user's reputation.

        Returns:
            The updated user, or None when no such user exists
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        query: Optional[str] = None,
        min_reputation: Optional[int] = None,
        role: Optional[UserRole] = None,
        created_since: Optional[datetime] = None,
        order: UserOrder = UserOrder.REPUTATION,
        limit: int = 20,
        offset: int = 0,
    ) -> list[User]:
        """List accounts for the user directory, search and leaderboard.

        Args:
            query: Only users whose username or bio contains this text,
                ignoring case
            min_reputation: Only users with at least this much reputation
            role: Only users with this role
            created_since: Only users who joined at or after this time
            order: Sort order; ties fall back to username
            limit: Maximum number of users
            offset: Number of users to skip
        """
        pass

    @abstractmethod
    async def count(
        self,
        query: Optional[str] = None,
        min_reputation: Optional[int] = None,
        role: Optional[UserRole] = None,
        created_since: Optional[datetime] = None,
    ) -> int:
        """Count users matching the same filters as ``find_all``."""
        pass
