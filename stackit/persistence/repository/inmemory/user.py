"""In-memory user repository for testing."""

from datetime import datetime
from typing import Optional

from stackit.domain.model.user import User
from stackit.domain.repository.user import UserOrder, UserRepository
from stackit.domain.value import UserId, UserRole, Username

from .store import InMemoryStore, contains_text


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    @property
    def _users(self) -> dict[UserId, User]:
        return self._store.users

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by their username."""
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def save(self, user: User) -> User:
        """Save or update a user, keeping the stored reputation."""
        existing = self._users.get(user.id)
        if existing:
            user = user.model_copy(update={"reputation": existing.reputation})
        self._users[user.id] = user
        return user

    async def adjust_reputation(self, user_id: UserId, points: int) -> Optional[User]:
        """Add points to a user's reputation."""
        user = self._users.get(user_id)
        if user is None:
            return None
        updated = user.model_copy(
            update={"reputation": user.reputation + points, "updated_at": datetime.now()}
        )
        self._users[user_id] = updated
        return updated

    def _filtered(
        self,
        query: Optional[str],
        min_reputation: Optional[int],
        role: Optional[UserRole],
        created_since: Optional[datetime],
    ) -> list[User]:
        users = list(self._users.values())
        if query:
            users = [u for u in users if contains_text(query, u.username.root, u.bio)]
        if min_reputation is not None:
            users = [u for u in users if u.reputation >= min_reputation]
        if role is not None:
            users = [u for u in users if u.role == role]
        if created_since is not None:
            users = [u for u in users if u.created_at >= created_since]
        return users

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
        """List users matching the filters, one page at a time."""
        users = self._filtered(query, min_reputation, role, created_since)
        users.sort(key=lambda u: u.username.root)
        if order == UserOrder.REPUTATION:
            users.sort(key=lambda u: u.reputation, reverse=True)
        elif order == UserOrder.NEWEST:
            users.sort(key=lambda u: u.created_at, reverse=True)
        elif order == UserOrder.OLDEST:
            users.sort(key=lambda u: u.created_at)
        return users[offset : offset + limit]

    async def count(
        self,
        query: Optional[str] = None,
        min_reputation: Optional[int] = None,
        role: Optional[UserRole] = None,
        created_since: Optional[datetime] = None,
    ) -> int:
        """Count users matching the filters."""
        return len(self._filtered(query, min_reputation, role, created_since))
