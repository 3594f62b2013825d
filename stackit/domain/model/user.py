"""User aggregate root.

Users authenticate with username/email and password and accumulate
reputation, which gates voting and commenting.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from stackit.domain.model.common import DomainModel
from stackit.domain.value import UserId, UserRole, Username


class User(DomainModel):
    """User aggregate root."""

    id: UserId
    username: Username
    email: str = Field(min_length=3, max_length=255)
    password_hash: str
    role: UserRole = UserRole.USER
    reputation: int = 0
    bio: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def has_reputation(self, threshold: int) -> bool:
        """Whether the user meets a reputation threshold (admins always do)."""
        return self.is_admin or self.reputation >= threshold
