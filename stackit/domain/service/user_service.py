"""User domain service."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

import logfire

from stackit.domain.error import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ReputationError,
    ValidationError,
)
from stackit.domain.model import User
from stackit.domain.repository import UserOrder, UserRepository
from stackit.domain.value import UserId, UserRole, Username

from .base import Service
from .notification_service import NotificationService

LEADERBOARD_PERIODS = {"all": None, "week": timedelta(days=7), "month": timedelta(days=30)}


class PasswordHasher(ABC):
    """Password hashing interface."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Hash a plain-text password.

        Args:
            password: Plain-text password

        Returns:
            Encoded hash suitable for storage
        """
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Check a plain-text password against a stored hash."""
        pass


class UserService(Service):
    """Domain service for user operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        notification_service: NotificationService,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            password_hasher: Password hashing implementation
            notification_service: Notification coordinator
        """
        self.user_repository = user_repository
        self.password_hasher = password_hasher
        self.notification_service = notification_service

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            logfire.info("User found", user_id=str(user_id), username=user.username.root)
            return user

    async def get_user_by_username(self, username: Username) -> User | None:
        """Get user by username.

        Args:
            username: Username

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_user_by_username", username=username.root):
            user = await self.user_repository.find_by_username(username)
            if user:
                logfire.info("User found", username=username.root, user_id=str(user.id))
            else:
                logfire.warn("User not found", username=username.root)
            return user

    async def register(
        self,
        username: Username,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Register a new user.

        Args:
            username: Desired username
            email: Email address (stored lower-cased)
            password: Plain-text password
            role: Account role

        Returns:
            Created user

        Raises:
            ConflictError: If the username or email is already taken
        """
        email = email.strip().lower()
        with logfire.span(
            "user_service.register", username=username.root, email=email
        ):
            if await self.user_repository.find_by_email(email):
                logfire.warn("Registration with existing email", email=email)
                raise ConflictError("User with this email already exists")
            if await self.user_repository.find_by_username(username):
                logfire.warn("Registration with existing username", username=username.root)
                raise ConflictError("Username is already taken")

            now = datetime.now()
            user = User(
                id=UserId(uuid4()),
                username=username,
                email=email,
                password_hash=self.password_hasher.hash(password),
                role=role,
                reputation=0,
                created_at=now,
                updated_at=now,
            )
            saved = await self.user_repository.save(user)
            logfire.info("User registered", user_id=str(saved.id), username=username.root)
            return saved

    async def authenticate(self, email: str, password: str) -> User | None:
        """Check login credentials.

        Args:
            email: Email address
            password: Plain-text password

        Returns:
            The user if the credentials match, None otherwise
        """
        email = email.strip().lower()
        with logfire.span("user_service.authenticate", email=email):
            user = await self.user_repository.find_by_email(email)
            if user is None or not self.password_hasher.verify(
                password, user.password_hash
            ):
                logfire.warn("Authentication failed", email=email)
                return None
            logfire.info("User authenticated", user_id=str(user.id))
            return user

    def require_reputation(self, user: User, threshold: int, action: str) -> None:
        """Ensure a user may perform a reputation-gated action.

        Raises:
            ReputationError: If the user is below the threshold and not an admin
        """
        if not user.has_reputation(threshold):
            logfire.warn(
                "Insufficient reputation",
                user_id=str(user.id),
                reputation=user.reputation,
                required=threshold,
                action=action,
            )
            raise ReputationError(action, threshold)

    async def adjust_reputation(
        self, user_id: UserId, points: int, reason: str, acting_user: User
    ) -> User:
        """Add (or remove) reputation points on behalf of an admin.

        The user is notified of the change.

        Args:
            user_id: User whose reputation changes
            points: Points to add, negative to remove
            reason: Human-readable reason included in the notification
            acting_user: Admin performing the change

        Returns:
            Updated user

        Raises:
            AuthorizationError: If the acting user is not an admin
            NotFoundError: If the user doesn't exist
        """
        with logfire.span(
            "user_service.adjust_reputation", user_id=str(user_id), points=points
        ):
            if not acting_user.is_admin:
                logfire.warn(
                    "Non-admin reputation adjustment", acting_user=str(acting_user.id)
                )
                raise AuthorizationError("Only admins can change reputation")

            updated = await self.user_repository.adjust_reputation(user_id, points)
            if updated is None:
                raise NotFoundError("User", str(user_id))
            logfire.info(
                "Reputation adjusted",
                user_id=str(user_id),
                points=points,
                reputation=updated.reputation,
            )

            await self.notification_service.notify_reputation_change(
                user_id, points, reason
            )
            return updated

    async def list_users(
        self,
        query: Optional[str] = None,
        min_reputation: Optional[int] = None,
        role: Optional[UserRole] = None,
        order: UserOrder = UserOrder.REPUTATION,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[User], int]:
        """List users for the directory and user search.

        Returns:
            Tuple of (users on this page, total matching)
        """
        with logfire.span(
            "user_service.list_users",
            query=query,
            min_reputation=min_reputation,
            role=role.value if role else None,
            order=order.value,
            limit=limit,
            offset=offset,
        ):
            users = await self.user_repository.find_all(
                query=query,
                min_reputation=min_reputation,
                role=role,
                order=order,
                limit=limit,
                offset=offset,
            )
            total = await self.user_repository.count(
                query=query, min_reputation=min_reputation, role=role
            )
            logfire.info("Users retrieved", count=len(users), total=total)
            return users, total

    async def leaderboard(self, period: str = "all", limit: int = 10) -> list[User]:
        """Highest-reputation users, optionally only those who joined recently.

        Args:
            period: 'all', 'week' (joined in the last 7 days) or 'month'
                (last 30 days)
            limit: Maximum number of users

        Raises:
            ValidationError: If the period is not one of the above
        """
        if period not in LEADERBOARD_PERIODS:
            raise ValidationError(f"Unknown leaderboard period '{period}'")
        window = LEADERBOARD_PERIODS[period]
        with logfire.span("user_service.leaderboard", period=period, limit=limit):
            return await self.user_repository.find_all(
                created_since=datetime.now() - window if window else None,
                order=UserOrder.REPUTATION,
                limit=limit,
            )

    async def set_role(self, user_id: UserId, role: UserRole, acting_user: User) -> User:
        """Change an account's role.

        Raises:
            AuthorizationError: If the acting user is not an admin
            NotFoundError: If the user doesn't exist
        """
        with logfire.span("user_service.set_role", user_id=str(user_id), role=role.value):
            if not acting_user.is_admin:
                logfire.warn("Non-admin role change", acting_user=str(acting_user.id))
                raise AuthorizationError("Only admins can change roles")

            user = await self.get_by_id(user_id)
            if user.role == role:
                return user
            updated = await self.user_repository.save(
                user.model_copy(update={"role": role, "updated_at": datetime.now()})
            )
            logfire.info(
                "Role changed", user_id=str(user_id), old_role=user.role.value, role=role.value
            )
            return updated
