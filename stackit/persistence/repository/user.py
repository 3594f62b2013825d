"""PostgreSQL implementation of User repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.domain.model import User
from stackit.domain.repository import UserOrder, UserRepository
from stackit.domain.value import UserId, UserRole, Username
from stackit.persistence.mappers import row_to_user, user_to_dict
from stackit.persistence.repository.search import contains_text
from stackit.persistence.tables import users_table

# Written on insert only; later changes go through adjust_reputation
INSERT_ONLY_COLUMNS = ("id", "reputation", "created_at")

ORDERINGS = {
    UserOrder.REPUTATION: (users_table.c.reputation.desc(), users_table.c.username),
    UserOrder.USERNAME: (users_table.c.username,),
    UserOrder.NEWEST: (users_table.c.created_at.desc(), users_table.c.username),
    UserOrder.OLDEST: (users_table.c.created_at, users_table.c.username),
}


class PostgresUserRepository(UserRepository):
    """Users stored in the ``users`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _first(self, stmt) -> Optional[User]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return await self._first(select(users_table).where(users_table.c.id == user_id))

    async def find_by_username(self, username: Username) -> Optional[User]:
        return await self._first(
            select(users_table).where(users_table.c.username == username.root)
        )

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self._first(select(users_table).where(users_table.c.email == email))

    async def save(self, user: User) -> User:
        """Upsert on the primary key, returning the stored row."""
        values = user_to_dict(user)
        stmt = insert(users_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={
                name: stmt.excluded[name]
                for name in values
                if name not in INSERT_ONLY_COLUMNS
            },
        ).returning(users_table)

        saved = await self._first(stmt)
        await self.session.flush()
        return saved or user

    async def adjust_reputation(self, user_id: UserId, points: int) -> Optional[User]:
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(reputation=users_table.c.reputation + points, updated_at=func.now())
            .returning(users_table)
        )
        updated = await self._first(stmt)
        await self.session.flush()
        return updated

    @staticmethod
    def _filtered(
        stmt,
        query: Optional[str],
        min_reputation: Optional[int],
        role: Optional[UserRole],
        created_since: Optional[datetime],
    ):
        if query:
            stmt = stmt.where(
                contains_text(query, users_table.c.username, users_table.c.bio)
            )
        if min_reputation is not None:
            stmt = stmt.where(users_table.c.reputation >= min_reputation)
        if role is not None:
            stmt = stmt.where(users_table.c.role == role.value)
        if created_since is not None:
            stmt = stmt.where(users_table.c.created_at >= created_since)
        return stmt

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
        stmt = self._filtered(
            select(users_table), query, min_reputation, role, created_since
        )
        stmt = stmt.order_by(*ORDERINGS[order]).limit(limit).offset(offset)
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings()]

    async def count(
        self,
        query: Optional[str] = None,
        min_reputation: Optional[int] = None,
        role: Optional[UserRole] = None,
        created_since: Optional[datetime] = None,
    ) -> int:
        stmt = self._filtered(
            select(func.count()).select_from(users_table),
            query,
            min_reputation,
            role,
            created_since,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
