"""PostgreSQL implementation of Tag repository."""

from typing import Optional

import logfire
from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.domain.model.tag import Tag
from stackit.domain.repository.tag import TagOrder, TagRepository
from stackit.domain.value import TagId, TagName
from stackit.persistence.mappers import row_to_tag, tag_to_dict
from stackit.persistence.repository.search import contains_text
from stackit.persistence.tables import tags_table

ORDERINGS = {
    TagOrder.NAME: (tags_table.c.name,),
    TagOrder.USAGE_COUNT: (tags_table.c.usage_count.desc(), tags_table.c.name),
    TagOrder.CREATED_AT: (tags_table.c.created_at.desc(),),
}


class PostgresTagRepository(TagRepository):
    """Tags stored in the ``tags`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _all(self, stmt) -> list[Tag]:
        result = await self.session.execute(stmt)
        return [row_to_tag(dict(row)) for row in result.mappings()]

    async def save(self, tag: Tag) -> Tag:
        """Upsert on the primary key; name and description can change."""
        stmt = insert(tags_table).values(**tag_to_dict(tag))
        stmt = stmt.on_conflict_do_update(
            index_elements=[tags_table.c.id],
            set_={
                "name": stmt.excluded.name,
                "description": stmt.excluded.description,
                "updated_at": func.now(),
            },
        ).returning(tags_table)

        saved = await self._all(stmt)
        await self.session.flush()
        return saved[0] if saved else tag

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        tags = await self._all(select(tags_table).where(tags_table.c.id == tag_id))
        return tags[0] if tags else None

    async def find_by_name(self, name: TagName) -> Optional[Tag]:
        tags = await self._all(select(tags_table).where(tags_table.c.name == name.root))
        return tags[0] if tags else None

    async def find_by_names(self, names: list[TagName]) -> list[Tag]:
        if not names:
            return []
        return await self._all(
            select(tags_table).where(tags_table.c.name.in_([n.root for n in names]))
        )

    @staticmethod
    def _filtered(stmt, query: Optional[str], used: Optional[bool]):
        if query:
            stmt = stmt.where(
                contains_text(query, tags_table.c.name, tags_table.c.description)
            )
        if used is True:
            stmt = stmt.where(tags_table.c.usage_count > 0)
        elif used is False:
            stmt = stmt.where(tags_table.c.usage_count == 0)
        return stmt

    async def find_all(
        self,
        limit: int,
        order: TagOrder = TagOrder.NAME,
        query: Optional[str] = None,
        used: Optional[bool] = None,
        offset: int = 0,
    ) -> list[Tag]:
        stmt = self._filtered(select(tags_table), query, used)
        return await self._all(
            stmt.order_by(*ORDERINGS[order]).limit(limit).offset(offset)
        )

    async def count(
        self, query: Optional[str] = None, used: Optional[bool] = None
    ) -> int:
        stmt = self._filtered(select(func.count()).select_from(tags_table), query, used)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def _shift_usage(self, name: TagName, delta: int) -> int:
        stmt = (
            update(tags_table)
            .where(tags_table.c.name == name.root)
            .values(usage_count=tags_table.c.usage_count + delta, updated_at=func.now())
        )
        if delta < 0:
            stmt = stmt.where(tags_table.c.usage_count >= -delta)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def increment_usage(self, name: TagName) -> None:
        await self._shift_usage(name, 1)

    async def decrement_usage(self, name: TagName) -> None:
        if not await self._shift_usage(name, -1):
            logfire.debug("Tag usage already at zero or tag missing", tag_name=name.root)

    async def delete(self, tag_id: TagId) -> None:
        await self.session.execute(delete(tags_table).where(tags_table.c.id == tag_id))
        await self.session.flush()
