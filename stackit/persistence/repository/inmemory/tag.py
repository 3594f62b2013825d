"""In-memory implementation of Tag repository for testing."""

from datetime import datetime
from typing import Optional

from stackit.domain.model.tag import Tag
from stackit.domain.repository.tag import TagOrder, TagRepository
from stackit.domain.value import TagId, TagName

from .store import InMemoryStore, contains_text

SORT_KEYS = {
    TagOrder.NAME: lambda t: t.name.root,
    TagOrder.USAGE_COUNT: lambda t: (-t.usage_count, t.name.root),
    TagOrder.CREATED_AT: lambda t: -t.created_at.timestamp(),
}


class InMemoryTagRepository(TagRepository):
    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    @property
    def _tags(self) -> dict[TagId, Tag]:
        return self._store.tags

    async def save(self, tag: Tag) -> Tag:
        existing = self._tags.get(tag.id)
        if existing:
            tag = existing.model_copy(
                update={
                    "name": tag.name,
                    "description": tag.description,
                    "updated_at": datetime.now(),
                }
            )
        self._tags[tag.id] = tag
        return tag

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        return self._tags.get(tag_id)

    async def find_by_name(self, name: TagName) -> Optional[Tag]:
        return next((t for t in self._tags.values() if t.name == name), None)

    async def find_by_names(self, names: list[TagName]) -> list[Tag]:
        return [t for t in self._tags.values() if t.name in names]

    def _filtered(self, query: Optional[str], used: Optional[bool]) -> list[Tag]:
        tags = list(self._tags.values())
        if query:
            tags = [t for t in tags if contains_text(query, t.name.root, t.description)]
        if used is not None:
            tags = [t for t in tags if (t.usage_count > 0) == used]
        return tags

    async def find_all(
        self,
        limit: int,
        order: TagOrder = TagOrder.NAME,
        query: Optional[str] = None,
        used: Optional[bool] = None,
        offset: int = 0,
    ) -> list[Tag]:
        tags = sorted(self._filtered(query, used), key=SORT_KEYS[order])
        return tags[offset : offset + limit]

    async def count(
        self, query: Optional[str] = None, used: Optional[bool] = None
    ) -> int:
        return len(self._filtered(query, used))

    async def _shift_usage(self, name: TagName, delta: int) -> None:
        tag = await self.find_by_name(name)
        if tag and tag.usage_count + delta >= 0:
            self._tags[tag.id] = tag.model_copy(
                update={"usage_count": tag.usage_count + delta, "updated_at": datetime.now()}
            )

    async def increment_usage(self, name: TagName) -> None:
        await self._shift_usage(name, 1)

    async def decrement_usage(self, name: TagName) -> None:
        await self._shift_usage(name, -1)

    async def delete(self, tag_id: TagId) -> None:
        self._tags.pop(tag_id, None)
