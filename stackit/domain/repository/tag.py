"""Tag repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from stackit.domain.model.tag import Tag
from stackit.domain.value import TagId, TagName


class TagOrder(str, Enum):
    """Orderings offered by the tag listing."""

    NAME = "name"
    USAGE_COUNT = "usage_count"
    CREATED_AT = "created_at"

    @classmethod
    def parse(cls, value: str) -> "TagOrder":
        """Unknown orderings fall back to alphabetical."""
        try:
            return cls(value)
        except ValueError:
            return cls.NAME


class TagRepository(ABC):
    """Persistence contract for tags.

    ``usage_count`` counts the questions carrying a tag. Like user
    reputation it only moves through the increment/decrement methods.
    """

    @abstractmethod
    async def save(self, tag: Tag) -> Tag:
        """Insert a tag, or update its name and description if the id exists.

        The usage count is never written here.
        """
        pass

    @abstractmethod
    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        pass

    @abstractmethod
    async def find_by_name(self, name: TagName) -> Optional[Tag]:
        pass

    @abstractmethod
    async def find_by_names(self, names: list[TagName]) -> list[Tag]:
        """Tags among ``names`` that exist; unknown names are skipped."""
        pass

    @abstractmethod
    async def find_all(
        self,
        limit: int,
        order: TagOrder = TagOrder.NAME,
        query: Optional[str] = None,
        used: Optional[bool] = None,
        offset: int = 0,
    ) -> list[Tag]:
        """Up to ``limit`` tags; popular first when ordered by usage, ties by name.

        Args:
            limit: Maximum number of tags
            order: Sort order
            query: Only tags whose name or description contains this text,
                ignoring case
            used: True for tags in use, False for unused ones, None for both
            offset: Number of tags to skip
        """
        pass

    @abstractmethod
    async def count(
        self, query: Optional[str] = None, used: Optional[bool] = None
    ) -> int:
        """Count tags matching the same filters as ``find_all``."""
        pass

    @abstractmethod
    async def increment_usage(self, name: TagName) -> None:
        pass

    @abstractmethod
    async def decrement_usage(self, name: TagName) -> None:
        """Take one off the usage count, never going below zero."""
        pass

    @abstractmethod
    async def delete(self, tag_id: TagId) -> None:
        pass
