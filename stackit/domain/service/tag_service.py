"""Tag domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from stackit.domain.error import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from stackit.domain.model.tag import Tag
from stackit.domain.model.user import User
from stackit.domain.repository.tag import TagOrder, TagRepository
from stackit.domain.value import TagId, TagName, UserId

from .base import Service


def normalize_tags(tag_names: list[TagName]) -> list[TagName]:
    """Deduplicate tag names, keeping first-seen order.

    TagName already trims and lower-cases on validation, so equal values
    are duplicates.
    """
    unique: list[TagName] = []
    for name in tag_names:
        if name not in unique:
            unique.append(name)
    return unique


class TagService(Service):
    """Domain service for tag operations."""

    def __init__(self, tag_repository: TagRepository) -> None:
        """Initialize tag service.

        Args:
            tag_repository: Tag repository
        """
        self.tag_repository = tag_repository

    async def ensure_tags(self, tag_names: list[TagName], created_by: UserId) -> list[Tag]:
        """Look up tags, creating the missing ones with zero usage.

        Args:
            tag_names: Normalized tag names
            created_by: User credited with creating new tags

        Returns:
            Tags in the order requested
        """
        with logfire.span(
            "tag_service.ensure_tags", tags=[t.root for t in tag_names]
        ):
            # Batch fetch existing tags
            existing = {
                tag.name: tag for tag in await self.tag_repository.find_by_names(tag_names)
            }

            tags = []
            for name in tag_names:
                tag = existing.get(name)
                if tag is None:
                    now = datetime.now()
                    tag = await self.tag_repository.save(
                        Tag(
                            id=TagId(uuid4()),
                            name=name,
                            usage_count=0,
                            created_by=created_by,
                            created_at=now,
                            updated_at=now,
                        )
                    )
                    logfire.info("Tag created", tag_name=name.root)
                tags.append(tag)
            return tags

    async def record_usage(self, tag_names: list[TagName]) -> None:
        """Increment usage once for each tag name."""
        with logfire.span(
            "tag_service.record_usage", tags=[t.root for t in tag_names]
        ):
            for name in tag_names:
                await self.tag_repository.increment_usage(name)

    async def release_usage(self, tag_names: list[TagName]) -> None:
        """Decrement usage once for each tag name (clamped at zero)."""
        with logfire.span(
            "tag_service.release_usage", tags=[t.root for t in tag_names]
        ):
            for name in tag_names:
                await self.tag_repository.decrement_usage(name)

    async def get_all_tags(self, limit: int = 100, order_by: str = "name") -> list[Tag]:
        """Get all available tags.

        Args:
            limit: Maximum number of tags to return
            order_by: 'name', 'usage_count' or 'created_at'; anything else
                means 'name'

        Returns:
            List of tags
        """
        order = TagOrder.parse(order_by)
        with logfire.span("tag_service.get_all_tags", limit=limit, order_by=order.value):
            tags = await self.tag_repository.find_all(limit, order)
            logfire.info("Tags retrieved", count=len(tags))
            return tags

    async def get_tag_by_name(self, name: TagName) -> Tag:
        """Get a tag by name.

        Args:
            name: Tag name

        Returns:
            The tag

        Raises:
            NotFoundError: If no such tag exists
        """
        with logfire.span("tag_service.get_tag_by_name", tag_name=name.root):
            tag = await self.tag_repository.find_by_name(name)
            if tag is None:
                logfire.warn("Tag not found", tag_name=name.root)
                raise NotFoundError("Tag", name.root)
            logfire.info("Tag found", tag_name=name.root)
            return tag

    async def popular_tags(self, limit: int = 20) -> list[Tag]:
        """Tags in use, most used first."""
        with logfire.span("tag_service.popular_tags", limit=limit):
            return await self.tag_repository.find_all(
                limit, TagOrder.USAGE_COUNT, used=True
            )

    async def unused_tags(self, acting_user: User, limit: int = 100) -> list[Tag]:
        """Tags no question carries, for admins cleaning up the tag list.

        Raises:
            AuthorizationError: If the acting user is not an admin
        """
        self._require_admin(acting_user, "list unused tags")
        with logfire.span("tag_service.unused_tags", limit=limit):
            return await self.tag_repository.find_all(limit, TagOrder.NAME, used=False)

    async def search_tags(
        self, query: str, limit: int = 20, offset: int = 0
    ) -> tuple[list[Tag], int]:
        """Tags whose name or description contains the query, most used first.

        Returns:
            Tuple of (tags on this page, total matching)
        """
        with logfire.span("tag_service.search_tags", query=query, limit=limit):
            tags = await self.tag_repository.find_all(
                limit, TagOrder.USAGE_COUNT, query=query, offset=offset
            )
            total = await self.tag_repository.count(query=query)
            logfire.info("Tags searched", count=len(tags), total=total)
            return tags, total

    async def create_tag(
        self, name: TagName, description: str, acting_user: User
    ) -> Tag:
        """Create a tag ahead of its first use.

        Raises:
            AuthorizationError: If the acting user is not an admin
            ConflictError: If a tag with this name exists
        """
        self._require_admin(acting_user, "create tags")
        with logfire.span("tag_service.create_tag", tag_name=name.root):
            if await self.tag_repository.find_by_name(name):
                logfire.warn("Duplicate tag name", tag_name=name.root)
                raise ConflictError(f"Tag '{name.root}' already exists")

            now = datetime.now()
            tag = await self.tag_repository.save(
                Tag(
                    id=TagId(uuid4()),
                    name=name,
                    description=description,
                    created_by=acting_user.id,
                    created_at=now,
                    updated_at=now,
                )
            )
            logfire.info("Tag created", tag_id=str(tag.id), tag_name=name.root)
            return tag

    async def update_tag(
        self, tag_id: TagId, name: TagName, description: str, acting_user: User
    ) -> Tag:
        """Rename a tag or change its description.

        Questions keep the tag names they were saved with; a rename does not
        rewrite them.

        Raises:
            AuthorizationError: If the acting user is not an admin
            NotFoundError: If the tag doesn't exist
            ConflictError: If another tag already has the new name
        """
        self._require_admin(acting_user, "edit tags")
        with logfire.span("tag_service.update_tag", tag_id=str(tag_id)):
            tag = await self._load(tag_id)
            if name != tag.name and await self.tag_repository.find_by_name(name):
                logfire.warn("Tag rename conflict", tag_id=str(tag_id), tag_name=name.root)
                raise ConflictError(f"Tag '{name.root}' already exists")

            updated = await self.tag_repository.save(
                tag.model_copy(
                    update={
                        "name": name,
                        "description": description,
                        "updated_at": datetime.now(),
                    }
                )
            )
            logfire.info(
                "Tag updated", tag_id=str(tag_id), old_name=tag.name.root, name=name.root
            )
            return updated

    async def delete_tag(self, tag_id: TagId, acting_user: User) -> None:
        """Delete a tag no question uses.

        Raises:
            AuthorizationError: If the acting user is not an admin
            NotFoundError: If the tag doesn't exist
            ValidationError: If questions still carry the tag
        """
        self._require_admin(acting_user, "delete tags")
        with logfire.span("tag_service.delete_tag", tag_id=str(tag_id)):
            tag = await self._load(tag_id)
            if tag.usage_count > 0:
                logfire.warn(
                    "Attempt to delete tag in use",
                    tag_name=tag.name.root,
                    usage_count=tag.usage_count,
                )
                raise ValidationError("Cannot delete a tag that is in use")
            await self.tag_repository.delete(tag_id)
            logfire.info("Tag deleted", tag_id=str(tag_id), tag_name=tag.name.root)

    async def _load(self, tag_id: TagId) -> Tag:
        tag = await self.tag_repository.find_by_id(tag_id)
        if tag is None:
            logfire.warn("Tag not found", tag_id=str(tag_id))
            raise NotFoundError("Tag", str(tag_id))
        return tag

    @staticmethod
    def _require_admin(user: User, action: str) -> None:
        if not user.is_admin:
            logfire.warn("Non-admin tag management", user_id=str(user.id), action=action)
            raise AuthorizationError(f"Only admins can {action}")
