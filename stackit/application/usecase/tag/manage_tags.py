"""Admin tag management use cases."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from stackit.domain.service import TagService, UserService
from stackit.domain.value import TagId, TagName, UserId

from .list_tags import MAX_TAGS_PER_PAGE, TagItem


class CreateTagRequest(BaseModel):
    """Create tag request."""

    name: str
    description: str = Field(default="", max_length=500)
    admin_id: str  # User ID from authenticated user


class UpdateTagRequest(BaseModel):
    """Rename a tag or change its description."""

    tag_id: str
    name: str
    description: str = Field(default="", max_length=500)
    admin_id: str


class DeleteTagRequest(BaseModel):
    tag_id: str
    admin_id: str


class DeleteTagResponse(BaseModel):
    tag_id: str
    deleted: bool = True


class UnusedTagsRequest(BaseModel):
    admin_id: str
    limit: int = Field(default=MAX_TAGS_PER_PAGE, ge=1, le=MAX_TAGS_PER_PAGE)


class PopularTagsRequest(BaseModel):
    limit: int = Field(default=20, ge=1, le=MAX_TAGS_PER_PAGE)


class TagListResponse(BaseModel):
    tags: list[TagItem]


class CreateTagUseCase:
    """Use case for an admin creating a tag before any question uses it."""

    def __init__(self, tag_service: TagService, user_service: UserService) -> None:
        """Initialize create tag use case.

        Args:
            tag_service: Tag domain service
            user_service: User domain service, to load the acting admin
        """
        self.tag_service = tag_service
        self.user_service = user_service

    async def execute(self, request: CreateTagRequest) -> TagItem:
        """Execute create tag flow.

        Raises:
            NotFoundError: If the acting user doesn't exist
            AuthorizationError: If the acting user is not an admin
            ConflictError: If the tag already exists
        """
        admin = await self.user_service.get_by_id(UserId(UUID(request.admin_id)))
        with logfire.span("create_tag.execute", tag_name=request.name):
            tag = await self.tag_service.create_tag(
                TagName(request.name), request.description, admin
            )
            return TagItem.from_tag(tag)


class UpdateTagUseCase:
    def __init__(self, tag_service: TagService, user_service: UserService) -> None:
        self.tag_service = tag_service
        self.user_service = user_service

    async def execute(self, request: UpdateTagRequest) -> TagItem:
        """Rename or describe a tag.

        Raises:
            NotFoundError: If the tag or acting user doesn't exist
            AuthorizationError: If the acting user is not an admin
            ConflictError: If another tag already has the new name
        """
        admin = await self.user_service.get_by_id(UserId(UUID(request.admin_id)))
        tag = await self.tag_service.update_tag(
            TagId(UUID(request.tag_id)),
            TagName(request.name),
            request.description,
            admin,
        )
        return TagItem.from_tag(tag)


class DeleteTagUseCase:
    def __init__(self, tag_service: TagService, user_service: UserService) -> None:
        self.tag_service = tag_service
        self.user_service = user_service

    async def execute(self, request: DeleteTagRequest) -> DeleteTagResponse:
        """Delete an unused tag.

        Raises:
            NotFoundError: If the tag or acting user doesn't exist
            AuthorizationError: If the acting user is not an admin
            ValidationError: If questions still carry the tag
        """
        admin = await self.user_service.get_by_id(UserId(UUID(request.admin_id)))
        await self.tag_service.delete_tag(TagId(UUID(request.tag_id)), admin)
        return DeleteTagResponse(tag_id=request.tag_id)


class UnusedTagsUseCase:
    def __init__(self, tag_service: TagService, user_service: UserService) -> None:
        self.tag_service = tag_service
        self.user_service = user_service

    async def execute(self, request: UnusedTagsRequest) -> TagListResponse:
        admin = await self.user_service.get_by_id(UserId(UUID(request.admin_id)))
        tags = await self.tag_service.unused_tags(admin, limit=request.limit)
        return TagListResponse(tags=[TagItem.from_tag(tag) for tag in tags])


class PopularTagsUseCase:
    """Most used tags, for the sidebar on the home page."""

    def __init__(self, tag_service: TagService) -> None:
        self.tag_service = tag_service

    async def execute(self, request: PopularTagsRequest) -> TagListResponse:
        tags = await self.tag_service.popular_tags(limit=request.limit)
        return TagListResponse(tags=[TagItem.from_tag(tag) for tag in tags])
