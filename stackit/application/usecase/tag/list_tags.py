"""Tag use cases."""

from datetime import datetime

from pydantic import BaseModel, Field

from stackit.domain.model import Tag
from stackit.domain.repository import TagOrder
from stackit.domain.service import TagService
from stackit.domain.value import TagName

MAX_TAGS_PER_PAGE = 100


class TagItem(BaseModel):
    tag_id: str
    name: str
    description: str
    usage_count: int
    created_at: datetime

    @classmethod
    def from_tag(cls, tag: Tag) -> "TagItem":
        return cls(
            tag_id=str(tag.id),
            name=tag.name.root,
            description=tag.description,
            usage_count=tag.usage_count,
            created_at=tag.created_at,
        )


class ListTagsRequest(BaseModel):
    limit: int = Field(default=MAX_TAGS_PER_PAGE, ge=1, le=MAX_TAGS_PER_PAGE)
    order_by: TagOrder = TagOrder.NAME


class ListTagsResponse(BaseModel):
    tags: list[TagItem]


class ListTagsUseCase:
    """Browse tags, for the tag picker and the tag cloud.

    The tag cloud asks for ``usage_count`` order; the picker for ``name``.
    """

    def __init__(self, tag_service: TagService) -> None:
        self.tag_service = tag_service

    async def execute(self, request: ListTagsRequest) -> ListTagsResponse:
        tags = await self.tag_service.get_all_tags(
            limit=request.limit, order_by=request.order_by.value
        )
        return ListTagsResponse(tags=[TagItem.from_tag(tag) for tag in tags])


class GetTagRequest(BaseModel):
    name: str


class GetTagUseCase:
    def __init__(self, tag_service: TagService) -> None:
        self.tag_service = tag_service

    async def execute(self, request: GetTagRequest) -> TagItem:
        """Read one tag; the name is normalized like any other tag input.

        Raises:
            NotFoundError: If no tag has this name
        """
        tag = await self.tag_service.get_tag_by_name(TagName(request.name))
        return TagItem.from_tag(tag)
