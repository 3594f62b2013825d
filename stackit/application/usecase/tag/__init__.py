"""Tag use cases."""

from .list_tags import (
    GetTagRequest,
    GetTagUseCase,
    ListTagsRequest,
    ListTagsResponse,
    ListTagsUseCase,
    MAX_TAGS_PER_PAGE,
    TagItem,
)
from .manage_tags import (
    CreateTagRequest,
    CreateTagUseCase,
    DeleteTagRequest,
    DeleteTagResponse,
    DeleteTagUseCase,
    PopularTagsRequest,
    PopularTagsUseCase,
    TagListResponse,
    UnusedTagsRequest,
    UnusedTagsUseCase,
    UpdateTagRequest,
    UpdateTagUseCase,
)

__all__ = [
    "CreateTagRequest",
    "CreateTagUseCase",
    "DeleteTagRequest",
    "DeleteTagResponse",
    "DeleteTagUseCase",
    "GetTagRequest",
    "GetTagUseCase",
    "ListTagsRequest",
    "ListTagsResponse",
    "ListTagsUseCase",
    "MAX_TAGS_PER_PAGE",
    "PopularTagsRequest",
    "PopularTagsUseCase",
    "TagItem",
    "TagListResponse",
    "UnusedTagsRequest",
    "UnusedTagsUseCase",
    "UpdateTagRequest",
    "UpdateTagUseCase",
]
