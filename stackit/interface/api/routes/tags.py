"""Tag routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, Field

from stackit.application.usecase.auth import GetCurrentUserUseCase
from stackit.application.usecase.tag import (
    CreateTagRequest,
    CreateTagUseCase,
    DeleteTagRequest,
    DeleteTagResponse,
    DeleteTagUseCase,
    GetTagRequest,
    GetTagUseCase,
    ListTagsRequest,
    ListTagsResponse,
    ListTagsUseCase,
    MAX_TAGS_PER_PAGE,
    PopularTagsRequest,
    PopularTagsUseCase,
    TagItem,
    TagListResponse,
    UnusedTagsRequest,
    UnusedTagsUseCase,
    UpdateTagRequest,
    UpdateTagUseCase,
)
from stackit.domain.repository import TagOrder
from stackit.interface.api.auth import bearer_scheme, require_user

router = APIRouter(prefix="/tags", tags=["tags"], route_class=DishkaRoute)


class TagAPIRequest(BaseModel):
    """API request body for creating or editing a tag."""

    name: str
    description: str = Field(default="", max_length=500)


@router.get("", response_model=ListTagsResponse)
async def list_tags(
    list_tags_use_case: FromDishka[ListTagsUseCase],
    limit: int = Query(default=MAX_TAGS_PER_PAGE, ge=1, le=MAX_TAGS_PER_PAGE),
    order_by: TagOrder = Query(default=TagOrder.NAME),
) -> ListTagsResponse:
    """List tags.

    Query Parameters:
        limit: Maximum number of tags
        order_by: name, usage_count or created_at
    """
    return await list_tags_use_case.execute(
        ListTagsRequest(limit=limit, order_by=order_by)
    )


@router.post("", response_model=TagItem, status_code=status.HTTP_201_CREATED)
async def create_tag(
    request: TagAPIRequest,
    create_tag_use_case: FromDishka[CreateTagUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TagItem:
    """Create a tag (admins only)."""
    admin = await require_user(credentials, get_current_user_use_case)
    return await create_tag_use_case.execute(
        CreateTagRequest(
            name=request.name, description=request.description, admin_id=admin.user_id
        )
    )


@router.get("/popular", response_model=TagListResponse)
async def popular_tags(
    popular_tags_use_case: FromDishka[PopularTagsUseCase],
    limit: int = Query(default=20, ge=1, le=MAX_TAGS_PER_PAGE),
) -> TagListResponse:
    """Tags in use, most used first."""
    return await popular_tags_use_case.execute(PopularTagsRequest(limit=limit))


@router.get("/unused", response_model=TagListResponse)
async def unused_tags(
    unused_tags_use_case: FromDishka[UnusedTagsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    limit: int = Query(default=MAX_TAGS_PER_PAGE, ge=1, le=MAX_TAGS_PER_PAGE),
) -> TagListResponse:
    """Tags no question uses (admins only)."""
    admin = await require_user(credentials, get_current_user_use_case)
    return await unused_tags_use_case.execute(
        UnusedTagsRequest(admin_id=admin.user_id, limit=limit)
    )


@router.get("/{name}", response_model=TagItem)
async def get_tag(
    name: str,
    get_tag_use_case: FromDishka[GetTagUseCase],
) -> TagItem:
    """Get a tag by name."""
    return await get_tag_use_case.execute(GetTagRequest(name=name))


@router.put("/{tag_id}", response_model=TagItem)
async def update_tag(
    tag_id: UUID,
    request: TagAPIRequest,
    update_tag_use_case: FromDishka[UpdateTagUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TagItem:
    """Rename a tag or change its description (admins only)."""
    admin = await require_user(credentials, get_current_user_use_case)
    return await update_tag_use_case.execute(
        UpdateTagRequest(
            tag_id=str(tag_id),
            name=request.name,
            description=request.description,
            admin_id=admin.user_id,
        )
    )


@router.delete("/{tag_id}", response_model=DeleteTagResponse)
async def delete_tag(
    tag_id: UUID,
    delete_tag_use_case: FromDishka[DeleteTagUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> DeleteTagResponse:
    """Delete a tag no question uses (admins only)."""
    admin = await require_user(credentials, get_current_user_use_case)
    return await delete_tag_use_case.execute(
        DeleteTagRequest(tag_id=str(tag_id), admin_id=admin.user_id)
    )
