"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, Field

from stackit.application.usecase.auth import GetCurrentUserUseCase
from stackit.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from stackit.interface.api.auth import bearer_scheme, require_user

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for commenting. Set exactly one of question_id/answer_id."""

    content: str = Field(min_length=2, max_length=500)
    question_id: UUID | None = None
    answer_id: UUID | None = None


@router.post(
    "", response_model=CreateCommentResponse, status_code=status.HTTP_201_CREATED
)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CreateCommentResponse:
    """Comment on a question or an answer.

    Requires authentication and enough reputation.
    """
    user = await require_user(credentials, get_current_user_use_case)
    return await create_comment_use_case.execute(
        CreateCommentRequest(
            content=request.content,
            author_id=user.user_id,
            question_id=str(request.question_id) if request.question_id else None,
            answer_id=str(request.answer_id) if request.answer_id else None,
        )
    )


@router.get("", response_model=GetCommentsResponse)
async def get_comments(
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    question_id: UUID | None = None,
    answer_id: UUID | None = None,
) -> GetCommentsResponse:
    """List comments on a question or an answer, oldest first.

    Query Parameters:
        question_id: Question to list comments for
        answer_id: Answer to list comments for
    """
    return await get_comments_use_case.execute(
        GetCommentsRequest(
            question_id=str(question_id) if question_id else None,
            answer_id=str(answer_id) if answer_id else None,
        )
    )
