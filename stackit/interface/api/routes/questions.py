"""Question routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, Field

from stackit.application.usecase.answer import (
    AcceptAnswerRequest,
    AcceptAnswerResponse,
    AcceptAnswerUseCase,
    ListAnswersRequest,
    ListAnswersResponse,
    ListAnswersUseCase,
)
from stackit.application.usecase.auth import GetCurrentUserUseCase
from stackit.application.usecase.question import (
    CreateQuestionRequest,
    CreateQuestionResponse,
    CreateQuestionUseCase,
    DeleteQuestionRequest,
    DeleteQuestionResponse,
    DeleteQuestionUseCase,
    GetQuestionRequest,
    GetQuestionResponse,
    GetQuestionUseCase,
    ListQuestionsRequest,
    ListQuestionsResponse,
    ListQuestionsUseCase,
    QuestionDetail,
    SetQuestionStatusRequest,
    SetQuestionStatusUseCase,
    UpdateQuestionRequest,
    UpdateQuestionResponse,
    UpdateQuestionUseCase,
)
from stackit.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from stackit.domain.repository import QuestionSortOrder
from stackit.domain.service import JWTService
from stackit.domain.value import QuestionStatus, VotableType, VoteType
from stackit.interface.api.auth import bearer_scheme, optional_user_id, require_user

router = APIRouter(prefix="/questions", tags=["questions"], route_class=DishkaRoute)


class CreateQuestionAPIRequest(BaseModel):
    """API request for asking a question."""

    title: str = Field(min_length=10, max_length=200)
    content: str = Field(min_length=20)
    tags: list[str] = Field(min_length=1)


class UpdateQuestionAPIRequest(BaseModel):
    """API request for editing a question. Omitted fields stay unchanged."""

    title: str | None = Field(default=None, min_length=10, max_length=200)
    content: str | None = Field(default=None, min_length=20)
    tags: list[str] | None = Field(default=None, min_length=1)


class SetStatusAPIRequest(BaseModel):
    """API request for changing a question's status."""

    status: QuestionStatus


class VoteAPIRequest(BaseModel):
    """API request for voting."""

    vote_type: VoteType


@router.get("", response_model=ListQuestionsResponse)
async def list_questions(
    list_questions_use_case: FromDishka[ListQuestionsUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
    tag: str | None = None,
    unanswered: bool = False,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> ListQuestionsResponse:
    """List questions.

    Query Parameters:
        sort: newest, active, votes or views
        tag: Only questions with this tag
        unanswered: Only questions without an accepted answer
        page: 1-based page number
        limit: Page size, capped at the configured maximum
    """
    return await list_questions_use_case.execute(
        ListQuestionsRequest(
            sort=sort,
            tag=tag,
            unanswered_only=unanswered,
            page=page,
            limit=limit,
            viewer_id=optional_user_id(credentials, jwt_service),
        )
    )


@router.post(
    "", response_model=CreateQuestionResponse, status_code=status.HTTP_201_CREATED
)
async def create_question(
    request: CreateQuestionAPIRequest,
    create_question_use_case: FromDishka[CreateQuestionUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CreateQuestionResponse:
    """Ask a question with 1-5 tags.

    Requires authentication.
    """
    user = await require_user(credentials, get_current_user_use_case)
    return await create_question_use_case.execute(
        CreateQuestionRequest(
            title=request.title,
            content=request.content,
            tag_names=request.tags,
            author_id=user.user_id,
        )
    )


@router.get("/{question_id}", response_model=GetQuestionResponse)
async def get_question(
    question_id: UUID,
    get_question_use_case: FromDishka[GetQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> GetQuestionResponse:
    """Get a question. Counts as a view."""
    return await get_question_use_case.execute(
        GetQuestionRequest(
            question_id=str(question_id),
            viewer_id=optional_user_id(credentials, jwt_service),
        )
    )


@router.put("/{question_id}", response_model=UpdateQuestionResponse)
async def update_question(
    question_id: UUID,
    request: UpdateQuestionAPIRequest,
    update_question_use_case: FromDishka[UpdateQuestionUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UpdateQuestionResponse:
    """Edit a question (author or admin)."""
    user = await require_user(credentials, get_current_user_use_case)
    return await update_question_use_case.execute(
        UpdateQuestionRequest(
            question_id=str(question_id),
            user_id=user.user_id,
            title=request.title,
            content=request.content,
            tag_names=request.tags,
        )
    )


@router.patch("/{question_id}/status", response_model=QuestionDetail)
async def set_question_status(
    question_id: UUID,
    request: SetStatusAPIRequest,
    set_status_use_case: FromDishka[SetQuestionStatusUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> QuestionDetail:
    """Open, close or hold a question (author or admin)."""
    user = await require_user(credentials, get_current_user_use_case)
    return await set_status_use_case.execute(
        SetQuestionStatusRequest(
            question_id=str(question_id), user_id=user.user_id, status=request.status
        )
    )


@router.delete("/{question_id}", response_model=DeleteQuestionResponse)
async def delete_question(
    question_id: UUID,
    delete_question_use_case: FromDishka[DeleteQuestionUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> DeleteQuestionResponse:
    """Delete a question with its answers and comments (author or admin)."""
    user = await require_user(credentials, get_current_user_use_case)
    return await delete_question_use_case.execute(
        DeleteQuestionRequest(question_id=str(question_id), user_id=user.user_id)
    )


@router.post("/{question_id}/vote", response_model=CastVoteResponse)
async def vote_question(
    question_id: UUID,
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CastVoteResponse:
    """Vote on a question. Repeating a vote retracts it."""
    user = await require_user(credentials, get_current_user_use_case)
    return await cast_vote_use_case.execute(
        CastVoteRequest(
            votable_type=VotableType.QUESTION,
            votable_id=str(question_id),
            user_id=user.user_id,
            vote_type=request.vote_type,
        )
    )


@router.post(
    "/{question_id}/accept-answer/{answer_id}", response_model=AcceptAnswerResponse
)
async def accept_answer(
    question_id: UUID,
    answer_id: UUID,
    accept_answer_use_case: FromDishka[AcceptAnswerUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AcceptAnswerResponse:
    """Accept an answer to this question (question author only)."""
    user = await require_user(credentials, get_current_user_use_case)
    return await accept_answer_use_case.execute(
        AcceptAnswerRequest(
            question_id=str(question_id),
            answer_id=str(answer_id),
            user_id=user.user_id,
        )
    )


@router.get("/{question_id}/answers", response_model=ListAnswersResponse)
async def list_answers(
    question_id: UUID,
    list_answers_use_case: FromDishka[ListAnswersUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> ListAnswersResponse:
    """List the answers the caller may see.

    The question author sees every answer; other users see approved answers
    and their own; anonymous callers see approved answers only.
    """
    return await list_answers_use_case.execute(
        ListAnswersRequest(
            question_id=str(question_id),
            viewer_id=optional_user_id(credentials, jwt_service),
        )
    )
