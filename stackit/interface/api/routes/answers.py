"""Answer routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, Field

from stackit.application.usecase.answer import (
    AcceptAnswerRequest,
    AcceptAnswerResponse,
    AcceptAnswerUseCase,
    AnswerActionRequest,
    AnswerDetail,
    ApproveAnswerUseCase,
    CreateAnswerRequest,
    CreateAnswerResponse,
    CreateAnswerUseCase,
    DeleteAnswerRequest,
    DeleteAnswerResponse,
    DeleteAnswerUseCase,
    GetAnswerRequest,
    GetAnswerUseCase,
    UnacceptAnswerUseCase,
    UpdateAnswerRequest,
    UpdateAnswerResponse,
    UpdateAnswerUseCase,
)
from stackit.application.usecase.auth import GetCurrentUserUseCase
from stackit.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from stackit.domain.service import JWTService
from stackit.domain.value import VotableType, VoteType
from stackit.interface.api.auth import bearer_scheme, optional_user_id, require_user

router = APIRouter(prefix="/answers", tags=["answers"], route_class=DishkaRoute)


class CreateAnswerAPIRequest(BaseModel):
    """API request for answering a question."""

    question_id: UUID
    content: str = Field(min_length=20)


class UpdateAnswerAPIRequest(BaseModel):
    """API request for editing an answer."""

    content: str = Field(min_length=20)


class VoteAPIRequest(BaseModel):
    """API request for voting."""

    vote_type: VoteType


@router.post("", response_model=CreateAnswerResponse, status_code=status.HTTP_201_CREATED)
async def create_answer(
    request: CreateAnswerAPIRequest,
    create_answer_use_case: FromDishka[CreateAnswerUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CreateAnswerResponse:
    """Answer a question. The answer stays hidden until approved.

    Requires authentication.
    """
    user = await require_user(credentials, get_current_user_use_case)
    return await create_answer_use_case.execute(
        CreateAnswerRequest(
            question_id=str(request.question_id),
            content=request.content,
            author_id=user.user_id,
        )
    )


@router.get("/{answer_id}", response_model=AnswerDetail)
async def get_answer(
    answer_id: UUID,
    get_answer_use_case: FromDishka[GetAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AnswerDetail:
    """Get an answer. Unapproved answers are 404 for outsiders."""
    return await get_answer_use_case.execute(
        GetAnswerRequest(
            answer_id=str(answer_id),
            viewer_id=optional_user_id(credentials, jwt_service),
        )
    )


@router.put("/{answer_id}", response_model=UpdateAnswerResponse)
async def update_answer(
    answer_id: UUID,
    request: UpdateAnswerAPIRequest,
    update_answer_use_case: FromDishka[UpdateAnswerUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UpdateAnswerResponse:
    """Edit an answer (author or admin)."""
    user = await require_user(credentials, get_current_user_use_case)
    return await update_answer_use_case.execute(
        UpdateAnswerRequest(
            answer_id=str(answer_id), user_id=user.user_id, content=request.content
        )
    )


@router.delete("/{answer_id}", response_model=DeleteAnswerResponse)
async def delete_answer(
    answer_id: UUID,
    delete_answer_use_case: FromDishka[DeleteAnswerUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> DeleteAnswerResponse:
    """Delete an answer (author or admin). Accepted answers can't be deleted."""
    user = await require_user(credentials, get_current_user_use_case)
    return await delete_answer_use_case.execute(
        DeleteAnswerRequest(answer_id=str(answer_id), user_id=user.user_id)
    )


@router.post("/{answer_id}/vote", response_model=CastVoteResponse)
async def vote_answer(
    answer_id: UUID,
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CastVoteResponse:
    """Vote on an answer. Repeating a vote retracts it."""
    user = await require_user(credentials, get_current_user_use_case)
    return await cast_vote_use_case.execute(
        CastVoteRequest(
            votable_type=VotableType.ANSWER,
            votable_id=str(answer_id),
            user_id=user.user_id,
            vote_type=request.vote_type,
        )
    )


@router.post("/{answer_id}/accept", response_model=AcceptAnswerResponse)
async def accept_answer(
    answer_id: UUID,
    accept_answer_use_case: FromDishka[AcceptAnswerUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AcceptAnswerResponse:
    """Accept an answer (question author only)."""
    user = await require_user(credentials, get_current_user_use_case)
    return await accept_answer_use_case.execute(
        AcceptAnswerRequest(answer_id=str(answer_id), user_id=user.user_id)
    )


@router.post("/{answer_id}/unaccept", response_model=AnswerDetail)
async def unaccept_answer(
    answer_id: UUID,
    unaccept_answer_use_case: FromDishka[UnacceptAnswerUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AnswerDetail:
    """Withdraw acceptance of an answer (question author only)."""
    user = await require_user(credentials, get_current_user_use_case)
    return await unaccept_answer_use_case.execute(
        AnswerActionRequest(answer_id=str(answer_id), user_id=user.user_id)
    )


@router.post("/{answer_id}/approve", response_model=AnswerDetail)
async def approve_answer(
    answer_id: UUID,
    approve_answer_use_case: FromDishka[ApproveAnswerUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AnswerDetail:
    """Make an answer visible to everyone (question author only)."""
    user = await require_user(credentials, get_current_user_use_case)
    return await approve_answer_use_case.execute(
        AnswerActionRequest(answer_id=str(answer_id), user_id=user.user_id)
    )
