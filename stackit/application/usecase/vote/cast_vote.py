"""Cast vote use case."""

from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import UserService, VoteService
from stackit.domain.value import UserId, VotableType, VoteType


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    vote_type: VoteType


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    votable_type: VotableType
    votable_id: str
    vote_count: int
    user_vote: VoteType | None  # None after a retraction


class CastVoteUseCase:
    """Use case for voting on a question or answer.

    Voting the same way twice retracts the vote; voting the other way
    replaces it.
    """

    def __init__(self, vote_service: VoteService, user_service: UserService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            user_service: User domain service
        """
        self.vote_service = vote_service
        self.user_service = user_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Raises:
            NotFoundError: If the voter or the content doesn't exist
            ValidationError: On a vote for one's own content
            ReputationError: If the voter lacks the reputation to vote
        """
        voter = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        result = await self.vote_service.vote(
            request.votable_type,
            UUID(request.votable_id),
            voter,
            request.vote_type,
        )
        return CastVoteResponse(
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            vote_count=result.vote_count,
            user_vote=result.user_vote,
        )
