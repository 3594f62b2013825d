"""Vote domain service."""

from dataclasses import dataclass
from typing import Optional

import logfire

from stackit.config import ReputationSettings
from stackit.domain.error import NotFoundError, ValidationError
from stackit.domain.model import Answer, Question, User
from stackit.domain.repository import AnswerRepository, QuestionRepository
from stackit.domain.value import AnswerId, QuestionId, VotableType, VoteType

from .base import Service
from .notification_service import NotificationService
from .user_service import UserService


@dataclass
class VoteResult:
    """Outcome of a vote request."""

    vote_count: int
    user_vote: Optional[VoteType]


class VoteService(Service):
    """Domain service for voting on questions and answers.

    A vote request toggles: repeating a vote retracts it, voting the other
    way replaces it. The repository resolves the toggle against the stored
    vote in the same atomic write that recomputes the count.
    """

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        user_service: UserService,
        notification_service: NotificationService,
        reputation_settings: ReputationSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
            user_service: User domain service, for reputation checks
            notification_service: Notification coordinator
            reputation_settings: Reputation thresholds
        """
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.user_service = user_service
        self.notification_service = notification_service
        self.reputation_settings = reputation_settings

    async def vote(
        self,
        votable_type: VotableType,
        votable_id: QuestionId | AnswerId,
        voter: User,
        vote_type: VoteType,
    ) -> VoteResult:
        """Vote on a question or an answer.

        Args:
            votable_type: Whether a question or an answer is voted on
            votable_id: ID of the question or answer
            voter: User casting the vote
            vote_type: Requested vote direction

        Returns:
            The new vote count and the voter's resulting vote (None after a
            retraction)

        Raises:
            NotFoundError: If the question or answer doesn't exist
            ValidationError: If the voter authored the content
            ReputationError: If the voter lacks the reputation to vote
        """
        with logfire.span(
            "vote_service.vote",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            user_id=str(voter.id),
            vote_type=vote_type.value,
        ):
            content = await self._load(votable_type, votable_id)
            if content.author_id == voter.id:
                logfire.warn(
                    "Self vote attempt",
                    votable_type=votable_type.value,
                    votable_id=str(votable_id),
                )
                raise ValidationError(
                    f"You cannot vote on your own {votable_type.value}"
                )
            self.user_service.require_reputation(
                voter, self.reputation_settings.vote_threshold, "vote"
            )

            updated: Question | Answer | None
            if votable_type == VotableType.QUESTION:
                updated = await self.question_repository.toggle_vote(
                    QuestionId(votable_id), voter.id, vote_type
                )
            else:
                updated = await self.answer_repository.toggle_vote(
                    AnswerId(votable_id), voter.id, vote_type
                )
            if updated is None:
                raise NotFoundError(votable_type.value.capitalize(), str(votable_id))
            resulting = updated.votes.vote_of(voter.id)

            logfire.info(
                "Vote applied",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
                user_vote=resulting.value if resulting else None,
                vote_count=updated.vote_count,
            )

            if resulting is not None:
                await self.notification_service.notify_vote(
                    votable_type, votable_id, voter.id, resulting
                )

            return VoteResult(vote_count=updated.vote_count, user_vote=resulting)

    async def _load(
        self, votable_type: VotableType, votable_id: QuestionId | AnswerId
    ) -> Question | Answer:
        content: Question | Answer | None
        if votable_type == VotableType.QUESTION:
            content = await self.question_repository.find_by_id(QuestionId(votable_id))
        else:
            content = await self.answer_repository.find_by_id(AnswerId(votable_id))
        if content is None:
            logfire.warn(
                "Vote on non-existent content",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
            )
            raise NotFoundError(votable_type.value.capitalize(), str(votable_id))
        return content
