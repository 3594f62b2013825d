"""Unit tests for VoteService."""

from uuid import uuid4

import pytest

from stackit.adapter.notification import RecordingNotificationSink
from stackit.config import ReputationSettings
from stackit.domain.error import NotFoundError, ReputationError, ValidationError
from stackit.domain.repository import (
    AnswerRepository,
    NotificationRepository,
    QuestionRepository,
    UserRepository,
)
from stackit.domain.service import NotificationService, UserService, VoteService
from stackit.domain.value import (
    AnswerId,
    NotificationType,
    QuestionId,
    VotableType,
    VoteType,
)
from stackit.persistence.repository.inmemory import (
    InMemoryQuestionRepository,
    InMemoryStore,
)
from tests.factories import make_answer, make_question, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def _seed_question(unit_env, reputation: int = 100):
    """Store an author, a voter and a question by the author."""
    user_repo = await unit_env.get(UserRepository)
    question_repo = await unit_env.get(QuestionRepository)

    author = await user_repo.save(make_user("author"))
    voter = await user_repo.save(make_user("voter", reputation=reputation))
    question = await question_repo.save(make_question(author))
    return author, voter, question


class TestVoteOnQuestion:
    """Tests for voting on questions."""

    @pytest.mark.asyncio
    async def test_upvote_registers_vote(self, unit_env):
        """First upvote sets the count to 1 and records the voter."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        _, voter, question = await _seed_question(unit_env)

        # Act
        result = await vote_service.vote(
            VotableType.QUESTION, question.id, voter, VoteType.UPVOTE
        )

        # Assert
        assert result.vote_count == 1
        assert result.user_vote == VoteType.UPVOTE
        stored = await question_repo.find_by_id(question.id)
        assert stored.vote_count == 1
        assert stored.votes.vote_of(voter.id) == VoteType.UPVOTE

    @pytest.mark.asyncio
    async def test_repeated_vote_retracts(self, unit_env):
        """Voting the same way twice removes the vote."""
        vote_service = await unit_env.get(VoteService)
        _, voter, question = await _seed_question(unit_env)

        await vote_service.vote(VotableType.QUESTION, question.id, voter, VoteType.UPVOTE)
        result = await vote_service.vote(
            VotableType.QUESTION, question.id, voter, VoteType.UPVOTE
        )

        assert result.vote_count == 0
        assert result.user_vote is None

    @pytest.mark.asyncio
    async def test_opposite_vote_switches(self, unit_env):
        """Downvoting after an upvote moves the count from 1 to -1."""
        vote_service = await unit_env.get(VoteService)
        _, voter, question = await _seed_question(unit_env)

        await vote_service.vote(VotableType.QUESTION, question.id, voter, VoteType.UPVOTE)
        result = await vote_service.vote(
            VotableType.QUESTION, question.id, voter, VoteType.DOWNVOTE
        )

        assert result.vote_count == -1
        assert result.user_vote == VoteType.DOWNVOTE

    @pytest.mark.asyncio
    async def test_self_vote_rejected_without_mutation(self, unit_env):
        """Authors cannot vote on their own question."""
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        author, _, question = await _seed_question(unit_env)

        with pytest.raises(ValidationError, match="own question"):
            await vote_service.vote(
                VotableType.QUESTION, question.id, author, VoteType.UPVOTE
            )

        stored = await question_repo.find_by_id(question.id)
        assert stored.vote_count == 0

    @pytest.mark.asyncio
    async def test_low_reputation_rejected(self, unit_env):
        """Voting requires 15 reputation."""
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        _, voter, question = await _seed_question(unit_env, reputation=14)

        with pytest.raises(ReputationError):
            await vote_service.vote(
                VotableType.QUESTION, question.id, voter, VoteType.UPVOTE
            )

        stored = await question_repo.find_by_id(question.id)
        assert stored.vote_count == 0

    @pytest.mark.asyncio
    async def test_missing_question_raises_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError, match="Question not found"):
            await vote_service.vote(
                VotableType.QUESTION, QuestionId(uuid4()), make_user(), VoteType.UPVOTE
            )

    @pytest.mark.asyncio
    async def test_registered_vote_notifies_author(self, unit_env):
        """The question author hears about upvotes, not retractions."""
        vote_service = await unit_env.get(VoteService)
        notification_repo = await unit_env.get(NotificationRepository)
        sink = await unit_env.get(RecordingNotificationSink)
        author, voter, question = await _seed_question(unit_env)

        await vote_service.vote(VotableType.QUESTION, question.id, voter, VoteType.UPVOTE)
        await vote_service.vote(VotableType.QUESTION, question.id, voter, VoteType.UPVOTE)

        notifications = await notification_repo.find_by_recipient(author.id)
        assert len(notifications) == 1
        assert notifications[0].type == NotificationType.QUESTION_VOTE
        assert notifications[0].metadata == {"vote_type": "upvote"}
        assert len(sink.events_for(author.id)) == 1


class TestVoteOnAnswer:
    """Tests for voting on answers."""

    @pytest.mark.asyncio
    async def test_votes_from_several_users_add_up(self, unit_env):
        """Count equals upvoters minus downvoters."""
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        question_repo = await unit_env.get(QuestionRepository)
        answer_repo = await unit_env.get(AnswerRepository)

        asker = await user_repo.save(make_user("asker"))
        answerer = await user_repo.save(make_user("answerer"))
        question = await question_repo.save(make_question(asker))
        answer = await answer_repo.save(make_answer(question, answerer))
        voters = [await user_repo.save(make_user(f"voter{i}")) for i in range(3)]

        await vote_service.vote(VotableType.ANSWER, answer.id, voters[0], VoteType.UPVOTE)
        await vote_service.vote(VotableType.ANSWER, answer.id, voters[1], VoteType.UPVOTE)
        result = await vote_service.vote(
            VotableType.ANSWER, answer.id, voters[2], VoteType.DOWNVOTE
        )

        assert result.vote_count == 1
        stored = await answer_repo.find_by_id(answer.id)
        assert stored.vote_count == 1

    @pytest.mark.asyncio
    async def test_self_vote_on_answer_rejected(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        question_repo = await unit_env.get(QuestionRepository)
        answer_repo = await unit_env.get(AnswerRepository)

        asker = await user_repo.save(make_user("asker"))
        answerer = await user_repo.save(make_user("answerer"))
        question = await question_repo.save(make_question(asker))
        answer = await answer_repo.save(make_answer(question, answerer))

        with pytest.raises(ValidationError, match="own answer"):
            await vote_service.vote(
                VotableType.ANSWER, answer.id, answerer, VoteType.DOWNVOTE
            )

    @pytest.mark.asyncio
    async def test_missing_answer_raises_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError, match="Answer not found"):
            await vote_service.vote(
                VotableType.ANSWER, AnswerId(uuid4()), make_user(), VoteType.UPVOTE
            )


class _SnapshotQuestionRepository(InMemoryQuestionRepository):
    """Serves the first copy of each question it read, like a reader that
    loaded the row before a concurrent vote landed."""

    def __init__(self, store: InMemoryStore) -> None:
        super().__init__(store)
        self._snapshots: dict = {}

    async def find_by_id(self, question_id):
        if question_id not in self._snapshots:
            self._snapshots[question_id] = await super().find_by_id(question_id)
        return self._snapshots[question_id]


class TestVoteAgainstStaleRead:
    """The toggle is decided by the stored vote, not by what the service read."""

    @pytest.mark.asyncio
    async def test_identical_votes_cancel_when_read_is_stale(self, unit_env):
        store = await unit_env.get(InMemoryStore)
        _, voter, question = await _seed_question(unit_env)
        question_repo = _SnapshotQuestionRepository(store)
        vote_service = VoteService(
            question_repository=question_repo,
            answer_repository=await unit_env.get(AnswerRepository),
            user_service=await unit_env.get(UserService),
            notification_service=await unit_env.get(NotificationService),
            reputation_settings=ReputationSettings(),
        )

        first = await vote_service.vote(
            VotableType.QUESTION, question.id, voter, VoteType.UPVOTE
        )
        # Both requests see the question without any vote
        second = await vote_service.vote(
            VotableType.QUESTION, question.id, voter, VoteType.UPVOTE
        )

        assert first.user_vote == VoteType.UPVOTE
        assert second.user_vote is None
        assert second.vote_count == 0
        assert store.questions[question.id].vote_count == 0
