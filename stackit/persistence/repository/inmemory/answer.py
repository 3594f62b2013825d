"""In-memory answer repository for testing."""

from datetime import datetime
from typing import Optional

from stackit.domain.model.answer import Answer
from stackit.domain.repository.answer import AnswerRepository
from stackit.domain.value import AnswerId, QuestionId, UserId, VoteType

from .store import InMemoryStore


class InMemoryAnswerRepository(AnswerRepository):
    """In-memory implementation of AnswerRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    @property
    def _answers(self) -> dict[AnswerId, Answer]:
        return self._store.answers

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID."""
        return self._answers.get(answer_id)

    async def find_by_question(self, question_id: QuestionId) -> list[Answer]:
        """Find all answers to a question, accepted first."""
        answers = [a for a in self._answers.values() if a.question_id == question_id]
        answers.sort(
            key=lambda a: (a.is_accepted, a.vote_count, a.created_at), reverse=True
        )
        return answers

    async def find_by_author(
        self,
        author_id: UserId,
        approved_only: bool = True,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Answer]:
        """Find answers by a specific author."""
        answers = [a for a in self._answers.values() if a.author_id == author_id]
        if approved_only:
            answers = [a for a in answers if a.is_approved]
        answers.sort(key=lambda a: a.created_at, reverse=True)
        return answers[offset : offset + limit]

    async def save(self, answer: Answer) -> Answer:
        """Save or update an answer, keeping the stored votes."""
        existing = self._answers.get(answer.id)
        if existing:
            answer = answer.model_copy(update={"votes": existing.votes})
        self._answers[answer.id] = answer
        return answer

    async def delete(self, answer_id: AnswerId) -> None:
        """Delete an answer."""
        self._answers.pop(answer_id, None)

    async def delete_by_question(self, question_id: QuestionId) -> int:
        """Delete every answer to a question."""
        doomed = [a.id for a in self._answers.values() if a.question_id == question_id]
        for answer_id in doomed:
            del self._answers[answer_id]
        return len(doomed)

    async def clear_accepted(self, question_id: QuestionId) -> list[AnswerId]:
        """Un-accept every accepted answer to a question."""
        cleared = []
        for answer in list(self._answers.values()):
            if answer.question_id == question_id and answer.is_accepted:
                self._answers[answer.id] = answer.model_copy(
                    update={"is_accepted": False, "updated_at": datetime.now()}
                )
                cleared.append(answer.id)
        return cleared

    async def toggle_vote(
        self,
        answer_id: AnswerId,
        user_id: UserId,
        requested: VoteType,
    ) -> Optional[Answer]:
        """Toggle a user's vote on the stored answer."""
        answer = self._answers.get(answer_id)
        if answer is None:
            return None
        updated = answer.model_copy(
            update={"votes": answer.votes.toggle(user_id, requested)}
        )
        self._answers[answer_id] = updated
        return updated
