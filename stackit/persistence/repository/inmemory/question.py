"""In-memory question repository for testing."""

from datetime import datetime
from typing import Optional

from stackit.domain.model.question import Question
from stackit.domain.repository.question import QuestionRepository, QuestionSortOrder
from stackit.domain.value import QuestionId, TagName, UserId, VoteType

from .store import InMemoryStore, contains_text


class InMemoryQuestionRepository(QuestionRepository):
    """In-memory implementation of QuestionRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    @property
    def _questions(self) -> dict[QuestionId, Question]:
        return self._store.questions

    def _filtered(
        self, tag: Optional[TagName], unanswered_only: bool, query: Optional[str]
    ) -> list[Question]:
        questions = list(self._questions.values())

        # Filter by tag
        if tag is not None:
            questions = [q for q in questions if tag in q.tags]

        if unanswered_only:
            questions = [q for q in questions if not q.is_answered]

        if query:
            questions = [q for q in questions if contains_text(query, q.title, q.content)]

        return questions

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        return self._questions.get(question_id)

    async def find_all(
        self,
        tag: Optional[TagName] = None,
        unanswered_only: bool = False,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        limit: int = 20,
        offset: int = 0,
        query: Optional[str] = None,
    ) -> list[Question]:
        """Find questions with filtering and pagination."""
        questions = self._filtered(tag, unanswered_only, query)

        # Sort
        if sort == QuestionSortOrder.ACTIVE:
            questions.sort(key=lambda q: q.last_activity_at, reverse=True)
        elif sort == QuestionSortOrder.VOTES:
            questions.sort(key=lambda q: (q.vote_count, q.created_at), reverse=True)
        elif sort == QuestionSortOrder.VIEWS:
            questions.sort(key=lambda q: (q.views, q.created_at), reverse=True)
        else:
            questions.sort(key=lambda q: q.created_at, reverse=True)

        # Paginate
        return questions[offset : offset + limit]

    async def count(
        self,
        tag: Optional[TagName] = None,
        unanswered_only: bool = False,
        query: Optional[str] = None,
    ) -> int:
        """Count questions matching the given filters."""
        return len(self._filtered(tag, unanswered_only, query))

    async def find_by_author(
        self, author_id: UserId, limit: int = 20, offset: int = 0
    ) -> list[Question]:
        """Find questions by a specific author."""
        questions = [q for q in self._questions.values() if q.author_id == author_id]
        questions.sort(key=lambda q: q.created_at, reverse=True)
        return questions[offset : offset + limit]

    async def save(self, question: Question) -> Question:
        """Save or update a question, keeping the stored counters."""
        existing = self._questions.get(question.id)
        if existing:
            question = question.model_copy(
                update={
                    "votes": existing.votes,
                    "answer_count": existing.answer_count,
                    "views": existing.views,
                }
            )
        self._questions[question.id] = question
        return question

    async def delete(self, question_id: QuestionId) -> None:
        """Delete a question."""
        self._questions.pop(question_id, None)

    async def toggle_vote(
        self,
        question_id: QuestionId,
        user_id: UserId,
        requested: VoteType,
    ) -> Optional[Question]:
        """Toggle a user's vote on the stored question."""
        question = self._questions.get(question_id)
        if question is None:
            return None
        updated = question.model_copy(
            update={"votes": question.votes.toggle(user_id, requested)}
        )
        self._questions[question_id] = updated
        return updated

    def _bump(self, question_id: QuestionId, **changes) -> None:
        question = self._questions.get(question_id)
        if question:
            self._questions[question_id] = question.model_copy(update=changes)

    async def increment_views(self, question_id: QuestionId) -> None:
        """Increment views by 1."""
        question = self._questions.get(question_id)
        if question:
            self._bump(question_id, views=question.views + 1)

    async def increment_answer_count(self, question_id: QuestionId) -> None:
        """Increment answer_count by 1 and bump activity."""
        question = self._questions.get(question_id)
        if question:
            self._bump(
                question_id,
                answer_count=question.answer_count + 1,
                last_activity_at=datetime.now(),
            )

    async def decrement_answer_count(self, question_id: QuestionId) -> None:
        """Decrement answer_count by 1 (minimum 0)."""
        question = self._questions.get(question_id)
        if question and question.answer_count > 0:
            self._bump(question_id, answer_count=question.answer_count - 1)
