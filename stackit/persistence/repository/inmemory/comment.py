"""In-memory comment repository for testing."""

from stackit.domain.model.comment import Comment
from stackit.domain.repository.comment import CommentRepository
from stackit.domain.value import AnswerId, CommentId, QuestionId

from .store import InMemoryStore


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    @property
    def _comments(self) -> dict[CommentId, Comment]:
        return self._store.comments

    async def find_by_question(self, question_id: QuestionId) -> list[Comment]:
        """Find comments on a question, oldest first."""
        comments = [c for c in self._comments.values() if c.question_id == question_id]
        return sorted(comments, key=lambda c: c.created_at)

    async def find_by_answer(self, answer_id: AnswerId) -> list[Comment]:
        """Find comments on an answer, oldest first."""
        comments = [c for c in self._comments.values() if c.answer_id == answer_id]
        return sorted(comments, key=lambda c: c.created_at)

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def delete_by_question(self, question_id: QuestionId) -> int:
        """Delete every comment on a question."""
        doomed = [c.id for c in self._comments.values() if c.question_id == question_id]
        for comment_id in doomed:
            del self._comments[comment_id]
        return len(doomed)

    async def delete_by_answer(self, answer_id: AnswerId) -> int:
        """Delete every comment on an answer."""
        doomed = [c.id for c in self._comments.values() if c.answer_id == answer_id]
        for comment_id in doomed:
            del self._comments[comment_id]
        return len(doomed)
