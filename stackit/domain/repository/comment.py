"""Comment repository interface."""

from abc import ABC, abstractmethod

from stackit.domain.model.comment import Comment
from stackit.domain.value import AnswerId, QuestionId


class CommentRepository(ABC):
    """Comments hang off exactly one question or one answer.

    Threads are returned oldest first. Comments are never edited, so
    ``save`` only ever inserts.
    """

    @abstractmethod
    async def find_by_question(self, question_id: QuestionId) -> list[Comment]:
        pass

    @abstractmethod
    async def find_by_answer(self, answer_id: AnswerId) -> list[Comment]:
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        pass

    @abstractmethod
    async def delete_by_question(self, question_id: QuestionId) -> int:
        """Drop a question's thread; returns how many comments went."""
        pass

    @abstractmethod
    async def delete_by_answer(self, answer_id: AnswerId) -> int:
        """Drop an answer's thread; returns how many comments went."""
        pass
