"""Answer repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from stackit.domain.model.answer import Answer
from stackit.domain.value import AnswerId, QuestionId, UserId, VoteType


class AnswerRepository(ABC):
    """Repository for Answer entity.

    As with questions, ``save`` never overwrites the vote tally of an
    existing answer; votes go through ``toggle_vote``.
    """

    @abstractmethod
    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID.

        Args:
            answer_id: The answer's unique identifier

        Returns:
            The answer if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_question(self, question_id: QuestionId) -> List[Answer]:
        """Find all answers to a question.

        Answers are ordered accepted first, then by vote count (highest
        first), then newest first.

        Args:
            question_id: The question ID

        Returns:
            List of answers
        """
        pass

    @abstractmethod
    async def find_by_author(
        self,
        author_id: UserId,
        approved_only: bool = True,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Answer]:
        """Find answers written by a user, newest first.

        Args:
            author_id: The author's ID
            approved_only: Exclude answers that haven't been approved
            limit: Maximum number of answers
            offset: Number of answers to skip

        Returns:
            List of answers
        """
        pass

    @abstractmethod
    async def save(self, answer: Answer) -> Answer:
        """Save an answer (create or update)."""
        pass

    @abstractmethod
    async def delete(self, answer_id: AnswerId) -> None:
        """Delete an answer."""
        pass

    @abstractmethod
    async def delete_by_question(self, question_id: QuestionId) -> int:
        """Delete every answer to a question.

        Returns:
            Number of answers deleted
        """
        pass

    @abstractmethod
    async def clear_accepted(self, question_id: QuestionId) -> List[AnswerId]:
        """Un-accept every accepted answer to a question in one write.

        Args:
            question_id: The question ID

        Returns:
            IDs of the answers that were accepted before the call
        """
        pass

    @abstractmethod
    async def toggle_vote(
        self,
        answer_id: AnswerId,
        user_id: UserId,
        requested: VoteType,
    ) -> Optional[Answer]:
        """Toggle a user's vote against the vote stored at write time.

        Args:
            answer_id: Answer being voted on
            user_id: Voter
            requested: Requested vote direction

        Returns:
            The updated answer, None if it doesn't exist
        """
        pass
