"""Question repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

from stackit.domain.model.question import Question
from stackit.domain.value import QuestionId, TagName, UserId, VoteType


class QuestionSortOrder(str, Enum):
    """Sort order for question listings."""

    NEWEST = "newest"  # created_at DESC
    ACTIVE = "active"  # last_activity_at DESC
    VOTES = "votes"  # vote_count DESC
    VIEWS = "views"  # views DESC


class QuestionRepository(ABC):
    """Repository for Question aggregate.

    Counters (votes, answer_count, views) are only ever changed through the
    dedicated atomic methods. ``save`` writes them when inserting a new
    question and leaves them untouched when updating an existing one, so a
    stale in-memory copy can never overwrite a concurrent counter change.
    """

    @abstractmethod
    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID.

        Args:
            question_id: The question's unique identifier

        Returns:
            The question if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        tag: Optional[TagName] = None,
        unanswered_only: bool = False,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        limit: int = 20,
        offset: int = 0,
        query: Optional[str] = None,
    ) -> List[Question]:
        """Find questions with filtering and pagination.

        Args:
            tag: Only questions carrying this tag
            unanswered_only: Only questions without an accepted answer
            query: Only questions whose title or body contains this text,
                ignoring case
            sort: Sort order
            limit: Maximum number of questions
            offset: Number of questions to skip

        Returns:
            List of questions
        """
        pass

    @abstractmethod
    async def count(
        self,
        tag: Optional[TagName] = None,
        unanswered_only: bool = False,
        query: Optional[str] = None,
    ) -> int:
        """Count questions matching the same filters as ``find_all``."""
        pass

    @abstractmethod
    async def find_by_author(
        self, author_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Question]:
        """Find questions by author, newest first."""
        pass

    @abstractmethod
    async def save(self, question: Question) -> Question:
        """Save a question (create or update).

        Args:
            question: The question to save

        Returns:
            The question as stored
        """
        pass

    @abstractmethod
    async def delete(self, question_id: QuestionId) -> None:
        """Delete a question (hard delete)."""
        pass

    @abstractmethod
    async def toggle_vote(
        self,
        question_id: QuestionId,
        user_id: UserId,
        requested: VoteType,
    ) -> Optional[Question]:
        """Toggle a user's vote against the vote stored at write time.

        Repeating the stored vote clears it; any other request replaces it.
        The stored vote is read inside the same atomic write, so two
        identical requests from one user always cancel out.

        Args:
            question_id: Question being voted on
            user_id: Voter
            requested: Requested vote direction

        Returns:
            The updated question, None if it doesn't exist
        """
        pass

    @abstractmethod
    async def increment_views(self, question_id: QuestionId) -> None:
        """Atomically increment the view counter."""
        pass

    @abstractmethod
    async def increment_answer_count(self, question_id: QuestionId) -> None:
        """Atomically increment the answer counter."""
        pass

    @abstractmethod
    async def decrement_answer_count(self, question_id: QuestionId) -> None:
        """Atomically decrement the answer counter (minimum 0)."""
        pass
