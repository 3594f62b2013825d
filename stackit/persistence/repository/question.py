"""PostgreSQL implementation of Question repository."""

from typing import List, Optional

import logfire
from sqlalchemy import delete, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.domain.model import Question
from stackit.domain.repository.question import QuestionRepository, QuestionSortOrder
from stackit.domain.value import QuestionId, TagName, UserId, VotableType, VoteType
from stackit.persistence.mappers import question_to_dict, row_to_question
from stackit.persistence.repository.search import contains_text
from stackit.persistence.repository.vote import (
    current_vote,
    fetch_tallies,
    set_vote,
    vote_sum,
)
from stackit.persistence.tables import questions_table, votes_table

# Columns an update through save() may not touch
COUNTER_COLUMNS = ("vote_count", "answer_count", "views")


class PostgresQuestionRepository(QuestionRepository):
    """PostgreSQL implementation of QuestionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _to_questions(self, rows) -> List[Question]:
        """Build Question models, loading voters for all rows in one query."""
        if not rows:
            return []

        tallies = await fetch_tallies(
            self.session, VotableType.QUESTION, [row.id for row in rows]
        )
        return [row_to_question(row._asdict(), tallies.get(row.id)) for row in rows]

    @staticmethod
    def _filtered(
        stmt, tag: Optional[TagName], unanswered_only: bool, query: Optional[str]
    ):
        if tag:
            stmt = stmt.where(questions_table.c.tags.contains([tag.root]))
        if unanswered_only:
            stmt = stmt.where(questions_table.c.accepted_answer_id.is_(None))
        if query:
            stmt = stmt.where(
                contains_text(query, questions_table.c.title, questions_table.c.content)
            )
        return stmt

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        with logfire.span("question_repository.find_by_id", question_id=str(question_id)):
            stmt = select(questions_table).where(questions_table.c.id == question_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Question not found", question_id=str(question_id))
                return None

            questions = await self._to_questions([row])
            return questions[0]

    async def find_all(
        self,
        tag: Optional[TagName] = None,
        unanswered_only: bool = False,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        limit: int = 20,
        offset: int = 0,
        query: Optional[str] = None,
    ) -> List[Question]:
        """Find questions with filtering and pagination."""
        with logfire.span(
            "question_repository.find_all",
            tag=tag.root if tag else None,
            unanswered_only=unanswered_only,
            sort=sort.value,
            limit=limit,
            offset=offset,
            query=query,
        ):
            stmt = self._filtered(
                select(questions_table), tag, unanswered_only, query
            )

            # Sort order
            if sort == QuestionSortOrder.ACTIVE:
                stmt = stmt.order_by(desc(questions_table.c.last_activity_at))
            elif sort == QuestionSortOrder.VOTES:
                stmt = stmt.order_by(
                    desc(questions_table.c.vote_count),
                    desc(questions_table.c.created_at),
                )
            elif sort == QuestionSortOrder.VIEWS:
                stmt = stmt.order_by(
                    desc(questions_table.c.views), desc(questions_table.c.created_at)
                )
            else:
                stmt = stmt.order_by(desc(questions_table.c.created_at))

            # Pagination
            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            questions = await self._to_questions(result.fetchall())
            logfire.info("Found questions", count=len(questions))
            return questions

    async def count(
        self,
        tag: Optional[TagName] = None,
        unanswered_only: bool = False,
        query: Optional[str] = None,
    ) -> int:
        """Count questions matching the given filters."""
        stmt = self._filtered(
            select(func.count()).select_from(questions_table),
            tag,
            unanswered_only,
            query,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_author(
        self, author_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Question]:
        """Find questions by a specific author."""
        stmt = (
            select(questions_table)
            .where(questions_table.c.author_id == author_id)
            .order_by(desc(questions_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return await self._to_questions(result.fetchall())

    async def save(self, question: Question) -> Question:
        """Save a question (create or update)."""
        with logfire.span(
            "question_repository.save",
            question_id=str(question.id),
            tags=question.tag_names,
        ):
            existing = await self.find_by_id(question.id)
            question_dict = question_to_dict(question)

            if existing:
                logfire.info("Updating existing question", question_id=str(question.id))
                for column in COUNTER_COLUMNS:
                    question_dict.pop(column)
                stmt = (
                    questions_table.update()
                    .where(questions_table.c.id == question.id)
                    .values(**question_dict)
                )
                await self.session.execute(stmt)
                question = question.model_copy(
                    update={
                        "votes": existing.votes,
                        "answer_count": existing.answer_count,
                        "views": existing.views,
                    }
                )
            else:
                logfire.info("Inserting new question", question_id=str(question.id))
                stmt = questions_table.insert().values(**question_dict)
                await self.session.execute(stmt)

            await self.session.flush()
            return question

    async def delete(self, question_id: QuestionId) -> None:
        """Delete a question (hard delete) and its votes."""
        await self.session.execute(
            delete(votes_table).where(
                votes_table.c.votable_type == VotableType.QUESTION.value,
                votes_table.c.votable_id == question_id,
            )
        )
        stmt = questions_table.delete().where(questions_table.c.id == question_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def toggle_vote(
        self, question_id: QuestionId, user_id: UserId, requested: VoteType
    ) -> Optional[Question]:
        """Toggle against the vote stored when the row lock was taken."""
        with logfire.span(
            "question_repository.toggle_vote",
            question_id=str(question_id),
            user_id=str(user_id),
            requested=requested.value,
        ):
            if not await self._lock(question_id):
                return None
            stored = await current_vote(
                self.session, VotableType.QUESTION, question_id, user_id
            )
            vote = None if stored == requested else requested
            return await self._store_vote(question_id, user_id, vote)

    async def _lock(self, question_id: QuestionId) -> bool:
        # Serializes voters on this question until the transaction ends
        lock = (
            select(questions_table.c.id)
            .where(questions_table.c.id == question_id)
            .with_for_update()
        )
        return (await self.session.execute(lock)).fetchone() is not None

    async def _store_vote(
        self, question_id: QuestionId, user_id: UserId, vote: Optional[VoteType]
    ) -> Optional[Question]:
        await set_vote(self.session, VotableType.QUESTION, question_id, user_id, vote)
        stmt = (
            update(questions_table)
            .where(questions_table.c.id == question_id)
            .values(vote_count=vote_sum(VotableType.QUESTION, question_id))
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return await self.find_by_id(question_id)

    async def increment_views(self, question_id: QuestionId) -> None:
        """Atomically increment views by 1."""
        stmt = (
            questions_table.update()
            .where(questions_table.c.id == question_id)
            .values(views=questions_table.c.views + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def increment_answer_count(self, question_id: QuestionId) -> None:
        """Atomically increment answer_count by 1 and bump activity."""
        stmt = (
            questions_table.update()
            .where(questions_table.c.id == question_id)
            .values(
                answer_count=questions_table.c.answer_count + 1,
                last_activity_at=func.now(),
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def decrement_answer_count(self, question_id: QuestionId) -> None:
        """Atomically decrement answer_count by 1 (minimum 0)."""
        stmt = (
            questions_table.update()
            .where(questions_table.c.id == question_id)
            .where(questions_table.c.answer_count > 0)  # Don't go below 0
            .values(answer_count=questions_table.c.answer_count - 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()
