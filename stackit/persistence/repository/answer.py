"""PostgreSQL implementation of Answer repository."""

from typing import List, Optional

import logfire
from sqlalchemy import delete, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.domain.model import Answer
from stackit.domain.repository.answer import AnswerRepository
from stackit.domain.value import AnswerId, QuestionId, UserId, VotableType, VoteType
from stackit.persistence.mappers import answer_to_dict, row_to_answer
from stackit.persistence.repository.vote import (
    current_vote,
    fetch_tallies,
    set_vote,
    vote_sum,
)
from stackit.persistence.tables import answers_table, votes_table


class PostgresAnswerRepository(AnswerRepository):
    """PostgreSQL implementation of AnswerRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _to_answers(self, rows) -> List[Answer]:
        """Build Answer models, loading voters for all rows in one query."""
        if not rows:
            return []

        tallies = await fetch_tallies(
            self.session, VotableType.ANSWER, [row.id for row in rows]
        )
        return [row_to_answer(row._asdict(), tallies.get(row.id)) for row in rows]

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID."""
        stmt = select(answers_table).where(answers_table.c.id == answer_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if not row:
            logfire.warn("Answer not found", answer_id=str(answer_id))
            return None
        answers = await self._to_answers([row])
        return answers[0]

    async def find_by_question(self, question_id: QuestionId) -> List[Answer]:
        """Find all answers to a question, accepted first."""
        with logfire.span(
            "answer_repository.find_by_question", question_id=str(question_id)
        ):
            stmt = (
                select(answers_table)
                .where(answers_table.c.question_id == question_id)
                .order_by(
                    desc(answers_table.c.is_accepted),
                    desc(answers_table.c.vote_count),
                    desc(answers_table.c.created_at),
                )
            )
            result = await self.session.execute(stmt)
            answers = await self._to_answers(result.fetchall())
            logfire.info("Found answers", count=len(answers))
            return answers

    async def find_by_author(
        self,
        author_id: UserId,
        approved_only: bool = True,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Answer]:
        """Find answers by a specific author."""
        stmt = select(answers_table).where(answers_table.c.author_id == author_id)
        if approved_only:
            stmt = stmt.where(answers_table.c.is_approved.is_(True))
        stmt = (
            stmt.order_by(desc(answers_table.c.created_at)).limit(limit).offset(offset)
        )
        result = await self.session.execute(stmt)
        return await self._to_answers(result.fetchall())

    async def save(self, answer: Answer) -> Answer:
        """Save an answer (create or update)."""
        with logfire.span("answer_repository.save", answer_id=str(answer.id)):
            existing = await self.find_by_id(answer.id)
            answer_dict = answer_to_dict(answer)

            if existing:
                # vote_count only moves through toggle_vote
                answer_dict.pop("vote_count")
                stmt = (
                    answers_table.update()
                    .where(answers_table.c.id == answer.id)
                    .values(**answer_dict)
                )
                await self.session.execute(stmt)
                answer = answer.model_copy(update={"votes": existing.votes})
            else:
                stmt = answers_table.insert().values(**answer_dict)
                await self.session.execute(stmt)

            await self.session.flush()
            return answer

    async def delete(self, answer_id: AnswerId) -> None:
        """Delete an answer and its votes."""
        await self.session.execute(
            delete(votes_table).where(
                votes_table.c.votable_type == VotableType.ANSWER.value,
                votes_table.c.votable_id == answer_id,
            )
        )
        stmt = answers_table.delete().where(answers_table.c.id == answer_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_by_question(self, question_id: QuestionId) -> int:
        """Delete every answer to a question, with their votes."""
        answer_ids = select(answers_table.c.id).where(
            answers_table.c.question_id == question_id
        )
        await self.session.execute(
            delete(votes_table).where(
                votes_table.c.votable_type == VotableType.ANSWER.value,
                votes_table.c.votable_id.in_(answer_ids),
            )
        )
        result = await self.session.execute(
            answers_table.delete().where(answers_table.c.question_id == question_id)
        )
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def clear_accepted(self, question_id: QuestionId) -> List[AnswerId]:
        """Un-accept every accepted answer to a question."""
        stmt = (
            update(answers_table)
            .where(answers_table.c.question_id == question_id)
            .where(answers_table.c.is_accepted.is_(True))
            .values(is_accepted=False, updated_at=func.now())
            .returning(answers_table.c.id)
        )
        result = await self.session.execute(stmt)
        cleared = [AnswerId(row.id) for row in result.fetchall()]
        await self.session.flush()
        return cleared

    async def toggle_vote(
        self, answer_id: AnswerId, user_id: UserId, requested: VoteType
    ) -> Optional[Answer]:
        """Toggle against the vote stored when the row lock was taken."""
        with logfire.span(
            "answer_repository.toggle_vote",
            answer_id=str(answer_id),
            user_id=str(user_id),
            requested=requested.value,
        ):
            if not await self._lock(answer_id):
                return None
            stored = await current_vote(
                self.session, VotableType.ANSWER, answer_id, user_id
            )
            vote = None if stored == requested else requested
            return await self._store_vote(answer_id, user_id, vote)

    async def _lock(self, answer_id: AnswerId) -> bool:
        # Serializes voters on this answer until the transaction ends
        lock = (
            select(answers_table.c.id)
            .where(answers_table.c.id == answer_id)
            .with_for_update()
        )
        return (await self.session.execute(lock)).fetchone() is not None

    async def _store_vote(
        self, answer_id: AnswerId, user_id: UserId, vote: Optional[VoteType]
    ) -> Optional[Answer]:
        await set_vote(self.session, VotableType.ANSWER, answer_id, user_id, vote)
        stmt = (
            update(answers_table)
            .where(answers_table.c.id == answer_id)
            .values(vote_count=vote_sum(VotableType.ANSWER, answer_id))
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return await self.find_by_id(answer_id)
