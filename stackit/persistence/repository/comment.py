"""PostgreSQL implementation of Comment repository."""

from sqlalchemy import Column, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.domain.model import Comment
from stackit.domain.repository import CommentRepository
from stackit.domain.value import AnswerId, QuestionId
from stackit.persistence.mappers import comment_to_dict, row_to_comment
from stackit.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _thread(self, parent: Column, parent_id) -> list[Comment]:
        stmt = (
            select(comments_table)
            .where(parent == parent_id)
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(dict(row)) for row in result.mappings()]

    async def _purge(self, parent: Column, parent_id) -> int:
        result = await self.session.execute(delete(comments_table).where(parent == parent_id))
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def find_by_question(self, question_id: QuestionId) -> list[Comment]:
        return await self._thread(comments_table.c.question_id, question_id)

    async def find_by_answer(self, answer_id: AnswerId) -> list[Comment]:
        return await self._thread(comments_table.c.answer_id, answer_id)

    async def save(self, comment: Comment) -> Comment:
        await self.session.execute(insert(comments_table).values(**comment_to_dict(comment)))
        await self.session.flush()
        return comment

    async def delete_by_question(self, question_id: QuestionId) -> int:
        return await self._purge(comments_table.c.question_id, question_id)

    async def delete_by_answer(self, answer_id: AnswerId) -> int:
        return await self._purge(comments_table.c.answer_id, answer_id)
