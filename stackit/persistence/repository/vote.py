"""Vote storage shared by the question and answer repositories.

Votes live in one polymorphic table keyed by (user, votable type, votable
id). The cached ``vote_count`` column on questions and answers is always
recomputed from this table, never adjusted from an in-memory copy.
"""

from collections import defaultdict
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, case, delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.domain.value import UserId, VotableType, VoteTally, VoteType
from stackit.persistence.mappers import build_tally
from stackit.persistence.tables import votes_table


async def fetch_tallies(
    session: AsyncSession, votable_type: VotableType, votable_ids: Sequence[UUID]
) -> dict[UUID, VoteTally]:
    """Fetch voter sets for several questions or answers in one query.

    Args:
        session: Database session
        votable_type: Whether the IDs are questions or answers
        votable_ids: IDs to load voters for

    Returns:
        Dict mapping votable ID -> tally (IDs with no votes are absent)
    """
    if not votable_ids:
        return {}

    stmt = select(
        votes_table.c.votable_id, votes_table.c.user_id, votes_table.c.vote_type
    ).where(
        and_(
            votes_table.c.votable_type == votable_type.value,
            votes_table.c.votable_id.in_(votable_ids),
        )
    )
    result = await session.execute(stmt)

    upvoters: dict[UUID, list[UUID]] = defaultdict(list)
    downvoters: dict[UUID, list[UUID]] = defaultdict(list)
    for row in result.fetchall():
        if row.vote_type == VoteType.UPVOTE.value:
            upvoters[row.votable_id].append(row.user_id)
        else:
            downvoters[row.votable_id].append(row.user_id)

    return {
        votable_id: build_tally(upvoters[votable_id], downvoters[votable_id])
        for votable_id in set(upvoters) | set(downvoters)
    }


async def set_vote(
    session: AsyncSession,
    votable_type: VotableType,
    votable_id: UUID,
    user_id: UserId,
    vote: Optional[VoteType],
) -> None:
    """Make a user's vote on an item exactly ``vote`` (None removes it)."""
    if vote is None:
        stmt = delete(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
        )
        await session.execute(stmt)
        return

    upsert = (
        insert(votes_table)
        .values(
            user_id=user_id,
            votable_type=votable_type.value,
            votable_id=votable_id,
            vote_type=vote.value,
        )
        .on_conflict_do_update(
            constraint="unique_vote",
            set_={"vote_type": vote.value, "created_at": func.now()},
        )
    )
    await session.execute(upsert)


def vote_sum(votable_type: VotableType, votable_id: UUID):
    """Scalar subquery computing upvotes minus downvotes for an item."""
    return (
        select(
            func.coalesce(
                func.sum(
                    case(
                        (votes_table.c.vote_type == VoteType.UPVOTE.value, 1),
                        else_=-1,
                    )
                ),
                0,
            )
        )
        .where(
            and_(
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
        )
        .scalar_subquery()
    )


async def current_vote(
    session: AsyncSession, votable_type: VotableType, votable_id: UUID, user_id: UserId
) -> Optional[VoteType]:
    """The user's stored vote on an item; read it under the item's row lock."""
    stmt = select(votes_table.c.vote_type).where(
        and_(
            votes_table.c.user_id == user_id,
            votes_table.c.votable_type == votable_type.value,
            votes_table.c.votable_id == votable_id,
        )
    )
    stored = (await session.execute(stmt)).scalar_one_or_none()
    return VoteType(stored) if stored else None
