"""Unit tests for the in-memory repositories' ordering and counters."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from stackit.domain.model import Tag
from stackit.domain.repository import QuestionSortOrder, TagOrder
from stackit.domain.value import TagId, TagName, VoteType
from stackit.persistence.repository.inmemory import (
    InMemoryQuestionRepository,
    InMemoryStore,
    InMemoryTagRepository,
)
from tests.factories import make_question, make_user


class TestQuestionListing:
    """Sorting, filtering and pagination of question listings."""

    @pytest.mark.asyncio
    async def test_sort_orders(self):
        repo = InMemoryQuestionRepository()
        author, voter = make_user("asker"), make_user("voter")
        now = datetime.now()
        old = await repo.save(
            make_question(author, title="An older question here", created_at=now - timedelta(days=2))
        )
        new = await repo.save(make_question(author, title="A brand new question"))

        await repo.toggle_vote(old.id, voter.id, VoteType.UPVOTE)
        await repo.increment_answer_count(old.id)

        newest = await repo.find_all(sort=QuestionSortOrder.NEWEST)
        by_votes = await repo.find_all(sort=QuestionSortOrder.VOTES)
        active = await repo.find_all(sort=QuestionSortOrder.ACTIVE)

        assert [q.id for q in newest] == [new.id, old.id]
        assert [q.id for q in by_votes] == [old.id, new.id]
        # A new answer makes the old question the most recently active
        assert active[0].id == old.id

    @pytest.mark.asyncio
    async def test_toggle_vote_twice_cancels(self):
        repo = InMemoryQuestionRepository()
        author, voter = make_user("asker"), make_user("voter")
        question = await repo.save(make_question(author))

        await repo.toggle_vote(question.id, voter.id, VoteType.UPVOTE)
        cancelled = await repo.toggle_vote(question.id, voter.id, VoteType.UPVOTE)

        assert cancelled.vote_count == 0
        assert cancelled.votes.vote_of(voter.id) is None

    @pytest.mark.asyncio
    async def test_tag_filter_and_pagination(self):
        repo = InMemoryQuestionRepository()
        author = make_user()
        for i in range(3):
            await repo.save(make_question(author, title=f"Python question {i:02d}"))
        await repo.save(make_question(author, title="A question about rust", tags=("rust",)))

        python = TagName("python")
        page = await repo.find_all(tag=python, limit=2, offset=2)

        assert await repo.count(tag=python) == 3
        assert len(page) == 1
        assert page[0].tags == [python]

    @pytest.mark.asyncio
    async def test_save_keeps_stored_counters(self):
        repo = InMemoryQuestionRepository()
        question = await repo.save(make_question(make_user()))
        await repo.increment_views(question.id)

        await repo.save(question.model_copy(update={"title": "An edited question title"}))

        stored = await repo.find_by_id(question.id)
        assert stored.views == 1
        assert stored.title == "An edited question title"


class TestTagRepository:
    """Ordering and usage counting of tags."""

    def _tag(self, name: str, created_at: datetime) -> Tag:
        return Tag(id=TagId(uuid4()), name=TagName(name), created_at=created_at)

    @pytest.mark.asyncio
    async def test_orderings(self):
        repo = InMemoryTagRepository(InMemoryStore())
        now = datetime.now()
        for i, name in enumerate(["django", "async", "python"]):
            await repo.save(self._tag(name, now + timedelta(minutes=i)))
        await repo.increment_usage(TagName("python"))

        by_name = await repo.find_all(limit=10)
        by_usage = await repo.find_all(limit=10, order=TagOrder.USAGE_COUNT)
        by_age = await repo.find_all(limit=2, order=TagOrder.CREATED_AT)

        assert [t.name.root for t in by_name] == ["async", "django", "python"]
        assert [t.name.root for t in by_usage] == ["python", "async", "django"]
        assert [t.name.root for t in by_age] == ["python", "async"]

    @pytest.mark.asyncio
    async def test_resave_keeps_usage_count(self):
        repo = InMemoryTagRepository()
        tag = await repo.save(self._tag("python", datetime.now()))
        await repo.increment_usage(tag.name)

        updated = await repo.save(tag.model_copy(update={"description": "The language"}))

        assert updated.usage_count == 1
        assert updated.description == "The language"

    def test_unknown_order_falls_back_to_name(self):
        assert TagOrder.parse("popularity") is TagOrder.NAME
        assert TagOrder.parse("usage_count") is TagOrder.USAGE_COUNT

    @pytest.mark.asyncio
    async def test_used_filter_query_and_delete(self):
        repo = InMemoryTagRepository()
        now = datetime.now()
        python = await repo.save(self._tag("python", now))
        await repo.save(self._tag("pytest", now).model_copy(update={"description": "Testing"}))
        await repo.save(self._tag("rust", now))
        await repo.increment_usage(TagName("python"))

        used = await repo.find_all(limit=10, used=True)
        unused = await repo.find_all(limit=10, used=False)
        matching = await repo.find_all(limit=10, query="PY")

        assert [t.name.root for t in used] == ["python"]
        assert [t.name.root for t in unused] == ["pytest", "rust"]
        assert [t.name.root for t in matching] == ["pytest", "python"]
        assert await repo.count(query="testing") == 1
        assert await repo.count(used=False) == 2

        await repo.delete(python.id)
        assert await repo.find_by_id(python.id) is None
        assert await repo.find_by_name(TagName("python")) is None

    @pytest.mark.asyncio
    async def test_rename_frees_old_name(self):
        repo = InMemoryTagRepository()
        tag = await repo.save(self._tag("python", datetime.now()))

        await repo.save(tag.model_copy(update={"name": TagName("python3")}))

        assert await repo.find_by_name(TagName("python")) is None
        assert (await repo.find_by_name(TagName("python3"))).id == tag.id
