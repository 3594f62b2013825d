"""In-memory persistence for tests."""

from dishka import Scope, provide

from stackit.domain.repository import (
    AnswerRepository,
    CommentRepository,
    NotificationRepository,
    QuestionRepository,
    TagRepository,
    UserRepository,
)
from stackit.persistence.repository.inmemory import (
    InMemoryAnswerRepository,
    InMemoryCommentRepository,
    InMemoryNotificationRepository,
    InMemoryQuestionRepository,
    InMemoryStore,
    InMemoryTagRepository,
    InMemoryUserRepository,
)
from stackit.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Repositories over one store per container.

    The store lives for the whole container, so a write made in one request
    is visible to the next as it would be with a database.
    """

    __is_mock__ = True
    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryStore:
        return InMemoryStore()

    @provide
    def get_user_repository(self, store: InMemoryStore) -> UserRepository:
        return InMemoryUserRepository(store)

    @provide
    def get_question_repository(self, store: InMemoryStore) -> QuestionRepository:
        return InMemoryQuestionRepository(store)

    @provide
    def get_answer_repository(self, store: InMemoryStore) -> AnswerRepository:
        return InMemoryAnswerRepository(store)

    @provide
    def get_comment_repository(self, store: InMemoryStore) -> CommentRepository:
        return InMemoryCommentRepository(store)

    @provide
    def get_tag_repository(self, store: InMemoryStore) -> TagRepository:
        return InMemoryTagRepository(store)

    @provide
    def get_notification_repository(
        self, store: InMemoryStore
    ) -> NotificationRepository:
        return InMemoryNotificationRepository(store)
