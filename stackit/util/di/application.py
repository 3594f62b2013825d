"""Use case providers, grouped the way the routes are."""

from dishka import Scope, provide_all

from stackit.application.usecase.answer import (
    AcceptAnswerUseCase,
    ApproveAnswerUseCase,
    CreateAnswerUseCase,
    DeleteAnswerUseCase,
    GetAnswerUseCase,
    ListAnswersUseCase,
    ListUserAnswersUseCase,
    UnacceptAnswerUseCase,
    UpdateAnswerUseCase,
)
from stackit.application.usecase.auth import (
    GetCurrentUserUseCase,
    LoginUseCase,
    RegisterUseCase,
)
from stackit.application.usecase.comment import (
    CreateCommentUseCase,
    GetCommentsUseCase,
)
from stackit.application.usecase.notification import (
    DeleteAllNotificationsUseCase,
    DeleteNotificationUseCase,
    GetUnreadCountUseCase,
    ListNotificationsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
)
from stackit.application.usecase.question import (
    CreateQuestionUseCase,
    DeleteQuestionUseCase,
    GetQuestionUseCase,
    ListQuestionsUseCase,
    SetQuestionStatusUseCase,
    UpdateQuestionUseCase,
)
from stackit.application.usecase.search import (
    SearchQuestionsUseCase,
    SearchTagsUseCase,
    SearchUsersUseCase,
)
from stackit.application.usecase.tag import (
    CreateTagUseCase,
    DeleteTagUseCase,
    GetTagUseCase,
    ListTagsUseCase,
    PopularTagsUseCase,
    UnusedTagsUseCase,
    UpdateTagUseCase,
)
from stackit.application.usecase.user import (
    AdjustReputationUseCase,
    GetUserProfileUseCase,
    LeaderboardUseCase,
    ListUserQuestionsUseCase,
    ListUsersUseCase,
    SetRoleUseCase,
)
from stackit.application.usecase.vote import CastVoteUseCase
from stackit.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    scope = Scope.REQUEST

    auth = provide_all(RegisterUseCase, LoginUseCase, GetCurrentUserUseCase)

    questions = provide_all(
        CreateQuestionUseCase,
        GetQuestionUseCase,
        ListQuestionsUseCase,
        UpdateQuestionUseCase,
        SetQuestionStatusUseCase,
        DeleteQuestionUseCase,
        CastVoteUseCase,
    )

    answers = provide_all(
        CreateAnswerUseCase,
        GetAnswerUseCase,
        ListAnswersUseCase,
        ListUserAnswersUseCase,
        UpdateAnswerUseCase,
        DeleteAnswerUseCase,
        AcceptAnswerUseCase,
        UnacceptAnswerUseCase,
        ApproveAnswerUseCase,
    )

    comments = provide_all(CreateCommentUseCase, GetCommentsUseCase)

    tags = provide_all(
        ListTagsUseCase,
        GetTagUseCase,
        PopularTagsUseCase,
        UnusedTagsUseCase,
        CreateTagUseCase,
        UpdateTagUseCase,
        DeleteTagUseCase,
    )

    search = provide_all(SearchQuestionsUseCase, SearchUsersUseCase, SearchTagsUseCase)

    notifications = provide_all(
        ListNotificationsUseCase,
        GetUnreadCountUseCase,
        MarkNotificationReadUseCase,
        MarkAllNotificationsReadUseCase,
        DeleteNotificationUseCase,
        DeleteAllNotificationsUseCase,
    )

    users = provide_all(
        GetUserProfileUseCase,
        ListUsersUseCase,
        LeaderboardUseCase,
        ListUserQuestionsUseCase,
        AdjustReputationUseCase,
        SetRoleUseCase,
    )
