"""Domain service providers.

Services are built per request, alongside the repositories and the database
session they share. Constructor type hints are the wiring.
"""

from dishka import Scope, provide_all

from stackit.domain.service import (
    AnswerService,
    CommentService,
    JWTService,
    NotificationService,
    QuestionService,
    TagService,
    UserService,
    VoteService,
)
from stackit.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    scope = Scope.REQUEST

    services = provide_all(
        JWTService,
        NotificationService,
        UserService,
        TagService,
        QuestionService,
        AnswerService,
        VoteService,
        CommentService,
    )
