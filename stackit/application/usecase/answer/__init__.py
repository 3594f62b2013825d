"""Answer use cases."""

from .accept_answer import (
    AcceptAnswerRequest,
    AcceptAnswerResponse,
    AcceptAnswerUseCase,
    AnswerActionRequest,
    ApproveAnswerUseCase,
    UnacceptAnswerUseCase,
)
from .common import AnswerDetail
from .create_answer import CreateAnswerRequest, CreateAnswerResponse, CreateAnswerUseCase
from .list_answers import (
    GetAnswerRequest,
    GetAnswerUseCase,
    ListAnswersRequest,
    ListAnswersResponse,
    ListAnswersUseCase,
    ListUserAnswersRequest,
    ListUserAnswersResponse,
    ListUserAnswersUseCase,
)
from .update_answer import (
    DeleteAnswerRequest,
    DeleteAnswerResponse,
    DeleteAnswerUseCase,
    UpdateAnswerRequest,
    UpdateAnswerResponse,
    UpdateAnswerUseCase,
)

__all__ = [
    "AcceptAnswerRequest",
    "AcceptAnswerResponse",
    "AcceptAnswerUseCase",
    "AnswerActionRequest",
    "AnswerDetail",
    "ApproveAnswerUseCase",
    "CreateAnswerRequest",
    "CreateAnswerResponse",
    "CreateAnswerUseCase",
    "DeleteAnswerRequest",
    "DeleteAnswerResponse",
    "DeleteAnswerUseCase",
    "GetAnswerRequest",
    "GetAnswerUseCase",
    "ListAnswersRequest",
    "ListAnswersResponse",
    "ListAnswersUseCase",
    "ListUserAnswersRequest",
    "ListUserAnswersResponse",
    "ListUserAnswersUseCase",
    "UnacceptAnswerUseCase",
    "UpdateAnswerRequest",
    "UpdateAnswerResponse",
    "UpdateAnswerUseCase",
]
