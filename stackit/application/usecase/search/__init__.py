"""Search use cases."""

from .search import (
    SearchQuestionsResponse,
    SearchQuestionsUseCase,
    SearchRequest,
    SearchTagsResponse,
    SearchTagsUseCase,
    SearchUsersResponse,
    SearchUsersUseCase,
)

__all__ = [
    "SearchQuestionsResponse",
    "SearchQuestionsUseCase",
    "SearchRequest",
    "SearchTagsResponse",
    "SearchTagsUseCase",
    "SearchUsersResponse",
    "SearchUsersUseCase",
]
