"""User use cases."""

from .adjust_reputation import (
    AdjustReputationRequest,
    AdjustReputationResponse,
    AdjustReputationUseCase,
)
from .get_user_profile import (
    GetUserProfileRequest,
    GetUserProfileResponse,
    GetUserProfileUseCase,
)
from .list_user_questions import (
    ListUserQuestionsRequest,
    ListUserQuestionsResponse,
    ListUserQuestionsUseCase,
)
from .list_users import (
    LeaderboardRequest,
    LeaderboardResponse,
    LeaderboardUseCase,
    ListUsersRequest,
    ListUsersResponse,
    ListUsersUseCase,
)
from .set_role import SetRoleRequest, SetRoleResponse, SetRoleUseCase

__all__ = [
    "AdjustReputationRequest",
    "AdjustReputationResponse",
    "AdjustReputationUseCase",
    "GetUserProfileRequest",
    "GetUserProfileResponse",
    "GetUserProfileUseCase",
    "LeaderboardRequest",
    "LeaderboardResponse",
    "LeaderboardUseCase",
    "ListUserQuestionsRequest",
    "ListUserQuestionsResponse",
    "ListUserQuestionsUseCase",
    "ListUsersRequest",
    "ListUsersResponse",
    "ListUsersUseCase",
    "SetRoleRequest",
    "SetRoleResponse",
    "SetRoleUseCase",
]
