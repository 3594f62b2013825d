"""Tag entity for categorizing questions."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from stackit.domain.model.common import DomainModel
from stackit.domain.value import TagId, TagName, UserId


class Tag(DomainModel):
    """Tag entity.

    Tags are created on first use by a question author. usage_count tracks
    how many questions currently reference the tag and never drops below zero.
    """

    id: TagId
    name: TagName
    description: str = Field(default="", max_length=500)
    usage_count: int = Field(default=0, ge=0)
    created_by: Optional[UserId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
