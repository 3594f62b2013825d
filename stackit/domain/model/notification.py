"""Notification entity.

A notification is a fact record: something happened that a recipient should
hear about. Only the read flag ever changes after creation.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, model_validator

from stackit.domain.model.common import DomainModel
from stackit.domain.value import (
    AnswerId,
    CommentId,
    NotificationId,
    NotificationType,
    QuestionId,
    UserId,
)


class Notification(DomainModel):
    """Notification addressed to a single recipient."""

    id: NotificationId
    recipient_id: UserId
    sender_id: UserId
    type: NotificationType
    title: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=1000)
    question_id: Optional[QuestionId] = None
    answer_id: Optional[AnswerId] = None
    comment_id: Optional[CommentId] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    is_read: bool = False
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_not_self_addressed(self) -> "Notification":
        """Reject self-addressed notifications except where the type allows it."""
        if (
            self.sender_id == self.recipient_id
            and not self.type.allows_self_notification
        ):
            raise ValueError(f"{self.type.value} notifications cannot target the sender")
        return self

    def as_event(self) -> dict[str, Any]:
        """Payload handed to the real-time sink."""
        return {
            "type": "new_notification",
            "notification": {
                "id": str(self.id),
                "type": self.type.value,
                "title": self.title,
                "message": self.message,
                "sender_id": str(self.sender_id),
                "question_id": str(self.question_id) if self.question_id else None,
                "answer_id": str(self.answer_id) if self.answer_id else None,
                "created_at": self.created_at.isoformat(),
                "is_read": self.is_read,
            },
        }
