"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Iterable, Optional
from uuid import UUID

from stackit.domain.model import Answer, Comment, Notification, Question, Tag, User
from stackit.domain.value import (
    AnswerId,
    CommentId,
    NotificationId,
    NotificationType,
    QuestionId,
    QuestionStatus,
    TagId,
    TagName,
    UserId,
    UserRole,
    Username,
    VoteTally,
)


def _uuid(value: Any) -> Optional[UUID]:
    """Normalize a UUID column value (asyncpg may hand back strings)."""
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def build_tally(
    upvoters: Iterable[Any] = (), downvoters: Iterable[Any] = ()
) -> VoteTally:
    """Build a vote tally from voter ID columns."""
    return VoteTally(
        upvoters=frozenset(UserId(_uuid(u)) for u in upvoters),
        downvoters=frozenset(UserId(_uuid(d)) for d in downvoters),
    )


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        email=row["email"],
        password_hash=row["password_hash"],
        role=UserRole(row["role"]),
        reputation=row["reputation"],
        bio=row.get("bio"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "username": user.username.root,
        "email": user.email,
        "password_hash": user.password_hash,
        "role": user.role.value,
        "reputation": user.reputation,
        "bio": user.bio,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def row_to_question(row: Dict[str, Any], tally: Optional[VoteTally] = None) -> Question:
    """Convert database row to Question domain model.

    Args:
        row: Database row as dict
        tally: Voters loaded from the votes table

    Returns:
        Question domain model
    """
    accepted = _uuid(row.get("accepted_answer_id"))
    return Question(
        id=QuestionId(_uuid(row["id"])),
        title=row["title"],
        content=row["content"],
        author_id=UserId(_uuid(row["author_id"])),
        tags=[TagName(name) for name in row["tags"]],
        votes=tally or VoteTally(),
        answer_count=row["answer_count"],
        views=row["views"],
        accepted_answer_id=AnswerId(accepted) if accepted else None,
        status=QuestionStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        last_activity_at=row["last_activity_at"],
    )


def question_to_dict(question: Question) -> Dict[str, Any]:
    """Convert Question domain model to database dict.

    Returns every column, counters included; the repository decides which
    of them an update may touch.
    """
    return {
        "id": question.id,
        "title": question.title,
        "content": question.content,
        "author_id": question.author_id,
        "tags": question.tag_names,
        "vote_count": question.vote_count,
        "answer_count": question.answer_count,
        "views": question.views,
        "accepted_answer_id": question.accepted_answer_id,
        "status": question.status.value,
        "created_at": question.created_at,
        "updated_at": question.updated_at,
        "last_activity_at": question.last_activity_at,
    }


def row_to_answer(row: Dict[str, Any], tally: Optional[VoteTally] = None) -> Answer:
    """Convert database row to Answer domain model."""
    return Answer(
        id=AnswerId(_uuid(row["id"])),
        question_id=QuestionId(_uuid(row["question_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        votes=tally or VoteTally(),
        is_accepted=row["is_accepted"],
        is_approved=row["is_approved"],
        is_edited=row["is_edited"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def answer_to_dict(answer: Answer) -> Dict[str, Any]:
    """Convert Answer domain model to database dict."""
    return {
        "id": answer.id,
        "question_id": answer.question_id,
        "author_id": answer.author_id,
        "content": answer.content,
        "vote_count": answer.vote_count,
        "is_accepted": answer.is_accepted,
        "is_approved": answer.is_approved,
        "is_edited": answer.is_edited,
        "created_at": answer.created_at,
        "updated_at": answer.updated_at,
    }


def row_to_tag(row: Dict[str, Any]) -> Tag:
    """Convert database row to Tag domain model."""
    created_by = _uuid(row.get("created_by"))
    return Tag(
        id=TagId(_uuid(row["id"])),
        name=TagName(row["name"]),
        description=row.get("description") or "",
        usage_count=row["usage_count"],
        created_by=UserId(created_by) if created_by else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    """Convert Tag domain model to database dict."""
    return {
        "id": tag.id,
        "name": tag.name.root,
        "description": tag.description,
        "usage_count": tag.usage_count,
        "created_by": tag.created_by,
        "created_at": tag.created_at,
        "updated_at": tag.updated_at,
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    question_id = _uuid(row.get("question_id"))
    answer_id = _uuid(row.get("answer_id"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        question_id=QuestionId(question_id) if question_id else None,
        answer_id=AnswerId(answer_id) if answer_id else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    question_id = _uuid(row.get("question_id"))
    answer_id = _uuid(row.get("answer_id"))
    comment_id = _uuid(row.get("comment_id"))
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        recipient_id=UserId(_uuid(row["recipient_id"])),
        sender_id=UserId(_uuid(row["sender_id"])),
        type=NotificationType(row["type"]),
        title=row["title"],
        message=row["message"],
        question_id=QuestionId(question_id) if question_id else None,
        answer_id=AnswerId(answer_id) if answer_id else None,
        comment_id=CommentId(comment_id) if comment_id else None,
        metadata=row.get("metadata") or {},
        is_read=row["is_read"],
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    data = notification.model_dump()
    data["type"] = notification.type.value
    return data
