"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed or policy-violating input.

    Self-votes, answering a closed question, deleting an accepted answer.
    """

    pass


class AuthorizationError(DomainError):
    """Raised when the acting user may not perform an action."""

    def __init__(self, message: str):
        super().__init__(message)


class NotOwnerError(AuthorizationError):
    """Raised when a user acts on content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class ReputationError(AuthorizationError):
    """Raised when a user lacks the reputation required for an action."""

    def __init__(self, action: str, required: int):
        self.action = action
        self.required = required
        super().__init__(
            f"You need at least {required} reputation points to {action}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a unique value (username, email) is already taken."""

    pass


class NotificationDispatchError(DomainError):
    """Notification could not be created or delivered.

    Never leaves the notification service.
    """

    pass


class AuthenticationError(DomainError):
    """Raised when login credentials don't match a user."""

    pass
