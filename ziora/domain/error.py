"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class MissingFieldError(ValidationError):
    """Raised when required fields are absent from a request."""

    def __init__(self, fields: list[str]):
        self.fields = fields
        super().__init__(f"Missing required fields: {', '.join(fields)}")


class InvalidSegmentError(ValidationError):
    """Raised when a content path segment is empty or has illegal characters."""

    def __init__(self, segment_name: str, value: str):
        self.segment_name = segment_name
        self.value = value
        super().__init__(f"Invalid {segment_name} segment: {value!r}")


class InvalidTransitionError(ValidationError):
    """Raised when a moderation action is not legal from the current status."""

    def __init__(self, current: str, action: str):
        super().__init__(f"Cannot {action} a comment in status {current}")


class NotAuthorizedError(DomainError):
    """Raised when a caller lacks the role required for an operation."""

    def __init__(self, action: str, user_id: str | None = None):
        who = f"User {user_id}" if user_id else "Anonymous caller"
        super().__init__(f"{who} is not authorized to {action}")


class ConflictError(DomainError):
    """Raised when a write collides with existing state."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
