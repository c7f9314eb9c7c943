"""Domain-specific exceptions for SkillSwap.

This module contains exceptions that represent domain business rule violations
and error conditions within the domain layer. Each exception carries the HTTP
status it is reported with, so the API layer can translate them uniformly.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base exception for all domain-related errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "DOMAIN_ERROR"
        self.details = details


class RepositoryError(DomainError):
    """Raised when the underlying store fails."""

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Repository operation '{operation}' failed: {reason}", "REPOSITORY_ERROR")
        self.operation = operation
        self.reason = reason


# Authentication
class AuthenticationError(DomainError):
    """Raised when a request carries no usable credentials."""

    status_code = 401

    def __init__(self, message: str = "Access token required"):
        super().__init__(message, "UNAUTHENTICATED")


class InvalidTokenError(DomainError):
    """Raised when a bearer token is malformed, tampered with or expired."""

    status_code = 403

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, "INVALID_TOKEN")


class InvalidUserCredentialsError(AuthenticationError):
    """Raised when user credentials are invalid."""

    def __init__(self):
        super().__init__("Invalid email or password")
        self.error_code = "INVALID_CREDENTIALS"


# Invalid arguments
class ValidationError(DomainError):
    """Raised when an operation receives missing or out-of-range input."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "INVALID_ARGUMENT")
        self.field = field


class SelfTargetingError(ValidationError):
    """Raised when a user targets themselves with a two-party action."""

    def __init__(self, action: str):
        super().__init__(f"Cannot {action} yourself")
        self.error_code = "SELF_TARGETING"
        self.action = action


# Not found
class ResourceNotFoundError(DomainError):
    """Base exception for missing resources."""

    status_code = 404


class UserNotFoundError(ResourceNotFoundError):
    """Raised when a user is not found."""

    def __init__(self, user_id: str = None, email: str = None):
        if user_id:
            message = f"User with ID {user_id} not found"
        elif email:
            message = f"User with email {email} not found"
        else:
            message = "User not found"
        super().__init__(message, "USER_NOT_FOUND")
        self.user_id = user_id
        self.email = email


class SessionNotFoundError(ResourceNotFoundError):
    """Raised when a session is not found in the requester's record."""

    def __init__(self, session_id: str):
        super().__init__(f"Session with ID {session_id} not found", "SESSION_NOT_FOUND")
        self.session_id = session_id


class MessageNotFoundError(ResourceNotFoundError):
    """Raised when a message is not found in the requester's record."""

    def __init__(self, message_id: str):
        super().__init__(f"Message with ID {message_id} not found", "MESSAGE_NOT_FOUND")
        self.message_id = message_id


# Session-related exceptions
class InvalidSessionStatusError(ValidationError):
    """Raised when a session status is not one of the allowed values."""

    def __init__(self, status: Any):
        super().__init__(
            "Valid status is required (pending, confirmed, completed, cancelled)",
            field="status",
        )
        self.error_code = "INVALID_SESSION_STATUS"
        self.status = status


class InvalidStatusTransitionError(ValidationError):
    """Raised when a session cannot move from its current status to the requested one."""

    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Cannot change session status from {current} to {requested}",
            field="status",
        )
        self.error_code = "INVALID_STATUS_TRANSITION"
        self.current = current
        self.requested = requested


# Message-related exceptions
class MessageDeleteNotAllowedError(ValidationError):
    """Raised when someone other than the sender tries to delete a message."""

    def __init__(self, message_id: str):
        super().__init__(f"Only the sender can delete message {message_id}")
        self.error_code = "MESSAGE_DELETE_NOT_ALLOWED"
        self.message_id = message_id


# Conflicts. Reported as 400 like the rest of the invalid-request family.
class ConflictError(DomainError):
    """Raised when an operation conflicts with existing state."""

    status_code = 400

    def __init__(self, message: str, error_code: str = "CONFLICT"):
        super().__init__(message, error_code)


class UserAlreadyExistsError(ConflictError):
    """Raised when trying to register an email that already exists."""

    def __init__(self, email: str):
        super().__init__(f"User with email {email} already exists", "USER_ALREADY_EXISTS")
        self.email = email


class DuplicateRatingError(ConflictError):
    """Raised when a rater has already rated the target user."""

    def __init__(self, rater_id: str, ratee_id: str):
        super().__init__("You have already rated this user", "DUPLICATE_RATING")
        self.rater_id = rater_id
        self.ratee_id = ratee_id


class SelfRatingError(ConflictError):
    """Raised when a user tries to rate themselves."""

    def __init__(self):
        super().__init__("You cannot rate yourself", "SELF_RATING")
