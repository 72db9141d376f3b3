"""Domain exceptions for eventlink.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class EventLinkException(Exception):
    """Base exception for all eventlink application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the API exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(EventLinkException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(EventLinkException):
    """Raised when no actor could be identified for an operation that needs one."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class ForbiddenException(EventLinkException):
    """Raised when the actor lacks permission for the attempted mutation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'event').
            action: Optional action that was attempted (e.g. 'close', 'delete').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ProfileRequiredException(EventLinkException):
    """Raised when an NGO without a saved profile tries to create an event."""

    def __init__(self, owner_id: str) -> None:
        super().__init__(
            "An NGO profile is required before creating events",
            "PROFILE_REQUIRED",
            {"owner_id": owner_id},
        )


class ResourceNotFoundException(EventLinkException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'event', 'ngo_profile').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class EventNotFoundException(ResourceNotFoundException):
    """Raised when no event exists with the given id."""

    def __init__(self, event_id: str) -> None:
        super().__init__("event", event_id)
        self.event_id = event_id


class AlreadyRegisteredException(EventLinkException):
    """Raised when a user registers for an event they already joined."""

    def __init__(self, event_id: str, user_id: str) -> None:
        super().__init__(
            "You are already registered for this event",
            "ALREADY_REGISTERED",
            {"event_id": event_id, "user_id": user_id},
        )


class NotRegisteredException(EventLinkException):
    """Raised when a user unregisters from an event they never joined."""

    def __init__(self, event_id: str, user_id: str) -> None:
        super().__init__(
            "You are not registered for this event",
            "NOT_REGISTERED",
            {"event_id": event_id, "user_id": user_id},
        )


class CapacityExceededException(EventLinkException):
    """Raised when a finite-capacity event has no slots left."""

    def __init__(self, event_id: str, capacity: int) -> None:
        super().__init__(
            "No spots left for this event",
            "CAPACITY_EXCEEDED",
            {"event_id": event_id, "capacity": capacity},
        )


class EventClosedException(EventLinkException):
    """Raised when registering for an event its owner has closed."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            "This event is closed for registration",
            "EVENT_CLOSED",
            {"event_id": event_id},
        )


class EventCompletedException(EventLinkException):
    """Raised when registering for an event whose date has passed."""

    def __init__(self, event_id: str, event_date: str) -> None:
        super().__init__(
            "This event has already taken place",
            "EVENT_COMPLETED",
            {"event_id": event_id, "date": event_date},
        )


class InvalidTransitionException(EventLinkException):
    """Raised when a lifecycle operation does not apply to the current status."""

    def __init__(self, event_id: str, current: str, target: str) -> None:
        super().__init__(
            f"Cannot move event from '{current}' to '{target}'",
            "INVALID_TRANSITION",
            {"event_id": event_id, "current_status": current, "target_status": target},
        )


class TransientStoreException(EventLinkException):
    """Raised when the document store fails or stays contended; safe to retry the request."""

    def __init__(self, operation: str, reason: str | None = None) -> None:
        details: dict[str, Any] = {"operation": operation}
        if reason:
            details["reason"] = reason
        super().__init__(
            "The event store is temporarily unavailable; please retry",
            "TRANSIENT_STORE_ERROR",
            details,
        )


class CorruptDocumentException(EventLinkException):
    """Raised when a stored document cannot be read back as a domain entity."""

    def __init__(self, resource_type: str, resource_id: str, field: str, reason: str) -> None:
        super().__init__(
            f"Stored {resource_type} {resource_id} is unreadable: {reason}",
            "CORRUPT_DOCUMENT",
            {"resource_type": resource_type, "resource_id": resource_id, "field": field},
        )
