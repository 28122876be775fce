# app/services/common/errors.py
"""
Service-layer exceptions.

These exceptions are raised by service methods and should be caught
at the API layer to return appropriate HTTP responses. Each class carries
a stable ``code`` that the API layer reports as ``error_code``.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional


class ServiceError(Exception):
    """Base exception for all service-layer errors."""

    code = "SERVICE_ERROR"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(ServiceError):
    """Raised when a requested resource does not exist."""

    code = "NOT_FOUND"

    def __init__(
        self,
        resource_type: str,
        identifier: str | int,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} with identifier '{identifier}' not found"
        super().__init__(message, details)
        self.resource_type = resource_type
        self.identifier = identifier


class ValidationError(ServiceError):
    """Raised when business logic validation fails."""

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field


class AuthorizationError(ServiceError):
    """Raised when a user lacks permission for an action."""

    code = "FORBIDDEN"

    def __init__(
        self,
        message: str = "Authorization failed",
        required_permission: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.required_permission = required_permission


class ConflictError(ServiceError):
    """Raised when an operation conflicts with current state."""

    code = "CONFLICT"

    def __init__(
        self,
        message: str,
        conflicting_field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.conflicting_field = conflicting_field


class AlreadyExistsError(ConflictError):
    """Raised when attempting to create a resource that already exists."""

    def __init__(
        self,
        resource_type: str,
        field: str,
        value: Any,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} with {field}='{value}' already exists"
        super().__init__(message, conflicting_field=field, details=details)
        self.resource_type = resource_type
        self.value = value


class RoomFullError(ServiceError):
    """Raised when a room has no free bed left."""

    code = "ROOM_FULL"

    def __init__(
        self,
        room_id: Optional[str] = None,
        capacity: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        if room_id is None:
            message = "No free bed is available"
        else:
            message = f"Room '{room_id}' is full"
        merged = {"room_id": room_id, "capacity": capacity}
        merged.update(details or {})
        super().__init__(message, {k: v for k, v in merged.items() if v is not None})
        self.room_id = room_id
        self.capacity = capacity


class InvalidAmountError(ServiceError):
    """Raised when a monetary amount is not acceptable."""

    code = "INVALID_AMOUNT"

    def __init__(
        self,
        message: str,
        amount: Optional[Decimal] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        merged = dict(details or {})
        if amount is not None:
            merged.setdefault("amount", str(amount))
        super().__init__(message, merged)
        self.amount = amount


class InvalidStateError(ServiceError):
    """Raised when an operation is not allowed in the entity's current state."""

    code = "INVALID_STATE"

    def __init__(
        self,
        message: str,
        current_state: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        merged = dict(details or {})
        if current_state is not None:
            merged.setdefault("current_state", current_state)
        super().__init__(message, merged)
        self.current_state = current_state
