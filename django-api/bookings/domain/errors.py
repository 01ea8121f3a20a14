"""Domain error codes for the bookings module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_INPUT = "INVALID_INPUT"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    ALLOCATION_MISMATCH = "ALLOCATION_MISMATCH"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidInputError(DomainError):
    """Raised when a required field is missing or invalid."""

    def __init__(self, field: str, reason: str = "is required") -> None:
        super().__init__(
            code=ErrorCode.INVALID_INPUT,
            message=f"{field} {reason}",
        )
        object.__setattr__(self, "field", field)


class CapacityExceededError(DomainError):
    """Raised when a booking would take a session past its slot cap."""

    def __init__(self, max_slots: int) -> None:
        super().__init__(
            code=ErrorCode.CAPACITY_EXCEEDED,
            message=f"Session is full ({max_slots} slots)",
        )
        object.__setattr__(self, "max_slots", max_slots)


class AllocationMismatchError(DomainError):
    """Raised when manual costs do not add up to the total amount."""

    def __init__(self, message: str = "Individual costs must add up to the total amount") -> None:
        super().__init__(
            code=ErrorCode.ALLOCATION_MISMATCH,
            message=message,
        )


class SessionNotFoundError(DomainError):
    """Raised when a session is not found."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_NOT_FOUND,
            message="Session not found",
        )
        object.__setattr__(self, "session_id", session_id)
