"""Error codes and error handling utilities for ThemePicker."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for custom theme sessions."""

    # Service errors
    THEME_APPLY_FAILED = auto()
    THEME_REMOVE_FAILED = auto()

    # Session contract errors
    INCOMPLETE_SELECTION = auto()
    SELECTION_MISSING = auto()
    DELETE_NOT_ALLOWED = auto()
    SESSION_FINISHED = auto()
    SESSION_ALREADY_STARTED = auto()
    SESSION_NOT_STARTED = auto()
    REDIRECT_NOT_PENDING = auto()

    # Input errors
    SEED_INVALID = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.THEME_APPLY_FAILED: "The theme could not be applied. Please try again.",
    ErrorCode.THEME_REMOVE_FAILED: "The custom theme could not be deleted. Please try again.",

    ErrorCode.INCOMPLETE_SELECTION: "Every component must be chosen before the theme is built.",
    ErrorCode.SELECTION_MISSING: "Choose an option before continuing.",
    ErrorCode.DELETE_NOT_ALLOWED: "Only an existing custom theme can be deleted.",
    ErrorCode.SESSION_FINISHED: "This theme session has already ended.",
    ErrorCode.SESSION_ALREADY_STARTED: "This theme session has already started.",
    ErrorCode.SESSION_NOT_STARTED: "This theme session has not started yet.",
    ErrorCode.REDIRECT_NOT_PENDING: "No alternative theme is waiting for an answer.",

    ErrorCode.SEED_INVALID: "The saved theme could not be read. Starting a new theme instead.",
}


@dataclass
class ThemePickerError(Exception):
    """Base exception for ThemePicker with error code and context."""

    code: ErrorCode
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion and self.code in ERROR_MESSAGES:
            self.suggestion = ERROR_MESSAGES[self.code]

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or UI display."""
        return {
            "code": self.code.name,
            "message": self.message,
            "details": self.details,
            "suggestion": self.suggestion,
        }


@dataclass
class IncompleteSelectionError(ThemePickerError):
    """Raised when a complete theme is requested before every kind was chosen."""

    code: ErrorCode = ErrorCode.INCOMPLETE_SELECTION
    missing: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.missing and "missing" not in self.details:
            self.details["missing"] = ", ".join(self.missing)
        super().__post_init__()


def classify_exception(exc: BaseException | None, *, removing: bool = False) -> ThemePickerError:
    """Wrap a service-reported cause into a ThemePickerError for logging."""
    code = ErrorCode.THEME_REMOVE_FAILED if removing else ErrorCode.THEME_APPLY_FAILED
    if exc is None:
        return ThemePickerError(code, details={"original": "no cause reported"})
    if isinstance(exc, ThemePickerError):
        return exc

    exc_name = type(exc).__name__
    exc_str = str(exc)
    details: dict[str, Any] = {"original": exc_str or exc_name}
    if isinstance(exc, PermissionError) or "permission denied" in exc_str.lower():
        details["hint"] = "permission"
    elif isinstance(exc, TimeoutError) or "timeout" in exc_str.lower():
        details["hint"] = "timeout"
    return ThemePickerError(code, message=f"{exc_name}: {exc}", details=details)


def format_error_for_user(error: ThemePickerError | BaseException | None) -> str:
    """Format an error as the generic notice shown to the user.

    Service causes are never shown; only the message mapped to the error code is.
    """
    if isinstance(error, ThemePickerError):
        return ERROR_MESSAGES.get(error.code, error.message)
    return ERROR_MESSAGES[ErrorCode.THEME_APPLY_FAILED]
