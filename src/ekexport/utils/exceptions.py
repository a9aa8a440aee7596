"""Custom exceptions for ekexport."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..readers.base import AuthorizationScope


class EkExportError(Exception):
    """Base exception for export errors."""


class InvalidDateRange(EkExportError):
    """Raised when a range starts after it ends."""

    def __init__(self, message: str = "Invalid date range: start must be <= end."):
        super().__init__(message)


class EncodingFailed(EkExportError):
    """Raised when a serializer cannot build its output."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Encoding failed: {reason}")


class UnsupportedOperation(EkExportError):
    """Raised when a feature is not available on the running platform."""

    def __init__(self, message: str):
        super().__init__(f"Unsupported operation: {message}")


class CalendarReadError(EkExportError):
    """Raised when reading from the data store fails."""


class ConfigurationError(EkExportError):
    """Raised when configuration is invalid."""


class AuthorizationError(EkExportError):
    """Base class for data store access problems."""

    summary = "Authorization error"

    def __init__(self, scope: "AuthorizationScope"):
        self.scope = scope
        message = f"{self.summary} for {scope.label}."
        if self.user_guidance:
            message = f"{message} {self.user_guidance}"
        super().__init__(message)

    @property
    def user_guidance(self) -> str:
        return (
            "Please grant access in System Settings > Privacy & Security > "
            f"{self.scope.settings_label}."
        )


class AuthorizationNotDetermined(AuthorizationError):
    """Raised when access has not been requested yet."""

    summary = "Authorization not determined"

    @property
    def user_guidance(self) -> str:
        return f"Run again to request access for {self.scope.label}."


class AuthorizationDenied(AuthorizationError):
    """Raised when the user refused access."""

    summary = "Access denied"


class AuthorizationRestricted(AuthorizationError):
    """Raised when access is blocked by policy (e.g. MDM, parental controls)."""

    summary = "Access restricted"
