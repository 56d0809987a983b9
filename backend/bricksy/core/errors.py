"""
Application error taxonomy.

Every error carries a stable machine-readable ``code`` plus a human-readable
message, and knows the HTTP status it maps to. Business outcomes
(duplicate email, unknown user, wrong password) and auth boundary failures
are raised as subclasses of ``AppError``; anything else reaching the handler
boundary is collapsed to ``InternalError``.
"""
from typing import Any, Dict, Mapping, Optional
from fastapi import status


class AppError(Exception):
    """Base application error rendered as a structured JSON response."""

    code: str = "AppError"
    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Request failed"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        context: Optional[Mapping[str, Any]] = None,
    ):
        self.code = code or self.code
        self.status_code = status_code or self.status_code
        self.message = message or self.message
        self.context = dict(context) if context else None
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "success": False,
            "error": self.code,
            "message": self.message,
        }
        if self.context:
            payload["context"] = self.context
        return payload


class ValidationError(AppError):
    """Client input is malformed; the caller may fix it and resubmit."""

    code = "MissingFields"
    message = "Email and password are required"


class InvalidEmail(ValidationError):
    code = "InvalidEmail"
    message = "Email address is not valid"


class PasswordTooShort(ValidationError):
    code = "PasswordTooShort"
    message = "Password is too short"

    def __init__(self, min_length: int):
        super().__init__(
            f"Password must be at least {min_length} characters",
            context={"min_length": min_length},
        )


class InvalidCredentials(ValidationError):
    code = "InvalidCredentials"
    message = "Email and password are required"


class DuplicateEmail(AppError):
    code = "DuplicateEmail"
    status_code = status.HTTP_409_CONFLICT
    message = "Email is already registered"


class UserNotFound(AppError):
    code = "UserNotFound"
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"


class InvalidPassword(AppError):
    code = "InvalidPassword"
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Incorrect password"


class NoToken(AppError):
    code = "NoToken"
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Bearer token required"


class InvalidToken(AppError):
    code = "InvalidToken"
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid or expired token"


class InternalError(AppError):
    """Infrastructure failure. The message is always generic."""

    code = "InternalError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"
