# mentorlink/errors.py
"""
Application error taxonomy.

Every error carries a human-readable ``message`` and a stable
machine-readable ``kind``. The HTTP layer renders both as
``{"message": ..., "kind": ...}`` with the class' status code.
"""

from typing import Optional


class AppError(Exception):
    status_code = 500
    default_kind = "ServerError"

    def __init__(self, message: str, kind: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.kind = kind or self.default_kind
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"message": self.message, "kind": self.kind}


class ValidationError(AppError):
    """Bad or missing input. Raised before any store mutation."""
    status_code = 400
    default_kind = "InvalidInput"


class NotFoundError(AppError):
    status_code = 404
    default_kind = "NotFound"


class ConflictError(AppError):
    status_code = 409
    default_kind = "Conflict"


class AuthError(AppError):
    """Missing/invalid credentials (401) or an identity not allowed to act (403)."""
    status_code = 401
    default_kind = "Unauthorized"


class ServerError(AppError):
    status_code = 500
    default_kind = "ServerError"
