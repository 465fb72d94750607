"""
Error taxonomy shared by stores, dependencies and routes.

Every ApiError carries the HTTP status and message rendered by the app-level
exception handlers in `blogfolio.app`.
"""

from __future__ import annotations


class ApiError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class BadRequestError(ApiError):
    status_code = 400
    message = "Bad request"


class DuplicateEmailError(BadRequestError):
    message = "User already exists"


class InvalidCredentialsError(BadRequestError):
    message = "Invalid credentials"


class UploadError(BadRequestError):
    message = "Upload rejected"


class UnauthorizedError(ApiError):
    status_code = 401
    message = "No token, authorization denied"


class ForbiddenError(ApiError):
    status_code = 403
    message = "Access denied. Admin only."


class NotFoundError(ApiError):
    status_code = 404
    message = "Not found"


class MediaHostError(ApiError):
    """Upstream media host failure; surfaced as a 500."""

    message = "Upload failed"
