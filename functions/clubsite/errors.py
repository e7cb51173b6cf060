"""
Error taxonomy shared by the store, the API handlers and the sync client.
"""

from __future__ import annotations


class ClubDataError(Exception):
    """Base error carrying a user-safe message and an HTTP status code."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class ValidationError(ClubDataError):
    """Missing or invalid type, action, id or data."""

    status_code = 400


class AuthError(ClubDataError):
    """Bad or missing password or session token."""

    status_code = 401


class NotFoundError(ClubDataError):
    """No record with the requested id."""

    status_code = 404


class SerializationError(ClubDataError):
    """Malformed JSON in a request body or in stored data."""

    status_code = 400
