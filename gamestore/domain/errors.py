# gamestore/domain/errors.py
from typing import Any


class StoreError(Exception):
    """
    Bazowy blad domeny, mapowany na odpowiedz JSON
    {"error": ..., "message": ..., "details": ...}
    """

    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str | None = None, *, error: str | None = None, details: Any = None):
        super().__init__(message or error or self.error)
        self.message = message
        if error:
            self.error = error
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.error}
        if self.message:
            body["message"] = self.message
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidRequestError(StoreError):
    status_code = 400
    error = "Invalid request"


class AuthenticationError(StoreError):
    status_code = 401
    error = "Authentication required"


class NotFoundError(StoreError):
    status_code = 404
    error = "Not found"


class ConflictError(StoreError):
    status_code = 409
    error = "Conflict"


class UpstreamError(StoreError):
    status_code = 502
    error = "Upstream service failure"

    def __init__(self, message: str | None = None, *, status_code: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        if status_code:
            self.status_code = status_code
