"""
Exceptions for failures that cannot travel back as a ServiceResult.

Credential verification runs inside DRF authentication and the socket
middleware, where there is no result to return, so it raises
AuthenticationError. Adapters turn a driver OperationalError into a
TransientError so REST and realtime callers see one message.
core.exception_handlers maps either to a response through its ErrorKind.
"""

from __future__ import annotations

from typing import Any

from core.services import ErrorKind


class BaseApplicationError(Exception):
    default_error_code: str = "APPLICATION_ERROR"
    error_kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}

    @property
    def http_status(self) -> int:
        return self.error_kind.http_status

    def to_dict(self) -> dict[str, Any]:
        """Error body in the same shape as ServiceResult.to_response()."""
        body: dict[str, Any] = {"error": self.message, "error_code": self.error_code}
        if self.details:
            body["details"] = self.details
        return body

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class AuthenticationError(BaseApplicationError):
    """Missing, malformed, expired or revoked token, or an unusable user."""

    default_error_code = "UNAUTHENTICATED"
    error_kind = ErrorKind.UNAUTHENTICATED


class TransientError(BaseApplicationError):
    """Store timeout or dropped connection; the same request may be retried."""

    default_error_code = "TRANSIENT"
    error_kind = ErrorKind.TRANSIENT
