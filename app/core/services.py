"""
Service-layer result types.

Services return a ServiceResult for every outcome a caller can trigger
(bad input, missing rows, policy denials). Adapters translate it: REST
views return ``error_response(result)``, the realtime consumer sends
``error`` and ``error_code`` as an error event. Exceptions are left for
failures nobody asked for, such as a store timeout or a bug.

    result = ChatService.post_message(actor, chat_id, body)
    if not result:
        return error_response(result)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from django.db import transaction
from rest_framework.response import Response

T = TypeVar("T")


class ErrorKind(str, Enum):
    """
    Why an operation failed, independent of transport.

    CONFLICT is normally resolved inside a service (a lost create race
    re-reads the winner). TRANSIENT means the client may retry as is.
    """

    BAD_REQUEST = "bad_request"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    TRANSIENT = "transient"
    INTERNAL = "internal"

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_KIND[self]


HTTP_STATUS_BY_KIND = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.TRANSIENT: 503,
    ErrorKind.INTERNAL: 500,
}


@dataclass
class ServiceResult(Generic[T]):
    """
    Outcome of a service call.

    A result is truthy exactly when it succeeded. Failures carry a
    message for humans, an error_code for clients and an ErrorKind for
    the adapter.
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        error_kind: ErrorKind = ErrorKind.BAD_REQUEST,
    ) -> ServiceResult[T]:
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            error_kind=error_kind,
        )

    @property
    def http_status(self) -> int:
        # A failure built without a kind is a programming error upstream
        if self.success:
            return 200
        kind = self.error_kind or ErrorKind.INTERNAL
        return kind.http_status

    def to_response(self) -> dict[str, Any]:
        """Body for a REST response; failures omit an empty error_code."""
        if self.success:
            return {"success": True, "data": self.data}

        body: dict[str, Any] = {"error": self.error}
        if self.error_code:
            body["error_code"] = self.error_code
        return body

    def __bool__(self) -> bool:
        return self.success


def error_response(result: ServiceResult) -> Response:
    """DRF response for a failed result, status taken from its ErrorKind."""
    return Response(result.to_response(), status=result.http_status)


class BaseService:
    """
    Stateless home for a group of operations.

    Subclasses expose classmethods only. Each gets a logger named after
    the subclass so log lines can be filtered per service.
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    def atomic(cls):
        """Transaction around a multi-row write; rolls back on any exception."""
        return transaction.atomic()
