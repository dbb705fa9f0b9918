"""
DRF exception handler mapping the error taxonomy to HTTP responses.

Configured in settings as REST_FRAMEWORK["EXCEPTION_HANDLER"].

Mapping:
    BaseApplicationError      -> its ErrorKind status, {"error", "error_code"}
    django.db.OperationalError -> 503 TRANSIENT (store timeout, retryable)
    DRF APIException          -> DRF's default handling
    anything else             -> logged with traceback, 500 generic message
"""

from __future__ import annotations

import logging

from django.db import OperationalError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationError, TransientError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again later."
TRANSIENT_ERROR_MESSAGE = "The service is temporarily unavailable, please retry"


def api_exception_handler(exc, context):
    if isinstance(exc, BaseApplicationError):
        return Response(exc.to_dict(), status=exc.http_status)

    if isinstance(exc, OperationalError):
        logger.warning(f"Record store unavailable during {_view_name(context)}: {exc}")
        transient = TransientError(TRANSIENT_ERROR_MESSAGE)
        return Response(transient.to_dict(), status=transient.http_status)

    response = exception_handler(exc, context)
    if response is not None:
        return response

    logger.exception(f"Unhandled error in {_view_name(context)}", exc_info=exc)
    return Response(
        {"error": GENERIC_ERROR_MESSAGE, "error_code": "INTERNAL"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _view_name(context) -> str:
    view = context.get("view") if context else None
    return view.__class__.__name__ if view is not None else "unknown view"
