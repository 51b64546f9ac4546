"""Centralized DRF exception handler.

Every error response leaving the API has the shape::

    {"status": "fail" | "error", "message": "..."}

Operational errors (``AppError``) expose their own message and status.
DRF's API exceptions (authentication, parse errors, 404 routing) keep their
status and headers.  Any other exception is logged with its traceback and
reported as a bare 500: internal exception text never reaches the client.
"""

from __future__ import annotations

from typing import Any

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from modules.core.errors import AppError

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _flatten_detail(detail: Any) -> str:
    if isinstance(detail, dict):
        if "detail" in detail:
            return _flatten_detail(detail["detail"])
        return "; ".join(
            f"{field}: {_flatten_detail(value)}" for field, value in detail.items()
        )
    if isinstance(detail, (list, tuple)):
        return " ".join(_flatten_detail(item) for item in detail)
    return str(detail)


def app_exception_handler(exc: Exception, context: dict) -> Response:
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else None

    if isinstance(exc, AppError):
        logger.info(
            "request.operational_error",
            view=view_name,
            status_code=exc.status_code,
            error=exc.message,
        )
        return Response(
            {"status": exc.status, "message": exc.message},
            status=exc.status_code,
        )

    response = exception_handler(exc, context)
    if response is not None:
        response.data = {
            "status": "fail" if response.status_code < 500 else "error",
            "message": _flatten_detail(response.data),
        }
        return response

    logger.exception("request.unhandled_exception", view=view_name)
    return Response(
        {"status": "error", "message": INTERNAL_ERROR_MESSAGE},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
