"""Map service-layer exceptions to JSON error responses."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .errors import AppException, ErrorCode

logger = logging.getLogger(__name__)


def _envelope(request: Request, body: Dict[str, Any]) -> Dict[str, Any]:
    body.update(
        {
            "path": str(request.url.path),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    )
    return body


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    logger.warning(
        "%s %s -> %s %s: %s", request.method, request.url.path, exc.status_code, exc.error_code.value, exc.message
    )
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(_envelope(request, exc.to_dict())))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("%s %s -> invalid request: %s", request.method, request.url.path, exc.errors())
    body = {
        "error": True,
        "error_type": "validation_error",
        "error_code": ErrorCode.VALIDATION_ERROR.value,
        "message": "Request validation failed",
        "details": {"errors": exc.errors()},
    }
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder(_envelope(request, body)),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    body = {
        "error": True,
        "error_type": "internal_error",
        "error_code": ErrorCode.INTERNAL_ERROR.value,
        "message": "Internal server error",
        "details": None,
    }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=_envelope(request, body))


def configure_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
