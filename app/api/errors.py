# app/api/errors.py
"""
Exception handlers translating service-layer errors into HTTP responses.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Type

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from app.schemas.common.response import ErrorDetail, ErrorResponse
from app.services.common.errors import (
    AuthorizationError,
    ConflictError,
    InvalidAmountError,
    InvalidStateError,
    NotFoundError,
    RoomFullError,
    ServiceError,
    ValidationError,
)
from app.services.common.unit_of_work import TransactionError

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: Dict[Type[ServiceError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    RoomFullError: status.HTTP_409_CONFLICT,
    InvalidStateError: status.HTTP_409_CONFLICT,
    InvalidAmountError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
}


def status_for(exc: ServiceError) -> int:
    for error_cls in type(exc).__mro__:
        if error_cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_cls]
    if isinstance(exc, TransactionError) and isinstance(exc.original_error, IntegrityError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, TransactionError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


def _details(exc: ServiceError) -> list[ErrorDetail]:
    field = getattr(exc, "field", None) or getattr(exc, "conflicting_field", None)
    items = [ErrorDetail(field=field, message=exc.message, code=exc.code)]
    for key, value in exc.details.items():
        if key == "unresolved" and isinstance(value, list):
            items.extend(
                ErrorDetail(field=item["student_ref"], message=item["reason"], code="UNRESOLVED")
                for item in value
            )
        elif value is not None:
            items.append(ErrorDetail(field=key, message=str(value), code=exc.code))
    return items


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    status_code = status_for(exc)
    request_id = getattr(request.state, "request_id", None)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "%s on %s %s: %s",
        type(exc).__name__, request.method, request.url.path, exc.message,
        extra={"request_id": request_id, "error_code": exc.code},
    )
    body = ErrorResponse.create(
        message=exc.message,
        errors=_details(exc),
        error_code=exc.code,
        path=request.url.path,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)  # type: ignore[arg-type]
