"""
Ошибки предметной области и их преобразование в JSON-ответы.

Все ошибки API отдаются в едином формате: {"error": <сообщение или детали>}
"""

import logging
from typing import Any, Dict, List

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ValidationError(HTTPException):
    def __init__(self, detail: Any):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Not logged in"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class AuthorizationError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


def flatten_validation_errors(errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Свернуть ошибки pydantic в структуру formErrors / fieldErrors

    Ошибки без имени поля (пустое или битое тело) попадают в formErrors
    """
    form_errors: List[str] = []
    field_errors: Dict[str, List[str]] = {}

    for error in errors:
        loc = [part for part in error.get("loc", ()) if part != "body"]
        if loc and isinstance(loc[0], str):
            field_errors.setdefault(loc[0], []).append(error["msg"])
        else:
            form_errors.append(error["msg"])

    return {"formErrors": form_errors, "fieldErrors": field_errors}


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": flatten_validation_errors(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )
