"""
Content Planner API Response Utilities
Standardized response format and error handling
"""
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Any, Dict, Optional
from datetime import datetime, timezone

from .errors import ContentValidationError, PaymentProviderError, PolicyDenied
from .logging_config import api_logger


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


# ============================================================
# SUCCESS RESPONSES
# ============================================================

def success(data: Any = None, message: str = None, meta: Dict = None) -> Dict:
    """Create success response"""
    response = {
        "ok": True,
        "timestamp": _timestamp(),
    }

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    if meta:
        response["meta"] = meta

    return response


def deleted(message: str = "Deleted successfully") -> Dict:
    """200 Deleted response"""
    return success(message=message)


# ============================================================
# ERROR RESPONSES
# ============================================================

class ApiException(HTTPException):
    """Custom API exception with error codes"""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: str = None,
        details: Dict = None,
    ):
        self.error_code = error_code or f"ERR_{status_code}"
        self.details = details
        super().__init__(status_code=status_code, detail=message)


def bad_request(message: str, code: str = "BAD_REQUEST", details: Dict = None):
    raise ApiException(400, message, code, details)

def payment_required(message: str = "Payment not completed"):
    raise ApiException(402, message, "PAYMENT_REQUIRED")

def not_found(resource: str = "Resource", id: str = None):
    message = f"{resource} not found" if not id else f"{resource} '{id}' not found"
    raise ApiException(404, message, "NOT_FOUND")

def not_implemented(message: str = "Not implemented"):
    raise ApiException(501, message, "NOT_IMPLEMENTED")

def server_error(message: str = "Internal server error"):
    raise ApiException(500, message, "INTERNAL_ERROR")


def _error_body(message: str, error_code: str, details: Optional[Dict] = None) -> Dict:
    return {
        "ok": False,
        "error": message,
        "error_code": error_code,
        "details": details,
        "timestamp": _timestamp(),
    }


# ============================================================
# EXCEPTION HANDLERS
# ============================================================

async def api_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for API errors"""

    if isinstance(exc, ApiException):
        api_logger.warning(
            f"API Error: {exc.detail}",
            status_code=exc.status_code,
            error_code=exc.error_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.detail, exc.error_code, exc.details),
            headers=getattr(exc, "headers", None),
        )

    if isinstance(exc, StarletteHTTPException):
        api_logger.warning(
            f"HTTP Error: {exc.detail}",
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.detail, f"HTTP_{exc.status_code}"),
            headers=getattr(exc, "headers", None),
        )

    if isinstance(exc, ContentValidationError):
        api_logger.info(
            "Validation error",
            fields=exc.fields,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=422,
            content=_error_body(
                "Validation error",
                "VALIDATION_ERROR",
                {"fields": exc.fields, "errors": exc.errors},
            ),
        )

    if isinstance(exc, PolicyDenied):
        api_logger.info(
            f"Policy denied: {exc.reason}",
            path=request.url.path,
        )
        return JSONResponse(
            status_code=403,
            content=_error_body(exc.reason, "PREMIUM_REQUIRED"),
        )

    if isinstance(exc, PaymentProviderError):
        api_logger.error(
            f"Payment provider error: {exc}",
            error=exc,
            provider_status=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=502,
            content=_error_body("Payment provider request failed", "PAYMENT_PROVIDER_ERROR"),
        )

    if isinstance(exc, SQLAlchemyError):
        api_logger.error(
            "Database error",
            error=exc,
            path=request.url.path,
        )
    else:
        api_logger.error(
            f"Unexpected error: {exc}",
            error=exc,
            path=request.url.path,
        )
    return JSONResponse(
        status_code=500,
        content=_error_body("An unexpected error occurred", "INTERNAL_ERROR"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Route every error family through ``api_exception_handler``."""
    for exc_class in (
        StarletteHTTPException,
        ContentValidationError,
        PolicyDenied,
        PaymentProviderError,
        SQLAlchemyError,
        Exception,
    ):
        app.add_exception_handler(exc_class, api_exception_handler)
