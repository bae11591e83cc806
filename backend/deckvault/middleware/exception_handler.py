"""Exception handlers producing the structured JSON error shape.

Every error body is ``{"error": message, "code": ERROR_CODE, "details": {}}``.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..exceptions import DeckVaultError, ErrorCode

logger = logging.getLogger(__name__)


async def deckvault_exception_handler(request: Request, exc: DeckVaultError) -> JSONResponse:
    """Convert a DeckVaultError into its JSON response.

    Server-side failures (5xx) are logged as errors, caller mistakes as info.
    """
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"DeckVaultError: {exc.error_code.value}",
        extra={
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details,
            "status_code": exc.status_code
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and parameters answer 400 in the same shape."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    logger.info(
        "Request validation failed",
        extra={"path": request.url.path, "method": request.method, "errors": errors},
    )
    message = errors[0]["message"] if errors else "Invalid request"
    return JSONResponse(
        status_code=400,
        content={
            "error": message,
            "code": ErrorCode.VALIDATION_ERROR.value,
            "details": {"errors": errors},
        },
    )
