from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR
from sqlalchemy.exc import IntegrityError
from loguru import logger

def http_exception_handler(request: Request, exc: HTTPException):
    body = {"detail": exc.detail}
    # TextExtractionFailed tells the user how to fix the upload
    suggestion = getattr(exc, "suggestion", None)
    if suggestion:
        body["suggestion"] = suggestion
    return JSONResponse(status_code=exc.status_code, content=body)

def generic_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred."},
    )

def database_integrity_handler(request: Request, exc: IntegrityError):
    """
    Turn a SQLAlchemy integrity violation into a 400 response.

    The driver's message is logged but never returned to the client.

    Args:
        request: FastAPI request instance
        exc: IntegrityError from SQLAlchemy

    Returns:
        JSONResponse with 400 status and a generic description
    """
    driver_message = str(exc.orig).lower()
    logger.error(f"Database integrity error on {request.url.path}: {driver_message}")

    if "duplicate key" in driver_message or "unique constraint" in driver_message:
        message = "Record already exists"
    else:
        message = "Data constraint violation"

    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "error": "Database error",
            "message": message,
            "hint": "Please check your data and try again"
        }
    )
