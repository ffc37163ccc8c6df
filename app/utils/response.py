from fastapi import HTTPException, status
from fastapi.responses import JSONResponse


def error_response(message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "message": message,
            "data": None,
            "status": "error",
            "status_code": status_code,
        },
    )


def handle_exception(error: Exception, fallback_message: str = "Internal server error") -> JSONResponse:
    """Coerce raised errors into the shared error envelope.

    Marketplace failures (HTTP errors, bad payloads, missing revenue shares)
    all collapse to a 500 carrying the endpoint's fixed message.
    """
    if isinstance(error, HTTPException):
        detail = error.detail if isinstance(error.detail, str) else str(error.detail)
        return error_response(detail, error.status_code)

    return error_response(fallback_message)
