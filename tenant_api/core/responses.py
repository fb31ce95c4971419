from fastapi import status
from fastapi.responses import JSONResponse

from tenant_api.schemas.common_schemas import ErrorResponse


def error_response(status_code: int, message: str, error_code: str) -> JSONResponse:
    """JSON error body shared by exception handlers and the auth middleware"""
    body = ErrorResponse(message=message, error_code=error_code)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True),
        headers=headers,
    )
