"""Response helpers for the person service API.

Success payloads are returned bare (no envelope); error payloads always have
exactly two fields, ``message`` and ``errorCode``.
"""

from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .logging import get_logger

logger = get_logger(__name__)


def to_serializable(obj):
    """Recursively convert Pydantic models, lists, and dicts to serializable types."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump(by_alias=True)
    if isinstance(obj, list):
        return [to_serializable(item) for item in obj]
    if isinstance(obj, dict):
        return {k: to_serializable(v) for k, v in obj.items()}
    return obj


class ServiceResponse:
    """Consistent JSON responses for the service endpoints."""

    @staticmethod
    def success(
        data: Any, status_code: int = status.HTTP_200_OK, headers: dict[str, str] | None = None
    ) -> JSONResponse:
        """Create a successful response carrying ``data`` as the whole body.

        Args:
            data: Pydantic model, list, dict or any JSON-serializable value
            status_code: HTTP status code (default: 200)
            headers: Optional response headers

        """
        content = jsonable_encoder(to_serializable(data))
        return JSONResponse(content=content, status_code=status_code, headers=headers)

    @staticmethod
    def created(data: Any, headers: dict[str, str] | None = None) -> JSONResponse:
        """Create a 201 Created response."""
        return ServiceResponse.success(data, status.HTTP_201_CREATED, headers)

    @staticmethod
    def message(text: str, status_code: int = status.HTTP_200_OK) -> JSONResponse:
        """Create a ``{"message": ...}`` acknowledgement."""
        return JSONResponse(content={"message": text}, status_code=status_code)

    @staticmethod
    def error(
        message: str,
        error_code: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        headers: dict[str, str] | None = None,
    ) -> JSONResponse:
        """Create an error response.

        Args:
            message: Human readable error message
            error_code: Stable error code for client handling
            status_code: HTTP status code (default: 400)
            headers: Optional response headers

        """
        logger.debug(
            "Creating error response",
            extra={"status_code": status_code, "error_code": error_code},
        )
        return JSONResponse(
            content={"message": message, "errorCode": error_code},
            status_code=status_code,
            headers=headers,
        )
