"""API response helper functions."""

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel as PydanticBaseModel

from pagecraft.config import get_cors_allowed_origin


def get_cors_headers(content_type: str = "application/json") -> dict:
    """Get CORS headers for the configured origin."""
    return {
        "Access-Control-Allow-Origin": get_cors_allowed_origin(),
        "Access-Control-Allow-Headers": "Content-Type,Authorization,X-Amz-Date,X-Api-Key,X-Amz-Security-Token",
        "Access-Control-Allow-Methods": "GET,POST,PUT,OPTIONS",
        "Access-Control-Allow-Credentials": "true",
        "Content-Type": content_type,
    }


def _json_serializer(obj: Any) -> Any:
    """JSON serializer for objects not serializable by default."""
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, PydanticBaseModel):
        return obj.model_dump(mode="json")
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


def _serialize(data: Any) -> str:
    """Serialize data to JSON string."""
    return json.dumps(data, default=_json_serializer)


def success(data: Any, status_code: int = 200) -> dict:
    """Create a successful API response.

    Args:
        data: Response data (dict, list, or Pydantic model).
        status_code: HTTP status code (default 200).

    Returns:
        API Gateway response dict.
    """
    if isinstance(data, PydanticBaseModel):
        body = data.model_dump(mode="json")
    else:
        body = data

    return {
        "statusCode": status_code,
        "headers": get_cors_headers(),
        "body": _serialize(body),
    }


def html(body: str, status_code: int = 200, no_store: bool = True) -> dict:
    """Create an HTML document response.

    Args:
        body: HTML document.
        status_code: HTTP status code.
        no_store: Forbid caching (previews of unpublished content).

    Returns:
        API Gateway response dict.
    """
    headers = get_cors_headers(content_type="text/html; charset=utf-8")
    if no_store:
        headers["Cache-Control"] = "no-store"
    return {
        "statusCode": status_code,
        "headers": headers,
        "body": body,
    }


def error(
    message: str,
    status_code: int = 500,
    error_code: str | None = None,
    details: dict | None = None,
) -> dict:
    """Create an error API response.

    Args:
        message: Error message.
        status_code: HTTP status code.
        error_code: Machine-readable error code.
        details: Additional error details.

    Returns:
        API Gateway response dict.
    """
    body: dict[str, Any] = {
        "error": True,
        "message": message,
    }

    if error_code:
        body["error_code"] = error_code
    if details:
        body["details"] = details

    return {
        "statusCode": status_code,
        "headers": get_cors_headers(),
        "body": _serialize(body),
    }


def from_exception(exc: Exception) -> dict:
    """Create an error response from a PagecraftError (or anything with to_dict)."""
    return {
        "statusCode": getattr(exc, "status_code", 500),
        "headers": get_cors_headers(),
        "body": _serialize(exc.to_dict() if hasattr(exc, "to_dict") else {"error": True, "message": str(exc)}),
    }


def not_found(resource_type: str, resource_id: str) -> dict:
    """Create a 404 Not Found response.

    Args:
        resource_type: Type of resource (e.g., "Page").
        resource_id: ID of the resource.

    Returns:
        API Gateway response dict.
    """
    return error(
        message=f"{resource_type} with ID '{resource_id}' not found",
        status_code=404,
        error_code="NOT_FOUND",
        details={"resource_type": resource_type, "resource_id": resource_id},
    )


def forbidden(message: str = "You don't have permission to perform this action") -> dict:
    """Create a 403 Forbidden response."""
    return error(
        message=message,
        status_code=403,
        error_code="FORBIDDEN",
    )
