"""Request/response helpers shared by the serverless functions."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from core.errors import AppError, InvalidQuery, MethodNotAllowed
from core.logger import log_msg

JSON_HEADERS = {"Content-Type": "application/json"}


def json_response(status_code: int, body: Any) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(body),
    }


def error_response(exc: Exception) -> Dict[str, Any]:
    """Turn an exception into a JSON error payload; unknown errors become 500."""
    if isinstance(exc, AppError):
        return json_response(exc.status_code, exc.to_dict())
    log_msg(f"[ERROR] Unhandled {type(exc).__name__}: {str(exc)[:200]}")
    return json_response(500, {"error": "Internal server error"})


def require_method(event: Dict[str, Any], method: str) -> None:
    if (event.get("httpMethod") or "").upper() != method:
        raise MethodNotAllowed()


def query_params(event: Dict[str, Any]) -> Dict[str, Optional[str]]:
    return dict(event.get("queryStringParameters") or {})


def json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """Parse the event body as a JSON object."""
    raw = event.get("body") or "{}"
    try:
        body = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise InvalidQuery("Request body must be valid JSON") from e
    if not isinstance(body, dict):
        raise InvalidQuery("Request body must be a JSON object")
    return body


def text_field(body: Dict[str, Any], name: str) -> str:
    value = body.get(name)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
