"""POST /login - exchange username/password for a bearer token."""

from __future__ import annotations

from typing import Any, Dict

from core.auth import authenticate, require_credentials
from core.sheets import open_sheets
from functions.utils import error_response, json_body, json_response, require_method, text_field


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    try:
        require_method(event, "POST")
        body = json_body(event)
        username = text_field(body, "username")
        password = text_field(body, "password")

        # Rejected before the sheet client is opened
        require_credentials(username, password)

        return json_response(200, authenticate(open_sheets(), username, password))

    except Exception as exc:
        return error_response(exc)
