"""POST /register - add a user row to the User tab."""

from __future__ import annotations

from typing import Any, Dict

from core.auth import clean_user_fields, create_user
from core.sheets import open_sheets
from functions.utils import error_response, json_body, json_response, require_method, text_field


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    try:
        require_method(event, "POST")
        body = json_body(event)

        # Rejected before the sheet client is opened
        fields = clean_user_fields({name: text_field(body, name) for name in ("username", "email", "password")})

        user = create_user(open_sheets(), fields)
        return json_response(200, {"user": user})

    except Exception as exc:
        return error_response(exc)
