"""GET /search - filtered block lookup against the Data tab."""

from __future__ import annotations

from typing import Any, Dict

from config import Config
from core.auth import authenticate_request
from core.errors import DataUnavailable
from core.logger import log_msg
from core.search import SearchQuery, run_search
from core.sheets import open_sheets
from functions.utils import error_response, json_response, query_params, require_method


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Return the JSON array of records matching blockNo/partNo/thickness."""
    try:
        require_method(event, "GET")
        if Config.REQUIRE_AUTH:
            claims = authenticate_request(event)
            log_msg(f"[AUTH] Search by {claims.get('username')}")

        # Validated before the sheet is contacted
        query = SearchQuery.from_params(query_params(event))

        results = run_search(open_sheets(), query, Config.DATA_RANGE)
        return json_response(200, results)

    except DataUnavailable as exc:
        log_msg(f"[ERROR] Search failed: {exc.message}")
        return json_response(500, {"error": "Failed to fetch search results"})
    except Exception as exc:
        return error_response(exc)
