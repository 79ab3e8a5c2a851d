"""Plain-text response body for a finished check."""

import json
from typing import Any


def render_value(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


def render_result(value: Any) -> str:
    return f"QueryResult: {render_value(value)}\n"
