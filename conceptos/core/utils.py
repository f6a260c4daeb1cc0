"""
Utility helpers shared across routers/services.
"""

import json
from typing import Any

from starlette.requests import Request

from .errors import ParseError


async def read_json_body(request: Request) -> dict[str, Any]:
    """
    Buffer the whole request body and parse it as a JSON object.
    An empty body counts as ``{}``.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ParseError("JSON inválido", context={"mensaje": str(exc)}) from exc
    if not isinstance(data, dict):
        raise ParseError("JSON inválido", context={"mensaje": "Se esperaba un objeto JSON"})
    return data
