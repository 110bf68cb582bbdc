from __future__ import annotations

import logging
from typing import Any, Optional

from flask import jsonify, request

logger = logging.getLogger(__name__)


def request_data() -> dict:
    """JSON body if present, otherwise form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def as_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "on", "yes"}


def optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def message(text: str, category: str = "success", status: int = 200, **extra):
    """Flash-style JSON message: {success, category, message, ...}."""
    body = {"success": category == "success", "category": category, "message": text}
    body.update(extra)
    return jsonify(body), status


def system_error(context: str):
    logger.exception("Unexpected error while %s", context)
    return message(f"System error while {context}", "danger", 500)
