from __future__ import annotations

import json


def parse_error_body(body: str | None) -> dict | None:
    if not body:
        return None
    try:
        data = json.loads(body)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def error_message(body: str | None) -> str | None:
    """Best-effort human message from a raw API error body."""
    data = parse_error_body(body)
    if data is None:
        text = (body or "").strip()
        return text or None
    err = data.get("error")
    if isinstance(err, dict):
        err = err.get("message") or err.get("code")
    for value in (data.get("message"), err, data.get("detail")):
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None
