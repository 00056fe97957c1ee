from __future__ import annotations

from datetime import datetime, timezone


def format_amount(cents: int | None, currency: str | None = None) -> str:
    if cents is None:
        return "-"
    sign = "-" if cents < 0 else ""
    whole, frac = divmod(abs(int(cents)), 100)
    text = f"{sign}{whole}.{frac:02d}"
    return f"{text} {currency}" if currency else text


def format_list_timestamp(value: datetime | str | None) -> str:
    if value is None or value == "":
        return "-"
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value)
        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return text
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%d %H:%M:%SZ")
