# src/packages/itinerary_core/utils.py
import asyncio
import re
from typing import Any

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def truncate(s: str, n: int = 600) -> str:
    if s is None:
        return ""
    s = str(s)
    return s if len(s) <= n else s[: n - 1] + "…"


def scalar_text(value: Any) -> Any:
    """Renders numbers and booleans as they would read inside a template string."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return value


def positive_int(value: Any, default: int) -> int:
    """
    Reads an integer the way a browser's parseInt would (leading digits of a
    string, truncated floats) and falls back to `default` unless the result is
    a positive number.
    """
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return default
        number = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            return default
        number = int(match.group(1))
    else:
        return default
    return number if number > 0 else default


async def _close_if_callable(obj: object):
    if obj is None:
        return
    for name in ("aclose", "close"):
        fn = getattr(obj, name, None)
        if callable(fn):
            res = fn()
            if asyncio.iscoroutine(res):
                await res
            return
