"""
Response formatter: turns raw query results into JSON-safe values and
printable console text.
"""

import json
from typing import Any

SEPARATOR = "=" * 70


def colour(text, code):
    """ANSI colour wrapper."""
    return f"\033[{code}m{text}\033[0m"


def bold(t):  return colour(t, 1)
def cyan(t):  return colour(t, 36)


def sanitise_value(obj: Any) -> Any:
    """Recursively convert non-JSON-safe types to safe representations."""
    if isinstance(obj, dict):
        return {k: sanitise_value(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [sanitise_value(item) for item in obj]
    if isinstance(obj, bytes):
        try:
            return obj.decode("utf-8")
        except (UnicodeDecodeError, ValueError):
            return f"[binary {len(obj)} bytes]"
    if isinstance(obj, (int, float, str, bool, type(None))):
        return obj
    # datetime, ObjectId, Decimal128, etc.
    return str(obj)


def format_result(result: Any) -> str:
    """Serialise a step result as indented JSON text."""
    return json.dumps(sanitise_value(result), indent=2, ensure_ascii=False)


def print_step(step: int, label: str, result: Any) -> None:
    print(f"\n{bold(f'[{step}] {label}')}")
    print(format_result(result))
