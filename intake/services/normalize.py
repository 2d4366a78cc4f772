"""Coerce loosely-typed column values (as returned by remote tables) into Python shapes."""

import json


def to_string_array(value: object) -> list[str]:
    """
    Best-effort conversion of a stored field into a list of strings.

    Accepts a real list (non-strings dropped), a Postgres array literal ("{a,b}"),
    a JSON array string, or a comma-separated string. Anything else yields [].
    """
    if isinstance(value, list):
        return [v for v in value if isinstance(v, str)]
    if not isinstance(value, str):
        return []

    trimmed = value.strip()
    if not trimmed:
        return []

    if trimmed.startswith("{") and trimmed.endswith("}"):
        inner = trimmed[1:-1].strip()
        if not inner:
            return []
        parts = (part.strip().strip('"') for part in inner.split(","))
        return [p for p in parts if p]

    if trimmed.startswith("["):
        try:
            parsed = json.loads(trimmed)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            return [v for v in parsed if isinstance(v, str)]

    return [p for p in (part.strip() for part in trimmed.split(",")) if p]


def to_optional_number(value: object) -> float | None:
    """Return value as float, or None when missing/blank. Numeric strings are parsed."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("boolean is not a valid amount")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        if not value.strip():
            return None
        return float(value.strip())
    raise ValueError(f"expected a number, got {type(value).__name__}")
