"""CSV value normalization — handles BOM, trailing spaces, decimal commas."""

from __future__ import annotations

import re


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Removes BOM characters (\\ufeff)
    - Strips leading/trailing whitespace
    - Replaces runs of spaces / non-breaking spaces with a single underscore
    - Lowercases
    - Strips non-alphanumeric characters (except underscore)
    """
    name = name.replace("\ufeff", "")
    name = name.strip()
    name = re.sub(r"[\s\u00a0]+", "_", name)
    name = name.lower()
    name = re.sub(r"[^\w]", "", name, flags=re.UNICODE)
    return name


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def parse_float(value: str | None) -> float | None:
    """Parse a float, accepting ',' as decimal separator. None if unparsable."""
    if not value:
        return None
    try:
        return float(value.replace(",", ".").strip())
    except ValueError:
        return None
