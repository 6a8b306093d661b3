"""Turning user input into cache keys."""

from typing import Iterable

from recipe_finder.errors import UsageError
from recipe_finder.models import NormalizedQuery


def parse_ingredients(raw: str) -> list[str]:
    """Split a comma-separated ingredient list, dropping blank entries."""
    return [name.strip() for name in raw.split(",") if name.strip()]


def normalize(raw_names: Iterable[str]) -> NormalizedQuery:
    """Canonical cache key for an ingredient list.

    Names are lowercased and trimmed before deduplication, so
    "Flour, apples" and "apples,flour,APPLES" share one key.
    """
    names = sorted({name.strip().lower() for name in raw_names} - {""})
    if not names:
        raise UsageError("At least one ingredient is required.")
    return ",".join(names)
