"""Inline completion suggestions from fuzzy match results."""

from __future__ import annotations

import string
from typing import Optional, Sequence

from steply.fuzzy import FuzzyMatch

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def suggest(
    query: str, matches: Sequence[FuzzyMatch], candidates: Sequence[str]
) -> Optional[str]:
    """Return the best candidate if it starts with ``query``, ignoring ASCII case."""
    if not query.strip():
        return None
    if not matches:
        return None
    best = matches[0]
    if not 0 <= best.index < len(candidates):
        return None
    candidate = candidates[best.index]
    if candidate.translate(_ASCII_LOWER).startswith(query.translate(_ASCII_LOWER)):
        return candidate
    return None