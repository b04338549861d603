import math
import re
from typing import Any, Iterable, List, Optional

_WHITESPACE = re.compile(r"\s+")


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def clamp01(x: float) -> float:
    return clamp(x, 0.0, 1.0)


def round_half_up(x: float) -> int:
    """Round to the nearest integer with .5 going up (banker's rounding is not wanted for scores)."""
    return int(math.floor(x + 0.5))


def normalize_text(value: Any) -> str:
    """Lowercase, trim and collapse internal whitespace. None becomes ''."""
    if value is None:
        return ""
    return _WHITESPACE.sub(" ", str(value)).strip().lower()


def normalize_terms(values: Optional[Iterable[Any]]) -> List[str]:
    """
    Normalize a collection of free-text terms (skills, industries, ...).

    Blank entries are dropped and duplicates removed while keeping first-seen
    order, so downstream scoring stays deterministic.
    """
    seen = set()
    result = []
    for value in values or []:
        term = normalize_text(value)
        if term and term not in seen:
            seen.add(term)
            result.append(term)
    return result


def contains_either_way(a: str, b: str) -> bool:
    """True if either normalized string contains the other. Empty strings never match."""
    if not a or not b:
        return False
    return a in b or b in a


def normalize_location(location: Any) -> str:
    """
    Normalize location data which can be a dict, string, or list into one
    lowercase search string.
    """
    if location is None:
        return ""
    if isinstance(location, dict):
        parts = [location.get(k) for k in ('text', 'city', 'region', 'country')]
        return normalize_text(" ".join(str(p) for p in parts if p))
    if isinstance(location, (list, tuple)):
        return normalize_text(" ".join(str(p) for p in location if p))
    return normalize_text(location)
