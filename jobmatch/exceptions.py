#!/usr/bin/env python3
"""
Custom exceptions for the matching engine.
"""

from typing import Any, Dict, List, Optional


class MatchingError(Exception):
    """Base exception for matching engine errors."""
    pass


class ConfigurationError(MatchingError):
    """Raised when the engine configuration is invalid (weights, tunables, config file)."""
    pass


class InvalidInputError(MatchingError):
    """Raised when an Opportunity or Profile record is structurally invalid.

    Carries the offending record kind and, when available, the pydantic
    error list so callers can report field-level problems.
    """

    def __init__(
        self,
        message: str,
        record: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None
    ):
        super().__init__(message)
        self.record = record
        self.errors = errors or []


def describe_validation_errors(errors: List[Dict[str, Any]], limit: int = 3) -> str:
    """Render the first few pydantic errors as 'field: message' fragments."""
    parts = []
    for err in errors[:limit]:
        loc = ".".join(str(p) for p in err.get('loc', ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    if len(errors) > limit:
        parts.append(f"... {len(errors) - limit} more")
    return "; ".join(parts)
