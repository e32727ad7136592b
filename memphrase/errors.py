#!/usr/bin/env python3
"""
In-band error results.

Generation never raises for a well-typed request. The two "nothing to
generate from" conditions come back as sentinel strings sharing a reserved
prefix, so callers (and the strength scorer) only need one check.
"""

ERROR_PREFIX = "Error:"

NO_CATEGORIES_SELECTED = "Error: Please select at least one word category."
NO_CHARACTER_TYPES = (
    "Error: No character types selected or length is zero for random password."
)


def is_sentinel(value: str) -> bool:
    """True if ``value`` is an error sentinel rather than a generated secret."""
    return isinstance(value, str) and value.startswith(ERROR_PREFIX)


__all__ = [
    "ERROR_PREFIX",
    "NO_CATEGORIES_SELECTED",
    "NO_CHARACTER_TYPES",
    "is_sentinel",
]
