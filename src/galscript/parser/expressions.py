"""Identifier extraction from condition and assignment expressions.

Expressions are never evaluated; only the identifiers they reference are
collected so they can be checked against the variable index.
"""

from __future__ import annotations

import re

IDENTIFIER_PATTERN = re.compile(r"\b([A-Za-z_][A-Za-z0-9_]*)\b", re.ASCII)

KEYWORDS = frozenset({"true", "false", "null", "undefined", "and", "or", "not"})

# Identifier-shaped tokens that the script runtime reads as numeric literals
NUMERIC_WORDS = frozenset({"Infinity"})


def extract_identifiers(expression: str) -> list[str]:
    """Return every identifier token in ``expression`` in order of appearance.

    Keywords and numeric words such as ``Infinity`` are skipped. Duplicates are
    kept; callers deduplicate when they need to.
    """
    return [
        token
        for token in IDENTIFIER_PATTERN.findall(expression)
        if token not in KEYWORDS and token not in NUMERIC_WORDS
    ]


def unique_identifiers(expression: str) -> list[str]:
    """Like :func:`extract_identifiers` but each name appears once."""
    return list(dict.fromkeys(extract_identifiers(expression)))


def split_assignment(expression: str) -> tuple[str, str] | None:
    """Split ``name=value`` at the first ``=``.

    Returns:
        Tuple of trimmed (name, value), or None if there is no ``=`` or the
        name is empty
    """
    name, sep, value = expression.partition("=")
    name = name.strip()
    if not sep or not name:
        return None
    return name, value.strip()
