#!/usr/bin/env python3

"""Rewriting of raw patterns and paths into the form the compiler expects."""

from typing import Tuple

__all__ = [
    "CANONICAL_SEPARATOR",
    "ALTERNATE_SEPARATORS",
    "standardize_separators",
    "standardize_pattern",
    "normalize",
    "is_normalized",
]

CANONICAL_SEPARATOR = "/"
ALTERNATE_SEPARATORS = ("\\",)

ANY_DEPTH = "**"


def standardize_separators(text: str) -> str:
    """Replace every alternate separator with ``/``."""
    for separator in ALTERNATE_SEPARATORS:
        text = text.replace(separator, CANONICAL_SEPARATOR)
    return text


def standardize_pattern(pattern: str) -> str:
    """Anchor a pattern so it matches a whole absolute path.

    A pattern that does not start with ``/`` may match at any depth, so it
    gets a ``/**/`` prefix (or just ``/`` when it already begins with
    ``**``). A pattern ending in ``/`` covers everything below that
    directory and gets a ``**`` suffix.

    Args:
        pattern: Pattern with separators already standardized

    Returns:
        The anchored pattern. An empty pattern is returned unchanged.
    """
    if not pattern:
        return pattern

    if not pattern.startswith(CANONICAL_SEPARATOR):
        if pattern.startswith(ANY_DEPTH):
            pattern = CANONICAL_SEPARATOR + pattern
        else:
            pattern = CANONICAL_SEPARATOR + ANY_DEPTH + CANONICAL_SEPARATOR + pattern

    if pattern.endswith(CANONICAL_SEPARATOR):
        pattern += ANY_DEPTH

    return pattern


def normalize(pattern: str, path: str) -> Tuple[str, str]:
    """Normalize a pattern and the path it will be matched against.

    Returns:
        ``(normalized_pattern, normalized_path)``
    """
    pattern = standardize_pattern(standardize_separators(pattern))
    path = standardize_separators(path)
    return pattern, path


def is_normalized(pattern: str) -> bool:
    """Check whether ``pattern`` is already in normalized form."""
    standardized = standardize_separators(pattern)
    return standardized == pattern and standardize_pattern(standardized) == pattern
