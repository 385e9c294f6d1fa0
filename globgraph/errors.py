#!/usr/bin/env python3

"""Exception types raised by globgraph."""

__all__ = [
    "GlobGraphError",
    "EmptyInputError",
    "InternalError",
]


class GlobGraphError(Exception):
    """Base class for every error raised by this package."""


class EmptyInputError(GlobGraphError, ValueError):
    """An empty pattern or path was supplied.

    The matching functions treat this as a plain non-match; it only escapes
    from :func:`globgraph.compiler.compile_pattern`.
    """


class InternalError(GlobGraphError, RuntimeError):
    """A compiled graph is in a state no valid pattern can produce."""
