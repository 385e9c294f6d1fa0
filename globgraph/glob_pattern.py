"""
Glob matching for absolute paths built on the pattern automaton.

Patterns support ``*``, ``**``, ``?`` and both ``/`` and ``\\`` as separators.
A pattern not starting with a separator matches at any depth, and one
ending with a separator matches everything below that directory.
"""

import os
from typing import Callable, List, Optional

from .compiler import compile_pattern
from .matcher import Matcher, match_graph
from .normalize import CANONICAL_SEPARATOR, normalize, standardize_separators

__all__ = [
    "compile_and_match",
    "make_matcher",
    "match",
    "filter",
    "find",
]


def compile_and_match(
    normalized_pattern: str,
    normalized_path: str,
    *,
    memoize: bool = True,
) -> bool:
    """
    Compile a normalized pattern and match a normalized path against it.

    Args:
        normalized_pattern: Output of :func:`globgraph.normalize.normalize`
        normalized_path: Output of :func:`globgraph.normalize.normalize`
        memoize: Skip already explored search states

    Returns:
        True if the path matches; False for no match or an empty argument
    """
    if not normalized_pattern or not normalized_path:
        return False
    graph = compile_pattern(normalized_pattern)
    return match_graph(graph, normalized_path, memoize=memoize)


def make_matcher(
    pattern: str,
    *,
    memoize: bool = True,
) -> Callable[[str], bool]:
    """
    Create a matcher function that matches paths against the given pattern.

    The pattern is compiled once; the returned function only normalizes
    separators in each path before matching.

    Args:
        pattern: The glob pattern to match against
        memoize: Skip already explored search states

    Returns:
        A function that takes a path string and returns True if it matches
    """
    normalized_pattern, _ = normalize(pattern, "")
    if not normalized_pattern:
        return lambda path: False

    compiled = Matcher(compile_pattern(normalized_pattern), memoize=memoize)

    def matcher(path: str) -> bool:
        return compiled.match(standardize_separators(path))

    return matcher


def match(
    pattern: str,
    path: str,
    *,
    memoize: bool = True,
) -> bool:
    """
    Test whether a path matches the given pattern.

    Args:
        pattern: The glob pattern to match against
        path: The path to test
        memoize: Skip already explored search states

    Returns:
        True if the path matches the pattern, False otherwise
    """
    normalized_pattern, normalized_path = normalize(pattern, path)
    return compile_and_match(normalized_pattern, normalized_path, memoize=memoize)


def filter(
    patterns: List[str],
    paths: List[str],
    *,
    memoize: bool = True,
) -> List[str]:
    """
    Filter a list of paths to those that match any of the given patterns.

    Args:
        patterns: List of glob patterns
        paths: List of paths to filter
        memoize: Skip already explored search states

    Returns:
        List of paths that match any of the patterns, in their original order
    """
    matchers = [make_matcher(pattern, memoize=memoize) for pattern in patterns]
    return [path for path in paths if any(matcher(path) for matcher in matchers)]


def find(
    patterns: List[str],
    root: str,
    paths: Optional[List[str]] = None,
    *,
    memoize: bool = True,
) -> List[str]:
    """
    Find all files below ``root`` that match any of the given patterns.

    Each candidate is matched by its path relative to ``root`` with a leading
    ``/``, so ``/src/*.py`` means files directly inside ``root/src``.

    Args:
        patterns: List of glob patterns
        root: Root directory to search (used when paths is None)
        paths: Optional list of relative paths to check instead of walking
            the filesystem
        memoize: Skip already explored search states

    Returns:
        List of matching paths joined onto ``root``
    """
    result: List[str] = []
    matchers = [make_matcher(pattern, memoize=memoize) for pattern in patterns]

    def rooted(rel_path: str) -> str:
        rel_path = standardize_separators(rel_path)
        if rel_path.startswith(CANONICAL_SEPARATOR):
            return rel_path
        return CANONICAL_SEPARATOR + rel_path

    if paths is not None:
        # Use provided paths instead of walking filesystem
        for path in paths:
            if any(matcher(rooted(path)) for matcher in matchers):
                result.append(os.path.join(root, path) if root else path)
        return result

    # Walk filesystem
    for dirpath, _, filenames in os.walk(root):
        rel_dirpath = os.path.relpath(dirpath, root)
        if rel_dirpath == ".":
            rel_dirpath = ""

        for filename in sorted(filenames):
            rel_path = os.path.join(rel_dirpath, filename)
            if any(matcher(rooted(rel_path)) for matcher in matchers):
                result.append(os.path.join(dirpath, filename))

    return result
