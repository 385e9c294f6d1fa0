#!/usr/bin/env python3

"""Compile a normalized glob pattern into an automaton graph."""

import logging
from typing import Optional

from .automaton import ACCEPT, Continue, Graph, Symbol
from .errors import EmptyInputError
from .normalize import CANONICAL_SEPARATOR

__all__ = [
    "compile_pattern",
]

log = logging.getLogger(__name__)


def _symbol_is(pattern: str, pos: int, char: str) -> bool:
    return pos < len(pattern) and pattern[pos] == char


def compile_pattern(pattern: str) -> Graph:
    """
    Build the automaton for a normalized pattern.

    Supported syntax:
        /    a path separator; ``/**`` right after it matches any number of
             characters, separators included, and a ``/`` following the
             ``**`` is folded into it
        ?    exactly one character other than a separator
        *    zero or more characters other than a separator
        any other character matches itself

    ``*`` becomes a self-loop on the current node. Each literal that follows a
    ``*`` in the same segment also gets a back-edge to the starred node, so
    a failed attempt at the literal suffix can resume the star one character
    later. ``**`` in the middle of a segment is just two ``*``.

    Args:
        pattern: A pattern produced by :func:`globgraph.normalize.normalize`

    Returns:
        A frozen :class:`Graph` whose node 0 is the start state

    Raises:
        EmptyInputError: If ``pattern`` is empty
    """
    if not pattern:
        raise EmptyInputError("cannot compile an empty pattern")

    graph = Graph()
    current = graph.add_node()
    star_node: Optional[int] = None

    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1

        if c == CANONICAL_SEPARATOR:
            star_node = None
            next_node = graph.add_node()
            graph.add_edge(current, Symbol.literal(c), Continue(next_node))
            current = next_node

            if _symbol_is(pattern, i, "*") and _symbol_is(pattern, i + 1, "*"):
                graph.add_edge(current, Symbol.any_char(), Continue(current))
                star_node = current
                i += 2
                if _symbol_is(pattern, i, CANONICAL_SEPARATOR):
                    i += 1

        elif c == "?":
            next_node = graph.add_node()
            graph.add_edge(current, Symbol.any_segment_char(), Continue(next_node))
            current = next_node
            star_node = None

        elif c == "*":
            graph.add_edge(current, Symbol.any_segment_char(), Continue(current))
            star_node = current

        else:
            next_node = graph.add_node()
            graph.add_edge(current, Symbol.literal(c), Continue(next_node))
            if star_node is not None:
                graph.add_edge(
                    next_node, Symbol.any_segment_char(), Continue(star_node)
                )
            current = next_node

    graph.add_edge(current, Symbol.end_of_input(), ACCEPT)
    graph.freeze()

    log.debug(
        "Compiled %r into %d nodes and %d edges", pattern, len(graph), graph.edge_count
    )
    if log.isEnabledFor(logging.DEBUG):
        log.debug("Transition table:\n%s", graph.describe())
    return graph
