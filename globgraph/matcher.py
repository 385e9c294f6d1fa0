#!/usr/bin/env python3

"""Backtracking search of a compiled pattern graph against a path."""

import logging
from typing import List, Optional, Set, Tuple

from .automaton import END, Accept, Continue, Graph, Outcome, Reject
from .errors import InternalError

__all__ = [
    "match_graph",
    "Matcher",
]

log = logging.getLogger(__name__)


def match_graph(graph: Optional[Graph], path: str, *, memoize: bool = True) -> bool:
    """Check whether ``path`` drives ``graph`` from node 0 to acceptance.

    The search is depth first and tries a node's edges in priority order
    (literal, end of input, segment character, any character), backtracking
    into the next matching edge whenever a branch dies. Frames live on an
    explicit stack, so long paths do not hit the recursion limit.

    Every edge consumes exactly one position, so a ``(node, position)`` pair
    can never lead back to itself. With ``memoize`` set, a pair that was
    already explored is skipped; this bounds the work by
    ``nodes * (len(path) + 1)`` without changing the result.

    Args:
        graph: The compiled pattern, or None if the pattern was empty
        path: The normalized path to test
        memoize: Skip ``(node, position)`` pairs that were already explored

    Returns:
        True if the path matches, False otherwise (including for an empty
        path or a missing graph)
    """
    if not path or graph is None:
        return False
    if len(graph) == 0:
        raise InternalError("graph has no start node")

    length = len(path)
    stack: List[Tuple[Outcome, int]] = [(Continue(0), 0)]
    seen: Set[Tuple[int, int]] = set()
    explored = 0

    while stack:
        target, pos = stack.pop()

        if isinstance(target, Accept):
            log.debug("Matched %r after %d frames", path, explored)
            return True
        if isinstance(target, Reject):
            continue
        if pos > length:
            continue

        if memoize:
            state = (target.node_id, pos)
            if state in seen:
                continue
            seen.add(state)

        explored += 1
        char = path[pos] if pos < length else END
        edges = list(graph[target.node_id].edges_accepting(char))
        # Reversed so the highest priority edge is popped first
        for edge in reversed(edges):
            stack.append((edge.target, pos + 1))

    log.debug("No match for %r after %d frames", path, explored)
    return False


class Matcher:
    """A compiled graph bound to a matching mode, reusable across paths."""

    def __init__(self, graph: Graph, *, memoize: bool = True) -> None:
        if not graph.frozen:
            raise InternalError("Matcher requires a compiled (frozen) graph")
        self.graph = graph
        self.memoize = memoize

    def match(self, path: str) -> bool:
        return match_graph(self.graph, path, memoize=self.memoize)

    def __call__(self, path: str) -> bool:
        return self.match(path)
