#!/usr/bin/env python3

"""Graph representation of a compiled glob pattern.

A pattern compiles to a list of nodes. Each node owns a list of edges, and
each edge pairs a :class:`Symbol` (which input character it consumes) with
the :class:`Outcome` of taking it: either another node, or acceptance.
Node ids are indexes into the graph and stay valid for its whole lifetime.
"""

import enum
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Union

from .errors import InternalError
from .normalize import CANONICAL_SEPARATOR

__all__ = [
    "END",
    "SymbolKind",
    "Symbol",
    "Accept",
    "Reject",
    "Continue",
    "Outcome",
    "ACCEPT",
    "REJECT",
    "Edge",
    "Node",
    "Graph",
]

# Stands for the position one past the last character of a path.
END = None


class SymbolKind(enum.IntEnum):
    """Kinds of symbol, in the order edges are tried."""

    LITERAL = 0
    END_OF_INPUT = 1
    ANY_SEGMENT_CHAR = 2
    ANY_CHAR = 3


@dataclass(frozen=True)
class Symbol:
    """What a single edge accepts from the input."""

    kind: SymbolKind
    char: Optional[str] = None

    @classmethod
    def literal(cls, char: str) -> "Symbol":
        return cls(SymbolKind.LITERAL, char)

    @classmethod
    def end_of_input(cls) -> "Symbol":
        return cls(SymbolKind.END_OF_INPUT)

    @classmethod
    def any_segment_char(cls) -> "Symbol":
        return cls(SymbolKind.ANY_SEGMENT_CHAR)

    @classmethod
    def any_char(cls) -> "Symbol":
        return cls(SymbolKind.ANY_CHAR)

    def accepts(self, char: Optional[str]) -> bool:
        """Check whether this symbol consumes ``char`` (``END`` at end of input)."""
        if self.kind is SymbolKind.LITERAL:
            return char is not END and char == self.char
        if self.kind is SymbolKind.END_OF_INPUT:
            return char is END
        if self.kind is SymbolKind.ANY_SEGMENT_CHAR:
            return char is not END and char != CANONICAL_SEPARATOR
        if self.kind is SymbolKind.ANY_CHAR:
            return True
        raise InternalError(f"unexpected symbol kind {self.kind!r}")

    def __str__(self) -> str:
        if self.kind is SymbolKind.LITERAL:
            return repr(self.char)
        if self.kind is SymbolKind.END_OF_INPUT:
            return "<end>"
        if self.kind is SymbolKind.ANY_SEGMENT_CHAR:
            return "<segment-char>"
        return "<any>"


@dataclass(frozen=True)
class Accept:
    def __str__(self) -> str:
        return "ACCEPT"


@dataclass(frozen=True)
class Reject:
    def __str__(self) -> str:
        return "REJECT"


@dataclass(frozen=True)
class Continue:
    node_id: int

    def __str__(self) -> str:
        return str(self.node_id)


Outcome = Union[Accept, Reject, Continue]

ACCEPT = Accept()
# Never stored on an edge; only used as a "nothing to follow" result.
REJECT = Reject()


@dataclass(frozen=True)
class Edge:
    symbol: Symbol
    target: Outcome


@dataclass
class Node:
    """A state of the automaton with its edges sorted by symbol priority."""

    edges: List[Edge] = field(default_factory=list)

    def add_edge(self, symbol: Symbol, target: Outcome) -> None:
        self.edges.append(Edge(symbol, target))
        # list.sort is stable, so edges of equal priority keep insertion order
        self.edges.sort(key=lambda edge: edge.symbol.kind)

    def edges_accepting(self, char: Optional[str]) -> Iterator[Edge]:
        """Yield, in priority order, the edges that consume ``char``."""
        for edge in self.edges:
            if edge.symbol.accepts(char):
                yield edge


class Graph:
    """Append-only arena of nodes; node 0 is the start state."""

    def __init__(self) -> None:
        self._nodes: List[Node] = []
        self._frozen = False

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, node_id: int) -> Node:
        return self._nodes[node_id]

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def last_node_id(self) -> int:
        return len(self._nodes) - 1

    @property
    def edge_count(self) -> int:
        return sum(len(node.edges) for node in self._nodes)

    def add_node(self) -> int:
        """Append a new node and return its id."""
        self._check_mutable()
        self._nodes.append(Node())
        return self.last_node_id

    def add_edge(self, from_id: int, symbol: Symbol, target: Outcome) -> None:
        self._check_mutable()
        if isinstance(target, Reject):
            raise InternalError("REJECT cannot be stored as an edge target")
        self._nodes[from_id].add_edge(symbol, target)

    def freeze(self) -> "Graph":
        """Mark the graph read-only. Returns the graph for chaining."""
        self._frozen = True
        return self

    def _check_mutable(self) -> None:
        if self._frozen:
            raise InternalError("compiled graph cannot be modified")

    def describe(self) -> str:
        """Render the transition table, one edge per row."""
        rows = [("node", "symbol", "target")]
        for node_id, node in enumerate(self._nodes):
            for edge in node.edges:
                rows.append((str(node_id), str(edge.symbol), str(edge.target)))

        widths = [max(len(row[col]) for row in rows) for col in range(3)]
        lines = [
            "  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()
            for row in rows
        ]
        return "\n".join(lines)
