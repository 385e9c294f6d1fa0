#!/usr/bin/env python3

from .automaton import Graph, Symbol, SymbolKind
from .compiler import compile_pattern
from .errors import EmptyInputError, GlobGraphError, InternalError
from .glob_pattern import compile_and_match, make_matcher, match
from .main import cli, configure_logging
from .matcher import Matcher, match_graph
from .normalize import normalize

__all__ = [
    "Graph",
    "Symbol",
    "SymbolKind",
    "compile_pattern",
    "EmptyInputError",
    "GlobGraphError",
    "InternalError",
    "compile_and_match",
    "make_matcher",
    "match",
    "cli",
    "configure_logging",
    "Matcher",
    "match_graph",
    "normalize",
]
