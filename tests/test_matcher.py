"""
Tests for the backtracking matcher.
"""

import itertools

import pytest

from globgraph.automaton import ACCEPT, END, Graph, Symbol, SymbolKind
from globgraph.compiler import compile_pattern
from globgraph.errors import InternalError
from globgraph.matcher import Matcher, match_graph


def compiled(pattern):
    return compile_pattern(pattern)


def test_symbol_accepts():
    assert Symbol.literal("a").accepts("a")
    assert not Symbol.literal("a").accepts("b")
    assert not Symbol.literal("a").accepts(END)

    assert Symbol.end_of_input().accepts(END)
    assert not Symbol.end_of_input().accepts("a")

    assert Symbol.any_segment_char().accepts("a")
    assert not Symbol.any_segment_char().accepts("/")
    assert not Symbol.any_segment_char().accepts(END)

    assert Symbol.any_char().accepts("a")
    assert Symbol.any_char().accepts("/")
    assert Symbol.any_char().accepts(END)


def test_nul_character_is_not_end_of_input():
    assert not Symbol.end_of_input().accepts("\0")
    assert not match_graph(compiled("/a"), "/a\0")


def test_unknown_symbol_kind_is_internal_error():
    with pytest.raises(InternalError):
        Symbol(99).accepts("a")


def test_unknown_symbol_kind_surfaces_from_match():
    graph = Graph()
    graph.add_node()
    graph.add_edge(0, Symbol(99), ACCEPT)
    graph.freeze()
    with pytest.raises(InternalError):
        match_graph(graph, "/a")


def test_empty_path_or_missing_graph_is_no_match():
    assert not match_graph(compiled("/**"), "")
    assert not match_graph(None, "/a")


def test_graph_without_nodes_is_internal_error():
    with pytest.raises(InternalError):
        match_graph(Graph(), "/a")


def test_single_segment_star():
    graph = compiled("/a/b/*.txt")
    assert match_graph(graph, "/a/b/report.txt")
    assert match_graph(graph, "/a/b/.txt")
    assert not match_graph(graph, "/a/b/c/report.txt")
    assert not match_graph(graph, "/a/b/report.txt.bak")


def test_star_retries_literal_suffix():
    graph = compiled("/*ab")
    assert match_graph(graph, "/ab")
    assert match_graph(graph, "/aab")
    assert match_graph(graph, "/abab")
    assert not match_graph(graph, "/aba")


def test_double_star_spans_segments():
    graph = compiled("/a/**/b")
    assert match_graph(graph, "/a/b")
    assert match_graph(graph, "/a/x/b")
    assert match_graph(graph, "/a/x/y/b")
    assert not match_graph(graph, "/a/x/y/c")
    assert not match_graph(graph, "/b")


def test_question_mark():
    graph = compiled("/a/?.txt")
    assert match_graph(graph, "/a/1.txt")
    assert not match_graph(graph, "/a/12.txt")
    assert not match_graph(graph, "/a/.txt")
    assert not match_graph(compiled("/a/?/c"), "/a/bb/c")
    assert not match_graph(compiled("/a?b"), "/a/b")


def test_mid_segment_double_star_stays_in_segment():
    graph = compiled("/a**b")
    assert match_graph(graph, "/ab")
    assert match_graph(graph, "/axyb")
    assert not match_graph(graph, "/ax/b")


def test_match_is_whole_path():
    graph = compiled("/a")
    assert match_graph(graph, "/a")
    assert not match_graph(graph, "/ab")
    assert not match_graph(graph, "/a/")
    assert not match_graph(graph, "a")


def test_matching_leaves_graph_unchanged():
    graph = compiled("/**/*.cpp")
    before = graph.describe()
    first = match_graph(graph, "/src/core/engine.cpp")
    second = match_graph(graph, "/src/core/engine.cpp")
    assert first is second is True
    assert graph.describe() == before


def test_memoized_search_agrees_with_exhaustive_search():
    patterns = ["/*", "/**", "/a/**/b", "/*a*b", "/?*/c", "/**/*.x", "/a**b", "/**b/"]
    paths = ["/", "/a", "/ab", "/a/b", "/a/x/b", "/xa/yb", "/q/c", "/d/e.x", "/b/", "/ab/"]
    for pattern, path in itertools.product(patterns, paths):
        graph = compiled(pattern)
        assert match_graph(graph, path, memoize=True) == match_graph(
            graph, path, memoize=False
        ), (pattern, path)


def test_pathological_pattern_finishes_with_memoization():
    graph = compiled("/" + "*a" * 12 + "*b")
    assert not match_graph(graph, "/" + "a" * 60)
    assert match_graph(graph, "/" + "a" * 60 + "b")


def test_long_path_does_not_hit_recursion_limit():
    graph = compiled("/**/*")
    assert match_graph(graph, "/" + "x" * 5000)
    assert match_graph(graph, "/d" * 2000 + "/leaf")


def test_matcher_wraps_frozen_graph():
    matcher = Matcher(compiled("/**/*.log"))
    assert matcher.match("/var/log/app.log")
    assert matcher("/app.log")
    assert not matcher("/var/log/app.txt")


def test_matcher_requires_frozen_graph():
    graph = Graph()
    graph.add_node()
    with pytest.raises(InternalError):
        Matcher(graph)


def test_priority_order_does_not_change_result():
    # Both a literal and the ** loop accept 'b' at the ** node
    graph = compiled("/**/b")
    assert [edge.symbol.kind for edge in graph[1].edges] == [
        SymbolKind.LITERAL,
        SymbolKind.ANY_CHAR,
    ]
    assert match_graph(graph, "/b/b")
    assert match_graph(graph, "/bb/b")
