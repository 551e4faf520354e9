import random

import pytest

from errors import ConfigError
from graph import Edge, Graph, node_label


def _is_connected(graph):
    ids = graph.node_ids()
    if not ids:
        return True
    seen, stack = {ids[0]}, [ids[0]]
    while stack:
        for v, _ in graph.neighbours(stack.pop()):
            if v not in seen:
                seen.add(v)
                stack.append(v)
    return len(seen) == len(ids)


def _has_cycle(graph):
    colour = {n: 0 for n in graph.node_ids()}

    def visit(u):
        colour[u] = 1
        for v, _ in graph.neighbours(u):
            if colour[v] == 1 or (colour[v] == 0 and visit(v)):
                return True
        colour[u] = 2
        return False

    return any(colour[n] == 0 and visit(n) for n in graph.node_ids())


# ---------------------------------------------------------------------------
# Construction & queries
# ---------------------------------------------------------------------------
def test_node_labels_are_letters():
    assert [node_label(i) for i in range(3)] == ["A", "B", "C"]


def test_undirected_edge_is_symmetric():
    g = Graph()
    g.add_edge("A", "B", 7)
    assert g.weight("A", "B") == 7
    assert g.weight("B", "A") == 7
    assert g.edge_count() == 1
    assert len(g.edge_list()) == 2


def test_directed_edge_is_one_way():
    g = Graph(directed=True)
    g.add_edge("A", "B", 7)
    assert g.has_edge("A", "B")
    assert not g.has_edge("B", "A")
    assert g.edge_list() == [Edge("A", "B", 7)]


def test_unique_edges_keeps_first_occurrence():
    g = Graph()
    g.add_edge("A", "B", 1)
    g.add_edge("B", "C", 2)
    assert g.unique_edges() == [Edge("A", "B", 1), Edge("B", "C", 2)]


def test_has_negative_edges():
    g = Graph()
    g.add_edge("A", "B", 1)
    assert not g.has_negative_edges()
    g.add_edge("B", "C", -1)
    assert g.has_negative_edges()


def test_dict_round_trip_preserves_edges():
    g = Graph.generate_connected(6, 3, rng=random.Random(2))
    clone = Graph.from_dict(g.to_dict())
    assert clone.node_ids() == g.node_ids()
    assert clone.unique_edges() == g.unique_edges()


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("n, extra", [(1, 0), (2, 5), (10, 4), (26, 30)])
def test_generate_connected(n, extra):
    g = Graph.generate_connected(n, extra, rng=random.Random(n))
    assert g.node_ids() == [node_label(i) for i in range(n)]
    assert _is_connected(g)
    max_extra = n * (n - 1) // 2 - (n - 1)
    assert g.edge_count() == (n - 1) + min(extra, max_extra)
    assert all(1 <= e.weight <= 20 for e in g.edge_list())


def test_generate_connected_is_reproducible_from_seed():
    a = Graph.generate_connected(8, 4, rng=random.Random(99))
    b = Graph.generate_connected(8, 4, rng=random.Random(99))
    assert a.unique_edges() == b.unique_edges()


def test_negative_weight_generator_keeps_positive_backbone():
    g = Graph.generate_with_negative_weights(8, 12, rng=random.Random(4))
    assert _is_connected(g)
    assert all(-10 <= e.weight <= 15 for e in g.edge_list())


@pytest.mark.parametrize("seed", range(5))
def test_generate_dag_is_acyclic(seed):
    g = Graph.generate_dag(10, 5, rng=random.Random(seed))
    assert g.directed
    assert not _has_cycle(g)
    for e in g.edge_list():
        assert e.u < e.v


@pytest.mark.parametrize("seed", range(5))
def test_generate_with_cycle_has_a_cycle(seed):
    g = Graph.generate_with_cycle(10, 3, rng=random.Random(seed))
    assert _has_cycle(g)


def test_generate_with_cycle_small_graph_stays_acyclic():
    g = Graph.generate_with_cycle(2, 0, rng=random.Random(0))
    assert not _has_cycle(g)


# ---------------------------------------------------------------------------
# Adjacency-list text
# ---------------------------------------------------------------------------
def test_parse_colon_format_with_default_weight():
    g = Graph.from_adjacency_list("A: B C\nB: C(4)")
    assert g.weight("A", "B") == 1
    assert g.weight("C", "B") == 4
    assert g.node_ids() == ["A", "B", "C"]


def test_parse_arrow_formats():
    g = Graph.from_adjacency_list("A -> B(3), C(-2)\nC → A(5)", directed=True)
    assert g.weight("A", "B") == 3
    assert g.weight("A", "C") == -2
    assert g.weight("C", "A") == 5


def test_parse_skips_blank_and_comment_lines():
    g = Graph.from_adjacency_list("# demo\n\nA: B\n")
    assert g.node_count() == 2


def test_parse_first_undirected_weight_wins():
    g = Graph.from_adjacency_list("A: B(2)\nB: A(9)")
    assert g.weight("B", "A") == 2


@pytest.mark.parametrize("text", ["A B C", "A: B(x)"])
def test_parse_errors(text):
    with pytest.raises(ConfigError):
        Graph.from_adjacency_list(text)
