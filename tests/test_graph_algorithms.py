import heapq
import random

import pytest

from algorithms import bellman_ford, dijkstra, kruskal, topological_sort
from algorithms.dijkstra import reconstruct_path
from algorithms.kruskal import find
from graph import Graph
from conftest import graph_problem, run

INF = float("inf")


# ---------------------------------------------------------------------------
# Reference implementations
# ---------------------------------------------------------------------------
def _reference_distances(graph, source):
    dist = {n: INF for n in graph.node_ids()}
    dist[source] = 0
    for _ in range(graph.node_count()):
        for e in graph.edge_list():
            if dist[e.u] + e.weight < dist[e.v]:
                dist[e.v] = dist[e.u] + e.weight
    return dist


def _prim_weight(graph):
    ids = graph.node_ids()
    seen, total = {ids[0]}, 0
    frontier = [(w, v) for v, w in graph.neighbours(ids[0])]
    heapq.heapify(frontier)
    while frontier and len(seen) < len(ids):
        w, v = heapq.heappop(frontier)
        if v in seen:
            continue
        seen.add(v)
        total += w
        for nxt, nw in graph.neighbours(v):
            if nxt not in seen:
                heapq.heappush(frontier, (nw, nxt))
    return total


def _random_graphs():
    return [
        Graph.generate_connected(n, extra, rng=random.Random(seed))
        for seed, (n, extra) in enumerate([(2, 0), (5, 2), (8, 6), (12, 10), (20, 15)])
    ]


# ---------------------------------------------------------------------------
# Dijkstra
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("graph", _random_graphs(), ids=repr)
def test_dijkstra_distances_match_reference(graph):
    problem = graph_problem(graph, start="A", end=None)
    final, _ = run(dijkstra.step, dijkstra.initial_state(problem), problem)

    assert final.outcome == "done"
    assert final.distances == _reference_distances(graph, "A")
    assert final.visited == frozenset(graph.node_ids())


@pytest.mark.parametrize("graph", _random_graphs(), ids=repr)
def test_dijkstra_path_to_end_is_shortest(graph):
    end = graph.node_ids()[-1]
    problem = graph_problem(graph, start="A", end=end)
    final, _ = run(dijkstra.step, dijkstra.initial_state(problem), problem)

    assert final.outcome == "path_found"
    assert final.path[0] == "A" and final.path[-1] == end
    length = sum(graph.weight(a, b) for a, b in zip(final.path, final.path[1:]))
    assert length == _reference_distances(graph, "A")[end]


def test_dijkstra_small_example():
    graph = Graph.from_adjacency_list("A: B(4) C(1)\nC: B(2)\nB: D(5)")
    problem = graph_problem(graph, start="A", end="D")
    final, _ = run(dijkstra.step, dijkstra.initial_state(problem), problem)

    assert final.path == ("A", "C", "B", "D")
    assert final.distances["D"] == 8


def test_dijkstra_unreachable_end():
    graph = Graph.from_adjacency_list("A: B(2)\nC: D(1)")
    problem = graph_problem(graph, start="A", end="D")
    final, _ = run(dijkstra.step, dijkstra.initial_state(problem), problem)

    assert final.is_done
    assert final.path == ()
    assert final.distances["D"] == INF
    assert final.outcome == "done"


def test_dijkstra_start_equals_end():
    graph = Graph.from_adjacency_list("A: B(2)")
    problem = graph_problem(graph, start="A", end="A")
    final, steps = run(dijkstra.step, dijkstra.initial_state(problem), problem)
    assert final.path == ("A",)
    assert steps == 2


def test_dijkstra_first_step_seeds_queue():
    graph = Graph.from_adjacency_list("A: B(2)")
    problem = graph_problem(graph, start="A", end="B")
    state = dijkstra.step(dijkstra.initial_state(problem), problem)
    assert state.distances == {"A": 0, "B": INF}
    assert state.pq == ((0, "A"),)


def test_reconstruct_path_without_route():
    assert reconstruct_path({"A": None, "B": None}, "A", "B") == ()


# ---------------------------------------------------------------------------
# Bellman-Ford
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("graph", _random_graphs(), ids=repr)
def test_bellman_ford_matches_reference_without_negative_edges(graph):
    problem = graph_problem(graph, algorithm="bellman_ford")
    final, _ = run(bellman_ford.step, bellman_ford.initial_state(problem), problem)

    assert final.outcome == "done"
    assert final.distances == _reference_distances(graph, "A")


def test_bellman_ford_negative_edge_in_directed_graph():
    graph = Graph.from_adjacency_list("A -> B(4), C(2)\nC -> B(-3)", directed=True)
    problem = graph_problem(graph, algorithm="bellman_ford")
    final, _ = run(bellman_ford.step, bellman_ford.initial_state(problem), problem)

    assert final.outcome == "done"
    assert final.distances == {"A": 0, "B": -1, "C": 2}
    assert final.predecessors["B"] == "C"


def test_bellman_ford_detects_directed_negative_cycle():
    graph = Graph.from_adjacency_list("A -> B(1)\nB -> C(-2)\nC -> B(1)", directed=True)
    problem = graph_problem(graph, algorithm="bellman_ford")
    final, _ = run(bellman_ford.step, bellman_ford.initial_state(problem), problem)

    assert final.phase is bellman_ford.Phase.DONE
    assert final.outcome == "negative_cycle"
    assert final.has_negative_cycle
    assert final.negative_cycle[0] == final.negative_cycle[-1]
    assert set(final.negative_cycle) == {"B", "C"}


def test_bellman_ford_undirected_negative_edge_is_a_cycle():
    graph = Graph.from_adjacency_list("A: B(4) C(2)\nB: C(-3)")
    problem = graph_problem(graph, algorithm="bellman_ford")
    final, _ = run(bellman_ford.step, bellman_ford.initial_state(problem), problem)
    assert final.outcome == "negative_cycle"


def test_bellman_ford_unreachable_nodes_stay_infinite():
    graph = Graph.from_adjacency_list("A: B(3)\nC: D(1)")
    problem = graph_problem(graph, algorithm="bellman_ford")
    final, _ = run(bellman_ford.step, bellman_ford.initial_state(problem), problem)
    assert final.distances["C"] == INF
    assert final.distances["D"] == INF


def test_bellman_ford_runs_v_minus_one_passes():
    graph = Graph.from_adjacency_list("A: B(1)\nB: C(1)")
    problem = graph_problem(graph, algorithm="bellman_ford")
    state = bellman_ford.initial_state(problem)
    edges = len(graph.edge_list())
    # IDLE + 2 passes + 2 pass boundaries + checking pass + final
    final, steps = run(bellman_ford.step, state, problem)
    assert steps == 1 + 3 * edges + 2 + 1
    assert final.iteration == 3


# ---------------------------------------------------------------------------
# Kruskal
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("graph", _random_graphs(), ids=repr)
def test_kruskal_weight_matches_prim(graph):
    problem = graph_problem(graph, algorithm="kruskal")
    final, _ = run(kruskal.step, kruskal.initial_state(problem), problem)

    assert final.is_done
    assert len(final.mst) == graph.node_count() - 1
    assert final.mst_weight == _prim_weight(graph)
    assert final.mst_weight == sum(e.weight for e in final.mst)


def test_kruskal_rejects_cycle_edge():
    graph = Graph.from_adjacency_list("A: B(1) C(3)\nB: C(2)\nC: D(4)")
    problem = graph_problem(graph, algorithm="kruskal")
    final, _ = run(kruskal.step, kruskal.initial_state(problem), problem)

    taken = {(e.u, e.v) for e in final.mst}
    assert taken == {("A", "B"), ("B", "C"), ("C", "D")}
    assert [(e.u, e.v) for e in final.rejected] == [("A", "C")]
    assert final.mst_weight == 7


def test_kruskal_stops_on_the_step_that_takes_the_last_edge():
    graph = Graph.from_adjacency_list("A: B(1) C(3)\nB: C(2)\nC: D(4)")
    problem = graph_problem(graph, algorithm="kruskal")
    final, steps = run(kruskal.step, kruskal.initial_state(problem), problem)

    # AB, BC taken; AC skipped; CD taken and finishes
    assert steps == 4
    assert final.edge_highlight == ("C", "D")
    assert kruskal.step(final, problem) is final


def test_kruskal_edges_sorted_and_deduplicated():
    graph = Graph.from_adjacency_list("A: B(5) C(1)\nB: C(3)")
    state = kruskal.initial_state(graph_problem(graph, algorithm="kruskal"))
    assert [e.weight for e in state.sorted_edges] == [1, 3, 5]


def test_kruskal_disconnected_graph_gives_forest():
    graph = Graph.from_adjacency_list("A: B(2)\nC: D(1)")
    problem = graph_problem(graph, algorithm="kruskal")
    final, _ = run(kruskal.step, kruskal.initial_state(problem), problem)
    assert len(final.mst) == 2
    assert final.mst_weight == 3


def test_find_compresses_path():
    parent = {"A": "A", "B": "A", "C": "B", "D": "C"}
    assert find(parent, "D") == "A"
    assert parent["D"] == "A" and parent["C"] == "A"


# ---------------------------------------------------------------------------
# Topological sort
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("seed", range(5))
def test_topological_order_respects_every_edge(seed):
    graph = Graph.generate_dag(10, 6, rng=random.Random(seed))
    problem = graph_problem(graph, algorithm="topological_sort")
    final, _ = run(topological_sort.step, topological_sort.initial_state(problem), problem)

    assert final.outcome == "done"
    assert sorted(final.result) == graph.node_ids()
    position = {n: i for i, n in enumerate(final.result)}
    for e in graph.edge_list():
        assert position[e.u] < position[e.v]


def test_topological_sort_reports_four_node_cycle():
    graph = Graph.from_adjacency_list("A -> B\nB -> C\nC -> D\nD -> A", directed=True)
    problem = graph_problem(graph, algorithm="topological_sort")
    state = topological_sort.initial_state(problem)

    queues = []
    while not state.is_done:
        state = topological_sort.step(state, problem)
        queues.append(state.queue)

    assert all(q == () for q in queues)
    assert state.result == ()
    assert state.cycle_nodes == ("A", "B", "C", "D")
    assert state.outcome == "cycle"


def test_topological_sort_partial_order_before_cycle():
    graph = Graph.from_adjacency_list("S -> A\nA -> B\nB -> A", directed=True)
    problem = graph_problem(graph, start=None, algorithm="topological_sort")
    final, _ = run(topological_sort.step, topological_sort.initial_state(problem), problem)
    assert final.result == ("S",)
    assert final.cycle_nodes == ("A", "B")


@pytest.mark.parametrize("seed", range(3))
def test_generated_cyclic_graph_is_detected(seed):
    graph = Graph.generate_with_cycle(8, 3, rng=random.Random(seed))
    problem = graph_problem(graph, algorithm="topological_sort")
    final, _ = run(topological_sort.step, topological_sort.initial_state(problem), problem)
    assert final.outcome == "cycle"
