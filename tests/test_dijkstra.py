from __future__ import annotations

import math
import random

import pytest

from algorithms import InvalidSourceError, dijkstra
from graph import Edge, Graph, Node

from conftest import A, B, C, D, E, brute_force_distances


def random_graph(seed: int, max_nodes: int = 8, p: float = 0.4) -> Graph:
    rng = random.Random(seed)
    n = rng.randint(1, max_nodes)
    g = Graph()
    for i in range(n):
        g.create_node(label=chr(65 + i), node_id=f"n{i}")
    for i in range(n):
        for j in range(i + 1, n):
            if rng.random() < p:
                g.create_edge(f"n{i}", f"n{j}", weight=rng.randint(0, 9))
    return g


def test_sample_scenario_distances(sample_graph: Graph) -> None:
    result = dijkstra(sample_graph, A)
    assert result.distances == {A: 0, B: 4, C: 7, D: 2, E: 5}
    assert result.predecessors == {A: None, B: A, C: B, D: A, E: B}
    assert not result.has_negative_cycle


def test_one_step_per_visit_plus_final(sample_graph: Graph) -> None:
    steps = dijkstra(sample_graph, A).steps
    assert len(steps) == 6
    assert [s.current_node for s in steps] == [A, D, B, E, C, None]
    assert [s.step_number for s in steps] == list(range(6))
    assert steps[-1].is_final and not any(s.is_final for s in steps[:-1])
    assert steps[-1].visited == frozenset({A, B, C, D, E})


def test_visit_step_records_every_relaxation(sample_graph: Graph) -> None:
    first = dijkstra(sample_graph, A).steps[0]
    assert first.visited == frozenset({A})
    assert [(u.node, u.new_distance) for u in first.distance_updates] == [(B, 4), (D, 2)]
    assert [(r.source, r.target, r.weight) for r in first.relaxed_edges] == [(A, B, 4), (A, D, 2)]
    assert "Visit 'A'" in first.description


def test_visit_without_improvement(sample_graph: Graph) -> None:
    visit_e = dijkstra(sample_graph, A).steps[3]
    assert visit_e.current_node == E
    assert visit_e.distance_updates == ()
    assert "No neighbour distance improved" in visit_e.description


def test_steps_own_their_snapshots(sample_graph: Graph) -> None:
    steps = dijkstra(sample_graph, A).steps
    assert steps[0].distances[E] == math.inf
    assert steps[1].distances[E] == 7
    assert steps[2].distances[E] == 5
    assert steps[0].distances is not steps[1].distances
    assert steps[0].predecessors[E] is None


def test_does_not_mutate_graph(sample_graph: Graph) -> None:
    before = sample_graph.to_dict()
    dijkstra(sample_graph, C)
    assert sample_graph.to_dict() == before


def test_unreachable_nodes_keep_infinity() -> None:
    g = Graph()
    for label in "ABC":
        g.create_node(label=label, node_id=label)
    g.create_edge("A", "B", weight=3)
    result = dijkstra(g, "A")
    assert result.distances["C"] == math.inf
    assert result.predecessors["C"] is None
    assert result.path_to("C") == []
    assert result.path_to("B") == ["A", "B"]
    assert len(result.steps) == 3
    assert "Unreachable: C" in result.steps[-1].description


def test_ties_broken_by_insertion_order() -> None:
    g = Graph()
    for nid in ("S", "X", "Y"):
        g.create_node(node_id=nid)
    g.create_edge("S", "Y", weight=1)
    g.create_edge("S", "X", weight=1)
    assert [s.current_node for s in dijkstra(g, "S").steps] == ["S", "X", "Y", None]


def test_invalid_source_raises_before_any_step(sample_graph: Graph) -> None:
    with pytest.raises(InvalidSourceError, match="node-42"):
        dijkstra(sample_graph, "node-42")


def test_empty_graph_yields_empty_result() -> None:
    result = dijkstra(Graph(), "anything")
    assert result.steps == []
    assert result.distances == {}
    assert result.predecessors == {}


def test_parallel_edges_and_self_loops_are_tolerated() -> None:
    g = Graph.from_lists(
        [Node("A", "a"), Node("B", "b")],
        [Edge("a", "b", 5), Edge("b", "a", 2), Edge("a", "a", 1), Edge("b", "ghost", 1)],
    )
    result = dijkstra(g, "a")
    assert result.distances == {"a": 0, "b": 2}


def test_rerun_is_deterministic(sample_graph: Graph) -> None:
    assert dijkstra(sample_graph, B).steps == dijkstra(sample_graph, B).steps


@pytest.mark.parametrize("seed", range(30))
def test_matches_brute_force_on_small_graphs(seed: int) -> None:
    g = random_graph(seed)
    source = g.node_ids()[seed % g.node_count()]
    result = dijkstra(g, source)
    assert result.distances == brute_force_distances(g, source)
    assert len(result.steps) <= g.node_count() + 1
