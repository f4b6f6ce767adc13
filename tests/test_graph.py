from __future__ import annotations

import pytest

from graph import (
    DuplicateEdgeError,
    Edge,
    Graph,
    Node,
    SelfLoopError,
    UnknownEdgeError,
    UnknownNodeError,
)

from conftest import A, B, C, D, E


def test_sample_graph_shape(sample_graph: Graph) -> None:
    assert sample_graph.node_ids() == [A, B, C, D, E]
    assert [sample_graph.label_of(n) for n in sample_graph.node_ids()] == list("ABCDE")
    assert sample_graph.edge_count() == 6
    assert sample_graph.get_edge_between(E, C).weight == 2
    assert not sample_graph.has_negative_edges()


def test_neighbours_are_undirected(sample_graph: Graph) -> None:
    from_b = {nbr for nbr, _ in sample_graph.neighbours(B)}
    assert from_b == {A, C, E}
    # edge-6 is stored E -> C but C still sees E
    assert E in {nbr for nbr, _ in sample_graph.neighbours(C)}


def test_create_edge_rejects_duplicates_in_either_direction(sample_graph: Graph) -> None:
    with pytest.raises(DuplicateEdgeError, match="already exists"):
        sample_graph.create_edge(B, A, weight=1)
    assert sample_graph.edge_count() == 6


def test_create_edge_rejects_self_loop_and_unknown_nodes(sample_graph: Graph) -> None:
    with pytest.raises(SelfLoopError):
        sample_graph.create_edge(A, A, weight=1)
    with pytest.raises(UnknownNodeError, match="nope"):
        sample_graph.create_edge(A, "nope", weight=1)


def test_raw_add_edge_accepts_malformed_records() -> None:
    g = Graph.from_lists([Node("A", "a")], [Edge("a", "a", 3, edge_id="loop")])
    assert g.get_edge("loop").is_self_loop
    assert g.degree("a") == 1


def test_remove_node_drops_incident_edges(sample_graph: Graph) -> None:
    sample_graph.remove_node(E)
    assert E not in sample_graph.nodes
    assert all(E not in (e.source, e.target) for e in sample_graph.edges.values())
    assert sample_graph.edge_count() == 3
    assert {nbr for nbr, _ in sample_graph.neighbours(B)} == {A, C}


def test_remove_and_reweight_unknown_edge(sample_graph: Graph) -> None:
    with pytest.raises(UnknownEdgeError):
        sample_graph.remove_edge("edge-99")
    with pytest.raises(UnknownEdgeError):
        sample_graph.set_edge_weight("edge-99", 3)
    sample_graph.set_edge_weight("edge-1", -2.5)
    assert sample_graph.has_negative_edges()


def test_dict_round_trip_keeps_order_and_weights(sample_graph: Graph) -> None:
    clone = Graph.from_dict(sample_graph.to_dict())
    assert clone.node_ids() == sample_graph.node_ids()
    assert clone.to_dict() == sample_graph.to_dict()


def test_label_of_falls_back_to_id() -> None:
    g = Graph()
    g.create_node(node_id="x")
    assert g.label_of("x") == "x"
    assert g.label_of("missing") == "missing"
    assert g.label_of(None) == ""
