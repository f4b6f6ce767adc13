"""
graph.py — Graph Container
==========================
Single source of truth for the node / edge lists handed to the
shortest-path tracers.

Responsibilities:
  1. CRUD on nodes & edges                  (add / remove / get)
  2. Adjacency queries                      (neighbours, get_edge_between, degree)
  3. Label lookup for step descriptions     (label_of)
  4. Serialisation round-trip               (to_dict / from_dict)
  5. The demo graph the visualizer opens with  (sample)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id for O(1) lookup.
    Dict insertion order IS node insertion order, which the tracers use
    as their deterministic tie-break.
  - A separate adjacency dict  `_adj[node_id] → [(neighbour_id, edge_id)]`
    is maintained incrementally so neighbour queries are O(degree), not O(E).
    Every edge appears under both endpoints (undirected treatment).
  - `add_edge` is the raw path (deserialisation, tests) and accepts any
    record.  `create_edge` is the editor path and rejects self-loops,
    unknown endpoints and a second edge between the same pair.
"""

from typing import Dict, List, Tuple, Optional, Iterable

from graph.node import Node
from graph.edge import Edge
from graph.exceptions import (
    DuplicateEdgeError,
    SelfLoopError,
    UnknownEdgeError,
    UnknownNodeError,
)


class Graph:
    """
    Attributes:
        nodes : {node_id: Node}   (insertion ordered)
        edges : {edge_id: Edge}
        _adj  : {node_id: [(neighbour_id, edge_id), …]}
    """

    def __init__(self):
        self.nodes: Dict[str, Node] = {}
        self.edges: Dict[str, Edge] = {}
        self._adj:  Dict[str, List[Tuple[str, str]]] = {}

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def create_node(self, label: Optional[str] = None, node_id: Optional[str] = None) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(label=label, node_id=node_id))

    def remove_node(self, node_id: str) -> None:
        """Remove a node together with every edge touching it."""
        if node_id not in self.nodes:
            raise UnknownNodeError(node_id)
        touching = [eid for eid, e in self.edges.items() if node_id in (e.source, e.target)]
        for eid in touching:
            self.remove_edge(eid)
        del self.nodes[node_id]
        self._adj.pop(node_id, None)

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def label_of(self, node_id: Optional[str]) -> str:
        """Display label for a node id; falls back to the id itself."""
        if node_id is None:
            return ""
        node = self.nodes.get(node_id)
        return node.label if node else node_id

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        self.edges[edge.id] = edge
        self._adj.setdefault(edge.source, []).append((edge.target, edge.id))
        if not edge.is_self_loop:
            self._adj.setdefault(edge.target, []).append((edge.source, edge.id))
        return edge

    def create_edge(
        self,
        source: str,
        target: str,
        weight: float = 1.0,
        edge_id: Optional[str] = None,
    ) -> Edge:
        """Validated edge creation, as the graph editor performs it."""
        for nid in (source, target):
            if nid not in self.nodes:
                raise UnknownNodeError(nid)
        if source == target:
            raise SelfLoopError(f"Edge cannot connect '{self.label_of(source)}' to itself.")
        if self.get_edge_between(source, target) is not None:
            raise DuplicateEdgeError(
                f"Edge already exists between '{self.label_of(source)}' and '{self.label_of(target)}'."
            )
        return self.add_edge(Edge(source=source, target=target, weight=weight, edge_id=edge_id))

    def remove_edge(self, edge_id: str) -> None:
        if edge_id not in self.edges:
            raise UnknownEdgeError(edge_id)
        e = self.edges[edge_id]
        for end in (e.source, e.target):
            if end in self._adj:
                self._adj[end][:] = [(n, eid) for n, eid in self._adj[end] if eid != edge_id]
        del self.edges[edge_id]

    def set_edge_weight(self, edge_id: str, weight: float) -> Edge:
        edge = self.edges.get(edge_id)
        if edge is None:
            raise UnknownEdgeError(edge_id)
        edge.weight = weight
        return edge

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self.edges.get(edge_id)

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge connecting a and b, in either direction."""
        for _, eid in self._adj.get(a, []):
            if self.edges[eid].connects(a, b):
                return self.edges[eid]
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """Return [(neighbour_id, edge)] for every incident edge, both directions."""
        return [(nbr_id, self.edges[eid]) for nbr_id, eid in self._adj.get(node_id, [])]

    def degree(self, node_id: str) -> int:
        return len(self._adj.get(node_id, []))

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self.edges.values())

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        return cls.from_lists(
            (Node.from_dict(nd) for nd in data.get("nodes", [])),
            (Edge.from_dict(ed) for ed in data.get("edges", [])),
        )

    @classmethod
    def from_lists(cls, nodes: Iterable[Node], edges: Iterable[Edge]) -> "Graph":
        """Wrap caller-supplied node / edge records without validating them."""
        g = cls()
        for node in nodes:
            g.add_node(node)
        for edge in edges:
            g.add_edge(edge)
        return g

    # ==================================================================
    # DEMO GRAPH
    # ==================================================================
    @classmethod
    def sample(cls) -> "Graph":
        """
        The five-node demo graph the visualizer starts from:

            A-B(4)  A-D(2)  B-C(3)  B-E(1)  D-E(5)  E-C(2)
        """
        g = cls()
        for i, label in enumerate("ABCDE", start=1):
            g.create_node(label=label, node_id=f"node-{i}")
        for i, (a, b, w) in enumerate(
            [(1, 2, 4), (1, 4, 2), (2, 3, 3), (2, 5, 1), (4, 5, 5), (5, 3, 2)],
            start=1,
        ):
            g.create_edge(f"node-{a}", f"node-{b}", weight=w, edge_id=f"edge-{i}")
        return g

    # ==================================================================
    # Dunder
    # ==================================================================
    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
