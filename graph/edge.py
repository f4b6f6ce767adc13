"""
edge.py — Graph Edge
====================
A single weighted record between two nodes.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - The record is stored once, with a direction, but the shortest-path
    tracers treat it as undirected.  Any both-ways expansion happens
    inside the tracer that needs it, never here.
  - Weight is signed.  Bellman-Ford copes with negatives; Dijkstra
    simply assumes they are absent.
"""

from typing import Optional
import uuid


class Edge:
    """
    Attributes:
        id     : Unique identifier.
        source : ID of one endpoint.
        target : ID of the other endpoint.
        weight : Numeric cost (default 1). May be negative.
    """

    __slots__ = ("id", "source", "target", "weight")

    def __init__(
        self,
        source: str,
        target: str,
        weight: float = 1.0,
        edge_id: Optional[str] = None,
    ):
        self.id:     str   = edge_id or f"edge-{uuid.uuid4().hex[:8]}"
        self.source: str   = source
        self.target: str   = target
        self.weight: float = weight

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def connects(self, node_a: str, node_b: str) -> bool:
        """True if this edge links node_a ↔ node_b, in either direction."""
        return {self.source, self.target} == {node_a, node_b}

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":     self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=data["source"],
            target=data["target"],
            weight=data.get("weight", 1.0),
            edge_id=data.get("id"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.source} ↔ {self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
