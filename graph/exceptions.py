"""Errors raised by graph edit operations."""


class GraphEditError(ValueError):
    """Base class for rejected graph edits."""


class UnknownNodeError(GraphEditError, KeyError):
    """An edit referenced a node id the graph does not hold."""

    def __init__(self, node_id: str):
        super().__init__(f"Node '{node_id}' does not exist in the graph.")
        self.node_id = node_id

    def __str__(self) -> str:
        return self.args[0]


class UnknownEdgeError(GraphEditError, KeyError):
    """An edit referenced an edge id the graph does not hold."""

    def __init__(self, edge_id: str):
        super().__init__(f"Edge '{edge_id}' does not exist in the graph.")
        self.edge_id = edge_id

    def __str__(self) -> str:
        return self.args[0]


class SelfLoopError(GraphEditError):
    """An edge would connect a node to itself."""


class DuplicateEdgeError(GraphEditError):
    """An (undirected) edge already links the two nodes."""
