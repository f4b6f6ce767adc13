"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge
    from graph import GraphEditError, DuplicateEdgeError, SelfLoopError
"""

from graph.node  import Node
from graph.edge  import Edge
from graph.graph import Graph
from graph.exceptions import (
    GraphEditError,
    UnknownNodeError,
    UnknownEdgeError,
    SelfLoopError,
    DuplicateEdgeError,
)

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "GraphEditError",
    "UnknownNodeError",
    "UnknownEdgeError",
    "SelfLoopError",
    "DuplicateEdgeError",
]
