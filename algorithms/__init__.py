"""
algorithms/__init__.py — Algorithm Registry
===========================================
Single source of truth for every tracer the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "dijkstra": AlgoInfo(key, label, fn, pseudocode, kind, …),
        …
    }

`kind` says what the tracer consumes:
    • "graph" – fn(graph, source) -> ShortestPathResult
    • "array" – fn(values)        -> SortResult
"""

from dataclasses import dataclass, field
from typing import Callable, List, Dict, Optional

from algorithms.bellman_ford import bellman_ford, PSEUDOCODE as _bf_pc
from algorithms.bubble_sort  import bubble_sort, random_array, PSEUDOCODE as _bs_pc
from algorithms.dijkstra     import dijkstra, PSEUDOCODE as _dij_pc
from algorithms.exceptions   import TraceError, InvalidSourceError
from algorithms.result       import ShortestPathResult, SortResult, shortest_path
from algorithms.step         import AlgorithmStep, SortStep, DistanceUpdate, RelaxedEdge


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "dijkstra"
    label:             str                    # human label
    fn:                Callable               # the tracer function
    pseudocode:        List[str]              # lines for the side-panel
    kind:              str = "graph"          # "graph" or "array"
    tags:              List[str] = field(default_factory=list)
    supports_negative: bool     = False       # can handle negative edges?
    complexity_time:   str      = ""
    complexity_space:  str      = ""
    description:       str      = ""


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=dijkstra, pseudocode=_dij_pc,
        kind="graph", tags=["weighted", "shortest-path"],
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Greedily finalises the closest node. Optimal for non-negative weights.",
    ),

    "bellman_ford": AlgoInfo(
        key="bellman_ford", label="Bellman–Ford", fn=bellman_ford, pseudocode=_bf_pc,
        kind="graph", tags=["weighted", "shortest-path", "negative-edges"],
        supports_negative=True,
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Handles negative edges. Detects negative cycles. Slower than Dijkstra.",
    ),

    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", fn=bubble_sort, pseudocode=_bs_pc,
        kind="array", tags=["sorting", "in-place", "stable"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Swaps adjacent out-of-order pairs. Stops early once a pass swaps nothing.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "dijkstra",
    "bellman_ford",
    "bubble_sort",
    "random_array",
    "shortest_path",
    "ShortestPathResult",
    "SortResult",
    "AlgorithmStep",
    "SortStep",
    "DistanceUpdate",
    "RelaxedEdge",
    "TraceError",
    "InvalidSourceError",
]
