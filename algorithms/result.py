"""
result.py — Tracer Results
==========================
What a tracer hands back: the full step sequence plus the
algorithm-specific terminal data.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from algorithms.step import AlgorithmStep, SortStep


@dataclass(frozen=True)
class ShortestPathResult:
    """
    Attributes:
        distances         : Final {node_id: distance}, or None when a negative
                            cycle makes shortest paths undefined.
        predecessors      : Final {node_id: predecessor | None}, or None likewise.
        steps             : The ordered step sequence.
        source            : The node the run started from ("" for an empty graph).
        has_negative_cycle: Only ever True for Bellman-Ford.
    """

    distances:          Optional[Dict[str, float]]
    predecessors:       Optional[Dict[str, Optional[str]]]
    steps:              List[AlgorithmStep] = field(default_factory=list)
    source:             str                 = ""
    has_negative_cycle: bool                = False

    def distance_to(self, node_id: str) -> Optional[float]:
        if self.distances is None:
            return None
        return self.distances.get(node_id, math.inf)

    def path_to(self, node_id: str) -> Optional[List[str]]:
        """Source → node_id path, [] if unreachable, None if undefined."""
        if self.predecessors is None:
            return None
        if self.distance_to(node_id) == math.inf:
            return []
        return shortest_path(self.predecessors, node_id)


@dataclass(frozen=True)
class SortResult:
    steps:        List[SortStep] = field(default_factory=list)
    sorted_array: List[float]    = field(default_factory=list)


def shortest_path(predecessors: Dict[str, Optional[str]], target: str) -> List[str]:
    """Walk predecessors back from target; returns the path source-first."""
    path, cur = [], target
    seen = set()
    while cur is not None and cur not in seen:
        seen.add(cur)
        path.append(cur)
        cur = predecessors.get(cur)
    path.reverse()
    return path
