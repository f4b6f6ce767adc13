"""
recorder.py — Run Recorder & Analytics
======================================
Runs one registered tracer to completion, keeps the step sequence, and
computes the metrics the UI shows in its results panel.

Usage:
    rec = Recorder()
    rec.record("dijkstra", graph=g, source="node-1")
    metrics = rec.metrics            # the analytics card
    rec.export()                     # JSON-safe snapshot for the host

JSON has no infinity, so exported distances use None for "unreached".
"""

import logging
import math
import sys
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

from graph import Graph
from algorithms import get_algorithm, AlgoInfo
from algorithms.result import ShortestPathResult, SortResult
from algorithms.step import AlgorithmStep, SortStep

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the results panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:        str   = ""
    algo_label:      str   = ""
    source:          str   = ""
    input_size:      int   = 0          # |V| for graph tracers, n for sorting
    total_steps:     int   = 0
    nodes_visited:   int   = 0
    edges_relaxed:   int   = 0
    comparisons:     int   = 0
    swaps:           int   = 0
    negative_cycle:  bool  = False
    wall_time_ms:    float = 0.0
    memory_bytes:    int   = 0          # approx size of the step buffer


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of steps from the last run.
        result  : The tracer's result object.
        metrics : Computed RunMetrics (available after record()).
    """

    def __init__(self):
        self.steps:   List[Union[AlgorithmStep, SortStep]]      = []
        self.result:  Optional[Union[ShortestPathResult, SortResult]] = None
        self.metrics: Optional[RunMetrics]                      = None

        self._algo_info: Optional[AlgoInfo] = None
        self._graph:     Optional[Graph]    = None

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    def record(
        self,
        algo_key: str,
        graph: Optional[Graph] = None,
        source: Optional[str] = None,
        values: Optional[Sequence[float]] = None,
    ) -> Union[ShortestPathResult, SortResult]:
        """Run the tracer, keep its steps, compute metrics. Tracer errors propagate."""
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")

        start = time.monotonic()
        if info.kind == "graph":
            if graph is None:
                raise ValueError(f"{info.label} needs a graph")
            result = info.fn(graph, source)
        else:
            result = info.fn(list(values or []))
        wall_ms = (time.monotonic() - start) * 1000

        self._algo_info = info
        self._graph     = graph if info.kind == "graph" else None
        self.result     = result
        self.steps      = list(result.steps)
        self.metrics    = self._compute_metrics(wall_ms, source, graph, values)

        logger.info(
            "recorded %s: %d steps in %.2f ms",
            info.key, self.metrics.total_steps, self.metrics.wall_time_ms,
        )
        return result

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "steps":    [step_to_dict(s) for s in self.steps],
        }
        if isinstance(self.result, ShortestPathResult):
            out["result"] = shortest_path_result_to_dict(self.result, self._graph)
        elif isinstance(self.result, SortResult):
            out["result"] = {"sorted_array": list(self.result.sorted_array)}
        return out

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms, source, graph, values) -> RunMetrics:
        info = self._algo_info
        last = self.steps[-1] if self.steps else None

        mem = sys.getsizeof(self.steps)
        for s in self.steps:
            mem += sys.getsizeof(s)

        metrics = RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            source=source or "",
            total_steps=len(self.steps),
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
        )
        if isinstance(self.result, ShortestPathResult):
            metrics.input_size     = graph.node_count() if graph else 0
            metrics.nodes_visited  = len(last.visited) if last else 0
            metrics.edges_relaxed  = sum(len(s.relaxed_edges) for s in self.steps)
            metrics.negative_cycle = self.result.has_negative_cycle
        else:
            metrics.input_size  = len(values or [])
            metrics.comparisons = sum(1 for s in self.steps if s.comparing)
            metrics.swaps       = sum(1 for s in self.steps if s.swapping)
        return metrics


# ---------------------------------------------------------------------------
# JSON helpers
# ---------------------------------------------------------------------------
def _num(value: float) -> Optional[float]:
    return None if value is None or math.isinf(value) else value


def step_to_dict(step: Union[AlgorithmStep, SortStep]) -> Dict[str, Any]:
    if isinstance(step, SortStep):
        return {
            "step_number":    step.step_number,
            "array":          list(step.array),
            "comparing":      list(step.comparing),
            "swapping":       list(step.swapping),
            "sorted_indices": sorted(step.sorted_indices),
            "pass_number":    step.pass_number,
            "description":    step.description,
            "is_final":       step.is_final,
        }
    return {
        "step_number":      step.step_number,
        "current_node":     step.current_node,
        "current_edge":     list(step.current_edge) if step.current_edge else None,
        "visited":          sorted(step.visited),
        "distance_updates": [{"node": u.node, "new_distance": _num(u.new_distance)} for u in step.distance_updates],
        "relaxed_edges":    [{"from": e.source, "to": e.target, "weight": e.weight} for e in step.relaxed_edges],
        "distances":        {k: _num(v) for k, v in step.distances.items()},
        "predecessors":     dict(step.predecessors),
        "iteration":        step.iteration,
        "pseudocode_line":  step.pseudocode_line,
        "description":      step.description,
        "is_final":         step.is_final,
    }


def shortest_path_result_to_dict(result: ShortestPathResult, graph: Optional[Graph] = None) -> Dict[str, Any]:
    """Final distances plus the labelled path to every node (the results table)."""
    if result.has_negative_cycle:
        return {
            "source": result.source,
            "has_negative_cycle": True,
            "distances": None,
            "predecessors": None,
            "paths": None,
        }
    paths = {}
    for nid in result.distances:
        path = result.path_to(nid)
        paths[nid] = [graph.label_of(p) for p in path] if graph else path
    return {
        "source": result.source,
        "has_negative_cycle": False,
        "distances": {k: _num(v) for k, v in result.distances.items()},
        "predecessors": dict(result.predecessors),
        "paths": paths,
    }
