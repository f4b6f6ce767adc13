"""
session.py — Visualizer Session
===============================
Everything one user is looking at: the graph being edited, the chosen
source, the array to sort, the last recorded run and the Stepper
playing it.

The rule this class exists for: a step sequence is only ever shown
against the input it was traced from.  Any edit to an input the current
run consumed (graph topology, an edge weight, the source, the array)
resets the stepper to IDLE and drops the recorded run.  Nothing is
re-traced incrementally; the caller runs again.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from graph import Graph, Node, Edge, UnknownNodeError
from algorithms import get_algorithm, random_array
from algorithms.exceptions import InvalidSourceError
from algorithms.result import ShortestPathResult, SortResult
from engine.clock import Scheduler
from engine.recorder import Recorder, step_to_dict
from engine.stepper import Stepper, DEFAULT_SPEED_MS, MIN_SPEED_MS, MAX_SPEED_MS

logger = logging.getLogger(__name__)


class VisualizerSession:
    """
    Attributes:
        graph    : The graph the shortest-path tracers read.
        source   : Selected source node id (None until chosen).
        array    : Input for the sorting tracer.
        stepper  : Playback over the last recorded run.
        recorder : The last recorded run (None when idle).
    """

    def __init__(
        self,
        graph: Optional[Graph] = None,
        array: Optional[Sequence[float]] = None,
        scheduler: Optional[Scheduler] = None,
        speed_ms: int = DEFAULT_SPEED_MS,
        min_speed_ms: int = MIN_SPEED_MS,
        max_speed_ms: int = MAX_SPEED_MS,
    ):
        self.graph:    Graph              = graph if graph is not None else Graph.sample()
        self.source:   Optional[str]      = None
        self.array:    List[float]        = list(array or [])
        self.stepper:  Stepper            = Stepper(
            scheduler=scheduler,
            speed_ms=speed_ms,
            min_speed_ms=min_speed_ms,
            max_speed_ms=max_speed_ms,
        )
        self.recorder: Optional[Recorder] = None

    # ------------------------------------------------------------------
    # Graph edits
    # ------------------------------------------------------------------
    def add_node(self, label: str, node_id: Optional[str] = None) -> Node:
        node = self.graph.create_node(label=label, node_id=node_id)
        self._invalidate("graph", f"node '{node.label}' added")
        return node

    def remove_node(self, node_id: str) -> None:
        label = self.graph.label_of(node_id)
        self.graph.remove_node(node_id)
        if self.source == node_id:
            self.source = None
        self._invalidate("graph", f"node '{label}' removed")

    def add_edge(self, source: str, target: str, weight: Union[int, float]) -> Edge:
        edge = self.graph.create_edge(source, target, weight=_as_number(weight))
        self._invalidate("graph", f"edge {edge.source}-{edge.target} added")
        return edge

    def remove_edge(self, edge_id: str) -> None:
        self.graph.remove_edge(edge_id)
        self._invalidate("graph", f"edge {edge_id} removed")

    def set_edge_weight(self, edge_id: str, weight: Union[int, float]) -> Edge:
        edge = self.graph.set_edge_weight(edge_id, _as_number(weight))
        self._invalidate("graph", f"edge {edge_id} weight = {edge.weight}")
        return edge

    def select_source(self, node_id: str) -> None:
        if not self.graph.has_node(node_id):
            raise UnknownNodeError(node_id)
        self.source = node_id
        self._invalidate("graph", f"source = {node_id}")

    def load_graph(self, graph: Graph) -> None:
        self.graph  = graph
        self.source = None
        self._invalidate("graph", "graph replaced")

    # ------------------------------------------------------------------
    # Array edits
    # ------------------------------------------------------------------
    def set_array(self, values: Sequence[Union[int, float]]) -> List[float]:
        self.array = [_as_number(v) for v in values]
        self._invalidate("array", f"array of {len(self.array)} set")
        return self.array

    def randomize_array(self, size: int, max_value: int = 50, seed: Optional[int] = None) -> List[float]:
        return self.set_array(random_array(size, max_value=max_value, seed=seed))

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    def run(self, algo_key: str) -> Union[ShortestPathResult, SortResult]:
        """Trace `algo_key` over the current input and load the steps into the stepper."""
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")
        if info.kind == "graph" and self.source is None:
            raise InvalidSourceError(None, "Please select a source node first.")

        rec = Recorder()
        result = rec.record(algo_key, graph=self.graph, source=self.source, values=self.array)
        self.recorder = rec
        self.stepper.start(rec.steps)
        logger.info("session: %s loaded %d steps", algo_key, len(rec.steps))
        return result

    def reset_playback(self) -> None:
        """Drop the recorded run; the stepper goes back to not-started."""
        self.recorder = None
        self.stepper.reset()

    @property
    def run_kind(self) -> Optional[str]:
        if self.recorder is None or self.recorder.metrics is None:
            return None
        info = get_algorithm(self.recorder.metrics.algo_key)
        return info.kind if info else None

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        snap = self.stepper.snapshot()
        return {
            "algorithm":        self.recorder.metrics.algo_key if self.recorder else None,
            "source":           self.source,
            "cursor":           snap.cursor,
            "is_playing":       snap.is_playing,
            "state":            snap.state.value,
            "total_steps":      snap.total_steps,
            "can_step_forward": snap.can_step_forward,
            "can_step_back":    snap.can_step_back,
            "speed_ms":         snap.speed_ms,
            "current_step":     step_to_dict(snap.current_step) if snap.current_step is not None else None,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _invalidate(self, kind: str, reason: str) -> None:
        if self.recorder is None or self.run_kind != kind:
            logger.debug("session: %s", reason)
            return
        logger.info("session: %s, discarding %d recorded steps", reason, len(self.recorder.steps))
        self.recorder = None
        self.stepper.reset()


def _as_number(value: Union[int, float, str]) -> float:
    """Accept ints, floats and numeric strings; reject anything else with ValueError."""
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Not a number: {value!r}") from None
    if number != number or number in (float("inf"), float("-inf")):
        raise ValueError(f"Not a finite number: {value!r}")
    return number
