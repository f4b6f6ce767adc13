"""
step.py — Algorithm Step Snapshots
==================================
Every tracer runs to completion once and records a list of steps.
A step is a frozen-in-time picture of everything the visualizer needs
to render one frame:

    • Which node is being processed and which nodes are visited so far
    • Which distances changed and which edges were relaxed at this step
    • The full distance / predecessor maps as of this step
    • A plain-English description of what just happened

Design decisions:
  - Steps are frozen dataclasses.  The tracer is the only writer; the
    stepper / renderer are pure readers.
  - Each step owns its own copies of the maps and sets it carries, so
    scrubbing backwards never needs the algorithm to run again.
    StepBuilder.build() is where that copy happens.
  - `current_node` is None for bookkeeping steps (early termination,
    "complete", "negative cycle detected").
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Tuple


class DistanceUpdate(NamedTuple):
    node: str
    new_distance: float


class RelaxedEdge(NamedTuple):
    source: str
    target: str
    weight: float


@dataclass(frozen=True)
class AlgorithmStep:
    """
    Attributes:
        step_number      : 0-based index of this step in the run.
        current_node     : ID of the node being processed (None for bookkeeping steps).
        current_edge     : (from, to) of the edge being relaxed, when there is exactly one.
        visited          : Node ids visited / finalised so far.
        distance_updates : Distance changes applied at this step.
        relaxed_edges    : Edges relaxed at this step.
        distances        : {node_id: float} as of this step (math.inf = unreached).
        predecessors     : {node_id: node_id | None} as of this step.
        iteration        : Bellman-Ford pass number (0 = init). Always 0 for Dijkstra.
        pseudocode_line  : 0-based index of the pseudocode line this step illustrates.
        description      : Human-readable text for the step panel.
        is_final         : True on the very last step.
    """

    step_number:      int                             = 0
    current_node:     Optional[str]                   = None
    current_edge:     Optional[Tuple[str, str]]       = None
    visited:          FrozenSet[str]                  = frozenset()
    distance_updates: Tuple[DistanceUpdate, ...]      = ()
    relaxed_edges:    Tuple[RelaxedEdge, ...]         = ()
    distances:        Dict[str, float]                = field(default_factory=dict)
    predecessors:     Dict[str, Optional[str]]        = field(default_factory=dict)
    iteration:        int                             = 0
    pseudocode_line:  int                             = 0
    description:      str                             = ""
    is_final:         bool                            = False


@dataclass(frozen=True)
class SortStep:
    """
    Attributes:
        step_number    : 0-based index of this step in the run.
        array          : The whole array at this point.
        comparing      : Indices being compared.
        swapping       : Indices about to be exchanged.
        sorted_indices : Indices confirmed to be in their final position.
        pass_number    : Outer pass (0 before the first pass starts).
        description    : Human-readable text for the step panel.
        is_final       : True on the very last step.
    """

    step_number:    int               = 0
    array:          Tuple[float, ...] = ()
    comparing:      Tuple[int, ...]   = ()
    swapping:       Tuple[int, ...]   = ()
    sorted_indices: FrozenSet[int]    = frozenset()
    pass_number:    int               = 0
    description:    str               = ""
    is_final:       bool              = False


# ---------------------------------------------------------------------------
# Convenience builder so tracers don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad that shortest-path tracers use to construct steps.

    Usage inside a tracer:
        sb = StepBuilder(dist, parent, visited)
        sb.set_current("A")
        sb.record_relaxation("A", "B", 4, new_distance=4)
        sb.description = "Visit A ..."
        steps.append(sb.build(step_number=len(steps)))

    The builder holds references to the tracer's live maps; build()
    snapshots them.
    """

    def __init__(
        self,
        distances: Dict[str, float],
        predecessors: Dict[str, Optional[str]],
        visited: set,
    ):
        self._distances    = distances
        self._predecessors = predecessors
        self._visited      = visited
        self.reset()

    def reset(self):
        self.current_node:     Optional[str]             = None
        self.current_edge:     Optional[Tuple[str, str]] = None
        self.distance_updates: List[DistanceUpdate]      = []
        self.relaxed_edges:    List[RelaxedEdge]         = []
        self.iteration:        int                       = 0
        self.pseudocode_line:  int                       = 0
        self.description:      str                       = ""

    # -- helpers --
    def set_current(self, node_id: Optional[str]):
        self.current_node = node_id

    def record_update(self, node_id: str, new_distance: float):
        self.distance_updates.append(DistanceUpdate(node_id, new_distance))

    def record_relaxation(self, source: str, target: str, weight: float, new_distance: float):
        self.relaxed_edges.append(RelaxedEdge(source, target, weight))
        self.record_update(target, new_distance)

    def build(self, step_number: int = 0, is_final: bool = False) -> AlgorithmStep:
        step = AlgorithmStep(
            step_number=step_number,
            current_node=self.current_node,
            current_edge=self.current_edge,
            visited=frozenset(self._visited),
            distance_updates=tuple(self.distance_updates),
            relaxed_edges=tuple(self.relaxed_edges),
            distances=dict(self._distances),
            predecessors=dict(self._predecessors),
            iteration=self.iteration,
            pseudocode_line=self.pseudocode_line,
            description=self.description,
            is_final=is_final,
        )
        self.reset()
        return step


def fmt_distance(value: float) -> str:
    """Render a distance for descriptions: ∞ for unreached, no trailing .0."""
    if value == float("inf"):
        return "∞"
    if value == float("-inf"):
        return "-∞"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
