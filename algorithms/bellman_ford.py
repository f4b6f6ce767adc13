"""
bellman_ford.py — Bellman–Ford Tracer
=====================================
The single-source shortest-path tracer that tolerates NEGATIVE edge
weights and reports negative cycles instead of failing on them.

Structure:
  • Every stored edge becomes two relaxation candidates (u→v and v→u).
    That expansion lives only here; the Graph keeps one record per edge.
  • Up to |V|-1 passes over the candidate list.
  • One more "detector" scan that flags a negative cycle.

Records a step for:
  1. Initialisation (iteration 0)
  2. Each successful relaxation (one step per improved distance)
  3. A pass with no improvement → early termination, remaining passes skipped
  4. The terminal outcome: "negative cycle detected" or "complete"

When a negative cycle is flagged, the result's distances / predecessors
are None: they are not shortest paths.  The per-step snapshots remain.
"""

import logging
import math
from typing import Dict, List, Optional, Tuple

from graph import Graph
from algorithms.exceptions import InvalidSourceError
from algorithms.result import ShortestPathResult
from algorithms.step import AlgorithmStep, StepBuilder, fmt_distance

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BellmanFord(graph, source):",             # 0
    "    dist ← {v: ∞ for v in V}",                # 1
    "    dist[source] ← 0",                        # 2
    "    prev ← {v: none for v in V}",             # 3
    "    for i in 1 … |V|-1:",                     # 4
    "        for each edge (u, v, w), both ways:", # 5
    "            if dist[u] + w < dist[v]:",       # 6
    "                dist[v] ← dist[u] + w",       # 7
    "                prev[v] ← u",                 # 8
    "        if nothing changed: break",           # 9
    "    for each edge (u, v, w), both ways:",     # 10
    "        if dist[u] + w < dist[v]:",           # 11
    "            return NEGATIVE CYCLE",           # 12
    "    return dist, prev",                       # 13
]


Relaxation = Tuple[str, str, float]


# ---------------------------------------------------------------------------
# Tracer
# ---------------------------------------------------------------------------
def bellman_ford(graph: Graph, source: str) -> ShortestPathResult:
    """Trace Bellman-Ford over `graph` from `source`. The graph is only read."""
    if graph.node_count() == 0:
        logger.debug("bellman_ford: empty graph, nothing to trace")
        return ShortestPathResult(distances={}, predecessors={}, steps=[], source=source)
    if not graph.has_node(source):
        raise InvalidSourceError(source)

    INF = math.inf
    V   = graph.node_count()

    dist:    Dict[str, float]         = {nid: INF for nid in graph.nodes}
    parent:  Dict[str, Optional[str]] = {nid: None for nid in graph.nodes}
    visited: set                      = {source}
    dist[source] = 0

    candidates = relaxation_list(graph)
    steps: List[AlgorithmStep] = []
    sb = StepBuilder(dist, parent, visited)

    # -- init step --
    sb.set_current(source)
    sb.record_update(source, 0)
    sb.pseudocode_line = 2
    sb.description = (
        f"Initialize: set distance to source '{graph.label_of(source)}' as 0, all others as ∞. "
        f"Up to {V - 1} passes over {len(candidates)} directed relaxations."
    )
    steps.append(sb.build(step_number=len(steps)))

    # ==============================================================
    # MAIN PASSES
    # ==============================================================
    for i in range(1, V):
        any_update = False

        for u, v, w in candidates:
            if dist[u] == INF:
                continue                  # can't relax from an unreachable node
            new_dist = dist[u] + w
            if new_dist < dist[v]:
                dist[v]   = new_dist
                parent[v] = u
                visited.add(v)
                any_update = True

                sb.iteration       = i
                sb.set_current(v)
                sb.current_edge    = (u, v)
                sb.record_relaxation(u, v, w, new_dist)
                sb.pseudocode_line = 7
                sb.description     = (
                    f"Iteration {i}: Relax edge {graph.label_of(u)} -> {graph.label_of(v)}. "
                    f"New distance to {graph.label_of(v)}: {fmt_distance(new_dist)}"
                )
                steps.append(sb.build(step_number=len(steps)))

        if not any_update:
            sb.iteration       = i
            sb.pseudocode_line = 9
            sb.description     = f"Iteration {i}: No updates. Algorithm can terminate early."
            steps.append(sb.build(step_number=len(steps)))
            break

    # ==============================================================
    # NEGATIVE-CYCLE DETECTOR
    # ==============================================================
    has_negative_cycle = any(
        dist[u] != INF and dist[u] + w < dist[v] for u, v, w in candidates
    )

    sb.iteration = V
    if has_negative_cycle:
        sb.pseudocode_line = 12
        sb.description     = "Negative cycle detected! Shortest paths are undefined."
    else:
        sb.pseudocode_line = 13
        sb.description     = "Algorithm complete. All shortest paths found."
    steps.append(sb.build(step_number=len(steps), is_final=True))

    logger.debug(
        "bellman_ford: source=%s steps=%d negative_cycle=%s",
        source, len(steps), has_negative_cycle,
    )
    if has_negative_cycle:
        return ShortestPathResult(
            distances=None,
            predecessors=None,
            steps=steps,
            source=source,
            has_negative_cycle=True,
        )
    return ShortestPathResult(
        distances=dict(dist),
        predecessors=dict(parent),
        steps=steps,
        source=source,
    )


def relaxation_list(graph: Graph) -> List[Relaxation]:
    """
    Every edge in both directions: A-B yields (A, B, w) and (B, A, w).
    Edges with an endpoint outside the node list are dropped.
    """
    out: List[Relaxation] = []
    for edge in graph.edges.values():
        if not (graph.has_node(edge.source) and graph.has_node(edge.target)):
            continue
        out.append((edge.source, edge.target, edge.weight))
        out.append((edge.target, edge.source, edge.weight))
    return out
