"""
dijkstra.py — Dijkstra's Shortest-Path Tracer
=============================================
Runs Dijkstra from a source to exhaustion using a min-heap (heapq) and
records a step at:

  1. Every node visitation, carrying all relaxations that visit triggered
  2. The end, once no unvisited node with a finite distance remains

So a run produces at most |V| + 1 steps.

Edges are treated as undirected.  Ties between equal distances are
broken by node insertion order (the heap key carries the node's index).

Correctness note: Dijkstra requires non-negative weights.  Negative
weights are not rejected here; the result is simply not guaranteed.
"""

import heapq
import logging
import math
from typing import Dict, List, Optional

from graph import Graph
from algorithms.exceptions import InvalidSourceError
from algorithms.result import ShortestPathResult
from algorithms.step import AlgorithmStep, StepBuilder, fmt_distance

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source):",                  # 0
    "    dist ← {v: ∞ for v in V}; dist[source] ← 0",  # 1
    "    prev ← {v: none for v in V}",               # 2
    "    pq ← [(0, source)]",                        # 3
    "    while pq is not empty:",                    # 4
    "        (d, u) ← pq.pop_min()",                 # 5
    "        if u visited: continue",                # 6
    "        mark u visited",                        # 7
    "        for (v, w) in adj(u):",                 # 8
    "            if dist[u] + w < dist[v]:",         # 9
    "                dist[v] ← dist[u] + w",         # 10
    "                prev[v] ← u; pq.push(v)",       # 11
    "    return dist, prev",                         # 12
]


# ---------------------------------------------------------------------------
# Tracer
# ---------------------------------------------------------------------------
def dijkstra(graph: Graph, source: str) -> ShortestPathResult:
    """Trace Dijkstra over `graph` from `source`. The graph is only read."""
    if graph.node_count() == 0:
        logger.debug("dijkstra: empty graph, nothing to trace")
        return ShortestPathResult(distances={}, predecessors={}, steps=[], source=source)
    if not graph.has_node(source):
        raise InvalidSourceError(source)

    INF = math.inf
    order:   Dict[str, int]           = {nid: i for i, nid in enumerate(graph.nodes)}
    dist:    Dict[str, float]         = {nid: INF for nid in graph.nodes}
    parent:  Dict[str, Optional[str]] = {nid: None for nid in graph.nodes}
    visited: set                      = set()
    dist[source] = 0

    pq = [(0, order[source], source)]     # min-heap: (distance, insertion index, node_id)
    steps: List[AlgorithmStep] = []
    sb = StepBuilder(dist, parent, visited)

    while pq:
        d, _, node = heapq.heappop(pq)
        if node in visited:
            continue                      # stale heap entry

        visited.add(node)
        sb.set_current(node)
        sb.pseudocode_line = 7

        for nbr, edge in graph.neighbours(node):
            if nbr in visited or nbr not in dist:
                continue
            new_dist = dist[node] + edge.weight
            if new_dist < dist[nbr]:
                dist[nbr]   = new_dist
                parent[nbr] = node
                sb.record_relaxation(node, nbr, edge.weight, new_dist)
                heapq.heappush(pq, (new_dist, order[nbr], nbr))

        sb.description = _describe_visit(graph, node, d, sb)
        steps.append(sb.build(step_number=len(steps)))

    unreachable = [graph.label_of(n) for n in graph.nodes if dist[n] == INF]
    sb.pseudocode_line = 12
    sb.description = "Algorithm complete. All reachable nodes have their shortest distance."
    if unreachable:
        sb.description += f" Unreachable: {', '.join(unreachable)}."
    steps.append(sb.build(step_number=len(steps), is_final=True))

    logger.debug(
        "dijkstra: source=%s visited=%d/%d steps=%d",
        source, len(visited), graph.node_count(), len(steps),
    )
    return ShortestPathResult(
        distances=dict(dist),
        predecessors=dict(parent),
        steps=steps,
        source=source,
    )


def _describe_visit(graph: Graph, node: str, d: float, sb: StepBuilder) -> str:
    text = f"Visit '{graph.label_of(node)}' with distance {fmt_distance(d)} (smallest unvisited)."
    if not sb.distance_updates:
        return text + " No neighbour distance improved."
    updates = ", ".join(
        f"{graph.label_of(u.node)} = {fmt_distance(u.new_distance)}" for u in sb.distance_updates
    )
    return text + f" Updated: {updates}."
