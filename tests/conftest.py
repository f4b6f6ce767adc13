from __future__ import annotations

import math
from typing import Dict

import pytest

from config import TestingConfig
from engine import ManualClock
from graph import Graph
from main import create_app

A, B, C, D, E = "node-1", "node-2", "node-3", "node-4", "node-5"


def brute_force_distances(graph: Graph, source: str) -> Dict[str, float]:
    """Cheapest simple undirected path to every node, by exhaustive walk."""
    best = {nid: math.inf for nid in graph.nodes}

    def walk(node: str, cost: float, seen: frozenset) -> None:
        best[node] = min(best[node], cost)
        for nbr, edge in graph.neighbours(node):
            if nbr not in seen:
                walk(nbr, cost + edge.weight, seen | {nbr})

    walk(source, 0, frozenset({source}))
    return best


@pytest.fixture
def sample_graph() -> Graph:
    return Graph.sample()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


class FakeTime:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def client(fake_time: FakeTime):
    app = create_app(TestingConfig, now=fake_time)
    with app.test_client() as c:
        yield c
