from typing import Iterable, List

import networkx as nx
import pytest

from jabeja.config import RunConfig
from jabeja.graph_build import build_graph
from jabeja.models import Graph
from jabeja.rand import RandomSource


class ScriptedRandom(RandomSource):
    """RandomSource that replays fixed draws and records how many were taken."""

    def __init__(self, ints: Iterable[int] = (), doubles: Iterable[float] = ()):
        super().__init__(seed=0)
        self.ints: List[int] = list(ints)
        self.doubles: List[float] = list(doubles)
        self.int_calls = 0
        self.double_calls = 0

    def next_int(self, bound: int) -> int:
        self.int_calls += 1
        value = self.ints.pop(0)
        assert 0 <= value < bound
        return value

    def next_double(self) -> float:
        self.double_calls += 1
        return self.doubles.pop(0)


BASE_OPTIONS = {
    "numPartitions": 2,
    "rounds": 1,
    "randomNeighborSampleSize": 3,
    "temperature": 2.0,
    "delta": 0.003,
    "seed": 7,
    "uniformRandomSampleSize": 2,
    "graphFilePath": "graphs/ring.graph",
    "outputDir": "output",
    "initColorPolicy": "ROUND_ROBIN",
    "nodeSelectionPolicy": "LOCAL",
    "alpha": 2.0,
}


@pytest.fixture
def make_config():
    def _make(**overrides) -> RunConfig:
        options = dict(BASE_OPTIONS)
        options.update(overrides)
        return RunConfig.from_dict(options)
    return _make


@pytest.fixture
def ring4() -> Graph:
    # 0-1-2-3-0 with alternating colors: every edge is cut
    return build_graph(nx.cycle_graph(4), {0: 0, 1: 1, 2: 0, 3: 1})


@pytest.fixture
def two_cliques() -> Graph:
    """Two triangles joined by one edge, colors mixed across them."""
    G = nx.Graph()
    G.add_edges_from([(0, 1), (1, 2), (0, 2), (3, 4), (4, 5), (3, 5), (2, 3)])
    return build_graph(G, {0: 0, 1: 1, 2: 0, 3: 1, 4: 0, 5: 1})


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def base_options():
    return dict(BASE_OPTIONS)
