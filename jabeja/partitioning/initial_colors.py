import math
from typing import Dict

import networkx as nx

from ..config import GraphInitColorPolicy
from ..rand import RandomSource


def round_robin(G: nx.Graph, k: int) -> Dict[int, int]:
    return {u: i % k for i, u in enumerate(sorted(G.nodes()))}


def random_colors(G: nx.Graph, k: int, rng: RandomSource) -> Dict[int, int]:
    return {u: rng.next_int(k) for u in sorted(G.nodes())}


def batch(G: nx.Graph, k: int) -> Dict[int, int]:
    nodes = sorted(G.nodes())
    size = max(1, math.ceil(len(nodes) / k))
    return {u: min(i // size, k - 1) for i, u in enumerate(nodes)}


def assign_initial_colors(G: nx.Graph, num_partitions: int, policy: GraphInitColorPolicy,
                          rng: RandomSource) -> Dict[int, int]:
    if num_partitions < 1:
        raise ValueError("num_partitions must be >= 1")
    if policy is GraphInitColorPolicy.ROUND_ROBIN:
        return round_robin(G, num_partitions)
    if policy is GraphInitColorPolicy.RANDOM:
        return random_colors(G, num_partitions, rng)
    if policy is GraphInitColorPolicy.BATCH:
        return batch(G, num_partitions)
    raise ValueError(f"unknown init color policy: {policy!r}")
