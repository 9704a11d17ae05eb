from typing import List

from ..models import Graph
from ..rand import RandomSource


class SamplingError(ValueError):
    pass


class SelectionSampler:
    """Bounded-size candidate samples for one node's swap attempt."""

    def __init__(self, graph: Graph, rng: RandomSource):
        self.graph = graph
        self.rng = rng
        self._ids = graph.ids()

    def sample_neighbors(self, node_id: int, k: int) -> List[int]:
        """Up to k distinct neighbors of node_id, drawn without replacement.

        A node with at most k neighbors returns all of them without touching
        the random stream.
        """
        neighbors = self.graph.neighbors(node_id)
        size = len(neighbors)
        if size <= k:
            return list(neighbors)
        picked: List[int] = []
        seen = set()
        while len(picked) < k:
            nid = neighbors[self.rng.next_int(size)]
            if nid not in seen:
                seen.add(nid)
                picked.append(nid)
        return picked

    def sample_random(self, exclude_id: int, k: int) -> List[int]:
        """k distinct ids drawn uniformly from the whole graph, never exclude_id.

        Rejection sampling: duplicates and self-matches are redrawn.
        """
        size = len(self._ids)
        available = size - 1 if exclude_id in self.graph else size
        if k > available:
            raise SamplingError(
                f"cannot draw {k} distinct ids excluding {exclude_id} from a graph of {size} nodes"
            )
        picked: List[int] = []
        seen = {exclude_id}
        while len(picked) < k:
            nid = self._ids[self.rng.next_int(size)]
            if nid not in seen:
                seen.add(nid)
                picked.append(nid)
        return picked
