import logging
from typing import List, Optional

from ..config import NodeSelectionPolicy, RunConfig
from ..models import Graph, Node
from .partner import PartnerEvaluator
from .sampling import SelectionSampler

logger = logging.getLogger("jabeja.algorithms.swap")


def swap_colors(p: Node, q: Node) -> None:
    p.color, q.color = q.color, p.color


class SwapExecutor:
    def __init__(self, graph: Graph, config: RunConfig, sampler: SelectionSampler, evaluator: PartnerEvaluator):
        self.graph = graph
        self.config = config
        self.sampler = sampler
        self.evaluator = evaluator

    def _local_candidates(self, node_id: int) -> List[int]:
        return self.sampler.sample_neighbors(node_id, self.config.random_neighbor_sample_size)

    def _random_candidates(self, node_id: int) -> List[int]:
        return self.sampler.sample_random(node_id, self.config.uniform_random_sample_size)

    def find_partner(self, node_id: int, temperature: float) -> Optional[Node]:
        policy = self.config.node_selection_policy
        find = self.evaluator.find_partner
        if policy is NodeSelectionPolicy.LOCAL:
            return find(node_id, self._local_candidates(node_id), temperature)
        if policy is NodeSelectionPolicy.RANDOM:
            return find(node_id, self._random_candidates(node_id), temperature)
        if policy is NodeSelectionPolicy.HYBRID:
            partner = find(node_id, self._local_candidates(node_id), temperature)
            if partner is None:
                # local view failed, sample the whole graph
                partner = find(node_id, self._random_candidates(node_id), temperature)
            return partner
        raise ValueError(f"unknown node selection policy: {policy!r}")

    def try_swap(self, node_id: int, state) -> bool:
        """Sample, pick a partner and swap colors with it; True if a swap happened.

        state is the scheduler's RunState: its active temperature drives the
        acceptance test and its swap_count is incremented on a swap.
        """
        node = self.graph.get(node_id)
        partner = self.find_partner(node_id, state.active_temperature)
        if partner is None or partner.color == node.color:
            return False
        swap_colors(node, partner)
        state.swap_count += 1
        logger.debug("round %d: node %d swapped with %d", state.round, node_id, partner.id)
        return True
