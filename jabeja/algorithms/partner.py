import math
from typing import Iterable, Optional

from ..models import Graph, Node
from ..rand import RandomSource

# exp() overflows a double a little above 709
_MAX_EXPONENT = 700.0


def accept_standard(old: float, new: float, temperature: float) -> bool:
    return new * temperature > old


def accept_enhanced(old: float, new: float, temperature: float, r: float) -> bool:
    """Boltzmann-style test against a uniform draw r in [0, 1)."""
    diff = new - old
    if temperature == 0:
        # frozen: only strict improvements pass
        ap = math.inf if diff > 0 else 0.0
    else:
        ap = math.exp(min(diff / temperature, _MAX_EXPONENT))
    return ap > r


class PartnerEvaluator:
    def __init__(self, graph: Graph, alpha: float, enhanced: bool, rng: RandomSource):
        self.graph = graph
        self.alpha = alpha
        self.enhanced = enhanced
        self.rng = rng

    def degree(self, node: Node, color: int) -> int:
        """How many neighbors of node currently hold color."""
        nodes = self.graph.nodes
        return sum(1 for nid in node.neighbors if nodes[nid].color == color)

    def accept(self, old: float, new: float, temperature: float) -> bool:
        if self.enhanced:
            return accept_enhanced(old, new, temperature, self.rng.next_double())
        return accept_standard(old, new, temperature)

    def find_partner(self, node_id: int, candidates: Iterable[int], temperature: float) -> Optional[Node]:
        """Best accepted swap partner for node_id among candidates, or None.

        The best-so-far threshold starts at 0, so a candidate whose new cost is
        not positive is never returned even when the acceptance test passes.
        Ties keep the first candidate.
        """
        p = self.graph.get(node_id)
        a = self.alpha
        best: Optional[Node] = None
        highest = 0.0
        for qid in candidates:
            q = self.graph.get(qid)
            old = self.degree(p, p.color) ** a + self.degree(q, q.color) ** a
            new = self.degree(p, q.color) ** a + self.degree(q, p.color) ** a
            if self.accept(old, new, temperature) and new > highest:
                best = q
                highest = new
        return best
