import random
from typing import Optional


class RandomSource:
    """Seedable uniform generator shared by every stochastic decision of a run.

    A run draws from exactly one instance; reproducing a run means reusing the
    seed and the same call order.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def next_int(self, bound: int) -> int:
        """Uniform integer in [0, bound)."""
        if bound <= 0:
            raise ValueError("bound must be positive")
        return self._rng.randrange(bound)

    def next_double(self) -> float:
        """Uniform real in [0, 1)."""
        return self._rng.random()
