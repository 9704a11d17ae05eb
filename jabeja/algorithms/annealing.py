import logging
from dataclasses import dataclass
from typing import List, Optional

from ..config import ConfigError, NodeSelectionPolicy, RunConfig
from ..models import Graph
from ..partitioning.metrics import MetricsReporter, RoundRecord
from ..partitioning.validation import validate_graph
from ..rand import RandomSource
from .partner import PartnerEvaluator
from .sampling import SelectionSampler
from .swap import SwapExecutor

logger = logging.getLogger("jabeja.algorithms.annealing")


@dataclass
class RunState:
    enhanced: bool
    temperature: float
    t_enh: float
    round: int = 0
    restart_counter: int = 0
    swap_count: int = 0  # never reset during a run

    @property
    def active_temperature(self) -> float:
        return self.t_enh if self.enhanced else self.temperature

    @property
    def frozen(self) -> bool:
        if self.enhanced:
            return self.t_enh == 0
        return self.temperature == 1


class AnnealingScheduler:
    """Drives a Ja-be-Ja run: node sweeps, cooldown, reheat and reporting.

    Nodes are visited in ascending id order and every swap is visible to the
    nodes processed after it in the same round.
    """

    def __init__(self, graph: Graph, config: RunConfig, rng: Optional[RandomSource] = None, sink=None):
        validate_graph(graph, config.num_partitions)
        if config.node_selection_policy in (NodeSelectionPolicy.RANDOM, NodeSelectionPolicy.HYBRID):
            if config.uniform_random_sample_size > len(graph) - 1:
                raise ConfigError(
                    f"uniformRandomSampleSize={config.uniform_random_sample_size} needs at least "
                    f"{config.uniform_random_sample_size + 1} nodes, graph has {len(graph)}"
                )
        self.graph = graph
        self.config = config
        self.rng = rng if rng is not None else RandomSource(config.seed)
        self.state = RunState(
            enhanced=config.enhanced,
            temperature=config.temperature,
            t_enh=config.temp_enh,
        )
        self.sampler = SelectionSampler(graph, self.rng)
        self.evaluator = PartnerEvaluator(graph, config.alpha, config.enhanced, self.rng)
        self.executor = SwapExecutor(graph, config, self.sampler, self.evaluator)
        self.reporter = MetricsReporter(graph, sink)
        self._order = graph.ids()

    def cool_down(self) -> None:
        if self.config.enhanced:
            self._cool_down_enhanced()
        else:
            self._cool_down_standard()

    def _cool_down_standard(self) -> None:
        st = self.state
        st.temperature = max(1.0, st.temperature - self.config.delta)

    def _cool_down_enhanced(self) -> None:
        st = self.state
        t_min = self.config.min_temp_enh
        every = self.config.iter_enh
        if st.t_enh >= t_min and st.round % every == every - 1:
            st.t_enh *= self.config.alpha_enh
            if st.t_enh < t_min:
                st.t_enh = 0.0

    def restart_check(self) -> bool:
        """Count frozen rounds and reheat after restart_interval of them."""
        st = self.state
        if st.frozen:
            st.restart_counter += 1
        if st.restart_counter == self.config.restart_interval:
            if st.enhanced:
                st.t_enh = self.config.temp_enh
            else:
                st.temperature = self.config.temperature
            st.restart_counter = 0
            logger.debug("round %d: reheated to T=%s", st.round, st.active_temperature)
            return True
        return False

    def run_round(self) -> int:
        """One sweep over all nodes; returns the number of swaps made."""
        swaps = 0
        for nid in self._order:
            if self.executor.try_swap(nid, self.state):
                swaps += 1
        return swaps

    def step(self) -> RoundRecord:
        swaps = self.run_round()
        logger.debug("round %d: %d swaps at T=%s", self.state.round, swaps, self.state.active_temperature)
        self.cool_down()
        if self.config.restart:
            self.restart_check()
        return self.reporter.report(self.state.round, self.state.swap_count)

    def run(self) -> List[RoundRecord]:
        records: List[RoundRecord] = []
        logger.info(
            "starting run: %d nodes, %d rounds, policy=%s, enhanced=%s",
            len(self.graph), self.config.rounds,
            self.config.node_selection_policy.name, self.config.enhanced,
        )
        for r in range(self.config.rounds):
            self.state.round = r
            records.append(self.step())
        return records


def run_jabeja(graph: Graph, config: RunConfig, rng: Optional[RandomSource] = None, sink=None) -> List[RoundRecord]:
    return AnnealingScheduler(graph, config, rng=rng, sink=sink).run()
