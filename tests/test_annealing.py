import logging

import networkx as nx
import pytest

from jabeja.algorithms.annealing import AnnealingScheduler, RunState, run_jabeja
from jabeja.config import ConfigError
from jabeja.graph_build import build_graph
from jabeja.io_utils import ListSink
from jabeja.partitioning.initial_colors import round_robin
from jabeja.partitioning.metrics import edge_cut
from jabeja.rand import RandomSource


def random_graph(seed=1, n=30, p=0.2, k=3):
    G = nx.gnp_random_graph(n, p, seed=seed)
    return build_graph(G, round_robin(G, k))


class TestStandardCooldown:
    def test_decreases_by_delta_then_floors_at_one(self, ring4, make_config):
        sched = AnnealingScheduler(ring4, make_config(temperature=2.0, delta=0.3))
        seen = []
        for r in range(6):
            sched.state.round = r
            sched.cool_down()
            seen.append(sched.state.temperature)
        assert seen[:3] == pytest.approx([1.7, 1.4, 1.1])
        assert seen[3:] == [1.0, 1.0, 1.0]
        assert all(a >= b for a, b in zip(seen, seen[1:]))

    def test_enhanced_temperature_untouched(self, ring4, make_config):
        sched = AnnealingScheduler(ring4, make_config(tempEnh=3.0))
        sched.cool_down()
        assert sched.state.t_enh == 3.0


class TestEnhancedCooldown:
    def test_changes_only_every_iter_enh_rounds_and_clamps_to_zero(self, ring4, make_config):
        cfg = make_config(enhanced=True, tempEnh=1.0, alphaEnh=0.5, minTempEnh=0.2, iterEnh=3)
        sched = AnnealingScheduler(ring4, cfg)
        history = []
        for r in range(12):
            sched.state.round = r
            sched.cool_down()
            history.append(sched.state.t_enh)
        assert history == [1.0, 1.0, 0.5, 0.5, 0.5, 0.25, 0.25, 0.25, 0.0, 0.0, 0.0, 0.0]
        assert sched.state.temperature == cfg.temperature


class TestRestart:
    def test_standard_reheat_after_interval_frozen_rounds(self, ring4, make_config):
        cfg = make_config(temperature=1.2, delta=0.5, restart=True, restartInterval=2)
        sched = AnnealingScheduler(ring4, cfg)
        temps, counters = [], []
        for r in range(5):
            sched.state.round = r
            sched.cool_down()
            sched.restart_check()
            temps.append(sched.state.temperature)
            counters.append(sched.state.restart_counter)
        assert temps == [1.0, 1.2, 1.0, 1.2, 1.0]
        assert counters == [1, 0, 1, 0, 1]

    def test_enhanced_reheat_resets_to_configured_value(self, ring4, make_config):
        cfg = make_config(enhanced=True, tempEnh=1.0, alphaEnh=0.5, minTempEnh=0.3,
                          restart=True, restartInterval=3)
        sched = AnnealingScheduler(ring4, cfg)
        temps = []
        for r in range(4):
            sched.state.round = r
            sched.cool_down()
            sched.restart_check()
            temps.append(sched.state.t_enh)
        assert temps == [0.5, 0.0, 0.0, 1.0]
        assert sched.state.restart_counter == 0

    def test_not_frozen_never_reheats(self, ring4, make_config):
        sched = AnnealingScheduler(ring4, make_config(temperature=5.0, restart=True, restartInterval=1))
        assert sched.restart_check() is False
        assert sched.state.restart_counter == 0

    def test_restart_disabled_stays_frozen(self, ring4, make_config):
        cfg = make_config(rounds=5, temperature=1.0, restart=False, restartInterval=1)
        sched = AnnealingScheduler(ring4, cfg)
        sched.run()
        assert sched.state.temperature == 1.0
        assert sched.state.restart_counter == 0


def test_run_state_active_temperature():
    assert RunState(enhanced=False, temperature=2.0, t_enh=0.5).active_temperature == 2.0
    assert RunState(enhanced=True, temperature=2.0, t_enh=0.5).active_temperature == 0.5
    assert RunState(enhanced=True, temperature=2.0, t_enh=0.0).frozen
    assert RunState(enhanced=False, temperature=1.0, t_enh=0.5).frozen


def test_four_cycle_single_round_is_deterministic(ring4, make_config):
    cfg = make_config(rounds=1, nodeSelectionPolicy="LOCAL", seed=42)
    sink = ListSink()
    sched = AnnealingScheduler(ring4, cfg, sink=sink)
    records = sched.run()

    # every node sees both neighbors and the cheapest improvement is the first one
    assert ring4.colors() == {0: 1, 1: 0, 2: 1, 3: 0}
    assert [r.as_tuple() for r in records] == [(0, 4, 4, 4)]
    assert sink.records == records
    assert sched.state.temperature == pytest.approx(1.997)

    again = build_graph(nx.cycle_graph(4), {0: 0, 1: 1, 2: 0, 3: 1})
    assert run_jabeja(again, cfg) == records
    assert again.colors() == ring4.colors()


@pytest.mark.parametrize("policy", ["LOCAL", "RANDOM", "HYBRID"])
@pytest.mark.parametrize("enhanced", [False, True])
def test_same_seed_reproduces_run(make_config, policy, enhanced):
    cfg = make_config(rounds=15, numPartitions=3, nodeSelectionPolicy=policy,
                      uniformRandomSampleSize=4, enhanced=enhanced, tempEnh=0.5)
    g1, g2 = random_graph(), random_graph()
    r1 = run_jabeja(g1, cfg, rng=RandomSource(9))
    r2 = run_jabeja(g2, cfg, rng=RandomSource(9))
    assert r1 == r2
    assert g1.colors() == g2.colors()


def test_run_executes_exactly_configured_rounds(make_config):
    cfg = make_config(rounds=7, numPartitions=3, nodeSelectionPolicy="HYBRID", uniformRandomSampleSize=3)
    records = run_jabeja(random_graph(), cfg)
    assert [r.round for r in records] == list(range(7))


def test_swap_count_is_cumulative_and_metrics_are_fresh(make_config):
    cfg = make_config(rounds=25, numPartitions=3, nodeSelectionPolicy="HYBRID", uniformRandomSampleSize=3)
    graph = random_graph(seed=4)
    records = run_jabeja(graph, cfg)
    swaps = [r.swaps for r in records]
    assert swaps == sorted(swaps)
    assert records[-1].edge_cut == edge_cut(graph)
    for r in records:
        assert isinstance(r.edge_cut, int) and r.edge_cut >= 0


def test_swaps_preserve_partition_sizes_and_labels(make_config):
    cfg = make_config(rounds=20, numPartitions=3, nodeSelectionPolicy="HYBRID", uniformRandomSampleSize=3)
    graph = random_graph(seed=2)
    before = graph.partition_sizes()
    run_jabeja(graph, cfg)
    assert graph.partition_sizes() == before
    assert set(graph.colors().values()) <= {0, 1, 2}


def test_partitioning_reduces_edge_cut(make_config):
    G = nx.connected_caveman_graph(4, 6)
    graph = build_graph(G, round_robin(G, 4))
    start = edge_cut(graph)
    cfg = make_config(rounds=100, numPartitions=4, nodeSelectionPolicy="HYBRID",
                      uniformRandomSampleSize=6, delta=0.01)
    records = run_jabeja(graph, cfg, rng=RandomSource(3))
    assert min(r.edge_cut for r in records) < start


def test_random_sample_larger_than_graph_rejected_before_run(ring4, make_config):
    with pytest.raises(ConfigError):
        AnnealingScheduler(ring4, make_config(nodeSelectionPolicy="RANDOM", uniformRandomSampleSize=4))


def test_local_policy_ignores_random_sample_size(ring4, make_config):
    AnnealingScheduler(ring4, make_config(nodeSelectionPolicy="LOCAL", uniformRandomSampleSize=10))


def test_colors_outside_partitions_rejected(ring4, make_config):
    with pytest.raises(ValueError):
        AnnealingScheduler(ring4, make_config(numPartitions=1))


def test_zero_rounds_emits_nothing(ring4, make_config):
    sink = ListSink()
    assert run_jabeja(ring4, make_config(rounds=0), sink=sink) == []
    assert sink.records == []


def test_round_swap_count_is_logged(ring4, make_config, caplog):
    cfg = make_config(rounds=1, nodeSelectionPolicy="LOCAL")
    with caplog.at_level(logging.DEBUG, logger="jabeja.algorithms.annealing"):
        run_jabeja(ring4, cfg)
    assert "round 0: 4 swaps at T=2.0" in caplog.text


def test_negative_alpha_rejected_before_any_round(ring4, make_config):
    with pytest.raises(ConfigError, match="alpha"):
        make_config(alpha=-1.0)
    assert ring4.colors() == {0: 0, 1: 1, 2: 0, 3: 1}
