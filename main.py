import argparse
import logging

from jabeja.algorithms.annealing import AnnealingScheduler
from jabeja.config import ConfigError, GraphInitColorPolicy, NodeSelectionPolicy, RunConfig
from jabeja.graph_build import build_graph
from jabeja.io_utils import ReportFileSink, load_graph
from jabeja.partitioning.initial_colors import assign_initial_colors
from jabeja.partitioning.metrics import edge_cut, summary
from jabeja.rand import RandomSource

logger = logging.getLogger("jabeja.cli")


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Ja-be-Ja – distributed-style balanced graph partitioning")
    # Input / output
    p.add_argument('--graph', dest='graphFilePath', required=True,
                   help='METIS adjacency file, or an edge list CSV (u,v)')
    p.add_argument('--output', dest='outputDir', default='./output', help='Directory for the round report')

    # Partitioning
    p.add_argument('--partitions', dest='numPartitions', type=int, default=4)
    p.add_argument('--rounds', type=int, default=1000)
    p.add_argument('--seed', type=int, default=0)
    p.add_argument('--init-color', dest='initColorPolicy', default='ROUND_ROBIN',
                   choices=[c.name for c in GraphInitColorPolicy])
    p.add_argument('--node-selection', dest='nodeSelectionPolicy', default='HYBRID',
                   choices=[c.name for c in NodeSelectionPolicy])
    p.add_argument('--neighbor-sample', dest='randomNeighborSampleSize', type=int, default=3,
                   help='Neighbors sampled per node for the local policy')
    p.add_argument('--random-sample', dest='uniformRandomSampleSize', type=int, default=6,
                   help='Graph-wide ids sampled per node for the random policy')
    p.add_argument('--alpha', type=float, default=2.0, help='Exponent of the local cost function')

    # Standard annealing
    p.add_argument('--temperature', type=float, default=2.0)
    p.add_argument('--delta', type=float, default=0.003)

    # Reheat
    p.add_argument('--restart', action='store_true')
    p.add_argument('--restart-interval', dest='restartInterval', type=int, default=100)

    # Enhanced annealing
    p.add_argument('--enhanced', action='store_true')
    p.add_argument('--temp-enh', dest='tempEnh', type=float, default=1.0)
    p.add_argument('--min-temp-enh', dest='minTempEnh', type=float, default=1e-5)
    p.add_argument('--alpha-enh', dest='alphaEnh', type=float, default=0.9)
    p.add_argument('--iter-enh', dest='iterEnh', type=int, default=1)

    p.add_argument('--log-level', default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )
    options = {k: v for k, v in vars(args).items() if k != 'log_level'}
    try:
        config = RunConfig.from_dict(options)
    except ConfigError as exc:
        raise SystemExit(f"Configuration error: {exc}")

    G = load_graph(config.graph_file_path)
    logger.info("loaded %s: %d nodes, %d edges", config.graph_file_path, G.number_of_nodes(), G.number_of_edges())

    # one random stream for initial colors and the run itself
    rng = RandomSource(config.seed)
    colors = assign_initial_colors(G, config.num_partitions, config.init_color_policy, rng)
    graph = build_graph(G, colors)
    initial_cut = edge_cut(graph)

    sink = ReportFileSink(config)
    try:
        scheduler = AnnealingScheduler(graph, config, rng=rng, sink=sink)
    except (ConfigError, ValueError) as exc:
        raise SystemExit(f"Cannot start run: {exc}")
    records = scheduler.run()

    print(summary(graph, records, initial_edge_cut=initial_cut))
    if records:
        print(f"Saved: {sink.path}")


if __name__ == '__main__':
    main()
