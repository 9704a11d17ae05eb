import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..models import Graph

logger = logging.getLogger("jabeja.partitioning.metrics")


@dataclass(frozen=True)
class RoundRecord:
    round: int
    edge_cut: int
    swaps: int  # cumulative since the start of the run
    migrations: int

    def as_tuple(self):
        return (self.round, self.edge_cut, self.swaps, self.migrations)


def edge_cut(graph: Graph) -> int:
    """Edges whose endpoints hold different colors.

    Every crossing edge is seen once from each endpoint, so the raw count is
    always even.
    """
    nodes = graph.nodes
    gray_links = 0
    for node in nodes.values():
        c = node.color
        for nid in node.neighbors:
            if nodes[nid].color != c:
                gray_links += 1
    return gray_links // 2


def migrations(graph: Graph) -> int:
    return sum(1 for n in graph.nodes.values() if n.color != n.init_color)


class MetricsReporter:
    """Recomputes per-round metrics from the graph and hands them to a sink.

    A sink is anything with a write(record) method; None keeps records local.
    """

    def __init__(self, graph: Graph, sink=None):
        self.graph = graph
        self.sink = sink

    def report(self, round_no: int, swap_count: int) -> RoundRecord:
        record = RoundRecord(
            round=round_no,
            edge_cut=edge_cut(self.graph),
            swaps=swap_count,
            migrations=migrations(self.graph),
        )
        logger.info(
            "round: %d, edge cut: %d, swaps: %d, migrations: %d",
            record.round, record.edge_cut, record.swaps, record.migrations,
        )
        if self.sink is not None:
            self.sink.write(record)
        return record


def summary(graph: Graph, records: Sequence[RoundRecord], initial_edge_cut: Optional[int] = None) -> str:
    n = len(graph)
    m = graph.number_of_edges()
    sizes = graph.partition_sizes()
    final: Optional[RoundRecord] = records[-1] if records else None
    lines: List[str] = [
        f"Nodes: {n}  Edges: {m}",
        f"Partitions: {len(sizes)}  Sizes: {sizes}",
    ]
    if initial_edge_cut is not None:
        lines.append(f"Initial edge cut: {initial_edge_cut}")
    if final is None:
        lines.append(f"Edge cut: {edge_cut(graph)}  (no rounds run)")
    else:
        lines.append(f"Rounds: {final.round + 1}")
        lines.append(f"Final edge cut: {final.edge_cut}  Swaps: {final.swaps}  Migrations: {final.migrations}")
        best = min(records, key=lambda r: r.edge_cut)
        lines.append(f"Best edge cut: {best.edge_cut} (round {best.round})")
    return "\n".join(lines) + "\n"
