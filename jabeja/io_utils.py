import csv
import io
import os
from typing import IO, List, Tuple, Union

import networkx as nx

from .config import RunConfig
from .partitioning.metrics import RoundRecord

TextOrPath = Union[str, os.PathLike, IO]

REPORT_DELIMITER = "\t\t"
REPORT_HEADER = (
    "# Migration is number of nodes that have changed color.\n\n"
    + REPORT_DELIMITER.join(["Round", "Edge-Cut", "Swaps", "Migrations", "Skipped"])
    + "\n"
)


class GraphFormatError(ValueError):
    pass


def _open_text(src: TextOrPath):
    """Return a text-mode file handle and a flag indicating whether to close it.

    Accepts a filesystem path, a text IO object, or a BytesIO buffer.
    """
    if isinstance(src, (str, os.PathLike)):
        f = open(src, 'r', newline='')
        return f, True
    if isinstance(src, io.BytesIO):
        src.seek(0)
        f = io.TextIOWrapper(src, encoding='utf-8', newline='')
        return f, True
    if hasattr(src, 'read'):
        if hasattr(src, 'seek'):
            src.seek(0)
        return src, False
    raise TypeError("Unsupported input type; expected path or file-like object")


def load_metis_graph(src: TextOrPath) -> nx.Graph:
    """Read a METIS adjacency file.

    First non-comment line is ``n m [fmt]``; the i-th following line lists the
    neighbors of node i. Ids are 1-based and kept as such. Lines starting with
    ``%`` are comments.
    """
    f, should_close = _open_text(src)
    try:
        lines = [ln.strip() for ln in f if not ln.lstrip().startswith('%')]
    finally:
        if should_close:
            f.close()
    while lines and not lines[0]:
        lines.pop(0)
    if not lines:
        raise GraphFormatError("empty graph file")
    header = lines[0].split()
    try:
        n, m = int(header[0]), int(header[1])
    except (IndexError, ValueError):
        raise GraphFormatError(f"bad header line: {lines[0]!r}") from None
    body = lines[1:]
    # trailing blank lines are padding, inner blank lines are isolated nodes
    while len(body) > n and not body[-1]:
        body.pop()
    if len(body) < n:
        body.extend([''] * (n - len(body)))
    if len(body) != n:
        raise GraphFormatError(f"header says {n} nodes but file has {len(body)} adjacency lines")

    G = nx.Graph()
    G.add_nodes_from(range(1, n + 1))
    for i, line in enumerate(body, start=1):
        for tok in line.split():
            try:
                v = int(tok)
            except ValueError:
                raise GraphFormatError(f"line {i}: bad neighbor id {tok!r}") from None
            if not 1 <= v <= n:
                raise GraphFormatError(f"line {i}: neighbor id {v} out of range 1..{n}")
            if v != i:
                G.add_edge(i, v)
    if G.number_of_edges() != m:
        raise GraphFormatError(f"header says {m} edges but adjacency holds {G.number_of_edges()}")
    return G


def save_metis_graph(G: nx.Graph, path: str) -> None:
    nodes = sorted(G.nodes())
    index = {u: i for i, u in enumerate(nodes, start=1)}
    edges = sum(1 for u, v in G.edges() if u != v)
    with open(path, 'w') as f:
        f.write(f"{len(nodes)} {edges}\n")
        for u in nodes:
            nbrs = sorted(index[v] for v in G.neighbors(u) if v != u)
            f.write(" ".join(str(v) for v in nbrs) + "\n")


def load_edge_list(src: TextOrPath) -> nx.Graph:
    """Two-column ``u,v`` CSV with integer ids; ``#`` lines are comments."""
    edges: List[Tuple[int, int]] = []
    f, should_close = _open_text(src)
    try:
        reader = csv.reader(f)
        for row in reader:
            if not row or row[0].strip().startswith('#'):
                continue
            if len(row) < 2:
                continue
            try:
                u, v = int(row[0]), int(row[1])
            except ValueError:
                raise GraphFormatError(f"bad edge row: {row!r}") from None
            edges.append((u, v))
    finally:
        if should_close:
            f.close()
    G = nx.Graph()
    for u, v in edges:
        G.add_node(u)
        G.add_node(v)
        if u != v:
            G.add_edge(u, v)
    return G


def load_graph(path: str) -> nx.Graph:
    if str(path).lower().endswith('.csv'):
        return load_edge_list(path)
    return load_metis_graph(path)


def report_filename(config: RunConfig) -> str:
    """File name that encodes the run's parameters."""
    parts = [
        os.path.basename(config.graph_file_path),
        "NS", config.node_selection_policy.name,
        "GICP", config.init_color_policy.name,
        "T", str(config.temperature),
        "D", str(config.delta),
        "RNSS", str(config.random_neighbor_sample_size),
        "URSS", str(config.uniform_random_sample_size),
        "A", str(config.alpha),
        "R", str(config.rounds),
    ]
    return "_".join(parts) + ".txt"


class ReportFileSink:
    """Writes one tab-delimited line per round; header goes in on the first record."""

    def __init__(self, config: RunConfig):
        self.output_dir = config.output_dir
        self.path = os.path.join(config.output_dir, report_filename(config))
        self._created = False

    def write(self, record: RoundRecord) -> None:
        if not self._created:
            os.makedirs(self.output_dir, exist_ok=True)
            with open(self.path, 'w') as f:
                f.write(REPORT_HEADER)
            self._created = True
        with open(self.path, 'a') as f:
            f.write(REPORT_DELIMITER.join(str(v) for v in record.as_tuple()) + "\n")


class ListSink:
    def __init__(self):
        self.records: List[RoundRecord] = []

    def write(self, record: RoundRecord) -> None:
        self.records.append(record)


def load_report(path: str) -> List[RoundRecord]:
    records: List[RoundRecord] = []
    with open(path) as f:
        for line in f:
            parts = line.split()
            if not parts or not parts[0].isdigit():
                continue
            r, cut, swaps, mig = (int(p) for p in parts[:4])
            records.append(RoundRecord(round=r, edge_cut=cut, swaps=swaps, migrations=mig))
    return records
