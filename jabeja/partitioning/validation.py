from typing import Optional

from ..models import Graph


def adjacency_symmetric(graph: Graph) -> bool:
    for node in graph.nodes.values():
        for nid in node.neighbors:
            other = graph.nodes.get(nid)
            if other is None or node.id not in other.neighbors:
                return False
    return True


def no_self_loops(graph: Graph) -> bool:
    return all(node.id not in node.neighbors for node in graph.nodes.values())


def colors_in_range(graph: Graph, num_partitions: int) -> bool:
    for node in graph.nodes.values():
        if not 0 <= node.color < num_partitions:
            return False
        if not 0 <= node.init_color < num_partitions:
            return False
    return True


def validate_graph(graph: Graph, num_partitions: Optional[int] = None) -> None:
    """Raise ValueError if the graph cannot be partitioned as loaded."""
    if not adjacency_symmetric(graph):
        raise ValueError("adjacency is not symmetric or references unknown nodes")
    if not no_self_loops(graph):
        raise ValueError("graph contains self loops")
    if num_partitions is not None and not colors_in_range(graph, num_partitions):
        raise ValueError(f"node colors must be in 0..{num_partitions - 1}")
