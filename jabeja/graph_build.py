from typing import Dict

import networkx as nx

from .models import Graph, Node


def build_graph(G: nx.Graph, colors: Dict[int, int]) -> Graph:
    """Engine graph from a networkx graph and an initial color per node.

    Self loops are dropped and neighbor tuples are sorted so that sampling is
    reproducible for a given seed.
    """
    graph = Graph()
    for u in sorted(G.nodes()):
        if u not in colors:
            raise ValueError(f"node {u} has no initial color")
        neighbors = tuple(sorted(v for v in G.neighbors(u) if v != u))
        c = int(colors[u])
        graph.nodes[u] = Node(id=u, color=c, init_color=c, neighbors=neighbors)
    return graph


def to_networkx(graph: Graph) -> nx.Graph:
    G = nx.Graph()
    for node in graph:
        G.add_node(node.id, color=node.color, init_color=node.init_color)
    for node in graph:
        for nid in node.neighbors:
            if node.id < nid:
                G.add_edge(node.id, nid)
    return G
