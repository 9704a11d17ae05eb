from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple


@dataclass
class Node:
    id: int
    color: int
    init_color: int  # color at load time, only used for migration accounting
    neighbors: Tuple[int, ...] = field(default_factory=tuple)


@dataclass
class Graph:
    # node id -> Node; topology is fixed for a run, only colors change
    nodes: Dict[int, Node] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        for nid in self.ids():
            yield self.nodes[nid]

    def __contains__(self, nid: int) -> bool:
        return nid in self.nodes

    def get(self, nid: int) -> Node:
        return self.nodes[nid]

    def ids(self) -> List[int]:
        """Node ids in the fixed iteration order of a run (ascending)."""
        return sorted(self.nodes.keys())

    def neighbors(self, nid: int) -> Tuple[int, ...]:
        return self.nodes[nid].neighbors

    def number_of_edges(self) -> int:
        return sum(len(n.neighbors) for n in self.nodes.values()) // 2

    def colors(self) -> Dict[int, int]:
        return {nid: n.color for nid, n in self.nodes.items()}

    def partition_sizes(self) -> Dict[int, int]:
        sizes: Dict[int, int] = {}
        for n in self.nodes.values():
            sizes[n.color] = sizes.get(n.color, 0) + 1
        return dict(sorted(sizes.items()))
