"""
Weighted shortest paths over the board graph.

Edge costs come from a caller-supplied weigher that maps a transport type to a
non-negative number; the cost of an edge depends only on its transport, never on
its endpoints. Where several transports link the same pair of nodes the cheapest
one is used.
"""

from dataclasses import dataclass
from typing import Callable, Tuple
import networkx as nx

from .game import TransportType, edge_transports

Weigher = Callable[[TransportType], float]


class NoPathError(Exception):
    """Raised when no route joins two board nodes"""

    def __init__(self, start: int, goal: int):
        super().__init__(f"No path between {start} and {goal}")
        self.start = start
        self.goal = goal


@dataclass(frozen=True)
class ShortestPathResult:
    """Route between two nodes: visited nodes, (source, target, transport) edges and total weight"""
    nodes: Tuple[int, ...]
    edges: Tuple[Tuple[int, int, TransportType], ...]
    weight: float

    @property
    def edge_count(self) -> int:
        return len(self.edges)


class ShortestPathCalculator:
    """Dijkstra over a read-only board graph. Holds no state besides the graph."""

    def __init__(self, graph: nx.Graph):
        self.graph = graph

    def _edge_weight(self, weigher: Weigher, source: int, target: int) -> float:
        weights = []
        for transport in edge_transports(self.graph, source, target):
            weight = weigher(transport)
            if weight < 0:
                raise ValueError(f"Negative weight {weight} for {transport.name}")
            weights.append(weight)
        return min(weights)

    def _cheapest_transport(self, weigher: Weigher, source: int, target: int) -> TransportType:
        # min keeps the first of equal candidates, so ties resolve in enum order
        return min(edge_transports(self.graph, source, target), key=weigher)

    def get_result(self, start: int, goal: int, weigher: Weigher) -> ShortestPathResult:
        """
        Calculate the cheapest route from start to goal.

        Args:
            start: Source node ID
            goal: Target node ID
            weigher: Cost of travelling one edge by a given transport

        Returns:
            ShortestPathResult for the route

        Raises:
            NoPathError: start and goal are not connected
            ValueError: either node is missing from the board
        """
        for node in (start, goal):
            if not self.graph.has_node(node):
                raise ValueError(f"Node {node} is not on the board")

        try:
            nodes = nx.dijkstra_path(
                self.graph, start, goal,
                weight=lambda u, v, _: self._edge_weight(weigher, u, v)
            )
        except nx.NetworkXNoPath as e:
            raise NoPathError(start, goal) from e

        edges = []
        total_weight = 0
        for source, target in zip(nodes, nodes[1:]):
            transport = self._cheapest_transport(weigher, source, target)
            edges.append((source, target, transport))
            total_weight += weigher(transport)

        return ShortestPathResult(tuple(nodes), tuple(edges), total_weight)
