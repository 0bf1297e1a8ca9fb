"""Example boards and game configurations"""

from typing import Dict, List

import networkx as nx

from ShadowSearch.core.game import (
    ShadowSearchGame, TicketType, TransportType, create_rounds
)


def _add_route(graph: nx.MultiGraph, source: int, target: int, transport: TransportType):
    graph.add_edge(source, target, edge_type=transport.value, transport_type=transport.name.lower())


def create_triangle_pendant_board() -> nx.MultiGraph:
    """Triangle 1-2-3 with pendant nodes 4 (on 2) and 5 (on 3), taxi only"""
    graph = nx.MultiGraph()
    for source, target in [(1, 2), (2, 3), (1, 3), (4, 2), (5, 3)]:
        _add_route(graph, source, target, TransportType.TAXI)
    return graph


def create_star_board(degree: int) -> nx.MultiGraph:
    """Hub 0 joined by taxi to nodes 1..degree"""
    graph = nx.MultiGraph()
    for leaf in range(1, degree + 1):
        _add_route(graph, 0, leaf, TransportType.TAXI)
    return graph


def create_mixed_transport_board() -> nx.MultiGraph:
    """
    Small board using every transport.

    A 12-node taxi ring, a bus line across it, an underground shortcut and a
    ferry that only Mr. X can take.
    """
    graph = nx.MultiGraph()
    for node in range(1, 13):
        _add_route(graph, node, node % 12 + 1, TransportType.TAXI)
    for source, target in [(1, 4), (4, 7), (7, 10), (10, 1)]:
        _add_route(graph, source, target, TransportType.BUS)
    _add_route(graph, 2, 8, TransportType.UNDERGROUND)
    _add_route(graph, 5, 11, TransportType.FERRY)
    # Cross streets so some nodes are well connected
    for source, target in [(1, 7), (1, 5), (1, 9), (7, 3), (7, 11)]:
        _add_route(graph, source, target, TransportType.TAXI)
    return graph


def create_triangle_pendant_game(mr_x_tickets: Dict[TicketType, int] = None,
                                 reveal_rounds: List[int] = (),
                                 max_rounds: int = 10) -> ShadowSearchGame:
    """Mr. X on 1 and a single detective on 4 of the triangle-and-pendants board"""
    game = ShadowSearchGame(create_triangle_pendant_board(), num_detectives=1,
                            rounds=create_rounds(max_rounds, reveal_rounds))
    if mr_x_tickets is None:
        mr_x_tickets = {TicketType.TAXI: 10, TicketType.DOUBLE_MOVE: 1}
    game.initialize_shadow_search_game([4], 1, mr_x_tickets=mr_x_tickets)
    return game


def create_demo_game(num_detectives: int = 2) -> ShadowSearchGame:
    """Game on the mixed transport board with standard tickets and reveal rounds"""
    if num_detectives > 3:
        raise ValueError("The demo board has room for at most 3 detectives")
    game = ShadowSearchGame(create_mixed_transport_board(), num_detectives)
    game.initialize_shadow_search_game([3, 9, 12][:num_detectives], 6)
    return game
