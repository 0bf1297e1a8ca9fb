#!/usr/bin/env python3
"""
Board graph loader for Shadow Search.
Loads the board from CSV edge lists into a networkx multigraph.
"""

import os
from typing import Dict, List, Optional, Tuple

import networkx as nx
import pandas as pd

from ShadowSearch.core.game import ShadowSearchGame, TransportType


class BoardConfigurationError(ValueError):
    """The board file cannot be turned into a usable, connected graph"""


def load_board_graph_from_csv(edges_file: str = "data/edges.csv",
                              nodes_file: Optional[str] = None) -> Tuple[nx.MultiGraph, Dict[int, Tuple[float, float]]]:
    """
    Load the board graph and node positions from CSV files

    Args:
        edges_file: CSV with source, target and edge_type columns
        nodes_file: Optional CSV with node_id, x and y columns

    Returns:
        - MultiGraph: NetworkX multigraph with transport type edges
        - Dict: Node positions as {node_id: (x, y)}, empty without a nodes file

    Raises:
        BoardConfigurationError: if the board is missing, malformed or disconnected
    """
    if not os.path.exists(edges_file):
        raise BoardConfigurationError(f"Board edge file not found at {edges_file}")

    try:
        df = pd.read_csv(edges_file)
    except pd.errors.EmptyDataError as e:
        raise BoardConfigurationError(f"Board edge file {edges_file} is empty") from e
    missing = {'source', 'target', 'edge_type'} - set(df.columns)
    if missing:
        raise BoardConfigurationError(f"{edges_file} is missing columns: {sorted(missing)}")

    # MultiGraph keeps one edge per transport between the same nodes
    G = nx.MultiGraph()
    valid_codes = {t.value for t in TransportType}
    for _, row in df.iterrows():
        source = int(row['source'])
        target = int(row['target'])
        edge_type = int(row['edge_type'])
        if edge_type not in valid_codes:
            raise BoardConfigurationError(f"Unknown transport code {edge_type} on edge {source}-{target}")
        G.add_edge(source, target, edge_type=edge_type, transport_type=TransportType(edge_type).name.lower())

    node_positions = {}
    if nodes_file is not None:
        if not os.path.exists(nodes_file):
            raise BoardConfigurationError(f"Board node file not found at {nodes_file}")
        nodes_df = pd.read_csv(nodes_file)
        for _, row in nodes_df.iterrows():
            node_id = int(row['node_id'])
            G.add_node(node_id)
            node_positions[node_id] = (float(row['x']), float(row['y']))

    validate_board_graph(G)
    return G, node_positions


def validate_board_graph(graph: nx.Graph) -> nx.Graph:
    """Reject boards the search cannot rely on"""
    if graph is None or graph.number_of_nodes() == 0:
        raise BoardConfigurationError("Board graph is empty")
    if not nx.is_connected(graph):
        components = nx.number_connected_components(graph)
        raise BoardConfigurationError(f"Board graph is disconnected ({components} components)")
    return graph


def save_board_graph_to_csv(graph: nx.MultiGraph, edges_file: str,
                            node_positions: Dict[int, Tuple[float, float]] = None,
                            nodes_file: str = None) -> None:
    """Write a board in the format read by load_board_graph_from_csv"""
    os.makedirs(os.path.dirname(edges_file) or ".", exist_ok=True)
    rows: List[Dict] = [
        {'source': u, 'target': v, 'edge_type': data.get('edge_type', 1)}
        for u, v, data in graph.edges(data=True)
    ]
    pd.DataFrame(rows, columns=['source', 'target', 'edge_type']).to_csv(edges_file, index=False)

    if node_positions and nodes_file:
        node_rows = [{'node_id': n, 'x': x, 'y': y} for n, (x, y) in node_positions.items()]
        pd.DataFrame(node_rows, columns=['node_id', 'x', 'y']).to_csv(nodes_file, index=False)


def create_board_game(num_detectives: int = 3,
                      edges_file: str = "data/edges.csv",
                      nodes_file: Optional[str] = None) -> ShadowSearchGame:
    """
    Create a game on a board loaded from CSV

    Args:
        num_detectives: Number of detective players
        edges_file: Path to the edge list CSV
        nodes_file: Optional path to the node positions CSV

    Returns:
        ShadowSearchGame: Game instance with loaded board
    """
    graph, node_positions = load_board_graph_from_csv(edges_file, nodes_file)
    game = ShadowSearchGame(graph, num_detectives)

    # Store node positions for display
    game.node_positions = node_positions

    return game
