"""
Shadow Search Game Package

Rules, board loading and shortest-path support for the hidden-player pursuit
game played by the agents in the top-level agents package.
"""

from .core.game import (
    Player, Colour, TransportType, TicketType,
    PassMove, TicketMove, DoubleMove, Move,
    GameState, ShadowSearchGame,
    MRX_COLOUR, DETECTIVE_COLOURS, create_rounds
)
from .core.pathfinding import ShortestPathCalculator, ShortestPathResult, NoPathError
from .services.board_loader import (
    BoardConfigurationError, load_board_graph_from_csv, create_board_game
)

__version__ = "1.0.0"

__all__ = [
    # Core classes
    "Player", "Colour", "TransportType", "TicketType",
    "PassMove", "TicketMove", "DoubleMove", "Move",
    "GameState", "ShadowSearchGame",
    "MRX_COLOUR", "DETECTIVE_COLOURS", "create_rounds",

    # Shortest paths
    "ShortestPathCalculator", "ShortestPathResult", "NoPathError",

    # Board loading
    "BoardConfigurationError", "load_board_graph_from_csv", "create_board_game",
]
