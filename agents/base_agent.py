"""
Base agent classes for Shadow Search.

This module defines the abstract base class for agents that can play the game.
The host talks to an agent through a single call, notify(): it hands over the
agent's location, the legal moves for this turn and a correlation token, and
gets back one of those moves together with the same token.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Any, List, Tuple
from ShadowSearch.core.game import ShadowSearchGame, Colour, Move


class Agent(ABC):
    """Abstract base class for all Shadow Search agents"""

    def __init__(self, colour: Colour):
        self.colour = colour
        self.player = colour.player

    @abstractmethod
    def notify(self, location: int, moves: List[Move], token: Any) -> Tuple[Move, Any]:
        """
        Choose a move for this turn.

        Args:
            location: The agent's current location
            moves: Legal moves for this turn, as enumerated by the host
            token: Correlation token, returned unchanged

        Returns:
            Tuple of (one move from moves, token)

        Raises:
            ValueError: if moves is empty
        """
        pass

    def choose_move(self, game: ShadowSearchGame) -> Move:
        """Ask this agent for a move in the live game, acting as the host"""
        state = game.game_state
        if state is None:
            raise ValueError("Game not initialized")
        if state.current_player != self.colour:
            raise ValueError(f"It is {state.current_player.value}'s turn, not {self.colour.value}'s")

        moves = game.get_valid_moves(state, self.colour)
        token = uuid.uuid4().hex
        move, returned_token = self.notify(game.get_player_location(self.colour), moves, token)
        if returned_token != token:
            raise ValueError(f"{self.colour.value} agent returned a foreign token")
        return move

    def play_turn(self, game: ShadowSearchGame) -> Move:
        """Choose a move and play it on the live game"""
        move = self.choose_move(game)
        game.make_move(move)
        return move
