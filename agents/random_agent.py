"""
Random agent implementation for Shadow Search.

Picks any supplied move. Used as a baseline and for testing hosts.
"""

import random
from typing import Any, List, Optional, Tuple
from ShadowSearch.core.game import Colour, Move
from .base_agent import Agent


class RandomAgent(Agent):
    """Agent that makes random valid moves"""

    def __init__(self, colour: Colour, seed: Optional[int] = None):
        super().__init__(colour)
        self.rng = random.Random(seed)

    def notify(self, location: int, moves: List[Move], token: Any) -> Tuple[Move, Any]:
        if not moves:
            raise ValueError(f"No legal moves supplied to {self.colour.value} at {location}")
        return self.rng.choice(moves), token
