"""
Agent Registry for Shadow Search.

This module maps agent types to implementations and provides the factory a host
uses to obtain a player for each colour, with hooks around a game.
"""

from typing import Any, Callable, Dict, List, Tuple
from enum import Enum
from ShadowSearch.core.game import ShadowSearchGame, Colour
from game_controls.display_utils import VerbosityLevel
from .base_agent import Agent
from .random_agent import RandomAgent
from .minimax_agent import MiniMaxAgent


class AgentType(Enum):
    """Available agent types"""
    RANDOM = "random"
    MINIMAX = "minimax"


AgentBuilder = Callable[..., Agent]


def _build_random_agent(view: ShadowSearchGame, colour: Colour, **kwargs) -> Agent:
    return RandomAgent(colour, seed=kwargs.get('seed'))


def _build_minimax_agent(view: ShadowSearchGame, colour: Colour, **kwargs) -> Agent:
    return MiniMaxAgent(view, colour, **kwargs)


class AgentRegistry:
    """Registry for managing different agent implementations"""

    def __init__(self):
        self._agents: Dict[AgentType, Tuple[AgentBuilder, str]] = {
            AgentType.RANDOM: (_build_random_agent, "Random - Plays any legal move"),
            AgentType.MINIMAX: (_build_minimax_agent, "MiniMax - Alpha-beta game tree search over distance and connectivity heuristics"),
        }

    def get_available_agent_types(self) -> List[AgentType]:
        return list(self._agents.keys())

    def get_agent_description(self, agent_type: AgentType) -> str:
        return self._agents[agent_type][1]

    def create_agent(self, agent_type: AgentType, view: ShadowSearchGame, colour: Colour, **kwargs) -> Agent:
        """Create an agent of the specified type for colour"""
        if agent_type not in self._agents:
            raise ValueError(f"Unknown agent type: {agent_type}")
        builder = self._agents[agent_type][0]
        return builder(view, colour, **kwargs)

    def register_agent(self, agent_type: AgentType, builder: AgentBuilder, description: str):
        """Register a new agent type"""
        self._agents[agent_type] = (builder, description)


# Global registry instance
agent_registry = AgentRegistry()


def get_agent_registry() -> AgentRegistry:
    """Get the global agent registry instance"""
    return agent_registry


class AgentFactory:
    """
    Hands a host one agent per colour it asks for.

    ready() and finish() run before the first and after the last move of a game.
    """

    def __init__(self, agent_type: AgentType = AgentType.MINIMAX,
                 verbosity: int = VerbosityLevel.BASIC, **agent_kwargs: Any):
        self.agent_type = agent_type
        self.verbosity = verbosity
        self.agent_kwargs = agent_kwargs
        self.players: Dict[Colour, Agent] = {}

    def get_player(self, colour: Colour, view: ShadowSearchGame) -> Agent:
        agent = get_agent_registry().create_agent(self.agent_type, view, colour, **self.agent_kwargs)
        self.players[colour] = agent
        return agent

    def ready(self):
        if self.verbosity >= VerbosityLevel.BASIC:
            print("Game started!")

    def finish(self):
        if self.verbosity >= VerbosityLevel.BASIC:
            print("Game ended!")
        self.players.clear()


def create_agents_from_strings(view: ShadowSearchGame, choices: Dict[Colour, str], **kwargs) -> Dict[Colour, Agent]:
    """Create agents from agent type strings such as 'minimax' or 'random'"""
    registry = get_agent_registry()
    agents = {}
    for colour, name in choices.items():
        try:
            agent_type = AgentType(name)
        except ValueError:
            raise ValueError(f"Unknown agent type '{name}'. Choose from "
                             f"{[t.value for t in registry.get_available_agent_types()]}") from None
        agent_kwargs = kwargs if agent_type == AgentType.MINIMAX else {}
        agents[colour] = registry.create_agent(agent_type, view, colour, **agent_kwargs)
    return agents
