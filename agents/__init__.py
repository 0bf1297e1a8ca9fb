"""
Agents package for Shadow Search.

This package contains the agents a host can ask for moves: the minimax
search agent with its position evaluator, and a random baseline.
"""

from .base_agent import Agent
from .random_agent import RandomAgent
from .heuristics import PositionEvaluator
from .minimax_agent import MiniMaxAgent, SearchNode, SearchEdge, GameTree, load_minimax_config
from .agent_registry import (
    AgentType, AgentRegistry, agent_registry, get_agent_registry,
    AgentFactory, create_agents_from_strings
)

__all__ = [
    'Agent',
    'RandomAgent',
    'PositionEvaluator',
    'MiniMaxAgent',
    'SearchNode',
    'SearchEdge',
    'GameTree',
    'load_minimax_config',
    'AgentType',
    'AgentRegistry',
    'agent_registry',
    'get_agent_registry',
    'AgentFactory',
    'create_agents_from_strings'
]
