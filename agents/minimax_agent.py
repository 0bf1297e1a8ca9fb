"""
Minimax agents for Shadow Search.

The agent chooses a move by growing a game tree from the current state to a fixed
depth, scoring states with the PositionEvaluator and pruning with alpha-beta.
Mr. X is always the maximising side and every detective ply is a minimising ply.
"""

import os
import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ShadowSearch.core.game import ShadowSearchGame, GameState, Colour, Move
from ShadowSearch.services.board_loader import validate_board_graph
from game_controls.display_utils import GameDisplay, VerbosityLevel, format_move
from .base_agent import Agent
from .heuristics import PositionEvaluator


def load_minimax_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load minimax configuration from JSON file."""
    if config_path is None:
        config_path = Path(__file__).parent / "configs" / "minimax_config.json"

    if os.path.exists(config_path):
        with open(config_path, 'r') as f:
            return json.load(f)
    else:
        raise FileNotFoundError(f"Minimax config file not found at {config_path}")


class SearchNode:
    """
    A node of the game tree: one game state and its heuristic score.

    Every node but the root has exactly one incoming edge carrying the move that
    produced its state.
    """

    def __init__(self, game_state: GameState, score: Optional[float] = None):
        self.game_state = game_state
        self.score = score
        self.incoming: Optional['SearchEdge'] = None

    @property
    def move(self) -> Optional[Move]:
        return self.incoming.move if self.incoming is not None else None

    @property
    def is_root(self) -> bool:
        return self.incoming is None


class SearchEdge:
    """Links parent to child with the move that turns one state into the other"""

    def __init__(self, source: SearchNode, target: SearchNode, move: Move):
        self.source = source
        self.target = target
        self.move = move
        self.value: Optional[float] = None  # first-level edges only; a bound, not exact, for moves cut off by pruning
        target.incoming = self


class GameTree:
    """
    Root of one search and its first-level edges.

    Deeper nodes only live while their parent is being explored, so a finished
    search keeps just what move selection needs.
    """

    def __init__(self, root_state: GameState):
        self.head = SearchNode(root_state)
        self.first_level_edges: List[SearchEdge] = []

    def add_first_level_child(self, move: Move, child_state: GameState) -> SearchNode:
        child = SearchNode(child_state)
        self.first_level_edges.append(SearchEdge(self.head, child, move))
        return child

    def get_first_level_scores(self) -> List[float]:
        return [edge.target.score for edge in self.first_level_edges]


class MiniMaxAgent(Agent):
    """
    Agent choosing moves with depth-bounded minimax and alpha-beta pruning.

    A fresh tree is built for every request and discarded once the move is chosen.
    """

    def __init__(self,
                 view: ShadowSearchGame,
                 colour: Colour,
                 depth: Optional[int] = None,
                 max_nodes: Optional[int] = None,
                 use_pruning: Optional[bool] = None,
                 config_path: Optional[str] = None,
                 config: Optional[Dict[str, Any]] = None,
                 verbosity: int = VerbosityLevel.SILENT):
        """
        Initialize minimax agent.

        Args:
            view: The game this agent plays in; rules engine, board and live state
            colour: Colour controlled by this agent
            depth: Plies to search (overrides config)
            max_nodes: Expanded-node budget, None for unlimited (overrides config)
            use_pruning: Disable to expand the full tree (overrides config)
            config_path: Path to minimax config file
            config: Already parsed configuration, takes precedence over config_path
            verbosity: VerbosityLevel for search output
        """
        super().__init__(colour)
        # Every score depends on shortest routes, so a broken board is fatal here
        validate_board_graph(view.graph)

        self.view = view
        self.config = config if config is not None else load_minimax_config(config_path)
        search_params = self.config.get('search_parameters', {})

        self.depth = depth if depth is not None else search_params.get('depth', 12)
        self.max_nodes = max_nodes if max_nodes is not None else search_params.get('max_nodes')
        self.use_pruning = use_pruning if use_pruning is not None else search_params.get('use_pruning', True)
        self.root_always_maximises = search_params.get('root_always_maximises', True)

        self.verbosity = verbosity
        self.display = GameDisplay(verbosity)
        self.evaluator = PositionEvaluator(view, colour, self.config, verbosity)

        self._score_cache: Dict[Tuple[GameState, Optional[Move]], float] = {}
        self._nodes_expanded = 0
        self._evaluations = 0
        self._cache_hits = 0
        self._cutoffs = 0

        self.statistics = {
            'total_searches': 0,
            'total_nodes_expanded': 0,
            'total_evaluations': 0,
            'total_cache_hits': 0,
            'total_cutoffs': 0,
            'total_search_time': 0.0,
            'avg_search_time': 0.0,
            'last_nodes_expanded': 0,
            'last_search_time': 0.0,
            'last_root_score': None
        }

    def notify(self, location: int, moves: List[Move], token: Any) -> Tuple[Move, Any]:
        """Build this agent's view of the game, search it and hand back the chosen move"""
        if not moves:
            raise ValueError(f"No legal moves supplied to {self.colour.value} at {location}")

        state = self.view.get_player_view(self.colour).with_location(self.colour, location)
        move, _ = self.get_ai_move(state, moves)
        return move, token

    def get_ai_move(self, state: GameState, moves: List[Move]) -> Tuple[Move, float]:
        """
        Search from state and pick one of moves.

        Returns:
            Tuple of (chosen move, its minimax value)
        """
        if not moves:
            raise ValueError("Cannot choose from an empty move list")

        start_time = time.time()
        self._reset_search_counters()

        tree = GameTree(state)
        maximising = self.colour.is_mr_x
        try:
            move, score = self.score(tree, moves, self.depth, maximising)
        finally:
            self._score_cache = {}

        search_time = time.time() - start_time
        self._update_statistics(search_time, score)

        self.display.print_root_scores([(edge.move, edge.value) for edge in tree.first_level_edges])
        self.display.print_search_summary(move, score, self.statistics)
        return move, score

    def score(self, tree: GameTree, moves: List[Move], depth: int, maximising: bool) -> Tuple[Move, float]:
        """
        Value every supplied move with minimax and return the best (move, value) pair.

        The root takes the maximum over its children unless root_always_maximises
        is off and the agent is a detective. Ties go to the move supplied first.
        """
        root_state = tree.head.game_state
        for move in moves:
            child = tree.add_first_level_child(move, self.view.play_move(root_state, move))
            self.calculate_score(child)
        self._nodes_expanded += 1

        prefer_max = self.root_always_maximises or maximising
        alpha, beta = float('-inf'), float('inf')
        best_edge: Optional[SearchEdge] = None

        # Supplied order, not heuristic order, so the first of equal moves wins
        for edge in tree.first_level_edges:
            child = edge.target
            edge.value = self.minimax(child, depth - 1, alpha, beta,
                                      child.game_state.current_player.is_mr_x)

            if best_edge is None:
                best_edge = edge
            elif prefer_max and edge.value > best_edge.value:
                best_edge = edge
            elif not prefer_max and edge.value < best_edge.value:
                best_edge = edge

            if self.use_pruning:
                if prefer_max:
                    alpha = max(alpha, best_edge.value)
                else:
                    beta = min(beta, best_edge.value)

        tree.head.score = best_edge.value
        return best_edge.move, best_edge.value

    def minimax(self, node: SearchNode, depth: int, alpha: float, beta: float, maximising: bool) -> float:
        """
        Minimax with alpha-beta pruning.

        Args:
            node: Node to search from
            depth: Plies left to search
            alpha: Best value the maximiser can already guarantee
            beta: Best value the minimiser can already guarantee
            maximising: True if the player to move in node is Mr. X

        Returns:
            The value of node, exact when it lies strictly between alpha and beta
        """
        # base case 1 - depth reached or out of budget
        if depth <= 0 or self._budget_exhausted():
            return self.calculate_score(node)

        state = node.game_state
        moves = self.view.get_valid_moves(state, state.current_player)

        # base case 2 - no legal moves (includes finished games)
        if not moves:
            return self.calculate_score(node)

        self._nodes_expanded += 1
        children = []
        for move in moves:
            child = SearchNode(self.view.play_move(state, move))
            SearchEdge(node, child, move)
            self.calculate_score(child)
            children.append(child)

        # Strongest candidates first; sorting is stable so ties keep move order
        children.sort(key=lambda c: c.score, reverse=maximising)

        if maximising:
            value = float('-inf')
            for child in children:
                value = max(value, self.minimax(child, depth - 1, alpha, beta,
                                                child.game_state.current_player.is_mr_x))
                alpha = max(alpha, value)
                if self.use_pruning and beta <= alpha:
                    self._cutoffs += 1
                    if self.verbosity >= VerbosityLevel.DEBUG:
                        print(f"  ✂️ beta cut-off at depth {depth} after {format_move(child.move)}")
                    break
        else:
            value = float('inf')
            for child in children:
                value = min(value, self.minimax(child, depth - 1, alpha, beta,
                                                child.game_state.current_player.is_mr_x))
                beta = min(beta, value)
                if self.use_pruning and beta <= alpha:
                    self._cutoffs += 1
                    if self.verbosity >= VerbosityLevel.DEBUG:
                        print(f"  ✂️ alpha cut-off at depth {depth} after {format_move(child.move)}")
                    break

        return value

    def calculate_score(self, node: SearchNode) -> float:
        """Evaluate node's state, reusing scores already computed in this search"""
        key = (node.game_state, node.move)
        score = self._score_cache.get(key)
        if score is None:
            score = self.evaluator.evaluate(node.game_state, node.move)
            self._score_cache[key] = score
            self._evaluations += 1
        else:
            self._cache_hits += 1
        node.score = score
        return score

    def _budget_exhausted(self) -> bool:
        return self.max_nodes is not None and self._nodes_expanded >= self.max_nodes

    def _reset_search_counters(self):
        self._score_cache = {}
        self._nodes_expanded = 0
        self._evaluations = 0
        self._cache_hits = 0
        self._cutoffs = 0

    def _update_statistics(self, search_time: float, root_score: float):
        """Update search statistics."""
        self.statistics['total_searches'] += 1
        self.statistics['total_nodes_expanded'] += self._nodes_expanded
        self.statistics['total_evaluations'] += self._evaluations
        self.statistics['total_cache_hits'] += self._cache_hits
        self.statistics['total_cutoffs'] += self._cutoffs
        self.statistics['total_search_time'] += search_time
        self.statistics['avg_search_time'] = (self.statistics['total_search_time']
                                              / self.statistics['total_searches'])
        self.statistics['last_nodes_expanded'] = self._nodes_expanded
        self.statistics['last_search_time'] = search_time
        self.statistics['last_root_score'] = root_score

        if self.verbosity >= VerbosityLevel.DEBUG:
            print(f"  🔧 nodes={self._nodes_expanded} evaluations={self._evaluations} "
                  f"cache_hits={self._cache_hits} cutoffs={self._cutoffs}")

    def get_statistics(self) -> Dict[str, Any]:
        """Get search statistics."""
        return self.statistics.copy()
