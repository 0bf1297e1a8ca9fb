"""
Position evaluation for Shadow Search.

Scores a game state, together with the move that produced it, from Mr. X's point
of view: larger is better for Mr. X. The score sums three terms:

- distance: weighted shortest routes from every detective to Mr. X
- connectivity: how many escape routes Mr. X's node offers
- move type: whether a double move was worth its ticket

A state in which Mr. X has already lost scores float('-inf').
"""

from typing import Dict, Optional

from ShadowSearch.core.game import (
    ShadowSearchGame, GameState, Colour, Move, PassMove, TicketMove, DoubleMove,
    TicketType, TransportType, MRX_COLOUR, unique_degree
)
from ShadowSearch.core.pathfinding import ShortestPathCalculator
from game_controls.display_utils import VerbosityLevel, format_move

LOSS_SCORE = float('-inf')

# Detectives cannot take the ferry, so it costs far more than any other transport
DEFAULT_TRANSPORT_WEIGHTS = {
    TransportType.TAXI: 1,
    TransportType.BUS: 2,
    TransportType.UNDERGROUND: 3,
    TransportType.FERRY: 20,
}

DEFAULT_DISTANCE_SCORING = {
    'close_route_edges': 3,
    'close_penalty': -20,
    'black_ticket_close_bonus': 10,
    'far_bonus': 10,
}

DEFAULT_CONNECTIVITY_SCORING = {
    'degree_threshold': 7,
    'low_degree_penalty': -20,
    'degree_multiplier': 2,
}

DEFAULT_DOUBLE_MOVE_SCORING = {
    'reveal_bonus': 20,
    'black_second_leg_bonus': 20,
    'wasted_penalty': -50,
}


def parse_transport_weights(weights: Optional[Dict]) -> Dict[TransportType, float]:
    """Transport weights keyed by TransportType, from names ('taxi') or enum members"""
    parsed = dict(DEFAULT_TRANSPORT_WEIGHTS)
    for transport, weight in (weights or {}).items():
        if not isinstance(transport, TransportType):
            try:
                transport = TransportType[str(transport).upper()]
            except KeyError:
                raise ValueError(f"Unknown transport '{transport}', expected one of "
                                 f"{[t.name.lower() for t in TransportType]}") from None
        if weight < 0:
            raise ValueError(f"Transport weight for {transport.name} must be non-negative, got {weight}")
        parsed[transport] = weight
    return parsed


class PositionEvaluator:
    """
    Heuristic scorer used by the minimax search.

    The evaluator is deterministic and keeps no state between calls besides its
    configuration, so it can be shared by every node of a search.
    """

    def __init__(self, game: ShadowSearchGame, colour: Colour, config: Dict = None,
                 verbosity: int = VerbosityLevel.SILENT):
        """
        Initialize the evaluator.

        Args:
            game: Rules engine and board the states belong to
            colour: Colour of the agent the evaluation runs for
            config: Parsed minimax configuration; missing sections use the defaults
            verbosity: Print term breakdowns from VerbosityLevel.HEURISTICS
        """
        config = config or {}
        self.game = game
        self.graph = game.graph
        self.colour = colour
        self.verbosity = verbosity
        self.path_calculator = ShortestPathCalculator(self.graph)

        self.transport_weights = parse_transport_weights(config.get('transport_weights'))
        self.distance_scoring = {**DEFAULT_DISTANCE_SCORING, **config.get('distance_scoring', {})}
        self.connectivity_scoring = {**DEFAULT_CONNECTIVITY_SCORING, **config.get('connectivity_scoring', {})}
        self.double_move_scoring = {**DEFAULT_DOUBLE_MOVE_SCORING, **config.get('double_move_scoring', {})}

    def weigh_transport(self, transport: TransportType) -> float:
        return self.transport_weights[transport]

    def is_mr_x_lost(self, state: GameState) -> bool:
        return (self.game.is_game_over(state)
                and MRX_COLOUR not in self.game.get_winning_players(state))

    def evaluate(self, state: GameState, move: Optional[Move] = None) -> float:
        """
        Score state, reached by playing move (None for a state with no known move).

        Returns:
            Sum of the distance, connectivity and move-type terms, or -inf when
            Mr. X has lost in this state
        """
        if self.is_mr_x_lost(state):
            if self.verbosity >= VerbosityLevel.HEURISTICS:
                print(f"  📉 {state!r}: Mr. X has lost")
            return LOSS_SCORE

        distance_score = self.score_distances(state, move)
        degree_score = self.score_node_degree(state)
        move_score = self.score_move(state, move)
        score = distance_score + degree_score + move_score

        if self.verbosity >= VerbosityLevel.HEURISTICS:
            produced_by = format_move(move) if move is not None else "start"
            print(f"  🔍 {produced_by}: distance={distance_score} degree={degree_score} "
                  f"move={move_score} total={score}")
        return score

    def score_distances(self, state: GameState, move: Optional[Move] = None) -> float:
        """Score based on how far, by weighted route, every detective is from Mr. X"""
        mr_x_location = state.mr_x_location
        if mr_x_location is None:
            # A detective must not reward itself with a location it has never seen
            if not self.colour.is_mr_x:
                if self.verbosity >= VerbosityLevel.HEURISTICS:
                    print("  ❓ Mr. X has not revealed himself yet: distance term is 0")
                return 0.0
            raise ValueError("Mr. X's location is unknown in a state evaluated for Mr. X")

        used_black = isinstance(move, TicketMove) and move.ticket == TicketType.BLACK
        close_route_edges = self.distance_scoring['close_route_edges']

        score = 0.0
        for detective in state.detectives:
            route = self.path_calculator.get_result(
                state.get_location(detective), mr_x_location, self.weigh_transport)
            score += route.weight

            # Short routes are bad whatever transport they use
            if route.edge_count < close_route_edges:
                score += self.distance_scoring['close_penalty']
                if used_black:
                    score += self.distance_scoring['black_ticket_close_bonus']
            else:
                score += self.distance_scoring['far_bonus']
        return score

    def score_node_degree(self, state: GameState) -> float:
        """Score based on the number of distinct neighbours of Mr. X's node"""
        mr_x_location = state.mr_x_location
        if mr_x_location is None:
            return 0.0

        degree = unique_degree(self.graph, mr_x_location)
        if degree < self.connectivity_scoring['degree_threshold']:
            return self.connectivity_scoring['low_degree_penalty']
        return self.connectivity_scoring['degree_multiplier'] * degree

    def score_move(self, state: GameState, move: Optional[Move]) -> float:
        if isinstance(move, DoubleMove):
            return self.score_double_move(state, move)
        if move is None or isinstance(move, (PassMove, TicketMove)):
            return 0.0
        raise TypeError(f"Unknown move type: {type(move).__name__}")

    def score_double_move(self, state: GameState, move: DoubleMove) -> float:
        """
        A double move pays off when its first leg lands on a reveal round: Mr. X
        shows himself and immediately moves on. Otherwise, and always when played
        from the public starting position, the ticket is wasted.
        """
        # state is after both legs, so the move was played in round state.round - 2
        played_round = state.round - 2
        if played_round > 0 and state.is_reveal_round(played_round + 1):
            score = self.double_move_scoring['reveal_bonus']
            if move.move2.ticket == TicketType.BLACK:
                score += self.double_move_scoring['black_second_leg_bonus']
            return score
        return self.double_move_scoring['wasted_penalty']
