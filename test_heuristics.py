#!/usr/bin/env python3
"""
Position evaluator tests.

Scores are checked by hand on the triangle-and-pendants board:

    1 --- 2 --- 4
     \\   /
       3 --- 5
"""

import pytest

from ShadowSearch.core.game import (
    Colour, ShadowSearchGame, TicketMove, DoubleMove, PassMove, TicketType, TransportType
)
from ShadowSearch.core.pathfinding import NoPathError
from ShadowSearch.examples.example_games import (
    create_star_board, create_triangle_pendant_board, create_triangle_pendant_game, create_demo_game
)
from agents.heuristics import PositionEvaluator, LOSS_SCORE

BLACK, BLUE = Colour.BLACK, Colour.BLUE


def taxi(colour: Colour, destination: int, ticket: TicketType = TicketType.TAXI) -> TicketMove:
    return TicketMove(colour, destination, TransportType.TAXI, ticket)


def test_high_degree_bonus():
    game = ShadowSearchGame(create_star_board(8), num_detectives=1)
    game.initialize_shadow_search_game([1], 0)
    evaluator = PositionEvaluator(game, BLACK)
    assert evaluator.score_node_degree(game.game_state) == 16


def test_low_degree_penalty():
    game = create_triangle_pendant_game()
    evaluator = PositionEvaluator(game, BLACK)
    state = game.game_state.with_location(BLACK, 3)
    assert evaluator.score_node_degree(state) == -20


def test_degree_ignores_parallel_edges():
    game = ShadowSearchGame(create_star_board(7), num_detectives=1)
    game.graph.add_edge(0, 1, edge_type=TransportType.BUS.value)
    game.initialize_shadow_search_game([1], 0)
    evaluator = PositionEvaluator(game, BLACK)
    assert evaluator.score_node_degree(game.game_state) == 14


def test_close_detective_penalty():
    """Detective on 4 reaches Mr. X on 1 in two taxi hops"""
    game = create_triangle_pendant_game()
    evaluator = PositionEvaluator(game, BLACK)
    assert evaluator.score_distances(game.game_state) == 2 - 20


def test_black_ticket_softens_close_penalty():
    game = create_triangle_pendant_game()
    evaluator = PositionEvaluator(game, BLACK)
    state = game.game_state
    assert evaluator.score_distances(state, taxi(BLACK, 1, TicketType.BLACK)) == 2 - 20 + 10
    assert evaluator.score_distances(state, taxi(BLACK, 1)) == 2 - 20


def test_far_detective_bonus():
    """Detective on 4 needs three hops to reach 5"""
    game = create_triangle_pendant_game()
    evaluator = PositionEvaluator(game, BLACK)
    state = game.game_state.with_location(BLACK, 5)
    assert evaluator.score_distances(state) == 3 + 10


def test_evaluate_sums_terms():
    game = create_triangle_pendant_game()
    evaluator = PositionEvaluator(game, BLACK)
    state = game.game_state.with_location(BLACK, 5)
    assert evaluator.evaluate(state, taxi(BLACK, 5)) == (3 + 10) + (-20) + 0


def test_lost_state_scores_below_everything():
    game = create_triangle_pendant_game()
    evaluator = PositionEvaluator(game, BLACK)
    captured = game.game_state.with_location(BLACK, 4)

    assert evaluator.is_mr_x_lost(captured)
    assert evaluator.evaluate(captured, taxi(BLUE, 4)) == LOSS_SCORE
    assert evaluator.evaluate(game.game_state) > LOSS_SCORE


def test_detective_ignores_unrevealed_mr_x():
    game = create_demo_game(2)
    evaluator = PositionEvaluator(game, BLUE)
    view = game.get_player_view(BLUE)
    assert view.mr_x_location is None
    assert evaluator.score_distances(view) == 0
    assert evaluator.evaluate(view) == 0


def test_mr_x_location_required_for_mr_x():
    game = create_demo_game(2)
    evaluator = PositionEvaluator(game, BLACK)
    with pytest.raises(ValueError):
        evaluator.score_distances(game.get_player_view(BLUE))


def test_double_move_into_reveal_round():
    game = create_triangle_pendant_game(
        mr_x_tickets={TicketType.TAXI: 10, TicketType.BLACK: 2, TicketType.DOUBLE_MOVE: 2},
        reveal_rounds=[2])
    evaluator = PositionEvaluator(game, BLACK)
    state = game.play_move(game.game_state, taxi(BLACK, 3))
    state = game.play_move(state, taxi(BLUE, 2))
    assert state.round == 1

    move = DoubleMove(BLACK, taxi(BLACK, 5), taxi(BLACK, 3))
    after = game.play_move(state, move)
    assert after.round == 3
    assert evaluator.score_move(after, move) == 20

    black_second_leg = DoubleMove(BLACK, taxi(BLACK, 5), taxi(BLACK, 3, TicketType.BLACK))
    after = game.play_move(state, black_second_leg)
    assert evaluator.score_move(after, black_second_leg) == 40


def test_double_move_from_the_start_earns_no_reveal_bonus():
    """The starting position is public, so round 0 never counts as a reveal set-up"""
    game = create_triangle_pendant_game(reveal_rounds=[1])
    evaluator = PositionEvaluator(game, BLACK)
    move = DoubleMove(BLACK, taxi(BLACK, 3), taxi(BLACK, 5))
    state = game.play_move(game.game_state, move)
    assert state.round == 2
    assert evaluator.score_move(state, move) == -50


def test_wasted_double_move():
    game = create_triangle_pendant_game()
    evaluator = PositionEvaluator(game, BLACK)
    move = DoubleMove(BLACK, taxi(BLACK, 3), taxi(BLACK, 5))
    state = game.play_move(game.game_state, move)
    assert evaluator.score_move(state, move) == -50


def test_single_moves_score_nothing():
    game = create_triangle_pendant_game()
    evaluator = PositionEvaluator(game, BLACK)
    state = game.game_state
    assert evaluator.score_move(state, None) == 0
    assert evaluator.score_move(state, PassMove(BLUE)) == 0
    assert evaluator.score_move(state, taxi(BLACK, 3, TicketType.BLACK)) == 0
    with pytest.raises(TypeError):
        evaluator.score_move(state, "teleport")


def test_config_overrides_defaults():
    game = create_triangle_pendant_game()
    config = {
        'transport_weights': {'taxi': 5},
        'distance_scoring': {'close_penalty': -100},
    }
    evaluator = PositionEvaluator(game, BLACK, config)
    assert evaluator.weigh_transport(TransportType.TAXI) == 5
    assert evaluator.weigh_transport(TransportType.FERRY) == 20
    assert evaluator.score_distances(game.game_state) == 10 - 100


def test_negative_transport_weight_rejected():
    game = create_triangle_pendant_game()
    with pytest.raises(ValueError):
        PositionEvaluator(game, BLACK, {'transport_weights': {'bus': -1}})


def test_unknown_transport_name_rejected():
    game = create_triangle_pendant_game()
    with pytest.raises(ValueError) as excinfo:
        PositionEvaluator(game, BLACK, {'transport_weights': {'boat': 20}})
    assert "boat" in str(excinfo.value)
    assert "ferry" in str(excinfo.value)


def test_disconnected_route_is_not_swallowed():
    """A detective cut off from Mr. X is an error, not an infinite or zero distance"""
    graph = create_triangle_pendant_board()
    graph.add_edge(10, 11, edge_type=TransportType.TAXI.value)
    game = ShadowSearchGame(graph, num_detectives=1)
    game.initialize_shadow_search_game([10], 1)
    evaluator = PositionEvaluator(game, BLACK)

    with pytest.raises(NoPathError):
        evaluator.evaluate(game.game_state)


def test_evaluation_is_deterministic():
    game = create_demo_game(2)
    evaluator = PositionEvaluator(game, BLACK)
    state = game.game_state
    scores = {evaluator.evaluate(state) for _ in range(5)}
    assert len(scores) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
