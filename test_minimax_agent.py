#!/usr/bin/env python3
"""
Minimax search tests.

Run directly for a quick look at the chosen moves:
    python test_minimax_agent.py
"""

import copy

import pytest

from ShadowSearch.core.game import (
    Colour, ShadowSearchGame, TicketMove, DoubleMove, TicketType, TransportType, create_rounds
)
from ShadowSearch.examples.example_games import (
    create_triangle_pendant_board, create_triangle_pendant_game,
    create_mixed_transport_board, create_demo_game
)
from ShadowSearch.core.pathfinding import NoPathError
from ShadowSearch.services.board_loader import BoardConfigurationError
from agents.minimax_agent import MiniMaxAgent, SearchNode, SearchEdge, GameTree, load_minimax_config

BLACK, BLUE = Colour.BLACK, Colour.BLUE


def taxi(colour: Colour, destination: int) -> TicketMove:
    return TicketMove(colour, destination, TransportType.TAXI, TicketType.TAXI)


def revealed_detective_game() -> ShadowSearchGame:
    """Mixed board where Mr. X has just shown himself on 5 and the detective on 3 is to move"""
    game = ShadowSearchGame(create_mixed_transport_board(), num_detectives=1, rounds=create_rounds(10, [1]))
    game.initialize_shadow_search_game([3], 6)
    game.make_move(game.get_valid_moves()[0])
    return game


def test_default_config_loads():
    config = load_minimax_config()
    assert config['search_parameters']['depth'] == 12
    assert config['search_parameters']['root_always_maximises'] is True
    assert config['transport_weights'] == {'taxi': 1, 'bus': 2, 'underground': 3, 'ferry': 20}


def test_missing_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_minimax_config(str(tmp_path / "missing.json"))


def test_tree_links_nodes_through_edges():
    game = create_triangle_pendant_game()
    tree = GameTree(game.game_state)
    move = taxi(BLACK, 3)
    child = tree.add_first_level_child(move, game.play_move(game.game_state, move))

    assert tree.head.is_root
    assert not child.is_root
    assert child.move == move
    assert child.incoming.source is tree.head
    assert tree.first_level_edges[0].target is child

    grandchild = SearchNode(game.play_move(child.game_state, taxi(BLUE, 2)))
    edge = SearchEdge(child, grandchild, taxi(BLUE, 2))
    assert grandchild.incoming is edge
    assert grandchild.move == taxi(BLUE, 2)


@pytest.mark.parametrize("depth", [0, 1, 2, 3])
def test_chosen_move_is_legal(depth):
    game = create_demo_game(2)
    moves = game.get_valid_moves()
    agent = MiniMaxAgent(game, BLACK, depth=depth)
    move, score = agent.get_ai_move(game.game_state, moves)
    assert move in moves
    assert score is not None


def test_escapes_towards_the_far_pendant():
    """
    With the detective on 4, Mr. X on 1 should double move 1-3-5: it is the only
    move whose worst case keeps him more than one hop from the detective.
    """
    game = create_triangle_pendant_game()
    agent = MiniMaxAgent(game, BLACK, depth=2)
    move, score = agent.get_ai_move(game.game_state, game.get_valid_moves())

    assert move == DoubleMove(BLACK, taxi(BLACK, 3), taxi(BLACK, 5))
    assert isinstance(move, DoubleMove) and move.destination == 5
    assert score == -38


def test_avoids_capture():
    game = create_triangle_pendant_game(mr_x_tickets={TicketType.TAXI: 10})
    agent = MiniMaxAgent(game, BLACK, depth=2)
    move, score = agent.get_ai_move(game.game_state, game.get_valid_moves())
    # Moving to 2 lets the detective on 4 step onto Mr. X
    assert move == taxi(BLACK, 3)
    assert score > float('-inf')


@pytest.mark.parametrize("game_factory,depth", [
    (create_triangle_pendant_game, 4),
    (create_demo_game, 3),
])
def test_pruning_does_not_change_the_answer(game_factory, depth):
    game = game_factory()
    moves = game.get_valid_moves()

    pruned = MiniMaxAgent(game, BLACK, depth=depth, use_pruning=True)
    full = MiniMaxAgent(game, BLACK, depth=depth, use_pruning=False)

    assert pruned.get_ai_move(game.game_state, moves) == full.get_ai_move(game.game_state, moves)
    assert pruned.get_statistics()['last_nodes_expanded'] <= full.get_statistics()['last_nodes_expanded']
    assert full.get_statistics()['total_cutoffs'] == 0


def test_detective_root_maximises_by_default():
    game = revealed_detective_game()
    view = game.get_player_view(BLUE)
    assert view.mr_x_location == 5
    moves = game.get_valid_moves()

    agent = MiniMaxAgent(game, BLUE, depth=1)
    scores = [agent.evaluator.evaluate(game.play_move(view, m), m) for m in moves]
    move, score = agent.get_ai_move(view, moves)
    assert score == max(scores)
    assert move == moves[scores.index(max(scores))]


def test_detective_root_can_minimise():
    game = revealed_detective_game()
    view = game.get_player_view(BLUE)
    moves = game.get_valid_moves()

    config = copy.deepcopy(load_minimax_config())
    config['search_parameters']['root_always_maximises'] = False
    agent = MiniMaxAgent(game, BLUE, depth=1, config=config)
    scores = [agent.evaluator.evaluate(game.play_move(view, m), m) for m in moves]
    move, score = agent.get_ai_move(view, moves)
    assert score == min(scores)
    assert move == moves[scores.index(min(scores))]


def test_notify_returns_token_and_a_supplied_move():
    game = create_demo_game(2)
    agent = MiniMaxAgent(game, BLACK, depth=1)
    moves = game.get_valid_moves()
    token = object()

    move, returned = agent.notify(game.get_player_location(BLACK), moves, token)
    assert returned is token
    assert move in moves


def test_notify_only_picks_from_supplied_moves():
    game = create_demo_game(2)
    agent = MiniMaxAgent(game, BLACK, depth=2)
    moves = game.get_valid_moves()[-3:]
    move, _ = agent.notify(game.get_player_location(BLACK), moves, "token")
    assert move in moves


def test_notify_rejects_empty_moves():
    game = create_demo_game(2)
    agent = MiniMaxAgent(game, BLACK, depth=1)
    with pytest.raises(ValueError):
        agent.notify(6, [], "token")


def test_detective_chooses_in_live_game():
    game = create_demo_game(2)
    game.make_move(game.get_valid_moves()[0])
    agent = MiniMaxAgent(game, BLUE, depth=2)
    move = agent.choose_move(game)
    assert move in game.get_valid_moves()


def test_node_budget_truncates_search():
    game = create_demo_game(2)
    moves = game.get_valid_moves()
    agent = MiniMaxAgent(game, BLACK, depth=6, max_nodes=1)
    move, _ = agent.get_ai_move(game.game_state, moves)
    assert move in moves
    assert agent.get_statistics()['last_nodes_expanded'] == 1


def test_statistics_are_tracked():
    game = create_triangle_pendant_game()
    agent = MiniMaxAgent(game, BLACK, depth=2)
    _, score = agent.get_ai_move(game.game_state, game.get_valid_moves())
    _, score = agent.get_ai_move(game.game_state, game.get_valid_moves())

    stats = agent.get_statistics()
    assert stats['total_searches'] == 2
    assert stats['last_root_score'] == score
    assert stats['total_evaluations'] > 0
    assert stats['total_nodes_expanded'] >= 2


def test_disconnected_board_is_rejected():
    graph = create_triangle_pendant_board()
    graph.add_edge(10, 11, edge_type=TransportType.TAXI.value)
    game = ShadowSearchGame(graph, num_detectives=1)
    with pytest.raises(BoardConfigurationError):
        MiniMaxAgent(game, BLACK)


def test_search_lets_missing_routes_through():
    game = create_triangle_pendant_game()
    agent = MiniMaxAgent(game, BLACK, depth=2)

    # Board breaks after the agent has checked it
    game.graph.add_edge(10, 11, edge_type=TransportType.TAXI.value)
    state = game.game_state.with_location(BLUE, 10)
    with pytest.raises(NoPathError):
        agent.get_ai_move(state, game.get_valid_moves(state))


def test_detailed_output_marks_root_values_as_bounds(capsys):
    game = create_triangle_pendant_game()
    agent = MiniMaxAgent(game, BLACK, depth=2, verbosity=3)
    move, score = agent.get_ai_move(game.game_state, game.get_valid_moves())

    output = capsys.readouterr().out
    assert "ROOT MOVE VALUES (pruned moves show bounds)" in output
    assert "Chose" in output
    assert score == -38


if __name__ == "__main__":
    game = create_demo_game(2)
    for depth in range(1, 4):
        agent = MiniMaxAgent(game, BLACK, depth=depth)
        move, score = agent.get_ai_move(game.game_state, game.get_valid_moves())
        stats = agent.get_statistics()
        print(f"depth {depth}: {move} score={score} nodes={stats['last_nodes_expanded']} "
              f"time={stats['last_search_time']:.3f}s")
