#!/usr/bin/env python3
"""
Shadow Search command line.

Sets up a game on a board, asks an agent for the move of the player to act and
prints it.

Usage:
    python Main.py --demo --depth 4
    python Main.py --edges data/edges.csv --mr-x 51 --detectives 13 26 29 --depth 6
"""
import argparse
import sys

from ShadowSearch.core.game import Colour, ShadowSearchGame
from ShadowSearch.core.pathfinding import NoPathError
from ShadowSearch.services.board_loader import BoardConfigurationError, create_board_game
from ShadowSearch.examples.example_games import create_demo_game
from game_controls.display_utils import GameDisplay, VerbosityLevel, format_move
from agents import AgentType, get_agent_registry


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Shadow Search move chooser')
    agent_types = [agent_type.value for agent_type in get_agent_registry().get_available_agent_types()]

    parser.add_argument('--demo', action='store_true',
                        help='Use the built-in demo board and positions')
    parser.add_argument('--edges', type=str, default='data/edges.csv',
                        help='Board edge list CSV (source,target,edge_type)')
    parser.add_argument('--nodes', type=str, default=None,
                        help='Optional node positions CSV (node_id,x,y)')
    parser.add_argument('--mr-x', type=int, default=None,
                        help="Mr. X's starting node")
    parser.add_argument('--detectives', type=int, nargs='+', default=None,
                        help="Detectives' starting nodes")
    parser.add_argument('--colour', type=str, default=Colour.BLACK.value,
                        choices=[colour.value for colour in Colour],
                        help='Colour to choose a move for (must be the player to act)')
    parser.add_argument('--agent', type=str, choices=agent_types, default=AgentType.MINIMAX.value,
                        help='Agent type (default: minimax)')
    parser.add_argument('--depth', type=int, default=None,
                        help='Search depth in plies (default: from config)')
    parser.add_argument('--max-nodes', type=int, default=None,
                        help='Node budget for the search (default: unlimited)')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to a minimax config JSON')
    parser.add_argument('--verbosity', type=int, default=1, choices=[0, 1, 2, 3, 4, 5],
                        help='Verbosity level (0=silent, 1=basic, 2=moves, 3=detailed, 4=debug, 5=heuristics)')
    return parser.parse_args(argv)


def build_game(args) -> ShadowSearchGame:
    """Create the game described by the arguments"""
    if args.demo:
        return create_demo_game()

    if args.mr_x is None or not args.detectives:
        raise ValueError("--mr-x and --detectives are required unless --demo is given")
    game = create_board_game(len(args.detectives), args.edges, args.nodes)
    game.initialize_shadow_search_game(args.detectives, args.mr_x)
    return game


def advance_to(game: ShadowSearchGame, colour: Colour):
    """Play each earlier player's first legal move until colour is to act"""
    if colour not in game.players:
        raise ValueError(f"{colour.value} is not playing in this game")
    while game.game_state.current_player != colour and not game.is_game_over():
        game.make_move(game.get_valid_moves()[0])


def main(argv=None):
    """Main entry point"""
    args = parse_arguments(argv)
    display = GameDisplay(args.verbosity)

    try:
        game = build_game(args)
        colour = Colour(args.colour)
        advance_to(game, colour)
        if game.is_game_over():
            display.print_info("The game is over, no move to choose")
            return None

        agent_kwargs = {}
        if args.agent == AgentType.MINIMAX.value:
            agent_kwargs = {'depth': args.depth, 'max_nodes': args.max_nodes,
                            'config_path': args.config, 'verbosity': args.verbosity}
        agent = get_agent_registry().create_agent(AgentType(args.agent), game, colour, **agent_kwargs)

        display.print_game_state(game)
        display.print_available_moves(game.get_valid_moves())
        move = agent.choose_move(game)
    except (BoardConfigurationError, NoPathError, FileNotFoundError, ValueError) as e:
        display.print_error(str(e))
        sys.exit(1)

    print(format_move(move))
    return move


if __name__ == "__main__":
    main()
