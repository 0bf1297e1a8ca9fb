"""
Display utilities for terminal output of Shadow Search decisions.
Provides verbosity levels and move/search formatting shared by agents and the CLI.
"""
from typing import Dict, List, Tuple

from ShadowSearch.core.game import (
    ShadowSearchGame, Move, PassMove, TicketMove, DoubleMove, MRX_COLOUR
)


class VerbosityLevel:
    """Verbosity level constants"""
    SILENT = 0     # Nothing but errors
    BASIC = 1      # One line per decision
    MOVES = 2      # + Legal moves and tickets
    DETAILED = 3   # + Value of every root move
    DEBUG = 4      # + Search internals (cutoffs, budget)
    HEURISTICS = 5 # + Evaluator term breakdown


SYMBOLS = {
    'detective': '🕵️',
    'MrX': '🕵️‍♂️',
    'taxi': '🚕',
    'bus': '🚌',
    'underground': '🚇',
    'ferry': '⛴️',
    'black': '⚫',
    'double_move': '⚡',
    'pass': '⏸️',
    'visible': '👁️',
    'hidden': '❓'
}


def format_move(move: Move) -> str:
    """One-line description of a move"""
    if isinstance(move, PassMove):
        return f"{SYMBOLS['pass']} {move.colour.value} passes"
    if isinstance(move, TicketMove):
        icon = SYMBOLS['black'] if move.ticket.value == 'black' else SYMBOLS.get(move.transport.name.lower(), '🎫')
        return f"{icon} {move.colour.value} → {move.destination} by {move.transport.name.lower()} ({move.ticket.value} ticket)"
    if isinstance(move, DoubleMove):
        return f"{SYMBOLS['double_move']} {format_move(move.move1)} then {format_move(move.move2)}"
    raise TypeError(f"Unknown move type: {type(move).__name__}")


class GameDisplay:
    """Handles game and search output with configurable verbosity"""

    def __init__(self, verbosity: int = VerbosityLevel.BASIC):
        self.verbosity = verbosity

    def print_separator(self, char='=', length=60):
        print(char * length)

    def print_title(self, title: str):
        self.print_separator()
        print(f"  {title.upper()}")
        self.print_separator()

    def print_game_state(self, game: ShadowSearchGame):
        """Print positions, and tickets from MOVES upwards"""
        if self.verbosity < VerbosityLevel.BASIC:
            return
        if game.game_state is None:
            print("❌ Game not initialized")
            return
        state = game.get_state_representation()
        print(f"\n🎯 ROUND {state['round']} - {state['turn'].upper()}'S TURN")

        print(f"\n{SYMBOLS['MrX']} MR. X: {state['locations'][MRX_COLOUR.value]}")
        print(f"{SYMBOLS['detective']} DETECTIVES:")
        for colour, location in state['locations'].items():
            if colour != MRX_COLOUR.value:
                print(f"  {colour}: {location}")

        if self.verbosity >= VerbosityLevel.MOVES:
            print("\n🎫 TICKETS:")
            for colour, tickets in state['tickets'].items():
                counts = ", ".join(f"{ticket}={count}" for ticket, count in tickets.items())
                print(f"  {colour}: {counts}")

        if state['game_over']:
            print(f"\n🏆 GAME OVER! Winner: {state['winner'].upper()}")

    def print_available_moves(self, moves: List[Move]):
        if self.verbosity < VerbosityLevel.MOVES:
            return
        print(f"\n🎯 AVAILABLE MOVES ({len(moves)}):")
        for move in moves:
            print(f"  {format_move(move)}")

    def print_root_scores(self, scored_moves: List[Tuple[Move, float]]):
        if self.verbosity < VerbosityLevel.DETAILED:
            return
        print("\n📊 ROOT MOVE VALUES (pruned moves show bounds):")
        for move, score in scored_moves:
            print(f"  {score:>10.2f}  {format_move(move)}")

    def print_search_summary(self, move: Move, score: float, statistics: Dict):
        if self.verbosity < VerbosityLevel.BASIC:
            return
        print(f"🤖 Chose {format_move(move)} (score {score:.2f}, "
              f"{statistics.get('last_nodes_expanded', 0)} nodes, "
              f"{statistics.get('last_search_time', 0.0):.3f}s)")

    def print_error(self, message: str):
        print(f"❌ ERROR: {message}")

    def print_info(self, message: str):
        print(f"ℹ️  {message}")
