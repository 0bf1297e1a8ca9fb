from dataclasses import dataclass
from typing import List, Set, Tuple, Dict, Optional, Union, Iterable
from enum import Enum
import networkx as nx


class Player(Enum):
    DETECTIVES = "detectives"
    MRX = "mr_x"


class Colour(Enum):
    BLACK = "black"  # Mr. X
    BLUE = "blue"
    GREEN = "green"
    RED = "red"
    WHITE = "white"
    YELLOW = "yellow"

    @property
    def player(self) -> Player:
        return Player.MRX if self is Colour.BLACK else Player.DETECTIVES

    @property
    def is_mr_x(self) -> bool:
        return self is Colour.BLACK


MRX_COLOUR = Colour.BLACK
DETECTIVE_COLOURS = [Colour.BLUE, Colour.GREEN, Colour.RED, Colour.WHITE, Colour.YELLOW]


class TransportType(Enum):
    TAXI = 1
    BUS = 2
    UNDERGROUND = 3
    FERRY = 4  # Mr. X only, with a black ticket


class TicketType(Enum):
    TAXI = "taxi"
    BUS = "bus"
    UNDERGROUND = "underground"
    BLACK = "black"
    DOUBLE_MOVE = "double_move"

    def __lt__(self, other):
        if not isinstance(other, TicketType):
            return NotImplemented
        return self.value < other.value


TICKET_FOR_TRANSPORT = {
    TransportType.TAXI: TicketType.TAXI,
    TransportType.BUS: TicketType.BUS,
    TransportType.UNDERGROUND: TicketType.UNDERGROUND,
}

REVEAL_ROUNDS = {3, 8, 13, 18, 24}
MAX_ROUNDS = 24


def create_rounds(max_rounds: int = MAX_ROUNDS, reveal_rounds: Iterable[int] = REVEAL_ROUNDS) -> List[bool]:
    """Visibility schedule: entry r is True when Mr. X shows himself after his move of round r.
    Entry 0 is the starting position and is never a reveal."""
    reveal_rounds = set(reveal_rounds)
    return [r in reveal_rounds and r > 0 for r in range(max_rounds + 1)]


def default_detective_tickets() -> Dict[TicketType, int]:
    return {
        TicketType.TAXI: 10,
        TicketType.BUS: 8,
        TicketType.UNDERGROUND: 4
    }


def default_mr_x_tickets() -> Dict[TicketType, int]:
    return {
        TicketType.TAXI: 4,
        TicketType.BUS: 3,
        TicketType.UNDERGROUND: 3,
        TicketType.BLACK: 5,
        TicketType.DOUBLE_MOVE: 2
    }


# Moves

@dataclass(frozen=True)
class PassMove:
    """A detective with nowhere to go passes"""
    colour: Colour

    def __str__(self):
        return f"Pass({self.colour.value})"


@dataclass(frozen=True)
class TicketMove:
    """Move along one edge, paying with one ticket"""
    colour: Colour
    destination: int
    transport: TransportType
    ticket: TicketType

    def __str__(self):
        return f"Move({self.colour.value}, {self.destination}, {self.transport.name}, {self.ticket.value})"


@dataclass(frozen=True)
class DoubleMove:
    """Two chained ticket moves played as one turn. Mr. X only."""
    colour: Colour
    move1: TicketMove
    move2: TicketMove

    def __post_init__(self):
        if not self.colour.is_mr_x:
            raise ValueError("Only Mr. X can play a double move")
        if self.move1.colour != self.colour or self.move2.colour != self.colour:
            raise ValueError("Both legs of a double move must belong to the mover")

    @property
    def destination(self) -> int:
        return self.move2.destination

    def __str__(self):
        return f"Double({self.move1}, {self.move2})"


Move = Union[PassMove, TicketMove, DoubleMove]


# Board helpers

def edge_transports(graph: nx.Graph, source: int, target: int) -> List[TransportType]:
    """Transport types available between two adjacent nodes, in enum order"""
    if graph.is_multigraph():
        edge_data_items = graph.get_edge_data(source, target).values()
    else:
        edge_data = graph.get_edge_data(source, target)
        if 'transports' in edge_data:
            return sorted({TransportType(t) for t in edge_data['transports']}, key=lambda t: t.value)
        edge_data_items = [edge_data]
    transports = {TransportType(data.get('edge_type', 1)) for data in edge_data_items}
    return sorted(transports, key=lambda t: t.value)


def unique_degree(graph: nx.Graph, node: int) -> int:
    """Number of distinct neighbours, ignoring parallel transport edges"""
    return len(set(graph.neighbors(node)))


class GameState:
    """
    Snapshot of a game as known by one observer.

    The snapshot is read-only from outside: every accessor returns copies, and the
    rules engine only ever writes to a fresh copy. Mr. X's recorded location is his
    true location when the observer is Mr. X; for any other observer it is his last
    revealed location, or None before the first reveal.
    """

    def __init__(self, players: List[Colour], locations: Dict[Colour, Optional[int]],
                 tickets: Dict[Colour, Dict[TicketType, int]], round_number: int,
                 rounds: List[bool], current_player: Colour,
                 observer: Colour = MRX_COLOUR, last_revealed: Optional[int] = None):
        if not players or not players[0].is_mr_x:
            raise ValueError("Mr. X must be the first player")
        for colour in players:
            if colour not in locations:
                raise ValueError(f"No location for {colour.value}")
            if colour not in tickets:
                raise ValueError(f"No tickets for {colour.value}")
            if not colour.is_mr_x and locations[colour] is None:
                raise ValueError(f"Detective {colour.value} must have a known location")
        if current_player not in players:
            raise ValueError(f"Current player {current_player.value} is not in the game")

        self._players = tuple(players)
        self._locations = {colour: locations[colour] for colour in players}
        self._tickets = {colour: dict(tickets[colour]) for colour in players}
        self._round = round_number
        self._rounds = tuple(rounds)
        self._current_player = current_player
        self._observer = observer
        self._last_revealed = last_revealed

    def copy(self) -> 'GameState':
        return GameState(
            list(self._players), self._locations, self._tickets,
            self._round, list(self._rounds), self._current_player,
            self._observer, self._last_revealed
        )

    @property
    def players(self) -> Tuple[Colour, ...]:
        return self._players

    @property
    def detectives(self) -> Tuple[Colour, ...]:
        return self._players[1:]

    @property
    def locations(self) -> Dict[Colour, Optional[int]]:
        return dict(self._locations)

    def get_location(self, colour: Colour) -> Optional[int]:
        return self._locations[colour]

    @property
    def mr_x_location(self) -> Optional[int]:
        return self._locations[MRX_COLOUR]

    @property
    def detective_locations(self) -> List[int]:
        return [self._locations[colour] for colour in self.detectives]

    @property
    def tickets(self) -> Dict[Colour, Dict[TicketType, int]]:
        return {colour: dict(t) for colour, t in self._tickets.items()}

    def get_tickets(self, colour: Colour) -> Dict[TicketType, int]:
        return dict(self._tickets[colour])

    def ticket_count(self, colour: Colour, ticket: TicketType) -> int:
        return self._tickets[colour].get(ticket, 0)

    @property
    def round(self) -> int:
        return self._round

    @property
    def rounds(self) -> Tuple[bool, ...]:
        return self._rounds

    @property
    def max_rounds(self) -> int:
        return len(self._rounds) - 1

    def is_reveal_round(self, round_number: int) -> bool:
        return 0 <= round_number < len(self._rounds) and self._rounds[round_number]

    @property
    def current_player(self) -> Colour:
        return self._current_player

    @property
    def observer(self) -> Colour:
        return self._observer

    @property
    def last_revealed(self) -> Optional[int]:
        return self._last_revealed

    def masked_for(self, colour: Colour) -> 'GameState':
        """Copy of this state as seen by colour"""
        if colour not in self._players:
            raise ValueError(f"{colour.value} is not playing")
        if colour.is_mr_x and not self._observer.is_mr_x:
            raise ValueError("Cannot recover Mr. X's true location from a detective's view")
        new_state = self.copy()
        new_state._observer = colour
        if not colour.is_mr_x:
            new_state._locations[MRX_COLOUR] = self._last_revealed
        return new_state

    def with_location(self, colour: Colour, location: int) -> 'GameState':
        """Copy of this state with one player's location replaced"""
        if colour not in self._players:
            raise ValueError(f"{colour.value} is not playing")
        new_state = self.copy()
        new_state._locations[colour] = location
        return new_state

    def _key(self):
        return (
            self._players,
            tuple(self._locations[colour] for colour in self._players),
            tuple(tuple(sorted(self._tickets[colour].items())) for colour in self._players),
            self._round,
            self._rounds,
            self._current_player,
            self._observer,
            self._last_revealed
        )

    def __eq__(self, other):
        if not isinstance(other, GameState):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        locations = ", ".join(f"{c.value}={l}" for c, l in self._locations.items())
        return f"GameState(round={self._round}, turn={self._current_player.value}, {locations})"


class ShadowSearchGame:
    """
    Rules engine for the pursuit game.

    All rule queries are pure functions of the GameState they are given, so the
    search can explore hypothetical states freely. The game also keeps the live
    state (always observed by Mr. X) and hands out per-colour views of it.
    """

    def __init__(self, graph: nx.Graph, num_detectives: int = 3, rounds: List[bool] = None):
        if num_detectives < 1 or num_detectives > len(DETECTIVE_COLOURS):
            raise ValueError(f"Expected 1 to {len(DETECTIVE_COLOURS)} detectives, got {num_detectives}")
        self.graph = graph
        self.num_detectives = num_detectives
        self.players = [MRX_COLOUR] + DETECTIVE_COLOURS[:num_detectives]
        self.rounds = list(rounds) if rounds is not None else create_rounds()
        self.game_state: Optional[GameState] = None
        self.game_history: List[GameState] = []
        self.move_history: List[Move] = []

    def initialize_shadow_search_game(self, detective_positions: List[int], mr_x_position: int,
                                      detective_tickets: Dict[TicketType, int] = None,
                                      mr_x_tickets: Dict[TicketType, int] = None) -> GameState:
        """Place the players and hand out tickets"""
        if len(detective_positions) != self.num_detectives:
            raise ValueError(f"Expected {self.num_detectives} detectives, got {len(detective_positions)}")
        if len(set(detective_positions)) != len(detective_positions):
            raise ValueError("Detectives cannot share a starting position")
        if mr_x_position in detective_positions:
            raise ValueError("Mr. X and a detective cannot start in the same position")
        for position in list(detective_positions) + [mr_x_position]:
            if not self.graph.has_node(position):
                raise ValueError(f"Starting position {position} is not on the board")

        locations = {MRX_COLOUR: mr_x_position}
        tickets = {MRX_COLOUR: dict(mr_x_tickets) if mr_x_tickets is not None else default_mr_x_tickets()}
        for colour, position in zip(self.players[1:], detective_positions):
            locations[colour] = position
            tickets[colour] = dict(detective_tickets) if detective_tickets is not None else default_detective_tickets()

        self.game_state = GameState(self.players, locations, tickets, 0, self.rounds, MRX_COLOUR)
        self.game_history = [self.game_state]
        self.move_history = []
        return self.game_state

    def _require_state(self, state: Optional[GameState]) -> GameState:
        if state is not None:
            return state
        if self.game_state is None:
            raise ValueError("Game not initialized")
        return self.game_state

    # Move generation

    def get_valid_moves(self, state: GameState = None, colour: Colour = None) -> List[Move]:
        """Legal moves for colour (default: the player to move) in state (default: the live state)"""
        state = self._require_state(state)
        colour = colour or state.current_player
        if colour not in state.players:
            raise ValueError(f"{colour.value} is not playing")
        if self._winner(state) is not None:
            return []
        if colour.is_mr_x:
            return self._get_valid_mr_x_moves(state)
        return self._get_valid_detective_moves(state, colour)

    def _get_valid_detective_moves(self, state: GameState, colour: Colour) -> List[Move]:
        location = state.get_location(colour)
        tickets = state.get_tickets(colour)
        occupied = {state.get_location(other) for other in state.detectives if other != colour}

        valid_moves: List[Move] = []
        for neighbour in self.graph.neighbors(location):
            if neighbour in occupied:
                continue
            for transport in edge_transports(self.graph, location, neighbour):
                ticket = TICKET_FOR_TRANSPORT.get(transport)
                if ticket is not None and tickets.get(ticket, 0) > 0:
                    valid_moves.append(TicketMove(colour, neighbour, transport, ticket))

        if not valid_moves:
            valid_moves.append(PassMove(colour))
        return valid_moves

    def _get_single_mr_x_moves(self, state: GameState, location: int,
                               tickets: Dict[TicketType, int]) -> List[TicketMove]:
        occupied = set(state.detective_locations)
        valid_moves = []
        for neighbour in self.graph.neighbors(location):
            if neighbour in occupied:
                continue
            for transport in edge_transports(self.graph, location, neighbour):
                ticket = TICKET_FOR_TRANSPORT.get(transport)
                if ticket is not None and tickets.get(ticket, 0) > 0:
                    valid_moves.append(TicketMove(MRX_COLOUR, neighbour, transport, ticket))
                # Black ticket covers any transport, ferries included
                if tickets.get(TicketType.BLACK, 0) > 0:
                    valid_moves.append(TicketMove(MRX_COLOUR, neighbour, transport, TicketType.BLACK))
        return valid_moves

    def _get_valid_mr_x_moves(self, state: GameState) -> List[Move]:
        location = state.mr_x_location
        if location is None:
            return []

        tickets = state.get_tickets(MRX_COLOUR)
        single_moves = self._get_single_mr_x_moves(state, location, tickets)
        valid_moves: List[Move] = list(single_moves)

        if tickets.get(TicketType.DOUBLE_MOVE, 0) > 0 and state.round + 2 <= state.max_rounds:
            for first in single_moves:
                remaining = dict(tickets)
                remaining[first.ticket] -= 1
                for second in self._get_single_mr_x_moves(state, first.destination, remaining):
                    valid_moves.append(DoubleMove(MRX_COLOUR, first, second))
        return valid_moves

    # Move application

    def play_move(self, state: GameState, move: Move) -> GameState:
        """Return the state reached by playing move; state itself is left untouched.
        Assumes the move is legal for state.current_player."""
        if move.colour != state.current_player:
            raise ValueError(f"It is {state.current_player.value}'s turn, not {move.colour.value}'s")

        new_state = state.copy()
        if isinstance(move, PassMove):
            pass
        elif isinstance(move, TicketMove):
            self._apply_ticket_move(new_state, move)
        elif isinstance(move, DoubleMove):
            self._spend_ticket(new_state, move.colour, TicketType.DOUBLE_MOVE)
            self._apply_ticket_move(new_state, move.move1)
            self._apply_ticket_move(new_state, move.move2)
        else:
            raise TypeError(f"Unknown move type: {type(move).__name__}")

        players = state.players
        next_index = (players.index(state.current_player) + 1) % len(players)
        new_state._current_player = players[next_index]
        return new_state

    def _spend_ticket(self, state: GameState, colour: Colour, ticket: TicketType):
        if state._tickets[colour].get(ticket, 0) <= 0:
            raise ValueError(f"{colour.value} has no {ticket.value} ticket left")
        state._tickets[colour][ticket] -= 1

    def _apply_ticket_move(self, state: GameState, move: TicketMove):
        self._spend_ticket(state, move.colour, move.ticket)
        if move.colour.is_mr_x:
            state._round += 1
            if state.is_reveal_round(state._round):
                state._last_revealed = move.destination
            if state._observer.is_mr_x:
                state._locations[MRX_COLOUR] = move.destination
            else:
                state._locations[MRX_COLOUR] = state._last_revealed
        else:
            state._locations[move.colour] = move.destination
            # Detective tickets go to Mr. X
            mr_x_tickets = state._tickets[MRX_COLOUR]
            mr_x_tickets[move.ticket] = mr_x_tickets.get(move.ticket, 0) + 1

    def make_move(self, move: Move) -> bool:
        """Play a move on the live game after checking it is legal"""
        state = self._require_state(None)
        if move not in self.get_valid_moves(state, state.current_player):
            raise ValueError(f"Illegal move for {state.current_player.value}: {move}")
        self.game_state = self.play_move(state, move)
        self.game_history.append(self.game_state)
        self.move_history.append(move)
        return True

    # Win conditions

    def _winner(self, state: GameState) -> Optional[Player]:
        mr_x_location = state.mr_x_location
        if mr_x_location is not None and mr_x_location in state.detective_locations:
            return Player.DETECTIVES

        if state.current_player.is_mr_x:
            if state.round >= state.max_rounds:
                return Player.MRX
            if mr_x_location is not None and not self._get_single_mr_x_moves(
                    state, mr_x_location, state.get_tickets(MRX_COLOUR)):
                return Player.DETECTIVES

        all_stuck = all(
            isinstance(moves[0], PassMove)
            for moves in (self._get_valid_detective_moves(state, colour) for colour in state.detectives)
        )
        if all_stuck:
            return Player.MRX
        return None

    def is_game_over(self, state: GameState = None) -> bool:
        return self._winner(self._require_state(state)) is not None

    def get_winner(self, state: GameState = None) -> Optional[Player]:
        return self._winner(self._require_state(state))

    def get_winning_players(self, state: GameState = None) -> Set[Colour]:
        state = self._require_state(state)
        winner = self._winner(state)
        if winner == Player.MRX:
            return {MRX_COLOUR}
        if winner == Player.DETECTIVES:
            return set(state.detectives)
        return set()

    # Views

    def get_current_player(self, state: GameState = None) -> Colour:
        return self._require_state(state).current_player

    def get_player_view(self, colour: Colour) -> GameState:
        """The live state as known by colour"""
        return self._require_state(None).masked_for(colour)

    def get_player_location(self, colour: Colour) -> Optional[int]:
        return self._require_state(None).get_location(colour)

    def get_state_representation(self) -> Dict:
        """Get serializable representation of current state"""
        if self.game_state is None:
            return {}
        state = self.game_state
        winner = self.get_winner()
        return {
            'locations': {colour.value: location for colour, location in state.locations.items()},
            'tickets': {colour.value: {t.value: n for t, n in tickets.items()}
                        for colour, tickets in state.tickets.items()},
            'round': state.round,
            'turn': state.current_player.value,
            'last_revealed': state.last_revealed,
            'game_over': winner is not None,
            'winner': winner.value if winner else None
        }
