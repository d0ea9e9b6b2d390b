"""Contains the data structures that represent a relayed game session.

The coordinator in coordinator.py decides what to emit; this module only
holds the per-session state machine.

"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class SessionError(Exception):
    """Base class for request-level errors reported back to one client.

    Attributes
    ----------
    message : str
        The client-facing message sent in the ``gameError`` event
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SessionFullError(SessionError):
    """Raised when a third participant tries to join a session."""

    def __init__(self):
        super().__init__('Game is full')


class NotYourTurnError(SessionError):
    """Raised when a move's piece colour does not match the side to move."""

    def __init__(self):
        super().__init__('Not your turn')


class Color(str, Enum):
    """Side colour, encoded on the wire as a single character."""
    WHITE = 'w'
    BLACK = 'b'

    def opposite(self) -> 'Color':
        return Color.BLACK if self is Color.WHITE else Color.WHITE


class Status(str, Enum):
    WAITING = 'waiting'
    ACTIVE = 'active'
    FINISHED = 'finished'


MAX_PLAYERS = 2


@dataclass
class Participant(object):
    """A connection bound to a session with a colour."""
    connection_id: str
    color: Color

    def to_dict(self) -> dict:
        return {'id': self.connection_id, 'color': self.color.value}


@dataclass
class Session(object):
    """State of one relayed match.

    Attributes
    ----------
    id : str
        Session identifier, unique among active sessions
    players : List[Participant]
        Participants in join order.  The first is white, the second black.
    turn : Color
        Colour currently allowed to move
    status : Status
        One of waiting, active or finished
    position : Any
        Last board position supplied by a mover.  Never interpreted.
    moves_list : List[List[str]]
        One ``[white_move, black_move]`` pair per full move.  The black slot
        is the empty string until black replies.
    result : Any
        Result payload supplied when the game ended, None before that

    """
    id: str
    players: List[Participant] = field(default_factory=list)
    turn: Color = Color.WHITE
    status: Status = Status.WAITING
    position: Any = None
    moves_list: List[List[str]] = field(default_factory=list)
    result: Any = None

    @property
    def move_number(self) -> int:
        return len(self.moves_list)

    @property
    def is_full(self) -> bool:
        return len(self.players) >= MAX_PLAYERS

    def participant(self, connection_id: str) -> Optional[Participant]:
        """Return the participant bound to ``connection_id``, if any."""
        for player in self.players:
            if player.connection_id == connection_id:
                return player
        return None

    def add_player(self, connection_id: str) -> Participant:
        """Seat a new participant and return it.

        The first participant plays white.  The second plays black and
        starts the game, unless the session has already finished.

        Raises SessionFullError if both seats are taken.

        """
        if self.is_full:
            raise SessionFullError()

        color = Color.WHITE if not self.players else Color.BLACK
        player = Participant(connection_id, color)
        self.players.append(player)

        if self.status is not Status.FINISHED:
            self.status = Status.ACTIVE if self.is_full else Status.WAITING
        return player

    def apply_move(self, new_position: Any, new_move: str, piece: str):
        """Record a move made by the side owning ``piece``.

        The colour of the mover is the first character of ``piece``.  Only
        turn order is enforced; the move itself is relayed as given.

        Raises NotYourTurnError, without touching any state, if that colour
        is not the side to move.

        """
        if not piece or piece[0] != self.turn.value:
            raise NotYourTurnError()

        mover = self.turn
        self.position = new_position
        if mover is Color.WHITE:
            self.moves_list.append([new_move, ''])
        elif self.moves_list:
            self.moves_list[-1][1] = new_move
        self.turn = mover.opposite()

    def finish(self, result: Any):
        """Mark the session finished with the given result."""
        self.status = Status.FINISHED
        self.result = result

    def to_dict(self) -> dict:
        """Return a JSON-friendly snapshot of the session."""
        return {
            'game_id': self.id,
            'players': [player.to_dict() for player in self.players],
            'turn': self.turn.value,
            'status': self.status.value,
            'position': self.position,
            'move_number': self.move_number,
            'moves_list': [list(pair) for pair in self.moves_list],
            'result': self.result
        }
