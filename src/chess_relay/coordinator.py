"""
Session coordinator.

Handles every inbound game event: validates it against the registry,
mutates the affected session and tells the gateway what to emit.  Each
operation holds the registry lock for its whole read-modify-write-emit
sequence, so two events touching the same session never interleave.
"""

from typing import Any, List, Optional

from loguru import logger

from .gateway import ConnectionGateway
from .session import Color, SessionError, Status
from .session_registry import SessionRegistry

GAME_NOT_FOUND = 'Game not found'
GENERIC_ERROR = 'An error occurred'


class SessionCoordinator(object):
    """Pairs two connections into a session and relays their moves.

    Parameters
    ----------
    registry : SessionRegistry
        Store of active sessions
    gateway : ConnectionGateway
        Outbound transport used for replies and broadcasts

    """

    def __init__(self, registry: SessionRegistry, gateway: ConnectionGateway):
        self.registry = registry
        self.gateway = gateway

    def create_session(self, connection_id: str) -> str:
        """Open a new session with the requester playing white.

        Only the requester is told about the new session.  Returns the id.

        """
        with self.registry.lock:
            session = self.registry.create(connection_id)
            self.gateway.join_group(connection_id, session.id)
            self.gateway.send(connection_id, 'gameCreated', {
                'gameId': session.id,
                'color': Color.WHITE.value,
                'status': session.status.value
            })

        logger.info(f"Game '{session.id}' created by {connection_id}")
        return session.id

    def join_session(self, connection_id: str, session_id: Optional[str]) -> bool:
        """Seat the requester as black in an existing session.

        On success the whole group learns the game has started and the
        joiner gets its colour.  Failures are reported to the requester
        only.  Returns whether the join succeeded.

        """
        with self.registry.lock:
            session = self.registry.get(session_id)
            if session is None:
                logger.warning(f"{connection_id} tried to join unknown game '{session_id}'")
                self.gateway.send(connection_id, 'gameError', {'message': GAME_NOT_FOUND})
                return False

            try:
                player = session.add_player(connection_id)
            except SessionError as e:
                logger.warning(f"{connection_id} could not join game '{session_id}': {e.message}")
                self.gateway.send(connection_id, 'gameError', {'message': e.message})
                return False

            self.gateway.join_group(connection_id, session_id)
            self.gateway.broadcast(session_id, 'gameStarted', {
                'gameId': session_id,
                'players': [p.to_dict() for p in session.players],
                'turn': session.turn.value,
                'status': session.status.value
            })
            self.gateway.send(connection_id, 'playerColor', {'color': player.color.value})

        logger.info(f"{connection_id} joined game '{session_id}' as {player.color.name.lower()}")
        return True

    def submit_move(self, connection_id: str, session_id: Optional[str], new_position: Any,
                    new_move: str, piece: str) -> bool:
        """Relay a move to both players if it is the mover's turn.

        Moves for a missing or inactive session are dropped without a reply.
        A move by the wrong colour leaves the session untouched and the
        requester gets "Not your turn".  Returns whether the move was
        applied.

        """
        with self.registry.lock:
            session = self.registry.get(session_id)
            if session is None or session.status is not Status.ACTIVE:
                return False

            try:
                session.apply_move(new_position, new_move, piece)
            except SessionError as e:
                logger.warning(f"Rejected move '{new_move}' by {connection_id} in game '{session_id}': {e.message}")
                self.gateway.send(connection_id, 'gameError', {'message': e.message})
                return False

            self.gateway.broadcast(session_id, 'moveMade', {
                'newPosition': new_position,
                'newMove': new_move,
                'turn': session.turn.value,
                'piece': piece,
                'moveNumber': session.move_number,
                'gameStatus': session.status.value,
                'movesList': [list(pair) for pair in session.moves_list]
            })
            logger.info(f"Move made in game '{session_id}': {new_move} (turn: {session.turn.value}, position: {new_position})")
        return True

    def end_game(self, connection_id: str, session_id: Optional[str], result: Any) -> bool:
        """Finish the session with ``result`` and tell the whole group.

        Applies whatever the session's current status.  Unknown sessions
        are ignored.  Returns whether a session was finished.

        """
        with self.registry.lock:
            session = self.registry.get(session_id)
            if session is None:
                return False

            session.finish(result)
            self.gateway.broadcast(session_id, 'gameEnded', {
                'result': result,
                'status': session.status.value
            })
            logger.info(f"Game '{session_id}' ended by {connection_id}: {result}")
        return True

    def disconnect(self, connection_id: str) -> List[str]:
        """Tear down every session the departing connection belongs to.

        The rest of each group is told which player left and the session is
        deleted, whatever its status.  Returns the deleted session ids.

        """
        removed = []
        with self.registry.lock:
            for session_id, session in self.registry.items():
                player = session.participant(connection_id)
                if player is None:
                    continue

                self.gateway.broadcast(session_id, 'playerDisconnected', {
                    'playerId': connection_id,
                    'color': player.color.value
                })
                self.registry.delete(session_id)
                self.gateway.close_group(session_id)
                removed.append(session_id)

        for session_id in removed:
            logger.info(f"Game '{session_id}' deleted after {connection_id} disconnected")
        return removed

    def transport_error(self, connection_id: str, error: Exception):
        """Report a failed event to the connection that sent it."""
        logger.opt(exception=error).error(f"Socket error on {connection_id}: {error}")
        self.gateway.send(connection_id, 'gameError', {'message': GENERIC_ERROR})
