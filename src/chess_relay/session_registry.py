"""
In-memory store of active sessions, keyed by session id.
"""

import random
import string
import threading
from typing import Dict, List, Optional, Tuple

from .session import Session

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 6


class SessionRegistry(object):
    """Holds every active session, keyed by session id.

    The model here is:
    - Each session has a unique short string id, generated on creation.
    - A session stays registered until it is deleted, which only happens
      when one of its participants disconnects.
    - The registry is the only state shared between connections.  Callers
      that read, modify and write a session must hold ``lock`` for the
      whole sequence.

    """
    def __init__(self):
        """Initialize the registry with no sessions."""
        self.sessions: Dict[str, Session] = {}
        self.lock = threading.RLock()

    def __len__(self) -> int:
        return len(self.sessions)

    def __contains__(self, session_id) -> bool:
        return session_id in self.sessions

    def new_session_id(self) -> str:
        """Return a fresh id that no active session uses."""
        with self.lock:
            while True:
                session_id = ''.join(random.choices(ID_ALPHABET, k=ID_LENGTH))
                if session_id not in self.sessions:
                    return session_id

    def create(self, connection_id: str) -> Session:
        """Create and register a waiting session whose creator plays white.

        """
        with self.lock:
            session = Session(id=self.new_session_id())
            session.add_player(connection_id)
            self.add(session)
            return session

    def add(self, session: Session) -> str:
        """Register a session and return its id.

        Raises KeyError if a session with the same id is already registered.

        """
        with self.lock:
            if session.id in self.sessions:
                raise KeyError(f"Session '{session.id}' already exists")
            self.sessions[session.id] = session
            return session.id

    def get(self, session_id: str) -> Optional[Session]:
        """Return the session with the given id, or None."""
        with self.lock:
            return self.sessions.get(session_id)

    def delete(self, session_id: str):
        """Remove the given session.  Unknown ids are ignored."""
        with self.lock:
            self.sessions.pop(session_id, None)

    def items(self) -> List[Tuple[str, Session]]:
        """Return a snapshot of all ``(session_id, session)`` pairs."""
        with self.lock:
            return list(self.sessions.items())

    def list_sessions(self) -> List[str]:
        """Lists current session ids."""
        with self.lock:
            return list(self.sessions.keys())
