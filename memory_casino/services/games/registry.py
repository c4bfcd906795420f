import threading
from typing import Dict, List, Optional

from .session import GameSession


class SessionRegistry:
    """In-memory map of player id -> current session.

    Mutations for one player are serialized by that player's lock stripe;
    `_map_lock` only protects the dict itself for cross-player reads.
    """

    def __init__(self, stripes: int = 64):
        if stripes < 1:
            raise ValueError('stripes must be >= 1')
        self._stripes = [threading.Lock() for _ in range(stripes)]
        self._map_lock = threading.Lock()
        self._sessions: Dict[int, GameSession] = {}

    def lock_for(self, player_id: int) -> threading.Lock:
        return self._stripes[hash(player_id) % len(self._stripes)]

    def get(self, player_id: int) -> Optional[GameSession]:
        with self._map_lock:
            return self._sessions.get(player_id)

    def put(self, session: GameSession) -> Optional[GameSession]:
        """Publish a session, returning the one it replaced."""
        with self._map_lock:
            previous = self._sessions.get(session.player_id)
            self._sessions[session.player_id] = session
            return previous

    def active_player_ids(self) -> List[int]:
        with self._map_lock:
            return [pid for pid, s in self._sessions.items() if s.active]

    def active_count(self) -> int:
        return len(self.active_player_ids())
