"""In-memory session store.

Each :class:`SessionRoom` owns one session's :class:`GameState`, the lock that
serializes commands against it, and the random source its dice, deck, and
robber draw from.  Rooms share nothing mutable, so commands for different
sessions never wait on each other.
"""

from __future__ import annotations

import random
import threading
import uuid

from ..engine import turn_manager
from ..models import game_state as gs

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


class SessionRoom:
    """A single session and the lock guarding it."""

    def __init__(self, state: gs.GameState, rng: random.Random) -> None:
        self.state = state
        self.rng = rng
        self.lock = threading.Lock()

    @property
    def session_id(self) -> str:
        return self.state.session_id

    def snapshot(self) -> gs.GameState:
        """Return a deep copy of the current state, safe to hand to callers."""
        with self.lock:
            return self.state.model_copy(deep=True)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class SessionStore:
    """Owns all active :class:`SessionRoom` instances."""

    def __init__(self) -> None:
        self._rooms: dict[str, SessionRoom] = {}
        self._lock = threading.Lock()

    def create(self, rng: random.Random | None = None) -> SessionRoom:
        """Create a new empty session whose dice, deck and robber draw from *rng*."""
        rng = rng if rng is not None else random.Random()
        session_id = str(uuid.uuid4())
        room = SessionRoom(turn_manager.create_initial_game_state(session_id, rng), rng)
        with self._lock:
            self._rooms[session_id] = room
        return room

    def get(self, session_id: str) -> SessionRoom | None:
        """Return the room for *session_id*, or ``None`` if not found."""
        with self._lock:
            return self._rooms.get(session_id)

    def remove(self, session_id: str) -> None:
        """Forget *session_id*.  Removing an unknown session is a no-op."""
        with self._lock:
            self._rooms.pop(session_id, None)

    def session_ids(self) -> list[str]:
        with self._lock:
            return list(self._rooms)

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)
