"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Caller creates a session -> new_game() + START_TURN on a seeded Dice
2. During the game every action goes through dispatch(), which runs the
   reducer against the session's state under the session lock
3. Game ends (won / lost) -> the session stays readable until ended
4. end_session() drops the session and its state

PERSISTENCE RULES:
- NO database; sessions are in-memory only
- One Dice per session; a seed plus the action history replays the game
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import threading
import time
import uuid

from ..engine_core.action import Action, ActionResult
from ..engine_core.action_generator import legal_actions
from ..engine_core.config import GameConfig
from ..engine_core.dice import Dice
from ..engine_core.reducer import Reducer
from ..engine_core.setup import new_game
from ..engine_core.state import GameState

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Won or lost, still readable
    ENDED = "ended"  # Removed by the caller


@dataclass
class Session:
    """
    An ephemeral game session.

    Contains:
    - The current canonical GameState
    - The Reducer (and so the Dice) that every action goes through
    - The accepted action history, for replay
    """
    session_id: str
    game_state: GameState
    reducer: Reducer
    created_at: float
    seed: int | None = None

    state: SessionState = SessionState.ACTIVE
    history: list[dict[str, Any]] = field(default_factory=list)
    last_changes: list[str] = field(default_factory=list)

    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def dice(self) -> Dice:
        return self.reducer.dice

    def is_active(self) -> bool:
        """Check if the game can still take actions."""
        return self.state == SessionState.ACTIVE and not self.game_state.is_over


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions (set up and open the first turn)
    - Serialize dispatches per session
    - Clean up ended and stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(
        self,
        num_players: int = 1,
        art_paths: list[str] | None = None,
        names: list[str] | None = None,
        seed: int | None = None,
        config: GameConfig | dict[str, Any] | None = None,
        decks: dict[str, list[Any]] | None = None,
    ) -> Session:
        """
        Create a new game session with the first turn already started.

        Raises ValueError for an invalid setup (no players, bad config).
        """
        session_id = str(uuid.uuid4())
        dice = Dice(seed)
        state = new_game(
            num_players=num_players,
            art_paths=art_paths,
            names=names,
            seed=seed,
            dice=dice,
            config=config,
            decks=decks,
            game_id=session_id,
        )

        reducer = Reducer(dice=dice)
        result = reducer.resolve(state, Action.start_turn())

        session = Session(
            session_id=session_id,
            game_state=result.new_state,
            reducer=reducer,
            created_at=time.time(),
            seed=seed,
            last_changes=result.state_changes,
        )
        with self._lock:
            self._sessions[session_id] = session

        logger.info("Created session %s (%d player(s), seed=%s)", session_id, num_players, seed)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        with self._lock:
            return self._sessions.get(session_id)

    def dispatch(self, session_id: str, action: Action) -> ActionResult:
        """
        Apply an action to a session's game.

        Rejections leave the state as it was, except a blocked END_TURN,
        which keeps the maintenance-required flag it sets.
        Raises KeyError for an unknown session.
        """
        session = self.get_session(session_id)
        if session is None:
            raise KeyError(session_id)

        with session.lock:
            result = session.reducer.resolve(session.game_state, action)
            if result.new_state is not None:
                session.game_state = result.new_state
            if result.success:
                session.history.append(action.to_dict())
                session.last_changes = result.state_changes
            if session.game_state.is_over and session.state == SessionState.ACTIVE:
                session.state = SessionState.GAME_OVER
                logger.info("Session %s finished: %s",
                            session_id, session.game_state.status.value)
        return result

    def legal_actions(self, session_id: str) -> list[Action]:
        """
        List the active player's legal actions.

        Raises KeyError for an unknown session.
        """
        session = self.get_session(session_id)
        if session is None:
            raise KeyError(session_id)

        with session.lock:
            return legal_actions(session.game_state, session.dice)

    def end_session(self, session_id: str) -> bool:
        """
        End a session and drop it from memory.

        Returns False if there was no such session.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.state = SessionState.ENDED
        session.history.clear()
        return True

    def list_sessions(self) -> list[str]:
        """List IDs of all sessions, finished or not."""
        with self._lock:
            return list(self._sessions)

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions whose game is still running."""
        with self._lock:
            return [sid for sid, session in self._sessions.items() if session.is_active()]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove finished sessions older than max_age.

        Returns how many were removed.
        """
        now = time.time()
        with self._lock:
            stale = [
                sid for sid, session in self._sessions.items()
                if now - session.created_at > max_age_seconds and not session.is_active()
            ]
        for session_id in stale:
            self.end_session(session_id)
        return len(stale)
