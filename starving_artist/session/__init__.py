"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through of a game:
- Created when a caller starts a game
- Holds the current game state and the seeded Dice
- Serializes actions through the reducer
- Dropped when the caller ends it

The game loop drives sessions-less batch games with bot policies.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult, simulate_game, simulate_games

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
    "simulate_game",
    "simulate_games",
]
