"""
API Module - HTTP interface.

Exposes the engine via REST API. A client:
1. Creates a game
2. Lists the active player's legal actions
3. Posts actions and reads back the new state

All state is session-scoped and in memory. No user accounts.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    ActionRequest,
    # Responses
    GameStateResponse,
    ActionResponse,
    LegalActionsResponse,
    ErrorResponse,
    # Shared
    PlayerInfo,
    CardInfo,
    ActionInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "ActionRequest",
    # Responses
    "GameStateResponse",
    "ActionResponse",
    "LegalActionsResponse",
    "ErrorResponse",
    # Shared
    "PlayerInfo",
    "CardInfo",
    "ActionInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
