"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between HTTP clients and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- GAME_NOT_FOUND: Game does not exist or has been ended
- INVALID_ACTION: Action type or payload could not be understood
- INVALID_SETUP: Player count, art paths or config overrides are invalid
- VALIDATION_ERROR: Request body failed validation
- INTERNAL_ERROR: Unexpected server error

A rule violation (e.g. drawing a card with no Time left) is not an HTTP
error: POST /actions answers 200 with accepted=false and the reducer's
rejection code.
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class GameStatus(str, Enum):
    """Game status values."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


class StageName(str, Enum):
    """Career stages."""
    HOME = "home"
    DREAMER = "dreamer"
    AMATEUR = "amateur"
    PRO = "pro"


class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    INVALID_ACTION = "INVALID_ACTION"
    INVALID_SETUP = "INVALID_SETUP"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display."""
    card_id: str
    name: str
    text: str = ""

    model_config = {"from_attributes": True}


class MinorWorkInfo(BaseModel):
    """A completed Minor Work."""
    work_id: str
    name: str
    kind: str

    model_config = {"from_attributes": True}


class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    name: str
    art_path: str
    stage: StageName
    is_current_turn: bool = False

    # Resources
    money: int = 0
    food: int = 0
    inspiration: int = 0
    craft: int = 0
    time_this_turn: int = 0

    # Progress
    home_progress: int = 0
    minor_works: list[MinorWorkInfo] = Field(default_factory=list)
    minor_work_in_progress_id: Optional[str] = None
    minor_work_progress: dict[str, int] = Field(default_factory=dict)
    platform_bonus: int = 0
    portfolio_built: bool = False
    masterwork_progress: int = 0

    # Job and PR
    job_id: Optional[str] = None
    skipped_work_count: int = 0
    scandal: int = 0
    hit_piece_used: bool = False

    pending_social_card: Optional[CardInfo] = None
    pending_pro_card: Optional[CardInfo] = None
    focus_stat: Optional[str] = Field(None, description="Pro masterwork focus this turn")
    turn_flags: dict[str, Any] = Field(default_factory=dict)


class ZeitgeistInfo(BaseModel):
    """Active global modifier and which milestones have fired."""
    zeitgeist_id: Optional[str] = None
    name: Optional[str] = None
    text: Optional[str] = None
    milestones: dict[str, bool] = Field(default_factory=dict)


class ActionInfo(BaseModel):
    """A fully specified action, as listed by /legal-actions."""
    type: str
    group: Optional[str] = None
    job_id: Optional[str] = None
    work_id: Optional[str] = None
    target_player_id: Optional[str] = None
    stat: Optional[str] = None


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to create a new game."""
    num_players: int = Field(1, ge=1, le=6, description="Number of hotseat players")
    art_paths: Optional[list[str]] = Field(
        None, description="Art path per player: visual_artist, author, musician (aliases allowed)"
    )
    names: Optional[list[str]] = Field(None, description="Display name per player")
    seed: Optional[int] = Field(None, description="Seed for reproducible games")
    config: Optional[dict[str, dict[str, Any]]] = Field(
        None, description='Per-section tuning overrides, e.g. {"rules": {"max_turns": 20}}'
    )


class ActionRequest(BaseModel):
    """Request to apply an action for the active player."""
    type: str = Field(..., description="Action type, e.g. roll_time or choose_job")
    job_id: Optional[str] = None
    work_id: Optional[str] = None
    time_spent: Optional[int] = Field(None, ge=0)
    outcome: Optional[str] = Field(None, description="success / fail for resolve_pro_card_choice")
    target_player_id: Optional[str] = None
    amount: Optional[int] = Field(None, ge=0)
    stat: Optional[str] = None


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Complete game state for display."""
    game_id: str
    status: GameStatus
    turn: int
    current_turn_player_id: str
    players: list[PlayerInfo] = Field(default_factory=list)
    zeitgeist: ZeitgeistInfo = Field(default_factory=ZeitgeistInfo)
    deck_sizes: dict[str, int] = Field(default_factory=dict)
    job_market: list[str] = Field(default_factory=list)
    winner_id: Optional[str] = None
    loss_reason: Optional[str] = None
    seed: Optional[int] = None
    created_at: float = 0.0
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """Outcome of applying an action."""
    game_id: str
    accepted: bool
    error: Optional[str] = None
    error_code: Optional[str] = Field(None, description="Reducer rejection code")
    state_changes: list[str] = Field(default_factory=list)
    game_state: GameStateResponse
    api_version: str = "v1"


class LegalActionsResponse(BaseModel):
    """Legal actions for the active player."""
    game_id: str
    player_id: str
    actions: list[ActionInfo] = Field(default_factory=list)
    count: int = 0


class GameListResponse(BaseModel):
    """Response listing games."""
    games: list[str]
    count: int


class EndGameResponse(BaseModel):
    """Response after ending a game."""
    success: bool
    game_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
