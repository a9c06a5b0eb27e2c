"""
Game State - The canonical state the reducer operates on.

Design principles:
- Immutable-friendly: every change returns a new object, no previously
  returned state is mutated
- Turn gating (TurnFlags) is kept apart from the presentation read model
  (LastResult); gating never consults LastResult
- Stat floors are enforced in one place: PlayerState.with_stats()
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any
from enum import Enum

from .config import GameConfig
from .deck import Deck
from .effects import Effect, FLOORED_STATS, STATS


class Stage(Enum):
    """A player's top-level progression state."""
    HOME = "home"
    DREAMER = "dreamer"
    AMATEUR = "amateur"
    PRO = "pro"


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


# Stages whose milestones trigger a Zeitgeist, in priority order.
MILESTONE_STAGES = (Stage.DREAMER, Stage.AMATEUR, Stage.PRO)

# Stages that roll Time at the start of play.
TIMED_STAGES = (Stage.DREAMER, Stage.AMATEUR, Stage.PRO)

# Counters that share the stat floor of zero.
_FLOORED_COUNTERS = ("time_this_turn", "scandal")


@dataclass(frozen=True)
class RollRecord:
    """One die roll against a target, kept for display."""
    roll: int
    target: int
    success: bool


@dataclass(frozen=True)
class TurnFlags:
    """
    Per-turn gating. START_TURN replaces this with a fresh instance.
    """
    has_rolled_time: bool = False
    has_worked: bool = False
    used_practice: bool = False
    used_sleep: bool = False
    used_eat_at_home: bool = False
    home_card_drawn: bool = False
    leave_home_attempted: bool = False
    dreamer_advance_attempted: bool = False
    did_pro_maintenance: bool = False
    pro_maintenance_required: bool = False
    can_lay_low: bool = False
    has_acted: bool = False
    used_ai_boom: bool = False
    used_streaming_refund: bool = False
    focus_stat: str | None = None


@dataclass(frozen=True)
class LastResult:
    """
    What the last actions did, for the presentation layer.

    Nothing in the engine reads these fields to decide legality.
    """
    home_card: Any | None = None
    home_roll: RollRecord | None = None
    time_roll: int | None = None
    social_card: Any | None = None
    social_choice: str | None = None
    job_id: str | None = None
    fired_job_id: str | None = None
    dreamer_advance_eligible: bool | None = None
    dreamer_advance_roll: RollRecord | None = None
    prof_dev_card: Any | None = None
    prof_dev_boost: tuple[str, int, int] | None = None  # (work id, progress, cap)
    minor_work_started_id: str | None = None
    minor_work_progress: tuple[str, int, int] | None = None  # (work id, progress, target)
    minor_work_completed_id: str | None = None
    portfolio_cost: dict[str, int] | None = None
    pro_advance_roll: RollRecord | None = None
    masterwork_time_spent: int | None = None
    pro_card: Any | None = None
    pro_card_outcome: str | None = None
    maintenance_roll: RollRecord | None = None
    lay_low_roll: int | None = None
    scandal_bought_out: int | None = None
    hit_piece: tuple[str, int] | None = None  # (target id, scandal inflicted)
    downtime: str | None = None
    zeitgeist_conversion: str | None = None


@dataclass(frozen=True)
class CompletedMinorWork:
    """A finished Minor Work; effects_per_turn pay out every turn from now on."""
    work_id: str
    name: str
    kind: str
    effects_per_turn: tuple[Effect, ...] = ()


@dataclass
class PlayerState:
    """
    State for a single player.

    Fields are replaced, never mutated in place.
    """
    player_id: str
    name: str
    art_path: str
    stage: Stage = Stage.HOME

    # Resources
    money: int = 0
    food: int = 0
    inspiration: int = 0
    craft: int = 0
    time_this_turn: int = 0

    # Stage progress
    home_progress: int = 0
    minor_works: list[CompletedMinorWork] = field(default_factory=list)
    minor_work_in_progress_id: str | None = None
    minor_work_progress_by_id: dict[str, int] = field(default_factory=dict)
    platform_bonus: int = 0
    portfolio_built: bool = False
    masterwork_progress: int = 0

    # Job
    job_id: str | None = None
    skipped_work_count: int = 0
    fired_jobs: list[str] = field(default_factory=list)

    # PR
    scandal: int = 0
    hit_piece_used: bool = False

    # Cards waiting for a choice
    pending_social_card: Any | None = None
    pending_social_time_cost: int = 0
    pending_pro_card: Any | None = None

    turn_flags: TurnFlags = field(default_factory=TurnFlags)
    last_result: LastResult = field(default_factory=LastResult)

    def _copy_with(self, **kwargs) -> PlayerState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)

    def with_stats(self, **stats: int) -> PlayerState:
        """Return new player with stats replaced, clamped to their floors."""
        for name in stats:
            if name not in STATS and name not in _FLOORED_COUNTERS:
                raise ValueError(f"Unknown stat: {name}")
        clamped = {
            name: max(0, value) if name in FLOORED_STATS + _FLOORED_COUNTERS else value
            for name, value in stats.items()
        }
        return replace(self, **clamped)

    def with_flags(self, **flags: Any) -> PlayerState:
        """Return new player with turn flags updated."""
        return replace(self, turn_flags=replace(self.turn_flags, **flags))

    def with_result(self, **results: Any) -> PlayerState:
        """Return new player with last-result fields updated."""
        return replace(self, last_result=replace(self.last_result, **results))

    def spend_time(self, amount: int) -> PlayerState:
        return self.with_stats(time_this_turn=self.time_this_turn - amount)

    def can_afford(self, cost: dict[str, int] | None) -> bool:
        """True if every stat in cost is at least the required amount."""
        for name, required in (cost or {}).items():
            if getattr(self, name, 0) < required:
                return False
        return True

    def pay(self, cost: dict[str, int] | None) -> PlayerState:
        """Subtract cost from the matching stats."""
        if not cost:
            return self
        return self.with_stats(
            **{name: getattr(self, name) - amount for name, amount in cost.items()}
        )

    @property
    def completed_work_ids(self) -> set[str]:
        return {work.work_id for work in self.minor_works}


@dataclass
class ZeitgeistState:
    """The active global modifier plus which milestones already fired."""
    current: Any | None = None  # catalog.zeitgeists.Zeitgeist
    milestones: dict[str, bool] = field(
        default_factory=lambda: {stage.value: False for stage in MILESTONE_STAGES}
    )
    history: list[Any] = field(default_factory=list)

    @property
    def current_id(self) -> str | None:
        return self.current.zeitgeist_id if self.current else None


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    game_id: str
    players: list[PlayerState] = field(default_factory=list)
    config: GameConfig = field(default_factory=GameConfig)

    # Turn tracking
    turn: int = 1
    active_player_index: int = 0

    # Shared decks
    home_deck: Deck = field(default_factory=lambda: Deck(name="home"))
    social_deck: Deck = field(default_factory=lambda: Deck(name="social"))
    prof_dev_deck: Deck = field(default_factory=lambda: Deck(name="prof_dev"))
    pro_deck: Deck = field(default_factory=lambda: Deck(name="pro"))
    job_deck: list[str] = field(default_factory=list)

    # Outcome
    status: GameStatus = GameStatus.IN_PROGRESS
    winner_id: str | None = None
    loss_reason: str | None = None

    zeitgeist: ZeitgeistState = field(default_factory=ZeitgeistState)

    @property
    def active_player(self) -> PlayerState:
        """Get the player whose turn it is."""
        return self.players[self.active_player_index]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def is_over(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def with_player(self, player: PlayerState) -> GameState:
        """Return new state with updated player."""
        new_players = [
            player if p.player_id == player.player_id else p
            for p in self.players
        ]
        return self._copy_with(players=new_players)

    def with_active_player(self, player: PlayerState) -> GameState:
        new_players = list(self.players)
        new_players[self.active_player_index] = player
        return self._copy_with(players=new_players)

    def with_deck(self, deck_key: str, deck: Deck) -> GameState:
        """Return new state with one of the shared decks replaced."""
        return self._copy_with(**{deck_key: deck})

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
