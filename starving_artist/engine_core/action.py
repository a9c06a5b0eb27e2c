"""
Action System - Actions, payloads, and results.

Actions represent:
1. Turn lifecycle (start turn, roll time, end turn)
2. Stage actions (Home, Dreamer, Amateur, Pro)
3. Cross-stage systems (jobs, downtime, scandal, zeitgeist)

The vocabulary is closed: every ActionType belongs to exactly one group in
ACTION_GROUPS, and the reducer checks that every type has a handler.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    # Turn lifecycle
    START_TURN = "start_turn"
    ROLL_TIME = "roll_time"
    END_TURN = "end_turn"

    # Home
    DRAW_HOME_CARD = "draw_home_card"
    ATTEMPT_LEAVE_HOME = "attempt_leave_home"

    # Dreamer
    DRAW_SOCIAL_CARD = "draw_social_card"
    ATTEND_SOCIAL_EVENT = "attend_social_event"
    SKIP_SOCIAL_EVENT = "skip_social_event"
    ATTEMPT_ADVANCE_DREAMER = "attempt_advance_dreamer"

    # Jobs (persist across stages)
    CHOOSE_JOB = "choose_job"
    QUIT_JOB = "quit_job"
    GO_TO_WORK = "go_to_work"

    # Amateur
    TAKE_PROF_DEV = "take_prof_dev"
    START_MINOR_WORK = "start_minor_work"
    PROGRESS_MINOR_WORK = "progress_minor_work"
    COMPILE_PORTFOLIO = "compile_portfolio"
    ATTEMPT_ADVANCE_PRO = "attempt_advance_pro"

    # Pro
    WORK_ON_MASTERWORK = "work_on_masterwork"
    DRAW_PRO_CARD = "draw_pro_card"
    RESOLVE_PRO_CARD_CHOICE = "resolve_pro_card_choice"
    PRO_MAINTENANCE_CHECK = "pro_maintenance_check"

    # PR / Scandal
    LAY_LOW = "lay_low"
    PLANT_HIT_PIECE = "plant_hit_piece"
    BUYOUT_SCANDAL = "buyout_scandal"

    # Zeitgeist
    AI_BOOM_CONVERT = "ai_boom_convert"

    # Downtime
    DOWNTIME_PRACTICE = "downtime_practice"
    DOWNTIME_SLEEP = "downtime_sleep"
    DOWNTIME_EAT_AT_HOME = "downtime_eat_at_home"


ACTION_GROUPS: dict[str, tuple[ActionType, ...]] = {
    "turn": (ActionType.START_TURN, ActionType.ROLL_TIME, ActionType.END_TURN),
    "home": (ActionType.DRAW_HOME_CARD, ActionType.ATTEMPT_LEAVE_HOME),
    "dreamer": (
        ActionType.DRAW_SOCIAL_CARD,
        ActionType.ATTEND_SOCIAL_EVENT,
        ActionType.SKIP_SOCIAL_EVENT,
        ActionType.ATTEMPT_ADVANCE_DREAMER,
    ),
    "job": (ActionType.CHOOSE_JOB, ActionType.QUIT_JOB, ActionType.GO_TO_WORK),
    "amateur": (
        ActionType.TAKE_PROF_DEV,
        ActionType.START_MINOR_WORK,
        ActionType.PROGRESS_MINOR_WORK,
        ActionType.COMPILE_PORTFOLIO,
        ActionType.ATTEMPT_ADVANCE_PRO,
    ),
    "pro": (
        ActionType.WORK_ON_MASTERWORK,
        ActionType.DRAW_PRO_CARD,
        ActionType.RESOLVE_PRO_CARD_CHOICE,
        ActionType.PRO_MAINTENANCE_CHECK,
    ),
    "scandal": (ActionType.LAY_LOW, ActionType.PLANT_HIT_PIECE, ActionType.BUYOUT_SCANDAL),
    "zeitgeist": (ActionType.AI_BOOM_CONVERT,),
    "downtime": (
        ActionType.DOWNTIME_PRACTICE,
        ActionType.DOWNTIME_SLEEP,
        ActionType.DOWNTIME_EAT_AT_HOME,
    ),
}

# Actions that never consume Lay Low and never get Zeitgeist post-effects.
LIFECYCLE_ACTIONS = frozenset({ActionType.START_TURN, ActionType.END_TURN})


def group_of(action_type: ActionType) -> str | None:
    for group, members in ACTION_GROUPS.items():
        if action_type in members:
            return group
    return None


# Rejection codes
WRONG_STAGE = "WRONG_STAGE"
ALREADY_DONE = "ALREADY_DONE"
NOT_ALLOWED = "NOT_ALLOWED"
INSUFFICIENT = "INSUFFICIENT"
INVALID_TARGET = "INVALID_TARGET"
DECK_EMPTY = "DECK_EMPTY"
MAINTENANCE_REQUIRED = "MAINTENANCE_REQUIRED"
GAME_OVER = "GAME_OVER"
UNKNOWN_ACTION = "UNKNOWN_ACTION"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    This is a generic container; validation happens in the handlers.
    """
    job_id: str | None = None
    work_id: str | None = None
    time_spent: int | None = None
    outcome: str | None = None  # "success" / "fail" for RESOLVE_PRO_CARD_CHOICE
    target_player_id: str | None = None
    amount: int | None = None
    stat: str | None = None  # AI_BOOM_CONVERT target stat


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions always apply to the active player.
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def simple(cls, action_type: ActionType) -> Action:
        """Factory for actions without parameters."""
        return cls(action_type=action_type, payload=ActionPayload())

    @classmethod
    def start_turn(cls) -> Action:
        return cls.simple(ActionType.START_TURN)

    @classmethod
    def roll_time(cls) -> Action:
        return cls.simple(ActionType.ROLL_TIME)

    @classmethod
    def end_turn(cls) -> Action:
        return cls.simple(ActionType.END_TURN)

    @classmethod
    def choose_job(cls, job_id: str) -> Action:
        """Factory for taking a job from the job market."""
        return cls(ActionType.CHOOSE_JOB, ActionPayload(job_id=job_id))

    @classmethod
    def start_minor_work(cls, work_id: str) -> Action:
        return cls(ActionType.START_MINOR_WORK, ActionPayload(work_id=work_id))

    @classmethod
    def work_on_masterwork(cls, time_spent: int | None = None) -> Action:
        """Factory for masterwork work. Omitting time_spent spends all Time."""
        return cls(ActionType.WORK_ON_MASTERWORK, ActionPayload(time_spent=time_spent))

    @classmethod
    def resolve_pro_card(cls, outcome: str | None = None) -> Action:
        """Factory for resolving a pending Pro card. Omitted outcome is rolled."""
        return cls(ActionType.RESOLVE_PRO_CARD_CHOICE, ActionPayload(outcome=outcome))

    @classmethod
    def plant_hit_piece(cls, target_player_id: str, amount: int | None = None) -> Action:
        return cls(
            ActionType.PLANT_HIT_PIECE,
            ActionPayload(target_player_id=target_player_id, amount=amount),
        )

    @classmethod
    def buyout_scandal(cls, amount: int | None = None) -> Action:
        return cls(ActionType.BUYOUT_SCANDAL, ActionPayload(amount=amount))

    @classmethod
    def ai_boom_convert(cls, stat: str) -> Action:
        return cls(ActionType.AI_BOOM_CONVERT, ActionPayload(stat=stat))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Action:
        """
        Build an action from {"type": "choose_job", "job_id": ...}.

        Raises ValueError for unknown action types.
        """
        raw_type = str(data.get("type") or data.get("action_type") or "").strip().lower()
        try:
            action_type = ActionType(raw_type)
        except ValueError:
            raise ValueError(f"Unknown action type: {raw_type!r}") from None
        payload_fields = {
            key: data[key]
            for key in ("job_id", "work_id", "time_spent", "outcome",
                        "target_player_id", "amount", "stat")
            if data.get(key) is not None
        }
        return cls(action_type, ActionPayload(**payload_fields))

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.action_type.value}
        for key in ("job_id", "work_id", "time_spent", "outcome",
                    "target_player_id", "amount", "stat"):
            value = getattr(self.payload, key)
            if value is not None:
                out[key] = value
        return out


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action was accepted
    - New state (if accepted)
    - Reason and code (if rejected)
    - Human-readable changes for the presentation layer
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)

    @property
    def rejected_reason(self) -> str | None:
        return None if self.success else self.error

    @classmethod
    def rejected(cls, reason: str, code: str | None = None) -> ActionResult:
        """Create a rejection. The dispatcher returns the unchanged state."""
        return cls(success=False, error=reason, error_code=code)

    @classmethod
    def accepted(cls, state: Any, changes: list[str] | None = None) -> ActionResult:
        """Create an accepted result with the new state."""
        return cls(success=True, new_state=state, state_changes=changes or [])
