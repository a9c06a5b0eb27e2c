"""
Downtime - Cheap once-per-turn actions that trade Time for a stat.

- DOWNTIME_PRACTICE: +Craft
- DOWNTIME_SLEEP: +Inspiration
- DOWNTIME_EAT_AT_HOME: +Food
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from ..engine_core.action import Action, ActionResult, ActionType, ALREADY_DONE, INSUFFICIENT
from ..engine_core.checks import require_stage
from ..engine_core.state import GameState, TIMED_STAGES

if TYPE_CHECKING:
    from ..engine_core.dice import Dice


# action type -> (stat gained, turn flag, label)
DOWNTIME_ACTIONS = {
    ActionType.DOWNTIME_PRACTICE: ("craft", "used_practice", "practice"),
    ActionType.DOWNTIME_SLEEP: ("inspiration", "used_sleep", "sleep"),
    ActionType.DOWNTIME_EAT_AT_HOME: ("food", "used_eat_at_home", "eat_at_home"),
}


def handle_downtime(state: GameState, action: Action, dice: Dice) -> ActionResult:
    player = state.active_player
    rejection = require_stage(player, *TIMED_STAGES)
    if rejection:
        return rejection

    stat, flag, label = DOWNTIME_ACTIONS[action.action_type]
    if getattr(player.turn_flags, flag):
        return ActionResult.rejected(f"Already used {label} this turn", ALREADY_DONE)

    config = state.config.downtime
    if player.time_this_turn < config.time_cost:
        return ActionResult.rejected(f"{label} needs {config.time_cost} Time", INSUFFICIENT)

    player = (
        player.spend_time(config.time_cost)
        .with_stats(**{stat: getattr(player, stat) + config.gain})
        .with_flags(**{flag: True})
        .with_result(downtime=label)
    )
    return ActionResult.accepted(
        state.with_active_player(player),
        [f"{player.name} took some downtime ({label}): {stat} +{config.gain}"],
    )


HANDLERS = {action_type: handle_downtime for action_type in DOWNTIME_ACTIONS}
