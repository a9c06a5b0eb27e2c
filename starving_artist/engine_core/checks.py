"""
Checks - Small precondition and roll helpers shared by the action handlers.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .action import ActionResult, WRONG_STAGE
from .state import PlayerState, RollRecord, Stage

if TYPE_CHECKING:
    from .dice import Dice


def require_stage(player: PlayerState, *stages: Stage) -> ActionResult | None:
    """Return a rejection unless the player is in one of the given stages."""
    if player.stage in stages:
        return None
    allowed = "/".join(stage.value for stage in stages)
    return ActionResult.rejected(
        f"{player.name} is {player.stage.value}, action needs {allowed}",
        WRONG_STAGE,
    )


def roll_check(dice: Dice, target: int) -> RollRecord:
    """Roll a d6; the check succeeds on roll >= target."""
    roll = dice.d6()
    return RollRecord(roll=roll, target=target, success=roll >= target)
