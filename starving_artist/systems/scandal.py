"""
PR / Scandal - Accruing and shedding Scandal.

Scandal only means something for Pros: it taxes the Time roll
(max(0, roll - scandal)) and blocks masterwork progress entirely.

Handles:
- LAY_LOW: first action of a Pro turn with Scandal; roll to shed Scandal,
  then the turn ends (the maintenance guard does not apply)
- PLANT_HIT_PIECE: once per game, spend own Time 1:1 as Scandal on another Pro
- BUYOUT_SCANDAL: pay Money to remove Scandal at config.pro.scandal_buyout_rate
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from ..engine_core.action import (
    Action, ActionResult, ActionType,
    ALREADY_DONE, INSUFFICIENT, INVALID_TARGET, NOT_ALLOWED,
)
from ..engine_core.checks import require_stage
from ..engine_core.state import GameState, Stage, TIMED_STAGES
from ..engine_core.turns import end_turn

if TYPE_CHECKING:
    from ..engine_core.dice import Dice

logger = logging.getLogger(__name__)


def handle_lay_low(state: GameState, action: Action, dice: Dice) -> ActionResult:
    player = state.active_player
    rejection = require_stage(player, Stage.PRO)
    if rejection:
        return rejection
    if player.scandal <= 0:
        return ActionResult.rejected(f"{player.name} has no Scandal to shed", NOT_ALLOWED)
    if not player.turn_flags.can_lay_low or player.turn_flags.has_acted:
        return ActionResult.rejected("Lay Low must be the first action of the turn", NOT_ALLOWED)

    roll = dice.d6()
    player = player.with_stats(scandal=player.scandal - roll).with_flags(
        can_lay_low=False
    ).with_result(lay_low_roll=roll)
    changes = [f"{player.name} laid low and shed up to {roll} Scandal (now {player.scandal})"]

    result = end_turn(state.with_active_player(player), dice, force=True)
    result.state_changes = changes + result.state_changes
    return result


def handle_plant_hit_piece(state: GameState, action: Action, dice: Dice) -> ActionResult:
    """Spend Time 1:1 as Scandal on another Pro. payload.amount defaults to all Time."""
    attacker = state.active_player
    rejection = require_stage(attacker, *TIMED_STAGES)
    if rejection:
        return rejection
    if attacker.hit_piece_used:
        return ActionResult.rejected(f"{attacker.name} already planted a hit piece", ALREADY_DONE)
    if attacker.time_this_turn <= 0:
        return ActionResult.rejected("No Time to write a hit piece", INSUFFICIENT)

    target_id = action.payload.target_player_id
    target = state.get_player(target_id) if target_id else None
    if target is None or target.player_id == attacker.player_id:
        return ActionResult.rejected("Hit piece needs another player as target", INVALID_TARGET)
    if target.stage != Stage.PRO:
        return ActionResult.rejected(f"{target.name} is not a Pro", INVALID_TARGET)

    amount = action.payload.amount
    if amount is None:
        amount = attacker.time_this_turn
    amount = min(int(amount), attacker.time_this_turn)
    if amount <= 0:
        return ActionResult.rejected("Hit piece needs at least 1 Time", INSUFFICIENT)

    attacker = attacker.spend_time(amount)._copy_with(hit_piece_used=True).with_result(
        hit_piece=(target.player_id, amount)
    )
    target = target.with_stats(scandal=target.scandal + amount)
    logger.info("%s planted a hit piece on %s (+%d Scandal)", attacker.name, target.name, amount)

    new_state = state.with_active_player(attacker).with_player(target)
    return ActionResult.accepted(
        new_state,
        [f"{attacker.name} planted a hit piece: {target.name} +{amount} Scandal"],
    )


def handle_buyout_scandal(state: GameState, action: Action, dice: Dice) -> ActionResult:
    player = state.active_player
    rejection = require_stage(player, Stage.PRO)
    if rejection:
        return rejection
    if player.scandal <= 0:
        return ActionResult.rejected(f"{player.name} has no Scandal", NOT_ALLOWED)

    rate = state.config.pro.scandal_buyout_rate
    removable = min(player.scandal, max(0, player.money) // rate)
    if action.payload.amount is not None:
        removable = min(removable, int(action.payload.amount))
    if removable <= 0:
        return ActionResult.rejected(
            f"Buying out Scandal costs {rate} Money each", INSUFFICIENT
        )

    player = player.with_stats(
        money=player.money - removable * rate,
        scandal=player.scandal - removable,
    ).with_result(scandal_bought_out=removable)
    return ActionResult.accepted(
        state.with_active_player(player),
        [f"{player.name} bought out {removable} Scandal for {removable * rate} Money"],
    )


HANDLERS = {
    ActionType.LAY_LOW: handle_lay_low,
    ActionType.PLANT_HIT_PIECE: handle_plant_hit_piece,
    ActionType.BUYOUT_SCANDAL: handle_buyout_scandal,
}
