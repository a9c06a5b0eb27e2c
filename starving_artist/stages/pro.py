"""
Pro stage - The Masterwork, Pro cards and staying Pro.

Handles:
- WORK_ON_MASTERWORK: convert Time 1:1 into masterwork progress; needs the
  turn's focus stat and is blocked entirely while the player has Scandal
- DRAW_PRO_CARD: pay the card's Time cost; deterministic cards resolve at
  once, cards with success/fail branches wait for RESOLVE_PRO_CARD_CHOICE
- PRO_MAINTENANCE_CHECK: once per turn; failing demotes to Amateur

Reaching config.pro.masterwork_target_progress wins the game.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from ..engine_core.action import (
    Action, ActionResult, ActionType,
    ALREADY_DONE, DECK_EMPTY, INSUFFICIENT, INVALID_TARGET, NOT_ALLOWED,
)
from ..engine_core.checks import require_stage, roll_check
from ..engine_core.effects import apply_effects, format_effects
from ..engine_core.state import GameState, GameStatus, PlayerState, Stage

if TYPE_CHECKING:
    from ..engine_core.dice import Dice

logger = logging.getLogger(__name__)

OUTCOMES = ("success", "fail")


def check_masterwork_win(state: GameState) -> GameState:
    """Mark the game won if the active player reached the masterwork target."""
    player = state.active_player
    if player.masterwork_progress < state.config.pro.masterwork_target_progress:
        return state
    logger.info("%s completed their Masterwork and won", player.name)
    return state._copy_with(status=GameStatus.WON, winner_id=player.player_id)


def _apply_pro_effects(player: PlayerState, effects) -> PlayerState:
    return apply_effects(player, effects, block_masterwork_gain=player.scandal > 0)


def handle_work_on_masterwork(state: GameState, action: Action, dice: Dice) -> ActionResult:
    player = state.active_player
    rejection = require_stage(player, Stage.PRO)
    if rejection:
        return rejection
    if player.scandal > 0:
        return ActionResult.rejected(
            f"{player.name} is mired in Scandal ({player.scandal})", NOT_ALLOWED
        )

    focus = player.turn_flags.focus_stat
    if focus is None or getattr(player, focus) < 1:
        return ActionResult.rejected(
            f"Masterwork needs at least 1 {focus or 'focus stat'} this turn", INSUFFICIENT
        )

    available = player.time_this_turn
    time_spent = action.payload.time_spent
    if time_spent is None:
        time_spent = available
    time_spent = max(0, min(int(time_spent), available))
    if time_spent <= 0:
        return ActionResult.rejected("No Time to spend on the Masterwork", INSUFFICIENT)

    player = player.with_stats(**{focus: getattr(player, focus) - 1}).spend_time(time_spent)
    player = player._copy_with(
        masterwork_progress=player.masterwork_progress + time_spent
    ).with_result(masterwork_time_spent=time_spent)

    new_state = check_masterwork_win(state.with_active_player(player))
    return ActionResult.accepted(
        new_state,
        [f"{player.name} spent {time_spent} Time on the Masterwork "
         f"({player.masterwork_progress}/{state.config.pro.masterwork_target_progress})"],
    )


def handle_draw_pro_card(state: GameState, action: Action, dice: Dice) -> ActionResult:
    player = state.active_player
    rejection = require_stage(player, Stage.PRO)
    if rejection:
        return rejection
    if player.pending_pro_card is not None:
        return ActionResult.rejected("Resolve the pending Pro card first", NOT_ALLOWED)

    top, deck = state.pro_deck.peek(dice)
    if top is None:
        return ActionResult.rejected("No Pro cards available to draw", DECK_EMPTY)

    cost = top.time_cost
    if cost is None:
        cost = state.config.pro.card_time_cost
    if player.time_this_turn < cost:
        return ActionResult.rejected(f"{top.name} needs {cost} Time", INSUFFICIENT)

    card, deck = deck.draw(dice)
    player = player.spend_time(cost).with_result(pro_card=card, pro_card_outcome=None)

    if card.has_choice:
        player = player._copy_with(pending_pro_card=card)
        return ActionResult.accepted(
            state.with_active_player(player).with_deck("pro_deck", deck),
            [f"{player.name} drew {card.name}: success or fail?"],
        )

    player = _apply_pro_effects(player, card.effects)
    new_state = check_masterwork_win(state.with_active_player(player).with_deck("pro_deck", deck))
    return ActionResult.accepted(
        new_state,
        [f"{player.name} drew {card.name}: {format_effects(card.effects) or 'no effect'}"],
    )


def handle_resolve_pro_card_choice(state: GameState, action: Action, dice: Dice) -> ActionResult:
    """
    Resolve the pending Pro card.

    payload.outcome picks the branch; when omitted the branch is rolled
    (d6 >= config.pro.card_check_roll_target succeeds).
    """
    player = state.active_player
    rejection = require_stage(player, Stage.PRO)
    if rejection:
        return rejection
    card = player.pending_pro_card
    if card is None:
        return ActionResult.rejected("No Pro card waiting for a choice", NOT_ALLOWED)

    outcome = action.payload.outcome
    if outcome is None:
        outcome = "success" if roll_check(dice, state.config.pro.card_check_roll_target).success else "fail"
    elif outcome not in OUTCOMES:
        return ActionResult.rejected(f"Outcome must be one of {OUTCOMES}", INVALID_TARGET)

    branch = card.success_effects if outcome == "success" else card.fail_effects
    effects = tuple(card.effects) + tuple(branch)
    player = _apply_pro_effects(player, effects)
    player = player._copy_with(pending_pro_card=None).with_result(
        pro_card=card, pro_card_outcome=outcome
    )
    new_state = check_masterwork_win(state.with_active_player(player))
    return ActionResult.accepted(
        new_state,
        [f"{player.name} resolved {card.name} as {outcome}: "
         f"{format_effects(effects) or 'no effect'}"],
    )


def handle_pro_maintenance_check(state: GameState, action: Action, dice: Dice) -> ActionResult:
    player = state.active_player
    rejection = require_stage(player, Stage.PRO)
    if rejection:
        return rejection
    if player.turn_flags.did_pro_maintenance:
        return ActionResult.rejected("Maintenance already done this turn", ALREADY_DONE)

    record = roll_check(dice, state.config.pro.maintenance_roll_target)
    player = player.with_flags(
        did_pro_maintenance=True, pro_maintenance_required=False
    ).with_result(maintenance_roll=record)
    changes = [f"{player.name} rolled {record.roll} for maintenance (needs {record.target})"]

    if not record.success:
        player = player._copy_with(stage=Stage.AMATEUR, time_this_turn=0)
        logger.info("%s failed maintenance and dropped to Amateur", player.name)
        changes.append(f"{player.name} dropped back to Amateur")

    return ActionResult.accepted(state.with_active_player(player), changes)


HANDLERS = {
    ActionType.WORK_ON_MASTERWORK: handle_work_on_masterwork,
    ActionType.DRAW_PRO_CARD: handle_draw_pro_card,
    ActionType.RESOLVE_PRO_CARD_CHOICE: handle_resolve_pro_card_choice,
    ActionType.PRO_MAINTENANCE_CHECK: handle_pro_maintenance_check,
}
