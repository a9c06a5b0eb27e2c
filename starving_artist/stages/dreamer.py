"""
Dreamer stage - Social events and the push to become an Amateur.

Handles:
- DRAW_SOCIAL_CARD: draw a Social card the player's art path may see and
  hold it pending
- ATTEND_SOCIAL_EVENT / SKIP_SOCIAL_EVENT: resolve the pending card's branch
  and pay its Time cost
- ATTEMPT_ADVANCE_DREAMER: pay the advance cost and roll for Amateur
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from ..engine_core.action import (
    Action, ActionResult, ActionType,
    ALREADY_DONE, DECK_EMPTY, INSUFFICIENT, NOT_ALLOWED,
)
from ..engine_core.checks import require_stage, roll_check
from ..engine_core.effects import apply_effects, format_effects
from ..engine_core.state import GameState, Stage

if TYPE_CHECKING:
    from ..engine_core.dice import Dice

logger = logging.getLogger(__name__)


def handle_draw_social_card(state: GameState, action: Action, dice: Dice) -> ActionResult:
    player = state.active_player
    rejection = require_stage(player, Stage.DREAMER)
    if rejection:
        return rejection
    if player.time_this_turn <= 0:
        return ActionResult.rejected("No Time left for a social event", INSUFFICIENT)
    if player.pending_social_card is not None:
        return ActionResult.rejected("Resolve the pending social event first", NOT_ALLOWED)

    card, deck = state.social_deck.draw(
        dice, predicate=lambda c: c.is_available_to(player.art_path)
    )
    if card is None:
        return ActionResult.rejected("No Social cards available to draw", DECK_EMPTY)

    time_cost = card.time_cost
    if time_cost is None:
        time_cost = state.config.dreamer.social_default_time_cost

    player = player._copy_with(
        pending_social_card=card,
        pending_social_time_cost=time_cost,
    ).with_result(social_card=card, social_choice=None)
    return ActionResult.accepted(
        state.with_active_player(player).with_deck("social_deck", deck),
        [f"{player.name} drew {card.name} ({time_cost} Time)"],
    )


def _resolve_social(state: GameState, choice: str) -> ActionResult:
    player = state.active_player
    rejection = require_stage(player, Stage.DREAMER)
    if rejection:
        return rejection
    card = player.pending_social_card
    if card is None:
        return ActionResult.rejected("No social event to resolve", NOT_ALLOWED)

    branch = card.attend if choice == "attend" else card.skip
    time_cost = player.pending_social_time_cost
    player = apply_effects(player, branch.effects)
    player = (
        player.spend_time(time_cost)
        ._copy_with(pending_social_card=None, pending_social_time_cost=0)
        .with_result(social_card=card, social_choice=choice)
    )
    return ActionResult.accepted(
        state.with_active_player(player),
        [f"{player.name} chose to {choice} {card.name}: "
         f"{format_effects(branch.effects) or 'no effect'}"],
    )


def handle_attend_social_event(state: GameState, action: Action, dice: Dice) -> ActionResult:
    return _resolve_social(state, "attend")


def handle_skip_social_event(state: GameState, action: Action, dice: Dice) -> ActionResult:
    return _resolve_social(state, "skip")


def handle_attempt_advance_dreamer(state: GameState, action: Action, dice: Dice) -> ActionResult:
    """
    Once per turn: pay config.dreamer.advance_cost, then roll d6 against
    advance_roll_target. The cost is paid whether or not the roll succeeds.
    """
    player = state.active_player
    rejection = require_stage(player, Stage.DREAMER)
    if rejection:
        return rejection
    if player.turn_flags.dreamer_advance_attempted:
        return ActionResult.rejected("Already tried to advance this turn", ALREADY_DONE)

    config = state.config.dreamer
    if not player.can_afford(config.advance_cost):
        return ActionResult.rejected(
            f"{player.name} cannot afford {config.advance_cost}", INSUFFICIENT
        )

    record = roll_check(dice, config.advance_roll_target)
    player = (
        player.pay(config.advance_cost)
        .with_flags(dreamer_advance_attempted=True)
        .with_result(dreamer_advance_eligible=True, dreamer_advance_roll=record)
    )
    changes = [f"{player.name} rolled {record.roll} to advance (needs {record.target})"]
    if record.success:
        player = player._copy_with(stage=Stage.AMATEUR, time_this_turn=0)
        logger.info("%s is now an Amateur", player.name)
        changes.append(f"{player.name} became an Amateur")

    return ActionResult.accepted(state.with_active_player(player), changes)


HANDLERS = {
    ActionType.DRAW_SOCIAL_CARD: handle_draw_social_card,
    ActionType.ATTEND_SOCIAL_EVENT: handle_attend_social_event,
    ActionType.SKIP_SOCIAL_EVENT: handle_skip_social_event,
    ActionType.ATTEMPT_ADVANCE_DREAMER: handle_attempt_advance_dreamer,
}
