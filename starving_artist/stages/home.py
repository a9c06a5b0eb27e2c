"""
Home stage - Drawing Home cards and trying to leave home.

Handles:
- DRAW_HOME_CARD: once per turn, apply the top Home card's stat effects
- ATTEMPT_LEAVE_HOME: once per turn, roll against the next step of the
  configured roll sequence; clearing the last step makes the player a Dreamer
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from ..engine_core.action import Action, ActionResult, ActionType, ALREADY_DONE, DECK_EMPTY
from ..engine_core.checks import require_stage, roll_check
from ..engine_core.effects import apply_effects, format_effects
from ..engine_core.state import GameState, Stage

if TYPE_CHECKING:
    from ..engine_core.dice import Dice

logger = logging.getLogger(__name__)


def handle_draw_home_card(state: GameState, action: Action, dice: Dice) -> ActionResult:
    player = state.active_player
    rejection = require_stage(player, Stage.HOME)
    if rejection:
        return rejection
    if player.turn_flags.home_card_drawn:
        return ActionResult.rejected("Already drew a Home card this turn", ALREADY_DONE)

    card, deck = state.home_deck.draw(dice)
    if card is None:
        return ActionResult.rejected("No Home cards available to draw", DECK_EMPTY)

    player = (
        apply_effects(player, card.effects)
        .with_flags(home_card_drawn=True)
        .with_result(home_card=card)
    )
    new_state = state.with_active_player(player).with_deck("home_deck", deck)
    return ActionResult.accepted(
        new_state,
        [f"{player.name} drew {card.name}: {format_effects(card.effects) or 'no effect'}"],
    )


def handle_attempt_leave_home(state: GameState, action: Action, dice: Dice) -> ActionResult:
    """
    Roll against config.home.roll_sequence[home_progress].

    Success advances home_progress; reaching the end of the sequence moves
    the player to Dreamer with zero Time.
    """
    player = state.active_player
    rejection = require_stage(player, Stage.HOME)
    if rejection:
        return rejection
    if player.turn_flags.leave_home_attempted:
        return ActionResult.rejected("Already tried to leave home this turn", ALREADY_DONE)

    sequence = state.config.home.roll_sequence
    step = player.home_progress
    if step >= len(sequence):
        return ActionResult.rejected("Home sequence already complete", ALREADY_DONE)

    record = roll_check(dice, sequence[step])
    player = player.with_flags(leave_home_attempted=True).with_result(home_roll=record)
    changes = [
        f"{player.name} rolled {record.roll} (needs {record.target}): "
        f"{'success' if record.success else 'fail'}"
    ]

    if record.success:
        player = player._copy_with(home_progress=step + 1)
        if player.home_progress >= len(sequence):
            player = player._copy_with(stage=Stage.DREAMER, time_this_turn=0)
            logger.info("%s left home and is now a Dreamer", player.name)
            changes.append(f"{player.name} left home and became a Dreamer")

    return ActionResult.accepted(state.with_active_player(player), changes)


HANDLERS = {
    ActionType.DRAW_HOME_CARD: handle_draw_home_card,
    ActionType.ATTEMPT_LEAVE_HOME: handle_attempt_leave_home,
}
