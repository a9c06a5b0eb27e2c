"""
Amateur stage - Professional development, Minor Works and the portfolio.

Handles:
- TAKE_PROF_DEV: draw a Prof Dev card for its Time cost
- START_MINOR_WORK / PROGRESS_MINOR_WORK: delegated to the Minor Works tracker
- COMPILE_PORTFOLIO: pay the portfolio cost once enough works are done
- ATTEMPT_ADVANCE_PRO: roll for Pro once the portfolio is built
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
from ..systems import minor_works

if TYPE_CHECKING:
    from ..engine_core.dice import Dice

logger = logging.getLogger(__name__)


def handle_take_prof_dev(state: GameState, action: Action, dice: Dice) -> ActionResult:
    """
    Peek the top Prof Dev card for its Time cost, then draw and apply it.

    The peek may reshuffle the discard; the draw then takes that same card.
    """
    player = state.active_player
    rejection = require_stage(player, Stage.AMATEUR)
    if rejection:
        return rejection

    top, deck = state.prof_dev_deck.peek(dice)
    if top is None:
        return ActionResult.rejected("No Prof Dev cards available to draw", DECK_EMPTY)

    cost = top.time_cost
    if cost is None:
        cost = state.config.amateur.prof_dev_default_time_cost
    if player.time_this_turn < cost:
        return ActionResult.rejected(
            f"{top.name} needs {cost} Time, {player.name} has {player.time_this_turn}",
            INSUFFICIENT,
        )

    card, deck = deck.draw(dice)
    player = apply_effects(player, card.effects)
    player = minor_works.apply_boost(player, card.minor_work, state.config)
    player = player.spend_time(cost).with_result(prof_dev_card=card)

    return ActionResult.accepted(
        state.with_active_player(player).with_deck("prof_dev_deck", deck),
        [f"{player.name} took {card.name}: {format_effects(card.effects) or 'no effect'}"],
    )


def handle_start_minor_work(state: GameState, action: Action, dice: Dice) -> ActionResult:
    rejection = require_stage(state.active_player, Stage.AMATEUR)
    if rejection:
        return rejection
    return minor_works.start_minor_work(state, action.payload.work_id)


def handle_progress_minor_work(state: GameState, action: Action, dice: Dice) -> ActionResult:
    rejection = require_stage(state.active_player, Stage.AMATEUR)
    if rejection:
        return rejection
    return minor_works.progress_minor_work(state)


def handle_compile_portfolio(state: GameState, action: Action, dice: Dice) -> ActionResult:
    player = state.active_player
    rejection = require_stage(player, Stage.AMATEUR)
    if rejection:
        return rejection
    if player.portfolio_built:
        return ActionResult.rejected("Portfolio already built", ALREADY_DONE)

    config = state.config.amateur
    required = config.required_portfolio_works
    if len(player.minor_works) < required:
        return ActionResult.rejected(
            f"Portfolio needs {required} completed Minor Works", INSUFFICIENT
        )
    if not player.can_afford(config.portfolio_cost):
        return ActionResult.rejected(
            f"{player.name} cannot afford {config.portfolio_cost}", INSUFFICIENT
        )

    player = (
        player.pay(config.portfolio_cost)
        ._copy_with(portfolio_built=True)
        .with_result(portfolio_cost=dict(config.portfolio_cost))
    )
    return ActionResult.accepted(
        state.with_active_player(player),
        [f"{player.name} compiled a portfolio"],
    )


def handle_attempt_advance_pro(state: GameState, action: Action, dice: Dice) -> ActionResult:
    player = state.active_player
    rejection = require_stage(player, Stage.AMATEUR)
    if rejection:
        return rejection
    if not player.portfolio_built:
        return ActionResult.rejected("Compile a portfolio before going Pro", NOT_ALLOWED)

    record = roll_check(dice, state.config.amateur.pro_advance_roll_target)
    player = player.with_result(pro_advance_roll=record)
    changes = [f"{player.name} rolled {record.roll} to go Pro (needs {record.target})"]
    if record.success:
        player = player._copy_with(stage=Stage.PRO, time_this_turn=0)
        logger.info("%s turned Pro", player.name)
        changes.append(f"{player.name} is now a Pro")

    return ActionResult.accepted(state.with_active_player(player), changes)


HANDLERS = {
    ActionType.TAKE_PROF_DEV: handle_take_prof_dev,
    ActionType.START_MINOR_WORK: handle_start_minor_work,
    ActionType.PROGRESS_MINOR_WORK: handle_progress_minor_work,
    ActionType.COMPILE_PORTFOLIO: handle_compile_portfolio,
    ActionType.ATTEMPT_ADVANCE_PRO: handle_attempt_advance_pro,
}
