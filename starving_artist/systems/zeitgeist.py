"""
Zeitgeist - Global modifiers rolled at stage milestones.

The first time any player enters Dreamer, Amateur or Pro, a d6 picks a new
Zeitgeist for the whole table. Each milestone fires at most once per game.
The active Zeitgeist then adds small bonuses to later actions:

- ai_boom: AI_BOOM_CONVERT turns 1 Inspiration into 1 Money/Food/Craft
  once per turn
- indie_wave: +1 Craft on completing a Minor Work
- wellness_culture: downtime gives +1 extra of its stat
- gig_economy: +1 Money on GO_TO_WORK
- streaming_era: once per turn, refunds 1 of the Time paid for a Social,
  Prof Dev or Pro card
- culture_war: a hit piece target takes +1 extra Scandal

Both passes run in the dispatcher after the primary handler, so the stage
reducers never deal with whole-table concerns.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from ..catalog import zeitgeists as zg
from ..engine_core.action import (
    Action, ActionResult, ActionType,
    ALREADY_DONE, INSUFFICIENT, INVALID_TARGET, NOT_ALLOWED,
)
from ..engine_core.state import GameState, MILESTONE_STAGES, PlayerState, ZeitgeistState

if TYPE_CHECKING:
    from ..engine_core.config import GameConfig
    from ..engine_core.dice import Dice

logger = logging.getLogger(__name__)

AI_BOOM_TARGETS = ("money", "food", "craft")

DOWNTIME_STATS = {
    ActionType.DOWNTIME_PRACTICE: "craft",
    ActionType.DOWNTIME_SLEEP: "inspiration",
    ActionType.DOWNTIME_EAT_AT_HOME: "food",
}

CARD_PAYMENTS = frozenset({
    ActionType.ATTEND_SOCIAL_EVENT,
    ActionType.SKIP_SOCIAL_EVENT,
    ActionType.TAKE_PROF_DEV,
    ActionType.DRAW_PRO_CARD,
})


# =============================================================================
# Milestones
# =============================================================================

def check_milestones(prev: GameState, state: GameState, dice: Dice) -> GameState:
    """
    Roll a new Zeitgeist if this dispatch moved a player into a milestone
    stage that has not fired yet. At most one milestone fires per dispatch.
    """
    milestones = state.zeitgeist.milestones
    for stage in MILESTONE_STAGES:
        if milestones.get(stage.value):
            continue
        entered = any(
            before.stage != stage and after.stage == stage
            for before, after in zip(prev.players, state.players)
        )
        if not entered:
            continue

        roll = dice.d6()
        zeitgeist = zg.get_zeitgeist_by_roll(roll)
        history = list(state.zeitgeist.history)
        if state.zeitgeist.current is not None:
            history.append(state.zeitgeist.current)
        logger.info("Milestone %s reached: zeitgeist is now %s (rolled %d)",
                    stage.value, zeitgeist.zeitgeist_id, roll)
        return state._copy_with(zeitgeist=ZeitgeistState(
            current=zeitgeist,
            milestones={**milestones, stage.value: True},
            history=history,
        ))
    return state


# =============================================================================
# Post-action effects
# =============================================================================

def _bump(player: PlayerState, stat: str, delta: int = 1) -> PlayerState:
    return player.with_stats(**{stat: getattr(player, stat) + delta})


def _card_time_paid(before: PlayerState, actor: PlayerState,
                    action_type: ActionType, config: GameConfig) -> int:
    """Time the action just paid for a card. Social cards pay when resolved."""
    if action_type in (ActionType.ATTEND_SOCIAL_EVENT, ActionType.SKIP_SOCIAL_EVENT):
        return before.pending_social_time_cost
    if action_type == ActionType.TAKE_PROF_DEV:
        card, default = actor.last_result.prof_dev_card, config.amateur.prof_dev_default_time_cost
    else:
        card, default = actor.last_result.pro_card, config.pro.card_time_cost
    if card is None:
        return 0
    return default if card.time_cost is None else card.time_cost


def apply_post_action_effects(prev: GameState, state: GameState, action: Action) -> GameState:
    """Apply the active Zeitgeist's bonus for an accepted action."""
    current = state.zeitgeist.current_id
    if current is None:
        return state

    actor_id = prev.active_player.player_id
    actor = state.get_player(actor_id)
    before = prev.active_player
    action_type = action.action_type

    if current == zg.INDIE_WAVE and action_type == ActionType.PROGRESS_MINOR_WORK:
        if len(actor.minor_works) > len(before.minor_works):
            return state.with_player(_bump(actor, "craft"))

    elif current == zg.WELLNESS_CULTURE and action_type in DOWNTIME_STATS:
        return state.with_player(_bump(actor, DOWNTIME_STATS[action_type]))

    elif current == zg.GIG_ECONOMY and action_type == ActionType.GO_TO_WORK:
        return state.with_player(_bump(actor, "money"))

    elif current == zg.STREAMING_ERA and action_type in CARD_PAYMENTS:
        refund = min(1, _card_time_paid(before, actor, action_type, state.config))
        if refund and not actor.turn_flags.used_streaming_refund:
            actor = _bump(actor, "time_this_turn", refund)
            return state.with_player(actor.with_flags(used_streaming_refund=True))

    elif current == zg.CULTURE_WAR and action_type == ActionType.PLANT_HIT_PIECE:
        hit = actor.last_result.hit_piece
        target = state.get_player(hit[0]) if hit else None
        if target is not None:
            actor = actor.with_result(hit_piece=(hit[0], hit[1] + 1))
            return state.with_player(actor).with_player(_bump(target, "scandal"))

    return state


# =============================================================================
# AI Boom
# =============================================================================

def handle_ai_boom_convert(state: GameState, action: Action, dice: Dice) -> ActionResult:
    player = state.active_player
    if state.zeitgeist.current_id != zg.AI_BOOM:
        return ActionResult.rejected("AI Boom is not the current Zeitgeist", NOT_ALLOWED)
    if player.turn_flags.used_ai_boom:
        return ActionResult.rejected("AI Boom already used this turn", ALREADY_DONE)

    target = action.payload.stat
    if target not in AI_BOOM_TARGETS:
        return ActionResult.rejected(
            f"AI Boom converts into one of {AI_BOOM_TARGETS}", INVALID_TARGET
        )
    if player.inspiration < 1:
        return ActionResult.rejected("AI Boom needs 1 Inspiration", INSUFFICIENT)

    player = _bump(player._copy_with(inspiration=player.inspiration - 1), target)
    player = player.with_flags(used_ai_boom=True).with_result(zeitgeist_conversion=target)
    return ActionResult.accepted(
        state.with_active_player(player),
        [f"{player.name} converted 1 Inspiration into 1 {target}"],
    )


HANDLERS = {
    ActionType.AI_BOOM_CONVERT: handle_ai_boom_convert,
}
