"""
Turn Lifecycle - START_TURN, ROLL_TIME and END_TURN.

A turn always belongs to the active player:
- START_TURN resets the per-turn flags, zeroes Time, rolls the Pro focus
  stat and pays passive income from completed Minor Works
- ROLL_TIME sets the Time budget once per turn (Dreamer and later)
- END_TURN applies the job-skip penalty, hands the seat to the next player
  and starts their turn
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from .action import (
    Action, ActionResult, ActionType,
    WRONG_STAGE, ALREADY_DONE, MAINTENANCE_REQUIRED,
)
from .effects import apply_effects
from .state import GameState, GameStatus, PlayerState, Stage, TurnFlags, TIMED_STAGES

if TYPE_CHECKING:
    from .dice import Dice

logger = logging.getLogger(__name__)

FOCUS_STATS = ("food", "inspiration", "craft")


def collect_passive_income(player: PlayerState) -> PlayerState:
    """Pay every completed Minor Work's per-turn effects."""
    for work in player.minor_works:
        player = apply_effects(player, work.effects_per_turn)
    return player


def start_turn(state: GameState, dice: Dice) -> GameState:
    """Begin the active player's turn."""
    player = state.active_player
    is_pro = player.stage == Stage.PRO

    flags = TurnFlags(
        can_lay_low=is_pro and player.scandal > 0,
        focus_stat=dice.pick(FOCUS_STATS) if is_pro else None,
    )
    player = player._copy_with(turn_flags=flags, time_this_turn=0)

    if player.stage in (Stage.AMATEUR, Stage.PRO):
        player = collect_passive_income(player)

    return state.with_active_player(player)


def handle_start_turn(state: GameState, action: Action, dice: Dice) -> ActionResult:
    new_state = start_turn(state, dice)
    player = new_state.active_player
    changes = [f"{player.name} starts turn {new_state.turn}"]
    if player.turn_flags.focus_stat:
        changes.append(f"Masterwork focus this turn: {player.turn_flags.focus_stat}")
    return ActionResult.accepted(new_state, changes)


def handle_roll_time(state: GameState, action: Action, dice: Dice) -> ActionResult:
    """Roll the Time budget. Scandal taxes a Pro roll."""
    player = state.active_player
    if player.stage not in TIMED_STAGES:
        return ActionResult.rejected("Time is only rolled from Dreamer on", WRONG_STAGE)
    if player.turn_flags.has_rolled_time:
        return ActionResult.rejected("Time already rolled this turn", ALREADY_DONE)

    roll = dice.d6()
    time = roll
    if player.stage == Stage.PRO:
        time = max(0, roll - player.scandal)

    player = (
        player.with_stats(time_this_turn=time)
        .with_flags(has_rolled_time=True)
        .with_result(time_roll=roll)
    )
    return ActionResult.accepted(
        state.with_active_player(player),
        [f"{player.name} rolled {roll} for {time} Time"],
    )


def _apply_job_skip_penalty(state: GameState, player: PlayerState) -> GameState:
    """Count a skipped shift; enough of them and the job is lost."""
    if not player.job_id or player.turn_flags.has_worked:
        return state.with_active_player(player)

    skipped = player.skipped_work_count + 1
    if skipped < state.config.amateur.job_loss_skip_count:
        return state.with_active_player(player._copy_with(skipped_work_count=skipped))

    job_id = player.job_id
    logger.info("%s was fired from %s", player.name, job_id)
    player = player._copy_with(
        job_id=None,
        skipped_work_count=0,
        fired_jobs=player.fired_jobs + [job_id],
    ).with_result(fired_job_id=job_id)
    job_deck = state.job_deck if job_id in state.job_deck else state.job_deck + [job_id]
    return state.with_active_player(player)._copy_with(job_deck=job_deck)


def _advance_seat(state: GameState) -> GameState:
    if state.num_players <= 1:
        return state._copy_with(turn=state.turn + 1)

    next_index = (state.active_player_index + 1) % state.num_players
    turn = state.turn + 1 if next_index == 0 else state.turn
    return state._copy_with(active_player_index=next_index, turn=turn)


def end_turn(state: GameState, dice: Dice, force: bool = False) -> ActionResult:
    """
    End the active player's turn.

    A Pro who has not done the maintenance check is held back: the result is
    a rejection carrying a state with pro_maintenance_required set. force
    skips that guard (used by LAY_LOW).
    """
    player = state.active_player
    if player.stage == Stage.PRO and not player.turn_flags.did_pro_maintenance and not force:
        flagged = state.with_active_player(player.with_flags(pro_maintenance_required=True))
        result = ActionResult.rejected(
            "Pro maintenance check required before ending the turn",
            MAINTENANCE_REQUIRED,
        )
        result.new_state = flagged
        return result

    new_state = _apply_job_skip_penalty(state, player)
    new_state = _advance_seat(new_state)

    max_turns = new_state.config.rules.max_turns
    if max_turns is not None and new_state.turn > max_turns:
        logger.info("Game %s lost: turn limit %d reached", new_state.game_id, max_turns)
        return ActionResult.accepted(
            new_state._copy_with(status=GameStatus.LOST, loss_reason="max_turns"),
            ["Out of time: the turn limit was reached"],
        )

    new_state = start_turn(new_state, dice)
    return ActionResult.accepted(
        new_state,
        [f"{player.name} ended their turn", f"{new_state.active_player.name} is up"],
    )


def handle_end_turn(state: GameState, action: Action, dice: Dice) -> ActionResult:
    return end_turn(state, dice)


HANDLERS = {
    ActionType.START_TURN: handle_start_turn,
    ActionType.ROLL_TIME: handle_roll_time,
    ActionType.END_TURN: handle_end_turn,
}
