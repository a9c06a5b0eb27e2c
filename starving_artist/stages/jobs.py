"""
Jobs - The shared job market.

A job id lives either in state.job_deck or in exactly one player's job_id,
never both. Jobs persist across stage changes, so GO_TO_WORK and QUIT_JOB
work from Dreamer through Pro; a new job can only be picked up as a Dreamer
or Amateur.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from ..catalog.jobs import get_job
from ..engine_core.action import (
    Action, ActionResult, ActionType,
    ALREADY_DONE, INVALID_TARGET, NOT_ALLOWED,
)
from ..engine_core.checks import require_stage
from ..engine_core.state import GameState, Stage

if TYPE_CHECKING:
    from ..engine_core.dice import Dice


def handle_choose_job(state: GameState, action: Action, dice: Dice) -> ActionResult:
    player = state.active_player
    rejection = require_stage(player, Stage.DREAMER, Stage.AMATEUR)
    if rejection:
        return rejection

    job_id = action.payload.job_id
    if player.job_id:
        return ActionResult.rejected(f"{player.name} already works as {player.job_id}", NOT_ALLOWED)
    job = get_job(job_id)
    if job is None:
        return ActionResult.rejected(f"Unknown job: {job_id}", INVALID_TARGET)
    if job_id not in state.job_deck:
        return ActionResult.rejected(f"{job.name} is not on the job market", INVALID_TARGET)
    if job_id in player.fired_jobs:
        return ActionResult.rejected(f"{player.name} was fired from {job.name}", NOT_ALLOWED)

    job_deck = [j for j in state.job_deck if j != job_id]
    player = player._copy_with(job_id=job_id, skipped_work_count=0)
    return ActionResult.accepted(
        state.with_active_player(player)._copy_with(job_deck=job_deck),
        [f"{player.name} took a job as {job.name}"],
    )


def handle_quit_job(state: GameState, action: Action, dice: Dice) -> ActionResult:
    player = state.active_player
    rejection = require_stage(player, Stage.DREAMER, Stage.AMATEUR, Stage.PRO)
    if rejection:
        return rejection
    if not player.job_id:
        return ActionResult.rejected(f"{player.name} has no job to quit", NOT_ALLOWED)

    job_id = player.job_id
    job_deck = state.job_deck if job_id in state.job_deck else state.job_deck + [job_id]
    player = player._copy_with(job_id=None, skipped_work_count=0)
    return ActionResult.accepted(
        state.with_active_player(player)._copy_with(job_deck=job_deck),
        [f"{player.name} quit {job_id}"],
    )


def handle_go_to_work(state: GameState, action: Action, dice: Dice) -> ActionResult:
    """Apply the job's fixed deltas once per turn. Time is floored at zero."""
    player = state.active_player
    rejection = require_stage(player, Stage.DREAMER, Stage.AMATEUR, Stage.PRO)
    if rejection:
        return rejection

    job = get_job(player.job_id)
    if job is None:
        return ActionResult.rejected(f"{player.name} has no job", NOT_ALLOWED)
    if not player.turn_flags.has_rolled_time:
        return ActionResult.rejected("Roll Time before going to work", NOT_ALLOWED)
    if player.turn_flags.has_worked:
        return ActionResult.rejected("Already worked this turn", ALREADY_DONE)

    player = (
        player.with_stats(
            money=player.money + job.money_delta,
            inspiration=player.inspiration + job.inspiration_delta,
            food=player.food + job.food_delta,
            time_this_turn=player.time_this_turn + job.time_delta,
        )
        .with_flags(has_worked=True)
        .with_result(job_id=job.job_id)
    )
    return ActionResult.accepted(
        state.with_active_player(player),
        [f"{player.name} worked a shift as {job.name}"],
    )


HANDLERS = {
    ActionType.CHOOSE_JOB: handle_choose_job,
    ActionType.QUIT_JOB: handle_quit_job,
    ActionType.GO_TO_WORK: handle_go_to_work,
}
