"""
Minor Works - One-in-progress, multi-step side projects.

Rules:
- A player works on at most one Minor Work at a time
- Each art path offers exactly three templates (quick / career / spotlight);
  each can be completed once
- At most config.amateur.max_minor_works completed works
- Every progress pip costs 1 Time; reaching the template's target completes
  the work, pays on_complete_effects and frees the slot
- Prof Dev boosts add progress but never complete a work
- A completed platform (quick) work banks a platform bonus which the next
  spotlight completion cashes in for extra Money
"""

from __future__ import annotations
import logging

from ..catalog.cards import MinorWorkBoost
from ..catalog.minor_works import MinorWorkKind, MinorWorkTemplate, find_template
from ..engine_core.action import ActionResult, ALREADY_DONE, INSUFFICIENT, INVALID_TARGET, NOT_ALLOWED
from ..engine_core.config import GameConfig
from ..engine_core.effects import apply_effects, format_effects
from ..engine_core.state import CompletedMinorWork, GameState, PlayerState

logger = logging.getLogger(__name__)


def _slots_left(player: PlayerState, config: GameConfig) -> bool:
    return len(player.minor_works) < config.amateur.max_minor_works


def start_minor_work(state: GameState, work_id: str | None) -> ActionResult:
    """Begin one of the player's art-path templates."""
    player = state.active_player
    if player.minor_work_in_progress_id:
        return ActionResult.rejected(
            f"{player.minor_work_in_progress_id} is still in progress", NOT_ALLOWED
        )
    if not _slots_left(player, state.config):
        return ActionResult.rejected("No Minor Work slots left", NOT_ALLOWED)

    template = find_template(player.art_path, work_id)
    if template is None:
        return ActionResult.rejected(
            f"{work_id} is not a Minor Work for {player.art_path}", INVALID_TARGET
        )
    if work_id in player.completed_work_ids:
        return ActionResult.rejected(f"{template.name} is already complete", ALREADY_DONE)

    progress = dict(player.minor_work_progress_by_id)
    progress.setdefault(work_id, 0)
    player = player._copy_with(
        minor_work_in_progress_id=work_id,
        minor_work_progress_by_id=progress,
    ).with_result(minor_work_started_id=work_id)
    return ActionResult.accepted(
        state.with_active_player(player),
        [f"{player.name} started {template.name}"],
    )


def _complete(player: PlayerState, template: MinorWorkTemplate, config: GameConfig) -> PlayerState:
    progress = dict(player.minor_work_progress_by_id)
    progress.pop(template.work_id, None)

    completed = CompletedMinorWork(
        work_id=template.work_id,
        name=template.name,
        kind=template.kind.value,
        effects_per_turn=template.effects_per_turn,
    )
    player = apply_effects(player, template.on_complete_effects)
    player = player._copy_with(
        minor_works=player.minor_works + [completed],
        minor_work_in_progress_id=None,
        minor_work_progress_by_id=progress,
    ).with_result(minor_work_completed_id=template.work_id, minor_work_progress=None)

    if template.is_platform:
        player = player._copy_with(platform_bonus=player.platform_bonus + 1)
    elif template.kind == MinorWorkKind.SPOTLIGHT and player.platform_bonus > 0:
        player = player.with_stats(
            money=player.money + config.rules.platform_bonus_amount
        )._copy_with(platform_bonus=player.platform_bonus - 1)

    logger.info("%s completed Minor Work %s", player.name, template.work_id)
    return player


def progress_minor_work(state: GameState) -> ActionResult:
    """Spend 1 Time for one pip of progress on the work in progress."""
    player = state.active_player
    work_id = player.minor_work_in_progress_id
    if not work_id:
        return ActionResult.rejected("No Minor Work in progress", NOT_ALLOWED)
    if player.time_this_turn <= 0:
        return ActionResult.rejected("No Time left to work", INSUFFICIENT)

    template = find_template(player.art_path, work_id)
    if template is None:
        return ActionResult.rejected(f"Unknown Minor Work {work_id}", INVALID_TARGET)

    player = player.spend_time(1)
    current = player.minor_work_progress_by_id.get(work_id, 0) + 1

    if current >= template.progress_target:
        player = _complete(player, template, state.config)
        return ActionResult.accepted(
            state.with_active_player(player),
            [f"{player.name} completed {template.name}: "
             f"{format_effects(template.on_complete_effects) or 'ongoing income'}"],
        )

    progress = dict(player.minor_work_progress_by_id)
    progress[work_id] = current
    player = player._copy_with(minor_work_progress_by_id=progress).with_result(
        minor_work_progress=(work_id, current, template.progress_target)
    )
    return ActionResult.accepted(
        state.with_active_player(player),
        [f"{player.name} worked on {template.name} ({current}/{template.progress_target})"],
    )


def apply_boost(player: PlayerState, boost: MinorWorkBoost | None, config: GameConfig) -> PlayerState:
    """
    Apply a Prof Dev boost.

    Boosts the work in progress; with nothing in progress, starts the
    card's work if a slot is free. Progress is capped one pip short of the
    target so a boost never completes a work.
    """
    if boost is None:
        return player

    work_id = player.minor_work_in_progress_id
    if not work_id:
        template = find_template(player.art_path, boost.work_id)
        if (template is None or not _slots_left(player, config)
                or boost.work_id in player.completed_work_ids):
            return player
        work_id = boost.work_id
        player = player._copy_with(minor_work_in_progress_id=work_id)
    else:
        template = find_template(player.art_path, work_id)
        if template is None:
            return player

    cap = max(0, template.progress_target - 1)
    progress = dict(player.minor_work_progress_by_id)
    boosted = min(progress.get(work_id, 0) + boost.progress_delta, cap)
    progress[work_id] = max(0, boosted)
    return player._copy_with(minor_work_progress_by_id=progress).with_result(
        prof_dev_boost=(work_id, progress[work_id], cap)
    )
