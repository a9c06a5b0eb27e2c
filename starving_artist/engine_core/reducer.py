"""
Reducer - Applies actions to game state.

The reducer is the single point of state change.
All state changes must go through Reducer.apply() / apply_action().

Design principles:
- Pure function: (state, action) -> new_state; previous states are never
  mutated
- Closed routing: every ActionType maps to exactly one handler, checked at
  import time
- Rejections return the unchanged input state; Reducer.resolve() exposes
  the reason as an ActionResult
- Cross-cutting passes run after every accepted action, in order:
  1. Zeitgeist milestone check
  2. Zeitgeist post-action effects (never for START_TURN / END_TURN)
  3. Lay Low consumption (any action but START_TURN / END_TURN / LAY_LOW)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable
import logging

from .action import (
    Action, ActionResult, ActionType, LIFECYCLE_ACTIONS,
    GAME_OVER, UNKNOWN_ACTION,
)
from .dice import Dice
from .state import GameState
from . import turns
from ..stages import home, dreamer, jobs, amateur, pro
from ..systems import scandal, zeitgeist, downtime

logger = logging.getLogger(__name__)

Handler = Callable[[GameState, Action, Dice], ActionResult]


def _build_routes() -> dict[ActionType, Handler]:
    routes: dict[ActionType, Handler] = {}
    for handlers in (
        turns.HANDLERS,
        home.HANDLERS,
        dreamer.HANDLERS,
        jobs.HANDLERS,
        amateur.HANDLERS,
        pro.HANDLERS,
        scandal.HANDLERS,
        zeitgeist.HANDLERS,
        downtime.HANDLERS,
    ):
        overlap = set(routes) & set(handlers)
        if overlap:
            raise RuntimeError(f"Action types routed twice: {sorted(t.value for t in overlap)}")
        routes.update(handlers)

    missing = [action_type.value for action_type in ActionType if action_type not in routes]
    if missing:
        raise RuntimeError(f"No handler for action types: {missing}")
    return routes


ROUTES = _build_routes()


def _consume_lay_low(prev: GameState, state: GameState) -> GameState:
    """Any real action forfeits this turn's Lay Low."""
    actor = state.get_player(prev.active_player.player_id)
    if actor is None:
        return state
    flags = actor.turn_flags
    if not flags.can_lay_low and flags.has_acted:
        return state
    return state.with_player(actor.with_flags(can_lay_low=False, has_acted=True))


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless apart from the dice: all game state is in GameState. One
    Reducer (and so one Dice) per session keeps a seeded game deterministic.
    """
    dice: Dice = field(default_factory=Dice)

    def resolve(self, state: GameState | None, action: Any) -> ActionResult:
        """
        Apply an action and report what happened.

        Returns an accepted ActionResult with the new state, or a rejection
        with the reason. A blocked END_TURN is a rejection that still carries
        a state (with pro_maintenance_required set).
        """
        if state is None or state.is_over:
            return ActionResult.rejected("Game is over - no actions allowed", GAME_OVER)

        action_type = getattr(action, "action_type", None)
        if not isinstance(action_type, ActionType):
            return ActionResult.rejected(f"Unknown action: {action!r}", UNKNOWN_ACTION)

        handler = ROUTES[action_type]
        result = handler(state, action, self.dice)
        if not result.success:
            logger.debug("Rejected %s for %s: %s",
                         action_type.value, state.active_player.name, result.error)
            return result

        new_state = zeitgeist.check_milestones(state, result.new_state, self.dice)
        if action_type not in LIFECYCLE_ACTIONS:
            new_state = zeitgeist.apply_post_action_effects(state, new_state, action)
            if action_type != ActionType.LAY_LOW:
                new_state = _consume_lay_low(state, new_state)

        result.new_state = new_state
        return result

    def apply(self, state: GameState | None, action: Any) -> GameState | None:
        """
        Apply an action to the game state.

        Returns the new state, or the very same state object if the action
        was rejected. A Pro END_TURN held back for maintenance is the one
        rejection that returns a new state, with pro_maintenance_required set.
        """
        result = self.resolve(state, action)
        if result.new_state is None:
            return state
        return result.new_state


def apply_action(state: GameState | None, action: Any, dice: Dice | None = None) -> GameState | None:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action. Pass the session's Dice to
    keep a seeded game deterministic.
    """
    reducer = Reducer(dice=dice if dice is not None else Dice())
    return reducer.apply(state, action)
