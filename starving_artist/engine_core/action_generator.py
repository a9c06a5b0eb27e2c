"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. Bots to enumerate possible moves
2. The API to show available actions
3. Validation (is this action in legal_actions?)

Design: every candidate action is tried against a forked Dice, so the
handlers stay the only source of truth for legality and the session's
random stream is never consumed.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..catalog.minor_works import get_templates_for_art_path
from ..systems.zeitgeist import AI_BOOM_TARGETS
from .action import Action, ActionType
from .dice import Dice
from .reducer import Reducer
from .state import GameState, Stage

# START_TURN is always accepted and only issued once to open a game;
# END_TURN starts every later turn.
_PARAMETERLESS = [
    action_type for action_type in ActionType
    if action_type not in {
        ActionType.START_TURN,
        ActionType.CHOOSE_JOB,
        ActionType.START_MINOR_WORK,
        ActionType.PLANT_HIT_PIECE,
        ActionType.AI_BOOM_CONVERT,
    }
]


@dataclass
class ActionGenerator:
    """
    Generates legal actions for the active player.
    """
    dice: Dice

    def candidates(self, state: GameState) -> list[Action]:
        """Every action worth trying, legal or not."""
        player = state.active_player
        actions = [Action.simple(action_type) for action_type in _PARAMETERLESS]
        actions.extend(Action.choose_job(job_id) for job_id in state.job_deck)
        actions.extend(
            Action.start_minor_work(template.work_id)
            for template in get_templates_for_art_path(player.art_path)
        )
        actions.extend(
            Action.plant_hit_piece(other.player_id)
            for other in state.players
            if other.player_id != player.player_id and other.stage == Stage.PRO
        )
        actions.extend(Action.ai_boom_convert(stat) for stat in AI_BOOM_TARGETS)
        return actions

    def generate(self, state: GameState) -> list[Action]:
        """
        Generate all legal actions for the active player.

        Returns a list of fully-specified Action objects.
        """
        if state.is_over:
            return []

        legal = []
        for action in self.candidates(state):
            reducer = Reducer(dice=self.dice.fork())
            if reducer.resolve(state, action).success:
                legal.append(action)
        return legal


def legal_actions(state: GameState, dice: Dice | None = None) -> list[Action]:
    """
    Convenience function to get legal actions.

    dice is forked, never rolled.
    """
    generator = ActionGenerator(dice=dice if dice is not None else Dice())
    return generator.generate(state)
