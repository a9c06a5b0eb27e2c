"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes a game state plus the legal actions and returns a
decision. Policies never touch the reducer directly; the game loop applies
whatever they pick.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import random
from typing import TYPE_CHECKING, Any, Callable, Iterable

from ..catalog.minor_works import get_templates_for_art_path
from ..engine_core.action import Action, ActionType
from ..engine_core.effects import StatEffect
from ..engine_core.state import Stage

if TYPE_CHECKING:
    from ..engine_core.state import GameState, PlayerState


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The action to take
    - Explanation (for UI/debugging)
    - Confidence in the decision
    """
    action: Action
    explanation: str = ""
    confidence: float = 1.0

    # Evaluation details (for debugging)
    evaluated_actions: int = 0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects actions.
    """

    @abstractmethod
    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        """
        Select an action from the legal actions.

        Args:
            state: Current game state
            legal_actions: List of legal actions to choose from

        Returns:
            BotDecision with the selected action
        """

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects actions uniformly at random.

    Used for:
    - Testing
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)
        self._draws: dict[tuple[int, str], int] = {}

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        action = self.rng.choice(legal_actions)
        return BotDecision(
            action=action,
            explanation="Selected randomly",
            confidence=1.0 / len(legal_actions),
            evaluated_actions=len(legal_actions),
        )


def _stat_score(effects: Iterable[Any]) -> int:
    return sum(e.delta for e in effects if isinstance(e, StatEffect))


# Minor Work order: passive income first, then the quick platform piece
MINOR_WORK_ORDER = ("career", "quick", "spotlight")

FOCUS_DOWNTIME = {
    "food": ActionType.DOWNTIME_EAT_AT_HOME,
    "inspiration": ActionType.DOWNTIME_SLEEP,
    "craft": ActionType.DOWNTIME_PRACTICE,
}

Preference = tuple[ActionType, Callable[[Action], bool] | None]

CARD_DRAWS = frozenset({
    ActionType.DRAW_SOCIAL_CARD,
    ActionType.TAKE_PROF_DEV,
    ActionType.DRAW_PRO_CARD,
})
MAX_CARD_DRAWS_PER_TURN = 3


class HeuristicPolicy(BotPolicy):
    """
    Stage-by-stage heuristics for solo and hotseat simulation.

    Walks an ordered preference list and plays the first legal match:
    resolve pending cards, roll Time, keep a job and work it, spend Time
    on the stage's main activity, try to advance, then end the turn.
    Card draws are capped per turn so a turn always reaches END_TURN.
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)
        self._draws: dict[tuple[int, str], int] = {}

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        player = state.active_player
        for action_type, accepts in self._preferences(state, player):
            matches = [
                a for a in legal_actions
                if a.action_type == action_type and (accepts is None or accepts(a))
            ]
            if matches:
                action = matches[0] if len(matches) == 1 else self.rng.choice(matches)
                if action_type in CARD_DRAWS:
                    key = (state.turn, player.player_id)
                    self._draws[key] = self._draws.get(key, 0) + 1
                return BotDecision(
                    action=action,
                    explanation=f"{player.stage.value}: {action_type.value}",
                    evaluated_actions=len(legal_actions),
                )

        return BotDecision(
            action=legal_actions[0],
            explanation="No preference matched",
            confidence=0.5,
            evaluated_actions=len(legal_actions),
        )

    def _preferences(self, state: GameState, player: PlayerState) -> list[Preference]:
        prefs: list[Preference] = []
        drawing = self._draws.get((state.turn, player.player_id), 0) < MAX_CARD_DRAWS_PER_TURN

        card = player.pending_social_card
        if card is not None:
            attend = _stat_score(card.attend.effects) >= _stat_score(card.skip.effects)
            prefs.append((
                ActionType.ATTEND_SOCIAL_EVENT if attend else ActionType.SKIP_SOCIAL_EVENT,
                None,
            ))
        if player.pending_pro_card is not None:
            prefs.append((ActionType.RESOLVE_PRO_CARD_CHOICE, None))

        if player.stage == Stage.HOME:
            prefs += [
                (ActionType.DRAW_HOME_CARD, None),
                (ActionType.ATTEMPT_LEAVE_HOME, None),
            ]
        elif player.stage == Stage.PRO:
            prefs += [(ActionType.BUYOUT_SCANDAL, None), (ActionType.LAY_LOW, None)]

        prefs += [
            (ActionType.ROLL_TIME, None),
            (ActionType.CHOOSE_JOB, None),
            (ActionType.GO_TO_WORK, None),
        ]

        if player.stage == Stage.DREAMER:
            if drawing:
                prefs.append((ActionType.DRAW_SOCIAL_CARD, None))
            prefs.append((ActionType.ATTEMPT_ADVANCE_DREAMER, None))
        elif player.stage == Stage.AMATEUR:
            next_work = self._next_minor_work(player)
            prefs += [
                (ActionType.PROGRESS_MINOR_WORK, None),
                (ActionType.START_MINOR_WORK, lambda a: a.payload.work_id == next_work),
            ]
            if drawing:
                prefs.append((ActionType.TAKE_PROF_DEV, None))
            prefs += [
                (ActionType.COMPILE_PORTFOLIO, None),
                (ActionType.ATTEMPT_ADVANCE_PRO, None),
            ]
        elif player.stage == Stage.PRO:
            focus = player.turn_flags.focus_stat
            if focus and getattr(player, focus) <= 0:
                prefs.append((FOCUS_DOWNTIME[focus], None))
            prefs.append((ActionType.WORK_ON_MASTERWORK, None))
            if drawing:
                prefs.append((ActionType.DRAW_PRO_CARD, None))
            prefs.append((ActionType.PRO_MAINTENANCE_CHECK, None))

        prefs.append((ActionType.END_TURN, None))
        return prefs

    def _next_minor_work(self, player: PlayerState) -> str | None:
        templates = get_templates_for_art_path(player.art_path)
        done = player.completed_work_ids
        for kind in MINOR_WORK_ORDER:
            for template in templates:
                if template.kind.value == kind and template.work_id not in done:
                    return template.work_id
        return None


POLICIES = {
    "heuristic": HeuristicPolicy,
    "random": RandomPolicy,
}


def get_policy(name: str, seed: int | None = None) -> BotPolicy:
    """Build a policy by name. Raises ValueError for unknown names."""
    policy_class = POLICIES.get(name)
    if policy_class is None:
        raise ValueError(f"Unknown policy: {name}")
    return policy_class(seed=seed)
