"""
Game Loop - Drives games with bot policies.

The loop:
1. Enumerate the active player's legal actions (forked Dice)
2. Ask that player's policy for one
3. Apply it through the Reducer
4. Repeat until the turn passes, then until the game is over

simulate_games() runs a batch of seeded games and summarizes them; the CLI
`simulate` command prints that summary as JSON.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging

from ..bots import BotPolicy, get_policy
from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import ActionGenerator
from ..engine_core.dice import Dice
from ..engine_core.reducer import Reducer
from ..engine_core.setup import new_game
from ..engine_core.state import GameState, GameStatus

logger = logging.getLogger(__name__)

# Safety caps for policies that never end a turn / games with no turn limit.
MAX_ACTIONS_PER_TURN = 200
MAX_TURNS_WITHOUT_LIMIT = 500


class LoopState(Enum):
    """State of the game loop."""
    RUNNING = "running"
    GAME_OVER = "game_over"
    STALLED = "stalled"  # Policy kept the seat past MAX_ACTIONS_PER_TURN


@dataclass
class TurnResult:
    """
    Result of playing one turn.
    """
    success: bool
    loop_state: LoopState
    player_id: str

    # Action types taken, in order
    actions: list[str] = field(default_factory=list)
    state_changes: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    winner: str | None = None


class GameLoop:
    """
    The bot-driven game loop.

    Usage:
        loop = GameLoop(state, Reducer(dice), policies)
        while loop.state == LoopState.RUNNING:
            loop.play_turn()
    """

    def __init__(self, game_state: GameState, reducer: Reducer, policies: dict[str, BotPolicy]):
        self.game_state = game_state
        self.reducer = reducer
        self.policies = policies
        self.generator = ActionGenerator(dice=reducer.dice)
        self.action_counts: Counter[str] = Counter()
        self.state = LoopState.GAME_OVER if game_state.is_over else LoopState.RUNNING

    def play_turn(self) -> TurnResult:
        """Let the active player's policy act until the seat passes."""
        player_id = self.game_state.active_player.player_id
        result = TurnResult(success=True, loop_state=self.state, player_id=player_id)
        if self.state != LoopState.RUNNING:
            return result

        policy = self.policies[player_id]
        seat = (self.game_state.turn, self.game_state.active_player_index)

        for _ in range(MAX_ACTIONS_PER_TURN):
            legal = self.generator.generate(self.game_state)
            if not legal:
                break

            decision = policy.select_action(self.game_state, legal)
            outcome = self.reducer.resolve(self.game_state, decision.action)
            action_type = decision.action.action_type.value
            if not outcome.success:
                result.success = False
                result.errors.append(f"{action_type}: {outcome.error}")
                if outcome.new_state is not None:
                    self.game_state = outcome.new_state
                continue

            self.game_state = outcome.new_state
            self.action_counts[action_type] += 1
            result.actions.append(action_type)
            result.state_changes.extend(outcome.state_changes)

            if self.game_state.is_over:
                break
            if (self.game_state.turn, self.game_state.active_player_index) != seat:
                break
        else:
            logger.warning("%s did not end their turn after %d actions",
                           player_id, MAX_ACTIONS_PER_TURN)
            self.state = LoopState.STALLED

        if self.game_state.is_over:
            self.state = LoopState.GAME_OVER
            result.winner = self.game_state.winner_id

        result.loop_state = self.state
        return result

    def run(self, max_turns: int | None = None) -> GameState:
        """Play turns until the game ends, stalls or max_turns passes."""
        while self.state == LoopState.RUNNING:
            if max_turns is not None and self.game_state.turn > max_turns:
                break
            self.play_turn()
        return self.game_state


def _player_summary(player) -> dict[str, Any]:
    return {
        "id": player.player_id,
        "art_path": player.art_path,
        "stage": player.stage.value,
        "masterwork_progress": player.masterwork_progress,
        "money": player.money,
        "food": player.food,
        "inspiration": player.inspiration,
        "craft": player.craft,
        "scandal": player.scandal,
        "minor_works": len(player.minor_works),
    }


def simulate_game(
    seed: int,
    num_players: int = 2,
    policy: str = "heuristic",
    art_paths: list[str] | None = None,
    config: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Play one seeded game with bots in every seat.

    Returns a per-game record: seed, status, turns, winner, final player
    stats and how often each action type was taken.
    """
    dice = Dice(seed)
    state = new_game(num_players=num_players, art_paths=art_paths, seed=seed,
                     dice=dice, config=config)
    reducer = Reducer(dice=dice)
    state = reducer.apply(state, Action.start_turn())

    policies = {
        p.player_id: get_policy(policy, seed=seed * 100 + i)
        for i, p in enumerate(state.players)
    }
    loop = GameLoop(state, reducer, policies)
    loop.action_counts[ActionType.START_TURN.value] += 1

    max_turns = None
    if state.config.rules.max_turns is None:
        max_turns = MAX_TURNS_WITHOUT_LIMIT
    final = loop.run(max_turns=max_turns)

    return {
        "seed": seed,
        "status": final.status.value,
        "turns": final.turn,
        "winner_id": final.winner_id,
        "loss_reason": final.loss_reason,
        "stalled": loop.state == LoopState.STALLED,
        "players": [_player_summary(p) for p in final.players],
        "action_counts": {t.value: loop.action_counts.get(t.value, 0) for t in ActionType},
    }


def simulate_games(
    games: int = 50,
    players: int = 2,
    seed_start: int = 1,
    policy: str = "heuristic",
    art_paths: list[str] | None = None,
    config: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Run a batch of games with consecutive seeds and summarize them.

    Raises ValueError for an unknown policy or an invalid setup.
    """
    get_policy(policy)
    results = [
        simulate_game(seed_start + i, num_players=players, policy=policy,
                      art_paths=art_paths, config=config)
        for i in range(games)
    ]

    wins = sum(1 for r in results if r["status"] == GameStatus.WON.value)
    avg_turns = sum(r["turns"] for r in results) / max(1, len(results))
    logger.info("Simulated %d game(s): %d won", games, wins)

    return {
        "games": games,
        "players": players,
        "seed_start": seed_start,
        "policy": policy,
        "win_rate": wins / max(1, games),
        "avg_turns": avg_turns,
        "results": results,
    }
