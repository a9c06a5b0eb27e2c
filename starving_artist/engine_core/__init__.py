"""
Engine Core - Deterministic game state management.

The engine is the runtime that:
1. Holds the GameState and its tuning config
2. Rolls every die through one seeded Dice
3. Applies actions via the reducer (engine_core.reducer)
4. Generates legal actions (engine_core.action_generator)
5. Sets up new games (engine_core.setup)

Only the leaf modules are re-exported here. The reducer, setup and action
generator pull in the stage and system modules, which themselves build on
this package, so import them from their own modules.
"""

from .state import (
    GameState,
    PlayerState,
    GameStatus,
    Stage,
    TurnFlags,
    LastResult,
    RollRecord,
    CompletedMinorWork,
    ZeitgeistState,
)
from .action import Action, ActionType, ActionPayload, ActionResult, ACTION_GROUPS
from .config import GameConfig, DEFAULT_CONFIG
from .deck import Deck
from .dice import Dice, ScriptedDice
from .effects import StatEffect, TimeEffect, MasterworkEffect, apply_effects, parse_effect

__all__ = [
    "GameState",
    "PlayerState",
    "GameStatus",
    "Stage",
    "TurnFlags",
    "LastResult",
    "RollRecord",
    "CompletedMinorWork",
    "ZeitgeistState",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ACTION_GROUPS",
    "GameConfig",
    "DEFAULT_CONFIG",
    "Deck",
    "Dice",
    "ScriptedDice",
    "StatEffect",
    "TimeEffect",
    "MasterworkEffect",
    "apply_effects",
    "parse_effect",
]
