"""
Effects - The typed delta vocabulary shared by every card and template.

An effect is one of:
- StatEffect: adjust money / food / inspiration / craft
- TimeEffect: adjust the player's remaining Time this turn (floor 0)
- MasterworkEffect: adjust masterwork progress

Every stage reducer routes card effects through apply_effects(), so a card
means the same thing wherever it is played. Unknown or malformed effects are
ignored rather than raising.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .state import PlayerState


STATS = ("money", "food", "inspiration", "craft")

# Stats that can never go below zero. Money is unclamped; debt is allowed.
FLOORED_STATS = ("food", "inspiration", "craft")


@dataclass(frozen=True)
class StatEffect:
    stat: str
    delta: int

    @property
    def type(self) -> str:
        return "stat"


@dataclass(frozen=True)
class TimeEffect:
    delta: int

    @property
    def type(self) -> str:
        return "time"


@dataclass(frozen=True)
class MasterworkEffect:
    delta: int

    @property
    def type(self) -> str:
        return "masterwork"


Effect = Union[StatEffect, TimeEffect, MasterworkEffect]


def stat(name: str, delta: int) -> StatEffect:
    """Shorthand used by the catalogs."""
    return StatEffect(stat=name, delta=delta)


def parse_effect(data: Any) -> Effect | None:
    """
    Build an Effect from a dict like {"type": "stat", "stat": "money", "delta": 2}.

    Returns None for anything that is not a recognised effect.
    """
    if isinstance(data, (StatEffect, TimeEffect, MasterworkEffect)):
        return data
    if not isinstance(data, dict):
        return None

    effect_type = data.get("type")
    try:
        delta = int(data.get("delta") or 0)
    except (TypeError, ValueError):
        return None

    if effect_type == "stat":
        name = data.get("stat")
        if name not in STATS:
            return None
        return StatEffect(stat=name, delta=delta)
    if effect_type == "time":
        return TimeEffect(delta=delta)
    if effect_type == "masterwork":
        return MasterworkEffect(delta=delta)
    return None


def parse_effects(data: Any) -> list[Effect]:
    """Parse a list of effect dicts, dropping anything unrecognised."""
    if not isinstance(data, (list, tuple)):
        return []
    effects = []
    for item in data:
        effect = parse_effect(item)
        if effect is not None:
            effects.append(effect)
    return effects


def apply_effects(
    player: PlayerState,
    effects: Iterable[Any] | None,
    block_masterwork_gain: bool = False,
) -> PlayerState:
    """
    Apply effects to a player and return the updated player.

    Floors are enforced by PlayerState.with_stats(). When
    block_masterwork_gain is set, positive masterwork deltas are dropped
    (a player under Scandal cannot make masterwork progress).
    """
    if not effects:
        return player

    deltas: dict[str, int] = {}
    time_delta = 0
    masterwork_delta = 0

    for raw in effects:
        effect = parse_effect(raw)
        if effect is None:
            continue
        if isinstance(effect, StatEffect):
            deltas[effect.stat] = deltas.get(effect.stat, 0) + effect.delta
        elif isinstance(effect, TimeEffect):
            time_delta += effect.delta
        elif isinstance(effect, MasterworkEffect):
            if block_masterwork_gain and effect.delta > 0:
                continue
            masterwork_delta += effect.delta

    if not deltas and not time_delta and not masterwork_delta:
        return player

    updated = player.with_stats(
        **{name: getattr(player, name) + delta for name, delta in deltas.items()}
    )
    return updated._copy_with(
        time_this_turn=max(0, updated.time_this_turn + time_delta),
        masterwork_progress=updated.masterwork_progress + masterwork_delta,
    )


def format_effects(effects: Iterable[Any] | None) -> str:
    """Human-readable summary, e.g. "money +2, food -1"."""
    parts = []
    for raw in effects or []:
        effect = parse_effect(raw)
        if effect is None or effect.delta == 0:
            continue
        sign = "+" if effect.delta >= 0 else ""
        label = effect.stat if isinstance(effect, StatEffect) else effect.type
        parts.append(f"{label} {sign}{effect.delta}")
    return ", ".join(parts)
