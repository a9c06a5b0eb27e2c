"""
Dice - The single random source of the engine.

Every probabilistic check (leave-home rolls, time rolls, advancement rolls,
maintenance rolls, focus selection, hit-piece recovery) goes through d6().
Deck reshuffles use the same generator, so a seed fully determines a game.
"""

from __future__ import annotations
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class Dice:
    """
    Seeded d6 source.

    Usage:
        dice = Dice(seed=42)
        roll = dice.d6()
    """

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self.rng = random.Random(seed)

    def roll(self, sides: int = 6) -> int:
        """Roll a single die, returning 1..sides."""
        return self.rng.randint(1, sides)

    def d6(self) -> int:
        return self.roll(6)

    def pick(self, options: Sequence[T]) -> T:
        """Pick uniformly among up to six options using one d6 roll."""
        if not options or len(options) > 6 or 6 % len(options) != 0:
            raise ValueError("pick() needs 1, 2, 3 or 6 options")
        bucket = 6 // len(options)
        return options[(self.d6() - 1) // bucket]

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a shuffled copy (Fisher-Yates via random.shuffle)."""
        copy = list(items)
        self.rng.shuffle(copy)
        return copy

    def fork(self) -> Dice:
        """
        Copy this source without consuming from it.

        Used to try actions speculatively (legal action generation).
        """
        twin = Dice.__new__(Dice)
        twin.seed = self.seed
        twin.rng = random.Random()
        twin.rng.setstate(self.rng.getstate())
        return twin


class ScriptedDice(Dice):
    """
    Dice that replay a fixed sequence of rolls.

    Useful for replays and tests. The sequence cycles when exhausted.
    Shuffles keep the original order so deck contents stay predictable.
    """

    def __init__(self, rolls: Sequence[int]):
        if not rolls:
            raise ValueError("ScriptedDice needs at least one roll")
        super().__init__(seed=None)
        self.rolls = list(rolls)
        self.position = 0

    def roll(self, sides: int = 6) -> int:
        value = self.rolls[self.position % len(self.rolls)]
        self.position += 1
        return max(1, min(sides, value))

    def shuffle(self, items: Sequence[T]) -> list[T]:
        return list(items)

    def fork(self) -> ScriptedDice:
        twin = ScriptedDice(self.rolls)
        twin.position = self.position
        return twin
