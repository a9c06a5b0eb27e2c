"""
Deck - A draw pile with its discard pile.

Decks are immutable-friendly: every operation returns a new Deck.
The top of the draw pile is the END of `cards`.

Reshuffle contract: when the draw pile is empty and the discard pile is not,
the discard is shuffled back into the draw pile before drawing. When both are
empty the draw yields no card.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from .dice import Dice

logger = logging.getLogger(__name__)


@dataclass
class Deck:
    """A named draw pile plus discard pile."""
    name: str
    cards: list[Any] = field(default_factory=list)
    discard: list[Any] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        """True when neither the draw pile nor the discard can produce a card."""
        return not self.cards and not self.discard

    @property
    def top_card(self) -> Any | None:
        return self.cards[-1] if self.cards else None

    def ready(self, dice: Dice) -> Deck:
        """Return a deck whose draw pile is non-empty if at all possible."""
        if self.cards or not self.discard:
            return self
        logger.debug("Reshuffling %d cards into the %s deck", len(self.discard), self.name)
        return Deck(name=self.name, cards=dice.shuffle(self.discard), discard=[])

    def peek(self, dice: Dice) -> tuple[Any | None, Deck]:
        """Return (top card, deck after any reshuffle) without drawing."""
        deck = self.ready(dice)
        return deck.top_card, deck

    def draw(
        self,
        dice: Dice,
        predicate: Callable[[Any], bool] | None = None,
    ) -> tuple[Any | None, Deck]:
        """
        Draw the top card (or the topmost card matching predicate).

        The drawn card goes straight to the discard pile; cards skipped by
        the predicate stay where they are.
        Returns (card or None, new deck).
        """
        deck = self.ready(dice)
        if not deck.cards:
            logger.warning("No %s cards available to draw", self.name)
            return None, self

        index = deck._find(predicate)
        if index < 0 and deck.discard:
            # Shuffle the discard in beneath the cards that were passed over.
            deck = Deck(
                name=self.name,
                cards=dice.shuffle(deck.discard) + deck.cards,
                discard=[],
            )
            index = deck._find(predicate)
        if index < 0:
            logger.warning("No eligible %s cards available to draw", self.name)
            return None, self

        card = deck.cards[index]
        remaining = deck.cards[:index] + deck.cards[index + 1:]
        return card, Deck(name=self.name, cards=remaining, discard=deck.discard + [card])

    def _find(self, predicate: Callable[[Any], bool] | None) -> int:
        """Index of the topmost card matching predicate, or -1."""
        for index in range(len(self.cards) - 1, -1, -1):
            if predicate is None or predicate(self.cards[index]):
                return index
        return -1
