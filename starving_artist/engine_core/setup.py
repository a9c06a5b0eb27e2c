"""
Game Setup - Creates initial game state.

This module handles:
- Creating players on the Home track with zeroed stats
- Resolving the tuning config from overrides
- Building and shuffling the Home / Social / Prof Dev / Pro decks
- Putting every job on the shared job market

Shuffles draw from the same Dice the game is then played with, so a seed
determines the whole game.
"""

from __future__ import annotations
import logging
import uuid
from typing import Any

from ..catalog.cards import (
    SAMPLE_HOME_CARDS,
    SAMPLE_SOCIAL_CARDS,
    SAMPLE_PROF_DEV_CARDS,
    SAMPLE_PRO_CARDS,
    card_from_dict,
)
from ..catalog.jobs import JOB_IDS
from ..catalog.minor_works import normalize_art_path
from .config import GameConfig
from .deck import Deck
from .dice import Dice
from .state import GameState, PlayerState

logger = logging.getLogger(__name__)

# GameState attribute -> deck name used by card_from_dict
DECK_KEYS = {
    "home_deck": "home",
    "social_deck": "social",
    "prof_dev_deck": "prof_dev",
    "pro_deck": "pro",
}

SAMPLE_DECKS = {
    "home": SAMPLE_HOME_CARDS,
    "social": SAMPLE_SOCIAL_CARDS,
    "prof_dev": SAMPLE_PROF_DEV_CARDS,
    "pro": SAMPLE_PRO_CARDS,
}


def new_game(
    num_players: int = 1,
    art_paths: list[str] | None = None,
    names: list[str] | None = None,
    seed: int | None = None,
    dice: Dice | None = None,
    config: GameConfig | dict[str, Any] | None = None,
    decks: dict[str, list[Any]] | None = None,
    game_id: str | None = None,
) -> GameState:
    """
    Set up a new game.

    Args:
        num_players: Number of players (1 or more; 1 plays solo)
        art_paths: Art path per player (aliases allowed, default visual artist)
        names: Display names (defaults to "Player 1", "Player 2", ...)
        seed: Seed for a fresh Dice when dice is not given
        dice: Random source to shuffle with (share it with the Reducer)
        config: GameConfig, or a dict of per-section overrides
        decks: Cards per deck name ("home", "social", "prof_dev", "pro");
            entries may be card objects or dicts. Missing decks use the
            built-in sample cards.
        game_id: Explicit id (random when omitted)

    Returns:
        Initial GameState; the caller dispatches START_TURN to begin play
    """
    if num_players < 1:
        raise ValueError("A game needs at least one player")

    dice = dice or Dice(seed)
    if not isinstance(config, GameConfig):
        config = GameConfig.from_overrides(config)

    players = _create_players(num_players, art_paths or [], names or [])
    state = GameState(
        game_id=game_id or f"game_{uuid.uuid4().hex[:8]}",
        players=players,
        config=config,
        job_deck=list(JOB_IDS),
    )

    for key, deck_name in DECK_KEYS.items():
        cards = _load_cards(deck_name, (decks or {}).get(deck_name))
        state = state.with_deck(key, Deck(name=deck_name, cards=dice.shuffle(cards)))

    logger.info("New game %s with %d player(s)", state.game_id, num_players)
    return state


def _create_players(num_players: int, art_paths: list[str], names: list[str]) -> list[PlayerState]:
    """Create player states."""
    players = []
    for i in range(num_players):
        players.append(PlayerState(
            player_id=f"P{i + 1}",
            name=names[i] if i < len(names) else f"Player {i + 1}",
            art_path=normalize_art_path(art_paths[i] if i < len(art_paths) else None),
        ))
    return players


def _load_cards(deck_name: str, cards: list[Any] | None) -> list[Any]:
    if cards is None:
        return list(SAMPLE_DECKS[deck_name])
    return [card_from_dict(deck_name, c) if isinstance(c, dict) else c for c in cards]
