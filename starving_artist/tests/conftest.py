"""
Pytest fixtures for Starving Artist tests.
"""

import pytest

from ..catalog.jobs import JOB_IDS
from ..engine_core.config import GameConfig
from ..engine_core.deck import Deck
from ..engine_core.dice import ScriptedDice
from ..engine_core.reducer import Reducer
from ..engine_core.setup import DECK_KEYS, SAMPLE_DECKS
from ..engine_core.state import GameState, PlayerState, Stage


def _player(player_id: str = "P1", **fields) -> PlayerState:
    fields.setdefault("name", f"Player {player_id[1:]}")
    fields.setdefault("art_path", "visual_artist")
    return PlayerState(player_id=player_id, **fields)


def _state(*players: PlayerState, **fields) -> GameState:
    """A game over the sample decks, unshuffled (top card is the last one)."""
    fields.setdefault("job_deck", list(JOB_IDS))
    fields.setdefault("config", GameConfig())
    state = GameState(game_id="test_game", players=list(players) or [_player()], **fields)
    for key, deck_name in DECK_KEYS.items():
        state = state.with_deck(key, Deck(name=deck_name, cards=list(SAMPLE_DECKS[deck_name])))
    return state


@pytest.fixture
def make_player():
    """Factory for players; stats default to zero, art path to visual artist."""
    return _player


@pytest.fixture
def make_state():
    """Factory for game states built around the given players."""
    return _state


@pytest.fixture
def reducer_with():
    """Factory for a Reducer that replays the given die rolls."""
    def _make(*rolls: int) -> Reducer:
        return Reducer(dice=ScriptedDice(rolls or (1,)))
    return _make


@pytest.fixture
def home_state() -> GameState:
    """Solo game, player at Home at the start of turn 1."""
    return _state(_player())


@pytest.fixture
def dreamer_state() -> GameState:
    """Solo Dreamer who has rolled 3 Time."""
    player = _player(stage=Stage.DREAMER, time_this_turn=3).with_flags(has_rolled_time=True)
    return _state(player)


@pytest.fixture
def amateur_state() -> GameState:
    """Solo Amateur who has rolled 6 Time."""
    player = _player(stage=Stage.AMATEUR, time_this_turn=6).with_flags(has_rolled_time=True)
    return _state(player)


@pytest.fixture
def pro_state() -> GameState:
    """Solo Pro with 5 Time, 2 Craft and Craft as this turn's focus."""
    player = _player(stage=Stage.PRO, time_this_turn=5, craft=2).with_flags(
        has_rolled_time=True, focus_stat="craft"
    )
    return _state(player)
