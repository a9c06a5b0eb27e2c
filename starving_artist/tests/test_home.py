"""
Tests for the Home stage.
"""

from ..catalog import zeitgeists as zg
from ..engine_core.action import (
    Action, ActionType,
    ALREADY_DONE, DECK_EMPTY, WRONG_STAGE,
)
from ..engine_core.config import GameConfig
from ..engine_core.deck import Deck
from ..engine_core.dice import ScriptedDice
from ..engine_core.reducer import Reducer
from ..engine_core.setup import new_game
from ..engine_core.state import Stage

DRAW = Action.simple(ActionType.DRAW_HOME_CARD)
LEAVE = Action.simple(ActionType.ATTEMPT_LEAVE_HOME)


class TestDrawHomeCard:
    """Tests for drawing Home cards."""

    def test_draw_applies_effects(self, home_state, reducer_with):
        """The top sample card is the Library Card: +1 Inspiration, +1 Craft."""
        state = reducer_with(1).apply(home_state, DRAW)

        player = state.active_player
        assert (player.inspiration, player.craft) == (1, 1)
        assert player.last_result.home_card.card_id == "home_005"
        assert state.home_deck.discard[-1].card_id == "home_005"

    def test_once_per_turn(self, home_state, reducer_with):
        reducer = reducer_with(1)
        state = reducer.apply(home_state, DRAW)

        assert reducer.resolve(state, DRAW).error_code == ALREADY_DONE

    def test_empty_deck(self, home_state, reducer_with):
        state = home_state.with_deck("home_deck", Deck(name="home"))

        result = reducer_with(1).resolve(state, DRAW)

        assert result.error_code == DECK_EMPTY

    def test_only_at_home(self, dreamer_state, reducer_with):
        assert reducer_with(1).resolve(dreamer_state, DRAW).error_code == WRONG_STAGE


class TestLeaveHome:
    """Tests for the leave-home roll sequence."""

    def test_three_successes_make_a_dreamer(self, home_state, reducer_with):
        """Rolls of 4, 3 and 2 clear the default 4/3/2 sequence over three turns."""
        reducer = reducer_with(4, 3, 2, 1)

        state = reducer.apply(home_state, LEAVE)
        assert state.active_player.home_progress == 1
        assert reducer.resolve(state, LEAVE).error_code == ALREADY_DONE

        state = reducer.apply(state, Action.end_turn())
        state = reducer.apply(state, LEAVE)
        assert state.active_player.home_progress == 2

        state = reducer.apply(state, Action.end_turn())
        state = reducer.apply(state, LEAVE)

        player = state.active_player
        assert player.stage == Stage.DREAMER
        assert player.time_this_turn == 0
        # Entering Dreamer is the first milestone; the d6 of 1 picks AI Boom.
        assert state.zeitgeist.milestones["dreamer"]
        assert state.zeitgeist.current_id == zg.AI_BOOM

    def test_failed_roll(self, home_state, reducer_with):
        state = reducer_with(3).apply(home_state, LEAVE)

        player = state.active_player
        assert player.home_progress == 0
        assert player.turn_flags.leave_home_attempted
        assert not player.last_result.home_roll.success

    def test_custom_sequence(self, home_state, reducer_with):
        config = GameConfig.from_overrides({"home": {"roll_sequence": [6]}})
        state = home_state._copy_with(config=config)

        state = reducer_with(6, 2).apply(state, LEAVE)

        assert state.active_player.stage == Stage.DREAMER

    def test_author_leaves_home_on_sixes(self):
        """Fresh solo author game, every die a 6: three turns to become a Dreamer."""
        dice = ScriptedDice([6])
        state = new_game(
            num_players=1, art_paths=["author"], dice=dice,
            config={"home": {"roll_sequence": [4, 3, 2]}},
        )
        reducer = Reducer(dice=dice)

        state = reducer.apply(state, Action.start_turn())
        state = reducer.apply(state, DRAW)
        state = reducer.apply(state, LEAVE)
        for _ in range(2):
            state = reducer.apply(state, Action.end_turn())
            state = reducer.apply(state, LEAVE)

        player = state.active_player
        assert player.stage == Stage.DREAMER
        assert player.home_progress == 3
        assert state.turn == 3
