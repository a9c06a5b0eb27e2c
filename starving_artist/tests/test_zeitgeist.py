"""
Tests for the Zeitgeist: milestone rolls, passive bonuses and AI Boom.
"""

import pytest

from ..catalog import zeitgeists as zg
from ..catalog.cards import ProfDevCard
from ..engine_core.action import (
    Action, ActionType,
    ALREADY_DONE, INSUFFICIENT, INVALID_TARGET, NOT_ALLOWED,
)
from ..engine_core.deck import Deck
from ..engine_core.dice import ScriptedDice
from ..engine_core.effects import stat
from ..engine_core.state import Stage, ZeitgeistState
from ..systems.zeitgeist import check_milestones


def _under(state, zeitgeist_id):
    return state._copy_with(
        zeitgeist=ZeitgeistState(current=zg.get_zeitgeist(zeitgeist_id))
    )


class TestMilestones:
    """Tests for check_milestones()."""

    def test_table(self):
        assert [z.roll for z in zg.ZEITGEISTS] == [1, 2, 3, 4, 5, 6]
        assert zg.get_zeitgeist_by_roll(4).zeitgeist_id == zg.GIG_ECONOMY
        assert zg.get_zeitgeist_by_roll(7) is None

    def test_fires_once_per_stage(self, make_state, make_player):
        """The second player to become a Dreamer rolls nothing."""
        dice = ScriptedDice([4, 6])
        before = make_state(make_player("P1"), make_player("P2"))
        first = before.with_player(before.players[0]._copy_with(stage=Stage.DREAMER))

        first = check_milestones(before, first, dice)

        assert first.zeitgeist.current_id == zg.GIG_ECONOMY
        assert first.zeitgeist.milestones == {"dreamer": True, "amateur": False, "pro": False}
        assert dice.position == 1

        second = first.with_player(first.players[1]._copy_with(stage=Stage.DREAMER))
        second = check_milestones(first, second, dice)

        assert second.zeitgeist.current_id == zg.GIG_ECONOMY
        assert dice.position == 1

    def test_replaced_zeitgeist_goes_to_history(self, make_state, make_player):
        before = _under(make_state(make_player(stage=Stage.DREAMER)), zg.AI_BOOM)
        after = before.with_player(before.players[0]._copy_with(stage=Stage.AMATEUR))

        after = check_milestones(before, after, ScriptedDice([5]))

        assert after.zeitgeist.current_id == zg.STREAMING_ERA
        assert [z.zeitgeist_id for z in after.zeitgeist.history] == [zg.AI_BOOM]

    def test_staying_put_rolls_nothing(self, dreamer_state):
        dice = ScriptedDice([1])

        assert check_milestones(dreamer_state, dreamer_state, dice) is dreamer_state
        assert dice.position == 0


class TestPassiveBonuses:
    """Tests for the post-action bonuses of the active Zeitgeist."""

    def test_gig_economy(self, make_state, make_player, reducer_with):
        player = make_player(
            stage=Stage.DREAMER, job_id="job_teacher", time_this_turn=3
        ).with_flags(has_rolled_time=True)
        state = _under(make_state(player), zg.GIG_ECONOMY)

        state = reducer_with(1).apply(state, Action.simple(ActionType.GO_TO_WORK))

        assert state.active_player.money == 2

    def test_wellness_culture(self, dreamer_state, reducer_with):
        state = _under(dreamer_state, zg.WELLNESS_CULTURE)

        state = reducer_with(1).apply(state, Action.simple(ActionType.DOWNTIME_PRACTICE))

        assert state.active_player.craft == 2
        assert state.active_player.time_this_turn == 2

    def test_indie_wave_on_completion_only(self, amateur_state, reducer_with):
        reducer = reducer_with(1)
        state = _under(amateur_state, zg.INDIE_WAVE)
        state = reducer.apply(state, Action.start_minor_work("mw_visual_speedpaint_reel"))

        state = reducer.apply(state, Action.simple(ActionType.PROGRESS_MINOR_WORK))
        assert state.active_player.craft == 0

        state = reducer.apply(state, Action.simple(ActionType.PROGRESS_MINOR_WORK))
        assert state.active_player.craft == 3

    def test_no_bonus_from_other_zeitgeist(self, dreamer_state, reducer_with):
        state = _under(dreamer_state, zg.INDIE_WAVE)

        state = reducer_with(1).apply(state, Action.simple(ActionType.DOWNTIME_PRACTICE))

        assert state.active_player.craft == 1


class TestStreamingEra:
    """Tests for the Streaming Era Time refund."""

    def test_social_refund_waits_for_payment(self, dreamer_state, reducer_with):
        """Drawing pays nothing, so it refunds nothing; attending pays 1 and gets it back."""
        reducer = reducer_with(1)
        state = _under(dreamer_state, zg.STREAMING_ERA)

        state = reducer.apply(state, Action.simple(ActionType.DRAW_SOCIAL_CARD))
        assert state.active_player.time_this_turn == 3

        state = reducer.apply(state, Action.simple(ActionType.ATTEND_SOCIAL_EVENT))
        assert state.active_player.time_this_turn == 3
        assert state.active_player.turn_flags.used_streaming_refund

    def test_refund_once_per_turn(self, make_state, make_player, reducer_with):
        """A Dreamer with 1 Time cannot keep drawing 1-Time cards for free."""
        reducer = reducer_with(1)
        player = make_player(stage=Stage.DREAMER, time_this_turn=1).with_flags(has_rolled_time=True)
        state = _under(make_state(player), zg.STREAMING_ERA)
        draw = Action.simple(ActionType.DRAW_SOCIAL_CARD)
        attend = Action.simple(ActionType.ATTEND_SOCIAL_EVENT)

        state = reducer.apply(reducer.apply(state, draw), attend)
        assert state.active_player.time_this_turn == 1

        state = reducer.apply(reducer.apply(state, draw), attend)
        assert state.active_player.time_this_turn == 0
        assert reducer.resolve(state, draw).error_code == INSUFFICIENT

    def test_pro_card_refund(self, pro_state, reducer_with):
        state = _under(pro_state, zg.STREAMING_ERA)

        state = reducer_with(1).apply(state, Action.simple(ActionType.DRAW_PRO_CARD))

        assert state.active_player.time_this_turn == 4

    def test_refund_capped_at_cost(self, amateur_state, reducer_with):
        """A free Prof Dev card refunds nothing and leaves the refund unused."""
        card = ProfDevCard("prof_free", "Free Webinar", time_cost=0, effects=(stat("craft", 1),))
        state = _under(amateur_state, zg.STREAMING_ERA).with_deck(
            "prof_dev_deck", Deck(name="prof_dev", cards=[card])
        )

        state = reducer_with(1).apply(state, Action.simple(ActionType.TAKE_PROF_DEV))

        player = state.active_player
        assert player.time_this_turn == 6
        assert player.craft == 1
        assert not player.turn_flags.used_streaming_refund

    def test_next_turn_resets_refund(self, dreamer_state, reducer_with):
        reducer = reducer_with(1)
        state = _under(dreamer_state, zg.STREAMING_ERA)
        state = reducer.apply(state, Action.simple(ActionType.DRAW_SOCIAL_CARD))
        state = reducer.apply(state, Action.simple(ActionType.SKIP_SOCIAL_EVENT))
        assert state.active_player.turn_flags.used_streaming_refund

        state = reducer.apply(state, Action.simple(ActionType.END_TURN))

        assert not state.active_player.turn_flags.used_streaming_refund


class TestAiBoom:
    """Tests for AI_BOOM_CONVERT."""

    @pytest.fixture
    def boom_state(self, make_state, make_player):
        return _under(make_state(make_player(inspiration=2)), zg.AI_BOOM)

    def test_convert(self, boom_state, reducer_with):
        """Works at any stage, Home included."""
        reducer = reducer_with(1)

        state = reducer.apply(boom_state, Action.ai_boom_convert("money"))

        player = state.active_player
        assert (player.inspiration, player.money) == (1, 1)
        assert player.last_result.zeitgeist_conversion == "money"
        assert reducer.resolve(state, Action.ai_boom_convert("food")).error_code == ALREADY_DONE

    def test_rejections(self, boom_state, make_state, make_player, reducer_with):
        reducer = reducer_with(1)
        broke = _under(make_state(make_player()), zg.AI_BOOM)
        quiet = make_state(make_player(inspiration=2))

        assert reducer.resolve(boom_state, Action.ai_boom_convert("inspiration")).error_code == INVALID_TARGET
        assert reducer.resolve(broke, Action.ai_boom_convert("craft")).error_code == INSUFFICIENT
        assert reducer.resolve(quiet, Action.ai_boom_convert("craft")).error_code == NOT_ALLOWED
