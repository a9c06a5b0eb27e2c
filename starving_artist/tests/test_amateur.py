"""
Tests for the Amateur stage and the Minor Works tracker.

Tests:
- Prof Dev cards and their Minor Work boosts
- Starting and progressing Minor Works
- Platform bonus
- Portfolio and the roll to go Pro
"""

from ..catalog import zeitgeists as zg
from ..catalog.cards import SAMPLE_PROF_DEV_CARDS
from ..engine_core.action import (
    Action, ActionType,
    ALREADY_DONE, INSUFFICIENT, INVALID_TARGET, NOT_ALLOWED,
)
from ..engine_core.deck import Deck
from ..engine_core.state import Stage

PROF_DEV = Action.simple(ActionType.TAKE_PROF_DEV)
PROGRESS = Action.simple(ActionType.PROGRESS_MINOR_WORK)
COMPILE = Action.simple(ActionType.COMPILE_PORTFOLIO)
ADVANCE = Action.simple(ActionType.ATTEMPT_ADVANCE_PRO)

QUICK = "mw_visual_speedpaint_reel"
CAREER = "mw_visual_portfolio_piece_commission_ready"
SPOTLIGHT = "mw_visual_limited_print_drop"


def _prof_dev(card_id):
    return next(c for c in SAMPLE_PROF_DEV_CARDS if c.card_id == card_id)


def _with_prof_dev_deck(state, *card_ids):
    cards = [_prof_dev(card_id) for card_id in card_ids]
    return state.with_deck("prof_dev_deck", Deck(name="prof_dev", cards=cards))


def _work(reducer, state, work_id, steps):
    state = reducer.apply(state, Action.start_minor_work(work_id))
    for _ in range(steps):
        state = reducer.apply(state, PROGRESS)
    return state


class TestProfDev:
    """Tests for Professional Development cards."""

    def test_take_prof_dev(self, amateur_state, reducer_with):
        """Grant Application: +3 Money, -1 Inspiration for 2 Time."""
        state = _with_prof_dev_deck(amateur_state, "prof_004")

        state = reducer_with(1).apply(state, PROF_DEV)

        player = state.active_player
        assert player.money == 3
        assert player.inspiration == 0
        assert player.time_this_turn == 4
        assert player.last_result.prof_dev_card.card_id == "prof_004"

    def test_not_enough_time(self, make_state, make_player, reducer_with):
        """The card is only peeked; the deck is untouched."""
        state = _with_prof_dev_deck(
            make_state(make_player(stage=Stage.AMATEUR, time_this_turn=1)), "prof_004"
        )

        result = reducer_with(1).resolve(state, PROF_DEV)

        assert result.error_code == INSUFFICIENT
        assert state.prof_dev_deck.count == 1

    def test_boost_starts_the_work(self, amateur_state, reducer_with):
        """With nothing in progress, the card's own work is started and boosted."""
        state = _with_prof_dev_deck(amateur_state, "prof_002")

        state = reducer_with(1).apply(state, PROF_DEV)

        player = state.active_player
        assert player.minor_work_in_progress_id == CAREER
        assert player.minor_work_progress_by_id[CAREER] == 1

    def test_boost_never_completes(self, make_state, make_player, reducer_with):
        """Progress is capped one short of the target."""
        player = make_player(
            stage=Stage.AMATEUR, time_this_turn=6,
            minor_work_in_progress_id=CAREER,
            minor_work_progress_by_id={CAREER: 3},
        )
        state = _with_prof_dev_deck(make_state(player), "prof_002")

        state = reducer_with(1).apply(state, PROF_DEV)

        player = state.active_player
        assert player.minor_work_progress_by_id[CAREER] == 3
        assert player.minor_works == []
        assert player.last_result.prof_dev_boost == (CAREER, 3, 3)

    def test_boost_for_other_art_path_is_ignored(self, amateur_state, reducer_with):
        """A visual artist gets the Mentor Session Craft but not its author boost."""
        state = _with_prof_dev_deck(amateur_state, "prof_003")

        state = reducer_with(1).apply(state, PROF_DEV)

        player = state.active_player
        assert player.craft == 1
        assert player.minor_work_in_progress_id is None
        assert player.minor_work_progress_by_id == {}


class TestMinorWorks:
    """Tests for starting and progressing Minor Works."""

    def test_start_rules(self, amateur_state, reducer_with):
        reducer = reducer_with(1)

        unknown = reducer.resolve(amateur_state, Action.start_minor_work("mw_author_chapbook_release"))
        assert unknown.error_code == INVALID_TARGET

        state = reducer.apply(amateur_state, Action.start_minor_work(QUICK))
        busy = reducer.resolve(state, Action.start_minor_work(CAREER))
        assert busy.error_code == NOT_ALLOWED

    def test_progress_needs_work_and_time(self, make_state, make_player, amateur_state, reducer_with):
        reducer = reducer_with(1)
        assert reducer.resolve(amateur_state, PROGRESS).error_code == NOT_ALLOWED

        player = make_player(stage=Stage.AMATEUR, minor_work_in_progress_id=QUICK)
        assert reducer.resolve(make_state(player), PROGRESS).error_code == INSUFFICIENT

    def test_complete_quick_work(self, amateur_state, reducer_with):
        """Speedpaint Reel: two pips, +2 Craft, banks the platform bonus."""
        state = _work(reducer_with(1), amateur_state, QUICK, 2)

        player = state.active_player
        assert player.completed_work_ids == {QUICK}
        assert player.craft == 2
        assert player.platform_bonus == 1
        assert player.minor_work_in_progress_id is None
        assert player.time_this_turn == 4

    def test_completed_work_cannot_restart(self, amateur_state, reducer_with):
        reducer = reducer_with(1)
        state = _work(reducer, amateur_state, QUICK, 2)

        result = reducer.resolve(state, Action.start_minor_work(QUICK))

        assert result.error_code == ALREADY_DONE

    def test_progress_is_kept_per_work(self, amateur_state, reducer_with):
        state = _work(reducer_with(1), amateur_state, CAREER, 3)

        player = state.active_player
        assert player.minor_work_progress_by_id[CAREER] == 3
        assert player.last_result.minor_work_progress == (CAREER, 3, 4)


class TestPortfolio:
    """Tests for the road from Amateur to Pro."""

    def test_portfolio_and_going_pro(self, make_state, make_player, reducer_with):
        """
        Three works (quick, career, spotlight), the platform bonus cashed in
        by the spotlight, a portfolio, and a successful roll to go Pro.
        """
        player = make_player(stage=Stage.AMATEUR, time_this_turn=11, inspiration=3)
        state = make_state(player)
        reducer = reducer_with(5, 6)

        state = _work(reducer, state, QUICK, 2)
        state = _work(reducer, state, CAREER, 4)
        state = _work(reducer, state, SPOTLIGHT, 5)

        player = state.active_player
        assert len(player.minor_works) == 3
        assert player.time_this_turn == 0
        # Limited Print Drop pays 6, plus 2 for the banked platform bonus.
        assert player.money == 8
        assert player.platform_bonus == 0
        assert reducer.resolve(state, Action.start_minor_work(QUICK)).error_code == NOT_ALLOWED

        state = reducer.apply(state, COMPILE)
        player = state.active_player
        assert player.portfolio_built
        assert (player.money, player.inspiration, player.craft) == (3, 0, 0)
        assert reducer.resolve(state, COMPILE).error_code == ALREADY_DONE

        state = reducer.apply(state, ADVANCE)
        player = state.active_player
        assert player.stage == Stage.PRO
        assert player.time_this_turn == 0
        assert state.zeitgeist.milestones["pro"]
        assert state.zeitgeist.current_id == zg.CULTURE_WAR

    def test_compile_needs_works(self, amateur_state, reducer_with):
        assert reducer_with(1).resolve(amateur_state, COMPILE).error_code == INSUFFICIENT

    def test_advance_needs_portfolio(self, amateur_state, reducer_with):
        assert reducer_with(6).resolve(amateur_state, ADVANCE).error_code == NOT_ALLOWED

    def test_failed_advance_stays_amateur(self, make_state, make_player, reducer_with):
        state = make_state(make_player(stage=Stage.AMATEUR, portfolio_built=True))

        state = reducer_with(3).apply(state, ADVANCE)

        assert state.active_player.stage == Stage.AMATEUR
        assert not state.active_player.last_result.pro_advance_roll.success
