"""
Tests for the downtime actions.
"""

import pytest

from ..engine_core.action import Action, ActionType, ALREADY_DONE, INSUFFICIENT, WRONG_STAGE
from ..engine_core.config import GameConfig
from ..engine_core.state import Stage


@pytest.mark.parametrize("action_type, stat", [
    (ActionType.DOWNTIME_PRACTICE, "craft"),
    (ActionType.DOWNTIME_SLEEP, "inspiration"),
    (ActionType.DOWNTIME_EAT_AT_HOME, "food"),
])
def test_downtime_trades_time_for_stat(dreamer_state, reducer_with, action_type, stat):
    reducer = reducer_with(1)

    state = reducer.apply(dreamer_state, Action.simple(action_type))

    player = state.active_player
    assert getattr(player, stat) == 1
    assert player.time_this_turn == 2
    assert reducer.resolve(state, Action.simple(action_type)).error_code == ALREADY_DONE


def test_each_downtime_once(dreamer_state, reducer_with):
    """Different downtime actions can share a turn."""
    reducer = reducer_with(1)
    state = reducer.apply(dreamer_state, Action.simple(ActionType.DOWNTIME_PRACTICE))
    state = reducer.apply(state, Action.simple(ActionType.DOWNTIME_SLEEP))

    assert (state.active_player.craft, state.active_player.inspiration) == (1, 1)


def test_needs_time(make_state, make_player, reducer_with):
    state = make_state(make_player(stage=Stage.AMATEUR))

    result = reducer_with(1).resolve(state, Action.simple(ActionType.DOWNTIME_SLEEP))

    assert result.error_code == INSUFFICIENT


def test_not_at_home(home_state, reducer_with):
    result = reducer_with(1).resolve(home_state, Action.simple(ActionType.DOWNTIME_EAT_AT_HOME))
    assert result.error_code == WRONG_STAGE


def test_configured_gain(dreamer_state, reducer_with):
    config = GameConfig.from_overrides({"downtime": {"gain": 2, "time_cost": 2}})
    state = dreamer_state._copy_with(config=config)

    state = reducer_with(1).apply(state, Action.simple(ActionType.DOWNTIME_SLEEP))

    assert state.active_player.inspiration == 2
    assert state.active_player.time_this_turn == 1
