"""
Tests for bot policies, the game loop and batch simulation.
"""

import pytest

from ..bots import HeuristicPolicy, RandomPolicy, get_policy
from ..catalog import zeitgeists as zg
from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import legal_actions
from ..engine_core.dice import Dice, ScriptedDice
from ..engine_core.reducer import Reducer
from ..engine_core.setup import new_game
from ..engine_core.state import Stage, ZeitgeistState
from ..session.game_loop import GameLoop, LoopState, simulate_game, simulate_games

SHORT_GAME = {"rules": {"max_turns": 5}}


class TestPolicies:
    """Tests for the built-in policies."""

    def test_heuristic_draws_at_home_first(self, home_state):
        legal = legal_actions(home_state, ScriptedDice([1]))

        decision = HeuristicPolicy(seed=1).select_action(home_state, legal)

        assert decision.action.action_type == ActionType.DRAW_HOME_CARD
        assert decision.evaluated_actions == len(legal)

    def test_heuristic_resolves_pending_pro_card(self, pro_state, reducer_with):
        state = reducer_with(1).apply(pro_state, Action.simple(ActionType.DRAW_PRO_CARD))
        legal = legal_actions(state, ScriptedDice([1]))

        decision = HeuristicPolicy(seed=1).select_action(state, legal)

        assert decision.action.action_type == ActionType.RESOLVE_PRO_CARD_CHOICE

    def test_heuristic_rolls_time(self, make_state, make_player):
        state = make_state(make_player(stage=Stage.AMATEUR))
        legal = legal_actions(state, ScriptedDice([1]))

        decision = HeuristicPolicy(seed=1).select_action(state, legal)

        assert decision.action.action_type == ActionType.ROLL_TIME

    def test_random_picks_a_legal_action(self, home_state):
        legal = legal_actions(home_state, ScriptedDice([1]))

        decision = RandomPolicy(seed=3).select_action(home_state, legal)

        assert decision.action in legal

    def test_no_legal_actions(self, home_state):
        with pytest.raises(ValueError):
            RandomPolicy().select_action(home_state, [])
        with pytest.raises(ValueError):
            HeuristicPolicy().select_action(home_state, [])

    def test_get_policy(self):
        assert isinstance(get_policy("random", seed=1), RandomPolicy)
        assert isinstance(get_policy("heuristic"), HeuristicPolicy)
        with pytest.raises(ValueError):
            get_policy("genius")


class TestGameLoop:
    """Tests for GameLoop."""

    def _loop(self, num_players=2, seed=11):
        dice = Dice(seed)
        state = new_game(num_players=num_players, dice=dice, config=SHORT_GAME)
        reducer = Reducer(dice=dice)
        state = reducer.apply(state, Action.start_turn())
        policies = {p.player_id: HeuristicPolicy(seed=i) for i, p in enumerate(state.players)}
        return GameLoop(state, reducer, policies)

    def test_play_turn_passes_the_seat(self):
        loop = self._loop()

        result = loop.play_turn()

        assert result.player_id == "P1"
        assert result.actions[-1] == "end_turn"
        assert loop.game_state.active_player.player_id == "P2"
        assert loop.state == LoopState.RUNNING

    def test_run_until_turn_limit(self):
        loop = self._loop()

        final = loop.run()

        assert final.is_over
        assert final.loss_reason == "max_turns"
        assert loop.state == LoopState.GAME_OVER
        assert loop.action_counts["end_turn"] >= 10

    @pytest.mark.parametrize("stage", [Stage.DREAMER, Stage.AMATEUR, Stage.PRO])
    def test_streaming_era_turn_ends(self, make_state, make_player, stage):
        """Card draws under Streaming Era never keep a turn going forever."""
        player = make_player(stage=stage, time_this_turn=1, money=9, craft=3).with_flags(
            has_rolled_time=True, focus_stat="craft"
        )
        state = make_state(player)._copy_with(
            zeitgeist=ZeitgeistState(current=zg.get_zeitgeist(zg.STREAMING_ERA))
        )
        dice = Dice(5)
        loop = GameLoop(state, Reducer(dice=dice), {"P1": HeuristicPolicy(seed=5)})

        result = loop.play_turn()

        assert loop.state != LoopState.STALLED
        assert result.actions[-1] in ("end_turn", "lay_low") or loop.game_state.is_over
        assert loop.game_state.turn == 2 or loop.game_state.is_over


class TestSimulation:
    """Tests for simulate_game() and simulate_games()."""

    def test_same_seed_same_game(self):
        first = simulate_game(7, config=SHORT_GAME)
        second = simulate_game(7, config=SHORT_GAME)

        assert first == second

    def test_game_record(self):
        record = simulate_game(3, num_players=1, policy="random", config=SHORT_GAME)

        assert record["seed"] == 3
        assert record["status"] == "lost"
        assert record["loss_reason"] == "max_turns"
        assert not record["stalled"]
        assert len(record["players"]) == 1
        assert record["action_counts"]["start_turn"] == 1

    def test_batch_summary(self):
        summary = simulate_games(games=3, players=2, seed_start=10, config=SHORT_GAME)

        assert summary["games"] == 3
        assert [r["seed"] for r in summary["results"]] == [10, 11, 12]
        assert 0.0 <= summary["win_rate"] <= 1.0
        assert summary["avg_turns"] > 0

    @pytest.mark.parametrize("seed", range(1, 13))
    def test_full_games_finish(self, seed):
        record = simulate_game(seed)

        assert record["stalled"] is False
        assert record["status"] in ("won", "lost")

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            simulate_games(games=1, policy="genius")


class TestInvariants:
    """Random play never breaks the state invariants."""

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_random_play(self, seed):
        dice = Dice(seed)
        state = new_game(num_players=3, dice=dice, config={"rules": {"max_turns": 8}})
        reducer = Reducer(dice=dice)
        state = reducer.apply(state, Action.start_turn())
        policies = {p.player_id: RandomPolicy(seed=seed + i) for i, p in enumerate(state.players)}
        loop = GameLoop(state, reducer, policies)

        while loop.state == LoopState.RUNNING:
            index = loop.game_state.active_player_index
            turn = loop.game_state.turn
            loop.play_turn()
            state = loop.game_state

            if loop.state == LoopState.RUNNING:
                assert state.active_player_index == (index + 1) % 3
                assert state.turn == turn + (1 if state.active_player_index == 0 else 0)

            held = [p.job_id for p in state.players if p.job_id]
            assert len(held) == len(set(held))
            assert not set(held) & set(state.job_deck)
            for player in state.players:
                assert min(player.food, player.inspiration, player.craft) >= 0
                assert player.time_this_turn >= 0
                assert player.scandal >= 0
