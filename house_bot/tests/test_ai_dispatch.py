"""
Tests for ai_dispatch.py — AI player ordering, single-turn routing and
whole-round planning with a shared seeded RNG.
"""

import copy
import random

import pytest

from house_bot.rules_consts import (
    CAMPAIGNER, POLICY_WONK, POPULIST,
    FAVOURED, ECON_LEFT, NSW, VIC,
)
from house_bot.config import merge_config
from house_bot.state.state_schema import (
    build_initial_state, make_player, make_seat, make_policy,
)
from house_bot.bots.actions import FundraiseAction
from house_bot.bots.ai_engine import AIEngine
from house_bot.bots.ai_dispatch import (
    get_ai_player_order,
    dispatch_ai_turn,
    plan_ai_round,
    AIDispatchError,
)


def _make_state():
    players = [
        make_player("human", seats=40, funds=30),
        make_player("ai1", seats=35, funds=25, ai_strategy=CAMPAIGNER,
                    is_ai=True),
        make_player("ai2", seats=20, funds=0, ai_strategy=POLICY_WONK,
                    is_ai=True),
        make_player("ai3", seats=10, funds=50, ai_strategy=POPULIST,
                    approval=-30, is_ai=True),
    ]
    seats = [make_seat(f"s{i}", (NSW, VIC)[i % 2], margin=i * 9 % 100,
                       econ=ECON_LEFT, owner=players[i % 4]["id"])
             for i in range(20)]
    menu = [make_policy("p1", progressive=FAVOURED),
            make_policy("p2", interventionist=FAVOURED, budget_cost=12)]
    return build_initial_state(players, seats, policy_menu=menu,
                               total_seats=105, government_leader_id="human",
                               round_number=4)


class TestAIPlayerOrder:

    def test_snapshot_order_ai_only(self):
        assert get_ai_player_order(_make_state()) == ["ai1", "ai2", "ai3"]

    def test_no_ai_players(self):
        state = build_initial_state([make_player("h1"), make_player("h2")])
        assert get_ai_player_order(state) == []


class TestDispatchAITurn:

    def test_routes_to_engine(self):
        state = _make_state()
        config = merge_config()
        actions = dispatch_ai_turn(state, "ai2", config, random.Random(1))
        expected = AIEngine(random.Random(1)).choose_actions(
            state["players"][2], state, config)
        assert actions == expected

    def test_unknown_player(self):
        with pytest.raises(AIDispatchError, match="Unknown player"):
            dispatch_ai_turn(_make_state(), "ghost", merge_config(),
                             random.Random(1))

    def test_human_player_rejected(self):
        with pytest.raises(AIDispatchError, match="not AI-controlled"):
            dispatch_ai_turn(_make_state(), "human", merge_config(),
                             random.Random(1))


class TestPlanAIRound:

    def test_plans_every_ai_player_in_order(self):
        state = _make_state()
        plans = plan_ai_round(state, merge_config(), random.Random(8))
        assert list(plans) == ["ai1", "ai2", "ai3"]
        for actions in plans.values():
            assert len(actions) <= 3

    def test_matches_sequential_engine_calls(self):
        state = _make_state()
        config = merge_config({"actions_per_round": 4})
        plans = plan_ai_round(state, config, random.Random(21))

        rng = random.Random(21)
        engine = AIEngine(rng)
        expected = {
            pid: engine.choose_actions(p, state, config)
            for pid, p in (("ai1", state["players"][1]),
                           ("ai2", state["players"][2]),
                           ("ai3", state["players"][3]))
        }
        assert plans == expected

    def test_replayable(self):
        state = _make_state()
        config = merge_config({"ai_difficulty": "easy"})
        first = plan_ai_round(state, config, random.Random(5))
        second = plan_ai_round(state, config, random.Random(5))
        assert first == second

    def test_snapshot_untouched(self):
        state = _make_state()
        before = copy.deepcopy(state)
        plan_ai_round(state, merge_config(), random.Random(3))
        assert state == before

    def test_broke_wonk_with_no_policies_fundraises(self):
        state = _make_state()
        state["policy_menu"] = []
        plans = plan_ai_round(state, merge_config(), random.Random(2))
        assert plans["ai2"] == [FundraiseAction()] * 3
