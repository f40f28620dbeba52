"""
Tests for targeting.py — campaign region, policy, attack and coalition
target selection.
"""

import pytest

from house_bot.rules_consts import (
    MARKET, INTERVENTIONIST, PROGRESSIVE, CONSERVATIVE,
    FAVOURED, OPPOSED,
    ECON_LEFT,
    NSW, VIC, QLD, TAS,
)
from house_bot.state.state_schema import (
    build_initial_state, make_player, make_seat, make_policy,
    make_voter_group,
)
from house_bot.bots.targeting import (
    find_seat_leader,
    get_opponents,
    rank_campaign_regions,
    get_best_campaign_state,
    score_policy,
    pick_best_policy,
    pick_attack_target,
    pick_coalition_target,
)


def _make_state(players=None, seats=None, **kwargs):
    if players is None:
        players = [make_player("A", seats=50), make_player("B", seats=50)]
    return build_initial_state(players, seats, **kwargs)


def _seats(region, count, owner, *, margin=50, start=0, **kwargs):
    return [
        make_seat(f"{region}-{start + i}", region, margin=margin,
                  owner=owner, **kwargs)
        for i in range(count)
    ]


# ===================================================================
# Seat leader / opponents
# ===================================================================

class TestFindSeatLeader:

    def test_most_seats(self):
        state = _make_state([make_player("A", seats=10),
                             make_player("B", seats=30),
                             make_player("C", seats=20)])
        assert find_seat_leader(state)["id"] == "B"

    def test_tie_keeps_first(self):
        state = _make_state([make_player("A", seats=30),
                             make_player("B", seats=30)])
        assert find_seat_leader(state)["id"] == "A"

    def test_no_players(self):
        assert find_seat_leader(_make_state([])) is None


class TestGetOpponents:

    def test_excludes_self_keeps_order(self):
        players = [make_player("A"), make_player("B"), make_player("C")]
        state = _make_state(players)
        assert [p["id"] for p in get_opponents(players[1], state)] == ["A", "C"]


# ===================================================================
# Campaign region
# ===================================================================

class TestBestCampaignState:

    def test_picks_region_with_flippable_seats(self):
        seats = _seats(NSW, 4, "A") + _seats(VIC, 2, "B", margin=10)
        state = _make_state(seats=seats)
        player = state["players"][0]
        assert get_best_campaign_state(player, state) == VIC

    def test_skips_dominated_region(self):
        """80% owned: skipped even though its flippable seat is softer."""
        seats = (_seats(NSW, 4, "A")
                 + _seats(NSW, 1, "B", margin=0, start=4)
                 + _seats(VIC, 1, "B", margin=90))
        state = _make_state(seats=seats)
        player = state["players"][0]
        assert get_best_campaign_state(player, state) == VIC
        assert [r for r, _ in rank_campaign_regions(player, state)] == [VIC]

    def test_exactly_three_quarters_not_skipped(self):
        seats = (_seats(NSW, 3, "A")
                 + _seats(NSW, 1, "B", margin=0, start=3)
                 + _seats(VIC, 1, "B", margin=90))
        state = _make_state(seats=seats)
        player = state["players"][0]
        assert get_best_campaign_state(player, state) == NSW

    def test_vacant_seats_not_flippable(self):
        seats = _seats(QLD, 3, None)
        state = _make_state(seats=seats)
        player = state["players"][0]
        assert rank_campaign_regions(player, state) == []
        assert get_best_campaign_state(player, state) == NSW

    def test_fallback_when_no_seats(self):
        state = _make_state(seats=[])
        assert get_best_campaign_state(state["players"][0], state) == NSW

    def test_fallback_when_player_owns_everything(self):
        seats = _seats(VIC, 3, "A") + _seats(TAS, 2, "A")
        state = _make_state(seats=seats)
        assert get_best_campaign_state(state["players"][0], state) == NSW

    def test_score_components(self):
        """2 flippable, avg margin 20, +10 influence, 1 of 2 matching,
        one leaning group."""
        players = [
            make_player("A", economic_ideology=INTERVENTIONIST,
                        social_ideology=PROGRESSIVE,
                        campaign_influence={VIC: 15}),
            make_player("B", economic_ideology=MARKET,
                        social_ideology=CONSERVATIVE,
                        campaign_influence={VIC: 5}),
        ]
        seats = [
            make_seat("v1", VIC, margin=10, econ=ECON_LEFT, owner="B"),
            make_seat("v2", VIC, margin=30, owner="B"),
        ]
        groups = [make_voter_group("g1", leaning_party_id="A"),
                  make_voter_group("g2", leaning_party_id="B")]
        state = _make_state(players, seats, voter_groups=groups)
        ranked = rank_campaign_regions(players[0], state)
        expected = (2 / 20) * 3 + 0.8 * 2 + 0.5 * 1.5 + 0.5 * 1 + 0.1
        assert len(ranked) == 1
        region, score = ranked[0]
        assert region == VIC
        assert score == pytest.approx(expected)

    def test_influence_gap_breaks_otherwise_equal_regions(self):
        players = [make_player("A", campaign_influence={QLD: 40}),
                   make_player("B")]
        seats = _seats(NSW, 2, "B") + _seats(QLD, 2, "B")
        state = _make_state(players, seats)
        assert get_best_campaign_state(players[0], state) == QLD

    def test_opponent_influence_counts_against(self):
        players = [make_player("A"),
                   make_player("B", campaign_influence={NSW: 40})]
        seats = _seats(NSW, 2, "B") + _seats(QLD, 2, "B")
        state = _make_state(players, seats)
        assert get_best_campaign_state(players[0], state) == QLD

    def test_equal_regions_keep_scan_order(self):
        seats = _seats(TAS, 2, "B") + _seats(VIC, 2, "B")
        state = _make_state(seats=seats)
        assert get_best_campaign_state(state["players"][0], state) == VIC


# ===================================================================
# Policy
# ===================================================================

class TestPickBestPolicy:

    def _player(self, funds=0):
        return make_player("A", funds=funds, economic_ideology=INTERVENTIONIST,
                           social_ideology=PROGRESSIVE)

    def test_highest_score(self):
        good = make_policy("good", progressive=FAVOURED,
                           interventionist=FAVOURED)
        bad = make_policy("bad", progressive=OPPOSED, interventionist=OPPOSED)
        player = self._player()
        state = _make_state([player], policy_menu=[bad, good])
        policy, score = pick_best_policy(player, state)
        assert policy["id"] == "good"
        # 1.0*3 + 0.5*2 + 1.0*1
        assert score == pytest.approx(5.0)
        assert score == score_policy(good, player, state)

    def test_excludes_active(self):
        good = make_policy("good", progressive=FAVOURED)
        other = make_policy("other")
        player = self._player()
        state = _make_state([player], policy_menu=[good, other],
                            active_policies=[good])
        policy, _ = pick_best_policy(player, state)
        assert policy["id"] == "other"

    def test_excludes_proposed(self):
        good = make_policy("good", progressive=FAVOURED)
        other = make_policy("other")
        player = self._player()
        state = _make_state([player], policy_menu=[good, other])
        policy, _ = pick_best_policy(player, state, {"good"})
        assert policy["id"] == "other"

    def test_none_when_exhausted(self):
        p = make_policy("p")
        player = self._player()
        state = _make_state([player], policy_menu=[p], active_policies=[p])
        assert pick_best_policy(player, state) is None
        assert pick_best_policy(player, _make_state([player])) is None

    def test_tie_keeps_first_encountered(self):
        first = make_policy("first", progressive=FAVOURED, budget_cost=5,
                            voter_impacts={"g1": 3})
        second = make_policy("second", progressive=FAVOURED, budget_cost=5,
                             voter_impacts={"g1": 3})
        player = self._player(funds=10)
        groups = [make_voter_group("g1")]
        state = _make_state([player], policy_menu=[first, second],
                            voter_groups=groups)
        assert pick_best_policy(player, state)[0]["id"] == "first"
        state = _make_state([player], policy_menu=[second, first],
                            voter_groups=groups)
        assert pick_best_policy(player, state)[0]["id"] == "second"

    def test_budget_feasibility_uses_funds(self):
        cheap = make_policy("cheap", budget_cost=0)
        pricey = make_policy("pricey", budget_cost=100)
        player = self._player(funds=10)
        state = _make_state([player], policy_menu=[pricey, cheap])
        assert pick_best_policy(player, state)[0]["id"] == "cheap"


# ===================================================================
# Attack target
# ===================================================================

class TestPickAttackTarget:

    def test_close_rival(self):
        players = [make_player("A", seats=50), make_player("B", seats=55),
                   make_player("C", seats=80)]
        state = _make_state(players, government_leader_id="C")
        assert pick_attack_target(players[0], state)["id"] == "B"

    def test_government_leader_when_no_close_rival(self):
        players = [make_player("A", seats=50), make_player("B", seats=70),
                   make_player("C", seats=100)]
        state = _make_state(players, government_leader_id="C")
        assert pick_attack_target(players[0], state)["id"] == "C"

    def test_closest_when_no_government_leader(self):
        players = [make_player("A", seats=50), make_player("B", seats=70),
                   make_player("C", seats=100)]
        state = _make_state(players)
        assert pick_attack_target(players[0], state)["id"] == "B"

    def test_closest_when_self_leads_government(self):
        players = [make_player("A", seats=50), make_player("B", seats=100),
                   make_player("C", seats=70)]
        state = _make_state(players, government_leader_id="A")
        assert pick_attack_target(players[0], state)["id"] == "C"

    def test_boundary_ten_seats_is_close(self):
        players = [make_player("A", seats=50), make_player("B", seats=60),
                   make_player("C", seats=100)]
        state = _make_state(players, government_leader_id="C")
        assert pick_attack_target(players[0], state)["id"] == "B"

    def test_equal_distance_keeps_snapshot_order(self):
        players = [make_player("A", seats=50), make_player("B", seats=60),
                   make_player("C", seats=40)]
        state = _make_state(players)
        assert pick_attack_target(players[0], state)["id"] == "B"

    def test_no_opponents(self):
        player = make_player("A")
        assert pick_attack_target(player, _make_state([player])) is None


# ===================================================================
# Coalition target
# ===================================================================

class TestPickCoalitionTarget:

    def test_ideology_outweighs_seats(self):
        players = [
            make_player("A", economic_ideology=MARKET,
                        social_ideology=CONSERVATIVE),
            make_player("B", seats=100, economic_ideology=INTERVENTIONIST,
                        social_ideology=PROGRESSIVE),
            make_player("C", seats=5, economic_ideology=MARKET,
                        social_ideology=CONSERVATIVE),
        ]
        state = _make_state(players, total_seats=151)
        assert pick_coalition_target(players[0], state)["id"] == "C"

    def test_seats_break_equal_ideology(self):
        players = [make_player("A"), make_player("B", seats=10),
                   make_player("C", seats=40)]
        state = _make_state(players, total_seats=151)
        assert pick_coalition_target(players[0], state)["id"] == "C"

    def test_full_tie_keeps_first(self):
        players = [make_player("A"), make_player("B", seats=10),
                   make_player("C", seats=10)]
        state = _make_state(players)
        assert pick_coalition_target(players[0], state)["id"] == "B"

    def test_no_opponents(self):
        player = make_player("A")
        assert pick_coalition_target(player, _make_state([player])) is None
