"""
Target selection for AI actions.

Each picker reads the snapshot and returns where or at whom an action
should be aimed: the region to campaign in, the policy to propose, the
opponent to attack, the opponent to court. Ties always keep the
earlier candidate (strict > comparison over a fixed scan order).
"""

from house_bot.rules_consts import (
    ALL_REGIONS, FALLBACK_CAMPAIGN_REGION,
    DEFAULT_TOTAL_SEATS,
    CAMPAIGN_DOMINANCE_THRESHOLD,
    CAMPAIGN_SEAT_COUNT_DIVISOR, CAMPAIGN_SEAT_COUNT_WEIGHT,
    CAMPAIGN_MARGINALITY_WEIGHT, MARGIN_MAX,
    CAMPAIGN_INFLUENCE_DIVISOR, CAMPAIGN_INFLUENCE_WEIGHT,
    CAMPAIGN_MATCH_WEIGHT, CAMPAIGN_SATISFACTION_BONUS,
    POLICY_IDEOLOGY_WEIGHT, POLICY_POPULARITY_WEIGHT,
    POLICY_FEASIBILITY_WEIGHT,
    ATTACK_CLOSE_RACE_SEATS,
    COALITION_TARGET_AXIS_POINTS,
)
from house_bot.bots.ideology import (
    check_seat_ideology_match, compute_ideology_match,
    compute_voter_popularity, compute_budget_feasibility,
)


# ============================================================================
# SNAPSHOT QUERIES
# ============================================================================

def get_opponents(player, state):
    """Every other player, in snapshot order."""
    return [p for p in state["players"] if p["id"] != player["id"]]


def is_flippable(seat, player):
    """A seat held by someone other than the player (vacant seats are not)."""
    owner = seat["owner_player_id"]
    return owner is not None and owner != player["id"]


def get_flippable_seats(player, seats):
    return [s for s in seats if is_flippable(s, player)]


def count_leaning_groups(player, state):
    """Number of voter groups currently leaning toward the player."""
    return sum(
        1 for g in state["voter_groups"]
        if g.get("leaning_party_id") == player["id"]
    )


def get_total_seats(state):
    """Chamber size, defaulting to 151 when the snapshot has none."""
    return state.get("total_seats") or DEFAULT_TOTAL_SEATS


def get_active_policy_ids(state):
    return {record["policy"]["id"] for record in state["active_policies"]}


def find_seat_leader(state):
    """The player with the most seats; the earlier player wins ties.

    Returns:
        Player dict, or None if the snapshot has no players.
    """
    leader = None
    for p in state["players"]:
        if leader is None or p["seats"] > leader["seats"]:
            leader = p
    return leader


# ============================================================================
# CAMPAIGN REGION
# ============================================================================

def _score_campaign_region(player, state, flippable, leaning_groups):
    """Score one region given its flippable seats."""
    avg_margin = sum(s["margin"] for s in flippable) / len(flippable)
    marginality_score = (MARGIN_MAX - avg_margin) / MARGIN_MAX

    region = flippable[0]["state"]
    my_influence = player["campaign_influence"].get(region, 0)
    opponent_influences = [
        p["campaign_influence"].get(region, 0)
        for p in get_opponents(player, state)
    ]
    max_opponent_influence = max(opponent_influences, default=0)
    influence_gap = my_influence - max_opponent_influence
    influence_score = max(-1.0, min(1.0,
                                    influence_gap / CAMPAIGN_INFLUENCE_DIVISOR))

    seat_count_score = len(flippable) / CAMPAIGN_SEAT_COUNT_DIVISOR

    matches = sum(1 for s in flippable if check_seat_ideology_match(player, s))
    ideology_score = matches / len(flippable)

    satisfaction_bonus = leaning_groups * CAMPAIGN_SATISFACTION_BONUS

    return (
        seat_count_score * CAMPAIGN_SEAT_COUNT_WEIGHT
        + marginality_score * CAMPAIGN_MARGINALITY_WEIGHT
        + influence_score * CAMPAIGN_INFLUENCE_WEIGHT
        + ideology_score * CAMPAIGN_MATCH_WEIGHT
        + satisfaction_bonus
    )


def rank_campaign_regions(player, state):
    """Score every region the player could usefully campaign in.

    Regions are skipped when they have no seats, when the player already
    owns more than 75% of them, or when none of them is flippable.

    Args:
        player: Acting player dict.
        state: Snapshot dict.

    Returns:
        List of (region, score) in region scan order.
    """
    seats_by_region = {region: [] for region in ALL_REGIONS}
    for seat in state["seats"].values():
        if seat["state"] in seats_by_region:
            seats_by_region[seat["state"]].append(seat)

    leaning_groups = count_leaning_groups(player, state)

    ranked = []
    for region in ALL_REGIONS:
        region_seats = seats_by_region[region]
        if not region_seats:
            continue
        owned = sum(1 for s in region_seats
                    if s["owner_player_id"] == player["id"])
        if owned / len(region_seats) > CAMPAIGN_DOMINANCE_THRESHOLD:
            continue
        flippable = get_flippable_seats(player, region_seats)
        if not flippable:
            continue
        score = _score_campaign_region(player, state, flippable,
                                       leaning_groups)
        ranked.append((region, score))
    return ranked


def get_best_campaign_state(player, state):
    """Region code with the highest campaign score.

    Returns:
        Region code; NSW if no region qualifies.
    """
    best_region = FALLBACK_CAMPAIGN_REGION
    best_score = float("-inf")
    for region, score in rank_campaign_regions(player, state):
        if score > best_score:
            best_score = score
            best_region = region
    return best_region


# ============================================================================
# POLICY
# ============================================================================

def score_policy(policy, player, state):
    """ideologyMatch*3 + voterPopularity*2 + budgetFeasibility*1."""
    return (
        compute_ideology_match(policy, player) * POLICY_IDEOLOGY_WEIGHT
        + compute_voter_popularity(policy, state["voter_groups"])
        * POLICY_POPULARITY_WEIGHT
        + compute_budget_feasibility(policy, player["funds"])
        * POLICY_FEASIBILITY_WEIGHT
    )


def pick_best_policy(player, state, proposed_policy_ids=frozenset()):
    """Best policy on the menu that is neither active nor already proposed.

    Args:
        player: Acting player dict.
        state: Snapshot dict.
        proposed_policy_ids: Ids already chosen earlier in this plan.

    Returns:
        (policy, score), or None if no policy is eligible. The
        first-seen policy wins ties.
    """
    active_ids = get_active_policy_ids(state)
    best_policy = None
    best_score = float("-inf")
    for policy in state["policy_menu"]:
        if policy["id"] in active_ids or policy["id"] in proposed_policy_ids:
            continue
        score = score_policy(policy, player, state)
        if score > best_score:
            best_score = score
            best_policy = policy
    if best_policy is None:
        return None
    return best_policy, best_score


# ============================================================================
# OPPONENTS
# ============================================================================

def pick_attack_target(player, state):
    """Opponent to run attack ads against.

    The closest opponent in seats if within 10; otherwise the government
    leader if that is an opponent; otherwise the closest opponent.

    Returns:
        Player dict, or None if there are no opponents.
    """
    opponents = get_opponents(player, state)
    if not opponents:
        return None

    # sorted() is stable: equal distances keep snapshot order
    by_proximity = sorted(
        opponents, key=lambda p: abs(p["seats"] - player["seats"]))
    closest = by_proximity[0]

    if abs(closest["seats"] - player["seats"]) <= ATTACK_CLOSE_RACE_SEATS:
        return closest

    gov_id = state.get("government_leader_id")
    if gov_id is not None and gov_id != player["id"]:
        for p in opponents:
            if p["id"] == gov_id:
                return p

    return closest


def pick_coalition_target(player, state):
    """Most compatible opponent: 2 points per shared axis plus seat share.

    Returns:
        Player dict, or None if there are no opponents.
    """
    total_seats = get_total_seats(state)
    best = None
    best_score = float("-inf")
    for opp in get_opponents(player, state):
        score = 0
        if opp["economic_ideology"] == player["economic_ideology"]:
            score += COALITION_TARGET_AXIS_POINTS
        if opp["social_ideology"] == player["social_ideology"]:
            score += COALITION_TARGET_AXIS_POINTS
        score += opp["seats"] / total_seats
        if score > best_score:
            best_score = score
            best = opp
    return best
