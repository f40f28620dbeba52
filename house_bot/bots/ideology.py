"""
Ideology and feasibility helpers shared by AI scoring and targeting.

All functions are pure: they read player/seat/policy dicts and return a
number or a bool. Normalized scores are in [0, 1].
"""

from house_bot.rules_consts import (
    MARKET, PROGRESSIVE,
    STANCE_VALUES,
    ECON_IDEOLOGY_TO_BUCKET, SOCIAL_IDEOLOGY_TO_BUCKET,
    VOTER_IMPACT_RANGE, NEUTRAL_POPULARITY,
    BUDGET_FEASIBILITY_MULTIPLE,
)


def stance_to_value(stance):
    """Favoured 1.0, neutral 0.5, opposed 0.0.

    Raises:
        ValueError: If stance is not a known stance label.
    """
    try:
        return STANCE_VALUES[stance]
    except KeyError:
        raise ValueError(f"Unknown stance: {stance!r}") from None


def compute_ideology_match(policy, player):
    """How well a policy matches a player's ideology.

    Reads the policy's stance on the player's social column (progressive
    or conservative) and economic column (market or interventionist)
    and averages their values.

    Args:
        policy: Policy dict with a "stance_table".
        player: Player dict.

    Returns:
        1.0 when both columns are favoured, 0.0 when both are opposed.
    """
    stances = policy["stance_table"]
    if player["social_ideology"] == PROGRESSIVE:
        social_stance = stances["progressive"]
    else:
        social_stance = stances["conservative"]
    if player["economic_ideology"] == MARKET:
        econ_stance = stances["market"]
    else:
        econ_stance = stances["interventionist"]
    return (stance_to_value(social_stance) + stance_to_value(econ_stance)) / 2


def check_seat_ideology_match(player, seat):
    """True if the seat matches the player on EITHER axis.

    Interventionist matches LEFT, market matches RIGHT, progressive
    matches PROG, conservative matches CONS. CENTER buckets never match.
    """
    ideology = seat["ideology"]
    econ_match = (
        ECON_IDEOLOGY_TO_BUCKET.get(player["economic_ideology"])
        == ideology["econ"]
    )
    social_match = (
        SOCIAL_IDEOLOGY_TO_BUCKET.get(player["social_ideology"])
        == ideology["social"]
    )
    return econ_match or social_match


def compute_voter_popularity(policy, voter_groups):
    """Population-weighted popularity of a policy with the voter groups.

    Impacts for groups not present in voter_groups are ignored.

    Args:
        policy: Policy dict; "voter_impacts" is optional.
        voter_groups: List of voter group dicts.

    Returns:
        Mean impact mapped from [-10, 10] to [0, 1] and clamped. 0.5 when
        there is no impact data or no matching population.
    """
    impacts = policy.get("voter_impacts") or []
    if not impacts or not voter_groups:
        return NEUTRAL_POPULARITY

    groups_by_id = {}
    for group in voter_groups:
        # First group wins if ids repeat
        groups_by_id.setdefault(group["id"], group)

    total_weighted = 0.0
    total_population = 0.0
    for impact in impacts:
        group = groups_by_id.get(impact["group_id"])
        if group is None:
            continue
        total_weighted += impact["impact"] * group["population"]
        total_population += group["population"]

    if total_population == 0:
        return NEUTRAL_POPULARITY

    avg_impact = total_weighted / total_population
    normalized = (avg_impact + VOTER_IMPACT_RANGE) / (2 * VOTER_IMPACT_RANGE)
    return max(0.0, min(1.0, normalized))


def compute_budget_feasibility(policy, funds):
    """How affordable a policy is for a player with the given funds.

    Revenue policies (negative cost) are judged on the size of the cost.

    Returns:
        1.0 for free policies; otherwise funds / (5 * |cost|), clamped
        to [0, 1].
    """
    cost = abs(policy.get("budget_cost", 0))
    if cost == 0:
        return 1.0
    ratio = funds / max(cost, 1)
    return max(0.0, min(1.0, ratio / BUDGET_FEASIBILITY_MULTIPLE))
