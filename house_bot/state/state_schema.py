"""
State schema module — Game state snapshot handed to the AI engine.

The round controller owns the live game state. Before AI planning it hands
the engine a snapshot with the shape built here. The engine reads the
snapshot and never writes to it.

Snapshot keys:
    players              list of player dicts, in evaluation order
    seats                dict of seat id -> seat dict
    policy_menu          list of policy dicts that may be proposed
    active_policies      list of {"policy": policy dict, ...} records
    voter_groups         list of voter group dicts
    total_seats          int
    government_leader_id player id or None
    round                int
"""

import math

from house_bot.rules_consts import (
    AI_STRATEGIES, DEFAULT_AI_STRATEGY,
    ECONOMIC_IDEOLOGIES, SOCIAL_IDEOLOGIES,
    INTERVENTIONIST, PROGRESSIVE,
    ECON_BUCKETS, SOCIAL_BUCKETS, ECON_CENTER, SOCIAL_CENTER,
    STANCES, NEUTRAL,
    ALL_REGIONS,
    APPROVAL_MIN, APPROVAL_MAX, MARGIN_MAX,
    DEFAULT_TOTAL_SEATS,
)


class StateError(ValueError):
    """Raised when a snapshot value cannot be planned against."""
    pass


# ============================================================================
# BUILDERS
# ============================================================================

def make_player(player_id, *, name=None, seats=0, approval=0, funds=0,
                economic_ideology=INTERVENTIONIST,
                social_ideology=PROGRESSIVE, campaign_influence=None,
                ai_strategy=None, is_ai=False):
    """Build a player dict.

    ai_strategy None means "unset"; the engine treats it as pragmatist.
    """
    return {
        "id": player_id,
        "name": name or player_id,
        "seats": seats,
        "approval": approval,
        "funds": funds,
        "economic_ideology": economic_ideology,
        "social_ideology": social_ideology,
        "campaign_influence": dict(campaign_influence or {}),
        "ai_strategy": ai_strategy,
        "is_ai": is_ai,
    }


def make_seat(seat_id, region, *, margin=50, econ=ECON_CENTER,
              social=SOCIAL_CENTER, owner=None):
    """Build a seat dict."""
    return {
        "id": seat_id,
        "state": region,
        "margin": margin,
        "ideology": {"econ": econ, "social": social},
        "owner_player_id": owner,
    }


def make_policy(policy_id, *, name=None, progressive=NEUTRAL,
                conservative=NEUTRAL, market=NEUTRAL,
                interventionist=NEUTRAL, budget_cost=0, voter_impacts=None):
    """Build a policy dict.

    voter_impacts: optional mapping of voter group id -> impact in [-10, 10].
    """
    policy = {
        "id": policy_id,
        "name": name or policy_id,
        "stance_table": {
            "progressive": progressive,
            "conservative": conservative,
            "market": market,
            "interventionist": interventionist,
        },
        "budget_cost": budget_cost,
    }
    if voter_impacts is not None:
        policy["voter_impacts"] = [
            {"group_id": group_id, "impact": impact}
            for group_id, impact in voter_impacts.items()
        ]
    return policy


def make_voter_group(group_id, *, population=1.0, leaning_party_id=None):
    """Build a voter group state dict."""
    return {
        "id": group_id,
        "population": population,
        "leaning_party_id": leaning_party_id,
    }


def build_initial_state(players=None, seats=None, *, policy_menu=None,
                        active_policies=None, voter_groups=None,
                        total_seats=None, government_leader_id=None,
                        round_number=1):
    """Create a snapshot dict from its parts.

    Args:
        players: List of player dicts (evaluation order is list order).
        seats: Iterable of seat dicts; keyed by seat id in the snapshot.
        policy_menu: List of policy dicts available to propose.
        active_policies: List of policy dicts already in force. Each is
            wrapped in an {"policy": ...} record.
        voter_groups: List of voter group dicts.
        total_seats: Chamber size. Defaults to the number of seats given,
            or 151 if none were given.
        government_leader_id: Player id of the government leader, or None.
        round_number: Current round.

    Returns:
        Snapshot dict.
    """
    seat_map = {}
    for seat in seats or []:
        seat_map[seat["id"]] = seat

    if total_seats is None:
        total_seats = len(seat_map) or DEFAULT_TOTAL_SEATS

    return {
        "players": list(players or []),
        "seats": seat_map,
        "policy_menu": list(policy_menu or []),
        "active_policies": [
            {"policy": policy} for policy in (active_policies or [])
        ],
        "voter_groups": list(voter_groups or []),
        "total_seats": total_seats,
        "government_leader_id": government_leader_id,
        "round": round_number,
    }


# ============================================================================
# VALIDATION
# ============================================================================

def _finite(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (math.isnan(value) or math.isinf(value))


def validate_player(player):
    """Reject player values the engine cannot score.

    Raises:
        StateError: If funds are negative, NaN or infinite, or the AI
            strategy label is unknown.
    """
    funds = player.get("funds")
    if not _finite(funds):
        raise StateError(
            f"Player '{player.get('id')}' funds must be a finite number, "
            f"got {funds!r}"
        )
    if funds < 0:
        raise StateError(
            f"Player '{player.get('id')}' funds must be >= 0, got {funds}"
        )
    strategy = player.get("ai_strategy") or DEFAULT_AI_STRATEGY
    if strategy not in AI_STRATEGIES:
        raise StateError(
            f"Player '{player.get('id')}' has unknown ai_strategy "
            f"'{strategy}'. Valid: {AI_STRATEGIES}"
        )


def validate_state(state):
    """Validate snapshot integrity.

    Checks player fields, seat fields and policy stance tables against
    the canonical labels.

    Args:
        state: Snapshot dict.

    Returns:
        List of error strings. Empty list means valid.
    """
    errors = []

    player_ids = set()
    for player in state.get("players", []):
        pid = player.get("id")
        if pid in player_ids:
            errors.append(f"Duplicate player id '{pid}'")
        player_ids.add(pid)
        try:
            validate_player(player)
        except StateError as exc:
            errors.append(str(exc))
        approval = player.get("approval", 0)
        if not _finite(approval) or not APPROVAL_MIN <= approval <= APPROVAL_MAX:
            errors.append(
                f"Player '{pid}' approval {approval!r} outside "
                f"[{APPROVAL_MIN}, {APPROVAL_MAX}]"
            )
        if player.get("economic_ideology") not in ECONOMIC_IDEOLOGIES:
            errors.append(
                f"Player '{pid}' economic_ideology "
                f"{player.get('economic_ideology')!r} unknown"
            )
        if player.get("social_ideology") not in SOCIAL_IDEOLOGIES:
            errors.append(
                f"Player '{pid}' social_ideology "
                f"{player.get('social_ideology')!r} unknown"
            )

    for seat_id, seat in state.get("seats", {}).items():
        if seat.get("state") not in ALL_REGIONS:
            errors.append(f"Seat '{seat_id}' region {seat.get('state')!r} unknown")
        margin = seat.get("margin")
        if not _finite(margin) or not 0 <= margin <= MARGIN_MAX:
            errors.append(
                f"Seat '{seat_id}' margin {margin!r} outside [0, {MARGIN_MAX}]"
            )
        ideology = seat.get("ideology", {})
        if ideology.get("econ") not in ECON_BUCKETS:
            errors.append(f"Seat '{seat_id}' econ bucket {ideology.get('econ')!r} unknown")
        if ideology.get("social") not in SOCIAL_BUCKETS:
            errors.append(f"Seat '{seat_id}' social bucket {ideology.get('social')!r} unknown")
        owner = seat.get("owner_player_id")
        if owner is not None and owner not in player_ids:
            errors.append(f"Seat '{seat_id}' owned by unknown player '{owner}'")

    for policy in state.get("policy_menu", []):
        for column, stance in policy.get("stance_table", {}).items():
            if stance not in STANCES:
                errors.append(
                    f"Policy '{policy.get('id')}' {column} stance "
                    f"{stance!r} unknown"
                )
        if not _finite(policy.get("budget_cost", 0)):
            errors.append(
                f"Policy '{policy.get('id')}' budget_cost "
                f"{policy.get('budget_cost')!r} is not a finite number"
            )

    return errors
