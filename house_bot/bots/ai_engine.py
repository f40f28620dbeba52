"""
AI decision engine — plans one round of actions for a non-human player.

choose_actions() is the single public entry point. Each call:

  1. resolves the player's strategy weight row,
  2. adjusts it to the current situation (pragmatist, populist),
  3. repeats up to actions_per_round times: offer every affordable
     candidate, score each with its utility formula, the strategy weight
     and difficulty noise, take the best, deduct its cost from the
     remaining budget and remember any proposed policy.

The snapshot is never written to. The only side effect is drawing from the
injected random source, one draw per candidate offered, so a seeded source
replays the same plan.
"""

import logging

from house_bot.rules_consts import (
    DEFAULT_AI_STRATEGY,
    PRAGMATIST, POPULIST,
    STRATEGY_WEIGHTS, DIFFICULTY_NOISE,
    ACTION_CAMPAIGN, ACTION_PROPOSE_POLICY, ACTION_ATTACK_AD,
    ACTION_FUNDRAISE, ACTION_MEDIA_BLITZ, ACTION_COALITION_TALK,
    APPROVAL_MIN, APPROVAL_MAX,
    PRAGMATIST_URGENCY_DIVISOR, PRAGMATIST_URGENCY_CAP,
    PRAGMATIST_LEAD_POLICY_MULT, PRAGMATIST_LEAD_COALITION_MULT,
    PRAGMATIST_LEAD_CAMPAIGN_MULT,
    POPULIST_CAMPAIGN_BASE, POPULIST_CAMPAIGN_SLOPE,
    POPULIST_MEDIA_BASE, POPULIST_MEDIA_SLOPE, POPULIST_GROUP_BONUS,
    MARGINAL_SEAT_THRESHOLD,
    CAMPAIGN_MARGINAL_WEIGHT, CAMPAIGN_IDEOLOGY_WEIGHT,
    CAMPAIGN_APPROVAL_WEIGHT, CAMPAIGN_SATISFACTION_WEIGHT,
    CAMPAIGN_DIVISOR,
    ATTACK_CLOSENESS_WEIGHT, ATTACK_GOV_WEIGHT, ATTACK_APPROVAL_WEIGHT,
    ATTACK_DIVISOR, ATTACK_CLOSENESS_RANGE, ATTACK_GOV_BONUS,
    FUNDRAISE_HEALTHY_CAMPAIGNS,
    INVERSE_UTILITY_FLOOR, INVERSE_UTILITY_MIN, INVERSE_UTILITY_MAX,
    COALITION_IDEOLOGY_WEIGHT, COALITION_NEED_WEIGHT, COALITION_SEAT_WEIGHT,
    COALITION_DIVISOR,
    COALITION_BOTH_AXES, COALITION_ONE_AXIS, COALITION_NO_AXIS,
    COALITION_NEED_WHEN_LEADING, COALITION_NEED_OTHERWISE,
)
from house_bot.config import validate_config, get_difficulty
from house_bot.state.state_schema import validate_player
from house_bot.bots.actions import (
    CampaignAction, ProposePolicyAction, AttackAdAction,
    FundraiseAction, MediaBlitzAction, CoalitionTalkAction,
    ActionCandidate,
)
from house_bot.bots.ideology import check_seat_ideology_match
from house_bot.bots.targeting import (
    get_best_campaign_state, pick_best_policy, pick_attack_target,
    pick_coalition_target, find_seat_leader, get_flippable_seats,
    count_leaning_groups, get_total_seats,
)


_log = logging.getLogger("house_bot.ai_engine")


def normalize_approval(approval):
    """Approval in [-100, 100] mapped to [0, 1]."""
    return (approval - APPROVAL_MIN) / (APPROVAL_MAX - APPROVAL_MIN)


def _inverse_utility(ratio):
    """1 / ratio with the ratio floored at 0.1, clamped to [0.1, 3]."""
    return max(INVERSE_UTILITY_MIN,
               min(INVERSE_UTILITY_MAX,
                   1 / max(ratio, INVERSE_UTILITY_FLOOR)))


# ============================================================================
# UTILITY FORMULAS
# ============================================================================

def compute_campaign_utility(player, state):
    """Campaign utility from seat targets, approval and voter leaning.

    (marginalRatio*3 + ideologyRatio*2.5 + approvalFactor*2
     + satisfactionFactor*1.5) / 3

    Returns 0 when no seat is flippable.
    """
    flippable = get_flippable_seats(player, state["seats"].values())
    if not flippable:
        return 0

    marginal = sum(1 for s in flippable if s["margin"] < MARGINAL_SEAT_THRESHOLD)
    marginal_ratio = marginal / len(flippable)

    aligned = sum(1 for s in flippable if check_seat_ideology_match(player, s))
    ideology_ratio = aligned / len(flippable)

    approval_factor = normalize_approval(player["approval"])

    total_groups = max(len(state["voter_groups"]), 1)
    satisfaction_factor = count_leaning_groups(player, state) / total_groups

    return (
        marginal_ratio * CAMPAIGN_MARGINAL_WEIGHT
        + ideology_ratio * CAMPAIGN_IDEOLOGY_WEIGHT
        + approval_factor * CAMPAIGN_APPROVAL_WEIGHT
        + satisfaction_factor * CAMPAIGN_SATISFACTION_WEIGHT
    ) / CAMPAIGN_DIVISOR


def compute_attack_utility(player, target, state):
    """Attack utility: close races, the government leader and a popular
    target make attacks worth more."""
    seat_diff = abs(target["seats"] - player["seats"])
    closeness_score = max(0, 1 - seat_diff / ATTACK_CLOSENESS_RANGE)

    is_gov_leader = target["id"] == state.get("government_leader_id")
    gov_bonus = ATTACK_GOV_BONUS if is_gov_leader else 0

    target_approval_score = normalize_approval(target["approval"])

    return (
        closeness_score * ATTACK_CLOSENESS_WEIGHT
        + gov_bonus * ATTACK_GOV_WEIGHT
        + target_approval_score * ATTACK_APPROVAL_WEIGHT
    ) / ATTACK_DIVISOR


def compute_fundraise_utility(player, config):
    """High when funds are low relative to three campaigns' worth."""
    healthy_funds = config["campaign_cost"] * FUNDRAISE_HEALTHY_CAMPAIGNS
    funds_ratio = player["funds"] / max(healthy_funds, 1)
    return _inverse_utility(funds_ratio)


def compute_media_blitz_utility(player):
    """High when approval is low."""
    return _inverse_utility(normalize_approval(player["approval"]))


def compute_coalition_utility(player, target, state):
    """Coalition utility from ideology fit, need for allies and the
    target's seat share."""
    same_econ = player["economic_ideology"] == target["economic_ideology"]
    same_social = player["social_ideology"] == target["social_ideology"]
    if same_econ and same_social:
        ideology_score = COALITION_BOTH_AXES
    elif same_econ or same_social:
        ideology_score = COALITION_ONE_AXIS
    else:
        ideology_score = COALITION_NO_AXIS

    if state.get("government_leader_id") == player["id"]:
        need_allies = COALITION_NEED_WHEN_LEADING
    else:
        need_allies = COALITION_NEED_OTHERWISE

    target_seat_weight = target["seats"] / get_total_seats(state)

    return (
        ideology_score * COALITION_IDEOLOGY_WEIGHT
        + need_allies * COALITION_NEED_WEIGHT
        + target_seat_weight * COALITION_SEAT_WEIGHT
    ) / COALITION_DIVISOR


# ============================================================================
# ENGINE
# ============================================================================

class AIEngine:
    """Plans actions for AI players.

    Args:
        rng: Random source exposing random() -> [0, 1). random.Random
            works; share one per game for replayable rounds.
        strategy_weights: Strategy -> action kind -> weight table.
        difficulty_noise: Difficulty -> noise magnitude table.
    """

    def __init__(self, rng, strategy_weights=STRATEGY_WEIGHTS,
                 difficulty_noise=DIFFICULTY_NOISE):
        self.rng = rng
        self.strategy_weights = strategy_weights
        self.difficulty_noise = difficulty_noise

    def choose_actions(self, player, state, config):
        """Choose up to config["actions_per_round"] actions for a player.

        Args:
            player: The acting player's dict.
            state: Snapshot dict. Not modified.
            config: Config dict (see house_bot.config).

        Returns:
            List of PlayerAction. Its total cost never exceeds the player's
            funds and no policy is proposed twice.

        Raises:
            ConfigError: If the config has invalid costs, action count or
                difficulty.
            StateError: If the player's funds or strategy are invalid.
        """
        validate_config(config)
        validate_player(player)

        strategy = player.get("ai_strategy") or DEFAULT_AI_STRATEGY
        noise_mag = self.difficulty_noise[get_difficulty(config)]

        weights = self.apply_strategy_adjustments(
            self.resolve_weights(strategy), strategy, player, state)
        _log.debug("Player %s (%s) weights: %s",
                   player["id"], strategy, weights)

        actions = []
        remaining_funds = player["funds"]
        proposed_policy_ids = set()

        for _ in range(config["actions_per_round"]):
            candidates = self.evaluate_all_actions(
                player, state, config, weights, noise_mag,
                remaining_funds, proposed_policy_ids,
            )
            if not candidates:
                _log.debug("Player %s: no candidates left", player["id"])
                break

            # max() keeps the first of equal utilities
            best = max(candidates, key=lambda c: c.utility)
            actions.append(best.action)
            remaining_funds -= best.cost
            if isinstance(best.action, ProposePolicyAction):
                proposed_policy_ids.add(best.action.policy_id)

            _log.debug("Player %s picks %s (utility %.3f, cost %s, "
                       "remaining %s)", player["id"], best.action.type,
                       best.utility, best.cost, remaining_funds)

        return actions

    # ------------------------------------------------------------------
    # Weights
    # ------------------------------------------------------------------

    def resolve_weights(self, strategy):
        """Mutable copy of the strategy's weight row."""
        return dict(self.strategy_weights[strategy])

    def apply_strategy_adjustments(self, weights, strategy, player, state):
        """Adjust weights to the current situation.

        Pragmatist: behind in seats, campaign and attack harder and
        legislate less; leading or tied, legislate and court allies.
        Populist: campaign when approval is high, media blitz when low,
        propose more the more voter groups lean its way.

        Returns:
            New weights dict; the input is not modified.
        """
        adjusted = dict(weights)

        if strategy == PRAGMATIST:
            leader = find_seat_leader(state)
            # A tie counts as leading
            if leader is not None and leader["seats"] > player["seats"]:
                seat_gap = leader["seats"] - player["seats"]
                urgency = min(PRAGMATIST_URGENCY_CAP,
                              1 + seat_gap / PRAGMATIST_URGENCY_DIVISOR)
                adjusted[ACTION_CAMPAIGN] *= urgency
                adjusted[ACTION_ATTACK_AD] *= urgency
                adjusted[ACTION_PROPOSE_POLICY] *= (2 - urgency)
            else:
                adjusted[ACTION_PROPOSE_POLICY] *= PRAGMATIST_LEAD_POLICY_MULT
                adjusted[ACTION_COALITION_TALK] *= PRAGMATIST_LEAD_COALITION_MULT
                adjusted[ACTION_CAMPAIGN] *= PRAGMATIST_LEAD_CAMPAIGN_MULT

        elif strategy == POPULIST:
            approval_norm = normalize_approval(player["approval"])
            adjusted[ACTION_CAMPAIGN] *= (
                POPULIST_CAMPAIGN_BASE + approval_norm * POPULIST_CAMPAIGN_SLOPE)
            adjusted[ACTION_MEDIA_BLITZ] *= (
                POPULIST_MEDIA_BASE - approval_norm * POPULIST_MEDIA_SLOPE)
            favourable = count_leaning_groups(player, state)
            adjusted[ACTION_PROPOSE_POLICY] *= (
                1 + favourable * POPULIST_GROUP_BONUS)

        return adjusted

    # ------------------------------------------------------------------
    # Candidates
    # ------------------------------------------------------------------

    def evaluate_all_actions(self, player, state, config, weights, noise_mag,
                             remaining_funds, proposed_policy_ids):
        """Offer every action the remaining budget allows, noisily scored.

        Candidates come out in a fixed kind order: campaign,
        propose_policy, attack_ad, fundraise, media_blitz,
        coalition_talk. Fundraise is always offered.

        Returns:
            List of ActionCandidate.
        """
        candidates = []

        campaign_cost = config["campaign_cost"]
        if remaining_funds >= campaign_cost:
            raw = compute_campaign_utility(player, state)
            candidates.append(ActionCandidate(
                action=CampaignAction(
                    target_state=get_best_campaign_state(player, state)),
                utility=self.apply_noise(raw * weights[ACTION_CAMPAIGN],
                                         noise_mag),
                cost=campaign_cost,
            ))

        best_policy = pick_best_policy(player, state, proposed_policy_ids)
        if best_policy is not None:
            # Same formula as the pick: ideology*3 + popularity*2 + budget*1
            policy, raw = best_policy
            candidates.append(ActionCandidate(
                action=ProposePolicyAction(policy_id=policy["id"]),
                utility=self.apply_noise(raw * weights[ACTION_PROPOSE_POLICY],
                                         noise_mag),
                cost=0,
            ))

        attack_cost = config["attack_ad_cost"]
        if remaining_funds >= attack_cost:
            target = pick_attack_target(player, state)
            if target is not None:
                raw = compute_attack_utility(player, target, state)
                candidates.append(ActionCandidate(
                    action=AttackAdAction(target_player_id=target["id"]),
                    utility=self.apply_noise(raw * weights[ACTION_ATTACK_AD],
                                             noise_mag),
                    cost=attack_cost,
                ))

        raw = compute_fundraise_utility(player, config)
        candidates.append(ActionCandidate(
            action=FundraiseAction(),
            utility=self.apply_noise(raw * weights[ACTION_FUNDRAISE],
                                     noise_mag),
            cost=0,
        ))

        media_cost = config["media_blitz_cost"]
        if remaining_funds >= media_cost:
            raw = compute_media_blitz_utility(player)
            candidates.append(ActionCandidate(
                action=MediaBlitzAction(),
                utility=self.apply_noise(raw * weights[ACTION_MEDIA_BLITZ],
                                         noise_mag),
                cost=media_cost,
            ))

        coalition_cost = config["coalition_talk_cost"]
        if remaining_funds >= coalition_cost:
            target = pick_coalition_target(player, state)
            if target is not None:
                raw = compute_coalition_utility(player, target, state)
                candidates.append(ActionCandidate(
                    action=CoalitionTalkAction(target_player_id=target["id"]),
                    utility=self.apply_noise(
                        raw * weights[ACTION_COALITION_TALK], noise_mag),
                    cost=coalition_cost,
                ))

        return candidates

    def apply_noise(self, value, noise_mag):
        """Scale value by a uniform factor in [1 - noise_mag, 1 + noise_mag)."""
        noise = (self.rng.random() * 2 - 1) * noise_mag
        return value * (1 + noise)
