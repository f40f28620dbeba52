"""
Player actions — the values the AI engine hands back to the round controller.

PlayerAction is a closed set of variants, one frozen dataclass per action
kind. Each variant carries only its own payload and a `type` label from
rules_consts, so the resolver can dispatch on the class (or the label)
and handle every kind.
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from house_bot.rules_consts import (
    ACTION_CAMPAIGN, ACTION_PROPOSE_POLICY, ACTION_ATTACK_AD,
    ACTION_FUNDRAISE, ACTION_MEDIA_BLITZ, ACTION_COALITION_TALK,
)


# ============================================================================
# Variants
# ============================================================================

@dataclass(frozen=True)
class CampaignAction:
    """Campaign for seats in one region."""

    type: ClassVar[str] = ACTION_CAMPAIGN
    target_state: str

    def to_dict(self):
        return {"type": self.type, "target_state": self.target_state}


@dataclass(frozen=True)
class ProposePolicyAction:
    """Put a policy from the menu forward."""

    type: ClassVar[str] = ACTION_PROPOSE_POLICY
    policy_id: str

    def to_dict(self):
        return {"type": self.type, "policy_id": self.policy_id}


@dataclass(frozen=True)
class AttackAdAction:
    """Run attack ads against an opponent."""

    type: ClassVar[str] = ACTION_ATTACK_AD
    target_player_id: str

    def to_dict(self):
        return {"type": self.type, "target_player_id": self.target_player_id}


@dataclass(frozen=True)
class FundraiseAction:
    type: ClassVar[str] = ACTION_FUNDRAISE

    def to_dict(self):
        return {"type": self.type}


@dataclass(frozen=True)
class MediaBlitzAction:
    type: ClassVar[str] = ACTION_MEDIA_BLITZ

    def to_dict(self):
        return {"type": self.type}


@dataclass(frozen=True)
class CoalitionTalkAction:
    """Open coalition talks with an opponent."""

    type: ClassVar[str] = ACTION_COALITION_TALK
    target_player_id: str

    def to_dict(self):
        return {"type": self.type, "target_player_id": self.target_player_id}


PlayerAction = Union[
    CampaignAction,
    ProposePolicyAction,
    AttackAdAction,
    FundraiseAction,
    MediaBlitzAction,
    CoalitionTalkAction,
]

ACTION_CLASSES = (
    CampaignAction,
    ProposePolicyAction,
    AttackAdAction,
    FundraiseAction,
    MediaBlitzAction,
    CoalitionTalkAction,
)


@dataclass(frozen=True)
class ActionCandidate:
    """A scored, affordable action offered during one planning step."""

    action: PlayerAction
    utility: float
    cost: float


# ============================================================================
# Costs
# ============================================================================

# Config key holding each paid action's fund cost. Unlisted kinds are free.
_COST_KEY_BY_TYPE = {
    ACTION_CAMPAIGN: "campaign_cost",
    ACTION_ATTACK_AD: "attack_ad_cost",
    ACTION_MEDIA_BLITZ: "media_blitz_cost",
    ACTION_COALITION_TALK: "coalition_talk_cost",
}


def get_action_cost(action, config):
    """Fund cost of an action under a config.

    Args:
        action: A PlayerAction variant.
        config: Config dict.

    Returns:
        Cost in funds (0 for propose_policy and fundraise).

    Raises:
        TypeError: If action is not a PlayerAction variant.
    """
    if not isinstance(action, ACTION_CLASSES):
        raise TypeError(f"Not a PlayerAction: {action!r}")
    key = _COST_KEY_BY_TYPE.get(action.type)
    if key is None:
        return 0
    return config[key]


def total_action_cost(actions, config):
    """Sum of get_action_cost over a planned action list."""
    return sum(get_action_cost(action, config) for action in actions)
