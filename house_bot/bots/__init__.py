"""Bots package — AI decision engine for non-human players.

Provides:
- actions: PlayerAction variants and action costs
- ideology: Ideology match and feasibility helpers
- targeting: Campaign region, policy, attack and coalition target pickers
- ai_engine: AIEngine, the per-player round planner
- ai_dispatch: Round-level routing over all AI players
"""

from house_bot.bots.actions import (
    CampaignAction,
    ProposePolicyAction,
    AttackAdAction,
    FundraiseAction,
    MediaBlitzAction,
    CoalitionTalkAction,
    PlayerAction,
    get_action_cost,
    total_action_cost,
)
from house_bot.bots.ai_engine import AIEngine
from house_bot.bots.ai_dispatch import (
    plan_ai_round,
    dispatch_ai_turn,
    get_ai_player_order,
    AIDispatchError,
)

__all__ = [
    "CampaignAction",
    "ProposePolicyAction",
    "AttackAdAction",
    "FundraiseAction",
    "MediaBlitzAction",
    "CoalitionTalkAction",
    "PlayerAction",
    "get_action_cost",
    "total_action_cost",
    "AIEngine",
    "plan_ai_round",
    "dispatch_ai_turn",
    "get_ai_player_order",
    "AIDispatchError",
]
