"""
rules_consts.py — Canonical labels and tuning values for The House AI engine.

Every string label for strategies, difficulties, action kinds, ideologies,
stances, seat buckets and regions used anywhere in the codebase MUST come
from this file. The numeric tuning values (weights, noise, score factors)
are game-balance knobs; downstream game feel depends on them, so change
them here or nowhere.

Organization: constants grouped by category.
"""

from types import MappingProxyType


# ============================================================================
# REGIONS (Australian states and territories)
# ============================================================================

NSW = "NSW"
VIC = "VIC"
QLD = "QLD"
WA = "WA"
SA = "SA"
TAS = "TAS"
ACT = "ACT"
NT = "NT"

# Scan order for campaign targeting. Ties keep the earlier region
ALL_REGIONS = (NSW, VIC, QLD, WA, SA, TAS, ACT, NT)

# Returned when no region qualifies as a campaign target
FALLBACK_CAMPAIGN_REGION = NSW


# ============================================================================
# IDEOLOGY
# ============================================================================

# Player economic axis
MARKET = "market"
INTERVENTIONIST = "interventionist"
ECONOMIC_IDEOLOGIES = (MARKET, INTERVENTIONIST)

# Player social axis
PROGRESSIVE = "progressive"
CONSERVATIVE = "conservative"
SOCIAL_IDEOLOGIES = (PROGRESSIVE, CONSERVATIVE)

# Policy stance on one ideology column
FAVOURED = "favoured"
NEUTRAL = "neutral"
OPPOSED = "opposed"
STANCES = (FAVOURED, NEUTRAL, OPPOSED)

STANCE_VALUES = MappingProxyType({
    FAVOURED: 1.0,
    NEUTRAL: 0.5,
    OPPOSED: 0.0,
})

# Seat ideology buckets. CENTER never matches a player axis
ECON_LEFT = "LEFT"
ECON_CENTER = "CENTER"
ECON_RIGHT = "RIGHT"
ECON_BUCKETS = (ECON_LEFT, ECON_CENTER, ECON_RIGHT)

SOCIAL_PROG = "PROG"
SOCIAL_CENTER = "CENTER"
SOCIAL_CONS = "CONS"
SOCIAL_BUCKETS = (SOCIAL_PROG, SOCIAL_CENTER, SOCIAL_CONS)

# Player ideology -> seat bucket it matches
ECON_IDEOLOGY_TO_BUCKET = MappingProxyType({
    INTERVENTIONIST: ECON_LEFT,
    MARKET: ECON_RIGHT,
})
SOCIAL_IDEOLOGY_TO_BUCKET = MappingProxyType({
    PROGRESSIVE: SOCIAL_PROG,
    CONSERVATIVE: SOCIAL_CONS,
})


# ============================================================================
# AI STRATEGIES
# ============================================================================

CAMPAIGNER = "campaigner"
POLICY_WONK = "policy_wonk"
POPULIST = "populist"
PRAGMATIST = "pragmatist"

AI_STRATEGIES = (CAMPAIGNER, POLICY_WONK, POPULIST, PRAGMATIST)
DEFAULT_AI_STRATEGY = PRAGMATIST


# ============================================================================
# AI DIFFICULTY
# ============================================================================

EASY = "easy"
NORMAL = "normal"
HARD = "hard"

AI_DIFFICULTIES = (EASY, NORMAL, HARD)
DEFAULT_AI_DIFFICULTY = NORMAL

# Noise magnitude as a fraction of utility
DIFFICULTY_NOISE = MappingProxyType({
    EASY: 0.30,
    NORMAL: 0.15,
    HARD: 0.05,
})


# ============================================================================
# ACTION KINDS
# ============================================================================

ACTION_CAMPAIGN = "campaign"
ACTION_PROPOSE_POLICY = "propose_policy"
ACTION_ATTACK_AD = "attack_ad"
ACTION_FUNDRAISE = "fundraise"
ACTION_MEDIA_BLITZ = "media_blitz"
ACTION_COALITION_TALK = "coalition_talk"

# Candidate generation order. Ties go to the earlier kind
ACTION_TYPES = (
    ACTION_CAMPAIGN,
    ACTION_PROPOSE_POLICY,
    ACTION_ATTACK_AD,
    ACTION_FUNDRAISE,
    ACTION_MEDIA_BLITZ,
    ACTION_COALITION_TALK,
)


# ============================================================================
# STRATEGY WEIGHTS (utility multiplier per action kind)
# ============================================================================

STRATEGY_WEIGHTS = MappingProxyType({
    CAMPAIGNER: MappingProxyType({
        ACTION_CAMPAIGN: 2.0,
        ACTION_PROPOSE_POLICY: 0.5,
        ACTION_ATTACK_AD: 1.5,
        ACTION_FUNDRAISE: 1.0,
        ACTION_MEDIA_BLITZ: 0.8,
        ACTION_COALITION_TALK: 0.3,
    }),
    POLICY_WONK: MappingProxyType({
        ACTION_CAMPAIGN: 0.8,
        ACTION_PROPOSE_POLICY: 2.5,
        ACTION_ATTACK_AD: 0.3,
        ACTION_FUNDRAISE: 0.8,
        ACTION_MEDIA_BLITZ: 0.5,
        ACTION_COALITION_TALK: 1.0,
    }),
    POPULIST: MappingProxyType({
        ACTION_CAMPAIGN: 1.2,
        ACTION_PROPOSE_POLICY: 1.5,
        ACTION_ATTACK_AD: 1.0,
        ACTION_FUNDRAISE: 0.8,
        ACTION_MEDIA_BLITZ: 1.5,
        ACTION_COALITION_TALK: 0.5,
    }),
    PRAGMATIST: MappingProxyType({
        ACTION_CAMPAIGN: 1.2,
        ACTION_PROPOSE_POLICY: 1.2,
        ACTION_ATTACK_AD: 1.0,
        ACTION_FUNDRAISE: 1.0,
        ACTION_MEDIA_BLITZ: 1.0,
        ACTION_COALITION_TALK: 0.8,
    }),
})


# ============================================================================
# SITUATIONAL ADJUSTMENTS
# ============================================================================

# Pragmatist behind in seats: urgency = min(cap, 1 + gap / divisor)
PRAGMATIST_URGENCY_DIVISOR = 40
PRAGMATIST_URGENCY_CAP = 1.5

# Pragmatist leading or tied
PRAGMATIST_LEAD_POLICY_MULT = 1.4
PRAGMATIST_LEAD_COALITION_MULT = 1.3
PRAGMATIST_LEAD_CAMPAIGN_MULT = 0.8

# Populist: campaign scales 0.7..1.3, media blitz 1.6..1.0 with approval
POPULIST_CAMPAIGN_BASE = 0.7
POPULIST_CAMPAIGN_SLOPE = 0.6
POPULIST_MEDIA_BASE = 1.6
POPULIST_MEDIA_SLOPE = 0.6
POPULIST_GROUP_BONUS = 0.1


# ============================================================================
# UTILITY TUNING
# ============================================================================

APPROVAL_MIN = -100
APPROVAL_MAX = 100

# Seats with margin below this are marginal (winnable)
MARGINAL_SEAT_THRESHOLD = 40
MARGIN_MAX = 100

# Campaign utility: (marginal*3 + ideology*2.5 + approval*2 + satisfaction*1.5) / 3
CAMPAIGN_MARGINAL_WEIGHT = 3
CAMPAIGN_IDEOLOGY_WEIGHT = 2.5
CAMPAIGN_APPROVAL_WEIGHT = 2
CAMPAIGN_SATISFACTION_WEIGHT = 1.5
CAMPAIGN_DIVISOR = 3

# Policy utility: ideology*3 + popularity*2 + feasibility*1
POLICY_IDEOLOGY_WEIGHT = 3
POLICY_POPULARITY_WEIGHT = 2
POLICY_FEASIBILITY_WEIGHT = 1

# Voter impacts are expressed in [-IMPACT_RANGE, +IMPACT_RANGE]
VOTER_IMPACT_RANGE = 10
NEUTRAL_POPULARITY = 0.5

# Fully feasible when funds >= multiple * |cost|
BUDGET_FEASIBILITY_MULTIPLE = 5

# Attack utility: (closeness*3 + gov*2 + approval*1.5) / 2
ATTACK_CLOSENESS_WEIGHT = 3
ATTACK_GOV_WEIGHT = 2
ATTACK_APPROVAL_WEIGHT = 1.5
ATTACK_DIVISOR = 2
ATTACK_CLOSENESS_RANGE = 50
ATTACK_GOV_BONUS = 0.5

# Attack targeting: an opponent this close in seats is attacked directly
ATTACK_CLOSE_RACE_SEATS = 10

# "Healthy" funds = this many campaigns
FUNDRAISE_HEALTHY_CAMPAIGNS = 3

# Inverse-utility clamp for fundraise and media blitz
INVERSE_UTILITY_FLOOR = 0.1
INVERSE_UTILITY_MIN = 0.1
INVERSE_UTILITY_MAX = 3

# Coalition utility: (ideology*3 + need*1 + seatWeight*2) / 2
COALITION_IDEOLOGY_WEIGHT = 3
COALITION_NEED_WEIGHT = 1
COALITION_SEAT_WEIGHT = 2
COALITION_DIVISOR = 2
COALITION_BOTH_AXES = 1.0
COALITION_ONE_AXIS = 0.5
COALITION_NO_AXIS = 0.1
COALITION_NEED_WHEN_LEADING = 0.5
COALITION_NEED_OTHERWISE = 1.0

# Coalition targeting: points per shared ideology axis
COALITION_TARGET_AXIS_POINTS = 2

# Campaign state targeting
CAMPAIGN_DOMINANCE_THRESHOLD = 0.75
CAMPAIGN_SEAT_COUNT_DIVISOR = 20
CAMPAIGN_SEAT_COUNT_WEIGHT = 3
CAMPAIGN_MARGINALITY_WEIGHT = 2
CAMPAIGN_INFLUENCE_DIVISOR = 20
CAMPAIGN_INFLUENCE_WEIGHT = 1.5
CAMPAIGN_MATCH_WEIGHT = 1
CAMPAIGN_SATISFACTION_BONUS = 0.1


# ============================================================================
# CHAMBER
# ============================================================================

# House of Representatives size; used when a snapshot omits total_seats
DEFAULT_TOTAL_SEATS = 151
