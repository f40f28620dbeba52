"""Game configuration consumed by the AI engine.

The round controller owns the full game config; the engine only reads the
keys in DEFAULT_CONFIG. Callers build a config with merge_config() and the
engine validates it at the boundary with validate_config().
"""

import math

from house_bot.rules_consts import (
    AI_DIFFICULTIES, DEFAULT_AI_DIFFICULTY, DIFFICULTY_NOISE,
    DEFAULT_TOTAL_SEATS,
)


class ConfigError(ValueError):
    """Raised when a game config cannot drive the AI engine."""
    pass


DEFAULT_CONFIG = {
    "actions_per_round": 3,
    "campaign_cost": 8,
    "attack_ad_cost": 10,
    "media_blitz_cost": 12,
    "coalition_talk_cost": 6,
    "ai_difficulty": DEFAULT_AI_DIFFICULTY,
    "total_seats": DEFAULT_TOTAL_SEATS,
}

# Keys whose values are fund costs of a paid action
COST_KEYS = (
    "campaign_cost",
    "attack_ad_cost",
    "media_blitz_cost",
    "coalition_talk_cost",
)


def merge_config(overrides=None):
    """Return a new config: DEFAULT_CONFIG overlaid with overrides."""
    merged = dict(DEFAULT_CONFIG)
    if overrides:
        merged.update(overrides)
    return merged


def get_difficulty(config):
    """Difficulty label from config, falling back to normal when unset."""
    return config.get("ai_difficulty") or DEFAULT_AI_DIFFICULTY


def get_noise_magnitude(config):
    """Noise magnitude for the config's difficulty.

    Raises:
        ConfigError: If the difficulty label is unknown.
    """
    difficulty = get_difficulty(config)
    if difficulty not in DIFFICULTY_NOISE:
        raise ConfigError(
            f"Unknown ai_difficulty '{difficulty}'. "
            f"Valid: {AI_DIFFICULTIES}"
        )
    return DIFFICULTY_NOISE[difficulty]


def _is_bad_number(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return True
    return math.isnan(value) or math.isinf(value)


def validate_config(config):
    """Check the keys the engine reads before any planning happens.

    Args:
        config: Config dict (usually from merge_config).

    Raises:
        ConfigError: On a missing, negative, NaN or infinite cost, a
            negative or non-integer actions_per_round, or an unknown
            difficulty.
    """
    actions = config.get("actions_per_round")
    if isinstance(actions, bool) or not isinstance(actions, int):
        raise ConfigError(
            f"actions_per_round must be an integer, got {actions!r}"
        )
    if actions < 0:
        raise ConfigError(
            f"actions_per_round must be >= 0, got {actions}"
        )

    for key in COST_KEYS:
        if key not in config:
            raise ConfigError(f"Missing config key '{key}'")
        value = config[key]
        if _is_bad_number(value):
            raise ConfigError(f"{key} must be a finite number, got {value!r}")
        if value < 0:
            raise ConfigError(f"{key} must be >= 0, got {value}")

    get_noise_magnitude(config)
