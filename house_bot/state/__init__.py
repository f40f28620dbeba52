"""State module — Game state snapshot schema and validation."""

from house_bot.state.state_schema import (
    build_initial_state,
    make_player,
    make_seat,
    make_policy,
    make_voter_group,
    validate_state,
    validate_player,
    StateError,
)

__all__ = [
    "build_initial_state",
    "make_player",
    "make_seat",
    "make_policy",
    "make_voter_group",
    "validate_state",
    "validate_player",
    "StateError",
]
