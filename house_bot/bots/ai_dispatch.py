"""
AI dispatch — Route AI players' turns to the decision engine.

The round controller calls plan_ai_round() once per round. AI players are
planned one after another in snapshot order, all drawing from the same
random source, so a seeded source replays the whole round.
"""

import logging

from house_bot.bots.ai_engine import AIEngine


_log = logging.getLogger("house_bot.ai_dispatch")


class AIDispatchError(Exception):
    """Raised when a turn is routed to a player the AI does not control."""
    pass


def get_ai_player_order(state):
    """Ids of AI-controlled players in evaluation order (snapshot order).

    Args:
        state: Snapshot dict.

    Returns:
        List of player ids.
    """
    return [p["id"] for p in state["players"] if p.get("is_ai")]


def _find_player(state, player_id):
    for p in state["players"]:
        if p["id"] == player_id:
            return p
    return None


def dispatch_ai_turn(state, player_id, config, rng):
    """Plan one AI player's actions for the round.

    Args:
        state: Snapshot dict.
        player_id: Id of the AI player taking its turn.
        config: Config dict.
        rng: Random source exposing random().

    Returns:
        List of PlayerAction from AIEngine.choose_actions.

    Raises:
        AIDispatchError: If the player is unknown or not AI-controlled.
    """
    player = _find_player(state, player_id)
    if player is None:
        raise AIDispatchError(
            f"Unknown player '{player_id}'. "
            f"Players: {[p['id'] for p in state['players']]}"
        )
    if not player.get("is_ai"):
        raise AIDispatchError(
            f"Player '{player_id}' is not AI-controlled. "
            f"AI players: {get_ai_player_order(state)}"
        )
    return AIEngine(rng).choose_actions(player, state, config)


def plan_ai_round(state, config, rng):
    """Plan every AI player's actions for the round.

    Args:
        state: Snapshot dict. Not modified; every player plans against
            the same snapshot.
        config: Config dict.
        rng: Random source shared across players, consumed in
            evaluation order.

    Returns:
        Dict of player id -> list of PlayerAction, in evaluation order.
    """
    engine = AIEngine(rng)
    plans = {}
    for player_id in get_ai_player_order(state):
        player = _find_player(state, player_id)
        plans[player_id] = engine.choose_actions(player, state, config)
        _log.info("Round %s: %s planned %d action(s): %s",
                  state.get("round"), player_id, len(plans[player_id]),
                  [a.type for a in plans[player_id]])
    return plans
