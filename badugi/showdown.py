from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List

from .cards import cards_to_labels
from .errors import InvalidAction
from .evaluator import HandResult, describe_hand, evaluate_hand
from .models import GameState, Phase

LOGGER = logging.getLogger(__name__)


def determine_winner(state: GameState) -> GameState:
    """Settle the pot: last player standing takes it, otherwise the lowest hand value does.

    Tied hands split the pot evenly; odd chips go to the earliest seat.
    """
    if state.phase in (Phase.LOBBY, Phase.GAME_OVER):
        raise InvalidAction("No hand in progress")
    active = state.active_seats()
    if not active:
        raise InvalidAction("No active players left")

    if len(active) == 1:
        winners = [active[0]]
    else:
        results: Dict[int, HandResult] = {}
        for seat in active:
            player = state.players[seat]
            result = evaluate_hand(player.hand)
            results[seat] = result
            state = state.with_event(
                "SHOWDOWN",
                seat=seat,
                hand=cards_to_labels(player.hand),
                category=result.category.value,
                rank=describe_hand(result),
            )
        best = min(result.comparison_value for result in results.values())
        winners = [seat for seat in active if results[seat].comparison_value == best]

    state = _award_pot(state, winners)
    LOGGER.debug("Hand %s settled, winners=%s", state.id, winners)
    state = replace(state, phase=Phase.GAME_OVER, pot=0, pending=frozenset(), winners=tuple(winners))
    return state.with_turn(None)


def _award_pot(state: GameState, winners: List[int]) -> GameState:
    share, remainder = divmod(state.pot, len(winners))
    for idx, seat in enumerate(sorted(winners)):
        payout = share + (1 if idx < remainder else 0)
        player = state.players[seat]
        state = state.with_player(seat, replace(player, chips=player.chips + payout))
        state = state.with_event("POT_AWARD", seat=seat, amount=payout)
    return state
