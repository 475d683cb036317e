from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List

from .betting import open_betting_round
from .cards import draw
from .errors import InvalidAction, NoExchangeBudget
from .models import GameState, Phase

LOGGER = logging.getLogger(__name__)


def exchange_cards(state: GameState, player_id: str, discard_ids: Iterable[str]) -> GameState:
    """Swap the named cards for fresh ones from the deck.

    An empty discard list is a valid "stand pat". Each call spends one unit of
    the table-wide exchange budget. Once every live player has exchanged, or the
    budget runs out, final betting opens.
    """
    seat = state.seat_of(player_id)
    player = state.players[seat]
    if state.exchanges_remaining <= 0:
        LOGGER.info("Seat %s tried to exchange with no budget left", seat)
        raise NoExchangeBudget("No exchanges remaining")
    if state.phase != Phase.CARD_EXCHANGE:
        raise InvalidAction("Cards can only be exchanged during the exchange phase")
    if player.folded:
        raise InvalidAction("Player has folded")
    if seat != state.current_player_index or seat not in state.pending:
        raise InvalidAction("Not your turn")

    discards: List[str] = list(discard_ids)
    if len(set(discards)) != len(discards):
        raise InvalidAction("Duplicate card in discard selection")
    held = {card.id for card in player.hand}
    missing = [card_id for card_id in discards if card_id not in held]
    if missing:
        raise InvalidAction(f"Card not in hand: {', '.join(missing)}")

    drawn, deck = draw(state.deck, len(discards))
    kept = tuple(card for card in player.hand if card.id not in discards)
    player = replace(player, hand=kept + drawn)

    pending = state.pending - {seat}
    state = replace(
        state.with_player(seat, player),
        deck=deck,
        exchanges_remaining=state.exchanges_remaining - 1,
        pending=pending,
    )
    state = state.with_event("EXCHANGE", seat=seat, count=len(discards))
    LOGGER.debug("Seat %s exchanged %s card(s), %s exchanges left", seat, len(discards), state.exchanges_remaining)

    if pending and state.exchanges_remaining > 0:
        count = len(state.players)
        next_seat = next((seat + offset) % count for offset in range(1, count + 1) if (seat + offset) % count in pending)
        return state.with_turn(next_seat)
    return open_betting_round(state, Phase.FINAL_BETTING)
