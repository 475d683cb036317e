from __future__ import annotations

import logging
from dataclasses import replace
from typing import NoReturn, Optional, Union

from .errors import InvalidAction
from .models import ActionType, BettingOptions, GameState, Phase
from .showdown import determine_winner

LOGGER = logging.getLogger(__name__)

# Betting rules only. Every function takes a snapshot and returns a new one;
# rejected actions raise and leave the caller's snapshot untouched.


def _reject(msg: str) -> NoReturn:
    LOGGER.info("Rejected betting action: %s", msg)
    raise InvalidAction(msg)


def minimum_raise_to(state: GameState) -> int:
    return max(state.current_bet * 2, state.settings.big_blind)


def betting_options(state: GameState, player_id: str) -> BettingOptions:
    """Legal moves for a player plus the helper numbers a driver needs to offer them."""
    seat = state.seat_of(player_id)
    player = state.players[seat]
    if not state.phase.is_betting:
        _reject("No betting round in progress")
    if player.folded:
        _reject("Player has folded")

    legal = [ActionType.FOLD]
    to_call = max(state.current_bet - player.current_bet, 0)
    if to_call == 0:
        legal.append(ActionType.CHECK)
    elif player.chips > 0:
        legal.append(ActionType.CALL)

    min_raise_to = None
    max_raise_to = None
    if player.chips > 0 and player.stack > state.current_bet and state.opponents_with_chips(seat):
        max_raise_to = player.stack
        min_raise_to = min(minimum_raise_to(state), max_raise_to)
        legal.append(ActionType.RAISE)

    return BettingOptions(
        legal=legal,
        call_amount=min(to_call, player.chips),
        min_raise_to=min_raise_to,
        max_raise_to=max_raise_to,
    )


def _commit_chips(state: GameState, seat: int, amount: int) -> GameState:
    player = state.players[seat]
    amount = min(amount, player.chips)
    player = replace(player, chips=player.chips - amount, current_bet=player.current_bet + amount)
    return replace(state.with_player(seat, player), pot=state.pot + amount)


def process_betting_action(
    state: GameState,
    player_id: str,
    action: Union[ActionType, str],
    amount: Optional[int] = None,
) -> GameState:
    seat = state.seat_of(player_id)
    player = state.players[seat]
    if not state.phase.is_betting:
        _reject("No betting round in progress")
    if player.folded:
        _reject("Player has folded")
    if seat != state.current_player_index:
        _reject("Not your turn")
    try:
        action = ActionType(action.lower() if isinstance(action, str) else action)
    except (ValueError, AttributeError):
        _reject(f"Unsupported action {action}")

    pending = set(state.pending)
    pending.discard(seat)

    if action == ActionType.FOLD:
        state = state.with_player(seat, replace(player, folded=True))
        state = state.with_event("FOLD", seat=seat)
    elif action == ActionType.CHECK:
        if state.current_bet > player.current_bet:
            _reject("Cannot check when facing a bet")
        state = state.with_event("CHECK", seat=seat)
    elif action == ActionType.CALL:
        to_call = state.current_bet - player.current_bet
        if to_call <= 0:
            _reject("Nothing to call")
        pay = min(to_call, player.chips)
        state = _commit_chips(state, seat, pay)
        state = state.with_event("CALL", seat=seat, amount=pay, all_in=state.players[seat].chips == 0)
    elif action == ActionType.RAISE:
        if player.chips <= 0:
            _reject("No chips left to raise")
        if player.stack <= state.current_bet:
            _reject("Not enough chips to raise; call instead")
        if not state.opponents_with_chips(seat):
            _reject("No opponent can call a raise")
        minimum = minimum_raise_to(state)
        target = amount if amount is not None else minimum
        target = min(int(target), player.stack)
        if target <= state.current_bet:
            _reject("Raise must exceed current bet")
        # Short raises are only allowed all-in.
        if target < minimum and target != player.stack:
            _reject(f"Raise below minimum {minimum}")
        state = _commit_chips(state, seat, target - player.current_bet)
        state = replace(state, current_bet=max(state.current_bet, target))
        # A raise reopens the action for everyone who can still put chips in.
        pending = set(state.opponents_with_chips(seat))
        state = state.with_event("RAISE", seat=seat, amount=target, all_in=state.players[seat].chips == 0)

    LOGGER.debug("Seat %s %s (amount=%s) pot=%s bet=%s", seat, action.value, amount, state.pot, state.current_bet)
    state = replace(state, pending=frozenset(pending))
    return advance_turn(state, seat)


def betting_round_complete(state: GameState) -> bool:
    """True once every live player has acted since the last raise and matched it or is all-in."""
    active = state.active_seats()
    if len(active) <= 1:
        return True
    for seat in active:
        player = state.players[seat]
        if seat in state.pending:
            return False
        if player.current_bet < state.current_bet and player.chips > 0:
            return False
    return True


def _next_actor(state: GameState, after: int) -> Optional[int]:
    count = len(state.players)
    for offset in range(1, count + 1):
        seat = (after + offset) % count
        player = state.players[seat]
        if player.folded or player.chips <= 0:
            continue
        if seat in state.pending or player.current_bet < state.current_bet:
            return seat
    return None


def advance_turn(state: GameState, actor: int) -> GameState:
    if betting_round_complete(state):
        return end_round(state)
    next_seat = _next_actor(state, actor)
    if next_seat is None:
        return end_round(state)
    return state.with_turn(next_seat)


def open_betting_round(state: GameState, phase: Phase) -> GameState:
    """Clear per-round commitments and hand the action to the first seat that can bet."""
    players = tuple(player.reset_for_round() for player in state.players)
    state = replace(state, players=players, phase=phase, current_bet=0)
    pending = frozenset(s for s in state.active_seats() if state.players[s].chips > 0)
    state = replace(state, pending=pending).with_event("PHASE", phase=phase.value)
    LOGGER.debug("Opening %s with seats %s to act", phase.value, sorted(pending))
    if betting_round_complete(state):
        return end_round(state)
    return state.with_turn(min(pending))


def _return_uncalled(state: GameState) -> GameState:
    """Give back the part of the top commitment that nobody else matched."""
    if len(state.active_seats()) < 2:
        return state
    seat = max(range(len(state.players)), key=lambda idx: state.players[idx].current_bet)
    player = state.players[seat]
    matched = max((p.current_bet for idx, p in enumerate(state.players) if idx != seat), default=0)
    excess = player.current_bet - matched
    if excess <= 0:
        return state
    player = replace(player, chips=player.chips + excess, current_bet=matched)
    state = replace(state.with_player(seat, player), pot=state.pot - excess, current_bet=matched)
    LOGGER.debug("Returning %s uncalled chips to seat %s", excess, seat)
    return state.with_event("REFUND", seat=seat, amount=excess)


def end_round(state: GameState) -> GameState:
    state = _return_uncalled(state)
    active = state.active_seats()
    if len(active) > 1 and state.phase == Phase.BETTING and state.round_number == 1:
        players = tuple(player.reset_for_round() for player in state.players)
        state = replace(
            state,
            players=players,
            phase=Phase.CARD_EXCHANGE,
            current_bet=0,
            round_number=2,
            pending=frozenset(active),
        )
        state = state.with_event("PHASE", phase=Phase.CARD_EXCHANGE.value)
        LOGGER.debug("Betting closed; exchange phase with %s exchanges left", state.exchanges_remaining)
        if state.exchanges_remaining <= 0:
            return open_betting_round(state, Phase.FINAL_BETTING)
        return state.with_turn(active[0])

    state = replace(state, phase=Phase.SHOWDOWN, pending=frozenset())
    state = state.with_event("PHASE", phase=Phase.SHOWDOWN.value)
    return determine_winner(state)
