from __future__ import annotations

import random
from dataclasses import replace
from typing import Iterable, Optional, Sequence, Tuple

from badugi.ai import get_ai_betting_action, get_ai_card_exchange, profile_for
from badugi.betting import process_betting_action
from badugi.cards import full_deck, parse_cards
from badugi.exchange import exchange_cards
from badugi.game import create_game_state, start_new_round
from badugi.models import ActionType, GameSettings, GameState, Phase

HUMAN = "human"
AI = "ai"


class FixedRandom(random.Random):
    """Random source whose ``random()`` always returns the same roll."""

    def __init__(self, roll: float) -> None:
        super().__init__(0)
        self.roll = roll

    def random(self) -> float:
        return self.roll


def create_game(**settings) -> GameState:
    return create_game_state(GameSettings(**settings), random.Random(1))


def deal(state: Optional[GameState] = None, seed: int = 42) -> GameState:
    state = state or create_game()
    return start_new_round(state, random.Random(seed))


def with_hands(state: GameState, *hands: Sequence[str]) -> GameState:
    """Replace dealt hands with fixed ones and rebuild the deck from the remaining cards."""
    players = tuple(replace(player, hand=tuple(parse_cards(labels))) for player, labels in zip(state.players, hands))
    used = {card.id for player in players for card in player.hand}
    deck = tuple(card for card in full_deck() if card.id not in used)
    return replace(state, players=players, deck=deck)


def with_chips(state: GameState, *chips: int) -> GameState:
    players = tuple(replace(player, chips=amount) for player, amount in zip(state.players, chips))
    return replace(state, players=players)


def perform_actions(state: GameState, actions: Iterable[Tuple[str, ActionType, Optional[int]]]) -> GameState:
    """Apply a scripted sequence of (player_id, action, amount)."""
    for player_id, action, amount in actions:
        state = process_betting_action(state, player_id, action, amount)
    return state


def check_round(state: GameState) -> GameState:
    return perform_actions(state, [(HUMAN, ActionType.CHECK, None), (AI, ActionType.CHECK, None)])


def to_exchange(state: Optional[GameState] = None) -> GameState:
    state = check_round(state or deal())
    assert state.phase == Phase.CARD_EXCHANGE
    return state


def stand_pat(state: GameState) -> GameState:
    state = exchange_cards(state, HUMAN, [])
    return exchange_cards(state, AI, [])


def auto_complete_hand(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """Let the computer heuristics play every seat until the hand is settled."""
    rng = rng or random.Random(0)
    profile = profile_for(state.settings.ai_difficulty)
    for _ in range(200):
        if state.phase == Phase.GAME_OVER:
            return state
        player = state.current_player
        if state.phase == Phase.CARD_EXCHANGE:
            state = exchange_cards(state, player.id, get_ai_card_exchange(player, profile))
        else:
            decision = get_ai_betting_action(state, player, profile, rng)
            state = process_betting_action(state, player.id, decision.action, decision.amount)
    raise AssertionError("hand did not finish")
