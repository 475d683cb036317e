from __future__ import annotations

import logging
import random
import time
import uuid
from dataclasses import replace
from typing import Optional

from .betting import open_betting_round
from .cards import draw, new_shuffled_deck
from .errors import InvalidAction
from .models import GameSettings, GameState, Phase, Player, PlayerType

LOGGER = logging.getLogger(__name__)

HAND_SIZE = 4
HUMAN_ID = "human"
AI_ID = "ai"


def _game_id() -> str:
    return f"game-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


def create_game_state(
    settings: Optional[GameSettings] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Fresh heads-up table in the lobby: the human sits in seat 0, the computer in seat 1."""
    settings = settings or GameSettings()
    players = (
        Player(id=HUMAN_ID, name=settings.human_name, player_type=PlayerType.HUMAN, chips=settings.initial_chips, is_turn=True),
        Player(id=AI_ID, name=settings.ai_name, player_type=PlayerType.AI, chips=settings.initial_chips),
    )
    return GameState(
        id=_game_id(),
        settings=settings,
        players=players,
        phase=Phase.LOBBY,
        deck=new_shuffled_deck(rng),
        exchanges_remaining=settings.max_exchanges,
    )


# Starting over simply throws the old snapshot away.
new_game = create_game_state


def start_new_round(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    if state.phase not in (Phase.LOBBY, Phase.GAME_OVER):
        raise InvalidAction("A hand is already in progress")
    broke = [player.name for player in state.players if player.chips <= 0]
    if broke:
        raise InvalidAction(f"Not enough chips to start a hand: {', '.join(broke)}")

    state = replace(
        state,
        phase=Phase.DEALING,
        pot=0,
        current_bet=0,
        round_number=1,
        exchanges_remaining=state.settings.max_exchanges,
        winners=(),
        events=(),
    )
    deck = new_shuffled_deck(rng)
    players = []
    for player in state.players:
        hand, deck = draw(deck, HAND_SIZE)
        players.append(player.reset_for_hand(hand))
    state = replace(state, players=tuple(players), deck=deck)
    for seat in range(len(players)):
        state = state.with_event("DEAL", seat=seat, count=HAND_SIZE)
    LOGGER.debug("Dealt new hand for %s, %s cards left in deck", state.id, len(deck))
    return open_betting_round(state, Phase.BETTING)


def is_ai_turn(state: GameState) -> bool:
    if state.phase not in (Phase.BETTING, Phase.CARD_EXCHANGE, Phase.FINAL_BETTING):
        return False
    player = state.current_player
    return player.is_ai and player.is_turn and not player.folded
