"""Heads-up badugi engine: pure snapshot-in, snapshot-out game rules plus a computer opponent."""

from .ai import AI_PROFILES, AIDecision, AIProfile, action_delay, get_ai_betting_action, get_ai_card_exchange, hand_strength
from .betting import betting_options, betting_round_complete, end_round, minimum_raise_to, process_betting_action
from .cards import Card, RANKS, SUITS, draw, new_shuffled_deck, parse_cards
from .errors import BadugiError, InsufficientCards, InvalidAction, NoExchangeBudget, PlayerNotFound
from .evaluator import HandCategory, HandResult, compare_hands, describe_hand, evaluate_best, evaluate_hand
from .exchange import exchange_cards
from .game import create_game_state, is_ai_turn, new_game, start_new_round
from .models import ActionType, BettingOptions, Difficulty, GameSettings, GameState, Phase, Player, PlayerType
from .showdown import determine_winner

__version__ = "0.1.0"

__all__ = [
    "AI_PROFILES",
    "AIDecision",
    "AIProfile",
    "action_delay",
    "get_ai_betting_action",
    "get_ai_card_exchange",
    "hand_strength",
    "betting_options",
    "betting_round_complete",
    "end_round",
    "minimum_raise_to",
    "process_betting_action",
    "Card",
    "RANKS",
    "SUITS",
    "draw",
    "new_shuffled_deck",
    "parse_cards",
    "BadugiError",
    "InsufficientCards",
    "InvalidAction",
    "NoExchangeBudget",
    "PlayerNotFound",
    "HandCategory",
    "HandResult",
    "compare_hands",
    "describe_hand",
    "evaluate_best",
    "evaluate_hand",
    "exchange_cards",
    "create_game_state",
    "is_ai_turn",
    "new_game",
    "start_new_round",
    "ActionType",
    "BettingOptions",
    "Difficulty",
    "GameSettings",
    "GameState",
    "Phase",
    "Player",
    "PlayerType",
    "determine_winner",
]
