from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from .betting import minimum_raise_to
from .cards import Card
from .evaluator import evaluate_hand
from .models import ActionType, Difficulty, GameState, Player

_RNG = random.Random()

BLUFF_BOOST = 0.3
MAX_DISCARDS = 3
IMPROVE_ABOVE = 8  # kept cards ranked 9 or higher are worth redrawing
EXCHANGE_DELAY = 2.0


@dataclass(frozen=True)
class AIProfile:
    """Personality knobs. Thresholds are on the evaluator's comparison-value scale."""

    bluff_chance: float
    aggressiveness: float
    exchange_threshold: int
    fold_threshold: int
    raise_threshold: int


AI_PROFILES: Dict[Difficulty, AIProfile] = {
    Difficulty.EASY: AIProfile(
        bluff_chance=0.1,
        aggressiveness=0.3,
        exchange_threshold=300_000_000,
        fold_threshold=400_000_000,
        raise_threshold=200_000_000,
    ),
    Difficulty.MEDIUM: AIProfile(
        bluff_chance=0.2,
        aggressiveness=0.5,
        exchange_threshold=200_000_000,
        fold_threshold=350_000_000,
        raise_threshold=150_000_000,
    ),
    Difficulty.HARD: AIProfile(
        bluff_chance=0.3,
        aggressiveness=0.7,
        exchange_threshold=150_000_000,
        fold_threshold=300_000_000,
        raise_threshold=100_000_000,
    ),
}


@dataclass(frozen=True)
class AIDecision:
    action: ActionType
    amount: Optional[int] = None

    @property
    def weight(self) -> float:
        """Relative thinking time; drivers scale their delay by it."""
        return _ACTION_WEIGHT[self.action]


_ACTION_WEIGHT = {
    ActionType.FOLD: 0.5,
    ActionType.CHECK: 1.0,
    ActionType.CALL: 1.0,
    ActionType.RAISE: 1.5,
}


def profile_for(difficulty: Union[Difficulty, str]) -> AIProfile:
    return AI_PROFILES[Difficulty(difficulty)]


def hand_strength(value: int) -> float:
    """Map a comparison value onto [0, 1]; badugis land near 1, one-card hands near 0.1."""
    if value < 150_000_000:
        return 0.9 + (150_000_000 - value) / 150_000_000 * 0.1
    if value < 250_000_000:
        return 0.6 + (250_000_000 - value) / 100_000_000 * 0.3
    if value < 350_000_000:
        return 0.3 + (350_000_000 - value) / 100_000_000 * 0.3
    return max(0.1, 0.3 - (value - 350_000_000) / 100_000_000 * 0.2)


def _raise_to(state: GameState, player: Player, target: int) -> AIDecision:
    # Nobody left to call: take the free card or match the bet instead.
    if not state.opponents_with_chips(state.seat_of(player.id)):
        if state.current_bet > player.current_bet:
            return AIDecision(ActionType.CALL)
        return AIDecision(ActionType.CHECK)
    floor = minimum_raise_to(state)
    return AIDecision(ActionType.RAISE, min(max(target, floor), player.stack))


def get_ai_betting_action(
    state: GameState,
    player: Player,
    profile: Optional[AIProfile] = None,
    rng: Optional[random.Random] = None,
) -> AIDecision:
    """Pick fold/check/call/raise from hand strength, an occasional bluff, and pot odds."""
    profile = profile or profile_for(state.settings.ai_difficulty)
    rng = rng or _RNG

    strength = hand_strength(evaluate_hand(player.hand).comparison_value)
    if rng.random() < profile.bluff_chance:
        strength = min(strength + BLUFF_BOOST, 1.0)

    call_amount = max(state.current_bet - player.current_bet, 0)
    pot_odds = state.pot / max(call_amount, 1)

    # Calling would put the whole stack in.
    if call_amount > 0 and call_amount >= player.chips:
        if strength > 0.6 or pot_odds > 3:
            return AIDecision(ActionType.CALL)
        return AIDecision(ActionType.FOLD)

    if call_amount == 0:
        if strength > 0.7 and player.chips > 0:
            return _raise_to(state, player, state.current_bet + state.pot // 2)
        return AIDecision(ActionType.CHECK)

    if strength < 0.3 and call_amount > player.chips * 0.2:
        return AIDecision(ActionType.FOLD)
    if strength > 0.8:
        return _raise_to(state, player, state.current_bet * 2)
    if strength > 0.4 or pot_odds > 2:
        return AIDecision(ActionType.CALL)
    return AIDecision(ActionType.FOLD)


def _improvement_candidates(cards: Sequence[Card]) -> List[Card]:
    highest = sorted(cards, key=lambda card: card.value, reverse=True)[:2]
    return [card for card in highest if card.value > IMPROVE_ABOVE]


def get_ai_card_exchange(player: Player, profile: Optional[AIProfile] = None) -> List[str]:
    """Card ids to discard: everything outside the best sub-hand, plus high kept cards."""
    profile = profile or AI_PROFILES[Difficulty.MEDIUM]
    result = evaluate_hand(player.hand)
    if result.comparison_value < profile.exchange_threshold:
        return []

    kept = {card.id for card in result.selected_cards}
    discards = [card.id for card in player.hand if card.id not in kept]
    for card in _improvement_candidates(result.selected_cards):
        if len(discards) >= MAX_DISCARDS:
            break
        if card.id not in discards:
            discards.append(card.id)
    return discards


def action_delay(action: ActionType, rng: Optional[random.Random] = None, base: float = 1.0) -> float:
    """Seconds a driver may wait before applying the computer's move."""
    rng = rng or _RNG
    return base * _ACTION_WEIGHT[ActionType(action)] + rng.random() * base * 0.5
