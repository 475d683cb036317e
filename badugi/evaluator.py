from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .cards import SUITS, Card

# Lower comparison values are better hands. The category dominates the value;
# card ranks fill the lower digits from the lowest card down.
CATEGORY_WEIGHT = 10**8
POSITION_WEIGHTS = (10**6, 10**4, 10**2, 1)


class HandCategory(str, Enum):
    BADUGI = "badugi"
    THREE_CARD = "three-card"
    TWO_CARD = "two-card"
    ONE_CARD = "one-card"

    @property
    def base(self) -> int:
        return _CATEGORY_BASE[self]


_CATEGORY_BASE = {
    HandCategory.BADUGI: 1,
    HandCategory.THREE_CARD: 2,
    HandCategory.TWO_CARD: 3,
    HandCategory.ONE_CARD: 4,
}

_CATEGORY_BY_SIZE = {
    4: HandCategory.BADUGI,
    3: HandCategory.THREE_CARD,
    2: HandCategory.TWO_CARD,
}


@dataclass(frozen=True)
class HandResult:
    category: HandCategory
    selected_cards: Tuple[Card, ...]
    comparison_value: int


def evaluate_hand(cards: Sequence[Card]) -> HandResult:
    """Reduce a hand to its badugi sub-hand: distinct suits, distinct ranks, lowest cards."""
    if not cards:
        raise ValueError("Cannot evaluate an empty hand")

    lowest_by_suit: Dict[str, Card] = {}
    for card in cards:
        held = lowest_by_suit.get(card.suit)
        if held is None or card.value < held.value:
            lowest_by_suit[card.suit] = card

    selected: List[Card] = []
    used_ranks = set()
    for suit in SUITS:
        card = lowest_by_suit.get(suit)
        if card is None or card.rank in used_ranks:
            continue
        selected.append(card)
        used_ranks.add(card.rank)

    selected.sort(key=lambda c: (c.value, SUITS.index(c.suit)))
    category = _CATEGORY_BY_SIZE.get(len(selected), HandCategory.ONE_CARD)
    if category == HandCategory.ONE_CARD:
        selected = selected[:1]
    elif category == HandCategory.BADUGI:
        selected = selected[:4]

    value = category.base * CATEGORY_WEIGHT
    for weight, card in zip(POSITION_WEIGHTS, selected):
        value += card.value * weight
    return HandResult(category=category, selected_cards=tuple(selected), comparison_value=value)


def evaluate_best(cards: Sequence[Card]) -> HandResult:
    """Best result over every 4-card subset; hands of four or fewer are evaluated directly."""
    if len(cards) <= 4:
        return evaluate_hand(cards)
    best: Optional[HandResult] = None
    for combo in itertools.combinations(cards, 4):
        result = evaluate_hand(combo)
        if best is None or result.comparison_value < best.comparison_value:
            best = result
    assert best is not None
    return best


def compare_hands(a: HandResult, b: HandResult) -> int:
    """Negative when ``a`` wins, positive when ``b`` wins, zero on a tie."""
    diff = a.comparison_value - b.comparison_value
    return (diff > 0) - (diff < 0)


def describe_hand(result: HandResult) -> str:
    ranks = "-".join(card.rank for card in reversed(result.selected_cards))
    return f"{result.category.value} {ranks}"
