from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import InsufficientCards

SUITS = ("spades", "hearts", "diamonds", "clubs")
RANKS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
RANK_VALUE = {rank: idx for idx, rank in enumerate(RANKS, start=1)}

SUIT_LETTERS = {"s": "spades", "h": "hearts", "d": "diamonds", "c": "clubs"}
SUIT_SYMBOLS = {"spades": "♠", "hearts": "♥", "diamonds": "♦", "clubs": "♣"}

Deck = Tuple["Card", ...]


@dataclass(frozen=True)
class Card:
    suit: str
    rank: str

    def __post_init__(self) -> None:
        if self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")
        if self.suit not in SUITS:
            raise ValueError(f"Invalid suit: {self.suit}")

    @property
    def id(self) -> str:
        return f"{self.suit}-{self.rank}"

    @property
    def value(self) -> int:
        return RANK_VALUE[self.rank]

    @property
    def label(self) -> str:
        return f"{self.rank}{self.suit[0]}"

    @property
    def symbol(self) -> str:
        return f"{self.rank}{SUIT_SYMBOLS[self.suit]}"


def full_deck() -> List[Card]:
    return [Card(suit, rank) for suit in SUITS for rank in RANKS]


def new_shuffled_deck(rng: Optional[random.Random] = None) -> Deck:
    """Return all 52 cards in a uniformly random order (Fisher-Yates via ``shuffle``)."""
    rng = rng or random.Random()
    deck = full_deck()
    rng.shuffle(deck)
    return tuple(deck)


def draw(deck: Sequence[Card], count: int) -> Tuple[Deck, Deck]:
    """Take ``count`` cards off the top; returns ``(drawn, remaining)``."""
    if count < 0:
        raise ValueError("Cannot draw a negative number of cards")
    if len(deck) < count:
        raise InsufficientCards(f"Not enough cards left in deck ({len(deck)} < {count})")
    return tuple(deck[:count]), tuple(deck[count:])


def cards_to_labels(cards: Iterable[Card]) -> List[str]:
    return [card.label for card in cards]


def parse_label(label: str) -> Card:
    if len(label) not in (2, 3):
        raise ValueError(f"Invalid card label: {label}")
    rank, letter = label[:-1].upper(), label[-1].lower()
    if letter not in SUIT_LETTERS:
        raise ValueError(f"Invalid suit: {letter}")
    return Card(SUIT_LETTERS[letter], rank)


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]
