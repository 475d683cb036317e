from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from .cards import Card
from .errors import PlayerNotFound


class Phase(str, Enum):
    LOBBY = "lobby"
    DEALING = "dealing"
    BETTING = "betting"
    CARD_EXCHANGE = "card-exchange"
    FINAL_BETTING = "final-betting"
    SHOWDOWN = "showdown"
    GAME_OVER = "game-over"

    @property
    def is_betting(self) -> bool:
        return self in (Phase.BETTING, Phase.FINAL_BETTING)


class ActionType(str, Enum):
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    RAISE = "raise"


class PlayerType(str, Enum):
    HUMAN = "human"
    AI = "ai"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class GameSettings:
    initial_chips: int = 1_000
    small_blind: int = 10
    big_blind: int = 20
    max_exchanges: int = 3
    ai_difficulty: Difficulty = Difficulty.MEDIUM
    human_name: str = "Player"
    ai_name: str = "AI"

    def __post_init__(self) -> None:
        if self.initial_chips <= 0:
            raise ValueError("initial_chips must be positive")
        if self.small_blind <= 0 or self.big_blind <= 0:
            raise ValueError("Blinds must be positive")
        if self.max_exchanges < 0:
            raise ValueError("max_exchanges cannot be negative")
        # Accept plain strings from CLIs and config dicts.
        object.__setattr__(self, "ai_difficulty", Difficulty(self.ai_difficulty))


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    player_type: PlayerType
    chips: int
    hand: Tuple[Card, ...] = ()
    current_bet: int = 0
    folded: bool = False
    is_turn: bool = False

    @property
    def is_ai(self) -> bool:
        return self.player_type == PlayerType.AI

    @property
    def stack(self) -> int:
        """Everything this player can commit in the current betting round."""
        return self.chips + self.current_bet

    def reset_for_hand(self, hand: Tuple[Card, ...]) -> "Player":
        return replace(self, hand=hand, current_bet=0, folded=False, is_turn=False)

    def reset_for_round(self) -> "Player":
        return replace(self, current_bet=0)


@dataclass(frozen=True)
class BettingOptions:
    legal: List[ActionType]
    call_amount: int
    min_raise_to: Optional[int]
    max_raise_to: Optional[int]


@dataclass(frozen=True)
class GameState:
    id: str
    settings: GameSettings
    players: Tuple[Player, ...]
    phase: Phase = Phase.LOBBY
    current_player_index: int = 0
    pot: int = 0
    current_bet: int = 0
    deck: Tuple[Card, ...] = ()
    round_number: int = 1
    exchanges_remaining: int = 0
    # Seats that still owe an action in the current betting round or exchange.
    pending: FrozenSet[int] = frozenset()
    winners: Tuple[int, ...] = ()
    events: Tuple[Dict[str, object], ...] = field(default=(), compare=False)

    def seat_of(self, player_id: str) -> int:
        for idx, player in enumerate(self.players):
            if player.id == player_id:
                return idx
        raise PlayerNotFound(f"Unknown player: {player_id}")

    def player(self, player_id: str) -> Player:
        return self.players[self.seat_of(player_id)]

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def active_seats(self) -> List[int]:
        return [idx for idx, player in enumerate(self.players) if not player.folded]

    def opponents_with_chips(self, seat: int) -> List[int]:
        """Live seats other than ``seat`` that could still put chips in."""
        return [idx for idx in self.active_seats() if idx != seat and self.players[idx].chips > 0]

    @property
    def winner(self) -> Optional[Player]:
        if len(self.winners) != 1:
            return None
        return self.players[self.winners[0]]

    def total_chips(self) -> int:
        return sum(player.chips for player in self.players) + self.pot

    def with_player(self, seat: int, player: Player) -> "GameState":
        players = list(self.players)
        players[seat] = player
        return replace(self, players=tuple(players))

    def with_event(self, ev: str, **data: object) -> "GameState":
        return replace(self, events=self.events + ({"ev": ev, **data},))

    def with_turn(self, seat: Optional[int]) -> "GameState":
        """Hand the turn to ``seat`` (or to nobody) and keep ``is_turn`` flags in sync."""
        players = tuple(replace(p, is_turn=(idx == seat)) for idx, p in enumerate(self.players))
        index = self.current_player_index if seat is None else seat
        return replace(self, players=players, current_player_index=index)
