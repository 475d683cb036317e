from dataclasses import replace

import pytest

from badugi.cards import Card
from badugi.errors import InsufficientCards, InvalidAction, NoExchangeBudget
from badugi.exchange import exchange_cards
from badugi.models import Phase

from .helpers import AI, HUMAN, check_round, create_game, deal, stand_pat, to_exchange, with_hands

HUMAN_HAND = ["Ks", "Qh", "3d", "4c"]
AI_HAND = ["5s", "6h", "7d", "8c"]


def fixed_exchange():
    return to_exchange(with_hands(deal(), HUMAN_HAND, AI_HAND))


def test_discards_are_replaced_from_top_of_deck():
    state = fixed_exchange()
    top = state.deck[:2]
    assert [card.id for card in top] == ["spades-A", "spades-2"]

    state = exchange_cards(state, HUMAN, ["spades-K", "hearts-Q"])
    hand = state.player(HUMAN).hand
    assert [card.label for card in hand] == ["3d", "4c", "As", "2s"]
    assert len(state.deck) == 42
    assert state.exchanges_remaining == 2
    assert state.current_player.id == AI
    assert state.events[-1] == {"ev": "EXCHANGE", "seat": 0, "count": 2}


def test_standing_pat_spends_an_exchange():
    state = fixed_exchange()
    before = state.player(HUMAN).hand
    state = exchange_cards(state, HUMAN, [])
    assert state.player(HUMAN).hand == before
    assert state.exchanges_remaining == 2
    assert len(state.deck) == 44


def test_both_players_exchanging_opens_final_betting():
    state = stand_pat(fixed_exchange())
    assert state.phase == Phase.FINAL_BETTING
    assert state.exchanges_remaining == 1
    assert state.current_player.id == HUMAN
    assert state.pending == frozenset({0, 1})


def test_cards_stay_unique_after_exchange():
    state = fixed_exchange()
    state = exchange_cards(state, HUMAN, ["spades-K", "hearts-Q", "diamonds-3", "clubs-4"])
    state = exchange_cards(state, AI, ["spades-5", "hearts-6"])
    ids = [card.id for p in state.players for card in p.hand] + [card.id for card in state.deck]
    # Discards leave play; nothing is dealt twice.
    assert len(ids) == 46
    assert len(set(ids)) == 46
    assert "spades-K" not in ids
    assert all(len(p.hand) == 4 for p in state.players)


def test_card_must_be_in_hand():
    state = fixed_exchange()
    with pytest.raises(InvalidAction, match="Card not in hand: spades-A"):
        exchange_cards(state, HUMAN, ["spades-A"])
    with pytest.raises(InvalidAction, match="Duplicate"):
        exchange_cards(state, HUMAN, ["spades-K", "spades-K"])


def test_exchange_requires_turn_and_phase():
    state = fixed_exchange()
    with pytest.raises(InvalidAction, match="Not your turn"):
        exchange_cards(state, AI, [])
    with pytest.raises(InvalidAction, match="exchange phase"):
        exchange_cards(deal(), HUMAN, [])


def test_exhausted_budget_closes_exchange_phase():
    state = to_exchange(deal(create_game(max_exchanges=1)))
    state = exchange_cards(state, HUMAN, [])
    assert state.exchanges_remaining == 0
    assert state.phase == Phase.FINAL_BETTING
    with pytest.raises(NoExchangeBudget, match="No exchanges remaining"):
        exchange_cards(state, AI, [])


def test_zero_budget_skips_exchange_phase():
    state = check_round(deal(create_game(max_exchanges=0)))
    assert state.phase == Phase.FINAL_BETTING
    assert state.round_number == 2
    with pytest.raises(NoExchangeBudget):
        exchange_cards(state, HUMAN, [])


def test_short_deck_rejects_exchange_and_keeps_snapshot():
    state = fixed_exchange()
    state = replace(state, deck=(Card("spades", "A"),))
    with pytest.raises(InsufficientCards):
        exchange_cards(state, HUMAN, ["spades-K", "hearts-Q"])
    assert [card.label for card in state.player(HUMAN).hand] == HUMAN_HAND
    assert state.exchanges_remaining == 3
