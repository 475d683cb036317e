from dataclasses import replace

import pytest

from badugi.errors import InvalidAction
from badugi.models import ActionType, Phase
from badugi.showdown import determine_winner

from .helpers import AI, HUMAN, check_round, create_game, deal, perform_actions, stand_pat, to_exchange, with_chips, with_hands


def play_to_showdown(state):
    return check_round(stand_pat(to_exchange(state)))


def test_badugi_beats_three_card_hand():
    state = with_hands(deal(), ["2s", "5h", "9d", "Kc"], ["As", "Ah", "3d", "7c"])
    state = perform_actions(state, [(HUMAN, ActionType.RAISE, 40), (AI, ActionType.CALL, None)])
    state = check_round(stand_pat(state))

    assert state.phase == Phase.GAME_OVER
    assert state.winners == (0,)
    assert state.winner.id == HUMAN
    assert state.player(HUMAN).chips == 1_040
    assert state.player(AI).chips == 960
    assert state.pot == 0

    shown = [event for event in state.events if event["ev"] == "SHOWDOWN"]
    assert [event["category"] for event in shown] == ["badugi", "three-card"]
    assert shown[0]["rank"] == "badugi K-9-5-2"


def test_lower_badugi_wins():
    state = with_hands(deal(), ["As", "2h", "3d", "5c"], ["Ac", "2d", "3h", "4s"])
    state = play_to_showdown(state)
    assert state.winner.id == AI


def test_fold_wins_without_evaluating_hands(monkeypatch):
    def fail(cards):
        raise AssertionError("hands should not be evaluated")

    monkeypatch.setattr("badugi.showdown.evaluate_hand", fail)
    state = perform_actions(deal(), [(HUMAN, ActionType.RAISE, 40), (AI, ActionType.FOLD, None)])
    assert state.phase == Phase.GAME_OVER
    assert state.winner.id == HUMAN
    assert not [event for event in state.events if event["ev"] == "SHOWDOWN"]


def test_folded_player_cannot_win_with_better_hand():
    state = with_hands(deal(), ["As", "2h", "3d", "4c"], ["Ks", "Kh", "Kd", "Kc"])
    state = perform_actions(state, [(HUMAN, ActionType.CHECK, None), (AI, ActionType.RAISE, 100), (HUMAN, ActionType.FOLD, None)])
    assert state.winner.id == AI
    assert state.player(AI).chips == 1_000
    assert state.player(HUMAN).chips == 1_000


def test_identical_hands_split_the_pot():
    state = with_hands(deal(), ["As", "2h", "3d", "4c"], ["Ac", "2d", "3h", "4s"])
    state = perform_actions(state, [(HUMAN, ActionType.RAISE, 50), (AI, ActionType.CALL, None)])
    state = check_round(stand_pat(state))
    assert state.winners == (0, 1)
    assert state.winner is None
    assert [p.chips for p in state.players] == [1_000, 1_000]


def test_odd_chip_goes_to_first_seat():
    state = with_hands(deal(), ["As", "2h", "3d", "4c"], ["Ac", "2d", "3h", "4s"])
    state = replace(with_chips(state, 950, 949), pot=101, phase=Phase.SHOWDOWN)
    state = determine_winner(state)
    assert [p.chips for p in state.players] == [1_001, 999]
    awards = [event for event in state.events if event["ev"] == "POT_AWARD"]
    assert [(e["seat"], e["amount"]) for e in awards] == [(0, 51), (1, 50)]


def test_no_showdown_without_a_hand():
    with pytest.raises(InvalidAction, match="No hand in progress"):
        determine_winner(create_game())


def test_short_stack_wins_only_what_it_matched():
    state = with_hands(deal(), ["Ks", "Kh", "Kd", "Kc"], ["As", "2h", "3d", "4c"])
    state = with_chips(state, 1_000, 50)
    state = perform_actions(state, [(HUMAN, ActionType.RAISE, 200), (AI, ActionType.CALL, None)])
    state = stand_pat(state)
    state = perform_actions(state, [(HUMAN, ActionType.CHECK, None)])

    assert state.winner.id == AI
    assert state.player(AI).chips == 100
    assert state.player(HUMAN).chips == 950
    awards = [event for event in state.events if event["ev"] == "POT_AWARD"]
    assert awards == [{"ev": "POT_AWARD", "seat": 1, "amount": 100}]
