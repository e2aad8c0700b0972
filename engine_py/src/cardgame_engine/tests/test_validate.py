"""
Tests for move validation.
"""

import itertools

from cardgame_engine.constants import GamePhase, Rank
from cardgame_engine.errors import ACTION_NOT_ALLOWED, EMPTY_PLAY, INVALID_PLAY, NOT_YOUR_TURN, OWNERSHIP
from cardgame_engine.validate import (
    can_play_card, can_play_cards, get_valid_cards, next_rank, validate_play,
)


def test_same_rank_is_playable(card):
    assert can_play_card(card("7", "clubs"), card("7", "hearts"))


def test_next_rank_is_playable(card):
    assert can_play_card(card("8", "spades"), card("7", "diamonds"))
    assert can_play_card(card("J", "spades"), card("10", "diamonds"))
    assert can_play_card(card("K", "spades"), card("Q", "diamonds"))


def test_other_ranks_are_not_playable(card):
    assert not can_play_card(card("5", "spades"), card("7", "diamonds"))
    assert not can_play_card(card("6", "spades"), card("7", "diamonds"))
    assert not can_play_card(card("9", "spades"), card("7", "diamonds"))
    assert not can_play_card(card("K", "spades"), card("A", "diamonds"))


def test_ace_wraps_onto_king(card):
    assert can_play_card(card("A", "clubs"), card("K", "hearts"))
    assert can_play_card(card("2", "clubs"), card("A", "hearts"))
    assert not can_play_card(card("2", "clubs"), card("K", "hearts"))


def test_next_rank_wraps():
    assert next_rank(Rank.SEVEN) == Rank.EIGHT
    assert next_rank(Rank.KING) == Rank.ACE


def test_empty_play_rejected(card):
    assert not can_play_cards([], card("5", "hearts"))


def test_single_card_delegates(card):
    assert can_play_cards([card("6", "clubs")], card("5", "hearts"))
    assert not can_play_cards([card("7", "clubs")], card("5", "hearts"))


def test_mixed_individually_valid_cards(card):
    # a 7 and an 8 together on a 7
    assert can_play_cards([card("7", "clubs"), card("8", "spades")], card("7", "hearts"))


def test_same_rank_group(card):
    assert can_play_cards([card("7", "clubs"), card("7", "spades")], card("7", "hearts"))
    assert can_play_cards([card("8", "clubs"), card("8", "spades"), card("8", "diamonds")], card("7", "hearts"))
    assert not can_play_cards([card("4", "clubs"), card("4", "spades")], card("9", "hearts"))


def test_sum_rule(card):
    assert can_play_cards([card("2", "clubs"), card("3", "diamonds")], card("5", "hearts"))
    assert not can_play_cards([card("2", "clubs"), card("4", "diamonds")], card("5", "hearts"))
    assert can_play_cards([card("A", "clubs"), card("2", "diamonds"), card("10", "spades")], card("K", "hearts"))


def test_sum_rule_uses_face_points(card):
    # J(11) + 2 = 13 = King
    assert can_play_cards([card("J", "clubs"), card("2", "diamonds")], card("K", "hearts"))


def test_multi_card_validation_is_order_independent(card):
    top = card("5", "hearts")
    cards = [card("2", "clubs"), card("3", "diamonds"), card("6", "spades")]
    results = {can_play_cards(list(p), top) for p in itertools.permutations(cards)}
    assert len(results) == 1

    legal = [card("2", "clubs"), card("3", "diamonds")]
    assert all(can_play_cards(list(p), top) for p in itertools.permutations(legal))


def test_get_valid_cards(card):
    hand = [card("4", "clubs"), card("5", "clubs"), card("6", "clubs"), card("K", "clubs")]
    valid = get_valid_cards(hand, card("5", "hearts"))
    assert [c.id for c in valid] == ["5C", "6C"]

    assert get_valid_cards([card("9", "clubs")], card("5", "hearts")) == []
    assert get_valid_cards([], card("5", "hearts")) == []


def test_empty_pile_accepts_anything(card):
    assert can_play_card(card("9", "clubs"), None)
    assert can_play_cards([card("9", "clubs"), card("2", "spades")], None)
    assert not can_play_cards([], None)


def test_validate_play_success(card, table):
    state = table([[card("5", "clubs"), card("6", "clubs")], [card("9", "spades")]], card("5", "hearts"))

    result = validate_play(state, "p1", ["6C", "5C"])

    assert result.valid
    assert [c.id for c in result.cards] == ["6C", "5C"]


def test_validate_play_guards(card, table):
    state = table([[card("5", "clubs"), card("K", "clubs")], [card("9", "spades")]], card("5", "hearts"))

    assert validate_play(state, "p2", ["9S"]).error_code == NOT_YOUR_TURN
    assert validate_play(state, "p1", []).error_code == EMPTY_PLAY
    assert validate_play(state, "p1", ["9S"]).error_code == OWNERSHIP
    assert validate_play(state, "p1", ["5C", "5C"]).error_code == OWNERSHIP
    assert validate_play(state, "p1", ["KC"]).error_code == INVALID_PLAY

    state.enter_phase(GamePhase.WAITING_FOR_TURN)
    assert validate_play(state, "p1", ["5C"]).error_code == ACTION_NOT_ALLOWED
