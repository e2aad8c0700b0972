"""
Shared fixtures for engine tests.
"""

import pytest

from cardgame_engine.constants import GamePhase
from cardgame_engine.models import Card, GameState, Player


@pytest.fixture
def card():
    """Factory: card("7", "clubs") -> Card."""
    def _card(rank, suit="hearts"):
        return Card.of(rank, suit)
    return _card


@pytest.fixture
def table():
    """
    Factory for a game already in progress.

    Players are p1, p2, ... holding the given hands; `top` becomes the only
    card on the discard pile.
    """
    def _table(hands, top, current=0, phase=GamePhase.PLAYER_TURN, rules=None, timer=None):
        state = GameState.new(rules)
        for i, hand in enumerate(hands):
            state.players.append(Player(id=f"p{i + 1}", name=f"Player {i + 1}", seat=i, hand=list(hand)))
        state.discard_pile = [top] if top is not None else []
        state.set_current_player(current)
        state.enter_phase(phase)
        if timer is not None:
            state.game_timer = timer
        return state
    return _table


@pytest.fixture
def ladder(card, table):
    """
    Two players whose every turn has exactly one legal card.

    Player 1 climbs 3,5,7,9,J,K and player 2 climbs 4,6,8,10,Q,A from a 2 on
    the pile, so the round resolves itself in eleven forced plays and ends
    when player 1 lays the King.
    """
    def _ladder(rules=None):
        p1 = [card(r, "clubs") for r in ["3", "5", "7", "9", "J", "K"]]
        p2 = [card(r, "diamonds") for r in ["4", "6", "8", "10", "Q", "A"]]
        return table([p1, p2], card("2", "hearts"), rules=rules)
    return _ladder
