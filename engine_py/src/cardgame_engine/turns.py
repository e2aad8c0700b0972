"""
Turn order and automatic resolution of forced turns.
"""

from typing import List, Optional

from .commands import AutoPlay, AutoSkip, Command
from .constants import GamePhase
from .models import Card, GameState, Player
from .validate import get_valid_cards


def player_valid_cards(state: GameState, player: Player) -> List[Card]:
    return get_valid_cards(player.hand, state.top_discard)


def has_valid_moves(state: GameState, player: Player) -> bool:
    return len(player_valid_cards(state, player)) > 0


def has_any_valid_moves(state: GameState) -> bool:
    """False when no player anywhere can play on the current top card."""
    return any(has_valid_moves(state, player) for player in state.players)


def next_player_index(state: GameState) -> int:
    """
    Find the next player able to move.

    Scans seats cyclically from the seat after the current player and returns
    the first one holding a legal card. When nobody can move the scan wraps
    all the way around and the seat right after the current player is
    returned; the deadlock is detected separately by `has_any_valid_moves`.
    """
    count = len(state.players)
    if count == 0:
        return 0

    start = (state.current_player_index + 1) % count
    for offset in range(count):
        index = (start + offset) % count
        if has_valid_moves(state, state.players[index]):
            return index
    return start


def advance_to_next_player(state: GameState) -> GameState:
    """Mark the next eligible player as current. Mutates and returns state."""
    state.set_current_player(next_player_index(state))
    state.selected_cards = []
    return state


def auto_resolution(state: GameState) -> Optional[Command]:
    """
    Decide whether the current turn resolves without player input.

    Returns an AutoPlay for the only legal card, an AutoSkip when there is no
    legal card, or None when the player has a real choice to make.
    """
    if state.phase != GamePhase.PLAYER_TURN:
        return None

    player = state.current_player
    if player is None:
        return None

    valid_cards = player_valid_cards(state, player)
    if len(valid_cards) == 1:
        return AutoPlay(card=valid_cards[0].id, player_id=player.id)
    if not valid_cards:
        return AutoSkip()
    return None
