"""
Move validation for card plays.
"""

from typing import List, Optional

from .constants import RANK_ORDER, GamePhase, Rank
from .errors import (
    ACTION_NOT_ALLOWED, EMPTY_PLAY, INVALID_PLAY, NOT_YOUR_TURN, OWNERSHIP,
)
from .models import Card, GameState


class ValidationResult:
    """Result of play validation."""

    def __init__(
        self,
        valid: bool,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        cards: Optional[List[Card]] = None
    ):
        self.valid = valid
        self.error_code = error_code
        self.error_message = error_message
        self.cards = cards or []

    @classmethod
    def success(cls, cards: List[Card]) -> 'ValidationResult':
        """Create a successful validation result."""
        return cls(valid=True, cards=cards)

    @classmethod
    def error(cls, error_code: str, error_message: str) -> 'ValidationResult':
        """Create an error validation result."""
        return cls(valid=False, error_code=error_code, error_message=error_message)


def can_play_card(card: Card, top_discard: Optional[Card]) -> bool:
    """
    Check whether a single card may be placed on the discard pile.

    A card is playable on the same rank or on the rank directly below it,
    with the order wrapping from King back to Ace. An empty pile accepts
    any card.
    """
    if top_discard is None:
        return True
    if card.rank == top_discard.rank:
        return True
    # Ace on King
    if card.rank == Rank.ACE and top_discard.rank == Rank.KING:
        return True
    return card.points == top_discard.points + 1


def can_play_cards(cards: List[Card], top_discard: Optional[Card]) -> bool:
    """
    Check whether a set of cards may be played together.

    Multiple cards are legal when every card is individually playable, when
    they all share one playable rank, or when their point values sum to the
    point value of the top card.
    """
    if not cards:
        return False
    if len(cards) == 1:
        return can_play_card(cards[0], top_discard)
    if top_discard is None:
        return True

    if all(can_play_card(card, top_discard) for card in cards):
        return True

    first_rank = cards[0].rank
    if all(card.rank == first_rank for card in cards):
        return can_play_card(cards[0], top_discard)

    return sum(card.points for card in cards) == top_discard.points


def get_valid_cards(hand: List[Card], top_discard: Optional[Card]) -> List[Card]:
    """Cards in hand that are individually playable on the top card."""
    return [card for card in hand if can_play_card(card, top_discard)]


def next_rank(rank: Rank) -> Rank:
    """The rank that may be played on top of `rank` besides itself."""
    index = RANK_ORDER.index(Rank(rank))
    return RANK_ORDER[(index + 1) % len(RANK_ORDER)]


def validate_play(
    state: GameState,
    player_id: str,
    card_ids: List[str]
) -> ValidationResult:
    """
    Validate a card play attempt.

    Args:
        state: Current game state
        player_id: ID of player attempting the play
        card_ids: Card IDs being played, in the order they go onto the pile

    Returns:
        ValidationResult carrying the resolved cards on success
    """
    if state.phase != GamePhase.PLAYER_TURN:
        return ValidationResult.error(
            ACTION_NOT_ALLOWED,
            f"Game is not in a player turn (current: {state.phase.value})"
        )

    player = state.current_player
    if player is None or player.id != player_id:
        return ValidationResult.error(
            NOT_YOUR_TURN,
            f"It's not your turn (current turn: {player.id if player else None})"
        )

    if not card_ids:
        return ValidationResult.error(EMPTY_PLAY, "No cards to play")

    if len(set(card_ids)) != len(card_ids):
        return ValidationResult.error(OWNERSHIP, "The same card was submitted twice")

    cards = []
    for card_id in card_ids:
        card = player.find_card(card_id)
        if card is None:
            return ValidationResult.error(OWNERSHIP, f"You don't own {card_id}")
        cards.append(card)

    if not can_play_cards(cards, state.top_discard):
        top = state.top_discard
        return ValidationResult.error(
            INVALID_PLAY,
            f"Cards {', '.join(str(c) for c in cards)} cannot be played on {top}"
        )

    return ValidationResult.success(cards)
