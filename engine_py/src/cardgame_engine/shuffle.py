"""
Card shuffling and dealing utilities.
"""

import random
from typing import List, Optional, Tuple

from .constants import DECK_SIZE, RANK_ORDER, SUITS
from .models import Card, GameState


def build_ordered_deck() -> List[Card]:
    """Create the 52 cards of a standard deck in suit-major order."""
    deck = []
    for suit in SUITS:
        for rank in RANK_ORDER:
            deck.append(Card.of(rank, suit))
    return deck


def shuffle_deck(deck: List[Card], seed: Optional[int] = None) -> List[Card]:
    """
    Shuffle a deck with a Fisher-Yates pass, deterministically if seed is provided.

    Args:
        deck: Cards to shuffle
        seed: Optional seed for deterministic shuffling

    Returns:
        Shuffled copy of the deck
    """
    deck_copy = deck.copy()
    rng = random.Random(seed) if seed is not None else random

    for i in range(len(deck_copy) - 1, 0, -1):
        j = rng.randint(0, i)
        deck_copy[i], deck_copy[j] = deck_copy[j], deck_copy[i]

    return deck_copy


def create_deck(seed: Optional[int] = None) -> List[Card]:
    """Create a standard 52-card deck in uniformly random order."""
    return shuffle_deck(build_ordered_deck(), seed)


def deal_cards(
    deck: List[Card],
    num_players: int,
    cards_per_player: int = 7
) -> Tuple[List[List[Card]], List[Card]]:
    """
    Deal cards round-robin style, one card to each player per pass.

    Dealing stops early if the deck runs out. The input deck is not modified.

    Args:
        deck: Shuffled deck of cards
        num_players: Number of hands to deal
        cards_per_player: Target hand size

    Returns:
        Tuple of (hands in player order, undealt remainder)
    """
    hands: List[List[Card]] = [[] for _ in range(num_players)]
    deck_index = 0

    for _ in range(cards_per_player):
        for player_index in range(num_players):
            if deck_index < len(deck):
                hands[player_index].append(deck[deck_index])
                deck_index += 1

    return hands, deck[deck_index:]


def validate_deck_integrity(state: GameState) -> bool:
    """
    Validate that all cards are accounted for and no duplicates exist.

    Only meaningful once a deck has been created for the round.

    Args:
        state: Game state to validate

    Returns:
        True if every card of the deck sits in exactly one container
    """
    expected_ids = {card.id for card in build_ordered_deck()}

    # Collect all cards currently in play
    all_ids = [card.id for card in state.deck]
    all_ids.extend(card.id for card in state.discard_pile)
    for player in state.players:
        all_ids.extend(card.id for card in player.hand)

    return len(all_ids) == DECK_SIZE and set(all_ids) == expected_ids


def sort_hand(hand: List[Card]) -> List[Card]:
    """Sort a hand by rank, then suit, for display."""
    return sorted(hand, key=lambda card: (card.points, SUITS.index(card.suit)))
