"""Game constants and utilities"""

from enum import Enum
from typing import Dict, List, Tuple


class Suit(str, Enum):
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"


class Rank(str, Enum):
    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"


class GamePhase(str, Enum):
    LOBBY = "lobby"
    GAME_STARTING = "game_starting"
    PLAYER_TURN = "player_turn"
    WAITING_FOR_TURN = "waiting_for_turn"
    GAME_ENDING = "game_ending"
    GAME_OVER = "game_over"


class GameEndReason(str, Enum):
    TIMER_EXPIRED = "timer_expired"
    NO_VALID_MOVES = "no_valid_moves"
    MANUAL_END = "manual_end"
    PLAYER_WON = "player_won"


# Highest priority first
END_REASON_PRECEDENCE: List[GameEndReason] = [
    GameEndReason.PLAYER_WON,
    GameEndReason.MANUAL_END,
    GameEndReason.NO_VALID_MOVES,
    GameEndReason.TIMER_EXPIRED,
]

SUITS = [Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES]
RANK_ORDER = [
    Rank.ACE, Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX, Rank.SEVEN,
    Rank.EIGHT, Rank.NINE, Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING,
]
SUIT_LETTERS: Dict[Suit, str] = {
    Suit.HEARTS: "H",
    Suit.DIAMONDS: "D",
    Suit.CLUBS: "C",
    Suit.SPADES: "S",
}
SUIT_SYMBOLS: Dict[Suit, str] = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

DECK_SIZE = len(SUITS) * len(RANK_ORDER)

ACTIVE_PHASES = (GamePhase.PLAYER_TURN, GamePhase.WAITING_FOR_TURN)

NOTIFICATION_AUTO_PLAY = "auto-play"
NOTIFICATION_AUTO_SKIP = "auto-skip"


def get_card_points(rank: Rank) -> int:
    """Point value of a rank: Ace=1, 2-10 face value, Jack=11, Queen=12, King=13."""
    return RANK_ORDER.index(Rank(rank)) + 1


def make_card_id(rank: Rank, suit: Suit) -> str:
    return f"{Rank(rank).value}{SUIT_LETTERS[Suit(suit)]}"


def parse_card(card_id: str) -> Tuple[Rank, Suit]:
    letter = card_id[-1:]
    for suit, suit_letter in SUIT_LETTERS.items():
        if suit_letter == letter:
            return Rank(card_id[:-1]), suit
    raise ValueError(f"Invalid card id: {card_id}")
