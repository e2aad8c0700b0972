"""Game models and data structures"""

import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from .constants import (
    GameEndReason, GamePhase, Rank, Suit,
    SUIT_SYMBOLS, get_card_points, make_card_id,
)
from .rules import RuleConfig, default_rules


@dataclass(frozen=True)
class Card:
    id: str
    suit: Suit
    rank: Rank
    points: int

    def __post_init__(self) -> None:
        if not isinstance(self.suit, Suit):
            raise TypeError(f"suit must be a Suit, got {type(self.suit)}")
        if not isinstance(self.rank, Rank):
            raise TypeError(f"rank must be a Rank, got {type(self.rank)}")
        if self.points != get_card_points(self.rank):
            raise ValueError(f"points {self.points} do not match rank {self.rank.value}")

    @classmethod
    def of(cls, rank: Rank, suit: Suit) -> 'Card':
        """Build a card with its id and point value derived from rank and suit."""
        rank, suit = Rank(rank), Suit(suit)
        return cls(id=make_card_id(rank, suit), suit=suit, rank=rank, points=get_card_points(rank))

    def __str__(self) -> str:
        return f"{self.rank.value}{SUIT_SYMBOLS[self.suit]}"


@dataclass
class Player:
    id: str
    name: str
    seat: int
    hand: List[Card] = field(default_factory=list)
    is_current_player: bool = False

    def find_card(self, card_id: str) -> Optional[Card]:
        for card in self.hand:
            if card.id == card_id:
                return card
        return None


@dataclass
class PlayerScore:
    player_id: str
    player_name: str
    final_score: int
    hand_cards: List[Card] = field(default_factory=list)


@dataclass
class AutoPlayNotification:
    player_id: str
    player_name: str
    card: Optional[Card]  # None for an auto-skip
    timestamp: float
    type: str  # auto-play | auto-skip
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


def new_game_id() -> str:
    return str(uuid.uuid4())


@dataclass
class GameState:
    rules: RuleConfig = field(default_factory=lambda: default_rules)
    game_id: str = field(default_factory=new_game_id)
    phase: GamePhase = GamePhase.LOBBY
    version: int = 0
    phase_seq: int = 0  # bumped on every phase entry
    players: List[Player] = field(default_factory=list)
    current_player_index: int = 0
    deck: List[Card] = field(default_factory=list)
    discard_pile: List[Card] = field(default_factory=list)
    game_timer: int = 180  # seconds remaining
    selected_cards: List[Card] = field(default_factory=list)
    round_start_time: Optional[float] = None
    final_scores: List[PlayerScore] = field(default_factory=list)
    winner: Optional[PlayerScore] = None
    notifications: List[AutoPlayNotification] = field(default_factory=list)
    end_reason: Optional[GameEndReason] = None

    @classmethod
    def new(cls, rules: Optional[RuleConfig] = None) -> 'GameState':
        """Create a fresh lobby with the round timer taken from the rules."""
        rules = rules or default_rules
        return cls(rules=rules, game_timer=rules.round_seconds)

    @property
    def current_player(self) -> Optional[Player]:
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    @property
    def top_discard(self) -> Optional[Card]:
        return self.discard_pile[-1] if self.discard_pile else None

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def set_current_player(self, index: int) -> None:
        """Mark exactly one player as current."""
        self.current_player_index = index
        for i, player in enumerate(self.players):
            player.is_current_player = i == index

    def clear_current_player(self) -> None:
        for player in self.players:
            player.is_current_player = False

    def add_notification(self, notification: AutoPlayNotification) -> None:
        """Append a notification, evicting the oldest beyond the configured limit."""
        self.notifications.append(notification)
        limit = self.rules.notification_limit
        if len(self.notifications) > limit:
            self.notifications = self.notifications[-limit:]

    def enter_phase(self, phase: GamePhase) -> None:
        self.phase = phase
        self.phase_seq += 1

    def increment_version(self) -> None:
        self.version += 1
