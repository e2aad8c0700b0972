# engine_py/src/cardgame_engine/scoring.py

from typing import List, Optional

from .models import Card, Player, PlayerScore


def calculate_hand_score(hand: List[Card]) -> int:
    """Total point value of a hand; an empty hand scores 0."""
    return sum(card.points for card in hand)


def compute_final_scores(players: List[Player]) -> List[PlayerScore]:
    """Score every player's remaining hand, in seat order."""
    return [
        PlayerScore(
            player_id=player.id,
            player_name=player.name,
            final_score=calculate_hand_score(player.hand),
            hand_cards=list(player.hand),
        )
        for player in players
    ]


def determine_winner(scores: List[PlayerScore]) -> Optional[PlayerScore]:
    """
    Pick the player with the lowest final score.

    Ties go to the first such player in seat order.
    """
    winner = None
    for score in scores:
        if winner is None or score.final_score < winner.final_score:
            winner = score
    return winner
