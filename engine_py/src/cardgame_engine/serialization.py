"""
State snapshot and serialization utilities.
"""

from typing import Any, Dict, List, Optional

import orjson

from .models import AutoPlayNotification, Card, GameState, PlayerScore
from .validate import next_rank


def serialize_card(card: Optional[Card]) -> Optional[Dict[str, Any]]:
    if card is None:
        return None
    return {
        "id": card.id,
        "suit": card.suit.value,
        "rank": card.rank.value,
        "points": card.points,
    }


def _serialize_cards(cards: List[Card]) -> List[Dict[str, Any]]:
    return [serialize_card(card) for card in cards]


def _serialize_score(score: Optional[PlayerScore]) -> Optional[Dict[str, Any]]:
    if score is None:
        return None
    return {
        "player_id": score.player_id,
        "player_name": score.player_name,
        "final_score": score.final_score,
        "hand_cards": _serialize_cards(score.hand_cards),
    }


def _serialize_notification(notification: AutoPlayNotification) -> Dict[str, Any]:
    return {
        "id": notification.id,
        "player_id": notification.player_id,
        "player_name": notification.player_name,
        "card": serialize_card(notification.card),
        "timestamp": notification.timestamp,
        "type": notification.type,
    }


def snapshot(state: GameState, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Build a read-only view of the game for callers.

    Args:
        state: Game state to expose
        viewer_id: When given, only this player's hand is revealed; other
            hands are reduced to a card count. Final scores always reveal
            the remaining hands.

    Returns:
        Plain dictionary safe for JSON encoding
    """
    top = state.top_discard
    snap = {
        "state": state.phase.value,
        "game_id": state.game_id,
        "version": state.version,
        "current_player_index": state.current_player_index,
        "game_timer": state.game_timer,
        "round_start_time": state.round_start_time,
        "deck_size": len(state.deck),
        "discard_pile": _serialize_cards(state.discard_pile),
        "top_discard": serialize_card(top),
        "playable_ranks": [top.rank.value, next_rank(top.rank).value] if top else [],
        "selected_cards": _serialize_cards(state.selected_cards),
        "players": [],
        "final_scores": [_serialize_score(score) for score in state.final_scores],
        "winner": _serialize_score(state.winner),
        "notifications": [_serialize_notification(n) for n in state.notifications],
        "end_reason": state.end_reason.value if state.end_reason else None,
    }

    for player in state.players:
        player_snap = {
            "id": player.id,
            "name": player.name,
            "seat": player.seat,
            "is_current_player": player.is_current_player,
            "hand_count": len(player.hand),
        }
        if viewer_id is None or player.id == viewer_id:
            player_snap["hand"] = _serialize_cards(player.hand)
        snap["players"].append(player_snap)

    return snap


def snapshot_json(state: GameState, viewer_id: Optional[str] = None) -> bytes:
    """Snapshot encoded as JSON bytes."""
    return orjson.dumps(snapshot(state, viewer_id))


def get_public_game_info(state: GameState) -> Dict[str, Any]:
    """Get public information about a game for listings."""
    return {
        "game_id": state.game_id,
        "state": state.phase.value,
        "player_count": len(state.players),
        "max_players": state.rules.max_players,
        "players": [{"id": p.id, "name": p.name, "seat": p.seat} for p in state.players],
    }
