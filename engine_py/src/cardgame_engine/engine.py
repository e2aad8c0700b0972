"""
Game state machine.

`dispatch` is the only way game state changes: it takes the current state and
one command, and returns a TransitionResult holding the next state. The input
state is never mutated. Commands that fail a guard are dropped and the result
carries the unchanged state together with the reason it was rejected.
"""

import copy
import logging
import time
from typing import Callable, Dict, List, Optional, Tuple

from .commands import (
    AutoPlay, CommandType, DelayElapsed, JoinGame, LeaveGame, PlayCards,
    SelectCard, DeselectCard, StartGame, TimerTick, Command,
)
from .constants import (
    END_REASON_PRECEDENCE, NOTIFICATION_AUTO_PLAY, NOTIFICATION_AUTO_SKIP,
    GameEndReason, GamePhase,
)
from .errors import (
    ACTION_NOT_ALLOWED, DUPLICATE_PLAYER, INVALID_PLAY, NO_CHANGE,
    NOT_ENOUGH_PLAYERS, NOT_YOUR_TURN, OWNERSHIP, ROOM_FULL, STALE_DELAY,
    UNKNOWN_PLAYER,
)
from .models import AutoPlayNotification, Card, GameState, Player
from .rules import RuleConfig
from .scoring import compute_final_scores, determine_winner
from .shuffle import create_deck, deal_cards
from .turns import advance_to_next_player, has_any_valid_moves, player_valid_cards
from .validate import can_play_card, validate_play

logger = logging.getLogger(__name__)


class TransitionResult:
    """Outcome of dispatching one command."""

    def __init__(
        self,
        accepted: bool,
        state: Optional[GameState] = None,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None
    ):
        self.accepted = accepted
        self.state = state
        self.error_code = error_code
        self.error_message = error_message

    @classmethod
    def success(cls, state: GameState) -> 'TransitionResult':
        return cls(accepted=True, state=state)

    @classmethod
    def error(cls, error_code: str, error_message: str) -> 'TransitionResult':
        return cls(accepted=False, error_code=error_code, error_message=error_message)


Handler = Callable[[GameState, Command], TransitionResult]


def create_game(rules: Optional[RuleConfig] = None) -> GameState:
    """Create a game in the lobby with no players."""
    return GameState.new(rules)


def is_in_state(state: GameState, phase: GamePhase) -> bool:
    return state.phase == GamePhase(phase)


def resolve_end_reason(*reasons: Optional[GameEndReason]) -> Optional[GameEndReason]:
    """Pick the highest-priority reason among those that currently hold."""
    present = [reason for reason in reasons if reason is not None]
    if not present:
        return None
    return min(present, key=END_REASON_PRECEDENCE.index)


def pending_delay(state: GameState) -> Optional[Tuple[int, DelayElapsed]]:
    """
    The timed transition owed by the current phase, if any.

    Returns (delay in milliseconds, command to dispatch once it elapses). The
    command is bound to the current phase instance and is rejected as stale
    if the phase has been left in the meantime.
    """
    delays = {
        GamePhase.GAME_STARTING: state.rules.starting_delay_ms,
        GamePhase.WAITING_FOR_TURN: state.rules.turn_delay_ms,
        GamePhase.GAME_ENDING: state.rules.ending_delay_ms,
    }
    if state.phase not in delays:
        return None
    return delays[state.phase], DelayElapsed(phase_seq=state.phase_seq)


# ---------------------------------------------------------------------------
# Phase entry actions
# ---------------------------------------------------------------------------

def _enter_game_starting(state: GameState, seed: Optional[int] = None) -> None:
    state.enter_phase(GamePhase.GAME_STARTING)
    state.deck = create_deck(seed)
    state.discard_pile = []
    state.round_start_time = time.time()
    state.game_timer = state.rules.round_seconds


def _enter_player_turn(state: GameState) -> None:
    state.enter_phase(GamePhase.PLAYER_TURN)
    state.selected_cards = []


def _enter_waiting_for_turn(state: GameState) -> None:
    state.enter_phase(GamePhase.WAITING_FOR_TURN)
    advance_to_next_player(state)


def _enter_game_ending(state: GameState, reason: GameEndReason) -> None:
    state.enter_phase(GamePhase.GAME_ENDING)
    state.end_reason = reason
    state.selected_cards = []
    state.clear_current_player()
    state.final_scores = compute_final_scores(state.players)
    state.winner = determine_winner(state.final_scores)
    logger.info(
        f"Round {state.game_id[:8]} ended ({reason.value}); winner: "
        f"{state.winner.player_name if state.winner else None}"
    )


def _finish_turn(state: GameState, player: Player) -> None:
    """Leave the turn after a play: end the round on an empty hand, else pass control."""
    reason = resolve_end_reason(
        GameEndReason.PLAYER_WON if not player.hand else None,
        GameEndReason.TIMER_EXPIRED if state.game_timer <= 0 else None,
    )
    if reason is not None:
        _enter_game_ending(state, reason)
    else:
        _enter_waiting_for_turn(state)


def _remove_from_hand(state: GameState, player: Player, cards: List[Card]) -> None:
    played_ids = {card.id for card in cards}
    player.hand = [card for card in player.hand if card.id not in played_ids]
    state.discard_pile.extend(cards)
    state.selected_cards = []
    player.is_current_player = False


def _notify(state: GameState, player: Player, card: Optional[Card], kind: str) -> None:
    state.add_notification(AutoPlayNotification(
        player_id=player.id,
        player_name=player.name,
        card=card,
        timestamp=time.time(),
        type=kind,
    ))


def _reseat(state: GameState) -> None:
    for seat, player in enumerate(state.players):
        player.seat = seat


def _check_delay(state: GameState, command: DelayElapsed) -> Optional[TransitionResult]:
    if command.phase_seq != state.phase_seq:
        return TransitionResult.error(
            STALE_DELAY,
            f"Delay scheduled for phase instance {command.phase_seq}, now at {state.phase_seq}"
        )
    return None


def _require_current_player(state: GameState, player_id: str) -> Tuple[Optional[Player], Optional[TransitionResult]]:
    player = state.current_player
    if player is None or player.id != player_id:
        return None, TransitionResult.error(NOT_YOUR_TURN, f"It's not {player_id}'s turn")
    return player, None


# ---------------------------------------------------------------------------
# Lobby
# ---------------------------------------------------------------------------

def _join(state: GameState, command: JoinGame) -> TransitionResult:
    if state.get_player(command.player_id) is not None:
        return TransitionResult.error(DUPLICATE_PLAYER, f"Player {command.player_id} already joined")
    if len(state.players) >= state.rules.max_players:
        return TransitionResult.error(ROOM_FULL, "Room is full")

    state.players.append(Player(
        id=command.player_id,
        name=command.player_name,
        seat=len(state.players),
    ))
    return TransitionResult.success(state)


def _leave(state: GameState, command: LeaveGame) -> TransitionResult:
    player = state.get_player(command.player_id)
    if player is None:
        return TransitionResult.error(UNKNOWN_PLAYER, f"Player {command.player_id} not found")

    state.players = [p for p in state.players if p.id != command.player_id]
    _reseat(state)
    return TransitionResult.success(state)


def _start(state: GameState, command: StartGame) -> TransitionResult:
    if not state.rules.validate_player_count(len(state.players)):
        return TransitionResult.error(
            NOT_ENOUGH_PLAYERS,
            f"Need at least {state.rules.min_players} players (have {len(state.players)})"
        )

    _enter_game_starting(state, command.seed)
    return TransitionResult.success(state)


# ---------------------------------------------------------------------------
# Game starting
# ---------------------------------------------------------------------------

def _deal(state: GameState, command: DelayElapsed) -> TransitionResult:
    stale = _check_delay(state, command)
    if stale:
        return stale

    hands, remaining = deal_cards(state.deck, len(state.players), state.rules.cards_per_player)
    for player, hand in zip(state.players, hands):
        player.hand = hand

    # Place first card on the discard pile
    state.discard_pile = remaining[:1]
    state.deck = remaining[1:]
    state.set_current_player(0)
    _enter_player_turn(state)
    return TransitionResult.success(state)


# ---------------------------------------------------------------------------
# Player turn
# ---------------------------------------------------------------------------

def _select_card(state: GameState, command: SelectCard) -> TransitionResult:
    player, rejected = _require_current_player(state, command.player_id)
    if rejected:
        return rejected

    card = player.find_card(command.card_id)
    if card is None:
        return TransitionResult.error(OWNERSHIP, f"You don't own {command.card_id}")
    if any(selected.id == card.id for selected in state.selected_cards):
        return TransitionResult.error(NO_CHANGE, f"{command.card_id} is already selected")

    state.selected_cards.append(card)
    return TransitionResult.success(state)


def _deselect_card(state: GameState, command: DeselectCard) -> TransitionResult:
    _, rejected = _require_current_player(state, command.player_id)
    if rejected:
        return rejected

    remaining = [card for card in state.selected_cards if card.id != command.card_id]
    if len(remaining) == len(state.selected_cards):
        return TransitionResult.error(NO_CHANGE, f"{command.card_id} is not selected")

    state.selected_cards = remaining
    return TransitionResult.success(state)


def _play_cards(state: GameState, command: PlayCards) -> TransitionResult:
    validation = validate_play(state, command.player_id, command.cards)
    if not validation.valid:
        return TransitionResult.error(validation.error_code, validation.error_message)

    player = state.current_player
    _remove_from_hand(state, player, validation.cards)
    _finish_turn(state, player)
    return TransitionResult.success(state)


def _auto_play(state: GameState, command: AutoPlay) -> TransitionResult:
    player, rejected = _require_current_player(state, command.player_id)
    if rejected:
        return rejected

    card = player.find_card(command.card)
    if card is None:
        return TransitionResult.error(OWNERSHIP, f"You don't own {command.card}")
    if not can_play_card(card, state.top_discard):
        return TransitionResult.error(INVALID_PLAY, f"{card} cannot be played on {state.top_discard}")

    _remove_from_hand(state, player, [card])
    _notify(state, player, card, NOTIFICATION_AUTO_PLAY)
    _finish_turn(state, player)
    return TransitionResult.success(state)


def _auto_skip(state: GameState, command: Command) -> TransitionResult:
    player = state.current_player
    if player is None:
        return TransitionResult.error(NOT_YOUR_TURN, "No current player")
    if player_valid_cards(state, player):
        return TransitionResult.error(INVALID_PLAY, f"{player.name} has a legal card and cannot be skipped")

    state.selected_cards = []
    player.is_current_player = False
    _notify(state, player, None, NOTIFICATION_AUTO_SKIP)
    _enter_waiting_for_turn(state)
    return TransitionResult.success(state)


def _manual_end(state: GameState, command: Command) -> TransitionResult:
    _enter_game_ending(state, GameEndReason.MANUAL_END)
    return TransitionResult.success(state)


def _timer_tick(state: GameState, command: TimerTick) -> TransitionResult:
    state.game_timer = command.remaining_time
    if command.remaining_time <= 0:
        _enter_game_ending(state, GameEndReason.TIMER_EXPIRED)
    return TransitionResult.success(state)


# ---------------------------------------------------------------------------
# Waiting for turn / ending / game over
# ---------------------------------------------------------------------------

def _start_next_turn(state: GameState, command: DelayElapsed) -> TransitionResult:
    stale = _check_delay(state, command)
    if stale:
        return stale

    reason = resolve_end_reason(
        GameEndReason.NO_VALID_MOVES if not has_any_valid_moves(state) else None,
        GameEndReason.TIMER_EXPIRED if state.game_timer <= 0 else None,
    )
    if reason is not None:
        _enter_game_ending(state, reason)
    else:
        _enter_player_turn(state)
    return TransitionResult.success(state)


def _finish_game(state: GameState, command: DelayElapsed) -> TransitionResult:
    stale = _check_delay(state, command)
    if stale:
        return stale

    state.enter_phase(GamePhase.GAME_OVER)
    return TransitionResult.success(state)


def _restart(state: GameState, command: Command) -> TransitionResult:
    fresh = GameState.new(state.rules)
    fresh.version = state.version
    fresh.phase_seq = state.phase_seq
    fresh.enter_phase(GamePhase.LOBBY)
    return TransitionResult.success(fresh)


_HANDLERS: Dict[GamePhase, Dict[CommandType, Handler]] = {
    GamePhase.LOBBY: {
        CommandType.JOIN: _join,
        CommandType.LEAVE: _leave,
        CommandType.START: _start,
    },
    GamePhase.GAME_STARTING: {
        CommandType.DELAY_ELAPSED: _deal,
    },
    GamePhase.PLAYER_TURN: {
        CommandType.SELECT_CARD: _select_card,
        CommandType.DESELECT_CARD: _deselect_card,
        CommandType.PLAY_CARDS: _play_cards,
        CommandType.AUTO_PLAY: _auto_play,
        CommandType.AUTO_SKIP: _auto_skip,
        CommandType.END_GAME: _manual_end,
        CommandType.TIMER_TICK: _timer_tick,
    },
    GamePhase.WAITING_FOR_TURN: {
        CommandType.DELAY_ELAPSED: _start_next_turn,
        CommandType.END_GAME: _manual_end,
        CommandType.TIMER_TICK: _timer_tick,
    },
    GamePhase.GAME_ENDING: {
        CommandType.DELAY_ELAPSED: _finish_game,
    },
    GamePhase.GAME_OVER: {
        CommandType.RESTART: _restart,
        CommandType.LEAVE: _leave,
    },
}


def dispatch(state: GameState, command: Command) -> TransitionResult:
    """
    Apply one command to the game.

    Args:
        state: Current game state (left untouched)
        command: Command to apply

    Returns:
        TransitionResult; on rejection `state` is the input state itself
    """
    handler = _HANDLERS[state.phase].get(command.type)
    if handler is None:
        result = TransitionResult.error(
            ACTION_NOT_ALLOWED,
            f"{command.type.value} is not handled in {state.phase.value}"
        )
    else:
        # RuleConfig is immutable in practice, share it rather than copy it
        new_state = copy.deepcopy(state, {id(state.rules): state.rules})
        result = handler(new_state, command)

    if not result.accepted:
        logger.debug(f"Dropped {command.type.value} in {state.phase.value}: [{result.error_code}] {result.error_message}")
        result.state = state
        return result

    result.state.increment_version()
    if result.state.phase != state.phase:
        logger.info(f"Game {state.game_id[:8]}: {state.phase.value} -> {result.state.phase.value} on {command.type.value}")
    return result


def transition(state: GameState, command: Command) -> GameState:
    """Apply one command and return the resulting state (unchanged if rejected)."""
    return dispatch(state, command).state
