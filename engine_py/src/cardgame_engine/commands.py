"""
Inbound command models and validation.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import INVALID_COMMAND, raise_error


class CommandType(str, Enum):
    """Inbound command types."""
    JOIN = "join"
    START = "start"
    SELECT_CARD = "select_card"
    DESELECT_CARD = "deselect_card"
    PLAY_CARDS = "play_cards"
    AUTO_PLAY = "auto_play"
    AUTO_SKIP = "auto_skip"
    TIMER_TICK = "timer_tick"
    END_GAME = "end_game"
    RESTART = "restart"
    LEAVE = "leave"
    DELAY_ELAPSED = "delay_elapsed"


class BaseCommand(BaseModel):
    """Base command model."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: CommandType


class JoinGame(BaseCommand):
    """Register a player in the lobby."""
    type: CommandType = CommandType.JOIN
    player_id: str = Field(..., min_length=1, max_length=64)
    player_name: str = Field(..., min_length=1, max_length=30)


class StartGame(BaseCommand):
    """Request the round to start."""
    type: CommandType = CommandType.START
    seed: Optional[int] = None


class SelectCard(BaseCommand):
    type: CommandType = CommandType.SELECT_CARD
    card_id: str = Field(..., min_length=1)
    player_id: str = Field(..., min_length=1)


class DeselectCard(BaseCommand):
    type: CommandType = CommandType.DESELECT_CARD
    card_id: str = Field(..., min_length=1)
    player_id: str = Field(..., min_length=1)


class PlayCards(BaseCommand):
    """Commit a play; cards go onto the pile in the order given."""
    type: CommandType = CommandType.PLAY_CARDS
    cards: List[str] = Field(default_factory=list)
    player_id: str = Field(..., min_length=1)


class AutoPlay(BaseCommand):
    """Play the single legal card on the player's behalf."""
    type: CommandType = CommandType.AUTO_PLAY
    card: str = Field(..., min_length=1)
    player_id: str = Field(..., min_length=1)


class AutoSkip(BaseCommand):
    """Pass the turn of a player without any legal card."""
    type: CommandType = CommandType.AUTO_SKIP


class TimerTick(BaseCommand):
    """One countdown second elapsed."""
    type: CommandType = CommandType.TIMER_TICK
    remaining_time: int


class EndGame(BaseCommand):
    """Manual end of the round."""
    type: CommandType = CommandType.END_GAME


class RestartGame(BaseCommand):
    type: CommandType = CommandType.RESTART


class LeaveGame(BaseCommand):
    type: CommandType = CommandType.LEAVE
    player_id: str = Field(..., min_length=1)


class DelayElapsed(BaseCommand):
    """A timed transition came due for the phase instance `phase_seq`."""
    type: CommandType = CommandType.DELAY_ELAPSED
    phase_seq: int = Field(..., ge=0)


# Union type for all inbound commands
Command = Union[
    JoinGame,
    StartGame,
    SelectCard,
    DeselectCard,
    PlayCards,
    AutoPlay,
    AutoSkip,
    TimerTick,
    EndGame,
    RestartGame,
    LeaveGame,
    DelayElapsed,
]

COMMAND_MODELS = {
    CommandType.JOIN: JoinGame,
    CommandType.START: StartGame,
    CommandType.SELECT_CARD: SelectCard,
    CommandType.DESELECT_CARD: DeselectCard,
    CommandType.PLAY_CARDS: PlayCards,
    CommandType.AUTO_PLAY: AutoPlay,
    CommandType.AUTO_SKIP: AutoSkip,
    CommandType.TIMER_TICK: TimerTick,
    CommandType.END_GAME: EndGame,
    CommandType.RESTART: RestartGame,
    CommandType.LEAVE: LeaveGame,
    CommandType.DELAY_ELAPSED: DelayElapsed,
}


def parse_command(data: Dict[str, Any]) -> Command:
    """
    Parse raw command data into the appropriate command model.

    Args:
        data: Raw command data from the caller

    Returns:
        Parsed command model

    Raises:
        GameError: If the command type is unknown or the data is malformed
    """
    command_type = data.get("type")

    if not command_type:
        raise_error(INVALID_COMMAND, "Missing command type")

    try:
        command_type = CommandType(command_type)
    except ValueError:
        raise_error(INVALID_COMMAND, f"Invalid command type: {command_type}")

    command_class = COMMAND_MODELS[command_type]

    try:
        return command_class(**data)
    except ValidationError as e:
        raise_error(INVALID_COMMAND, f"Invalid command data: {e}")
