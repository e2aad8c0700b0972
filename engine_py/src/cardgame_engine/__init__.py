"""
Turn-based card game engine: match the rank on the pile or climb one step.
"""

from .commands import (
    AutoPlay, AutoSkip, DelayElapsed, DeselectCard, EndGame, JoinGame,
    LeaveGame, PlayCards, RestartGame, SelectCard, StartGame, TimerTick,
    parse_command,
)
from .constants import GameEndReason, GamePhase, Rank, Suit
from .engine import (
    TransitionResult, create_game, dispatch, is_in_state, pending_delay,
    transition,
)
from .models import Card, GameState, Player
from .rules import RuleConfig, create_rules, default_rules
from .runtime import GameRuntime, settle

__version__ = "1.0.0"
