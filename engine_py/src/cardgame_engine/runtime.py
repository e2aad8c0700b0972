"""
Runtime that drives the state machine in real time.

The machine itself never waits: timed transitions are declared through
`pending_delay`, the countdown arrives as TimerTick commands and forced turns
are resolved by commands from `auto_resolution`. GameRuntime supplies all
three on an asyncio loop and funnels every command through `send`, so the
game state has exactly one writer.
"""

import asyncio
import logging
from typing import Callable, List, Optional

from .commands import Command, CommandType, TimerTick
from .constants import ACTIVE_PHASES, GamePhase
from .engine import TransitionResult, create_game, dispatch, pending_delay
from .models import GameState
from .rules import RuleConfig
from .turns import auto_resolution

logger = logging.getLogger(__name__)

Listener = Callable[[GameState], None]


def settle(
    state: GameState,
    until: Optional[GamePhase] = None,
    auto_resolve: bool = True,
    max_steps: int = 1000
) -> GameState:
    """
    Fast-forward a game without waiting on the clock.

    Fires due delays and forced turns one after another until the game needs
    a player decision, reaches a phase with nothing pending, or enters
    `until`.
    """
    for _ in range(max_steps):
        if until is not None and state.phase == until:
            break

        command = auto_resolution(state) if auto_resolve else None
        if command is None:
            delay = pending_delay(state)
            command = delay[1] if delay else None
        if command is None:
            break

        result = dispatch(state, command)
        if not result.accepted:
            logger.warning(f"Settle stopped: {command.type.value} rejected ({result.error_code})")
            break
        state = result.state
    return state


class GameRuntime:
    """Owns one game and feeds it delays, countdown ticks and forced turns."""

    def __init__(
        self,
        state: Optional[GameState] = None,
        rules: Optional[RuleConfig] = None,
        auto_resolve: bool = True
    ):
        self.state = state or create_game(rules)
        self.auto_resolve = auto_resolve
        self._listeners: List[Listener] = []
        self._delay_handle: Optional[asyncio.TimerHandle] = None
        self._auto_handle: Optional[asyncio.TimerHandle] = None
        self._ticker: Optional[asyncio.Task] = None
        self._phase_changed = asyncio.Condition()

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def resume(self) -> None:
        """Schedule whatever the current phase owes. Needed when the runtime was handed a game mid-round."""
        self._on_phase_entered()

    def send(self, command: Command) -> TransitionResult:
        """Apply a command to the owned state. Must be called on the runtime's loop."""
        previous = self.state
        result = dispatch(previous, command)
        if not result.accepted:
            return result

        self.state = result.state
        if self.state.phase_seq != previous.phase_seq:
            self._on_phase_entered()

        for listener in list(self._listeners):
            try:
                listener(self.state)
            except Exception as e:
                logger.error(f"Snapshot listener failed: {e}")
        return result

    def _on_phase_entered(self) -> None:
        loop = asyncio.get_running_loop()
        self._cancel_scheduled()

        delay = pending_delay(self.state)
        if delay is not None:
            delay_ms, command = delay
            self._delay_handle = loop.call_later(delay_ms / 1000, self._fire, command)

        if self.auto_resolve:
            command = auto_resolution(self.state)
            if command is not None:
                self._auto_handle = loop.call_later(
                    self.state.rules.auto_resolve_delay_ms / 1000, self._fire, command
                )

        if self.state.phase in ACTIVE_PHASES:
            if self._ticker is None or self._ticker.done():
                self._ticker = loop.create_task(self._countdown())
        elif self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

        loop.create_task(self._announce_phase())

    def _fire(self, command: Command) -> None:
        if command.type == CommandType.DELAY_ELAPSED:
            self._delay_handle = None
        else:
            self._auto_handle = None
        result = self.send(command)
        if not result.accepted:
            logger.debug(f"Scheduled {command.type.value} dropped: {result.error_code}")

    def _cancel_scheduled(self) -> None:
        for handle in (self._delay_handle, self._auto_handle):
            if handle is not None:
                handle.cancel()
        self._delay_handle = None
        self._auto_handle = None

    async def _countdown(self):
        """Send one TimerTick per interval while the round is being played."""
        interval = self.state.rules.tick_interval_ms / 1000
        try:
            while self.state.phase in ACTIVE_PHASES:
                await asyncio.sleep(interval)
                if self.state.phase not in ACTIVE_PHASES:
                    break
                self.send(TimerTick(remaining_time=max(0, self.state.game_timer - 1)))
        except asyncio.CancelledError:
            logger.debug(f"Countdown cancelled for game {self.state.game_id[:8]}")
            raise

    async def _announce_phase(self):
        async with self._phase_changed:
            self._phase_changed.notify_all()

    async def wait_for(self, phase: GamePhase, timeout: Optional[float] = None) -> GameState:
        """Wait until the game enters `phase`."""
        async def _wait():
            async with self._phase_changed:
                await self._phase_changed.wait_for(lambda: self.state.phase == phase)
            return self.state

        return await asyncio.wait_for(_wait(), timeout)

    def has_pending_delay(self) -> bool:
        return self._delay_handle is not None

    def close(self) -> None:
        """Cancel every scheduled transition and the countdown."""
        self._cancel_scheduled()
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
