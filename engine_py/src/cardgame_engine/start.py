#!/usr/bin/env python3
"""Headless demo: plays one round between simple local players"""

import asyncio
import logging
import os

from .commands import JoinGame, PlayCards, StartGame
from .constants import GamePhase
from .rules import create_rules
from .runtime import GameRuntime
from .shuffle import sort_hand
from .turns import auto_resolution, player_valid_cards

logger = logging.getLogger(__name__)


def _play_lowest_valid_card(runtime: GameRuntime) -> None:
    state = runtime.state
    if state.phase != GamePhase.PLAYER_TURN or auto_resolution(state) is not None:
        return
    player = state.current_player
    card = sort_hand(player_valid_cards(state, player))[0]
    runtime.send(PlayCards(cards=[card.id], player_id=player.id))


async def run_demo(player_names, seed=None, fast=True):
    overrides = {}
    if fast:
        overrides = dict(starting_delay_ms=50, turn_delay_ms=20, ending_delay_ms=50, tick_interval_ms=10)
    runtime = GameRuntime(rules=create_rules(**overrides))
    loop = asyncio.get_running_loop()
    runtime.subscribe(lambda state: loop.call_soon(_play_lowest_valid_card, runtime))

    for i, name in enumerate(player_names):
        runtime.send(JoinGame(player_id=f"p{i + 1}", player_name=name))
    runtime.send(StartGame(seed=seed))

    try:
        return await runtime.wait_for(GamePhase.GAME_OVER, timeout=120)
    finally:
        runtime.close()


def main():
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "info").upper())
    names = [n.strip() for n in os.getenv("PLAYERS", "Alice,Bob,Charlie").split(",") if n.strip()]
    seed = os.getenv("SEED")
    fast = os.getenv("FAST", "true").lower() == "true"
    logger.info(f"Starting demo round with {', '.join(names)}")

    state = asyncio.run(run_demo(names, int(seed) if seed else None, fast))

    print(f"Round {state.game_id[:8]} over: {state.end_reason.value if state.end_reason else 'unknown'}")
    for score in state.final_scores:
        print(f"  {score.player_name:<12} {score.final_score:>3}  {' '.join(str(c) for c in score.hand_cards)}")
    if state.winner:
        print(f"Winner: {state.winner.player_name}")


if __name__ == "__main__":
    main()
