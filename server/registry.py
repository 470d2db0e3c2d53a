from __future__ import annotations

import asyncio
import uuid
from typing import Dict, Optional

from monodeal import Player, create_game
from monodeal.agents import Agent, GreedyAgent, RandomAgent
from monodeal.exceptions import GameNotFoundError
from monodeal.settings import get_game_settings

from server.runner import GameRunner


def make_agent(kind: str, player_id: int, name: str) -> Agent:
    if kind == "random":
        return RandomAgent(player_id, name)
    return GreedyAgent(player_id, name)


class GameRegistry:
    """In-memory registry of running games."""

    def __init__(self):
        self._games: Dict[str, GameRunner] = {}
        self._lock = asyncio.Lock()

    async def create_game(
        self,
        *,
        human_name: str = "You",
        ai_name: str = "AI",
        agent: str = "greedy",
        human: bool = True,
        seed: Optional[int] = None,
        time_limit_turns: Optional[int] = None,
        tick_ms: Optional[int] = None,
    ) -> str:
        game_id = uuid.uuid4().hex[:12]

        config = get_game_settings().to_game_config(seed=seed, time_limit_turns=time_limit_turns)
        players = [Player(0, human_name, is_ai=not human), Player(1, ai_name, is_ai=True)]
        agents = {p.player_id: make_agent(agent, p.player_id, p.name) for p in players if p.is_ai}
        game = create_game(config, players, agents)

        runner = GameRunner(game_id=game_id, game=game, tick_ms=tick_ms)
        async with self._lock:
            self._games[game_id] = runner

        await runner.start()
        return game_id

    async def get(self, game_id: str) -> Optional[GameRunner]:
        return self._games.get(game_id)

    async def require(self, game_id: str) -> GameRunner:
        runner = self._games.get(game_id)
        if runner is None:
            raise GameNotFoundError(game_id)
        return runner

    async def stop(self, game_id: str) -> bool:
        async with self._lock:
            runner = self._games.get(game_id)
            if not runner:
                return False
            await runner.stop()
            del self._games[game_id]
            return True

    async def stop_all(self) -> None:
        for game_id in list(self._games):
            await self.stop(game_id)
