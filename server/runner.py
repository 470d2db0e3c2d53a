from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

from monodeal.exceptions import InvalidActionError
from monodeal.game import GameState
from monodeal.money import GameEvent
from monodeal.rules import Action, ActionType, apply_action, get_legal_actions
from snapshot import serialize_snapshot

logger = logging.getLogger(__name__)


def serialize_event(index: int, event: GameEvent) -> Dict[str, Any]:
    return {
        "index": index,
        "event_type": event.event_type.value,
        "player_id": event.player_id,
        "details": event.details,
    }


class GameRunner:
    """Owns a single GameState and runs its AI task queue asynchronously.

    Responsibilities:
    - Drain scheduled AI decisions, pausing for the configured delay first
    - Apply actions submitted by the human player
    - Broadcast new events and snapshots to subscribed WebSocket clients
    """

    def __init__(self, game_id: str, game: GameState, tick_ms: Optional[int] = None):
        self.game_id = game_id
        self.game = game
        self._task: Optional[asyncio.Task] = None
        self._stop = asyncio.Event()
        # each client gets a queue of outbound messages, keyed to its viewer seat
        self._clients: Dict[asyncio.Queue, Optional[int]] = {}
        self._last_engine_idx = 0
        self._apply_lock = asyncio.Lock()
        self._new_action_event = asyncio.Event()
        self._paused = False
        # None means use each task's own delay
        self._tick: Optional[float] = None if tick_ms is None else max(0.0, tick_ms / 1000.0)

        self.game.subscribe(self._on_state_changed)

    def _on_state_changed(self, game: GameState) -> None:
        self._new_action_event.set()

    async def start(self) -> None:
        self.game.start()
        logger.info("Game %s started", self.game_id)
        self._task = asyncio.create_task(self._run_loop())

    async def stop(self) -> None:
        self._stop.set()
        self._new_action_event.set()
        if self._task:
            await self._task
        self.game.unsubscribe(self._on_state_changed)

    # Subscription management for WS
    async def subscribe(self, viewer: Optional[int] = None) -> asyncio.Queue:
        q: asyncio.Queue = asyncio.Queue()
        self._clients[q] = viewer
        # Send initial snapshot
        await q.put({
            "type": "snapshot",
            "game_id": self.game_id,
            "snapshot": serialize_snapshot(self.game, viewer=viewer),
            "last_event_index": self._last_engine_idx - 1,
        })
        return q

    async def unsubscribe(self, q: asyncio.Queue) -> None:
        self._clients.pop(q, None)

    async def _broadcast(self, payload: Dict[str, Any]) -> None:
        if not self._clients:
            return
        for q in list(self._clients):
            self._send(q, payload)

    def _send(self, q: asyncio.Queue, payload: Dict[str, Any]) -> None:
        try:
            q.put_nowait(payload)
        except asyncio.QueueFull:
            # Drop client if it cannot keep up
            self._clients.pop(q, None)

    async def _run_loop(self) -> None:
        while not self._stop.is_set():
            await self.flush_and_broadcast()
            if self.game.game_over:
                break

            if self._paused:
                await self._wait_for_external_action()
                continue

            task = self.game.scheduler.peek()
            if task is None:
                # Waiting on the human player
                await self._wait_for_external_action()
                continue

            delay = self._tick if self._tick is not None else task.delay_ms / 1000.0
            await asyncio.sleep(delay)
            async with self._apply_lock:
                if self._stop.is_set() or self._paused:
                    continue
                logger.debug("Game %s running AI task %s", self.game_id, task.key)
                self.game.scheduler.run_next()

        await self.flush_and_broadcast()
        logger.info("Game %s loop finished (winner: %s)", self.game_id, self.game.winner)

    async def flush_and_broadcast(self) -> None:
        evs = self.game.event_log.events
        if self._last_engine_idx >= len(evs):
            return
        start = self._last_engine_idx
        self._last_engine_idx = len(evs)
        await self._broadcast({
            "type": "events",
            "game_id": self.game_id,
            "events": [serialize_event(start + i, ev) for i, ev in enumerate(evs[start:])],
            "from_index": start,
            "to_index": len(evs) - 1,
        })
        # One snapshot per client, rendered for its viewer
        for q, viewer in list(self._clients.items()):
            self._send(q, {
                "type": "snapshot",
                "game_id": self.game_id,
                "snapshot": serialize_snapshot(self.game, viewer=viewer),
                "last_event_index": len(evs) - 1,
            })

    async def _wait_for_external_action(self) -> None:
        # Wait until an external action is applied or stop/pause toggled
        self._new_action_event.clear()
        try:
            await asyncio.wait_for(self._new_action_event.wait(), timeout=0.5)
        except asyncio.TimeoutError:
            # Periodic wakeup to allow status/flush
            pass

    # ---- External control helpers ----
    async def get_legal_actions(self, player_id: Optional[int] = None) -> List[dict]:
        """Return legal actions for given player (or whoever must act)."""
        pid = player_id if player_id is not None else self.game.acting_player_index()
        return [a.to_dict() for a in get_legal_actions(self.game, pid)]

    async def apply_action_request(
        self, action_type: str, params: Optional[dict] = None, player_id: Optional[int] = None
    ) -> None:
        """Apply an action for a player. Raises InvalidActionError when refused."""
        async with self._apply_lock:
            pid = player_id if player_id is not None else self.game.acting_player_index()
            try:
                atype = ActionType(action_type)
            except ValueError:
                raise InvalidActionError(f"unknown action_type: {action_type}") from None

            if pid not in self.game.players:
                raise InvalidActionError(f"unknown player_id: {pid}")

            if self.game.players[pid].is_ai:
                raise InvalidActionError("player is controlled by the AI", kind="phase_violation")

            legal = get_legal_actions(self.game, pid)
            if not any(a.action_type == atype for a in legal):
                raise InvalidActionError("action not legal for player", kind="phase_violation")

            try:
                ok = apply_action(self.game, Action(atype, **(params or {})), player_id=pid)
            except (KeyError, TypeError, ValueError) as exc:
                raise InvalidActionError(f"malformed params: {exc}") from exc

            await self.flush_and_broadcast()
            self._new_action_event.set()
            if not ok:
                rejection = self.game.last_rejection
                if rejection is None:
                    raise InvalidActionError("action was refused")
                raise InvalidActionError(rejection.reason, kind=rejection.kind.value)

    # ---- Status helpers ----
    async def status(self) -> Dict[str, Any]:
        return {
            "game_id": self.game_id,
            "turn_number": self.game.turn_number,
            "current_player_id": self.game.current_player_index,
            "acting_player_id": None if self.game.game_over else self.game.acting_player_index(),
            "phase": self.game.phase.value,
            "game_over": self.game.game_over,
            "winner": self.game.winner,
            "paused": self._paused,
            "tick_ms": None if self._tick is None else int(self._tick * 1000),
            "pending_tasks": len(self.game.scheduler),
        }

    async def set_paused(self, value: bool) -> None:
        self._paused = value
        if not value:
            self._new_action_event.set()

    async def set_tick_ms(self, tick_ms: int) -> None:
        self._tick = max(0.0, (tick_ms or 0) / 1000.0)
        # Nudge loop so speed applies immediately
        self._new_action_event.set()

    # ---- Event cursor helpers for viewers ----
    async def get_events_since(self, since_index: int) -> Dict[str, Any]:
        evs = self.game.event_log.events
        start = max(since_index + 1, 0)
        if start >= len(evs):
            return {"events": [], "from_index": start, "to_index": start - 1}
        return {
            "events": [serialize_event(start + i, ev) for i, ev in enumerate(evs[start:])],
            "from_index": start,
            "to_index": len(evs) - 1,
        }
