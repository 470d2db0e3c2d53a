from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from monodeal.exceptions import GameNotFoundError, InvalidActionError
from monodeal.settings import get_server_settings
from snapshot import serialize_snapshot

from .registry import GameRegistry
from .schemas import (
    ActionRequest,
    ActionResponse,
    CreateGameRequest,
    CreateGameResponse,
    GameStatusResponse,
    LegalActionsResponse,
    SpeedRequest,
)

logger = logging.getLogger(__name__)

registry = GameRegistry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown."""
    logger.info("Starting MonoDeal server")
    yield
    logger.info("Stopping running games")
    await registry.stop_all()


app = FastAPI(
    title="MonoDeal Server",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_server_settings().cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GameNotFoundError)
async def game_not_found_handler(request: Request, exc: GameNotFoundError):
    return JSONResponse(status_code=404, content={"detail": "Game not found"})


@app.post("/games", response_model=CreateGameResponse)
async def create_game(req: CreateGameRequest):
    gid = await registry.create_game(
        human_name=req.human_name,
        ai_name=req.ai_name,
        agent=req.agent,
        human=req.human,
        seed=req.seed,
        time_limit_turns=req.time_limit_turns,
        tick_ms=req.tick_ms,
    )
    return CreateGameResponse(game_id=gid)


@app.get("/games/{game_id}/snapshot")
async def get_snapshot(game_id: str, viewer: Optional[int] = None):
    runner = await registry.require(game_id)
    return serialize_snapshot(runner.game, viewer=viewer)


@app.get("/games/{game_id}/legal_actions", response_model=LegalActionsResponse)
async def legal_actions(game_id: str, player_id: Optional[int] = None):
    runner = await registry.require(game_id)
    acts = await runner.get_legal_actions(player_id)
    return LegalActionsResponse(game_id=game_id, player_id=player_id, actions=acts)


@app.post("/games/{game_id}/actions", response_model=ActionResponse)
async def apply_action(game_id: str, req: ActionRequest):
    runner = await registry.require(game_id)
    try:
        await runner.apply_action_request(req.action_type, req.params, req.player_id)
    except InvalidActionError as exc:
        return ActionResponse(accepted=False, reason=exc.reason, kind=exc.kind)
    return ActionResponse(accepted=True)


@app.get("/games/{game_id}/status", response_model=GameStatusResponse)
async def get_status(game_id: str):
    runner = await registry.require(game_id)
    return GameStatusResponse(**await runner.status())


@app.post("/games/{game_id}/speed")
async def set_speed(game_id: str, req: SpeedRequest):
    runner = await registry.require(game_id)
    await runner.set_tick_ms(req.tick_ms)
    return {"game_id": game_id, "tick_ms": req.tick_ms}


@app.post("/games/{game_id}/pause")
async def pause_game(game_id: str):
    runner = await registry.require(game_id)
    await runner.set_paused(True)
    return {"game_id": game_id, "paused": True}


@app.post("/games/{game_id}/resume")
async def resume_game(game_id: str):
    runner = await registry.require(game_id)
    await runner.set_paused(False)
    return {"game_id": game_id, "paused": False}


@app.delete("/games/{game_id}")
async def delete_game(game_id: str):
    if not await registry.stop(game_id):
        raise HTTPException(status_code=404, detail="Game not found")
    return {"game_id": game_id, "stopped": True}


@app.websocket("/ws/games/{game_id}")
async def ws_game(websocket: WebSocket, game_id: str):
    await websocket.accept()
    runner = await registry.get(game_id)
    if not runner:
        await websocket.close(code=4404)
        return

    viewer_raw = websocket.query_params.get("viewer")
    viewer = int(viewer_raw) if viewer_raw is not None and viewer_raw.isdigit() else None
    queue = await runner.subscribe(viewer=viewer)

    # Backlog catch-up via query param ?since=<index>
    since_raw = websocket.query_params.get("since")
    if since_raw is not None and since_raw.lstrip("-").isdigit():
        delta = await runner.get_events_since(int(since_raw))
        if delta["events"]:
            await websocket.send_json({"type": "events", "game_id": game_id, **delta})

    async def sender():
        while True:
            msg = await queue.get()
            await websocket.send_json(msg)

    sender_task = asyncio.create_task(sender())
    try:
        # Inputs are ignored; actions go through POST /games/{id}/actions
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await runner.unsubscribe(queue)
        sender_task.cancel()


if __name__ == "__main__":
    # Convenience entrypoint for running directly: python -m server.app
    import uvicorn

    settings = get_server_settings()
    uvicorn.run("server.app:app", host=settings.host, port=settings.port, reload=False)
