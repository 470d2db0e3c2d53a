from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class CreateGameRequest(BaseModel):
    human_name: str = Field("You", min_length=1, max_length=40)
    ai_name: str = Field("AI", min_length=1, max_length=40)
    agent: str = Field("greedy", pattern=r"^(greedy|random)$")
    human: bool = True  # False seats two AIs
    seed: Optional[int] = None
    time_limit_turns: Optional[int] = Field(default=None, ge=1)
    tick_ms: Optional[int] = Field(default=None, ge=0, le=10000)


class CreateGameResponse(BaseModel):
    game_id: str


class ActionRequest(BaseModel):
    player_id: Optional[int] = None
    action_type: str
    params: Dict[str, Any] = Field(default_factory=dict)


class ActionResponse(BaseModel):
    accepted: bool
    reason: Optional[str] = None
    kind: Optional[str] = None


class LegalActionsResponse(BaseModel):
    game_id: str
    player_id: Optional[int] = None
    actions: List[Dict[str, Any]]


class GameStatusResponse(BaseModel):
    game_id: str
    turn_number: int
    current_player_id: int
    acting_player_id: Optional[int] = None
    phase: str
    game_over: bool
    winner: Optional[int] = None
    paused: bool
    tick_ms: Optional[int] = None
    pending_tasks: int


class SpeedRequest(BaseModel):
    tick_ms: int = Field(ge=0, le=10000)
