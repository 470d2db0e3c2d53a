"""Strategy interface for the AI seat."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from monodeal.game import GameState
    from monodeal.rules import Action


class Agent(ABC):
    """
    Decides the AI player's moves during its own turn.

    `rules.run_agent_turn` asks the agent for one action at a time while the
    turn sits in ACTION, TARGETING or FORCED_DEAL_SOURCE, and stops after
    `GameConfig.ai_max_attempts` ACTION-phase decisions. Payments and Just
    Say No answers owed on the opponent's turn never reach the agent; the
    engine pays greedily and counters whenever it holds the card.

    Attributes:
        player_id: Seat of the AI player (0 or 1).
        name: Display name used in logs.
    """

    def __init__(self, player_id: int, name: str):
        self.player_id = player_id
        self.name = name

    @abstractmethod
    def choose_action(self, game: "GameState", legal_actions: List["Action"]) -> Optional["Action"]:
        """
        Pick one of `legal_actions` for the current phase.

        Returning None or an END_TURN action finishes the turn. A targeting
        choice that leaves the turn in TARGETING is cancelled for free once
        the agent stops.
        """
