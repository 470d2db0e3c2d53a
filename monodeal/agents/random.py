"""Random agent that makes random legal moves."""

import random
from typing import List, Optional

from monodeal.game import GameState
from monodeal.money import select_greedy_payment
from monodeal.rules import Action, ActionType

from monodeal.agents.base import Agent


class RandomAgent(Agent):
    """
    Simple AI that makes random legal moves.

    Ends its turn now and then so that games keep moving.
    """

    def __init__(self, player_id: int, name: str, seed: Optional[int] = None):
        """
        Initialize the random agent.

        Args:
            player_id: The player's index in the game.
            name: The player's display name.
            seed: Optional seed for reproducible choices.
        """
        super().__init__(player_id, name)
        self.rng = random.Random(seed)

    def choose_action(self, game: GameState, legal_actions: List[Action]) -> Optional[Action]:
        """
        Choose a random legal action.

        Args:
            game: The current game state.
            legal_actions: List of legal actions available to the player.

        Returns:
            The chosen action to execute.
        """
        if not legal_actions:
            return None

        # Prefer END_TURN to avoid getting stuck
        for a in legal_actions:
            if a.action_type == ActionType.END_TURN and self.rng.random() < 0.2:
                return a

        action = self.rng.choice(legal_actions)

        # Payments need a selection; pay greedily so it always covers the debt
        if action.action_type == ActionType.PAY:
            player = game.players[self.player_id]
            action.params["assets"] = select_greedy_payment(player, action.params["amount"])

        return action
