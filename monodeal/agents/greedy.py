"""Greedy agent that banks money, lays properties and then plays cards in hand order."""

from typing import List, Optional

from monodeal.cards import ActionKind, CardType
from monodeal.game import GameState
from monodeal.money import select_greedy_payment
from monodeal.rules import Action, ActionType

from monodeal.agents.base import Agent

# Action cards played for their effect rather than banked
EFFECT_KINDS = (
    ActionKind.PASS_GO,
    ActionKind.BIRTHDAY,
    ActionKind.DEBT_COLLECTOR,
    ActionKind.HOUSE,
    ActionKind.HOTEL,
    ActionKind.SLY_DEAL,
    ActionKind.DEAL_BREAKER,
    ActionKind.FORCED_DEAL,
)


class GreedyAgent(Agent):
    """
    Simple AI that grabs whatever it can.

    Always answers with Just Say No when it holds one, pays with bank
    cards before properties, and discards from the end of its hand.
    """

    def choose_action(self, game: GameState, legal_actions: List[Action]) -> Optional[Action]:
        """
        Choose action with simple greedy strategy.

        Priority order in the ACTION phase:
        1. Bank a money card
        2. Place a property
        3. The first rent or effect card in hand (rent doubled if possible)
        4. End turn

        Args:
            game: The current game state.
            legal_actions: List of legal actions available to the player.

        Returns:
            The chosen action to execute.
        """
        if not legal_actions:
            return None
        player = game.players[self.player_id]

        by_type = {}
        for action in legal_actions:
            by_type.setdefault(action.action_type, []).append(action)

        if ActionType.PAY in by_type:
            action = by_type[ActionType.PAY][0]
            action.params["assets"] = select_greedy_payment(player, action.params["amount"])
            return action

        for action in by_type.get(ActionType.RESOLVE_COUNTER, []):
            if action.params["use_card"]:
                return action

        # Sub-phase choices: first option offered
        for action_type in (ActionType.DRAW, ActionType.SELECT_FORCED_DEAL_SOURCE, ActionType.RESOLVE_TARGET):
            if action_type in by_type:
                return by_type[action_type][0]

        if ActionType.DISCARD in by_type:
            return by_type[ActionType.DISCARD][-1]

        for action in by_type.get(ActionType.PLAY_TO_BANK, []):
            if player.hand[action.params["card_index"]].card_type == CardType.MONEY:
                return action

        if ActionType.PLAY_PROPERTY in by_type:
            return by_type[ActionType.PLAY_PROPERTY][0]

        for i, card in enumerate(player.hand):
            rent_plays = [a for a in by_type.get(ActionType.PLAY_RENT, []) if a.params["card_index"] == i]
            if rent_plays:
                doubled = [a for a in rent_plays if a.params["use_double"]]
                return (doubled or rent_plays)[0]

            if any(card.is_action(kind) for kind in EFFECT_KINDS):
                for action in by_type.get(ActionType.PLAY_ACTION, []):
                    if action.params["card_index"] == i:
                        return action

        for action_type in (ActionType.END_TURN, ActionType.CANCEL_TARGETING):
            if action_type in by_type:
                return by_type[action_type][0]

        return legal_actions[0]
