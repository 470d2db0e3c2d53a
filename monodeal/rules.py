"""
High-level rules API for controlling game flow.
This module provides the public interface for game actions and legal move detection.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, List, Optional

from monodeal.cards import IMPROVEMENT_KINDS, TARGETED_KINDS, ActionCard, ActionKind, RentCard, WildcardProperty
from monodeal.deals import PendingAction, TargetRef, list_forced_deal_sources, list_targets
from monodeal.game import GameState, Phase, Rejection, RejectionKind
from monodeal.money import select_greedy_payment

if TYPE_CHECKING:
    from monodeal.agents.base import Agent

logger = logging.getLogger(__name__)


class ActionType(Enum):
    """Types of actions a player can take."""

    DRAW = "draw"
    PLAY_TO_BANK = "play_to_bank"
    PLAY_PROPERTY = "play_property"
    PLAY_ACTION = "play_action"
    PLAY_RENT = "play_rent"
    SWITCH_COLOR = "switch_color"
    SELECT_FORCED_DEAL_SOURCE = "select_forced_deal_source"
    RESOLVE_TARGET = "resolve_target"
    CANCEL_TARGETING = "cancel_targeting"
    RESOLVE_COUNTER = "resolve_counter"
    PAY = "pay"
    DISCARD = "discard"
    END_TURN = "end_turn"


class Action:
    """Represents a game action that can be taken."""

    def __init__(self, action_type: ActionType, **params: Any):
        self.action_type = action_type
        self.params = params

    def to_dict(self):
        return {"action_type": self.action_type.value, "params": dict(self.params)}

    def __repr__(self) -> str:
        return f"Action({self.action_type.value}, {self.params})"


def get_legal_actions(game_state: GameState, player_id: int) -> List[Action]:
    """
    Get all legal actions available to a player.

    This is the main interface for AI/controllers to determine valid moves.
    Only the player the current phase is waiting for gets any actions.

    Args:
        game_state: Current game state
        player_id: Player to get actions for

    Returns:
        List of legal Action objects
    """
    if game_state.game_over or player_id != game_state.acting_player_index():
        return []

    player = game_state.players[player_id]
    phase = game_state.phase

    if phase == Phase.DRAW:
        return [Action(ActionType.DRAW)]

    if phase == Phase.DISCARD:
        return [Action(ActionType.DISCARD, card_index=i) for i in range(len(player.hand))]

    if phase == Phase.PAYMENT:
        # Agents fill in "assets"; apply_action falls back to a greedy pick
        return [Action(ActionType.PAY, amount=game_state.payment_request.amount)]

    if phase == Phase.COUNTER_OPPORTUNITY:
        return [
            Action(ActionType.RESOLVE_COUNTER, use_card=True),
            Action(ActionType.RESOLVE_COUNTER, use_card=False),
        ]

    if phase == Phase.FORCED_DEAL_SOURCE:
        actions = [
            Action(ActionType.SELECT_FORCED_DEAL_SOURCE, color=ref.color, card_index=ref.card_index)
            for ref in list_forced_deal_sources(player)
        ]
        actions.append(Action(ActionType.CANCEL_TARGETING))
        return actions

    if phase == Phase.TARGETING:
        opponent = game_state.players[game_state.opponent_index(player_id)]
        actions = [
            Action(ActionType.RESOLVE_TARGET, **target.to_dict())
            for target in list_targets(game_state.pending_action, opponent)
        ]
        actions.append(Action(ActionType.CANCEL_TARGETING))
        return actions

    if phase == Phase.ACTION:
        actions = _get_card_actions(game_state, player_id) if player.moves_left > 0 else []
        actions.extend(_get_switch_actions(game_state, player_id))
        actions.append(Action(ActionType.END_TURN))
        return actions

    return []


def _get_card_actions(game_state: GameState, player_id: int) -> List[Action]:
    """Every way of playing each hand card."""
    player = game_state.players[player_id]
    has_double = player.has_card(ActionKind.DOUBLE_RENT)
    actions: List[Action] = []

    for i, card in enumerate(player.hand):
        if isinstance(card, WildcardProperty):
            for color in card.valid_colors:
                actions.append(Action(ActionType.PLAY_PROPERTY, card_index=i, color=color))
            continue
        if card.is_property:
            actions.append(Action(ActionType.PLAY_PROPERTY, card_index=i, color=card.placement_color))
            continue

        actions.append(Action(ActionType.PLAY_TO_BANK, card_index=i))

        if isinstance(card, RentCard):
            for color in card.valid_colors:
                if player.property_count(color) == 0:
                    continue
                actions.append(Action(ActionType.PLAY_RENT, card_index=i, color=color, use_double=False))
                if has_double:
                    actions.append(Action(ActionType.PLAY_RENT, card_index=i, color=color, use_double=True))
            continue

        if not isinstance(card, ActionCard):
            continue

        kind = card.action_type
        if kind in (ActionKind.PASS_GO, ActionKind.BIRTHDAY, ActionKind.DEBT_COLLECTOR):
            actions.append(Action(ActionType.PLAY_ACTION, card_index=i))
        elif kind in IMPROVEMENT_KINDS:
            for color in game_state.improvement_targets(player, kind):
                actions.append(Action(ActionType.PLAY_ACTION, card_index=i, color=color))
        elif kind in TARGETED_KINDS and _has_targets(kind, player_id, game_state):
            actions.append(Action(ActionType.PLAY_ACTION, card_index=i))

    return actions


def _has_targets(kind: ActionKind, player_id: int, game_state: GameState) -> bool:
    player = game_state.players[player_id]
    opponent = game_state.players[game_state.opponent_index(player_id)]
    probe = PendingAction(card_id=0, kind=kind, source_index=player_id)
    if kind == ActionKind.FORCED_DEAL:
        sources = list_forced_deal_sources(player)
        if not sources:
            return False
        probe.my_property = sources[0]
    return bool(list_targets(probe, opponent))


def _get_switch_actions(game_state: GameState, player_id: int) -> List[Action]:
    """Wildcard color changes; these cost no move."""
    player = game_state.players[player_id]
    actions: List[Action] = []
    for color, cards in player.field.items():
        for i, card in enumerate(cards):
            if not isinstance(card, WildcardProperty):
                continue
            for new_color in card.valid_colors:
                if new_color != color:
                    actions.append(Action(ActionType.SWITCH_COLOR, color=color, card_index=i, new_color=new_color))
    return actions


def apply_action(game_state: GameState, action: Action, player_id: Optional[int] = None) -> bool:
    """
    Apply an action to the game state.

    This is the main interface for executing moves.

    Args:
        game_state: Current game state
        action: Action to apply
        player_id: Player executing the action (optional, defaults to the
            player the current phase is waiting for)

    Returns:
        True if action was successful, False otherwise
    """
    if player_id is not None and player_id != game_state.acting_player_index():
        game_state.last_rejection = Rejection(RejectionKind.PHASE_VIOLATION, "Not your turn to act")
        return False

    params = action.params
    action_type = action.action_type

    if action_type == ActionType.DRAW:
        return game_state.perform_draw()

    elif action_type == ActionType.PLAY_TO_BANK:
        return game_state.play_card_to_bank(params["card_index"])

    elif action_type == ActionType.PLAY_PROPERTY:
        return game_state.play_property_to_field(params["card_index"], params.get("color"))

    elif action_type == ActionType.PLAY_ACTION:
        return game_state.play_action(params["card_index"], params.get("color"))

    elif action_type == ActionType.PLAY_RENT:
        return game_state.play_rent(params["card_index"], params["color"], params.get("use_double", False))

    elif action_type == ActionType.SWITCH_COLOR:
        return game_state.switch_property_color(params["color"], params["card_index"], params["new_color"])

    elif action_type == ActionType.SELECT_FORCED_DEAL_SOURCE:
        return game_state.select_my_forced_deal_property(params["color"], params["card_index"])

    elif action_type == ActionType.RESOLVE_TARGET:
        return game_state.resolve_targeted_action(TargetRef.from_dict(params))

    elif action_type == ActionType.CANCEL_TARGETING:
        return game_state.cancel_targeting()

    elif action_type == ActionType.RESOLVE_COUNTER:
        return game_state.resolve_counter(bool(params.get("use_card", False)))

    elif action_type == ActionType.PAY:
        assets = params.get("assets")
        if assets is None and game_state.payment_request is not None:
            request = game_state.payment_request
            assets = select_greedy_payment(game_state.players[request.debtor_index], request.amount)
        return game_state.resolve_payment(assets or [])

    elif action_type == ActionType.DISCARD:
        return game_state.discard_excess_card(params["card_index"])

    elif action_type == ActionType.END_TURN:
        return game_state.end_turn()

    return False


def run_agent_turn(game_state: GameState, agent: "Agent") -> None:
    """
    Let an agent play out the current player's turn.

    The agent gets at most `ai_max_attempts` decisions in the ACTION phase.
    The turn is suspended, not ended, when it waits on the opponent (a
    payment or a counter opportunity); the engine schedules a new run once
    that resolves.
    """
    player_id = game_state.current_player_index
    max_attempts = game_state.config.ai_max_attempts
    attempts = 0

    while not game_state.game_over and game_state.current_player_index == player_id:
        phase = game_state.phase
        if phase not in (Phase.ACTION, Phase.TARGETING, Phase.FORCED_DEAL_SOURCE):
            # Waiting on the opponent, or the turn already moved on
            return
        if phase == Phase.ACTION and attempts >= max_attempts:
            break

        legal_actions = get_legal_actions(game_state, player_id)
        action = agent.choose_action(game_state, legal_actions)
        if action is None or action.action_type == ActionType.END_TURN:
            break

        if phase == Phase.ACTION:
            attempts += 1

        if not apply_action(game_state, action, player_id=player_id):
            logger.debug("Agent %s action %s rejected: %s", agent.name, action, game_state.last_rejection)
            if game_state.phase in (Phase.TARGETING, Phase.FORCED_DEAL_SOURCE):
                game_state.cancel_targeting()
            break

    if game_state.phase in (Phase.TARGETING, Phase.FORCED_DEAL_SOURCE):
        game_state.cancel_targeting()
    if game_state.phase == Phase.ACTION and game_state.current_player_index == player_id:
        game_state.end_turn()
