"""
Main game engine and state management.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Optional, Union

from monodeal.cards import ActionCard, ActionKind, Card, RentCard, WildcardProperty, create_deck
from monodeal.config import PROPERTY_COLORS, GameConfig
from monodeal.counter import CounterWar, PaymentEffect, PendingEffect, TargetedEffect
from monodeal.deals import (
    PendingAction,
    PropertyRef,
    TargetRef,
    execute_transfer,
    validate_forced_deal_source,
    validate_target,
)
from monodeal.money import AssetRef, EventLog, EventType, PaymentRequest, resolve_asset, select_greedy_payment
from monodeal.player import Player, PlayerState
from monodeal.scheduler import TaskQueue

if TYPE_CHECKING:
    from monodeal.agents.base import Agent

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Turn phases. Sub-protocols return to ACTION when they resolve."""

    START = "START"
    DRAW = "DRAW"
    ACTION = "ACTION"
    DISCARD = "DISCARD"
    PAYMENT = "PAYMENT"
    TARGETING = "TARGETING"
    FORCED_DEAL_SOURCE = "FORCED_DEAL_SOURCE"
    COUNTER_OPPORTUNITY = "COUNTER_OPPORTUNITY"
    GAME_OVER = "GAME_OVER"


class RejectionKind(Enum):
    """Why a command was refused."""

    PHASE_VIOLATION = "phase_violation"
    VALIDATION_FAILURE = "validation_failure"
    INSUFFICIENT_ASSETS = "insufficient_assets"


@dataclass
class Rejection:
    kind: RejectionKind
    reason: str


AI_TURN = "ai_turn"
AI_COUNTER = "ai_counter"
AI_PAYMENT = "ai_payment"

PAYMENT_REASONS = {
    ActionKind.BIRTHDAY: "birthday",
    ActionKind.DEBT_COLLECTOR: "debt_collector",
}


class GameState:
    """
    Represents the complete state of a MonoDeal game.
    This is the main interface for the game engine.

    Every command returns True when applied and False when refused; a
    refused command leaves the state untouched and records the reason in
    `last_rejection`.
    """

    def __init__(self, config: GameConfig, players: List[Player], agents: Optional[Dict[int, "Agent"]] = None):
        self.config = config
        self.event_log = EventLog()

        # Initialize RNG
        self.rng = random.Random(config.seed)

        self.players: Dict[int, PlayerState] = {}
        for player in players:
            self.players[player.player_id] = PlayerState(player.player_id, player.name, player.is_ai)
        self.agents: Dict[int, "Agent"] = dict(agents or {})

        self.deck = create_deck(self.rng, self.event_log)

        # Game state
        self.current_player_index = 0
        self.turn_number = 0
        self.phase = Phase.START
        self.winner: Optional[int] = None
        self.pending_draw_count = 0

        # In-flight sub-protocols; at most one is set at a time
        self.payment_request: Optional[PaymentRequest] = None
        self.pending_action: Optional[PendingAction] = None
        self.counter_war: Optional[CounterWar] = None

        self.last_rejection: Optional[Rejection] = None
        self.scheduler = TaskQueue()
        self._listeners: List[Callable[["GameState"], None]] = []
        self._ai_turn_active = False
        self._started = False

    # ---- Queries ----

    @property
    def game_over(self) -> bool:
        return self.phase == Phase.GAME_OVER

    @property
    def discard_pile(self) -> List[Card]:
        return self.deck.discard_pile

    def get_current_player(self) -> PlayerState:
        """Get the current active player."""
        return self.players[self.current_player_index]

    def opponent_index(self, player_index: int) -> int:
        return (player_index + 1) % 2

    def acting_player_index(self) -> int:
        """The player whose input the current phase is waiting for."""
        if self.phase == Phase.COUNTER_OPPORTUNITY and self.counter_war is not None:
            return self.counter_war.active_index
        if self.phase == Phase.PAYMENT and self.payment_request is not None:
            return self.payment_request.debtor_index
        return self.current_player_index

    def calculate_rent(self, player: PlayerState, color: str) -> int:
        """
        Rent for one color: the base rent for the number of properties,
        plus the house and hotel bonuses.
        """
        count = player.property_count(color)
        if count == 0:
            return 0
        rent = PROPERTY_COLORS[color].rent_for(count)
        if player.has_improvement(color, ActionKind.HOUSE):
            rent += self.config.house_bonus
        if player.has_improvement(color, ActionKind.HOTEL):
            rent += self.config.hotel_bonus
        return rent

    def improvement_targets(self, player: PlayerState, kind: ActionKind) -> List[str]:
        """Complete sets that can take a HOUSE (none yet) or a HOTEL (house, no hotel)."""
        targets = []
        for color in player.complete_sets():
            has_house = player.has_improvement(color, ActionKind.HOUSE)
            has_hotel = player.has_improvement(color, ActionKind.HOTEL)
            if kind == ActionKind.HOUSE and not has_house and not has_hotel:
                targets.append(color)
            elif kind == ActionKind.HOTEL and has_house and not has_hotel:
                targets.append(color)
        return targets

    # ---- Notifications ----

    def subscribe(self, callback: Callable[["GameState"], None]) -> None:
        """Register an on_state_changed listener."""
        self._listeners.append(callback)

    def unsubscribe(self, callback: Callable[["GameState"], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback(self)

    # ---- Command helpers ----

    def _reject(self, kind: RejectionKind, reason: str) -> bool:
        self.last_rejection = Rejection(kind, reason)
        logger.debug("Rejected (%s): %s", kind.value, reason)
        return False

    def _require_phase(self, *phases: Phase) -> bool:
        if self.phase in phases:
            self.last_rejection = None
            return True
        self._reject(RejectionKind.PHASE_VIOLATION, f"Not allowed during {self.phase.value}")
        return False

    def _require_move(self, player: PlayerState) -> bool:
        if player.moves_left > 0:
            return True
        self._reject(RejectionKind.VALIDATION_FAILURE, "No moves left this turn")
        return False

    def _hand_card(self, player: PlayerState, card_index: int) -> Optional[Card]:
        if 0 <= card_index < len(player.hand):
            return player.hand[card_index]
        self._reject(RejectionKind.VALIDATION_FAILURE, f"No card at hand index {card_index}")
        return None

    def _discard_from_hand(self, player: PlayerState, card: Card) -> None:
        player.hand.remove(card)
        self.deck.discard(card)

    # ---- Turn flow ----

    def start(self) -> bool:
        """Deal the opening hands and start the first turn."""
        if self._started:
            return self._reject(RejectionKind.PHASE_VIOLATION, "Game already started")
        self.last_rejection = None
        self._started = True

        for player_id in sorted(self.players):
            self.players[player_id].add_to_hand(self.deck.draw(self.config.starting_hand))

        self.event_log.log(
            EventType.GAME_START,
            details={
                "players": [p.name for _, p in sorted(self.players.items())],
                "seed": self.config.seed,
            },
        )
        self._start_turn()
        return True

    def _start_turn(self) -> None:
        self.phase = Phase.START
        player = self.get_current_player()
        self.pending_draw_count = (
            self.config.empty_hand_draw_count if not player.hand else self.config.draw_count
        )
        self.event_log.log(EventType.TURN_START, player_id=player.player_id, turn=self.turn_number)
        logger.info("Turn %d started for %s", self.turn_number, player.name)

        if player.is_ai:
            self._draw_for_turn(player)
            self._notify()
            self._schedule_ai(AI_TURN, self._run_ai_turn)
        else:
            self.phase = Phase.DRAW
            self._notify()

    def _draw_for_turn(self, player: PlayerState) -> None:
        drawn = self.deck.draw(self.pending_draw_count)
        player.add_to_hand(drawn)
        player.moves_left = self.config.moves_per_turn
        self.phase = Phase.ACTION
        self.event_log.log(EventType.DRAW, player_id=player.player_id, count=len(drawn))

    def perform_draw(self) -> bool:
        """Human draw at the start of a turn."""
        if not self._require_phase(Phase.DRAW):
            return False
        self._draw_for_turn(self.get_current_player())
        self._notify()
        return True

    def end_turn(self) -> bool:
        """
        End the current turn. A hand above the limit sends the player to
        DISCARD first; the AI discards from the end of its hand.
        """
        if not self._require_phase(Phase.ACTION):
            return False
        player = self.get_current_player()

        if len(player.hand) > self.config.hand_limit:
            self.phase = Phase.DISCARD
            if player.is_ai:
                while len(player.hand) > self.config.hand_limit:
                    card = player.hand.pop()
                    self.deck.discard(card)
                    self.event_log.log(EventType.DISCARD, player_id=player.player_id, card_id=card.card_id)
                self._advance_turn()
            else:
                self._notify()
            return True

        self._advance_turn()
        return True

    def discard_excess_card(self, card_index: int) -> bool:
        if not self._require_phase(Phase.DISCARD):
            return False
        player = self.get_current_player()
        card = self._hand_card(player, card_index)
        if card is None:
            return False

        self._discard_from_hand(player, card)
        self.event_log.log(EventType.DISCARD, player_id=player.player_id, card_id=card.card_id)

        if len(player.hand) <= self.config.hand_limit:
            self._advance_turn()
        else:
            self._notify()
        return True

    def _advance_turn(self) -> None:
        player = self.get_current_player()
        player.moves_left = 0
        self.event_log.log(EventType.TURN_END, player_id=player.player_id, turn=self.turn_number)
        self.turn_number += 1

        if self.config.time_limit_turns and self.turn_number >= self.config.time_limit_turns:
            self._end_game_by_time_limit()
            self._notify()
            return

        self.current_player_index = self.opponent_index(self.current_player_index)
        self._start_turn()

    def _end_game_by_time_limit(self) -> None:
        """End game due to time limit; the richer player wins, a tie has no winner."""
        first, second = self.players[0], self.players[1]
        if first.assets_value != second.assets_value:
            self.winner = 0 if first.assets_value > second.assets_value else 1
        self._finish(reason="time_limit")

    def check_win_condition(self) -> bool:
        """Current player first, then the opponent."""
        for player_index in (self.current_player_index, self.opponent_index(self.current_player_index)):
            player = self.players[player_index]
            if len(player.complete_sets()) >= self.config.sets_to_win:
                self.winner = player_index
                self._finish(reason="sets")
                return True
        return False

    def _finish(self, reason: str) -> None:
        self.phase = Phase.GAME_OVER
        self.payment_request = None
        self.pending_action = None
        self.counter_war = None
        self.scheduler.clear()
        winner_name = self.players[self.winner].name if self.winner is not None else None
        self.event_log.log(EventType.GAME_END, player_id=self.winner, reason=reason, winner=winner_name)
        logger.info("Game over (%s), winner: %s", reason, winner_name)

    # ---- Playing cards ----

    def play_card_to_bank(self, card_index: int) -> bool:
        """Bank a money, action or rent card for its value."""
        if not self._require_phase(Phase.ACTION):
            return False
        player = self.get_current_player()
        if not self._require_move(player):
            return False
        card = self._hand_card(player, card_index)
        if card is None:
            return False
        if card.is_property:
            return self._reject(RejectionKind.VALIDATION_FAILURE, "Properties cannot be banked")

        player.hand.pop(card_index)
        player.add_to_bank(card)
        player.moves_left -= 1
        self.event_log.log(EventType.BANK_CARD, player_id=player.player_id, card_id=card.card_id, value=card.value)

        self.check_win_condition()
        self._notify()
        return True

    def play_property_to_field(self, card_index: int, color: Optional[str] = None) -> bool:
        """Place a property; a wildcard goes under `color` or its first valid color."""
        if not self._require_phase(Phase.ACTION):
            return False
        player = self.get_current_player()
        if not self._require_move(player):
            return False
        card = self._hand_card(player, card_index)
        if card is None:
            return False
        if not card.is_property:
            return self._reject(RejectionKind.VALIDATION_FAILURE, "Not a property card")

        if isinstance(card, WildcardProperty):
            target_color = color or card.valid_colors[0]
            if target_color not in card.valid_colors:
                return self._reject(RejectionKind.VALIDATION_FAILURE, f"Wildcard cannot be {target_color}")
            card.current_color = target_color
        else:
            target_color = card.placement_color

        player.hand.pop(card_index)
        player.add_to_field(card, target_color)
        player.moves_left -= 1
        self.event_log.log(
            EventType.PLACE_PROPERTY, player_id=player.player_id, card_id=card.card_id, color=target_color
        )

        self.check_win_condition()
        self._notify()
        return True

    def switch_property_color(self, color: str, card_index: int, new_color: str) -> bool:
        """Move a wildcard to another of its colors. Costs no move."""
        if not self._require_phase(Phase.ACTION):
            return False
        player = self.get_current_player()
        card = player.field_card(color, card_index)
        if card is None:
            return self._reject(RejectionKind.VALIDATION_FAILURE, "No such field card")
        if not isinstance(card, WildcardProperty):
            return self._reject(RejectionKind.VALIDATION_FAILURE, "Only wildcards can change color")
        if new_color not in card.valid_colors:
            return self._reject(RejectionKind.VALIDATION_FAILURE, f"Wildcard cannot be {new_color}")
        if card.current_color == new_color:
            return self._reject(RejectionKind.VALIDATION_FAILURE, "Wildcard already has that color")

        player.take_from_field(color, card_index)
        card.current_color = new_color
        player.add_to_field(card, new_color)
        self.event_log.log(
            EventType.SWITCH_COLOR, player_id=player.player_id, card_id=card.card_id, old=color, new=new_color
        )

        self.check_win_condition()
        self._notify()
        return True

    def play_action(self, card_index: int, color: Optional[str] = None) -> bool:
        """
        Play an action card from hand.

        `color` picks the set for a HOUSE or HOTEL; the first valid set is
        used when it is omitted.
        """
        if not self._require_phase(Phase.ACTION):
            return False
        player = self.get_current_player()
        if not self._require_move(player):
            return False
        card = self._hand_card(player, card_index)
        if card is None:
            return False
        if not isinstance(card, ActionCard):
            return self._reject(RejectionKind.VALIDATION_FAILURE, "Not an action card")

        kind = card.action_type
        player_index = self.current_player_index

        if kind == ActionKind.PASS_GO:
            self._discard_from_hand(player, card)
            drawn = self.deck.draw(self.config.draw_count)
            player.add_to_hand(drawn)
            player.moves_left -= 1
            self.event_log.log(EventType.PLAY_ACTION, player_id=player_index, action=kind.value, drawn=len(drawn))
            self._notify()
            return True

        if kind in (ActionKind.BIRTHDAY, ActionKind.DEBT_COLLECTOR):
            amount = (
                self.config.birthday_amount if kind == ActionKind.BIRTHDAY else self.config.debt_collector_amount
            )
            self._discard_from_hand(player, card)
            player.moves_left -= 1
            opponent = self.opponent_index(player_index)
            self.event_log.log(EventType.PLAY_ACTION, player_id=player_index, action=kind.value, amount=amount)
            self._open_counter_war(
                opponent, PaymentEffect(amount, opponent, player_index, PAYMENT_REASONS[kind])
            )
            return True

        if kind in (ActionKind.SLY_DEAL, ActionKind.DEAL_BREAKER, ActionKind.FORCED_DEAL):
            self.pending_action = PendingAction(card.card_id, kind, player_index)
            if kind == ActionKind.FORCED_DEAL:
                self.phase = Phase.FORCED_DEAL_SOURCE
            else:
                self.phase = Phase.TARGETING
            self.event_log.log(EventType.TARGETING_START, player_id=player_index, action=kind.value)
            self._notify()
            return True

        if kind in (ActionKind.HOUSE, ActionKind.HOTEL):
            targets = self.improvement_targets(player, kind)
            if not targets:
                if kind == ActionKind.HOTEL:
                    return self._reject(RejectionKind.VALIDATION_FAILURE, "A hotel needs a complete set with a house")
                return self._reject(RejectionKind.VALIDATION_FAILURE, "A house needs a complete set without one")
            chosen = color or targets[0]
            if chosen not in targets:
                return self._reject(RejectionKind.VALIDATION_FAILURE, f"Cannot build on {chosen}")

            player.hand.remove(card)
            player.add_to_field(card, chosen)
            player.moves_left -= 1
            self.event_log.log(EventType.IMPROVEMENT, player_id=player_index, action=kind.value, color=chosen)
            self._notify()
            return True

        if kind == ActionKind.DOUBLE_RENT:
            return self._reject(RejectionKind.VALIDATION_FAILURE, "Double The Rent is played with a rent card")
        return self._reject(RejectionKind.VALIDATION_FAILURE, "Just Say No is only played as a counter")

    def play_rent(self, card_index: int, color: str, use_double: bool = False) -> bool:
        """
        Charge the opponent rent on one color.

        With `use_double` a Double The Rent card from hand doubles the
        amount and costs one extra move when a move remains for it.
        """
        if not self._require_phase(Phase.ACTION):
            return False
        player = self.get_current_player()
        if not self._require_move(player):
            return False
        card = self._hand_card(player, card_index)
        if card is None:
            return False
        if not isinstance(card, RentCard):
            return self._reject(RejectionKind.VALIDATION_FAILURE, "Not a rent card")
        if color not in card.valid_colors:
            return self._reject(RejectionKind.VALIDATION_FAILURE, f"This rent card does not cover {color}")
        if player.property_count(color) == 0:
            return self._reject(RejectionKind.VALIDATION_FAILURE, f"No {color} properties to charge rent on")

        double_index = player.find_card(ActionKind.DOUBLE_RENT) if use_double else -1
        if use_double and double_index < 0:
            return self._reject(RejectionKind.VALIDATION_FAILURE, "No Double The Rent in hand")

        amount = self.calculate_rent(player, color)
        doubled = double_index >= 0
        if doubled:
            amount *= 2
            self._discard_from_hand(player, player.hand[double_index])
            if player.moves_left > 1:
                player.moves_left -= 1

        self._discard_from_hand(player, card)
        player.moves_left -= 1

        player_index = self.current_player_index
        opponent = self.opponent_index(player_index)
        self.event_log.log(
            EventType.PLAY_RENT, player_id=player_index, color=color, amount=amount, doubled=doubled
        )
        self._open_counter_war(opponent, PaymentEffect(amount, opponent, player_index, "rent"))
        return True

    # ---- Targeted actions ----

    def cancel_targeting(self) -> bool:
        """Abort target selection. The card stays in hand and no move is spent."""
        if not self._require_phase(Phase.TARGETING, Phase.FORCED_DEAL_SOURCE):
            return False
        self.pending_action = None
        self.phase = Phase.ACTION
        self.event_log.log(EventType.TARGETING_CANCELLED, player_id=self.current_player_index)
        self._notify()
        return True

    def select_my_forced_deal_property(self, color: str, card_index: int) -> bool:
        if not self._require_phase(Phase.FORCED_DEAL_SOURCE) or self.pending_action is None:
            return False
        ref = PropertyRef(color, card_index)
        valid, error = validate_forced_deal_source(self.get_current_player(), ref)
        if not valid:
            return self._reject(RejectionKind.VALIDATION_FAILURE, error)

        self.pending_action.my_property = ref
        self.phase = Phase.TARGETING
        self._notify()
        return True

    def resolve_targeted_action(self, target: Union[TargetRef, Dict[str, Any]]) -> bool:
        """Validate the target, then let the victim answer with Just Say No."""
        if not self._require_phase(Phase.TARGETING) or self.pending_action is None:
            return False
        if isinstance(target, dict):
            target = TargetRef.from_dict(target)
        if target.player_index not in self.players:
            return self._reject(RejectionKind.VALIDATION_FAILURE, "Unknown player")

        action = self.pending_action
        valid, error = validate_target(action, self.players[target.player_index], target)
        if not valid:
            return self._reject(RejectionKind.VALIDATION_FAILURE, error)

        self.pending_action = None
        self._open_counter_war(target.player_index, TargetedEffect(action, target))
        return True

    def _execute_targeted_action(self, action: PendingAction, target: TargetRef) -> None:
        source = self.players[action.source_index]
        victim = self.players[target.player_index]
        details = execute_transfer(action, source, victim, target)

        event_type = {
            ActionKind.SLY_DEAL: EventType.PROPERTY_STOLEN,
            ActionKind.DEAL_BREAKER: EventType.SET_STOLEN,
            ActionKind.FORCED_DEAL: EventType.PROPERTY_SWAPPED,
        }[action.kind]
        self.event_log.log(event_type, player_id=action.source_index, victim=target.player_index, details=details)

        self._spend_action_card(action)
        self.phase = Phase.ACTION
        self.check_win_condition()

    def _spend_action_card(self, action: PendingAction) -> None:
        source = self.players[action.source_index]
        hand_index = source.hand_index_of(action.card_id)
        if hand_index >= 0:
            self.deck.discard(source.hand.pop(hand_index))
        source.moves_left = max(0, source.moves_left - 1)

    # ---- Counter war ----

    def _open_counter_war(self, target_index: int, effect: PendingEffect) -> None:
        self.counter_war = CounterWar(target_index, effect)
        self._process_counter()

    def _process_counter(self) -> None:
        war = self.counter_war
        active = self.players[war.active_index]

        if not active.has_card(ActionKind.JUST_SAY_NO):
            self._finalize_counter()
            return

        self.phase = Phase.COUNTER_OPPORTUNITY
        self.event_log.log(
            EventType.COUNTER_OPPORTUNITY, player_id=war.active_index, no_count=war.no_count
        )
        self._notify()

        if active.is_ai:
            self._schedule_ai(AI_COUNTER, self._ai_counter)

    def resolve_counter(self, use_card: bool) -> bool:
        """Answer a counter opportunity: play Just Say No or let it stand."""
        if not self._require_phase(Phase.COUNTER_OPPORTUNITY) or self.counter_war is None:
            return False
        war = self.counter_war
        active = self.players[war.active_index]

        if not use_card:
            self.event_log.log(EventType.COUNTER_DECLINED, player_id=war.active_index, no_count=war.no_count)
            self._finalize_counter()
            return True

        card_index = active.find_card(ActionKind.JUST_SAY_NO)
        if card_index < 0:
            return self._reject(RejectionKind.VALIDATION_FAILURE, "No Just Say No in hand")

        self.deck.discard(active.hand.pop(card_index))
        war.escalate()
        self.event_log.log(EventType.JUST_SAY_NO, player_id=active.player_id, no_count=war.no_count)
        self._process_counter()
        return True

    def _finalize_counter(self) -> None:
        war = self.counter_war
        self.counter_war = None
        self.event_log.log(
            EventType.COUNTER_RESOLVED,
            player_id=war.aggressor_index,
            no_count=war.no_count,
            proceeds=war.proceeds,
        )

        if war.proceeds:
            self._apply_effect(war.effect)
        else:
            self._cancel_effect(war.effect)

        self._notify()
        self._resume_ai()

    def _apply_effect(self, effect: PendingEffect) -> None:
        if isinstance(effect, PaymentEffect):
            self.initiate_payment(effect.amount, effect.debtor_index, effect.creditor_index, effect.reason)
        elif isinstance(effect, TargetedEffect):
            self._execute_targeted_action(effect.action, effect.target)
        else:
            raise TypeError(f"Unknown effect: {effect!r}")

    def _cancel_effect(self, effect: PendingEffect) -> None:
        if isinstance(effect, PaymentEffect):
            self.event_log.log(EventType.ACTION_CANCELLED, player_id=effect.creditor_index, reason=effect.reason)
        elif isinstance(effect, TargetedEffect):
            self._spend_action_card(effect.action)
            self.event_log.log(
                EventType.ACTION_CANCELLED, player_id=effect.action.source_index, reason=effect.action.kind.value
            )
        else:
            raise TypeError(f"Unknown effect: {effect!r}")
        self.phase = Phase.ACTION

    # ---- Payment ----

    def initiate_payment(self, amount: int, debtor_index: int, creditor_index: int, reason: str = "") -> None:
        self.payment_request = PaymentRequest(amount, debtor_index, creditor_index, reason)
        self.phase = Phase.PAYMENT
        self.event_log.log(
            EventType.PAYMENT_REQUESTED,
            player_id=debtor_index,
            amount=amount,
            creditor=creditor_index,
            reason=reason,
        )
        logger.info("Payment requested: %dM from player %d to player %d", amount, debtor_index, creditor_index)
        self._notify()

        if self.players[debtor_index].is_ai:
            self._schedule_ai(AI_PAYMENT, self._ai_payment)

    def resolve_payment(self, selected_assets: Iterable[Union[AssetRef, Dict[str, Any]]]) -> bool:
        """
        Pay the pending request with the selected bank and field cards.

        The selection must cover the amount, unless it is worth at least
        everything the debtor owns.
        """
        if not self._require_phase(Phase.PAYMENT) or self.payment_request is None:
            return False
        request = self.payment_request
        debtor = self.players[request.debtor_index]
        creditor = self.players[request.creditor_index]

        cards: List[Card] = []
        seen = set()
        for ref in selected_assets:
            if isinstance(ref, dict):
                ref = AssetRef.from_dict(ref)
            card = resolve_asset(debtor, ref)
            if card is None:
                return self._reject(RejectionKind.VALIDATION_FAILURE, f"No asset at {ref}")
            if card.card_id in seen:
                continue
            seen.add(card.card_id)
            cards.append(card)

        total = sum(card.value for card in cards)
        if total < request.amount and total < debtor.assets_value:
            return self._reject(
                RejectionKind.INSUFFICIENT_ASSETS,
                f"Selected {total}M of {request.amount}M owed",
            )

        debtor.bank = [card for card in debtor.bank if card.card_id not in seen]
        for color in list(debtor.field):
            remaining = [card for card in debtor.field[color] if card.card_id not in seen]
            if remaining:
                debtor.field[color] = remaining
            else:
                del debtor.field[color]

        for card in cards:
            if card.is_property:
                if isinstance(card, WildcardProperty):
                    card.reset_color()
                creditor.add_to_field(card, card.placement_color)
            else:
                creditor.add_to_bank(card)

        self.payment_request = None
        self.phase = Phase.ACTION
        self.event_log.log(
            EventType.PAYMENT_RESOLVED,
            player_id=request.debtor_index,
            amount=request.amount,
            paid=total,
            card_ids=[card.card_id for card in cards],
        )

        self.check_win_condition()
        self._notify()
        self._resume_ai()
        return True

    # ---- AI scheduling ----

    def run_pending(self, max_tasks: Optional[int] = None) -> int:
        """Run queued AI tasks. Returns how many ran."""
        return self.scheduler.run_pending(max_tasks)

    def _schedule_ai(self, key: str, callback: Callable[[], None]) -> None:
        self.scheduler.schedule(key, callback, self.config.ai_delay_ms)

    def _resume_ai(self) -> None:
        if self.phase == Phase.ACTION and self.get_current_player().is_ai and not self._ai_turn_active:
            self._schedule_ai(AI_TURN, self._run_ai_turn)

    def _run_ai_turn(self) -> None:
        from monodeal.rules import run_agent_turn  # local import to avoid cycles

        player = self.get_current_player()
        if self.phase != Phase.ACTION or not player.is_ai:
            return
        self._ai_turn_active = True
        try:
            run_agent_turn(self, self.get_agent(player.player_id))
        finally:
            self._ai_turn_active = False

    def _ai_counter(self) -> None:
        if self.phase != Phase.COUNTER_OPPORTUNITY or self.counter_war is None:
            return
        if self.players[self.counter_war.active_index].is_ai:
            self.resolve_counter(True)

    def _ai_payment(self) -> None:
        request = self.payment_request
        if self.phase != Phase.PAYMENT or request is None:
            return
        debtor = self.players[request.debtor_index]
        if debtor.is_ai:
            self.resolve_payment(select_greedy_payment(debtor, request.amount))

    def get_agent(self, player_id: int) -> "Agent":
        """The strategy driving an AI player; greedy unless one was supplied."""
        if player_id not in self.agents:
            from monodeal.agents.greedy import GreedyAgent

            self.agents[player_id] = GreedyAgent(player_id, self.players[player_id].name)
        return self.agents[player_id]


def create_game(config: GameConfig, players: List[Player], agents: Optional[Dict[int, "Agent"]] = None) -> GameState:
    """
    Create a new game with the given configuration and players.

    Args:
        config: Game configuration
        players: Exactly two players with ids 0 and 1
        agents: Optional strategies for AI players, keyed by player id

    Returns:
        Initialized GameState (call start() to deal)
    """
    if sorted(p.player_id for p in players) != [0, 1]:
        raise ValueError("MonoDeal needs exactly two players with ids 0 and 1")
    return GameState(config, players, agents)
