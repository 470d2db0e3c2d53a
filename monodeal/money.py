"""
Payment requests and event logging.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from monodeal.cards import Card
    from monodeal.player import PlayerState


class EventType(Enum):
    """Types of game events."""

    GAME_START = "game_start"
    TURN_START = "turn_start"
    DRAW = "draw"
    RESHUFFLE = "reshuffle"

    BANK_CARD = "bank_card"
    PLACE_PROPERTY = "place_property"
    SWITCH_COLOR = "switch_color"
    PLAY_ACTION = "play_action"
    PLAY_RENT = "play_rent"
    IMPROVEMENT = "improvement"

    COUNTER_OPPORTUNITY = "counter_opportunity"
    JUST_SAY_NO = "just_say_no"
    COUNTER_DECLINED = "counter_declined"
    COUNTER_RESOLVED = "counter_resolved"

    PAYMENT_REQUESTED = "payment_requested"
    PAYMENT_RESOLVED = "payment_resolved"

    TARGETING_START = "targeting_start"
    TARGETING_CANCELLED = "targeting_cancelled"
    PROPERTY_STOLEN = "property_stolen"
    SET_STOLEN = "set_stolen"
    PROPERTY_SWAPPED = "property_swapped"
    ACTION_CANCELLED = "action_cancelled"

    DISCARD = "discard"
    TURN_END = "turn_end"
    GAME_END = "game_end"


@dataclass
class GameEvent:
    """A logged event in the game."""

    event_type: EventType
    player_id: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        player_str = f"P{self.player_id}" if self.player_id is not None else "System"
        return f"[{player_str}] {self.event_type.value}: {self.details}"


class EventLog:
    """Manages the game event log."""

    def __init__(self):
        self.events: List[GameEvent] = []

    def log(self, event_type: EventType, player_id: Optional[int] = None, **details: Any) -> None:
        """Log a game event."""
        payload = details.pop("details", {})
        payload.update(details)
        self.events.append(GameEvent(event_type, player_id, payload))

    def get_events(self) -> List[GameEvent]:
        """Get all logged events."""
        return self.events.copy()

    def get_recent_events(self, count: int = 10) -> List[GameEvent]:
        """Get the most recent N events."""
        return self.events[-count:]

    def of_type(self, event_type: EventType) -> List[GameEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def clear(self) -> None:
        """Clear the event log."""
        self.events.clear()


@dataclass
class PaymentRequest:
    """An amount owed by the debtor to the creditor."""

    amount: int
    debtor_index: int
    creditor_index: int
    reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amount": self.amount,
            "debtor_index": self.debtor_index,
            "creditor_index": self.creditor_index,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class AssetRef:
    """
    Points at one of the debtor's cards.

    source is "bank" (color unused) or "field" (color names the set).
    """

    source: str
    index: int
    color: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssetRef":
        return cls(data["source"], int(data["index"]), data.get("color"))

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "index": self.index, "color": self.color}


def resolve_asset(player: "PlayerState", ref: AssetRef) -> Optional["Card"]:
    """Look up the card a ref points at, or None if it does not exist."""
    if ref.source == "bank":
        if 0 <= ref.index < len(player.bank):
            return player.bank[ref.index]
        return None
    if ref.source == "field" and ref.color is not None:
        return player.field_card(ref.color, ref.index)
    return None


def select_greedy_payment(player: "PlayerState", amount: int) -> List[AssetRef]:
    """
    Pick assets covering `amount`: bank cards in order first, then field
    cards color by color. Returns everything owned if that is not enough.
    """
    selected: List[AssetRef] = []
    total = 0

    for i, card in enumerate(player.bank):
        if total >= amount:
            break
        selected.append(AssetRef("bank", i))
        total += card.value

    for color, cards in player.field.items():
        for i, card in enumerate(cards):
            if total >= amount:
                return selected
            selected.append(AssetRef("field", i, color))
            total += card.value

    return selected
