"""
Card types, the deck, and deck construction.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple
import random

from monodeal.config import (
    ACTION_CARDS,
    ALL_COLORS,
    MONEY_COUNTS,
    PROPERTY_CARDS,
    PROPERTY_COLORS,
    RENT_CARDS,
    WILDCARD_CARDS,
    PropertyColorData,
)
from monodeal.money import EventLog, EventType


class CardType(Enum):
    """Broad card categories."""

    PROPERTY = "property"
    MONEY = "money"
    ACTION = "action"
    WILDCARD = "wildcard"
    RENT = "rent"


class ActionKind(Enum):
    """Behaviour selected by an action card."""

    PASS_GO = "PASS_GO"
    BIRTHDAY = "BIRTHDAY"
    DEBT_COLLECTOR = "DEBT_COLLECTOR"
    SLY_DEAL = "SLY_DEAL"
    DEAL_BREAKER = "DEAL_BREAKER"
    FORCED_DEAL = "FORCED_DEAL"
    HOUSE = "HOUSE"
    HOTEL = "HOTEL"
    JUST_SAY_NO = "JUST_SAY_NO"
    DOUBLE_RENT = "DOUBLE_RENT"


TARGETED_KINDS = (ActionKind.SLY_DEAL, ActionKind.DEAL_BREAKER, ActionKind.FORCED_DEAL)
IMPROVEMENT_KINDS = (ActionKind.HOUSE, ActionKind.HOTEL)


@dataclass(eq=False)
class Card:
    """
    Base card. Cards are compared by identity: a card moves between
    containers and is never copied.
    """

    card_id: int
    name: str
    value: int

    card_type: ClassVar[CardType]

    @property
    def is_property(self) -> bool:
        """Property and wildcard cards form sets in a field."""
        return self.card_type in (CardType.PROPERTY, CardType.WILDCARD)

    def is_action(self, kind: ActionKind) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.card_id,
            "name": self.name,
            "type": self.card_type.value,
            "value": self.value,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(#{self.card_id} '{self.name}', {self.value}M)"


@dataclass(eq=False, repr=False)
class MoneyCard(Card):
    card_type: ClassVar[CardType] = CardType.MONEY


@dataclass(eq=False, repr=False)
class PropertyCard(Card):
    """A property of a fixed color."""

    color: str = "BROWN"

    card_type: ClassVar[CardType] = CardType.PROPERTY

    @property
    def color_info(self) -> PropertyColorData:
        return PROPERTY_COLORS[self.color]

    @property
    def placement_color(self) -> str:
        return self.color

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["color"] = self.color
        return data


@dataclass(eq=False, repr=False)
class WildcardProperty(Card):
    """A property card that may count as any of its valid colors."""

    valid_colors: Tuple[str, ...] = ALL_COLORS
    current_color: Optional[str] = None

    card_type: ClassVar[CardType] = CardType.WILDCARD

    def __post_init__(self) -> None:
        if self.current_color is None:
            self.current_color = self.valid_colors[0]

    @property
    def placement_color(self) -> str:
        return self.current_color

    def reset_color(self) -> None:
        """Return the wildcard to its first valid color."""
        self.current_color = self.valid_colors[0]

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["valid_colors"] = list(self.valid_colors)
        data["current_color"] = self.current_color
        return data


@dataclass(eq=False, repr=False)
class ActionCard(Card):
    """An action card; `action_type` selects its behaviour."""

    action_type: ActionKind = ActionKind.PASS_GO
    description: str = ""

    card_type: ClassVar[CardType] = CardType.ACTION

    def is_action(self, kind: ActionKind) -> bool:
        return self.action_type == kind

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["action_type"] = self.action_type.value
        data["description"] = self.description
        return data


@dataclass(eq=False, repr=False)
class RentCard(Card):
    """Charges rent on one of its valid colors."""

    valid_colors: Tuple[str, ...] = ALL_COLORS

    card_type: ClassVar[CardType] = CardType.RENT

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["valid_colors"] = list(self.valid_colors)
        return data


class Deck:
    """Draw pile plus discard pile. Drawing pops from the end of the pile."""

    def __init__(self, cards: List[Card], rng: random.Random, event_log: Optional[EventLog] = None):
        self.cards = cards.copy()
        self.rng = rng
        self.event_log = event_log
        self.discard_pile: List[Card] = []
        self.shuffle()

    def shuffle(self) -> None:
        """Shuffle the draw pile in place."""
        self.rng.shuffle(self.cards)

    def draw(self, count: int) -> List[Card]:
        """
        Draw up to `count` cards.
        An empty draw pile is refilled from the shuffled discard pile; when
        both are empty fewer cards are returned.
        """
        drawn: List[Card] = []
        for _ in range(count):
            if not self.cards:
                if not self.discard_pile:
                    break
                self.cards = self.discard_pile.copy()
                self.discard_pile.clear()
                self.shuffle()
                if self.event_log is not None:
                    self.event_log.log(EventType.RESHUFFLE, details={"cards": len(self.cards)})
            drawn.append(self.cards.pop())
        return drawn

    def discard(self, card: Card) -> None:
        """Put a card on the discard pile."""
        self.discard_pile.append(card)

    def __len__(self) -> int:
        return len(self.cards)


def build_cards() -> List[Card]:
    """Build the full, unshuffled card list with sequential ids."""
    cards: List[Card] = []
    next_id = 1

    def add(card_cls, *args, **kwargs) -> None:
        nonlocal next_id
        cards.append(card_cls(next_id, *args, **kwargs))
        next_id += 1

    for value, count in MONEY_COUNTS.items():
        for _ in range(count):
            add(MoneyCard, f"{value}M", value)

    for color, (value, names) in PROPERTY_CARDS.items():
        for name in names:
            add(PropertyCard, name, value, color=color)

    for count, value, colors in WILDCARD_CARDS:
        valid = colors or ALL_COLORS
        name = "Property Wildcard" if colors is None else "Wildcard " + "/".join(
            PROPERTY_COLORS[c].name for c in valid
        )
        for _ in range(count):
            add(WildcardProperty, name, value, valid_colors=valid)

    for kind, (count, value, name, description) in ACTION_CARDS.items():
        for _ in range(count):
            add(ActionCard, name, value, action_type=ActionKind(kind), description=description)

    for count, value, colors in RENT_CARDS:
        valid = colors or ALL_COLORS
        name = "Wild Rent" if colors is None else "Rent " + "/".join(PROPERTY_COLORS[c].name for c in valid)
        for _ in range(count):
            add(RentCard, name, value, valid_colors=valid)

    return cards


def create_deck(rng: random.Random, event_log: Optional[EventLog] = None) -> Deck:
    """Create the standard shuffled deck."""
    return Deck(build_cards(), rng, event_log)
