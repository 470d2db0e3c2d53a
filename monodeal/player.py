"""
Player state and management.
"""

from typing import Dict, List, Optional

from monodeal.cards import ActionKind, Card
from monodeal.config import PROPERTY_COLORS


class PlayerState:
    """Represents the complete state of a player in the game."""

    def __init__(self, player_id: int, name: str, is_ai: bool = False):
        self.player_id = player_id
        self.name = name
        self.is_ai = is_ai
        self.hand: List[Card] = []
        self.bank: List[Card] = []
        self.field: Dict[str, List[Card]] = {}
        self.moves_left = 0

    def add_to_hand(self, cards: List[Card]) -> None:
        self.hand.extend(cards)

    def add_to_bank(self, card: Card) -> None:
        self.bank.append(card)

    def add_to_field(self, card: Card, color: str) -> None:
        self.field.setdefault(color, []).append(card)

    def take_from_field(self, color: str, index: int) -> Optional[Card]:
        """Remove and return a field card, or None if the slot is empty."""
        cards = self.field.get(color)
        if not cards or not 0 <= index < len(cards):
            return None
        card = cards.pop(index)
        if not cards:
            del self.field[color]
        return card

    def field_card(self, color: str, index: int) -> Optional[Card]:
        cards = self.field.get(color)
        if not cards or not 0 <= index < len(cards):
            return None
        return cards[index]

    @property
    def bank_total(self) -> int:
        return sum(card.value for card in self.bank)

    @property
    def assets_value(self) -> int:
        """Bank plus every card on the field."""
        return self.bank_total + sum(card.value for cards in self.field.values() for card in cards)

    def property_count(self, color: str) -> int:
        """Properties and wildcards in a color; improvements do not count."""
        return sum(1 for card in self.field.get(color, []) if card.is_property)

    def is_set_complete(self, color: str) -> bool:
        return self.property_count(color) >= PROPERTY_COLORS[color].required

    def complete_sets(self) -> List[str]:
        return [color for color in self.field if self.is_set_complete(color)]

    def has_improvement(self, color: str, kind: ActionKind) -> bool:
        return any(card.is_action(kind) for card in self.field.get(color, []))

    def find_card(self, kind: ActionKind) -> int:
        """Index of the first hand card of an action kind, or -1."""
        for i, card in enumerate(self.hand):
            if card.is_action(kind):
                return i
        return -1

    def has_card(self, kind: ActionKind) -> bool:
        return self.find_card(kind) >= 0

    def hand_index_of(self, card_id: int) -> int:
        for i, card in enumerate(self.hand):
            if card.card_id == card_id:
                return i
        return -1

    def __repr__(self) -> str:
        return (
            f"PlayerState(id={self.player_id}, name='{self.name}', ai={self.is_ai}, "
            f"hand={len(self.hand)}, bank={self.bank_total}, moves={self.moves_left})"
        )


class Player:
    """
    Convenience wrapper for player information.
    This is primarily for the external API.
    """

    def __init__(self, player_id: int, name: str, is_ai: bool = False):
        self.player_id = player_id
        self.name = name
        self.is_ai = is_ai

    def __repr__(self) -> str:
        return f"Player(id={self.player_id}, name='{self.name}', ai={self.is_ai})"
