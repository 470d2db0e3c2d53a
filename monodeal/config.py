"""
Game configuration settings and the static card catalog.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass
class GameConfig:
    """Configuration for a MonoDeal game."""

    starting_hand: int = 5
    draw_count: int = 2
    empty_hand_draw_count: int = 5
    moves_per_turn: int = 3
    hand_limit: int = 7
    sets_to_win: int = 3

    birthday_amount: int = 2
    debt_collector_amount: int = 5
    house_bonus: int = 3
    hotel_bonus: int = 4

    ai_max_attempts: int = 10
    ai_delay_ms: int = 1000

    time_limit_turns: Optional[int] = None

    seed: Optional[int] = None


@dataclass(frozen=True)
class PropertyColorData:
    """Set requirement and rent table for one property color."""

    key: str
    name: str
    color_code: str
    required: int
    rent: Tuple[int, ...] = field(default_factory=tuple)

    def rent_for(self, owned: int) -> int:
        """Base rent for a set holding `owned` properties."""
        if owned <= 0:
            return 0
        return self.rent[min(owned, len(self.rent)) - 1]


PROPERTY_COLORS: Dict[str, PropertyColorData] = {
    "BROWN": PropertyColorData("BROWN", "Brown", "bg-brown", 2, (1, 2)),
    "DARK_BLUE": PropertyColorData("DARK_BLUE", "Dark Blue", "bg-blue", 2, (3, 8)),
    "GREEN": PropertyColorData("GREEN", "Green", "bg-green", 3, (2, 4, 7)),
    "YELLOW": PropertyColorData("YELLOW", "Yellow", "bg-yellow", 3, (2, 4, 6)),
    "RED": PropertyColorData("RED", "Red", "bg-red", 3, (2, 3, 6)),
    "ORANGE": PropertyColorData("ORANGE", "Orange", "bg-orange", 3, (1, 3, 5)),
    "PINK": PropertyColorData("PINK", "Pink", "bg-pink", 3, (1, 2, 4)),
    "LIGHT_BLUE": PropertyColorData("LIGHT_BLUE", "Light Blue", "bg-light-blue", 3, (1, 2, 3)),
    "RAILROAD": PropertyColorData("RAILROAD", "Railroad", "bg-railroad", 4, (1, 2, 3, 4)),
    "UTILITY": PropertyColorData("UTILITY", "Utility", "bg-utility", 2, (1, 2)),
}

ALL_COLORS: Tuple[str, ...] = tuple(PROPERTY_COLORS)


# Deck composition. Each table is (count, value, ...) data only.

MONEY_COUNTS: Dict[int, int] = {1: 6, 2: 5, 3: 3, 4: 3, 5: 2, 10: 1}

# color -> (value, names)
PROPERTY_CARDS: Dict[str, Tuple[int, List[str]]] = {
    "BROWN": (1, ["Old Kent Road", "Whitechapel Road"]),
    "DARK_BLUE": (4, ["Park Lane", "Mayfair"]),
    "GREEN": (4, ["Regent Street", "Oxford Street", "Bond Street"]),
    "YELLOW": (3, ["Leicester Square", "Coventry Street", "Piccadilly"]),
    "RED": (3, ["Strand", "Fleet Street", "Trafalgar Square"]),
    "ORANGE": (2, ["Bow Street", "Marlborough Street", "Vine Street"]),
    "PINK": (2, ["Pall Mall", "Whitehall", "Northumberland Avenue"]),
    "LIGHT_BLUE": (1, ["The Angel Islington", "Euston Road", "Pentonville Road"]),
    "RAILROAD": (2, ["Kings Cross", "Marylebone", "Fenchurch Street", "Liverpool Street"]),
    "UTILITY": (2, ["Electric Company", "Water Works"]),
}

# (count, value, valid colors); None means every color
WILDCARD_CARDS: List[Tuple[int, int, Optional[Tuple[str, ...]]]] = [
    (2, 0, None),
    (1, 1, ("BROWN", "LIGHT_BLUE")),
    (2, 2, ("PINK", "ORANGE")),
    (1, 4, ("GREEN", "RAILROAD")),
    (1, 4, ("DARK_BLUE", "GREEN")),
    (1, 2, ("UTILITY", "RAILROAD")),
    (2, 3, ("YELLOW", "RED")),
]

# action kind -> (count, value, name, description)
ACTION_CARDS: Dict[str, Tuple[int, int, str, str]] = {
    "DEAL_BREAKER": (2, 5, "Deal Breaker", "Steal a complete set from your opponent"),
    "JUST_SAY_NO": (3, 4, "Just Say No", "Cancel an action played against you"),
    "SLY_DEAL": (3, 3, "Sly Deal", "Steal one property that is not part of a complete set"),
    "FORCED_DEAL": (3, 3, "Forced Deal", "Swap one of your properties with your opponent"),
    "DEBT_COLLECTOR": (3, 3, "Debt Collector", "Your opponent pays you 5M"),
    "BIRTHDAY": (3, 2, "It's My Birthday", "Your opponent pays you 2M"),
    "PASS_GO": (4, 1, "Pass Go", "Draw 2 extra cards"),
    "HOUSE": (3, 3, "House", "Add 3M to the rent of a complete set"),
    "HOTEL": (2, 4, "Hotel", "Add 4M to the rent of a complete set with a house"),
    "DOUBLE_RENT": (2, 1, "Double The Rent", "Play with a rent card to double it"),
}

# (count, value, valid colors); None means every color
RENT_CARDS: List[Tuple[int, int, Optional[Tuple[str, ...]]]] = [
    (2, 3, None),
    (2, 1, ("BROWN", "LIGHT_BLUE")),
    (2, 1, ("PINK", "ORANGE")),
    (2, 1, ("GREEN", "DARK_BLUE")),
    (2, 1, ("YELLOW", "RED")),
    (2, 1, ("UTILITY", "RAILROAD")),
]

DECK_SIZE = 98
