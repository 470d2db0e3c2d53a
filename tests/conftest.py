"""Shared test fixtures for MonoDeal tests."""

import pytest

from monodeal import GameConfig, Player, create_game
from monodeal.cards import ActionCard, ActionKind, MoneyCard, PropertyCard, RentCard, WildcardProperty
from monodeal.config import ACTION_CARDS, ALL_COLORS, PROPERTY_CARDS


class CardFactory:
    """Builds loose cards with ids that never clash with the deck's."""

    def __init__(self):
        self._next_id = 1000

    def _id(self) -> int:
        self._next_id += 1
        return self._next_id

    def money(self, value):
        return MoneyCard(self._id(), f"{value}M", value)

    def prop(self, color, value=None):
        base_value, names = PROPERTY_CARDS[color]
        return PropertyCard(self._id(), names[0], base_value if value is None else value, color=color)

    def wild(self, *colors, value=0):
        return WildcardProperty(self._id(), "Wildcard", value, valid_colors=tuple(colors) or ALL_COLORS)

    def action(self, kind):
        _, value, name, description = ACTION_CARDS[kind.value]
        return ActionCard(self._id(), name, value, action_type=kind, description=description)

    def rent(self, *colors, value=1):
        return RentCard(self._id(), "Rent", value, valid_colors=tuple(colors) or ALL_COLORS)

    def just_say_no(self):
        return self.action(ActionKind.JUST_SAY_NO)


@pytest.fixture
def cards():
    return CardFactory()


@pytest.fixture
def game_config():
    """Default game configuration with fixed seed and no AI delay."""
    return GameConfig(seed=42, ai_delay_ms=0)


@pytest.fixture
def two_players():
    """Two human test players."""
    return [Player(0, "Alice"), Player(1, "Bob")]


@pytest.fixture
def basic_game(game_config, two_players):
    """Unstarted game with two players and fixed seed."""
    return create_game(game_config, two_players)


@pytest.fixture
def ai_game(game_config):
    """Unstarted game: Alice is human, Bob is the greedy AI."""
    return create_game(game_config, [Player(0, "Alice"), Player(1, "Bob", is_ai=True)])


@pytest.fixture
def action_game(basic_game):
    """Alice in her first ACTION phase with both hands emptied."""
    basic_game.start()
    basic_game.perform_draw()
    for player in basic_game.players.values():
        player.hand = []
    return basic_game


@pytest.fixture
def ai_action_game(ai_game):
    """Like action_game, but Bob is the AI."""
    ai_game.start()
    ai_game.perform_draw()
    for player in ai_game.players.values():
        player.hand = []
    return ai_game
