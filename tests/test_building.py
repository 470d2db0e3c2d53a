"""
Tests for houses and hotels.
"""

from monodeal import RejectionKind
from monodeal.cards import ActionKind


def test_house_on_complete_set(action_game, cards):
    alice = action_game.players[0]
    house = cards.action(ActionKind.HOUSE)
    alice.hand = [house]
    alice.field = {"BROWN": [cards.prop("BROWN"), cards.prop("BROWN")]}

    assert action_game.play_action(0)
    assert alice.field["BROWN"][-1] is house
    assert alice.moves_left == 2
    assert action_game.calculate_rent(alice, "BROWN") == 5


def test_house_needs_complete_set(action_game, cards):
    alice = action_game.players[0]
    alice.hand = [cards.action(ActionKind.HOUSE)]
    alice.field = {"RED": [cards.prop("RED"), cards.prop("RED")]}

    assert not action_game.play_action(0)
    assert action_game.last_rejection.kind == RejectionKind.VALIDATION_FAILURE
    assert len(alice.hand) == 1


def test_one_house_per_set(action_game, cards):
    alice = action_game.players[0]
    alice.hand = [cards.action(ActionKind.HOUSE)]
    alice.field = {"BROWN": [cards.prop("BROWN"), cards.prop("BROWN"), cards.action(ActionKind.HOUSE)]}
    assert not action_game.play_action(0)


def test_hotel_needs_a_house(action_game, cards):
    alice = action_game.players[0]
    alice.hand = [cards.action(ActionKind.HOTEL), cards.action(ActionKind.HOUSE)]
    alice.field = {"BROWN": [cards.prop("BROWN"), cards.prop("BROWN")]}

    assert not action_game.play_action(0)
    assert action_game.play_action(1)
    assert action_game.play_action(0)
    assert alice.has_improvement("BROWN", ActionKind.HOTEL)
    assert action_game.calculate_rent(alice, "BROWN") == 2 + 3 + 4


def test_second_hotel_is_refused(action_game, cards):
    alice = action_game.players[0]
    alice.hand = [cards.action(ActionKind.HOTEL)]
    alice.field = {
        "BROWN": [
            cards.prop("BROWN"),
            cards.prop("BROWN"),
            cards.action(ActionKind.HOUSE),
            cards.action(ActionKind.HOTEL),
        ]
    }
    assert not action_game.play_action(0)


def test_build_on_chosen_set(action_game, cards):
    alice = action_game.players[0]
    alice.hand = [cards.action(ActionKind.HOUSE)]
    alice.field = {
        "BROWN": [cards.prop("BROWN"), cards.prop("BROWN")],
        "UTILITY": [cards.prop("UTILITY"), cards.prop("UTILITY")],
        "RED": [cards.prop("RED")],
    }

    assert not action_game.play_action(0, "RED")
    assert action_game.play_action(0, "UTILITY")
    assert alice.has_improvement("UTILITY", ActionKind.HOUSE)
    assert not alice.has_improvement("BROWN", ActionKind.HOUSE)


def test_improvements_do_not_complete_sets(action_game, cards):
    alice = action_game.players[0]
    alice.field = {"BROWN": [cards.prop("BROWN"), cards.action(ActionKind.HOUSE)]}
    assert alice.property_count("BROWN") == 1
    assert not alice.is_set_complete("BROWN")
