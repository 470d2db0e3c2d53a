"""
Tests for rent calculation and rent cards.
"""

import pytest

from monodeal import Phase, RejectionKind
from monodeal.cards import ActionKind


@pytest.mark.parametrize("owned,expected", [(1, 2), (2, 3), (3, 6)])
def test_base_rent_follows_table(action_game, cards, owned, expected):
    alice = action_game.players[0]
    alice.field = {"RED": [cards.prop("RED") for _ in range(owned)]}
    assert action_game.calculate_rent(alice, "RED") == expected


def test_rent_caps_at_full_set(action_game, cards):
    alice = action_game.players[0]
    alice.field = {"BROWN": [cards.prop("BROWN"), cards.prop("BROWN"), cards.wild()]}
    assert action_game.calculate_rent(alice, "BROWN") == 2


def test_no_properties_no_rent(action_game):
    assert action_game.calculate_rent(action_game.players[0], "GREEN") == 0


def test_house_and_hotel_add_to_rent(action_game, cards):
    alice = action_game.players[0]
    alice.field = {"DARK_BLUE": [cards.prop("DARK_BLUE"), cards.prop("DARK_BLUE"), cards.action(ActionKind.HOUSE)]}
    assert action_game.calculate_rent(alice, "DARK_BLUE") == 8 + 3

    alice.field["DARK_BLUE"].append(cards.action(ActionKind.HOTEL))
    assert action_game.calculate_rent(alice, "DARK_BLUE") == 8 + 3 + 4


def test_wildcards_count_toward_rent(action_game, cards):
    alice = action_game.players[0]
    alice.field = {"RED": [cards.prop("RED"), cards.wild("RED", "YELLOW")]}
    assert action_game.calculate_rent(alice, "RED") == 3


def test_play_rent_charges_opponent(action_game, cards):
    alice = action_game.players[0]
    rent = cards.rent("RED", "YELLOW")
    alice.hand = [rent]
    alice.field = {"RED": [cards.prop("RED"), cards.prop("RED")]}

    assert action_game.play_rent(0, "RED")

    assert action_game.phase == Phase.PAYMENT
    assert action_game.payment_request.amount == 3
    assert action_game.payment_request.reason == "rent"
    assert alice.moves_left == 2
    assert rent in action_game.discard_pile


def test_double_rent_doubles_and_costs_a_move(action_game, cards):
    alice = action_game.players[0]
    rent, double = cards.rent("RED", "YELLOW"), cards.action(ActionKind.DOUBLE_RENT)
    alice.hand = [double, rent]
    alice.field = {"RED": [cards.prop("RED"), cards.prop("RED")]}

    assert action_game.play_rent(1, "RED", use_double=True)

    assert action_game.payment_request.amount == 6
    assert alice.moves_left == 1
    assert alice.hand == []
    assert double in action_game.discard_pile


def test_double_rent_on_last_move_is_free(action_game, cards):
    alice = action_game.players[0]
    alice.hand = [cards.rent(), cards.action(ActionKind.DOUBLE_RENT)]
    alice.field = {"RED": [cards.prop("RED")]}
    alice.moves_left = 1

    assert action_game.play_rent(0, "RED", use_double=True)
    assert action_game.payment_request.amount == 4
    assert alice.moves_left == 0


def test_rent_needs_a_matching_color(action_game, cards):
    alice = action_game.players[0]
    alice.hand = [cards.rent("RED", "YELLOW")]
    alice.field = {"GREEN": [cards.prop("GREEN")]}

    assert not action_game.play_rent(0, "GREEN")
    assert action_game.last_rejection.kind == RejectionKind.VALIDATION_FAILURE
    assert not action_game.play_rent(0, "RED")
    assert alice.moves_left == 3


def test_double_rent_is_not_played_alone(action_game, cards):
    alice = action_game.players[0]
    alice.hand = [cards.action(ActionKind.DOUBLE_RENT), cards.just_say_no()]
    assert not action_game.play_action(0)
    assert not action_game.play_action(1)
    assert len(alice.hand) == 2


def test_double_rent_without_the_card_is_rejected(action_game, cards):
    alice = action_game.players[0]
    rent = cards.rent("RED", "YELLOW")
    alice.hand = [rent]
    alice.field = {"RED": [cards.prop("RED")]}

    assert not action_game.play_rent(0, "RED", use_double=True)

    assert action_game.last_rejection.kind == RejectionKind.VALIDATION_FAILURE
    assert alice.hand == [rent]
    assert alice.moves_left == 3
    assert action_game.phase == Phase.ACTION
    assert action_game.payment_request is None
