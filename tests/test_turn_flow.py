"""
Tests for the turn cycle: dealing, drawing, moves, discarding and the win check.
"""

import pytest

from monodeal import GameConfig, Phase, Player, RejectionKind, create_game
from monodeal.money import EventType


def test_create_game_needs_two_players(game_config):
    with pytest.raises(ValueError):
        create_game(game_config, [Player(0, "Alice")])
    with pytest.raises(ValueError):
        create_game(game_config, [Player(0, "Alice"), Player(2, "Bob")])


def test_start_deals_five_cards_each(basic_game):
    assert basic_game.phase == Phase.START
    assert basic_game.start()

    assert len(basic_game.players[0].hand) == 5
    assert len(basic_game.players[1].hand) == 5
    assert len(basic_game.deck) == 88
    assert basic_game.current_player_index == 0
    assert basic_game.phase == Phase.DRAW
    assert basic_game.event_log.of_type(EventType.GAME_START)


def test_start_twice_is_rejected(basic_game):
    basic_game.start()
    assert not basic_game.start()
    assert basic_game.last_rejection.kind == RejectionKind.PHASE_VIOLATION


def test_first_turn_draws_two_and_grants_three_moves(basic_game):
    basic_game.start()
    assert basic_game.perform_draw()

    alice = basic_game.players[0]
    assert len(alice.hand) == 7
    assert alice.moves_left == 3
    assert basic_game.phase == Phase.ACTION


def test_banking_three_money_cards_uses_all_moves(action_game, cards):
    alice = action_game.players[0]
    alice.hand = [cards.money(1), cards.money(2), cards.money(5), cards.money(3)]

    for _ in range(3):
        assert action_game.play_card_to_bank(0)

    assert alice.moves_left == 0
    assert alice.bank_total == 8
    assert not action_game.play_card_to_bank(0)
    assert action_game.last_rejection.kind == RejectionKind.VALIDATION_FAILURE
    assert len(alice.hand) == 1


def test_properties_cannot_be_banked(action_game, cards):
    alice = action_game.players[0]
    alice.hand = [cards.prop("RED")]
    assert not action_game.play_card_to_bank(0)
    assert alice.bank == []
    assert alice.moves_left == 3


def test_action_cards_can_be_banked_for_value(action_game, cards):
    alice = action_game.players[0]
    alice.hand = [cards.just_say_no(), cards.rent("RED", "YELLOW")]
    assert action_game.play_card_to_bank(0)
    assert action_game.play_card_to_bank(0)
    assert alice.bank_total == 5


def test_commands_outside_their_phase_are_no_ops(basic_game):
    basic_game.start()
    hand_before = list(basic_game.players[0].hand)

    assert not basic_game.play_card_to_bank(0)
    assert basic_game.last_rejection.kind == RejectionKind.PHASE_VIOLATION
    assert not basic_game.end_turn()
    assert not basic_game.resolve_payment([])
    assert basic_game.players[0].hand == hand_before
    assert basic_game.phase == Phase.DRAW


def test_bad_hand_index_is_rejected(action_game):
    assert not action_game.play_card_to_bank(3)
    assert action_game.last_rejection.kind == RejectionKind.VALIDATION_FAILURE


def test_end_turn_passes_to_opponent(action_game):
    assert action_game.end_turn()
    assert action_game.current_player_index == 1
    assert action_game.turn_number == 1
    assert action_game.phase == Phase.DRAW
    assert action_game.players[0].moves_left == 0
    assert action_game.event_log.of_type(EventType.TURN_END)


def test_empty_hand_draws_five(action_game):
    """Bob's hand is empty, so his turn starts with five cards."""
    action_game.end_turn()
    assert action_game.pending_draw_count == 5
    action_game.perform_draw()
    assert len(action_game.players[1].hand) == 5


def test_hand_over_limit_requires_discard(action_game, cards):
    alice = action_game.players[0]
    alice.hand = [cards.money(1) for _ in range(9)]

    assert action_game.end_turn()
    assert action_game.phase == Phase.DISCARD
    assert action_game.current_player_index == 0

    assert action_game.discard_excess_card(0)
    assert action_game.phase == Phase.DISCARD
    assert action_game.discard_excess_card(0)

    assert len(alice.hand) == 7
    assert len(action_game.discard_pile) == 2
    assert action_game.current_player_index == 1
    assert action_game.phase == Phase.DRAW


def test_ai_discards_from_end_of_hand(ai_action_game, cards):
    game = ai_action_game
    game.end_turn()
    bob = game.players[1]
    assert game.phase == Phase.ACTION  # the AI draws straight away

    held = [cards.just_say_no() for _ in range(10)]
    bob.hand = list(held)
    game.run_pending()

    assert bob.hand == held[:7]
    assert game.discard_pile[-3:] == [held[9], held[8], held[7]]
    assert game.current_player_index == 0
    assert game.phase == Phase.DRAW


def test_pass_go_draws_two(action_game, cards):
    from monodeal.cards import ActionKind

    alice = action_game.players[0]
    alice.hand = [cards.action(ActionKind.PASS_GO)]
    assert action_game.play_action(0)
    assert len(alice.hand) == 2
    assert alice.moves_left == 2
    assert len(action_game.discard_pile) == 1


def test_wildcard_color_switch_is_free(action_game, cards):
    alice = action_game.players[0]
    wild = cards.wild("RED", "YELLOW")
    alice.hand = [wild]

    assert action_game.play_property_to_field(0, "RED")
    assert alice.field == {"RED": [wild]}
    assert alice.moves_left == 2

    assert action_game.switch_property_color("RED", 0, "YELLOW")
    assert alice.field == {"YELLOW": [wild]}
    assert wild.current_color == "YELLOW"
    assert alice.moves_left == 2


def test_wildcard_rejects_invalid_colors(action_game, cards):
    alice = action_game.players[0]
    alice.hand = [cards.wild("RED", "YELLOW"), cards.prop("GREEN")]

    assert not action_game.play_property_to_field(0, "GREEN")
    assert action_game.play_property_to_field(0)
    assert alice.field["RED"][0].current_color == "RED"

    assert not action_game.switch_property_color("RED", 0, "BROWN")
    assert not action_game.switch_property_color("RED", 0, "RED")

    action_game.play_property_to_field(0)
    assert not action_game.switch_property_color("GREEN", 0, "RED")
    assert action_game.last_rejection.kind == RejectionKind.VALIDATION_FAILURE


def test_three_complete_sets_win(action_game, cards):
    alice = action_game.players[0]
    alice.field = {
        "BROWN": [cards.prop("BROWN"), cards.prop("BROWN")],
        "DARK_BLUE": [cards.prop("DARK_BLUE"), cards.prop("DARK_BLUE")],
        "UTILITY": [cards.prop("UTILITY")],
    }
    alice.hand = [cards.prop("UTILITY")]

    assert action_game.play_property_to_field(0)
    assert action_game.phase == Phase.GAME_OVER
    assert action_game.winner == 0
    assert action_game.event_log.of_type(EventType.GAME_END)


def test_opponent_win_is_detected_on_any_state_change(action_game, cards):
    bob = action_game.players[1]
    bob.field = {
        "BROWN": [cards.prop("BROWN"), cards.prop("BROWN")],
        "DARK_BLUE": [cards.prop("DARK_BLUE"), cards.prop("DARK_BLUE")],
        "UTILITY": [cards.prop("UTILITY"), cards.wild("UTILITY", "RAILROAD")],
    }
    action_game.players[0].hand = [cards.money(1)]

    action_game.play_card_to_bank(0)
    assert action_game.winner == 1


def test_game_over_freezes_mutation(action_game, cards):
    alice = action_game.players[0]
    alice.field = {
        "BROWN": [cards.prop("BROWN"), cards.prop("BROWN")],
        "DARK_BLUE": [cards.prop("DARK_BLUE"), cards.prop("DARK_BLUE")],
        "UTILITY": [cards.prop("UTILITY")],
    }
    alice.hand = [cards.prop("UTILITY"), cards.money(5)]
    action_game.play_property_to_field(0)

    assert not action_game.play_card_to_bank(0)
    assert not action_game.end_turn()
    assert action_game.last_rejection.kind == RejectionKind.PHASE_VIOLATION
    assert alice.bank == []


def test_time_limit_awards_richer_player(cards):
    game = create_game(GameConfig(seed=1, time_limit_turns=2), [Player(0, "Alice"), Player(1, "Bob")])
    game.start()
    game.perform_draw()
    game.players[0].bank = [cards.money(5)]
    game.end_turn()

    game.perform_draw()
    game.end_turn()

    assert game.game_over
    assert game.winner == 0


def test_time_limit_tie_has_no_winner():
    game = create_game(GameConfig(seed=1, time_limit_turns=1), [Player(0, "Alice"), Player(1, "Bob")])
    game.start()
    game.perform_draw()
    game.end_turn()

    assert game.game_over
    assert game.winner is None


def test_listeners_are_notified(basic_game):
    seen = []
    basic_game.subscribe(lambda game: seen.append(game.phase))
    basic_game.start()
    basic_game.perform_draw()

    assert Phase.DRAW in seen
    assert seen[-1] == Phase.ACTION


def test_time_limit_game_over_notifies_listeners():
    game = create_game(GameConfig(seed=1, time_limit_turns=1), [Player(0, "Alice"), Player(1, "Bob")])
    game.start()
    game.perform_draw()
    seen = []
    game.subscribe(lambda g: seen.append(g.phase))

    assert game.end_turn()

    assert seen == [Phase.GAME_OVER]


def test_assets_value_is_bank_plus_field(action_game, cards):
    alice = action_game.players[0]
    alice.bank = [cards.money(3), cards.money(2)]
    alice.field = {"RED": [cards.prop("RED")], "PINK": [cards.wild("PINK", "ORANGE", value=2)]}
    assert alice.bank_total == 5
    assert alice.assets_value == 5 + 3 + 2
