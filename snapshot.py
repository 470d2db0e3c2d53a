"""
Public snapshot serialization of GameState.

Produces a sanitized, UI-friendly view of the current game without
exposing hidden information (deck order, the opponent's hand).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from monodeal.config import PROPERTY_COLORS
from monodeal.game import GameState


def serialize_snapshot(game: GameState, viewer: Optional[int] = None) -> Dict[str, Any]:
    """Serialize a GameState into a public, stable JSON dict.

    The snapshot includes:
    - phase, turn_number, current and acting player ids
    - players with bank, field sets and totals
    - hand contents only for `viewer` (hand sizes for everyone)
    - deck counts (remaining / discard) only
    - the in-flight payment request, pending action and counter war
    """
    players: List[Dict[str, Any]] = []
    for pid, pstate in sorted(game.players.items()):
        sets: List[Dict[str, Any]] = []
        for color, cards in pstate.field.items():
            sets.append(
                {
                    "color": color,
                    "name": PROPERTY_COLORS[color].name,
                    "required": PROPERTY_COLORS[color].required,
                    "property_count": pstate.property_count(color),
                    "complete": pstate.is_set_complete(color),
                    "rent": game.calculate_rent(pstate, color),
                    "cards": [card.to_dict() for card in cards],
                }
            )

        entry: Dict[str, Any] = {
            "player_id": pid,
            "name": pstate.name,
            "is_ai": pstate.is_ai,
            "moves_left": pstate.moves_left,
            "hand_size": len(pstate.hand),
            "bank": [card.to_dict() for card in pstate.bank],
            "bank_total": pstate.bank_total,
            "assets_value": pstate.assets_value,
            "complete_sets": len(pstate.complete_sets()),
            "field": sets,
        }
        if viewer == pid:
            entry["hand"] = [card.to_dict() for card in pstate.hand]
        players.append(entry)

    rejection = None
    if game.last_rejection is not None:
        rejection = {"kind": game.last_rejection.kind.value, "reason": game.last_rejection.reason}

    snapshot: Dict[str, Any] = {
        "phase": game.phase.value,
        "turn_number": game.turn_number,
        "current_player_id": game.current_player_index,
        "acting_player_id": None if game.game_over else game.acting_player_index(),
        "players": players,
        "deck": {
            "cards_remaining": len(game.deck),
            "discard_count": len(game.discard_pile),
        },
        "payment_request": game.payment_request.to_dict() if game.payment_request else None,
        "pending_action": game.pending_action.to_dict() if game.pending_action else None,
        "counter_war": game.counter_war.to_dict() if game.counter_war else None,
        "last_rejection": rejection,
        "game_over": game.game_over,
        "winner": game.winner,
    }
    return snapshot
