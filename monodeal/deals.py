"""
Targeted actions: Sly Deal, Deal Breaker and Forced Deal.

Validation happens before the counter war starts; the transfer itself
runs only if the war resolves in the aggressor's favour.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from monodeal.cards import ActionKind

if TYPE_CHECKING:
    from monodeal.player import PlayerState


@dataclass(frozen=True)
class PropertyRef:
    """A card in one of the acting player's own sets."""

    color: str
    card_index: int

    def to_dict(self) -> Dict[str, Any]:
        return {"color": self.color, "card_index": self.card_index}


@dataclass(frozen=True)
class TargetRef:
    """A card in some player's field."""

    player_index: int
    color: str
    card_index: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TargetRef":
        return cls(int(data["player_index"]), data["color"], int(data.get("card_index", 0)))

    def to_dict(self) -> Dict[str, Any]:
        return {"player_index": self.player_index, "color": self.color, "card_index": self.card_index}


@dataclass
class PendingAction:
    """
    A targeted action card waiting for its target.

    The card stays in the source player's hand until the action resolves
    and is tracked by id.
    """

    card_id: int
    kind: ActionKind
    source_index: int
    my_property: Optional[PropertyRef] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "card_id": self.card_id,
            "kind": self.kind.value,
            "source_index": self.source_index,
            "my_property": self.my_property.to_dict() if self.my_property else None,
        }


def validate_forced_deal_source(player: "PlayerState", ref: PropertyRef) -> Tuple[bool, str]:
    """The offered card must be a property outside any complete set."""
    card = player.field_card(ref.color, ref.card_index)
    if card is None:
        return False, "No such property"
    if not card.is_property:
        return False, "Only property cards can be offered"
    if player.is_set_complete(ref.color):
        return False, "Cannot offer a property from a complete set"
    return True, ""


def validate_target(
    action: PendingAction, target_player: "PlayerState", target: TargetRef
) -> Tuple[bool, str]:
    """
    Check a target against the rules of the pending action.

    Returns (valid, error_message).
    """
    if target.player_index == action.source_index:
        return False, "Target must belong to the opponent"

    card = target_player.field_card(target.color, target.card_index)
    if card is None:
        return False, "No such property"
    if not card.is_property:
        return False, "Only property cards can be targeted"

    complete = target_player.is_set_complete(target.color)
    if action.kind == ActionKind.SLY_DEAL and complete:
        return False, "Sly Deal cannot take a property from a complete set"
    if action.kind == ActionKind.DEAL_BREAKER and not complete:
        return False, "Deal Breaker needs a complete set"
    if action.kind == ActionKind.FORCED_DEAL:
        if complete:
            return False, "Forced Deal cannot take a property from a complete set"
        if action.my_property is None:
            return False, "Choose your own property first"

    return True, ""


def list_targets(action: PendingAction, target_player: "PlayerState") -> List[TargetRef]:
    """Every valid target in the opponent's field, in field order."""
    targets = []
    for color, cards in target_player.field.items():
        for i in range(len(cards)):
            target = TargetRef(target_player.player_id, color, i)
            if validate_target(action, target_player, target)[0]:
                targets.append(target)
    return targets


def list_forced_deal_sources(player: "PlayerState") -> List[PropertyRef]:
    refs = []
    for color, cards in player.field.items():
        for i in range(len(cards)):
            ref = PropertyRef(color, i)
            if validate_forced_deal_source(player, ref)[0]:
                refs.append(ref)
    return refs


def execute_transfer(
    action: PendingAction,
    source: "PlayerState",
    target_player: "PlayerState",
    target: TargetRef,
) -> Dict[str, Any]:
    """Move the cards. Returns event details describing what moved."""
    if action.kind == ActionKind.SLY_DEAL:
        card = target_player.take_from_field(target.color, target.card_index)
        source.add_to_field(card, target.color)
        return {"card": card.name, "card_id": card.card_id, "color": target.color}

    if action.kind == ActionKind.DEAL_BREAKER:
        stolen = target_player.field.pop(target.color, [])
        for card in stolen:
            source.add_to_field(card, target.color)
        return {"color": target.color, "card_ids": [c.card_id for c in stolen]}

    if action.kind == ActionKind.FORCED_DEAL:
        mine_ref = action.my_property
        mine = source.take_from_field(mine_ref.color, mine_ref.card_index)
        theirs = target_player.take_from_field(target.color, target.card_index)
        source.add_to_field(theirs, target.color)
        target_player.add_to_field(mine, mine_ref.color)
        return {
            "given": mine.card_id,
            "given_color": mine_ref.color,
            "taken": theirs.card_id,
            "taken_color": target.color,
        }

    raise ValueError(f"Not a targeted action: {action.kind}")
