"""
"Just Say No" counter war.

Players take turns cancelling the pending effect: the target may cancel
it, the aggressor may cancel that cancellation, and so on until the
player whose turn it is holds no Just Say No or declines to play one.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

from monodeal.deals import PendingAction, TargetRef


@dataclass(frozen=True)
class PaymentEffect:
    """Demand a payment once the war resolves in the aggressor's favour."""

    amount: int
    debtor_index: int
    creditor_index: int
    reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "payment",
            "amount": self.amount,
            "debtor_index": self.debtor_index,
            "creditor_index": self.creditor_index,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class TargetedEffect:
    """Run a steal or swap once the war resolves in the aggressor's favour."""

    action: PendingAction
    target: TargetRef

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "targeted",
            "action": self.action.to_dict(),
            "target": self.target.to_dict(),
        }


PendingEffect = Union[PaymentEffect, TargetedEffect]


@dataclass
class CounterWar:
    """
    State of one counter war.

    An even `no_count` means the effect currently stands and the target
    may answer; an odd one means it is cancelled and the aggressor may answer.
    """

    target_index: int
    effect: PendingEffect
    no_count: int = 0

    @property
    def aggressor_index(self) -> int:
        return (self.target_index + 1) % 2

    @property
    def active_index(self) -> int:
        return self.target_index if self.no_count % 2 == 0 else self.aggressor_index

    @property
    def proceeds(self) -> bool:
        return self.no_count % 2 == 0

    def escalate(self) -> None:
        self.no_count += 1

    @property
    def prompt(self) -> str:
        if self.no_count % 2 == 0:
            return "Cancel this action with Just Say No?"
        return "Cancel your opponent's Just Say No?"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target_index": self.target_index,
            "aggressor_index": self.aggressor_index,
            "active_index": self.active_index,
            "no_count": self.no_count,
            "prompt": self.prompt,
            "effect": self.effect.to_dict(),
        }
