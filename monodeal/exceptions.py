"""
Custom exception hierarchy for the MonoDeal engine and server.

Engine commands report refusals through `GameState.last_rejection`;
these exceptions cover the service layer around the engine.
"""


class MonoDealError(Exception):
    """Base exception for all game-related errors."""


class GameNotFoundError(MonoDealError):
    """Game does not exist."""


class InvalidActionError(MonoDealError):
    """Action is not legal in the current state."""

    def __init__(self, reason: str, kind: str = "validation_failure"):
        super().__init__(reason)
        self.reason = reason
        self.kind = kind


class ValidationError(MonoDealError):
    """Input validation failed."""
