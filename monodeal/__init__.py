"""
MonoDeal Rules Engine

A two-player (human vs AI) implementation of the Monopoly Deal card game.
"""

from .game import GameState, Phase, Rejection, RejectionKind, create_game
from .player import Player, PlayerState
from .config import GameConfig

__all__ = [
    "GameState",
    "Phase",
    "Rejection",
    "RejectionKind",
    "create_game",
    "Player",
    "PlayerState",
    "GameConfig",
]
