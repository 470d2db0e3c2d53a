"""
FastAPI adapter: the app plus the in-memory registry of running games.
"""

from .app import app  # noqa: F401
from .registry import GameRegistry  # noqa: F401
