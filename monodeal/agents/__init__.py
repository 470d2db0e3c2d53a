from monodeal.agents.base import Agent
from monodeal.agents.random import RandomAgent
from monodeal.agents.greedy import GreedyAgent

__all__ = [
    "Agent",
    "RandomAgent",
    "GreedyAgent",
]
