#!/usr/bin/env python3
"""
Minimal CLI for simulating MonoDeal games.

This script demonstrates the game engine by running simulated games between
two AI players that make greedy or random decisions.
"""

import argparse
import logging
from typing import Optional

from monodeal.agents import GreedyAgent, RandomAgent
from monodeal.config import PROPERTY_COLORS
from monodeal.game import GameState, create_game
from monodeal.player import Player
from monodeal.settings import get_game_settings


def print_game_state(game: GameState) -> None:
    """Print current game state."""
    print("\n" + "=" * 60)
    print(f"TURN {game.turn_number} ({game.phase.value})")
    print("=" * 60)

    for player_id, player in sorted(game.players.items()):
        sets = ", ".join(
            f"{PROPERTY_COLORS[color].name} {player.property_count(color)}/{PROPERTY_COLORS[color].required}"
            for color in player.field
        )
        print(
            f"Player {player_id} ({player.name}): bank {player.bank_total}M | "
            f"hand {len(player.hand)} | sets: {sets or '-'}"
        )


def print_game_summary(game: GameState) -> None:
    """Print final game summary."""
    print("\n" + "=" * 60)
    print("GAME OVER" if game.game_over else "GAME STOPPED")
    print("=" * 60)

    if game.winner is not None:
        winner = game.players[game.winner]
        print(f"\nWinner: {winner.name}")
        print(f"Complete sets: {len(winner.complete_sets())}")

    print("\nFinal Standings:")
    for player_id, player in sorted(game.players.items()):
        print(f"  {player.name}: {player.assets_value}M in assets, {len(player.complete_sets())} complete sets")

    print(f"\nTotal Turns: {game.turn_number}")


def simulate_game(
    agent_type: str = "greedy",
    seed: Optional[int] = None,
    verbose: bool = True,
    max_turns: Optional[int] = None,
    max_tasks: int = 20000,
) -> GameState:
    """
    Simulate a complete game of MonoDeal between two AI players.

    Args:
        agent_type: Type of AI ('random' or 'greedy')
        seed: Random seed for reproducibility
        verbose: Whether to print detailed output
        max_turns: Maximum number of turns (time limit variant)
        max_tasks: Safety limit on AI tasks run
    """
    names = ["Alice", "Bob"]
    players = [Player(i, names[i], is_ai=True) for i in range(2)]
    if agent_type == "random":
        agents = {i: RandomAgent(i, names[i], seed=seed) for i in range(2)}
    else:
        agents = {i: GreedyAgent(i, names[i]) for i in range(2)}

    config = get_game_settings().to_game_config(seed=seed, time_limit_turns=max_turns, ai_delay_ms=0)
    game = create_game(config, players, agents)

    if verbose:
        print(f"Starting game using {agent_type} agents")
        print(f"Seed: {seed}")

    last_turn_number = -1
    game.start()

    tasks_run = 0
    while not game.game_over and tasks_run < max_tasks:
        if not game.run_pending(max_tasks=1):
            # Nothing scheduled: both players are AIs, so this is a stuck game
            print(f"  WARNING: no AI task pending in phase {game.phase.value}")
            break
        tasks_run += 1

        if verbose and game.turn_number != last_turn_number and game.turn_number % 10 == 0:
            last_turn_number = game.turn_number
            print_game_state(game)

    if tasks_run >= max_tasks:
        print(f"\n!!! SAFETY LIMIT HIT ({max_tasks} AI tasks) !!!")
        print(f"Game state: turn={game.turn_number}, game_over={game.game_over}")

    if verbose:
        print_game_summary(game)

    return game


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(description="Simulate a MonoDeal game")
    parser.add_argument(
        "--agent",
        type=str,
        default="greedy",
        choices=["random", "greedy"],
        help="AI agent type",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--quiet", action="store_true", help="Reduce output verbosity")
    parser.add_argument(
        "--max-turns",
        type=int,
        default=None,
        help="Maximum number of turns (time limit variant)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Engine log level",
    )

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    simulate_game(
        agent_type=args.agent,
        seed=args.seed,
        verbose=not args.quiet,
        max_turns=args.max_turns,
    )


if __name__ == "__main__":
    main()
