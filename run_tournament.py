"""
Script for running tournaments between the CPU difficulty levels.
"""
import os
import argparse
import json
import random
from datetime import datetime

from reversi.arena import Arena, CPUPlayer, ELORatingSystem
from reversi.config import Config, get_default_config
from reversi.logger import setup_logging


def main():
    parser = argparse.ArgumentParser(description='Run a tournament between Reversi CPU levels')
    parser.add_argument('--config', type=str, default='config.json',
                        help='Path to config file')
    parser.add_argument('--rounds', type=int, default=None,
                        help='Number of rounds to play')
    parser.add_argument('--levels', type=int, nargs='+', choices=[1, 2, 3], default=None,
                        help='CPU levels taking part')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for the random CPU level')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory to save tournament results')
    args = parser.parse_args()

    if os.path.exists(args.config):
        print(f"Loading configuration from {args.config}")
        config = Config.load(args.config)
    else:
        config = get_default_config()
    rounds = args.rounds if args.rounds is not None else config.arena.rounds
    levels = args.levels or config.arena.levels
    seed = args.seed if args.seed is not None else config.seed
    output_dir = args.output_dir or config.arena.output_dir

    setup_logging(config)
    os.makedirs(output_dir, exist_ok=True)

    elo_file = os.path.join(output_dir, config.arena.elo_file)
    if os.path.exists(elo_file):
        print(f"Loading ELO ratings from {elo_file}")
        elo = ELORatingSystem.load_ratings(elo_file)
    else:
        print("Starting new ELO rating system")
        elo = ELORatingSystem(k=config.arena.elo_k, initial_rating=config.arena.initial_rating)

    arena = Arena(elo_system=elo)
    rng = random.Random(seed)
    for level in sorted(set(levels)):
        arena.add_player(CPUPlayer(level, rng=rng))

    if len(arena.players) < 2:
        print("Need at least 2 levels to start a tournament")
        return

    print(f"\nStarting tournament with {rounds} rounds...")
    results = arena.run_tournament(rounds=rounds)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    results_file = os.path.join(output_dir, f'tournament_{timestamp}.json')
    with open(results_file, 'w') as f:
        json.dump({
            'timestamp': timestamp,
            'rounds': rounds,
            'participants': list(arena.players.keys()),
            'matchups': results['matchups'],
            'leaderboard': results['leaderboard'],
        }, f, indent=2)
    arena.elo.save_ratings(elo_file)

    print(f"\nTournament completed! Results saved to {results_file}")
    arena.print_leaderboard()


if __name__ == '__main__':
    main()
