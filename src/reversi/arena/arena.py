"""
Arena for playing CPU difficulty levels against each other with Elo ratings.
"""
import json
import logging
import random
import time
from datetime import datetime
from typing import Dict, List, Optional

from tqdm import tqdm

from ..cpu.policy import Policy, get_policy, to_difficulty
from ..game.board import Board, BLACK, WHITE
from ..game.moves import apply_move, legal_moves
from ..game.turn import GameResult, TurnController

logger = logging.getLogger(__name__)


class ELORatingSystem:
    """Elo rating system for tracking player strength."""

    def __init__(self, k: float = 32, initial_rating: float = 1500.0):
        """
        Initialize the Elo rating system.

        Args:
            k: K-factor, controls how much ratings change after each game
            initial_rating: Initial rating for new players
        """
        self.k = k
        self.initial_rating = initial_rating
        self.ratings: Dict[str, float] = {}
        self.games_played: Dict[str, int] = {}
        self.history: List[Dict] = []

    def add_player(self, player_id: str, rating: Optional[float] = None) -> bool:
        """Register a level under ``player_id``. Returns False if it is already rated."""
        if player_id in self.ratings:
            return False
        self.ratings[player_id] = self.initial_rating if rating is None else float(rating)
        self.games_played[player_id] = 0
        return True

    def get_rating(self, player_id: str) -> float:
        """Current rating; a level that has not played yet sits at the initial rating."""
        try:
            return self.ratings[player_id]
        except KeyError:
            return self.initial_rating

    @staticmethod
    def expected_score(rating_a: float, rating_b: float) -> float:
        """Expected score of A against B."""
        return 1.0 / (1.0 + 10.0 ** ((rating_b - rating_a) / 400.0))

    def update_ratings(self, player_a: str, player_b: str, score_a: float) -> Dict:
        """
        Update ratings after a game.

        Args:
            player_a: ID of player A
            player_b: ID of player B
            score_a: 1.0 if A won, 0.5 for a draw, 0.0 if B won

        Returns:
            Record of the rating change
        """
        self.add_player(player_a)
        self.add_player(player_b)

        rating_a = self.ratings[player_a]
        rating_b = self.ratings[player_b]
        expected_a = self.expected_score(rating_a, rating_b)

        delta = self.k * (score_a - expected_a)
        self.ratings[player_a] = rating_a + delta
        self.ratings[player_b] = rating_b - delta
        self.games_played[player_a] += 1
        self.games_played[player_b] += 1

        record = {
            'timestamp': time.time(),
            'player_a': player_a,
            'player_b': player_b,
            'score_a': score_a,
            'rating_a_before': rating_a,
            'rating_b_before': rating_b,
            'rating_a_after': self.ratings[player_a],
            'rating_b_after': self.ratings[player_b],
        }
        self.history.append(record)
        return record

    def get_leaderboard(self) -> List[Dict]:
        """Players sorted by rating, best first."""
        leaderboard = [
            {'player_id': pid, 'rating': rating, 'games_played': self.games_played[pid]}
            for pid, rating in self.ratings.items()
        ]
        leaderboard.sort(key=lambda x: x['rating'], reverse=True)
        return leaderboard

    def save_ratings(self, filepath: str):
        """
        Write the ratings table to ``filepath`` as JSON.

        Each player is stored as ``{"rating": ..., "games": ...}`` under
        ``players``; the per-game history follows.
        """
        players = {
            pid: {'rating': rating, 'games': self.games_played.get(pid, 0)}
            for pid, rating in self.ratings.items()
        }
        data = {
            'k': self.k,
            'initial_rating': self.initial_rating,
            'saved_at': datetime.now().isoformat(timespec='seconds'),
            'players': players,
            'history': self.history,
        }
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)

    @classmethod
    def load_ratings(cls, filepath: str) -> 'ELORatingSystem':
        """Rebuild a rating system from a file written by ``save_ratings``."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        elo = cls(k=data['k'], initial_rating=data['initial_rating'])
        for pid, entry in data['players'].items():
            elo.add_player(pid, entry['rating'])
            elo.games_played[pid] = int(entry['games'])
        elo.history = data.get('history', [])
        logger.info("Loaded %d rated players from %s", len(elo.ratings), filepath)
        return elo


class CPUPlayer:
    """A CPU difficulty level taking part in the arena."""

    def __init__(self, level, rng: Optional[random.Random] = None, player_id: Optional[str] = None):
        self.difficulty = to_difficulty(level)
        self.player_id = player_id or f"level{int(self.difficulty)}_{self.difficulty.name.lower()}"
        self.policy: Policy = get_policy(self.difficulty, rng)


class Arena:
    """Arena for running round-robin tournaments between CPU players."""

    def __init__(self, elo_system: Optional[ELORatingSystem] = None):
        self.elo = elo_system if elo_system is not None else ELORatingSystem()
        self.players: Dict[str, CPUPlayer] = {}

    def add_player(self, player: CPUPlayer):
        self.players[player.player_id] = player
        self.elo.add_player(player.player_id)

    def play_game(self, black_id: str, white_id: str) -> GameResult:
        """
        Play a single game; ``black_id`` moves first.

        Passes follow the same turn rules as an interactive session.
        """
        if black_id not in self.players or white_id not in self.players:
            raise ValueError(f"One or both players not found: {black_id}, {white_id}")
        sides = {BLACK: self.players[black_id], WHITE: self.players[white_id]}

        board = Board()
        turns = TurnController()
        while not turns.is_terminal:
            mover = turns.player_to_move
            moves = legal_moves(board, mover)
            move = sides[mover].policy.select_move(board, moves)
            apply_move(board, move)
            turns.advance(board, mover)

        result = GameResult.from_board(board)
        logger.debug("%s (Black) vs %s (White): %s", black_id, white_id, result)
        return result

    def run_tournament(self, rounds: int = 10) -> Dict:
        """
        Run a round-robin tournament between all players.

        Args:
            rounds: Number of rounds; each pair meets once per round and
                colours alternate between rounds

        Returns:
            Dictionary with matchup tallies and the final leaderboard
        """
        player_ids = list(self.players.keys())
        if len(player_ids) < 2:
            raise ValueError("Need at least 2 players for a tournament")

        pairs = [(player_ids[i], player_ids[j])
                 for i in range(len(player_ids))
                 for j in range(i + 1, len(player_ids))]
        results = {
            'games_played': 0,
            'matchups': {
                f"{a}_vs_{b}": {'player1': a, 'player2': b, 'wins1': 0, 'wins2': 0, 'draws': 0}
                for a, b in pairs
            },
            'start_time': time.time(),
        }

        progress = tqdm(total=rounds * len(pairs), desc="Arena games", unit="game")
        for round_num in range(rounds):
            for a, b in pairs:
                black, white = (a, b) if round_num % 2 == 0 else (b, a)
                game = self.play_game(black, white)

                if game.winner is None:
                    score_black = 0.5
                else:
                    score_black = 1.0 if game.winner == BLACK else 0.0
                self.elo.update_ratings(black, white, score_black)

                tally = results['matchups'][f"{a}_vs_{b}"]
                score_a = score_black if black == a else 1.0 - score_black
                if score_a == 1.0:
                    tally['wins1'] += 1
                elif score_a == 0.0:
                    tally['wins2'] += 1
                else:
                    tally['draws'] += 1
                results['games_played'] += 1
                progress.update(1)
        progress.close()

        results['end_time'] = time.time()
        results['duration'] = results['end_time'] - results['start_time']
        results['leaderboard'] = self.elo.get_leaderboard()
        logger.info("Tournament finished: %d games in %.2fs",
                    results['games_played'], results['duration'])
        return results

    def print_leaderboard(self):
        """Print the current leaderboard."""
        print("\nCurrent Leaderboard:")
        print("Rank  Player ID               Rating  Games Played")
        print("----  ---------------------  -------  ------------")
        for i, player in enumerate(self.elo.get_leaderboard(), 1):
            print(f"{i:4d}  {player['player_id']:22s}  {player['rating']:7.1f}  {player['games_played']:12d}")
