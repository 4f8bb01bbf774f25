"""
Configuration parameters for Reversi vs CPU.
"""
import os
from dataclasses import dataclass, asdict, field
from typing import Dict, Any, List
import json

CPU_PLAYERS = ('white', 'black')


@dataclass
class GameConfig:
    """Configuration for an interactive game session."""
    cpu_level: int = 2
    cpu_delay: float = 0.5  # Seconds before the CPU plays, for pacing only
    cpu_player: str = 'white'
    highlight_moves: bool = False

    def validate(self) -> None:
        if self.cpu_level not in (1, 2, 3):
            raise ValueError(f"cpu_level must be 1, 2 or 3, got {self.cpu_level!r}")
        if self.cpu_player not in CPU_PLAYERS:
            raise ValueError(f"cpu_player must be one of {CPU_PLAYERS}, got {self.cpu_player!r}")
        if self.cpu_delay < 0:
            raise ValueError("cpu_delay must be non-negative")


@dataclass
class ArenaConfig:
    """Configuration for CPU-vs-CPU tournaments."""
    rounds: int = 10
    levels: List[int] = field(default_factory=lambda: [1, 2, 3])
    elo_k: float = 32.0
    initial_rating: float = 1500.0
    output_dir: str = "tournament_results"
    elo_file: str = "elo_ratings.json"


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    log_dir: str = "logs"
    log_level: str = "INFO"
    log_to_file: bool = False
    verbose: bool = False


@dataclass
class Config:
    """Main configuration class."""
    project_name: str = "Reversi-CPU"
    seed: int = 42
    game: GameConfig = field(default_factory=GameConfig)
    arena: ArenaConfig = field(default_factory=ArenaConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def save(self, filepath: str):
        """Save config to JSON file."""
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        config = cls(
            project_name=config_dict.get('project_name', 'Reversi-CPU'),
            seed=config_dict.get('seed', 42),
            game=GameConfig(**config_dict.get('game', {})),
            arena=ArenaConfig(**config_dict.get('arena', {})),
            logging=LoggingConfig(**config_dict.get('logging', {}))
        )
        config.game.validate()
        return config

    @classmethod
    def load(cls, filepath: str) -> 'Config':
        """Load config from JSON file."""
        with open(filepath, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)


def get_default_config() -> Config:
    """Get default configuration."""
    return Config()
