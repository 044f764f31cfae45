"""Game session management and result tracking."""

import logging
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Callable, Iterator, Optional

from .analysis import GameStats
from .combinatorics import universe_size
from .game import GameConfig, MastermindGame
from .solver import GameSolver

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Complete result of a game session."""
    config: dict  # GameConfig as dict
    secret: list
    stats: dict  # GameStats as dict
    outcome: str  # "win" | "loss"
    total_turns: int
    timestamp: str
    duration_seconds: float


class GameSession:
    """Plays one game between a fresh oracle and a fresh solver."""

    def __init__(self, game_config: GameConfig, secret: Optional[list] = None,
                 seed: Optional[int] = None):
        """
        Initialize game session.

        Args:
            game_config: Game configuration
            secret: Optional predefined secret code
            seed: Optional seed for the oracle's secret generation
        """
        self.game_config = game_config
        self.predefined_secret = secret
        self.seed = seed

    def run(self) -> GameResult:
        """Run a complete game and return results."""
        start_time = time.time()
        game = MastermindGame(self.game_config, secret=self.predefined_secret, seed=self.seed)
        solver = GameSolver(self.game_config, game)

        stats = solver.solve()

        duration = time.time() - start_time

        return result_from_stats(self.game_config, game.secret, stats, duration)


def result_from_stats(game_config: GameConfig, secret, stats: GameStats,
                      duration: float = 0.0) -> GameResult:
    """Wrap a finished game's stats into a serializable result."""
    return GameResult(
        config=asdict(game_config),
        secret=list(secret),
        stats=asdict(stats),
        outcome="win" if stats.solved else "loss",
        total_turns=len(stats.attempted_guesses),
        timestamp=datetime.now(timezone.utc).isoformat(),
        duration_seconds=round(duration, 4),
    )


def iter_all_codes(game_config: GameConfig) -> Iterator[tuple[tuple, GameStats, float]]:
    """
    Play every code of the universe as the secret.

    One oracle and one solver are reused, reset between games. Only the
    solve itself is timed.

    Yields:
        (secret, stats, duration_seconds) per secret, in universe order
    """
    game = MastermindGame(game_config)
    solver = GameSolver(game_config, game)

    for code in solver.all_variations:
        game.reset()
        solver.reset()
        game.set_code(code)
        start_time = time.time()
        stats = solver.solve()
        yield code, stats, time.time() - start_time


def simulate_all_codes(game_config: GameConfig,
                       progress: Optional[Callable[[int, int, GameStats], None]] = None) -> list[GameStats]:
    """
    Solve every secret and collect the stats.

    Args:
        game_config: Game configuration
        progress: Optional callback(index, total, stats) after each game

    Returns:
        GameStats per secret, in universe order
    """
    total = universe_size(len(game_config.alphabet), game_config.code_length,
                          game_config.allow_repetition)
    results = []

    for index, (_, stats, _) in enumerate(iter_all_codes(game_config)):
        results.append(stats)
        if progress is not None:
            progress(index, total, stats)

    logger.info("Simulated %d game(s) for %s", len(results), game_config.label)
    return results
