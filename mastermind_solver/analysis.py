"""Aggregate statistics over many solved games."""

from dataclasses import dataclass, field
from typing import Optional, Sequence

import pandas as pd

from .errors import InvalidArgument


@dataclass
class RepeatedGuess:
    """A guess the selector proposed again, and the offset used to move past it."""
    guess: tuple
    offset: int


@dataclass
class GameStats:
    """Record of one solver run."""
    attempted_guesses: list = field(default_factory=list)
    repeated_guesses: list = field(default_factory=list)
    solution: Optional[tuple] = None

    @property
    def solved(self) -> bool:
        return self.solution is not None

    @classmethod
    def from_dict(cls, data: dict) -> "GameStats":
        """Rebuild stats from their asdict()/JSON form."""
        solution = data.get("solution")
        return cls(
            attempted_guesses=[tuple(g) for g in data.get("attempted_guesses", [])],
            repeated_guesses=[RepeatedGuess(tuple(r["guess"]), r["offset"])
                              for r in data.get("repeated_guesses", [])],
            solution=tuple(solution) if solution is not None else None,
        )


@dataclass
class GameAnalysis:
    """Summary of a batch of games."""
    avg_guesses: float
    max_guesses: int
    median: float
    min_guesses: int
    repeat_guess_game_count: int
    repeat_guess_avg_attempts: float
    unresolved: int


def analyze_games(results: Sequence[GameStats]) -> GameAnalysis:
    """
    Summarize game lengths and retry behaviour.

    Args:
        results: Stats of finished games

    Returns:
        GameAnalysis over every game, solved or not
    """
    if not results:
        raise InvalidArgument("No game results to analyze")

    df = pd.DataFrame({
        'guesses': [len(r.attempted_guesses) for r in results],
        'repeats': [len(r.repeated_guesses) for r in results],
        'solved': [r.solved for r in results],
    })

    repeat_df = df[df['repeats'] > 0]
    repeat_games = len(repeat_df)

    return GameAnalysis(
        avg_guesses=float(df['guesses'].mean()),
        max_guesses=int(df['guesses'].max()),
        median=float(df['guesses'].median()),
        min_guesses=int(df['guesses'].min()),
        repeat_guess_game_count=repeat_games,
        repeat_guess_avg_attempts=float(repeat_df['repeats'].mean()) if repeat_games > 0 else 0.0,
        unresolved=int((~df['solved']).sum()),
    )
