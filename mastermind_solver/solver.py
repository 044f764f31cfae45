"""Mastermind solver: guess, read the reply, prune, repeat."""

import logging
from typing import Optional, Sequence

from .analysis import GameAnalysis, GameStats, RepeatedGuess, analyze_games
from .candidates import CandidateSet
from .combinatorics import build_universe
from .errors import GuessPoolExhausted
from .feedback import Feedback, all_exact
from .game import GameConfig, MastermindGame, as_code
from .selector import select_next_guess
from .tree import DecisionTree, build_tree

logger = logging.getLogger(__name__)

_FIRST_CODE = object()


class GameSolver:
    """Deduces the secret held by an oracle using exact/partial feedback."""

    def __init__(self, config: GameConfig, oracle: Optional[MastermindGame] = None):
        """
        Initialize a solver.

        Args:
            config: Game configuration shared with the oracle
            oracle: Code holder to play against; only needed by solve()
        """
        self.config = config
        self.oracle = oracle
        self.all_variations = build_universe(config.alphabet, config.code_length,
                                             config.allow_repetition)
        self._stats = GameStats()
        self._remaining = CandidateSet(self.all_variations)

    @property
    def remaining_variations(self) -> CandidateSet:
        return self._remaining

    @property
    def stats(self) -> GameStats:
        return self._stats

    def reset(self):
        """Forget all replies and start a new game."""
        self._stats = GameStats()
        self._remaining = CandidateSet(self.all_variations)

    def get_next_guess(self, offset: int = 0) -> tuple:
        """Next guess for the current candidates; `offset` skips options after a repeat."""
        return select_next_guess(self._remaining, self.all_variations,
                                 self.config.code_length, offset)

    def prune_remaining_variations(self, guess, feedback: Feedback):
        """Drop candidates inconsistent with `feedback` for `guess`."""
        self._remaining.prune(as_code(guess), feedback)

    def solve(self) -> GameStats:
        """
        Play against the oracle until solved or the oracle stops answering.

        Returns:
            GameStats with every accepted guess; solution is None when aborted

        Raises:
            NotImplementedError: repetition mode has no solving strategy
            GuessPoolExhausted: no unused guess could be produced
        """
        if self.config.allow_repetition:
            raise NotImplementedError("Solving with repeated symbols is not supported")
        if self.oracle is None:
            raise RuntimeError("solve() needs an oracle to play against")

        stats = self._stats
        solved = all_exact(self.config.code_length)
        reply = None

        while True:
            guess = self.get_next_guess()

            offset = 0
            while guess and guess in stats.attempted_guesses:
                offset += 1
                logger.info("Got repeated guess %s, using offset %d", guess, offset)
                stats.repeated_guesses.append(RepeatedGuess(guess, offset))
                guess = self.get_next_guess(offset)

            if not guess:
                raise GuessPoolExhausted("Pool of guesses drained by get_next_guess. Caught in a loop?")

            logger.debug("Turn %d guessing %s", len(stats.attempted_guesses) + 1, guess)
            reply = self.oracle.guess(guess)
            if reply is None:
                break

            stats.attempted_guesses.append(guess)
            self.prune_remaining_variations(guess, reply)

            if reply == solved:
                break

        turns = len(stats.attempted_guesses)
        if reply == solved:
            stats.solution = stats.attempted_guesses[-1]
            logger.info("Combination found in %d %s: %s",
                        turns, "guess" if turns == 1 else "guesses", stats.solution)
        else:
            logger.warning("Aborted unsolved game after %d %s",
                           turns, "guess" if turns == 1 else "guesses")

        return stats

    def build_tree(self, opening_guess=_FIRST_CODE) -> DecisionTree:
        """
        Precompute a decision tree over the whole universe.

        Args:
            opening_guess: Root guess; defaults to the first code of the
                universe, None applies the regular node rule to the root too
        """
        if opening_guess is _FIRST_CODE:
            opening_guess = self.all_variations[0] if self.all_variations else None
        elif opening_guess is not None:
            opening_guess = as_code(opening_guess)
        return build_tree(self.all_variations, self.config.code_length, opening_guess)

    def get_game_analysis(self, results: Sequence[GameStats]) -> GameAnalysis:
        """Aggregate statistics over finished games."""
        return analyze_games(results)
