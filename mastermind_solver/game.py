"""Code-holding oracle for Mastermind games."""

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from .errors import InvalidArgument, TypeMismatch
from .feedback import Feedback, all_exact, evaluate

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    """Configuration for a Mastermind game."""
    alphabet: tuple = field(default_factory=lambda: tuple("123456789"))
    code_length: int = 3
    allow_repetition: bool = False
    max_turns: Optional[int] = 12  # None = unlimited

    def __post_init__(self):
        self.alphabet = tuple(self.alphabet)
        if self.code_length < 0:
            raise InvalidArgument("negative code length is not acceptable")

    @property
    def label(self) -> str:
        """Short identifier used to group results, e.g. "9x3-norep"."""
        mode = "rep" if self.allow_repetition else "norep"
        return f"{len(self.alphabet)}x{self.code_length}-{mode}"


def as_code(value) -> tuple:
    """Normalize a list/tuple to a code tuple; anything else is a type mismatch."""
    if not isinstance(value, (list, tuple)):
        raise TypeMismatch(f"code must be a list or tuple, got {type(value).__name__}")
    return tuple(value)


class MastermindGame:
    """Holds the secret code and answers guesses within a turn budget."""

    def __init__(self, config: GameConfig, secret: Optional[list] = None,
                 seed: Optional[int] = None):
        """
        Initialize a new Mastermind game.

        Args:
            config: Game configuration
            secret: Optional predefined secret. If None, generates random secret.
            seed: Optional seed for secret generation
        """
        self.config = config
        self._rng = random.Random(seed)
        self.turns = 0
        self.won = False
        if secret is None:
            self.secret = self._generate_secret()
        else:
            self.set_code(secret)

    def _generate_secret(self) -> tuple:
        """Generate random secret code according to config rules."""
        symbols = list(self.config.alphabet)
        if self.config.allow_repetition:
            secret = tuple(self._rng.choice(symbols) for _ in range(self.config.code_length))
        else:
            if self.config.code_length > len(symbols):
                raise InvalidArgument(
                    f"Need at least {self.config.code_length} symbols when repetition is not allowed")
            secret = tuple(self._rng.sample(symbols, self.config.code_length))
        logger.debug("Secret code generated: %s", secret)
        return secret

    def _canonical(self, value):
        """Map numeric entries onto the alphabet's symbol form (e.g. 7 -> "7")."""
        if value in self.config.alphabet:
            return value
        if isinstance(value, (int, float)) and str(value) in self.config.alphabet:
            return str(value)
        return value

    def set_code(self, code):
        """Replace the secret with a caller-chosen code."""
        code = as_code(code)
        if len(code) != self.config.code_length:
            raise InvalidArgument(f"Secret must have exactly {self.config.code_length} positions")
        self.secret = tuple(self._canonical(value) for value in code)
        logger.debug("Secret code manually set to: %s", self.secret)

    def reset(self):
        """Start over with a fresh random secret and turn counter."""
        self.secret = self._generate_secret()
        self.turns = 0
        self.won = False

    def guess(self, code) -> Optional[Feedback]:
        """
        Process a guess and return feedback.

        Returns:
            Feedback, or None when the guess is malformed or the turn budget is spent
        """
        code = as_code(code)

        error = self._validate_guess(code)
        if error:
            logger.warning("Guess rejected: %s", error)
            return None

        self.turns += 1
        if self.config.max_turns is not None and self.turns > self.config.max_turns:
            logger.warning("Passed maximum amount of turns (%d), no more guesses allowed",
                           self.config.max_turns)
            return None

        feedback = evaluate(code, self.secret)
        if feedback == all_exact(self.config.code_length):
            self.won = True

        logger.debug("Answering %s for guess %s", feedback, code)
        return feedback

    def _validate_guess(self, code: tuple) -> Optional[str]:
        """Validate guess shape and values. Returns error message or None."""
        if not code:
            return "Guess is empty"

        # Shorter guesses are scored against the leading positions
        if len(code) > self.config.code_length:
            return f"Guess must have at most {self.config.code_length} positions"

        if any(value is None for value in code):
            return "Guess has missing positions"

        if any(isinstance(value, int) and not isinstance(value, bool) and value < 0
               for value in code):
            return "Guess has negative values"

        return None

