"""Exact/partial match feedback between two codes."""

from dataclasses import dataclass
from typing import Hashable, Iterable, Sequence


@dataclass(frozen=True, order=True)
class Feedback:
    """Reply to a guess: symbols in the right place, and right symbols in the wrong place."""
    exact: int
    partial: int

    @property
    def label(self) -> str:
        return format_label(self)

    def __str__(self) -> str:
        return f"{self.exact} exact, {self.partial} partial"


def format_label(feedback: Feedback) -> str:
    """Format feedback as the "exact:partial" response-class label."""
    return f"{feedback.exact}:{feedback.partial}"


def all_exact(code_length: int) -> Feedback:
    """The feedback that ends a game."""
    return Feedback(code_length, 0)


def evaluate(guess: Sequence, target: Sequence) -> Feedback:
    """
    Score guess against target.

    Algorithm:
    1. Count positions holding the same symbol in both (exact) and consume them
    2. For each remaining guess position, in order, consume the first remaining
       target position holding the same symbol (partial)

    Returns:
        Feedback(exact, partial)
    """
    guess_open = []
    target_open = []
    exact = 0

    for i in range(len(guess)):
        if i < len(target) and guess[i] == target[i]:
            exact += 1
        else:
            guess_open.append(guess[i])
    for i in range(len(target)):
        if i >= len(guess) or guess[i] != target[i]:
            target_open.append(target[i])

    partial = 0
    for symbol in guess_open:
        if symbol in target_open:
            target_open.remove(symbol)
            partial += 1

    return Feedback(exact, partial)


def is_discriminating(labels: Iterable[Hashable]) -> bool:
    """True when no label occurs more than once."""
    seen = set()
    for label in labels:
        if label in seen:
            return False
        seen.add(label)
    return True
