"""Choosing the next guess from the remaining candidates."""

import logging
from typing import Sequence

from .candidates import CandidateSet
from .feedback import evaluate, is_discriminating

logger = logging.getLogger(__name__)

Code = tuple

# With this many candidates or fewer, guessing one directly beats spending a
# turn on a discriminating guess.
DIRECT_GUESS_LIMIT = 2

# Discriminator search costs O(|universe| * |candidates|); only run it below this size.
DISCRIMINATOR_SEARCH_LIMIT = 100


def discriminates(guess: Code, candidates: Sequence[Code]) -> bool:
    """True when every candidate answers `guess` with a different reply."""
    return is_discriminating(evaluate(candidate, guess).label for candidate in candidates)


def find_discriminating_guesses(candidates: Sequence[Code], universe: Sequence[Code]) -> list[Code]:
    """
    Return every universe code that splits the candidates into singletons.

    Args:
        candidates: Codes still consistent with the replies so far
        universe: Codes allowed as guesses

    Returns:
        Qualifying guesses in universe order
    """
    found = [guess for guess in universe if discriminates(guess, candidates)]
    logger.debug("Found %d discriminating guess(es) for %d candidate(s)",
                 len(found), len(candidates))
    return found


def frequency_guess(candidates: CandidateSet, code_length: int, offset: int = 0) -> Code:
    """
    Build a guess from the rarest position/symbol pairs.

    Walks the statistics sorted by (count, position, symbol) from `offset`,
    collecting distinct symbols until `code_length` are found. The result can
    be shorter when the statistics run out.
    """
    guess = []
    for stat in candidates.stats('count')[offset:]:
        if len(guess) == code_length:
            break
        if stat.symbol not in guess:
            guess.append(stat.symbol)
    return tuple(guess)


def select_next_guess(candidates: CandidateSet, universe: Sequence[Code],
                      code_length: int, offset: int = 0) -> Code:
    """
    Pick the next guess.

    Args:
        candidates: Remaining candidate set
        universe: All valid codes
        code_length: Number of symbols per code
        offset: Number of options to skip, used to escape repeated guesses

    Returns:
        The guess; an empty tuple once every option has been skipped
    """
    if len(candidates) <= DIRECT_GUESS_LIMIT:
        return candidates[offset] if offset < len(candidates) else ()

    if len(candidates) < DISCRIMINATOR_SEARCH_LIMIT:
        found = find_discriminating_guesses(candidates, universe)
        if found:
            # Candidates first: they also carry a chance of winning outright
            members = [guess for guess in found if guess in candidates]
            others = [guess for guess in found if guess not in candidates]
            ordered = members + others
            if offset < len(ordered):
                return ordered[offset]

    return frequency_guess(candidates, code_length, offset)
