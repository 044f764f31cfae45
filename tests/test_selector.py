import pytest

from mastermind_solver.candidates import CandidateSet
from mastermind_solver.combinatorics import build_universe
from mastermind_solver.feedback import evaluate, is_discriminating
from mastermind_solver.selector import (
    discriminates,
    find_discriminating_guesses,
    frequency_guess,
    select_next_guess,
)

SIX_CANDIDATES = [(2, 4, 3), (3, 4, 2), (4, 3, 2), (4, 2, 5), (1, 4, 2), (1, 5, 3)]


@pytest.fixture
def universe():
    return build_universe(range(1, 10), 3, False)


def test_direct_guess_with_two_or_fewer_candidates(universe):
    candidates = CandidateSet([(1, 2, 3), (4, 5, 6)])
    assert select_next_guess(candidates, universe, 3) == (1, 2, 3)
    assert select_next_guess(candidates, universe, 3, offset=1) == (4, 5, 6)
    assert select_next_guess(candidates, universe, 3, offset=2) == ()
    assert select_next_guess(CandidateSet([]), universe, 3) == ()


def test_discriminator_search_example(universe):
    found = find_discriminating_guesses(SIX_CANDIDATES, universe)

    assert found
    for guess in found:
        labels = [evaluate(c, guess).label for c in SIX_CANDIDATES]
        assert len(labels) == 6
        assert is_discriminating(labels)


def test_discriminator_prefers_candidate_members(universe):
    candidates = CandidateSet(SIX_CANDIDATES)
    found = find_discriminating_guesses(SIX_CANDIDATES, universe)
    members = [g for g in found if g in candidates]

    guess = select_next_guess(candidates, universe, 3)

    assert guess in found
    assert discriminates(guess, SIX_CANDIDATES)
    if members:
        assert guess == members[0]


def test_offset_skips_discriminating_guesses():
    universe = build_universe((1, 2, 3, 4), 2, False)
    candidates = CandidateSet([(2, 3), (2, 4), (3, 1), (4, 1)])

    assert find_discriminating_guesses(candidates, universe) == [
        (1, 3), (1, 4), (2, 3), (2, 4), (3, 1), (3, 2), (4, 1)]

    # Members come first, then the other discriminators in universe order
    assert select_next_guess(candidates, universe, 2) == (2, 3)
    assert select_next_guess(candidates, universe, 2, offset=1) == (2, 4)
    assert select_next_guess(candidates, universe, 2, offset=3) == (4, 1)
    assert select_next_guess(candidates, universe, 2, offset=4) == (1, 3)
    assert select_next_guess(candidates, universe, 2, offset=6) == (3, 2)


def test_offset_past_discriminators_falls_back_to_frequency():
    universe = build_universe((1, 2, 3, 4), 2, False)
    candidates = CandidateSet([(2, 3), (2, 4), (3, 1), (4, 1)])

    # Least common first: (0, 3), (0, 4), (1, 3), (1, 4), then (0, 2), (1, 1)
    assert frequency_guess(candidates, 2, 2) == (3, 4)
    assert select_next_guess(candidates, universe, 2, offset=7) == frequency_guess(candidates, 2, 7)
    assert select_next_guess(candidates, universe, 2, offset=7) == ()


def test_frequency_guess_on_full_universe(universe):
    candidates = CandidateSet(universe)
    # Every position/symbol pair is equally common, so ties break on position then symbol
    assert select_next_guess(candidates, universe, 3) == (1, 2, 3)
    assert select_next_guess(candidates, universe, 3, offset=1) == (2, 3, 4)


def test_frequency_guess_skips_symbols_already_used():
    candidates = CandidateSet([(1, 2, 3), (1, 3, 2), (2, 1, 3)])
    # Rarest first: (pos0, 2), (pos1, 1), (pos1, 2), (pos1, 3) ... -> 2, 1, then 3
    assert frequency_guess(candidates, 3) == (2, 1, 3)


def test_frequency_guess_can_come_up_short():
    candidates = CandidateSet([(1, 2)])
    assert frequency_guess(candidates, 3) == (1, 2)
    assert frequency_guess(candidates, 3, offset=2) == ()
