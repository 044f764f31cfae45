import pytest

from mastermind_solver.combinatorics import build_universe
from mastermind_solver.feedback import (
    Feedback,
    all_exact,
    evaluate,
    format_label,
    is_discriminating,
)


@pytest.mark.parametrize("guess,target,expected", [
    ((1, 2, 3), (2, 7, 9), Feedback(0, 1)),
    ((2, 7, 9), (2, 7, 9), Feedback(3, 0)),
    ((2, 9, 7), (2, 7, 9), Feedback(1, 2)),
    ((4, 5, 6), (2, 7, 9), Feedback(0, 0)),
    ((9, 2, 7), (2, 7, 9), Feedback(0, 3)),
])
def test_evaluate_golden(guess, target, expected):
    assert evaluate(guess, target) == expected


def test_evaluate_with_duplicate_symbols():
    # Exact matches are consumed before partial matching
    assert evaluate((1, 1, 2), (1, 2, 2)) == Feedback(2, 0)
    assert evaluate((1, 1, 2, 2), (2, 2, 1, 1)) == Feedback(0, 4)
    assert evaluate((3, 3, 3), (3, 1, 1)) == Feedback(1, 0)


def test_evaluate_code_against_itself_is_all_exact():
    for code in build_universe([1, 2, 3, 4], 3, True):
        assert evaluate(code, code) == all_exact(3)


def test_exact_plus_partial_never_exceeds_length():
    universe = build_universe("abc", 3, True)
    for guess in universe:
        for target in universe:
            reply = evaluate(guess, target)
            assert reply.exact + reply.partial <= 3


def test_labels_and_ordering():
    reply = Feedback(1, 2)
    assert reply.label == format_label(reply) == "1:2"
    assert sorted([Feedback(1, 0), Feedback(0, 2), Feedback(0, 1)]) == [
        Feedback(0, 1), Feedback(0, 2), Feedback(1, 0)]


def test_is_discriminating():
    assert is_discriminating(['3:0', '1:2', '0:3', '0:2', '1:1', '1:0'])
    assert not is_discriminating(['2:0', '1:1', '0:2', '0:2', '1:2', '0:1'])
    assert is_discriminating([])
