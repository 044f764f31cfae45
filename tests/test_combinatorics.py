import math

import pytest

from mastermind_solver.combinatorics import (
    BaseN,
    Permutation,
    build_universe,
    factoradic,
    factorial,
    permutation_count,
    power_count,
    universe_size,
)
from mastermind_solver.errors import InvalidArgument


@pytest.mark.parametrize("n,k", [(0, 0), (1, 1), (3, 0), (4, 2), (5, 5), (6, 3), (9, 3), (3, 5)])
def test_universe_size_without_repetition(n, k):
    expected = math.factorial(n) // math.factorial(n - k) if n >= k else 0
    universe = build_universe(range(1, n + 1), k, False)
    assert len(universe) == expected == permutation_count(n, k)


@pytest.mark.parametrize("n,k", [(0, 0), (0, 2), (1, 3), (3, 0), (4, 2), (3, 3), (10, 2)])
def test_universe_size_with_repetition(n, k):
    universe = build_universe(range(n), k, True)
    assert len(universe) == n ** k == power_count(n, k)


def test_no_repetition_codes_are_distinct_and_lexicographic():
    universe = build_universe("123456789", 3, False)
    assert universe[0] == ("1", "2", "3")
    assert universe[1] == ("1", "2", "4")
    assert universe[-1] == ("9", "8", "7")
    assert list(universe) == sorted(universe)
    assert len(set(universe)) == len(universe)
    assert all(len(set(code)) == 3 for code in universe)


def test_repetition_order_varies_first_position_fastest():
    universe = build_universe("ab", 2, True)
    assert universe == (("a", "a"), ("b", "a"), ("a", "b"), ("b", "b"))


def test_k_larger_than_alphabet_is_empty_not_an_error():
    assert build_universe([1, 2], 3, False) == ()
    assert build_universe([], 2, False) == ()


@pytest.mark.parametrize("func,args", [
    (permutation_count, (-1, 2)),
    (permutation_count, (3, -1)),
    (power_count, (-2, 2)),
    (factorial, (-1,)),
    (build_universe, ([1, 2, 3], -1, False)),
    (build_universe, ([1, 2, 3], -1, True)),
])
def test_negative_arguments_raise(func, args):
    with pytest.raises(InvalidArgument):
        func(*args)


def test_factoradic_digits():
    # 463 = 3*5! + 4*4! + 1*3! + 0*2! + 1*1!
    assert factoradic(463, 5) == [0, 1, 0, 1, 4, 3]
    assert factoradic(0, 3) == [0, 0, 0, 0]


def test_nth_matches_iteration_and_supports_negative_indices():
    seq = Permutation("abcde", 3)
    codes = list(seq)
    assert len(codes) == len(seq) == 60
    assert seq.nth(17) == codes[17]
    assert seq[-1] == codes[-1]
    with pytest.raises(IndexError):
        seq.nth(60)

    base = BaseN("xyz", 2)
    assert base[-1] == ("z", "z")
    with pytest.raises(IndexError):
        base.nth(-10)


def test_exact_arithmetic_beyond_native_range():
    alphabet = list(range(40))
    seq = Permutation(alphabet, 30)
    assert seq.length == math.perm(40, 30)
    assert seq.length > 2 ** 64
    assert seq.nth(seq.length - 1) == tuple(range(39, 9, -1))
    assert seq.nth(0) == tuple(range(30))

    big = BaseN(alphabet, 20)
    assert big.length == 40 ** 20
    assert big.nth(big.length - 1) == (39,) * 20
    assert universe_size(40, 20, True) == big.length
