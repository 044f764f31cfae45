"""Enumeration and indexing of Mastermind code universes.

Both enumeration variants decode an index straight into a code, so any
position of the universe can be reached without materializing the codes
before it. Python integers are arbitrary precision, which keeps sizes and
decoding exact however large N**K or N!/(N-K)! grows.
"""

from typing import Iterator, Protocol, Sequence

from .errors import InvalidArgument

Code = tuple


def _check_non_negative(n: int, k: int):
    if n < 0:
        raise InvalidArgument("negative n is not acceptable")
    if k < 0:
        raise InvalidArgument("negative k is not acceptable")


def permutation_count(n: int, k: int) -> int:
    """Return P(n, k), the falling factorial n * (n-1) * ... * (n-k+1)."""
    _check_non_negative(n, k)
    if k == 0:
        return 1
    if n < k:
        return 0
    count = 1
    for factor in range(n - k + 1, n + 1):
        count *= factor
    return count


def factorial(n: int) -> int:
    """Return n! as P(n, n)."""
    return permutation_count(n, n)


def power_count(n: int, k: int) -> int:
    """Return n**k, the number of length-k tuples over n symbols."""
    _check_non_negative(n, k)
    return n ** k


def factoradic(n: int, length: int) -> list[int]:
    """
    Return the factorial number system digits of n, least significant first.

    digits[i] carries weight i!, so digits[0] is always 0 and the list has
    length + 1 entries.
    """
    if n < 0:
        raise InvalidArgument("negative n is not acceptable")
    digits = [0] * (length + 1)
    weight = factorial(length)
    for place in range(length, 0, -1):
        digits[place], n = divmod(n, weight)
        weight //= place
    return digits


def _normalize_index(index: int, length: int) -> int:
    """Resolve negative indices and bounds-check against length."""
    if index < 0:
        index += length
    if not 0 <= index < length:
        raise IndexError(f"index out of range for sequence of length {length}")
    return index


class IndexableSequence(Protocol):
    """A lazily decoded, ordered sequence of codes."""

    length: int

    def nth(self, index: int) -> Code:
        ...

    def __len__(self) -> int:
        ...

    def __getitem__(self, index: int) -> Code:
        ...

    def __iter__(self) -> Iterator[Code]:
        ...


class BaseN:
    """All length-`size` tuples over `alphabet` (repetition allowed), in mixed-radix order."""

    def __init__(self, alphabet: Sequence, size: int):
        self.alphabet = tuple(alphabet)
        self.size = size
        self.base = len(self.alphabet)
        self.length = power_count(self.base, size)

    def nth(self, index: int) -> Code:
        """Decode index with digit i = (index // base**i) % base; position 0 varies fastest."""
        index = _normalize_index(index, self.length)
        code = []
        for _ in range(self.size):
            index, digit = divmod(index, self.base)
            code.append(self.alphabet[digit])
        return tuple(code)

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, index: int) -> Code:
        return self.nth(index)

    def __iter__(self) -> Iterator[Code]:
        for index in range(self.length):
            yield self.nth(index)


class Permutation:
    """All length-`size` arrangements of distinct `alphabet` entries, in lexicographic order."""

    def __init__(self, alphabet: Sequence, size: int):
        self.alphabet = tuple(alphabet)
        self.size = size
        self.length = permutation_count(len(self.alphabet), size)

    def nth(self, index: int) -> Code:
        """
        Decode index through the factorial number system.

        Scaling index by (N-K)! zeroes the low N-K factoradic digits; the
        remaining K digits, read from most significant down, select entries
        from the shrinking pool of unused alphabet symbols.
        """
        index = _normalize_index(index, self.length)
        n = len(self.alphabet)
        offset = n - self.size
        digits = factoradic(index * factorial(offset), n)
        pool = list(self.alphabet)
        return tuple(pool.pop(digits[place]) for place in range(n - 1, offset - 1, -1))

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, index: int) -> Code:
        return self.nth(index)

    def __iter__(self) -> Iterator[Code]:
        for index in range(self.length):
            yield self.nth(index)


def code_sequence(alphabet: Sequence, k: int, allow_repetition: bool) -> IndexableSequence:
    """Return the lazy universe for the given alphabet, length and repetition mode."""
    if k < 0:
        raise InvalidArgument("negative k is not acceptable")
    if allow_repetition:
        return BaseN(alphabet, k)
    return Permutation(alphabet, k)


def universe_size(n: int, k: int, allow_repetition: bool) -> int:
    """Number of valid codes for an alphabet of n symbols and length k."""
    if allow_repetition:
        return power_count(n, k)
    return permutation_count(n, k)


def build_universe(alphabet: Sequence, k: int, allow_repetition: bool) -> tuple[Code, ...]:
    """
    Materialize every valid code in enumeration order.

    Args:
        alphabet: Ordered symbols codes are drawn from
        k: Code length
        allow_repetition: Whether a code may repeat a symbol

    Returns:
        Tuple of codes; empty when k exceeds the alphabet size without repetition.
    """
    return tuple(code_sequence(alphabet, k, allow_repetition))
