"""The shrinking set of codes still consistent with every reply received."""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Hashable, Iterator, Optional, Sequence

from .feedback import Feedback, evaluate

logger = logging.getLogger(__name__)

Code = tuple

# Comparator priorities per sort key
SORT_KEYS = {
    'count': ('count', 'position', 'symbol'),
    'position': ('position', 'symbol', 'count'),
    'symbol': ('symbol', 'position', 'count'),
}


@dataclass(frozen=True)
class PositionSymbolStat:
    """How many candidates hold `symbol` at `position`."""
    position: int
    symbol: Hashable
    count: int


def position_symbol_stats(codes: Sequence[Code]) -> list[PositionSymbolStat]:
    """Count symbol occurrences per position, in first-seen order."""
    counts = Counter()
    for code in codes:
        for position, symbol in enumerate(code):
            counts[(position, symbol)] += 1
    return [PositionSymbolStat(position, symbol, count)
            for (position, symbol), count in counts.items()]


def sort_stats(stats: Sequence[PositionSymbolStat], sort_by: str = 'count',
               group_by: Optional[str] = None):
    """
    Sort statistics with a three-level comparator.

    Args:
        stats: Statistics to sort (left untouched)
        sort_by: 'count', 'position' or 'symbol'; unknown keys sort by count
        group_by: Optional field to bucket the sorted entries by

    Returns:
        Sorted list, or a dict of field value -> sorted entries when grouping
    """
    fields = SORT_KEYS.get(sort_by, SORT_KEYS['count'])
    ordered = sorted(stats, key=lambda stat: tuple(getattr(stat, f) for f in fields))

    if not group_by:
        return ordered

    group_field = group_by if group_by in SORT_KEYS else 'count'
    groups = {}
    for stat in ordered:
        groups.setdefault(getattr(stat, group_field), []).append(stat)
    return groups


class CandidateSet:
    """Ordered subset of the universe, pruned after every reply."""

    def __init__(self, universe: Sequence[Code]):
        self._codes = list(universe)
        self._stats = position_symbol_stats(self._codes)

    def __len__(self) -> int:
        return len(self._codes)

    def __iter__(self) -> Iterator[Code]:
        return iter(self._codes)

    def __getitem__(self, index: int) -> Code:
        return self._codes[index]

    def __contains__(self, code) -> bool:
        return tuple(code) in self._codes

    @property
    def codes(self) -> tuple[Code, ...]:
        return tuple(self._codes)

    def prune(self, guess: Code, feedback: Feedback):
        """Drop every candidate that would not have produced `feedback` for `guess`."""
        kept = []
        pruned = []
        for code in self._codes:
            if evaluate(guess, code) == feedback:
                kept.append(code)
            else:
                pruned.append(code)

        self._codes = kept
        self._stats = position_symbol_stats(self._codes)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Pruned %d variation(s) after %s (%s): %s",
                         len(pruned), guess, feedback.label, pruned)
            logger.debug("Remaining variations (%d): %s", len(kept), kept)
            logger.debug("Remaining symbol occurrences: %s", self.symbol_counts())

    def stats(self, sort_by: str = 'count', group_by: Optional[str] = None):
        """Position/symbol statistics of the current candidates, sorted."""
        return sort_stats(self._stats, sort_by, group_by)

    def symbol_counts(self) -> dict:
        """Total occurrences of each symbol across all positions."""
        totals = {}
        for stat in self._stats:
            totals[stat.symbol] = totals.get(stat.symbol, 0) + stat.count
        return totals
