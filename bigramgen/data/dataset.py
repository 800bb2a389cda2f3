"""Bigram frequency counting over a token sequence."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Tuple


BiGram = Tuple[str, str]


@dataclass
class BigramCounts:
    """Raw counts gathered from a corpus.

    Attributes:
        bigram_counts: Occurrences of each ordered pair of adjacent tokens
        occurrence_counts: How often each token was followed by another token
    """
    bigram_counts: Counter = field(default_factory=Counter)
    occurrence_counts: Counter = field(default_factory=Counter)

    @property
    def num_bigrams(self) -> int:
        return sum(self.bigram_counts.values())

    def __len__(self) -> int:
        return len(self.bigram_counts)

    def add(self, prev: str, curr: str) -> None:
        """Record one transition from prev to curr."""
        self.bigram_counts[(prev, curr)] += 1
        self.occurrence_counts[prev] += 1


def count_bigrams(tokens: Iterable[str]) -> BigramCounts:
    """Count adjacent token pairs with a sliding window of two.

    Sequences shorter than two tokens produce empty counters. The last token
    has no successor and is never added to ``occurrence_counts``.
    """
    counts = BigramCounts()
    it = iter(tokens)
    prev = next(it, None)
    if prev is None:
        return counts
    for curr in it:
        counts.add(prev, curr)
        prev = curr
    return counts
