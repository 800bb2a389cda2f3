"""Bigram (first-order Markov) model of word succession."""

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from bigramgen.data.dataset import BigramCounts
from bigramgen.data.tokenizer import DEFAULT_POLICY, POLICIES
from bigramgen.errors import InvalidConfigurationError
from bigramgen.utils.seeding import RandomSource, uniform


logger = logging.getLogger(__name__)


SENTENCE_TERMINALS = ('.', '!', '?')


@dataclass
class GenerationConfig:
    """Configuration for building a model and generating from it."""
    policy: str = DEFAULT_POLICY
    num_words: int = 8
    max_sentence_tokens: int = 100
    seed: Optional[int] = None
    stop_tokens: Tuple[str, ...] = field(default=SENTENCE_TERMINALS)

    def validate(self) -> None:
        if self.policy not in POLICIES:
            raise InvalidConfigurationError(
                f"Unknown tokenization policy {self.policy!r}"
            )
        if self.num_words < 0:
            raise InvalidConfigurationError("num_words must be >= 0")
        if self.max_sentence_tokens <= 0:
            raise InvalidConfigurationError("max_sentence_tokens must be > 0")


@dataclass(frozen=True)
class NextWordOption:
    """A possible successor and its conditional probability."""
    next: str
    probability: float


@dataclass(frozen=True)
class BigramOptions:
    """Weighted successors of one token.

    ``total`` is always the sum of the options' probabilities; it is only
    ever changed together with ``options`` by returning a new instance.
    """
    total: float
    options: Tuple[NextWordOption, ...]

    def __post_init__(self):
        if not self.options:
            raise ValueError("BigramOptions needs at least one option")
        expected = sum(o.probability for o in self.options)
        if not math.isclose(self.total, expected, rel_tol=1e-9, abs_tol=1e-12):
            raise ValueError(
                f"total {self.total!r} does not match option probabilities ({expected!r})"
            )

    @classmethod
    def first(cls, option: NextWordOption) -> 'BigramOptions':
        return cls(total=option.probability, options=(option,))

    @classmethod
    def from_options(cls, options: Iterable[NextWordOption]) -> 'BigramOptions':
        """Build from options, accumulating the total in their order."""
        options = tuple(options)
        total = 0.0
        for option in options:
            total += option.probability
        return cls(total=total, options=options)

    def with_option(self, option: NextWordOption) -> 'BigramOptions':
        """Return a copy with option appended and the total updated."""
        return BigramOptions(
            total=self.total + option.probability,
            options=self.options + (option,),
        )

    def by_probability(self) -> 'BigramOptions':
        """Order by descending probability, ties kept in insertion order.

        The total is re-accumulated in the new order so the last cumulative
        partial sum of a scan equals it exactly.
        """
        return BigramOptions.from_options(
            sorted(self.options, key=lambda o: -o.probability)
        )

    def choose(self, r: float) -> NextWordOption:
        """Pick the option whose cumulative interval contains r.

        Partial sums are accumulated ascending from zero and the first one
        exceeding r wins, so option i is chosen with probability
        ``probability_i / total`` for r uniform in [0, total).
        """
        cumulative = 0.0
        for option in self.options:
            cumulative += option.probability
            if r < cumulative:
                return option
        # r can only reach the end through rounding of r itself
        return self.options[-1]

    def __len__(self) -> int:
        return len(self.options)


class BigramModel:
    """Immutable mapping from a token to its weighted successors."""

    def __init__(self, data: Optional[Mapping[str, BigramOptions]] = None):
        self._data = MappingProxyType(dict(data or {}))

    @classmethod
    def from_counts(cls, counts: BigramCounts) -> 'BigramModel':
        """Turn bigram and occurrence counts into probability tables."""
        table: Dict[str, List[NextWordOption]] = {}
        for (first, second), count in counts.bigram_counts.items():
            # occurrence_counts has every first token of bigram_counts
            probability = count / counts.occurrence_counts[first]
            table.setdefault(first, []).append(NextWordOption(second, probability))
        model = cls({
            token: BigramOptions.from_options(options).by_probability()
            for token, options in table.items()
        })
        logger.debug(f"Built model with {len(model)} tokens from {len(counts)} bigrams")
        return model

    @property
    def data(self) -> Mapping[str, BigramOptions]:
        return self._data

    def get(self, token: str) -> Optional[BigramOptions]:
        return self._data.get(token)

    def most_likely(self, token: str) -> Optional[str]:
        opts = self._data.get(token)
        return opts.options[0].next if opts is not None else None

    def sample_next(
        self,
        token: str,
        rng: RandomSource,
    ) -> Optional[str]:
        """Sample a successor of token.

        Args:
            token: The current token
            rng: Random source for the draw

        Returns:
            The sampled token, or None if token never had a successor.
        """
        opts = self._data.get(token)
        if opts is None:
            return None
        r = uniform(rng) * opts.total
        choice = opts.choose(r).next
        logger.debug(f"{token!r} -> {choice!r} (r={r:.6f}, total={opts.total:.6f})")
        return choice

    def tokens(self) -> List[str]:
        return list(self._data)

    def __contains__(self, token: object) -> bool:
        return token in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"BigramModel(tokens={len(self)})"


def build(counts: BigramCounts) -> BigramModel:
    """Build a model from counts."""
    return BigramModel.from_counts(counts)


def sample_next(
    model: BigramModel,
    token: str,
    rng: RandomSource,
) -> Optional[str]:
    """Sample a successor of token from model; None if token is unknown."""
    return model.sample_next(token, rng)
