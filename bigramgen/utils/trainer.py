"""Utilities for model construction and generation."""

import logging
from typing import Iterable, Iterator, List, Optional

from bigramgen.data.dataset import count_bigrams
from bigramgen.data.tokenizer import DEFAULT_POLICY, get_tokenizer
from bigramgen.errors import InvalidConfigurationError, UnrecognizedWordError
from bigramgen.models.bigram import SENTENCE_TERMINALS, BigramModel
from bigramgen.utils.seeding import RandomSource, make_generator


logger = logging.getLogger(__name__)


def build_model(
    text: Optional[str],
    policy: str = DEFAULT_POLICY,
) -> BigramModel:
    """Tokenize, count and build a bigram model from corpus text.

    Args:
        text: The full concatenated corpus; None when no text is available
        policy: Tokenization policy name

    Raises:
        InvalidConfigurationError: If the policy is unknown.
    """
    tokenizer = get_tokenizer(policy)
    tokens = tokenizer.tokenize(text or '')
    logger.info(f"Tokenized corpus into {len(tokens)} tokens ({policy})")

    counts = count_bigrams(tokens)
    if not counts.bigram_counts:
        logger.warning("Corpus has fewer than two tokens; model is empty")

    model = BigramModel.from_counts(counts)
    logger.info(
        f"Model has {len(model)} tokens, "
        f"{len(counts)} distinct bigrams, {counts.num_bigrams} transitions"
    )
    return model


class Generator:
    """Text generation helper for bigram models."""

    def __init__(
        self,
        model: BigramModel,
        rng: Optional[RandomSource] = None,
    ):
        """
        Args:
            model: Built bigram model, only ever read
            rng: Random source shared by all calls on this generator;
                an unseeded torch generator when omitted
        """
        self.model = model
        self.rng = rng if rng is not None else make_generator()

    def stream(
        self,
        start: str,
        max_tokens: Optional[int] = None,
        stop_tokens: Iterable[str] = (),
    ) -> Iterator[str]:
        """Lazily yield sampled tokens following start.

        Stops after max_tokens tokens, or right after yielding one of
        stop_tokens. Raises UnrecognizedWordError once the current token has
        no successors.
        """
        stops = frozenset(stop_tokens)
        current = start
        emitted = 0
        while max_tokens is None or emitted < max_tokens:
            nxt = self.model.sample_next(current, self.rng)
            if nxt is None:
                raise UnrecognizedWordError(current)
            yield nxt
            emitted += 1
            if nxt in stops:
                return
            current = nxt

    def _collect(self, tokens: Iterator[str]) -> List[str]:
        out: List[str] = []
        try:
            for token in tokens:
                out.append(token)
        except UnrecognizedWordError as e:
            raise UnrecognizedWordError(e.token, out) from None
        return out

    def generate(self, start: str, n: int) -> List[str]:
        """Generate exactly n tokens after start."""
        if n < 0:
            raise InvalidConfigurationError("n must be >= 0")
        return self._collect(self.stream(start, max_tokens=n))

    def generate_sentence(
        self,
        start: str,
        max_tokens: int = 100,
        stop_tokens: Iterable[str] = SENTENCE_TERMINALS,
    ) -> List[str]:
        """Generate until a sentence-ending mark is emitted.

        max_tokens bounds corpora whose chains never reach a terminal.
        """
        if max_tokens <= 0:
            raise InvalidConfigurationError("max_tokens must be > 0")
        return self._collect(
            self.stream(start, max_tokens=max_tokens, stop_tokens=stop_tokens)
        )

    def next_word(self, start: str) -> str:
        """Sample a single successor of start."""
        nxt = self.model.sample_next(start, self.rng)
        if nxt is None:
            raise UnrecognizedWordError(start)
        return nxt
