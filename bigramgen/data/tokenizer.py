"""Tokenizers that turn raw corpus text into word and punctuation tokens."""

from typing import Dict, Iterator, List, Type

from bigramgen.errors import InvalidConfigurationError


WHITESPACE_ONLY = 'whitespace_only'
WHITESPACE_PLUS_PUNCTUATION = 'whitespace_plus_punctuation'
DEFAULT_POLICY = WHITESPACE_PLUS_PUNCTUATION

PUNCTUATION = frozenset('!.,;:-"\'()[]/')


class WhitespaceTokenizer:
    """Split on Unicode whitespace, keeping punctuation attached to words."""

    policy = WHITESPACE_ONLY

    def iter_tokens(self, text: str) -> Iterator[str]:
        """Yield tokens from text in a single left-to-right pass."""
        for fragment in text.split():
            yield fragment

    def tokenize(self, text: str) -> List[str]:
        """Convert text to a list of tokens."""
        return list(self.iter_tokens(text))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class PunctuationTokenizer(WhitespaceTokenizer):
    """Whitespace tokenizer that splits off leading and trailing punctuation.

    One mark from ``PUNCTUATION`` is peeled from each end of a fragment and
    emitted as its own token in its original position: ``(cat.`` becomes
    ``(``, ``cat``, ``.``. Marks outside the set (``?`` for instance) stay
    attached to the word.
    """

    policy = WHITESPACE_PLUS_PUNCTUATION

    def iter_tokens(self, text: str) -> Iterator[str]:
        for fragment in text.split():
            if len(fragment) > 1 and fragment[0] in PUNCTUATION:
                yield fragment[0]
                fragment = fragment[1:]
            trailing = ''
            if len(fragment) > 1 and fragment[-1] in PUNCTUATION:
                trailing = fragment[-1]
                fragment = fragment[:-1]
            yield fragment
            if trailing:
                yield trailing


_TOKENIZERS: Dict[str, Type[WhitespaceTokenizer]] = {
    WHITESPACE_ONLY: WhitespaceTokenizer,
    WHITESPACE_PLUS_PUNCTUATION: PunctuationTokenizer,
}

POLICIES = tuple(_TOKENIZERS)


def get_tokenizer(policy: str = DEFAULT_POLICY) -> WhitespaceTokenizer:
    """Return the tokenizer for a policy name.

    Raises:
        InvalidConfigurationError: If the policy is not one of ``POLICIES``.
    """
    try:
        return _TOKENIZERS[policy]()
    except KeyError:
        raise InvalidConfigurationError(
            f"Unknown tokenization policy {policy!r}; "
            f"expected one of {', '.join(POLICIES)}"
        ) from None


def tokenize(text: str, policy: str = DEFAULT_POLICY) -> List[str]:
    """Tokenize text under the given policy."""
    return get_tokenizer(policy).tokenize(text)
