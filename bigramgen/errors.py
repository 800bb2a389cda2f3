"""Exceptions raised by bigramgen."""

from typing import List, Optional


class BigramGenError(Exception):
    """Base class for all bigramgen errors."""


class InvalidConfigurationError(BigramGenError, ValueError):
    """Raised for an unsupported tokenization policy or generation setting."""


class UnrecognizedWordError(BigramGenError, LookupError):
    """The current token was never followed by anything in the corpus."""

    def __init__(self, token: str, generated: Optional[List[str]] = None):
        """
        Args:
            token: The token with no entry in the model
            generated: Tokens produced before the unrecognized one was reached
        """
        super().__init__(f"Unrecognized word: {token!r}")
        self.token = token
        self.generated = list(generated or [])
