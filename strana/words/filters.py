"""
Token filtering ahead of spell checking and classification.

Drops tokens that cannot be vocabulary candidates: proper nouns,
punctuation, very short tokens, and anything containing a digit.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from strana.models import Token

logger = logging.getLogger(__name__)


# Penn Treebank tags for proper nouns and punctuation. Bracket markers are
# listed both in the standard "-LRB-" form and the bare "LRB-" form.
EXCLUDED_TAGS = frozenset(
    {
        "NNP",
        "NNPS",
        ",",
        ".",
        "HYPH",
        "``",
        "''",
        ":",
        "-LRB-",
        "-RRB-",
        "LRB-",
        "RRB-",
    }
)

DIGIT_PATTERN = re.compile(r"\d")


@dataclass(frozen=True)
class TokenFilter:
    """
    Pure, order-preserving token filter.

    Attributes:
        excluded_tags: Tags whose tokens are dropped.
        short_token_length: Tokens of this length or shorter are dropped.

    Example:
        >>> TokenFilter().filter([Token("London", "NNP"), Token("ephemeral", "JJ")])
        [Token(text='ephemeral', tag='JJ')]
    """

    excluded_tags: frozenset[str] = EXCLUDED_TAGS
    short_token_length: int = 2

    def keep(self, token: Token) -> bool:
        if token.tag in self.excluded_tags:
            return False
        if len(token.text) <= self.short_token_length:
            return False
        if DIGIT_PATTERN.search(token.text):
            return False
        return True

    def filter(self, tokens: Iterable[Token]) -> list[Token]:
        """Return the surviving tokens in their original order."""
        tokens = list(tokens)
        kept = [t for t in tokens if self.keep(t)]
        logger.debug("Token filter kept %d of %d tokens", len(kept), len(tokens))
        return kept
