"""
Grammatical tagger collaborators.

The pipeline only needs something that turns the full recognized text into
an ordered sequence of (token text, Penn Treebank tag). Tagging runs over the
whole text rather than per OCR element because tags depend on sentence
context.

Two implementations are provided:
- SpacyTagger: spaCy's fine-grained `token.tag_` (Penn Treebank tag set)
- StaticTagger: deterministic tagging from fixed tables, for replays and tests
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from strana.exceptions import TaggerFailure
from strana.models import Token

if TYPE_CHECKING:
    from spacy.language import Language

logger = logging.getLogger(__name__)

DEFAULT_SPACY_MODEL = "en_core_web_sm"

# Words, or single non-space punctuation characters
SIMPLE_TOKEN_PATTERN = re.compile(r"\w+(?:['’]\w+)*|[^\w\s]")

PUNCTUATION_TAGS = {
    ",": ",",
    ".": ".",
    "!": ".",
    "?": ".",
    ";": ":",
    ":": ":",
    "-": "HYPH",
    "(": "-LRB-",
    ")": "-RRB-",
    '"': "''",
}


@runtime_checkable
class Tagger(Protocol):
    """Anything that tokenizes and POS-tags a full text."""

    def tag(self, text: str) -> list[Token]: ...


class SpacyTagger:
    """
    Tagger backed by a spaCy pipeline.

    The model is loaded on first use and then reused. Only the tagger is
    needed, so the parser and NER components are disabled.

    Example:
        >>> tagger = SpacyTagger("en_core_web_sm")
        >>> tagger.tag("The cat sat.")
        [Token(text='The', tag='DT'), Token(text='cat', tag='NN'), ...]
    """

    def __init__(self, model: str = DEFAULT_SPACY_MODEL, nlp: Language | None = None):
        self.model = model
        self._nlp = nlp

    def _get_nlp(self) -> Any:
        if self._nlp is not None:
            return self._nlp

        import spacy

        try:
            logger.info("Loading spaCy model '%s'...", self.model)
            self._nlp = spacy.load(self.model, disable=["parser", "ner", "lemmatizer"])
        except OSError as e:
            raise TaggerFailure(f"spaCy model '{self.model}' is not available: {e}") from e
        return self._nlp

    def tag(self, text: str) -> list[Token]:
        """Tokenize and tag text, dropping whitespace-only tokens."""
        doc = self._get_nlp()(text)
        return [Token(text=t.text, tag=t.tag_) for t in doc if not t.is_space]


class StaticTagger:
    """
    Deterministic tagger driven by fixed tables.

    If `tokens` is given it is returned verbatim for any text. Otherwise the
    text is split into words and punctuation; punctuation gets its Penn tag,
    and words are tagged from `tags` (exact text first, then lowercase),
    falling back to `default_tag`.

    Example:
        >>> StaticTagger(tags={"London": "NNP"}).tag("London fog.")
        [Token(text='London', tag='NNP'), Token(text='fog', tag='NN'), Token(text='.', tag='.')]
    """

    def __init__(
        self,
        tokens: Sequence[Token] | None = None,
        tags: Mapping[str, str] | None = None,
        default_tag: str = "NN",
    ):
        self.tokens = list(tokens) if tokens is not None else None
        self.tags = dict(tags or {})
        self.default_tag = default_tag

    def tag(self, text: str) -> list[Token]:
        if self.tokens is not None:
            return list(self.tokens)

        result = []
        for match in SIMPLE_TOKEN_PATTERN.finditer(text):
            piece = match.group()
            if piece in PUNCTUATION_TAGS:
                tag = PUNCTUATION_TAGS[piece]
            else:
                tag = self.tags.get(piece, self.tags.get(piece.lower(), self.default_tag))
            result.append(Token(text=piece, tag=tag))
        return result
