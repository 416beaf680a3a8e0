"""
Spell checking with frequency-ranked suggestions.

Correctness and candidate suggestions come from the spelling dictionary
(pyspellchecker). The best suggestion is not the closest by edit distance
but the most frequent in the FrequencyCorpus: frequency acts as a prior on
which correction the reader intended.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from strana.exceptions import DictionaryInitError
from strana.models import SpellCheckResult

if TYPE_CHECKING:
    from spellchecker import SpellChecker

    from strana.words.corpus import FrequencyCorpus

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Words this short are correct by convention (single letters, initials)
MAX_UNCHECKED_LENGTH = 1


# =============================================================================
# SPELL CHECK ENGINE
# =============================================================================


class SpellCheckEngine:
    """
    Reports spelling correctness and ranked suggestions for a token.

    The engine is read-only after construction and may be shared across
    concurrent scans.

    Attributes:
        corpus: FrequencyCorpus used to rank suggestions.
        speller: Underlying pyspellchecker dictionary.

    Example:
        >>> engine = SpellCheckEngine(corpus)
        >>> result = engine.check_spelling("ephemral")
        >>> result.is_correct
        False
        >>> result.best_suggestion
        'ephemeral'
    """

    def __init__(
        self,
        corpus: FrequencyCorpus,
        speller: SpellChecker | None = None,
        language: str | None = "en",
        dictionary_path: Path | None = None,
        distance: int = 2,
    ):
        """
        Initialize the engine.

        Args:
            corpus: FrequencyCorpus for suggestion ranking.
            speller: Pre-built SpellChecker; built from the other args if None.
            language: Bundled pyspellchecker language.
            dictionary_path: Local dictionary file, used instead of language.
            distance: Maximum edit distance for suggestions.

        Raises:
            DictionaryInitError: If the dictionary cannot be initialized.
        """
        self.corpus = corpus
        self.speller = speller if speller is not None else _build_speller(
            language, dictionary_path, distance
        )

    def is_spelled_correctly(self, word: str) -> bool:
        """Delegate to the dictionary predicate; short words are always correct."""
        if len(word) <= MAX_UNCHECKED_LENGTH:
            return True
        return word.lower() in self.speller

    def suggestions_for(self, word: str) -> tuple[str, ...]:
        """
        Get candidate corrections for a misspelled word.

        The dictionary's candidates are unordered; they are sorted so that
        repeated calls return the same sequence.
        """
        if len(word) <= MAX_UNCHECKED_LENGTH or self.is_spelled_correctly(word):
            return ()
        candidates = self.speller.candidates(word.lower()) or ()
        return tuple(sorted(c for c in candidates if c != word.lower()))

    def best_suggestion(self, word: str) -> str | None:
        return self._rank(self.suggestions_for(word))

    def check_spelling(self, word: str) -> SpellCheckResult:
        """
        Check spelling and get correction information for a word.

        Args:
            word: The token text to check.

        Returns:
            SpellCheckResult; suggestions are empty when the word is correct.
        """
        if self.is_spelled_correctly(word):
            return SpellCheckResult(word=word, is_correct=True)

        suggestions = self.suggestions_for(word)
        return SpellCheckResult(
            word=word,
            is_correct=False,
            suggestions=suggestions,
            best_suggestion=self._rank(suggestions),
        )

    def _rank(self, suggestions: tuple[str, ...]) -> str | None:
        # max() keeps the first of equal keys, so ties go to the earlier suggestion
        if not suggestions:
            return None
        return max(suggestions, key=lambda s: self.corpus.frequency_of(s) or 0)


def _build_speller(
    language: str | None,
    dictionary_path: Path | None,
    distance: int,
) -> SpellChecker:
    """Create the pyspellchecker dictionary, failing fatally on bad data."""
    from spellchecker import SpellChecker

    try:
        if dictionary_path is not None:
            speller = SpellChecker(
                language=None,
                local_dictionary=str(dictionary_path),
                distance=distance,
            )
            source = str(dictionary_path)
        else:
            speller = SpellChecker(language=language, distance=distance)
            source = f"language={language}"
    except (OSError, ValueError) as e:
        logger.error("Error initializing spelling dictionary: %s", e)
        raise DictionaryInitError(f"Failed to initialize spelling dictionary: {e}") from e

    if speller.word_frequency.unique_words == 0:
        raise DictionaryInitError(f"Spelling dictionary is empty ({source})")

    logger.info(
        "Initialized spelling dictionary (%s, %d words)",
        source,
        speller.word_frequency.unique_words,
    )
    return speller
