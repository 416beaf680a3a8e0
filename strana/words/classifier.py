"""
Strange/ordinary classification.

A word is strange when it is longer than a few letters and not among the
corpus's common words. Short words are never strange, even if rare, since
function words and abbreviations are poorly represented in frequency lists.

Classification uses the original OCR text. A misspelling of a common word is
therefore still strange; spelling correctness is reported separately.
"""

from __future__ import annotations

from dataclasses import dataclass

from strana.words.corpus import FrequencyCorpus


@dataclass(frozen=True)
class StrangenessClassifier:
    """
    Example:
        >>> classifier = StrangenessClassifier(corpus)
        >>> classifier.classify("ephemeral")
        True
        >>> classifier.classify("mat")
        False
    """

    corpus: FrequencyCorpus
    short_word_length: int = 3

    def classify(self, word: str) -> bool:
        """True iff the word is long enough and not common (case-insensitive)."""
        return len(word) > self.short_word_length and not self.corpus.is_common(word)
