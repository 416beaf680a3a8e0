"""
Word Pipeline Orchestrator.

This module turns one OCR result into the ordered list of classified words:
1. Geometry reconciliation (text -> bounding box map)
2. Grammatical tagging of the full recognized text
3. Token filtering (proper nouns, punctuation, short, numeric)
4. Spell checking and bounds lookup per surviving token
5. Strangeness classification on the original token text
6. Word emission in token order

The pipeline is synchronous and has no side effects beyond logging. A scan is
atomic: if tagging fails, no partial word list is produced.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from strana.exceptions import StranaError, TaggerFailure
from strana.models import OcrResult, Token, Word
from strana.tagging import SpacyTagger, Tagger
from strana.words.classifier import StrangenessClassifier
from strana.words.corpus import FrequencyCorpus
from strana.words.filters import TokenFilter
from strana.words.reconcile import GeometryReconciler
from strana.words.spelling import SpellCheckEngine

if TYPE_CHECKING:
    from strana.config import StranaConfig

logger = logging.getLogger(__name__)


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass
class PipelineStats:
    """Statistics for one pipeline run."""

    elements_seen: int = 0
    tokens_seen: int = 0
    tokens_kept: int = 0
    words_with_bounds: int = 0
    strange_words: int = 0
    misspelled_words: int = 0
    processing_time_ms: float = 0.0


# =============================================================================
# WORD PIPELINE
# =============================================================================


@dataclass
class WordPipeline:
    """
    Main word recognition and classification pipeline.

    Components are shared and read-only, so one pipeline may serve
    concurrent scans.

    Attributes:
        corpus: FrequencyCorpus for commonness and suggestion ranking.
        spell_checker: SpellCheckEngine for correctness and suggestions.
        tagger: Grammatical tagger collaborator.
        token_filter: TokenFilter applied to tagger output.
        classifier: StrangenessClassifier; built from the corpus if None.
        reconciler: GeometryReconciler for the bounds map.

    Example:
        >>> pipeline = WordPipeline(corpus, SpellCheckEngine(corpus), SpacyTagger())
        >>> words = pipeline.process(ocr_result)
        >>> [w.original_text for w in words if w.is_strange]
        ['ephemral']
    """

    corpus: FrequencyCorpus
    spell_checker: SpellCheckEngine
    tagger: Tagger
    token_filter: TokenFilter = field(default_factory=TokenFilter)
    classifier: StrangenessClassifier | None = None
    reconciler: GeometryReconciler = field(default_factory=GeometryReconciler)

    def __post_init__(self) -> None:
        if self.classifier is None:
            self.classifier = StrangenessClassifier(self.corpus)

    def process(self, ocr_result: OcrResult) -> list[Word]:
        """
        Process one OCR result into classified words.

        Args:
            ocr_result: Full text and elements from the OCR collaborator.

        Returns:
            One Word per surviving token, in token order, duplicates kept.

        Raises:
            TaggerFailure: If the tagger fails; no words are produced.
        """
        words, _ = self.process_with_stats(ocr_result)
        return words

    def process_with_stats(self, ocr_result: OcrResult) -> tuple[list[Word], PipelineStats]:
        """Process one OCR result and return words with run statistics."""
        start_time = time.time()
        stats = PipelineStats(elements_seen=len(ocr_result.elements))

        # Stage 1: Bounds map
        bounds_map = self.reconciler.build_bounds_map(ocr_result.elements)

        # Stage 2: Tagging
        tokens = self._tag(ocr_result.full_text)
        stats.tokens_seen = len(tokens)

        # Stage 3: Filtering
        kept = self.token_filter.filter(tokens)
        stats.tokens_kept = len(kept)

        # Stages 4-6: Spell check, bounds, classification
        words = []
        for token in kept:
            spelling = self.spell_checker.check_spelling(token.text)
            bounds = self.reconciler.lookup(bounds_map, token.text)
            word = Word(
                original_text=token.text,
                corrected_text=spelling.best_suggestion,
                tag=token.tag,
                bounds=bounds,
                is_spelled_correctly=spelling.is_correct,
                suggestions=spelling.suggestions,
                is_strange=self.classifier.classify(token.text),
            )
            logger.debug(
                "Token '%s', bounds: %s, isCorrect: %s, suggestions: %s",
                token.text,
                bounds,
                spelling.is_correct,
                list(spelling.suggestions),
            )
            words.append(word)

            if bounds is not None:
                stats.words_with_bounds += 1
            if word.is_strange:
                stats.strange_words += 1
            if not word.is_spelled_correctly:
                stats.misspelled_words += 1

        stats.processing_time_ms = (time.time() - start_time) * 1000
        return words, stats

    def _tag(self, text: str) -> list[Token]:
        try:
            return list(self.tagger.tag(text))
        except StranaError:
            raise
        except Exception as e:
            logger.warning("Tagger failed: %s", e)
            raise TaggerFailure(f"Tagging failed: {e}") from e

    def log_summary(self, words: list[Word]) -> None:
        """Log a summary of processed words."""
        if not words:
            return
        with_bounds = sum(1 for w in words if w.bounds is not None)
        logger.debug("Total words: %d, Words with bounds: %d", len(words), with_bounds)
        for w in words:
            logger.debug("word: '%s', bounds: %s", w.original_text, w.bounds)

    def get_info(self) -> dict[str, Any]:
        """Get pipeline configuration information."""
        return {
            "corpus_entries": len(self.corpus),
            "top_n": self.corpus.top_n,
            "excluded_tags": sorted(self.token_filter.excluded_tags),
            "short_token_length": self.token_filter.short_token_length,
            "short_word_length": self.classifier.short_word_length,
            "tagger": type(self.tagger).__name__,
        }


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def create_pipeline(
    config: StranaConfig,
    corpus: FrequencyCorpus | None = None,
    spell_checker: SpellCheckEngine | None = None,
    tagger: Tagger | None = None,
) -> WordPipeline:
    """
    Create a word pipeline from configuration.

    Without an explicit corpus, the process-wide runtime is initialized (or
    reused) and its corpus and spell checker are shared.

    Args:
        config: StranaConfig with corpus, spelling, and tagger settings.
        corpus: Pre-loaded corpus.
        spell_checker: Pre-built spell checker over `corpus`.
        tagger: Tagger collaborator; a SpacyTagger for config.tagger.model if None.

    Returns:
        Configured WordPipeline.

    Raises:
        CorpusLoadError: If the corpus cannot be loaded.
        DictionaryInitError: If the spelling dictionary cannot be initialized.
    """
    from strana import runtime

    if corpus is None:
        shared = runtime.initialize(config)
        corpus = shared.corpus
        spell_checker = spell_checker or shared.spell_checker
    if spell_checker is None:
        spell_checker = SpellCheckEngine(
            corpus,
            language=config.spelling.language,
            dictionary_path=config.spelling.dictionary_path,
            distance=config.spelling.distance,
        )

    return WordPipeline(
        corpus=corpus,
        spell_checker=spell_checker,
        tagger=tagger if tagger is not None else SpacyTagger(config.tagger.model),
        token_filter=TokenFilter(short_token_length=config.short_token_length),
        classifier=StrangenessClassifier(corpus, short_word_length=config.short_word_length),
    )
