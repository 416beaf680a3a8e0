"""
Word recognition and strangeness classification.

This package turns raw OCR output into classified, geometrically anchored
words:
- FrequencyCorpus: ranked frequency list (commonness, frequency lookup)
- SpellCheckEngine: correctness and frequency-ranked suggestions
- GeometryReconciler: OCR element boxes joined to tagger tokens by text
- TokenFilter: drops proper nouns, punctuation, short and numeric tokens
- StrangenessClassifier: strange/ordinary verdict per word
- WordPipeline: the orchestrator
- resolve_tap: display-space hit testing

Example:
    >>> from strana.words import FrequencyCorpus, SpellCheckEngine, WordPipeline
    >>> corpus = FrequencyCorpus.load("en_50k.txt", top_n=40_000)
    >>> pipeline = WordPipeline(corpus, SpellCheckEngine(corpus), SpacyTagger())
    >>> words = pipeline.process(ocr_result)
"""

from strana.words.classifier import StrangenessClassifier
from strana.words.corpus import FrequencyCorpus
from strana.words.filters import EXCLUDED_TAGS, TokenFilter
from strana.words.hittest import (
    DisplayBox,
    GeometryTransform,
    highlight_boxes,
    resolve_tap,
)
from strana.words.pipeline import PipelineStats, WordPipeline, create_pipeline
from strana.words.reconcile import GeometryReconciler, build_bounds_map
from strana.words.spelling import SpellCheckEngine

__all__ = [
    # Pipeline
    "WordPipeline",
    "PipelineStats",
    "create_pipeline",
    # Components
    "FrequencyCorpus",
    "SpellCheckEngine",
    "GeometryReconciler",
    "build_bounds_map",
    "TokenFilter",
    "EXCLUDED_TAGS",
    "StrangenessClassifier",
    # Hit testing
    "GeometryTransform",
    "DisplayBox",
    "highlight_boxes",
    "resolve_tap",
]
