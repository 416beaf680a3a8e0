"""
Pytest configuration and fixtures for Strana tests.
"""

import pytest
from spellchecker import SpellChecker

from strana.models import BoundingBox, OcrResult, RawOcrElement
from strana.tagging import StaticTagger
from strana.words.corpus import FrequencyCorpus
from strana.words.pipeline import WordPipeline
from strana.words.spelling import SpellCheckEngine

CORPUS_LINES = [
    "the 1000",
    "cat 800",
    "sat 700",
    "bank 600",
    "ate 300",
    "hate 50",
    "river 40",
    "hue 5",
    "ephemeral 3",
]

DICTIONARY_WORDS = [
    "the",
    "cat",
    "sat",
    "on",
    "mat",
    "bank",
    "river",
    "ate",
    "hate",
    "hue",
    "ephemeral",
    "palimpsest",
]


@pytest.fixture
def corpus_lines() -> list[str]:
    return list(CORPUS_LINES)


@pytest.fixture
def corpus() -> FrequencyCorpus:
    """Small corpus whose common set is the first five words."""
    return FrequencyCorpus.load(CORPUS_LINES, top_n=5)


@pytest.fixture
def speller() -> SpellChecker:
    """In-memory spelling dictionary with a fixed vocabulary."""
    spell = SpellChecker(language=None)
    spell.word_frequency.load_words(DICTIONARY_WORDS)
    return spell


@pytest.fixture
def spell_checker(corpus, speller) -> SpellCheckEngine:
    return SpellCheckEngine(corpus, speller=speller)


@pytest.fixture
def pipeline(corpus, spell_checker) -> WordPipeline:
    return WordPipeline(corpus=corpus, spell_checker=spell_checker, tagger=StaticTagger())


def make_ocr_result(text: str, box_width: int = 40, line_height: int = 20) -> OcrResult:
    """Lay out whitespace-separated words left to right on one line."""
    elements = []
    x = 0
    for word in text.split():
        elements.append(RawOcrElement(word, BoundingBox(x, 0, x + box_width, line_height)))
        x += box_width + 10
    return OcrResult(full_text=text, elements=tuple(elements), image_size=(x, line_height))


@pytest.fixture
def ocr_factory():
    """Build an OcrResult from text, one box per whitespace-separated word."""
    return make_ocr_result
