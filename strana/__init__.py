"""
Strana: find the strange words on a photographed page.

Strana takes OCR output for a page of text, tags it grammatically, checks
spelling, and classifies each candidate word as ordinary or strange
(uncommon enough to be worth looking up). Strange words keep their on-image
boxes so a user can tap them.

Example:
    >>> import strana
    >>> config = strana.StranaConfig(corpus_path="en_50k.txt")
    >>> pipeline = strana.create_pipeline(config)
    >>> words = pipeline.process(strana.TesseractRecognizer().recognize("page.jpg"))
    >>> [w.lookup_key for w in words if w.is_strange]
    ['ephemeral', 'palimpsest']
"""

from strana.config import (
    RecognitionConfig,
    SpellingConfig,
    StranaConfig,
    TaggerConfig,
)
from strana.exceptions import (
    ConfigurationError,
    CorpusLoadError,
    DictionaryInitError,
    RecognitionFailure,
    ScanError,
    StranaError,
    TaggerFailure,
)
from strana.models import (
    BoundingBox,
    FrequencyEntry,
    OcrResult,
    RawOcrElement,
    SpellCheckResult,
    Token,
    Word,
)
from strana.recognition import Recognizer, TesseractRecognizer
from strana.scan import ScanCoordinator, ScanOutcome
from strana.tagging import SpacyTagger, StaticTagger, Tagger
from strana.words import (
    FrequencyCorpus,
    GeometryReconciler,
    GeometryTransform,
    SpellCheckEngine,
    StrangenessClassifier,
    TokenFilter,
    WordPipeline,
    create_pipeline,
    resolve_tap,
)

__version__ = "0.1.0"
__all__ = [
    # Main API
    "create_pipeline",
    "WordPipeline",
    "resolve_tap",
    "ScanCoordinator",
    "ScanOutcome",
    # Configuration
    "StranaConfig",
    "SpellingConfig",
    "TaggerConfig",
    "RecognitionConfig",
    # Components
    "FrequencyCorpus",
    "SpellCheckEngine",
    "GeometryReconciler",
    "TokenFilter",
    "StrangenessClassifier",
    "GeometryTransform",
    # Collaborators
    "Recognizer",
    "TesseractRecognizer",
    "Tagger",
    "SpacyTagger",
    "StaticTagger",
    # Models
    "BoundingBox",
    "FrequencyEntry",
    "OcrResult",
    "RawOcrElement",
    "SpellCheckResult",
    "Token",
    "Word",
    # Exceptions
    "StranaError",
    "ConfigurationError",
    "CorpusLoadError",
    "DictionaryInitError",
    "ScanError",
    "RecognitionFailure",
    "TaggerFailure",
]
