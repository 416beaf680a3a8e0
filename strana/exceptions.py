"""
Exception classes for Strana.

All Strana exceptions inherit from StranaError, making it easy to catch
all library errors.

Two families exist:
- Fatal initialization errors (CorpusLoadError, DictionaryInitError,
  ConfigurationError). Startup aborts; there is no degraded mode.
- Per-scan errors (ScanError and subclasses). They are isolated to one scan,
  which then yields no words.

Example:
    >>> try:
    ...     words = pipeline.process(ocr_result)
    ... except strana.TaggerFailure as e:
    ...     print(f"Scan produced nothing, try again: {e}")
"""


class StranaError(Exception):
    """
    Base exception for all Strana errors.

    Catch this to handle any Strana-specific error.
    """

    pass


class ConfigurationError(StranaError, ValueError):
    """
    Raised for invalid configuration.

    Example:
        >>> StranaConfig(top_n=-1)
        ConfigurationError: top_n must be >= 0, got -1
    """

    pass


class CorpusLoadError(StranaError):
    """
    Raised when the frequency corpus cannot be read or parsed.

    Fatal: strangeness classification needs the corpus.
    """

    pass


class DictionaryInitError(StranaError):
    """
    Raised when the spelling dictionary fails to initialize.

    Fatal and never retried: suggestion ranking needs the dictionary.
    """

    pass


class ScanError(StranaError):
    """Base class for recoverable, per-scan failures."""

    pass


class RecognitionFailure(ScanError):
    """Raised when the OCR collaborator fails on an image."""

    pass


class TaggerFailure(ScanError):
    """Raised when the grammatical tagger fails on recognized text."""

    pass
