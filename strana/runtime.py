"""
Process-wide shared resources.

The frequency corpus and spelling dictionary are loaded once at application
start and then shared read-only by every scan. This module is the single
initialization point: `initialize()` loads them on first call and returns the
same Runtime on every later call. Failures are fatal; there is no degraded
mode without a corpus or speller.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from strana.config import StranaConfig
from strana.exceptions import ConfigurationError, StranaError
from strana.words.corpus import FrequencyCorpus
from strana.words.spelling import SpellCheckEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Runtime:
    """Shared, read-only resources for all scans."""

    config: StranaConfig
    corpus: FrequencyCorpus
    spell_checker: SpellCheckEngine


_runtime: Runtime | None = None
_lock = threading.Lock()


def initialize(config: StranaConfig) -> Runtime:
    """
    Load the corpus and spelling dictionary once.

    Calls after the first successful one are no-ops and return the existing
    Runtime, whatever config they pass.

    Raises:
        ConfigurationError: If config.corpus_path is not set.
        CorpusLoadError: If the corpus cannot be loaded.
        DictionaryInitError: If the spelling dictionary cannot be initialized.
    """
    global _runtime

    with _lock:
        if _runtime is not None:
            logger.debug("Runtime already initialized; reusing")
            return _runtime

        if config.corpus_path is None:
            raise ConfigurationError("corpus_path must be set to initialize the runtime")

        corpus = FrequencyCorpus.load(config.corpus_path, top_n=config.top_n)
        spell_checker = SpellCheckEngine(
            corpus,
            language=config.spelling.language,
            dictionary_path=config.spelling.dictionary_path,
            distance=config.spelling.distance,
        )
        _runtime = Runtime(config=config, corpus=corpus, spell_checker=spell_checker)
        logger.info("Runtime initialized (%r)", corpus)
        return _runtime


def get_runtime() -> Runtime:
    """Return the initialized Runtime, or raise if initialize() has not run."""
    if _runtime is None:
        raise StranaError("Runtime is not initialized; call strana.runtime.initialize() first")
    return _runtime


def is_initialized() -> bool:
    return _runtime is not None


def shutdown() -> None:
    """Drop the shared resources."""
    global _runtime

    with _lock:
        _runtime = None
