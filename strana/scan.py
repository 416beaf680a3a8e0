"""
Scan scheduling: one active scan, last writer wins.

Recognition and word processing run off the caller's thread on an executor.
Each submission gets a new generation number; when a scan finishes, its
outcome is applied only if no newer scan was submitted and the user has not
discarded the capture in the meantime. Stale outcomes are dropped on arrival
and never replace newer state.

Per-scan failures are folded into the outcome (no words, error set), so a
failed scan never crashes the caller or corrupts the results on display.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass

from strana.exceptions import ScanError
from strana.models import OcrResult, Word
from strana.recognition import ImageSource, Recognizer
from strana.words.pipeline import WordPipeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanOutcome:
    """
    Terminal result of one scan.

    Attributes:
        generation: Submission number of the scan.
        words: Classified words; empty on failure.
        error: The per-scan failure, if any.
        stale: True if a newer scan or a discard superseded this one.
    """

    generation: int
    words: tuple[Word, ...] = ()
    error: ScanError | None = None
    stale: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.stale


class ScanCoordinator:
    """
    Runs scans in the background and keeps the latest live outcome.

    The pipeline's corpus and spell checker are read-only, so scans share
    them without locking. The generation counter and result delivery share
    one reentrant lock; `on_result` runs under it and may call `submit` or
    `discard`, but should not wait on another scan.

    Example:
        >>> coordinator = ScanCoordinator(pipeline, TesseractRecognizer())
        >>> future = coordinator.submit("page.jpg")
        >>> outcome = future.result()
        >>> coordinator.current is outcome or outcome.stale
        True
    """

    def __init__(
        self,
        pipeline: WordPipeline,
        recognizer: Recognizer | None = None,
        executor: Executor | None = None,
        on_result: Callable[[ScanOutcome], None] | None = None,
    ):
        self.pipeline = pipeline
        self.recognizer = recognizer
        self.on_result = on_result
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="strana-scan"
        )
        self._owns_executor = executor is None
        self._lock = threading.RLock()
        self._generation = 0
        self._current: ScanOutcome | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current(self) -> ScanOutcome | None:
        """The most recently applied live outcome, or None."""
        return self._current

    def submit(self, source: OcrResult | ImageSource) -> Future[ScanOutcome]:
        """
        Start a scan, superseding any scan still in flight.

        Args:
            source: Raw OCR output, or an image for the recognizer.

        Returns:
            Future resolving to the scan's ScanOutcome.
        """
        if not isinstance(source, OcrResult) and self.recognizer is None:
            raise TypeError("an image source requires a recognizer")

        with self._lock:
            self._generation += 1
            generation = self._generation
        logger.debug("Submitting scan %d", generation)
        return self._executor.submit(self._run, generation, source)

    def discard(self) -> None:
        """
        Drop the current capture, e.g. when returning to live preview.

        Any scan in flight becomes stale and is discarded on arrival.
        """
        with self._lock:
            self._generation += 1
            self._current = None
        logger.debug("Discarded capture; generation now %d", self._generation)

    def _run(self, generation: int, source: OcrResult | ImageSource) -> ScanOutcome:
        try:
            ocr_result = (
                source if isinstance(source, OcrResult) else self.recognizer.recognize(source)
            )
            words = self.pipeline.process(ocr_result)
            outcome = ScanOutcome(generation=generation, words=tuple(words))
        except ScanError as e:
            logger.warning("Scan %d produced no words: %s", generation, e)
            outcome = ScanOutcome(generation=generation, error=e)
        except Exception as e:
            logger.warning("Scan %d failed unexpectedly: %s", generation, e)
            error = ScanError(f"Scan failed: {e}")
            error.__cause__ = e
            outcome = ScanOutcome(generation=generation, error=error)

        return self._apply(outcome)

    def _apply(self, outcome: ScanOutcome) -> ScanOutcome:
        # Liveness check and delivery are atomic with respect to submit and discard
        with self._lock:
            if outcome.generation != self._generation:
                logger.debug(
                    "Dropping stale scan %d (latest is %d)",
                    outcome.generation,
                    self._generation,
                )
                return ScanOutcome(
                    generation=outcome.generation,
                    words=outcome.words,
                    error=outcome.error,
                    stale=True,
                )
            self._current = outcome
            if self.on_result is not None:
                self.on_result(outcome)
        return outcome

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> ScanCoordinator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()
