"""
Unit tests for ScanCoordinator.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from strana.exceptions import RecognitionFailure, ScanError, TaggerFailure
from strana.models import OcrResult
from strana.scan import ScanCoordinator, ScanOutcome
from strana.tagging import StaticTagger
from strana.words.pipeline import WordPipeline

TIMEOUT = 5


class GatedTagger(StaticTagger):
    """Blocks on texts listed in `gated` until released."""

    def __init__(self, gated):
        super().__init__()
        self.gated = set(gated)
        self.release = threading.Event()
        self.entered = threading.Event()

    def tag(self, text):
        if text in self.gated:
            self.entered.set()
            assert self.release.wait(TIMEOUT)
        return super().tag(text)


class FailingRecognizer:
    def recognize(self, image):
        raise RecognitionFailure("camera image unreadable")


class StubRecognizer:
    def __init__(self, text):
        self.text = text

    def recognize(self, image):
        return OcrResult(full_text=self.text)


@pytest.fixture
def gated_pipeline(corpus, spell_checker):
    tagger = GatedTagger(gated={"river slow"})
    return WordPipeline(corpus, spell_checker, tagger), tagger


class TestScanCoordinator:
    """Tests for scan scheduling and result application."""

    def test_single_scan_applied(self, pipeline):
        with ScanCoordinator(pipeline) as coordinator:
            outcome = coordinator.submit(OcrResult(full_text="river bank")).result(TIMEOUT)

        assert outcome.ok
        assert [w.original_text for w in outcome.words] == ["river", "bank"]
        assert coordinator.current is outcome

    def test_newer_scan_supersedes_older(self, gated_pipeline):
        pipeline, tagger = gated_pipeline
        with ScanCoordinator(pipeline) as coordinator:
            older = coordinator.submit(OcrResult(full_text="river slow"))
            assert tagger.entered.wait(TIMEOUT)
            newer = coordinator.submit(OcrResult(full_text="bank"))
            tagger.release.set()

            older_outcome = older.result(TIMEOUT)
            newer_outcome = newer.result(TIMEOUT)

        assert older_outcome.stale
        assert not older_outcome.ok
        assert newer_outcome.ok
        assert coordinator.current is newer_outcome
        assert [w.original_text for w in coordinator.current.words] == ["bank"]

    def test_discard_drops_in_flight_scan(self, gated_pipeline):
        pipeline, tagger = gated_pipeline
        with ScanCoordinator(pipeline) as coordinator:
            future = coordinator.submit(OcrResult(full_text="river slow"))
            assert tagger.entered.wait(TIMEOUT)
            coordinator.discard()
            tagger.release.set()
            outcome = future.result(TIMEOUT)

        assert outcome.stale
        assert coordinator.current is None

    def test_on_result_only_for_live_outcomes(self, gated_pipeline):
        pipeline, tagger = gated_pipeline
        received = []
        with ScanCoordinator(pipeline, on_result=received.append) as coordinator:
            older = coordinator.submit(OcrResult(full_text="river slow"))
            assert tagger.entered.wait(TIMEOUT)
            newer = coordinator.submit(OcrResult(full_text="bank"))
            tagger.release.set()
            older.result(TIMEOUT)
            newer_outcome = newer.result(TIMEOUT)

        assert received == [newer_outcome]

    def test_tagger_failure_yields_empty_outcome(self, corpus, spell_checker):
        class BrokenTagger:
            def tag(self, text):
                raise RuntimeError("tagger crashed")

        pipeline = WordPipeline(corpus, spell_checker, BrokenTagger())
        with ScanCoordinator(pipeline) as coordinator:
            outcome = coordinator.submit(OcrResult(full_text="river")).result(TIMEOUT)

        assert outcome.words == ()
        assert isinstance(outcome.error, TaggerFailure)
        assert not outcome.ok
        assert coordinator.current is outcome

    def test_recognition_failure_yields_empty_outcome(self, pipeline):
        with ScanCoordinator(pipeline, recognizer=FailingRecognizer()) as coordinator:
            outcome = coordinator.submit("page.jpg").result(TIMEOUT)

        assert outcome.words == ()
        assert isinstance(outcome.error, RecognitionFailure)

    def test_image_source_uses_recognizer(self, pipeline):
        recognizer = StubRecognizer("ephemeral river")
        with ScanCoordinator(pipeline, recognizer=recognizer) as coordinator:
            outcome = coordinator.submit("page.jpg").result(TIMEOUT)

        assert [w.original_text for w in outcome.words] == ["ephemeral", "river"]

    def test_image_source_requires_recognizer(self, pipeline):
        with ScanCoordinator(pipeline) as coordinator:
            with pytest.raises(TypeError):
                coordinator.submit("page.jpg")

    def test_generation_increments(self, pipeline):
        with ScanCoordinator(pipeline) as coordinator:
            first = coordinator.submit(OcrResult(full_text="river")).result(TIMEOUT)
            coordinator.discard()
            second = coordinator.submit(OcrResult(full_text="bank")).result(TIMEOUT)

        assert first.generation == 1
        assert second.generation == 3
        assert coordinator.generation == 3


class TestScanOutcome:
    """Tests for ScanOutcome."""

    def test_ok_flags(self):
        assert ScanOutcome(generation=1).ok
        assert not ScanOutcome(generation=1, stale=True).ok
        assert not ScanOutcome(generation=1, error=TaggerFailure("x")).ok


class TestScanFailures:
    """Unexpected errors never leave an older word list in place."""

    def test_unexpected_error_replaces_previous_result(self, pipeline):
        class TimingOutRecognizer:
            def recognize(self, image):
                raise RuntimeError("Tesseract process timeout")

        with ScanCoordinator(pipeline, recognizer=TimingOutRecognizer()) as coordinator:
            first = coordinator.submit(OcrResult(full_text="river bank")).result(TIMEOUT)
            assert first.ok
            failed = coordinator.submit("page.jpg").result(TIMEOUT)

        assert failed.words == ()
        assert isinstance(failed.error, ScanError)
        assert isinstance(failed.error.__cause__, RuntimeError)
        assert coordinator.current is failed

    def test_unexpected_pipeline_error(self, pipeline, monkeypatch):
        def explode(ocr_result):
            raise KeyError("missing")

        monkeypatch.setattr(pipeline, "process", explode)
        with ScanCoordinator(pipeline) as coordinator:
            outcome = coordinator.submit(OcrResult(full_text="river")).result(TIMEOUT)

        assert not outcome.ok
        assert outcome.words == ()


class TestDelivery:
    """Result delivery against concurrent submits and discards."""

    def test_multi_worker_stale_result_not_delivered(self, gated_pipeline):
        pipeline, tagger = gated_pipeline
        received = []
        executor = ThreadPoolExecutor(max_workers=2)
        try:
            coordinator = ScanCoordinator(pipeline, executor=executor, on_result=received.append)
            older = coordinator.submit(OcrResult(full_text="river slow"))
            assert tagger.entered.wait(TIMEOUT)
            newer_outcome = coordinator.submit(OcrResult(full_text="bank")).result(TIMEOUT)
            tagger.release.set()
            older_outcome = older.result(TIMEOUT)
        finally:
            executor.shutdown(wait=True)

        assert newer_outcome.ok
        assert older_outcome.stale
        assert received == [newer_outcome]
        assert coordinator.current is newer_outcome

    def test_discard_waits_for_delivery_in_progress(self, pipeline):
        delivering = threading.Event()
        release = threading.Event()

        def slow_render(outcome):
            delivering.set()
            assert release.wait(TIMEOUT)

        with ScanCoordinator(pipeline, on_result=slow_render) as coordinator:
            future = coordinator.submit(OcrResult(full_text="river"))
            assert delivering.wait(TIMEOUT)

            discarder = threading.Thread(target=coordinator.discard)
            discarder.start()
            discarder.join(0.2)
            assert discarder.is_alive()

            release.set()
            discarder.join(TIMEOUT)
            outcome = future.result(TIMEOUT)

        assert outcome.ok
        assert coordinator.current is None
        assert coordinator.generation == 2

    def test_callback_may_resubmit(self, pipeline):
        results = []

        with ScanCoordinator(pipeline) as coordinator:

            def on_result(outcome):
                results.append(outcome)
                if len(results) == 1:
                    results.append(coordinator.submit(OcrResult(full_text="bank")))

            coordinator.on_result = on_result
            coordinator.submit(OcrResult(full_text="river")).result(TIMEOUT)
            results[1].result(TIMEOUT)

        assert [w.original_text for w in coordinator.current.words] == ["bank"]
