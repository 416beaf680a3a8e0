"""
Unit tests for collection sessions and CSV export.
"""

import csv

from strana.export import (
    CSV_HEADER,
    CollectionSession,
    export_csv,
    load_sessions,
    save_session,
    session_from_scan,
)
from strana.models import BoundingBox, Word


def make_word(text, strange, corrected=None, bounds=None):
    return Word(
        original_text=text,
        corrected_text=corrected,
        tag="NN",
        bounds=bounds,
        is_spelled_correctly=corrected is None,
        suggestions=(corrected,) if corrected else (),
        is_strange=strange,
    )


WORDS = (
    make_word("river", strange=False),
    make_word("ephemral", strange=True, corrected="ephemeral", bounds=BoundingBox(1, 2, 3, 4)),
    make_word("palimpsest", strange=True),
)


class TestCollectionSession:
    """Tests for CollectionSession."""

    def test_strange_words_use_lookup_key(self):
        session = CollectionSession(full_text="river ephemral palimpsest", words=WORDS)
        assert session.strange_words == ["ephemeral", "palimpsest"]

    def test_generated_ids_unique(self):
        a = session_from_scan("text", [])
        b = session_from_scan("text", [])
        assert a.id != b.id
        assert a.timestamp > 0

    def test_user_label_overrides_classifier(self):
        session = CollectionSession(full_text="t", words=WORDS, id="s1", timestamp=5)
        labelled = session.with_label(0, True).with_label(2, False)
        assert labelled.strange_words == ["river", "ephemeral"]
        assert session.strange_words == ["ephemeral", "palimpsest"]
        assert labelled.id == session.id

    def test_label_survives_save(self, tmp_path):
        session = CollectionSession(full_text="t", words=WORDS, id="s1", timestamp=5)
        save_session(session.with_label(1, False), tmp_path)
        (loaded,) = load_sessions(tmp_path)
        assert loaded.strange_words == ["palimpsest"]

    def test_dict_preserves_words(self):
        session = CollectionSession(full_text="t", words=WORDS, id="s1", timestamp=5)
        restored = CollectionSession.from_dict(session.to_dict())
        assert restored == session


class TestSaveAndLoad:
    """Tests for save_session and load_sessions."""

    def test_save_then_load(self, tmp_path):
        session = CollectionSession(full_text="t", words=WORDS, id="abc", timestamp=10)
        path = save_session(session, tmp_path / "sessions")
        assert path.name == "session_abc.json"
        assert load_sessions(tmp_path / "sessions") == [session]

    def test_sorted_by_timestamp(self, tmp_path):
        late = CollectionSession(full_text="late", words=(), id="a", timestamp=200)
        early = CollectionSession(full_text="early", words=(), id="b", timestamp=100)
        save_session(late, tmp_path)
        save_session(early, tmp_path)
        assert [s.full_text for s in load_sessions(tmp_path)] == ["early", "late"]

    def test_corrupt_file_skipped(self, tmp_path, caplog):
        good = CollectionSession(full_text="ok", words=(), id="good", timestamp=1)
        save_session(good, tmp_path)
        (tmp_path / "session_broken.json").write_text("{not json", encoding="utf-8")
        (tmp_path / "session_partial.json").write_text('{"id": "x"}', encoding="utf-8")

        assert load_sessions(tmp_path) == [good]
        assert "session_broken.json" in caplog.text

    def test_missing_directory(self, tmp_path):
        assert load_sessions(tmp_path / "nowhere") == []


class TestExportCsv:
    """Tests for export_csv."""

    def test_rows(self, tmp_path):
        sessions = [
            CollectionSession(full_text="river, ephemral", words=WORDS, id="s1", timestamp=7),
            CollectionSession(full_text="nothing", words=WORDS[:1], id="s2", timestamp=8),
        ]
        path = export_csv(sessions, tmp_path / "out.csv")

        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[0] == CSV_HEADER
        assert rows[1] == ["s1", "7", "river, ephemral", "ephemeral;palimpsest"]
        assert rows[2] == ["s2", "8", "nothing", ""]

    def test_no_sessions(self, tmp_path):
        assert export_csv([], tmp_path / "out.csv") is None
        assert not (tmp_path / "out.csv").exists()
