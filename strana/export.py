"""
Collection sessions: save scans for later labelling and export.

A session captures one scan's full text and words. Sessions are stored as
one JSON file each and can be exported together as a CSV of strange words.
"""

from __future__ import annotations

import csv
import json
import logging
import time
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from strana.models import Word

logger = logging.getLogger(__name__)

FILE_PREFIX = "session_"
FILE_EXTENSION = ".json"
CSV_HEADER = ["SessionID", "Timestamp", "FullText", "StrangeWords"]


@dataclass(frozen=True)
class CollectionSession:
    """One saved scan."""

    full_text: str
    words: tuple[Word, ...]
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))

    @property
    def strange_words(self) -> list[str]:
        """Lookup keys of strange words, in scan order."""
        return [w.lookup_key for w in self.words if w.is_strange]

    def with_label(self, index: int, is_strange: bool) -> CollectionSession:
        """
        Return a copy where the word at `index` carries a user label.

        The label replaces the classifier's verdict in the saved session and
        in the StrangeWords export column.

        Raises:
            IndexError: If there is no word at `index`.
        """
        words = list(self.words)
        words[index] = words[index].with_strange(is_strange)
        return replace(self, words=tuple(words))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "full_text": self.full_text,
            "words": [w.to_dict() for w in self.words],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CollectionSession:
        return cls(
            full_text=data["full_text"],
            words=tuple(Word.from_dict(w) for w in data.get("words", [])),
            id=data["id"],
            timestamp=data["timestamp"],
        )


def save_session(session: CollectionSession, directory: str | Path) -> Path:
    """
    Save a session as JSON.

    Returns:
        Path of the written file.

    Raises:
        OSError: If the file cannot be written.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{FILE_PREFIX}{session.id}{FILE_EXTENSION}"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(session.to_dict(), f, indent=2)
    logger.info("Saved session %s (%d words) to %s", session.id, len(session.words), path)
    return path


def load_sessions(directory: str | Path) -> list[CollectionSession]:
    """
    Load all saved sessions, oldest first.

    Files that cannot be parsed are logged and skipped.
    """
    directory = Path(directory)
    if not directory.exists():
        return []

    sessions = []
    for path in sorted(directory.glob(f"{FILE_PREFIX}*{FILE_EXTENSION}")):
        try:
            with open(path, encoding="utf-8") as f:
                sessions.append(CollectionSession.from_dict(json.load(f)))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, OSError) as e:
            logger.error("Failed to parse session file %s: %s", path.name, e)
    sessions.sort(key=lambda s: s.timestamp)
    return sessions


def export_csv(sessions: Iterable[CollectionSession], path: str | Path) -> Path | None:
    """
    Export sessions as CSV rows of SessionID, Timestamp, FullText, StrangeWords.

    StrangeWords joins each session's strange lookup keys with ';'.

    Returns:
        Path of the CSV, or None if there were no sessions.
    """
    sessions = list(sessions)
    if not sessions:
        return None

    path = Path(path)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for session in sessions:
            writer.writerow(
                [session.id, session.timestamp, session.full_text, ";".join(session.strange_words)]
            )
    logger.info("Exported %d sessions to %s", len(sessions), path)
    return path


def session_from_scan(full_text: str, words: Sequence[Word]) -> CollectionSession:
    return CollectionSession(full_text=full_text, words=tuple(words))
