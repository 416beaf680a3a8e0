"""
Ranked word-frequency corpus.

The corpus is a line-oriented list of "<word> <frequency>" rows ordered by
descending frequency (e.g. en_50k.txt). It answers two questions:
- Is a word among the top N most frequent words? (commonness)
- How frequent is a word? (full-table lookup, used to rank spelling
  suggestions even among words outside the top N)

A loaded corpus is immutable and safe to share across threads.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from strana.config import DEFAULT_TOP_N
from strana.exceptions import ConfigurationError, CorpusLoadError
from strana.models import FrequencyEntry

logger = logging.getLogger(__name__)


# =============================================================================
# FREQUENCY CORPUS
# =============================================================================


class FrequencyCorpus:
    """
    Immutable ranked frequency table.

    Ranks follow load order starting at 0. The "common" set is exactly the
    first `top_n` entries.

    Attributes:
        top_n: Size of the common prefix.

    Example:
        >>> corpus = FrequencyCorpus.load(["the 100", "cat 50", "sat 20"], top_n=2)
        >>> corpus.is_common("The")
        True
        >>> corpus.is_common("sat")
        False
        >>> corpus.frequency_of("sat")
        20
    """

    __slots__ = ("_entries", "_index", "top_n")

    def __init__(self, entries: Iterable[FrequencyEntry], top_n: int = DEFAULT_TOP_N):
        if top_n < 0:
            raise ConfigurationError(f"top_n must be >= 0, got {top_n}")
        self.top_n = top_n
        self._entries: tuple[FrequencyEntry, ...] = tuple(entries)
        self._index: dict[str, FrequencyEntry] = {}
        previous_rank = -1
        for entry in self._entries:
            if entry.rank <= previous_rank:
                raise CorpusLoadError(
                    f"ranks must increase monotonically: {entry.rank} after {previous_rank}"
                )
            previous_rank = entry.rank
            self._index.setdefault(entry.word, entry)

    @classmethod
    def load(
        cls,
        source: str | Path | Iterable[str],
        top_n: int = DEFAULT_TOP_N,
    ) -> FrequencyCorpus:
        """
        Load a corpus from a path or a stream of lines.

        Args:
            source: File path, open text file, or any iterable of lines.
            top_n: Number of leading entries treated as common.

        Returns:
            Loaded FrequencyCorpus.

        Raises:
            CorpusLoadError: If the source cannot be read or a line is malformed.
        """
        if isinstance(source, (str, Path)):
            path = Path(source)
            try:
                with open(path, encoding="utf-8") as f:
                    corpus = cls(_parse_lines(f), top_n=top_n)
            except OSError as e:
                raise CorpusLoadError(f"Cannot read corpus {path}: {e}") from e
            logger.info("Loaded %d corpus entries from %s (top_n=%d)", len(corpus), path, top_n)
            return corpus

        try:
            corpus = cls(_parse_lines(source), top_n=top_n)
        except (OSError, UnicodeDecodeError) as e:
            raise CorpusLoadError(f"Cannot read corpus stream: {e}") from e
        logger.info("Loaded %d corpus entries (top_n=%d)", len(corpus), top_n)
        return corpus

    def entry(self, word: str) -> FrequencyEntry | None:
        """Get the entry for a word (case-insensitive), or None."""
        return self._index.get(word.strip().lower())

    def rank_of(self, word: str) -> int | None:
        entry = self.entry(word)
        return entry.rank if entry else None

    def frequency_of(self, word: str) -> int | None:
        """
        Get a word's raw frequency from the full table.

        Not limited to the top N, so suggestions outside the common set can
        still be ranked.
        """
        entry = self.entry(word)
        return entry.frequency if entry else None

    def is_common(self, word: str) -> bool:
        """True iff the word's rank is within top_n (case-insensitive)."""
        entry = self.entry(word)
        return entry is not None and entry.rank < self.top_n

    def common_words(self) -> frozenset[str]:
        """The set of words in the common prefix."""
        return frozenset(e.word for e in self._entries[: self.top_n])

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.entry(word) is not None

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[FrequencyEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"FrequencyCorpus(entries={len(self)}, top_n={self.top_n})"


# =============================================================================
# PARSING
# =============================================================================


def _parse_lines(lines: Iterable[str]) -> Iterator[FrequencyEntry]:
    """Parse "<word> <frequency>" lines, skipping blanks and duplicate words."""
    seen: set[str] = set()
    rank = 0
    for line_no, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped:
            continue

        parts = stripped.split()
        if len(parts) < 2:
            raise CorpusLoadError(f"Line {line_no}: expected '<word> <frequency>', got {line!r}")

        word = parts[0].strip().lower()
        try:
            frequency = int(parts[1])
        except ValueError as e:
            raise CorpusLoadError(f"Line {line_no}: invalid frequency {parts[1]!r}") from e

        # Keep the best (first) rank for a repeated word
        if word in seen:
            logger.debug("Skipping duplicate corpus word '%s' on line %d", word, line_no)
            continue
        seen.add(word)

        yield FrequencyEntry(word=word, rank=rank, frequency=frequency)
        rank += 1
