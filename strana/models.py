"""
Data models for Strana.

These records flow through the word pipeline: raw OCR output comes in as
RawOcrElement/OcrResult, the tagger produces Tokens, and the pipeline emits
Word records. All of them are frozen; a correction produces a new Word.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class FrequencyEntry:
    """One row of the ranked frequency corpus."""

    word: str  # lowercase
    rank: int  # 0 = most frequent
    frequency: int


@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned rectangle in source-image pixel coordinates.

    Example:
        >>> box = BoundingBox(10, 20, 50, 40)
        >>> box.width, box.height
        (40, 20)
        >>> box.contains(10, 40)
        True
    """

    left: int
    top: int
    right: int
    bottom: int

    def __post_init__(self) -> None:
        if self.left > self.right:
            raise ValueError(f"left must be <= right, got {self.left} > {self.right}")
        if self.top > self.bottom:
            raise ValueError(f"top must be <= bottom, got {self.top} > {self.bottom}")

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def contains(self, x: float, y: float) -> bool:
        """Closed-rectangle containment (edges count as inside)."""
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def scaled(self, scale_x: float, scale_y: float) -> tuple[float, float, float, float]:
        """
        Scale each coordinate independently.

        Returns:
            Tuple of (left, top, right, bottom) as floats.
        """
        return (
            self.left * scale_x,
            self.top * scale_y,
            self.right * scale_x,
            self.bottom * scale_y,
        )

    def to_tuple(self) -> tuple[int, int, int, int]:
        return (self.left, self.top, self.right, self.bottom)


@dataclass(frozen=True)
class RawOcrElement:
    """One OCR-detected text fragment with its box."""

    text: str
    box: BoundingBox


@dataclass(frozen=True)
class OcrResult:
    """
    Output of the OCR collaborator for one image.

    Attributes:
        full_text: The complete recognized text, used for tagging.
        elements: Per-fragment text and boxes, in OCR-reported order.
        image_size: Optional (width, height) of the source image.
    """

    full_text: str
    elements: tuple[RawOcrElement, ...] = ()
    image_size: tuple[int, int] | None = None


@dataclass(frozen=True)
class Token:
    """A token from the grammatical tagger, with its Penn Treebank tag."""

    text: str
    tag: str


@dataclass(frozen=True)
class SpellCheckResult:
    """
    Result of checking one word.

    A correct word never carries suggestions.
    """

    word: str
    is_correct: bool
    suggestions: tuple[str, ...] = ()
    best_suggestion: str | None = None

    def __post_init__(self) -> None:
        if self.is_correct and (self.suggestions or self.best_suggestion is not None):
            raise ValueError("a correctly spelled word cannot carry suggestions")
        if self.best_suggestion is not None and self.best_suggestion not in self.suggestions:
            raise ValueError(f"best_suggestion {self.best_suggestion!r} is not among suggestions")


@dataclass(frozen=True)
class Word:
    """
    A classified, geometrically anchored word produced by one scan.

    Words are created at the end of a pipeline run and superseded entirely by
    the next scan. They are never edited in place.

    Example:
        >>> w = Word("ephemral", "ephemeral", "JJ", None, False, ("ephemeral",), True)
        >>> w.lookup_key
        'ephemeral'
    """

    original_text: str
    corrected_text: str | None
    tag: str
    bounds: BoundingBox | None
    is_spelled_correctly: bool
    suggestions: tuple[str, ...] = field(default=())
    is_strange: bool = False

    def __post_init__(self) -> None:
        if self.is_spelled_correctly and (self.suggestions or self.corrected_text is not None):
            raise ValueError(
                f"correctly spelled word {self.original_text!r} cannot carry a correction"
            )

    @property
    def lookup_key(self) -> str:
        """Key handed to the dictionary lookup and saved-word collaborators."""
        return self.corrected_text or self.original_text

    def with_correction(self, corrected_text: str | None) -> Word:
        """Return a copy carrying a different correction."""
        return replace(self, corrected_text=corrected_text)

    def with_strange(self, is_strange: bool) -> Word:
        """Return a copy with a user-assigned strange/ordinary label."""
        return replace(self, is_strange=is_strange)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "original_text": self.original_text,
            "corrected_text": self.corrected_text,
            "tag": self.tag,
            "bounds": list(self.bounds.to_tuple()) if self.bounds else None,
            "is_spelled_correctly": self.is_spelled_correctly,
            "suggestions": list(self.suggestions),
            "is_strange": self.is_strange,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Word:
        """Create from dictionary."""
        bounds = data.get("bounds")
        return cls(
            original_text=data["original_text"],
            corrected_text=data.get("corrected_text"),
            tag=data.get("tag", ""),
            bounds=BoundingBox(*bounds) if bounds else None,
            is_spelled_correctly=data.get("is_spelled_correctly", True),
            suggestions=tuple(data.get("suggestions", ())),
            is_strange=data.get("is_strange", False),
        )
