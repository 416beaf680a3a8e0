"""
Display-space hit testing for recognized words.

The captured image is shown on a display surface that need not share its
aspect ratio, so the two axes scale independently:

    scale_x = display_width / image_width
    scale_y = display_height / image_height

Only strange words with bounds are tappable. Words are tested in pipeline
order and the first containing box wins; boxes have no z-order, so
overlapping boxes resolve to the earlier word.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from strana.models import BoundingBox, Word

logger = logging.getLogger(__name__)

Point = tuple[float, float]
Size = tuple[float, float]


@dataclass(frozen=True)
class DisplayBox:
    """A word's box in display coordinates."""

    word: Word
    left: float
    top: float
    right: float
    bottom: float

    def contains(self, x: float, y: float) -> bool:
        """Closed-rectangle containment."""
        return self.left <= x <= self.right and self.top <= y <= self.bottom


@dataclass(frozen=True)
class GeometryTransform:
    """
    Maps between image space and display space.

    Example:
        >>> t = GeometryTransform(display_size=(400, 300), image_size=(800, 600))
        >>> t.to_display(BoundingBox(100, 100, 200, 150))
        (50.0, 50.0, 100.0, 75.0)
        >>> t.to_image((50, 50))
        (100.0, 100.0)
    """

    display_size: Size
    image_size: Size

    def __post_init__(self) -> None:
        image_width, image_height = self.image_size
        if image_width <= 0 or image_height <= 0:
            raise ValueError(f"image size must be positive, got {self.image_size}")
        display_width, display_height = self.display_size
        if display_width <= 0 or display_height <= 0:
            raise ValueError(f"display size must be positive, got {self.display_size}")

    @property
    def scale_x(self) -> float:
        return self.display_size[0] / self.image_size[0]

    @property
    def scale_y(self) -> float:
        return self.display_size[1] / self.image_size[1]

    def to_display(self, box: BoundingBox) -> tuple[float, float, float, float]:
        return box.scaled(self.scale_x, self.scale_y)

    def to_image(self, point: Point) -> Point:
        x, y = point
        return (x / self.scale_x, y / self.scale_y)


def tappable_boxes(words: Iterable[Word], transform: GeometryTransform) -> Iterator[DisplayBox]:
    """
    Yield display-space boxes of strange words with bounds, in word order.

    These are the boxes an overlay highlights and the only ones a tap can hit.
    """
    for word in words:
        if not word.is_strange or word.bounds is None:
            continue
        left, top, right, bottom = transform.to_display(word.bounds)
        yield DisplayBox(word=word, left=left, top=top, right=right, bottom=bottom)


def _has_area(size: Size | None) -> bool:
    return size is not None and size[0] > 0 and size[1] > 0


def highlight_boxes(
    display_size: Size,
    image_size: Size | None,
    words: Iterable[Word],
) -> list[DisplayBox]:
    """
    Display-space boxes for all strange words with bounds.

    Empty while the display or the image has no area (e.g. before layout).
    """
    if not (_has_area(display_size) and _has_area(image_size)):
        return []
    return list(tappable_boxes(words, GeometryTransform(display_size, image_size)))


def resolve_tap(
    tap_point: Point,
    display_size: Size,
    image_size: Size | None,
    words: Iterable[Word],
) -> Word | None:
    """
    Resolve a tap on the display to the first strange word under it.

    Args:
        tap_point: (x, y) in display coordinates.
        display_size: (width, height) of the display surface.
        image_size: (width, height) of the source image.
        words: Words in pipeline order.

    Returns:
        The first strange word whose display box contains the tap, or None
        (also None while the display or image has no area).
    """
    if not (_has_area(display_size) and _has_area(image_size)):
        logger.debug("Ignoring tap: display %s, image %s", display_size, image_size)
        return None
    transform = GeometryTransform(display_size, image_size)
    x, y = tap_point
    for box in tappable_boxes(words, transform):
        if box.contains(x, y):
            if box.word.corrected_text is not None:
                logger.debug(
                    "Selected word '%s' has spellchecked version '%s'",
                    box.word.original_text,
                    box.word.corrected_text,
                )
            return box.word
    return None
