"""
Reconcile OCR element boxes with tagger tokens.

The tagger re-tokenizes the full recognized text, so its tokens do not line
up 1:1 with OCR elements. They are joined by literal text: each OCR element
contributes `text -> box`, and a token looks its text up exactly.

Known limitation: when the same text appears more than once on a page, the
last OCR occurrence wins and every duplicate token resolves to that one box.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from strana.models import BoundingBox, RawOcrElement

logger = logging.getLogger(__name__)


class GeometryReconciler:
    """
    Builds the text-to-box map for one scan and resolves tokens against it.

    Example:
        >>> reconciler = GeometryReconciler()
        >>> bounds = reconciler.build_bounds_map(elements)
        >>> reconciler.lookup(bounds, "bank")
        BoundingBox(left=200, top=10, right=240, bottom=30)
    """

    def build_bounds_map(self, elements: Iterable[RawOcrElement]) -> dict[str, BoundingBox]:
        """
        Map element text to its box, in OCR-reported order.

        Args:
            elements: OCR elements in the order the engine reported them.

        Returns:
            Dict of text to box; duplicate text keeps the last box.
        """
        bounds_map: dict[str, BoundingBox] = {}
        overwritten = 0
        for element in elements:
            if not element.text.strip():
                continue
            if element.text in bounds_map:
                overwritten += 1
            logger.debug("Found element '%s' with bounds %s", element.text, element.box)
            bounds_map[element.text] = element.box

        if overwritten:
            logger.debug(
                "%d duplicate element(s) overwritten; %d distinct texts",
                overwritten,
                len(bounds_map),
            )
        return bounds_map

    def lookup(self, bounds_map: Mapping[str, BoundingBox], text: str) -> BoundingBox | None:
        """Exact-match lookup; text not seen verbatim resolves to None."""
        return bounds_map.get(text)


def build_bounds_map(elements: Iterable[RawOcrElement]) -> dict[str, BoundingBox]:
    """Convenience wrapper around GeometryReconciler.build_bounds_map."""
    return GeometryReconciler().build_bounds_map(elements)
