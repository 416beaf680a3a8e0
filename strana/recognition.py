"""
OCR collaborator: turn an image into full text plus per-word boxes.

The pipeline only depends on the Recognizer protocol. TesseractRecognizer is
the provided adapter, built on pytesseract's `image_to_data`, which reports
one row per detected word with its pixel box and block/line numbers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from PIL import Image

from strana.config import RecognitionConfig
from strana.exceptions import RecognitionFailure
from strana.models import BoundingBox, OcrResult, RawOcrElement

logger = logging.getLogger(__name__)

ImageSource = str | Path | Image.Image


@runtime_checkable
class Recognizer(Protocol):
    """Anything that recognizes text and element boxes in an image."""

    def recognize(self, image: ImageSource) -> OcrResult: ...


def is_tesseract_available() -> bool:
    """Check if Tesseract is installed and usable."""
    try:
        import pytesseract

        pytesseract.get_tesseract_version()
        return True
    except ImportError:
        logger.debug("pytesseract not installed")
        return False
    except pytesseract.TesseractNotFoundError:
        logger.debug("Tesseract binary not found")
        return False


def load_image(image: ImageSource) -> Image.Image:
    """
    Open an image path, or pass a PIL image through.

    Raises:
        RecognitionFailure: If the file cannot be opened as an image.
    """
    if isinstance(image, Image.Image):
        return image
    try:
        with Image.open(image) as img:
            img.load()
            return img.convert("RGB")
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise RecognitionFailure(f"Cannot open image {image}: {e}") from e


@dataclass
class TesseractRecognizer:
    """
    Recognizer backed by Tesseract.

    Attributes:
        config: Language, binary path, and page segmentation mode.

    Example:
        >>> recognizer = TesseractRecognizer()
        >>> result = recognizer.recognize("page.jpg")
        >>> result.elements[0]
        RawOcrElement(text='The', box=BoundingBox(left=12, top=8, right=44, bottom=30))
    """

    config: RecognitionConfig | None = None

    def __post_init__(self) -> None:
        if self.config is None:
            self.config = RecognitionConfig()

    def _tesseract_config(self) -> str:
        return f"--psm {self.config.psm}" if self.config.psm is not None else ""

    def recognize(self, image: ImageSource) -> OcrResult:
        """
        Recognize text in an image.

        Args:
            image: Image path or PIL image.

        Returns:
            OcrResult whose boxes are in source-image pixel coordinates.

        Raises:
            RecognitionFailure: If the image cannot be read or Tesseract fails.
        """
        import pytesseract

        if self.config.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.config.tesseract_cmd

        img = load_image(image)
        try:
            data = pytesseract.image_to_data(
                img,
                lang=self.config.language,
                config=self._tesseract_config(),
                output_type=pytesseract.Output.DICT,
            )
        except (
            pytesseract.TesseractError,
            pytesseract.TesseractNotFoundError,
            OSError,
            RuntimeError,  # raised by pytesseract on timeout
        ) as e:
            logger.warning("Tesseract recognition failed: %s", e)
            raise RecognitionFailure(f"Tesseract recognition failed: {e}") from e

        result = ocr_result_from_data(data, image_size=img.size)
        logger.debug(
            "Recognized %d elements in %dx%d image",
            len(result.elements),
            img.size[0],
            img.size[1],
        )
        return result


def ocr_result_from_data(
    data: dict[str, list[Any]],
    image_size: tuple[int, int] | None = None,
) -> OcrResult:
    """
    Build an OcrResult from pytesseract `image_to_data` output.

    Words on the same line are joined by spaces, lines by newlines, and
    blocks by blank lines, giving the full text the tagger sees.
    """
    elements = []
    lines: list[list[str]] = []
    line_keys: list[tuple[int, int, int]] = []

    for i, raw_text in enumerate(data["text"]):
        text = str(raw_text).strip()
        if not text:
            continue

        left, top = int(data["left"][i]), int(data["top"][i])
        width, height = int(data["width"][i]), int(data["height"][i])
        elements.append(
            RawOcrElement(text=text, box=BoundingBox(left, top, left + width, top + height))
        )

        key = (int(data["block_num"][i]), int(data["par_num"][i]), int(data["line_num"][i]))
        if not line_keys or line_keys[-1] != key:
            line_keys.append(key)
            lines.append([])
        lines[-1].append(text)

    parts = []
    for idx, words in enumerate(lines):
        if idx > 0:
            parts.append("\n\n" if line_keys[idx][0] != line_keys[idx - 1][0] else "\n")
        parts.append(" ".join(words))

    return OcrResult(full_text="".join(parts), elements=tuple(elements), image_size=image_size)
