"""
Configuration for Strana word recognition.

Configs are plain dataclasses with sensible defaults. Create one only if you
need to customize behavior, or load one from YAML with StranaConfig.from_yaml.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from strana.exceptions import ConfigurationError

# Size of the "common" prefix of the frequency list
DEFAULT_TOP_N = 40_000


@dataclass
class SpellingConfig:
    """
    Configuration for the spelling dictionary.

    Either a bundled pyspellchecker language or a local dictionary file
    (pyspellchecker JSON word-frequency format) may be used.
    """

    language: str | None = "en"
    dictionary_path: Path | None = None  # overrides language when set
    distance: int = 2  # edit distance for suggestions

    def __post_init__(self):
        """Validate configuration."""
        if self.dictionary_path is not None:
            self.dictionary_path = Path(self.dictionary_path)
        if self.language is None and self.dictionary_path is None:
            raise ConfigurationError("either language or dictionary_path must be set")
        if self.distance < 1:
            raise ConfigurationError(f"distance must be >= 1, got {self.distance}")


@dataclass
class TaggerConfig:
    """Configuration for the spaCy grammatical tagger."""

    model: str = "en_core_web_sm"


@dataclass
class RecognitionConfig:
    """Configuration for the Tesseract OCR adapter."""

    language: str = "eng"
    tesseract_cmd: str | None = None  # path to the tesseract binary
    psm: int | None = None  # page segmentation mode

    def __post_init__(self):
        """Validate configuration."""
        if self.psm is not None and not 0 <= self.psm <= 13:
            raise ConfigurationError(f"psm must be between 0 and 13, got {self.psm}")


@dataclass
class StranaConfig:
    """
    Top-level configuration.

    Example:
        >>> config = StranaConfig(
        ...     corpus_path=Path("en_50k.txt"),
        ...     top_n=30_000,
        ... )
        >>> pipeline = create_pipeline(config)
    """

    # Frequency corpus
    corpus_path: Path | None = None
    top_n: int = DEFAULT_TOP_N

    # Word rules
    short_word_length: int = 3  # words this short are never strange
    short_token_length: int = 2  # tokens this short are filtered out

    spelling: SpellingConfig = field(default_factory=SpellingConfig)
    tagger: TaggerConfig = field(default_factory=TaggerConfig)
    recognition: RecognitionConfig = field(default_factory=RecognitionConfig)

    def __post_init__(self):
        """Validate configuration."""
        if self.corpus_path is not None:
            self.corpus_path = Path(self.corpus_path)
        if self.top_n < 0:
            raise ConfigurationError(f"top_n must be >= 0, got {self.top_n}")
        if self.short_word_length < 0:
            raise ConfigurationError(
                f"short_word_length must be >= 0, got {self.short_word_length}"
            )
        if self.short_token_length < 0:
            raise ConfigurationError(
                f"short_token_length must be >= 0, got {self.short_token_length}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StranaConfig:
        """
        Build a config from a nested dictionary.

        Raises:
            ConfigurationError: On unknown keys or invalid values.
        """
        sections = {
            "spelling": SpellingConfig,
            "tagger": TaggerConfig,
            "recognition": RecognitionConfig,
        }
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key in sections:
                if not isinstance(value, dict):
                    raise ConfigurationError(f"section {key!r} must be a mapping")
                kwargs[key] = _build_section(sections[key], value, key)
            else:
                kwargs[key] = value
        return _build_section(cls, kwargs, "root")

    @classmethod
    def from_yaml(cls, path: str | Path) -> StranaConfig:
        """
        Load a config from a YAML file.

        Raises:
            ConfigurationError: If the file is missing, malformed, or invalid.
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigurationError(f"Cannot read config {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config root in {path} must be a mapping")
        return cls.from_dict(data)


def _build_section(section_cls: type, values: dict[str, Any], name: str) -> Any:
    known = {f.name for f in fields(section_cls)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigurationError(f"Unknown keys in {name} config: {', '.join(unknown)}")
    try:
        return section_cls(**values)
    except TypeError as e:
        raise ConfigurationError(f"Invalid {name} config: {e}") from e
