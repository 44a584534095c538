from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ScoringWeights:
    """Weights of the composite slop score."""

    word: float = 0.60
    contrast: float = 0.25
    trigram: float = 0.15


@dataclass(slots=True)
class TaggerSettings:
    """Configuration block for the part-of-speech tagger."""

    enabled: bool = True
    backend: str = "nltk"
    lang: str = "eng"


@dataclass(slots=True)
class SlopScoreConfig:
    """Configuration options for document analysis."""

    slop_words_path: str | None = "data/slop_list.json"
    slop_bigrams_path: str | None = "data/slop_list_bigrams.json"
    slop_trigrams_path: str | None = "data/slop_list_trigrams.json"
    human_profile_path: str | None = "data/human_writing_profile.json"
    top_k_ngrams: int = 40
    top_k_words: int = 50
    max_repeated_phrases: int = 100
    use_wordfreq: bool = True
    wordfreq_lang: str = "en"
    strict_resources: bool = False
    track_hits: bool = True
    workers: int = 1
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    tagger: TaggerSettings = field(default_factory=TaggerSettings)

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


_NESTED_BLOCKS: dict[str, type[Any]] = {
    "weights": ScoringWeights,
    "tagger": TaggerSettings,
}


def _known_fields(data: Mapping[str, Any], target: type[Any]) -> dict[str, Any]:
    names = {item.name for item in fields(target)}
    ignored = sorted(str(key) for key in data if key not in names)
    if ignored:
        LOGGER.debug("Ignoring unknown %s keys: %s", target.__name__, ", ".join(ignored))
    return {key: value for key, value in data.items() if key in names}


def _coerce_block(name: str, value: Any) -> Any:
    block_type = _NESTED_BLOCKS[name]
    if value is None:
        return block_type()
    if isinstance(value, block_type):
        return value
    if isinstance(value, Mapping):
        return block_type(**_known_fields(value, block_type))
    raise ValueError(
        f"'{name}' configuration must be a mapping, got {type(value).__name__}."
    )


def config_from_dict(data: Mapping[str, Any] | None) -> SlopScoreConfig:
    """Build a SlopScoreConfig from a dictionary-like input; unknown keys are ignored."""
    if not data:
        return SlopScoreConfig()
    options = _known_fields(data, SlopScoreConfig)
    for name in _NESTED_BLOCKS.keys() & options.keys():
        options[name] = _coerce_block(name, options[name])
    return SlopScoreConfig(**options)


def config_from_yaml(path: str | Path) -> SlopScoreConfig:
    """Load configuration from a YAML file. An empty file yields the defaults."""
    with Path(path).open(encoding="utf-8") as handle:
        parsed = yaml.safe_load(handle)
    if parsed is None:
        parsed = {}
    if not isinstance(parsed, Mapping):
        raise ValueError(
            f"Configuration YAML must define a mapping: {path} holds a "
            f"{type(parsed).__name__}."
        )
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> SlopScoreConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    return SlopScoreConfig() if path is None else config_from_yaml(path)
