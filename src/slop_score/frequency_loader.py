from __future__ import annotations

import importlib
from abc import ABC, abstractmethod
from math import log10
from types import MappingProxyType
from typing import Any, Mapping, cast

from .resources import ResourceUnavailable

# zipf 0 corresponds to one occurrence per billion words.
MIN_WORD_FREQUENCY = 1e-9

wordfreq: Any | None = None


class FrequencyLookup(ABC):
    """Read-only word frequency service."""

    @abstractmethod
    def frequency(self, word: str) -> float | None:
        """Return the word's proportion of running text, or None when absent."""
        raise NotImplementedError

    @abstractmethod
    def zipf(self, word: str) -> float | None:
        """Return the word's zipf-scale frequency, or None when absent."""
        raise NotImplementedError


class WordfreqLookup(FrequencyLookup):
    """Frequency lookup backed by the ``wordfreq`` package."""

    def __init__(self, lang: str = "en") -> None:
        self._module = _ensure_wordfreq()
        self.lang = lang

    def frequency(self, word: str) -> float | None:
        value = float(self._module.word_frequency(word, self.lang))
        return value if value > 0 else None

    def zipf(self, word: str) -> float | None:
        value = float(self._module.zipf_frequency(word, self.lang))
        return value if value > 0 else None


class MappingFrequencyLookup(FrequencyLookup):
    """Frequency lookup over an in-memory ``word -> proportion`` mapping."""

    def __init__(self, frequencies: Mapping[str, float]) -> None:
        self._frequencies = MappingProxyType(dict(frequencies))

    def frequency(self, word: str) -> float | None:
        value = self._frequencies.get(word)
        return value if value else None

    def zipf(self, word: str) -> float | None:
        value = self.frequency(word)
        if value is None:
            return None
        # Same scale as wordfreq: log10 of occurrences per billion words.
        zipf = log10(value * 1e9)
        return zipf if zipf > 0 else None


def _ensure_wordfreq() -> Any:
    global wordfreq
    if wordfreq is not None:
        return wordfreq
    try:  # pragma: no cover - import guard
        module = cast(Any, importlib.import_module("wordfreq"))
    except Exception as exc:  # pragma: no cover - import guard
        raise ResourceUnavailable(
            "wordfreq", "the wordfreq package is not installed"
        ) from exc
    wordfreq = module
    return wordfreq
