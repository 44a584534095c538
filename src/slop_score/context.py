from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Callable, List, Mapping, Tuple, TypeVar

from .config import SlopScoreConfig
from .frequency_loader import FrequencyLookup, WordfreqLookup
from .resources import ResourceUnavailable, load_human_profile, load_slop_list
from .tagging import PosTagger, TaggerUnavailable, create_tagger

LOGGER = logging.getLogger(__name__)

_EMPTY_BASELINE: Mapping[str, float] = MappingProxyType({})
_UNSET = object()

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class AnalysisContext:
    """
    Read-only resources shared by every analysis call.

    Built once per process and passed by reference, so concurrent analyses
    never observe partially loaded data. ``degraded`` names every resource
    that failed to load and was replaced by an empty stand-in.
    """

    config: SlopScoreConfig
    slop_words: frozenset[str] = frozenset()
    slop_bigrams: frozenset[str] = frozenset()
    slop_trigrams: frozenset[str] = frozenset()
    bigram_baseline: Mapping[str, float] = field(default_factory=lambda: _EMPTY_BASELINE)
    trigram_baseline: Mapping[str, float] = field(default_factory=lambda: _EMPTY_BASELINE)
    lookup: FrequencyLookup | None = None
    tagger: PosTagger | None = None
    degraded: Tuple[str, ...] = ()


def build_context(
    config: SlopScoreConfig | None = None,
    *,
    tagger: PosTagger | None | object = _UNSET,
    lookup: FrequencyLookup | None | object = _UNSET,
) -> AnalysisContext:
    """
    Load every resource named by the configuration.

    ``tagger`` and ``lookup`` may be injected to bypass the configured
    backends; passing ``None`` disables them. Missing resources degrade to
    empty ones unless ``strict_resources`` is set, in which case the
    ResourceUnavailable error propagates.
    """
    config = config or SlopScoreConfig()
    degraded: List[str] = []

    def guarded(name: str, loader: Callable[[], T], fallback: T) -> T:
        try:
            return loader()
        except ResourceUnavailable as exc:
            if config.strict_resources:
                raise
            LOGGER.warning("Resource %s unavailable, continuing without it: %s", name, exc)
            degraded.append(name)
            return fallback

    slop_words = guarded(
        "slop_words", lambda: _load_list(config.slop_words_path, "slop_words"), frozenset()
    )
    slop_bigrams = guarded(
        "slop_bigrams",
        lambda: _load_list(config.slop_bigrams_path, "slop_bigrams"),
        frozenset(),
    )
    slop_trigrams = guarded(
        "slop_trigrams",
        lambda: _load_list(config.slop_trigrams_path, "slop_trigrams"),
        frozenset(),
    )
    profile = guarded(
        "human_profile",
        lambda: _load_profile(config.human_profile_path),
        {2: _EMPTY_BASELINE, 3: _EMPTY_BASELINE},
    )

    if lookup is _UNSET:
        resolved_lookup = (
            guarded("wordfreq", lambda: WordfreqLookup(config.wordfreq_lang), None)
            if config.use_wordfreq
            else None
        )
    else:
        resolved_lookup = lookup  # type: ignore[assignment]

    if tagger is _UNSET:
        resolved_tagger = guarded("tagger", lambda: _create_tagger(config), None)
    else:
        resolved_tagger = tagger  # type: ignore[assignment]

    context = AnalysisContext(
        config=config,
        slop_words=slop_words,
        slop_bigrams=slop_bigrams,
        slop_trigrams=slop_trigrams,
        bigram_baseline=profile[2],
        trigram_baseline=profile[3],
        lookup=resolved_lookup,
        tagger=resolved_tagger,
        degraded=tuple(degraded),
    )
    LOGGER.info(
        "Loaded %d slop words, %d bigrams, %d trigrams; baseline sizes %d/%d.",
        len(slop_words),
        len(slop_bigrams),
        len(slop_trigrams),
        len(context.bigram_baseline),
        len(context.trigram_baseline),
    )
    return context


def _load_list(path: str | None, name: str) -> frozenset[str]:
    if not path:
        raise ResourceUnavailable(name, "no path configured")
    return load_slop_list(Path(path))


def _load_profile(path: str | None) -> dict[int, Mapping[str, float]]:
    if not path:
        raise ResourceUnavailable("human_profile", "no path configured")
    return load_human_profile(Path(path))


def _create_tagger(config: SlopScoreConfig) -> PosTagger | None:
    try:
        return create_tagger(config.tagger)
    except TaggerUnavailable as exc:
        raise ResourceUnavailable("tagger", str(exc)) from exc
