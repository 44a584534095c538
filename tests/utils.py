from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Sequence

from slop_score.config import SlopScoreConfig, TaggerSettings
from slop_score.context import AnalysisContext, build_context
from slop_score.tagging import CallableTagger, PosTagger

SLOP_WORDS = ["tapestry", "delve", "testament"]
SLOP_BIGRAMS = ["a testament"]
SLOP_TRIGRAMS = ["a testament to"]
HUMAN_BIGRAMS = {"quiet river": 4, "old mill": 1}
HUMAN_TRIGRAMS = {"river ran quietly": 1}

# Penn tags for a handful of closed-class words; everything else is guessed.
_FAKE_TAGS = {
    "not": "RB",
    "n't": "RB",
    "never": "RB",
    "but": "CC",
    "and": "CC",
    "it": "PRP",
    "he": "PRP",
    "she": "PRP",
    "they": "PRP",
    "i": "PRP",
    "'s": "VBZ",
    "is": "VBZ",
    "was": "VBD",
    "does": "VBZ",
    "did": "VBD",
    "a": "DT",
    "the": "DT",
    "about": "IN",
    "of": "IN",
}


def write_slop_list(path: Path, phrases: Iterable[str]) -> Path:
    """Write a slop list in the ``[[phrase, count], ...]`` layout."""
    path.write_text(json.dumps([[phrase, 1] for phrase in phrases]), encoding="utf-8")
    return path


def write_human_profile(
    path: Path,
    bigrams: Mapping[str, float],
    trigrams: Mapping[str, float],
    root_key: str | None = "human-authored",
) -> Path:
    """Write a human baseline profile with ``{ngram, frequency}`` lists."""
    body: Dict[str, Any] = {
        "top_bigrams": [{"ngram": k, "frequency": v} for k, v in bigrams.items()],
        "top_trigrams": [{"ngram": k, "frequency": v} for k, v in trigrams.items()],
    }
    payload = {root_key: body} if root_key else body
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def write_resources(directory: Path) -> Dict[str, str]:
    """Write the sample resources and return the matching config paths."""
    directory.mkdir(parents=True, exist_ok=True)
    return {
        "slop_words_path": str(write_slop_list(directory / "slop_list.json", SLOP_WORDS)),
        "slop_bigrams_path": str(
            write_slop_list(directory / "slop_list_bigrams.json", SLOP_BIGRAMS)
        ),
        "slop_trigrams_path": str(
            write_slop_list(directory / "slop_list_trigrams.json", SLOP_TRIGRAMS)
        ),
        "human_profile_path": str(
            write_human_profile(
                directory / "human_writing_profile.json", HUMAN_BIGRAMS, HUMAN_TRIGRAMS
            )
        ),
    }


def make_config(tmp_path: Path, **overrides: Any) -> SlopScoreConfig:
    paths = write_resources(tmp_path / "resources")
    config = SlopScoreConfig(
        **paths,
        use_wordfreq=False,
        tagger=TaggerSettings(enabled=False),
    )
    for key, value in overrides.items():
        setattr(config, key, value)
    return config


def make_context(
    tmp_path: Path, tagger: PosTagger | None = None, **overrides: Any
) -> AnalysisContext:
    return build_context(make_config(tmp_path, **overrides), tagger=tagger, lookup=None)


def fake_tag(tokens: Sequence[str]) -> list[str]:
    """Deterministic stand-in for a real part-of-speech tagger."""
    tags: list[str] = []
    for token in tokens:
        lower = token.lower()
        if lower in _FAKE_TAGS:
            tags.append(_FAKE_TAGS[lower])
        elif lower in {".", "!", "?"}:
            tags.append(".")
        elif not lower.isalnum():
            tags.append(",")
        elif lower.endswith("ing"):
            tags.append("VBG")
        elif lower.endswith("ed"):
            tags.append("VBD")
        else:
            tags.append("NN")
    return tags


def fake_tagger() -> CallableTagger:
    return CallableTagger(fake_tag)
