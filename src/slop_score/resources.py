from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

LOGGER = logging.getLogger(__name__)

PHRASE_RE = re.compile(r"[a-z]+(?:'[a-z]+)?(?:\s+[a-z]+(?:'[a-z]+)?)*")
NGRAM_WORD_RE = re.compile(r"[a-z]+")

PROFILE_ROOT_KEYS = ("human-authored", "human")
PROFILE_LIST_KEYS = {
    2: ("top_bigrams", "bigrams"),
    3: ("top_trigrams", "trigrams"),
}


class ResourceUnavailable(RuntimeError):
    """Raised when a slop list, baseline profile or capability cannot be loaded."""

    def __init__(self, resource: str, reason: str) -> None:
        super().__init__(f"{resource}: {reason}")
        self.resource = resource
        self.reason = reason


class MalformedResourceEntry(ValueError):
    """Raised for a single unusable record inside an otherwise valid resource."""


def load_slop_list(path: str | Path) -> frozenset[str]:
    """
    Load a slop phrase list into a lowercase phrase set.

    The file is a JSON array of arrays whose first element is the phrase, e.g.
    ``[["tapestry", 812], ["a testament to", 90]]``. Malformed entries are
    logged and skipped.
    """
    path = Path(path)
    data = _read_json(path)
    if not isinstance(data, list):
        raise ResourceUnavailable(str(path), "expected a JSON array")

    phrases: set[str] = set()
    skipped = 0
    for idx, item in enumerate(data):
        try:
            phrases.add(parse_slop_entry(item))
        except MalformedResourceEntry as exc:
            skipped += 1
            LOGGER.warning("Skipping slop entry %d in %s: %s", idx, path, exc)
    LOGGER.info("Loaded %d phrases from %s (%d skipped)", len(phrases), path, skipped)
    return frozenset(phrases)


def parse_slop_entry(item: Any) -> str:
    """Return the normalized phrase held by one slop list entry."""
    if not isinstance(item, (list, tuple)) or not item:
        raise MalformedResourceEntry(f"expected a non-empty array, got {item!r}")
    match = PHRASE_RE.search(str(item[0]).lower())
    if match is None:
        raise MalformedResourceEntry(f"no phrase in {item[0]!r}")
    return " ".join(match.group().split())


def load_human_profile(path: str | Path) -> Dict[int, Mapping[str, float]]:
    """
    Load the human baseline n-gram profile as ``{2: bigrams, 3: trigrams}``.

    Frequencies are normalized to proportions summing to 1 over each list.
    A list that is missing from the profile yields an empty mapping.
    """
    path = Path(path)
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ResourceUnavailable(str(path), "expected a JSON object")

    profile: Any = data
    for key in PROFILE_ROOT_KEYS:
        if isinstance(data.get(key), dict):
            profile = data[key]
            break

    baselines: Dict[int, Mapping[str, float]] = {}
    for order, keys in PROFILE_LIST_KEYS.items():
        items = next((profile[k] for k in keys if isinstance(profile.get(k), list)), [])
        baselines[order] = _normalize_profile_list(items, path, order)
    return baselines


def parse_profile_entry(item: Any) -> Tuple[str, float]:
    """Return ``(ngram, raw_frequency)`` for one ``{ngram, frequency}`` record."""
    if not isinstance(item, dict):
        raise MalformedResourceEntry(f"expected an object, got {item!r}")
    words = NGRAM_WORD_RE.findall(str(item.get("ngram") or "").lower())
    if len(words) < 2:
        raise MalformedResourceEntry(f"n-gram too short: {item.get('ngram')!r}")
    try:
        frequency = float(item.get("frequency"))
    except (TypeError, ValueError) as exc:
        raise MalformedResourceEntry(
            f"bad frequency {item.get('frequency')!r}"
        ) from exc
    if not frequency > 0:
        raise MalformedResourceEntry(f"non-positive frequency {frequency!r}")
    return " ".join(words), frequency


def _normalize_profile_list(
    items: list[Any], path: Path, order: int
) -> Mapping[str, float]:
    counts: Dict[str, float] = {}
    for idx, item in enumerate(items):
        try:
            ngram, frequency = parse_profile_entry(item)
        except MalformedResourceEntry as exc:
            LOGGER.warning(
                "Skipping %d-gram entry %d in %s: %s", order, idx, path, exc
            )
            continue
        counts[ngram] = counts.get(ngram, 0.0) + frequency

    total = sum(counts.values())
    if total <= 0:
        return MappingProxyType({})
    return MappingProxyType({ngram: value / total for ngram, value in counts.items()})


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise ResourceUnavailable(str(path), "file not found")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ResourceUnavailable(str(path), f"invalid JSON ({exc})") from exc
    except OSError as exc:
        raise ResourceUnavailable(str(path), f"unreadable ({exc})") from exc
