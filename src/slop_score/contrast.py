from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .merging import merge_matches
from .models import Match, MergedMatch, SentenceSpan
from .patterns import SURFACE_PATTERNS, TAGGED_PATTERNS, ContrastPattern
from .tagging import PosTagger, TaggedStream, TaggerUnavailable, build_tagged_stream

LOGGER = logging.getLogger(__name__)

STAGE2_APPLIED = "applied"
STAGE2_ABSENT = "absent"
STAGE2_FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ContrastDetection:
    """Merged contrast records and how the tagged stage went."""

    matches: Tuple[MergedMatch, ...]
    stage1_count: int
    stage2_count: int
    stage2_status: str
    hit_count: int


def match_surface(
    text: str, patterns: Sequence[ContrastPattern] = SURFACE_PATTERNS
) -> List[Match]:
    """Run every surface pattern over normalized text."""
    hits: List[Match] = []
    for pattern in patterns:
        for found in pattern.regex.finditer(text):
            hits.append(Match(pattern.pattern_id, 1, found.start(), found.end()))
    return hits


def match_tagged(
    tagged: TaggedStream, patterns: Sequence[ContrastPattern] = TAGGED_PATTERNS
) -> List[Match]:
    """Run every tagged pattern over the rendered stream, reporting raw offsets."""
    hits: List[Match] = []
    for pattern in patterns:
        for found in pattern.regex.finditer(tagged.stream):
            start, end = tagged.mapper.raw_span(found.start(), found.end())
            hits.append(Match(pattern.pattern_id, 2, start, end))
    return hits


def detect_contrasts(
    text: str,
    sentences: Sequence[SentenceSpan],
    tagger: PosTagger | None = None,
    *,
    doc_id: str = "",
) -> ContrastDetection:
    """
    Run both stages and merge their hits into sentence-level records.

    A tagged hit can join neighbouring surface groups into one record, so the
    reported ``hit_count`` is never below the surface-only record count.
    """
    surface = match_surface(text)
    tagged_hits: List[Match] = []
    if tagger is None:
        status = STAGE2_ABSENT
    else:
        try:
            tagged_hits = match_tagged(build_tagged_stream(text, tagger))
            status = STAGE2_APPLIED
        except TaggerUnavailable as exc:
            LOGGER.warning("Skipping tagged contrast patterns for %r: %s", doc_id, exc)
            status = STAGE2_FAILED

    merged = merge_matches([*surface, *tagged_hits], sentences, text)
    hit_count = len(merged)
    if tagged_hits:
        hit_count = max(hit_count, len(merge_matches(surface, sentences, text)))
    LOGGER.debug(
        "Contrast detection for %r: %d surface hits, %d tagged hits, %d merged.",
        doc_id,
        len(surface),
        len(tagged_hits),
        len(merged),
    )
    return ContrastDetection(
        merged, len(surface), len(tagged_hits), status, hit_count=hit_count
    )
