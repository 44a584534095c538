from __future__ import annotations

from collections import Counter
from typing import AbstractSet, Sequence, Tuple

from .models import SlopHit, SlopIndexResult


def compute_slop_index(
    tokens: Sequence[str],
    slop_words: AbstractSet[str],
    slop_trigrams: AbstractSet[str],
    slop_bigrams: AbstractSet[str] = frozenset(),
    track_hits: bool = True,
) -> SlopIndexResult:
    """
    Count exact hits against the flagged word, bigram and trigram sets.

    Scores are hits per 1000 tokens; every token counts toward the
    denominator. Bigram hits are reported but not used by the composite score.
    """
    total = len(tokens)
    if not total:
        return SlopIndexResult(word_score=0.0, trigram_score=0.0, bigram_score=0.0)

    word_hits: Counter[str] = Counter()
    if slop_words:
        word_hits.update(token for token in tokens if token in slop_words)

    bigram_hits = _ngram_hits(tokens, 2, slop_bigrams)
    trigram_hits = _ngram_hits(tokens, 3, slop_trigrams)

    return SlopIndexResult(
        word_score=_per_thousand(sum(word_hits.values()), total),
        trigram_score=_per_thousand(sum(trigram_hits.values()), total),
        bigram_score=_per_thousand(sum(bigram_hits.values()), total),
        word_hits=_sorted_hits(word_hits) if track_hits else (),
        bigram_hits=_sorted_hits(bigram_hits) if track_hits else (),
        trigram_hits=_sorted_hits(trigram_hits) if track_hits else (),
    )


def _ngram_hits(tokens: Sequence[str], n: int, phrases: AbstractSet[str]) -> Counter[str]:
    hits: Counter[str] = Counter()
    if not phrases or len(tokens) < n:
        return hits
    for idx in range(len(tokens) - n + 1):
        candidate = " ".join(tokens[idx : idx + n])
        if candidate in phrases:
            hits[candidate] += 1
    return hits


def _per_thousand(count: int, total: int) -> float:
    return count * 1000.0 / total


def _sorted_hits(hits: Counter[str]) -> Tuple[SlopHit, ...]:
    # sorted() is stable, so equal counts keep first-seen order.
    ordered = sorted(hits.items(), key=lambda item: item[1], reverse=True)
    return tuple(SlopHit(phrase=phrase, count=count) for phrase, count in ordered)
