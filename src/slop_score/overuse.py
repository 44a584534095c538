from __future__ import annotations

import re
from collections import Counter
from typing import List, Mapping, Sequence, Tuple

from .frequency_loader import MIN_WORD_FREQUENCY, FrequencyLookup
from .models import OveruseEntry, SlopHit, WordOveruse

# NLTK English stopwords.
STOPWORDS = frozenset(
    """
    i me my myself we our ours ourselves you your yours yourself yourselves he
    him his himself she her hers herself it its itself they them their theirs
    themselves what which who whom this that these those am is are was were be
    been being have has had having do does did doing a an the and but if or
    because as until while of at by for with about against between into through
    during before after above below to from up down in out on off over under
    again further then once here there when where why how all any both each few
    more most other some such no nor not only own same so than too very s t can
    will just don should now
    """.split()
)

CONTENT_TOKEN_RE = re.compile(r"[a-z]+(?:'[a-z]+)?")
SMOOTHING = 1e-12
EMPTY_BASELINE_FLOOR = 1e-12


def content_tokens(tokens: Sequence[str]) -> List[str]:
    """Keep purely alphabetic tokens that are not stopwords."""
    return [
        token
        for token in tokens
        if CONTENT_TOKEN_RE.fullmatch(token) and token not in STOPWORDS
    ]


def make_ngrams(tokens: Sequence[str], n: int) -> List[str]:
    """Return every contiguous n-gram as a space-joined string."""
    return [" ".join(tokens[idx : idx + n]) for idx in range(len(tokens) - n + 1)]


def rank_overuse(
    ngrams: Sequence[str], baseline: Mapping[str, float], top_k: int = 40
) -> Tuple[OveruseEntry, ...]:
    """
    Rank n-grams by observed proportion over baseline proportion.

    N-grams missing from the baseline are scored against the smallest positive
    baseline proportion, which bounds the ratio for novel phrases. Ties keep
    first-seen order.
    """
    if not ngrams:
        return ()
    counts = Counter(ngrams)
    total = sum(counts.values())
    floor = min((value for value in baseline.values() if value > 0), default=None)
    if floor is None:
        floor = EMPTY_BASELINE_FLOOR

    rows: List[OveruseEntry] = []
    for ngram, count in counts.items():
        observed = count / total
        expected = baseline.get(ngram) or floor
        rows.append(
            OveruseEntry(ngram=ngram, ratio=observed / (expected + SMOOTHING), count=count)
        )
    rows.sort(key=lambda row: row.ratio, reverse=True)
    return tuple(rows[: max(0, top_k)])


def rank_word_overuse(
    word_counts: Mapping[str, int],
    lookup: FrequencyLookup | None,
    top_n: int = 50,
    min_length: int = 4,
) -> Tuple[WordOveruse, ...]:
    """Rank words by document proportion over their general-English frequency."""
    if lookup is None:
        return ()
    eligible = _eligible_counts(word_counts, min_length)
    total = sum(eligible.values())
    if not total:
        return ()

    rows: List[WordOveruse] = []
    for word, count in eligible.items():
        expected = lookup.frequency(word) or MIN_WORD_FREQUENCY
        rows.append(
            WordOveruse(
                word=word,
                ratio=(count / total) / expected,
                count=count,
                zipf=lookup.zipf(word),
            )
        )
    rows.sort(key=lambda row: row.ratio, reverse=True)
    return tuple(rows[: max(0, top_n)])


def repetition_score(
    word_counts: Mapping[str, int],
    ranked: Sequence[WordOveruse],
    min_length: int = 4,
) -> float:
    """Share of eligible words taken by the top over-represented words, in percent."""
    total = sum(_eligible_counts(word_counts, min_length).values())
    if not total or not ranked:
        return 0.0
    return round(sum(row.count for row in ranked) / total * 100, 4)


def extract_repeated_phrases(
    text: str,
    ranked: Sequence[OveruseEntry],
    max_out: int = 100,
    max_ngrams: int = 300,
) -> Tuple[SlopHit, ...]:
    """Find the exact surface forms of the top over-used n-grams in the text."""
    if not text or not ranked:
        return ()
    phrases: Counter[str] = Counter()
    for entry in ranked[:max_ngrams]:
        words = entry.ngram.split()
        if not words:
            continue
        pattern = re.compile(
            r"\b" + r"\s+".join(re.escape(word) for word in words) + r"\b",
            re.IGNORECASE,
        )
        for match in pattern.finditer(text):
            phrases[match.group().strip()] += 1
    ordered = sorted(phrases.items(), key=lambda item: item[1], reverse=True)
    return tuple(SlopHit(phrase=phrase, count=count) for phrase, count in ordered[:max_out])


def _eligible_counts(word_counts: Mapping[str, int], min_length: int) -> Counter[str]:
    return Counter(
        {
            word: count
            for word, count in word_counts.items()
            if len(word) >= min_length or "'" in word
        }
    )
