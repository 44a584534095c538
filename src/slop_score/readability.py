from __future__ import annotations

import re
from typing import List, Sequence

import numpy as np

from .frequency_loader import FrequencyLookup
from .models import SentenceSpan, TextMetrics, Token
from .textutils import is_mostly_numeric

MATTR_WINDOW = 50
FK_GRADE_CAP = 14.0
COMPLEX_PERCENT_CAP = 20.0

_VOWEL_GROUP_RE = re.compile(r"[aeiouy]+")
_NON_ALPHA_RE = re.compile(r"[^a-z]")


def count_syllables(word: str) -> int:
    """Vowel-group syllable estimate with a silent trailing ``e``."""
    letters = _NON_ALPHA_RE.sub("", word.lower())
    if not letters:
        return 0
    count = len(_VOWEL_GROUP_RE.findall(letters))
    if letters.endswith("e") and not letters.endswith("le") and count > 1:
        count -= 1
    return max(count, 1)


def moving_average_ttr(words: Sequence[str], window: int = MATTR_WINDOW) -> float:
    """Mean type-token ratio over every window of ``window`` words."""
    if not words:
        return 0.0
    if len(words) <= window:
        return len(set(words)) / len(words)
    ratios = np.fromiter(
        (
            len(set(words[idx : idx + window])) / window
            for idx in range(len(words) - window + 1)
        ),
        dtype=float,
    )
    return float(ratios.mean())


def flesch_reading_ease(sentences: int, words: int, syllables: int) -> float:
    if sentences == 0 or words == 0:
        return 0.0
    return 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)


def flesch_kincaid_grade(sentences: int, words: int, syllables: int) -> float:
    if sentences == 0 or words == 0:
        return 0.0
    return 0.39 * (words / sentences) + 11.8 * (syllables / words) - 15.59


def complexity_index(fk_grade: float, percent_complex: float) -> float:
    """
    Complexity on a 0-100 scale.

    Averages the Flesch-Kincaid grade (capped at college level, 14) and the
    share of words with three or more syllables (capped at 20%), each scaled
    to 0-100.
    """
    fk_normalized = max(0.0, min(fk_grade, FK_GRADE_CAP)) / FK_GRADE_CAP * 100
    complex_normalized = min(percent_complex, COMPLEX_PERCENT_CAP) / COMPLEX_PERCENT_CAP * 100
    return round((fk_normalized + complex_normalized) / 2, 2)


def compute_text_metrics(
    text: str,
    tokens: Sequence[Token],
    sentences: Sequence[SentenceSpan],
    lookup: FrequencyLookup | None = None,
) -> TextMetrics:
    """Readability and lexical-diversity figures for one normalized document."""
    words = [token.text for token in tokens]
    word_count = len(words)
    sentence_count = sum(
        1 for span in sentences if text[span.start_char : span.end_char].strip()
    )
    if not word_count:
        return TextMetrics(
            word_count=0,
            char_count=len(text),
            sentence_count=sentence_count,
            mean_sentence_length=0.0,
            mean_word_length=0.0,
            type_token_ratio=0.0,
            mattr=0.0,
            flesch_reading_ease=0.0,
            flesch_kincaid_grade=0.0,
            complexity_index=0.0,
        )

    syllables = [count_syllables(word) for word in words]
    total_syllables = sum(syllables)
    polysyllabic = sum(1 for count in syllables if count >= 3)
    fk_grade = flesch_kincaid_grade(sentence_count, word_count, total_syllables)

    return TextMetrics(
        word_count=word_count,
        char_count=len(text),
        sentence_count=sentence_count,
        mean_sentence_length=word_count / sentence_count if sentence_count else 0.0,
        mean_word_length=float(np.mean([len(word) for word in words])),
        type_token_ratio=len(set(words)) / word_count,
        mattr=moving_average_ttr(words),
        flesch_reading_ease=flesch_reading_ease(sentence_count, word_count, total_syllables),
        flesch_kincaid_grade=fk_grade,
        complexity_index=complexity_index(fk_grade, polysyllabic / word_count * 100),
        mean_zipf=_mean_zipf(words, lookup),
    )


def _mean_zipf(words: Sequence[str], lookup: FrequencyLookup | None) -> float | None:
    if lookup is None:
        return None
    values: List[float] = []
    for word in words:
        if is_mostly_numeric(word):
            continue
        zipf = lookup.zipf(word)
        if zipf is not None:
            values.append(zipf)
    if not values:
        return None
    return float(np.mean(values))
