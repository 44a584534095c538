from __future__ import annotations

from collections import Counter
from typing import Iterable, Mapping

# One-to-one replacements only, so offsets in normalized text match the input.
_CHAR_MAP = str.maketrans(
    {
        "‘": "'",
        "’": "'",
        "ʼ": "'",
        "“": '"',
        "”": '"',
    }
)

KNOWN_CONTRACTIONS_S = frozenset(
    {
        "it's",
        "that's",
        "what's",
        "who's",
        "he's",
        "she's",
        "there's",
        "here's",
        "where's",
        "when's",
        "why's",
        "how's",
        "let's",
    }
)


def normalize_text(value: object) -> str:
    """Normalize curly quotes and apostrophes without changing text length."""
    if not isinstance(value, str):
        return ""
    return value.translate(_CHAR_MAP)


def is_mostly_numeric(word: str) -> bool:
    """True when more than 20% of the characters are digits."""
    if not word:
        return False
    digits = sum(ch.isdigit() for ch in word)
    return digits / len(word) > 0.2


def merge_possessives(word_counts: Mapping[str, int]) -> Counter[str]:
    """Fold ``x's`` into ``x`` unless the word is a known contraction."""
    merged: Counter[str] = Counter()
    for word, count in word_counts.items():
        if word.endswith("'s") and word not in KNOWN_CONTRACTIONS_S:
            base_word = word[:-2]
            if base_word:
                merged[base_word] += count
                continue
        merged[word] += count
    return merged


def frequency_words(words: Iterable[str]) -> Counter[str]:
    """Count words for frequency analyses: numeric filter, then possessive folding."""
    counts = Counter(word for word in words if not is_mostly_numeric(word))
    return merge_possessives(counts)
