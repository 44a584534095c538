from __future__ import annotations

from types import MappingProxyType

from .config import ScoringWeights
from .models import SlopScore


def contrast_rate(hit_count: int, char_count: int) -> float:
    """Merged contrast hits per 1000 characters (0 for empty text)."""
    if char_count <= 0:
        return 0.0
    return hit_count * 1000.0 / char_count


def compute_slop_score(
    word_score: float,
    contrast_score: float,
    trigram_score: float,
    weights: ScoringWeights | None = None,
) -> SlopScore:
    """
    Combine the three slop components with fixed weights.

    The components are used as-is; no normalization across documents or models
    is applied, so scores are comparable only under the same weights and
    resources.
    """
    weights = weights or ScoringWeights()
    components = {
        "slop_words_per_1k": word_score,
        "contrast_per_1k_chars": contrast_score,
        "slop_trigrams_per_1k": trigram_score,
    }
    weighted = {
        "slop_words_per_1k": word_score * weights.word,
        "contrast_per_1k_chars": contrast_score * weights.contrast,
        "slop_trigrams_per_1k": trigram_score * weights.trigram,
    }
    return SlopScore(
        score=sum(weighted.values()),
        components=MappingProxyType(components),
        weighted_components=MappingProxyType(weighted),
    )
