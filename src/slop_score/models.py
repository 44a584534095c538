from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Tuple

CATEGORIES = ("VERB", "NOUN", "ADJ", "ADV", "OTHER")


@dataclass(frozen=True, slots=True)
class Document:
    """Represents an input document."""

    doc_id: str
    text: str


@dataclass(frozen=True, slots=True)
class Token:
    """Represents a lowercased token and its inclusive-exclusive character offsets."""

    text: str
    start_char: int
    end_char: int


@dataclass(frozen=True, slots=True)
class SentenceSpan:
    """One sentence of the partition produced by split_sentences."""

    index: int
    start_char: int
    end_char: int


@dataclass(frozen=True, slots=True)
class TaggedToken:
    """A token from the tagging tokenization with its simplified category."""

    text: str
    category: str
    start_char: int
    end_char: int


@dataclass(frozen=True, slots=True)
class Match:
    """A single pattern hit in raw-text coordinates."""

    pattern_id: str
    stage: int
    start_char: int
    end_char: int


@dataclass(frozen=True, slots=True)
class MergedMatch:
    """Whole-sentence contrast detection reported to callers."""

    sentence_indices: Tuple[int, ...]
    start_char: int
    end_char: int
    source_pattern_ids: frozenset[str]
    matches: Tuple[Match, ...]
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "sentence": self.text,
            "start_char": self.start_char,
            "end_char": self.end_char,
            "sentence_indices": list(self.sentence_indices),
            "pattern_ids": sorted(self.source_pattern_ids),
            "stages": sorted({m.stage for m in self.matches}),
        }


@dataclass(frozen=True, slots=True)
class SlopHit:
    """Number of times a flagged phrase occurred."""

    phrase: str
    count: int


@dataclass(frozen=True, slots=True)
class SlopIndexResult:
    """Per-1000-token slop list scores for a document."""

    word_score: float
    trigram_score: float
    bigram_score: float = 0.0
    word_hits: Tuple[SlopHit, ...] = ()
    bigram_hits: Tuple[SlopHit, ...] = ()
    trigram_hits: Tuple[SlopHit, ...] = ()


@dataclass(frozen=True, slots=True)
class OveruseEntry:
    """An n-gram with its over-use ratio against the human baseline."""

    ngram: str
    ratio: float
    count: int


@dataclass(frozen=True, slots=True)
class WordOveruse:
    """A word with its over-use ratio against the zipf frequency lookup."""

    word: str
    ratio: float
    count: int
    zipf: float | None


@dataclass(frozen=True, slots=True)
class TextMetrics:
    """Readability and lexical diversity figures."""

    word_count: int
    char_count: int
    sentence_count: int
    mean_sentence_length: float
    mean_word_length: float
    type_token_ratio: float
    mattr: float
    flesch_reading_ease: float
    flesch_kincaid_grade: float
    complexity_index: float
    mean_zipf: float | None = None


@dataclass(frozen=True, slots=True)
class SlopScore:
    """Weighted combination of the three slop components."""

    score: float
    components: Mapping[str, float]
    weighted_components: Mapping[str, float]


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Everything computed for one document. Never mutated after construction."""

    doc_id: str
    slop_score: SlopScore
    slop_index: SlopIndexResult
    contrast_score: float
    contrast_matches: Tuple[MergedMatch, ...]
    contrast_hits: int
    top_bigrams: Tuple[OveruseEntry, ...]
    top_trigrams: Tuple[OveruseEntry, ...]
    over_represented_words: Tuple[WordOveruse, ...]
    repetition_score: float
    repeated_phrases: Tuple[SlopHit, ...]
    metrics: TextMetrics
    stage2_status: str
    degraded_resources: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable payload."""
        return {
            "doc_id": self.doc_id,
            "slop_score": self.slop_score.score,
            "components": dict(self.slop_score.components),
            "weighted_components": dict(self.slop_score.weighted_components),
            "repetition_score": self.repetition_score,
            "contrast": {
                "score_per_1k_chars": self.contrast_score,
                "hits": self.contrast_hits,
                "stage2": self.stage2_status,
                "matches": [m.to_dict() for m in self.contrast_matches],
            },
            "slop_hits": {
                "words": _hits_list(self.slop_index.word_hits),
                "bigrams": _hits_list(self.slop_index.bigram_hits),
                "trigrams": _hits_list(self.slop_index.trigram_hits),
            },
            "top_bigrams": _overuse_list(self.top_bigrams),
            "top_trigrams": _overuse_list(self.top_trigrams),
            "over_represented_words": [
                {"word": w.word, "ratio": w.ratio, "count": w.count, "zipf": w.zipf}
                for w in self.over_represented_words
            ],
            "repeated_phrases": _hits_list(self.repeated_phrases),
            "metrics": {
                "word_count": self.metrics.word_count,
                "char_count": self.metrics.char_count,
                "sentence_count": self.metrics.sentence_count,
                "mean_sentence_length": self.metrics.mean_sentence_length,
                "mean_word_length": self.metrics.mean_word_length,
                "type_token_ratio": self.metrics.type_token_ratio,
                "mattr": self.metrics.mattr,
                "flesch_reading_ease": self.metrics.flesch_reading_ease,
                "flesch_kincaid_grade": self.metrics.flesch_kincaid_grade,
                "complexity_index": self.metrics.complexity_index,
                "mean_zipf": self.metrics.mean_zipf,
            },
            "degraded_resources": list(self.degraded_resources),
        }


def _hits_list(hits: Tuple[SlopHit, ...]) -> List[List[Any]]:
    return [[hit.phrase, hit.count] for hit in hits]


def _overuse_list(entries: Tuple[OveruseEntry, ...]) -> List[dict[str, Any]]:
    return [
        {"ngram": entry.ngram, "ratio": entry.ratio, "count": entry.count}
        for entry in entries
    ]
