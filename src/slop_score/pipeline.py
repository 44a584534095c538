from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

from .context import AnalysisContext
from .contrast import detect_contrasts
from .models import AnalysisResult, Document
from .overuse import (
    content_tokens,
    extract_repeated_phrases,
    make_ngrams,
    rank_overuse,
    rank_word_overuse,
    repetition_score,
)
from .readability import compute_text_metrics
from .scoring import compute_slop_score, contrast_rate
from .slop_index import compute_slop_index
from .textutils import frequency_words, normalize_text
from .tokenization import split_sentences, tokenize_words

LOGGER = logging.getLogger(__name__)


def analyze_text(
    text: object, context: AnalysisContext, doc_id: str = ""
) -> AnalysisResult:
    """Run every analysis over one document and return the immutable result."""
    config = context.config
    normalized = normalize_text(text)
    tokens = tokenize_words(normalized)
    words = [token.text for token in tokens]
    sentences = split_sentences(normalized)

    slop_index = compute_slop_index(
        words,
        context.slop_words,
        context.slop_trigrams,
        context.slop_bigrams,
        track_hits=config.track_hits,
    )

    content = content_tokens(words)
    top_bigrams = rank_overuse(
        make_ngrams(content, 2), context.bigram_baseline, config.top_k_ngrams
    )
    top_trigrams = rank_overuse(
        make_ngrams(content, 3), context.trigram_baseline, config.top_k_ngrams
    )

    word_counts = frequency_words(words)
    over_words = rank_word_overuse(word_counts, context.lookup, config.top_k_words)

    detection = detect_contrasts(normalized, sentences, context.tagger, doc_id=doc_id)
    contrast_score = contrast_rate(detection.hit_count, len(normalized))

    slop_score = compute_slop_score(
        slop_index.word_score,
        contrast_score,
        slop_index.trigram_score,
        config.weights,
    )
    LOGGER.debug("Document %r scored %.3f.", doc_id, slop_score.score)

    return AnalysisResult(
        doc_id=doc_id,
        slop_score=slop_score,
        slop_index=slop_index,
        contrast_score=contrast_score,
        contrast_matches=detection.matches,
        contrast_hits=detection.hit_count,
        top_bigrams=top_bigrams,
        top_trigrams=top_trigrams,
        over_represented_words=over_words,
        repetition_score=repetition_score(word_counts, over_words),
        repeated_phrases=extract_repeated_phrases(
            normalized, top_trigrams, config.max_repeated_phrases
        ),
        metrics=compute_text_metrics(normalized, tokens, sentences, context.lookup),
        stage2_status=detection.stage2_status,
        degraded_resources=context.degraded,
    )


def analyze_document(doc: Document, context: AnalysisContext) -> AnalysisResult:
    return analyze_text(doc.text, context, doc_id=doc.doc_id)


def analyze_corpus(
    documents: Sequence[Document],
    context: AnalysisContext,
    workers: int | None = None,
) -> List[AnalysisResult]:
    """
    Analyze every document, in parallel when more than one worker is allowed.

    Results come back in input order. Workers only share the read-only
    context, so no further coordination is needed.
    """
    workers = context.config.workers if workers is None else workers
    if workers <= 1 or len(documents) <= 1:
        return [analyze_document(doc, context) for doc in documents]

    LOGGER.info("Analyzing %d documents with %d workers.", len(documents), workers)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(lambda doc: analyze_document(doc, context), documents))
