import pytest

from slop_score.config import ScoringWeights
from slop_score.readability import (
    complexity_index,
    compute_text_metrics,
    count_syllables,
    moving_average_ttr,
)
from slop_score.scoring import compute_slop_score, contrast_rate
from slop_score.textutils import normalize_text
from slop_score.tokenization import split_sentences, tokenize_words


def test_compute_slop_score_uses_default_weights():
    score = compute_slop_score(10.0, 4.0, 2.0)

    assert score.score == pytest.approx(6.0 + 1.0 + 0.3)
    assert score.components["contrast_per_1k_chars"] == 4.0
    assert score.weighted_components["slop_words_per_1k"] == pytest.approx(6.0)


def test_compute_slop_score_custom_weights():
    score = compute_slop_score(10.0, 4.0, 2.0, ScoringWeights(word=1.0, contrast=0.0, trigram=0.0))
    assert score.score == pytest.approx(10.0)


def test_contrast_rate():
    assert contrast_rate(2, 500) == pytest.approx(4.0)
    assert contrast_rate(3, 0) == 0.0


@pytest.mark.parametrize(
    ("word", "expected"),
    [("table", 2), ("make", 1), ("beautiful", 3), ("rhythm", 1), ("", 0), ("42", 0)],
)
def test_count_syllables(word: str, expected: int):
    assert count_syllables(word) == expected


def test_moving_average_ttr():
    assert moving_average_ttr(["a", "b"] * 50) == pytest.approx(2 / 50)
    assert moving_average_ttr(["a", "b", "a"]) == pytest.approx(2 / 3)
    assert moving_average_ttr([]) == 0.0


def test_complexity_index_caps():
    assert complexity_index(20.0, 40.0) == 100.0
    assert complexity_index(-3.0, 0.0) == 0.0
    assert complexity_index(7.0, 10.0) == 50.0


def test_text_metrics_for_simple_text():
    text = normalize_text("The cat sat. The dog ran.")
    metrics = compute_text_metrics(text, tokenize_words(text), split_sentences(text))

    assert metrics.word_count == 6
    assert metrics.sentence_count == 2
    assert metrics.mean_sentence_length == pytest.approx(3.0)
    assert metrics.type_token_ratio == pytest.approx(5 / 6)
    assert metrics.flesch_reading_ease > 100
    assert metrics.mean_zipf is None


def test_text_metrics_for_empty_text():
    metrics = compute_text_metrics("", [], [])
    assert metrics.word_count == 0
    assert metrics.mattr == 0.0
    assert metrics.complexity_index == 0.0


def test_slop_score_components_are_read_only():
    score = compute_slop_score(10.0, 4.0, 2.0)

    with pytest.raises(TypeError):
        score.components["contrast_per_1k_chars"] = 0.0  # type: ignore[index]
    with pytest.raises(TypeError):
        score.weighted_components["slop_words_per_1k"] = 0.0  # type: ignore[index]
    assert dict(score.components)["slop_words_per_1k"] == 10.0
