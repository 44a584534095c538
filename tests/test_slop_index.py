import pytest

from slop_score.models import SlopHit
from slop_score.slop_index import compute_slop_index


def test_word_score_is_hits_per_thousand_tokens():
    """Five flagged words in 1000 tokens score 5.0."""
    tokens = ["tapestry"] * 5 + ["word"] * 995
    result = compute_slop_index(tokens, frozenset({"tapestry"}), frozenset())

    assert result.word_score == pytest.approx(5.0)
    assert result.word_hits == (SlopHit("tapestry", 5),)
    assert result.trigram_score == 0.0


def test_trigram_and_bigram_hits():
    tokens = ["a", "testament", "to", "the", "power"]
    result = compute_slop_index(
        tokens,
        frozenset(),
        frozenset({"a testament to"}),
        slop_bigrams=frozenset({"a testament", "the power"}),
    )

    assert result.trigram_score == pytest.approx(200.0)
    assert result.bigram_score == pytest.approx(400.0)
    assert result.trigram_hits == (SlopHit("a testament to", 1),)
    assert [hit.phrase for hit in result.bigram_hits] == ["a testament", "the power"]


def test_empty_tokens_score_zero():
    result = compute_slop_index([], frozenset({"delve"}), frozenset({"a b c"}))

    assert result.word_score == 0.0
    assert result.trigram_score == 0.0
    assert result.word_hits == ()


def test_hits_sorted_by_count_with_stable_ties():
    tokens = ["delve", "tapestry", "tapestry", "delve", "testament"]
    result = compute_slop_index(
        tokens, frozenset({"delve", "tapestry", "testament"}), frozenset()
    )

    assert [hit.phrase for hit in result.word_hits] == ["delve", "tapestry", "testament"]
    assert result.word_score == pytest.approx(1000.0)


def test_track_hits_disabled_keeps_scores():
    result = compute_slop_index(
        ["delve", "deeper"], frozenset({"delve"}), frozenset(), track_hits=False
    )

    assert result.word_score == pytest.approx(500.0)
    assert result.word_hits == ()
