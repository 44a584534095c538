import pytest

from slop_score.frequency_loader import MappingFrequencyLookup
from slop_score.models import OveruseEntry
from slop_score.overuse import (
    content_tokens,
    extract_repeated_phrases,
    make_ngrams,
    rank_overuse,
    rank_word_overuse,
    repetition_score,
)


def test_content_tokens_drop_stopwords_and_numbers():
    assert content_tokens(["the", "quiet", "it's", "2024", "river"]) == [
        "quiet",
        "it's",
        "river",
    ]


def test_make_ngrams():
    assert make_ngrams(["a", "b", "c"], 2) == ["a b", "b c"]
    assert make_ngrams(["a"], 2) == []


def test_rank_overuse_uses_smallest_baseline_as_floor():
    ngrams = ["quiet river", "quiet river", "old tree"]
    baseline = {"old tree": 0.5, "new day": 0.25}
    ranked = rank_overuse(ngrams, baseline, top_k=5)

    assert [entry.ngram for entry in ranked] == ["quiet river", "old tree"]
    assert ranked[0].ratio == pytest.approx((2 / 3) / 0.25)
    assert ranked[0].count == 2
    assert ranked[1].ratio == pytest.approx((1 / 3) / 0.5)


def test_rank_overuse_with_empty_baseline():
    """An absent n-gram against an empty baseline scores observed / epsilon."""
    ranked = rank_overuse(["lone phrase"], {}, top_k=5)
    assert ranked[0].ratio == pytest.approx(1.0 / 2e-12, rel=1e-6)


def test_rank_overuse_respects_top_k_and_empty_input():
    assert rank_overuse([], {"a b": 1.0}) == ()
    ranked = rank_overuse(["a b", "c d", "e f"], {}, top_k=2)
    assert [entry.ngram for entry in ranked] == ["a b", "c d"]


def test_rank_word_overuse_and_repetition_score():
    lookup = MappingFrequencyLookup({"shimmering": 1e-6, "house": 1e-3})
    counts = {"shimmering": 2, "house": 2, "cat": 5}
    ranked = rank_word_overuse(counts, lookup, top_n=1)

    assert len(ranked) == 1
    assert ranked[0].word == "shimmering"
    assert ranked[0].ratio == pytest.approx(0.5 / 1e-6)
    assert ranked[0].zipf == pytest.approx(3.0)
    assert repetition_score(counts, ranked) == pytest.approx(50.0)


def test_rank_word_overuse_without_lookup():
    assert rank_word_overuse({"shimmering": 2}, None) == ()


def test_unknown_words_use_minimum_frequency():
    lookup = MappingFrequencyLookup({})
    ranked = rank_word_overuse({"glimmer": 1}, lookup)

    assert ranked[0].ratio == pytest.approx(1e9)
    assert ranked[0].zipf is None


def test_extract_repeated_phrases_finds_surface_forms():
    text = "A quiet river ran. The Quiet  River slept."
    phrases = extract_repeated_phrases(text, [OveruseEntry("quiet river", 1.0, 2)])

    assert {hit.phrase for hit in phrases} == {"quiet river", "Quiet  River"}
    assert sum(hit.count for hit in phrases) == 2


def test_extract_repeated_phrases_is_word_bounded():
    phrases = extract_repeated_phrases(
        "the unquiet riverbank", [OveruseEntry("quiet river", 1.0, 1)]
    )
    assert phrases == ()
