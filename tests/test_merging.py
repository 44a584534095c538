from slop_score.merging import merge_matches
from slop_score.models import Match
from slop_score.tokenization import split_sentences

TEXT = "One two. Three four. Five six."


def test_matches_in_one_sentence_merge_into_one_record():
    sentences = split_sentences(TEXT)
    matches = [Match("A", 1, 0, 7), Match("B", 2, 4, 8), Match("C", 1, 22, 29)]
    merged = merge_matches(matches, sentences, TEXT)

    assert [record.sentence_indices for record in merged] == [(0,), (2,)]
    assert merged[0].source_pattern_ids == frozenset({"A", "B"})
    assert merged[0].text == "One two."
    assert (merged[0].start_char, merged[0].end_char) == (0, 8)
    assert merged[1].text == "Five six."


def test_adjacent_sentences_separated_by_whitespace_merge():
    sentences = split_sentences(TEXT)
    merged = merge_matches([Match("A", 1, 0, 8), Match("B", 1, 9, 20)], sentences, TEXT)

    assert len(merged) == 1
    assert merged[0].sentence_indices == (0, 1)
    assert merged[0].text == "One two. Three four."


def test_adjacent_sentences_with_text_between_stay_apart():
    sentences = split_sentences(TEXT)
    merged = merge_matches([Match("A", 1, 0, 3), Match("B", 1, 10, 20)], sentences, TEXT)

    assert [record.sentence_indices for record in merged] == [(0,), (1,)]


def test_every_match_is_attributed_once_and_records_do_not_overlap():
    sentences = split_sentences(TEXT)
    matches = [
        Match("A", 1, 0, 7),
        Match("B", 2, 4, 15),
        Match("C", 1, 12, 19),
        Match("D", 2, 50, 60),
        Match("E", 1, 25, 22),
    ]
    merged = merge_matches(matches, sentences, TEXT)

    attributed = [match for record in merged for match in record.matches]
    assert sorted(attributed, key=lambda m: m.pattern_id) == matches
    for left, right in zip(merged, merged[1:]):
        assert left.end_char <= right.start_char
        assert left.sentence_indices[-1] < right.sentence_indices[0]


def test_out_of_range_matches_are_clamped_not_dropped():
    sentences = split_sentences(TEXT)
    merged = merge_matches([Match("late", 1, 50, 60)], sentences, TEXT)

    assert len(merged) == 1
    assert merged[0].sentence_indices == (2,)
    assert merged[0].end_char == len(TEXT)


def test_no_sentences_means_no_records():
    assert merge_matches([Match("A", 1, 0, 1)], [], "") == ()
