from slop_score.textutils import (
    frequency_words,
    is_mostly_numeric,
    merge_possessives,
    normalize_text,
)
from slop_score.tokenization import split_sentences, tokenize_words


def test_tokenize_words_returns_offsets():
    text = "Hello, world! It's sunny today."
    tokens = tokenize_words(text)

    assert [token.text for token in tokens] == ["hello", "world", "it's", "sunny", "today"]
    assert tokens[0].start_char == 0
    assert tokens[0].end_char == 5
    assert text[tokens[-1].start_char : tokens[-1].end_char] == "today"


def test_tokenize_words_keeps_digits():
    tokens = tokenize_words("In 1990s Paris, 42 cats.")
    assert [token.text for token in tokens] == ["in", "1990s", "paris", "42", "cats"]


def test_normalize_text_preserves_length():
    raw = "It’s “fine” — really."
    normalized = normalize_text(raw)

    assert normalized == "It's \"fine\" — really."
    assert len(normalized) == len(raw)


def test_normalize_text_rejects_non_strings():
    assert normalize_text(None) == ""
    assert normalize_text(42) == ""


def test_split_sentences_partitions_text():
    text = "It was late. She left!  Then, nothing."
    spans = split_sentences(text)

    assert [text[s.start_char : s.end_char].strip() for s in spans] == [
        "It was late.",
        "She left!",
        "Then, nothing.",
    ]
    assert spans[0].start_char == 0
    assert spans[-1].end_char == len(text)
    for left, right in zip(spans, spans[1:]):
        assert left.end_char == right.start_char
    assert [s.index for s in spans] == [0, 1, 2]


def test_split_sentences_breaks_on_blank_lines():
    text = "First line\n\nsecond line"
    spans = split_sentences(text)

    assert len(spans) == 2
    assert text[spans[0].start_char : spans[0].end_char].strip() == "First line"
    assert text[spans[1].start_char :] == "second line"


def test_split_sentences_handles_quotes_and_lowercase():
    text = 'He said "Stop." Then he went. it was odd.'
    spans = split_sentences(text)

    assert [text[s.start_char : s.end_char].strip() for s in spans] == [
        'He said "Stop."',
        "Then he went. it was odd.",
    ]


def test_split_sentences_empty_text():
    assert split_sentences("") == []


def test_merge_possessives_skips_contractions():
    merged = merge_possessives({"book's": 2, "book": 1, "it's": 3})
    assert merged == {"book": 3, "it's": 3}


def test_is_mostly_numeric_threshold():
    assert is_mostly_numeric("1990s")
    assert not is_mostly_numeric("a1bcdef")
    assert not is_mostly_numeric("")


def test_frequency_words_filters_numbers_then_merges():
    assert frequency_words(["2024", "cat's", "cat"]) == {"cat": 2}
