from __future__ import annotations

import re
from typing import List

from .models import SentenceSpan, Token

TOKEN_PATTERN = re.compile(r"[^\W_]+(?:'[^\W_]+)?", re.UNICODE)

# Terminal punctuation (plus closing quotes/brackets) before whitespace and a
# capitalised word, or a blank line.
SENTENCE_BOUNDARY_RE = re.compile(
    r"""[.!?]+["')\]]*(?=\s+["'(\[]?[A-Z])|\n[ \t]*\n"""
)


def tokenize_words(text: str) -> List[Token]:
    """Tokenize text into lowercased word tokens with character offsets."""
    tokens: List[Token] = []
    for match in TOKEN_PATTERN.finditer(text):
        tokens.append(
            Token(
                text=match.group().lower(),
                start_char=match.start(),
                end_char=match.end(),
            )
        )
    return tokens


def split_sentences(text: str) -> List[SentenceSpan]:
    """
    Split text into sentence spans that partition it with no gaps.

    Whitespace after a boundary is attached to the sentence it follows, so the
    next sentence always starts on a non-space character.
    """
    if not text:
        return []

    spans: List[SentenceSpan] = []
    length = len(text)
    start = 0
    for match in SENTENCE_BOUNDARY_RE.finditer(text):
        if match.start() < start:
            continue
        end = match.end()
        while end < length and text[end].isspace():
            end += 1
        if end >= length:
            break
        if end > start:
            spans.append(SentenceSpan(index=len(spans), start_char=start, end_char=end))
            start = end

    if start < length:
        spans.append(SentenceSpan(index=len(spans), start_char=start, end_char=length))
    return spans
