from __future__ import annotations

from bisect import bisect_right
from typing import Iterable, List, Sequence, Tuple

from .models import Match, MergedMatch, SentenceSpan


def merge_matches(
    matches: Iterable[Match], sentences: Sequence[SentenceSpan], text: str
) -> Tuple[MergedMatch, ...]:
    """
    Merge raw matches into whole-sentence, non-overlapping records.

    Matches are grouped when they touch a common sentence, or when they sit in
    neighbouring sentences with only whitespace between them. Each group is
    widened to the sentences it covers. Every input match ends up in exactly
    one record; spans outside the text are clamped rather than discarded.
    """
    if not sentences:
        return ()
    starts = [sentence.start_char for sentence in sentences]
    limit = len(text)

    located: List[Tuple[int, int, int, int, Match]] = []
    for match in matches:
        start = _clamp(match.start_char, limit)
        end = max(start, _clamp(match.end_char, limit))
        lo = _sentence_at(starts, start)
        hi = max(lo, _sentence_at(starts, max(start, end - 1)))
        located.append((start, end, lo, hi, match))
    located.sort(key=lambda row: (row[0], row[1], row[4].stage, row[4].pattern_id))

    groups: List[Tuple[int, int, int, List[Match]]] = []
    for start, end, lo, hi, match in located:
        if groups:
            cur_lo, cur_hi, cur_end, members = groups[-1]
            bridged = lo == cur_hi + 1 and not text[cur_end:start].strip()
            if lo <= cur_hi or bridged:
                members.append(match)
                groups[-1] = (cur_lo, max(cur_hi, hi), max(cur_end, end), members)
                continue
        groups.append((lo, hi, end, [match]))

    return tuple(
        _build_record(members, sentences, lo, hi, text)
        for lo, hi, _, members in groups
    )


def _build_record(
    members: List[Match],
    sentences: Sequence[SentenceSpan],
    lo: int,
    hi: int,
    text: str,
) -> MergedMatch:
    start = sentences[lo].start_char
    end = sentences[hi].end_char
    segment = text[start:end]
    stripped = segment.strip()
    if stripped:
        start += len(segment) - len(segment.lstrip())
        end -= len(segment) - len(segment.rstrip())
    return MergedMatch(
        sentence_indices=tuple(sentences[idx].index for idx in range(lo, hi + 1)),
        start_char=start,
        end_char=end,
        source_pattern_ids=frozenset(match.pattern_id for match in members),
        matches=tuple(members),
        text=stripped,
    )


def _sentence_at(starts: Sequence[int], offset: int) -> int:
    return max(0, bisect_right(starts, offset) - 1)


def _clamp(offset: int, limit: int) -> int:
    return max(0, min(offset, limit))
