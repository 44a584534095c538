from __future__ import annotations

from bisect import bisect_right
from typing import List, Tuple


class OffsetMapper:
    """
    Map positions in the rendered tagged stream back to raw-text offsets.

    Each tagged token contributes one anchor: where its rendering starts in the
    stream and where the token sits in the raw text. Anchors are appended in
    stream order, so both tables stay sorted and lookups are a binary search
    followed by a residual adjustment inside the token. The mapping is
    monotonic and always lands inside ``[0, text_length]``.
    """

    def __init__(self, text_length: int) -> None:
        self.text_length = text_length
        self._stream_starts: List[int] = []
        self._raw_starts: List[int] = []
        self._raw_ends: List[int] = []

    def add_anchor(self, stream_start: int, raw_start: int, raw_end: int) -> None:
        if self._stream_starts and stream_start <= self._stream_starts[-1]:
            raise ValueError("anchors must be added in increasing stream order")
        if self._raw_ends and raw_start < self._raw_ends[-1]:
            raise ValueError("anchors must not overlap in the raw text")
        self._stream_starts.append(stream_start)
        self._raw_starts.append(raw_start)
        self._raw_ends.append(raw_end)

    def __len__(self) -> int:
        return len(self._stream_starts)

    def token_index(self, stream_pos: int) -> int:
        """Index of the nearest anchor at or before stream_pos (-1 if none)."""
        return bisect_right(self._stream_starts, stream_pos) - 1

    def raw_start(self, stream_pos: int) -> int:
        """Raw offset for a stream position used as a span start."""
        if not self._stream_starts:
            return 0
        idx = self.token_index(stream_pos)
        if idx < 0:
            return self._clamp(self._raw_starts[0])
        return self._resolve(idx, stream_pos)

    def raw_end(self, stream_pos: int) -> int:
        """Raw offset for an exclusive stream position used as a span end."""
        if not self._stream_starts:
            return 0
        idx = self.token_index(stream_pos - 1)
        if idx < 0:
            return self._clamp(self._raw_starts[0])
        return self._resolve(idx, stream_pos)

    def raw_span(self, stream_start: int, stream_end: int) -> Tuple[int, int]:
        start = self.raw_start(stream_start)
        return start, max(start, self.raw_end(stream_end))

    def _resolve(self, idx: int, stream_pos: int) -> int:
        residual = stream_pos - self._stream_starts[idx]
        width = self._raw_ends[idx] - self._raw_starts[idx]
        return self._clamp(self._raw_starts[idx] + min(residual, width))

    def _clamp(self, offset: int) -> int:
        return max(0, min(offset, self.text_length))
