from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from importlib import import_module
from typing import Any, Callable, List, Sequence, Tuple

from .config import TaggerSettings
from .models import CATEGORIES, TaggedToken
from .offsets import OffsetMapper

LOGGER = logging.getLogger(__name__)

# Clitics are split off (does|n't, it|'s) and punctuation is kept as tokens.
STREAM_TOKEN_RE = re.compile(
    r"[^\W_]+(?=n't\b)|n't\b|'(?:s|re|m|ve|ll|d)\b|[^\W_]+|[^\w\s]",
    re.IGNORECASE,
)

_PENN_PREFIXES: Tuple[Tuple[str, str], ...] = (
    ("VB", "VERB"),
    ("MD", "VERB"),
    ("NN", "NOUN"),
    ("JJ", "ADJ"),
    ("RB", "ADV"),
)

_nltk_pos_tag: Callable[..., list[tuple[str, str]]] | None = None


class TaggerUnavailable(RuntimeError):
    """Raised when the part-of-speech tagger cannot produce tags."""


class PosTagger(ABC):
    """Abstract part-of-speech tagger: one tag per input token."""

    @abstractmethod
    def tag(self, tokens: Sequence[str]) -> List[str]:
        """Return Penn-style or simplified tags for the tokens."""
        raise NotImplementedError


class NltkPosTagger(PosTagger):
    """Averaged-perceptron tagger from NLTK."""

    def __init__(self, lang: str = "eng") -> None:
        self._pos_tag = _ensure_nltk()
        self.lang = lang

    def tag(self, tokens: Sequence[str]) -> List[str]:
        if not tokens:
            return []
        try:
            tagged = self._pos_tag(list(tokens), lang=self.lang)
        except LookupError as exc:
            raise TaggerUnavailable(
                "NLTK tagger model is missing; run "
                "`python -m nltk.downloader averaged_perceptron_tagger_eng`."
            ) from exc
        return [tag for _, tag in tagged]


class CallableTagger(PosTagger):
    """Adapt an arbitrary callable into the PosTagger interface."""

    def __init__(self, func: Callable[[Sequence[str]], Sequence[str]]) -> None:
        self._func = func

    def tag(self, tokens: Sequence[str]) -> List[str]:
        try:
            return list(self._func(tokens))
        except TaggerUnavailable:
            raise
        except Exception as exc:
            raise TaggerUnavailable(f"tagger callable failed: {exc}") from exc


@dataclass(frozen=True, slots=True)
class TaggedStream:
    """Rendered ``text/CATEGORY`` stream plus the map back to raw offsets."""

    tokens: Tuple[TaggedToken, ...]
    stream: str
    mapper: OffsetMapper


def simplify_tag(tag: str) -> str:
    """Collapse a Penn Treebank tag to VERB/NOUN/ADJ/ADV/OTHER."""
    upper = tag.upper()
    if upper in CATEGORIES:
        return upper
    for prefix, category in _PENN_PREFIXES:
        if upper.startswith(prefix):
            return category
    return "OTHER"


def tokenize_for_tagging(text: str) -> List[Tuple[str, int, int]]:
    """Split text into ``(token, start, end)`` triples for the tagger."""
    return [
        (match.group(), match.start(), match.end())
        for match in STREAM_TOKEN_RE.finditer(text)
    ]


def build_tagged_stream(text: str, tagger: PosTagger) -> TaggedStream:
    """
    Tag the text and render it as ``token/CATEGORY `` units.

    Raises TaggerUnavailable when the tagger itself fails or when its output is
    not one string tag per token.
    """
    pieces = tokenize_for_tagging(text)
    try:
        tags = list(tagger.tag([piece for piece, _, _ in pieces]))
    except TaggerUnavailable:
        raise
    except Exception as exc:
        raise TaggerUnavailable(
            f"{type(tagger).__name__} failed: {exc}"
        ) from exc
    if len(tags) != len(pieces):
        raise TaggerUnavailable(
            f"tagger returned {len(tags)} tags for {len(pieces)} tokens"
        )
    for tag in tags:
        if not isinstance(tag, str):
            raise TaggerUnavailable(f"tagger returned a non-string tag: {tag!r}")

    mapper = OffsetMapper(len(text))
    tokens: List[TaggedToken] = []
    parts: List[str] = []
    cursor = 0
    for (piece, start, end), tag in zip(pieces, tags):
        category = simplify_tag(tag)
        mapper.add_anchor(cursor, start, end)
        rendered = f"{piece.lower()}/{category} "
        parts.append(rendered)
        cursor += len(rendered)
        tokens.append(TaggedToken(piece.lower(), category, start, end))
    return TaggedStream(tuple(tokens), "".join(parts), mapper)


def create_tagger(settings: TaggerSettings) -> PosTagger | None:
    """Instantiate the configured tagger backend, or None when disabled."""
    if not settings.enabled:
        return None
    backend = settings.backend.lower()
    if backend == "nltk":
        return NltkPosTagger(lang=settings.lang)
    raise ValueError(f"Unknown tagger backend '{settings.backend}'.")


def _ensure_nltk() -> Callable[..., list[tuple[str, str]]]:
    global _nltk_pos_tag
    if _nltk_pos_tag is None:
        try:
            tag_module: Any = import_module("nltk.tag")
        except ModuleNotFoundError as exc:  # pragma: no cover - informative
            raise TaggerUnavailable(
                "nltk is required for part-of-speech contrast patterns. "
                "Install it with `pip install nltk`."
            ) from exc
        _nltk_pos_tag = getattr(tag_module, "pos_tag")
    return _nltk_pos_tag
