"""
Pattern tables for "not X, but Y" contrast detection.

Both tables are ordered data compiled once at import. Stage-1 patterns are
plain regular expressions over normalized text. Stage-2 patterns are written
in a small template language and run over the tagged stream, where every
token is rendered as ``text/CATEGORY`` followed by one space:

* ``VERB NOUN ADJ ADV OTHER`` match any token of that category.
* ``NEG PRON BE AUX DET`` match small closed word classes.
* ``DASH`` matches one or two dash tokens, ``END`` a sentence terminal.
* ``{a|b|c}`` matches any of the listed words or punctuation marks.
* ``*`` matches up to eight tokens, ``+`` one to eight; neither crosses a
  sentence terminal.
* A trailing ``?`` makes a unit optional; any other unit is a literal word.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from .models import CATEGORIES


@dataclass(frozen=True, slots=True)
class ContrastPattern:
    """One row of a pattern table."""

    pattern_id: str
    label: str
    regex: re.Pattern[str]
    template: str = ""


# --- Stage 1 ---------------------------------------------------------------

_PRON = r"(?:it|this|that|he|she|they|we|you|i)"
_BE = r"(?:'s|'re|'m|\s+is|\s+are|\s+was|\s+were|\s+am)"
_NT = r"\s+\w+n't"
_X = r"[^.?!;\n]"

_STAGE1_SOURCES: Tuple[Tuple[str, str, str], ...] = (
    (
        "S1_NOT_BUT",
        "not X, but Y",
        rf"\bnot\s+(?:just\s+|only\s+|merely\s+|simply\s+)?{_X}{{1,160}}?,?\s+but\s+(?:rather\s+|also\s+)?{_X}{{1,160}}",
    ),
    (
        "S1_NT_BUT",
        "X-n't A, but B",
        rf"\b\w+n't\s+{_X}{{1,160}}?,?\s+but\s+{_X}{{1,160}}",
    ),
    (
        "S1_PRON_NOT_COMMA",
        "it's not X, it's Y",
        rf"\b{_PRON}{_BE}\s+not\s+[^.?!;,\n]{{1,100}},\s*{_PRON}{_BE}\s+{_X}{{1,160}}",
    ),
    (
        "S1_PRON_NT_COMMA",
        "it isn't X, it's Y",
        rf"\b{_PRON}{_NT}\s+[^.?!;,\n]{{1,100}},\s*{_PRON}{_BE}?\s+{_X}{{1,160}}",
    ),
    (
        "S1_NOT_DASH",
        "not X - Y",
        rf"\bnot\s+[^.?!;\n—–]{{1,100}}?(?:\s*[—–]\s*|\s+-{{1,2}}\s+|-{{2}})(?:but\s+|rather\s+)?{_X}{{1,160}}",
    ),
    (
        "S1_NOT_SEMICOLON",
        "not X; Y",
        rf"\bnot\s+{_X}{{1,120}};\s*{_X}{{1,160}}",
    ),
    (
        "S1_CROSS_PRON_NOT",
        "It's not X. It's Y.",
        rf"\b{_PRON}{_BE}\s+not\s+(?:just\s+|only\s+)?{_X}{{1,120}}[.!]\s+{_PRON}{_BE}\s+{_X}{{1,160}}",
    ),
    (
        "S1_CROSS_PRON_NT",
        "It isn't X. It's Y.",
        rf"\b{_PRON}{_NT}\s+{_X}{{1,120}}[.!]\s+{_PRON}{_BE}?\s+{_X}{{1,160}}",
    ),
    (
        "S1_CROSS_NOT_BUT",
        "Not X. But Y.",
        rf"\bnot\s+{_X}{{1,120}}[.!]\s+but\s+{_X}{{1,160}}",
    ),
    (
        "S1_CROSS_NOT_INSTEAD",
        "Not X. Instead, Y.",
        rf"\bnot\s+{_X}{{1,120}}[.!]\s+instead,?\s+{_X}{{1,160}}",
    ),
    (
        "S1_NOT_BECAUSE",
        "not because X, but because Y",
        rf"\bnot\s+because\s+{_X}{{1,160}}?,?\s+but\s+because\s+{_X}{{1,160}}",
    ),
)


# --- Stage 2 ---------------------------------------------------------------

_WORD_CLASSES: Dict[str, Tuple[str, ...]] = {
    "NEG": ("not", "n't", "never"),
    "PRON": ("i", "you", "he", "she", "it", "we", "they", "this", "that"),
    "BE": ("am", "is", "are", "was", "were", "be", "been", "'s", "'re", "'m"),
    "AUX": (
        "do", "does", "did", "ca", "can", "could", "wo", "will", "would",
        "should", "must", "has", "have", "had", "is", "are", "was", "were",
    ),
    "DET": (
        "a", "an", "the", "this", "that", "my", "his", "her", "their", "our",
        "your", "its",
    ),
    "END": (".", "!", "?"),
}

_WILDCARD = r"(?:[^\s.!?]\S* ){0,8}?"
_ONE_OR_MORE = r"(?:[^\s.!?]\S* ){1,8}?"
_DASH = r"(?:[-—–]/[A-Z]+ ){1,2}"

_PREP = "{in|with|for|from|by|on|at|of|to|into}"
_WH = "{what|how|why|where|when|who}"
_CLAUSE_BREAK = "{,|;|-|—|–}"

_STAGE2_SOURCES: Tuple[Tuple[str, str, str], ...] = (
    ("POS_ADV_NOT_VERB_BUT_VERB", "adverb + not + verb ... but + verb", "ADV AUX? NEG VERB * but ADV? VERB"),
    ("POS_DOESNT_VERB", "doesn't VERB, it VERBs", "AUX NEG VERB * , PRON VERB"),
    ("POS_DOESNT_JUST_VERB", "doesn't just VERB; it VERBs", f"AUX NEG {{just|only|merely|simply}} VERB * {_CLAUSE_BREAK} PRON AUX? VERB"),
    ("POS_NOT_JUST_BUT", "not just X but Y", "NEG {just|only|merely|simply} + ,? but {also}? +"),
    ("POS_BE_NOT_ADJ_COMMA", "it wasn't ADJ, it was ADJ", "BE NEG ADV? ADJ , PRON BE ADV? ADJ"),
    ("POS_BE_NOT_ADJ_CROSS", "It wasn't ADJ. It was ADJ.", "BE NEG ADV? ADJ END PRON BE ADV? ADJ"),
    ("POS_NOT_DET_NOUN_BUT_DET_NOUN", "not a NOUN but a NOUN", "NEG DET ADJ? NOUN * but DET ADJ? NOUN"),
    ("POS_NOT_NOUN_BUT_NOUN", "not NOUN, but NOUN", "NEG ADJ? NOUN ,? but ADJ? NOUN"),
    ("POS_NOT_ADJ_BUT_ADJ", "not ADJ but ADJ", "NEG ADV? ADJ ,? but ADV? ADJ"),
    ("POS_NOT_ADV_BUT_ADV", "not ADV but ADV", "NEG ADV ,? but ADV"),
    ("POS_NOT_GERUND_BUT_GERUND", "not VERBing but VERBing", "NEG VERB * ,? but VERB"),
    ("POS_NOT_TO_VERB_BUT_TO_VERB", "not to VERB but to VERB", "NEG to VERB * ,? but to VERB"),
    ("POS_NOT_PREP_BUT_PREP", "not in X but in Y", f"NEG {_PREP} * ,? but {_PREP}"),
    ("POS_NOT_WH_BUT_WH", "not what X but how Y", f"NEG {_WH} * ,? but {_WH}"),
    ("POS_NOT_ABOUT_BUT_ABOUT", "not about X, but about Y", "NEG about * ,? but about"),
    ("POS_NOT_ABOUT_CROSS", "It's not about X. It's about Y.", "PRON BE NEG {just}? about * END PRON BE {all}? about"),
    ("POS_ISNT_ABOUT_ITS_ABOUT", "isn't about X; it's about Y", f"BE NEG about * {_CLAUSE_BREAK} PRON BE {{all}}? about"),
    ("POS_NOT_BECAUSE_BUT_BECAUSE", "not because X but because Y", "NEG because * ,? but because"),
    ("POS_NOT_THAT_ITS_THAT", "it's not that X, it's that Y", f"PRON BE NEG that * {_CLAUSE_BREAK} PRON BE that"),
    ("POS_NEVER_VERB_ONLY_VERB", "never VERB, only VERB", "never VERB * , only VERB"),
    ("POS_NEVER_ABOUT_ALWAYS_ABOUT", "never about X, always about Y", "never about * , always about"),
    ("POS_NOT_SO_MUCH_AS", "not X so much as Y", "NEG + so much as +"),
    ("POS_NOT_ANYMORE_ITS", "not X anymore; it's Y", "NEG * {anymore|longer} {,|;|-|—|–|.|!} PRON BE +"),
    ("POS_NO_LONGER_BUT", "no longer X but Y", "no longer * ,? but +"),
    ("POS_I_AM_NOT_SEMI", "I am not X; I am Y", "i {am|'m} NEG * ; i {am|'m} +"),
    ("POS_PRON_NOT_VERB_SEMI", "PRON didn't VERB; PRON VERBed", "PRON AUX NEG VERB * ; PRON AUX? VERB"),
    ("POS_NEG_VERB_DASH", "didn't VERB - VERBed", "AUX NEG VERB * DASH PRON? AUX? VERB"),
    ("POS_NEG_VERB_CROSS", "He didn't VERB. He VERBed.", "PRON AUX NEG VERB * END PRON AUX? VERB"),
    ("POS_GERUND_FRAGMENT", "Not VERBing. VERBing.", "NEG VERB END VERB END"),
    ("POS_ADJ_FRAGMENT", "Not ADJ. ADJ.", "NEG ADV? ADJ END ADV? ADJ END"),
    ("POS_NOUN_FRAGMENT", "Not a NOUN. A NOUN.", "NEG DET? ADJ? NOUN END DET? ADJ? NOUN END"),
    ("POS_NOT_X_NOT_Y_BUT_Z", "not X, not Y, but Z", "NEG + , NEG + ,? but +"),
    ("POS_RATHER_THAN_VERB", "rather than VERB, PRON VERBed", "rather than VERB * , PRON AUX? VERB"),
    ("POS_INSTEAD_OF_VERB", "instead of VERBing, PRON VERBed", "instead of VERB * , PRON AUX? VERB"),
    ("POS_NOT_BUT_RATHER", "not X but rather Y", "NEG + ,? but rather +"),
    ("POS_DIALOGUE_ATTR", '"not X," she said. "It\'s Y."', 'NEG + , " PRON VERB {,|.} " PRON BE +'),
    ("POS_PRON_NOT_NOUN_COMMA", "it's not a NOUN, it's a NOUN", "PRON BE NEG DET? ADJ? NOUN , PRON BE DET? ADJ? NOUN"),
    ("POS_PRON_NOT_NOUN_CROSS", "It's not a NOUN. It's a NOUN.", "PRON BE NEG DET? ADJ? NOUN END PRON BE DET? ADJ? NOUN"),
)


def compile_template(template: str) -> re.Pattern[str]:
    """Compile a stage-2 template into a regex over the rendered tagged stream."""
    parts = [r"(?<!\S)"]
    for raw_unit in template.split():
        optional = len(raw_unit) > 1 and raw_unit.endswith("?")
        unit = raw_unit[:-1] if optional else raw_unit
        piece = _unit_regex(unit)
        parts.append(f"(?:{piece})?" if optional else piece)
    return re.compile("".join(parts))


def _unit_regex(unit: str) -> str:
    if unit == "*":
        return _WILDCARD
    if unit == "+":
        return _ONE_OR_MORE
    if unit == "DASH":
        return _DASH
    if unit in CATEGORIES:
        return rf"[^\s/]+/{unit} "
    if unit in _WORD_CLASSES:
        return _alternation(_WORD_CLASSES[unit])
    if len(unit) > 2 and unit.startswith("{") and unit.endswith("}"):
        return _alternation(unit[1:-1].split("|"))
    return _alternation((unit,))


def _alternation(words: Sequence[str]) -> str:
    return "(?:" + "|".join(re.escape(word) for word in words) + ")/[A-Z]+ "


SURFACE_PATTERNS: Tuple[ContrastPattern, ...] = tuple(
    ContrastPattern(pattern_id, label, re.compile(source, re.IGNORECASE))
    for pattern_id, label, source in _STAGE1_SOURCES
)

TAGGED_PATTERNS: Tuple[ContrastPattern, ...] = tuple(
    ContrastPattern(pattern_id, label, compile_template(template), template)
    for pattern_id, label, template in _STAGE2_SOURCES
)
