"""
Citation Patterns
=================

The regexes that recognize a Talmud citation around a tractate alternation.
TractateRegistry compiles them whenever its variant set changes and hands the
compiled tuple to the parser, so the patterns always match the snapshot they
were built from.
"""

import re
from typing import NamedTuple, Tuple


# ==========================================
#  PATTERN PIECES
# ==========================================

# Inseparable prefixes that may be glued to a tractate name. Lazy, so a
# variant that itself starts with one of these letters (בב"ק) wins.
PREFIX = r"[ובכלמשדה]{0,3}?"

DAF_WORD = r"(?:דף|ד[׳'])?"

# Any numeral token: gematria (with or without marks) or digits
DAF_TOKEN = r"[א-ת]+[\"״]?[א-ת]*|[א-ת][׳']?|\d+"

# Bare daf needs a mark or digits, otherwise every following word is a daf
MARKED_DAF_TOKEN = r"[א-ת]+[\"״][א-ת]*|[א-ת][׳']|\d+"

AMUD_MARKER = r"(?:(?:עמוד|עמ[׳'])\s*(?:ע[\"״׳'])?|ע[\"״׳'])"


class CitationPattern(NamedTuple):
    """One citation surface form and the side it implies when none is written."""
    name: str
    regex: "re.Pattern"
    default_amud: str


def compile_citation_patterns(tractate_pattern: str) -> Tuple[CitationPattern, ...]:
    """
    Build the five citation patterns around a tractate alternation.

    Order matters: when two patterns produce candidates at the same offset
    the earlier one wins the overlap pass.
    """
    head = rf"(?<![א-ת]){PREFIX}(?P<tractate>{tractate_pattern})(?![א-ת])"

    shapes = [
        ("explicit_amud",
         rf"{head}\s*{DAF_WORD}\s*(?P<daf>{DAF_TOKEN})\s*{AMUD_MARKER}\s*(?P<amud>[אב])(?![א-ת])",
         "א"),
        ("colon",
         rf"{head}\s*{DAF_WORD}\s*(?P<daf>{DAF_TOKEN}):(?![א-ת])",
         "ב"),
        ("dot",
         rf"{head}\s*{DAF_WORD}\s*(?P<daf>{DAF_TOKEN})\.(?![א-ת\d])",
         "א"),
        ("daf_colon_amud",
         rf"{head}\s*(?P<daf>[א-ת]+[\"״]?[א-ת]*|\d+):(?P<amud>[אב])(?![א-ת])",
         "א"),
        ("bare",
         rf"{head}\s*{DAF_WORD}\s*(?P<daf>{MARKED_DAF_TOKEN})(?![א-ת:.\d])",
         "א"),
    ]

    return tuple(
        CitationPattern(name, re.compile(regex), amud)
        for name, regex, amud in shapes
    )
