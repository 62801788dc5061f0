"""
Query term expansion beyond numerals: acronyms and final-letter spellings.

A user may type רמב"ם where the ruling spells out רבי משה בן מימון, or type
a word with a regular letter where the text uses its final form (שלומ for
שלום). Both helpers return the alternatives a term may appear as; the term
itself is not included by expand_acronym().
"""

import re
from typing import List

from data.acronyms import HEBREW_ACRONYMS
from tools.text_normalizer import FINAL_LETTERS


_ACRONYM_MARKS_RE = re.compile(r"[\"'״׳]")

REGULAR_TO_FINAL = {"כ": "ך", "מ": "ם", "נ": "ן", "פ": "ף", "צ": "ץ"}

# A regular form letter that ends a word of two or more letters
_WORD_END_RE = re.compile(r"(?<=[א-ת])[כמנפצ](?![א-ת])")


def expand_acronym(term: str) -> List[str]:
    """Full forms of an acronym, with or without its quote marks. [] if unknown."""
    key = _ACRONYM_MARKS_RE.sub("", (term or "").strip())
    if not key:
        return []
    return list(HEBREW_ACRONYMS.get(key, []))


def final_letter_variants(term: str) -> List[str]:
    """
    The term as typed, with every final letter folded to its regular form,
    and with every word ending written in final form.
    """
    folded = term.translate(FINAL_LETTERS)
    finalized = _WORD_END_RE.sub(lambda m: REGULAR_TO_FINAL[m.group(0)], folded)
    return list(dict.fromkeys([term, folded, finalized]))
