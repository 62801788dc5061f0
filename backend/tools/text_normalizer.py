"""
Hebrew Text Normalizer
======================

Canonicalizes Hebrew text so that two spellings of the same words compare
equal. Every step is optional (see NormalizationOptions) and they always run
in this order:

1. Nikud / cantillation marks     (U+0591..U+05C7)
2. Quotes, geresh and gershayim
3. Punctuation
4. Dashes and maqaf
5. Final letters                  (ך ם ן ף ץ -> כ מ נ פ צ)

Nikud has to go before final-letter folding: the marks are combining
characters that follow their base letter.
"""

import re
from typing import List, Optional, Tuple

from models import NormalizationOptions


NIKUD_RE = re.compile(r"[\u0591-\u05C7]")
QUOTES_RE = re.compile(r"[\"'״׳`´‘’“”«»]")
PUNCTUATION_RE = re.compile(r"[.,;:!?()\[\]{}]")
DASHES_RE = re.compile(r"[-–—־]")

FINAL_LETTERS = str.maketrans("ךםןףץ", "כמנפצ")

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")

_HTML_ENTITIES = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    # Last, so "&amp;lt;" decodes to "&lt;" and not "<"
    ("&amp;", "&"),
)


def remove_nikud(text: str) -> str:
    """Strip vowel points and cantillation marks."""
    return NIKUD_RE.sub("", text)


def normalize_final_letters(text: str) -> str:
    """Fold final-form letters into their regular forms."""
    return text.translate(FINAL_LETTERS)


def normalize_hebrew_text(text: str, options: NormalizationOptions) -> str:
    """Apply the enabled canonicalizations in their fixed order."""
    result = text

    if options.remove_nikud:
        result = NIKUD_RE.sub("", result)

    if options.remove_quotes:
        result = QUOTES_RE.sub("", result)

    if options.remove_punctuation:
        result = PUNCTUATION_RE.sub("", result)

    if options.remove_dashes:
        result = DASHES_RE.sub("", result)

    if options.normalize_final_letters:
        result = result.translate(FINAL_LETTERS)

    return result


def normalize_for_match(text: str, options: NormalizationOptions) -> str:
    """The form both haystack and needle take before a containment check."""
    return normalize_hebrew_text(text.lower(), options)


def normalize_with_offsets(
    text: str,
    options: NormalizationOptions
) -> Tuple[str, List[int]]:
    """
    Normalize for matching and keep a map back into the source.

    Returns (normalized, offsets) where offsets[i] is the index in `text` of
    the character that produced normalized[i]. offsets has one extra entry
    equal to len(text) so an end position maps cleanly.
    """
    pieces: List[str] = []
    offsets: List[int] = []

    for index, char in enumerate(text):
        piece = normalize_for_match(char, options)
        pieces.append(piece)
        offsets.extend([index] * len(piece))

    offsets.append(len(text))
    return "".join(pieces), offsets


def contains_html(text: str) -> bool:
    """True if the text has at least one tag or one of the decoded entities."""
    if _TAG_RE.search(text):
        return True
    return any(entity in text for entity, _ in _HTML_ENTITIES)


def strip_html(html: Optional[str]) -> str:
    """
    Best-effort plain text from an HTML fragment.

    Tags become a single space, the common named entities are decoded and
    whitespace runs collapse. Not a parser: malformed markup is only handled
    as far as the tag regex reaches.
    """
    if not html:
        return ""

    text = _TAG_RE.sub(" ", html)
    for entity, replacement in _HTML_ENTITIES:
        text = text.replace(entity, replacement)

    return _WHITESPACE_RE.sub(" ", text).strip()
