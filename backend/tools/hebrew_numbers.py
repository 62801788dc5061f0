"""
Hebrew Numerals
===============

Converts between the three ways a number shows up in Torah texts:

- Arabic digits:        112
- Gematria letters:     קי״ב
- Spelled-out words:    מאה ושתים עשרה

15 and 16 are written ט״ו / ט״ז rather than the letter pairs that would
spell a Divine Name.

Nothing here raises for bad input. A token that is not a numeral comes back
as None (or passes through unchanged), since callers probe arbitrary words
from free text.
"""

import re
import logging
from typing import Dict, Iterable, List, Optional, Union

logger = logging.getLogger(__name__)


GERESH = "׳"
GERSHAYIM = "״"

# Marks stripped before reading a gematria token
_NUMERAL_MARKS_RE = re.compile(r"[\"'״׳\s]")

_FINAL_TO_REGULAR = str.maketrans("ךםןףץ", "כמנפצ")


# ==========================================
#  LETTER TABLES
# ==========================================

ONES = ["", "א", "ב", "ג", "ד", "ה", "ו", "ז", "ח", "ט"]
TENS = ["", "י", "כ", "ל", "מ", "נ", "ס", "ע", "פ", "צ"]
HUNDREDS = ["", "ק", "ר", "ש", "ת", "תק", "תר", "תש", "תת", "תתק"]

ONES_VALUES: Dict[str, int] = {letter: i for i, letter in enumerate(ONES) if letter}
TENS_VALUES: Dict[str, int] = {letter: i * 10 for i, letter in enumerate(TENS) if letter}
HUNDREDS_VALUES: Dict[str, int] = {token: i * 100 for i, token in enumerate(HUNDREDS) if token}

# Longest hundreds token first so תתק is not read as תת + ק
_HUNDREDS_TOKENS = sorted(HUNDREDS_VALUES, key=len, reverse=True)

_SPECIAL_TEENS = {15: "טו", 16: "טז"}
_SPECIAL_TEENS_VALUES = {letters: value for value, letters in _SPECIAL_TEENS.items()}


# ==========================================
#  WORD TABLES
# ==========================================

HEBREW_UNITS: Dict[str, int] = {
    "אחת": 1, "אחד": 1, "שתיים": 2, "שניים": 2, "שתים": 2, "שנים": 2,
    "שלוש": 3, "שלושה": 3, "ארבע": 4, "ארבעה": 4,
    "חמש": 5, "חמישה": 5, "שש": 6, "שישה": 6,
    "שבע": 7, "שבעה": 7, "שמונה": 8, "תשע": 9, "תשעה": 9,
}

HEBREW_TEN: Dict[str, int] = {"עשר": 10, "עשרה": 10}

HEBREW_TENS: Dict[str, int] = {
    "עשרים": 20, "שלושים": 30, "ארבעים": 40, "חמישים": 50,
    "שישים": 60, "שבעים": 70, "שמונים": 80, "תשעים": 90,
}

HEBREW_HUNDREDS: Dict[str, int] = {
    "מאה": 100, "מאתיים": 200, "שלוש מאות": 300, "ארבע מאות": 400,
    "חמש מאות": 500, "שש מאות": 600, "שבע מאות": 700,
    "שמונה מאות": 800, "תשע מאות": 900,
}

TEEN_NUMBERS: Dict[str, int] = {
    "אחת עשרה": 11, "אחד עשר": 11,
    "שתים עשרה": 12, "שנים עשר": 12,
    "שלוש עשרה": 13, "שלושה עשר": 13,
    "ארבע עשרה": 14, "ארבעה עשר": 14,
    "חמש עשרה": 15, "חמישה עשר": 15,
    "שש עשרה": 16, "שישה עשר": 16,
    "שבע עשרה": 17, "שבעה עשר": 17,
    "שמונה עשרה": 18, "שמונה עשר": 18,
    "תשע עשרה": 19, "תשעה עשר": 19,
}

# Output forms (feminine, as used when counting pages and sections)
_UNITS_WORDS = ["", "אחת", "שתיים", "שלוש", "ארבע", "חמש", "שש", "שבע", "שמונה", "תשע"]
_TENS_WORDS = ["", "עשר", "עשרים", "שלושים", "ארבעים", "חמישים", "שישים", "שבעים", "שמונים", "תשעים"]
_TEENS_WORDS = [
    "עשר", "אחת עשרה", "שתים עשרה", "שלוש עשרה", "ארבע עשרה", "חמש עשרה",
    "שש עשרה", "שבע עשרה", "שמונה עשרה", "תשע עשרה",
]
_HUNDREDS_WORDS = [
    "", "מאה", "מאתיים", "שלוש מאות", "ארבע מאות", "חמש מאות",
    "שש מאות", "שבע מאות", "שמונה מאות", "תשע מאות",
]


def _by_length(table: Dict[str, int]) -> List[str]:
    return sorted(table, key=len, reverse=True)


# ==========================================
#  GEMATRIA
# ==========================================

def _letters_below_thousand(num: int) -> str:
    """Bare gematria letters for 0 < num < 1000, no marks."""
    result = HUNDREDS[num // 100]
    num %= 100

    if num in _SPECIAL_TEENS:
        return result + _SPECIAL_TEENS[num]

    return result + TENS[num // 10] + ONES[num % 10]


def _add_marks(letters: str) -> str:
    """Gershayim before the last letter, or a geresh after a lone letter."""
    if len(letters) == 1:
        return letters + GERESH
    return letters[:-1] + GERSHAYIM + letters[-1]


def to_hebrew_numeral(num: int) -> str:
    """
    Convert a number to gematria letters.

    Examples: 1 -> א׳, 15 -> ט״ו, 112 -> קי״ב, 5784 -> ה׳תשפ״ד

    Outside 1..9999 the decimal string is returned unchanged.
    """
    if num <= 0 or num > 9999:
        return str(num)

    thousands, rest = divmod(num, 1000)
    prefix = ONES[thousands] + GERESH if thousands else ""

    if not rest:
        return prefix

    return prefix + _add_marks(_letters_below_thousand(rest))


def to_plain_hebrew_numeral(num: int) -> str:
    """Gematria letters without geresh/gershayim (1..999), e.g. 20 -> כ."""
    if num <= 0 or num > 999:
        return str(num)
    return _letters_below_thousand(num)


def from_hebrew_numeral(hebrew_num: str) -> Optional[int]:
    """
    Read a gematria token back into a number.

    Examples: "ב" -> 2, "כג" -> 23, "ט״ו" -> 15, "תתקצט" -> 999

    Returns None if the token is empty, contains letters that do not form a
    valid hundreds-tens-ones sequence, or adds up to nothing.
    """
    if not hebrew_num:
        return None

    cleaned = _NUMERAL_MARKS_RE.sub("", hebrew_num).translate(_FINAL_TO_REGULAR)
    if not cleaned:
        return None

    total = 0
    i = 0

    for token in _HUNDREDS_TOKENS:
        if cleaned.startswith(token):
            total += HUNDREDS_VALUES[token]
            i = len(token)
            break

    teen = cleaned[i:i + 2]
    if teen in _SPECIAL_TEENS_VALUES:
        total += _SPECIAL_TEENS_VALUES[teen]
        i += 2
    else:
        if i < len(cleaned) and cleaned[i] in TENS_VALUES:
            total += TENS_VALUES[cleaned[i]]
            i += 1
        if i < len(cleaned) and cleaned[i] in ONES_VALUES:
            total += ONES_VALUES[cleaned[i]]
            i += 1

    if i != len(cleaned) or total == 0:
        return None

    return total


# ==========================================
#  SPELLED-OUT WORDS
# ==========================================

def to_hebrew_words(num: int) -> Optional[str]:
    """
    Spell a number out in Hebrew words (1..999).

    Examples: 111 -> "מאה ואחת עשרה", 90 -> "תשעים", 25 -> "עשרים וחמש"
    """
    if num <= 0 or num > 999:
        return None

    parts: List[str] = []

    hundreds, num = divmod(num, 100)
    if hundreds:
        parts.append(_HUNDREDS_WORDS[hundreds])

    if 10 <= num < 20:
        teen = _TEENS_WORDS[num - 10]
        parts.append("ו" + teen if parts else teen)
    else:
        tens, units = divmod(num, 10)
        if tens:
            parts.append(_TENS_WORDS[tens])
        if units:
            parts.append("ו" + _UNITS_WORDS[units] if parts else _UNITS_WORDS[units])

    return " ".join(parts)


def _consume_word(remaining: str, table: Dict[str, int]) -> Optional[tuple]:
    """Match a whole-word entry of `table` at the start of `remaining`."""
    for word in _by_length(table):
        match = re.match(rf"{re.escape(word)}(?:\s+|$)", remaining)
        if match:
            return table[word], remaining[match.end():]
    return None


def _strip_conjunction(remaining: str) -> str:
    return remaining[1:] if remaining.startswith("ו") else remaining


def from_hebrew_words(text: str) -> Optional[int]:
    """
    Read spelled-out Hebrew number words (1..999).

    Examples: "מאה ואחת עשרה" -> 111, "תשעים" -> 90, "עשרים וחמש" -> 25

    Returns None unless the whole text is a number phrase.
    """
    if not text:
        return None

    remaining = re.sub(r"\s+", " ", text.strip())
    total = 0

    consumed = _consume_word(remaining, HEBREW_HUNDREDS)
    if consumed:
        total += consumed[0]
        remaining = _strip_conjunction(consumed[1])

    consumed = _consume_word(remaining, TEEN_NUMBERS) or _consume_word(remaining, HEBREW_TEN)
    if consumed:
        total += consumed[0]
        remaining = consumed[1]
    else:
        consumed = _consume_word(remaining, HEBREW_TENS)
        if consumed:
            total += consumed[0]
            remaining = _strip_conjunction(consumed[1]) if consumed[1] else ""

        consumed = _consume_word(remaining, HEBREW_UNITS)
        if consumed:
            total += consumed[0]
            remaining = consumed[1]

    if remaining.strip() or total == 0:
        return None

    return total


# ==========================================
#  GENERIC PARSING
# ==========================================

def parse_number(value: Union[str, int, None]) -> Optional[int]:
    """Digits first, then gematria, then spelled words."""
    if value is None:
        return None
    if isinstance(value, int):
        return value if value > 0 else None

    cleaned = value.strip()
    if not cleaned:
        return None
    if cleaned.isdigit():
        number = int(cleaned)
        return number if number > 0 else None

    return from_hebrew_numeral(cleaned) or from_hebrew_words(cleaned)


def numbers_match(first: Union[str, int], second: Union[str, int]) -> bool:
    """True when both values read as the same positive number."""
    n1 = parse_number(first)
    n2 = parse_number(second)
    return n1 is not None and n1 == n2


def to_daf_format(daf: int, amud: str = "א") -> str:
    """
    Render a folio the way it is printed.

    Examples: (2, "א") -> "ב׳ ע״א", (10, "ב") -> "י׳ ע״ב"
    Accepts "a"/"b" as well as "א"/"ב".
    """
    side = "ב" if amud in ("ב", "b", "B") else "א"
    return f"{to_hebrew_numeral(daf)} ע{GERSHAYIM}{side}"


# ==========================================
#  QUERY EXPANSION
# ==========================================

_ARABIC_RE = re.compile(r"(?<!\d)(\d+)(?!\d)")

# Gershayim before the last letter, or a geresh after a single letter
_GEMATRIA_RE = re.compile(r"(?<![א-ת])([א-ת]*[\"״][א-ת]|[א-ת]['׳])(?![א-ת])")


def _find_word_number(query: str) -> Optional[tuple]:
    """First spelled-out number word in the query, longest forms first."""
    for table in (TEEN_NUMBERS, HEBREW_HUNDREDS, HEBREW_TENS):
        for word in _by_length(table):
            match = re.search(rf"(?<![א-ת]){re.escape(word)}(?![א-ת])", query)
            if match:
                return match, table[word]
    return None


def _numeral_forms(num: int) -> List[str]:
    forms = [str(num), to_hebrew_numeral(num), to_plain_hebrew_numeral(num)]
    words = to_hebrew_words(num)
    if words:
        forms.append(words)
    return forms


def _substitute(query: str, match: "re.Match", forms: List[str]) -> List[str]:
    start, end = match.span(1) if match.re.groups else match.span()
    return [query[:start] + form + query[end:] for form in forms]


def expand_numeral_variants(query: str) -> List[str]:
    """
    Return the query plus a copy for every other way of writing its numeral.

    expand_numeral_variants("דף 20") ->
        ["דף 20", "דף כ׳", "דף כ", "דף עשרים"]

    The original query always comes first; the list has no duplicates.
    """
    results: List[str] = [query]

    arabic = _ARABIC_RE.search(query)
    if arabic:
        num = int(arabic.group(1))
        if 0 < num <= 999:
            results.extend(_substitute(query, arabic, _numeral_forms(num)))

    gematria = _GEMATRIA_RE.search(query)
    if gematria:
        num = from_hebrew_numeral(gematria.group(1))
        if num and num <= 999:
            results.extend(_substitute(query, gematria, _numeral_forms(num)))

    word_number = _find_word_number(query)
    if word_number:
        match, num = word_number
        results.extend(_substitute(query, match, _numeral_forms(num)))

    return list(dict.fromkeys(results))


def find_number_variants(text: str) -> Dict[str, List[str]]:
    """
    Map every numeral found in `text` to all of its equivalent forms.

    Used to build search indexes where each numeral is stored in every form.
    """
    variants: Dict[str, List[str]] = {}

    for match in _ARABIC_RE.finditer(text):
        num = int(match.group(1))
        if 0 < num <= 999:
            variants[match.group(1)] = list(dict.fromkeys([match.group(1)] + _numeral_forms(num)))

    for match in _GEMATRIA_RE.finditer(text):
        token = match.group(1)
        num = from_hebrew_numeral(token)
        if num and num <= 999:
            variants[token] = list(dict.fromkeys([token] + _numeral_forms(num)))

    for table in (TEEN_NUMBERS, HEBREW_HUNDREDS, HEBREW_TENS):
        for word, num in table.items():
            if re.search(rf"(?<![א-ת]){re.escape(word)}(?![א-ת])", text):
                variants[word] = list(dict.fromkeys([word] + _numeral_forms(num)))

    logger.debug(f"[HebrewNumbers] {len(variants)} numerals found in text")
    return variants


# ==========================================
#  WORD GEMATRIA
# ==========================================

GEMATRIA_VALUES: Dict[str, int] = {
    **ONES_VALUES,
    **TENS_VALUES,
    "ק": 100, "ר": 200, "ש": 300, "ת": 400,
    # Final forms count as their regular letters
    "ך": 20, "ם": 40, "ן": 50, "ף": 80, "ץ": 90,
}

_WORD_TOKEN_RE = re.compile(r"[\u0591-\u05C7\u05D0-\u05EA\"'״׳]+")


def calculate_gematria(word: str) -> int:
    """
    Sum of the letter values of a word.

    Anything that is not a Hebrew letter (nikud, quotes, digits) adds nothing,
    so the value of an empty or non-Hebrew word is 0.
    """
    return sum(GEMATRIA_VALUES.get(char, 0) for char in word or "")


def find_words_by_gematria(words: Iterable[str], value: int) -> List[str]:
    """Words whose gematria equals `value`, first occurrence order, no repeats."""
    if value <= 0:
        return []
    return list(dict.fromkeys(w for w in words if calculate_gematria(w) == value))


def find_words_by_gematria_in_text(text: str, value: int) -> List[str]:
    """Same lookup over the Hebrew words of free text."""
    return find_words_by_gematria(_WORD_TOKEN_RE.findall(text or ""), value)
