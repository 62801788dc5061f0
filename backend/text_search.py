"""
Text Search
===========

Hebrew-aware matching over one text: word containment, proximity, the
AND/OR/NOT/NEAR/LIST condition chain, structural filter rules, excerpts and
highlighting.

Every comparison goes through normalize_for_match() on both sides, so a
query without nikud finds pointed text. When expand_hebrew_numbers is on,
each query term is widened with its numeral variants ("דף 20" also finds
"דף כ"); expand_acronyms and final_letter_variants widen it the same way.
The match is always reported under the term the user typed.

Fuzzy matching is word level: a word of the text matches when it is within
a few edits of the term (see find_fuzzy_words).

Positions used for proximity are measured inside the normalized text; the
word and line of a position are read from that same text.
"""

import re
import logging
from bisect import bisect_right
from typing import Callable, List, Optional, Tuple

from config import get_settings
from models import (
    ConditionOperator,
    FilterRules,
    ListMode,
    NormalizationOptions,
    PositionRule,
    ProximityDirection,
    ProximityMatch,
    RangeType,
    RelativePosition,
    SearchCondition,
    SearchResult,
    SegmentPosition,
    TextPositionRule,
)
from tools.hebrew_numbers import expand_numeral_variants
from tools.hebrew_terms import expand_acronym, final_letter_variants
from tools.text_normalizer import (
    contains_html,
    normalize_for_match,
    normalize_with_offsets,
    strip_html,
)

logger = logging.getLogger(__name__)


PROXIMITY_CONTEXT_CHARS = 50
ELLIPSIS = "..."

_WORD_RE = re.compile(r"\S+")
_SEGMENT_RE = re.compile(r"[^\n]+")
_DIGIT_RE = re.compile(r"\d")


# ==========================================
#  TERM HELPERS
# ==========================================

def _options(normalization: Optional[NormalizationOptions]) -> NormalizationOptions:
    return normalization or NormalizationOptions()


def term_variants(term: str, normalization: Optional[NormalizationOptions] = None) -> List[str]:
    """
    Every normalized form a query term may take in the text.

    Acronyms are expanded first, then numerals, so "20" yields the forms of
    כ׳, כ and עשרים as well. Final-letter spellings are added last. Blank
    terms produce no variants.
    """
    options = _options(normalization)
    term = term.strip()
    if not term:
        return []

    raw = [term]
    if options.expand_acronyms:
        raw.extend(expand_acronym(term))
    if options.expand_hebrew_numbers:
        raw = [v for r in raw for v in expand_numeral_variants(r)]
    if options.final_letter_variants:
        raw = [v for r in raw for v in final_letter_variants(r)]

    normalized = (normalize_for_match(v, options) for v in raw)
    return [v for v in dict.fromkeys(normalized) if v]


def _contains(haystack: str, variants: List[str]) -> bool:
    return any(v in haystack for v in variants)


def _find_positions(haystack: str, variants: List[str]) -> List[int]:
    """Start offset of every occurrence of every variant, ascending."""
    positions = set()
    for variant in variants:
        index = haystack.find(variant)
        while index != -1:
            positions.add(index)
            index = haystack.find(variant, index + 1)
    return sorted(positions)


def _unit_locator(haystack: str, range_type: RangeType) -> Callable[[int], int]:
    """Map a character offset to the unit proximity is measured in."""
    if range_type == RangeType.CHARACTERS:
        return lambda pos: pos

    if range_type == RangeType.LINES:
        return lambda pos: haystack.count("\n", 0, pos)

    word_starts = [m.start() for m in _WORD_RE.finditer(haystack)]
    return lambda pos: max(bisect_right(word_starts, pos) - 1, 0)


# ==========================================
#  CONTAINMENT
# ==========================================

def contains_word(
    text: str,
    word: str,
    normalization: Optional[NormalizationOptions] = None
) -> bool:
    if not text or not word:
        return False
    options = _options(normalization)
    return _contains(normalize_for_match(text, options), term_variants(word, options))


def contains_any_word(
    text: str,
    words: List[str],
    normalization: Optional[NormalizationOptions] = None
) -> bool:
    return any(contains_word(text, w, normalization) for w in words)


def contains_all_words(
    text: str,
    words: List[str],
    normalization: Optional[NormalizationOptions] = None
) -> bool:
    return all(contains_word(text, w, normalization) for w in words)


def parse_word_list(text: Optional[str]) -> List[str]:
    """One word (or phrase) per line, blanks dropped."""
    if not text:
        return []
    return [line.strip() for line in text.split("\n") if line.strip()]


# ==========================================
#  FUZZY MATCHING
# ==========================================

MIN_FUZZY_LENGTH = 3

_FUZZY_WORD_RE = re.compile(r"\w+")


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance: insertions, deletions and substitutions each cost 1."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        cur = [i]
        for j, cb in enumerate(b, 1):
            ins = cur[j - 1] + 1
            dele = prev[j] + 1
            sub = prev[j - 1] + (0 if ca == cb else 1)
            cur.append(min(ins, dele, sub))
        prev = cur
    return prev[-1]


def find_fuzzy_words(
    text: str,
    term: str,
    max_distance: int,
    normalization: Optional[NormalizationOptions] = None
) -> List[str]:
    """
    Words of `text` within max_distance edits of `term`, normalized.

    Terms and words shorter than MIN_FUZZY_LENGTH letters never match
    fuzzily. A multi-word term is compared word by word against runs of
    the same length.
    """
    options = _options(normalization)
    needle = _FUZZY_WORD_RE.findall(normalize_for_match(term, options))
    if not needle or any(len(w) < MIN_FUZZY_LENGTH for w in needle):
        return []

    words = _FUZZY_WORD_RE.findall(normalize_for_match(text, options))
    size = len(needle)
    hits: List[str] = []
    for i in range(len(words) - size + 1):
        window = words[i:i + size]
        if any(len(w) < MIN_FUZZY_LENGTH for w in window):
            continue
        distance = sum(levenshtein_distance(n, w) for n, w in zip(needle, window))
        if distance <= max_distance:
            hits.append(" ".join(window))
    return list(dict.fromkeys(hits))


def fuzzy_contains_word(
    text: str,
    word: str,
    max_distance: int,
    normalization: Optional[NormalizationOptions] = None
) -> bool:
    if not text or not word:
        return False
    return bool(find_fuzzy_words(text, word, max_distance, normalization))


# ==========================================
#  PROXIMITY
# ==========================================

def check_proximity(
    text: str,
    first: int,
    second: int,
    range_size: int,
    range_type: RangeType = RangeType.WORDS
) -> bool:
    """
    Are two character offsets of `text` within range_size units?

    Units are characters, whitespace-delimited words or lines.
    """
    locate = _unit_locator(text, range_type)
    return abs(locate(first) - locate(second)) <= range_size


def _clip(source: str, start: int, end: int) -> str:
    """source[start:end] with an ellipsis on each side that was cut."""
    start = max(start, 0)
    end = min(end, len(source))
    excerpt = source[start:end]
    if start > 0:
        excerpt = ELLIPSIS + excerpt
    if end < len(source):
        excerpt = excerpt + ELLIPSIS
    return excerpt


def proximity_search(
    text: str,
    primary_words: List[str],
    proximity_words: List[str],
    range_size: int = 10,
    range_type: RangeType = RangeType.WORDS,
    normalization: Optional[NormalizationOptions] = None
) -> ProximityMatch:
    """
    Is any primary word within range_size of any proximity word?

    Returns the first pair found. Positions in the result are character
    offsets into the text after HTML stripping.
    """
    if not text or not primary_words or not proximity_words:
        return ProximityMatch(found=False)

    options = _options(normalization)
    source = strip_html(text) if contains_html(text) else text
    haystack, offsets = normalize_with_offsets(source, options)
    locate = _unit_locator(haystack, range_type)

    proximity_hits = [
        (word, _find_positions(haystack, term_variants(word, options)))
        for word in proximity_words
    ]

    for primary in primary_words:
        for primary_pos in _find_positions(haystack, term_variants(primary, options)):
            primary_unit = locate(primary_pos)

            for proximity, positions in proximity_hits:
                for proximity_pos in positions:
                    if abs(primary_unit - locate(proximity_pos)) > range_size:
                        continue

                    src_primary = offsets[primary_pos]
                    src_proximity = offsets[proximity_pos]
                    context = _clip(
                        source,
                        min(src_primary, src_proximity) - PROXIMITY_CONTEXT_CHARS,
                        max(src_primary, src_proximity) + PROXIMITY_CONTEXT_CHARS,
                    )
                    return ProximityMatch(
                        found=True,
                        primary_word=primary,
                        proximity_word=proximity,
                        primary_position=src_primary,
                        proximity_position=src_proximity,
                        context=context,
                    )

    return ProximityMatch(found=False)


def _is_near(
    haystack: str,
    base_variants: List[str],
    near_variants: List[str],
    range_size: int,
    direction: ProximityDirection,
    locate: Callable[[int], int]
) -> bool:
    base_units = [locate(p) for p in _find_positions(haystack, base_variants)]
    near_units = [locate(p) for p in _find_positions(haystack, near_variants)]

    for base in base_units:
        for near in near_units:
            if abs(near - base) > range_size:
                continue
            if direction == ProximityDirection.BOTH:
                return True
            if direction == ProximityDirection.BEFORE and near < base:
                return True
            if direction == ProximityDirection.AFTER and near > base:
                return True

    return False


# ==========================================
#  EXCERPTS AND HIGHLIGHTING
# ==========================================

def get_excerpt(
    text: str,
    word: str,
    context_length: int = 100,
    normalization: Optional[NormalizationOptions] = None
) -> str:
    """
    Window of context_length characters either side of the first match.

    Without a match, the opening 2 * context_length characters are returned.
    """
    options = _options(normalization)
    source = strip_html(text)
    haystack, offsets = normalize_with_offsets(source, options)

    best: Optional[Tuple[int, int]] = None
    for variant in term_variants(word, options):
        index = haystack.find(variant)
        if index != -1 and (best is None or index < best[0]):
            best = (index, len(variant))

    if best is None:
        return _clip(source, 0, context_length * 2)

    index, length = best
    match_start = offsets[index]
    match_end = offsets[index + length - 1] + 1
    return _clip(source, match_start - context_length, match_end + context_length)


def highlight_words(text: str, words: List[str], tag: str = "mark") -> str:
    """Wrap every occurrence of any word in <mark>; one pass, longest first."""
    terms = sorted({w for w in words if w and w.strip()}, key=len, reverse=True)
    if not text or not terms:
        return text

    pattern = re.compile("|".join(re.escape(t) for t in terms), re.IGNORECASE)
    return pattern.sub(lambda m: f"<{tag}>{m.group(0)}</{tag}>", text)


def highlight_search_results(text: str, conditions: List[SearchCondition]) -> str:
    """Highlight every positive term of a condition chain (NOT terms excluded)."""
    terms: List[str] = []
    for condition in conditions:
        if condition.operator == ConditionOperator.NOT:
            continue
        if condition.operator == ConditionOperator.LIST:
            terms.extend(w.strip() for w in condition.list_words if w.strip())
        elif condition.term.strip():
            terms.append(condition.term.strip())

    return highlight_words(text, list(dict.fromkeys(terms)))


# ==========================================
#  FILTER RULES
# ==========================================

def _normalized_words(segment: str, options: NormalizationOptions) -> List[str]:
    return [w for w in normalize_for_match(segment, options).split() if w]


def _first_word_index(words: List[str], needle: str) -> int:
    for index, word in enumerate(words):
        if needle in word:
            return index
    return -1


def check_position_rule(
    segment: str,
    rule: PositionRule,
    normalization: Optional[NormalizationOptions] = None
) -> bool:
    """`rule.word` sits before/after `rule.relative_word`, within max_distance words."""
    options = _options(normalization)
    words = _normalized_words(segment, options)

    word_index = _first_word_index(words, normalize_for_match(rule.word, options))
    relative_index = _first_word_index(words, normalize_for_match(rule.relative_word, options))

    if word_index == -1 or relative_index == -1:
        return False

    if abs(word_index - relative_index) > rule.max_distance:
        return False

    if rule.position == RelativePosition.BEFORE:
        return word_index < relative_index
    if rule.position == RelativePosition.AFTER:
        return word_index > relative_index
    return True


def check_text_position_rule(
    segment: str,
    rule: TextPositionRule,
    normalization: Optional[NormalizationOptions] = None
) -> bool:
    """`rule.word` appears in the first/last within_words words (or anywhere)."""
    options = _options(normalization)
    words = _normalized_words(segment, options)
    needle = normalize_for_match(rule.word, options)

    if rule.position == SegmentPosition.START:
        window = words[:rule.within_words]
    elif rule.position == SegmentPosition.END:
        window = words[-rule.within_words:]
    else:
        window = words

    return any(needle in w for w in window)


def check_filter_rules(
    segment: str,
    rules: FilterRules,
    normalization: Optional[NormalizationOptions] = None
) -> bool:
    """Word counts, digit requirements, then every position rule."""
    word_count = len(segment.split())

    if rules.min_word_count is not None and word_count < rules.min_word_count:
        return False
    if rules.max_word_count is not None and word_count > rules.max_word_count:
        return False

    has_digits = bool(_DIGIT_RE.search(segment))
    if rules.must_contain_numbers and not has_digits:
        return False
    if rules.must_contain_letters_only and has_digits:
        return False

    for rule in rules.position_rules:
        if rule.word and rule.relative_word and not check_position_rule(segment, rule, normalization):
            return False

    for rule in rules.text_position_rules:
        if rule.word and not check_text_position_rule(segment, rule, normalization):
            return False

    return True


# ==========================================
#  CONDITION CHAIN
# ==========================================

def split_text_to_segments(text: str) -> List[Tuple[int, str]]:
    """
    Non-blank lines as (start offset, trimmed line).

    The offset points at the first non-space character, so
    text[start:start + len(line)] == line.
    """
    segments = []
    for match in _SEGMENT_RE.finditer(text):
        raw = match.group(0)
        stripped = raw.strip()
        if stripped:
            start = match.start() + (len(raw) - len(raw.lstrip()))
            segments.append((start, stripped))
    return segments


def evaluate_segment(
    segment: str,
    conditions: List[SearchCondition],
    normalization: Optional[NormalizationOptions] = None,
    range_type: RangeType = RangeType.WORDS
) -> Optional[List[str]]:
    """
    Run the condition chain over one segment.

    conditions[0] is the anchor. Returns the matched terms (as typed,
    deduplicated) if the segment is accepted, otherwise None.
    """
    if not conditions:
        return None

    options = _options(normalization)
    anchor_variants = term_variants(conditions[0].term, options)
    if not anchor_variants:
        return None

    haystack = normalize_for_match(segment, options)
    locate = _unit_locator(haystack, range_type)

    matched: List[str] = []
    anchor_found = _contains(haystack, anchor_variants)
    if anchor_found:
        matched.append(conditions[0].term.strip())

    required_ok = True
    has_or = False
    any_or = False
    excluded = False
    near_ok = True
    list_ok = True

    for condition in conditions[1:]:
        term = condition.term.strip()
        operator = condition.operator

        if operator == ConditionOperator.LIST:
            words = [w.strip() for w in condition.list_words if w.strip()]
            if not words:
                continue
            hits = [w for w in words if _contains(haystack, term_variants(w, options))]
            if condition.list_mode == ListMode.ALL:
                passed = len(hits) == len(words)
            else:
                passed = bool(hits)
            if passed:
                matched.extend(hits)
            else:
                list_ok = False
            continue

        if not term:
            continue

        variants = term_variants(term, options)
        found = _contains(haystack, variants)

        if operator == ConditionOperator.AND:
            if found:
                matched.append(term)
            else:
                required_ok = False

        elif operator == ConditionOperator.OR:
            has_or = True
            if found:
                any_or = True
                matched.append(term)

        elif operator == ConditionOperator.NOT:
            if found:
                excluded = True

        elif operator == ConditionOperator.NEAR:
            proximity_range = condition.proximity_range
            if proximity_range is None:
                proximity_range = get_settings().default_proximity_range
            if anchor_found and _is_near(
                haystack,
                anchor_variants,
                variants,
                proximity_range,
                condition.proximity_direction,
                locate,
            ):
                matched.append(term)
            else:
                near_ok = False

    accepted = (
        required_ok
        and (anchor_found or (has_or and any_or))
        and not excluded
        and near_ok
        and list_ok
        and bool(matched)
    )

    return list(dict.fromkeys(matched)) if accepted else None


def search_text(
    text: str,
    conditions: List[SearchCondition],
    normalization: Optional[NormalizationOptions] = None,
    range_type: RangeType = RangeType.WORDS,
    filter_rules: Optional[FilterRules] = None
) -> List[SearchResult]:
    """
    Evaluate the condition chain against every line of `text`.

    An empty text, an empty chain or a blank anchor gives no results.
    """
    if not text or not text.strip() or not conditions or not conditions[0].term.strip():
        return []

    results: List[SearchResult] = []

    for start, segment in split_text_to_segments(text):
        matched = evaluate_segment(segment, conditions, normalization, range_type)
        if matched is None:
            continue
        if filter_rules and not check_filter_rules(segment, filter_rules, normalization):
            continue

        results.append(SearchResult(
            text=segment,
            start_index=start,
            end_index=start + len(segment),
            matched_terms=matched,
        ))

    logger.debug(
        f"[TextSearch] {len(results)} matching segments for anchor "
        f"{conditions[0].term!r}"
    )
    return results
