"""
Talmud Reference Parser
=======================

Finds Bavli citations in free text and resolves each to a canonical
(tractate, daf, amud) triple.

Five surface forms are recognized, each by its own pattern (compiled by the
registry from tools/citation_patterns.py):

    explicit amud     בבא מציעא דף ל עמוד א  /  ב"מ ל ע"ב
    colon shorthand   ב"מ פד:                 (side ב)
    dot shorthand     פסחים קיב.              (side א)
    daf:amud          שבת 31:א
    bare daf          גיטין נ׳ / ברכות 5      (side א)

The side implied by the colon, dot and bare forms is a printing convention,
not something read off the text. A bare daf always comes back as side א even
when the surrounding prose says otherwise.

A tractate may carry an attached prefix (בפסחים, וב"מ, דבבא קמא); the
reference span starts at the tractate itself.

Candidates that do not resolve (bad numeral, daf out of range) are dropped
silently. Citation text is user-authored and full of near misses.
"""

import logging
from typing import List, Optional, Tuple

from models import TalmudReference, TractateInfo
from tools.hebrew_numbers import from_hebrew_numeral, to_plain_hebrew_numeral, GERSHAYIM
from tools.tractates import TractateRegistry, get_registry

logger = logging.getLogger(__name__)


def parse_daf(token: str) -> Optional[int]:
    """Digits first, then gematria."""
    if token.isdigit():
        return int(token)
    return from_hebrew_numeral(token)


# ==========================================
#  MAIN PARSER
# ==========================================

def find_talmud_references(
    text: str,
    registry: Optional[TractateRegistry] = None
) -> List[TalmudReference]:
    """
    Scan text for Talmud citations.

    Returns references sorted by start_index with no two spans overlapping.
    """
    if not text:
        return []

    registry = registry or get_registry()
    patterns = registry.citation_patterns()

    candidates: List[Tuple[int, int, TalmudReference]] = []
    seen = set()

    for order, pattern in enumerate(patterns):
        for match in pattern.regex.finditer(text):
            start = match.start("tractate")
            end = match.end()

            key = (start, end - start)
            if key in seen:
                continue
            seen.add(key)

            daf = parse_daf(match.group("daf"))
            if daf is None:
                continue

            tractate = registry.normalize_tractate(match.group("tractate"))
            groups = match.groupdict()
            amud = groups.get("amud") or pattern.default_amud

            if not registry.is_valid_amud(amud) or not registry.is_valid_daf(tractate, daf):
                logger.debug(
                    f"[TalmudParser] Dropped {match.group(0)!r} ({pattern.name}): "
                    f"daf {daf} out of range for {tractate}"
                )
                continue

            candidates.append((start, order, TalmudReference(
                tractate=tractate,
                daf=daf,
                amud=amud,
                original_text=text[start:end],
                start_index=start,
                end_index=end,
            )))

    candidates.sort(key=lambda c: (c[0], c[1]))

    references: List[TalmudReference] = []
    last_end = 0
    for _, _, ref in candidates:
        if ref.start_index >= last_end:
            references.append(ref)
            last_end = ref.end_index

    logger.debug(f"[TalmudParser] {len(references)} references in {len(text)} chars")
    return references


# ==========================================
#  FORMATTING
# ==========================================

def format_reference(ref: TalmudReference) -> str:
    """Compact form, e.g. בבא מציעא 30א."""
    return f"{ref.tractate} {ref.daf}{ref.amud}"


def format_reference_hebrew(ref: TalmudReference) -> str:
    """As printed in the margins, e.g. בבא מציעא ל ע״א."""
    daf = to_plain_hebrew_numeral(ref.daf)
    return f"{ref.tractate} {daf} ע{GERSHAYIM}{ref.amud}"


def to_english_ref(
    ref: TalmudReference,
    registry: Optional[TractateRegistry] = None
) -> str:
    """English form, e.g. Bava Metzia 30a."""
    info = (registry or get_registry()).get_tractate_info(ref.tractate)
    name = info.name_english if info else ref.tractate
    side = "a" if ref.amud == "א" else "b"
    return f"{name} {ref.daf}{side}"


# ==========================================
#  REGISTRY SHORTCUTS
# ==========================================

def normalize_tractate(variant: str) -> str:
    return get_registry().normalize_tractate(variant)


def get_tractate_info(name: str) -> Optional[TractateInfo]:
    return get_registry().get_tractate_info(name)


def is_valid_daf(tractate: str, daf) -> bool:
    return get_registry().is_valid_daf(tractate, daf)


def is_valid_amud(amud: str) -> bool:
    return TractateRegistry.is_valid_amud(amud)


def get_all_tractates() -> List[TractateInfo]:
    return get_registry().get_all_tractates()


def get_tractates_by_seder(seder) -> List[TractateInfo]:
    return get_registry().get_tractates_by_seder(seder)


def get_tractate_variants():
    return get_registry().get_tractate_variants()


def add_tractate_variant(tractate: str, variant: str) -> bool:
    return get_registry().add_tractate_variant(tractate, variant)
