"""
Tractate Registry
=================

Lookup layer over data/tractates.py: canonical names, the reverse index from
every known spelling to its tractate, the regex alternation over those
spellings and the citation patterns compiled from it.

Built once from the static table. The only runtime write is
add_tractate_variant(), which swaps in a fresh index, alternation and set of
compiled patterns under the lock, so a reader always sees one complete
snapshot.

USAGE:
    from tools.tractates import get_registry

    registry = get_registry()
    registry.normalize_tractate('ב"מ')        # -> "בבא מציעא"
    registry.is_valid_daf("ברכות", 64)        # -> True
"""

import re
import logging
from threading import RLock
from typing import Dict, List, Optional, Tuple, Union

from models import Seder, TractateInfo
from data.tractates import TRACTATES_DATA
from tools.citation_patterns import CitationPattern, compile_citation_patterns
from tools.hebrew_numbers import parse_number

logger = logging.getLogger(__name__)


# Bounds used when the tractate is not in the registry
GENERIC_MIN_DAF = 2
GENERIC_MAX_DAF = 200

VALID_AMUDIM = ("א", "ב")


def build_variant_pattern(variants) -> str:
    """
    Regex alternation over every variant, longest first.

    Longest first so "בבא בתרא" is tried before anything it starts with.
    """
    ordered = sorted(set(variants), key=len, reverse=True)
    return "|".join(re.escape(v) for v in ordered)


class TractateRegistry:
    """
    Every tractate plus every alias users type for them.

    Thread-safe: lookups read the current snapshot under the lock and
    add_tractate_variant() replaces the snapshot rather than editing it.
    """

    def __init__(self, table: Optional[List[dict]] = None):
        self.lock = RLock()

        tractates: Dict[str, TractateInfo] = {}
        index: Dict[str, str] = {}

        for entry in (table if table is not None else TRACTATES_DATA):
            info = TractateInfo(**entry)
            tractates[info.name] = info
            for variant in info.variants:
                if variant in index and index[variant] != info.name:
                    raise ValueError(
                        f"Variant {variant!r} registered for both "
                        f"{index[variant]} and {info.name}"
                    )
                index[variant] = info.name

        self._tractates = tractates
        self._variant_index = index
        self._pattern = build_variant_pattern(index)
        self._citation_patterns = compile_citation_patterns(self._pattern)

        logger.debug(
            f"[TractateRegistry] Loaded {len(tractates)} tractates, "
            f"{len(index)} variants"
        )

    # ==========================================
    #  LOOKUPS
    # ==========================================

    def get_tractate_info(self, name: str) -> Optional[TractateInfo]:
        """Look up by canonical name first, then by any registered variant."""
        cleaned = name.strip()
        with self.lock:
            info = self._tractates.get(cleaned)
            if info is None and cleaned in self._variant_index:
                info = self._tractates[self._variant_index[cleaned]]
            return info

    def normalize_tractate(self, variant: str) -> str:
        """
        Resolve a spelling to its canonical tractate name.

        Exact variant match first, then substring containment in either
        direction. Unknown input comes back stripped but otherwise unchanged.
        """
        cleaned = variant.strip()
        with self.lock:
            index = self._variant_index

        if cleaned in index:
            return index[cleaned]

        if cleaned:
            for known, name in index.items():
                if known in cleaned or cleaned in known:
                    return name

        return cleaned

    def get_all_tractates(self) -> List[TractateInfo]:
        with self.lock:
            return list(self._tractates.values())

    def get_tractates_by_seder(self, seder: Union[Seder, str]) -> List[TractateInfo]:
        with self.lock:
            return [t for t in self._tractates.values() if t.seder == seder]

    def get_tractate_variants(self) -> Dict[str, List[str]]:
        """Canonical name -> every registered spelling."""
        with self.lock:
            return {name: list(t.variants) for name, t in self._tractates.items()}

    def variant_pattern(self) -> str:
        """Current alternation over all variants (already regex-escaped)."""
        with self.lock:
            return self._pattern

    def citation_patterns(self) -> Tuple[CitationPattern, ...]:
        """Citation regexes compiled from the current alternation."""
        with self.lock:
            return self._citation_patterns

    # ==========================================
    #  VALIDATION
    # ==========================================

    def is_valid_daf(self, tractate: str, daf: Union[int, str]) -> bool:
        """2 <= daf <= max_daf, or the generic 2..200 for an unknown tractate."""
        daf_num = daf if isinstance(daf, int) else parse_number(daf)
        if daf_num is None:
            return False

        info = self.get_tractate_info(tractate)
        max_daf = info.max_daf if info else GENERIC_MAX_DAF
        return GENERIC_MIN_DAF <= daf_num <= max_daf

    @staticmethod
    def is_valid_amud(amud: str) -> bool:
        return amud in VALID_AMUDIM

    # ==========================================
    #  MUTATION
    # ==========================================

    def add_tractate_variant(self, tractate: str, variant: str) -> bool:
        """
        Register a user-taught alias.

        Returns False (and changes nothing) when the tractate is unknown, the
        variant is blank, or the variant already belongs to any tractate.
        """
        cleaned = variant.strip()

        with self.lock:
            info = self._tractates.get(tractate)
            if info is None or not cleaned or cleaned in self._variant_index:
                logger.debug(
                    f"[TractateRegistry] Rejected variant {cleaned!r} for {tractate!r}"
                )
                return False

            tractates = dict(self._tractates)
            tractates[tractate] = info.model_copy(
                update={"variants": info.variants + (cleaned,)}
            )
            index = dict(self._variant_index)
            index[cleaned] = tractate
            pattern = build_variant_pattern(index)
            citation_patterns = compile_citation_patterns(pattern)

            self._tractates = tractates
            self._variant_index = index
            self._pattern = pattern
            self._citation_patterns = citation_patterns

        logger.info(f"[TractateRegistry] Added variant {cleaned!r} -> {tractate}")
        return True


# ==========================================
#  GLOBAL REGISTRY
# ==========================================

_global_registry: Optional[TractateRegistry] = None
_global_lock = RLock()


def get_registry() -> TractateRegistry:
    """Get or create the process-wide registry."""
    global _global_registry

    with _global_lock:
        if _global_registry is None:
            _global_registry = TractateRegistry()
        return _global_registry


def reset_registry() -> None:
    """Drop runtime-added variants (useful for tests)."""
    global _global_registry

    with _global_lock:
        _global_registry = None
