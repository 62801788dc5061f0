"""
Tests for tools/tractates.py - the tractate registry.
"""

import sys
from pathlib import Path
from concurrent.futures import ThreadPoolExecutor

import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from data.tractates import TRACTATES_DATA
from models import Seder
from tools.tractates import (
    GENERIC_MAX_DAF,
    TractateRegistry,
    build_variant_pattern,
    get_registry,
    reset_registry,
)


# ==========================================
#  STATIC TABLE
# ==========================================

class TestTable:
    """The static data the registry is built from."""

    def test_entry_count(self, registry):
        assert len(TRACTATES_DATA) == 38
        assert len(registry.get_all_tractates()) == 38

    @pytest.mark.parametrize("seder,count", [
        (Seder.ZERAIM, 1),
        (Seder.MOED, 12),
        (Seder.NASHIM, 7),
        (Seder.NEZIKIN, 8),
        (Seder.KODASHIM, 9),
        (Seder.TAHAROT, 1),
    ])
    def test_seder_counts(self, registry, seder, count):
        assert len(registry.get_tractates_by_seder(seder)) == count

    def test_seder_accepts_plain_string(self, registry):
        names = [t.name for t in registry.get_tractates_by_seder("נשים")]
        assert "גיטין" in names

    def test_every_canonical_name_is_a_variant(self):
        for entry in TRACTATES_DATA:
            assert entry["name"] in entry["variants"]

    def test_variants_unique_across_tractates(self):
        seen = {}
        for entry in TRACTATES_DATA:
            for variant in entry["variants"]:
                assert seen.setdefault(variant, entry["name"]) == entry["name"]

    def test_duplicate_variant_rejected_at_build(self):
        table = [
            {"name": "א", "name_english": "A", "max_daf": 10, "seder": "מועד", "variants": ["א", "x"]},
            {"name": "ב", "name_english": "B", "max_daf": 10, "seder": "מועד", "variants": ["ב", "x"]},
        ]
        with pytest.raises(ValueError):
            TractateRegistry(table)


# ==========================================
#  LOOKUPS
# ==========================================

class TestLookups:

    @pytest.mark.parametrize("variant,expected", [
        ('ב"מ', "בבא מציעא"),
        ("ב״מ", "בבא מציעא"),
        ('בב"ק', "בבא קמא"),
        ("ר״ה", "ראש השנה"),
        ("  ברכות  ", "ברכות"),
    ])
    def test_normalize_exact(self, registry, variant, expected):
        assert registry.normalize_tractate(variant) == expected

    def test_normalize_substring_fallback(self, registry):
        assert registry.normalize_tractate("שבת דף ב") == "שבת"

    def test_normalize_unknown_passes_through(self, registry):
        assert registry.normalize_tractate("  xyz  ") == "xyz"
        assert registry.normalize_tractate("") == ""

    def test_info_by_name_and_variant(self, registry):
        info = registry.get_tractate_info('ב"מ')
        assert info is not None
        assert info.name == "בבא מציעא"
        assert info.name_english == "Bava Metzia"
        assert info.max_daf == 119
        assert info.seder == Seder.NEZIKIN
        assert registry.get_tractate_info("בבא מציעא") == info

    def test_info_unknown(self, registry):
        assert registry.get_tractate_info("לא קיים") is None

    def test_variants_map(self, registry):
        variants = registry.get_tractate_variants()
        assert len(variants) == 38
        assert 'ב"מ' in variants["בבא מציעא"]

    def test_pattern_longest_first(self):
        pattern = build_variant_pattern(["שב'", "שבת", "שבת", "מסכת שבת"])
        assert pattern.split("|")[0] == "מסכת\\ שבת"
        assert pattern.count("שבת") == 2


# ==========================================
#  VALIDATION
# ==========================================

class TestValidation:

    @pytest.mark.parametrize("tractate,daf,valid", [
        ("ברכות", 2, True),
        ("ברכות", 64, True),
        ("ברכות", 65, False),
        ("ברכות", 1, False),
        ("ברכות", 70, False),
        ("בבא בתרא", 176, True),
        ('ב"ב', 20, True),
        ("ברכות", "כ", True),
        ("ברכות", "ע", False),
        ("ברכות", "שלום", False),
    ])
    def test_daf_range(self, registry, tractate, daf, valid):
        assert registry.is_valid_daf(tractate, daf) is valid

    def test_unknown_tractate_uses_generic_range(self, registry):
        assert registry.is_valid_daf("לא קיים", GENERIC_MAX_DAF)
        assert not registry.is_valid_daf("לא קיים", GENERIC_MAX_DAF + 1)
        assert not registry.is_valid_daf("לא קיים", 1)

    def test_amud(self):
        assert TractateRegistry.is_valid_amud("א")
        assert TractateRegistry.is_valid_amud("ב")
        assert not TractateRegistry.is_valid_amud("ג")
        assert not TractateRegistry.is_valid_amud("a")


# ==========================================
#  RUNTIME VARIANTS
# ==========================================

class TestAddVariant:

    def test_add_new_variant(self, registry):
        assert registry.add_tractate_variant("בבא מציעא", "מציעא")
        assert registry.normalize_tractate("מציעא") == "בבא מציעא"
        assert "מציעא" in registry.get_tractate_info("בבא מציעא").variants
        assert "מציעא" in registry.variant_pattern()

    def test_reject_existing_variant(self, registry):
        assert not registry.add_tractate_variant("בבא קמא", 'ב"מ')
        assert registry.normalize_tractate('ב"מ') == "בבא מציעא"

    def test_reject_unknown_tractate(self, registry):
        assert not registry.add_tractate_variant("לא קיים", "לק")

    def test_reject_blank_variant(self, registry):
        before = registry.variant_pattern()
        assert not registry.add_tractate_variant("שבת", "   ")
        assert registry.variant_pattern() == before

    def test_previous_snapshot_untouched(self, registry):
        before = registry.get_tractate_info("שבת")
        registry.add_tractate_variant("שבת", "שבתא")
        assert "שבתא" not in before.variants

    def test_concurrent_adds(self, registry):
        variants = [f"variant{i}" for i in range(50)]
        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda v: registry.add_tractate_variant("שבת", v), variants))
        assert all(results)
        info = registry.get_tractate_info("שבת")
        for variant in variants:
            assert variant in info.variants


class TestGlobalRegistry:

    def test_singleton(self):
        assert get_registry() is get_registry()

    def test_reset_drops_runtime_variants(self):
        get_registry().add_tractate_variant("שבת", "שבתא")
        reset_registry()
        assert get_registry().get_tractate_info("שבתא") is None
