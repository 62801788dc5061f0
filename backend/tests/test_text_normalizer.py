"""
Tests for tools/text_normalizer.py
"""

import itertools
import sys
from pathlib import Path

import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import NormalizationOptions
from tools.text_normalizer import (
    contains_html,
    normalize_final_letters,
    normalize_for_match,
    normalize_hebrew_text,
    normalize_with_offsets,
    remove_nikud,
    strip_html,
)


# "shalom" with vowel points
POINTED_SHALOM = "שָׁלוֹם"
# "bereshit" with points and a cantillation mark
POINTED_BERESHIT = "בְּרֵאשִ֖ית"


def all_option_combinations():
    for flags in itertools.product([True, False], repeat=6):
        yield NormalizationOptions(
            remove_nikud=flags[0],
            remove_quotes=flags[1],
            remove_punctuation=flags[2],
            remove_dashes=flags[3],
            normalize_final_letters=flags[4],
            expand_hebrew_numbers=flags[5],
        )


# ==========================================
#  INDIVIDUAL STEPS
# ==========================================

class TestRemoveNikud:
    def test_strips_vowels(self):
        assert remove_nikud(POINTED_SHALOM) == "שלום"

    def test_strips_cantillation(self):
        assert remove_nikud(POINTED_BERESHIT) == "בראשית"

    def test_plain_text_unchanged(self):
        assert remove_nikud("בבא מציעא") == "בבא מציעא"


class TestFinalLetters:
    def test_all_five_fold(self):
        assert normalize_final_letters("ךםןףץ") == "כמנפצ"

    def test_in_words(self):
        assert normalize_final_letters("שלום") == "שלומ"


# ==========================================
#  FULL PIPELINE
# ==========================================

class TestNormalizeHebrewText:
    """Options applied in their fixed order."""

    def test_default_options(self):
        options = NormalizationOptions()
        assert normalize_hebrew_text('ב"מ', options) == "במ"
        assert normalize_hebrew_text("ל׳", options) == "ל"
        assert normalize_hebrew_text(POINTED_SHALOM, options) == "שלום"

    def test_defaults_keep_punctuation_and_dashes(self):
        options = NormalizationOptions()
        assert normalize_hebrew_text("פד:", options) == "פד:"
        assert normalize_hebrew_text("ראש-השנה", options) == "ראש-השנה"

    def test_punctuation_and_dashes(self):
        options = NormalizationOptions(remove_punctuation=True, remove_dashes=True)
        assert normalize_hebrew_text("פד:", options) == "פד"
        assert normalize_hebrew_text("ראש-השנה", options) == "ראשהשנה"
        assert normalize_hebrew_text("בית־דין", options) == "ביתדין"

    def test_final_letters_after_nikud(self):
        options = NormalizationOptions(normalize_final_letters=True)
        assert normalize_hebrew_text(POINTED_SHALOM, options) == "שלומ"

    def test_everything_off_is_identity(self):
        options = NormalizationOptions(
            remove_nikud=False,
            remove_quotes=False,
            remove_punctuation=False,
            remove_dashes=False,
            normalize_final_letters=False,
        )
        text = 'ב"מ ' + POINTED_SHALOM + " - פד:"
        assert normalize_hebrew_text(text, options) == text

    @pytest.mark.parametrize("options", list(all_option_combinations()))
    def test_idempotent(self, options):
        text = 'עיין ב"מ פד: ' + POINTED_BERESHIT + " ראש-השנה (שם), ל׳ ע״א"
        once = normalize_hebrew_text(text, options)
        assert normalize_hebrew_text(once, options) == once

    def test_for_match_lowercases(self):
        assert normalize_for_match("Bava Metzia", NormalizationOptions()) == "bava metzia"


class TestNormalizeWithOffsets:
    def test_quote_removed(self):
        normalized, offsets = normalize_with_offsets('ב"מ דף', NormalizationOptions())
        assert normalized == "במ דף"
        assert offsets == [0, 2, 3, 4, 5, 6]

    def test_offsets_point_back_to_source(self):
        source = POINTED_SHALOM + " עולם"
        normalized, offsets = normalize_with_offsets(source, NormalizationOptions())
        assert normalized == "שלום עולם"
        for i, char in enumerate(normalized):
            assert source[offsets[i]] == char
        assert offsets[-1] == len(source)


# ==========================================
#  HTML
# ==========================================

class TestHtml:
    def test_strip_tags(self):
        assert strip_html("<p>בית <b>דין</b></p>") == "בית דין"

    def test_entities(self):
        assert strip_html("א&nbsp;ב &lt;ג&gt; &quot;ד&quot; &#39;ה&#39;") == "א ב <ג> \"ד\" 'ה'"

    def test_amp_decoded_last(self):
        assert strip_html("&amp;lt;") == "&lt;"

    def test_whitespace_collapses(self):
        assert strip_html("  א \n\n  ב  ") == "א ב"

    def test_empty(self):
        assert strip_html("") == ""
        assert strip_html(None) == ""

    def test_contains_html(self):
        assert contains_html("<br>")
        assert contains_html("א &amp; ב")
        assert not contains_html("בית דין\nשורה שניה")
