"""
Tools package for Psak Din Search
"""

from .hebrew_numbers import (
    to_hebrew_numeral,
    from_hebrew_numeral,
    to_hebrew_words,
    from_hebrew_words,
    expand_numeral_variants,
    parse_number,
)
from .text_normalizer import (
    normalize_hebrew_text,
    normalize_for_match,
    strip_html,
)
from .tractates import (
    TractateRegistry,
    get_registry,
    reset_registry,
)

__all__ = [
    'to_hebrew_numeral',
    'from_hebrew_numeral',
    'to_hebrew_words',
    'from_hebrew_words',
    'expand_numeral_variants',
    'parse_number',
    'normalize_hebrew_text',
    'normalize_for_match',
    'strip_html',
    'TractateRegistry',
    'get_registry',
    'reset_registry',
]
