"""
Shared fixtures for the Psak Din Search test suite.
"""

import sys
from pathlib import Path

import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import DocumentRecord, NormalizationOptions
from tools.tractates import TractateRegistry, reset_registry


# ==========================================
#  FIXTURES
# ==========================================

@pytest.fixture(autouse=True)
def fresh_global_registry():
    """Variants added by one test must not leak into the next."""
    reset_registry()
    yield
    reset_registry()


@pytest.fixture
def registry() -> TractateRegistry:
    """A private registry built from the static table."""
    return TractateRegistry()


@pytest.fixture
def default_options() -> NormalizationOptions:
    return NormalizationOptions()


@pytest.fixture
def no_expansion() -> NormalizationOptions:
    return NormalizationOptions(expand_hebrew_numbers=False)


@pytest.fixture
def sample_documents():
    """A small corpus of rulings."""
    return [
        DocumentRecord(
            id="1",
            title="נזיקין בשכנים",
            court="בית הדין הרבני תל אביב",
            summary="דיון בנזקי שכנים לפי בבא בתרא",
            text="הנתבע טען כי לפי בבא בתרא דף כ עמוד א אין חיוב. הבית דין דחה את הטענה.",
        ),
        DocumentRecord(
            id="2",
            title="ירושה",
            court="בית הדין הרבני חיפה",
            summary="חלוקת עזבון",
            text="בעניין הירושה נפסק על פי המשנה. הזכרנו גם את דף 20 בסוגיא.",
        ),
        DocumentRecord(
            id="3",
            title="שכירות",
            court="בית הדין הרבני ירושלים",
            summary="שכירות דירה",
            text="השוכר חייב בתיקון הנזק שגרם לדירה.",
        ),
    ]
