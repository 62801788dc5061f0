"""
Central Data Models for Psak Din Search
=======================================

Every structure that crosses a module boundary: tractate entries, parsed
references, normalization options, search conditions and filter rules,
results, corpus documents, and the API request bodies.

References and options are frozen and hashable; everything a user builds
(conditions, rules) is validated on construction.
"""

from enum import Enum
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


Amud = Literal["א", "ב"]


# ==========================================
#  ENUMS
# ==========================================

class Seder(str, Enum):
    """The six orders of the Mishnah."""
    ZERAIM = "זרעים"
    MOED = "מועד"
    NASHIM = "נשים"
    NEZIKIN = "נזיקין"
    KODASHIM = "קדשים"
    TAHAROT = "טהרות"


class ConditionOperator(str, Enum):
    """How a search condition joins the condition chain."""
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    NEAR = "NEAR"
    LIST = "LIST"


class ProximityDirection(str, Enum):
    """Where a NEAR term may sit relative to the anchor term."""
    BEFORE = "before"
    AFTER = "after"
    BOTH = "both"


class ListMode(str, Enum):
    """LIST condition mode."""
    ANY = "any"
    ALL = "all"


class RangeType(str, Enum):
    """Unit used to measure proximity distance."""
    CHARACTERS = "characters"
    WORDS = "words"
    LINES = "lines"


class SearchLogic(str, Enum):
    """How primary words combine in a document search."""
    AND = "AND"
    OR = "OR"


class RelativePosition(str, Enum):
    """Position rule: word relative to another word."""
    BEFORE = "before"
    AFTER = "after"
    ANYWHERE = "anywhere"


class SegmentPosition(str, Enum):
    """Text position rule: where in the segment a word must appear."""
    START = "start"
    END = "end"
    ANYWHERE = "anywhere"


# ==========================================
#  TALMUD REFERENCE MODELS
# ==========================================

class TractateInfo(BaseModel):
    """Static registry entry for one tractate."""
    model_config = ConfigDict(frozen=True)

    name: str
    name_english: str
    max_daf: int = Field(ge=2)
    seder: Seder
    variants: Tuple[str, ...] = ()


class TalmudReference(BaseModel):
    """
    A canonical citation found in free text.

    start_index/end_index are a half-open range into the parsed string.
    """
    model_config = ConfigDict(frozen=True)

    tractate: str
    daf: int
    amud: Amud
    original_text: str
    start_index: int = Field(ge=0)
    end_index: int = Field(ge=0)


# ==========================================
#  NORMALIZATION
# ==========================================

class NormalizationOptions(BaseModel):
    """Which Hebrew-specific canonicalizations apply before comparing text."""
    model_config = ConfigDict(frozen=True)

    remove_nikud: bool = True
    remove_quotes: bool = True
    remove_punctuation: bool = False
    remove_dashes: bool = False
    normalize_final_letters: bool = False
    # Query-side expansion; ignored when normalizing a text
    expand_hebrew_numbers: bool = True
    expand_acronyms: bool = False
    final_letter_variants: bool = False


# ==========================================
#  SEGMENT SEARCH MODELS
# ==========================================

class SearchCondition(BaseModel):
    """
    One link in a condition chain.

    The first condition in a chain is the anchor; its operator is ignored.
    A NEAR condition without proximity_range uses the configured default.
    """
    term: str = ""
    operator: ConditionOperator = ConditionOperator.AND
    proximity_range: Optional[int] = Field(None, ge=0)
    proximity_direction: ProximityDirection = ProximityDirection.BOTH
    list_words: List[str] = []
    list_mode: ListMode = ListMode.ANY


class PositionRule(BaseModel):
    """`word` must sit before/after `relative_word` within max_distance words."""
    word: str
    relative_word: str
    position: RelativePosition = RelativePosition.ANYWHERE
    max_distance: int = Field(10, ge=0)


class TextPositionRule(BaseModel):
    """`word` must appear within the first/last `within_words` words."""
    word: str
    position: SegmentPosition = SegmentPosition.ANYWHERE
    within_words: int = Field(3, ge=1)


class FilterRules(BaseModel):
    """Structural filters applied to a segment after the condition chain."""
    min_word_count: Optional[int] = Field(None, ge=0)
    max_word_count: Optional[int] = Field(None, ge=0)
    must_contain_numbers: bool = False
    must_contain_letters_only: bool = False
    position_rules: List[PositionRule] = []
    text_position_rules: List[TextPositionRule] = []


class SearchResult(BaseModel):
    """A segment that satisfied the whole condition chain."""
    text: str
    start_index: int
    end_index: int
    matched_terms: List[str] = []


class ProximityMatch(BaseModel):
    """Outcome of a proximity search over one text."""
    found: bool = False
    primary_word: Optional[str] = None
    proximity_word: Optional[str] = None
    primary_position: Optional[int] = None
    proximity_position: Optional[int] = None
    context: Optional[str] = None


# ==========================================
#  DOCUMENT SEARCH MODELS
# ==========================================

class DocumentRecord(BaseModel):
    """A document handed in by the persistence layer."""
    id: str
    text: str = ""
    title: str = ""
    court: Optional[str] = None
    summary: Optional[str] = None
    year: Optional[int] = None
    case_number: Optional[str] = None


class DocumentSearchOptions(BaseModel):
    """Options for a corpus-wide word search."""
    primary_words: List[str]
    logic: SearchLogic = SearchLogic.OR
    use_proximity: bool = False
    proximity_words: List[str] = []
    range: int = Field(10, ge=0)
    range_type: RangeType = RangeType.WORDS
    normalization: NormalizationOptions = NormalizationOptions()
    fuzzy_search: bool = False
    max_fuzzy_distance: int = Field(2, ge=0)

    @field_validator("primary_words", "proximity_words")
    @classmethod
    def drop_blank_words(cls, v):
        """Blank entries come from empty textarea lines."""
        return [w.strip() for w in v if w and w.strip()]


class DocumentMatch(BaseModel):
    """A document that satisfied a corpus search."""
    document_id: str
    title: str = ""
    matched_primary_words: List[str] = []
    matched_proximity_words: List[str] = []
    excerpt: str = ""
    proximity_context: Optional[str] = None


class RankedDocument(BaseModel):
    """A document scored by the simple weighted ranker."""
    document_id: str
    title: str = ""
    rank: int = 0
    headline: str = ""


# ==========================================
#  API REQUEST MODELS
# ==========================================

class ParseReferencesRequest(BaseModel):
    """Request to scan text for Talmud citations."""
    text: str


class NumeralRequest(BaseModel):
    """Any numeral form: digits, gematria or spelled words."""
    value: str = Field(..., min_length=1)

    @field_validator("value")
    @classmethod
    def value_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()


class GematriaRequest(BaseModel):
    """Find the words of a text whose letters sum to the same value as `word`."""
    text: str
    word: str = Field(..., min_length=1)


class NormalizeRequest(BaseModel):
    """Request to normalize text."""
    text: str
    options: NormalizationOptions = NormalizationOptions()
    strip_html: bool = False


class TextSearchRequest(BaseModel):
    """Condition-chain search over one text."""
    text: str
    conditions: List[SearchCondition]
    normalization: Optional[NormalizationOptions] = None
    range_type: RangeType = RangeType.WORDS
    filter_rules: Optional[FilterRules] = None


class DocumentSearchRequest(BaseModel):
    """Word search over a corpus."""
    documents: List[DocumentRecord]
    options: DocumentSearchOptions


class RankRequest(BaseModel):
    """Simple ranked search over a corpus."""
    documents: List[DocumentRecord]
    query: str = Field(..., min_length=1)
    limit: Optional[int] = Field(None, ge=1)


class AddVariantRequest(BaseModel):
    """Teach the registry a new tractate abbreviation."""
    tractate: str
    variant: str = Field(..., min_length=1)
