"""
Serialization helpers shared across the backend.

Everything the API returns goes through here so responses carry plain JSON
types: enums as their values, tuples as lists.
"""

from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel

from models import TalmudReference
from talmud_parser import format_reference, format_reference_hebrew, to_english_ref


def to_serializable(obj: Any) -> Any:
    """Pydantic models to JSON-ready dicts; anything else is returned as is."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    return obj


def serialize_references(references: Iterable[TalmudReference]) -> List[Dict[str, Any]]:
    """
    TalmudReference objects as plain dicts, with the three display forms
    (compact, Hebrew, English) next to the raw fields.
    """
    serialized: List[Dict[str, Any]] = []
    for ref in references:
        entry = to_serializable(ref)
        entry.update(
            {
                "display": format_reference(ref),
                "display_hebrew": format_reference_hebrew(ref),
                "english": to_english_ref(ref),
            }
        )
        serialized.append(entry)
    return serialized


def serialize_numeral(number: Optional[int], gematria: str, words: Optional[str]) -> Dict[str, Any]:
    """One numeral in all its written forms."""
    return {
        "number": number,
        "gematria": gematria,
        "words": words,
    }
