"""
Psak Din Search - API Server
============================

Thin HTTP layer over the search core.

Endpoints:
- GET  /health                - Health check
- POST /references/parse      - Find Talmud citations in text
- POST /numerals/convert      - One numeral in every written form
- POST /numerals/gematria     - Words of a text with the same gematria as a word
- POST /normalize             - Hebrew normalization (optionally HTML first)
- POST /search/text           - Condition-chain search over one text
- POST /search/documents      - Word/proximity search over a corpus
- POST /search/rank           - Weighted field ranking over a corpus
- GET  /tractates             - All tractates (optional ?seder=)
- GET  /tractates/{name}      - One tractate by name or any variant
- POST /tractates/variants    - Teach the registry a new abbreviation
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from config import get_settings
from document_search import rank_documents, search_documents
from logging_config import default_log_file, setup_logging
from models import (
    AddVariantRequest,
    DocumentSearchRequest,
    GematriaRequest,
    NormalizeRequest,
    NumeralRequest,
    ParseReferencesRequest,
    RankRequest,
    Seder,
    TextSearchRequest,
)
from talmud_parser import find_talmud_references
from text_search import search_text
from tools.hebrew_numbers import (
    calculate_gematria,
    expand_numeral_variants,
    find_words_by_gematria_in_text,
    parse_number,
    to_hebrew_numeral,
    to_hebrew_words,
)
from tools.text_normalizer import normalize_hebrew_text, strip_html
from tools.tractates import get_registry
from utils.serialization import serialize_numeral, serialize_references, to_serializable


# ==========================================
#  SETTINGS & LOGGING SETUP
# ==========================================

settings = get_settings()
logger = logging.getLogger("api_server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    log_file = default_log_file(settings.log_dir) if settings.log_dir else None
    setup_logging(
        log_level=settings.log_level,
        log_file=log_file,
        log_format=settings.log_format,
        date_format=settings.log_date_format,
    )

    logger.info("=" * 60)
    logger.info(f"{settings.app_name} API Server Starting")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Tractates loaded: {len(get_registry().get_all_tractates())}")
    logger.info("=" * 60)

    yield

    logger.info(f"{settings.app_name} API Server Shutting Down")


app = FastAPI(
    title=f"{settings.app_name} API",
    description="Hebrew-aware text search and Talmud reference recognition",
    version=settings.app_version,
    lifespan=lifespan,
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==========================================
#  HEALTH CHECK
# ==========================================

@app.get("/health")
async def health_check() -> Dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
    }


# ==========================================
#  REFERENCES & NUMERALS
# ==========================================

@app.post("/references/parse")
async def parse_references(request: ParseReferencesRequest) -> Dict[str, Any]:
    """Find every Talmud citation in the text."""
    logger.info(f"[/references/parse] {len(request.text)} chars")

    try:
        references = find_talmud_references(request.text)
        logger.info(f"[/references/parse] Found {len(references)} references")
        return {
            "references": serialize_references(references),
            "count": len(references),
        }

    except Exception as e:
        logger.exception(f"[/references/parse] Error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/numerals/convert")
async def convert_numeral(request: NumeralRequest) -> Dict[str, Any]:
    """Digits, gematria or spelled words in; every form out."""
    logger.info(f"[/numerals/convert] Value: '{request.value}'")

    try:
        number = parse_number(request.value)
        if number is None:
            result = serialize_numeral(None, request.value, None)
        else:
            result = serialize_numeral(number, to_hebrew_numeral(number), to_hebrew_words(number))
        result["variants"] = expand_numeral_variants(request.value)
        result["word_value"] = calculate_gematria(request.value)
        return result

    except Exception as e:
        logger.exception(f"[/numerals/convert] Error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/numerals/gematria")
async def gematria_matches(request: GematriaRequest) -> Dict[str, Any]:
    """Gematria of a word and every word of the text sharing it."""
    value = calculate_gematria(request.word)
    logger.info(f"[/numerals/gematria] '{request.word}' = {value}")
    return {
        "word": request.word,
        "value": value,
        "matches": find_words_by_gematria_in_text(request.text, value),
    }


@app.post("/normalize")
async def normalize(request: NormalizeRequest) -> Dict[str, Any]:
    """Normalize text with the given options."""
    try:
        text = strip_html(request.text) if request.strip_html else request.text
        return {"normalized": normalize_hebrew_text(text, request.options)}

    except Exception as e:
        logger.exception(f"[/normalize] Error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


# ==========================================
#  SEARCH
# ==========================================

@app.post("/search/text")
def search_in_text(request: TextSearchRequest) -> Dict[str, Any]:
    """Condition-chain search, one result per matching line."""
    anchor = request.conditions[0].term if request.conditions else ""
    logger.info(f"[/search/text] Anchor: '{anchor}', {len(request.conditions)} conditions")

    try:
        results = search_text(
            request.text,
            request.conditions,
            normalization=request.normalization or settings.default_normalization(),
            range_type=request.range_type,
            filter_rules=request.filter_rules,
        )
        logger.info(f"[/search/text] Complete: {len(results)} segments")
        return {
            "results": [to_serializable(r) for r in results],
            "count": len(results),
        }

    except Exception as e:
        logger.exception(f"[/search/text] Error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/search/documents")
def search_in_documents(request: DocumentSearchRequest) -> Dict[str, Any]:
    """Word search (AND/OR, optional proximity) over the posted corpus."""
    logger.info(
        f"[/search/documents] {len(request.documents)} documents, "
        f"words: {request.options.primary_words}"
    )

    try:
        matches = search_documents(request.documents, request.options)
        logger.info(f"[/search/documents] Complete: {len(matches)} matches")
        return {
            "results": [to_serializable(m) for m in matches],
            "count": len(matches),
        }

    except Exception as e:
        logger.exception(f"[/search/documents] Error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/search/rank")
def rank(request: RankRequest) -> Dict[str, Any]:
    """Simple weighted ranking over title, court, summary and text."""
    logger.info(f"[/search/rank] Query: '{request.query}'")

    try:
        ranked = rank_documents(request.documents, request.query, request.limit)
        return {
            "results": [to_serializable(r) for r in ranked],
            "count": len(ranked),
        }

    except Exception as e:
        logger.exception(f"[/search/rank] Error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


# ==========================================
#  TRACTATES
# ==========================================

@app.get("/tractates")
async def list_tractates(seder: Optional[Seder] = None) -> Dict[str, Any]:
    """All tractates, or those of one seder."""
    registry = get_registry()
    tractates = (
        registry.get_tractates_by_seder(seder) if seder else registry.get_all_tractates()
    )
    return {
        "tractates": [to_serializable(t) for t in tractates],
        "count": len(tractates),
    }


@app.get("/tractates/{name}")
async def get_tractate(name: str) -> Dict[str, Any]:
    """One tractate, looked up by canonical name or any variant."""
    info = get_registry().get_tractate_info(name)
    if info is None:
        raise HTTPException(status_code=404, detail=f"Unknown tractate: {name}")
    return to_serializable(info)


@app.post("/tractates/variants")
async def add_variant(request: AddVariantRequest) -> Dict[str, Any]:
    """Register a user-taught abbreviation."""
    logger.info(f"[/tractates/variants] '{request.variant}' -> {request.tractate}")

    added = get_registry().add_tractate_variant(request.tractate, request.variant)
    return {
        "added": added,
        "tractate": request.tractate,
        "variant": request.variant,
    }


# ==========================================
#  MAIN
# ==========================================

if __name__ == "__main__":
    import uvicorn

    print(f"\n{'='*60}")
    print(f"{settings.app_name} API Server")
    print(f"{'='*60}")
    print(f"Environment: {settings.environment}")
    print(f"URL: http://{settings.host}:{settings.port}")
    print(f"{'='*60}\n")

    uvicorn.run(
        "api_server:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )
