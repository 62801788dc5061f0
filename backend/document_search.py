"""
Document Search
===============

Word search and simple ranking over a corpus of DocumentRecord.

search_documents() checks every document independently, so large corpora
are split across a thread pool. Results always come back in corpus order,
whatever order the workers finish in.

rank_documents() is the weighted field scorer:

    title contains query      +10   (+5 more if the title starts with it)
    court contains query      +3
    summary contains query    +2
    full text contains query  +1
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from config import get_settings
from models import (
    DocumentMatch,
    DocumentRecord,
    DocumentSearchOptions,
    RankedDocument,
    SearchLogic,
)
from text_search import (
    contains_word,
    find_fuzzy_words,
    get_excerpt,
    highlight_words,
    proximity_search,
)
from tools.text_normalizer import strip_html

logger = logging.getLogger(__name__)


TITLE_WEIGHT = 10
TITLE_PREFIX_BONUS = 5
COURT_WEIGHT = 3
SUMMARY_WEIGHT = 2
TEXT_WEIGHT = 1

HEADLINE_BEFORE = 50
HEADLINE_AFTER = 150
HEADLINE_MAX_LENGTH = 200


# ==========================================
#  WORD SEARCH
# ==========================================

def _locate_primary(text: str, word: str, options: DocumentSearchOptions) -> Optional[str]:
    """
    The form `word` takes in `text`: the word itself on an exact match, the
    closest spelling found when fuzzy search is on, otherwise None.
    """
    if contains_word(text, word, options.normalization):
        return word
    if options.fuzzy_search:
        hits = find_fuzzy_words(text, word, options.max_fuzzy_distance, options.normalization)
        if hits:
            return hits[0]
    return None


def match_document(
    document: DocumentRecord,
    options: DocumentSearchOptions,
    excerpt_length: int = 150
) -> Optional[DocumentMatch]:
    """
    Check one document; None if it does not satisfy the options.

    Fuzzy hits are reported under the word as typed, like exact ones.
    """
    if not options.primary_words or not document.text:
        return None

    text = strip_html(document.text)
    normalization = options.normalization

    wanted = list(dict.fromkeys(options.primary_words))
    found = {}
    for word in wanted:
        form = _locate_primary(text, word, options)
        if form is not None:
            found[word] = form
    matched_primary = list(found)

    if options.logic == SearchLogic.AND:
        passed = len(matched_primary) == len(wanted)
    else:
        passed = bool(matched_primary)

    if not passed:
        return None

    excerpt = get_excerpt(text, found[matched_primary[0]], excerpt_length, normalization)

    if not (options.use_proximity and options.proximity_words):
        return DocumentMatch(
            document_id=document.id,
            title=document.title,
            matched_primary_words=matched_primary,
            excerpt=excerpt,
        )

    proximity = proximity_search(
        document.text,
        list(found.values()),
        options.proximity_words,
        options.range,
        options.range_type,
        normalization,
    )
    if not proximity.found:
        return None

    matched_proximity = [
        word for word in options.proximity_words
        if contains_word(text, word, normalization)
    ]

    return DocumentMatch(
        document_id=document.id,
        title=document.title,
        matched_primary_words=matched_primary,
        matched_proximity_words=matched_proximity,
        excerpt=excerpt,
        proximity_context=proximity.context,
    )


def search_documents(
    documents: List[DocumentRecord],
    options: DocumentSearchOptions,
    max_workers: Optional[int] = None
) -> List[DocumentMatch]:
    """
    Run a word search over the corpus.

    Corpora above the configured threshold are evaluated in a thread pool.
    The returned list follows the order of `documents`.
    """
    if not documents or not options.primary_words:
        return []

    settings = get_settings()
    workers = max_workers or settings.search_max_workers
    excerpt_length = settings.excerpt_length

    def check(document: DocumentRecord) -> Optional[DocumentMatch]:
        return match_document(document, options, excerpt_length)

    if len(documents) > settings.parallel_search_threshold and workers > 1:
        logger.debug(
            f"[DocumentSearch] Parallel search over {len(documents)} documents "
            f"with {workers} workers"
        )
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order
            outcomes = list(executor.map(check, documents))
    else:
        outcomes = [check(document) for document in documents]

    matches = [m for m in outcomes if m is not None]
    logger.info(
        f"[DocumentSearch] {len(matches)}/{len(documents)} documents matched "
        f"{options.primary_words}"
    )
    return matches


# ==========================================
#  RANKING
# ==========================================

def score_document(document: DocumentRecord, query: str) -> int:
    """Weighted field score; 0 means no field contains the query."""
    needle = query.lower()
    rank = 0

    title = (document.title or "").lower()
    if needle in title:
        rank += TITLE_WEIGHT
        if title.startswith(needle):
            rank += TITLE_PREFIX_BONUS

    if needle in (document.court or "").lower():
        rank += COURT_WEIGHT

    if needle in (document.summary or "").lower():
        rank += SUMMARY_WEIGHT

    if needle in (document.text or "").lower():
        rank += TEXT_WEIGHT

    return rank


def extract_headline(text: str, query: str, max_length: int = HEADLINE_MAX_LENGTH) -> str:
    """Snippet around the first match with the query wrapped in <mark>."""
    if not text:
        return ""

    index = text.lower().find(query.lower())
    if index == -1:
        return text[:max_length] + ("..." if len(text) > max_length else "")

    start = max(0, index - HEADLINE_BEFORE)
    end = min(len(text), index + len(query) + HEADLINE_AFTER)

    headline = text[start:end]
    if start > 0:
        headline = "..." + headline
    if end < len(text):
        headline = headline + "..."

    return highlight_words(headline, [query])


def rank_documents(
    documents: List[DocumentRecord],
    query: str,
    limit: Optional[int] = None
) -> List[RankedDocument]:
    """
    Score every document against `query`, best first.

    Documents scoring 0 are dropped; equal scores keep corpus order.
    """
    query = query.strip()
    if not query:
        return []

    ranked = []
    for document in documents:
        rank = score_document(document, query)
        if rank == 0:
            continue
        ranked.append(RankedDocument(
            document_id=document.id,
            title=document.title,
            rank=rank,
            headline=extract_headline(document.summary or strip_html(document.text), query),
        ))

    # sorted() is stable, so ties stay in corpus order
    ranked = sorted(ranked, key=lambda r: r.rank, reverse=True)

    if limit is not None:
        ranked = ranked[:limit]

    logger.debug(f"[DocumentSearch] Ranked {len(ranked)} documents for {query!r}")
    return ranked
