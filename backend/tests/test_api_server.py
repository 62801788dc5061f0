"""
Tests for the FastAPI endpoints in api_server.py
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from api_server import app

client = TestClient(app)


@pytest.fixture
def documents_payload(sample_documents):
    return [d.model_dump() for d in sample_documents]


@pytest.fixture
def mock_find_references(mocker):
    """Mock the parser so the endpoint's error path can be exercised."""
    return mocker.patch("api_server.find_talmud_references")


# ==========================================
#  HEALTH
# ==========================================

def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


# ==========================================
#  REFERENCES & NUMERALS
# ==========================================

class TestReferences:

    def test_parse(self):
        response = client.post("/references/parse", json={"text": 'עיין ב"מ פד: ובתוס׳ שם'})
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        ref = data["references"][0]
        assert ref["tractate"] == "בבא מציעא"
        assert ref["daf"] == 84
        assert ref["amud"] == "ב"
        assert ref["original_text"] == 'ב"מ פד:'
        assert ref["display"] == "בבא מציעא 84ב"
        assert ref["display_hebrew"] == "בבא מציעא פד ע״ב"
        assert ref["english"] == "Bava Metzia 84b"

    def test_no_references(self):
        response = client.post("/references/parse", json={"text": "שלום עולם"})
        assert response.status_code == 200
        assert response.json() == {"references": [], "count": 0}

    def test_parser_error_returns_500(self, mock_find_references):
        mock_find_references.side_effect = RuntimeError("boom")
        response = client.post("/references/parse", json={"text": "שבת לא:ב"})
        assert response.status_code == 500
        assert response.json()["detail"] == "boom"


class TestNumerals:

    def test_digits(self):
        response = client.post("/numerals/convert", json={"value": "112"})
        assert response.status_code == 200
        data = response.json()
        assert data["number"] == 112
        assert data["gematria"] == "קי״ב"
        assert data["words"] == "מאה ושתים עשרה"
        assert "קיב" in data["variants"]

    def test_gematria(self):
        data = client.post("/numerals/convert", json={"value": "ט״ו"}).json()
        assert data["number"] == 15
        assert data["words"] == "חמש עשרה"

    def test_not_a_number(self):
        data = client.post("/numerals/convert", json={"value": "שלום"}).json()
        assert data["number"] is None
        assert data["words"] is None
        assert data["variants"] == ["שלום"]
        assert data["word_value"] == 376

    def test_blank_value_rejected(self):
        assert client.post("/numerals/convert", json={"value": "   "}).status_code == 422

    def test_gematria_matches(self):
        data = client.post(
            "/numerals/gematria",
            json={"text": "כל מי שטוב, טוב לב", "word": "חי"},
        ).json()
        assert data["value"] == 18
        assert data["matches"] == []

        data = client.post("/numerals/gematria", json={"text": "כל מי שטוב", "word": "ים"}).json()
        assert data["value"] == 50
        assert data["matches"] == ["כל", "מי"]

    def test_gematria_needs_word(self):
        assert client.post("/numerals/gematria", json={"text": "כל", "word": ""}).status_code == 422


class TestNormalize:

    def test_default_options(self):
        data = client.post("/normalize", json={"text": 'ב"מ'}).json()
        assert data["normalized"] == "במ"

    def test_strip_html_first(self):
        data = client.post(
            "/normalize",
            json={"text": "<b>ראש-השנה</b>", "strip_html": True, "options": {"remove_dashes": True}},
        ).json()
        assert data["normalized"] == "ראשהשנה"


# ==========================================
#  SEARCH
# ==========================================

class TestSearchEndpoints:

    def test_text_search(self):
        response = client.post(
            "/search/text",
            json={
                "text": "שורה עם דין\nשורה אחרת\nעוד דין כאן",
                "conditions": [{"term": "דין"}, {"term": "כאן", "operator": "NOT"}],
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["results"][0]["text"] == "שורה עם דין"
        assert data["results"][0]["start_index"] == 0
        assert data["results"][0]["matched_terms"] == ["דין"]

    def test_text_search_bad_operator(self):
        response = client.post(
            "/search/text",
            json={"text": "דין", "conditions": [{"term": "דין", "operator": "XOR"}]},
        )
        assert response.status_code == 422

    def test_document_search(self, documents_payload):
        response = client.post(
            "/search/documents",
            json={"documents": documents_payload, "options": {"primary_words": ["ירושה"]}},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["results"][0]["document_id"] == "2"

    def test_document_search_fuzzy(self, documents_payload):
        options = {"primary_words": ["הנתבעה"], "fuzzy_search": True, "max_fuzzy_distance": 1}
        response = client.post(
            "/search/documents",
            json={"documents": documents_payload, "options": options},
        )
        assert response.status_code == 200
        data = response.json()
        assert [r["document_id"] for r in data["results"]] == ["1"]
        assert data["results"][0]["matched_primary_words"] == ["הנתבעה"]

    def test_text_search_acronyms(self):
        response = client.post(
            "/search/text",
            json={
                "text": "כמבואר בשולחן ערוך\nשורה אחרת",
                "conditions": [{"term": 'שו"ע'}],
                "normalization": {"expand_acronyms": True},
            },
        )
        assert response.json()["count"] == 1

    def test_rank(self, documents_payload):
        response = client.post("/search/rank", json={"documents": documents_payload, "query": "שכירות"})
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["results"][0]["document_id"] == "3"
        assert data["results"][0]["rank"] == 17

    def test_rank_empty_query_rejected(self, documents_payload):
        response = client.post("/search/rank", json={"documents": documents_payload, "query": ""})
        assert response.status_code == 422


# ==========================================
#  TRACTATES
# ==========================================

class TestTractates:

    def test_list_all(self):
        data = client.get("/tractates").json()
        assert data["count"] == 38

    def test_list_by_seder(self):
        data = client.get("/tractates", params={"seder": "נשים"}).json()
        assert data["count"] == 7

    def test_unknown_seder(self):
        assert client.get("/tractates", params={"seder": "xyz"}).status_code == 422

    def test_get_one(self):
        response = client.get("/tractates/גיטין")
        assert response.status_code == 200
        data = response.json()
        assert data["name_english"] == "Gittin"
        assert data["max_daf"] == 90

    def test_get_unknown(self):
        assert client.get("/tractates/xyz").status_code == 404

    def test_add_variant_then_parse(self):
        payload = {"tractate": "בבא מציעא", "variant": "מציעא"}
        first = client.post("/tractates/variants", json=payload).json()
        assert first == {"added": True, "tractate": "בבא מציעא", "variant": "מציעא"}

        again = client.post("/tractates/variants", json=payload).json()
        assert again["added"] is False

        data = client.post("/references/parse", json={"text": "מציעא דף ל עמוד ב"}).json()
        assert data["count"] == 1
        assert data["references"][0]["tractate"] == "בבא מציעא"
