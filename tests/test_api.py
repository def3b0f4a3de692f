"""
Tests for the HTTP API.

The LLM capability is replaced by a deterministic fake via dependency
overrides; the lifespan (which builds the real one) is not entered.
"""

import json

import pytest
from fastapi.testclient import TestClient

from transjson.api import app as api_app
from transjson.api.app import app, get_translation_service
from transjson.config import Settings
from transjson.services.translation import TranslationService


# =============================================================================
# Fixtures
# =============================================================================


class UpperCapability:
    async def translate(self, text, source_language, target_language, provider):
        if text == "explode":
            raise ConnectionError("upstream unavailable")
        return text.upper()


@pytest.fixture
def client():
    service = TranslationService(UpperCapability(), settings=Settings())
    app.dependency_overrides[get_translation_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def body(**overrides):
    payload = {
        "json": '{"a": "hi", "b": ["yo", 3, null]}',
        "sourceLanguage": "English",
        "targetLanguage": "Spanish",
        "provider": "openai",
    }
    payload.update(overrides)
    return payload


# =============================================================================
# Translate JSON
# =============================================================================


class TestTranslateJsonRoute:
    def test_success(self, client):
        response = client.post("/api/translate-json", json=body())

        assert response.status_code == 200
        data = response.json()
        assert json.loads(data["translatedJson"]) == {"a": "HI", "b": ["YO", 3, None]}
        assert data["sourceLanguage"] == "English"
        assert data["targetLanguage"] == "Spanish"
        assert data["provider"] == "openai"
        assert "failures" not in data

    def test_missing_field_is_validation(self, client):
        payload = body()
        del payload["provider"]
        response = client.post("/api/translate-json", json=payload)

        assert response.status_code == 400
        assert response.json()["category"] == "validation"
        assert "Missing required fields" in response.json()["details"]

    def test_empty_document_is_validation(self, client):
        response = client.post("/api/translate-json", json=body(json=""))
        assert response.status_code == 400
        assert response.json()["category"] == "validation"

    def test_invalid_json_is_parse(self, client):
        response = client.post("/api/translate-json", json=body(json="{invalid"))
        assert response.status_code == 422
        data = response.json()
        assert data["category"] == "parse"
        assert data["error"] == "Invalid JSON"

    def test_leaf_failure_is_translation(self, client):
        response = client.post("/api/translate-json", json=body(json='["ok", "explode"]'))
        assert response.status_code == 502
        data = response.json()
        assert data["category"] == "translation"
        assert "upstream unavailable" in data["details"]
        assert "translatedJson" not in data

    def test_malformed_body_is_validation(self, client):
        payload = body(json={"a": "hi"})
        response = client.post("/api/translate-json", json=payload)

        assert response.status_code == 400
        data = response.json()
        assert data["category"] == "validation"
        assert data["error"] == "Invalid request"
        assert "json" in data["details"]

    def test_error_category_tagged(self, client, monkeypatch):
        tags = []
        monkeypatch.setattr(api_app, "set_tag", lambda key, value: tags.append((key, value)))

        client.post("/api/translate-json", json=body(json="{invalid"))
        client.post("/api/translate-json", json=body(json=["not", "text"]))

        assert tags == [("error.category", "parse"), ("error.category", "validation")]

    def test_unpaired_surrogate_round_trips(self, client):
        response = client.post("/api/translate-json", json=body(json='["\\ud800"]'))

        assert response.status_code == 200
        assert response.json()["translatedJson"] == '[\n  "\\ud800"\n]'


# =============================================================================
# Translate text
# =============================================================================


class TestTranslateTextRoute:
    def test_success(self, client):
        response = client.post("/api/translate", json={
            "text": "hello",
            "sourceLanguage": "English",
            "targetLanguage": "German",
            "provider": "anthropic",
        })
        assert response.status_code == 200
        assert response.json() == {
            "translatedText": "HELLO",
            "sourceLanguage": "English",
            "targetLanguage": "German",
            "provider": "anthropic",
        }

    def test_blank_text(self, client):
        response = client.post("/api/translate", json={
            "text": "   ",
            "sourceLanguage": "English",
            "targetLanguage": "German",
            "provider": "anthropic",
        })
        assert response.status_code == 400
        assert response.json()["details"] == "Text cannot be empty"


# =============================================================================
# Metadata
# =============================================================================


class TestMetadataRoutes:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_languages(self, client):
        languages = client.get("/languages").json()["languages"]
        assert {"code": "Chinese", "name": "Chinese (Simplified)"} in languages
        assert len(languages) == 15

    def test_providers(self, client):
        assert client.get("/providers").json() == {"providers": ["openai", "anthropic", "gemini"]}
