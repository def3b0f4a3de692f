"""
FastAPI application for the JSON translator.

Routes:
- POST /api/translate-json: translate every string value of a JSON document
- POST /api/translate: translate a single piece of text
- GET /languages, GET /providers, GET /health
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from transjson.config import get_settings
from transjson.core.errors import TransJsonError, TranslationError
from transjson.i18n.languages import SUPPORTED_LANGUAGES, SUPPORTED_PROVIDERS, get_language_name
from transjson.i18n.translator import LLMTranslator
from transjson.integrations.sentry import capture_exception, init_sentry, set_tag
from transjson.logging_utils import setup_logging
from transjson.services.translation import (
    JsonTranslationRequest,
    JsonTranslationResponse,
    TextTranslationRequest,
    TextTranslationResponse,
    TranslationService,
)

logger = logging.getLogger(__name__)


# =============================================================================
# App State
# =============================================================================


class AppState:
    """Application state - initialized at startup."""

    translation_service: TranslationService


state = AppState()


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup app resources."""
    settings = get_settings()

    setup_logging(settings.log_level, settings.log_file or None)

    if init_sentry(settings):
        logger.info("Sentry error tracking enabled")

    state.translation_service = TranslationService(LLMTranslator(settings), settings=settings)

    logger.info(
        "transjson API starting in %s mode (max_concurrency=%d, policy=%s)",
        settings.environment,
        state.translation_service.max_concurrency,
        state.translation_service.policy.value,
    )

    yield

    logger.info("transjson API shutting down")


# =============================================================================
# App Setup
# =============================================================================


app = FastAPI(
    title="transjson API",
    description="Translate every string value of a JSON document, preserving its structure",
    version="0.1.0",
    lifespan=lifespan,
)


# CORS
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Dependencies
# =============================================================================


def get_translation_service() -> TranslationService:
    return state.translation_service


# =============================================================================
# Error Handling
# =============================================================================


ERROR_STATUS = {
    "validation": 400,
    "parse": 422,
    "translation": 502,
}

ERROR_SUMMARY = {
    "validation": "Invalid request",
    "parse": "Invalid JSON",
    "translation": "Translation failed",
}


@app.exception_handler(TransJsonError)
async def transjson_error_handler(request: Request, exc: TransJsonError) -> JSONResponse:
    """Report each failure category with its own status and ``category`` tag."""
    set_tag("error.category", exc.category)
    if isinstance(exc, TranslationError):
        capture_exception(exc, path=request.url.path, pointer=exc.pointer)
    else:
        logger.info("Rejected %s request: %s", exc.category, exc)

    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.category, 500),
        content={
            "error": ERROR_SUMMARY.get(exc.category, "Unknown error occurred"),
            "details": str(exc),
            "category": exc.category,
        },
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are validation failures, not parse failures."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    set_tag("error.category", "validation")
    logger.info("Rejected validation request: %s", details)
    return JSONResponse(
        status_code=ERROR_STATUS["validation"],
        content={
            "error": ERROR_SUMMARY["validation"],
            "details": details,
            "category": "validation",
        },
    )


# =============================================================================
# Health Check
# =============================================================================


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "transjson-api"}


# =============================================================================
# Translation
# =============================================================================


@app.post(
    "/api/translate-json",
    response_model=JsonTranslationResponse,
    response_model_exclude_none=True,
)
async def translate_json(
    request: JsonTranslationRequest,
    service: TranslationService = Depends(get_translation_service),
):
    """
    Translate all string values in a JSON document.

    Keys, key order, array order and non-string values are preserved.
    """
    return await service.translate_json(request)


@app.post("/api/translate", response_model=TextTranslationResponse)
async def translate_text(
    request: TextTranslationRequest,
    service: TranslationService = Depends(get_translation_service),
):
    """Translate a single piece of text."""
    return await service.translate_text(request)


@app.get("/languages")
async def list_languages():
    """List all supported languages for translation."""
    return {
        "languages": [
            {
                "code": lang.value,
                "name": get_language_name(lang),
            }
            for lang in SUPPORTED_LANGUAGES
        ]
    }


@app.get("/providers")
async def list_providers():
    """List the available translation backends."""
    return {"providers": [provider.value for provider in SUPPORTED_PROVIDERS]}
