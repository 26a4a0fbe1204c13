"""Spelling practice game: word generation and speech proxy endpoints."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from . import config
from .errors import SpellingGameError
from .services import speech_service, word_service
from .services.word_service import GenerationPreferences

router = APIRouter(tags=["Spelling Game"])

GENERATE_WORD_FAILURE = "Failed to generate word"
SPEECH_FAILURE = "Failed to generate audio"


class GenerateWordRequest(BaseModel):
    """Optional preferences for the next word."""

    # Any value is accepted here; unsupported ones fall back to the defaults.
    english_level: Optional[Any] = Field(default=None, alias="englishLevel")
    vocabulary_type: Optional[Any] = Field(default=None, alias="vocabularyType")

    model_config = ConfigDict(populate_by_name=True)


class GenerateWordResponse(BaseModel):
    word: str


class SpeechRequest(BaseModel):
    text: str = Field(min_length=1, pattern=r"\S")


class SpeechResponse(BaseModel):
    audio_url: str = Field(alias="audioUrl")

    model_config = ConfigDict(populate_by_name=True)


def _no_cache_json(content: Dict[str, Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=config.NO_CACHE_HEADERS)


def _generate_word_response(payload: Optional[GenerateWordRequest]) -> JSONResponse:
    preferences = GenerationPreferences.from_raw(
        payload.english_level if payload else None,
        payload.vocabulary_type if payload else None,
    )
    try:
        word = word_service.generate_word(preferences)
    except SpellingGameError as exc:
        logging.error(f"Error generating word: {exc}", exc_info=True)
        return _no_cache_json({"error": GENERATE_WORD_FAILURE}, status_code=500)
    except Exception as exc:
        logging.error(f"Unexpected error generating word: {exc!r}", exc_info=True)
        return _no_cache_json({"error": GENERATE_WORD_FAILURE}, status_code=500)
    return _no_cache_json(GenerateWordResponse(word=word).model_dump())


async def _read_preferences(request: Request) -> Optional[GenerateWordRequest]:
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        data = json.loads(raw)
    except ValueError:
        logging.warning("Ignoring generate-word body that is not valid JSON.")
        return None
    if not isinstance(data, dict):
        logging.warning("Ignoring generate-word body that is not a JSON object.")
        return None
    return GenerateWordRequest.model_validate(data)


@router.get("/generate-word/options")
def read_generation_options() -> Dict[str, Any]:
    """Return the selectable difficulty levels and vocabulary categories."""

    return {
        "success": True,
        "englishLevels": [
            {"id": key, "label": label} for key, label in config.ENGLISH_LEVELS.items()
        ],
        "vocabularyTypes": [
            {"id": key, "label": label} for key, label in config.VOCABULARY_TYPES.items()
        ],
        "randomOption": config.RANDOM_SENTINEL,
        "defaultEnglishLevel": config.DEFAULT_ENGLISH_LEVEL,
        "defaultVocabularyType": config.DEFAULT_VOCABULARY_TYPE,
        "learnedWordsKey": config.LEARNED_WORDS_KEY,
    }


@router.post("/generate-word", responses={500: {"description": GENERATE_WORD_FAILURE}})
async def generate_word(request: Request) -> JSONResponse:
    """Generate a fresh lowercase word; responses are never cached.

    The body is optional. A missing, unreadable or non-object body is treated
    as no preferences.
    """

    payload = await _read_preferences(request)
    return await run_in_threadpool(_generate_word_response, payload)


@router.get("/generate-word", responses={500: {"description": GENERATE_WORD_FAILURE}})
def generate_word_default() -> JSONResponse:
    return _generate_word_response(None)


@router.post("/speech", responses={500: {"description": SPEECH_FAILURE}})
def synthesize_speech(payload: SpeechRequest) -> JSONResponse:
    """Proxy a synthesis request so the provider key never reaches the browser."""

    try:
        audio_url = speech_service.get_audio_url(payload.text.strip())
    except SpellingGameError as exc:
        logging.error(f"Error in speech synthesis: {exc}", exc_info=True)
        return _no_cache_json({"error": SPEECH_FAILURE}, status_code=500)
    except Exception as exc:
        logging.error(f"Unexpected error in speech synthesis: {exc!r}", exc_info=True)
        return _no_cache_json({"error": SPEECH_FAILURE}, status_code=500)
    return _no_cache_json(SpeechResponse(audio_url=audio_url).model_dump(by_alias=True))


@router.get("/spelling-game", include_in_schema=False)
def read_client_page() -> FileResponse:
    return FileResponse(config.STATIC_DIR / "index.html", media_type="text/html")
