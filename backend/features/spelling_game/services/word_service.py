# backend/features/spelling_game/services/word_service.py
"""Random word generation backed by a chat-completion model."""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

import requests

from .. import config
from ..errors import (
    MissingApiKeyError,
    UpstreamEmptyResponse,
    UpstreamHttpError,
    UpstreamMalformedJSON,
    UpstreamSchemaViolation,
)

PROVIDER_NAME = "OpenAI"


@dataclass(frozen=True)
class GenerationPreferences:
    """Difficulty and vocabulary category requested for the next word."""

    english_level: str = config.DEFAULT_ENGLISH_LEVEL
    vocabulary_type: str = config.DEFAULT_VOCABULARY_TYPE

    @classmethod
    def from_raw(
        cls, english_level: Optional[object] = None, vocabulary_type: Optional[object] = None
    ) -> "GenerationPreferences":
        """Normalise client supplied values, falling back to the defaults."""

        return cls(
            english_level=_normalise_choice(
                english_level, config.ENGLISH_LEVELS, config.DEFAULT_ENGLISH_LEVEL, "englishLevel"
            ),
            vocabulary_type=_normalise_choice(
                vocabulary_type, config.VOCABULARY_TYPES, config.DEFAULT_VOCABULARY_TYPE, "vocabularyType"
            ),
        )


def _normalise_choice(value: Optional[object], choices: Dict[str, str], default: str, field: str) -> str:
    if value is None:
        return default
    cleaned = str(value).strip().lower()
    if not cleaned:
        return default
    if cleaned == config.RANDOM_SENTINEL or cleaned in choices:
        return cleaned
    logging.warning(f"Unsupported {field} '{value}', falling back to '{default}'.")
    return default


def build_user_prompt(preferences: Optional[GenerationPreferences] = None) -> str:
    prefs = preferences or GenerationPreferences()
    level = config.ENGLISH_LEVELS.get(prefs.english_level)
    category = config.VOCABULARY_TYPES.get(prefs.vocabulary_type)

    if level and category:
        request = f"Generate a random {level} English word used in {category} settings."
    elif level:
        request = f"Generate a random {level} English word."
    elif category:
        request = f"Generate a random English word used in {category} settings."
    else:
        request = "Generate a random English word of any difficulty from any area of life."
    return f"{request} {config.WORD_RESPONSE_FORMAT_HINT}"


def build_messages(preferences: Optional[GenerationPreferences] = None) -> List[Dict[str, str]]:
    """Return the fixed system/user message pair for the given preferences."""

    return [
        {"role": "system", "content": config.WORD_SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(preferences)},
    ]


def _extract_code_fence_content(text: str) -> str:
    """Return the content of a markdown code fence, or the text itself."""

    match = re.search(r"```(?:json)?\s*([\s\S]+?)```", text, flags=re.IGNORECASE)
    if match:
        return match.group(1).strip()
    return text.strip()


def _call_chat_completion(messages: List[Dict[str, str]]) -> Optional[str]:
    api_key = config.OPENAI_API_KEY
    if not api_key:
        raise MissingApiKeyError("OPENAI_API_KEY")

    url = f"{config.OPENAI_BASE_URL}/chat/completions"
    payload: Dict[str, object] = {
        "model": config.OPENAI_MODEL,
        "messages": messages,
        **config.CHAT_SAMPLING,
    }
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    try:
        response = requests.post(url, json=payload, headers=headers, timeout=config.HTTP_TIMEOUT)
    except requests.RequestException as exc:
        raise UpstreamHttpError(PROVIDER_NAME, None, str(exc)) from exc

    if not response.ok:
        raise UpstreamHttpError(PROVIDER_NAME, response.status_code, response.text)

    try:
        result = response.json()
    except ValueError as exc:
        raise UpstreamMalformedJSON(f"{PROVIDER_NAME} returned a non-JSON envelope") from exc

    return _extract_message_content(result)


def _extract_message_content(result: object) -> Optional[str]:
    """Pull ``choices[0].message.content`` out of the envelope, checking each level."""

    choices = result.get("choices") if isinstance(result, dict) else None
    if not choices:
        return None
    if not isinstance(choices, list) or not isinstance(choices[0], dict):
        raise UpstreamSchemaViolation(f"Unexpected choices in the chat response: {choices!r:.120}")
    message = choices[0].get("message")
    if message is None:
        return None
    if not isinstance(message, dict):
        raise UpstreamSchemaViolation(f"Unexpected message in the chat response: {message!r:.120}")
    content = message.get("content")
    if content is not None and not isinstance(content, str):
        raise UpstreamSchemaViolation(f"Unexpected content type in the chat response: {type(content).__name__}")
    return content


def parse_word(content: Optional[str]) -> str:
    """Validate the model content and return the normalised word."""

    if not isinstance(content, str) or not content.strip():
        raise UpstreamEmptyResponse("Empty response from the chat model")

    try:
        parsed = json.loads(_extract_code_fence_content(content))
    except json.JSONDecodeError as exc:
        raise UpstreamMalformedJSON(f"Invalid JSON response from the chat model: {content[:120]}") from exc

    if not isinstance(parsed, dict) or not isinstance(parsed.get("word"), str):
        raise UpstreamSchemaViolation(f"Invalid response structure from the chat model: {parsed!r}")

    word = parsed["word"].strip().lower()
    if not word:
        raise UpstreamSchemaViolation("The chat model returned a blank word")
    return word


def generate_word(preferences: Optional[GenerationPreferences] = None) -> str:
    """Ask the chat model for one word matching the preferences."""

    messages = build_messages(preferences)
    content = _call_chat_completion(messages)
    word = parse_word(content)
    logging.info(f"Generated spelling word ({len(word)} letters).")
    return word
