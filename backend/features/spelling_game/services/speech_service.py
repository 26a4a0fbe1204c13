# backend/features/spelling_game/services/speech_service.py
import logging
from typing import Dict

import requests

from .. import config
from ..errors import MissingApiKeyError, UpstreamHttpError, UpstreamMissingField

PROVIDER_NAME = "Unreal Speech"


def build_speech_payload(text: str) -> Dict[str, str]:
    return {"Text": text, **config.SPEECH_VOICE_SETTINGS}


def get_audio_url(word: str) -> str:
    """Synthesize ``word`` and return the hosted audio URL."""

    api_key = config.UNREAL_SPEECH_API_KEY
    if not api_key:
        raise MissingApiKeyError("UNREAL_SPEECH_API_KEY")

    headers = {
        "accept": "application/json",
        "content-type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }

    try:
        response = requests.post(
            config.UNREAL_SPEECH_URL,
            json=build_speech_payload(word),
            headers=headers,
            timeout=config.HTTP_TIMEOUT,
        )
    except requests.RequestException as exc:
        raise UpstreamHttpError(PROVIDER_NAME, None, str(exc)) from exc

    if not response.ok:
        raise UpstreamHttpError(PROVIDER_NAME, response.status_code, f"{response.reason}. {response.text}")

    try:
        data = response.json()
    except ValueError as exc:
        raise UpstreamMissingField("No audio URL in the response") from exc

    audio_url = data.get("OutputUri") if isinstance(data, dict) else None
    if not isinstance(audio_url, str) or not audio_url:
        raise UpstreamMissingField("No audio URL in the response")

    logging.info("Speech synthesis succeeded.")
    return audio_url
