# backend/features/spelling_game/config.py
"""
Centralised settings for the spelling game feature.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# --- Load environment variables from .env ---
load_dotenv()

# --- Paths ---
FEATURE_ROOT = Path(__file__).resolve().parent
STATIC_DIR = FEATURE_ROOT / "static"
LEARNED_WORDS_PATH = Path(os.getenv("LEARNED_WORDS_PATH", "learned_words.json"))
LEARNED_WORDS_KEY = "learnedWords"

# --- Logging ---
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- HTTP ---
# Unset means requests waits for the upstream to settle on its own.
_raw_timeout = os.getenv("SPELLING_HTTP_TIMEOUT")
HTTP_TIMEOUT = float(_raw_timeout) if _raw_timeout else None

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}

# --- Chat completion (word generation) ---
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")

CHAT_SAMPLING = {
    "temperature": 1,
    "top_p": 1,
    "frequency_penalty": 0.5,
    "presence_penalty": 0.5,
}

WORD_SYSTEM_PROMPT = (
    "You are a helpful assistant that generates random English words for a spelling game. "
    "Respond with one common English word in JSON format."
)
WORD_RESPONSE_FORMAT_HINT = 'Respond in JSON format: {"word": "<random_english_word>"}'

# --- Generation preferences ---
RANDOM_SENTINEL = "random"
ENGLISH_LEVELS = {
    "easy": "easy, everyday",
    "moderate": "moderately challenging",
    "hard": "hard, advanced",
}
VOCABULARY_TYPES = {
    "daily": "daily life",
    "academic": "academic",
    "professional": "professional or workplace",
}
DEFAULT_ENGLISH_LEVEL = "easy"
DEFAULT_VOCABULARY_TYPE = "daily"

# --- Speech synthesis ---
UNREAL_SPEECH_API_KEY = os.getenv("UNREAL_SPEECH_API_KEY")
UNREAL_SPEECH_URL = os.getenv("UNREAL_SPEECH_URL", "https://api.v7.unrealspeech.com/speech")
SPEECH_VOICE_SETTINGS = {
    "VoiceId": "Dan",
    "Bitrate": "192k",
    "Speed": "0",
    "Pitch": "1",
    "TimestampType": "sentence",
}
