"""Persistence for words the learner has spelled correctly."""
from __future__ import annotations

import json
import logging
from collections import OrderedDict
from pathlib import Path
from threading import Lock
from typing import Iterable, List, Optional

from . import config
from .errors import LearnedWordsParseError


def _dedupe(words: Iterable[str]) -> List[str]:
    ordered: "OrderedDict[str, None]" = OrderedDict()
    for word in words:
        ordered[word] = None
    return list(ordered.keys())


def decode_learned_words(raw: Optional[str]) -> List[str]:
    """Decode the persisted JSON array, raising on corrupted values."""

    if raw is None or not raw.strip():
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise LearnedWordsParseError(f"Stored learned words are not valid JSON: {exc}") from exc
    if not isinstance(value, list):
        raise LearnedWordsParseError("Stored learned words must be a JSON array")
    return _dedupe(item.strip().lower() for item in value if isinstance(item, str) and item.strip())


class LearnedWordsRepository:
    """Append-only, deduplicated store of learned words."""

    def load(self) -> List[str]:
        raise NotImplementedError

    def append(self, word: str) -> List[str]:
        raise NotImplementedError


class InMemoryLearnedWordsRepository(LearnedWordsRepository):
    def __init__(self, words: Iterable[str] = ()) -> None:
        self._words = _dedupe(words)

    def load(self) -> List[str]:
        return list(self._words)

    def append(self, word: str) -> List[str]:
        self._words = _dedupe([*self._words, word.strip().lower()])
        return list(self._words)


class JsonFileLearnedWordsRepository(LearnedWordsRepository):
    """Keeps the learned words under a single key of a JSON document on disk."""

    def __init__(self, path: Optional[Path] = None, key: str = config.LEARNED_WORDS_KEY) -> None:
        self._path = Path(path) if path is not None else config.LEARNED_WORDS_PATH
        self._key = key
        self._lock = Lock()

    def _read_document(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            logging.error(f"Error parsing learned words file '{self._path}', starting fresh: {exc}")
            return {}
        if not isinstance(document, dict):
            logging.error(f"Error parsing learned words file '{self._path}': expected a JSON object, starting fresh.")
            return {}
        return document

    def _read_words(self) -> List[str]:
        document = self._read_document()
        if self._key not in document:
            return []
        raw = document[self._key]
        try:
            if not isinstance(raw, str):
                raise LearnedWordsParseError(
                    f"'{self._key}' must hold a JSON string, got {type(raw).__name__}"
                )
            return decode_learned_words(raw)
        except LearnedWordsParseError as exc:
            logging.error(f"Error parsing learned words from '{self._path}': {exc}")
            return []

    def load(self) -> List[str]:
        with self._lock:
            return self._read_words()

    def append(self, word: str) -> List[str]:
        with self._lock:
            words = _dedupe([*self._read_words(), word.strip().lower()])
            document = self._read_document()
            document[self._key] = json.dumps(words)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")
            return words
