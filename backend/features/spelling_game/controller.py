"""Round-by-round state machine driving a spelling practice session."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional

from .errors import PlaybackError, SpellingGameError
from .learned_words import LearnedWordsRepository
from .services import speech_service, word_service
from .services.word_service import GenerationPreferences

WordFetcher = Callable[[Optional[GenerationPreferences]], str]
AudioFetcher = Callable[[str], str]
AudioPlayer = Callable[[str], None]


class GameState(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    AWAITING_INPUT = "awaiting_input"
    CHECKED_CORRECT = "checked_correct"
    CHECKED_INCORRECT = "checked_incorrect"
    ERROR = "error"


def is_correct_spelling(user_input: str, word: str) -> bool:
    """Case-insensitive comparison ignoring surrounding whitespace."""

    return user_input.strip().lower() == word.strip().lower()


def _noop_player(audio_url: str) -> None:
    logging.info(f"Audio ready at {audio_url}")


class GameController:
    """Holds the session state of one learner.

    The word source, speech source and audio player are injected so the
    controller can run against the local services, the HTTP endpoints or
    fakes in tests.
    """

    def __init__(
        self,
        repository: LearnedWordsRepository,
        fetch_word: WordFetcher = word_service.generate_word,
        fetch_audio_url: AudioFetcher = speech_service.get_audio_url,
        play_audio: AudioPlayer = _noop_player,
        preferences: Optional[GenerationPreferences] = None,
    ) -> None:
        self._repository = repository
        self._fetch_word = fetch_word
        self._fetch_audio_url = fetch_audio_url
        self._play_audio = play_audio

        self.preferences = preferences
        self.state = GameState.IDLE
        self.current_word: Optional[str] = None
        self.audio_url: Optional[str] = None
        self.user_input = ""
        self.is_correct: Optional[bool] = None
        self.error: Optional[str] = None
        self.show_spelling = False
        self.learned_words: List[str] = repository.load()

    @property
    def can_generate(self) -> bool:
        return self.state is not GameState.GENERATING

    def generate_new_word(self) -> bool:
        """Fetch, synthesize and play a new word. Returns False if refused or failed."""

        if not self.can_generate:
            logging.warning("A word is already being generated, ignoring request.")
            return False

        self.state = GameState.GENERATING
        self.error = None
        self.is_correct = None

        try:
            word = self._fetch_word(self.preferences).strip().lower()
            audio_url = self._fetch_audio_url(word)
        except SpellingGameError as exc:
            logging.error(f"Error generating word: {exc}", exc_info=True)
            return self._fail_round(str(exc))
        except Exception as exc:
            logging.error(f"Unexpected error while generating word: {exc!r}", exc_info=True)
            return self._fail_round(f"Unexpected error ({type(exc).__name__})")

        self.current_word = word
        self.audio_url = audio_url
        self.user_input = ""
        self.show_spelling = False
        self.state = GameState.AWAITING_INPUT
        self._play(audio_url, "Failed to play audio")
        return True

    def _fail_round(self, reason: str) -> bool:
        # The previous word and audio stay in place so the learner can keep going.
        self.error = f"Failed to generate or play a new word: {reason}"
        self.state = GameState.ERROR
        return False

    def _play(self, audio_url: str, failure_message: str) -> None:
        try:
            self._play_audio(audio_url)
        except PlaybackError as exc:
            logging.error(f"Error playing audio: {exc}")
            self.error = f"{failure_message}: {exc}"

    def type_input(self, text: str) -> None:
        self.user_input = text

    def check_spelling(self, user_input: Optional[str] = None) -> bool:
        """Compare the input with the current word and advance on success."""

        if user_input is not None:
            self.user_input = user_input
        if self.current_word is None or self.state is GameState.GENERATING:
            return False

        correct = is_correct_spelling(self.user_input, self.current_word)
        self.is_correct = correct
        if not correct:
            self.state = GameState.CHECKED_INCORRECT
            return False

        self.state = GameState.CHECKED_CORRECT
        self.learned_words = self._repository.append(self.current_word)
        self.user_input = ""
        self.generate_new_word()
        return True

    def replay_audio(self) -> bool:
        if not self.audio_url:
            return False
        self._play(self.audio_url, "Failed to replay audio")
        return True

    def toggle_reveal(self) -> bool:
        self.show_spelling = not self.show_spelling
        return self.show_spelling
