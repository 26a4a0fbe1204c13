# backend/features/spelling_game/practice.py
"""
Terminal practice session driven by the same round controller as the web page.

Learned words are kept in the JSON file named by LEARNED_WORDS_PATH.
"""
import logging
from pathlib import Path
from typing import Callable, Optional

from . import config
from .controller import GameController, GameState
from .learned_words import JsonFileLearnedWordsRepository
from .services.word_service import GenerationPreferences

COMMANDS_HELP = "Commands: :new  :replay  :reveal  :learned  :quit"


def _print_audio(audio_url: str) -> None:
    print(f"🔊 Listen: {audio_url}")


def build_controller(path: Optional[Path] = None, english_level: Optional[str] = None,
                     vocabulary_type: Optional[str] = None) -> GameController:
    repository = JsonFileLearnedWordsRepository(path or config.LEARNED_WORDS_PATH)
    return GameController(
        repository,
        play_audio=_print_audio,
        preferences=GenerationPreferences.from_raw(english_level, vocabulary_type),
    )


def run_session(controller: GameController, read_line: Callable[[str], str] = input) -> None:
    print(COMMANDS_HELP)
    controller.generate_new_word()
    shown_error = None
    while True:
        if controller.error and controller.error != shown_error:
            print(f"❌ {controller.error}")
        shown_error = controller.error
        try:
            line = read_line("> ").strip()
        except EOFError:
            break

        if line == ":quit":
            break
        elif line == ":new":
            controller.generate_new_word()
        elif line == ":replay":
            controller.replay_audio()
        elif line == ":reveal":
            if controller.toggle_reveal() and controller.current_word:
                print(controller.current_word)
        elif line == ":learned":
            print(", ".join(controller.learned_words) or "(none yet)")
        elif line:
            if controller.check_spelling(line):
                print("✅ Correct!")
            elif controller.state is GameState.CHECKED_INCORRECT:
                print("Incorrect. Try again!")


def main() -> None:
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    run_session(build_controller())


if __name__ == "__main__":
    main()
