import logging
from typing import Optional, Protocol

from badminton.exceptions import SpeechCanceled

logger = logging.getLogger(__name__)


_LOCALES = {"ko": "ko-KR", "en": "en-US"}


def speech_locale(language: str) -> str:
    try:
        return _LOCALES[language]
    except KeyError:
        raise ValueError(f"Invalid language: {language!r}") from None


class SpeechBackend(Protocol):
    def say(self, text: str, locale: str) -> None:
        ...


class LoggingSpeechBackend:
    """
    Backend for environments without a speech engine: records utterances
    in the log only.
    """

    def say(self, text: str, locale: str) -> None:
        logger.info("[tts] %s: %s", locale, text)


class VoiceAnnouncer:
    """
    Hands announcement text to a speech backend.

    Never raises: a missing backend, a muted announcer or blank text is a
    no-op, and backend failures are logged and dropped so they cannot reach
    the match state.
    """

    def __init__(self, backend: Optional[SpeechBackend] = None, muted: bool = False):
        self.backend = backend
        self.muted = muted

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        return self.muted

    def speak(self, text: str, language: str) -> bool:
        """Return True when the text was handed to the backend."""
        if self.muted:
            return False
        if self.backend is None:
            logger.warning("[tts] speech backend not available")
            return False
        if not text or not text.strip():
            return False

        try:
            locale = speech_locale(language)
        except ValueError as e:
            logger.warning("[tts] %s", e)
            return False

        logger.debug("[tts] speaking %r (%s)", text, locale)

        try:
            self.backend.say(text, locale)
        except SpeechCanceled:
            return False
        except Exception:
            logger.exception("[tts] backend failed for %r", text)
            return False

        return True
