"""Failure kinds raised by the spelling game services."""
from typing import Optional


class SpellingGameError(Exception):
    """Base class for every recoverable spelling game failure."""


class MissingApiKeyError(SpellingGameError):
    """Raised when a provider key is not configured on the server."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} is not configured")
        self.env_name = env_name


class UpstreamHttpError(SpellingGameError):
    """Raised when a provider call fails at the transport or status level."""

    def __init__(self, provider: str, status_code: Optional[int], body: str) -> None:
        if status_code is None:
            message = f"{provider} request failed: {body}"
        else:
            message = f"{provider} responded with {status_code}: {body}"
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.body = body


class UpstreamEmptyResponse(SpellingGameError):
    """The chat model returned no content."""


class UpstreamMalformedJSON(SpellingGameError):
    """The chat model content could not be decoded as JSON."""


class UpstreamSchemaViolation(SpellingGameError):
    """The decoded payload does not carry a string ``word`` field."""


class UpstreamMissingField(SpellingGameError):
    """The speech provider response lacks the audio URL."""


class LearnedWordsParseError(SpellingGameError):
    """The persisted learned words value is corrupted."""


class PlaybackError(SpellingGameError):
    """Audio playback was rejected by the player."""
