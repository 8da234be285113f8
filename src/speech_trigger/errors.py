"""Exception hierarchy for the speech trigger control."""


class SpeechTriggerError(Exception):
    """Base class for all speech trigger errors."""


class SynthesisError(SpeechTriggerError):
    """Speech synthesis request failed.

    Raised for non-2xx responses from the speech endpoint and for transport
    failures (connection refused, DNS, TLS) while issuing the request.

    Attributes:
        status: HTTP status code, or None if no response was received
        reason: Reason phrase or underlying error description
    """

    def __init__(self, reason: str, status: int | None = None) -> None:
        self.status = status
        self.reason = reason
        if status is None:
            super().__init__(f"Speech synthesis failed: {reason}")
        else:
            super().__init__(f"Speech synthesis failed with HTTP {status}: {reason}")


class PlaybackError(SpeechTriggerError):
    """Synthesized audio could not be decoded or played."""


class InvalidTransitionError(SpeechTriggerError, ValueError):
    """Playback state machine was asked for a transition it does not allow."""


class ConfigError(SpeechTriggerError):
    """Configuration file is missing or invalid."""
