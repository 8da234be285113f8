"""Playback state machine.

The control reports its state to the host through the ``state`` output
property. The state machine is kept separate from the control so it can be
exercised without a host, a network or an audio device.
"""

import logging
from enum import Enum

from speech_trigger.errors import InvalidTransitionError

logger = logging.getLogger(__name__)


class PlaybackState(Enum):
    """Playback state machine states.

    State Transitions:
    - WAITING → SPEAKING (first speak)
    - IDLE → SPEAKING (speak after a completed utterance)
    - ERROR → SPEAKING (speak after a failed utterance)
    - SPEAKING → IDLE (playback complete or cancelled)
    - SPEAKING → ERROR (request, playback or timeout failure)

    States:
    - WAITING: Initial state, nothing spoken yet
    - SPEAKING: Request in flight or audio playing
    - IDLE: Last utterance finished playing
    - ERROR: Last utterance failed
    """

    WAITING = "waiting"
    SPEAKING = "speaking"
    IDLE = "idle"
    ERROR = "error"

    @classmethod
    def parse(cls, value: str | None) -> "PlaybackState":
        """Map a host-supplied state string onto a state.

        Empty and unrecognised values map to WAITING.

        Args:
            value: Raw state string from the host

        Returns:
            Matching PlaybackState
        """
        if not value:
            return cls.WAITING
        try:
            return cls(value.strip().lower())
        except ValueError:
            logger.warning("Unknown playback state from host", extra={"state": value})
            return cls.WAITING


# Valid state transitions
VALID_TRANSITIONS: dict[PlaybackState, set[PlaybackState]] = {
    PlaybackState.WAITING: {PlaybackState.SPEAKING},
    PlaybackState.IDLE: {PlaybackState.SPEAKING},
    PlaybackState.ERROR: {PlaybackState.SPEAKING},
    PlaybackState.SPEAKING: {PlaybackState.IDLE, PlaybackState.ERROR},
}


class PlaybackStateMachine:
    """Tracks the playback state of a single control instance."""

    def __init__(self, initial: PlaybackState = PlaybackState.WAITING) -> None:
        self.state = initial

    @property
    def is_speaking(self) -> bool:
        return self.state == PlaybackState.SPEAKING

    def can_transition(self, new_state: PlaybackState) -> bool:
        return new_state in VALID_TRANSITIONS.get(self.state, set())

    def transition(self, new_state: PlaybackState) -> None:
        """Transition to a new state with validation.

        Args:
            new_state: Target state

        Raises:
            InvalidTransitionError: If the transition is not allowed
        """
        if not self.can_transition(new_state):
            raise InvalidTransitionError(
                f"Invalid state transition: {self.state.value} → {new_state.value}"
            )

        old_state = self.state
        self.state = new_state

        logger.info(
            "Playback state transition",
            extra={"from_state": old_state.value, "to_state": new_state.value},
        )

    def force(self, new_state: PlaybackState) -> None:
        """Overwrite the state without validation.

        Used when the host pushes a bound ``state`` value; the host is the
        owner of the bound property and may reset it to anything.
        """
        if new_state != self.state:
            logger.debug(
                "Playback state overwritten by host",
                extra={"from_state": self.state.value, "to_state": new_state.value},
            )
        self.state = new_state
