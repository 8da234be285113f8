"""Speech trigger control.

Implements the host control lifecycle (init → update_view* → destroy) around
a single speak operation: send the bound text to the speech service, play
the returned audio, and report progress through the ``state`` output.
"""

import asyncio
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Protocol

from speech_trigger.config import SpeechTriggerConfig
from speech_trigger.errors import SpeechTriggerError
from speech_trigger.host import HostAdapter, RenderAdapter
from speech_trigger.properties import BoundProperties, Credentials
from speech_trigger.ssml import UtteranceRequest
from speech_trigger.state import PlaybackState, PlaybackStateMachine

logger = logging.getLogger(__name__)


class Synthesizer(Protocol):
    """Anything that turns an utterance into an audio payload."""

    async def synthesize(self, request: UtteranceRequest, credentials: Credentials) -> bytes:
        ...


class Player(Protocol):
    """Anything that plays an audio payload to completion."""

    async def play(self, audio: bytes) -> None:
        ...

    def stop(self) -> None:
        ...


@dataclass
class SpeakMetrics:
    """Per-control speak activity metrics."""

    started: int = 0
    completed: int = 0
    failed: int = 0
    cancelled: int = 0
    last_duration_ms: float | None = None
    durations_ms: list[float] = field(default_factory=list)

    def record(self, outcome: str, duration_ms: float) -> None:
        """Record the outcome of a finished speak run.

        Args:
            outcome: One of "completed", "failed", "cancelled"
            duration_ms: Wall time from request start to outcome
        """
        setattr(self, outcome, getattr(self, outcome) + 1)
        self.last_duration_ms = duration_ms
        self.durations_ms.append(duration_ms)

    def compute_avg_duration_ms(self) -> float | None:
        if not self.durations_ms:
            return None
        return sum(self.durations_ms) / len(self.durations_ms)


def _canonical(properties: BoundProperties) -> BoundProperties:
    return replace(properties, state=PlaybackState.parse(properties.state).value)


class SpeechTrigger:
    """Clickable text-to-speech control.

    The bound properties live in one immutable snapshot that is replaced on
    every accepted update. Playback state lives in a separate
    PlaybackStateMachine; ``state`` and ``autoSpeak`` are read back from it
    when the host asks for outputs.

    At most one speak run is in flight per instance. ``speak()`` returns the
    asyncio task for that run so callers can await or cancel it.

    Attributes:
        config: Control configuration
        machine: Playback state machine
        metrics: Speak activity metrics
        last_error: Failure of the most recent speak run, if it failed
    """

    def __init__(
        self,
        config: SpeechTriggerConfig | None = None,
        synthesizer: Synthesizer | None = None,
        player: Player | None = None,
    ) -> None:
        """Initialize the control.

        Args:
            config: Configuration (defaults applied if None)
            synthesizer: Speech synthesis backend (REST client if None)
            player: Audio player (device player if None)
        """
        self.config = config or SpeechTriggerConfig()

        if synthesizer is None:
            from speech_trigger.synthesis import SpeechSynthesisClient

            synthesizer = SpeechSynthesisClient(self.config.service)
        if player is None:
            from speech_trigger.playback import AudioPlayer

            player = AudioPlayer(
                device=self.config.playback.device,
                fallback_dir=self.config.playback.fallback_dir,
            )

        self.synthesizer = synthesizer
        self.player = player
        self.machine = PlaybackStateMachine()
        self.metrics = SpeakMetrics()
        self.last_error: BaseException | None = None

        self._properties = BoundProperties()
        self._auto_speak = False
        self._host: HostAdapter | None = None
        self._renderer: RenderAdapter | None = None
        self._task: asyncio.Task[None] | None = None
        self._started_at = 0.0

    # ------------------------------------------------------------------
    # Host lifecycle
    # ------------------------------------------------------------------

    def init(self, host: HostAdapter, renderer: RenderAdapter | None = None) -> None:
        """Attach the control to its host.

        Args:
            host: Host adapter receiving output-changed notifications
            renderer: Optional adapter drawing the clickable icon
        """
        self._host = host
        self._renderer = renderer
        logger.info("Speech trigger initialized", extra={"has_renderer": renderer is not None})

    def update_view(self, properties: BoundProperties | Mapping[str, Any]) -> None:
        """Synchronize bound properties delivered by the host.

        Does nothing when every value matches the current one; hosts call
        this for unrelated reasons such as container resizes. Otherwise all
        values are adopted at once, the icon is refreshed, and an automatic
        speak runs if the auto-speak flag is set.

        An auto-speak that arrives while a run is in flight is dropped and
        the flag cleared; the host sets it again to speak the new text.
        Updates with auto-speak set must come from a running event loop.

        Args:
            properties: Snapshot or raw host parameter mapping

        Raises:
            RuntimeError: If auto-speak is set and no event loop is running;
                the update is not adopted
        """
        if not isinstance(properties, BoundProperties):
            properties = BoundProperties.from_mapping(properties)
        properties = _canonical(properties)

        if properties == self.properties:
            logger.debug("Properties unchanged, ignoring update")
            return

        if properties.auto_speak:
            asyncio.get_running_loop()

        self._properties = properties
        if self.is_busy:
            # The running speak owns the state until it finishes
            logger.debug(
                "Ignoring host state while speaking", extra={"host_state": properties.state}
            )
        else:
            self.machine.force(PlaybackState(properties.state))
        self._auto_speak = properties.auto_speak
        logger.debug("Properties updated", extra={"properties": repr(properties)})

        self._render()

        if not self._auto_speak:
            return
        if self.is_busy:
            logger.info("Auto-speak dropped, already speaking")
            self._auto_speak = False
            return
        self.speak()

    def get_outputs(self) -> dict[str, str | bool]:
        """Return the output-bound values."""
        return {"state": self.machine.state.value, "autoSpeak": self._auto_speak}

    def destroy(self) -> None:
        """Detach from the host.

        An in-flight speak run is left to finish; it no longer notifies the
        host. Cancel the task returned by ``speak()`` to stop it.
        """
        if self._renderer is not None:
            self._renderer.unmount()
        self._renderer = None
        self._host = None
        logger.info("Speech trigger destroyed", extra={"speaking": self.is_busy})

    # ------------------------------------------------------------------
    # Speak
    # ------------------------------------------------------------------

    @property
    def properties(self) -> BoundProperties:
        """Current bound values, with live state and auto-speak outputs."""
        return self._properties.with_outputs(self.machine.state.value, self._auto_speak)

    @property
    def current_task(self) -> "asyncio.Task[None] | None":
        """Task of the most recent speak run, finished or not."""
        return self._task

    @property
    def is_busy(self) -> bool:
        return self._task is not None and not self._task.done()

    def speak(self) -> "asyncio.Task[None] | None":
        """Start speaking the bound text.

        Silently does nothing if the text is empty or the control is already
        speaking. Otherwise moves to SPEAKING, clears auto-speak and notifies
        the host before the request is issued.

        Must be called from a running event loop.

        Returns:
            Task running the request and playback, or None if ignored
        """
        properties = self._properties

        if not properties.text:
            logger.debug("No text to speak, ignoring")
            return None
        if self.machine.is_speaking or self.is_busy:
            logger.debug("Already speaking, ignoring")
            return None

        request = UtteranceRequest(
            text=properties.text,
            language=properties.language or self.config.control.default_language,
            voice=properties.voice or self.config.control.default_voice,
        )
        loop = asyncio.get_running_loop()
        credentials = properties.credentials

        self.machine.transition(PlaybackState.SPEAKING)
        self._auto_speak = False
        self.last_error = None
        self._notify()

        self.metrics.started += 1
        self._started_at = time.monotonic()
        self._task = loop.create_task(self._run(request, credentials))
        self._task.add_done_callback(self._on_task_done)
        return self._task

    async def _run(self, request: UtteranceRequest, credentials: Credentials) -> None:
        try:
            await asyncio.wait_for(
                self._synthesize_and_play(request, credentials),
                timeout=self.config.control.speak_timeout_s,
            )
        except asyncio.CancelledError:
            logger.info("Speak cancelled")
            self.player.stop()
            raise
        except Exception as e:
            expected = isinstance(e, (SpeechTriggerError, TimeoutError))
            if isinstance(e, TimeoutError):
                self.player.stop()
            self.last_error = e
            self.metrics.record("failed", self._elapsed_ms())
            logger.error(
                "Speak failed",
                extra={"error": str(e) or type(e).__name__, "error_type": type(e).__name__},
                exc_info=not expected,
            )
            self._finish(PlaybackState.ERROR)
            return

        self.metrics.record("completed", self._elapsed_ms())
        self._finish(PlaybackState.IDLE)

    async def _synthesize_and_play(
        self, request: UtteranceRequest, credentials: Credentials
    ) -> None:
        audio = await self.synthesizer.synthesize(request, credentials)
        await self.player.play(audio)

    def _on_task_done(self, task: "asyncio.Task[None]") -> None:
        # Also covers a task cancelled before it started running
        if task.cancelled() and self.machine.is_speaking:
            self.metrics.record("cancelled", self._elapsed_ms())
            self._finish(PlaybackState.IDLE)

    def _elapsed_ms(self) -> float:
        return (time.monotonic() - self._started_at) * 1000.0

    def _finish(self, state: PlaybackState) -> None:
        self.machine.transition(state)
        self._notify()

    def _notify(self) -> None:
        if self._host is None:
            logger.debug("No host attached, skipping output notification")
            return
        self._host.notify_output_changed()

    def _render(self) -> None:
        if self._renderer is None or self._host is None:
            return
        width, height = self._host.allocated_width, self._host.allocated_height
        if not self._renderer.is_mounted:
            self._renderer.mount(self.speak, width, height)
        else:
            self._renderer.refresh(width, height)

    def get_metrics_summary(self) -> dict[str, str | float | int | None]:
        """Get speak metrics summary for logging/monitoring.

        Returns:
            Dictionary of metric names to values
        """
        return {
            "state": self.machine.state.value,
            "started": self.metrics.started,
            "completed": self.metrics.completed,
            "failed": self.metrics.failed,
            "cancelled": self.metrics.cancelled,
            "last_duration_ms": self.metrics.last_duration_ms,
            "avg_duration_ms": self.metrics.compute_avg_duration_ms(),
        }
