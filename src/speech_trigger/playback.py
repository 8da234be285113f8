"""Audio playback for synthesized speech.

Decodes the WAV payload returned by the speech service and plays it on the
output device. Uses sounddevice for device output and falls back to writing a
WAV file with soundfile when sounddevice cannot be loaded. A device that
fails mid-playback is reported as a PlaybackError.
"""

import asyncio
import io
import logging
from pathlib import Path
from typing import Any

import numpy as np
import soundfile as sf

from speech_trigger.errors import PlaybackError

logger = logging.getLogger(__name__)


class AudioPlayer:
    """Plays one utterance at a time and returns when playback has finished."""

    def __init__(self, device: str | int | None = None, fallback_dir: Path | None = None) -> None:
        """Initialize audio player.

        Args:
            device: Optional audio device name/index
            fallback_dir: Where to write WAV files when no device is available
        """
        self.device = device
        self.fallback_dir = fallback_dir or Path(".")
        self.play_count = 0

        # sounddevice raises OSError on import when PortAudio is missing
        self.sd: Any = None
        try:
            import sounddevice as sd

            self.sd = sd
            logger.info(f"Audio output initialized (device: {device or 'default'})")
        except (ImportError, OSError):
            logger.warning("sounddevice not available, audio will be saved to file")

    @staticmethod
    def decode(audio: bytes) -> tuple[np.ndarray, int]:
        """Decode a WAV payload into float32 samples.

        Args:
            audio: RIFF/WAV bytes

        Returns:
            Tuple of (samples, sample_rate)

        Raises:
            PlaybackError: If the payload is empty or not a readable audio file
        """
        if not audio:
            raise PlaybackError("Empty audio payload")
        try:
            samples, sample_rate = sf.read(io.BytesIO(audio), dtype="float32")
        except (RuntimeError, sf.LibsndfileError) as e:
            raise PlaybackError(f"Could not decode audio payload: {e}") from e
        return samples, int(sample_rate)

    async def play(self, audio: bytes) -> None:
        """Decode and play a WAV payload, returning once playback has ended.

        The blocking device wait runs in a worker thread so the event loop
        keeps serving host callbacks while audio plays.

        Args:
            audio: RIFF/WAV bytes

        Raises:
            PlaybackError: If the payload cannot be decoded or the device fails
        """
        samples, sample_rate = self.decode(audio)
        duration_s = len(samples) / sample_rate if sample_rate else 0.0
        logger.debug(
            "Starting playback",
            extra={"sample_rate": sample_rate, "duration_s": round(duration_s, 3)},
        )

        # Reserved up front: a cancelled play leaves its worker thread running
        index = self.play_count
        self.play_count += 1
        await asyncio.to_thread(self._play_blocking, samples, sample_rate, index)

    def _play_blocking(self, samples: np.ndarray, sample_rate: int, index: int) -> None:
        if self.sd is None:
            self._save_to_file(samples, sample_rate, index)
            return

        try:
            self.sd.play(samples, samplerate=sample_rate, device=self.device)
            self.sd.wait()
        except Exception as e:
            raise PlaybackError(f"Audio playback failed: {e}") from e

    def _save_to_file(self, samples: np.ndarray, sample_rate: int, index: int) -> None:
        """Save audio to file as fallback.

        Args:
            samples: Audio data as float32 array
            sample_rate: Sample rate in Hz
            index: Sequence number used in the file name
        """
        filename = self.fallback_dir / f"speech_output_{index:04d}.wav"
        sf.write(filename, samples, sample_rate)
        logger.info(f"Saved audio to {filename}")

    def stop(self) -> None:
        """Stop any audio currently playing on the device."""
        if self.sd is not None:
            try:
                self.sd.stop()
            except Exception as e:  # noqa: S110
                logger.debug(f"Audio stop failed (non-critical): {e}")
