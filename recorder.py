"""WAV recorder for the audio stream fed to the transcription engine."""

from __future__ import annotations

import logging
import wave
from pathlib import Path
from typing import Optional

import numpy as np

from audio_utils import Samples, chunk_stats, quantize_samples
from errors import PathLike, RecorderFinalizeError, RecorderIOError
from models import BITS_PER_SAMPLE, CHANNELS, SAMPLE_RATE, AudioFrame, RecorderState

logger = logging.getLogger(__name__)


class WavAudioRecorder:
    """Writes mono 16 kHz 16-bit PCM WAV files from float sample chunks.

    Without a path the recorder stays inactive and every write is a no-op.
    ``finalize`` releases the writer exactly once; later writes are ignored
    and later finalize calls report nothing to do.
    """

    def __init__(self, path: PathLike | None = None) -> None:
        self._writer: Optional[wave.Wave_write] = None
        self._path = str(path) if path else ""
        self._is_recording_active = False
        self._state = RecorderState.INACTIVE
        if not self._path:
            return

        target = Path(self._path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RecorderIOError(target.parent, f"Failed to create directory ({exc})") from exc

        try:
            writer = wave.open(str(target), "wb")
        except (OSError, wave.Error) as exc:
            raise RecorderIOError(target, f"Failed to create WAV file ({exc})") from exc
        writer.setnchannels(CHANNELS)
        writer.setsampwidth(BITS_PER_SAMPLE // 8)
        writer.setframerate(SAMPLE_RATE)

        self._writer = writer
        self._is_recording_active = True
        self._state = RecorderState.ACTIVE

    @property
    def path(self) -> str:
        return self._path

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._is_recording_active

    def write_chunk(self, samples: Samples) -> None:
        if self._state != RecorderState.ACTIVE or self._writer is None:
            return

        length, non_zero, low, high = chunk_stats(samples)
        pcm = quantize_samples(samples).astype("<i2").tobytes()
        try:
            self._writer.writeframes(pcm)
        except (OSError, wave.Error) as exc:
            raise RecorderIOError(self._path, f"Failed to write audio chunk ({exc})") from exc

        logger.debug(
            "[WAV Writer] Chunk stats: len=%d, non_zero=%d, range=[%.6f, %.6f]",
            length,
            non_zero,
            low,
            high,
        )

    def write_frame(self, frame: AudioFrame) -> None:
        if frame.sample_rate != SAMPLE_RATE or frame.channels != CHANNELS:
            logger.warning(
                "Frame format %d Hz/%d ch differs from %d Hz/%d ch; writing as-is.",
                frame.sample_rate,
                frame.channels,
                SAMPLE_RATE,
                CHANNELS,
            )
        self.write_chunk(np.asarray(frame.samples))

    def finalize(self) -> Optional[str]:
        """Close the WAV file and return a status message, if any."""
        writer, self._writer = self._writer, None
        active = self._is_recording_active
        has_path = bool(self._path)
        self._is_recording_active = False
        self._state = RecorderState.FINALIZED

        if writer is not None:
            try:
                writer.close()
            except (OSError, wave.Error) as exc:
                raise RecorderFinalizeError(self._path, str(exc)) from exc
            if active and has_path:
                return f"[Recording] Finished saving audio to {self._path}"
            return (
                f"[Recording] Finalized audio file at {self._path} "
                "(state was potentially inconsistent)."
            )

        if active and has_path:
            return (
                f"[Recording] Attempted to finalize, but no active writer for {self._path}. "
                "File might have been finalized or failed to open."
            )
        if active:
            return "[Recording] Recording was intended but path was empty and no writer; nothing saved."
        return None

    def __enter__(self) -> "WavAudioRecorder":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        message = self.finalize()
        if message:
            logger.info(message)
