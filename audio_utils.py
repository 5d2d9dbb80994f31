"""Audio helpers: float-to-PCM16 quantization and silence padding.

Samples are mono, 16 kHz, normalized floats nominally in ``[-1.0, 1.0]``.
Quantization clamps to ``[-1.0, 1.0 - eps]`` (``eps`` being the float32
machine epsilon), scales by ``32767`` and rounds half away from zero, so
``1.0`` maps to ``32767`` and ``-1.0`` to ``-32767``. The arithmetic is
computed in float64, so a float32 input can land one LSB away from a pure
float32 computation; the result is still deterministic.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

I16_MAX = int(np.iinfo(np.int16).max)
F32_EPSILON = float(np.finfo(np.float32).eps)
_UPPER_BOUND = 1.0 - F32_EPSILON

Samples = Union[Sequence[float], np.ndarray]


def quantize_sample(sample: float) -> int:
    """Convert one float sample to a signed 16-bit integer."""
    value = float(sample)
    if not math.isfinite(value):
        logger.warning("Non-finite audio sample detected: %s. Replacing with 0.0.", value)
        value = 0.0
    clamped = min(max(value, -1.0), _UPPER_BOUND)
    scaled = clamped * I16_MAX
    return int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))


def quantize_samples(samples: Samples) -> np.ndarray:
    """Vectorized :func:`quantize_sample`; returns an ``int16`` array."""
    values = np.asarray(samples, dtype=np.float64).ravel()
    finite = np.isfinite(values)
    if not finite.all():
        bad = int(values.size - np.count_nonzero(finite))
        logger.warning("Non-finite audio samples detected: %d. Replacing with 0.0.", bad)
        values = np.where(finite, values, 0.0)
    scaled = np.clip(values, -1.0, _UPPER_BOUND) * I16_MAX
    rounded = np.sign(scaled) * np.floor(np.abs(scaled) + 0.5)
    return rounded.astype(np.int16)


def chunk_stats(samples: Samples) -> Tuple[int, int, float, float]:
    """Return ``(len, non_zero, min, max)`` over the raw samples.

    NaN samples are ignored for the range; an empty or all-NaN chunk gives
    ``(inf, -inf)``.
    """
    values = np.asarray(samples, dtype=np.float32).ravel()
    comparable = values[~np.isnan(values)]
    if comparable.size == 0:
        return int(values.size), int(np.count_nonzero(values)), math.inf, -math.inf
    return (
        int(values.size),
        int(np.count_nonzero(values)),
        float(np.min(comparable)),
        float(np.max(comparable)),
    )


def pad_audio_if_needed(audio_segment: Samples, min_samples: int) -> Samples:
    """Pad ``audio_segment`` with trailing silence up to ``min_samples``.

    If no padding is needed the input object itself is returned, without a
    copy. Otherwise a new ``float32`` array is returned whose prefix is the
    original content and whose tail is exactly ``0.0``. Callers must not rely
    on which of the two they get.
    """
    current = len(audio_segment)
    if current >= min_samples:
        return audio_segment
    padded = np.zeros(min_samples, dtype=np.float32)
    padded[:current] = np.asarray(audio_segment, dtype=np.float32).ravel()
    return padded
