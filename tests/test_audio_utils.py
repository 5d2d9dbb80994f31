"""Tests for quantization and silence padding."""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from audio_utils import (
    F32_EPSILON,
    I16_MAX,
    chunk_stats,
    pad_audio_if_needed,
    quantize_sample,
    quantize_samples,
)


# ---------------------------------------------------------------
# pad_audio_if_needed
# ---------------------------------------------------------------

def test_pad_no_padding_returns_same_object() -> None:
    segment = np.array([0.1, 0.2, 0.3], dtype=np.float32)
    result = pad_audio_if_needed(segment, 3)
    assert result is segment


def test_pad_shorter_min_returns_same_list() -> None:
    segment = [0.1, 0.2, 0.3, 0.4]
    result = pad_audio_if_needed(segment, 2)
    assert result is segment
    assert result == [0.1, 0.2, 0.3, 0.4]


def test_pad_appends_zeros() -> None:
    segment = np.array([0.1, 0.2], dtype=np.float32)
    result = pad_audio_if_needed(segment, 4)
    assert result is not segment
    assert len(result) == 4
    np.testing.assert_array_equal(result[:2], segment)
    assert np.all(result[2:] == 0.0)
    # input untouched
    np.testing.assert_array_equal(segment, np.array([0.1, 0.2], dtype=np.float32))


def test_pad_empty_segment() -> None:
    result = pad_audio_if_needed([], 3)
    assert list(result) == [0.0, 0.0, 0.0]


def test_pad_never_truncates() -> None:
    segment = np.arange(10, dtype=np.float32)
    assert len(pad_audio_if_needed(segment, 0)) == 10


# ---------------------------------------------------------------
# quantize_sample
# ---------------------------------------------------------------

def test_quantize_known_values() -> None:
    assert quantize_sample(0.0) == 0
    assert quantize_sample(0.5) == 16384  # 16383.5 rounds away from zero
    assert quantize_sample(-0.5) == -16384
    assert quantize_sample(-1.0) == -I16_MAX


def test_quantize_upper_bound_stays_in_range() -> None:
    top = quantize_sample(1.0 - F32_EPSILON)
    assert top == I16_MAX
    assert quantize_sample(1.0) == top
    assert quantize_sample(5.0) == top
    assert quantize_sample(-5.0) == -I16_MAX


def test_quantize_is_monotonic() -> None:
    xs = np.linspace(-1.0, 1.0 - F32_EPSILON, 2001)
    values = [quantize_sample(x) for x in xs]
    assert all(a <= b for a, b in zip(values, values[1:]))


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_quantize_non_finite_is_zero_and_warns(bad: float, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="audio_utils"):
        assert quantize_sample(bad) == 0
    assert any("Non-finite" in record.message for record in caplog.records)


# ---------------------------------------------------------------
# quantize_samples
# ---------------------------------------------------------------

def test_quantize_samples_matches_scalar() -> None:
    samples = np.array(
        [-2.0, -1.0, -0.25, 0.0, 1e-6, 0.3, -0.5549333, 0.56488234, 0.99, 1.0, 3.0],
        dtype=np.float32,
    )
    result = quantize_samples(samples)
    assert result.dtype == np.int16
    assert result.tolist() == [quantize_sample(s) for s in samples]


def test_quantize_samples_replaces_non_finite(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="audio_utils"):
        result = quantize_samples([0.5, math.nan, math.inf, -0.5])
    assert result.tolist() == [16384, 0, 0, -16384]
    assert any("Non-finite" in record.message for record in caplog.records)


def test_quantize_samples_empty() -> None:
    assert quantize_samples([]).size == 0


# ---------------------------------------------------------------
# chunk_stats
# ---------------------------------------------------------------

def test_chunk_stats() -> None:
    length, non_zero, low, high = chunk_stats([0.0, 0.5, -0.25, 0.0])
    assert (length, non_zero) == (4, 2)
    assert low == pytest.approx(-0.25)
    assert high == pytest.approx(0.5)


def test_chunk_stats_empty() -> None:
    assert chunk_stats([]) == (0, 0, math.inf, -math.inf)


def test_chunk_stats_ignores_nan_in_range() -> None:
    length, non_zero, low, high = chunk_stats([math.nan, 0.5, -0.25])
    assert (length, non_zero) == (3, 3)
    assert low == pytest.approx(-0.25)
    assert high == pytest.approx(0.5)


def test_chunk_stats_all_nan() -> None:
    assert chunk_stats([math.nan, math.nan])[2:] == (math.inf, -math.inf)
