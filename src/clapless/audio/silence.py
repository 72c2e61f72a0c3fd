"""Silence generation and sample/second conversions."""

from __future__ import annotations

import numpy as np


def generate_silence(num_samples: int) -> np.ndarray:
    return np.zeros(max(0, num_samples), dtype=np.float64)


def prepend_silence(data: np.ndarray, silence_samples: int) -> np.ndarray:
    """Return ``data`` with ``silence_samples`` zeros in front of it.

    A non-positive count returns the input unchanged.
    """
    if silence_samples <= 0:
        return data
    silence = generate_silence(silence_samples).astype(data.dtype, copy=False)
    return np.concatenate([silence, data])


def prepend_silence_interleaved(data: np.ndarray, frames: int, channels: int) -> np.ndarray:
    """Prepend ``frames`` of silence to interleaved multi-channel data."""
    return prepend_silence(data, frames * channels)


def samples_to_seconds(samples: int, sample_rate: int) -> float:
    return samples / sample_rate


def seconds_to_samples(seconds: float, sample_rate: int) -> int:
    # Truncates toward zero.
    return int(seconds * sample_rate)
