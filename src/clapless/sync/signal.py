"""Signal preparation: mono downmix, normalization and decimation."""

from __future__ import annotations

import numpy as np

from clapless.errors import InputValidationError


def to_mono(data: np.ndarray, channels: int) -> np.ndarray:
    """Average interleaved channels into a single channel.

    Mono input is returned as-is. A trailing partial frame is dropped.
    """
    if channels < 1:
        raise InputValidationError(f"channel count must be >= 1, got {channels}")
    if channels == 1:
        return data

    frames = len(data) // channels
    return data[: frames * channels].reshape(frames, channels).mean(axis=1)


def normalize(data: np.ndarray) -> np.ndarray:
    """Scale to zero mean and unit (population) standard deviation.

    A constant signal has a standard deviation of zero; it is divided by
    1.0 instead, which leaves it all zeros after mean removal.
    """
    data = np.asarray(data, dtype=np.float64)
    if len(data) == 0:
        return data

    mean = data.mean()
    std_dev = data.std()
    if std_dev == 0:
        std_dev = 1.0
    return (data - mean) / std_dev


def downsample(data: np.ndarray, factor: int) -> np.ndarray:
    """Keep every ``factor``-th sample starting at index 0.

    No anti-aliasing filter is applied. ``factor <= 1`` returns the input.
    """
    if factor <= 1:
        return data
    return data[::factor]
