"""FFT cross-correlation and single-pass offset detection."""

from __future__ import annotations

import numpy as np
from scipy import fft as sp_fft

from clapless.audio.silence import samples_to_seconds
from clapless.errors import InputValidationError
from clapless.models.offsets import CoarseOffsetResult
from clapless.sync.signal import downsample, normalize


def next_power_of_two(n: int) -> int:
    power = 1
    while power < n:
        power *= 2
    return power


def cross_correlate(signal_a: np.ndarray, signal_b: np.ndarray) -> np.ndarray:
    """Linear cross-correlation of two real signals via FFT.

    Entry ``k`` of the result is ``sum(a[m + k] * b[m])``: the score for
    shifting ``b`` right by ``k`` samples against ``a``. Only the first
    ``len(a) + len(b) - 1`` entries are returned; lags where ``b`` would
    have to move left are not represented.
    """
    if len(signal_a) == 0 or len(signal_b) == 0:
        return np.zeros(1, dtype=np.float64)

    n = len(signal_a) + len(signal_b) - 1
    fft_size = next_power_of_two(n)

    # rfft zero-pads to fft_size; irfft already scales by 1 / fft_size
    spectrum_a = sp_fft.rfft(signal_a, fft_size)
    spectrum_b = sp_fft.rfft(signal_b, fft_size)
    result = sp_fft.irfft(spectrum_a * np.conj(spectrum_b), fft_size)

    return result[:n]


def find_max_peak(correlation: np.ndarray) -> tuple[int, float]:
    """Index and value of the first maximum."""
    if len(correlation) == 0:
        return 0, 0.0
    idx = int(np.argmax(correlation))
    return idx, float(correlation[idx])


def correlate(signal_a: np.ndarray, signal_b: np.ndarray) -> tuple[int, float]:
    """Return ``(peak_index, peak_value)`` of the cross-correlation of a and b."""
    return find_max_peak(cross_correlate(signal_a, signal_b))


def detect_offset(
    reference: np.ndarray,
    local: np.ndarray,
    sample_rate: int,
    downsample_factor: int = 1,
) -> CoarseOffsetResult:
    """Find where ``local`` starts on the timeline of ``reference``.

    Both signals are decimated by ``downsample_factor`` and normalized
    independently before correlating, so the result is only accurate to
    within ``downsample_factor`` samples.

    Confidence is the correlation peak divided by the decimated local
    length. Identical signals score 1.0; it is a heuristic and can
    exceed 1.0 for strongly self-similar material.
    """
    if len(reference) == 0:
        raise InputValidationError("mixed audio data is empty")
    if len(local) == 0:
        raise InputValidationError("local audio data is empty")

    factor = max(1, downsample_factor)
    reference_norm = normalize(downsample(reference, factor))
    local_norm = normalize(downsample(local, factor))

    peak_idx, peak_value = correlate(reference_norm, local_norm)
    offset = peak_idx * factor

    return CoarseOffsetResult(
        offset_samples=offset,
        offset_seconds=samples_to_seconds(offset, sample_rate),
        confidence=peak_value / len(local_norm),
    )
