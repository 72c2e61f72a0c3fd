"""
Pytest configuration and shared fixtures for clapless tests.
"""
from pathlib import Path

import numpy as np
import pytest
import soundfile as sf


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def noise(rng) -> np.ndarray:
    """20,000 samples of white noise (20 seconds at 1 kHz)."""
    return rng.standard_normal(20_000)


@pytest.fixture
def smooth_noise(rng) -> np.ndarray:
    """Low-passed noise, so neighbouring samples are strongly correlated."""
    raw = rng.standard_normal(12_000)
    return np.convolve(raw, np.ones(64) / 64, mode="same")


@pytest.fixture
def write_test_wav(tmp_path):
    """Write a float array (frames,) or (frames, channels), 16-bit PCM by default."""

    def _write(name: str, data: np.ndarray, sample_rate: int, subtype: str = "PCM_16") -> Path:
        path = tmp_path / name
        sf.write(str(path), np.asarray(data), sample_rate, subtype=subtype)
        return path

    return _write


@pytest.fixture
def podcast_files(rng, write_test_wav):
    """A 4 second mixed file plus two local files starting 500 and 300 samples in.

    The second local file is stereo with identical channels.
    """
    sample_rate = 8000
    mixed = np.clip(rng.standard_normal(sample_rate * 4) * 0.25, -0.99, 0.99)
    alice = mixed[500:]
    bob = mixed[300:]
    return {
        "sample_rate": sample_rate,
        "mixed": write_test_wav("mix.wav", mixed, sample_rate),
        "alice": write_test_wav("alice.wav", alice, sample_rate),
        "bob": write_test_wav("bob.wav", np.column_stack([bob, bob]), sample_rate),
        "alice_frames": len(alice),
        "bob_frames": len(bob),
    }
