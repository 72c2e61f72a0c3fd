"""WAV loading and writing via soundfile (libsndfile)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np
import soundfile as sf

from clapless.errors import InputValidationError

_SUBTYPE_BITS = {
    "PCM_U8": 8,
    "PCM_S8": 8,
    "PCM_16": 16,
    "PCM_24": 24,
    "PCM_32": 32,
    "FLOAT": 32,
    "DOUBLE": 64,
}

_BITS_SUBTYPE = {
    8: "PCM_U8",
    16: "PCM_16",
    24: "PCM_24",
    32: "PCM_32",
    64: "DOUBLE",
}


@dataclass
class WAVData:
    """Decoded WAV file with interleaved float samples in [-1.0, 1.0]."""

    path: str
    sample_rate: int
    channels: int
    bit_depth: int
    data: np.ndarray
    subtype: str | None = None  # soundfile subtype the file was decoded from

    @property
    def frames(self) -> int:
        return len(self.data) // self.channels

    @property
    def duration(self) -> float:
        return self.frames / self.sample_rate

    @property
    def duration_string(self) -> str:
        minutes, seconds = divmod(int(self.duration), 60)
        return f"{minutes}:{seconds:02d}"


def load_wav(path: Path | str) -> WAVData:
    """Decode a WAV file into interleaved float64 samples."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"WAV file not found: {path}")

    info = sf.info(str(path))
    data, sample_rate = sf.read(str(path), dtype="float64", always_2d=True)

    if data.size == 0:
        raise InputValidationError(f"WAV file contains no audio data: {path}")

    return WAVData(
        path=str(path),
        sample_rate=int(sample_rate),
        channels=int(data.shape[1]),
        bit_depth=_SUBTYPE_BITS.get(info.subtype, 16),
        # (frames, channels) row-major flattens to interleaved order
        data=np.ascontiguousarray(data).reshape(-1),
        subtype=info.subtype,
    )


def output_subtype(bit_depth: int, subtype: str | None = None) -> str:
    """Pick the soundfile subtype used to write a file back out.

    A known ``subtype`` (usually the one the input was decoded from) wins,
    so float input stays float. Otherwise ``bit_depth`` selects PCM, or
    DOUBLE for 64 bits.
    """
    if subtype is not None:
        if not sf.check_format("WAV", subtype):
            raise InputValidationError(f"unsupported subtype for WAV output: {subtype}")
        return subtype

    resolved = _BITS_SUBTYPE.get(bit_depth)
    if resolved is None:
        raise InputValidationError(f"unsupported bit depth for WAV output: {bit_depth}")
    return resolved


def write_wav(
    path: Path | str,
    data: np.ndarray,
    sample_rate: int,
    channels: int,
    bit_depth: int,
    subtype: str | None = None,
) -> None:
    """Write interleaved float samples as WAV, clamping to [-1.0, 1.0]."""
    if channels < 1:
        raise InputValidationError(f"channel count must be >= 1, got {channels}")
    if len(data) % channels != 0:
        raise InputValidationError(
            f"sample count {len(data)} is not a multiple of channel count {channels}"
        )
    subtype = output_subtype(bit_depth, subtype)

    frames = np.clip(np.asarray(data, dtype=np.float64), -1.0, 1.0).reshape(-1, channels)
    sf.write(str(path), frames, sample_rate, subtype=subtype, format="WAV")
