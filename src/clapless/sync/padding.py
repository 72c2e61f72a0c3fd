"""Turn per-file offsets into silence padding relative to the earliest file."""

from __future__ import annotations

from typing import Sequence

from clapless.audio.silence import samples_to_seconds
from clapless.errors import InputValidationError
from clapless.models.offsets import CoarseOffsetResult, FileOffset


def calculate_padding(
    results: Sequence[CoarseOffsetResult],
    file_paths: Sequence[str],
    sample_rate: int,
) -> list[FileOffset]:
    """Build one FileOffset per coarse result, padded to the earliest file.

    The final offset starts out equal to the coarse offset; fine-tuning
    updates it later and calls :func:`recalculate_padding`.
    """
    if len(results) != len(file_paths):
        raise InputValidationError(
            f"mismatch between results ({len(results)}) and file paths ({len(file_paths)})"
        )
    if not results:
        raise InputValidationError("no offset results provided")

    file_offsets = [
        FileOffset(
            path=path,
            offset_samples=result.offset_samples,
            offset_seconds=result.offset_seconds,
            final_offset_samples=result.offset_samples,
            final_offset_seconds=result.offset_seconds,
            confidence=result.confidence,
        )
        for result, path in zip(results, file_paths)
    ]
    return recalculate_padding(file_offsets, sample_rate)


def recalculate_padding(file_offsets: list[FileOffset], sample_rate: int) -> list[FileOffset]:
    """Set padding and the earliest flag from each file's final offset, in place.

    Idempotent: running it again on unchanged offsets gives the same padding.
    """
    if not file_offsets:
        raise InputValidationError("no file offsets provided")

    min_offset = min(fo.final_offset_samples for fo in file_offsets)

    for fo in file_offsets:
        padding = fo.final_offset_samples - min_offset
        fo.padding_samples = padding
        fo.padding_seconds = samples_to_seconds(padding, sample_rate)
        fo.is_earliest = fo.final_offset_samples == min_offset

    return file_offsets


def validate_confidence(file_offsets: Sequence[FileOffset], min_confidence: float) -> list[str]:
    """Warnings for files whose confidence is below ``min_confidence``."""
    return [
        f"{fo.path}: low confidence score {fo.confidence:.2f} "
        f"(threshold: {min_confidence:.2f})"
        for fo in file_offsets
        if fo.confidence < min_confidence
    ]


def format_offset_seconds(seconds: float) -> str:
    """Format seconds with an explicit sign, e.g. ``+1.250s``."""
    sign = "+" if seconds > 0 else "-" if seconds < 0 else ""
    return f"{sign}{abs(seconds):.3f}s"
