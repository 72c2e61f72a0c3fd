"""Full-resolution refinement of coarse offsets over the shared overlap.

Coarse detection runs on decimated audio, so it is only accurate to within
the downsample factor and can lock onto an aliased peak for periodic
material. Here every track is re-correlated at the full sample rate over
one window (60s by default) that all tracks cover after coarse alignment.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from clapless.audio.silence import samples_to_seconds, seconds_to_samples
from clapless.errors import InputValidationError, OverlapError, SegmentBoundsError
from clapless.models.offsets import CoarseOffsetResult, FileOffset, FinetuneResult, OverlapRegion
from clapless.sync.correlator import detect_offset
from clapless.sync.padding import recalculate_padding

DEFAULT_TARGET_SECONDS = 60.0
DEFAULT_MIN_SECONDS = 30.0


def extract_segment(data: np.ndarray, start_sample: int, end_sample: int) -> np.ndarray:
    """Copy ``data[start_sample:end_sample]`` after checking the bounds."""
    if start_sample < 0 or end_sample > len(data) or start_sample >= end_sample:
        raise SegmentBoundsError(start_sample, end_sample, len(data))
    return data[start_sample:end_sample].copy()


def find_overlapping_region(
    offsets: Sequence[int],
    lengths: Sequence[int],
    sample_rate: int,
) -> OverlapRegion:
    """Intersect every track's ``[offset, offset + length)`` interval."""
    if not offsets:
        raise InputValidationError("no local files provided")
    if len(offsets) != len(lengths):
        raise InputValidationError(
            f"mismatch between offsets ({len(offsets)}) and track lengths ({len(lengths)})"
        )

    overlap_start = max(offsets)
    overlap_end = min(offset + length for offset, length in zip(offsets, lengths))

    if overlap_end <= overlap_start:
        raise OverlapError(
            f"no overlapping region found after coarse alignment "
            f"(start: {overlap_start}, end: {overlap_end})"
        )

    return OverlapRegion(
        start_sample=overlap_start,
        end_sample=overlap_end,
        duration_seconds=samples_to_seconds(overlap_end - overlap_start, sample_rate),
    )


def select_finetune_segment(
    overlap: OverlapRegion,
    target_seconds: float,
    min_seconds: float,
    sample_rate: int,
) -> tuple[int, int]:
    """Pick the ``[start, end)`` window used for fine-tuning.

    Overlaps longer than the target get a centered window of target
    length; shorter ones are used whole. Anything under ``min_seconds``
    raises :class:`OverlapError`.
    """
    target_samples = seconds_to_samples(target_seconds, sample_rate)
    min_samples = seconds_to_samples(min_seconds, sample_rate)
    overlap_samples = overlap.length

    if overlap_samples < min_samples:
        raise OverlapError(
            f"overlap duration {overlap.duration_seconds:.2f}s is less than "
            f"minimum {min_seconds:.2f}s"
        )

    if overlap_samples >= target_samples:
        center = overlap.start_sample + overlap_samples // 2
        start = center - target_samples // 2
        return start, start + target_samples

    return overlap.start_sample, overlap.end_sample


def fine_adjustment(raw_offset: int) -> int:
    """Convert a raw in-window offset into the adjustment added to the coarse offset.

    A positive raw offset means the local content shows up later in the
    window than the reference, i.e. the coarse offset placed the track
    too late, so the adjustment is negative.
    """
    return -raw_offset


def measure_segment_offset(
    reference_segment: np.ndarray,
    local_segment: np.ndarray,
    sample_rate: int,
) -> CoarseOffsetResult:
    """Raw offset of ``local_segment`` within ``reference_segment`` at full rate.

    Positive when the local content appears later in the window than in
    the reference. The truncated correlation only covers non-negative
    lags, so both argument orders are tried and the stronger peak wins.
    """
    # local content earlier than the reference
    ahead = detect_offset(reference_segment, local_segment, sample_rate, 1)
    # local content later than the reference
    behind = detect_offset(local_segment, reference_segment, sample_rate, 1)

    if behind.confidence > ahead.confidence:
        return behind
    return CoarseOffsetResult(
        offset_samples=-ahead.offset_samples,
        offset_seconds=-ahead.offset_seconds,
        confidence=ahead.confidence,
    )


def skip_all(file_offsets: list[FileOffset], reason: str, sample_rate: int) -> list[FileOffset]:
    """Fall back to coarse offsets for every file."""
    for fo in file_offsets:
        fo.use_coarse(reason)
    return recalculate_padding(file_offsets, sample_rate)


def refine_track(
    reference_segment: np.ndarray,
    track: np.ndarray,
    file_offset: FileOffset,
    segment: OverlapRegion,
    sample_rate: int,
) -> FileOffset:
    """Refine one file against the reference window ``segment``, in place.

    The window is mapped into the track's own samples through its coarse
    offset. A window that falls outside the track leaves the coarse offset
    as final and records the reason.
    """
    local_start = segment.start_sample - file_offset.offset_samples
    local_end = segment.end_sample - file_offset.offset_samples

    if local_start < 0 or local_end > len(track):
        file_offset.use_coarse(
            f"segment out of bounds [{local_start}, {local_end}) "
            f"for file length {len(track)}"
        )
        return file_offset

    local_segment = extract_segment(track, local_start, local_end)
    raw = measure_segment_offset(reference_segment, local_segment, sample_rate)

    adjustment = fine_adjustment(raw.offset_samples)
    file_offset.fine_adjustment_samples = adjustment
    file_offset.fine_adjustment_seconds = samples_to_seconds(adjustment, sample_rate)
    file_offset.final_offset_samples = file_offset.offset_samples + adjustment
    file_offset.final_offset_seconds = samples_to_seconds(
        file_offset.final_offset_samples, sample_rate
    )
    file_offset.finetune_result = FinetuneResult(
        adjustment_samples=adjustment,
        adjustment_seconds=file_offset.fine_adjustment_seconds,
        confidence=raw.confidence,
        segment_used=segment,
    )
    return file_offset


def finetune_offsets(
    reference: np.ndarray,
    local_tracks: Sequence[np.ndarray],
    file_offsets: list[FileOffset],
    sample_rate: int,
    *,
    target_seconds: float = DEFAULT_TARGET_SECONDS,
    min_seconds: float = DEFAULT_MIN_SECONDS,
) -> list[FileOffset]:
    """Refine every file's coarse offset and recompute padding in place.

    ``reference`` and ``local_tracks`` are mono signals. A window that
    cannot be found (no overlap, overlap too short, window beyond the
    reference) makes every file keep its coarse offset. A window that does
    not fit inside one track only skips that track.
    """
    if len(local_tracks) != len(file_offsets):
        raise InputValidationError(
            f"mismatch between local tracks ({len(local_tracks)}) "
            f"and file offsets ({len(file_offsets)})"
        )

    # Step 1-3: shared window and the matching slice of the reference
    try:
        overlap = find_overlapping_region(
            [fo.offset_samples for fo in file_offsets],
            [len(track) for track in local_tracks],
            sample_rate,
        )
        seg_start, seg_end = select_finetune_segment(
            overlap, target_seconds, min_seconds, sample_rate
        )
        reference_segment = extract_segment(reference, seg_start, seg_end)
    except (OverlapError, SegmentBoundsError) as e:
        return skip_all(file_offsets, str(e), sample_rate)

    segment = OverlapRegion(
        start_sample=seg_start,
        end_sample=seg_end,
        duration_seconds=samples_to_seconds(seg_end - seg_start, sample_rate),
    )

    # Step 4-6
    for track, fo in zip(local_tracks, file_offsets):
        refine_track(reference_segment, track, fo, segment, sample_rate)

    # Step 7
    return recalculate_padding(file_offsets, sample_rate)
