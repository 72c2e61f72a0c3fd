"""Coarse offset detection for many local tracks in parallel."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Sequence

import numpy as np

from clapless.audio.silence import seconds_to_samples
from clapless.errors import OffsetDetectionError
from clapless.models.offsets import CoarseOffsetResult
from clapless.sync.correlator import detect_offset


def detect_offsets(
    reference: np.ndarray,
    local_tracks: Sequence[np.ndarray],
    sample_rate: int,
    *,
    downsample_factor: int = 50,
    segment_duration: int | None = None,
    max_workers: int | None = None,
    paths: Sequence[str] | None = None,
) -> list[CoarseOffsetResult]:
    """Run :func:`detect_offset` for every local track against ``reference``.

    Each track runs in its own worker; all workers finish before anything
    is returned. Results come back in input order. If any track fails the
    whole batch fails with :class:`OffsetDetectionError` for the lowest
    failing index.

    ``segment_duration`` (seconds) limits how much of each local track is
    scanned. The reference is always used in full.
    """
    if not local_tracks:
        return []
    if paths is None:
        paths = [f"track {i + 1}" for i in range(len(local_tracks))]

    max_local = seconds_to_samples(segment_duration, sample_rate) if segment_duration else None
    workers = max_workers or len(local_tracks)

    results: list[CoarseOffsetResult | None] = [None] * len(local_tracks)
    errors: dict[int, Exception] = {}

    # numpy/scipy FFTs release the GIL, so threads avoid copying the reference per worker
    with ThreadPoolExecutor(max_workers=workers) as executor:
        future_to_idx = {
            executor.submit(
                detect_offset,
                reference,
                track if max_local is None else track[:max_local],
                sample_rate,
                downsample_factor,
            ): idx
            for idx, track in enumerate(local_tracks)
        }

        for future in as_completed(future_to_idx):
            idx = future_to_idx[future]
            try:
                results[idx] = future.result()
            except Exception as e:
                errors[idx] = e

    if errors:
        idx = min(errors)
        raise OffsetDetectionError(idx + 1, paths[idx], str(errors[idx])) from errors[idx]

    return [r for r in results if r is not None]
