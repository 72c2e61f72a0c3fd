"""Offset, overlap and padding models produced by the sync engine.

Sign convention: a positive offset means the local track's first sample
sits that many samples after the start of the mixed reference, so the
track needs to be delayed to line up.
"""

from __future__ import annotations

from pydantic import BaseModel


class CoarseOffsetResult(BaseModel):
    """Offset found by one correlation pass."""

    offset_samples: int
    offset_seconds: float
    confidence: float  # length-normalized peak, roughly 0..1, not a probability


class OverlapRegion(BaseModel):
    """Window of the aligned timeline where every track has data."""

    start_sample: int
    end_sample: int
    duration_seconds: float

    @property
    def length(self) -> int:
        return self.end_sample - self.start_sample


class FinetuneResult(BaseModel):
    """Outcome of full-resolution refinement for a single track."""

    adjustment_samples: int = 0  # added to the coarse offset
    adjustment_seconds: float = 0.0
    confidence: float = 0.0
    segment_used: OverlapRegion | None = None
    skipped: bool = False
    skip_reason: str = ""


class FileOffset(BaseModel):
    """Per-file offset, fine adjustment and the padding derived from them."""

    path: str
    offset_samples: int
    offset_seconds: float

    fine_adjustment_samples: int = 0
    fine_adjustment_seconds: float = 0.0
    final_offset_samples: int
    final_offset_seconds: float

    padding_samples: int = 0
    padding_seconds: float = 0.0
    confidence: float = 0.0
    is_earliest: bool = False

    finetune_result: FinetuneResult | None = None

    def use_coarse(self, reason: str) -> None:
        """Drop any fine adjustment and record why refinement was skipped."""
        self.fine_adjustment_samples = 0
        self.fine_adjustment_seconds = 0.0
        self.final_offset_samples = self.offset_samples
        self.final_offset_seconds = self.offset_seconds
        self.finetune_result = FinetuneResult(skipped=True, skip_reason=reason)
