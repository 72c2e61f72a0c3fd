"""Offset estimation, refinement and padding."""

from clapless.sync.correlator import correlate, detect_offset
from clapless.sync.detector import detect_offsets
from clapless.sync.fine_tuner import finetune_offsets
from clapless.sync.padding import calculate_padding, recalculate_padding

__all__ = [
    "correlate",
    "detect_offset",
    "detect_offsets",
    "finetune_offsets",
    "calculate_padding",
    "recalculate_padding",
]
