"""Pydantic data models for clapless."""

from clapless.models.config import SyncConfig, load_config
from clapless.models.offsets import (
    CoarseOffsetResult,
    FileOffset,
    FinetuneResult,
    OverlapRegion,
)

__all__ = [
    "SyncConfig",
    "load_config",
    "CoarseOffsetResult",
    "FileOffset",
    "FinetuneResult",
    "OverlapRegion",
]
