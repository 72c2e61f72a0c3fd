"""Configuration model for a sync run."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from clapless.utils.io import read_yaml


class SyncConfig(BaseModel):
    """Settings consumed by detection, fine-tuning and output writing."""

    model_config = ConfigDict(extra="forbid")

    segment_duration: int = Field(default=600, gt=0)  # seconds of each local track used for coarse search
    downsample_factor: int = Field(default=50, ge=1)
    min_confidence: float = Field(default=0.3, ge=0.0)
    finetune_enabled: bool = True
    finetune_target_seconds: float = Field(default=60.0, gt=0.0)
    finetune_min_seconds: float = Field(default=30.0, gt=0.0)
    max_workers: int | None = Field(default=None, ge=1)
    output_suffix: str = "_synced"

    @model_validator(mode="after")
    def _check_finetune_window(self) -> "SyncConfig":
        if self.finetune_min_seconds > self.finetune_target_seconds:
            raise ValueError(
                f"finetune_min_seconds ({self.finetune_min_seconds}) must not exceed "
                f"finetune_target_seconds ({self.finetune_target_seconds})"
            )
        return self


def load_config(path: Path | str | None = None, **overrides: Any) -> SyncConfig:
    """Build a SyncConfig from an optional YAML file plus explicit overrides.

    Overrides set to None are ignored so unset CLI options keep the file
    (or default) value.
    """
    data: dict[str, Any] = {}
    if path is not None:
        data.update(read_yaml(path))
    data.update({k: v for k, v in overrides.items() if v is not None})
    return SyncConfig(**data)
