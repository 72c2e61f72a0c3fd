"""End-to-end synchronization run: load, detect, refine, pad, write."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from pydantic import BaseModel, Field

from clapless.audio.silence import prepend_silence_interleaved
from clapless.audio.wav import WAVData, load_wav, output_subtype, write_wav
from clapless.errors import SampleRateMismatchError
from clapless.models.config import SyncConfig
from clapless.models.offsets import FileOffset
from clapless.sync.detector import detect_offsets
from clapless.sync.fine_tuner import finetune_offsets, skip_all
from clapless.sync.padding import calculate_padding, format_offset_seconds, validate_confidence
from clapless.sync.signal import to_mono
from clapless.utils.progress import log, log_step, log_success, log_warning


class SyncReport(BaseModel):
    """Everything a run decided, in a JSON-serializable form."""

    mixed_path: str
    sample_rate: int
    config: SyncConfig
    files: list[FileOffset] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    outputs: list[str] = Field(default_factory=list)


def output_path_for(path: Path | str, suffix: str = "_synced") -> Path:
    """``alice.wav`` -> ``alice_synced.wav`` in the same directory."""
    path = Path(path)
    return path.with_name(f"{path.stem}{suffix}{path.suffix}")


def validate_sample_rates(mixed: WAVData, local_files: Sequence[WAVData]) -> None:
    for i, local in enumerate(local_files, start=1):
        if local.sample_rate != mixed.sample_rate:
            raise SampleRateMismatchError(mixed.sample_rate, local.sample_rate, i, local.path)


def _load_all(mixed_path: Path | str, local_paths: Sequence[Path | str]) -> tuple[WAVData, list[WAVData]]:
    log("Loading files...")
    mixed = load_wav(mixed_path)
    log_success(
        f"Mixed: {Path(mixed.path).name} ({mixed.channels} channels, "
        f"{mixed.sample_rate} Hz, {mixed.duration_string})"
    )

    local_files = []
    for i, path in enumerate(local_paths, start=1):
        local = load_wav(path)
        log_success(
            f"Local {i}: {Path(local.path).name} ({local.channels} channels, "
            f"{local.sample_rate} Hz, {local.duration_string})"
        )
        local_files.append(local)

    return mixed, local_files


def write_synced_file(local: WAVData, file_offset: FileOffset, output_path: Path) -> None:
    """Write ``local`` with its padding prepended on every channel, in its own format."""
    data = prepend_silence_interleaved(local.data, file_offset.padding_samples, local.channels)
    write_wav(output_path, data, local.sample_rate, local.channels, local.bit_depth, local.subtype)


def run_sync(
    mixed_path: Path | str,
    local_paths: Sequence[Path | str],
    config: SyncConfig | None = None,
    *,
    write: bool = True,
) -> SyncReport:
    """Align every local file to the mixed file and write padded copies.

    Steps:
    1. Load the mixed and local WAVs, require one shared sample rate
    2. Coarse offsets on decimated mono audio, one worker per file
    3. Padding from coarse offsets, low-confidence warnings
    4. Full-rate fine-tuning over the common overlap, padding recomputed
    5. Write ``<name><suffix>.wav`` next to each input (unless write=False)
    """
    config = config or SyncConfig()
    local_paths = [str(p) for p in local_paths]

    mixed, local_files = _load_all(mixed_path, local_paths)
    validate_sample_rates(mixed, local_files)
    sample_rate = mixed.sample_rate

    mixed_mono = to_mono(mixed.data, mixed.channels)
    local_monos = [to_mono(local.data, local.channels) for local in local_files]

    # Coarse detection
    log_step("Detect", f"Coarse search on {len(local_files)} file(s), downsample x{config.downsample_factor}")
    coarse = detect_offsets(
        mixed_mono,
        local_monos,
        sample_rate,
        downsample_factor=config.downsample_factor,
        segment_duration=config.segment_duration,
        max_workers=config.max_workers,
        paths=local_paths,
    )
    file_offsets = calculate_padding(coarse, local_paths, sample_rate)

    for fo in file_offsets:
        log_step(
            "Detect",
            f"{Path(fo.path).name}: {format_offset_seconds(fo.offset_seconds)} "
            f"(confidence: {fo.confidence:.2f})",
        )

    warnings = validate_confidence(file_offsets, config.min_confidence)
    for warning in warnings:
        log_warning(warning)
    if warnings:
        log_warning("Synchronization may not be accurate. Please verify results.")

    # Fine-tuning
    if config.finetune_enabled:
        finetune_offsets(
            mixed_mono,
            local_monos,
            file_offsets,
            sample_rate,
            target_seconds=config.finetune_target_seconds,
            min_seconds=config.finetune_min_seconds,
        )
    else:
        skip_all(file_offsets, "fine-tuning disabled", sample_rate)

    for fo in file_offsets:
        result = fo.finetune_result
        name = Path(fo.path).name
        if result is not None and result.skipped:
            log_warning(f"{name}: fine-tuning skipped ({result.skip_reason})")
        else:
            log_step(
                "Refine",
                f"{name}: {fo.fine_adjustment_samples:+d} samples -> "
                f"{format_offset_seconds(fo.final_offset_seconds)}",
            )

    # Padding
    log("Calculating synchronization...")
    for fo in file_offsets:
        name = Path(fo.path).name
        if fo.is_earliest:
            log_step("Pad", f"{name}: No padding needed (earliest)")
        else:
            log_step("Pad", f"{name}: Adding {fo.padding_seconds:.3f}s silence")

    report = SyncReport(
        mixed_path=str(mixed_path),
        sample_rate=sample_rate,
        config=config,
        files=file_offsets,
        warnings=warnings,
    )

    if not write:
        return report

    # Every output format is checked before the first file is written
    for local in local_files:
        output_subtype(local.bit_depth, local.subtype)

    log("Writing synchronized files...")
    for local, fo in zip(local_files, file_offsets):
        output_path = output_path_for(local.path, config.output_suffix)
        write_synced_file(local, fo, output_path)
        report.outputs.append(str(output_path))
        log_success(output_path.name)

    log_success("Synchronization complete!")
    return report
