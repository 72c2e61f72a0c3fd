"""clapless: synchronize local recordings against a mixed source."""

from __future__ import annotations

from pathlib import Path

import click

from clapless import __version__
from clapless.models.config import load_config
from clapless.utils.io import write_json
from clapless.utils.progress import log, log_error, log_success, show_offsets_table

WAV_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


def _require_wav(ctx: click.Context, param: click.Parameter, value):
    paths = value if isinstance(value, tuple) else (value,)
    for path in paths:
        if path is not None and path.suffix.lower() != ".wav":
            raise click.BadParameter(f"file must be WAV format (got {path.suffix or 'no extension'}): {path}")
    return value


@click.command(
    epilog=(
        "Example:\n\n"
        "  clapless --mixed podcast_mix.wav alice.wav bob.wav\n\n"
        "Creates alice_synced.wav and bob_synced.wav next to the inputs."
    )
)
@click.version_option(version=__version__, prog_name="clapless")
@click.option(
    "--mixed", "-m",
    required=True,
    type=WAV_PATH,
    callback=_require_wav,
    help="Path to the mixed audio file",
)
@click.argument("locals_", metavar="LOCAL...", nargs=-1, type=WAV_PATH, callback=_require_wav)
@click.option(
    "--downsample", "-d",
    default=None,
    type=click.IntRange(min=1),
    help="Downsample factor for coarse offset search (default: 50; higher = faster but less accurate)",
)
@click.option(
    "--segment-duration",
    default=None,
    type=click.IntRange(min=1),
    help="Seconds of each local file scanned in the coarse search (default: 600)",
)
@click.option(
    "--min-confidence",
    default=None,
    type=click.FloatRange(min=0.0),
    help="Warn when a file's confidence is below this value (default: 0.3)",
)
@click.option("--no-finetune", is_flag=True, help="Use coarse offsets without full-rate refinement")
@click.option("--suffix", default=None, help="Suffix for synced file names (default: _synced)")
@click.option(
    "--config", "-c", "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with sync settings; command-line options take precedence",
)
@click.option(
    "--report", "-r",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write a JSON report of offsets and padding to this path",
)
@click.option("--dry-run", is_flag=True, help="Detect and report offsets without writing audio")
def cli(
    mixed: Path,
    locals_: tuple[Path, ...],
    downsample: int | None,
    segment_duration: int | None,
    min_confidence: float | None,
    no_finetune: bool,
    suffix: str | None,
    config_path: Path | None,
    report: Path | None,
    dry_run: bool,
) -> None:
    """Synchronize local podcast recordings with a mixed source.

    Each LOCAL file is aligned to MIXED and written out with enough leading
    silence that all local files share a common start.
    """
    if len(locals_) < 2:
        raise click.UsageError(f"at least 2 local audio files are required, got {len(locals_)}")

    try:
        config = load_config(
            config_path,
            downsample_factor=downsample,
            segment_duration=segment_duration,
            min_confidence=min_confidence,
            finetune_enabled=False if no_finetune else None,
            output_suffix=suffix,
        )
    except ValueError as e:
        log_error(f"Invalid configuration: {e}")
        raise SystemExit(1)

    from clapless.pipeline.runner import run_sync

    log("[bold]Clapless[/bold]: Audio Synchronization Tool")

    try:
        result = run_sync(mixed, list(locals_), config, write=not dry_run)
    except Exception as e:
        log_error(f"Synchronization failed: {e}")
        raise SystemExit(1)

    show_offsets_table(result.files)

    if report is not None:
        write_json(report, result.model_dump(mode="json"))
        log_success(f"Report: {report}")
