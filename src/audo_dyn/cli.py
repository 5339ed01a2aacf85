"""CLI interface for Audo_Dyn."""

import logging
from pathlib import Path
from typing import Any
from uuid import uuid4

import typer
from pydantic import ValidationError

from .compressor_options import EnvelopeMode, ReleaseCurve, StereoLinkMode
from .ingest_validation import IngestValidationError
from .interfaces.cli_handlers import compress_from_paths, run_batch_compression
from .io.audio_file import AudioReadError, AudioWriteError
from .metering import format_summary
from .processor.compressor import DEFAULT_BLOCK_SIZE
from .utils.config import CompressorConfig, load_compressor_config

app = typer.Typer(help="Audo_Dyn dynamic-range compressor")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_config(config_path: Path | None, overrides: dict[str, Any]) -> CompressorConfig:
    try:
        if config_path is not None:
            return load_compressor_config(config_path, overrides)
        return CompressorConfig.model_validate(
            {key: value for key, value in overrides.items() if value is not None}
        )
    except (ValidationError, OSError, ValueError) as error:
        typer.echo(f"Error: invalid compressor configuration: {error}", err=True)
        raise typer.Exit(code=1) from error


def format_settings(config: CompressorConfig) -> str:
    lines = [
        "=== COMPRESSOR SETTINGS ===",
        f"Threshold:    {config.threshold_db:.1f} dB",
        f"Ratio:        {config.ratio:.2f}:1",
        f"Attack:       {config.attack_ms:.1f} ms",
        f"Release:      {config.release_ms:.1f} ms",
        f"Knee:         {config.knee_db:.1f} dB",
        f"Makeup Gain:  {config.makeup_gain_db:.1f} dB",
        f"Lookahead:    {config.lookahead_ms:.1f} ms",
        f"Mix:          {config.dry_wet_mix:.2f} (0=wet, 1=dry)",
        f"Link:         {config.stereo_link_mode.value}",
        f"Envelope:     {config.envelope_mode.value}",
        f"Release Curve: {config.release_curve.value}",
        f"Bypass:       {'on' if config.bypass else 'off'}",
        "",
    ]
    return "\n".join(lines)


@app.command("compress")
def compress_command(
    input_path: Path = typer.Argument(..., help="Input WAV file (16 or 24-bit PCM)"),
    output_path: Path = typer.Argument(..., help="Output WAV file"),
    threshold: float | None = typer.Option(None, "--threshold", "-t", help="Threshold in dB (-60 to 0, default -20)."),
    ratio: float | None = typer.Option(None, "--ratio", "-r", help="Compression ratio (>= 1, >= 100 limits, default 4)."),
    attack: float | None = typer.Option(None, "--attack", "-a", help="Attack time in ms (default 10)."),
    release: float | None = typer.Option(None, "--release", help="Release time in ms (default 100)."),
    knee: float | None = typer.Option(None, "--knee", "-k", help="Knee width in dB (0 to 30, default 0)."),
    makeup: float | None = typer.Option(None, "--makeup", "-m", help="Makeup gain in dB (-20 to 20, default 0)."),
    link: StereoLinkMode | None = typer.Option(None, "--link", case_sensitive=False, help="Stereo linking mode (default max)."),
    envelope: EnvelopeMode | None = typer.Option(None, "--envelope", case_sensitive=False, help="Envelope detection mode (default peak)."),
    release_curve: ReleaseCurve | None = typer.Option(None, "--release-curve", case_sensitive=False, help="Release curve (default linear)."),
    lookahead: float | None = typer.Option(None, "--lookahead", help="Lookahead in ms (0 to 10, default 0)."),
    mix: float | None = typer.Option(None, "--mix", help="Dry/wet mix, 1.0 = dry, 0.0 = wet (default 0)."),
    bypass: bool = typer.Option(False, "--bypass", help="Pass audio through unprocessed."),
    csv_path: Path | None = typer.Option(None, "--csv", help="Export the gain-reduction trace as CSV."),
    config_path: Path | None = typer.Option(None, "--config", help="JSON or YAML compressor preset."),
    block_size: int = typer.Option(DEFAULT_BLOCK_SIZE, "--block-size", min=1, help="Samples per processing block."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print settings and progress."),
) -> None:
    """Compress a WAV file."""

    _configure_logging(verbose)
    config = _build_config(
        config_path,
        {
            "threshold_db": threshold,
            "ratio": ratio,
            "attack_ms": attack,
            "release_ms": release,
            "knee_db": knee,
            "makeup_gain_db": makeup,
            "stereo_link_mode": link,
            "envelope_mode": envelope,
            "release_curve": release_curve,
            "lookahead_ms": lookahead,
            "dry_wet_mix": mix,
            "bypass": True if bypass else None,
        },
    )
    if verbose:
        typer.echo(format_settings(config))

    def _progress(processed: int, total: int) -> None:
        typer.echo(f"Processed: {processed * 100 // total}%")

    try:
        result = compress_from_paths(
            input_path,
            output_path,
            config,
            trace_path=csv_path,
            block_size=block_size,
            correlation_id=str(uuid4()),
            progress=_progress if verbose else None,
        )
    except IngestValidationError as error:
        typer.echo(f"Error: Cannot read {input_path}: {error.message} [{error.code}]", err=True)
        raise typer.Exit(code=1) from error
    except AudioReadError as error:
        typer.echo(f"Error: Cannot read {input_path}: {error}", err=True)
        raise typer.Exit(code=1) from error
    except AudioWriteError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error

    if verbose:
        metadata = result.metadata
        typer.echo(f"Input: {input_path}")
        typer.echo(f"  Sample Rate: {metadata.sample_rate_hz} Hz")
        typer.echo(f"  Channels: {metadata.channel_count}")
        typer.echo(f"  Bits: {metadata.bit_depth}")
        typer.echo(f"  Samples: {result.sample_count}")
        typer.echo(f"  Duration: {metadata.duration_seconds:.2f} sec")
    if result.summary is not None:
        typer.echo(format_summary(result.summary), nl=False)
    if verbose:
        typer.echo(f"Output written: {result.output_path}")
        if result.trace_path is not None:
            typer.echo(f"CSV exported: {result.trace_path}")
    typer.echo("Done")


@app.command("batch-compress")
def batch_compress_command(
    target_pattern: str = typer.Option(..., "--target-pattern", help="Glob pattern selecting input WAV files."),
    output_dir: Path = typer.Option(..., "--output-dir", help="Directory where compressed outputs will be written."),
    naming_template: str = typer.Option(
        "{target_stem}_compressed.wav",
        "--naming-template",
        help="Output naming template. Variables: index,target_name,target_stem,target_suffix.",
    ),
    concurrency_limit: int = typer.Option(4, "--concurrency-limit", min=1, help="Maximum number of concurrent jobs."),
    threshold: float | None = typer.Option(None, "--threshold", "-t", help="Threshold in dB."),
    ratio: float | None = typer.Option(None, "--ratio", "-r", help="Compression ratio."),
    attack: float | None = typer.Option(None, "--attack", "-a", help="Attack time in ms."),
    release: float | None = typer.Option(None, "--release", help="Release time in ms."),
    knee: float | None = typer.Option(None, "--knee", "-k", help="Knee width in dB."),
    makeup: float | None = typer.Option(None, "--makeup", "-m", help="Makeup gain in dB."),
    link: StereoLinkMode | None = typer.Option(None, "--link", case_sensitive=False, help="Stereo linking mode."),
    envelope: EnvelopeMode | None = typer.Option(None, "--envelope", case_sensitive=False, help="Envelope detection mode."),
    release_curve: ReleaseCurve | None = typer.Option(None, "--release-curve", case_sensitive=False, help="Release curve."),
    lookahead: float | None = typer.Option(None, "--lookahead", help="Lookahead in ms."),
    mix: float | None = typer.Option(None, "--mix", help="Dry/wet mix, 1.0 = dry, 0.0 = wet."),
    bypass: bool = typer.Option(False, "--bypass", help="Pass audio through unprocessed."),
    export_csv: bool = typer.Option(False, "--csv", help="Write a gain-reduction CSV next to each output."),
    config_path: Path | None = typer.Option(None, "--config", help="JSON or YAML compressor preset."),
    block_size: int = typer.Option(DEFAULT_BLOCK_SIZE, "--block-size", min=1, help="Samples per processing block."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-file events."),
) -> None:
    """Compress every file matching a glob pattern with the same settings."""

    _configure_logging(verbose)
    config = _build_config(
        config_path,
        {
            "threshold_db": threshold,
            "ratio": ratio,
            "attack_ms": attack,
            "release_ms": release,
            "knee_db": knee,
            "makeup_gain_db": makeup,
            "stereo_link_mode": link,
            "envelope_mode": envelope,
            "release_curve": release_curve,
            "lookahead_ms": lookahead,
            "dry_wet_mix": mix,
            "bypass": True if bypass else None,
        },
    )

    try:
        results, summary = run_batch_compression(
            target_pattern=target_pattern,
            output_dir=output_dir,
            config=config,
            naming_template=naming_template,
            concurrency_limit=concurrency_limit,
            block_size=block_size,
            export_traces=export_csv,
        )
    except ValueError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error

    for item in results:
        if item["status"] == "succeeded":
            typer.echo(
                "[OK] "
                f"#{item['index']} target={item['target']} "
                f"output={item['output']} correlation_id={item['correlation_id']}"
            )
        else:
            typer.echo(
                "[FAILED] "
                f"#{item['index']} target={item['target']} "
                f"error={item['error']} correlation_id={item['correlation_id']}"
            )

    typer.echo(
        "Summary: "
        f"total={summary['total']} "
        f"succeeded={summary['succeeded']} "
        f"failed={summary['failed']}"
    )
    if summary["failed"]:
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
