"""CLI-facing handlers that delegate to application services."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from uuid import uuid4

from audo_dyn.application.compression_service import CompressFile, CompressionResult
from audo_dyn.infrastructure.logging_event_publisher import LoggingEventPublisher
from audo_dyn.processor.compressor import DEFAULT_BLOCK_SIZE, ProgressCallback
from audo_dyn.utils.config import CompressorConfig

_event_publisher = LoggingEventPublisher()


def compress_from_paths(
    input_path: Path,
    output_path: Path,
    config: CompressorConfig,
    trace_path: Path | None = None,
    block_size: int = DEFAULT_BLOCK_SIZE,
    correlation_id: str | None = None,
    progress: ProgressCallback | None = None,
) -> CompressionResult:
    service = CompressFile(block_size=block_size, event_publisher=_event_publisher)
    return service.run(
        input_path,
        output_path,
        config,
        trace_path=trace_path,
        correlation_id=correlation_id,
        progress=progress,
    )


def _resolve_output_path(target_path: Path, output_dir: Path, naming_template: str, item_index: int) -> Path:
    rendered_name = naming_template.format(
        index=item_index,
        target_name=target_path.name,
        target_stem=target_path.stem,
        target_suffix=target_path.suffix,
    )
    return output_dir / rendered_name


def _glob(pattern: str) -> list[Path]:
    pattern_path = Path(pattern)
    if pattern_path.is_absolute():
        anchor = Path(pattern_path.anchor)
        return list(anchor.glob(str(pattern_path.relative_to(anchor))))
    return list(Path().glob(pattern))


def run_batch_compression(
    target_pattern: str,
    output_dir: Path,
    config: CompressorConfig,
    naming_template: str = "{target_stem}_compressed.wav",
    concurrency_limit: int = 4,
    block_size: int = DEFAULT_BLOCK_SIZE,
    export_traces: bool = False,
) -> tuple[list[dict[str, str]], dict[str, int]]:
    """Compress every file matching ``target_pattern`` into ``output_dir``.

    Files share nothing but the (immutable) configuration, so they run
    concurrently; a failing file is reported and does not stop the batch.
    """

    matched_targets = sorted(path for path in _glob(target_pattern) if path.is_file())
    if not matched_targets:
        raise ValueError(f"No input files matched pattern '{target_pattern}'.")

    output_dir.mkdir(parents=True, exist_ok=True)

    def _process(target_path: Path, item_index: int) -> dict[str, str]:
        correlation_id = str(uuid4())
        try:
            output_path = _resolve_output_path(target_path, output_dir, naming_template, item_index)
            trace_path = output_path.with_suffix(".csv") if export_traces else None
            result = compress_from_paths(
                target_path,
                output_path,
                config,
                trace_path=trace_path,
                block_size=block_size,
                correlation_id=correlation_id,
            )
            return {
                "index": str(item_index),
                "target": str(target_path),
                "output": str(result.output_path),
                "status": "succeeded",
                "correlation_id": correlation_id,
            }
        except Exception as error:  # noqa: BLE001
            return {
                "index": str(item_index),
                "target": str(target_path),
                "status": "failed",
                "correlation_id": correlation_id,
                "error": str(error),
            }

    safe_concurrency = max(1, concurrency_limit)
    results: list[dict[str, str]] = []
    with ThreadPoolExecutor(max_workers=safe_concurrency) as executor:
        futures = [
            executor.submit(_process, target, idx)
            for idx, target in enumerate(matched_targets, start=1)
        ]
        for future in as_completed(futures):
            results.append(future.result())

    results.sort(key=lambda item: int(item["index"]))
    success_count = sum(1 for item in results if item["status"] == "succeeded")
    summary = {
        "total": len(results),
        "succeeded": success_count,
        "failed": len(results) - success_count,
    }
    return results, summary
