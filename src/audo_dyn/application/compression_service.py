"""Application service orchestrating a single-file compression run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from uuid import uuid4

from audo_dyn.application.event_publisher import EventPublisher, NullEventPublisher
from audo_dyn.domain.events import (
    BlockProcessed,
    CompressionFailed,
    CompressionRendered,
    IngestValidated,
    TraceExported,
)
from audo_dyn.ingest_validation import AudioMetadata, IngestValidationError, ValidationPolicy, validate_audio_file
from audo_dyn.io.audio_file import AudioReadError, AudioWriteError, PcmAudio, read_audio, write_audio
from audo_dyn.metering import MeteringSummary, MetricsRecorder
from audo_dyn.processor.compressor import DEFAULT_BLOCK_SIZE, CompressorProcessor, ProgressCallback
from audo_dyn.utils.config import CompressorConfig


@dataclass(frozen=True, slots=True)
class CompressionResult:
    """What a finished run produced."""

    output_path: Path
    trace_path: Path | None
    metadata: AudioMetadata
    summary: MeteringSummary | None
    recorder: MetricsRecorder

    @property
    def sample_count(self) -> int:
        return len(self.recorder.trace)


@dataclass(slots=True)
class CompressFile:
    """Use case that compresses one WAV file into another."""

    block_size: int = DEFAULT_BLOCK_SIZE
    ingest_policy: ValidationPolicy = field(default_factory=ValidationPolicy)
    event_publisher: EventPublisher = field(default_factory=NullEventPublisher)

    def validate(self, input_path: Path, correlation_id: str) -> AudioMetadata:
        metadata = validate_audio_file(input_path, self.ingest_policy)
        self.event_publisher.publish(
            IngestValidated(
                correlation_id=correlation_id,
                payload_summary={
                    "source": str(input_path),
                    "sample_rate_hz": metadata.sample_rate_hz,
                    "channel_count": metadata.channel_count,
                    "bit_depth": metadata.bit_depth,
                    "duration_seconds": metadata.duration_seconds,
                },
            )
        )
        return metadata

    def run(
        self,
        input_path: Path,
        output_path: Path,
        config: CompressorConfig,
        trace_path: Path | None = None,
        correlation_id: str | None = None,
        progress: ProgressCallback | None = None,
    ) -> CompressionResult:
        run_correlation_id = correlation_id or str(uuid4())
        try:
            return self._run(input_path, output_path, config, trace_path, run_correlation_id, progress)
        except (IngestValidationError, AudioReadError, AudioWriteError) as error:
            self.event_publisher.publish(
                CompressionFailed(
                    correlation_id=run_correlation_id,
                    payload_summary={
                        "source": str(input_path),
                        "error_type": type(error).__name__,
                        "error": str(error),
                    },
                )
            )
            raise

    def _run(
        self,
        input_path: Path,
        output_path: Path,
        config: CompressorConfig,
        trace_path: Path | None,
        correlation_id: str,
        progress: ProgressCallback | None,
    ) -> CompressionResult:
        metadata = self.validate(input_path, correlation_id)
        decoded = read_audio(input_path)

        def _on_block(processed: int, total: int) -> None:
            self.event_publisher.publish(
                BlockProcessed(
                    correlation_id=correlation_id,
                    payload_summary={"processed": processed, "total": total},
                )
            )
            if progress is not None:
                progress(processed, total)

        recorder = MetricsRecorder()
        processor = CompressorProcessor(
            config, block_size=self.block_size, recorder=recorder, on_block=_on_block
        )
        processed_samples = processor.process(decoded.samples, decoded.sample_rate)

        write_audio(
            output_path,
            PcmAudio(
                sample_rate=decoded.sample_rate,
                channel_count=decoded.channel_count,
                bit_depth=decoded.bit_depth,
                samples=processed_samples,
            ),
        )
        summary = recorder.summarize()
        self.event_publisher.publish(
            CompressionRendered(
                correlation_id=correlation_id,
                payload_summary={
                    "output": str(output_path),
                    "sample_count": decoded.frame_count,
                    "avg_gain_reduction_db": summary.avg_gain_reduction_db if summary else 0.0,
                },
            )
        )

        if trace_path is not None:
            try:
                recorder.export_trace(trace_path)
            except OSError as exc:
                raise AudioWriteError(f"Cannot write gain-reduction trace to {trace_path}: {exc}") from exc
            self.event_publisher.publish(
                TraceExported(
                    correlation_id=correlation_id,
                    payload_summary={"trace": str(trace_path), "rows": len(recorder.trace)},
                )
            )

        return CompressionResult(
            output_path=output_path,
            trace_path=trace_path,
            metadata=metadata,
            summary=summary,
            recorder=recorder,
        )
