"""Block metric accumulation, gain-reduction trace export and summary."""

from __future__ import annotations

import csv
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, TextIO

from .dynamics import BlockMetrics
from .levels import FLOOR_DB, linear_to_db

TRACE_HEADER = ("Sample", "GainReductionDB")
TRACE_DECIMALS = 6


@dataclass(frozen=True, slots=True)
class MeteringSummary:
    """Per-block averages over a whole run, all in dB."""

    input_peak_db: float
    input_rms_db: float
    output_peak_db: float
    output_rms_db: float
    avg_gain_reduction_db: float
    block_count: int


def _mean_level_db(levels: Iterable[float]) -> float:
    # Silent blocks are left out rather than averaged in at the floor.
    audible = [linear_to_db(level) for level in levels if level > 0.0]
    if not audible:
        return FLOOR_DB
    return sum(audible) / len(audible)


class MetricsRecorder:
    """Collects block metrics and the per-sample gain-reduction trace."""

    def __init__(self) -> None:
        self._metrics: list[BlockMetrics] = []
        self._trace: list[float] = []

    @property
    def metrics(self) -> tuple[BlockMetrics, ...]:
        return tuple(self._metrics)

    @property
    def trace(self) -> tuple[float, ...]:
        return tuple(self._trace)

    def record_metrics(self, metrics: BlockMetrics) -> None:
        self._metrics.append(metrics)

    def record_gain_reduction(self, value_db: float) -> None:
        self._trace.append(float(value_db))

    def record_gain_reductions(self, values_db: Iterable[float]) -> None:
        self._trace.extend(float(value) for value in values_db)

    def export_trace(self, destination: Path | TextIO) -> None:
        """Write the trace as ``Sample,GainReductionDB`` CSV rows in sample order."""

        if isinstance(destination, (str, Path)):
            path = Path(destination)
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", newline="", encoding="utf-8") as handle:
                self._write_trace(handle)
        else:
            self._write_trace(destination)

    def _write_trace(self, handle: TextIO) -> None:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(TRACE_HEADER)
        for index, value in enumerate(self._trace):
            writer.writerow((index, f"{value:.{TRACE_DECIMALS}f}"))

    def summarize(self) -> MeteringSummary | None:
        """Average the recorded blocks, or return ``None`` if there are none.

        Blocks are weighted equally regardless of their length.
        """

        if not self._metrics:
            return None

        count = len(self._metrics)
        return MeteringSummary(
            input_peak_db=_mean_level_db(m.input_peak for m in self._metrics),
            input_rms_db=_mean_level_db(m.input_rms for m in self._metrics),
            output_peak_db=_mean_level_db(m.output_peak for m in self._metrics),
            output_rms_db=_mean_level_db(m.output_rms for m in self._metrics),
            avg_gain_reduction_db=sum(m.avg_gain_reduction_db for m in self._metrics) / count,
            block_count=count,
        )

    def print_summary(self, stream: TextIO | None = None) -> None:
        summary = self.summarize()
        if summary is None:
            return
        stream = stream or sys.stdout
        stream.write(format_summary(summary))


def format_summary(summary: MeteringSummary) -> str:
    lines = [
        "",
        "=== COMPRESSOR METERING SUMMARY ===",
        f"Input Peak (dB):       {summary.input_peak_db:.2f}",
        f"Input RMS (dB):        {summary.input_rms_db:.2f}",
        f"Output Peak (dB):      {summary.output_peak_db:.2f}",
        f"Output RMS (dB):       {summary.output_rms_db:.2f}",
        f"Avg Gain Reduction:    {summary.avg_gain_reduction_db:.2f} dB",
        "",
    ]
    return "\n".join(lines) + "\n"
