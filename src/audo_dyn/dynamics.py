"""Block-based dynamics engine: gain computer, stereo linking and metering."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .compressor_options import StereoLinkMode
from .envelope import EnvelopeDetector
from .levels import FLOOR_DB, db_to_linear, lerp, linear_to_db, ms_to_samples, soft_knee
from .utils.config import LIMITER_RATIO, CompressorConfig


@dataclass(frozen=True, slots=True)
class BlockMetrics:
    """Levels measured over one processed block.

    Peak and RMS levels are linear; gain-reduction figures are in dB.
    """

    input_peak: float
    input_rms: float
    output_peak: float
    output_rms: float
    gain_reduction_peak: float
    gain_reduction_rms: float
    avg_gain_reduction_db: float


class LookaheadBuffer:
    """Per-channel ring of recent input samples.

    Samples are captured but not yet read back, so the output is not delayed.
    """

    def __init__(self, channel_count: int, delay_samples: int) -> None:
        self.delay_samples = delay_samples
        self.size = delay_samples + 1
        self._buffer = np.zeros((channel_count, self.size), dtype=np.float64)
        self.cursor = 0

    def write(self, frame: np.ndarray) -> None:
        self._buffer[:, self.cursor] = frame

    def advance(self) -> None:
        self.cursor = (self.cursor + 1) % self.size

    def rewind(self) -> None:
        self.cursor = 0


def link_envelopes(envelopes: list[float], mode: StereoLinkMode) -> float:
    """Fuse per-channel envelopes into the single level that drives the gain.

    Only two-channel signals are linked; anything else follows channel 0, as do
    the ``independent`` and ``midside`` modes.
    """

    first = envelopes[0]
    if len(envelopes) != 2:
        return first
    second = envelopes[1]
    if mode == StereoLinkMode.AVERAGE:
        return (first + second) / 2.0
    if mode == StereoLinkMode.MAX:
        return max(first, second)
    if mode == StereoLinkMode.RMS:
        return math.sqrt((first * first + second * second) / 2.0)
    return first


class DynamicsEngine:
    """Downward compressor operating on channel-first blocks of float samples.

    Envelope, lookahead cursor and gain-reduction trace carry over between
    calls to :meth:`process_block`, so a signal split into consecutive blocks
    is processed exactly like the whole signal at once.
    """

    def __init__(self, sample_rate: int, channel_count: int, config: CompressorConfig) -> None:
        self.sample_rate = int(sample_rate)
        self.channel_count = int(channel_count)
        self.config = config
        self.detector = EnvelopeDetector(
            sample_rate=self.sample_rate,
            channel_count=self.channel_count,
            attack_ms=config.attack_ms,
            release_ms=config.release_ms,
            envelope_mode=config.envelope_mode,
            release_curve=config.release_curve,
        )
        self.lookahead = LookaheadBuffer(
            self.channel_count, ms_to_samples(config.lookahead_ms, self.sample_rate)
        )
        self._block_history = np.zeros(0, dtype=np.float64)
        self._trace: list[float] = []

    @property
    def block_gain_reduction(self) -> np.ndarray:
        """Per-sample gain reduction (dB) of the most recent block."""

        return self._block_history

    @property
    def gain_reduction_trace(self) -> list[float]:
        """Per-sample gain reduction (dB) for everything processed so far."""

        return self._trace

    def compute_gain_reduction(self, level: float) -> float:
        """Return the (non-positive) gain change in dB for a linear level."""

        input_db = linear_to_db(level) if level > 0.0 else FLOOR_DB
        overshoot = soft_knee(input_db, self.config.threshold_db, self.config.knee_db)
        if overshoot <= 0.0:
            return 0.0
        if self.config.ratio >= LIMITER_RATIO:
            return -overshoot
        return overshoot * (1.0 / self.config.ratio - 1.0)

    def process_block(self, block: np.ndarray) -> tuple[np.ndarray, BlockMetrics]:
        """Compress one ``(channels, samples)`` block.

        Returns the processed block and the metrics measured over it.
        """

        block = np.asarray(block, dtype=np.float64)
        if block.ndim != 2 or block.shape[0] != self.channel_count:
            raise ValueError(
                f"Expected a ({self.channel_count}, n) block, got shape {block.shape}."
            )

        sample_count = block.shape[1]
        history = np.empty(sample_count, dtype=np.float64)
        link_mode = self.config.stereo_link_mode
        frames = block.T

        for index in range(sample_count):
            frame = frames[index]
            self.lookahead.write(frame)
            envelopes = self.detector.process_frame(frame)
            level = link_envelopes(envelopes, link_mode)
            history[index] = self.compute_gain_reduction(level)
            self.lookahead.advance()

        self._block_history = history
        self._trace.extend(history.tolist())

        if self.config.bypass:
            output = block.copy()
        else:
            applied_gain = db_to_linear(history + self.config.makeup_gain_db)
            output = lerp(block * applied_gain, block, self.config.dry_wet_mix)

        return output, _measure_block(block, output, history)

    def reset(self) -> None:
        """Clear the detector state and rewind the lookahead cursor.

        Configuration and the gain-reduction trace are kept.
        """

        self.detector.reset()
        self.lookahead.rewind()


def _measure_block(block: np.ndarray, output: np.ndarray, history: np.ndarray) -> BlockMetrics:
    if history.size == 0:
        return BlockMetrics(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    return BlockMetrics(
        input_peak=float(np.max(np.abs(block))),
        input_rms=float(np.sqrt(np.mean(np.square(block)))),
        output_peak=float(np.max(np.abs(output))),
        output_rms=float(np.sqrt(np.mean(np.square(output)))),
        gain_reduction_peak=float(np.max(np.abs(history))),
        gain_reduction_rms=float(np.sqrt(np.mean(np.square(history)))),
        avg_gain_reduction_db=float(np.mean(history)),
    )
