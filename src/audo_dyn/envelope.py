"""Per-channel envelope follower driving the gain computer."""

from __future__ import annotations

import math
from typing import Sequence

from .compressor_options import EnvelopeMode, ReleaseCurve
from .levels import ms_to_samples

_WINDOWED_MODES = frozenset({EnvelopeMode.RMS, EnvelopeMode.TRUE_RMS})


def _exponential_rate(samples: int) -> float:
    # Covers 99% of the distance to the target in ``samples`` steps.
    return 1.0 - 0.01 ** (1.0 / samples)


class EnvelopeDetector:
    """Smoothed level estimator with asymmetric attack and release.

    Frames must be fed in temporal order: each channel's envelope is a
    first-order recursive smoother over the previous value. Windowed RMS modes
    keep a ring of squared samples spanning 100 ms per channel.
    """

    def __init__(
        self,
        sample_rate: int,
        channel_count: int,
        attack_ms: float,
        release_ms: float,
        envelope_mode: EnvelopeMode = EnvelopeMode.PEAK,
        release_curve: ReleaseCurve = ReleaseCurve.LINEAR,
    ) -> None:
        self.sample_rate = int(sample_rate)
        self.channel_count = int(channel_count)
        self.envelope_mode = EnvelopeMode(envelope_mode)
        self.release_curve = ReleaseCurve(release_curve)
        self.attack_samples = ms_to_samples(attack_ms, self.sample_rate)
        self.release_samples = ms_to_samples(release_ms, self.sample_rate)

        self._attack_rate = _exponential_rate(self.attack_samples)
        if self.release_curve == ReleaseCurve.LINEAR:
            self._release_rate = 1.0 / self.release_samples
        else:
            self._release_rate = _exponential_rate(self.release_samples)

        self.rms_window = max(1, self.sample_rate // 10)
        self._windowed = self.envelope_mode in _WINDOWED_MODES
        self._rms_history = [[0.0] * self.rms_window for _ in range(self.channel_count)]
        self._rms_sums = [0.0] * self.channel_count
        self._rms_index = 0
        self._envelopes = [0.0] * self.channel_count

    @property
    def envelopes(self) -> tuple[float, ...]:
        return tuple(self._envelopes)

    def envelope(self, channel: int) -> float:
        return self._envelopes[channel]

    def process_frame(self, frame: Sequence[float]) -> list[float]:
        """Advance every channel by one sample and return the smoothed levels."""

        envelopes = self._envelopes
        for channel in range(self.channel_count):
            sample = float(frame[channel])
            if self._windowed:
                target = self._windowed_rms(channel, sample)
            else:
                target = abs(sample)

            current = envelopes[channel]
            if target > current:
                current += self._attack_rate * (target - current)
            else:
                current -= self._release_rate * (current - target)
            envelopes[channel] = current

        if self._windowed:
            self._rms_index = (self._rms_index + 1) % self.rms_window
        return list(envelopes)

    def _windowed_rms(self, channel: int, sample: float) -> float:
        history = self._rms_history[channel]
        squared = sample * sample
        running = self._rms_sums[channel] - history[self._rms_index] + squared
        history[self._rms_index] = squared
        # Running sums can drift a hair below zero once the window empties.
        running = max(running, 0.0)
        self._rms_sums[channel] = running
        return math.sqrt(running / self.rms_window)

    def reset(self) -> None:
        """Zero the envelopes and rewind the RMS cursor.

        The squared-sample windows are left as they are, so a windowed detector
        still sees the pre-reset samples until they are overwritten.
        """

        self._envelopes = [0.0] * self.channel_count
        self._rms_index = 0
