"""Decibel/linear conversions and gain-curve primitives."""

from __future__ import annotations

import math

# Level reported for silence instead of -inf.
FLOOR_DB = -200.0


def db_to_linear(db: float) -> float:
    return 10.0 ** (db / 20.0)


def linear_to_db(linear: float) -> float:
    if linear <= 0.0:
        return FLOOR_DB
    return 20.0 * math.log10(linear)


def ms_to_samples(ms: float, sample_rate: int) -> int:
    """Convert a duration to a whole number of samples, never less than one."""

    return max(1, round(ms * sample_rate / 1000.0))


def samples_to_ms(samples: int, sample_rate: int) -> float:
    return samples * 1000.0 / sample_rate


def soft_knee(input_db: float, threshold_db: float, knee_db: float) -> float:
    """Return the overshoot of ``input_db`` above the threshold, shaped by the knee.

    A knee of zero (or less) gives the hard-knee overshoot. A positive knee
    spreads the onset over ``threshold +/- knee/2`` with a quadratic ramp that
    joins the linear segment with matching slope.
    """

    if knee_db <= 0.0:
        return max(0.0, input_db - threshold_db)

    knee_half = knee_db / 2.0
    if input_db < threshold_db - knee_half:
        return 0.0
    if input_db < threshold_db + knee_half:
        return (input_db - (threshold_db - knee_half)) ** 2 / (2.0 * knee_db)
    return input_db - threshold_db


def lerp(a, b, t):
    return a + (b - a) * t
