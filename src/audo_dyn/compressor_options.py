"""Shared compressor option enums and parsing helpers."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar


class StereoLinkMode(str, Enum):
    """How per-channel envelopes are fused into the single control level."""

    INDEPENDENT = "independent"
    AVERAGE = "average"
    MAX = "max"
    RMS = "rms"
    MID_SIDE = "midside"


class EnvelopeMode(str, Enum):
    """Level detection modes.

    ``truerms`` shares the windowed RMS detector and ``adaptive`` shares the
    peak detector.
    """

    PEAK = "peak"
    RMS = "rms"
    TRUE_RMS = "truerms"
    ADAPTIVE = "adaptive"


class ReleaseCurve(str, Enum):
    """Release shapes; ``adaptive`` uses the exponential curve."""

    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    ADAPTIVE = "adaptive"


EnumT = TypeVar("EnumT", bound=Enum)


def enum_values(enum_cls: type[EnumT]) -> tuple[str, ...]:
    """Return enum values for CLI hinting in declaration order."""

    return tuple(str(member.value) for member in enum_cls)


def parse_case_insensitive_enum(raw_value: str, enum_cls: type[EnumT]) -> EnumT:
    """Parse enum values case-insensitively and raise ValueError with allowed values."""

    normalized = raw_value.strip().lower()
    for member in enum_cls:
        if str(member.value).lower() == normalized:
            return member

    allowed = ", ".join(enum_values(enum_cls))
    enum_name = enum_cls.__name__
    raise ValueError(f"Invalid {enum_name}: '{raw_value}'. Allowed values: {allowed}.")
