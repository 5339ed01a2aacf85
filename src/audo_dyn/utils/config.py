from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import json

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from audo_dyn.compressor_options import EnvelopeMode, ReleaseCurve, StereoLinkMode, parse_case_insensitive_enum

# Ratios at or above this value remove the whole overshoot.
LIMITER_RATIO = 100.0

_MODE_ENUMS: dict[str, type[Enum]] = {
    "stereo_link_mode": StereoLinkMode,
    "envelope_mode": EnvelopeMode,
    "release_curve": ReleaseCurve,
}


class CompressorConfig(BaseModel):
    """Immutable compressor settings consumed by the dynamics engine."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    threshold_db: float = Field(-20.0, ge=-60.0, le=0.0)
    ratio: float = Field(4.0, ge=1.0)
    attack_ms: float = Field(10.0, ge=0.0, le=300.0)
    release_ms: float = Field(100.0, ge=0.0, le=2000.0)
    knee_db: float = Field(0.0, ge=0.0, le=30.0)
    makeup_gain_db: float = Field(0.0, ge=-20.0, le=20.0)
    stereo_link_mode: StereoLinkMode = StereoLinkMode.MAX
    envelope_mode: EnvelopeMode = EnvelopeMode.PEAK
    release_curve: ReleaseCurve = ReleaseCurve.LINEAR
    lookahead_ms: float = Field(0.0, ge=0.0, le=10.0)
    dry_wet_mix: float = Field(0.0, ge=0.0, le=1.0)
    bypass: bool = False

    @field_validator("stereo_link_mode", "envelope_mode", "release_curve", mode="before")
    @classmethod
    def _parse_mode(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, str) and not isinstance(value, Enum):
            return parse_case_insensitive_enum(value, _MODE_ENUMS[info.field_name])
        return value

    @property
    def is_limiter(self) -> bool:
        return self.ratio >= LIMITER_RATIO


def load_compressor_config(path: Path, overrides: dict[str, Any] | None = None) -> CompressorConfig:
    """Load a compressor preset from JSON or YAML, applying non-None overrides."""

    data = _load_config_data(path)
    if overrides:
        data.update({key: value for key, value in overrides.items() if value is not None})
    return CompressorConfig.model_validate(data)


def _load_config_data(path: Path) -> dict:
    if path.suffix.lower() in {".yaml", ".yml"}:
        import yaml

        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}

    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)
