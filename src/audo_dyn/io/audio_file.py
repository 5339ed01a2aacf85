from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np
import soundfile as sf

_SUBTYPE_BY_BIT_DEPTH: dict[int, str] = {16: "PCM_16", 24: "PCM_24"}
_BIT_DEPTH_BY_SUBTYPE: dict[str, int] = {value: key for key, value in _SUBTYPE_BY_BIT_DEPTH.items()}


class AudioReadError(OSError):
    """Raised when a validated file still cannot be decoded."""


class AudioWriteError(OSError):
    """Raised when processed audio cannot be written to its destination."""


@dataclass(frozen=True, slots=True)
class PcmAudio:
    """Decoded PCM: channel-first float64 samples in ``[-1.0, 1.0]``."""

    sample_rate: int
    channel_count: int
    bit_depth: int
    samples: np.ndarray

    @property
    def frame_count(self) -> int:
        return int(self.samples.shape[1])

    @property
    def duration_seconds(self) -> float:
        return self.frame_count / self.sample_rate if self.sample_rate else 0.0


def read_audio(path: Path) -> PcmAudio:
    try:
        info = sf.info(str(path))
        audio, sample_rate = sf.read(str(path), dtype="float64", always_2d=True)
    except (sf.LibsndfileError, OSError) as exc:
        raise AudioReadError(f"Cannot decode audio from {path}: {exc}") from exc
    return PcmAudio(
        sample_rate=int(sample_rate),
        channel_count=int(audio.shape[1]),
        bit_depth=_BIT_DEPTH_BY_SUBTYPE.get(info.subtype, 16),
        samples=np.ascontiguousarray(audio.T),
    )


def write_audio(path: Path, audio: PcmAudio) -> None:
    subtype = _SUBTYPE_BY_BIT_DEPTH.get(audio.bit_depth, "PCM_16")
    clipped = np.clip(audio.samples, -1.0, 1.0).T
    try:
        sf.write(str(path), clipped, samplerate=audio.sample_rate, subtype=subtype, format="WAV")
    except (sf.LibsndfileError, OSError) as exc:
        raise AudioWriteError(f"Cannot write audio to {path}: {exc}") from exc
