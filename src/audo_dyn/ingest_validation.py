"""Audio ingest validation service.

This module checks the RIFF/WAVE container and PCM format before decoding so
unsupported or damaged files are rejected with a stable error code.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import struct


SUPPORTED_EXTENSIONS: tuple[str, ...] = (".wav", ".wave")
SUPPORTED_BIT_DEPTHS: tuple[int, ...] = (16, 24)

_WAVE_FORMAT_PCM = 0x0001
_WAVE_FORMAT_EXTENSIBLE = 0xFFFE


@dataclass(frozen=True, slots=True)
class ValidationPolicy:
    min_sample_rate_hz: int = 8_000
    max_sample_rate_hz: int = 192_000
    min_channel_count: int = 1
    max_channel_count: int = 8


@dataclass(frozen=True, slots=True)
class AudioMetadata:
    container: str
    codec: str
    duration_seconds: float
    sample_rate_hz: int
    channel_count: int
    bit_depth: int
    size_bytes: int


@dataclass(frozen=True, slots=True)
class IngestValidationError(ValueError):
    code: str
    message: str

    def __str__(self) -> str:
        return self.message

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


def validate_audio_file(path: Path, policy: ValidationPolicy | None = None) -> AudioMetadata:
    policy = policy or ValidationPolicy()
    if not path.exists() or not path.is_file():
        raise IngestValidationError("file_not_found", f"Audio file not found: {path}")

    try:
        raw_bytes = path.read_bytes()
    except OSError as exc:
        raise IngestValidationError("file_unreadable", f"Audio file is unreadable: {path}") from exc

    return validate_audio_bytes(raw_bytes, filename=path.name, policy=policy)


def validate_audio_bytes(
    raw_bytes: bytes,
    *,
    filename: str | None,
    policy: ValidationPolicy | None = None,
) -> AudioMetadata:
    policy = policy or ValidationPolicy()
    if not raw_bytes:
        raise IngestValidationError("empty_file", "Audio file is empty.")

    extension = Path(filename).suffix.lower() if filename else ""
    if extension and extension not in SUPPORTED_EXTENSIONS:
        supported = ", ".join(SUPPORTED_EXTENSIONS)
        raise IngestValidationError(
            "unsupported_container",
            f"Unsupported container for '{filename}'. Supported extensions: {supported}.",
        )

    if not (raw_bytes.startswith(b"RIFF") and raw_bytes[8:12] == b"WAVE"):
        raise IngestValidationError("unsupported_container", "Unsupported or unrecognized audio container.")

    metadata = _parse_wav(raw_bytes)
    _check_policy(metadata, policy)
    return metadata


def _check_policy(metadata: AudioMetadata, policy: ValidationPolicy) -> None:
    if not (policy.min_sample_rate_hz <= metadata.sample_rate_hz <= policy.max_sample_rate_hz):
        raise IngestValidationError(
            "invalid_sample_rate",
            f"Sample rate {metadata.sample_rate_hz}Hz is outside supported range.",
        )
    if not (policy.min_channel_count <= metadata.channel_count <= policy.max_channel_count):
        raise IngestValidationError(
            "invalid_channel_count",
            f"Channel count {metadata.channel_count} is outside supported range.",
        )


def _parse_wav(raw_bytes: bytes) -> AudioMetadata:
    offset = 12
    fmt_chunk: bytes | None = None
    data_size: int | None = None
    while offset + 8 <= len(raw_bytes):
        chunk_id = raw_bytes[offset : offset + 4]
        chunk_size = int.from_bytes(raw_bytes[offset + 4 : offset + 8], "little")
        chunk_data_start = offset + 8
        chunk_data_end = chunk_data_start + chunk_size
        if chunk_data_end > len(raw_bytes):
            raise IngestValidationError("corrupted_file", "Corrupted WAV file structure.")
        if chunk_id == b"fmt ":
            if chunk_size < 16:
                raise IngestValidationError("corrupted_file", "Corrupted WAV fmt chunk.")
            fmt_chunk = raw_bytes[chunk_data_start:chunk_data_end]
        elif chunk_id == b"data":
            data_size = chunk_size
        offset = chunk_data_end + (chunk_size % 2)

    if fmt_chunk is None or data_size is None:
        raise IngestValidationError("corrupted_file", "Incomplete WAV metadata.")

    audio_format, channels, sample_rate, _byte_rate, _block_align, bits_per_sample = struct.unpack(
        "<HHIIHH", fmt_chunk[:16]
    )
    if audio_format == _WAVE_FORMAT_EXTENSIBLE and len(fmt_chunk) >= 26:
        # The sub-format GUID starts with the real format code.
        audio_format = int.from_bytes(fmt_chunk[24:26], "little")
    if audio_format != _WAVE_FORMAT_PCM:
        raise IngestValidationError("unsupported_codec", f"Unsupported WAV codec format code: {audio_format}.")
    if bits_per_sample not in SUPPORTED_BIT_DEPTHS:
        supported = ", ".join(str(depth) for depth in SUPPORTED_BIT_DEPTHS)
        raise IngestValidationError(
            "unsupported_bit_depth",
            f"Unsupported bit depth {bits_per_sample}. Supported: {supported}.",
        )
    if not channels or not sample_rate:
        raise IngestValidationError("corrupted_file", "WAV fmt chunk declares no channels or sample rate.")

    bytes_per_second = sample_rate * channels * (bits_per_sample // 8)
    duration_seconds = data_size / bytes_per_second
    return AudioMetadata("wav", "pcm", duration_seconds, sample_rate, channels, bits_per_sample, len(raw_bytes))
