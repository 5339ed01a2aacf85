import io
import wave

import numpy as np
import pytest


@pytest.fixture
def sine_wave():
    sample_rate = 44100
    duration_s = 2.0
    t = np.linspace(0.0, duration_s, int(sample_rate * duration_s), endpoint=False)
    base = np.sin(2 * np.pi * 440.0 * t)
    return {
        "sample_rate": sample_rate,
        "quiet": 0.01 * base,
        "loud": 0.5 * base,
        "stereo": np.vstack([0.5 * base, 0.25 * base]),
    }


def make_wav_bytes(
    *,
    duration_seconds: float = 0.25,
    sample_rate: int = 44_100,
    channels: int = 2,
    amplitude: float = 0.5,
    sample_width: int = 2,
) -> bytes:
    frames = int(duration_seconds * sample_rate)
    t = np.arange(frames) / sample_rate
    tone = amplitude * np.sin(2 * np.pi * 440.0 * t)
    full_scale = 2 ** (8 * sample_width - 1) - 1
    ints = np.round(tone * full_scale).astype(np.int64)
    interleaved = np.repeat(ints, channels)

    if sample_width == 1:
        payload = (interleaved + 128).astype(np.uint8).tobytes()
    else:
        payload = b"".join(
            int(value).to_bytes(sample_width, "little", signed=True) for value in interleaved
        )

    with io.BytesIO() as buffer:
        with wave.open(buffer, "wb") as wav:
            wav.setnchannels(channels)
            wav.setsampwidth(sample_width)
            wav.setframerate(sample_rate)
            wav.writeframes(payload)
        return buffer.getvalue()


@pytest.fixture
def wav_file(tmp_path):
    def _write(name: str = "input.wav", **kwargs):
        path = tmp_path / name
        path.write_bytes(make_wav_bytes(**kwargs))
        return path

    return _write
