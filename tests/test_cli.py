from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from audo_dyn import cli
from audo_dyn.io.audio_file import read_audio

runner = CliRunner()


def test_compress_writes_output_and_summary(wav_file, tmp_path: Path) -> None:
    source = wav_file()
    output = tmp_path / "out.wav"
    trace = tmp_path / "gr.csv"

    result = runner.invoke(
        cli.app,
        ["compress", str(source), str(output), "--threshold=-30", "-r", "8", "--link", "RMS", "--csv", str(trace)],
    )

    assert result.exit_code == 0, result.output
    assert "=== COMPRESSOR METERING SUMMARY ===" in result.output
    assert result.output.rstrip().endswith("Done")
    assert read_audio(output).frame_count == read_audio(source).frame_count
    assert trace.read_text(encoding="utf-8").startswith("Sample,GainReductionDB\n0,")


def test_compress_verbose_prints_settings_and_progress(wav_file, tmp_path: Path) -> None:
    source = wav_file(duration_seconds=0.2)

    result = runner.invoke(
        cli.app,
        ["compress", str(source), str(tmp_path / "out.wav"), "-v", "--block-size", "4410", "--mix", "0.5"],
    )

    assert result.exit_code == 0, result.output
    assert "=== COMPRESSOR SETTINGS ===" in result.output
    assert "Mix:          0.50 (0=wet, 1=dry)" in result.output
    assert "Processed: 50%" in result.output
    assert "Processed: 100%" in result.output
    assert "Sample Rate: 44100 Hz" in result.output


def test_compress_uses_config_file_with_cli_overrides(monkeypatch, tmp_path: Path) -> None:
    preset = tmp_path / "preset.json"
    preset.write_text(json.dumps({"threshold_db": -35.0, "ratio": 3.0}), encoding="utf-8")
    captured = {}

    def fake_compress(input_path, output_path, config, **kwargs):
        captured["config"] = config
        raise SystemExit(0)

    monkeypatch.setattr(cli, "compress_from_paths", fake_compress)

    runner.invoke(cli.app, ["compress", "in.wav", "out.wav", "--config", str(preset), "--ratio", "6", "--bypass"])

    assert captured["config"].threshold_db == -35.0
    assert captured["config"].ratio == 6.0
    assert captured["config"].bypass is True


def test_compress_rejects_invalid_settings(wav_file, tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["compress", str(wav_file()), str(tmp_path / "out.wav"), "--ratio", "0.5"])

    assert result.exit_code == 1
    assert "invalid compressor configuration" in result.output


def test_compress_fails_on_unreadable_input(tmp_path: Path) -> None:
    source = tmp_path / "input.wav"
    source.write_bytes(b"definitely not RIFF")
    output = tmp_path / "out.wav"

    result = runner.invoke(cli.app, ["compress", str(source), str(output)])

    assert result.exit_code == 1
    assert "Cannot read" in result.output
    assert not output.exists()


def test_compress_fails_on_unwritable_output(wav_file, tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["compress", str(wav_file()), str(tmp_path / "missing" / "out.wav")])

    assert result.exit_code == 1
    assert "Cannot write" in result.output


def test_batch_compress_processes_each_file(tmp_path: Path, wav_file) -> None:
    wav_file("a.wav")
    wav_file("b.wav", channels=1)
    (tmp_path / "c.wav").write_bytes(b"broken")
    output_dir = tmp_path / "out"

    result = runner.invoke(
        cli.app,
        [
            "batch-compress",
            "--target-pattern",
            str(tmp_path / "*.wav"),
            "--output-dir",
            str(output_dir),
            "--concurrency-limit",
            "2",
            "--csv",
        ],
    )

    assert result.exit_code == 1
    assert result.output.count("[OK]") == 2
    assert result.output.count("[FAILED]") == 1
    assert "Summary: total=3 succeeded=2 failed=1" in result.output
    assert (output_dir / "a_compressed.wav").exists()
    assert (output_dir / "b_compressed.csv").exists()


def test_batch_compress_requires_matches(tmp_path: Path) -> None:
    result = runner.invoke(
        cli.app,
        ["batch-compress", "--target-pattern", str(tmp_path / "*.wav"), "--output-dir", str(tmp_path / "out")],
    )

    assert result.exit_code == 1
    assert "No input files matched" in result.output
