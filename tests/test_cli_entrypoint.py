from __future__ import annotations

import runpy

import pytest

from audo_dyn import cli


def test_module_entrypoint_calls_cli_main(monkeypatch):
    called = {"value": False}

    def fake_main():
        called["value"] = True

    monkeypatch.setattr(cli, "main", fake_main)

    with pytest.raises(SystemExit) as exc_info:
        runpy.run_module("audo_dyn.__main__", run_name="__main__")

    assert called["value"]
    assert exc_info.value.code == 0


def test_main_dispatches_to_typer_app(monkeypatch):
    called = {"value": False}

    def fake_app():
        called["value"] = True

    monkeypatch.setattr(cli, "app", fake_app)

    cli.main()

    assert called["value"]
