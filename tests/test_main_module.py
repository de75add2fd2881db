"""Tests for package module entrypoint."""

import runpy

import pytest


def test_main_module_invokes_cli_main(monkeypatch):
    called = {"count": 0}

    def fake_main():
        called["count"] += 1
        return 0

    monkeypatch.setattr("tatorscout.cli.main", fake_main)
    with pytest.raises(SystemExit) as exc_info:
        runpy.run_module("tatorscout.__main__", run_name="__main__")

    assert exc_info.value.code == 0
    assert called["count"] == 1
