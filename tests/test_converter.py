"""Tests for GoFSH conversion helpers."""

import subprocess

import pytest

from fhir_bundler.converter import (
    FSH_RESULT_PATH,
    GoFSHConverter,
    collect_fsh_files,
    convert_subdirectories,
)
from fhir_bundler.errors import ConverterError


class RecordingConverter:
    def __init__(self, failing=()):
        self.calls = []
        self.failing = set(failing)

    def convert(self, directory):
        self.calls.append(directory.name)
        return directory.name not in self.failing


def test_gofsh_command_line(tmp_path):
    converter = GoFSHConverter()

    assert converter.build_command(tmp_path) == [
        "gofsh",
        "-s",
        "single-file",
        "-o",
        str(tmp_path / "goFSH"),
        str(tmp_path),
    ]


def test_gofsh_convert_success(tmp_path, monkeypatch):
    seen = {}

    def fake_run(cmd, **kwargs):
        seen["cmd"] = cmd
        seen["timeout"] = kwargs.get("timeout")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)

    assert GoFSHConverter(command="my-gofsh", timeout=5).convert(tmp_path) is True
    assert seen["cmd"][0] == "my-gofsh"
    assert seen["timeout"] == 5


def test_gofsh_convert_failure(tmp_path, monkeypatch):
    monkeypatch.setattr(
        subprocess,
        "run",
        lambda cmd, **kw: subprocess.CompletedProcess(cmd, 1, stdout="", stderr="boom"),
    )

    assert GoFSHConverter().convert(tmp_path) is False


def test_gofsh_convert_timeout(tmp_path, monkeypatch):
    def fake_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs.get("timeout"))

    monkeypatch.setattr(subprocess, "run", fake_run)

    assert GoFSHConverter(timeout=1).convert(tmp_path) is False


def test_gofsh_missing_executable(tmp_path, monkeypatch):
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(ConverterError, match="not found"):
        GoFSHConverter().convert(tmp_path)


def test_convert_subdirectories(tmp_path):
    for name in ("b", "a", "asFSH"):
        (tmp_path / name).mkdir()
    (tmp_path / "bundle.json").write_text("{}")
    converter = RecordingConverter(failing={"b"})

    results = convert_subdirectories(tmp_path, converter)

    assert converter.calls == ["a", "b"]
    assert results == {"a": True, "b": False}


def test_collect_fsh_files(tmp_path):
    for name in ("one", "two"):
        fsh = tmp_path / name / FSH_RESULT_PATH
        fsh.parent.mkdir(parents=True)
        fsh.write_text(f"Instance: {name}")
    (tmp_path / "empty").mkdir()

    collected = collect_fsh_files(tmp_path)

    assert [p.name for p in collected] == ["one.fsh", "two.fsh"]
    assert (tmp_path / "asFSH" / "two.fsh").read_text() == "Instance: two"


def test_collect_fsh_files_is_repeatable(tmp_path):
    fsh = tmp_path / "one" / FSH_RESULT_PATH
    fsh.parent.mkdir(parents=True)
    fsh.write_text("Instance: one")

    collect_fsh_files(tmp_path)
    collected = collect_fsh_files(tmp_path)

    assert [p.name for p in collected] == ["one.fsh"]
