# tests/cli/test_cli.py
from pathlib import Path

import pytest
from typer.testing import CliRunner

import folio.cli.app as cli
from folio.adapters.memory_fs import MemoryFilesystem
from folio.cli.app import app

runner = CliRunner()


@pytest.fixture
def memfs(monkeypatch) -> MemoryFilesystem:
    fs = MemoryFilesystem(cwd="/work")
    monkeypatch.setattr(cli, "_adapter", fs)
    return fs


def test_cli_help_runs():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Usage" in result.stdout


def test_touch_write_cat(memfs: MemoryFilesystem):
    r = runner.invoke(app, ["touch", "/tmp/a/b.txt"])
    assert r.exit_code == 0, r.output
    assert r.stdout.strip() == "/tmp/a/b.txt"

    r = runner.invoke(app, ["write", "/tmp/a/b.txt", "hello"])
    assert r.exit_code == 0, r.output
    r = runner.invoke(app, ["write", "/tmp/a/b.txt", " world", "--append"])
    assert r.exit_code == 0, r.output

    r = runner.invoke(app, ["cat", "/tmp/a/b.txt"])
    assert r.exit_code == 0, r.output
    assert r.stdout == "hello world"


def test_ls_variants(memfs: MemoryFilesystem):
    for path in ("/work/1", "/work/2", "/work/.hidden", "/work/sub/3"):
        runner.invoke(app, ["touch", path])

    r = runner.invoke(app, ["ls"])
    assert r.stdout.splitlines() == ["1", "2"]

    r = runner.invoke(app, ["ls", "/work", "--all"])
    assert r.stdout.splitlines() == [".hidden", "1", "2"]

    r = runner.invoke(app, ["ls", "/work", "--recursive"])
    assert r.stdout.splitlines() == ["/work/1", "/work/2", "/work/sub/3"]

    r = runner.invoke(app, ["ls", "/work", "--folders"])
    assert r.stdout.splitlines() == ["sub"]


def test_mkdir_mv_rename_rm(memfs: MemoryFilesystem):
    runner.invoke(app, ["mkdir", "/work/dest"])
    runner.invoke(app, ["touch", "/work/report.txt"])

    r = runner.invoke(app, ["mv", "/work/report.txt", "/work/dest"])
    assert r.exit_code == 0, r.output
    assert r.stdout.strip() == "/work/dest/report.txt"

    r = runner.invoke(app, ["rename", "/work/dest/report.txt", "final"])
    assert r.stdout.strip() == "/work/dest/final.txt"

    r = runner.invoke(app, ["rename", "/work/dest/final.txt", "plain", "--no-keep-extension"])
    assert r.stdout.strip() == "/work/dest/plain"

    r = runner.invoke(app, ["rm", "/work/dest"])
    assert r.exit_code == 0, r.output
    assert runner.invoke(app, ["ls", "/work", "--folders"]).stdout == ""


def test_empty_command(memfs: MemoryFilesystem):
    for path in ("/work/box/a", "/work/box/.keep"):
        runner.invoke(app, ["touch", path])
    r = runner.invoke(app, ["empty", "/work/box"])
    assert r.exit_code == 0, r.output
    assert runner.invoke(app, ["ls", "/work/box", "--all"]).stdout.splitlines() == [".keep"]


def test_errors_exit_non_zero(memfs: MemoryFilesystem):
    r = runner.invoke(app, ["cat", "/work/missing"])
    assert r.exit_code == 1
    assert "Invalid path: /work/missing" in r.output

    r = runner.invoke(app, ["rm", ""])
    assert r.exit_code == 1
    assert "Path is empty" in r.output


def test_verbose_against_real_disk(tmp_path: Path):
    (tmp_path / "x").write_text("")
    r = runner.invoke(app, ["--verbose", "ls", str(tmp_path)])
    assert r.exit_code == 0, r.output
    assert "x" in r.stdout.splitlines()
