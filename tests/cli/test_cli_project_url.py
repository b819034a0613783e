from pathlib import Path

from typer.testing import CliRunner
from integrity_blame.cli.app import app

runner = CliRunner()


def test_project_url_under_root(tmp_path: Path, monkeypatch):
    base = tmp_path / "sub" / "dir"
    base.mkdir(parents=True)
    monkeypatch.setenv("INTEGRITY_ROOT_DIR", str(tmp_path))
    r = runner.invoke(
        app, ["project-url", "--dir", str(base), "--config-path", "proj/cfg"]
    )
    assert r.exit_code == 0, r.output
    assert r.stdout.strip() == "proj/cfg/sub/dir"


def test_project_url_outside_root_fails(tmp_path: Path, monkeypatch):
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    monkeypatch.setenv("INTEGRITY_ROOT_DIR", str(tmp_path / "a"))
    r = runner.invoke(app, ["project-url", "--dir", str(tmp_path / "b")])
    assert r.exit_code == 2
    assert "isn't correctly identified" in r.output
