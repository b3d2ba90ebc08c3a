# tests/test_cli.py
from typer.testing import CliRunner

from refresh_cache import __version__
from refresh_cache.cli import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_show_prints_topic():
    result = runner.invoke(app, ["show"])

    assert result.exit_code == 0
    assert "Census" in result.stdout
    assert "age" in result.stdout


def test_serve_closes_cache_on_exit(monkeypatch):
    seen = {}

    def fake_run(self, host, port):
        seen["host"], seen["port"] = host, port
        seen["app"] = self

    monkeypatch.setattr("flask.Flask.run", fake_run)

    result = runner.invoke(app, ["serve", "--interval", "0.05", "--port", "5055"])

    assert result.exit_code == 0, result.stdout
    assert seen["port"] == 5055
    assert seen["host"] == "127.0.0.1"
