"""Smoke tests for the CLI."""

import json
import urllib.error
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from titleslug import __version__
from titleslug.cli import app
from titleslug.content.store import STORE_FILENAME


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    """Keep config discovery and env vars away from the real machine."""
    for key in (
        "GOOGLE_TRANSLATE_API_KEY",
        "TITLESLUG_TARGET_LANGUAGE",
        "TITLESLUG_CONVERT_PATTERN",
        "TITLESLUG_TIMEZONE",
        "TITLESLUG_STORE_DIR",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("titleslug.config.GLOBAL_CONFIG_PATH", tmp_path / "no-global.toml")


def _translated(text: str) -> MagicMock:
    mock_response = MagicMock()
    mock_response.read.return_value = json.dumps(
        {"data": {"translations": [{"translatedText": text}]}}
    ).encode()
    mock_response.__enter__ = lambda s: s
    mock_response.__exit__ = MagicMock(return_value=False)
    return mock_response


class TestCLI:
    def test_main_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "slug" in result.output.lower()

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestNormalizeCommand:
    def test_normalize(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["normalize", "  A---B  C!!"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "a-b-c"


class TestTranslateCommand:
    def test_without_key_echoes_text(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["translate", "こんにちは"])
        assert result.exit_code == 0
        assert "こんにちは" in result.stdout

    def test_with_key(self, runner: CliRunner) -> None:
        with patch("urllib.request.urlopen", return_value=_translated("Hello")) as mock_urlopen:
            result = runner.invoke(app, ["translate", "こんにちは", "--api-key", "k", "-t", "en"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "Hello"
        assert mock_urlopen.call_count == 1

    def test_failure_falls_back(self, runner: CliRunner) -> None:
        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("down")):
            result = runner.invoke(app, ["translate", "こんにちは", "--api-key", "k"])
        assert result.exit_code == 0
        assert "こんにちは" in result.stdout


class TestConvertCommand:
    def test_plain_title(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["convert", "Hello World"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "hello-world"

    def test_translated_title(self, runner: CliRunner) -> None:
        with patch("urllib.request.urlopen", return_value=_translated("Hello World")):
            result = runner.invoke(app, ["convert", "こんにちは World", "--api-key", "k"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "hello-world"

    def test_date_pattern_with_date(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["convert", "Hello World", "--pattern", "date_title", "--date", "2024-03-05"]
        )
        assert result.exit_code == 0
        assert result.stdout.strip() == "20240305_hello-world"

    def test_pattern_from_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[slug]\npattern = "date_title"\n')
        result = runner.invoke(
            app, ["convert", "Hello World", "--date", "2023-01-02", "--config", str(cfg)]
        )
        assert result.exit_code == 0
        assert result.stdout.strip() == "20230102_hello-world"

    def test_no_slug_exits_nonzero(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["convert", "こんにちは"])
        assert result.exit_code == 1

    def test_non_post_type_exits_nonzero(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["convert", "Hello World", "--type", "page"])
        assert result.exit_code == 1

    def test_invalid_date(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["convert", "Hello", "--date", "05/03/2024"])
        assert result.exit_code == 1

    def test_invalid_pattern(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["convert", "Hello", "--pattern", "weekday"])
        assert result.exit_code != 0


class TestInsertCommand:
    def test_insert_creates_record(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["insert", "Hello World", "--store-dir", str(tmp_path)])
        assert result.exit_code == 0
        data = json.loads((tmp_path / STORE_FILENAME).read_text(encoding="utf-8"))
        assert data["records"][0]["slug"] == "hello-world"
        assert data["records"][0]["id"] == 1

    def test_update_keeps_existing_slug(self, runner: CliRunner, tmp_path: Path) -> None:
        runner.invoke(app, ["insert", "Hello World", "--store-dir", str(tmp_path)])
        result = runner.invoke(
            app,
            ["insert", "Another Title", "--id", "1", "--slug", "hello-world", "--store-dir", str(tmp_path)],
        )
        assert result.exit_code == 0
        data = json.loads((tmp_path / STORE_FILENAME).read_text(encoding="utf-8"))
        assert len(data["records"]) == 1
        assert data["records"][0]["title"] == "Another Title"
        assert data["records"][0]["slug"] == "hello-world"

    def test_update_without_slug_option_keeps_slug(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        runner.invoke(app, ["insert", "Hello World", "--store-dir", str(tmp_path)])
        for _ in range(2):
            result = runner.invoke(
                app, ["insert", "Another Title", "--id", "1", "--store-dir", str(tmp_path)]
            )
            assert result.exit_code == 0
        data = json.loads((tmp_path / STORE_FILENAME).read_text(encoding="utf-8"))
        assert data["records"][0]["title"] == "Another Title"
        assert data["records"][0]["slug"] == "hello-world"

    def test_insert_page_has_no_slug(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["insert", "About Us", "--type", "page", "--store-dir", str(tmp_path)]
        )
        assert result.exit_code == 0
        data = json.loads((tmp_path / STORE_FILENAME).read_text(encoding="utf-8"))
        assert data["records"][0]["slug"] == ""


class TestConfigCommand:
    def test_shows_masked_key(self, runner: CliRunner, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[translation]\napi_key = "supersecretkey1234"\n')
        result = runner.invoke(app, ["config", "--config", str(cfg)])
        assert result.exit_code == 0
        assert "supersecret" not in result.output
        assert "1234" in result.output

    def test_invalid_config_exits(self, runner: CliRunner, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[slug]\npattern = "weekday"\n')
        result = runner.invoke(app, ["config", "--config", str(cfg)])
        assert result.exit_code == 1
