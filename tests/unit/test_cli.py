"""Tests for the command-line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from launch_search import __version__
from launch_search.cli import app

runner = CliRunner()

FIREFOX = "org.mozilla.firefox.desktop"


@pytest.fixture
def cli_env(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and state at the temp directory."""
    monkeypatch.setenv("LAUNCH_SEARCH_CONFIG", str(temp_dir / "config.toml"))
    monkeypatch.setenv("LAUNCH_SEARCH_STATE_DB", str(temp_dir / "state.duckdb"))
    for name in ("LAUNCH_SEARCH_LOG_LEVEL", "LAUNCH_SEARCH_MAX_RESULTS", "LAUNCH_SEARCH_NO_DOCUMENTS"):
        monkeypatch.delenv(name, raising=False)
    return temp_dir


@pytest.fixture
def apps_file(temp_dir: Path) -> Path:
    path = temp_dir / "apps.json"
    path.write_text(
        json.dumps(
            [
                {"id": FIREFOX, "name": "Firefox", "description": "Browse the web", "icon": "firefox"},
                {"id": "org.gnome.Terminal.desktop", "name": "Terminal"},
                {"id": "org.gnome.Nautilus.desktop", "name": "Files"},
            ]
        )
    )
    return path


def run_query(apps_file: Path, *args: str) -> dict:
    result = runner.invoke(
        app, ["query", *args, "--apps", str(apps_file), "--no-documents", "-f", "json"]
    )
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestVersion:
    """Tests for --version."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"launch-search version {__version__}" in result.stdout


class TestQueryCommand:
    """Tests for the query command."""

    def test_json_results(self, cli_env: Path, apps_file: Path) -> None:
        data = run_query(apps_file, "fire")

        assert data["query"] == "fire"
        assert data["best_match"]["name"] == "Firefox"
        assert data["best_match"]["score"] == 85.0
        assert data["loading_more"] is False

    def test_settings_included(self, cli_env: Path, apps_file: Path) -> None:
        data = run_query(apps_file, "sound")
        assert data["best_match"]["panel"] == "sound"

    def test_category(self, cli_env: Path, apps_file: Path) -> None:
        data = run_query(apps_file, "sound", "--category", "apps")

        assert data["category"] == "apps"
        assert all(r["kind"] == "app" for r in data["results"])

    def test_max_results(self, cli_env: Path, apps_file: Path) -> None:
        data = run_query(apps_file, "e", "-n", "2")
        assert len(data["results"]) == 2

    def test_plain_output(self, cli_env: Path, apps_file: Path) -> None:
        result = runner.invoke(
            app, ["query", "fire", "--apps", str(apps_file), "--no-documents", "-f", "plain"]
        )

        assert result.exit_code == 0
        assert "Best match" in result.stdout
        assert "Firefox - Browse the web" in result.stdout

    def test_documents(self, cli_env: Path, apps_file: Path, sample_documents: Path) -> None:
        (cli_env / "config.toml").write_text(
            f'[documents]\nfolders = ["{sample_documents}"]\n'
        )

        result = runner.invoke(app, ["query", "report", "--apps", str(apps_file), "-f", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["best_match"]["path"] == str(sample_documents / "report.pdf")

    def test_content_flag(self, cli_env: Path, apps_file: Path, sample_documents: Path) -> None:
        (cli_env / "config.toml").write_text(
            f'[documents]\nfolders = ["{sample_documents}"]\n'
        )

        result = runner.invoke(
            app, ["query", "bookmarks", "--content", "--apps", str(apps_file), "-f", "json"]
        )

        assert result.exit_code == 0, result.output
        names = [r["name"] for r in json.loads(result.stdout)["results"]]
        assert names == ["notes.txt"]

    def test_empty_text(self, cli_env: Path, apps_file: Path) -> None:
        result = runner.invoke(app, ["query", "  ", "--apps", str(apps_file)])
        assert result.exit_code == 42

    def test_bad_apps_file(self, cli_env: Path, temp_dir: Path) -> None:
        bad = temp_dir / "bad.json"
        bad.write_text("{not json")

        result = runner.invoke(app, ["query", "fire", "--apps", str(bad)])

        assert result.exit_code == 3

    def test_invalid_config(self, cli_env: Path, apps_file: Path) -> None:
        (cli_env / "config.toml").write_text("[search]\nmax_results = 0\n")

        result = runner.invoke(app, ["query", "fire", "--apps", str(apps_file)])

        assert result.exit_code == 22


class TestSelectAndLearning:
    """Tests for select and the learning subcommands."""

    def test_select_boosts_next_query(self, cli_env: Path, apps_file: Path) -> None:
        result = runner.invoke(app, ["select", "fire", FIREFOX])

        assert result.exit_code == 0, result.output
        assert "Recorded" in result.stdout

        data = run_query(apps_file, "fire")
        assert data["best_match"]["score"] == 100.0

    def test_select_short_query(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["select", "f", FIREFOX])
        assert result.exit_code == 42

    def test_learning_show(self, cli_env: Path) -> None:
        runner.invoke(app, ["select", "fire", FIREFOX])

        result = runner.invoke(app, ["learning", "show", "fire", "-f", "json"])

        assert result.exit_code == 0, result.output
        rows = json.loads(result.stdout)["rows"]
        assert rows == [{"query": "fire", "result": FIREFOX, "weight": 1.0, "boost": 15.0}]

    def test_learning_show_empty(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["learning", "show"])
        assert result.exit_code == 0
        assert "No learning data" in result.stdout

    def test_learning_clear(self, cli_env: Path) -> None:
        runner.invoke(app, ["select", "fire", FIREFOX])

        result = runner.invoke(app, ["learning", "clear", "--force"])

        assert result.exit_code == 0
        assert "Cleared learning data for 3 queries" in result.stdout
        shown = runner.invoke(app, ["learning", "show"])
        assert "No learning data" in shown.stdout

    def test_learning_clear_cancelled(self, cli_env: Path) -> None:
        runner.invoke(app, ["select", "fire", FIREFOX])

        result = runner.invoke(app, ["learning", "clear"], input="n\n")

        assert "Cancelled" in result.stdout
        shown = runner.invoke(app, ["learning", "show", "-f", "json"])
        assert json.loads(shown.stdout)["rows"]


class TestSynonymsCommand:
    """Tests for the synonyms command."""

    def test_term(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["synonyms", "browser", "-f", "json"])

        assert result.exit_code == 0
        apps = [row["application"] for row in json.loads(result.stdout)["rows"]]
        assert "firefox" in apps

    def test_unknown_term(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["synonyms", "zzz"])
        assert "No synonyms" in result.stdout

    def test_full_table(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["synonyms", "-f", "plain"])

        assert result.exit_code == 0
        assert result.stdout.startswith("Synonyms")

    def test_configured_table(self, cli_env: Path) -> None:
        (cli_env / "config.toml").write_text(
            "[synonyms]\ntable = '{\"chat\": [\"discord\"]}'\n"
        )

        result = runner.invoke(app, ["synonyms", "-f", "json"])

        rows = json.loads(result.stdout)["rows"]
        assert rows == [{"term": "chat", "applications": "discord"}]


class TestConfigCommand:
    """Tests for the config command."""

    def test_path(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["config", "--path"])

        assert result.exit_code == 0
        assert result.stdout.strip() == str(cli_env / "config.toml")

    def test_show(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "Max results: 10" in result.stdout
        assert (cli_env / "config.toml").exists()
