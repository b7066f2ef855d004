"""Tests for the threader command line."""

import json

import pytest
from typer.testing import CliRunner

from threader.cli.main import app

pytestmark = pytest.mark.integration


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


class TestSplitCommand:
    def test_split_from_stdin(self, runner):
        result = runner.invoke(
            app,
            ["split", "--length", "25", "--no-sentences"],
            input="First paragraph.\n\nSecond paragraph has more content than the first entry.",
        )
        assert result.exit_code == 0
        assert result.stdout.strip().split("\n\n") == [
            "First paragraph.",
            "Second paragraph has more",
            "content than the first",
            "entry.",
        ]

    def test_split_file_as_json_with_enumeration(self, runner, tmp_path):
        source = tmp_path / "post.txt"
        source.write_text("Alpha bravo charlie delta echo.", encoding="utf-8")
        result = runner.invoke(
            app,
            ["split", str(source), "-l", "12", "--no-sentences", "--enumerate", "--json"],
        )
        assert result.exit_code == 0
        chunks = json.loads(result.stdout)
        assert len(chunks) == 6
        assert chunks[0] == "Alpha (1/6)"
        assert all(len(chunk) <= 12 for chunk in chunks)

    def test_preset_sets_length(self, runner):
        text = " ".join(["word"] * 100)
        result = runner.invoke(app, ["split", "--preset", "bluesky", "--json"], input=text)
        assert result.exit_code == 0
        chunks = json.loads(result.stdout)
        assert all(len(chunk) <= 300 for chunk in chunks)
        assert len(chunks) == 2

    def test_settings_supply_defaults(self, runner, monkeypatch):
        monkeypatch.setenv("THREADER_MAX_LENGTH", "12")
        monkeypatch.setenv("ENUMERATE", "true")
        monkeypatch.setenv("BREAK_ON_SENTENCES", "false")
        result = runner.invoke(app, ["split", "--json"], input="Alpha bravo charlie delta echo.")
        assert result.exit_code == 0
        assert json.loads(result.stdout)[-1] == "echo. (6/6)"

    def test_unknown_preset_fails(self, runner):
        result = runner.invoke(app, ["split", "--preset", "myspace"], input="Some text.")
        assert result.exit_code == 1
        assert "Unknown preset" in result.output

    def test_empty_input_fails(self, runner):
        result = runner.invoke(app, ["split"], input="   \n")
        assert result.exit_code == 1
        assert "Please enter some text to split." in result.output

    def test_missing_file_fails(self, runner, tmp_path):
        result = runner.invoke(app, ["split", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1
        assert "Could not read" in result.output


class TestOtherCommands:
    def test_stats_line(self, runner):
        result = runner.invoke(app, ["stats"], input="One two three. This is four?")
        assert result.exit_code == 0
        assert result.stdout.strip() == "Characters: 28 | Words: 6 | Sentences: 2"

    def test_stats_json(self, runner):
        result = runner.invoke(app, ["stats", "--json"], input="")
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "characters": 0,
            "words": 0,
            "sentences": 0,
            "paragraphs": 0,
        }

    def test_presets_table(self, runner):
        result = runner.invoke(app, ["presets"])
        assert result.exit_code == 0
        assert "bluesky" in result.stdout
        assert "Threads/Mastodon (500)" in result.stdout

    def test_version(self, runner):
        from threader import __version__

        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert result.stdout.strip() == __version__
