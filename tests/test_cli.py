"""Tests for the click CLI."""
import json

from click.testing import CliRunner

from conftest import ScriptedGenerator
from synthmind import cli as cli_module
from synthmind.cli import cli, format_cycle_line
from synthmind.cognitive.state import MindState
from synthmind.psyche.persistence import save_state
from synthmind.psyche.schema import build_snapshot
from synthmind.psyche.store import JsonFileStore


class FakeGenerator(ScriptedGenerator):
    def __init__(self, settings=None):
        super().__init__()
        self.closed = False

    async def close(self):
        self.closed = True


class TestFormatCycleLine:
    def test_line_contents(self):
        snapshot = build_snapshot(MindState())
        line = format_cycle_line(snapshot)
        assert line.startswith("[RUN] CURIOSITY")
        assert "topic=consciousness" in line
        assert line.endswith(":: Initializing neural pathways...")

    def test_error_appended(self):
        state = MindState()
        state.last_generation_error = "(LLM Error: boom)"
        assert format_cycle_line(build_snapshot(state)).endswith("\n  ! (LLM Error: boom)")


class TestShowCommand:
    def test_show_prints_snapshot(self, tmp_path):
        path = tmp_path / "mind.json"
        state = MindState()
        state.topic = "time"
        save_state(JsonFileStore(path), state)

        result = CliRunner().invoke(cli, ["show", "--state-file", str(path)])

        assert result.exit_code == 0
        assert json.loads(result.output)["topic"] == "time"

    def test_show_requires_existing_file(self, tmp_path):
        result = CliRunner().invoke(cli, ["show", "--state-file", str(tmp_path / "missing.json")])
        assert result.exit_code != 0


class TestRunCommand:
    def test_run_bounded_cycles(self, tmp_path, monkeypatch):
        monkeypatch.setattr(cli_module, "HuggingFaceGenerator", FakeGenerator)
        path = tmp_path / "mind.json"

        result = CliRunner().invoke(cli, ["run", "-i", "0.01", "-n", "2", "-s", str(path)])

        assert result.exit_code == 0, result.output
        assert "Completed 2 cycles." in result.output
        assert path.exists()
