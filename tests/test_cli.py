"""Tests for the command line interface."""

import dataclasses

import pytest
from click.testing import CliRunner

from avalon_tracker.main import cli


@pytest.fixture
def invoke(test_config):
    """Invoke the CLI against the test database."""
    runner = CliRunner()
    # Keep INFO events off the captured output
    config = dataclasses.replace(test_config, log_level="WARNING")

    def _invoke(*args):
        return runner.invoke(cli, list(args), obj={"config": config})

    return _invoke


@pytest.fixture
def initialized(invoke):
    result = invoke("init-db")
    assert result.exit_code == 0, result.output
    return invoke


class TestCli:
    """Test suite for the avalon-tracker commands."""

    def test_init_db(self, invoke):
        result = invoke("init-db")

        assert result.exit_code == 0
        assert "Database tables created" in result.output

    def test_import_prints_game_ids(self, initialized, sample_sheet_path):
        result = initialized("import", str(sample_sheet_path))

        assert result.exit_code == 0, result.output
        assert len(result.output.split()) == 2

    def test_load(self, initialized, sample_sheet_path):
        game_id = initialized("import", str(sample_sheet_path)).output.split()[0]

        result = initialized("load", game_id)

        assert result.exit_code == 0, result.output
        assert f"Game {game_id}" in result.output
        assert "Winner: evil (assassination)" in result.output

    def test_load_unknown_game(self, initialized):
        result = initialized("load", "missing-id")

        assert result.exit_code == 1
        assert "Game not found: missing-id" in result.output

    def test_delete(self, initialized, sample_sheet_path):
        game_id = initialized("import", str(sample_sheet_path)).output.split()[0]

        result = initialized("delete", game_id)

        assert result.exit_code == 0, result.output
        assert f"Deleted game {game_id}" in result.output
        assert initialized("load", game_id).exit_code == 1

    def test_delete_unknown_game(self, initialized):
        result = initialized("delete", "missing-id")

        assert result.exit_code == 1
        assert "Game not found: missing-id" in result.output

    def test_standings(self, initialized, sample_sheet_path):
        initialized("import", str(sample_sheet_path))

        result = initialized("standings")

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0] == "Standings"
        assert lines[2].split()[0] == "player5"
        assert lines[-1] == "---------"

    def test_standings_by_alignment(self, initialized, sample_sheet_path):
        initialized("import", str(sample_sheet_path))

        result = initialized("standings", "--by-alignment")

        assert result.exit_code == 0, result.output
        assert "Standings (good)" in result.output
        assert "Standings (evil)" in result.output

    def test_import_bad_sheet_fails(self, initialized, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- players: {alice: wizard}\n  quests: []\n  result: {winner: good, type: quest}\n")

        result = initialized("import", str(path))

        assert result.exit_code == 1
        assert "unknown Role value 'wizard'" in result.output
        assert initialized("standings").output.splitlines()[2] == "---------"

    def test_import_missing_file(self, initialized, tmp_path):
        result = initialized("import", str(tmp_path / "nope.yaml"))
        assert result.exit_code == 2
