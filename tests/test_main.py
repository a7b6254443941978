"""Tests for the zonectrl command-line tool."""

import json
from pathlib import Path

import pytest

from zonectrl.__main__ import main
from zonectrl.core.config import ConfigManager
from zonectrl.models.entity import EntityKind

SETTINGS = ["--organization", "ZoneCtrlTest", "--application", "TestConfig"]
IDENTITY = "00:50:c2:12:34:56"


@pytest.fixture
def snapshot(tmp_path: Path) -> str:
    """Write a three-zone snapshot and return its path."""
    data = {
        "controller": {"name": "HLX", "host": "192.168.1.50"},
        "mac": "00:50:C2:12:34:56",
        "groups": [{"id": 1, "name": "Downstairs", "zones": [1, 2]}],
        "zones": [
            {"id": 1, "name": "Kitchen"},
            {"id": 2, "name": "Den", "muted": True},
            {"id": 3, "name": "Attic"},
        ],
    }
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def _rows(output: str) -> list[int]:
    rows = [[token for token in line.split() if token != "*"] for line in output.splitlines()]
    return [int(tokens[1]) for tokens in rows]


class TestMain:
    """Tests for CLI subcommands."""

    def test_show_default_order(
        self, config: ConfigManager, snapshot: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that show lists zones by name with no favorites."""
        assert main([*SETTINGS, "show", snapshot, "zone"]) == 0
        output = capsys.readouterr().out
        assert _rows(output) == [3, 2, 1]
        assert "never" in output

    def test_favorite_moves_to_top(
        self, config: ConfigManager, snapshot: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that a favorite is saved and sorted first."""
        assert main([*SETTINGS, "favorite", snapshot, "zone", "1", "on"]) == 0
        capsys.readouterr()
        assert main([*SETTINGS, "show", snapshot, "zone"]) == 0
        assert _rows(capsys.readouterr().out) == [1, 3, 2]
        assert config.get_controller_preferences(IDENTITY) is not None

    def test_touch_counts_uses(
        self, config: ConfigManager, snapshot: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that touch persists the use count."""
        main([*SETTINGS, "touch", snapshot, "zone", "2"])
        main([*SETTINGS, "touch", snapshot, "zone", "2"])
        assert "used 2 times" in capsys.readouterr().out

    def test_reset_entity(self, config: ConfigManager, snapshot: str) -> None:
        """Test that reset blanks one entity's preferences."""
        main([*SETTINGS, "favorite", snapshot, "group", "1", "toggle"])
        assert main([*SETTINGS, "reset", snapshot, "group", "1"]) == 0
        document = config.get_controller_preferences(IDENTITY)
        assert document is not None
        assert document["groups"] == {"1": {}}

    def test_reset_kind_without_id(self, config: ConfigManager, snapshot: str) -> None:
        """Test that resetting a kind requires an identifier."""
        assert main([*SETTINGS, "reset", snapshot, "zone"]) == 2

    def test_set_criteria(
        self, config: ConfigManager, snapshot: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test replacing and printing sort criteria."""
        args = [*SETTINGS, "criteria", snapshot, "zone", "--set", "mute:descending"]
        assert main(args) == 0
        assert capsys.readouterr().out.strip() == "0: Mute: Muted First"
        assert config.get_sort_criteria(EntityKind.ZONE) == [["mute", "descending"]]

    def test_bad_criteria_keep_existing(self, config: ConfigManager, snapshot: str) -> None:
        """Test that an invalid criteria list is rejected without changes."""
        args = [*SETTINGS, "criteria", snapshot, "zone", "--set", "volume:ascending"]
        assert main(args) == 1
        assert config.get_sort_criteria(EntityKind.ZONE) is None

    def test_missing_snapshot(self, config: ConfigManager, tmp_path: Path) -> None:
        """Test that an unreadable snapshot is reported."""
        assert main([*SETTINGS, "show", str(tmp_path / "none.json"), "zone"]) == 1
