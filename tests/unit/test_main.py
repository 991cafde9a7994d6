"""Tests for the command-line entry point."""

from __future__ import annotations

import json

import pytest

from gamecatalog.main import build_parser, main


@pytest.fixture
def run(db_path, capsys):
    """Run the CLI against a temp database; returns (exit code, stdout, stderr)."""

    def _run(*args: str) -> tuple[int, str, str]:
        code = main(["--db", str(db_path), "--log-level", "WARNING", *args])
        captured = capsys.readouterr()
        return code, captured.out, captured.err

    return _run


class TestCommands:
    """Tests for each sub-command."""

    def test_init(self, run, db_path) -> None:
        """init creates the database file."""
        code, out, _ = run("init")
        assert code == 0
        assert str(db_path) in out
        assert db_path.exists()

    def test_add_and_show(self, run) -> None:
        """Added games can be shown as text."""
        code, out, _ = run(
            "add", "Hades",
            "--genre", "Roguelike", "--genre", "Action",
            "--platform", "Switch",
            "--release-date", "17.09.2020",
            "--rating", "9.5",
        )
        assert code == 0
        assert out.strip() == "Added game 1"

        code, out, _ = run("show", "1")
        assert code == 0
        assert "[1] Hades" in out
        assert "Genres: Action, Roguelike" in out
        assert "Platforms: Switch" in out
        assert "Released: 2020-09-17" in out

    def test_show_json(self, run) -> None:
        """--json prints the game as a JSON object."""
        run("add", "Celeste", "--genre", "Platformer")
        code, out, _ = run("show", "1", "--json")
        assert code == 0
        data = json.loads(out)
        assert data["title"] == "Celeste"
        assert data["genres"] == ["Platformer"]

    def test_list(self, run) -> None:
        """list prints every game in id order."""
        code, out, _ = run("list")
        assert code == 0
        assert "The catalog is empty." in out

        run("add", "Hades")
        run("add", "Celeste")
        code, out, _ = run("list", "--json")
        assert [g["title"] for g in json.loads(out)] == ["Hades", "Celeste"]

    def test_update_replaces_genres(self, run) -> None:
        """update with --genre replaces the genre list."""
        run("add", "Hades", "--genre", "Action", "--platform", "PC")
        code, out, _ = run("update", "1", "--genre", "Roguelike", "--developer", "Supergiant")
        assert code == 0
        assert "Updated game 1" in out

        _, out, _ = run("show", "1", "--json")
        data = json.loads(out)
        assert data["genres"] == ["Roguelike"]
        assert data["platforms"] == ["PC"]
        assert data["developer"] == "Supergiant"
        assert data["title"] == "Hades"

    def test_delete_and_prune(self, run) -> None:
        """delete removes the game; prune then drops its unused names."""
        run("add", "Hades", "--genre", "Action", "--platform", "PC")

        code, out, _ = run("delete", "1")
        assert code == 0
        assert "Deleted game 1" in out

        code, out, _ = run("prune")
        assert code == 0
        assert "Removed 1 unused genre(s) and 1 unused platform(s)" in out


class TestErrors:
    """Tests for exit codes on failure."""

    @pytest.mark.parametrize("command", ["show", "delete", "update"])
    def test_missing_game(self, run, command) -> None:
        """Unknown ids exit with 1 and a message on stderr."""
        code, _, err = run(command, "42")
        assert code == 1
        assert "No game with id 42" in err

    def test_invalid_title(self, run) -> None:
        """Validation errors are reported, not raised."""
        code, _, err = run("add", "   ")
        assert code == 1
        assert err.startswith("Error:")

    def test_invalid_release_date(self, run) -> None:
        """Bad dates are rejected and nothing is stored."""
        code, _, err = run("add", "Hades", "--release-date", "soon")
        assert code == 1
        assert "Error:" in err

        _, out, _ = run("list")
        assert "The catalog is empty." in out

    def test_unopenable_database(self, tmp_path, capsys) -> None:
        """A database path that cannot be created exits with 1."""
        blocker = tmp_path / "file"
        blocker.write_text("x")
        code = main(["--db", str(blocker / "catalog.db"), "--log-level", "CRITICAL", "list"])
        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_command_required(self) -> None:
        """Running without a sub-command is a usage error."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
