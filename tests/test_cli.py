"""Tests for cli.py module."""

import json

import pytest

from career_metro.cli import main


@pytest.fixture
def input_file(tmp_path, dict_rows):
    """Dataset written as a JSON file."""
    path = tmp_path / "career.json"
    path.write_text(json.dumps(dict_rows))
    return path


class TestLayoutCommand:
    """Tests for the layout subcommand."""

    def test_writes_outputs(self, tmp_path, input_file, capsys):
        """layout writes layout.json and summary.txt."""
        output = tmp_path / "out"

        main(["layout", "--input", str(input_file), "--output", str(output)])

        data = json.loads((output / "layout.json").read_text())
        assert len(data["nodes"]) == 5
        assert set(data["routes"]) == {"eng", "ops"}
        assert (output / "summary.txt").exists()

        captured = capsys.readouterr().out
        assert "Placed 5 stations on 2 lines" in captured
        assert "Wrote layout.json" in captured

    def test_route_mode_override(self, tmp_path, input_file):
        """--route-mode changes the routes and the recorded config."""
        output = tmp_path / "out"

        main(["layout", "--input", str(input_file), "--output", str(output), "--route-mode", "direct"])

        data = json.loads((output / "layout.json").read_text())
        assert data["configUsed"]["route_mode"] == "direct"
        assert "A" not in data["routes"]["eng"]

    def test_config_file(self, tmp_path, input_file):
        """Options are read from --config."""
        config = tmp_path / "config.yaml"
        config.write_text("placementStrategy: grid\n")
        output = tmp_path / "out"

        main(["layout", "--input", str(input_file), "--config", str(config), "--output", str(output)])

        data = json.loads((output / "layout.json").read_text())
        assert data["configUsed"]["placement_strategy"] == "grid"

    def test_skipped_details_reported(self, tmp_path, dict_rows, capsys):
        """Details with dangling references are listed in a warning."""
        dict_rows["position_details"].append(
            {"id": "ghost", "position_id": "nobody", "career_path_id": "eng", "level": 1}
        )
        path = tmp_path / "career.json"
        path.write_text(json.dumps(dict_rows))

        main(["layout", "--input", str(path), "--output", str(tmp_path / "out")])

        assert "Warning: skipped 1 position details: ghost" in capsys.readouterr().out

    def test_missing_input(self, tmp_path):
        """A missing input file is an argument error."""
        with pytest.raises(SystemExit) as exc:
            main(["layout", "--input", str(tmp_path / "missing.json")])
        assert exc.value.code == 2

    def test_bad_config(self, tmp_path, input_file, capsys):
        """An invalid config value is an argument error."""
        config = tmp_path / "config.yaml"
        config.write_text("routeMode: zigzag\n")

        with pytest.raises(SystemExit):
            main(["layout", "--input", str(input_file), "--config", str(config)])
        assert "Cannot load config" in capsys.readouterr().err


class TestInspectCommand:
    """Tests for the inspect subcommand."""

    def test_sections(self, input_file, capsys):
        """inspect prints interchanges and relationships."""
        main(["inspect", "--input", str(input_file)])

        out = capsys.readouterr().out
        assert "2 paths, 3 positions, 5 details" in out
        assert "=== INTERCHANGES ===" in out
        assert "2 lines  jr" in out
        assert "2 lines  mgr" in out
        assert "=== PATH RELATIONSHIPS ===" in out
        assert "2 shared  eng <-> ops" in out

    def test_no_interchanges(self, tmp_path, capsys):
        """Empty sections print a placeholder."""
        path = tmp_path / "career.yaml"
        path.write_text(
            "paths: [{id: a, name: A}]\n"
            "positions: [{id: x, name: X}]\n"
            "position_details: [{id: n, position_id: x, career_path_id: a, level: 1}]\n"
        )

        main(["inspect", "--input", str(path), "-n", "5"])

        assert capsys.readouterr().out.count("(none)") == 2

    def test_no_readable_details(self, tmp_path, capsys):
        """A dataset whose details are all unreadable still prints both sections."""
        path = tmp_path / "career.yaml"
        path.write_text(
            "paths: [{id: a, name: A}]\n"
            "positions: [{id: x, name: X}]\n"
            "position_details: [{id: n, level: 1}]\n"
        )

        main(["inspect", "--input", str(path)])

        out = capsys.readouterr().out
        assert "Warning: skipping invalid position detail" in out
        assert "1 paths, 1 positions, 0 details" in out
        assert out.count("(none)") == 2


class TestMain:
    """Tests for the entry point."""

    def test_no_command_prints_help(self, capsys):
        """Without a subcommand the help text is shown."""
        main([])
        assert "usage:" in capsys.readouterr().out
