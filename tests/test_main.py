"""
Tests for the command-line entry point.
"""

import json

from arena.main import build_parser, main


def test_parser_defaults():
    """Test that unset options are left to the configuration."""
    args = build_parser().parse_args([])
    assert args.roster.name == "roster.json"
    assert args.matches is None
    assert args.seed is None
    assert not args.interactive


def test_batch_run(capsys):
    """Test a small seeded batch on the bundled roster."""
    assert main(["--matches", "3", "--seed", "2"]) == 0
    assert "Batch results" in capsys.readouterr().out


def test_single_match(capsys):
    """Test a single verbose match on a generated map."""
    assert main(["--matches", "1", "--seed", "2", "--map", "20x5", "-v"]) == 0
    assert "Winner" in capsys.readouterr().out


def test_missing_roster(tmp_path):
    """Test that a missing roster file is reported, not raised."""
    assert main(["--roster", str(tmp_path / "missing.json")]) == 1


def test_bad_map_size():
    """Test that a malformed map size is reported."""
    assert main(["--matches", "1", "--map", "big"]) == 1


def test_invalid_roster(tmp_path):
    """Test that a roster with unknown members is reported."""
    path = tmp_path / "roster.json"
    path.write_text(
        json.dumps(
            {
                "characters": [{"id": "a", "name": "A"}],
                "factions": {"faction1": ["a"], "faction2": ["ghost"]},
            }
        )
    )
    assert main(["--roster", str(path), "--matches", "1"]) == 1
