"""
Tests for the console helpers.
"""

from arena.core.utils import (
    MONITOR_GROUP_SEPARATOR,
    ccapture,
    format_rolls,
    monitor_boxes,
)


def test_monitor_boxes_counts():
    """Test that one box is drawn per point of the monitor."""
    bar = monitor_boxes(4, 10, "red")
    assert bar.count("■") == 4
    assert bar.count("□") == 6
    # Groups of three boxes, one per point of wound modifier.
    groups = bar.split(MONITOR_GROUP_SEPARATOR)
    assert [g.count("■") + g.count("□") for g in groups] == [3, 3, 3, 1]
    assert [g.count("■") for g in groups] == [3, 1, 0, 0]


def test_monitor_boxes_skip_empty_spans():
    """Test that no empty markup span is emitted."""
    assert "[red][/]" not in monitor_boxes(0, 10, "red")
    assert "[dim white][/]" not in monitor_boxes(10, 10, "red")


def test_monitor_boxes_clamps():
    """Test that overflow and empty monitors are handled."""
    assert monitor_boxes(12, 9).count("■") == 9
    assert monitor_boxes(-1, 3).count("□") == 3
    assert monitor_boxes(0, 0) == ""


def test_format_rolls():
    """Test the narration of dice."""
    assert format_rolls([6, 1, 5]) == "6, 1, 5"
    assert format_rolls(()) == "-"


def test_ccapture_renders_markup():
    """Test that markup is rendered, not printed."""
    assert "[bold]" not in ccapture("[bold]Hits[/]")
    assert "Hits" in ccapture("[bold]Hits[/]")
