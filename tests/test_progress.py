"""
Unit Tests for Progress Reporters
"""

import io

from rich.console import Console

from notion_tree.pipeline.progress import SpinnerProgressReporter


def make_reporter():
    console = Console(file=io.StringIO(), color_system=None, width=200)
    return SpinnerProgressReporter(console), console


class TestSpinnerProgressReporter:
    """Tests for SpinnerProgressReporter."""

    def test_progress_prefix(self):
        """Test the [done/total, pct%] prefix."""
        reporter, _ = make_reporter()

        reporter.expansion_started(4)
        reporter.root_completed(1, 4)
        reporter.status("Processing Notes...")

        assert reporter._render().plain == "[1/4, 25%] Processing Notes..."
        reporter.stop()

    def test_no_prefix_during_discovery(self):
        """Test discovery has no counter."""
        reporter, _ = make_reporter()

        reporter.discovery_started()
        reporter.discovery_progress(3, 1)

        assert reporter._render().plain == "Found 3 pages and 1 databases..."
        reporter.stop()

    def test_summary_lines(self):
        """Test summary lines are printed after each phase."""
        reporter, console = make_reporter()

        reporter.discovery_started()
        reporter.discovery_finished(2)
        reporter.expansion_started(2)
        reporter.finished(7)

        output = console.file.getvalue()
        assert "Found 2 root items. Building tree structure..." in output
        assert "Tree structure built successfully! (7 nodes)" in output

    def test_stop_is_idempotent(self):
        """Test stop can be called without a live spinner."""
        reporter, _ = make_reporter()

        reporter.stop()
        reporter.stop()
