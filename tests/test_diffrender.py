"""
Diff renderer tests

Tests unified hunks, split and inline layouts, statistics, and the full
text report.
"""

import pytest

from formathub.lib.differ import changes_build
from formathub.lib.diffrender import (
    inline_render,
    report_build,
    similarity_compute,
    split_render,
    stats_compute,
    unified_render,
)
from formathub.models.diff import DiffConfig, DiffStats


def records_for(old, new, **options):
    return changes_build(old, new, DiffConfig(**options))


SCENARIO = (["a", "b", "c"], ["a", "x", "c"])


class TestUnified:
    """Context hunks"""

    def test_context_one(self):
        """Omitted runs on both ends are marked"""
        records = records_for(list("abcde"), ["a", "b", "X", "d", "e"])
        assert unified_render(records, DiffConfig(context_lines=1)) == (
            "...\n  b\n- c\n+ X\n  d\n...\n"
        )

    def test_context_zero(self):
        records = records_for(list("abcde"), ["a", "b", "X", "d", "e"])
        assert unified_render(records, DiffConfig(context_lines=0)) == "...\n- c\n+ X\n...\n"

    def test_full_context_has_no_markers(self):
        records = records_for(*SCENARIO)
        assert unified_render(records, DiffConfig()) == "  a\n- b\n+ x\n  c\n"

    def test_two_hunks(self):
        """Unchanged run longer than twice the context splits hunks"""
        old = ["1", "2", "3", "4", "5", "6", "7", "8"]
        new = ["X", "2", "3", "4", "5", "6", "7", "Y"]
        records = records_for(old, new)
        assert unified_render(records, DiffConfig(context_lines=1)) == (
            "- 1\n+ X\n  2\n...\n  7\n- 8\n+ Y\n"
        )

    def test_overlapping_context_merges(self):
        old = ["1", "2", "3", "4"]
        new = ["X", "2", "3", "Y"]
        records = records_for(old, new)
        assert unified_render(records, DiffConfig(context_lines=1)) == (
            "- 1\n+ X\n  2\n  3\n- 4\n+ Y\n"
        )

    def test_no_changes_renders_nothing(self):
        records = records_for(["a", "b"], ["a", "b"])
        assert unified_render(records, DiffConfig()) == ""


class TestSplit:
    """Fenced two-column layout"""

    def test_with_line_numbers(self):
        records = records_for(*SCENARIO)
        assert split_render(records, DiffConfig(diff_type="split")) == (
            "```diff\n"
            "OLD (Left) | NEW (Right)\n"
            + "-" * 40 + "\n"
            "   1 |    1 |   a\n"
            "   2 |      | - b\n"
            "     |    2 | + x\n"
            "   3 |    3 |   c\n"
            "```"
        )

    def test_without_line_numbers(self):
        records = records_for(*SCENARIO)
        output = split_render(records, DiffConfig(diff_type="split", show_line_numbers=False))
        assert output.splitlines()[3:] == ["  a", "- b", "+ x", "  c", "```"]


class TestInline:
    """Sequential layout with old line numbers"""

    def test_with_line_numbers(self):
        records = records_for(*SCENARIO)
        assert inline_render(records, DiffConfig(diff_type="inline")) == (
            "   1:   a\n"
            "   2: - b\n"
            "    : + x\n"
            "   3:   c\n"
        )

    def test_without_line_numbers(self):
        records = records_for(*SCENARIO)
        assert inline_render(records, DiffConfig(show_line_numbers=False)) == "  a\n- b\n+ x\n  c\n"


class TestStats:
    """Counts and similarity"""

    def test_scenario(self):
        stats = stats_compute(records_for(*SCENARIO))
        assert stats == DiffStats(
            lines_added=1,
            lines_deleted=1,
            lines_modified=1,
            lines_unchanged=2,
            total_lines=4,
            similarity=50,
        )

    def test_modified_is_min(self):
        stats = stats_compute(records_for(["a"], ["x", "y", "z"]))
        assert (stats.lines_added, stats.lines_deleted, stats.lines_modified) == (3, 1, 1)

    @pytest.mark.parametrize("unchanged, total, expected", [
        (0, 0, 100),
        (0, 4, 0),
        (2, 4, 50),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),
        (5, 5, 100),
        (999, 1001, 99),
    ])
    def test_similarity(self, unchanged, total, expected):
        assert similarity_compute(unchanged, total) == expected

    def test_similarity_100_only_when_identical(self):
        old = [str(n) for n in range(500)]
        new = old[:-1] + ["changed"]
        assert stats_compute(records_for(old, new)).similarity == 99
        assert stats_compute(records_for(old, old)).similarity == 100


class TestReport:
    """Header, body and statistics block"""

    def test_full_report(self):
        records = records_for(*SCENARIO)
        config = DiffConfig()
        output = report_build(records, stats_compute(records), config)

        assert output == (
            "Diff Comparison (unified)\n"
            + "=" * 50 + "\n"
            "  a\n- b\n+ x\n  c\n"
            "\n\nStatistics:\n"
            + "=" * 20 + "\n"
            "Lines Added: 1\n"
            "Lines Deleted: 1\n"
            "Lines Modified: 1\n"
            "Lines Unchanged: 2\n"
            "Similarity: 50%\n"
        )

    def test_without_stats(self):
        records = records_for(*SCENARIO)
        config = DiffConfig(diff_type="inline", show_stats=False)
        output = report_build(records, stats_compute(records), config)

        assert output.startswith("Diff Comparison (inline)\n")
        assert "Statistics:" not in output
