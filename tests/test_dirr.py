"""Unit tests for the dirr.py module."""

import os
from datetime import datetime, timezone

import pytest

from dirr.dirr import ListingConfig, StreamingDirr, format_line, list_directory
from dirr.exceptions import InvalidPatternError, RootAccessError
from dirr.exclusion_rules.pattern_rules import PatternExclusionRules
from dirr.file_system_tree.permission_action import PermissionAction
from dirr.metadata_formatter import METADATA_UNAVAILABLE

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def p(*parts):
    return os.path.join(*parts)


class TestFormatLine:
    """Test rendering of a single listing line."""

    def test_top_level_has_no_indent(self):
        assert format_line("a", 1) == "|--a"

    @pytest.mark.parametrize("depth", [1, 2, 3, 7])
    def test_indent_length(self, depth):
        line = format_line("x", depth)
        assert line.index("|--") == 4 * (depth - 1)
        assert line.startswith("|   " * (depth - 1))

    def test_annotation_appended(self):
        assert format_line("a/b.txt", 2, " (5 B modified just now)") == "|   |--a/b.txt (5 B modified just now)"


class TestStreamingDirr:
    """Test the streaming lister."""

    def test_scenario_listing(self, scenario_tree):
        lister = StreamingDirr(scenario_tree, exclusion_rules=PatternExclusionRules(["tmp"]), sort_entries=True)
        lines = list(lister.stream_listing())

        assert lines == ["|--a\n", f"|   |--{p('a', 'b.txt')}\n", "|--c\n"]
        assert lister.file_count == 1
        assert lister.directory_count == 2
        assert lister.line_count == 3
        assert lister.streaming_complete

    def test_listing_with_metadata(self, scenario_tree):
        modified = datetime(2024, 5, 29, 12, 0, 0, tzinfo=timezone.utc).timestamp()
        os.utime(scenario_tree / "a" / "b.txt", (modified, modified))

        lister = StreamingDirr(scenario_tree, show_metadata=True, sort_entries=True, now=NOW)
        lines = list(lister.stream_listing())

        assert f"|   |--{p('a', 'b.txt')} (5 B modified 3 days ago)\n" in lines
        assert all(" modified " in line for line in lines)

    def test_metadata_failure_is_per_line(self, scenario_tree, monkeypatch):
        real_stat = os.stat

        def flaky_stat(path, *args, **kwargs):
            if os.fspath(path).endswith("b.txt"):
                raise PermissionError(13, "Permission denied")
            return real_stat(path, *args, **kwargs)

        monkeypatch.setattr("dirr.metadata_formatter.os.stat", flaky_stat)
        lister = StreamingDirr(scenario_tree, show_metadata=True, sort_entries=True, now=NOW)
        lines = list(lister.stream_listing())

        assert f"|   |--{p('a', 'b.txt')}{METADATA_UNAVAILABLE}\n" in lines
        assert len(lines) == 5

    def test_counts_update_while_streaming(self, scenario_tree):
        lister = StreamingDirr(scenario_tree, sort_entries=True)
        stream = lister.stream_listing()

        next(stream)
        assert lister.line_count == 1
        assert (lister.directory_count, lister.file_count) == (1, 0)
        assert not lister.streaming_complete

        list(stream)
        assert lister.line_count == 5
        assert (lister.directory_count, lister.file_count) == (3, 2)
        assert lister.streaming_complete

    def test_can_only_stream_once(self, scenario_tree):
        lister = StreamingDirr(scenario_tree)
        list(lister.stream_listing())
        with pytest.raises(RuntimeError, match="already been streamed"):
            list(lister.stream_listing())

    def test_missing_root_fails_at_construction(self, tmp_path):
        with pytest.raises(RootAccessError, match="Root path does not exist"):
            StreamingDirr(tmp_path / "missing")

    def test_permission_action_from_string(self, scenario_tree):
        lister = StreamingDirr(scenario_tree, permission_action="RAISE")
        assert lister._walker.permission_action is PermissionAction.RAISE

    def test_invalid_permission_action(self, scenario_tree):
        with pytest.raises(ValueError, match="Invalid permission_action"):
            StreamingDirr(scenario_tree, permission_action="warn")

    def test_defaults_to_current_directory(self, scenario_tree, monkeypatch):
        monkeypatch.chdir(scenario_tree / "a")
        assert list(StreamingDirr().stream_listing()) == ["|--b.txt\n"]


class TestListDirectory:
    """Test the configuration-driven entry point."""

    def test_list_directory(self, scenario_tree):
        lines = list_directory(ListingConfig(root=scenario_tree, exclude_patterns=["tmp"]))
        assert sorted(lines) == sorted(["|--a", f"|   |--{p('a', 'b.txt')}", "|--c"])

    def test_glob_pattern(self, scenario_tree):
        lines = list_directory(ListingConfig(root=scenario_tree, exclude_patterns=["*.txt"]))
        assert sorted(lines) == sorted(["|--a", "|--c", f"|   |--{p('c', 'tmp')}"])

    def test_invalid_pattern_fails_before_traversal(self, tmp_path):
        with pytest.raises(InvalidPatternError):
            list_directory(ListingConfig(root=tmp_path / "missing", exclude_patterns=["("]))

    def test_no_patterns(self, scenario_tree):
        assert len(list_directory(ListingConfig(root=scenario_tree))) == 5

    def test_metadata(self, scenario_tree):
        lines = list_directory(ListingConfig(root=scenario_tree, show_metadata=True), now=NOW)
        assert all(line.endswith(")") for line in lines)
