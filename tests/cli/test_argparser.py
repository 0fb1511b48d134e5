"""Unit tests for the argument parser module in dirr CLI."""

import argparse
from pathlib import Path

import pytest

from dirr.cli.argparser import create_exclusion_action, create_parser, validate_args
from dirr.exclusion_rules.git_rules import GitIgnoreExclusionRules
from dirr.exclusion_rules.pattern_rules import PatternExclusionRules


@pytest.fixture
def rules():
    return PatternExclusionRules(), GitIgnoreExclusionRules()


@pytest.fixture
def parser(rules):
    return create_parser(*rules)


def test_create_exclusion_action(rules):
    ExclusionAction = create_exclusion_action(*rules)
    assert issubclass(ExclusionAction, argparse.Action)

    action = ExclusionAction(option_strings=["-x", "--exclude"], dest="exclude", nargs="+", help="test help")
    assert action.option_strings == ["-x", "--exclude"]
    assert action.dest == "exclude"


def test_defaults(parser):
    args = parser.parse_args([])

    assert args.directory == Path(".")
    assert not args.meta
    assert args.exclude is None
    assert args.exclude_from is None
    assert args.output is None
    assert args.summary is None
    assert args.permission_action == "ignore"
    assert not args.sort


def test_meta_flag(parser):
    assert parser.parse_args(["-m"]).meta
    assert parser.parse_args(["--meta", "some/dir"]).meta


def test_exclude_patterns_are_compiled(parser, rules):
    pattern_rules, _ = rules
    args = parser.parse_args(["some/dir", "-x", "*tmp*", "node_modules"])

    assert args.directory == Path("some/dir")
    assert args.exclude == ["*tmp*", "node_modules"]
    assert [regex.pattern for regex in pattern_rules.patterns] == [".*tmp.*", "node_modules"]
    assert pattern_rules.exclude("build_tmp_1")


def test_exclude_takes_remaining_arguments(parser):
    args = parser.parse_args(["-x", "tmp", "build"])
    assert args.exclude == ["tmp", "build"]
    assert args.directory == Path(".")


def test_exclude_repeated(parser, rules):
    pattern_rules, _ = rules
    args = parser.parse_args(["-x", "tmp", "-m", "-x", "log"])

    assert args.exclude == ["tmp", "log"]
    assert args.meta
    assert len(pattern_rules.patterns) == 2


def test_invalid_pattern_is_usage_error(parser, rules, capsys):
    pattern_rules, _ = rules
    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["-x", "ok", "(broken"])

    assert exc_info.value.code == 2
    assert "Invalid exclusion pattern '(broken'" in capsys.readouterr().err
    assert pattern_rules.patterns == []


def test_exclude_from_loads_gitignore(parser, rules, tmp_path):
    _, gitignore_rules = rules
    ignore_file = tmp_path / ".gitignore"
    ignore_file.write_text("*.pyc\n")

    args = parser.parse_args(["-e", str(ignore_file)])

    assert args.exclude_from == [ignore_file]
    assert gitignore_rules.exclude("main.pyc")


def test_exclude_from_missing_file(parser, capsys):
    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["-e", "/no/such/.gitignore"])

    assert exc_info.value.code == 2
    assert "Rules file not found" in capsys.readouterr().err


def test_permission_action_choices(parser):
    assert parser.parse_args(["-P", "fail"]).permission_action == "fail"
    with pytest.raises(SystemExit):
        parser.parse_args(["-P", "warn"])


def test_version(parser, capsys):
    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--version"])

    assert exc_info.value.code == 0
    assert capsys.readouterr().out.startswith("dirr ")


def test_validate_args_summary_file_requires_output(parser):
    with pytest.raises(ValueError, match="--summary=file requires -o/--output"):
        validate_args(parser.parse_args(["-s", "file"]))

    validate_args(parser.parse_args(["-s", "file", "-o", "out.txt"]))
    validate_args(parser.parse_args(["-s", "stderr"]))
