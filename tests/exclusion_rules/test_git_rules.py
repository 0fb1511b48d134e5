"""Unit tests for gitignore-style exclusion rules."""

import pytest

from dirr.exclusion_rules.git_rules import GitIgnoreExclusionRules


@pytest.fixture
def temp_gitignore(tmp_path):
    gitignore = tmp_path / ".gitignore"
    gitignore.write_text("*.txt\n!important.txt\nsubdir/\n*.py[cod]\n# comment\n")
    return gitignore


@pytest.fixture
def temp_npmignore(tmp_path):
    npmignore = tmp_path / ".npmignore"
    npmignore.write_text("*.log\nnode_modules/\n")
    return npmignore


@pytest.mark.parametrize(
    "path,expected",
    [
        ("file.txt", True),
        ("important.txt", False),
        ("file.py", False),
        ("file.pyc", True),
        ("subdir/", True),
        ("subdir/file.py", True),
        ("other/subdir/", True),
        ("subdir", False),
    ],
)
def test_exclude(temp_gitignore, path, expected):
    rules = GitIgnoreExclusionRules(temp_gitignore)
    assert rules.exclude(path) is expected


def test_empty_rules():
    rules = GitIgnoreExclusionRules()
    assert not rules.has_rules()
    assert not rules.exclude("anything.txt")


def test_multiple_files(temp_gitignore, temp_npmignore):
    rules = GitIgnoreExclusionRules([temp_gitignore, temp_npmignore])
    assert rules.has_rules()
    assert rules.exclude("server.log")
    assert rules.exclude("node_modules/")
    assert rules.exclude("notes.txt")


def test_load_rules_incrementally(temp_gitignore, temp_npmignore):
    rules = GitIgnoreExclusionRules(temp_gitignore)
    assert not rules.exclude("server.log")
    rules.load_rules(str(temp_npmignore))
    assert rules.exclude("server.log")


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Rules file not found"):
        GitIgnoreExclusionRules(tmp_path / "missing.ignore")


def test_add_rule_order_matters():
    rules = GitIgnoreExclusionRules()
    rules.add_rule("*.log")
    rules.add_rule("!keep.log")
    assert rules.exclude("debug.log")
    assert not rules.exclude("keep.log")

    rules.add_rule("keep.log")
    assert rules.exclude("keep.log")
