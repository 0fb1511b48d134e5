"""Test configuration and fixtures for dirr."""

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def scenario_tree(tmp_path):
    """Create the tree a/, a/b.txt, c/, c/tmp/, c/tmp/d.txt."""
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "b.txt").write_text("hello")
    (tmp_path / "c").mkdir()
    (tmp_path / "c" / "tmp").mkdir()
    (tmp_path / "c" / "tmp" / "d.txt").write_text("world")
    return tmp_path
