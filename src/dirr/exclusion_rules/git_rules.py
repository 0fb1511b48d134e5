"""Exclusion rules read from .gitignore-style files."""

from os import PathLike
from pathlib import Path
from typing import Optional, Sequence, Union

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from dirr.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules using .gitignore pattern syntax.

    Unlike PatternExclusionRules, which tests individual components, these rules are
    matched against the whole path relative to the listing root, exactly the way Git
    matches them. The pathspec library does the matching, so globs, ``**``, directory
    patterns ending in ``/``, negation with ``!`` and comments all behave as in Git.

    Directories are checked with a trailing ``/`` as well, so a pattern such as
    ``build/`` excludes the directory entry itself and not only its contents.

    Attributes:
        spec (PathSpec): Compiled pattern matcher from the pathspec library.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.log")
        >>> rules.exclude("logs/app.log")
        True
        >>> rules.add_rule("build/")
        >>> rules.exclude("build/")
        True
        >>> rules.exclude("src/main.py")
        False
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize GitIgnoreExclusionRules with patterns from specified files.

        Args:
            rules_files: Path(s) to the file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self.spec = PathSpec.from_lines(GitWildMatchPattern, [])

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, path: str) -> bool:
        """Check if a path should be excluded based on the loaded patterns.

        Args:
            path: Path relative to the listing root, using forward slashes.
                Directories may carry a trailing slash.

        Returns:
            bool: True if the last matching pattern excludes the path.
        """
        return self.spec.match_file(path)

    def has_rules(self) -> bool:
        return len(self.spec.patterns) > 0

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load and append .gitignore patterns from one or more files.

        Later patterns may override earlier ones, notably through negation.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r") as f:
                lines = f.read().splitlines()

            self._extend(PathSpec.from_lines(GitWildMatchPattern, lines).patterns)

    def add_rule(self, rule: str) -> None:
        """Add a single .gitignore pattern, e.g. ``"*.pyc"`` or ``"!keep.pyc"``."""
        self._extend([GitWildMatchPattern(rule)])

    def _extend(self, patterns: Sequence[GitWildMatchPattern]) -> None:
        # PathSpec may store its patterns as a tuple
        if not hasattr(self.spec.patterns, "extend"):
            self.spec.patterns = list(self.spec.patterns)
        self.spec.patterns.extend(patterns)
