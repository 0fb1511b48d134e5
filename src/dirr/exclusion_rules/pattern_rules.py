"""Exclusion rules matching regex-style patterns against single path components."""

import os
import re
from typing import List, Optional, Pattern, Sequence

from dirr.exceptions import InvalidPatternError

from .base_rules import BaseExclusionRules

_SEPARATORS = re.compile("[" + re.escape(os.sep + (os.altsep or "") + "/") + "]")


def compile_pattern(pattern: str) -> Pattern[str]:
    """Compile a user-supplied exclusion pattern.

    Every ``*`` is translated to ``.*`` so that glob-style wildcards work; everything
    else is handed to the regex engine unchanged, so regex syntax is accepted too.

    Args:
        pattern: The raw pattern string.

    Returns:
        The compiled regular expression.

    Raises:
        InvalidPatternError: If the translated pattern is not a valid regex.

    Example:
        >>> compile_pattern("*tmp*").pattern
        '.*tmp.*'
        >>> compile_pattern("^build$").pattern
        '^build$'
    """
    try:
        return re.compile(pattern.replace("*", ".*"))
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e


def split_components(path: str) -> List[str]:
    """Split a path into its non-empty components.

    Both the platform separator and ``/`` are accepted.

    Example:
        >>> split_components("a/b/c.txt")
        ['a', 'b', 'c.txt']
    """
    return [component for component in _SEPARATORS.split(path) if component]


class PatternExclusionRules(BaseExclusionRules):
    """Exclusion rules that test each path component against compiled patterns.

    A path is excluded when ANY of its components matches ANY pattern. Matching is
    an unanchored search, so a pattern matches anywhere within a single component:
    ``tmp`` excludes a directory named ``my_tmp_dir``. Because matching is per
    component, ``node_modules`` excludes that directory at any depth.

    All patterns given to the constructor are compiled before any of them is
    stored, so a bad pattern leaves no partially configured rules behind.

    Attributes:
        patterns (List[Pattern[str]]): The compiled patterns, in the order added.

    Example:
        >>> rules = PatternExclusionRules(["tmp"])
        >>> rules.exclude("build_tmp_1")
        True
        >>> rules.exclude("c/tmp/d.txt")
        True
        >>> rules.exclude("a/b.txt")
        False
        >>> rules.add_rule("*.txt")
        >>> rules.exclude("a/b.txt")
        True
    """

    def __init__(self, patterns: Optional[Sequence[str]] = None):
        """Initialize the rules, compiling every pattern up front.

        Args:
            patterns: Raw pattern strings. Defaults to no patterns.

        Raises:
            InvalidPatternError: If any pattern fails to compile.
        """
        self.patterns: List[Pattern[str]] = [compile_pattern(p) for p in patterns or []]

    def exclude(self, path: str) -> bool:
        """Check whether any component of the path matches any pattern.

        Args:
            path: The path to check, typically relative to the listing root.

        Returns:
            bool: True if some component matches some pattern.
        """
        if not self.patterns:
            return False
        return any(
            regex.search(component) for component in split_components(os.fspath(path)) for regex in self.patterns
        )

    is_excluded = exclude

    def add_rule(self, rule: str) -> None:
        """Compile a single pattern and add it to the rules.

        Raises:
            InvalidPatternError: If the pattern fails to compile.
        """
        self.patterns.append(compile_pattern(rule))

    def has_rules(self) -> bool:
        return bool(self.patterns)
