"""Exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .composite_rules import CompositeExclusionRules
from .git_rules import GitIgnoreExclusionRules
from .pattern_rules import PatternExclusionRules, compile_pattern

__all__ = [
    "BaseExclusionRules",
    "CompositeExclusionRules",
    "GitIgnoreExclusionRules",
    "PatternExclusionRules",
    "compile_pattern",
]
