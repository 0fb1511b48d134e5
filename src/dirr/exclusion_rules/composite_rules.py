"""Composite exclusion rules for combining multiple rule types."""

from typing import List, Sequence

from .base_rules import BaseExclusionRules


class CompositeExclusionRules(BaseExclusionRules):
    """Combine several exclusion rule objects behind one interface.

    A path is excluded if ANY constituent rule excludes it. The CLI uses this to
    apply ``-x`` component patterns and ``-e`` gitignore files together.

    Attributes:
        rules (List[BaseExclusionRules]): The constituent rules.

    Example:
        >>> from dirr.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> from dirr.exclusion_rules.pattern_rules import PatternExclusionRules
        >>> git_rules = GitIgnoreExclusionRules()
        >>> git_rules.add_rule("*.pyc")
        >>> composite = CompositeExclusionRules([PatternExclusionRules(["tmp"]), git_rules])
        >>> composite.exclude("src/tmp")
        True
        >>> composite.exclude("src/main.pyc")
        True
        >>> composite.exclude("src/main.py")
        False
    """

    def __init__(self, rules: Sequence[BaseExclusionRules]):
        """Initialize composite exclusion rules.

        Raises:
            ValueError: If no rules are provided.
            TypeError: If any rule doesn't implement BaseExclusionRules.
        """
        if not rules:
            raise ValueError("At least one exclusion rule must be provided")

        for i, rule in enumerate(rules):
            if not isinstance(rule, BaseExclusionRules):
                raise TypeError(f"Rule at index {i} must implement BaseExclusionRules, got {type(rule)}")

        self.rules: List[BaseExclusionRules] = list(rules)

    def exclude(self, path: str) -> bool:
        return any(rule.exclude(path) for rule in self.rules)

    def has_rules(self) -> bool:
        return any(rule.has_rules() for rule in self.rules)

    def add_rule_object(self, rule: BaseExclusionRules) -> None:
        """Append another rule object to this composite.

        Raises:
            TypeError: If rule doesn't implement BaseExclusionRules.
        """
        if not isinstance(rule, BaseExclusionRules):
            raise TypeError(f"Rule must implement BaseExclusionRules, got {type(rule)}")
        self.rules.append(rule)
