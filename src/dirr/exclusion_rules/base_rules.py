from abc import ABC, abstractmethod
from typing import Sequence, Union

from dirr.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file/directory exclusion rules.

    Concrete rule types decide, for a path relative to the root of a listing, whether
    the entry (and, for a directory, its whole subtree) is left out. Loading rules
    from files and adding individual rules are optional capabilities that depend on
    the rule type.

    Example:
        >>> from dirr.exclusion_rules.pattern_rules import PatternExclusionRules
        >>> rules = PatternExclusionRules(["*tmp*"])
        >>> rules.exclude("build_tmp_1")
        True
        >>> rules.exclude("src/main.py")
        False
        >>> # rules.load_rules('file.txt')  # Would raise NotImplementedError
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded based on the loaded rules.

        Args:
            path (str): The file or directory path to check, relative to the root
                of the directory being listed.

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass

    def has_rules(self) -> bool:
        """
        Report whether any rules are configured.

        Rule types that cannot be empty use this default implementation.

        Returns:
            bool: True if the rules can exclude anything at all.
        """
        return True

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load and parse exclusion rules from one or more files.

        Args:
            rules_files: Path to a file or sequence of paths containing exclusion rules.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
            FileNotFoundError: If any rules file does not exist (for file-supporting rule types).
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Args:
            rule (str): The exclusion rule to add. The format depends on the specific
                implementation (a regex-style pattern, a gitignore line, ...).

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
