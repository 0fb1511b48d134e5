"""Directory listing with streaming support.

This module turns the entries produced by TreeWalker into the line-oriented
listing format, optionally annotated with size and modification time:

    |--a
    |   |--a/b.txt (12 B modified 3 days ago)
    |--c
"""

from datetime import datetime
from pathlib import Path
from typing import Iterator, List, NamedTuple, Optional, Sequence, Union

from dirr.exclusion_rules.base_rules import BaseExclusionRules
from dirr.exclusion_rules.pattern_rules import PatternExclusionRules
from dirr.file_system_tree.permission_action import PermissionAction
from dirr.file_system_tree.tree_walker import TreeWalker
from dirr.metadata_formatter import format_metadata
from dirr.types import PathType

INDENT = "|   "
BRANCH = "|--"


def format_line(relative_path: str, depth: int, annotation: str = "") -> str:
    """Render one listing line.

    Args:
        relative_path: The entry's path relative to the root.
        depth: Number of path components between the root and the entry (>= 1).
        annotation: Optional metadata annotation appended to the line.

    Returns:
        The line, without a trailing newline.

    Example:
        >>> format_line("a", 1)
        '|--a'
        >>> format_line("a/b.txt", 2, " (12 B modified just now)")
        '|   |--a/b.txt (12 B modified just now)'
    """
    return f"{INDENT * (depth - 1)}{BRANCH}{relative_path}{annotation}"


class StreamingDirr:
    """Streaming directory lister.

    Lines are produced as the tree is walked, so memory use does not grow with the
    size of the listing beyond the walker's stack. Counts are updated as lines are
    produced and are final once streaming_complete is True.

    Streaming properties:
    - The listing can only be streamed once
    - Errors reading the root are raised at construction time

    Attributes:
        directory (Path): Directory being listed.
        show_metadata (bool): Whether lines carry size and modification time.

    Example:
        >>> lister = StreamingDirr("project", show_metadata=True)  # doctest: +SKIP
        >>> for line in lister.stream_listing():  # doctest: +SKIP
        ...     print(line, end='')
        |--a (4.00 KB modified 2 hours ago)
        |   |--a/b.txt (12 B modified 3 days ago)
        >>> lister.file_count  # doctest: +SKIP
        1

    Raises:
        RootAccessError: If the directory does not exist, is not a directory or cannot be read.
        PermissionError: If a nested directory is unreadable and permission_action is "raise".
    """

    def __init__(
        self,
        directory: PathType = ".",
        *,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        show_metadata: bool = False,
        permission_action: Union[str, PermissionAction] = PermissionAction.IGNORE,
        sort_entries: bool = False,
        now: Optional[datetime] = None,
    ):
        """Initialize a streaming listing.

        Args:
            directory: Directory to list. Defaults to the current directory.
            exclusion_rules: Optional rules filtering entries and subtrees.
            show_metadata: Whether to append size and modification time to each line.
            permission_action: How to handle unreadable nested directories, either
                "ignore" or "raise" or a PermissionAction value. Defaults to "ignore".
            sort_entries: Sort entries by name within each directory.
            now: Reference instant for relative times. Defaults to the time each line
                is rendered.

        Raises:
            ValueError: If permission_action is not a known action.
            RootAccessError: If the directory cannot be read.
        """
        self.directory = Path(directory)
        self.show_metadata = show_metadata
        self._now = now

        if isinstance(permission_action, str):
            try:
                permission_action = PermissionAction(permission_action.lower())
            except ValueError:
                raise ValueError(
                    f"Invalid permission_action: {permission_action}. " "Must be one of: 'ignore', 'raise'"
                )

        self._walker = TreeWalker(
            self.directory,
            exclusion_rules,
            permission_action=permission_action,
            sort_entries=sort_entries,
        )
        # Opens the root now so that an unreadable root fails before any output
        self._entries = self._walker.iterate_entries()

        self._line_count = 0
        self._listing_started = False
        self._listing_complete = False

    @property
    def file_count(self) -> int:
        """Number of non-directory entries listed so far."""
        return self._walker.file_count

    @property
    def directory_count(self) -> int:
        """Number of directories listed so far, excluding the root."""
        return self._walker.directory_count

    @property
    def line_count(self) -> int:
        """Number of lines produced so far."""
        return self._line_count

    @property
    def streaming_complete(self) -> bool:
        """Whether the listing has been streamed to the end."""
        return self._listing_complete

    def stream_listing(self) -> Iterator[str]:
        """Stream the listing line by line.

        Each yielded line includes a trailing newline.

        Raises:
            RuntimeError: If the listing has already been streamed.
            PermissionError: If access is denied and permission_action is "raise".
        """
        if self._listing_started:
            raise RuntimeError("Listing has already been streamed")
        self._listing_started = True

        for node in self._entries:
            annotation = format_metadata(node.abs_path, self._now) if self.show_metadata else ""
            self._line_count += 1
            yield format_line(node.relative_path, node.depth, annotation) + "\n"

        self._listing_complete = True


class ListingConfig(NamedTuple):
    """Complete input of a listing, independent of how it was obtained.

    Attributes:
        root: Directory to list.
        exclude_patterns: Raw exclusion patterns, compiled before traversal.
        show_metadata: Whether lines carry size and modification time.
    """

    root: PathType = "."
    exclude_patterns: Sequence[str] = ()
    show_metadata: bool = False


def list_directory(config: ListingConfig, now: Optional[datetime] = None) -> List[str]:
    """List a directory according to ``config`` and return the lines.

    Every pattern is compiled before the directory is touched.

    Returns:
        The listing lines, without trailing newlines.

    Raises:
        InvalidPatternError: If any exclusion pattern fails to compile.
        RootAccessError: If the root cannot be read.

    Example:
        >>> list_directory(ListingConfig("project", ["tmp"]))  # doctest: +SKIP
        ['|--a', '|   |--a/b.txt', '|--c']
    """
    rules = PatternExclusionRules(config.exclude_patterns)
    lister = StreamingDirr(config.root, exclusion_rules=rules, show_metadata=config.show_metadata, now=now)
    return [line[:-1] for line in lister.stream_listing()]
