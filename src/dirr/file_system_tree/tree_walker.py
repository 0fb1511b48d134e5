"""Pre-order, depth-first traversal of a directory tree.

This module provides the TreeWalker class, which enumerates every entry below a
root directory, skipping entries (and whole subtrees) rejected by exclusion rules.
"""

import os
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from anytree import PreOrderIter

from dirr.exceptions import RootAccessError
from dirr.exclusion_rules.base_rules import BaseExclusionRules
from dirr.file_system_tree.file_system_node import FileSystemNode
from dirr.file_system_tree.permission_action import PermissionAction
from dirr.types import PathType


class TreeWalker:
    """Enumerate the files and directories below a root, depth-first.

    Entries are produced in pre-order: a directory comes immediately before its own
    descendants, and its descendants come before its later siblings. Within a
    directory, entries keep the order the filesystem lists them in unless
    ``sort_entries`` is set, so the order may differ between runs and platforms while
    the set of entries does not.

    Exclusion rules are consulted with each entry's path relative to the root. An
    excluded entry is never emitted, and an excluded directory is never read, so its
    whole subtree is suppressed.

    The walk keeps an explicit stack of directory iterators rather than recursing,
    so nesting depth is not limited by the interpreter's recursion limit.

    Error Handling:
        - The root must exist, be a directory and be listable, otherwise
          RootAccessError is raised before anything is produced.
        - A nested directory that disappears or otherwise fails to list is kept and
          treated as empty.
        - A nested directory that cannot be listed for lack of permission is treated
          as empty with PermissionAction.IGNORE (default), or raises PermissionError
          with PermissionAction.RAISE.

    Symbolic links to directories are followed. There is no cycle detection.

    Attributes:
        root_path (Path): The root directory being walked.
        exclusion_rules (Optional[BaseExclusionRules]): Rules for excluding entries.
        permission_action (PermissionAction): How to handle unreadable nested directories.
        sort_entries (bool): Whether to sort entries by name within each directory.

    Example:
        >>> walker = TreeWalker(".")  # doctest: +SKIP
        >>> for node in walker.iterate_entries():  # doctest: +SKIP
        ...     print(node.depth, node.relative_path)
        1 src
        2 src/main.py
        1 README.md
    """

    def __init__(
        self,
        root_path: PathType,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        permission_action: PermissionAction = PermissionAction.IGNORE,
        sort_entries: bool = False,
    ) -> None:
        """Initialize a TreeWalker.

        Args:
            root_path: Path to the root directory. Can be any path-like object.
            exclusion_rules: Rules for excluding files and directories. Defaults to None.
            permission_action: How to handle permission errors on nested directories.
                Defaults to IGNORE.
            sort_entries: Sort entries by name within each directory. Defaults to False.
        """
        self.root_path = Path(root_path)
        self.exclusion_rules = exclusion_rules
        self.permission_action = permission_action
        self.sort_entries = sort_entries
        self._tree: Optional[FileSystemNode] = None
        self._complete = False
        self._file_count = 0
        self._directory_count = 0

    def walk(self) -> List[Path]:
        """Walk the whole tree and return the absolute path of every retained entry.

        Returns:
            Absolute paths in pre-order depth-first order.

        Raises:
            RootAccessError: If the root cannot be read.
            PermissionError: If a nested directory is unreadable and permission_action is RAISE.

        Example:
            >>> paths = TreeWalker("project").walk()  # doctest: +SKIP
            >>> [str(p.relative_to(Path("project").absolute())) for p in paths]  # doctest: +SKIP
            ['a', 'a/b.txt', 'c']
        """
        return [node.abs_path for node in self.iterate_entries()]

    def iterate_entries(self) -> Iterator[FileSystemNode]:
        """Lazily walk the tree, yielding one node per retained entry.

        The root is opened before this method returns, so a missing or unreadable
        root is reported immediately rather than on first iteration. Each call starts
        a fresh walk.

        Returns:
            Iterator over the nodes in pre-order depth-first order.

        Raises:
            RootAccessError: If the root cannot be read.
        """
        root_node, names = self._open_root()
        self._tree = root_node
        self._complete = False
        self._file_count = 0
        self._directory_count = 0
        return self._iterate(root_node, names)

    def _open_root(self) -> Tuple[FileSystemNode, List[str]]:
        root = self.root_path
        try:
            exists, is_dir = root.exists(), root.is_dir()
        except OSError as e:
            raise RootAccessError(str(root), f"Cannot read root directory ({e.strerror})", e.errno) from e
        if not exists:
            raise RootAccessError(str(root), "Root path does not exist")
        if not is_dir:
            raise RootAccessError(str(root), "Root path is not a directory")

        try:
            names = self._list_names(root)
        except OSError as e:
            raise RootAccessError(str(root), f"Cannot read root directory ({e.strerror})", e.errno) from e

        absolute_root = root.absolute()
        node = FileSystemNode(absolute_root.resolve().name or str(absolute_root), abs_path=absolute_root, is_dir=True)
        return node, names

    def _iterate(self, root_node: FileSystemNode, names: List[str]) -> Iterator[FileSystemNode]:
        stack = [(root_node, iter(names))]
        while stack:
            parent, remaining = stack[-1]
            name = next(remaining, None)
            if name is None:
                stack.pop()
                continue

            node = self._create_node(parent, name)
            if node is None:
                continue

            if node.is_dir:
                self._directory_count += 1
            else:
                self._file_count += 1

            yield node

            if node.is_dir:
                stack.append((node, iter(self._read_children(node.abs_path))))

        self._complete = True

    def _create_node(self, parent: FileSystemNode, name: str) -> Optional[FileSystemNode]:
        """Create the node for a directory entry, or return None if it is excluded."""
        path = parent.abs_path / name
        relative_path = os.path.join(parent.relative_path, name) if parent.relative_path else name
        try:
            is_dir = path.is_dir()
        except OSError:
            # If we can't stat it, list it as a non-directory
            is_dir = False

        if self._is_excluded(relative_path, is_dir):
            return None

        return FileSystemNode(name, parent=parent, abs_path=path, relative_path=relative_path, is_dir=is_dir)

    def _is_excluded(self, relative_path: str, is_dir: bool) -> bool:
        if self.exclusion_rules is None:
            return False
        rule_path = relative_path.replace("\\", "/")
        if self.exclusion_rules.exclude(rule_path):
            return True
        # Directory patterns such as "build/" only match with the trailing slash
        return is_dir and self.exclusion_rules.exclude(rule_path + "/")

    def _read_children(self, path: Path) -> List[str]:
        try:
            return self._list_names(path)
        except PermissionError as e:
            if self.permission_action == PermissionAction.RAISE:
                raise PermissionError(f"Access denied to {path}: {e}") from e
            return []
        except OSError:
            # Vanished or otherwise unreadable: the directory is kept, its contents are not
            return []

    def _list_names(self, path: Path) -> List[str]:
        names = os.listdir(path)
        if self.sort_entries:
            names.sort()
        return names

    def _ensure_walked(self) -> None:
        if self._tree is None or not self._complete:
            for _ in self.iterate_entries():
                pass

    def get_tree(self) -> FileSystemNode:
        """Get the root node of the walked tree, walking it first if needed.

        Excluded entries have no node. The root node itself is not part of the
        listing; its children are.

        Raises:
            RootAccessError: If the root cannot be read.
        """
        self._ensure_walked()
        assert self._tree is not None
        return self._tree

    def iterate_tree(self) -> Iterator[FileSystemNode]:
        """Iterate the nodes of an already built tree in pre-order, without the root.

        Unlike iterate_entries, this does not touch the filesystem again once the
        tree has been walked.
        """
        yield from PreOrderIter(self.get_tree(), filter_=lambda node: node.depth > 0)

    @property
    def file_count(self) -> int:
        """Number of non-directory entries produced so far by the current walk."""
        return self._file_count

    @property
    def directory_count(self) -> int:
        """Number of directories produced so far by the current walk, excluding the root."""
        return self._directory_count

    def get_file_count(self) -> int:
        """Get the number of non-directory entries retained by the walk."""
        self._ensure_walked()
        return self._file_count

    def get_directory_count(self) -> int:
        """Get the number of directories retained by the walk, excluding the root."""
        self._ensure_walked()
        return self._directory_count

    def refresh(self) -> None:
        """Discard the cached tree and walk the filesystem again."""
        self._tree = None
        self._complete = False
        self._ensure_walked()
