"""Node representation for entries produced by the tree walker."""

from pathlib import Path
from typing import Any, Optional

from anytree import Node


class FileSystemNode(Node):  # type: ignore
    """Node class representing a file or directory found during traversal.

    Extends anytree.Node with the entry's location. The node's ``depth`` (inherited
    from anytree) equals the number of path components between the root and the
    entry, so direct children of the root have depth 1.

    Attributes:
        name (str): The basename of the entry.
        parent (Optional[FileSystemNode]): The node of the containing directory.
        abs_path (Path): Absolute path of the entry (anytree reserves ``path`` for the
            chain of nodes from the root).
        relative_path (str): Path relative to the listing root, using the platform separator.
        is_dir (bool): True if this node represents a directory.

    Example:
        >>> root = FileSystemNode("project", abs_path=Path("/tmp/project"), is_dir=True)
        >>> child = FileSystemNode("a", parent=root, abs_path=Path("/tmp/project/a"), relative_path="a", is_dir=True)
        >>> child.depth
        1
        >>> child.parent.name
        'project'
    """

    def __init__(
        self,
        name: str,
        parent: Optional["FileSystemNode"] = None,
        abs_path: Optional[Path] = None,
        relative_path: str = "",
        is_dir: bool = False,
        **kwargs: Any,
    ) -> None:
        """Initialize a FileSystemNode.

        Args:
            name: The name of the file or directory.
            parent: The parent node. Defaults to None.
            abs_path: Absolute path of the entry. Defaults to ``Path(name)``.
            relative_path: Path relative to the listing root. Empty for the root itself.
            is_dir: Whether this node represents a directory. Defaults to False.
            **kwargs: Additional attributes passed to anytree.Node.
        """
        super().__init__(name, parent, **kwargs)
        self.abs_path = abs_path if abs_path is not None else Path(name)
        self.relative_path = relative_path
        self.is_dir = is_dir
