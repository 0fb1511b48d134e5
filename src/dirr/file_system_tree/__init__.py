"""Depth-first directory traversal with configurable exclusion rules.

This module provides the TreeWalker, which enumerates the entries below a root
directory in pre-order, and the FileSystemNode type used to represent them.
"""

from .file_system_node import FileSystemNode
from .permission_action import PermissionAction
from .tree_walker import TreeWalker

__all__ = ["FileSystemNode", "PermissionAction", "TreeWalker"]
