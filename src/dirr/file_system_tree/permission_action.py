"""Permission action enum for handling unreadable directories during traversal."""

from enum import Enum


class PermissionAction(str, Enum):
    """Action to take when a nested directory cannot be listed due to permissions.

    The root directory is not affected by this setting: failing to read it always
    raises RootAccessError.

    Values:
        IGNORE: Keep the directory in the listing but skip its contents (default behavior)
        RAISE: Raise a PermissionError immediately when access is denied
    """

    IGNORE = "ignore"
    RAISE = "raise"
