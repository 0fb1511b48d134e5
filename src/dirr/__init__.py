"""Directory listing utilities.

This package enumerates directory trees depth-first, with optional exclusion
patterns and optional size and modification-time annotations.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("dirr")
except PackageNotFoundError:
    __version__ = "unknown"
