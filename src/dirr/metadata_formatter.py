"""Human-readable size and modification-time annotations for listing entries.

The formatting functions are pure: given the same inputs (and the same ``now``)
they always return the same string. Only read_metadata and format_metadata touch
the filesystem, and neither raises for a single unreadable entry; failures are
rendered as placeholder text so the rest of the listing is unaffected.
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Optional

from dirr.types import EntryMetadata, PathType

KILOBYTE = 1024
MEGABYTE = 1024 * KILOBYTE
GIGABYTE = 1024 * MEGABYTE

# Rendered in place of the relative time when the timestamp cannot be represented
INVALID_TIME = "an invalid time"

# Rendered in place of the whole annotation when the entry cannot be stat'ed
METADATA_UNAVAILABLE = " (Unable to fetch metadata)"


def format_file_size(size: int) -> str:
    """Format a size in bytes using powers of 1024.

    Args:
        size: Size in bytes.

    Returns:
        Whole bytes below 1 KB, otherwise the scaled value with two decimals.

    Example:
        >>> format_file_size(1023)
        '1023 B'
        >>> format_file_size(1024)
        '1.00 KB'
        >>> format_file_size(1_500_000_000)
        '1.40 GB'
    """
    if size < KILOBYTE:
        return f"{size} B"
    elif size < MEGABYTE:
        return f"{size / KILOBYTE:.2f} KB"
    elif size < GIGABYTE:
        return f"{size / MEGABYTE:.2f} MB"
    else:
        return f"{size / GIGABYTE:.2f} GB"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_relative_time(modified: float, now: Optional[datetime] = None) -> str:
    """Describe how long ago a timestamp was, relative to ``now``.

    Unit counts are truncated, never rounded: 90 seconds is "1 minutes ago". Times
    less than a minute ago, including times in the future, are "just now".

    Args:
        modified: Modification time as seconds since the epoch.
        now: The current instant as an aware datetime. Defaults to the current UTC time.

    Returns:
        The relative time, or INVALID_TIME if ``modified`` predates the epoch or cannot
        be represented as a datetime.
        Only the time is replaced; callers still render the size alongside it, as in
        " (12 B modified an invalid time)".

    Example:
        >>> now = datetime(2024, 1, 10, tzinfo=timezone.utc)
        >>> format_relative_time(now.timestamp() - 30, now)
        'just now'
        >>> format_relative_time(now.timestamp() - 9000, now)
        '2 hours ago'
        >>> format_relative_time(-1.0, now)
        'an invalid time'
    """
    if modified < 0:
        return INVALID_TIME
    try:
        file_time = datetime.fromtimestamp(modified, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return INVALID_TIME

    elapsed = (now or _utc_now()) - file_time

    if elapsed < timedelta(minutes=1):
        return "just now"
    elif elapsed < timedelta(hours=1):
        return f"{elapsed // timedelta(minutes=1)} minutes ago"
    elif elapsed < timedelta(days=1):
        return f"{elapsed // timedelta(hours=1)} hours ago"
    else:
        return f"{elapsed.days} days ago"


def read_metadata(path: PathType) -> Optional[EntryMetadata]:
    """Stat a path, following symlinks.

    Returns:
        The entry's size and modification time, or None if it cannot be stat'ed.
    """
    try:
        stat_info = os.stat(path)
    except OSError:
        return None
    return EntryMetadata(size=stat_info.st_size, modified=stat_info.st_mtime)


def format_entry_metadata(metadata: EntryMetadata, now: Optional[datetime] = None) -> str:
    """Render the annotation appended to a listing line.

    Example:
        >>> now = datetime(2024, 1, 10, tzinfo=timezone.utc)
        >>> format_entry_metadata(EntryMetadata(2048, now.timestamp() - 3 * 86400), now)
        ' (2.00 KB modified 3 days ago)'
    """
    return f" ({format_file_size(metadata.size)} modified {format_relative_time(metadata.modified, now)})"


def format_metadata(path: PathType, now: Optional[datetime] = None) -> str:
    """Read and render the annotation for a path.

    Args:
        path: The entry to describe.
        now: The current instant. Defaults to the current UTC time.

    Returns:
        The annotation, or METADATA_UNAVAILABLE if the entry cannot be stat'ed.
    """
    metadata = read_metadata(path)
    if metadata is None:
        return METADATA_UNAVAILABLE
    return format_entry_metadata(metadata, now)
