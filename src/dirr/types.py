from os import PathLike
from typing import NamedTuple, Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class EntryMetadata(NamedTuple):
    """Size and modification time of a single filesystem entry.

    Attributes:
        size: Size of the entry in bytes.
        modified: Last modification time as seconds since the epoch (UTC).
    """

    size: int
    modified: float
