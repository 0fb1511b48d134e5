from typing import Optional


class InvalidPatternError(ValueError):
    """
    Exception raised when an exclusion pattern cannot be compiled.

    The error is raised before any traversal begins, so no pattern of a batch is
    ever partially applied.

    Attributes:
        pattern (str): The pattern exactly as supplied by the user.
        reason (str): The regex engine's explanation of the failure.

    Example:
        >>> error = InvalidPatternError("(tmp", "missing ), unterminated subpattern at position 0")
        >>> str(error)
        "Invalid exclusion pattern '(tmp': missing ), unterminated subpattern at position 0"
        >>> error.pattern
        '(tmp'
    """

    def __init__(self, pattern: str, reason: str = "") -> None:
        """
        Initialize the exception with the offending pattern.

        Args:
            pattern (str): The pattern that failed to compile.
            reason (str, optional): Why compilation failed. Defaults to "".
        """
        self.pattern = pattern
        self.reason = reason
        message = f"Invalid exclusion pattern '{pattern}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class RootAccessError(OSError):
    """
    Exception raised when the root directory of a listing cannot be read.

    Unreadable nested directories are skipped during traversal; only the root
    is fatal, so callers never receive a silently empty listing for a root that
    does not exist or cannot be opened.

    Attributes:
        root (str): The root path that could not be read.

    Example:
        >>> error = RootAccessError("/no/such/dir", "Root path does not exist")
        >>> str(error)
        'Root path does not exist: /no/such/dir'
    """

    def __init__(self, root: str, message: str = "Cannot read root directory", errno: Optional[int] = None) -> None:
        """
        Initialize the exception with the root path.

        Args:
            root (str): The root path that could not be read.
            message (str, optional): Description of the failure.
            errno (Optional[int], optional): The errno of the underlying OS error, if any.
        """
        self.root = root
        super().__init__(f"{message}: {root}")
        self.errno = errno
