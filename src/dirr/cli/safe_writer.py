"""Signal-aware output writing for the dirr CLI."""

import errno
import os
import types
from pathlib import Path
from typing import Optional, Type, Union

from dirr.cli.signal_handler import signal_handler


class SafeWriter:
    """Write listing lines to a file descriptor or a file, stopping on interruption.

    Once SIGPIPE or SIGINT has been recorded, or the descriptor reports EPIPE, every
    write raises BrokenPipeError so the caller can stop producing output.

    Attributes:
        file: The file descriptor or path given at construction.
        fd: The file descriptor actually written to.
    """

    def __init__(self, file: Union[int, str, Path]):
        """Initialize the writer.

        Args:
            file: A file descriptor (int), or a path that is opened for writing.

        Raises:
            TypeError: If ``file`` is neither an int nor path-like.
        """
        self.file = file
        self._closed = False

        if isinstance(file, int):
            self.fd = file
            self._file_obj = None
        elif isinstance(file, (str, os.PathLike)):
            self._file_obj = Path(file).open("w", encoding="utf-8")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def write(self, data: str) -> None:
        """Write a string, encoded as UTF-8.

        Raises:
            BrokenPipeError: If an interrupting signal was received or the pipe is closed.
            OSError: If another I/O error occurs.
            ValueError: If the writer has been closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if signal_handler.interrupted:
            raise BrokenPipeError()

        # Filenames may carry undecodable bytes as surrogates
        payload = data.encode("utf-8", errors="surrogateescape")
        try:
            while payload:
                written = os.write(self.fd, payload)
                payload = payload[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError() from e
            raise

    def close(self) -> None:
        """Close the file if this writer opened it. Broken pipes on close are ignored."""
        if self._closed:
            return

        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise

        self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            self.close()
        except OSError:
            # An exception from the with block takes precedence
            if exc_type is None:
                raise
